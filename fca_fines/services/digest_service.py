"""
Digest subscription token flows.

Verification moves a pending subscription to active; unsubscribe moves any
subscription to unsubscribed. Both are driven by tokens from email links and
end in a browser redirect to the public site carrying a result code.

Responsibility: Token validation, state transitions and redirect targets
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol
from urllib.parse import quote

from fca_fines.models.subscription import DigestSubscription

logger = logging.getLogger(__name__)


class DigestError(str, Enum):
    """Error codes passed to the site as ?error=..."""
    INVALID_TOKEN = "invalid_token"
    INVALID_OR_EXPIRED_TOKEN = "invalid_or_expired_token"
    TOKEN_EXPIRED = "token_expired"
    VERIFICATION_FAILED = "verification_failed"
    NOT_FOUND_OR_ALREADY_UNSUBSCRIBED = "not_found_or_already_unsubscribed"
    UNSUBSCRIBE_FAILED = "unsubscribe_failed"


class SubscriptionStore(Protocol):
    """Subset of SubscriptionRepository used by the token flows."""

    async def activate_pending(self, token: str, now: datetime) -> Optional[DigestSubscription]: ...

    async def find_pending(self, token: str) -> Optional[DigestSubscription]: ...

    async def unsubscribe(self, token: str) -> Optional[DigestSubscription]: ...


@dataclass(frozen=True)
class DigestOutcome:
    """Result of a token flow: either a subscription or an error code."""

    subscription: Optional[DigestSubscription] = None
    error: Optional[DigestError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.subscription is not None


def _mask(token: str) -> str:
    return f"{token[:6]}..." if len(token) > 6 else "***"


def normalize_token(token: Optional[str]) -> Optional[str]:
    """Return the stripped token, or None if it is missing or blank."""
    if not isinstance(token, str):
        return None
    token = token.strip()
    return token or None


async def verify_digest_token(
    store: SubscriptionStore,
    token: Optional[str],
    now: datetime,
) -> DigestOutcome:
    """
    Consume a verification token.

    Activation is one conditional update, so two concurrent requests with
    the same token cannot both succeed. Only when nothing was activated is
    the pending row looked up, to tell an expired token from an unknown one.

    Args:
        store: Subscription store (SubscriptionRepository)
        token: Token from the verification link
        now: Current time (timezone-aware)

    Returns:
        DigestOutcome with the activated subscription or an error code.
        Database errors propagate to the caller.
    """
    token = normalize_token(token)
    if token is None:
        return DigestOutcome(error=DigestError.INVALID_TOKEN)

    activated = await store.activate_pending(token, now)
    if activated is not None:
        return DigestOutcome(subscription=activated)

    pending = await store.find_pending(token)
    if pending is None:
        logger.info(f"Verification token {_mask(token)} not found or already used")
        return DigestOutcome(error=DigestError.INVALID_OR_EXPIRED_TOKEN)

    if pending.is_verifiable(now):
        # Pending and in date, yet the conditional update matched nothing
        logger.warning(f"Verification token {_mask(token)} could not be activated")
        return DigestOutcome(error=DigestError.INVALID_OR_EXPIRED_TOKEN)

    logger.info(f"Verification token {_mask(token)} expired at {pending.verification_expires_at}")
    return DigestOutcome(error=DigestError.TOKEN_EXPIRED)


async def unsubscribe_digest(store: SubscriptionStore, token: Optional[str]) -> DigestOutcome:
    """
    Consume an unsubscribe token.

    Args:
        store: Subscription store (SubscriptionRepository)
        token: Token from the unsubscribe link

    Returns:
        DigestOutcome with the unsubscribed subscription or an error code
    """
    token = normalize_token(token)
    if token is None:
        return DigestOutcome(error=DigestError.INVALID_TOKEN)

    subscription = await store.unsubscribe(token)
    if subscription is None:
        return DigestOutcome(error=DigestError.NOT_FOUND_OR_ALREADY_UNSUBSCRIBED)
    return DigestOutcome(subscription=subscription)


def error_redirect_url(base_url: str, error: DigestError) -> str:
    """Site URL carrying an error code."""
    return f"{base_url}?error={error.value}"


def success_redirect_url(base_url: str, flag: str, subscription: DigestSubscription) -> str:
    """
    Site URL carrying a success flag and the subscriber's email/frequency.

    Args:
        base_url: Public site root
        flag: Query key, "verified" or "unsubscribed"
        subscription: Subscription the flow acted on
    """
    email = quote(subscription.email, safe="!~*'()")
    return (
        f"{base_url}?{flag}=digest"
        f"&email={email}"
        f"&frequency={subscription.frequency.value}"
    )
