"""
Digest API Endpoints
====================
Links embedded in digest emails. Every response is a 302 back to the public
site with the outcome in the query string.

Endpoints:
    - GET /api/digest/verify/{token} - Confirm a pending subscription
    - GET /api/digest/unsubscribe/{token} - Stop a subscription

Responsibility: Turn email-link clicks into subscription state changes
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from api.dependencies import get_now, get_settings, get_subscription_repository
from fca_fines.config import Settings
from fca_fines.db.repositories import SubscriptionRepository
from fca_fines.services.digest_service import (
    DigestError,
    error_redirect_url,
    normalize_token,
    success_redirect_url,
    unsubscribe_digest,
    verify_digest_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/digest", tags=["digest"])


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=302)


# MARK: Verification

@router.get("/verify", include_in_schema=False)
async def verify_digest_missing_token(settings: Settings = Depends(get_settings)) -> RedirectResponse:
    """Verification link with the token stripped off."""
    return _redirect(error_redirect_url(settings.app.base_url, DigestError.INVALID_TOKEN))


@router.get("/verify/{token}", summary="Verify digest subscription", status_code=302)
async def verify_digest(
    token: str,
    settings: Settings = Depends(get_settings),
    repo: SubscriptionRepository = Depends(get_subscription_repository),
    now: datetime = Depends(get_now),
) -> RedirectResponse:
    """
    Activate a pending digest subscription.

    Redirects to the site root with ?verified=digest&email=...&frequency=...
    on success, or ?error=<code> otherwise.
    """
    base_url = settings.app.base_url

    if normalize_token(token) is None:
        return _redirect(error_redirect_url(base_url, DigestError.INVALID_TOKEN))

    try:
        outcome = await verify_digest_token(repo, token, now)
    except Exception as e:
        logger.error(f"Digest verify error: {e}", exc_info=True)
        return _redirect(error_redirect_url(base_url, DigestError.VERIFICATION_FAILED))

    if not outcome.ok:
        return _redirect(error_redirect_url(base_url, outcome.error))

    return _redirect(success_redirect_url(base_url, "verified", outcome.subscription))


# MARK: Unsubscribe

@router.get("/unsubscribe", include_in_schema=False)
async def unsubscribe_digest_missing_token(settings: Settings = Depends(get_settings)) -> RedirectResponse:
    return _redirect(error_redirect_url(settings.app.base_url, DigestError.INVALID_TOKEN))


@router.get("/unsubscribe/{token}", summary="Unsubscribe from digest", status_code=302)
async def unsubscribe(
    token: str,
    settings: Settings = Depends(get_settings),
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> RedirectResponse:
    """
    Unsubscribe from the digest.

    Redirects with ?unsubscribed=digest&email=...&frequency=... on success.
    """
    base_url = settings.app.base_url

    if normalize_token(token) is None:
        return _redirect(error_redirect_url(base_url, DigestError.INVALID_TOKEN))

    try:
        outcome = await unsubscribe_digest(repo, token)
    except Exception as e:
        logger.error(f"Digest unsubscribe error: {e}", exc_info=True)
        return _redirect(error_redirect_url(base_url, DigestError.UNSUBSCRIBE_FAILED))

    if not outcome.ok:
        return _redirect(error_redirect_url(base_url, outcome.error))

    return _redirect(success_redirect_url(base_url, "unsubscribed", outcome.subscription))
