"""
Digest subscription domain model.

Responsibility: Email digest opt-ins and their verification lifecycle
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class DigestFrequency(str, Enum):
    """How often a subscriber receives the digest"""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class SubscriptionStatus(str, Enum):
    """
    Lifecycle of a digest subscription.

    pending -> active (verification), any -> unsubscribed (unsubscribe link).
    expired is set by housekeeping outside this service.
    """
    PENDING = "pending"
    ACTIVE = "active"
    UNSUBSCRIBED = "unsubscribed"
    EXPIRED = "expired"


class DigestSubscription(BaseModel):
    """A subscriber's digest opt-in."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$")
    frequency: DigestFrequency
    status: SubscriptionStatus = SubscriptionStatus.PENDING
    email_verified: bool = False
    verification_token: Optional[str] = None
    verification_expires_at: Optional[datetime] = None
    unsubscribe_token: Optional[str] = None

    def is_verifiable(self, now: datetime) -> bool:
        """True while the token may still move the subscription to active."""
        return (
            self.status == SubscriptionStatus.PENDING
            and self.verification_token is not None
            and self.verification_expires_at is not None
            and now < self.verification_expires_at
        )
