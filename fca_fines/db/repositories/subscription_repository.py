"""
Repository for digest subscription database operations.

Token consumption is done with single conditional UPDATE ... RETURNING
statements so that a token can be used at most once even under
concurrent requests.

Responsibility: Data access layer for digest_subscriptions table
"""

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy import select, update, and_
from sqlalchemy.ext.asyncio import AsyncSession

from fca_fines.db.models import DigestSubscriptionModel
from fca_fines.models.subscription import DigestSubscription, SubscriptionStatus

logger = logging.getLogger(__name__)


class SubscriptionRepository:
    """Repository for digest subscription operations."""

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: Async database session
        """
        self.session = session

    async def activate_pending(self, token: str, now: datetime) -> Optional[DigestSubscription]:
        """
        Activate the pending subscription holding an unexpired token.

        Sets email_verified, status=active and clears the token and its
        expiry in one statement.

        Args:
            token: Verification token from the email link
            now: Current time (timezone-aware)

        Returns:
            The activated subscription, or None if no pending unexpired
            row holds this token
        """
        stmt = (
            update(DigestSubscriptionModel)
            .where(
                and_(
                    DigestSubscriptionModel.verification_token == token,
                    DigestSubscriptionModel.status == SubscriptionStatus.PENDING.value,
                    DigestSubscriptionModel.verification_expires_at > now,
                )
            )
            .values(
                email_verified=True,
                status=SubscriptionStatus.ACTIVE.value,
                verification_token=None,
                verification_expires_at=None,
            )
            .returning(DigestSubscriptionModel)
            .execution_options(synchronize_session=False)
        )

        result = await self.session.execute(stmt)
        row = result.scalar_one_or_none()
        # Validated before commit; an invalid row is never committed
        subscription = DigestSubscription.model_validate(row) if row is not None else None
        await self.session.commit()

        if subscription is not None:
            logger.info(f"Activated digest subscription {subscription.id} ({subscription.frequency.value})")
        return subscription

    async def find_pending(self, token: str) -> Optional[DigestSubscription]:
        """
        Look up a pending subscription by verification token.

        Args:
            token: Verification token

        Returns:
            DigestSubscription or None if not found
        """
        result = await self.session.execute(
            select(DigestSubscriptionModel).where(
                and_(
                    DigestSubscriptionModel.verification_token == token,
                    DigestSubscriptionModel.status == SubscriptionStatus.PENDING.value,
                )
            )
        )
        row = result.scalar_one_or_none()
        return DigestSubscription.model_validate(row) if row else None

    async def unsubscribe(self, token: str) -> Optional[DigestSubscription]:
        """
        Mark the subscription holding an unsubscribe token as unsubscribed.

        Args:
            token: Unsubscribe token from a digest email footer

        Returns:
            The updated subscription, or None if not found or already
            unsubscribed
        """
        stmt = (
            update(DigestSubscriptionModel)
            .where(
                and_(
                    DigestSubscriptionModel.unsubscribe_token == token,
                    DigestSubscriptionModel.status != SubscriptionStatus.UNSUBSCRIBED.value,
                )
            )
            .values(status=SubscriptionStatus.UNSUBSCRIBED.value)
            .returning(DigestSubscriptionModel)
            .execution_options(synchronize_session=False)
        )

        result = await self.session.execute(stmt)
        row = result.scalar_one_or_none()
        subscription = DigestSubscription.model_validate(row) if row is not None else None
        await self.session.commit()

        if subscription is not None:
            logger.info(f"Unsubscribed digest subscription {subscription.id} ({subscription.frequency.value})")
        return subscription
