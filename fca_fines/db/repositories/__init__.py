"""
Repository package for data access operations.

Implements repository pattern for abstracting database operations.
"""

from .fine_repository import FineRepository
from .subscription_repository import SubscriptionRepository

__all__ = [
    "FineRepository",
    "SubscriptionRepository",
]
