"""
Database package for the FCA Fines API.

Provides ORM models, session management, and repository pattern
for data persistence.
"""

from .models import Base, FcaFineModel, DigestSubscriptionModel
from .session import Database

__all__ = [
    "Base",
    "FcaFineModel",
    "DigestSubscriptionModel",
    "Database",
]
