"""
Base repositories package.
"""

from hostel_billing.repositories.base.base_repository import BaseRepository

__all__ = ["BaseRepository"]
