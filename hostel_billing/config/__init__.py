"""
Configuration package for the hostel billing engine.

Holds environment settings loaded through pydantic-settings.
"""

from hostel_billing.config.settings import settings, get_settings

__all__ = ['settings', 'get_settings']
