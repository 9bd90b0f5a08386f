"""Models package - domain-based organization"""

# Account models
from .user import Account, AccountManager, OneTimeCode, UserSettings

# Business models
from .business import BusinessProfile, Document

__all__ = [
    'Account', 'AccountManager', 'OneTimeCode', 'UserSettings', 'BusinessProfile', 'Document',
]
