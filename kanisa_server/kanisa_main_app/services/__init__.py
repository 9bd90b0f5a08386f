"""Services package - business logic layer"""

from .auth_service import AuthService
from .registration_service import RegistrationService, determine_document_type
from .account_service import AccountService
from .notification_service import NotificationService
from .storage_service import StorageService

__all__ = [
    'AuthService',
    'RegistrationService',
    'determine_document_type',
    'AccountService',
    'NotificationService',
    'StorageService',
]
