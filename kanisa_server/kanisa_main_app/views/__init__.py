"""Views package - HTTP request handlers"""

from .registration_views import RegistrationViewSet
from .auth_views import AuthViewSet
from .account_views import AccountViewSet

__all__ = [
    'RegistrationViewSet', 'AuthViewSet', 'AccountViewSet',
]
