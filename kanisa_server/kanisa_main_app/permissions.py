from rest_framework.permissions import BasePermission

from .utils.constants import UserRole


class IsCustomer(BasePermission):
    message = 'Business details are only available for customer accounts'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.role == UserRole.CUSTOMER)


class IsAdminRole(BasePermission):
    def has_permission(self, request, view):
        return bool(
            request.user and request.user.is_authenticated
            and request.user.role in (UserRole.ADMIN, UserRole.SUPER_ADMIN)
        )
