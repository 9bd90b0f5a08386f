from django.urls import path, include
from rest_framework import routers
from rest_framework_simplejwt.views import TokenRefreshView

from .views import RegistrationViewSet, AuthViewSet, AccountViewSet

router = routers.DefaultRouter()
router.register(r"auth/register", RegistrationViewSet, basename="register")
router.register(r"auth", AuthViewSet, basename="auth")
router.register(r"users", AccountViewSet, basename="users")

urlpatterns = [
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('', include(router.urls)),
]
