"""Serializers package - imports from domain-specific modules"""

# Account serializers
from .user_serializers import (
    AccountSerializer,
    BusinessProfileSerializer,
    AccountUpdateSerializer,
    BusinessUpdateSerializer,
    UserSettingsSerializer,
    SettingsUpdateSerializer,
)

# Registration serializers
from .registration_serializers import (
    RegisterStep1Serializer,
    RegisterStep2Serializer,
    RegisterStep3Serializer,
    RegisterStep4Serializer,
    RegisterStep5Serializer,
    ResendOtpSerializer,
)

# Auth serializers
from .auth_serializers import (
    LoginSerializer,
    PasswordResetRequestSerializer,
    PasswordResetConfirmSerializer,
)
