"""Login and password reset serializers"""
from rest_framework import serializers

from .registration_serializers import ContactSerializer


class LoginSerializer(ContactSerializer):
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class PasswordResetRequestSerializer(ContactSerializer):
    pass


class PasswordResetConfirmSerializer(ContactSerializer):
    code = serializers.RegexField(r'^\d{6}$', error_messages={'invalid': 'Code must be 6 digits.'})
    new_password = serializers.CharField(write_only=True, trim_whitespace=False)
