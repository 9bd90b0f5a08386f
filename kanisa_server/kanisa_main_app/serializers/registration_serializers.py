"""Request serializers for the registration steps"""
from rest_framework import serializers

from ..utils.constants import DocumentType, OtpPurpose


class ContactSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)


class RegisterStep1Serializer(ContactSerializer):
    full_name = serializers.CharField(max_length=200)
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class RegisterStep2Serializer(ContactSerializer):
    user_id = serializers.UUIDField()
    otp = serializers.RegexField(r'^\d{6}$', error_messages={'invalid': 'OTP must be 6 digits.'})


class RegisterStep3Serializer(ContactSerializer):
    user_id = serializers.UUIDField()
    date_of_birth = serializers.DateField()
    tax_id = serializers.CharField(max_length=50)
    national_id = serializers.CharField(max_length=50)


class RegisterStep4Serializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    business_name = serializers.CharField(max_length=255)
    business_registration_number = serializers.CharField(max_length=100)
    documents = serializers.ListField(child=serializers.FileField(), required=False, allow_empty=True)
    document_types = serializers.ListField(
        child=serializers.ChoiceField(choices=DocumentType.CHOICES), required=False
    )


class RegisterStep5Serializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    country = serializers.CharField(max_length=100)
    region = serializers.CharField(max_length=100)
    district = serializers.CharField(max_length=100)
    street = serializers.CharField(max_length=255)
    house_number = serializers.CharField(max_length=50)


class ResendOtpSerializer(ContactSerializer):
    user_id = serializers.UUIDField()
    purpose = serializers.ChoiceField(choices=OtpPurpose.CHOICES, default=OtpPurpose.REGISTRATION)
