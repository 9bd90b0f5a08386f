"""Account-related serializers"""
from rest_framework import serializers

from ..models import Account, BusinessProfile, UserSettings
from ..utils.constants import PreferredLanguage


class AccountSerializer(serializers.ModelSerializer):
    """Account view with credentials left out"""
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Account
        fields = [
            'id', 'email', 'phone', 'first_name', 'last_name', 'full_name', 'date_of_birth',
            'tax_id', 'national_id', 'preferred_language', 'role', 'status', 'registration_step', 'registration_completed',
            'is_active', 'is_verified', 'last_login', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class BusinessProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = BusinessProfile
        fields = [
            'id', 'business_name', 'business_registration_number',
            'country', 'region', 'district', 'street', 'house_number',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class AccountUpdateSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=100, required=False)
    last_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    date_of_birth = serializers.DateField(required=False)
    tax_id = serializers.CharField(max_length=50, required=False, allow_blank=True)
    national_id = serializers.CharField(max_length=50, required=False, allow_blank=True)


class BusinessUpdateSerializer(serializers.Serializer):
    business_name = serializers.CharField(max_length=255, required=False)
    business_registration_number = serializers.CharField(max_length=100, required=False)
    country = serializers.CharField(max_length=100, required=False, allow_blank=True)
    region = serializers.CharField(max_length=100, required=False, allow_blank=True)
    district = serializers.CharField(max_length=100, required=False, allow_blank=True)
    street = serializers.CharField(max_length=255, required=False, allow_blank=True)
    house_number = serializers.CharField(max_length=50, required=False, allow_blank=True)


class UserSettingsSerializer(serializers.ModelSerializer):
    preferred_language = serializers.CharField(source='account.preferred_language', read_only=True)

    class Meta:
        model = UserSettings
        fields = [
            'dark_mode', 'push_notifications', 'email_alerts', 'sms_notifications',
            'transaction_notifications', 'bill_payment_reminders', 'preferred_language',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class SettingsUpdateSerializer(serializers.Serializer):
    dark_mode = serializers.BooleanField(required=False)
    push_notifications = serializers.BooleanField(required=False)
    email_alerts = serializers.BooleanField(required=False)
    sms_notifications = serializers.BooleanField(required=False)
    transaction_notifications = serializers.BooleanField(required=False)
    bill_payment_reminders = serializers.BooleanField(required=False)
    preferred_language = serializers.ChoiceField(choices=PreferredLanguage.CHOICES, required=False)
