"""Account service - account and business details outside the registration flow"""

import logging

from django.db import IntegrityError, transaction

from ..exceptions import ValidationError, ConflictError, ForbiddenError, NotFoundError
from ..models import Account, BusinessProfile, UserSettings
from ..utils.config import RegistrationConfig
from ..utils.constants import UserRole
from ..utils.validators import validate_date_of_birth, normalize_email

logger = logging.getLogger(__name__)

ACCOUNT_FIELDS = ['first_name', 'last_name', 'phone', 'date_of_birth', 'tax_id', 'national_id']
BUSINESS_FIELDS = [
    'business_name', 'business_registration_number',
    'country', 'region', 'district', 'street', 'house_number',
]
SETTINGS_FIELDS = [
    'dark_mode', 'push_notifications', 'email_alerts', 'sms_notifications',
    'transaction_notifications', 'bill_payment_reminders',
]


def _others(account):
    qs = Account.objects.all()
    if account is not None:
        qs = qs.exclude(pk=account.pk)
    return qs


def check_email_available(email, exclude=None):
    if _others(exclude).filter(email=normalize_email(email)).exists():
        raise ConflictError('Email already registered', code='email_taken')


def check_phone_available(phone, exclude=None):
    if _others(exclude).filter(phone=phone).exists():
        raise ConflictError('Phone number already registered', code='phone_taken')


def check_identity_numbers(account, tax_id=None, national_id=None):
    if tax_id and _others(account).filter(tax_id=tax_id).exists():
        raise ConflictError('TIN number already registered', code='tax_id_taken')
    if national_id and _others(account).filter(national_id=national_id).exists():
        raise ConflictError('NIDA number already registered', code='national_id_taken')


def check_business_registration_available(number, account):
    if BusinessProfile.objects.filter(business_registration_number=number).exclude(account=account).exists():
        raise ConflictError(
            'Business registration number already registered', code='business_registration_taken'
        )


class AccountService:
    """Service for self-service account maintenance"""

    def __init__(self, config=None):
        self.config = config or RegistrationConfig.from_settings()

    def update_account(self, account, **changes):
        """Partial update; only keys present in changes are written"""
        changes = {k: v for k, v in changes.items() if k in ACCOUNT_FIELDS}

        if changes.get('date_of_birth'):
            validate_date_of_birth(changes['date_of_birth'], self.config.min_age_years)
        if changes.get('phone') and changes['phone'] != account.phone:
            check_phone_available(changes['phone'], exclude=account)
        check_identity_numbers(
            account,
            tax_id=changes.get('tax_id') if changes.get('tax_id') != account.tax_id else None,
            national_id=changes.get('national_id') if changes.get('national_id') != account.national_id else None,
        )

        for field, value in changes.items():
            # blank unique fields are stored as NULL
            if field in ('phone', 'tax_id', 'national_id') and not value:
                value = None
            setattr(account, field, value)

        if account.phone is None and account.email is None:
            raise ValidationError('Either email or phone must remain on the account', code='contact_required')

        try:
            account.save(update_fields=list(changes) + ['updated_at'])
        except IntegrityError:
            raise ConflictError('Account details already registered to another account', code='identity_taken')

        logger.info(f'Updated account details for user: {account.id}')
        return {'success': True, 'user': account, 'message': 'Account updated successfully'}

    def _require_customer(self, account):
        if account.role != UserRole.CUSTOMER:
            raise ForbiddenError('Business details are only available for customer accounts')

    def get_business(self, account):
        self._require_customer(account)
        try:
            return account.business_profile
        except BusinessProfile.DoesNotExist:
            raise NotFoundError('Business profile not found')

    @transaction.atomic
    def update_business(self, account, **changes):
        self._require_customer(account)
        changes = {k: v for k, v in changes.items() if k in BUSINESS_FIELDS}

        if changes.get('business_registration_number'):
            check_business_registration_available(changes['business_registration_number'], account)

        profile = BusinessProfile.objects.select_for_update().filter(account=account).first()
        if profile is None:
            if not changes.get('business_name') or not changes.get('business_registration_number'):
                raise ValidationError(
                    'Business name and registration number are required to create a business profile',
                    code='business_required'
                )
            profile = BusinessProfile.objects.create(account=account, **changes)
            logger.info(f'Created business profile for user: {account.id}')
        else:
            for field, value in changes.items():
                setattr(profile, field, value)
            profile.save()
            logger.info(f'Updated business details for user: {account.id}')

        return {'success': True, 'business': profile, 'message': 'Business details updated successfully'}

    def get_settings(self, account):
        """Settings row for the account, created with defaults on first read"""
        settings, created = UserSettings.objects.get_or_create(account=account)
        if created:
            logger.info(f'Created default settings for user: {account.id}')
        return settings

    @transaction.atomic
    def update_settings(self, account, **changes):
        language = changes.pop('preferred_language', None)
        changes = {k: v for k, v in changes.items() if k in SETTINGS_FIELDS}

        # a missing row starts from the model defaults
        settings, _ = UserSettings.objects.select_for_update().get_or_create(account=account, defaults=changes)
        if changes:
            for field, value in changes.items():
                setattr(settings, field, value)
            settings.save(update_fields=list(changes) + ['updated_at'])

        if language and language != account.preferred_language:
            account.preferred_language = language
            account.save(update_fields=['preferred_language', 'updated_at'])

        logger.info(f'Updated settings for user: {account.id}')
        return {'success': True, 'settings': settings, 'message': 'Settings updated successfully'}

    def get_account_summary(self, account):
        business = None
        if account.role == UserRole.CUSTOMER:
            try:
                business = self.get_business(account)
            except NotFoundError:
                business = None
        return {'account': account, 'business': business, 'settings': self.get_settings(account)}
