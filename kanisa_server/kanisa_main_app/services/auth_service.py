"""Authentication service - one-time codes, tokens, login and password reset"""

import logging
from datetime import timedelta

from django.conf import settings
from django.contrib.auth.models import update_last_login
from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from django.utils.crypto import get_random_string
from rest_framework_simplejwt.tokens import RefreshToken

from ..exceptions import ValidationError, UnauthorizedError
from ..models import Account, OneTimeCode
from ..utils.config import RegistrationConfig
from ..utils.constants import OtpPurpose, BusinessRules
from ..utils.validators import validate_password, normalize_email
from .notification_service import NotificationService

logger = logging.getLogger(__name__)

PASSWORD_RESET_SENT_MESSAGE = 'If an account exists, a password reset code has been sent.'


class AuthService:
    """Service for authentication operations"""

    def __init__(self, config=None, notifier=None):
        self.config = config or RegistrationConfig.from_settings()
        self.notifier = notifier or NotificationService()

    def get_tokens_for_user(self, account):
        refresh = RefreshToken.for_user(account)
        return {
            'refresh': str(refresh),
            'access': str(refresh.access_token)
        }

    def find_account(self, email=None, phone=None):
        """Look up an account by email or phone, None when neither matches"""
        email = normalize_email(email)
        if not email and not phone:
            raise ValidationError('Either email or phone is required.', code='contact_required')

        conditions = Q()
        if email:
            conditions |= Q(email=email)
        if phone:
            conditions |= Q(phone=phone)
        return Account.objects.filter(conditions).first()

    # One-time codes

    def create_otp(self, account, purpose):
        if self.config.invalidate_previous_otps:
            OneTimeCode.objects.filter(account=account, purpose=purpose, is_used=False).update(is_used=True)

        return OneTimeCode.objects.create(
            account=account,
            code=get_random_string(length=BusinessRules.OTP_LENGTH, allowed_chars='0123456789'),
            purpose=purpose,
            expires_at=timezone.now() + timedelta(minutes=self.config.otp_expiry_minutes),
        )

    def send_otp(self, account, otp):
        """Dispatch a code to the account's email, else its phone. Never raises."""
        label = OtpPurpose.LABELS.get(otp.purpose, otp.purpose)
        body = (
            f'Your {label.lower()} code is {otp.code}. '
            f'It expires in {self.config.otp_expiry_minutes} minutes.'
        )
        if settings.DEBUG:
            logger.debug(f'[OTP] {otp.purpose} code for {account.id}: {otp.code}')

        result = self.notifier.send(account.email or account.phone, body, subject=f'{label} code')
        if not result['success']:
            logger.warning(f"[OTP] Could not deliver {otp.purpose} code to {account.id}: {result['error']}")
        return result

    def issue_otp(self, account, purpose):
        otp = self.create_otp(account, purpose)
        self.send_otp(account, otp)
        return otp

    def consume_otp(self, account, code, purpose):
        """
        Mark a matching, unused and unexpired code as used.

        The conditional update guarantees at most one caller wins for a
        given code, even when two verifications race.
        """
        otp = OneTimeCode.objects.filter(
            account=account,
            code=code,
            purpose=purpose,
            is_used=False,
            expires_at__gt=timezone.now()
        ).order_by('-created_at').first()

        if otp is None or not OneTimeCode.objects.filter(pk=otp.pk, is_used=False).update(is_used=True):
            logger.info(f'[OTP] Rejected {purpose} code for {account.id}')
            raise UnauthorizedError('Invalid or expired OTP', code='invalid_otp')
        return otp

    # Login

    def login(self, password, email=None, phone=None):
        account = self.find_account(email, phone)
        if account is None:
            raise UnauthorizedError('Invalid credentials', code='invalid_credentials')

        if not account.is_active:
            raise UnauthorizedError(
                'Account not verified. Please verify your account.', code='account_not_verified'
            )

        if not account.check_password(password):
            raise UnauthorizedError('Invalid credentials', code='invalid_credentials')

        update_last_login(None, account)
        logger.info(f'User logged in: {account.id}')
        return {**self.get_tokens_for_user(account), 'user': account}

    # Password reset

    def request_password_reset(self, email=None, phone=None):
        """Same answer whether or not the account exists"""
        account = self.find_account(email, phone)
        if account is not None:
            self.issue_otp(account, OtpPurpose.PASSWORD_RESET)
            logger.info(f'Password reset requested for {account.id}')
        return {'message': PASSWORD_RESET_SENT_MESSAGE}

    @transaction.atomic
    def reset_password(self, code, new_password, email=None, phone=None):
        validate_password(new_password)

        account = self.find_account(email, phone)
        if account is None:
            raise UnauthorizedError('Invalid or expired OTP', code='invalid_otp')

        self.consume_otp(account, code, OtpPurpose.PASSWORD_RESET)
        account.set_password(new_password)
        account.save(update_fields=['password', 'updated_at'])

        self.notifier.send(
            account.email or account.phone,
            'Your password has been changed. If this was not you, contact support immediately.',
            subject='Password changed',
        )
        logger.info(f'Password reset completed for {account.id}')
        return {'message': 'Password has been reset successfully. You can now log in with your new password.'}
