"""Service configuration built once from Django settings"""
from dataclasses import dataclass

from django.conf import settings

from .constants import BusinessRules


@dataclass(frozen=True)
class RegistrationConfig:
    otp_expiry_minutes: int = BusinessRules.OTP_EXPIRY_MINUTES
    min_age_years: int = BusinessRules.MIN_AGE_YEARS
    max_document_size: int = BusinessRules.MAX_DOCUMENT_SIZE
    max_documents: int = BusinessRules.MAX_DOCUMENTS
    allowed_document_types: tuple = tuple(BusinessRules.ALLOWED_DOCUMENT_MIME_TYPES)
    documents_directory: str = 'documents'
    invalidate_previous_otps: bool = False

    @classmethod
    def from_settings(cls):
        conf = getattr(settings, 'REGISTRATION', {})
        return cls(
            otp_expiry_minutes=conf.get('OTP_EXPIRY_MINUTES', BusinessRules.OTP_EXPIRY_MINUTES),
            min_age_years=conf.get('MIN_AGE_YEARS', BusinessRules.MIN_AGE_YEARS),
            max_document_size=conf.get('MAX_DOCUMENT_SIZE', BusinessRules.MAX_DOCUMENT_SIZE),
            max_documents=conf.get('MAX_DOCUMENTS', BusinessRules.MAX_DOCUMENTS),
            allowed_document_types=tuple(
                conf.get('ALLOWED_DOCUMENT_TYPES', BusinessRules.ALLOWED_DOCUMENT_MIME_TYPES)
            ),
            documents_directory=conf.get('DOCUMENTS_DIRECTORY', 'documents'),
            invalidate_previous_otps=conf.get('INVALIDATE_PREVIOUS_OTPS', False),
        )


@dataclass(frozen=True)
class NotificationConfig:
    twilio_account_sid: str = None
    twilio_auth_token: str = None
    twilio_phone_number: str = None
    sms_country_code: str = '255'
    from_email: str = None

    @property
    def sms_configured(self):
        return all([self.twilio_account_sid, self.twilio_auth_token, self.twilio_phone_number])

    @classmethod
    def from_settings(cls):
        conf = getattr(settings, 'NOTIFICATIONS', {})
        return cls(
            twilio_account_sid=conf.get('TWILIO_ACCOUNT_SID'),
            twilio_auth_token=conf.get('TWILIO_AUTH_TOKEN'),
            twilio_phone_number=conf.get('TWILIO_PHONE_NUMBER'),
            sms_country_code=conf.get('SMS_COUNTRY_CODE', '255'),
            from_email=conf.get('FROM_EMAIL') or settings.DEFAULT_FROM_EMAIL,
        )


@dataclass(frozen=True)
class PaymentConfig:
    api_key: str = None
    base_url: str = 'https://zenoapi.com'
    webhook_url: str = None
    webhook_secret: str = None
    timeout_seconds: int = 15
    sync_cron_minutes: int = 5
    expiry_minutes: int = 5
    request_delay_seconds: float = 0.5
    lock_timeout_seconds: int = 600

    @property
    def is_configured(self):
        return bool(self.api_key)

    @property
    def expected_webhook_key(self):
        return self.webhook_secret or self.api_key

    @classmethod
    def from_settings(cls):
        zeno = getattr(settings, 'ZENOPAY', {})
        sync = getattr(settings, 'PAYMENT_SYNC', {})
        return cls(
            api_key=zeno.get('API_KEY'),
            base_url=(zeno.get('BASE_URL') or 'https://zenoapi.com').rstrip('/'),
            webhook_url=zeno.get('WEBHOOK_URL'),
            webhook_secret=zeno.get('WEBHOOK_SECRET'),
            timeout_seconds=zeno.get('TIMEOUT_SECONDS', 15),
            sync_cron_minutes=sync.get('CRON_MINUTES', 5),
            expiry_minutes=sync.get('EXPIRY_MINUTES', 5),
            request_delay_seconds=sync.get('REQUEST_DELAY_SECONDS', 0.5),
            lock_timeout_seconds=sync.get('LOCK_TIMEOUT_SECONDS', 600),
        )
