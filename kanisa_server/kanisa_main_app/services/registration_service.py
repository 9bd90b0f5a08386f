"""Registration service - the five-step onboarding state machine"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from ..exceptions import ValidationError, ConflictError, NotFoundError
from ..models import Account, BusinessProfile, Document
from ..utils.config import RegistrationConfig
from ..utils.constants import (
    AccountStatus, DocumentType, OtpPurpose, RegistrationSteps, UserRole, VerificationStatus
)
from ..utils.validators import (
    validate_password, validate_date_of_birth, normalize_email, split_full_name
)
from .account_service import (
    check_email_available, check_phone_available, check_identity_numbers, check_business_registration_available
)
from .auth_service import AuthService
from .notification_service import NotificationService
from .storage_service import StorageService

logger = logging.getLogger(__name__)


def determine_document_type(filename):
    """Guess the document type from an uploaded file's name"""
    name = filename.lower()
    if 'license' in name or 'licence' in name:
        return DocumentType.BUSINESS_LICENSE
    if 'registration' in name:
        return DocumentType.BUSINESS_REGISTRATION
    if 'national' in name or 'nida' in name or 'id' in name:
        return DocumentType.NATIONAL_ID
    if 'driver' in name:
        return DocumentType.DRIVERS_LICENSE
    return DocumentType.BUSINESS_LICENSE


class RegistrationService:
    """
    Service for the onboarding flow.

    Each step requires the account to sit exactly at the previous step.
    The step counter is advanced with a conditional update inside the
    step's transaction, so a duplicate submission racing the first one
    fails with a step mismatch and rolls back.
    """

    def __init__(self, config=None, auth_service=None, storage=None, notifier=None):
        self.config = config or RegistrationConfig.from_settings()
        self.notifier = notifier or NotificationService()
        self.auth = auth_service or AuthService(self.config, self.notifier)
        self.storage = storage or StorageService()

    # Helpers

    def _get_account(self, user_id):
        try:
            return Account.objects.get(pk=user_id)
        except (Account.DoesNotExist, DjangoValidationError):
            raise NotFoundError('User not found')

    def _get_account_at_step(self, user_id, expected_step):
        account = self._get_account(user_id)
        if account.registration_completed:
            raise ValidationError('Registration already completed.', code='registration_completed')
        if account.registration_step != expected_step:
            raise self._step_mismatch(expected_step, account.registration_step)
        return account

    def _step_mismatch(self, expected_step, current_step):
        return ValidationError(
            f'User must complete step {expected_step} first. Current step: {current_step}',
            code='step_mismatch'
        )

    def _advance(self, account, expected_step, **fields):
        """Move expected_step -> expected_step + 1, only if nobody got there first"""
        updated = Account.objects.filter(
            pk=account.pk,
            registration_step=expected_step,
            registration_completed=False
        ).update(registration_step=expected_step + 1, updated_at=timezone.now(), **fields)

        if not updated:
            current = Account.objects.filter(pk=account.pk).values_list('registration_step', flat=True).first()
            raise self._step_mismatch(expected_step, current)

        account.refresh_from_db()
        return account

    def _contact_label(self, account):
        return 'email' if account.email else 'phone number'

    # Step 1

    def register_step1(self, full_name, password, email=None, phone=None):
        """Create the pending account and send the registration code"""
        email = normalize_email(email)
        phone = phone or None
        if not email and not phone:
            raise ValidationError('Either email or phone must be provided', code='contact_required')

        validate_password(password)
        first_name, last_name = split_full_name(full_name)

        if email:
            check_email_available(email)
        if phone:
            check_phone_available(phone)

        try:
            with transaction.atomic():
                account = Account.objects.create_user(
                    email=email,
                    phone=phone,
                    password=password,
                    first_name=first_name,
                    last_name=last_name,
                    role=UserRole.CUSTOMER,
                    status=AccountStatus.PENDING,
                    registration_step=1,
                    is_active=False,
                )
                otp = self.auth.create_otp(account, OtpPurpose.REGISTRATION)
        except IntegrityError:
            raise ConflictError('Email or phone number already registered', code='contact_taken')

        self.auth.send_otp(account, otp)
        logger.info(f'[REGISTRATION] Step 1 completed for {account.id}')

        return {
            'user_id': account.id,
            'message': f'Registration successful. Please verify your {self._contact_label(account)}.',
        }

    # Step 2

    @transaction.atomic
    def register_step2(self, user_id, otp, email=None, phone=None):
        """Verify the registration code and sign the user in"""
        email = normalize_email(email)
        if not email and not phone:
            raise ValidationError('Either email or phone is required', code='contact_required')

        account = self._get_account_at_step(user_id, 1)

        if email and account.email != email:
            raise ValidationError('Email does not match registered email', code='contact_mismatch')
        if phone and account.phone != phone:
            raise ValidationError('Phone number does not match registered phone', code='contact_mismatch')

        self.auth.consume_otp(account, otp, OtpPurpose.REGISTRATION)
        account = self._advance(account, 1, is_verified=True, is_active=True)

        logger.info(f'[REGISTRATION] Step 2 completed for {account.id}')
        return {
            'success': True,
            **self.auth.get_tokens_for_user(account),
            'user': account,
            'next_step': 3,
        }

    # Step 3

    def register_step3(self, user_id, date_of_birth, tax_id, national_id, email=None, phone=None):
        """Personal details: date of birth, TIN and NIDA number"""
        email = normalize_email(email)
        account = self._get_account_at_step(user_id, 2)
        validate_date_of_birth(date_of_birth, self.config.min_age_years)

        fields = {
            'date_of_birth': date_of_birth,
            'tax_id': tax_id,
            'national_id': national_id,
        }
        # a contact missing since step 1 may be added now
        if email and not account.email:
            check_email_available(email, exclude=account)
            fields['email'] = email
        if phone and not account.phone:
            check_phone_available(phone, exclude=account)
            fields['phone'] = phone

        check_identity_numbers(account, tax_id, national_id)

        try:
            with transaction.atomic():
                self._advance(account, 2, **fields)
        except IntegrityError:
            raise ConflictError('Personal details already registered to another account', code='identity_taken')

        logger.info(f'[REGISTRATION] Step 3 completed for {account.id}')
        return {'success': True, 'next_step': 4}

    # Step 4

    def _validate_documents(self, files, document_types):
        if not files:
            raise ValidationError('At least one document is required', code='documents_required')
        if len(files) > self.config.max_documents:
            raise ValidationError(
                f'At most {self.config.max_documents} documents may be uploaded', code='too_many_documents'
            )

        allowed = self.config.allowed_document_types
        for f in files:
            if f.content_type not in allowed:
                raise ValidationError(
                    f'Invalid file type: {f.content_type}. Allowed types: {", ".join(allowed)}',
                    code='invalid_file_type'
                )
            if f.size > self.config.max_document_size:
                raise ValidationError(
                    f'File {f.name} exceeds maximum size of {self.config.max_document_size // (1024 * 1024)}MB',
                    code='file_too_large'
                )

        if document_types:
            if len(document_types) != len(files):
                raise ValidationError(
                    'document_types must list one type per uploaded file', code='document_types_mismatch'
                )
            valid_types = {value for value, _ in DocumentType.CHOICES}
            for doc_type in document_types:
                if doc_type not in valid_types:
                    raise ValidationError(f'Unknown document type: {doc_type}', code='invalid_document_type')

    def register_step4(self, user_id, business_name, business_registration_number, files, document_types=None):
        """Business profile plus verification documents, as one unit"""
        account = self._get_account_at_step(user_id, 3)
        self._validate_documents(files, document_types)

        check_business_registration_available(business_registration_number, account)

        stored_keys = []
        try:
            with transaction.atomic():
                BusinessProfile.objects.update_or_create(
                    account=account,
                    defaults={
                        'business_name': business_name,
                        'business_registration_number': business_registration_number,
                    }
                )

                documents = []
                for index, f in enumerate(files):
                    key, url = self.storage.put(self.config.documents_directory, f)
                    stored_keys.append(key)
                    documents.append(Document.objects.create(
                        account=account,
                        document_type=document_types[index] if document_types else determine_document_type(f.name),
                        file_url=url,
                        file_name=f.name,
                        file_size=f.size,
                        mime_type=f.content_type,
                        verification_status=VerificationStatus.PENDING,
                    ))

                self._advance(account, 3)
        except IntegrityError:
            self._remove_stored(stored_keys)
            raise ConflictError(
                'Business registration number already registered', code='business_registration_taken'
            )
        except Exception:
            self._remove_stored(stored_keys)
            raise

        logger.info(f'[REGISTRATION] Step 4 completed for {account.id} with {len(documents)} documents')
        return {'success': True, 'next_step': 5, 'documents_uploaded': len(documents)}

    def _remove_stored(self, keys):
        for key in keys:
            self.storage.delete(key)

    # Step 5

    def register_step5(self, user_id, country, region, district, street, house_number):
        """Address details; finalises and activates the account"""
        account = self._get_account_at_step(user_id, 4)

        with transaction.atomic():
            BusinessProfile.objects.update_or_create(
                account=account,
                defaults={
                    'country': country,
                    'region': region,
                    'district': district,
                    'street': street,
                    'house_number': house_number,
                }
            )
            account = self._advance(
                account, 4,
                registration_completed=True,
                status=AccountStatus.ACTIVE,
                is_active=True,
            )

        logger.info(f'[REGISTRATION] Step 5 completed for {account.id}, registration complete')
        self._send_welcome(account)

        return {
            'success': True,
            'message': 'Registration completed successfully! Your account is now fully activated.',
            'registration_complete': True,
        }

    def _send_welcome(self, account):
        name = account.first_name or 'there'
        result = self.notifier.send(
            account.email or account.phone,
            f'Welcome to Kanisa, {name}! Your account is now active.',
            subject='Welcome to Kanisa',
        )
        if not result['success']:
            logger.warning(f"[REGISTRATION] Welcome message not delivered to {account.id}: {result['error']}")

    # Status / resend

    def get_registration_status(self, user_id):
        account = self._get_account(user_id)
        current = account.registration_step

        next_step = None
        if not account.registration_completed:
            next_step = RegistrationSteps.TITLES.get(current + 1)

        return {
            'user_id': account.id,
            'current_step': current,
            'completed_steps': list(range(RegistrationSteps.FIRST, current + 1)),
            'registration_completed': account.registration_completed,
            'user': account,
            'next_step': next_step,
        }

    def resend_otp(self, user_id, purpose=OtpPurpose.REGISTRATION, email=None, phone=None):
        account = self._get_account(user_id)

        email = normalize_email(email)
        if email and account.email != email:
            raise ValidationError('Email does not match registered email', code='contact_mismatch')
        if phone and account.phone != phone:
            raise ValidationError('Phone number does not match registered phone', code='contact_mismatch')

        self.auth.issue_otp(account, purpose)
        logger.info(f'[REGISTRATION] Resent {purpose} code for {account.id}')
        return {'message': f'A new verification code has been sent to your {self._contact_label(account)}.'}
