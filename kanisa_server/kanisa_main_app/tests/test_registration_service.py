"""Tests for the registration flow"""
from datetime import date, timedelta

from django.test import TestCase
from django.utils import timezone

from ..exceptions import ValidationError, UnauthorizedError, ConflictError, NotFoundError
from ..models import Account, BusinessProfile, Document, OneTimeCode
from ..services.auth_service import AuthService
from ..services.registration_service import RegistrationService
from ..utils.constants import AccountStatus, DocumentType, OtpPurpose, VerificationStatus
from .helpers import FakeNotifier, FakeStorage, make_config, make_pdf, last_code

PASSWORD = 'Secret123'


class RegistrationServiceTest(TestCase):
    def setUp(self):
        self.notifier = FakeNotifier()
        self.storage = FakeStorage()
        self.service = self._service()

    def _service(self, **config):
        conf = make_config(**config)
        return RegistrationService(
            config=conf,
            auth_service=AuthService(conf, self.notifier),
            storage=self.storage,
            notifier=self.notifier,
        )

    def _step1(self, email='john@example.com', phone=None):
        result = self.service.register_step1('John Doe', PASSWORD, email=email, phone=phone)
        return result['user_id'], last_code(self.notifier)

    def _through_step3(self):
        user_id, code = self._step1()
        self.service.register_step2(user_id, code, email='john@example.com')
        self.service.register_step3(user_id, date(1990, 1, 1), 'TIN-1', 'NIDA-1')
        return user_id

    def _through_step4(self):
        user_id = self._through_step3()
        self.service.register_step4(user_id, 'Acme Ltd', 'BRN-1', [make_pdf('business_license.pdf')])
        return user_id

    def test_step1_creates_pending_account_and_sends_code(self):
        user_id, code = self._step1()

        account = Account.objects.get(pk=user_id)
        self.assertEqual(account.first_name, 'John')
        self.assertEqual(account.last_name, 'Doe')
        self.assertEqual(account.registration_step, 1)
        self.assertEqual(account.status, AccountStatus.PENDING)
        self.assertFalse(account.is_active)
        self.assertTrue(account.check_password(PASSWORD))
        self.assertEqual(self.notifier.sent[-1]['recipient'], 'john@example.com')
        self.assertEqual(len(code), 6)

    def test_step1_normalizes_email(self):
        user_id, _ = self._step1(email='  John@Example.COM ')
        self.assertEqual(Account.objects.get(pk=user_id).email, 'john@example.com')

    def test_step1_requires_contact(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.register_step1('John Doe', PASSWORD)
        self.assertEqual(ctx.exception.get_codes(), 'contact_required')

    def test_step1_rejects_weak_password(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.register_step1('John Doe', 'password', email='john@example.com')
        self.assertEqual(ctx.exception.get_codes(), 'weak_password')
        self.assertFalse(Account.objects.exists())

    def test_step1_duplicate_email_conflicts(self):
        self._step1()
        with self.assertRaises(ConflictError) as ctx:
            self.service.register_step1('Jane Doe', PASSWORD, email='JOHN@example.com')
        self.assertEqual(ctx.exception.get_codes(), 'email_taken')
        self.assertEqual(Account.objects.count(), 1)

    def test_step1_duplicate_phone_conflicts(self):
        self._step1(email=None, phone='0744963858')
        with self.assertRaises(ConflictError) as ctx:
            self.service.register_step1('Jane Doe', PASSWORD, phone='0744963858')
        self.assertEqual(ctx.exception.get_codes(), 'phone_taken')

    def test_step1_survives_notification_failure(self):
        self.notifier.succeed = False
        user_id, _ = self._step1()
        self.assertTrue(Account.objects.filter(pk=user_id).exists())

    def test_step2_verifies_and_returns_tokens(self):
        user_id, code = self._step1()
        result = self.service.register_step2(user_id, code, email='john@example.com')

        self.assertTrue(result['success'])
        self.assertIn('access', result)
        self.assertIn('refresh', result)
        self.assertEqual(result['next_step'], 3)
        account = Account.objects.get(pk=user_id)
        self.assertEqual(account.registration_step, 2)
        self.assertTrue(account.is_verified)
        self.assertTrue(account.is_active)

    def test_step2_wrong_code(self):
        user_id, code = self._step1()
        wrong = '000000' if code != '000000' else '111111'
        with self.assertRaises(UnauthorizedError) as ctx:
            self.service.register_step2(user_id, wrong, email='john@example.com')
        self.assertEqual(ctx.exception.get_codes(), 'invalid_otp')
        self.assertEqual(Account.objects.get(pk=user_id).registration_step, 1)

    def test_step2_expired_code(self):
        user_id, code = self._step1()
        OneTimeCode.objects.filter(account_id=user_id).update(expires_at=timezone.now() - timedelta(seconds=1))
        with self.assertRaises(UnauthorizedError):
            self.service.register_step2(user_id, code, email='john@example.com')

    def test_step2_code_is_single_use(self):
        user_id, code = self._step1()
        self.service.register_step2(user_id, code, email='john@example.com')
        Account.objects.filter(pk=user_id).update(registration_step=1)

        with self.assertRaises(UnauthorizedError):
            self.service.register_step2(user_id, code, email='john@example.com')

    def test_step2_contact_mismatch(self):
        user_id, code = self._step1()
        with self.assertRaises(ValidationError) as ctx:
            self.service.register_step2(user_id, code, email='other@example.com')
        self.assertEqual(ctx.exception.get_codes(), 'contact_mismatch')
        self.assertFalse(OneTimeCode.objects.get(account_id=user_id).is_used)

    def test_unknown_user(self):
        with self.assertRaises(NotFoundError):
            self.service.register_step2('00000000-0000-0000-0000-000000000000', '123456', email='a@b.com')
        with self.assertRaises(NotFoundError):
            self.service.get_registration_status('not-a-uuid')

    def test_step_out_of_order_does_not_mutate(self):
        user_id, _ = self._step1()
        with self.assertRaises(ValidationError) as ctx:
            self.service.register_step3(user_id, date(1990, 1, 1), 'TIN-1', 'NIDA-1')

        self.assertEqual(ctx.exception.get_codes(), 'step_mismatch')
        self.assertIn('Current step: 1', str(ctx.exception.detail))
        account = Account.objects.get(pk=user_id)
        self.assertEqual(account.registration_step, 1)
        self.assertIsNone(account.tax_id)

    def test_advance_rejects_stale_step(self):
        user_id, _ = self._step1()
        account = Account.objects.get(pk=user_id)
        Account.objects.filter(pk=user_id).update(registration_step=2)

        with self.assertRaises(ValidationError) as ctx:
            self.service._advance(account, 1)
        self.assertEqual(ctx.exception.get_codes(), 'step_mismatch')
        self.assertEqual(Account.objects.get(pk=user_id).registration_step, 2)

    def test_step3_saves_personal_details(self):
        user_id = self._through_step3()
        account = Account.objects.get(pk=user_id)
        self.assertEqual(account.registration_step, 3)
        self.assertEqual(account.date_of_birth, date(1990, 1, 1))
        self.assertEqual(account.tax_id, 'TIN-1')
        self.assertEqual(account.national_id, 'NIDA-1')

    def test_step3_underage(self):
        user_id, code = self._step1()
        self.service.register_step2(user_id, code, email='john@example.com')
        with self.assertRaises(ValidationError) as ctx:
            self.service.register_step3(user_id, date.today() - timedelta(days=3650), 'TIN-1', 'NIDA-1')
        self.assertEqual(ctx.exception.get_codes(), 'underage')
        self.assertEqual(Account.objects.get(pk=user_id).registration_step, 2)

    def test_step3_adds_missing_phone_only(self):
        user_id, code = self._step1()
        self.service.register_step2(user_id, code, email='john@example.com')
        self.service.register_step3(
            user_id, date(1990, 1, 1), 'TIN-1', 'NIDA-1', email='new@example.com', phone='0744963858'
        )
        account = Account.objects.get(pk=user_id)
        self.assertEqual(account.email, 'john@example.com')
        self.assertEqual(account.phone, '0744963858')

    def test_step3_duplicate_tax_id(self):
        Account.objects.create_user(email='other@example.com', password=PASSWORD, tax_id='TIN-1')
        user_id, code = self._step1()
        self.service.register_step2(user_id, code, email='john@example.com')
        with self.assertRaises(ConflictError) as ctx:
            self.service.register_step3(user_id, date(1990, 1, 1), 'TIN-1', 'NIDA-1')
        self.assertEqual(ctx.exception.get_codes(), 'tax_id_taken')

    def test_step4_creates_profile_and_documents(self):
        user_id = self._through_step3()
        result = self.service.register_step4(
            user_id, 'Acme Ltd', 'BRN-1',
            [make_pdf('business_license.pdf'), make_pdf('nida_card.pdf')]
        )

        self.assertEqual(result, {'success': True, 'next_step': 5, 'documents_uploaded': 2})
        profile = BusinessProfile.objects.get(account_id=user_id)
        self.assertEqual(profile.business_name, 'Acme Ltd')
        types = set(Document.objects.filter(account_id=user_id).values_list('document_type', flat=True))
        self.assertEqual(types, {DocumentType.BUSINESS_LICENSE, DocumentType.NATIONAL_ID})
        for document in Document.objects.filter(account_id=user_id):
            self.assertEqual(document.verification_status, VerificationStatus.PENDING)
            self.assertTrue(document.file_url.startswith('https://files.example.test/documents/'))

    def test_step4_explicit_document_types(self):
        user_id = self._through_step3()
        self.service.register_step4(
            user_id, 'Acme Ltd', 'BRN-1', [make_pdf('scan.pdf')],
            document_types=[DocumentType.LOCAL_GOV_LETTER]
        )
        document = Document.objects.get(account_id=user_id)
        self.assertEqual(document.document_type, DocumentType.LOCAL_GOV_LETTER)

    def test_step4_document_types_must_match_files(self):
        user_id = self._through_step3()
        with self.assertRaises(ValidationError) as ctx:
            self.service.register_step4(
                user_id, 'Acme Ltd', 'BRN-1', [make_pdf(), make_pdf()],
                document_types=[DocumentType.NATIONAL_ID]
            )
        self.assertEqual(ctx.exception.get_codes(), 'document_types_mismatch')

    def test_step4_requires_documents(self):
        user_id = self._through_step3()
        with self.assertRaises(ValidationError) as ctx:
            self.service.register_step4(user_id, 'Acme Ltd', 'BRN-1', [])
        self.assertEqual(ctx.exception.get_codes(), 'documents_required')

    def test_step4_rejects_bad_file_type(self):
        from django.core.files.uploadedfile import SimpleUploadedFile

        user_id = self._through_step3()
        bad = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
        with self.assertRaises(ValidationError) as ctx:
            self.service.register_step4(user_id, 'Acme Ltd', 'BRN-1', [bad])
        self.assertEqual(ctx.exception.get_codes(), 'invalid_file_type')
        self.assertEqual(self.storage.puts, 0)

    def test_step4_rejects_large_file(self):
        self.service = self._service(max_document_size=10)
        user_id = self._through_step3()
        with self.assertRaises(ValidationError) as ctx:
            self.service.register_step4(user_id, 'Acme Ltd', 'BRN-1', [make_pdf(size=11)])
        self.assertEqual(ctx.exception.get_codes(), 'file_too_large')

    def test_step4_storage_failure_rolls_back(self):
        user_id = self._through_step3()
        self.storage.fail_on = 2

        with self.assertRaises(RuntimeError):
            self.service.register_step4(user_id, 'Acme Ltd', 'BRN-1', [make_pdf('a.pdf'), make_pdf('b.pdf')])

        self.assertEqual(self.storage.deleted, self.storage.stored)
        self.assertEqual(len(self.storage.deleted), 1)
        self.assertFalse(BusinessProfile.objects.filter(account_id=user_id).exists())
        self.assertFalse(Document.objects.filter(account_id=user_id).exists())
        self.assertEqual(Account.objects.get(pk=user_id).registration_step, 3)

    def test_step4_duplicate_registration_number(self):
        other = Account.objects.create_user(email='other@example.com', password=PASSWORD)
        BusinessProfile.objects.create(account=other, business_name='Other', business_registration_number='BRN-1')
        user_id = self._through_step3()

        with self.assertRaises(ConflictError) as ctx:
            self.service.register_step4(user_id, 'Acme Ltd', 'BRN-1', [make_pdf()])
        self.assertEqual(ctx.exception.get_codes(), 'business_registration_taken')
        self.assertEqual(self.storage.puts, 0)

    def test_step5_completes_registration(self):
        user_id = self._through_step4()
        result = self.service.register_step5(user_id, 'Tanzania', 'Dar es Salaam', 'Ilala', 'Uhuru', '12')

        self.assertTrue(result['registration_complete'])
        account = Account.objects.get(pk=user_id)
        self.assertEqual(account.registration_step, 5)
        self.assertTrue(account.registration_completed)
        self.assertEqual(account.status, AccountStatus.ACTIVE)
        self.assertEqual(account.business_profile.region, 'Dar es Salaam')
        self.assertEqual(self.notifier.sent[-1]['subject'], 'Welcome to Kanisa')

    def test_completed_registration_rejects_steps(self):
        user_id = self._through_step4()
        self.service.register_step5(user_id, 'Tanzania', 'Dar es Salaam', 'Ilala', 'Uhuru', '12')

        with self.assertRaises(ValidationError) as ctx:
            self.service.register_step5(user_id, 'Kenya', 'Nairobi', 'Central', 'Moi', '1')
        self.assertEqual(ctx.exception.get_codes(), 'registration_completed')
        self.assertEqual(BusinessProfile.objects.get(account_id=user_id).country, 'Tanzania')

    def test_registration_status(self):
        user_id, _ = self._step1()
        status = self.service.get_registration_status(user_id)

        self.assertEqual(status['current_step'], 1)
        self.assertEqual(status['completed_steps'], [1])
        self.assertFalse(status['registration_completed'])
        self.assertEqual(status['next_step']['title'], 'OTP Verification')

    def test_registration_status_after_completion(self):
        user_id = self._through_step4()
        self.service.register_step5(user_id, 'Tanzania', 'Dar es Salaam', 'Ilala', 'Uhuru', '12')
        status = self.service.get_registration_status(user_id)

        self.assertEqual(status['completed_steps'], [1, 2, 3, 4, 5])
        self.assertIsNone(status['next_step'])

    def test_resend_keeps_previous_codes_by_default(self):
        user_id, first = self._step1()
        self.service.resend_otp(user_id, email='john@example.com')

        self.assertEqual(OneTimeCode.objects.filter(account_id=user_id, is_used=False).count(), 2)
        self.service.register_step2(user_id, first, email='john@example.com')

    def test_resend_can_invalidate_previous_codes(self):
        self.service = self._service(invalidate_previous_otps=True)
        user_id, first = self._step1()
        self.service.resend_otp(user_id, email='john@example.com')
        second = last_code(self.notifier)

        active = OneTimeCode.objects.filter(account_id=user_id, purpose=OtpPurpose.REGISTRATION, is_used=False)
        self.assertEqual(list(active.values_list('code', flat=True)), [second])
        if first != second:
            with self.assertRaises(UnauthorizedError):
                self.service.register_step2(user_id, first, email='john@example.com')
        self.service.register_step2(user_id, second, email='john@example.com')

    def test_resend_contact_mismatch(self):
        user_id, _ = self._step1()
        with self.assertRaises(ValidationError):
            self.service.resend_otp(user_id, email='someone@example.com')
