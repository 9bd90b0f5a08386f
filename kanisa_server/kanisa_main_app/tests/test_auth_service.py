"""Tests for auth service"""
from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from ..exceptions import ValidationError, UnauthorizedError
from ..models import Account, OneTimeCode
from ..services.auth_service import AuthService, PASSWORD_RESET_SENT_MESSAGE
from ..utils.constants import OtpPurpose
from .helpers import FakeNotifier, make_config, last_code


class AuthServiceTest(TestCase):
    def setUp(self):
        self.notifier = FakeNotifier()
        self.service = AuthService(make_config(), self.notifier)
        self.account = Account.objects.create_user(
            email='mary@example.com', phone='0744963858', password='Secret123',
            first_name='Mary', is_active=True,
        )

    def test_login_with_email(self):
        result = self.service.login('Secret123', email='Mary@Example.com')
        self.assertIn('access', result)
        self.assertIn('refresh', result)
        self.assertEqual(result['user'], self.account)
        self.account.refresh_from_db()
        self.assertIsNotNone(self.account.last_login)

    def test_login_with_phone(self):
        result = self.service.login('Secret123', phone='0744963858')
        self.assertEqual(result['user'], self.account)

    def test_login_wrong_password(self):
        with self.assertRaises(UnauthorizedError) as ctx:
            self.service.login('Wrong1234', email='mary@example.com')
        self.assertEqual(ctx.exception.get_codes(), 'invalid_credentials')

    def test_login_unknown_account(self):
        with self.assertRaises(UnauthorizedError) as ctx:
            self.service.login('Secret123', email='nobody@example.com')
        self.assertEqual(ctx.exception.get_codes(), 'invalid_credentials')

    def test_login_inactive_account(self):
        Account.objects.filter(pk=self.account.pk).update(is_active=False)
        with self.assertRaises(UnauthorizedError) as ctx:
            self.service.login('Secret123', email='mary@example.com')
        self.assertEqual(ctx.exception.get_codes(), 'account_not_verified')

    def test_login_requires_contact(self):
        with self.assertRaises(ValidationError):
            self.service.login('Secret123')

    def test_consume_otp_wrong_purpose(self):
        otp = self.service.create_otp(self.account, OtpPurpose.REGISTRATION)
        with self.assertRaises(UnauthorizedError):
            self.service.consume_otp(self.account, otp.code, OtpPurpose.PASSWORD_RESET)

    def test_consume_otp_marks_used(self):
        otp = self.service.create_otp(self.account, OtpPurpose.LOGIN)
        self.service.consume_otp(self.account, otp.code, OtpPurpose.LOGIN)

        self.assertTrue(OneTimeCode.objects.get(pk=otp.pk).is_used)
        with self.assertRaises(UnauthorizedError):
            self.service.consume_otp(self.account, otp.code, OtpPurpose.LOGIN)

    def test_create_otp_expiry(self):
        otp = self.service.create_otp(self.account, OtpPurpose.REGISTRATION)
        self.assertRegex(otp.code, r'^\d{6}$')
        remaining = otp.expires_at - timezone.now()
        self.assertTrue(timedelta(minutes=9) < remaining <= timedelta(minutes=10))

    def test_password_reset_request_unknown_account(self):
        result = self.service.request_password_reset(email='nobody@example.com')
        self.assertEqual(result['message'], PASSWORD_RESET_SENT_MESSAGE)
        self.assertEqual(self.notifier.sent, [])

    def test_password_reset_round_trip(self):
        result = self.service.request_password_reset(email='mary@example.com')
        self.assertEqual(result['message'], PASSWORD_RESET_SENT_MESSAGE)
        code = last_code(self.notifier)

        self.service.reset_password(code, 'NewSecret456', email='mary@example.com')

        self.account.refresh_from_db()
        self.assertTrue(self.account.check_password('NewSecret456'))
        self.assertEqual(self.notifier.sent[-1]['subject'], 'Password changed')
        self.service.login('NewSecret456', email='mary@example.com')

    def test_password_reset_wrong_code_keeps_password(self):
        self.service.request_password_reset(phone='0744963858')
        code = last_code(self.notifier)
        wrong = '000000' if code != '000000' else '111111'

        with self.assertRaises(UnauthorizedError):
            self.service.reset_password(wrong, 'NewSecret456', phone='0744963858')
        self.account.refresh_from_db()
        self.assertTrue(self.account.check_password('Secret123'))

    def test_password_reset_weak_password(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.reset_password('123456', 'short', email='mary@example.com')
        self.assertEqual(ctx.exception.get_codes(), 'weak_password')

    def test_password_reset_unknown_account(self):
        with self.assertRaises(UnauthorizedError) as ctx:
            self.service.reset_password('123456', 'NewSecret456', email='nobody@example.com')
        self.assertEqual(ctx.exception.get_codes(), 'invalid_otp')
