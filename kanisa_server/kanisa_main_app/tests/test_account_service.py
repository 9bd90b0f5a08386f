"""Tests for account service"""
from datetime import date

from django.test import TestCase

from ..exceptions import ValidationError, ConflictError, ForbiddenError, NotFoundError
from ..models import Account, BusinessProfile, UserSettings
from ..services.account_service import AccountService
from ..utils.constants import UserRole, PreferredLanguage
from .helpers import make_config


class AccountServiceTest(TestCase):
    def setUp(self):
        self.service = AccountService(make_config())
        self.account = Account.objects.create_user(
            email='mary@example.com', password='Secret123', first_name='Mary', is_active=True
        )
        self.other = Account.objects.create_user(
            email='other@example.com', phone='0711111111', password='Secret123', national_id='NIDA-9'
        )

    def test_update_account(self):
        result = self.service.update_account(self.account, first_name='Maria', phone='0744963858')
        self.assertTrue(result['success'])

        self.account.refresh_from_db()
        self.assertEqual(self.account.first_name, 'Maria')
        self.assertEqual(self.account.phone, '0744963858')

    def test_update_account_ignores_unknown_fields(self):
        self.service.update_account(self.account, role=UserRole.ADMIN, first_name='Maria')
        self.account.refresh_from_db()
        self.assertEqual(self.account.role, UserRole.CUSTOMER)

    def test_update_account_phone_taken(self):
        with self.assertRaises(ConflictError) as ctx:
            self.service.update_account(self.account, phone='0711111111')
        self.assertEqual(ctx.exception.get_codes(), 'phone_taken')

    def test_update_account_national_id_taken(self):
        with self.assertRaises(ConflictError) as ctx:
            self.service.update_account(self.account, national_id='NIDA-9')
        self.assertEqual(ctx.exception.get_codes(), 'national_id_taken')

    def test_update_account_underage(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.update_account(self.account, date_of_birth=date.today())
        self.assertEqual(ctx.exception.get_codes(), 'underage')

    def test_update_account_keeps_a_contact(self):
        phone_only = Account.objects.create_user(phone='0722222222', password='Secret123')
        with self.assertRaises(ValidationError) as ctx:
            self.service.update_account(phone_only, phone='')
        self.assertEqual(ctx.exception.get_codes(), 'contact_required')

    def test_blank_identity_number_stored_as_null(self):
        Account.objects.filter(pk=self.account.pk).update(tax_id='TIN-1')
        self.account.refresh_from_db()
        self.service.update_account(self.account, tax_id='')
        self.account.refresh_from_db()
        self.assertIsNone(self.account.tax_id)

    def test_get_business_missing(self):
        with self.assertRaises(NotFoundError):
            self.service.get_business(self.account)

    def test_business_requires_customer(self):
        Account.objects.filter(pk=self.account.pk).update(role=UserRole.DRIVER)
        self.account.refresh_from_db()
        with self.assertRaises(ForbiddenError):
            self.service.get_business(self.account)

    def test_update_business_creates_then_updates(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.update_business(self.account, region='Arusha')
        self.assertEqual(ctx.exception.get_codes(), 'business_required')

        self.service.update_business(self.account, business_name='Acme', business_registration_number='BRN-1')
        self.service.update_business(self.account, region='Arusha')

        profile = BusinessProfile.objects.get(account=self.account)
        self.assertEqual(profile.business_name, 'Acme')
        self.assertEqual(profile.region, 'Arusha')

    def test_update_business_registration_taken(self):
        BusinessProfile.objects.create(account=self.other, business_name='Other', business_registration_number='BRN-1')
        with self.assertRaises(ConflictError) as ctx:
            self.service.update_business(self.account, business_name='Acme', business_registration_number='BRN-1')
        self.assertEqual(ctx.exception.get_codes(), 'business_registration_taken')

    def test_get_settings_creates_defaults(self):
        settings = self.service.get_settings(self.account)

        self.assertFalse(settings.dark_mode)
        self.assertTrue(settings.push_notifications)
        self.assertTrue(settings.bill_payment_reminders)
        self.assertEqual(self.service.get_settings(self.account).pk, settings.pk)
        self.assertEqual(UserSettings.objects.filter(account=self.account).count(), 1)

    def test_update_settings_is_partial(self):
        self.service.get_settings(self.account)
        result = self.service.update_settings(self.account, dark_mode=True)

        self.assertTrue(result['success'])
        self.assertEqual(result['message'], 'Settings updated successfully')
        settings = UserSettings.objects.get(account=self.account)
        self.assertTrue(settings.dark_mode)
        self.assertTrue(settings.email_alerts)

    def test_update_settings_creates_missing_row(self):
        self.service.update_settings(self.account, email_alerts=False)

        settings = UserSettings.objects.get(account=self.account)
        self.assertFalse(settings.email_alerts)
        self.assertFalse(settings.dark_mode)
        self.assertTrue(settings.sms_notifications)

    def test_update_settings_language(self):
        self.service.update_settings(self.account, preferred_language=PreferredLanguage.SWAHILI)
        self.account.refresh_from_db()
        self.assertEqual(self.account.preferred_language, PreferredLanguage.SWAHILI)

    def test_account_summary(self):
        summary = self.service.get_account_summary(self.account)
        self.assertEqual(summary['account'], self.account)
        self.assertIsNone(summary['business'])
        self.assertFalse(summary['settings'].dark_mode)

        BusinessProfile.objects.create(account=self.account, business_name='Acme', business_registration_number='BRN-1')
        account = Account.objects.get(pk=self.account.pk)
        self.assertEqual(self.service.get_account_summary(account)['business'].business_name, 'Acme')

    def test_account_summary_skips_business_for_admin(self):
        Account.objects.filter(pk=self.account.pk).update(role=UserRole.ADMIN)
        self.account.refresh_from_db()
        self.assertIsNone(self.service.get_account_summary(self.account)['business'])
