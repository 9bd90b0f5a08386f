"""User-related models"""
import uuid

from django.db import models
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.utils import timezone

from ..utils.constants import UserRole, AccountStatus, OtpPurpose, PreferredLanguage


class AccountManager(BaseUserManager):
    def create_user(self, email=None, phone=None, password=None, **extra_fields):
        if not email and not phone:
            raise ValueError('Either email or phone must be provided')
        account = self.model(
            email=self.normalize_email(email) if email else None,
            phone=phone or None,
            **extra_fields
        )
        account.set_password(password)
        account.save(using=self._db)
        return account

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_verified', True)
        extra_fields.setdefault('role', UserRole.SUPER_ADMIN)
        extra_fields.setdefault('status', AccountStatus.ACTIVE)
        extra_fields.setdefault('registration_step', 5)
        extra_fields.setdefault('registration_completed', True)
        return self.create_user(email=email, password=password, **extra_fields)


class Account(AbstractBaseUser, PermissionsMixin):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=255, unique=True, null=True, blank=True)
    phone = models.CharField(max_length=20, unique=True, null=True, blank=True)

    first_name = models.CharField(max_length=100, blank=True, default='')
    last_name = models.CharField(max_length=100, blank=True, default='')
    date_of_birth = models.DateField(null=True, blank=True)
    tax_id = models.CharField(max_length=50, unique=True, null=True, blank=True)
    national_id = models.CharField(max_length=50, unique=True, null=True, blank=True)

    role = models.CharField(max_length=20, choices=UserRole.CHOICES, default=UserRole.CUSTOMER)
    status = models.CharField(max_length=20, choices=AccountStatus.CHOICES, default=AccountStatus.PENDING)
    preferred_language = models.CharField(
        max_length=2, choices=PreferredLanguage.CHOICES, default=PreferredLanguage.ENGLISH
    )

    registration_step = models.PositiveSmallIntegerField(default=1)
    registration_completed = models.BooleanField(default=False)

    is_active = models.BooleanField(default=False)
    is_verified = models.BooleanField(default=False)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AccountManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ['-created_at']
        indexes = [models.Index(fields=['registration_step', 'registration_completed'], name='account_reg_step_idx')]

    def __str__(self):
        return self.email or self.phone or str(self.id)

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'.strip()


class OneTimeCode(models.Model):
    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='one_time_codes')
    code = models.CharField(max_length=6)
    purpose = models.CharField(max_length=50, choices=OtpPurpose.CHOICES)
    is_used = models.BooleanField(default=False)
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [models.Index(fields=['account', 'purpose', 'is_used'], name='otp_lookup_idx')]

    def __str__(self):
        return f"{self.account} - {self.purpose} ({'used' if self.is_used else 'unused'})"

    @property
    def is_valid(self):
        return not self.is_used and self.expires_at > timezone.now()


class UserSettings(models.Model):
    account = models.OneToOneField(Account, on_delete=models.CASCADE, related_name='settings')

    dark_mode = models.BooleanField(default=False)
    push_notifications = models.BooleanField(default=True)
    email_alerts = models.BooleanField(default=True)
    sms_notifications = models.BooleanField(default=True)
    transaction_notifications = models.BooleanField(default=True)
    bill_payment_reminders = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = 'user settings'

    def __str__(self):
        return f'Settings for {self.account}'
