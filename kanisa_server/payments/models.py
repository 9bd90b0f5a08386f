from django.conf import settings
from django.db import models

from kanisa_main_app.utils.constants import PaymentStatus, PaymentChannel


class Payment(models.Model):
    account = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='payments'
    )
    order_id = models.CharField(max_length=100, unique=True, editable=False)
    buyer_email = models.EmailField(max_length=255)
    buyer_name = models.CharField(max_length=255)
    buyer_phone = models.CharField(max_length=20)
    # whole TZS, no decimals
    amount = models.PositiveIntegerField()

    payment_status = models.CharField(max_length=20, choices=PaymentStatus.CHOICES, default=PaymentStatus.PENDING)
    channel = models.CharField(max_length=20, choices=PaymentChannel.CHOICES, null=True, blank=True)
    transaction_id = models.CharField(max_length=100, null=True, blank=True)
    reference = models.CharField(max_length=100, null=True, blank=True)
    msisdn = models.CharField(max_length=20, null=True, blank=True)
    webhook_url = models.URLField(max_length=500, null=True, blank=True)
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [models.Index(fields=['payment_status', 'created_at'], name='payment_status_created_idx')]

    def __str__(self):
        return f"{self.order_id} {self.amount} TZS ({self.payment_status})"


class PaymentWebhookEvent(models.Model):
    """One row per inbound gateway callback, kept even for unknown orders"""
    order_id = models.CharField(max_length=100, db_index=True)
    payment_status = models.CharField(max_length=20)
    reference = models.CharField(max_length=100, null=True, blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    received_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-received_at']

    def __str__(self):
        return f"{self.order_id} -> {self.payment_status} at {self.received_at}"
