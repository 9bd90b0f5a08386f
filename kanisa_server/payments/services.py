"""Payment service - ZenoPay initiation, webhooks and reconciliation"""

import logging
import time
import uuid
from datetime import timedelta

from django.core.cache import cache
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.utils import timezone

from kanisa_main_app.exceptions import (
    ValidationError, NotFoundError, ServiceUnavailableError, UpstreamError
)
from kanisa_main_app.models import Account
from kanisa_main_app.utils.cache_keys import CacheKeys
from kanisa_main_app.utils.config import PaymentConfig
from kanisa_main_app.utils.constants import PaymentStatus
from kanisa_main_app.utils.validators import TZ_MOBILE_RE, BUYER_NAME_RE, is_tz_mobile
from .models import Payment, PaymentWebhookEvent
from .payment_gateways import OrderStatusEntry, ZenoPayPaymentGateway

logger = logging.getLogger(__name__)

VALID_STATUSES = {value for value, _ in PaymentStatus.CHOICES}


class PaymentService:
    """
    Service for mobile money payments.

    Two paths move a payment out of PENDING: gateway webhooks, where the
    last terminal report wins, and the polling sweep, which only touches
    rows that are still PENDING. Neither path moves a finished payment
    back to PENDING.
    """

    def __init__(self, config=None, gateway=None, sleep=time.sleep):
        self.config = config or PaymentConfig.from_settings()
        self.gateway = gateway or ZenoPayPaymentGateway(self.config)
        self.sleep = sleep

    def ensure_configured(self):
        if not self.gateway.is_configured:
            raise ServiceUnavailableError('Payment service is not configured. Please contact administrator.')

    def get_service_status(self):
        configured = self.gateway.is_configured
        return {
            'is_configured': configured,
            'provider': self.gateway.name,
            'message': (
                'Payment service is configured and ready' if configured
                else 'Payment service is not configured - ZENO_API_KEY is missing'
            ),
        }

    # Initiation

    def _get_account(self, user_id):
        try:
            return Account.objects.get(pk=user_id)
        except (Account.DoesNotExist, DjangoValidationError):
            raise NotFoundError('User not found')

    def create_user_payment(self, user_id, amount):
        """Charge a registered account using the contact details on file"""
        self.ensure_configured()
        logger.info(f'[PAYMENT] Creating payment for user: {user_id}')

        account = self._get_account(user_id)
        if not account.email or not account.first_name or not account.last_name:
            raise ValidationError(
                'User profile is incomplete. Email and name are required.', code='incomplete_profile'
            )
        if not account.phone:
            raise ValidationError('User phone number is required for payments', code='phone_required')
        if not is_tz_mobile(account.phone):
            raise ValidationError(
                'User phone number must be a valid Tanzanian mobile number (07XXXXXXXX)', code='invalid_phone'
            )
        self._validate_amount(amount)

        return self._initiate(
            order_id=str(uuid.uuid4()),
            buyer_email=account.email,
            buyer_name=f'{account.first_name} {account.last_name}',
            buyer_phone=account.phone,
            amount=amount,
            account=account,
        )

    def create_manual_payment(self, buyer_email, buyer_name, buyer_phone, amount,
                              user_id=None, order_id=None, webhook_url=None, metadata=None):
        """Charge arbitrary buyer details, optionally attributed to an account"""
        self.ensure_configured()
        logger.info('[PAYMENT] Creating manual payment')

        if not buyer_email:
            raise ValidationError('Buyer email is required', code='invalid_buyer')
        if not buyer_name or not BUYER_NAME_RE.match(buyer_name):
            raise ValidationError('Buyer name may only contain letters and spaces', code='invalid_buyer')
        if not buyer_phone or not TZ_MOBILE_RE.match(buyer_phone):
            raise ValidationError('Phone number must be in the format 07XXXXXXXX', code='invalid_phone')
        self._validate_amount(amount)

        account = self._get_account(user_id) if user_id else None
        return self._initiate(
            order_id=order_id or str(uuid.uuid4()),
            buyer_email=buyer_email,
            buyer_name=buyer_name,
            buyer_phone=buyer_phone,
            amount=amount,
            account=account,
            webhook_url=webhook_url,
            metadata=metadata,
        )

    def _validate_amount(self, amount):
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 1:
            raise ValidationError('Amount must be a whole number of at least 1 TZS', code='invalid_amount')

    def _initiate(self, order_id, buyer_email, buyer_name, buyer_phone, amount,
                  account=None, webhook_url=None, metadata=None):
        self.ensure_configured()
        logger.info(f'[PAYMENT] Initiating payment for order: {order_id}')

        if Payment.objects.filter(order_id=order_id).exists():
            raise ValidationError('Order ID already exists', code='duplicate_order')

        # the configured callback always wins over a caller-supplied one
        webhook_url = self.config.webhook_url or webhook_url

        try:
            payment = Payment.objects.create(
                account=account,
                order_id=order_id,
                buyer_email=buyer_email,
                buyer_name=buyer_name,
                buyer_phone=buyer_phone,
                amount=amount,
                payment_status=PaymentStatus.PENDING,
                webhook_url=webhook_url,
                metadata=metadata or {},
            )
        except IntegrityError:
            raise ValidationError('Order ID already exists', code='duplicate_order')

        payload = {
            'order_id': order_id,
            'buyer_email': buyer_email,
            'buyer_name': buyer_name,
            'buyer_phone': buyer_phone,
            'amount': amount,
        }
        if webhook_url:
            payload['webhook_url'] = webhook_url

        try:
            response = self.gateway.initiate_payment(payload)
        except UpstreamError:
            Payment.objects.filter(pk=payment.pk).update(
                payment_status=PaymentStatus.FAILED, updated_at=timezone.now()
            )
            logger.error(f'[PAYMENT] Initiation failed for order {order_id}, marked FAILED')
            raise

        logger.info(f'[PAYMENT] Payment initiated successfully for order: {order_id}')
        return response

    # Status polling

    def check_order_status(self, order_id):
        """Ask the gateway about an order and fold the answer into a PENDING row"""
        status_data, _, _ = self._poll(order_id)
        return status_data

    def _poll(self, order_id):
        """Returns (gateway response, first entry or None, rows changed)"""
        self.ensure_configured()
        logger.info(f'[PAYMENT] Checking status for order: {order_id}')

        status_data = self.gateway.query_status(order_id)
        entries = status_data.get('data') or []
        if not entries:
            return status_data, None, 0
        entry = OrderStatusEntry.from_response(entries[0])
        return status_data, entry, self._apply_order_status(order_id, entry)

    def _apply_order_status(self, order_id, entry):
        fields = entry.as_update()
        if entry.payment_status in VALID_STATUSES:
            fields['payment_status'] = entry.payment_status
        elif entry.payment_status:
            logger.warning(f'[PAYMENT] Unknown status {entry.payment_status!r} for order {order_id}')

        if not fields:
            return 0

        updated = Payment.objects.filter(
            order_id=order_id, payment_status=PaymentStatus.PENDING
        ).update(updated_at=timezone.now(), **fields)
        if updated:
            logger.info(f'[PAYMENT] Updated payment record for order: {order_id}')
        return updated

    # Webhook

    def verify_webhook(self, api_key):
        return self.gateway.verify_webhook(api_key)

    def process_webhook(self, order_id, payment_status, reference=None, metadata=None):
        """Record the callback, then apply what it reports to the payment"""
        metadata = metadata or {}
        logger.info(f'[WEBHOOK] Processing webhook for order: {order_id}')

        PaymentWebhookEvent.objects.create(
            order_id=order_id,
            payment_status=payment_status,
            reference=reference,
            metadata=metadata,
        )

        status = (payment_status or '').upper()
        if status not in VALID_STATUSES:
            logger.warning(f'[WEBHOOK] Ignoring unknown status {payment_status!r} for order {order_id}')
            return {'updated': False}

        fields = OrderStatusEntry.from_response(metadata).as_update()
        fields['payment_status'] = status
        if reference:
            fields['reference'] = reference

        payments = Payment.objects.filter(order_id=order_id)
        if status == PaymentStatus.PENDING:
            # a late PENDING report never reopens a finished payment
            payments = payments.filter(payment_status=PaymentStatus.PENDING)

        updated = payments.update(updated_at=timezone.now(), **fields)
        if not updated:
            logger.warning(f'[WEBHOOK] No pending or local payment to update for order {order_id}')
        else:
            logger.info(f'[WEBHOOK] Order {order_id} is now {status}')
        return {'updated': bool(updated)}

    # Local records

    def get_payment_by_order_id(self, order_id):
        payment = Payment.objects.filter(order_id=order_id).first()
        if payment is None:
            raise NotFoundError('Payment not found')
        return payment

    def list_payments(self, limit=50, offset=0):
        if limit < 1 or offset < 0:
            raise ValidationError('limit must be positive and offset non-negative', code='invalid_pagination')
        return list(Payment.objects.order_by('-created_at')[offset:offset + limit])

    # Reconciliation sweep

    def sync_pending_payments(self):
        """
        Reconcile every PENDING payment once.

        Rows older than the expiry window are failed locally without asking
        the gateway. The rest are polled one at a time with a fixed pause
        between gateway calls. A cache lease keeps two sweeps from running
        at once; the loser returns immediately with skipped=True.
        """
        self.ensure_configured()

        lock_key = CacheKeys.payment_sync_lock()
        token = uuid.uuid4().hex
        if not cache.add(lock_key, token, timeout=self.config.lock_timeout_seconds):
            logger.warning('[PAYMENT SYNC] Another sweep is running, skipping')
            return {'total': 0, 'updated': 0, 'failed': 0, 'expired': 0, 'errors': [], 'skipped': True}

        try:
            return self._sweep()
        finally:
            # an overrunning sweep may have lost the lease to the next one
            if cache.get(lock_key) == token:
                cache.delete(lock_key)

    def _sweep(self):
        pending = list(Payment.objects.filter(payment_status=PaymentStatus.PENDING).order_by('created_at'))
        logger.info(f'[PAYMENT SYNC] Found {len(pending)} pending payments to sync')

        updated = failed = expired = 0
        errors = []
        expiry_cutoff = timezone.now() - timedelta(minutes=self.config.expiry_minutes)
        polled = False

        for payment in pending:
            try:
                if payment.created_at < expiry_cutoff:
                    if Payment.objects.filter(pk=payment.pk, payment_status=PaymentStatus.PENDING).update(
                        payment_status=PaymentStatus.FAILED, updated_at=timezone.now()
                    ):
                        expired += 1
                        logger.warning(f'[PAYMENT SYNC] Marked payment {payment.order_id} as FAILED (expired)')
                    continue

                if polled:
                    self.sleep(self.config.request_delay_seconds)
                polled = True

                _, entry, changed = self._poll(payment.order_id)
                if changed and entry.payment_status in PaymentStatus.TERMINAL:
                    updated += 1
                    logger.info(f'[PAYMENT SYNC] Updated payment {payment.order_id}: {entry.payment_status}')
            except Exception as e:
                failed += 1
                message = f'Failed to sync {payment.order_id}: {e}'
                errors.append(message)
                logger.error(f'[PAYMENT SYNC] {message}')

        logger.info(
            f'[PAYMENT SYNC] Sync completed: {updated} updated, {expired} expired, '
            f'{failed} failed out of {len(pending)} total'
        )
        return {
            'total': len(pending),
            'updated': updated,
            'failed': failed,
            'expired': expired,
            'errors': errors,
        }
