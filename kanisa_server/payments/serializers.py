from rest_framework import serializers

from kanisa_main_app.utils.validators import TZ_MOBILE_RE, BUYER_NAME_RE
from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = [
            'id', 'account', 'order_id', 'buyer_email', 'buyer_name', 'buyer_phone', 'amount',
            'payment_status', 'channel', 'transaction_id', 'reference', 'msisdn', 'webhook_url',
            'metadata', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class CreatePaymentSerializer(serializers.Serializer):
    user_id = serializers.UUIDField(required=False)
    amount = serializers.IntegerField(min_value=1)


class ManualPaymentSerializer(serializers.Serializer):
    order_id = serializers.CharField(max_length=100, required=False)
    buyer_email = serializers.EmailField()
    buyer_name = serializers.RegexField(
        BUYER_NAME_RE, max_length=255, error_messages={'invalid': 'Buyer name may only contain letters and spaces.'}
    )
    buyer_phone = serializers.RegexField(
        TZ_MOBILE_RE, error_messages={'invalid': 'Phone number must be in the format 07XXXXXXXX.'}
    )
    amount = serializers.IntegerField(min_value=1)
    user_id = serializers.UUIDField(required=False)
    webhook_url = serializers.URLField(required=False)


class WebhookPayloadSerializer(serializers.Serializer):
    order_id = serializers.CharField(max_length=100)
    payment_status = serializers.CharField(max_length=20)
    reference = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    metadata = serializers.DictField(required=False, allow_null=True)
