from django.contrib import admin

from .models import Payment, PaymentWebhookEvent


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['order_id', 'buyer_name', 'buyer_phone', 'amount', 'payment_status', 'channel', 'created_at']
    list_filter = ['payment_status', 'channel', 'created_at']
    search_fields = ['order_id', 'buyer_email', 'buyer_name', 'buyer_phone', 'reference', 'transaction_id']
    ordering = ['-created_at']
    readonly_fields = ['order_id', 'created_at', 'updated_at']
    list_per_page = 50


@admin.register(PaymentWebhookEvent)
class PaymentWebhookEventAdmin(admin.ModelAdmin):
    list_display = ['order_id', 'payment_status', 'reference', 'received_at']
    list_filter = ['payment_status']
    search_fields = ['order_id', 'reference']
    ordering = ['-received_at']
    readonly_fields = ['order_id', 'payment_status', 'reference', 'metadata', 'received_at']
