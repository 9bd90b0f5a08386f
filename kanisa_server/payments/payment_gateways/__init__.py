from .payment_gateway import PaymentGateway, OrderStatusEntry
from .zenopay_payment_gateway import ZenoPayPaymentGateway

__all__ = ['PaymentGateway', 'OrderStatusEntry', 'ZenoPayPaymentGateway']
