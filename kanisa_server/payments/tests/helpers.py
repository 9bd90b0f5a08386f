"""Test doubles for the payment gateway"""
from payments.payment_gateways import PaymentGateway
from kanisa_main_app.utils.config import PaymentConfig

TEST_CONFIG = PaymentConfig(
    api_key='zeno-key',
    base_url='https://zeno.example.test',
    webhook_secret='hook-secret',
    expiry_minutes=5,
    request_delay_seconds=0.5,
)


class FakeGateway(PaymentGateway):
    """Answers from canned dicts and records every call"""
    name = 'FakePay'

    def __init__(self, configured=True, statuses=None, initiate_error=None, status_errors=None):
        self.configured = configured
        self.statuses = statuses or {}
        self.initiate_error = initiate_error
        self.status_errors = status_errors or {}
        self.initiated = []
        self.queried = []

    @property
    def is_configured(self):
        return self.configured

    def initiate_payment(self, payload):
        self.initiated.append(payload)
        if self.initiate_error:
            raise self.initiate_error
        return {
            'status': 'success',
            'resultcode': '000',
            'message': 'Request in progress. You will receive a callback shortly',
            'order_id': payload['order_id'],
        }

    def query_status(self, order_id):
        self.queried.append(order_id)
        if order_id in self.status_errors:
            raise self.status_errors[order_id]
        entry = self.statuses.get(order_id)
        return {
            'reference': '0936183435',
            'resultcode': '000',
            'result': 'SUCCESS',
            'message': 'Order fetch successful',
            'data': [entry] if entry else [],
        }

    def verify_webhook(self, api_key):
        return api_key == 'hook-secret'


def order_entry(order_id, payment_status, **extra):
    entry = {
        'order_id': order_id,
        'creation_date': '2025-05-19 08:40:33',
        'amount': '1000',
        'payment_status': payment_status,
        'transid': 'CEJ3I3SETSN',
        'channel': 'MPESA-TZ',
        'reference': '0936183435',
        'msisdn': '255744963858',
    }
    entry.update(extra)
    return entry
