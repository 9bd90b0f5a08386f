import logging
from typing import Dict, Optional

import requests
from django.utils.crypto import constant_time_compare

from kanisa_main_app.exceptions import UpstreamError
from .payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


class ZenoPayPaymentGateway(PaymentGateway):
    """ZenoPay mobile money API (Tanzania)"""

    name = 'ZenoPay'

    INITIATE_PATH = '/payments/mobile_money_tanzania'
    ORDER_STATUS_PATH = '/payments/order-status'

    def __init__(self, config, session=None):
        self.config = config
        self.session = session or requests.Session()

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    def _request(self, method, path, default_message, **kwargs) -> Dict:
        url = f'{self.config.base_url}{path}'
        try:
            response = self.session.request(
                method,
                url,
                headers={'x-api-key': self.config.api_key},
                timeout=self.config.timeout_seconds,
                **kwargs
            )
        except requests.exceptions.RequestException as e:
            logger.error(f'[PAYMENT] ZenoPay request to {path} failed: {e}')
            raise UpstreamError(f'{default_message}: gateway unreachable', code='gateway_unreachable')

        if not response.ok:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            message = error_data.get('message') if isinstance(error_data, dict) else None
            logger.error(f'[PAYMENT] ZenoPay API error: {response.status_code} {error_data}')
            raise UpstreamError(message or default_message, code='gateway_error', status_code=response.status_code)

        try:
            return response.json()
        except ValueError:
            logger.error(f'[PAYMENT] ZenoPay returned a non-JSON body for {path}')
            raise UpstreamError(f'{default_message}: invalid gateway response', code='gateway_invalid_response')

    def initiate_payment(self, payload: Dict) -> Dict:
        """
        payload: order_id, buyer_email, buyer_name, buyer_phone, amount, webhook_url
        returns: {status, resultcode, message, order_id}
        """
        return self._request('POST', self.INITIATE_PATH, 'Payment initiation failed', json=payload)

    def query_status(self, order_id: str) -> Dict:
        """returns: {reference, resultcode, result, message, data: [...]}"""
        return self._request(
            'GET', self.ORDER_STATUS_PATH, 'Failed to fetch order status', params={'order_id': order_id}
        )

    def verify_webhook(self, api_key: Optional[str]) -> bool:
        expected = self.config.expected_webhook_key
        if not expected or not api_key:
            return False
        return constant_time_compare(api_key, expected)
