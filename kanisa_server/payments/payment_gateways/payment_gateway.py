from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class OrderStatusEntry:
    """One order as reported by the gateway's status endpoint"""
    order_id: str
    payment_status: str
    channel: Optional[str] = None
    transaction_id: Optional[str] = None
    reference: Optional[str] = None
    msisdn: Optional[str] = None
    amount: Optional[str] = None
    creation_date: Optional[str] = None

    @classmethod
    def from_response(cls, data: Dict) -> 'OrderStatusEntry':
        return cls(
            order_id=data.get('order_id'),
            payment_status=(data.get('payment_status') or '').upper(),
            channel=data.get('channel'),
            transaction_id=data.get('transid'),
            reference=data.get('reference'),
            msisdn=data.get('msisdn'),
            amount=data.get('amount'),
            creation_date=data.get('creation_date'),
        )

    def as_update(self):
        """Payment fields this entry carries, skipping the unknown ones"""
        fields = {
            'channel': self.channel,
            'transaction_id': self.transaction_id,
            'reference': self.reference,
            'msisdn': self.msisdn,
        }
        return {k: v for k, v in fields.items() if v is not None}


class PaymentGateway(ABC):
    name = None

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        pass

    @abstractmethod
    def initiate_payment(self, payload: Dict) -> Dict:
        pass

    @abstractmethod
    def query_status(self, order_id: str) -> Dict:
        pass

    @abstractmethod
    def verify_webhook(self, api_key: Optional[str]) -> bool:
        pass
