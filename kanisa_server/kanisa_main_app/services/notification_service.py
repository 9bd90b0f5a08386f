"""Notification service - routes messages to email or SMS"""
import logging

from django.core.mail import send_mail

from ..utils.config import NotificationConfig
from ..utils.twilio_sms import send_sms_via_twilio

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Best-effort message dispatch.

    A recipient containing "@" is treated as an email address, anything
    else as a phone number. send() never raises; callers get a result dict
    with success, provider_message_id and error.
    """

    def __init__(self, config=None):
        self.config = config or NotificationConfig.from_settings()

    def send(self, recipient, body, subject=None):
        if not recipient:
            return {'success': False, 'provider_message_id': None, 'error': 'No recipient'}
        if '@' in recipient:
            return self.send_email(recipient, subject or 'Notification', body)
        return self.send_sms(recipient, body)

    def send_email(self, to, subject, body):
        try:
            sent = send_mail(subject, body, self.config.from_email, [to], fail_silently=False)
        except Exception as e:
            logger.error(f'[EMAIL] Failed to send "{subject}" to {to}: {e}')
            return {'success': False, 'provider_message_id': None, 'error': str(e)}

        logger.info(f'[EMAIL] Sent "{subject}" to {to}')
        return {'success': bool(sent), 'provider_message_id': None, 'error': None if sent else 'Not sent'}

    def send_sms(self, phone_number, body):
        try:
            result = send_sms_via_twilio(self.config, phone_number, body)
        except Exception as e:
            logger.error(f'[SMS] Failed to send to {phone_number}: {e}')
            return {'success': False, 'provider_message_id': None, 'error': str(e)}

        if result['status'] != 'success':
            logger.warning(f"[SMS] Not sent to {phone_number}: {result['message']}")
            return {'success': False, 'provider_message_id': None, 'error': result['message']}

        logger.info(f"[SMS] Sent to {phone_number} (sid={result['sid']})")
        return {'success': True, 'provider_message_id': result['sid'], 'error': None}
