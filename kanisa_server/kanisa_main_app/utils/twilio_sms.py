"""Twilio SMS utility"""
from twilio.rest import Client


def to_international(phone_number, country_code):
    """0712345678 -> +255712345678"""
    number = phone_number.strip().replace(' ', '')
    if number.startswith('+'):
        return number
    if number.startswith('0'):
        number = country_code + number[1:]
    return '+' + number


def send_sms_via_twilio(config, phone_number, body):
    """Send an SMS through Twilio using credentials from a NotificationConfig"""
    if not config.sms_configured:
        return {"status": "error", "message": "Twilio credentials not configured"}

    client = Client(config.twilio_account_sid, config.twilio_auth_token)
    message = client.messages.create(
        body=body,
        from_=config.twilio_phone_number,
        to=to_international(phone_number, config.sms_country_code)
    )
    return {"status": "success", "sid": message.sid}
