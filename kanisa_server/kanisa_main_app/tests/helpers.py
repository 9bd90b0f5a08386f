"""Test doubles shared by the account test modules"""
from django.core.files.uploadedfile import SimpleUploadedFile

from ..utils.config import RegistrationConfig


class FakeNotifier:
    def __init__(self, succeed=True):
        self.succeed = succeed
        self.sent = []

    def send(self, recipient, body, subject=None):
        self.sent.append({'recipient': recipient, 'body': body, 'subject': subject})
        if self.succeed:
            return {'success': True, 'provider_message_id': f'fake-{len(self.sent)}', 'error': None}
        return {'success': False, 'provider_message_id': None, 'error': 'provider down'}


class FakeStorage:
    """Records puts and deletes; fail_on makes the Nth put raise"""

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.puts = 0
        self.stored = []
        self.deleted = []

    def put(self, directory, uploaded_file):
        self.puts += 1
        if self.puts == self.fail_on:
            raise RuntimeError('storage unavailable')
        key = f'{directory}/{self.puts}-{uploaded_file.name}'
        self.stored.append(key)
        return key, f'https://files.example.test/{key}'

    def delete(self, key):
        self.deleted.append(key)


def make_config(**overrides):
    return RegistrationConfig(**overrides)


def make_pdf(name='certificate.pdf', size=None):
    content = b'%PDF-1.4 test document' if size is None else b'0' * size
    return SimpleUploadedFile(name, content, content_type='application/pdf')


def last_code(notifier):
    """Pull the six digit code out of the most recent message"""
    body = notifier.sent[-1]['body']
    return body.split(' code is ')[1][:6]
