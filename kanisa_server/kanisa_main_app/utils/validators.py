"""Input validation helpers shared by registration and account updates"""
import re
from datetime import date

from ..exceptions import ValidationError
from .constants import BusinessRules

TZ_MOBILE_RE = re.compile(r'^07\d{8}\Z')
BUYER_NAME_RE = re.compile(r'^[a-zA-Z\s]+\Z')


def validate_password(password):
    """At least 8 characters with an uppercase letter, a lowercase letter and a digit"""
    if not password or len(password) < BusinessRules.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f'Password must be at least {BusinessRules.MIN_PASSWORD_LENGTH} characters long.',
            code='weak_password',
        )
    if not (re.search(r'[A-Z]', password) and re.search(r'[a-z]', password) and re.search(r'\d', password)):
        raise ValidationError(
            'Password must contain at least one uppercase letter, one lowercase letter and one number.',
            code='weak_password',
        )


def calculate_age(date_of_birth, today=None):
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def validate_date_of_birth(date_of_birth, min_age_years=BusinessRules.MIN_AGE_YEARS, today=None):
    today = today or date.today()
    if date_of_birth > today:
        raise ValidationError('Date of birth cannot be in the future.', code='invalid_date_of_birth')
    if calculate_age(date_of_birth, today) < min_age_years:
        raise ValidationError(f'You must be at least {min_age_years} years old.', code='underage')


def is_tz_mobile(phone):
    return bool(phone) and bool(TZ_MOBILE_RE.match(phone))


def normalize_email(email):
    return email.strip().lower() if email else None


def split_full_name(full_name):
    """First token is the first name, the rest is the last name"""
    parts = (full_name or '').split()
    if not parts:
        raise ValidationError('Full name is required.', code='invalid_name')
    return parts[0], ' '.join(parts[1:])
