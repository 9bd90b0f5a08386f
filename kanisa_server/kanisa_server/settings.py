"""
Django settings for kanisa_server project.

Every value is read from the environment (optionally via a .env file) once,
here. Services receive these values through their config objects and never
read the environment themselves.
"""

import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR.parent / '.env')


def env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def env_int(name, default):
    value = os.getenv(name)
    if value in (None, ''):
        return default
    return int(value)


SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-change-me-in-production')

DEBUG = env_bool('DJANGO_DEBUG', False)

ALLOWED_HOSTS = [h.strip() for h in os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',') if h.strip()]


INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    'rest_framework_simplejwt',
    'kanisa_main_app',
    'payments',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'kanisa_server.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'kanisa_server.wsgi.application'


# Database
if os.getenv('DB_ENGINE', 'sqlite') == 'postgresql':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': os.getenv('DB_NAME', 'kanisa'),
            'USER': os.getenv('DB_USER', 'postgres'),
            'PASSWORD': os.getenv('DB_PASSWORD', 'postgres'),
            'HOST': os.getenv('DB_HOST', 'localhost'),
            'PORT': os.getenv('DB_PORT', '5432'),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }

AUTH_USER_MODEL = 'kanisa_main_app.Account'

AUTH_PASSWORD_VALIDATORS = []

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'Africa/Dar_es_Salaam'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# Object storage. Point STORAGES['default'] at an S3 backend in production.
MEDIA_URL = os.getenv('MEDIA_URL', '/media/')
MEDIA_ROOT = os.getenv('MEDIA_ROOT', str(BASE_DIR / 'media'))

STORAGES = {
    'default': {
        'BACKEND': os.getenv('DEFAULT_FILE_STORAGE_BACKEND', 'django.core.files.storage.FileSystemStorage'),
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.redis.RedisCache',
        'LOCATION': os.getenv('REDIS_URL'),
    } if os.getenv('REDIS_URL') else {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}


# Django REST framework
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework_simplejwt.authentication.JWTAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'EXCEPTION_HANDLER': 'kanisa_main_app.exceptions.api_exception_handler',
}

SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(minutes=env_int('JWT_ACCESS_TOKEN_MINUTES', 15)),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=env_int('JWT_REFRESH_TOKEN_DAYS', 7)),
    'SIGNING_KEY': os.getenv('JWT_SECRET', SECRET_KEY),
    'USER_ID_FIELD': 'id',
    'USER_ID_CLAIM': 'sub',
}


# Email
EMAIL_BACKEND = os.getenv('EMAIL_BACKEND', 'django.core.mail.backends.smtp.EmailBackend')
EMAIL_HOST = os.getenv('EMAIL_HOST', 'localhost')
EMAIL_PORT = env_int('EMAIL_PORT', 25)
EMAIL_HOST_USER = os.getenv('EMAIL_HOST_USER', '')
EMAIL_HOST_PASSWORD = os.getenv('EMAIL_HOST_PASSWORD', '')
EMAIL_USE_TLS = env_bool('EMAIL_USE_TLS', False)
EMAIL_TIMEOUT = env_int('EMAIL_TIMEOUT', 10)
DEFAULT_FROM_EMAIL = os.getenv('EMAIL_FROM', 'Kanisa <noreply@kanisa.org>')


# Notifications (OTP, welcome and confirmation messages)
NOTIFICATIONS = {
    'TWILIO_ACCOUNT_SID': os.getenv('TWILIO_ACCOUNT_SID'),
    'TWILIO_AUTH_TOKEN': os.getenv('TWILIO_AUTH_TOKEN'),
    'TWILIO_PHONE_NUMBER': os.getenv('TWILIO_PHONE_NUMBER'),
    'SMS_COUNTRY_CODE': os.getenv('SMS_COUNTRY_CODE', '255'),
    'FROM_EMAIL': DEFAULT_FROM_EMAIL,
}


# Registration flow
REGISTRATION = {
    'OTP_EXPIRY_MINUTES': env_int('OTP_EXPIRY_MINUTES', 10),
    'MIN_AGE_YEARS': 18,
    'MAX_DOCUMENT_SIZE': env_int('MAX_FILE_SIZE', 5 * 1024 * 1024),
    'MAX_DOCUMENTS': 10,
    'ALLOWED_DOCUMENT_TYPES': [
        t.strip() for t in os.getenv('ALLOWED_DOCUMENT_TYPES', 'image/jpeg,image/png,application/pdf').split(',')
    ],
    'DOCUMENTS_DIRECTORY': 'documents',
    'INVALIDATE_PREVIOUS_OTPS': env_bool('INVALIDATE_PREVIOUS_OTPS', False),
}


# Payments (ZenoPay mobile money)
ZENOPAY = {
    'API_KEY': os.getenv('ZENO_API_KEY'),
    'BASE_URL': os.getenv('ZENO_BASE_URL', 'https://zenoapi.com'),
    'WEBHOOK_URL': os.getenv('ZENO_WEBHOOK_URL'),
    'WEBHOOK_SECRET': os.getenv('ZENO_WEBHOOK_SECRET'),
    'TIMEOUT_SECONDS': env_int('ZENO_TIMEOUT_SECONDS', 15),
}

PAYMENT_SYNC = {
    # Set to 0 to disable the scheduled sweep
    'CRON_MINUTES': env_int('PAYMENT_SYNC_CRON_MINUTES', 5),
    'EXPIRY_MINUTES': 5,
    'REQUEST_DELAY_SECONDS': 0.5,
    'LOCK_TIMEOUT_SECONDS': env_int('PAYMENT_SYNC_LOCK_SECONDS', 600),
}


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': os.getenv('LOG_LEVEL', 'INFO'),
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': os.getenv('DJANGO_LOG_LEVEL', 'WARNING'),
            'propagate': False,
        },
    },
}
