"""
Django settings for the coursebook project.

Every value can be overridden through the environment. The project keeps its
records in memory, so no database is configured.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def env_list(name, default=''):
    return [item.strip() for item in os.environ.get(name, default).split(',') if item.strip()]


# ==================================================
# CORE
# ==================================================

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-coursebook-development-key')

DEBUG = env_bool('DJANGO_DEBUG', default=False)

ALLOWED_HOSTS = env_list('DJANGO_ALLOWED_HOSTS', default='localhost,127.0.0.1')

INSTALLED_APPS = [
    'django.contrib.staticfiles',
    'records',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'coursebook.urls'

WSGI_APPLICATION = 'coursebook.wsgi.application'

# GraphiQL is rendered through the Django template engine
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
            ],
        },
    },
]

# Records live in memory only
DATABASES = {}

STATIC_URL = 'static/'

USE_TZ = True


# ==================================================
# RECORDS
# ==================================================

# Directory holding courses.json, students.json and grades.json
RECORDS_FIXTURES_DIR = os.environ.get(
    'RECORDS_FIXTURES_DIR',
    str(BASE_DIR / 'records' / 'fixtures')
)


# ==================================================
# LOGGING
# ==================================================

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name} {message}',
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
        'level': 'WARNING',
    },
    'loggers': {
        'records': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'coursebook': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}
