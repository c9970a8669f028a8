"""
Django settings for the pageeditor_tool project.

The project serves the page editor JSON API. It keeps no database state:
every request parses the page it is given, runs one engine operation and
returns the result. The default local-memory cache backs request
throttling.

Please consult the Django documentation for additional configuration
options: https://docs.djangoproject.com/en/4.2/ref/settings/
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-change-me')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv('DJANGO_DEBUG', 'false').lower() == 'true'

RUNNING_TESTS = os.getenv('PYTEST_CURRENT_TEST') is not None or 'pytest' in sys.modules
if RUNNING_TESTS:
    DEBUG = True

if not DEBUG and SECRET_KEY == 'django-insecure-change-me' and not RUNNING_TESTS:
    raise ImproperlyConfigured('DJANGO_SECRET_KEY must be set when DEBUG is False.')

ALLOWED_HOSTS: list[str] = [
    host.strip()
    for host in os.getenv('DJANGO_ALLOWED_HOSTS', '127.0.0.1,localhost,testserver').split(',')
    if host.strip()
]

# Application definition
INSTALLED_APPS = [
    'pageeditor',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'pageeditor.middleware.sliding_window_rate_throttle',
]

ROOT_URLCONF = 'pageeditor_tool.urls'

WSGI_APPLICATION = 'pageeditor_tool.wsgi.application'

# The API is stateless; no database is configured.
DATABASES: dict[str, dict[str, object]] = {}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'pageeditor',
    }
}

# Internationalization
# https://docs.djangoproject.com/en/4.2/topics/i18n/

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Editing engine configuration: optional YAML file overriding engine defaults
PAGEEDITOR_ENGINE_CONFIG = os.getenv('PAGEEDITOR_ENGINE_CONFIG') or None

# Request bodies carry whole pages
DATA_UPLOAD_MAX_MEMORY_SIZE = int(os.getenv('PAGEEDITOR_MAX_BODY_BYTES', str(5 * 1024 * 1024)))


# Security headers
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'
SECURE_REFERRER_POLICY = 'strict-origin-when-cross-origin'
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
USE_X_FORWARDED_HOST = True

if not DEBUG:
    SECURE_SSL_REDIRECT = os.getenv('DJANGO_SECURE_SSL_REDIRECT', 'true').lower() == 'true'
    SECURE_HSTS_SECONDS = int(os.getenv('DJANGO_SECURE_HSTS_SECONDS', '31536000'))
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True
else:
    SECURE_SSL_REDIRECT = False

# Rate limiting / throttling defaults (per IP per route)
THROTTLED_ROUTES = [
    'pageeditor:scan',
    'pageeditor:update',
    'pageeditor:highlight',
    'pageeditor:analyze',
    'pageeditor:suggestions',
    'pageeditor:apply',
]
THROTTLE_LIMIT = int(os.getenv('PAGEEDITOR_THROTTLE_LIMIT', '120'))
THROTTLE_WINDOW = int(os.getenv('PAGEEDITOR_THROTTLE_WINDOW', '60'))
THROTTLE_ROUTE_LIMITS: dict[str, tuple[int, int]] = {
    # Highlight events fire on every pointer move.
    'pageeditor:highlight': (600, 60),
}
THROTTLE_IP_HEADER = os.getenv('PAGEEDITOR_THROTTLE_HEADER', 'HTTP_X_FORWARDED_FOR')
THROTTLE_KEY_PREFIX = 'pageeditor:throttle'


log_level = os.getenv('DJANGO_LOG_LEVEL', 'INFO').upper()
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': log_level,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': log_level,
            'propagate': False,
        },
        'pageeditor': {
            'level': os.getenv('PAGEEDITOR_LOG_LEVEL', log_level).upper(),
            'propagate': True,
        },
    },
}
