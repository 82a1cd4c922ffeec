"""Django settings for server project.

There is no database: all records live in the in-memory store owned
by the files app.
"""

from server.settings.components import config

SECRET_KEY = config('DJANGO_SECRET_KEY', default='insecure-dev-secret-key')

INSTALLED_APPS: tuple[str, ...] = (
    # Our apps:
    'server.apps.files',
    'server.apps.api',
)

MIDDLEWARE: tuple[str, ...] = (
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'server.apps.api.middleware.ApiErrorMiddleware',
)

ROOT_URLCONF = 'server.urls'

WSGI_APPLICATION = 'server.wsgi.application'

# No persistence: state is lost on restart
DATABASES: dict[str, dict[str, str]] = {}

# Internationalization
LANGUAGE_CODE = 'en-us'

USE_I18N = False

TIME_ZONE = 'UTC'

USE_TZ = True

TEMPLATES: list[dict[str, object]] = []
