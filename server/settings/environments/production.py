"""Overriding settings used in production."""

from server.settings.components import config

DEBUG = False

ALLOWED_HOSTS = [
    config('DOMAIN_NAME'),
]

SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'
