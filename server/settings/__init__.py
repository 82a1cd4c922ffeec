"""Settings entry point.

Components are combined by django-split-settings; the environment
file is picked by the DJANGO_ENV variable (development by default).
"""

from os import environ

from split_settings.tools import include, optional

# Managing environment via `DJANGO_ENV` variable:
environ.setdefault('DJANGO_ENV', 'development')
_ENV = environ['DJANGO_ENV']

_base_settings = (
    'components/common.py',
    'components/logging.py',
    'components/drive.py',
    # Select the right env:
    'environments/{0}.py'.format(_ENV),
    # Optionally override some settings:
    optional('environments/local.py'),
)

# Include settings:
include(*_base_settings)
