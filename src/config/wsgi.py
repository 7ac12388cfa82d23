"""
WSGI application da Certificação API.

Exemplo:
    gunicorn src.config.wsgi:application --threads 8
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

application = get_wsgi_application()
