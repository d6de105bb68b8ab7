"""
WSGI config for the MEI Vendas project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'meivendas.settings')

application = get_wsgi_application()
