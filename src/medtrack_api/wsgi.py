import os

from config.structlog_config import configure_logging

configure_logging(level=os.getenv("LOG_LEVEL", "INFO"))

# 1) Default settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

# 2) Build the WSGI app (the DI container is wired in MedTrackConfig.ready)
from django.core.wsgi import get_wsgi_application  # noqa: E402

application = get_wsgi_application()
