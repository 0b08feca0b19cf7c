import structlog
from django.apps import AppConfig

logger = structlog.get_logger(__name__)


class MedTrackConfig(AppConfig):
    name = "medtrack_api"
    verbose_name = "MedTrack API"

    def ready(self):
        from django.conf import settings

        # ─── DI container ───────────────────────────────────────────
        from medtrack_core.adapters.config.composition_root import (
            setup_di_container_from_settings,
        )

        setup_di_container_from_settings(settings)
        logger.info("MedTrackConfig ready")
