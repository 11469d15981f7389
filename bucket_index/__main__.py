"""Module entry point for the bucket index server."""
import faulthandler
import logging

from .app import create_app
from .profiles import ProfileStorage
from .services import BucketStorageService
from .settings import SettingsStorage

LOGGER = logging.getLogger(__name__)

_initialized = False


def initialize(log_level: str = "INFO") -> None:
    """Install process-wide crash diagnostics and logging once."""
    global _initialized
    if _initialized:
        return
    faulthandler.enable()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    _initialized = True


def main() -> None:
    settings = SettingsStorage().load()
    initialize(settings.log_level)

    bucket_name = settings.resolve_bucket_name()
    if not bucket_name:
        raise SystemExit("No bucket configured; set BUCKET or bucket_name in the settings file")
    profile = ProfileStorage().get(settings.profile_name) if settings.profile_name else None
    storage = BucketStorageService(bucket_name, profile=profile)

    LOGGER.info("Serving bucket '%s' on http://%s:%d/", bucket_name, settings.host, settings.port)
    create_app(storage, settings).run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
