import signal
import threading

from dotenv import load_dotenv

load_dotenv()

from infrastructure.logging import configure_logging, get_module_logger  # noqa: E402
from infrastructure.services import (  # noqa: E402
    get_notification_service,
    get_settings,
)
from jobs import scheduled_tasks  # noqa: E402

logger = get_module_logger()


def main():
    """Start the notification workers and block until interrupted."""
    settings = get_settings()
    configure_logging(log_level=settings.LOG_LEVEL, is_production=settings.is_production)

    service = get_notification_service()
    logger.info(
        "application_startup",
        git_sha=settings.GIT_SHA,
        configured_channels=[
            c.value for c in service.registry.configured_channels()
        ],
    )

    scheduled_tasks.init(
        service, interval_minutes=settings.notifications.sweep_interval_minutes
    )
    stop_run_continuously = scheduled_tasks.run_continuously()

    stopped = threading.Event()

    def _shutdown(signum, frame):
        logger.info("application_shutdown", signal=signum)
        stopped.set()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    stopped.wait()
    stop_run_continuously.set()
    service.shutdown()


if __name__ == "__main__":
    main()
