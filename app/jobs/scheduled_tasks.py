import functools
import threading
import time

import schedule

from infrastructure.logging import bind_log_context, get_module_logger
from infrastructure.notifications.service import NotificationService

logger = get_module_logger()


def safe_run(job):
    @functools.wraps(job)
    def wrapper(*args, **kwargs):
        try:
            return job(*args, **kwargs)
        except Exception as e:
            logger.error(
                "safe_run_error",
                function=job.__name__,
                module=job.__module__,
                error=str(e),
                exc_info=True,
            )

    return wrapper


def init(service: NotificationService, interval_minutes: int = 5):
    """Register the notification sweeps and the heartbeat."""
    logger.info("scheduled_tasks_initialized", interval_minutes=interval_minutes)

    schedule.every(interval_minutes).minutes.do(
        safe_run(send_scheduled_notifications), service=service
    )
    schedule.every(interval_minutes).minutes.do(
        safe_run(retry_failed_notifications), service=service
    )
    schedule.every(5).minutes.do(safe_run(scheduler_heartbeat))
    schedule.every().hour.do(safe_run(channel_healthchecks), service=service)
    schedule.every().day.at("08:00").do(
        safe_run(report_exhausted_notifications), service=service
    )


def send_scheduled_notifications(service: NotificationService) -> dict:
    with bind_log_context(job="send_scheduled_notifications"):
        return service.process_scheduled_notifications()


def retry_failed_notifications(service: NotificationService) -> dict:
    with bind_log_context(job="retry_failed_notifications"):
        return service.retry_failed_notifications()


def scheduler_heartbeat():
    logger.info("scheduler_heartbeat", time=time.ctime())


def channel_healthchecks(service: NotificationService):
    for channel, healthy in service.health_check().items():
        if healthy:
            logger.info("channel_healthy", channel=channel)
        else:
            logger.warning("channel_unhealthy", channel=channel)


def report_exhausted_notifications(service: NotificationService, limit: int = 100):
    exhausted = service.list_exhausted_notifications(limit=limit)
    if exhausted:
        logger.warning(
            "notifications_retries_exhausted",
            count=len(exhausted),
            notification_log_ids=[log.id for log in exhausted],
        )
    return exhausted


def run_continuously(interval=1):
    """Continuously run, while executing pending jobs at each
    elapsed time interval.
    @return cease_continuous_run: threading. Event which can
    be set to cease continuous run. Please note that it is
    *intended behavior that run_continuously() does not run
    missed jobs*. For example, if you've registered a job that
    should run every minute and you set a continuous run
    interval of one hour then your job won't be run 60 times
    at each interval but only once.
    """
    cease_continuous_run = threading.Event()

    class ScheduleThread(threading.Thread):
        @classmethod
        def run(cls):
            while not cease_continuous_run.is_set():
                schedule.run_pending()
                time.sleep(interval)

    continuous_thread = ScheduleThread()
    continuous_thread.start()
    return cease_continuous_run
