# fitness_api/utils/keep_alive.py
# Периодический пинг сервиса, чтобы бесплатный хостинг не усыплял его.
# Ошибки пинга логируются и проглатываются; повторов до следующего тика нет.
import logging

import httpx
from apscheduler.schedulers.background import BackgroundScheduler

logger = logging.getLogger(__name__)

JOB_ID = "keep_alive"


def ping(url: str, timeout: float = 10.0) -> bool:
    """Один GET на url. Возвращает True при 2xx, иначе False."""
    logger.info("🔔 Pinging %s to keep it awake...", url)
    try:
        response = httpx.get(url, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error("❌ Keep-alive ping to %s failed: %s", url, e)
        return False
    logger.info("✅ Server pinged successfully")
    return True


def start_keep_alive(
    url: str,
    interval_minutes: int = 13,
    scheduler: BackgroundScheduler | None = None,
) -> BackgroundScheduler:
    """Регистрирует задачу пинга и запускает планировщик."""
    if scheduler is None:
        scheduler = BackgroundScheduler()
    scheduler.add_job(
        ping,
        "interval",
        minutes=interval_minutes,
        args=[url],
        id=JOB_ID,
        replace_existing=True,
    )
    if not scheduler.running:
        scheduler.start()
    logger.info("⏰ Keep-alive job scheduled every %s minutes", interval_minutes)
    return scheduler
