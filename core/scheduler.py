# core/scheduler.py
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from core.config import settings
from core.logging_config import logger
from core.rate_limiter import prune_rate_limits


async def run_session_sweep(registry):
    """Closes dashboard sessions that have been idle past their TTL."""
    try:
        await registry.sweep()
    except Exception as e:
        logger.error(f"[SCHEDULER] Session sweep failed: {e}", exc_info=True)


async def run_rate_limit_prune():
    dropped = prune_rate_limits(settings.LOGIN_RATE_WINDOW_SECONDS)
    if dropped:
        logger.debug(f"[SCHEDULER] Dropped {dropped} stale rate-limit entries")


def start_scheduler(registry) -> AsyncIOScheduler:
    """
    Start the APScheduler loop-bound scheduler.
    Must be called from a running event loop (app startup).
    """
    scheduler = AsyncIOScheduler(timezone="UTC")

    scheduler.add_job(
        run_session_sweep,
        trigger=IntervalTrigger(seconds=settings.SESSION_SWEEP_INTERVAL_SECONDS),
        args=[registry],
        id="session_sweep_job",
        replace_existing=True,
    )

    scheduler.add_job(
        run_rate_limit_prune,
        trigger=IntervalTrigger(seconds=settings.LOGIN_RATE_WINDOW_SECONDS),
        id="rate_limit_prune_job",
        replace_existing=True,
    )

    scheduler.start()
    logger.info(
        f"⏰ Scheduler started. Idle sessions swept every {settings.SESSION_SWEEP_INTERVAL_SECONDS}s."
    )
    return scheduler
