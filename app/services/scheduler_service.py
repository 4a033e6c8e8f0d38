"""
Scheduler Service Module
Runs the central price feed refresh on an interval using APScheduler
"""

import asyncio
from typing import Dict, Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..utils.logger import logger
from .price_feed_service import PriceFeedService

JOB_ID = "price_feed_refresh"


class SchedulerService:
    """Service for managing the scheduled price refresh job"""

    def __init__(self, price_feed: PriceFeedService, interval_minutes: int = 5, enabled: bool = False):
        self.price_feed = price_feed
        self.scheduler: Optional[AsyncIOScheduler] = None
        self.is_running = False
        self.schedule_config = {
            "enabled": enabled,
            "interval_minutes": interval_minutes
        }

    def start(self):
        """Start the scheduler"""
        if self.scheduler is None:
            self.scheduler = AsyncIOScheduler()

        if not self.scheduler.running:
            self.scheduler.start()
            self.is_running = True
            logger.info("Scheduler started")

        if self.schedule_config["enabled"]:
            self._add_refresh_job()

    def stop(self):
        """Stop the scheduler"""
        if self.scheduler and self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            self.is_running = False
            logger.info("Scheduler stopped")

    def get_status(self) -> Dict:
        """Get scheduler status"""
        jobs = []
        if self.scheduler:
            for job in self.scheduler.get_jobs():
                next_run = job.next_run_time
                jobs.append({
                    "id": job.id,
                    "name": job.name,
                    "next_run": next_run.isoformat() if next_run else None
                })

        return {
            "is_running": self.is_running,
            "schedule_config": self.schedule_config,
            "feed_configured": self.price_feed.configured,
            "last_result": self.price_feed.last_result,
            "jobs": jobs
        }

    def update_schedule(self, config: Dict) -> Dict:
        """Update schedule configuration"""
        try:
            interval = int(config.get("interval_minutes", self.schedule_config["interval_minutes"]))
        except (TypeError, ValueError, OverflowError):
            interval = 0
        if interval < 1:
            return {"status": "error", "message": "interval_minutes must be a whole number of at least 1"}

        self.schedule_config["interval_minutes"] = interval
        if "enabled" in config:
            self.schedule_config["enabled"] = bool(config["enabled"])

        if self.scheduler and self.scheduler.get_job(JOB_ID):
            self.scheduler.remove_job(JOB_ID)

        if self.schedule_config["enabled"]:
            self._add_refresh_job()
            return {"status": "success", "message": "Schedule updated and enabled"}
        return {"status": "success", "message": "Schedule disabled"}

    def _add_refresh_job(self):
        """Add price refresh job to scheduler"""
        if not self.scheduler:
            self.start()
            return

        minutes = self.schedule_config["interval_minutes"]
        self.scheduler.add_job(
            self._run_scheduled_refresh,
            trigger=IntervalTrigger(minutes=minutes),
            id=JOB_ID,
            name="Price Feed Refresh",
            replace_existing=True
        )
        logger.info(f"Price refresh job added: every {minutes} minutes")

    async def _run_scheduled_refresh(self):
        """Execute scheduled refresh"""
        logger.info("Running scheduled price refresh")
        result = await self.price_feed.refresh()
        logger.info(f"Scheduled price refresh finished: {result['status']}")
        return result

    def run_now(self) -> Dict:
        """Trigger an immediate refresh"""
        asyncio.create_task(self._run_scheduled_refresh())
        return {"status": "started", "message": "Price refresh triggered manually"}
