# tests/unit/test_scheduler_service.py

import httpx
import pytest

from app.services.health_service import HealthService
from app.services.price_feed_service import PriceFeedService
from app.services.pricing_service import PriceBook
from app.services.scheduler_service import JOB_ID, SchedulerService
from app.utils.constants import HealthStatus


@pytest.fixture
def price_feed(price_book):
    return PriceFeedService(price_book, url="")


def test_status_before_start(price_feed):
    scheduler = SchedulerService(price_feed, interval_minutes=5)
    status = scheduler.get_status()
    assert status["is_running"] is False
    assert status["jobs"] == []
    assert status["schedule_config"] == {"enabled": False, "interval_minutes": 5}


def test_interval_below_one_minute_rejected(price_feed):
    scheduler = SchedulerService(price_feed)
    result = scheduler.update_schedule({"interval_minutes": 0})
    assert result["status"] == "error"
    assert scheduler.schedule_config["interval_minutes"] == 5


def test_disabling_schedule_without_scheduler(price_feed):
    scheduler = SchedulerService(price_feed)
    result = scheduler.update_schedule({"interval_minutes": 10, "enabled": False})
    assert result["status"] == "success"
    assert scheduler.schedule_config["interval_minutes"] == 10


@pytest.mark.asyncio
async def test_enabled_schedule_registers_refresh_job(price_feed):
    scheduler = SchedulerService(price_feed, interval_minutes=5, enabled=True)
    scheduler.start()
    try:
        status = scheduler.get_status()
        assert status["is_running"] is True
        assert [job["id"] for job in status["jobs"]] == [JOB_ID]

        scheduler.update_schedule({"enabled": False})
        assert scheduler.get_status()["jobs"] == []
    finally:
        scheduler.stop()
    assert scheduler.is_running is False


@pytest.mark.asyncio
async def test_scheduled_refresh_runs_feed(price_book):
    feed = PriceFeedService(
        price_book,
        url="https://prices.test/feed",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[{"commodity": "Onion", "price": "33"}]))
    )
    scheduler = SchedulerService(feed)
    result = await scheduler._run_scheduled_refresh()
    assert result["status"] == "success"
    assert scheduler.get_status()["last_result"]["updated"] == ["Onion"]


def test_health_is_unhealthy_without_prices(ledger, clock):
    empty_book = PriceBook(clock)
    health = HealthService(ledger, empty_book, PriceFeedService(empty_book), clock)
    report = health.check_all()
    assert report["status"] == HealthStatus.UNHEALTHY
    assert report["components"]["price_book"]["commodities"] == 0


def test_health_degraded_after_failed_feed(ledger, price_book, clock):
    feed = PriceFeedService(price_book, url="https://prices.test/feed")
    feed.last_result = {"status": "error", "message": "timeout"}
    health = HealthService(ledger, price_book, feed, clock)
    report = health.check_all()
    assert report["status"] == HealthStatus.DEGRADED
    assert report["components"]["price_feed"]["message"] == "timeout"


@pytest.mark.parametrize("interval", ["often", None, [5]])
def test_non_numeric_interval_rejected(price_feed, interval):
    scheduler = SchedulerService(price_feed)
    result = scheduler.update_schedule({"interval_minutes": interval})
    assert result["status"] == "error"
    assert scheduler.schedule_config["interval_minutes"] == 5
