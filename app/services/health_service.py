"""
Health Service Module
Handles health checks for system components
"""

from typing import Any, Dict, Optional

from ..utils.clock import Clock, SystemClock
from ..utils.constants import HealthStatus
from .ledger_service import LedgerService
from .pricing_service import PriceBook
from .price_feed_service import PriceFeedService


class HealthService:
    """Service for health monitoring"""

    def __init__(
        self,
        ledger: LedgerService,
        price_book: PriceBook,
        price_feed: PriceFeedService,
        clock: Optional[Clock] = None
    ):
        self.ledger = ledger
        self.price_book = price_book
        self.price_feed = price_feed
        self.clock = clock or SystemClock()

    def check_all(self) -> Dict[str, Any]:
        """Check health of all components"""
        components = {
            'ledger': self.check_ledger(),
            'price_book': self.check_price_book(),
            'price_feed': self.check_price_feed()
        }

        statuses = [component['status'] for component in components.values()]
        if all(status == HealthStatus.HEALTHY for status in statuses):
            overall_status = HealthStatus.HEALTHY
        elif components['price_book']['status'] == HealthStatus.UNHEALTHY:
            overall_status = HealthStatus.UNHEALTHY
        else:
            overall_status = HealthStatus.DEGRADED

        return {
            'status': overall_status,
            'timestamp': self.clock.now().isoformat(),
            'components': components
        }

    def check_ledger(self) -> Dict[str, Any]:
        return {
            'status': HealthStatus.HEALTHY,
            'records': self.ledger.count(),
            'message': 'In-memory ledger available'
        }

    def check_price_book(self) -> Dict[str, Any]:
        """Pricing needs at least one commodity to be useful"""
        count = len(self.price_book.commodities())
        if count == 0:
            return {
                'status': HealthStatus.UNHEALTHY,
                'commodities': 0,
                'message': 'Price master is empty'
            }
        return {
            'status': HealthStatus.HEALTHY,
            'commodities': count,
            'message': 'Price master loaded'
        }

    def check_price_feed(self) -> Dict[str, Any]:
        if not self.price_feed.configured:
            return {'status': HealthStatus.HEALTHY, 'message': 'Price feed not configured'}

        last = self.price_feed.last_result
        if last and last.get('status') == 'error':
            return {'status': HealthStatus.DEGRADED, 'message': last.get('message', 'Last refresh failed')}
        return {'status': HealthStatus.HEALTHY, 'message': 'Price feed reachable'}
