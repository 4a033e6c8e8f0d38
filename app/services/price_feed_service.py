"""
Price Feed Service Module
Pulls published central prices and applies them to the price master.

Expected feed body (JSON):
    [{"commodity": "Tomato", "price": 26.75}, ...]
or
    {"prices": [...same items...]}
"""

from typing import Any, Dict, List, Optional

import httpx

from ..utils.decorators import retry, timed
from ..utils.exceptions import PriceFeedError, ProcurementError
from ..utils.logger import logger
from .pricing_service import PriceBook

FEED_ACTOR = "PriceFeed"


class PriceFeedService:
    """Fetches the central price feed over HTTP"""

    def __init__(
        self,
        price_book: PriceBook,
        url: str = "",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.price_book = price_book
        self.url = url
        self.timeout = timeout
        self.transport = transport
        self.last_result: Optional[Dict[str, Any]] = None

    @property
    def configured(self) -> bool:
        return bool(self.url)

    @retry(max_attempts=3, initial_delay=2.0, exceptions=(httpx.RequestError,))
    async def fetch(self) -> List[Dict[str, Any]]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(self.url)
            response.raise_for_status()
            body = response.json()

        items = body.get("prices") if isinstance(body, dict) else body
        if not isinstance(items, list):
            raise PriceFeedError("Price feed did not return a list", details=str(body)[:200])
        return items

    @timed
    async def refresh(self) -> Dict[str, Any]:
        """Fetch and apply the feed; failures are reported, not raised"""
        if not self.configured:
            result = {"status": "skipped", "message": "Price feed URL not configured", "updated": []}
            self.last_result = result
            return result

        try:
            items = await self.fetch()
        except (httpx.HTTPError, PriceFeedError, ValueError) as e:
            logger.error(f"Price feed refresh failed: {e}")
            result = {"status": "error", "message": str(e), "updated": []}
            self.last_result = result
            return result

        updated, skipped = [], []
        for item in items:
            commodity = item.get("commodity") if isinstance(item, dict) else None
            price = item.get("price") if isinstance(item, dict) else None
            if not commodity or price is None:
                skipped.append(item)
                continue
            try:
                self.price_book.update_price(commodity, price, updated_by=FEED_ACTOR)
            except (ProcurementError, ValueError) as e:
                logger.warning(f"Skipping feed price for {commodity}: {e}")
                skipped.append(item)
                continue
            updated.append(commodity)

        logger.info(f"Price feed applied: {len(updated)} updated, {len(skipped)} skipped")
        result = {"status": "success", "updated": updated, "skipped": len(skipped)}
        self.last_result = result
        return result
