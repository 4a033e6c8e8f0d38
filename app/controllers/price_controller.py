"""
Price Controller
Central commodity price master and price quotes
"""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_price_book
from ..models.price import PriceUpdateRequest
from ..models.transaction import Grade, Unit
from ..services.pricing_service import PriceBook, quote
from ..utils.exceptions import ProcurementError
from ..utils.logger import logger
from ..views.json_view import JsonView

router = APIRouter()


@router.get("")
async def list_prices(price_book: PriceBook = Depends(get_price_book)):
    """Get all central prices"""
    return JsonView.listing(price_book.list_prices())


@router.get("/quote")
async def get_quote(
    commodity: str,
    grade: Grade = Grade.A,
    unit: Unit = Unit.KILOGRAM,
    quantity: Optional[Decimal] = Query(default=None, ge=0),
    price_book: PriceBook = Depends(get_price_book)
):
    """Unit price (and total when quantity is given) for commodity/grade/unit"""
    result = quote(commodity, grade, unit, price_book, quantity)
    if not result.known_commodity:
        logger.warning(f"Quote requested for unknown commodity: {commodity}")
    return result


@router.get("/{commodity}")
async def get_price(commodity: str, price_book: PriceBook = Depends(get_price_book)):
    """Get one commodity's central price"""
    try:
        return price_book.require(commodity)
    except ProcurementError as e:
        raise JsonView.http_error(e)


@router.put("/{commodity}")
async def update_price(
    commodity: str,
    request: PriceUpdateRequest,
    price_book: PriceBook = Depends(get_price_book)
):
    """Authorized update of a central price"""
    try:
        record = price_book.update_price(commodity, request.price, request.updated_by)
    except ProcurementError as e:
        logger.error(f"Failed to update price for {commodity}: {e.message}")
        raise JsonView.http_error(e)
    return JsonView.success(f"Price updated for {commodity}", record.model_dump(mode="json"))
