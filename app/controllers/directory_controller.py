"""
Directory Controller
Counterparty and PVCS location lists for the entry screens
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ..dependencies import get_directory_service
from ..models.transaction import SOURCE_TYPES_BY_KIND, SourceType, TransactionKind
from ..services.directory_service import DirectoryService
from ..views.json_view import JsonView

router = APIRouter()


@router.get("/locations")
async def get_locations(directory: DirectoryService = Depends(get_directory_service)):
    """PVCS centres an entry can be recorded at"""
    return JsonView.listing(directory.locations())


@router.get("/source-types")
async def get_source_types(kind: TransactionKind = TransactionKind.PROCUREMENT):
    """Counterparty categories offered for a tab"""
    return JsonView.listing([s.value for s in SOURCE_TYPES_BY_KIND[kind]], kind=kind.value)


@router.get("/{source_type}")
async def get_counterparties(
    source_type: SourceType,
    search: Optional[str] = None,
    directory: DirectoryService = Depends(get_directory_service)
):
    """Eligible counterparties for a source type"""
    names = directory.counterparties(source_type, search)
    return JsonView.listing(names, source_type=source_type.value)
