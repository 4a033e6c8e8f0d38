"""
Advisory Controller
Start, poll and cancel advisory generation tasks
"""

from fastapi import APIRouter, Depends

from ..dependencies import get_advisory_service
from ..models.advisory import AdvisoryRequest
from ..services.advisory_service import AdvisoryService
from ..utils.exceptions import ProcurementError
from ..utils.logger import logger
from ..views.json_view import JsonView

router = APIRouter()


@router.post("", status_code=202)
async def request_advisory(
    request: AdvisoryRequest,
    advisory: AdvisoryService = Depends(get_advisory_service)
):
    """Start generation; poll the returned task id"""
    logger.info(f"Advisory requested: {request.crop} / {request.season} via {request.channel.value}")
    task = await advisory.request(request)
    return task.view()


@router.get("/{task_id}")
async def get_advisory(task_id: str, advisory: AdvisoryService = Depends(get_advisory_service)):
    """Task state and, once done, the advisory text"""
    try:
        return advisory.get(task_id).view()
    except ProcurementError as e:
        raise JsonView.http_error(e)


@router.delete("/{task_id}")
async def cancel_advisory(task_id: str, advisory: AdvisoryService = Depends(get_advisory_service)):
    """Cancel a pending task"""
    try:
        return advisory.cancel(task_id).view()
    except ProcurementError as e:
        raise JsonView.http_error(e)
