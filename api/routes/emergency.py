from fastapi import APIRouter, Depends, status

from api.deps import get_emergency_service
from core.logging import get_logger
from schemas.emergency import EmergencyRequestCreate
from schemas.responses import StandardSuccessResponse
from services.emergency_service import EmergencyService

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=StandardSuccessResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit an emergency request"
)
async def submit_emergency(
    request: EmergencyRequestCreate,
    service: EmergencyService = Depends(get_emergency_service),
):
    """
    Record a request for help and alert nearby available volunteers.
    """
    result = await service.submit(request)
    return StandardSuccessResponse(
        message=(
            f"Emergency request submitted successfully. "
            f"{result.notified_count} volunteer(s) notified."
        ),
        data=result.model_dump(by_alias=True, mode="json"),
    )


@router.get(
    "/status/{request_id}",
    response_model=StandardSuccessResponse,
    summary="Public status of an emergency request"
)
async def get_emergency_status(
    request_id: int,
    service: EmergencyService = Depends(get_emergency_service),
):
    result = await service.get_status(request_id)
    return StandardSuccessResponse(
        message="Emergency status retrieved",
        data=result.model_dump(mode="json"),
    )


@router.get(
    "/{request_id}",
    response_model=StandardSuccessResponse,
    summary="Emergency request with its assignments"
)
async def get_emergency(
    request_id: int,
    service: EmergencyService = Depends(get_emergency_service),
):
    result = await service.get_request(request_id)
    return StandardSuccessResponse(
        message="Emergency request retrieved",
        data=result.model_dump(mode="json"),
    )
