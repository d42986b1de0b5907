from fastapi import APIRouter, Depends

from api.deps import get_assignment_service
from core.security import get_current_volunteer_id
from schemas.assignment import CompleteAssignmentRequest
from schemas.responses import StandardSuccessResponse
from services.assignment_service import AssignmentService

router = APIRouter()


@router.post(
    "/{assignment_id}/complete",
    response_model=StandardSuccessResponse,
    summary="Mark an assignment complete"
)
async def complete_assignment(
    assignment_id: int,
    request: CompleteAssignmentRequest,
    volunteer_id: int = Depends(get_current_volunteer_id),
    service: AssignmentService = Depends(get_assignment_service),
):
    assignment = await service.complete(
        volunteer_id,
        assignment_id,
        people_served=request.people_served,
        notes=request.notes,
    )
    return StandardSuccessResponse(
        message="Assignment completed",
        data=assignment.model_dump(mode="json"),
    )
