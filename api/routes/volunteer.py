from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.ext.asyncio import async_sessionmaker

from api.deps import get_assignment_service, get_auth_service
from core.database import get_session_factory
from core.logging import get_logger
from core.security import get_current_volunteer_id
from schemas.assignment import AcceptRequest, LegacyAssignRequest
from schemas.auth import LoginRequest, LoginResult
from schemas.responses import StandardSuccessResponse
from schemas.volunteer import AvailabilityUpdate, VolunteerCreate, VolunteerRead, VolunteerRegistered
from services.assignment_service import AssignmentService
from services.auth_service import AuthService, reconcile_volunteer_user

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=StandardSuccessResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a volunteer"
)
async def register_volunteer(
    request: VolunteerCreate,
    background_tasks: BackgroundTasks,
    service: AuthService = Depends(get_auth_service),
    session_factory: async_sessionmaker = Depends(get_session_factory),
):
    volunteer, token = await service.register(request)
    background_tasks.add_task(reconcile_volunteer_user, session_factory, volunteer.id)

    registered = VolunteerRegistered(
        id=volunteer.id,
        name=volunteer.name,
        email=volunteer.email,
        phone=volunteer.phone,
        zone=volunteer.zone,
        status=volunteer.account_status,
        token=token,
    )
    return StandardSuccessResponse(
        message="Volunteer registered successfully",
        data=registered.model_dump(mode="json"),
    )


@router.post("/login", response_model=StandardSuccessResponse, summary="Volunteer login")
async def login(
    request: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    token, volunteer = await service.login(request)
    result = LoginResult(token=token, volunteer=VolunteerRead.model_validate(volunteer))
    return StandardSuccessResponse(message="Login successful", data=result.model_dump(mode="json"))


@router.get("/profile", response_model=StandardSuccessResponse, summary="Current volunteer profile")
async def get_profile(
    volunteer_id: int = Depends(get_current_volunteer_id),
    service: AuthService = Depends(get_auth_service),
):
    volunteer = await service.get_profile(volunteer_id)
    return StandardSuccessResponse(
        message="Profile retrieved",
        data=VolunteerRead.model_validate(volunteer).model_dump(mode="json"),
    )


@router.put("/availability", response_model=StandardSuccessResponse, summary="Toggle availability")
async def update_availability(
    request: AvailabilityUpdate,
    volunteer_id: int = Depends(get_current_volunteer_id),
    service: AuthService = Depends(get_auth_service),
):
    volunteer = await service.set_availability(volunteer_id, request.available)
    return StandardSuccessResponse(
        message="Availability updated",
        data=VolunteerRead.model_validate(volunteer).model_dump(mode="json"),
    )


@router.get(
    "/available-requests",
    response_model=StandardSuccessResponse,
    summary="Open requests the volunteer can accept"
)
async def available_requests(
    volunteer_id: int = Depends(get_current_volunteer_id),
    service: AssignmentService = Depends(get_assignment_service),
):
    requests = await service.available_requests(volunteer_id)
    return StandardSuccessResponse(
        message=f"Found {len(requests)} available requests",
        data=[r.model_dump(mode="json") for r in requests],
    )


@router.post("/accept-request", response_model=StandardSuccessResponse, summary="Accept a request")
async def accept_request(
    request: AcceptRequest,
    volunteer_id: int = Depends(get_current_volunteer_id),
    service: AssignmentService = Depends(get_assignment_service),
):
    result = await service.accept(volunteer_id, request.request_id)
    return StandardSuccessResponse(
        message="Request accepted successfully",
        data=result.model_dump(by_alias=True),
    )


@router.post(
    "/assign",
    response_model=StandardSuccessResponse,
    summary="Assign a volunteer to a request (legacy clients)"
)
async def assign_volunteer(
    request: LegacyAssignRequest,
    service: AssignmentService = Depends(get_assignment_service),
):
    """
    Older clients send the volunteer id in the body and skip the
    availability checks.
    """
    result = await service.accept(request.volunteer_id, request.request_id, verify_volunteer=False)
    return StandardSuccessResponse(
        message="Volunteer assigned successfully",
        data=result.model_dump(by_alias=True),
    )


@router.get(
    "/assignments/{volunteer_id}",
    response_model=StandardSuccessResponse,
    summary="A volunteer's assignments"
)
async def list_assignments(
    volunteer_id: int,
    service: AssignmentService = Depends(get_assignment_service),
):
    assignments = await service.assignments_for(volunteer_id)
    return StandardSuccessResponse(
        message=f"Found {len(assignments)} assignments",
        data=[a.model_dump(mode="json") for a in assignments],
    )
