from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.exceptions import ServerError
from core.logging import get_logger
from repositories.relief import ReliefProviderRepository
from schemas.relief import ReliefProviderCreate, ReliefProviderRead
from schemas.responses import StandardSuccessResponse

logger = get_logger(__name__)

router = APIRouter()


@router.post("", response_model=StandardSuccessResponse, summary="Register a relief provider")
async def register_relief_provider(
    request: ReliefProviderCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        provider = await ReliefProviderRepository(db).register(request)
    except Exception as e:
        logger.exception(f"Relief provider registration failed for {request.name}")
        raise ServerError("Failed to register relief provider") from e

    return StandardSuccessResponse(
        message="Relief provider registered",
        data=ReliefProviderRead.model_validate(provider).model_dump(mode="json"),
    )


@router.get("", response_model=StandardSuccessResponse, summary="Active relief providers")
async def list_relief_providers(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
):
    try:
        providers = await ReliefProviderRepository(db).list_active(skip=skip, limit=limit)
    except Exception as e:
        logger.exception("Failed to list relief providers")
        raise ServerError("Failed to fetch relief providers") from e

    return StandardSuccessResponse(
        message=f"Found {len(providers)} relief providers",
        data=[ReliefProviderRead.model_validate(p).model_dump(mode="json") for p in providers],
    )
