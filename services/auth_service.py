"""
Volunteer identity: registration, login, profile and availability.
"""

from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import (
    AuthError,
    ConflictError,
    NotFoundError,
    RescueLinkError,
    ServerError,
    ValidationError,
)
from core.logging import get_logger
from core.security import create_access_token, get_password_hash, verify_password
from models.volunteer import AccountStatus, Volunteer
from repositories.user import UserRepository
from repositories.volunteer import VolunteerRepository
from schemas.auth import LoginRequest
from schemas.volunteer import VolunteerCreate
from services.helpers import normalize_phone

logger = get_logger(__name__)

MIN_NAME_LENGTH = 2
MIN_PHONE_DIGITS = 10
MIN_PASSWORD_LENGTH = 8


def _validate_registration(data: VolunteerCreate) -> None:
    required = {
        "name": data.name,
        "email": data.email,
        "phone": data.phone,
        "password": data.password,
        "confirmPassword": data.confirm_password,
        "zone": data.zone,
    }
    missing = [field for field, value in required.items() if not value or not str(value).strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    if len(data.name.strip()) < MIN_NAME_LENGTH:
        raise ValidationError("Name must be at least 2 characters")
    if len(normalize_phone(data.phone)) < MIN_PHONE_DIGITS:
        raise ValidationError("Please provide a valid phone number with at least 10 digits")
    if len(data.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be at least 8 characters")
    if data.password != data.confirm_password:
        raise ValidationError("Passwords do not match")
    if not data.agreed_to_terms:
        raise ValidationError("You must agree to the terms and conditions")


class AuthService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.volunteers = VolunteerRepository(db)

    async def register(self, data: VolunteerCreate) -> Tuple[Volunteer, str]:
        _validate_registration(data)

        email = str(data.email).strip().lower()
        phone = normalize_phone(data.phone)

        try:
            if await self.volunteers.get_by_email(email):
                raise ConflictError("A volunteer with this email already exists")
            if await self.volunteers.get_by_phone(phone):
                raise ConflictError("A volunteer with this phone number already exists")

            volunteer = Volunteer(
                name=data.name.strip(),
                email=email,
                phone=phone,
                password_hash=get_password_hash(data.password),
                zone=data.zone.strip(),
                skills=data.skills,
                experience_level=data.experience,
                availability=data.availability,
                agreed_to_terms=True,
                available=True,
                account_status=AccountStatus.ACTIVE.value,
                email_verified=True,
            )
            await self.volunteers.add(volunteer)
            await self.db.commit()
        except RescueLinkError:
            await self.db.rollback()
            raise
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Registration raced a duplicate for {email}: {str(e)}")
            raise ConflictError("A volunteer with this email or phone already exists")
        except Exception as e:
            await self.db.rollback()
            logger.exception(f"Volunteer registration failed for {email}")
            raise ServerError("Failed to register volunteer. Please try again.") from e

        logger.info(f"Registered volunteer {volunteer.id} ({volunteer.email})")
        token = create_access_token(volunteer.id, volunteer.email, volunteer.name)
        return volunteer, token

    async def login(self, data: LoginRequest) -> Tuple[str, Volunteer]:
        if not data.email or not data.email.strip() or not data.password:
            raise ValidationError("Email and password are required")

        email = data.email.strip().lower()
        try:
            volunteer = await self.volunteers.get_by_email(email)
            if volunteer is None or not verify_password(data.password, volunteer.password_hash):
                logger.info(f"Failed login attempt for {email}")
                raise AuthError("Invalid email or password")

            await self.volunteers.mark_active(volunteer, login=True)
            await self.db.commit()
        except RescueLinkError:
            await self.db.rollback()
            raise
        except Exception as e:
            await self.db.rollback()
            logger.exception(f"Login failed for {email}")
            raise ServerError("Login failed. Please try again.") from e

        token = create_access_token(
            volunteer.id, volunteer.email, volunteer.name, remember_me=data.remember_me
        )
        return token, volunteer

    async def get_profile(self, volunteer_id: int) -> Volunteer:
        volunteer = await self.volunteers.get(volunteer_id)
        if volunteer is None:
            raise NotFoundError("Volunteer not found")
        return volunteer

    async def set_availability(self, volunteer_id: int, available: bool) -> Volunteer:
        try:
            volunteer = await self.volunteers.get(volunteer_id)
            if volunteer is None:
                raise NotFoundError("Volunteer not found")
            volunteer.available = available
            await self.volunteers.mark_active(volunteer)
            await self.db.commit()
        except RescueLinkError:
            await self.db.rollback()
            raise
        except Exception as e:
            await self.db.rollback()
            logger.exception(f"Availability update failed for volunteer {volunteer_id}")
            raise ServerError("Failed to update availability") from e

        logger.info(f"Volunteer {volunteer_id} availability set to {available}")
        return volunteer


async def reconcile_volunteer_user(session_factory: async_sessionmaker, volunteer_id: int) -> None:
    """Mirror a newly registered volunteer into ``users``.

    Runs after the registration response is sent. Failures are logged and
    dropped; the volunteer account is already committed.
    """
    try:
        async with session_factory() as session:
            volunteer = await VolunteerRepository(session).get(volunteer_id)
            if volunteer is None:
                logger.warning(f"Skipping user reconciliation, volunteer {volunteer_id} not found")
                return

            users = UserRepository(session)
            if await users.get_by_email(volunteer.email):
                return

            user = await users.create_volunteer_user(volunteer.name, volunteer.phone, volunteer.email)
            await session.commit()
            logger.info(f"Created user {user.id} for volunteer {volunteer_id}")
    except Exception as e:
        logger.warning(f"User reconciliation failed for volunteer {volunteer_id}: {str(e)}")
