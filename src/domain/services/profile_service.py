"""Profile service layer with business logic."""

import logging
from typing import Callable
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.exceptions import AppException, ErrorCode, ProfileNotFoundError
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork

logger = logging.getLogger(__name__)

PROFILE_UPDATED_MESSAGE = "Profile updated successfully!"


def _backend_message(exc: SQLAlchemyError) -> str:
    """Text of the underlying driver error, or of the wrapper if none."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_profile(self, user_id: UUID) -> Profile:
        """Load the profile keyed by the session identity."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return profile

    async def ensure_profile(self, user_id: UUID, username: str | None = None) -> Profile:
        """Return the user's profile, provisioning an empty one if missing.

        Idempotent. A concurrent insert of the same row is treated as success.
        """
        async with self._uow_factory() as uow:
            existing = await uow.profiles.get(user_id)
            if existing:
                return existing

            try:
                created = await uow.profiles.create(Profile(id=user_id, username=username))
                await uow.commit()
                logger.info("Provisioned profile for user %s", user_id)
                return created
            except IntegrityError as exc:
                await uow.rollback()
                orig = str(exc.orig).lower() if exc.orig else ""
                if "unique" not in orig and "duplicate" not in orig:
                    raise
                logger.debug("Profile already provisioned (race condition) for user %s", user_id)

        return await self.get_profile(user_id)

    async def update_profile(self, user_id: UUID, username: str, college: str) -> Profile:
        """Full update of the editable fields, keyed by the session identity.

        Backend failures surface with the backend's own message text.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))

            profile.apply_update(username=username, college=college)
            try:
                updated = await uow.profiles.update(profile)
                await uow.commit()
            except SQLAlchemyError as exc:
                await uow.rollback()
                raise AppException(
                    ErrorCode.DATABASE_ERROR,
                    _backend_message(exc),
                    500,
                ) from exc
            return updated
