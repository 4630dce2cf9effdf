"""
User CRUD
"""

import logging

from travelio.core.errors import BadRequestError, NotFoundError
from travelio.models.user import DEFAULT_ROLE, UserProfileUpdate, UserRole, UserUpsert

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users):
        self.users = users

    async def save(self, payload: UserUpsert) -> dict:
        """
        Registration and login share this path: one upsert keyed by email.
        The role is only written when the document is first inserted.
        """
        if not payload.email:
            raise BadRequestError("Email is required")

        fields = payload.to_document(exclude_none=True, exclude={"email"})
        result = await self.users.upsert(payload.email, fields, on_insert={"role": DEFAULT_ROLE})
        created = result.upserted_id is not None
        logger.info("%s user %s", "Created" if created else "Updated", payload.email)
        return {
            "email": payload.email,
            "created": created,
            "upsertedId": str(result.upserted_id) if created else None,
        }

    async def list(self, role: str | None = None) -> list[dict]:
        query = {"role": role} if role else {}
        return await self.users.find(query)

    async def get_profile(self, email: str) -> dict:
        user = await self.users.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update_profile(self, email: str, payload: UserProfileUpdate) -> dict:
        fields = payload.to_document(exclude_unset=True)
        user = await self.users.update_by_email(email, fields)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def get_role(self, email: str) -> str:
        user = await self.users.get_by_email(email)
        return (user or {}).get("role") or DEFAULT_ROLE

    async def set_role(self, user_id: str, role: UserRole) -> dict:
        user = await self.users.update_by_id(user_id, {"role": role})
        if user is None:
            raise NotFoundError("User not found")
        logger.info("User %s role set to %s", user_id, role)
        return user

    async def delete(self, user_id: str) -> None:
        if not await self.users.delete(user_id):
            raise NotFoundError("User not found")
        logger.info("Deleted user %s", user_id)
