"""User Engine

Registration and lookup of user accounts.
"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import fetch_one, fetch_one_by
from core.domain.values import Email, Id, Password
from core.errors import AppError, DomainError, Result
from core.logging import domain_logger
from models.user import User

log = domain_logger()


class DuplicatedUserEmailError(DomainError):
    code = "DuplicatedUserEmailExc"
    default_message = "Email already taken."


class UserService:
    """Creates and loads users within one session."""

    __slots__ = ("_db",)

    def __init__(self, db: AsyncSession):
        self._db = db

    async def email_taken(self, email: Email) -> bool:
        return (await fetch_one_by(self._db, User, email=email)).is_ok()

    async def register(self, email: Email, password: Password) -> User:
        """Create and commit a user.

        Raises:
            DuplicatedUserEmailError: the email belongs to an existing user
        """
        if await self.email_taken(email):
            log.info("registration_rejected", reason="duplicate_email")
            raise DuplicatedUserEmailError()

        user = User(email=email, password=password.hash())
        self._db.add(user)
        try:
            await self._db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration for the same address.
            await self._db.rollback()
            log.info("registration_rejected", reason="duplicate_email_on_commit")
            raise DuplicatedUserEmailError() from exc

        log.info("user_registered", user_id=str(user.id))
        return user

    async def get(self, user_id: Id) -> Result[User, AppError]:
        return await fetch_one(self._db, User, user_id, "User")
