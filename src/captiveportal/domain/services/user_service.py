"""Service for registering and managing captive-portal guests."""

from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from captiveportal.core.logging import get_logger
from captiveportal.domain.entities import UserStats, UserUpdate
from captiveportal.domain.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    DuplicatePhoneError,
    InvalidPhoneFormatError,
    NoFieldsToUpdateError,
    NotFoundError,
)
from captiveportal.domain.services.phone_number import (
    is_valid_phone_number,
    normalize_phone_number,
)
from captiveportal.infrastructure.persistence.integrity import violated_unique_column
from captiveportal.infrastructure.persistence.models import UserAccountModel
from captiveportal.infrastructure.persistence.repositories import UserAccountRepository

logger = get_logger(__name__)

RECENT_LOGIN_WINDOW = timedelta(days=7)


class UserService:
    """Service for guest user accounts.

    Email and phone uniqueness is guarded by the table's unique constraints;
    a violation is reported as the matching duplicate error.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the user service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.user_repo = UserAccountRepository(session)

    async def register_user(
        self,
        email: str,
        phone_number: str,
        first_name: str,
        last_name: str,
        company: str | None = None,
    ) -> UserAccountModel:
        """Register a new guest.

        Args:
            email: Email address; stored lowercased.
            phone_number: Phone number; stored normalized.
            first_name: Given name.
            last_name: Family name.
            company: Optional company name.

        Returns:
            The created user.

        Raises:
            InvalidPhoneFormatError: If the normalized phone number is invalid.
            DuplicateEmailError: If the email is already registered.
            DuplicatePhoneError: If the phone number is already registered.
        """
        normalized_phone = normalize_phone_number(phone_number)
        if not is_valid_phone_number(normalized_phone):
            raise InvalidPhoneFormatError()

        user = UserAccountModel(
            email=email.strip().lower(),
            phone_number=normalized_phone,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            company=company.strip() if company else None,
            is_active=True,
        )

        try:
            await self.user_repo.create(user)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            column = violated_unique_column(e, "user_accounts", ["email", "phone_number"])
            if column == "email":
                raise DuplicateEmailError() from e
            if column == "phone_number":
                raise DuplicatePhoneError() from e
            raise

        await self.session.refresh(user)
        logger.info("User registered", user_id=user.id, email=user.email)
        return user

    async def authenticate_user(self, email: str, phone_number: str) -> UserAccountModel:
        """Authenticate a guest by email and phone number.

        Raises:
            AuthenticationError: If no active user matches both values. The
                message does not reveal which value was wrong.
        """
        user = await self.user_repo.get_active_by_credentials(
            email.strip().lower(),
            normalize_phone_number(phone_number),
        )
        if user is None:
            logger.info("User login failed", email=email.strip().lower())
            raise AuthenticationError()

        await self.user_repo.update_last_login(user.id)
        await self.session.commit()
        await self.session.refresh(user)
        logger.info("User logged in", user_id=user.id, email=user.email)
        return user

    async def get_user(self, user_id: str) -> UserAccountModel:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User")
        return user

    async def get_user_by_email(self, email: str) -> UserAccountModel:
        user = await self.user_repo.get_by_email(email.strip().lower())
        if user is None:
            raise NotFoundError("User")
        return user

    async def get_user_by_identifier(self, identifier: str) -> UserAccountModel:
        """Look a user up by id, or by email when the identifier contains '@'."""
        if "@" in identifier:
            return await self.get_user_by_email(identifier)
        return await self.get_user(identifier)

    async def update_user(self, user_id: str, update: UserUpdate) -> UserAccountModel:
        """Apply an admin update to a user.

        Only first name, last name, company and the active flag can change.

        Raises:
            NoFieldsToUpdateError: If the update sets no field.
            NotFoundError: If the user does not exist.
        """
        changes = update.changes()
        if not changes:
            raise NoFieldsToUpdateError()

        user = await self.get_user(user_id)
        for field_name, value in changes.items():
            setattr(user, field_name, value)

        await self.user_repo.update(user)
        await self.session.commit()
        logger.info("User updated", user_id=user.id, fields=sorted(changes))
        return user

    async def delete_user(self, user_id: str) -> None:
        """Delete a user. Their sessions stay in the ledger."""
        user = await self.get_user(user_id)
        await self.user_repo.delete(user)
        await self.session.commit()
        logger.info("User deleted", user_id=user_id)

    async def list_users(self, search: str | None = None) -> list[UserAccountModel]:
        """List users newest first, optionally filtered by a search term.

        The term matches case-insensitively against first name, last name,
        email and company, and as a plain substring of the phone number.
        """
        users = await self.user_repo.list_all()
        if not search:
            return users

        term = search.lower()
        return [
            user
            for user in users
            if term in user.first_name.lower()
            or term in user.last_name.lower()
            or term in user.email.lower()
            or (user.company is not None and term in user.company.lower())
            or search in user.phone_number
        ]

    async def get_user_stats(self) -> UserStats:
        since = datetime.now(timezone.utc) - RECENT_LOGIN_WINDOW
        row = await self.user_repo.get_stats(since)
        return UserStats(
            total_users=row.total_users or 0,
            active_users=row.active_users or 0,
            users_with_login=row.users_with_login or 0,
            recent_logins=row.recent_logins or 0,
        )
