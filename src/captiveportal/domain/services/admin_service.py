"""Service for admin console accounts."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from captiveportal.core.logging import get_logger
from captiveportal.domain.entities import AdminUpdate
from captiveportal.domain.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    DuplicateUsernameError,
    NoFieldsToUpdateError,
    NotFoundError,
    ValidationFailedError,
)
from captiveportal.infrastructure.auth import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    needs_rehash,
    verify_password,
)
from captiveportal.infrastructure.persistence.integrity import violated_unique_column
from captiveportal.infrastructure.persistence.models import AdminAccountModel, AdminRole
from captiveportal.infrastructure.persistence.repositories import AdminAccountRepository

logger = get_logger(__name__)


class AdminService:
    """Service for admin accounts.

    Password hashes are created and checked here and never returned to
    callers outside the service layer.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the admin service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.admin_repo = AdminAccountRepository(session)

    async def authenticate_admin(self, username: str, password: str) -> AdminAccountModel:
        """Authenticate an admin by username and password.

        Args:
            username: Login name.
            password: Plaintext password.

        Returns:
            The authenticated admin.

        Raises:
            AuthenticationError: If the username is unknown, the admin is
                inactive, or the password does not verify.
        """
        admin = await self.admin_repo.get_by_username(username)

        if admin is None:
            # Same hashing cost as a real check so timing does not leak existence
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.info("Admin login failed", username=username, reason="unknown")
            raise AuthenticationError()

        if not verify_password(password, admin.password_hash):
            logger.info("Admin login failed", username=username, reason="password")
            raise AuthenticationError()

        if not admin.is_active:
            logger.info("Admin login failed", username=username, reason="inactive")
            raise AuthenticationError()

        if needs_rehash(admin.password_hash):
            admin.password_hash = hash_password(password)
            await self.admin_repo.update(admin)

        await self.admin_repo.update_last_login(admin.id)
        await self.session.commit()
        await self.session.refresh(admin)
        logger.info("Admin logged in", admin_id=admin.id, username=admin.username)
        return admin

    async def create_admin(
        self,
        username: str,
        email: str,
        password: str,
        role: AdminRole | str = AdminRole.ADMIN,
    ) -> AdminAccountModel:
        """Create an admin account.

        Raises:
            ValidationFailedError: If the role is not a known role.
            DuplicateUsernameError: If the username is taken.
            DuplicateEmailError: If the email is taken.
        """
        admin = AdminAccountModel(
            username=username,
            email=email.strip().lower(),
            password_hash=hash_password(password),
            role=self._parse_role(role),
            is_active=True,
        )

        try:
            await self.admin_repo.create(admin)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            self._raise_duplicate(e)

        await self.session.refresh(admin)
        logger.info("Admin created", admin_id=admin.id, username=admin.username, role=admin.role)
        return admin

    async def update_admin_password(self, admin_id: str, new_password: str) -> None:
        admin = await self.get_admin(admin_id)
        admin.password_hash = hash_password(new_password)
        await self.admin_repo.update(admin)
        await self.session.commit()
        logger.info("Admin password changed", admin_id=admin_id)

    async def update_admin(self, admin_id: str, update: AdminUpdate) -> AdminAccountModel:
        """Update an admin's email, role or active flag.

        Raises:
            NoFieldsToUpdateError: If the update sets no field.
            NotFoundError: If the admin does not exist.
            DuplicateEmailError: If the new email is taken.
        """
        changes = update.changes()
        if not changes:
            raise NoFieldsToUpdateError()
        if "role" in changes:
            changes["role"] = self._parse_role(changes["role"])
        if "email" in changes:
            changes["email"] = changes["email"].strip().lower()

        admin = await self.get_admin(admin_id)
        for field_name, value in changes.items():
            setattr(admin, field_name, value)

        try:
            await self.admin_repo.update(admin)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            self._raise_duplicate(e)

        logger.info("Admin updated", admin_id=admin_id, fields=sorted(changes))
        return admin

    async def delete_admin(self, admin_id: str) -> None:
        admin = await self.get_admin(admin_id)
        await self.admin_repo.delete(admin)
        await self.session.commit()
        logger.info("Admin deleted", admin_id=admin_id)

    async def list_admins(self) -> list[AdminAccountModel]:
        return await self.admin_repo.list_all()

    async def get_admin(self, admin_id: str) -> AdminAccountModel:
        admin = await self.admin_repo.get_by_id(admin_id)
        if admin is None:
            raise NotFoundError("Admin")
        return admin

    async def has_super_admin(self) -> bool:
        return await self.admin_repo.role_exists(AdminRole.SUPER_ADMIN.value)

    @staticmethod
    def _parse_role(role: AdminRole | str) -> str:
        try:
            return AdminRole(role).value
        except ValueError as e:
            raise ValidationFailedError(
                f"Invalid role: {role}", field="role", code="invalid_role"
            ) from e

    @staticmethod
    def _raise_duplicate(error: IntegrityError) -> None:
        column = violated_unique_column(error, "admin_accounts", ["username", "email"])
        if column == "username":
            raise DuplicateUsernameError() from error
        if column == "email":
            raise DuplicateEmailError() from error
        raise error
