from logging import Logger

from sqlalchemy.exc import IntegrityError

from core.database import SQLDatabase
from core.logger import app_logger
from core.utils import CryptographyHelper
from model.dao.enums import LicenseStatus
from model.dao.users import UserDAO
from model.dto.users import UserCreateDTO, UserDTO, UserSummaryDTO


class UserService:
    def __init__(self, pg_database: SQLDatabase, logger: Logger = app_logger):
        self._db = pg_database
        self._logger = logger

    async def add_user(self, dto: UserCreateDTO) -> UserDTO | None:
        """Register a user with a pending license; None when the user already exists."""
        existing = (
            await UserDAO.filter(
                db_id=dto.db_id, username=dto.username, db_resource=self._db
            )
        ).first()

        if existing is not None:
            self._logger.warning(f"User {dto.username} already exists in db_id {dto.db_id}.")
            return None

        user = UserDAO(
            db_id=dto.db_id,
            username=dto.username,
            password=CryptographyHelper.hash_password(dto.password),
            license_status=LicenseStatus.PENDING,
        )

        try:
            await user.save(self._db)
        except IntegrityError:
            # Registered concurrently between the lookup and the insert
            self._logger.warning(f"User {dto.username} already exists in db_id {dto.db_id}.")
            return None

        self._logger.info(f"User {dto.username} added to db_id {dto.db_id} with pending license")
        return user.to_dto()

    async def get_users(self, db_id: str) -> list[UserSummaryDTO]:
        users = await UserDAO.filter(db_id=db_id, db_resource=self._db)
        return [UserSummaryDTO.model_validate(user.model_dump()) for user in users]
