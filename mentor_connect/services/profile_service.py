# mentor_connect/services/profile_service.py
import html
from typing import Any, Dict, List
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..config import get_settings
from ..constants import BusinessRules, ErrorMessages
from ..exceptions import EmailAlreadyRegisteredError, InvalidArgumentError
from ..models import Connection, Role, User
from ..security import get_password_hash
from ..utils.validation_utils import ValidationUtils
import logging

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "role", "bio", "skills", "interests")

class ProfileService:
    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()
        self.validator = ValidationUtils(db)

    def register_user(self, name: str, email: str, password: str, role: str) -> User:
        """Creates a new user with a hashed password"""
        name = (name or "").strip()
        email = (email or "").strip().lower()
        role = getattr(role, "value", role)
        if not name or not email or not password or not role:
            raise InvalidArgumentError(ErrorMessages.MISSING_FIELDS)
        if len(name) > BusinessRules.MAX_NAME_LENGTH:
            raise InvalidArgumentError(ErrorMessages.NAME_TOO_LONG)
        if role not in [r.value for r in Role]:
            raise InvalidArgumentError(ErrorMessages.INVALID_ROLE)
        if len(password) < BusinessRules.MIN_PASSWORD_LENGTH:
            raise InvalidArgumentError(ErrorMessages.PASSWORD_TOO_SHORT)

        if self.db.query(User).filter(User.email == email).first():
            raise EmailAlreadyRegisteredError(ErrorMessages.EMAIL_TAKEN)

        user = User(
            name=html.escape(name),
            email=email,
            hashed_password=get_password_hash(password),
            role=role,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            logger.info(f"Email uniqueness rejected registration for {email}: {e.orig}")
            raise EmailAlreadyRegisteredError(ErrorMessages.EMAIL_TAKEN)
        self.db.refresh(user)
        logger.info(f"User {user.id} registered as {user.role}")
        return user

    def get_user(self, user_id: int) -> User:
        return self.validator.get_user_or_404(user_id)

    def update_profile(self, user: User, data: Dict[str, Any]) -> User:
        """Applies sanitized profile changes; only fields present in `data` are touched"""
        changes = self._prepare_profile_data(data)
        if not changes:
            raise InvalidArgumentError(ErrorMessages.NO_UPDATE_DATA)

        try:
            for key, value in changes.items():
                setattr(user, key, value)
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error updating user {user.id}: {e}")
            raise
        logger.info(f"User {user.id} updated fields {sorted(changes)}")
        return user

    def delete_user(self, user: User):
        """Deletes the user after removing every connection that references them"""
        user_id = user.id
        try:
            removed = self.db.query(Connection).filter(
                or_(Connection.requester_id == user_id, Connection.recipient_id == user_id)
            ).delete(synchronize_session=False)
            self.db.delete(user)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error deleting user {user_id}: {e}")
            raise
        logger.info(f"User {user_id} deleted along with {removed} connections")

    def _prepare_profile_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Validates and sanitizes the updatable fields; anything else (email, password) is dropped"""
        prepared = {}
        for key in UPDATABLE_FIELDS:
            if data.get(key) is not None:
                prepared[key] = self._process_field_value(key, data[key])
        return prepared

    def _process_field_value(self, key: str, value: Any) -> Any:
        if key == "name":
            return self._clean_name(value)
        if key == "role":
            if value not in [r.value for r in Role]:
                raise InvalidArgumentError(ErrorMessages.INVALID_ROLE)
            return value
        if key == "bio":
            bio = html.escape(str(value)[:self.settings.BIO_MAX_LENGTH])
            # escaping can grow the text past the stored limit
            if len(bio) > self.settings.BIO_MAX_LENGTH:
                raise InvalidArgumentError(
                    f"Bio cannot be more than {self.settings.BIO_MAX_LENGTH} characters"
                )
            return bio
        # skills / interests: order and duplicates are kept as submitted
        return self._clean_list(value, key)

    @staticmethod
    def _clean_name(value: Any) -> str:
        name = str(value).strip()
        if not name:
            raise InvalidArgumentError(ErrorMessages.EMPTY_NAME)
        if len(name) > BusinessRules.MAX_NAME_LENGTH:
            raise InvalidArgumentError(ErrorMessages.NAME_TOO_LONG)
        return html.escape(name)

    @staticmethod
    def _clean_list(values: Any, key: str) -> List[str]:
        if not isinstance(values, (list, tuple)):
            raise InvalidArgumentError(f"{key.capitalize()} must be provided as an array")
        return [item for item in (str(v if v is not None else "").strip() for v in values) if item]
