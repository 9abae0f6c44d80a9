from typing import Optional
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session
from ..models import User, Connection, ConnectionStatus
from ..constants import ErrorMessages
from ..exceptions import (
    DuplicateRequestError, ForbiddenError, InvalidStatusTransitionError, NotFoundError,
)

class ValidationUtils:
    def __init__(self, db: Session):
        self.db = db

    def get_user_or_404(self, user_id: int, message: str = ErrorMessages.USER_NOT_FOUND) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise NotFoundError(message)
        return user

    def get_connection_or_404(self, connection_id: int) -> Connection:
        connection = self.db.get(Connection, connection_id)
        if not connection:
            raise NotFoundError(ErrorMessages.CONNECTION_NOT_FOUND)
        return connection

    def find_connection_between(self, user_a_id: int, user_b_id: int) -> Optional[Connection]:
        """Returns the single record for the unordered pair, whichever side sent it."""
        return self.db.query(Connection).filter(
            or_(
                and_(Connection.requester_id == user_a_id, Connection.recipient_id == user_b_id),
                and_(Connection.requester_id == user_b_id, Connection.recipient_id == user_a_id),
            )
        ).first()

    def check_no_existing_connection(self, requester_id: int, recipient_id: int):
        existing = self.find_connection_between(requester_id, recipient_id)
        if not existing:
            return

        sent_by_requester = existing.requester_id == requester_id
        if existing.status == ConnectionStatus.PENDING.value:
            if sent_by_requester:
                raise DuplicateRequestError(ErrorMessages.REQUEST_ALREADY_PENDING)
            raise DuplicateRequestError(ErrorMessages.REQUEST_PENDING_FROM_OTHER)
        if existing.status == ConnectionStatus.ACCEPTED.value:
            raise DuplicateRequestError(ErrorMessages.ALREADY_CONNECTED)
        if existing.status == ConnectionStatus.DECLINED.value:
            if sent_by_requester:
                raise ForbiddenError(ErrorMessages.OWN_REQUEST_DECLINED)
            raise ForbiddenError(ErrorMessages.DECLINED_THEIR_REQUEST)
        raise DuplicateRequestError(ErrorMessages.PAIR_CONFLICT)

    def validate_request_status(self, connection: Connection, expected_status: ConnectionStatus):
        if connection.status != expected_status.value:
            raise InvalidStatusTransitionError(
                f"This request is no longer {expected_status.value} (current status: {connection.status})"
            )
