# mentor_connect/services/connection_service.py
from typing import Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from ..models import Connection, ConnectionStatus, User
from ..constants import ErrorMessages
from ..exceptions import (
    DuplicateRequestError, ForbiddenError, InvalidArgumentError, InvalidStatusTransitionError, NotFoundError,
)
from ..utils.validation_utils import ValidationUtils
import logging

logger = logging.getLogger(__name__)

# filter type -> (side of the connection the user is on, status)
CONNECTION_FILTERS = {
    "pending_received": ("recipient", ConnectionStatus.PENDING),
    "pending_sent": ("requester", ConnectionStatus.PENDING),
    "accepted": ("either", ConnectionStatus.ACCEPTED),
    "declined_sent": ("requester", ConnectionStatus.DECLINED),
    "declined_received": ("recipient", ConnectionStatus.DECLINED),
}

RESOLUTION_DECISIONS = (ConnectionStatus.ACCEPTED.value, ConnectionStatus.DECLINED.value)

class ConnectionService:
    def __init__(self, db: Session):
        self.db = db
        self.validator = ValidationUtils(db)

    def create_request(self, requester_id: int, recipient_id: Optional[int]) -> Connection:
        """Creates a pending connection request after checking the pair has no record yet"""
        if not isinstance(recipient_id, int) or isinstance(recipient_id, bool) or recipient_id <= 0:
            raise InvalidArgumentError(ErrorMessages.INVALID_RECIPIENT)
        if recipient_id == requester_id:
            raise InvalidArgumentError(ErrorMessages.SELF_CONNECTION)

        self.validator.get_user_or_404(recipient_id, ErrorMessages.RECIPIENT_NOT_FOUND)
        self.validator.check_no_existing_connection(requester_id, recipient_id)

        connection = Connection.between(requester_id, recipient_id)
        self.db.add(connection)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # the recipient may have been deleted since the existence check (FK violation)
            if self.db.get(User, recipient_id) is None:
                raise NotFoundError(ErrorMessages.RECIPIENT_NOT_FOUND)
            # otherwise a concurrent request for the same pair won on uq_connections_pair
            logger.info(f"Pair constraint rejected request {requester_id} -> {recipient_id}: {e.orig}")
            raise DuplicateRequestError(ErrorMessages.PAIR_CONFLICT)
        self.db.refresh(connection)
        logger.info(f"Connection {connection.id} requested by user {requester_id} to user {recipient_id}")
        return connection

    def resolve_request(self, connection_id: int, acting_user_id: int, decision: str) -> Connection:
        """Accepts or declines a pending request; only its recipient may do so"""
        if decision not in RESOLUTION_DECISIONS:
            raise InvalidArgumentError(ErrorMessages.INVALID_DECISION)

        connection = self.validator.get_connection_or_404(connection_id)
        if connection.recipient_id != acting_user_id:
            raise ForbiddenError(ErrorMessages.NOT_RECIPIENT)
        self.validator.validate_request_status(connection, ConnectionStatus.PENDING)

        connection.status = decision
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error resolving connection {connection_id}: {e}")
            raise
        self.db.refresh(connection)
        logger.info(f"Connection {connection.id} {decision} by user {acting_user_id}")
        return connection

    def delete_connection(self, connection_id: int, acting_user_id: int) -> str:
        """Cancels a pending request or removes an accepted connection; returns a user-facing message"""
        connection = self.validator.get_connection_or_404(connection_id)
        if not connection.involves(acting_user_id):
            raise ForbiddenError(ErrorMessages.NOT_PARTICIPANT)
        if connection.status == ConnectionStatus.DECLINED.value:
            raise InvalidStatusTransitionError(ErrorMessages.DECLINED_IMMUTABLE)

        was_pending = connection.status == ConnectionStatus.PENDING.value
        try:
            self.db.delete(connection)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error deleting connection {connection_id}: {e}")
            raise

        logger.info(f"Connection {connection_id} deleted by user {acting_user_id} (was {'pending' if was_pending else 'accepted'})")
        if was_pending:
            return "Connection request cancelled successfully"
        return "Connection removed successfully"

    def list_connections(self, user_id: int, filter_type: Optional[str]) -> list[Connection]:
        """Lists the user's connections for one direction/status filter, newest first"""
        side, status = self._parse_filter(filter_type)

        query = self.db.query(Connection).options(
            joinedload(Connection.requester),
            joinedload(Connection.recipient),
        ).filter(Connection.status == status.value)

        if side == "requester":
            query = query.filter(Connection.requester_id == user_id)
        elif side == "recipient":
            query = query.filter(Connection.recipient_id == user_id)
        else:
            query = query.filter(or_(Connection.requester_id == user_id, Connection.recipient_id == user_id))

        return query.order_by(Connection.created_at.desc(), Connection.id.desc()).all()

    def _parse_filter(self, filter_type: Optional[str]) -> Tuple[str, ConnectionStatus]:
        if filter_type not in CONNECTION_FILTERS:
            logger.warning(f"Invalid connection type requested: {filter_type}")
            raise InvalidArgumentError(ErrorMessages.INVALID_CONNECTION_TYPE)
        return CONNECTION_FILTERS[filter_type]
