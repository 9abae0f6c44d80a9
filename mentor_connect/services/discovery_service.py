# mentor_connect/services/discovery_service.py
from typing import List
from sqlalchemy import and_, exists, or_
from sqlalchemy.orm import Session
from ..config import get_settings
from ..constants import ErrorMessages
from ..exceptions import InvalidArgumentError
from ..models import Connection, ConnectionStatus, Role, User, UserInterest, UserSkill
from ..schemas import DiscoveryFilters
import logging

logger = logging.getLogger(__name__)

class DiscoveryService:
    """
    Finds users the requester could still connect with.

    Every filter is a case-insensitive substring match with LIKE wildcards escaped,
    so user-supplied text is always matched literally. Filters are AND-combined;
    `search` ORs across name, bio, skills and interests.
    """

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    def excluded_statuses(self) -> List[str]:
        statuses = [ConnectionStatus.PENDING.value, ConnectionStatus.ACCEPTED.value]
        if self.settings.DISCOVERY_EXCLUDE_DECLINED:
            statuses.append(ConnectionStatus.DECLINED.value)
        return statuses

    def find_candidates(self, requester_id: int, filters: DiscoveryFilters) -> List[User]:
        valid_roles = [role.value for role in Role]
        if filters.role is not None and filters.role not in valid_roles:
            raise InvalidArgumentError(ErrorMessages.INVALID_ROLE_FILTER)

        query = self.db.query(User).filter(User.id != requester_id, ~self._related_to(requester_id))

        if filters.role:
            query = query.filter(User.role == filters.role)
        if filters.skill:
            query = query.filter(self._has_skill(filters.skill))
        if filters.interest:
            query = query.filter(self._has_interest(filters.interest))
        if filters.search:
            query = query.filter(or_(
                User.name.icontains(filters.search, autoescape=True),
                User.bio.icontains(filters.search, autoescape=True),
                self._has_skill(filters.search),
                self._has_interest(filters.search),
            ))

        users = query.order_by(User.created_at.desc(), User.id.desc()).limit(
            self.settings.DISCOVERY_RESULT_LIMIT
        ).all()
        logger.debug(f"Discovery for user {requester_id} with {filters.model_dump(exclude_none=True)} returned {len(users)} users")
        return users

    def _related_to(self, requester_id: int):
        """EXISTS clause: the candidate row shares a connection in an excluded status with the requester."""
        return exists().where(
            Connection.status.in_(self.excluded_statuses()),
            or_(
                and_(Connection.requester_id == requester_id, Connection.recipient_id == User.id),
                and_(Connection.recipient_id == requester_id, Connection.requester_id == User.id),
            ),
        )

    @staticmethod
    def _has_skill(term: str):
        return User.skill_entries.any(UserSkill.value.icontains(term, autoescape=True))

    @staticmethod
    def _has_interest(term: str):
        return User.interest_entries.any(UserInterest.value.icontains(term, autoescape=True))
