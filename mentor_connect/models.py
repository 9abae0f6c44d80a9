# mentor_connect/models.py
from datetime import datetime, timezone
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, ForeignKey, Sequence,
    UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import relationship

from .database import Base


def utcnow():
    return datetime.now(timezone.utc)


class Role(str, Enum):
    MENTOR = "mentor"
    MENTEE = "mentee"


# Enum for Connection Status
class ConnectionStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted" # Terminal, both users are connected
    DECLINED = "declined" # Terminal, blocks new requests between the pair


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, Sequence('user_id_seq'), primary_key=True, index=True)
    name = Column(String, nullable=False)
    # Always stored lower-cased so the unique index is case-insensitive
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False)
    bio = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    skill_entries = relationship(
        "UserSkill", order_by="UserSkill.position", cascade="all, delete-orphan", lazy="selectin"
    )
    interest_entries = relationship(
        "UserInterest", order_by="UserInterest.position", cascade="all, delete-orphan", lazy="selectin"
    )

    @property
    def skills(self):
        return [entry.value for entry in self.skill_entries]

    @skills.setter
    def skills(self, values):
        self.skill_entries = [UserSkill(position=i, value=v) for i, v in enumerate(values)]

    @property
    def interests(self):
        return [entry.value for entry in self.interest_entries]

    @interests.setter
    def interests(self, values):
        self.interest_entries = [UserInterest(position=i, value=v) for i, v in enumerate(values)]

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"


class UserSkill(Base):
    __tablename__ = "user_skills"

    id = Column(Integer, Sequence('user_skill_id_seq'), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    value = Column(String, nullable=False)

    def __repr__(self):
        return f"<UserSkill(user_id={self.user_id}, position={self.position}, value='{self.value}')>"


class UserInterest(Base):
    __tablename__ = "user_interests"

    id = Column(Integer, Sequence('user_interest_id_seq'), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    value = Column(String, nullable=False)

    def __repr__(self):
        return f"<UserInterest(user_id={self.user_id}, position={self.position}, value='{self.value}')>"


class Connection(Base):
    __tablename__ = "connections"
    __table_args__ = (
        # One relationship slot per unordered pair: (A, B) and (B, A) share the same key
        UniqueConstraint("user_low_id", "user_high_id", name="uq_connections_pair"),
        CheckConstraint("requester_id <> recipient_id", name="ck_connections_not_self"),
    )

    id = Column(Integer, Sequence('connection_id_seq'), primary_key=True, index=True)

    requester_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipient_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user_low_id = Column(Integer, nullable=False)
    user_high_id = Column(Integer, nullable=False)

    status = Column(String, default=ConnectionStatus.PENDING.value, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    requester = relationship("User", foreign_keys=[requester_id])
    recipient = relationship("User", foreign_keys=[recipient_id])

    @classmethod
    def between(cls, requester_id: int, recipient_id: int) -> "Connection":
        """Builds a pending request with its order-normalized pair key filled in."""
        return cls(
            requester_id=requester_id,
            recipient_id=recipient_id,
            user_low_id=min(requester_id, recipient_id),
            user_high_id=max(requester_id, recipient_id),
            status=ConnectionStatus.PENDING.value,
        )

    def involves(self, user_id: int) -> bool:
        return user_id in (self.requester_id, self.recipient_id)

    def counterpart_id(self, user_id: int) -> int:
        return self.recipient_id if self.requester_id == user_id else self.requester_id

    def __repr__(self):
        return f"<Connection(id={self.id}, requester_id={self.requester_id}, recipient_id={self.recipient_id}, status='{self.status}')>"
