from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Header
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .config import get_settings
from .constants import ErrorMessages
from .database import get_db
from .exceptions import UnauthenticatedError
from .models import User

import logging
logger = logging.getLogger(__name__)

settings = get_settings()

# --- Password Hashing ---
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifies a plain-text password against a hashed password."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Hashes a plain-text password."""
    return pwd_context.hash(password)

# --- JWT Token Handling ---
SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Creates a JWT access token whose subject is the user id."""
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

def decode_access_token(token: Optional[str]) -> int:
    """
    Resolves a bearer token to a user id.
    Missing, malformed, expired or wrongly signed tokens all raise UnauthenticatedError.
    """
    if not token:
        raise UnauthenticatedError(ErrorMessages.NOT_AUTHENTICATED)
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.info("JWT decode failed: %s", e)
        raise UnauthenticatedError(ErrorMessages.NOT_AUTHENTICATED)

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        logger.info("JWT subject is not a user id: %r", subject)
        raise UnauthenticatedError(ErrorMessages.NOT_AUTHENTICATED)

# --- User Retrieval and Authentication ---
def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Retrieves a user by email, ignoring case."""
    return db.query(User).filter(User.email == email.strip().lower()).first()

def authenticate_user(db: Session, email: str, password: str) -> User:
    """
    Authenticates a user by email and password.
    Unknown email and wrong password produce the same error.
    """
    user = get_user_by_email(db, email)
    if not user:
        # same bcrypt cost as a real verify
        pwd_context.dummy_verify()
        raise UnauthenticatedError(ErrorMessages.INVALID_CREDENTIALS)
    if not verify_password(password, user.hashed_password):
        raise UnauthenticatedError(ErrorMessages.INVALID_CREDENTIALS)
    return user

def get_current_user(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(None),
) -> User:
    """Resolves the `Authorization: Bearer <token>` header to the calling user."""
    token = None
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            token = credentials.strip()
        else:
            logger.info("Authorization header present but not Bearer.")

    user_id = decode_access_token(token)
    user = db.get(User, user_id)
    if user is None:
        logger.info("Token refers to missing user %s", user_id)
        raise UnauthenticatedError(ErrorMessages.NOT_AUTHENTICATED)
    return user
