"""Access gate — token issuance/validation and credential checks."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from mentor_connect.exceptions import UnauthenticatedError
from mentor_connect.security import (
    ALGORITHM, SECRET_KEY, authenticate_user, create_access_token, decode_access_token,
)
from mentor_connect.services.profile_service import ProfileService


def test_token_round_trips_user_id():
    assert decode_access_token(create_access_token(42)) == 42


def test_token_expires_in_thirty_days():
    token = create_access_token(7)
    payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    expires = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    remaining = expires - datetime.now(timezone.utc)
    assert timedelta(days=29, hours=23) < remaining <= timedelta(days=30)


@pytest.mark.parametrize("token", [
    None,
    "",
    "not-a-jwt",
    jwt.encode({"sub": "1"}, "some-other-secret", algorithm="HS256"),
    jwt.encode({"sub": "not-an-id"}, SECRET_KEY, algorithm=ALGORITHM),
    jwt.encode({"exp": datetime.now(timezone.utc) + timedelta(minutes=5)}, SECRET_KEY, algorithm=ALGORITHM),
])
def test_invalid_tokens_are_rejected(token):
    with pytest.raises(UnauthenticatedError):
        decode_access_token(token)


def test_expired_token_is_rejected():
    token = create_access_token(1, expires_delta=timedelta(seconds=-10))
    with pytest.raises(UnauthenticatedError):
        decode_access_token(token)


def test_authenticate_user(db):
    ProfileService(db).register_user("Lena", "lena@mentorship.io", "correct-horse", "mentor")

    assert authenticate_user(db, "LENA@mentorship.io", "correct-horse").name == "Lena"


@pytest.mark.parametrize("email,password", [
    ("lena@mentorship.io", "wrong-password"),
    ("nobody@mentorship.io", "correct-horse"),
])
def test_authenticate_failures_share_one_message(db, email, password):
    ProfileService(db).register_user("Lena", "lena@mentorship.io", "correct-horse", "mentor")

    with pytest.raises(UnauthenticatedError) as exc_info:
        authenticate_user(db, email, password)
    assert exc_info.value.message == "Invalid email or password"
