"""ProfileService — registration, profile updates and cascading deletion."""

import pytest

from mentor_connect.exceptions import EmailAlreadyRegisteredError, InvalidArgumentError, NotFoundError
from mentor_connect.models import Connection, User, UserSkill
from mentor_connect.security import verify_password
from mentor_connect.services.connection_service import ConnectionService
from mentor_connect.services.profile_service import ProfileService


@pytest.fixture
def service(db):
    return ProfileService(db)


def test_register_hashes_password_and_normalizes_email(service):
    user = service.register_user("  Maya  ", "Maya@Mentorship.IO", "hunter22", "mentor")

    assert user.name == "Maya"
    assert user.email == "maya@mentorship.io"
    assert user.hashed_password != "hunter22"
    assert verify_password("hunter22", user.hashed_password)
    assert user.skills == [] and user.interests == []


def test_register_escapes_name(service):
    user = service.register_user("<b>Bold</b>", "bold@mentorship.io", "hunter22", "mentee")
    assert user.name == "&lt;b&gt;Bold&lt;/b&gt;"


def test_register_duplicate_email_ignores_case(service):
    service.register_user("First", "same@mentorship.io", "hunter22", "mentor")
    with pytest.raises(EmailAlreadyRegisteredError):
        service.register_user("Second", "SAME@mentorship.io", "hunter22", "mentee")


@pytest.mark.parametrize("name,email,password,role,message", [
    ("", "a@mentorship.io", "hunter22", "mentor", "required fields"),
    ("Ann", "a@mentorship.io", "", "mentor", "required fields"),
    ("Ann", "a@mentorship.io", "hunter22", "admin", "Invalid role"),
    ("Ann", "a@mentorship.io", "short", "mentee", "at least 6"),
])
def test_register_validation(service, name, email, password, role, message):
    with pytest.raises(InvalidArgumentError, match=message):
        service.register_user(name, email, password, role)


def test_update_skills_keep_order_and_duplicates(service, make_user, db):
    user = make_user()

    service.update_profile(user, {"skills": ["Go", "Rust", "Go"], "interests": [" AI ", "", None, "Chess"]})
    db.expire_all()
    reloaded = db.get(User, user.id)

    assert reloaded.skills == ["Go", "Rust", "Go"]
    assert reloaded.interests == ["AI", "Chess"]


def test_update_replaces_previous_list(service, make_user, db):
    user = make_user(skills=["Old", "Stale"])

    service.update_profile(user, {"skills": ["New"]})

    assert user.skills == ["New"]
    assert db.query(UserSkill).filter(UserSkill.user_id == user.id).count() == 1


def test_update_sanitizes_name_and_bio(service, make_user, monkeypatch):
    user = make_user()
    monkeypatch.setattr(service.settings, "BIO_MAX_LENGTH", 10)

    service.update_profile(user, {"name": "  Tom & Jerry ", "bio": "a & b"})

    assert user.name == "Tom &amp; Jerry"
    assert user.bio == "a &amp; b"


def test_update_truncates_plain_bio(service, make_user, monkeypatch):
    user = make_user()
    monkeypatch.setattr(service.settings, "BIO_MAX_LENGTH", 10)

    service.update_profile(user, {"bio": "abcdefghijklmnop"})

    assert user.bio == "abcdefghij"


def test_update_rejects_bio_that_grows_past_limit_when_escaped(service, make_user, monkeypatch):
    user = make_user(bio="unchanged")
    monkeypatch.setattr(service.settings, "BIO_MAX_LENGTH", 10)

    with pytest.raises(InvalidArgumentError, match="Bio cannot be more than 10 characters"):
        service.update_profile(user, {"bio": "<script>alert(1)</script>"})
    assert user.bio == "unchanged"


def test_update_rejects_long_name(service, make_user):
    user = make_user(name="Short")
    with pytest.raises(InvalidArgumentError, match="more than 100"):
        service.update_profile(user, {"name": "x" * 101})
    assert user.name == "Short"


def test_update_accepts_name_at_limit(service, make_user):
    user = make_user()
    service.update_profile(user, {"name": "  " + "x" * 100 + "  "})
    assert user.name == "x" * 100


def test_register_rejects_long_name(service):
    with pytest.raises(InvalidArgumentError, match="more than 100"):
        service.register_user("x" * 101, "long@mentorship.io", "hunter22", "mentor")


def test_update_ignores_email_and_password(service, make_user):
    user = make_user(email="keep@mentorship.io")
    with pytest.raises(InvalidArgumentError, match="No update data"):
        service.update_profile(user, {"email": "new@mentorship.io", "password": "changed"})
    assert user.email == "keep@mentorship.io"


@pytest.mark.parametrize("data", [
    {"name": "   "},
    {"role": "admin"},
    {"skills": "Python"},
    {},
])
def test_update_rejects_bad_input(service, make_user, data):
    user = make_user()
    with pytest.raises(InvalidArgumentError):
        service.update_profile(user, data)


def test_update_role(service, make_user):
    user = make_user(role="mentee")
    service.update_profile(user, {"role": "mentor"})
    assert user.role == "mentor"


def test_get_user_not_found(service):
    with pytest.raises(NotFoundError):
        service.get_user(404)


def test_delete_user_cascades_connections(service, make_user, db):
    doomed = make_user(skills=["Python"])
    friend, other, bystander_a, bystander_b = (make_user() for _ in range(4))
    connections = ConnectionService(db)
    accepted = connections.create_request(friend.id, doomed.id)
    connections.resolve_request(accepted.id, doomed.id, "accepted")
    connections.create_request(doomed.id, other.id)
    unrelated = connections.create_request(bystander_a.id, bystander_b.id)

    doomed_id = doomed.id
    service.delete_user(doomed)

    assert db.get(User, doomed_id) is None
    assert db.query(UserSkill).filter(UserSkill.user_id == doomed_id).count() == 0
    assert [conn.id for conn in db.query(Connection).all()] == [unrelated.id]
