import pytest
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import (
    EmailTakenError, InvalidCredentialsError, UsernameTakenError, ValidationError,
)
from app.modules.auth.services import auth as auth_service
from app.modules.auth.services.auth import _conflict_from_integrity_error, register, verify
from app.modules.user_management.models.user import User


def test_register_normalizes_and_hashes(db):
    user = register(db, "  Alice@Test.COM ", " Alice ", "secret1")

    assert user.id > 0
    assert user.email == "alice@test.com"
    assert user.username == "alice"
    assert user.password_hash != "secret1"
    assert user.password_hash.startswith("$2")


def test_register_same_email_different_case_is_conflict(db):
    register(db, "a@b.com", "first", "secret1")

    with pytest.raises(EmailTakenError) as exc_info:
        register(db, "A@B.com ", "second", "secret1")

    assert exc_info.value.status_code == 409
    assert exc_info.value.message == "Email already taken"


def test_register_same_username_is_conflict(db):
    register(db, "one@b.com", "alice", "secret1")

    with pytest.raises(UsernameTakenError):
        register(db, "two@b.com", "ALICE", "secret1")


@pytest.mark.parametrize(
    "email,username,password",
    [
        ("", "alice", "secret1"),
        ("a@b.com", "  ", "secret1"),
        ("a@b.com", "alice", ""),
        ("a@b.com", "alice", "12345"),
    ],
)
def test_register_rejects_bad_input(db, email, username, password):
    with pytest.raises(ValidationError):
        register(db, email, username, password)

    assert db.query(User).count() == 0


def test_register_race_on_email_maps_to_conflict(db, monkeypatch):
    register(db, "race@b.com", "first", "secret1")
    # Pre-check loses the race: it sees nothing, the unique index catches it
    monkeypatch.setattr(auth_service, "get_user_by_email", lambda db, email: None)

    with pytest.raises(EmailTakenError):
        register(db, "race@b.com", "second", "secret1")

    assert db.query(User).count() == 1


def test_register_race_on_username_maps_to_conflict(db, monkeypatch):
    register(db, "one@b.com", "racer", "secret1")
    monkeypatch.setattr(auth_service, "get_user_by_username", lambda db, username: None)

    with pytest.raises(UsernameTakenError):
        register(db, "two@b.com", "racer", "secret1")


def test_verify_returns_user_id(db):
    user = register(db, "v@b.com", "verifier", "secret1")

    assert verify(db, " V@B.com", "secret1") == user.id


def test_verify_failures_share_one_message(db):
    register(db, "v@b.com", "verifier", "secret1")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        verify(db, "v@b.com", "nope-nope")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        verify(db, "nobody@b.com", "secret1")

    assert wrong_password.value.message == unknown_email.value.message
    assert wrong_password.value.status_code == 401


class _Diag:
    def __init__(self, constraint_name):
        self.constraint_name = constraint_name


class _PgUniqueViolation(Exception):
    """Stands in for psycopg2's UniqueViolation, which carries diag"""

    def __init__(self, message, constraint_name=None):
        super().__init__(message)
        self.diag = _Diag(constraint_name)


def _integrity_error(orig):
    return IntegrityError("INSERT INTO users ...", {}, orig)


PG_USERNAME_MESSAGE = (
    'duplicate key value violates unique constraint "ix_users_username"\n'
    "DETAIL:  Key (username)=(emailfan) already exists."
)


def test_username_conflict_not_confused_by_duplicate_value(db):
    exc = _integrity_error(Exception(PG_USERNAME_MESSAGE))

    conflict = _conflict_from_integrity_error(db, exc, "new@b.com", "emailfan")

    assert isinstance(conflict, UsernameTakenError)


def test_conflict_uses_postgres_constraint_name(db):
    exc = _integrity_error(_PgUniqueViolation(PG_USERNAME_MESSAGE, "ix_users_username"))
    email_exc = _integrity_error(_PgUniqueViolation(
        'duplicate key value violates unique constraint "ix_users_email"\n'
        "DETAIL:  Key (email)=(username@b.com) already exists.",
        "ix_users_email",
    ))

    assert isinstance(_conflict_from_integrity_error(db, exc, "n@b.com", "emailfan"), UsernameTakenError)
    assert isinstance(_conflict_from_integrity_error(db, email_exc, "username@b.com", "x"), EmailTakenError)


def test_conflict_matches_sqlite_columns(db):
    exc = _integrity_error(Exception("UNIQUE constraint failed: users.username"))

    assert isinstance(_conflict_from_integrity_error(db, exc, "emailish@b.com", "u"), UsernameTakenError)


def test_unnamed_violation_falls_back_to_lookup(db):
    register(db, "taken@b.com", "owner", "secret1")
    exc = _integrity_error(Exception("constraint violated"))

    assert isinstance(_conflict_from_integrity_error(db, exc, "taken@b.com", "other"), EmailTakenError)
    assert _conflict_from_integrity_error(db, exc, "free@b.com", "free") is None
