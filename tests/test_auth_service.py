from __future__ import annotations

from dataclasses import replace

import pytest

from clinic_api.core.security import hash_password, verify_password
from clinic_api.domain.errors import DuplicateEmailError, InvalidCredentialsError, ValidationError
from clinic_api.repositories.counters import CounterAllocator
from clinic_api.repositories.entity_repositories import UserRepository
from clinic_api.services.auth_service import AdminLogin, AuthService, LoginSuccess


@pytest.fixture()
def users(file_store):
    return UserRepository(file_store, CounterAllocator(file_store))


@pytest.fixture()
def svc(users, settings):
    return AuthService(users, settings)


def test_register_stores_a_digest_not_the_password(svc, users):
    user = svc.register("alice", "a@x.com", "pw1")

    assert user.id == 1
    stored = users.find_by_email("a@x.com")
    assert stored.password_digest != "pw1"
    assert verify_password("pw1", stored.password_digest)


def test_register_requires_every_field(svc, users):
    with pytest.raises(ValidationError) as excinfo:
        svc.register("alice", "", None)

    assert excinfo.value.fields == ("email", "password")
    assert users.count() == 0


def test_register_rejects_non_text_password(svc):
    with pytest.raises(ValidationError):
        svc.register("alice", "a@x.com", 12345)


def test_register_duplicate_email(svc, users):
    svc.register("alice", "a@x.com", "pw1")

    with pytest.raises(DuplicateEmailError):
        svc.register("alice2", "a@x.com", "pw2")

    assert users.count() == 1


def test_login_by_email_and_by_username(svc):
    svc.register("alice", "a@x.com", "pw1")

    assert svc.login("pw1", email="a@x.com") == LoginSuccess(username="alice")
    assert svc.login("pw1", username="alice") == LoginSuccess(username="alice")


def test_login_wrong_password_or_unknown_user(svc):
    svc.register("alice", "a@x.com", "pw1")

    with pytest.raises(InvalidCredentialsError) as excinfo:
        svc.login("wrong", email="a@x.com")
    assert excinfo.value.status_code == 401

    with pytest.raises(InvalidCredentialsError):
        svc.login("pw1", email="nobody@x.com")

    with pytest.raises(InvalidCredentialsError):
        svc.login("", email="a@x.com")


def test_email_wins_when_both_identifiers_are_given(svc):
    svc.register("alice", "a@x.com", "pw1")

    with pytest.raises(InvalidCredentialsError):
        svc.login("pw1", email="other@x.com", username="alice")


def test_password_is_not_trimmed(svc):
    svc.register("alice", "a@x.com", " pw1 ")

    assert svc.login(" pw1 ", email="a@x.com").username == "alice"
    with pytest.raises(InvalidCredentialsError):
        svc.login("pw1", email="a@x.com")


def test_admin_login_bypasses_user_collection(svc, users):
    outcome = svc.login("admin123", email="admin")

    assert outcome == AdminLogin(identifier="admin", redirect_to="/admin")
    assert users.count() == 0


def test_admin_login_regardless_of_users_sharing_the_identifier(svc):
    svc.register("admin", "admin", "something-else")

    assert isinstance(svc.login("admin123", email="admin"), AdminLogin)
    assert svc.login("something-else", email="admin") == LoginSuccess(username="admin")


def test_admin_with_wrong_password_is_rejected(svc):
    with pytest.raises(InvalidCredentialsError):
        svc.login("admin", email="admin")


def test_admin_from_prehashed_secret(users, settings):
    configured = replace(settings, admin_identifier="root", admin_password="", admin_password_hash=hash_password("s3cret"))
    svc = AuthService(users, configured)

    assert isinstance(svc.login("s3cret", username="root"), AdminLogin)
    with pytest.raises(InvalidCredentialsError):
        svc.login("admin123", email="admin")
