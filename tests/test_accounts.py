"""Tests for registration and login"""

import pytest

from beauty_booking.utils.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    ValidationError,
)


def test_register_and_authenticate(directory):
    directory.register("Ann", "a@x.com", "pw1")
    user = directory.authenticate("A@X.com", "pw1")
    assert user.name == "Ann"
    assert user.email == "a@x.com"


def test_wrong_password_rejected(directory):
    directory.register("Ann", "a@x.com", "pw1")
    with pytest.raises(InvalidCredentialsError, match="Invalid email or password."):
        directory.authenticate("a@x.com", "wrong")


def test_unknown_email_rejected(directory):
    with pytest.raises(InvalidCredentialsError):
        directory.authenticate("ghost@example.com", "pw1")


def test_password_is_case_sensitive(directory):
    directory.register("Ann", "a@x.com", "Secret")
    with pytest.raises(InvalidCredentialsError):
        directory.authenticate("a@x.com", "secret")


@pytest.mark.parametrize("email", ["a@x.com", "A@X.COM", "  a@X.com  "])
def test_duplicate_email_any_case(directory, email):
    directory.register("Ann", "a@x.com", "pw1")
    with pytest.raises(DuplicateEmailError, match="Email already registered."):
        directory.register("Other", email, "pw2")
    assert len(directory.list_users()) == 1


def test_register_normalizes_name_and_email(directory):
    directory.register("  Ann  ", "  Ann@Example.COM ", "pw1")
    user = directory.list_users()[0]
    assert user.name == "Ann"
    assert user.email == "ann@example.com"


def test_password_is_not_stored_in_plain_text(directory, store):
    directory.register("Ann", "a@x.com", "pw1")
    raw = store.get("lbc_users")[0]
    assert "password" not in raw
    assert raw["password_hash"] != "pw1"
    assert raw["password_hash"].startswith("$2")


@pytest.mark.parametrize(
    "name,email,password",
    [("", "a@x.com", "pw"), ("Ann", "   ", "pw"), ("Ann", "a@x.com", "")],
)
def test_register_requires_all_fields(directory, name, email, password):
    with pytest.raises(ValidationError, match="All fields are required."):
        directory.register(name, email, password)
    assert directory.list_users() == []


def test_register_rejects_malformed_email(directory):
    with pytest.raises(ValidationError):
        directory.register("Ann", "not-an-email", "pw1")
    assert directory.list_users() == []


def test_find_by_id(directory):
    directory.register("Ann", "a@x.com", "pw1")
    user = directory.authenticate("a@x.com", "pw1")
    assert directory.find_by_id(user.id) == user
    assert directory.find_by_id("missing") is None


@pytest.mark.parametrize("email", ["Eve <a@x.com>", "Eve <A@X.COM>"])
def test_display_name_form_cannot_reuse_email(directory, email):
    directory.register("Ann", "a@x.com", "pw1")
    with pytest.raises(DuplicateEmailError):
        directory.register("Eve", email, "pw2")
    assert [u.email for u in directory.list_users()] == ["a@x.com"]


def test_display_name_form_stores_bare_address(directory):
    directory.register("Ann", "Ann <Ann@Example.com>", "pw1")
    assert directory.list_users()[0].email == "ann@example.com"
    assert directory.authenticate("ann@example.com", "pw1").name == "Ann"


def test_login_with_malformed_email_is_invalid_credentials(directory):
    with pytest.raises(InvalidCredentialsError):
        directory.authenticate("not-an-email", "pw1")


def test_unreadable_user_records_survive_registration(directory, store):
    store.set("lbc_users", [{"id": "legacy", "name": "Old", "email": "old@x.com"}])
    directory.register("Ann", "a@x.com", "pw1")

    ids = [r["id"] for r in store.get("lbc_users")]
    assert "legacy" in ids
    assert len(ids) == 2


def test_unreadable_user_record_still_reserves_email(directory, store):
    store.set("lbc_users", [{"id": "legacy", "name": "Old", "email": "old@x.com"}])
    with pytest.raises(DuplicateEmailError):
        directory.register("Ann", "OLD@x.com", "pw1")


def test_users_entry_of_wrong_shape_reads_as_empty(directory, store):
    store.set("lbc_users", 5)
    assert directory.list_users() == []
    directory.register("Ann", "a@x.com", "pw1")
    assert len(directory.list_users()) == 1
