"""
Tests for the session accessor (sign-up, sign-in, OAuth, token lookup)
"""
import pytest

from app.core.config import settings
from app.core.exceptions import AuthenticationError, ValidationError
from app.services import auth


@pytest.mark.parametrize("email,password,confirm,message", [
    ("", "secret1", "secret1", "Email and password are required"),
    ("ana@example.com", "", "", "Email and password are required"),
    ("ana@example.com", "secret1", "secret2", "Passwords do not match"),
    ("ana@example.com", "abc", "abc", "Password must be at least 6 characters long"),
])
def test_sign_up_validation_runs_before_provider(fake_db, email, password, confirm, message):
    with pytest.raises(ValidationError, match=message):
        auth.sign_up(email, password, confirm)
    assert fake_db.auth.users == {}


def test_sign_up_returns_session(fake_db):
    response = auth.sign_up("ana@example.com", "secret1", "secret1")
    assert response.next == "/profiles"
    assert response.session.email == "ana@example.com"
    assert response.session.access_token


def test_sign_up_without_confirmed_email_has_no_tokens(fake_db):
    fake_db.auth.confirm_email = True
    response = auth.sign_up("ana@example.com", "secret1", "secret1")
    assert response.session.user_id
    assert response.session.access_token is None


def test_duplicate_sign_up_is_an_auth_error(fake_db):
    auth.sign_up("ana@example.com", "secret1", "secret1")
    with pytest.raises(AuthenticationError, match="already registered"):
        auth.sign_up("ana@example.com", "secret1", "secret1")


def test_sign_in_and_resolve_token(fake_db):
    signed_up = auth.sign_up("ana@example.com", "secret1", "secret1")
    session = auth.sign_in("ana@example.com", "secret1")

    user = auth.get_user_from_token(session.access_token)
    assert user.id == signed_up.session.user_id
    assert user.email == "ana@example.com"


def test_sign_in_wrong_password(fake_db):
    auth.sign_up("ana@example.com", "secret1", "secret1")
    with pytest.raises(AuthenticationError):
        auth.sign_in("ana@example.com", "wrong-password")


def test_sign_in_requires_fields(fake_db):
    with pytest.raises(ValidationError):
        auth.sign_in("", "")


def test_invalid_token(fake_db):
    with pytest.raises(AuthenticationError, match="Invalid or expired session"):
        auth.get_user_from_token("not-a-token")


def test_sign_out_revokes_token(fake_db):
    session = auth.sign_up("ana@example.com", "secret1", "secret1").session
    auth.sign_out(session.access_token)
    with pytest.raises(AuthenticationError):
        auth.get_user_from_token(session.access_token)


def test_google_url_defaults_to_app_origin(fake_db):
    response = auth.get_google_sign_in_url()
    assert response.provider == "google"
    assert f"redirect_to={settings.APP_ORIGIN}" in response.url


def test_google_url_with_caller_origin(fake_db):
    response = auth.get_google_sign_in_url("https://habits.example.com")
    assert response.url.endswith("redirect_to=https://habits.example.com")
