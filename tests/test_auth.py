"""Tests for the stateless admin session tokens."""

import pytest

from conftest import ADMIN_CODE, T0
from core.exceptions import InvalidCredentialsError
from web.auth import AdminSettings, SessionAuthenticator, is_admin_path


@pytest.fixture
def settings():
    return AdminSettings(code=ADMIN_CODE, secret="test-secret", ttl_hours=72)


@pytest.fixture
def authenticator(settings, clock):
    return SessionAuthenticator(settings, clock=clock)


def test_issued_token_carries_issue_time_and_hex_signature(authenticator):
    token = authenticator.issue_token(ADMIN_CODE)
    issued_at, signature = token.split(".")
    assert int(issued_at) == T0
    assert len(signature) == 64
    int(signature, 16)


def test_fresh_token_verifies(authenticator):
    assert authenticator.verify_token(authenticator.issue_token(ADMIN_CODE)) is True


@pytest.mark.parametrize("code", ["000000", "", "6543210", " 654321", None, 654321])
def test_wrong_code_is_rejected(authenticator, code):
    with pytest.raises(InvalidCredentialsError):
        authenticator.issue_token(code)


def test_token_valid_just_before_ttl_and_invalid_just_after(authenticator, clock):
    token = authenticator.issue_token(ADMIN_CODE)

    clock.advance(hours=71, minutes=59)
    assert authenticator.verify_token(token) is True

    clock.advance(minutes=2)
    assert authenticator.verify_token(token) is False


def test_ttl_boundary_is_inclusive(authenticator, clock):
    token = authenticator.issue_token(ADMIN_CODE)
    clock.advance(hours=72)
    assert authenticator.verify_token(token) is True
    clock.advance(ms=1)
    assert authenticator.verify_token(token) is False


def test_any_mutated_signature_character_fails(authenticator):
    token = authenticator.issue_token(ADMIN_CODE)
    issued_at, signature = token.split(".")

    for index, char in enumerate(signature):
        replacement = "0" if char != "0" else "1"
        forged = signature[:index] + replacement + signature[index + 1:]
        assert authenticator.verify_token(f"{issued_at}.{forged}") is False


def test_changing_issue_time_invalidates_signature(authenticator, clock):
    token = authenticator.issue_token(ADMIN_CODE)
    issued_at, signature = token.split(".")
    assert authenticator.verify_token(f"{int(issued_at) + 1}.{signature}") is False


def test_token_from_other_secret_or_code_fails(settings, clock, authenticator):
    other_secret = SessionAuthenticator(
        AdminSettings(code=ADMIN_CODE, secret="another-secret"), clock=clock
    )
    other_code = SessionAuthenticator(
        AdminSettings(code="111111", secret="test-secret"), clock=clock
    )
    assert authenticator.verify_token(other_secret.issue_token(ADMIN_CODE)) is False
    assert authenticator.verify_token(other_code.issue_token("111111")) is False


@pytest.mark.parametrize(
    "token",
    [
        None,
        "",
        "garbage",
        f"{T0}",
        f"{T0}.",
        ".abcdef",
        "0.abcdef",
        "-5.abcdef",
        "1e12.abcdef",
        f"{T0}.sígnature",
        f"{T0}.{'é' * 64}",
        12345,
    ],
)
def test_malformed_tokens_fail_closed(authenticator, token):
    assert authenticator.verify_token(token) is False


def test_issue_time_must_use_ascii_digits(authenticator):
    issued_at, signature = authenticator.issue_token(ADMIN_CODE).split(".")
    arabic_indic = issued_at.translate(str.maketrans("0123456789", "٠١٢٣٤٥٦٧٨٩"))
    assert int(arabic_indic) == int(issued_at)
    assert authenticator.verify_token(f"{arabic_indic}.{signature}") is False


def test_rotating_admin_code_invalidates_outstanding_tokens(clock):
    old = SessionAuthenticator(AdminSettings(code="111111", secret="s"), clock=clock)
    new = SessionAuthenticator(AdminSettings(code="222222", secret="s"), clock=clock)
    assert new.verify_token(old.issue_token("111111")) is False


def test_settings_from_config_marks_cookie_secure_only_in_production(app_config):
    from dataclasses import replace

    assert AdminSettings.from_config(app_config).secure_cookie is False
    production = replace(app_config, environment="production")
    settings = AdminSettings.from_config(production)
    assert settings.secure_cookie is True
    assert settings.ttl_seconds == 72 * 3600


@pytest.mark.parametrize(
    "path, expected",
    [("/admin", True), ("/admin/", True), ("/admin/app.js", True), ("/administrator", False), ("/api/config", False)],
)
def test_admin_path_detection(path, expected):
    assert is_admin_path(path) is expected
