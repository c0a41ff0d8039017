"""
Unit tests for auth request schemas.
"""

import pytest
from pydantic import ValidationError

from models.auth import LoginRequest, RegisterRequest, ResetPasswordRequest

EMAIL = "alice@example.com"


class TestPasswordLength:
    """Passwords are limited by their UTF-8 size, not their length."""

    def test_multibyte_within_limit(self):
        # 36 two-byte characters: exactly 72 bytes
        request = RegisterRequest(username="alice", password="é" * 36, email=EMAIL, code="123456")
        assert request.password == "é" * 36

    def test_register_over_limit(self):
        with pytest.raises(ValidationError):
            RegisterRequest(username="alice", password="é" * 37, email=EMAIL, code="123456")

    def test_login_over_limit(self):
        with pytest.raises(ValidationError):
            LoginRequest(identifier="alice", password="é" * 72)

    def test_reset_over_limit(self):
        with pytest.raises(ValidationError):
            ResetPasswordRequest(email=EMAIL, code="123456", new_password="é" * 72)


class TestWhitespace:
    """Passwords keep their whitespace; other fields are trimmed."""

    def test_register(self):
        request = RegisterRequest(username=" alice ", password=" secret123 ", email=f" {EMAIL} ", code=" 123456 ")

        assert request.username == "alice"
        assert request.password == " secret123 "
        assert request.email == EMAIL
        assert request.code == "123456"

    def test_login(self):
        request = LoginRequest(identifier="  alice ", password="secret123 ")

        assert request.identifier == "alice"
        assert request.password == "secret123 "

    def test_reset(self):
        request = ResetPasswordRequest(email=EMAIL, code="123456", new_password="\tbrand-new")
        assert request.new_password == "\tbrand-new"
