"""
Unit tests for API request/response models.

Tests Pydantic model validation for the registration endpoint.
"""

import uuid

import pytest
from pydantic import ValidationError

from src.api.models import ErrorResponse, RegisterRequest, RegisterResponse


def make_request(**overrides: str) -> RegisterRequest:
    data = {"username": "user", "email": "user@example.com", "password": "User1234"}
    data.update(overrides)
    return RegisterRequest(**data)


class TestRegisterRequest:
    """Tests for RegisterRequest model."""

    def test_valid_register_request(self) -> None:
        request = make_request()
        assert request.username == "user"
        assert request.email == "user@example.com"
        assert request.password == "User1234"

    def test_email_domain_normalized(self) -> None:
        """EmailStr normalizes domain to lowercase."""
        request = make_request(email="USER@EXAMPLE.COM")
        assert request.email == "USER@example.com"

    def test_invalid_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            make_request(email="not-an-email")
        assert "email" in str(exc_info.value)

    @pytest.mark.parametrize("username", ["ab", "x" * 51])
    def test_username_length_bounds(self, username: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            make_request(username=username)
        assert "username" in str(exc_info.value)

    @pytest.mark.parametrize("username", ["abc", "x" * 50])
    def test_username_length_edges_accepted(self, username: str) -> None:
        assert make_request(username=username).username == username

    def test_password_minimum_length(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            make_request(password="Us3r")
        assert "password" in str(exc_info.value)

    def test_password_exactly_8_chars(self) -> None:
        assert make_request(password="Exactly8").password == "Exactly8"

    @pytest.mark.parametrize(
        ("password", "message"),
        [
            ("user1234", "uppercase"),
            ("USER1234", "lowercase"),
            ("UserUser", "number"),
        ],
    )
    def test_password_complexity(self, password: str, message: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            make_request(password=password)
        assert message in str(exc_info.value)

    def test_missing_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(email="user@example.com", password="User1234")  # type: ignore[call-arg]
        with pytest.raises(ValidationError):
            RegisterRequest(username="user", password="User1234")  # type: ignore[call-arg]
        with pytest.raises(ValidationError):
            RegisterRequest(username="user", email="user@example.com")  # type: ignore[call-arg]


class TestResponseModels:
    """Tests for response models."""

    def test_register_response(self) -> None:
        account_id = uuid.uuid4()
        response = RegisterResponse(
            message="Verification email sent",
            id=account_id,
            username="user",
            email="user@example.com",
        )
        assert response.model_dump(mode="json") == {
            "message": "Verification email sent",
            "id": str(account_id),
            "username": "user",
            "email": "user@example.com",
        }

    def test_error_response(self) -> None:
        assert ErrorResponse(detail="EMAIL_EXISTS").detail == "EMAIL_EXISTS"
