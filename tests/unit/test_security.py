"""Unit tests for security utilities.

Tests JWT token creation and validation and role claim extraction.
"""

from datetime import UTC, datetime, timedelta

from editorial_workflow.core.security import (
    create_access_token,
    decode_token,
    roles_from_claims,
)


class TestJWTAccessToken:
    """Unit tests for JWT access token functions."""

    def test_create_access_token_returns_string(self):
        """Test access token creation returns a string."""
        token = create_access_token("actor-1")

        assert isinstance(token, str)
        assert len(token) > 0

    def test_decode_valid_access_token(self):
        """Test decoding carries subject and roles."""
        token = create_access_token("actor-1", roles=["Writer", "Editor"])
        payload = decode_token(token)

        assert payload is not None
        assert payload["sub"] == "actor-1"
        assert payload["roles"] == ["Writer", "Editor"]
        assert "exp" in payload

    def test_create_access_token_with_custom_expiry(self):
        """Test access token creation with custom expiry."""
        expires_delta = timedelta(minutes=60)

        before = datetime.now(UTC)
        token = create_access_token("actor-1", expires_delta=expires_delta)
        after = datetime.now(UTC)

        payload = decode_token(token)
        assert payload is not None

        exp = datetime.fromtimestamp(payload["exp"], tz=UTC)
        assert before + expires_delta - timedelta(seconds=1) <= exp
        assert exp <= after + expires_delta + timedelta(seconds=1)

    def test_decode_invalid_token(self):
        """Test decoding invalid token returns None."""
        assert decode_token("invalid.token.here") is None

    def test_decode_expired_token(self):
        """Test decoding expired token returns None."""
        token = create_access_token("actor-1", expires_delta=timedelta(seconds=-10))

        assert decode_token(token) is None


class TestRoleClaims:
    """Unit tests for role claim extraction."""

    def test_list_claim(self):
        assert roles_from_claims({"roles": ["Writer", "Editor"]}) == {"Writer", "Editor"}

    def test_comma_separated_claim(self):
        """Test a CSV string claim is split and stripped."""
        assert roles_from_claims({"roles": "Writer, Editor,,"}) == {"Writer", "Editor"}

    def test_missing_claim_yields_no_roles(self):
        assert roles_from_claims({"sub": "actor-1"}) == set()
