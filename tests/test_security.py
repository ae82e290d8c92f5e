"""
Tests for JWT handling and the admin gate.
"""

import asyncio
from datetime import timedelta

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError

from app.core.deps import get_admin_user, get_current_user_claims
from app.core.security import create_access_token, decode_token


def _bearer(token):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestTokens:
    """Tests for token encoding"""

    def test_roundtrip_keeps_claims(self):
        payload = decode_token(create_access_token({"sub": "admin", "is_admin": True}))

        assert payload["sub"] == "admin"
        assert payload["is_admin"] is True
        assert "exp" in payload

    def test_expired_token(self):
        token = create_access_token({"sub": "admin"}, expires_delta=timedelta(seconds=-10))

        with pytest.raises(JWTError):
            decode_token(token)

    def test_tampered_token(self):
        token = create_access_token({"sub": "admin", "is_admin": False})

        with pytest.raises(JWTError):
            decode_token(token[:-2] + ("aa" if token[-2:] != "aa" else "bb"))


class TestAdminGate:
    """Tests for the authorization dependencies"""

    def test_claims_without_credentials(self):
        assert asyncio.run(get_current_user_claims(None)) is None

    def test_claims_without_subject(self):
        token = create_access_token({"is_admin": True})
        assert asyncio.run(get_current_user_claims(_bearer(token))) is None

    def test_admin_allowed(self):
        claims = {"sub": "admin", "is_admin": True}
        assert asyncio.run(get_admin_user(claims)) == claims

    @pytest.mark.parametrize("claims", [None, {"sub": "u1"}, {"sub": "u1", "is_admin": False}, {"sub": "u1", "is_admin": "true"}])
    def test_non_admin_forbidden(self, claims):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(get_admin_user(claims))

        assert exc_info.value.status_code == 403
