"""Tests for password hashing and bearer tokens."""

import pytest
from identity.auth.auth_identity import AuthIdentity
from identity.auth.authentication import AuthenticationFailed, decode_token, issue_token
from identity.auth.passwords import hash_password, verify_password
from jose import jwt


class TestPasswords:
    def test_hash_and_verify(self):
        password_hash = hash_password("correct-horse")

        assert password_hash != "correct-horse"
        assert verify_password("correct-horse", password_hash)
        assert not verify_password("wrong-horse", password_hash)

    def test_missing_or_malformed_hash_never_verifies(self):
        assert not verify_password("anything", None)
        assert not verify_password("anything", "")
        assert not verify_password("anything", "not-a-bcrypt-hash")

    def test_long_passwords_are_cut_consistently(self):
        password = "x" * 100
        assert verify_password(password, hash_password(password))


class TestTokens:
    def _identity(self, app_metadata='{"customer_id": "cust_1"}'):
        return AuthIdentity(provider="emailpass", login_key="emailpass:t@example.com", app_metadata=app_metadata)

    def test_round_trip_claims(self):
        auth_identity = self._identity()

        claims = decode_token(issue_token(auth_identity))

        assert claims["actor_id"] == "cust_1"
        assert claims["actor_type"] == "customer"
        assert claims["auth_identity_id"] == str(auth_identity.id)
        assert claims["app_metadata"] == {"customer_id": "cust_1"}

    def test_unlinked_identity_has_empty_actor(self):
        claims = decode_token(issue_token(self._identity(app_metadata=None)))

        assert claims["actor_id"] == ""

    def test_expired_token_rejected(self):
        token = issue_token(self._identity(), expires_in=-10)

        with pytest.raises(AuthenticationFailed):
            decode_token(token)

    def test_foreign_signature_rejected(self):
        token = jwt.encode({"auth_identity_id": "x", "actor_type": "customer"}, "other-secret", algorithm="HS256")

        with pytest.raises(AuthenticationFailed):
            decode_token(token)

    def test_jwt_secret_from_environment(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "rotated-secret")
        token = issue_token(self._identity())

        monkeypatch.setenv("JWT_SECRET", "another-secret")
        with pytest.raises(AuthenticationFailed):
            decode_token(token)
