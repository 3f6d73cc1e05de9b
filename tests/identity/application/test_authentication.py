"""Application tests for emailpass login."""

import json

import pytest
from identity.auth.authentication import AuthenticationFailed, authenticate_emailpass, decode_token, issue_token
from identity.auth.passwords import hash_password
from identity.auth.registration import RegisterEmailpassIdentity
from protean import current_domain


@pytest.fixture()
def registered():
    return current_domain.process(
        RegisterEmailpassIdentity(
            email="login@example.com",
            password_hash=hash_password("right-password"),
            user_metadata=json.dumps({"first_name": "Lo"}),
        ),
        asynchronous=False,
    )


class TestAuthenticateEmailpass:
    def test_valid_credentials(self, registered):
        auth_identity = authenticate_emailpass("login@example.com", "right-password")

        assert str(auth_identity.id) == registered

    def test_wrong_password(self, registered):
        with pytest.raises(AuthenticationFailed):
            authenticate_emailpass("login@example.com", "wrong-password")

    def test_unknown_email(self):
        with pytest.raises(AuthenticationFailed):
            authenticate_emailpass("nobody@example.com", "right-password")

    def test_token_carries_linked_customer(self, registered):
        auth_identity = authenticate_emailpass("login@example.com", "right-password")

        claims = decode_token(issue_token(auth_identity))

        assert claims["auth_identity_id"] == registered
        assert claims["actor_id"] == auth_identity.app_metadata_map["customer_id"]
        assert claims["actor_id"]
