from datetime import timedelta

import jwt
import pytest

from research_portfolio.auth.credentials import AdminCredentials
from research_portfolio.auth.security import (
    TOKEN_TTL,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from research_portfolio.config import Config
from research_portfolio.errors import AuthError
from research_portfolio.util.time import utcnow

SECRET = "unit-secret"


class TestTokenService:
    def test_round_trip_claims(self):
        token = create_access_token(secret=SECRET, username="admin", role="admin")
        claims = decode_access_token(token=token, secret=SECRET)
        assert claims["username"] == "admin"
        assert claims["role"] == "admin"

    def test_expiry_is_24_hours_after_issue(self):
        now = utcnow()
        token = create_access_token(secret=SECRET, username="admin", role="admin", now=now)
        claims = decode_access_token(token=token, secret=SECRET)
        assert TOKEN_TTL == timedelta(hours=24)
        assert claims["exp"] - claims["iat"] == 24 * 3600

    def test_valid_just_before_expiry(self):
        issued = utcnow() - TOKEN_TTL + timedelta(minutes=5)
        token = create_access_token(secret=SECRET, username="admin", role="admin", now=issued)
        assert decode_access_token(token=token, secret=SECRET)["username"] == "admin"

    def test_expired_token_rejected(self):
        issued = utcnow() - TOKEN_TTL - timedelta(minutes=5)
        token = create_access_token(secret=SECRET, username="admin", role="admin", now=issued)
        with pytest.raises(AuthError) as exc:
            decode_access_token(token=token, secret=SECRET)
        assert exc.value.detail == "token_expired"

    def test_tampered_signature_rejected(self):
        token = create_access_token(secret=SECRET, username="admin", role="admin")
        header, payload, signature = token.split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
        with pytest.raises(AuthError) as exc:
            decode_access_token(token=f"{header}.{payload}.{flipped}", secret=SECRET)
        assert exc.value.detail == "token_invalid"

    def test_wrong_secret_rejected(self):
        token = create_access_token(secret=SECRET, username="admin", role="admin")
        with pytest.raises(AuthError):
            decode_access_token(token=token, secret="other-secret")

    def test_garbage_rejected(self):
        with pytest.raises(AuthError) as exc:
            decode_access_token(token="not-a-jwt", secret=SECRET)
        assert exc.value.detail == "token_invalid"

    def test_other_algorithm_rejected(self):
        token = jwt.encode({"username": "admin", "role": "admin"}, SECRET, algorithm="HS512")
        with pytest.raises(AuthError):
            decode_access_token(token=token, secret=SECRET)

    def test_blank_secret_refused(self):
        with pytest.raises(ValueError):
            create_access_token(secret="", username="admin", role="admin")


class TestPasswords:
    def test_hash_and_verify(self):
        h = hash_password("s3cret")
        assert h != "s3cret"
        assert verify_password("s3cret", h)
        assert not verify_password("wrong", h)

    def test_verify_handles_junk_hash(self):
        assert not verify_password("s3cret", "not-a-hash")
        assert not verify_password("", "whatever")

    def test_blank_password_refused(self):
        with pytest.raises(ValueError):
            hash_password("")


class TestAdminCredentials:
    def test_plaintext_config_is_hashed(self):
        creds = AdminCredentials.from_config(Config(ADMIN_USERNAME="admin", ADMIN_PASSWORD="admin123",
                                                    ADMIN_PASSWORD_HASH=None))
        assert creds.password_hash != "admin123"
        identity = creds.authenticate("admin", "admin123")
        assert identity.username == "admin"
        assert identity.role == "admin"

    def test_hash_from_config_wins(self):
        creds = AdminCredentials.from_config(
            Config(ADMIN_USERNAME="root", ADMIN_PASSWORD="ignored", ADMIN_PASSWORD_HASH=hash_password("hunter2"))
        )
        assert creds.authenticate("root", "hunter2").username == "root"
        with pytest.raises(AuthError):
            creds.authenticate("root", "ignored")

    @pytest.mark.parametrize("username,password", [
        ("admin", "wrong"),
        ("Admin", "admin123"),
        ("someone", "admin123"),
        ("admin", ""),
    ])
    def test_mismatch_is_invalid_credentials(self, username, password):
        creds = AdminCredentials.from_config(Config(ADMIN_USERNAME="admin", ADMIN_PASSWORD="admin123",
                                                    ADMIN_PASSWORD_HASH=None))
        with pytest.raises(AuthError) as exc:
            creds.authenticate(username, password)
        assert exc.value.detail == "invalid_credentials"
        assert exc.value.status_code == 401
