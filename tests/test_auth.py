import uuid
from datetime import timedelta

import pytest
from jose import jwt

from adminpanel.auth import (
    RESET_TOKEN_TYPE,
    authenticate,
    compare_passwords,
    create_access_token,
    create_password_reset_token,
    decode_token,
    hash_password,
    verify_password,
)
from adminpanel.exceptions import AuthenticationError


@pytest.mark.parametrize("password", ["secret", "p@ssw0rd with spaces", "ünïcødé-密码"])
def test_hash_is_not_plaintext_and_verifies(password):
    hashed = hash_password(password)

    assert hashed != password
    assert verify_password(password, hashed)
    assert compare_passwords(password, hashed)
    assert not verify_password(password + "x", hashed)


def test_same_password_hashes_differ_but_both_verify():
    first = hash_password("secret")
    second = hash_password("secret")

    assert first != second
    assert verify_password("secret", first)
    assert verify_password("secret", second)


def test_long_password_is_truncated_consistently():
    password = "a" * 100
    hashed = hash_password(password)

    assert verify_password(password, hashed)


def test_verify_password_rejects_garbage_hash():
    assert not verify_password("secret", "not-a-hash")
    assert not verify_password("secret", "")


def test_access_token_round_trip():
    user_id = uuid.uuid4()
    payload = decode_token(create_access_token(str(user_id)))

    assert payload["sub"] == str(user_id)
    assert payload["type"] == "access"
    assert payload["exp"] > payload["iat"]


def test_expired_token_is_rejected():
    token = create_access_token(str(uuid.uuid4()), expires_delta=timedelta(seconds=-1))

    with pytest.raises(AuthenticationError):
        decode_token(token)


def test_reset_token_is_not_an_access_token():
    token = create_password_reset_token("alice@example.com")

    with pytest.raises(AuthenticationError):
        decode_token(token)
    assert decode_token(token, expected_type=RESET_TOKEN_TYPE)["sub"] == "alice@example.com"


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode({"sub": str(uuid.uuid4()), "type": "access"}, "another-key", algorithm="HS256")

    with pytest.raises(AuthenticationError):
        decode_token(token)


def test_authenticate(db, user, make_user, password):
    assert authenticate(db, "alice@example.com", password).id == user.id

    with pytest.raises(AuthenticationError):
        authenticate(db, "alice@example.com", "wrong-password")
    with pytest.raises(AuthenticationError):
        authenticate(db, "nobody@example.com", password)

    make_user(email="inactive@example.com", is_active=False)
    with pytest.raises(AuthenticationError, match="Inactive"):
        authenticate(db, "inactive@example.com", password)


def test_login_returns_bearer_token(client, user, password):
    response = client.post(
        "/api/v1/login/access-token",
        json={"email": "alice@example.com", "password": password},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert decode_token(body["access_token"])["sub"] == str(user.id)


def test_login_with_bad_password_is_unauthorized(client, user):
    response = client.post(
        "/api/v1/login/access-token",
        json={"email": "alice@example.com", "password": "wrong-password"},
    )

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_test_token_returns_current_user(client, user, auth_headers):
    response = client.post("/api/v1/login/test-token", headers=auth_headers(user))

    assert response.status_code == 200
    assert response.json()["email"] == "alice@example.com"
    assert "password_hash" not in response.json()


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer not-a-jwt"},
        {"Authorization": "Basic YWxpY2U6c2VjcmV0"},
        {"Authorization": f"Bearer {create_access_token('not-a-uuid')}"},
        {"Authorization": f"Bearer {create_access_token(str(uuid.uuid4()))}"},
        {"Authorization": f"Bearer {create_access_token(str(uuid.uuid4()), timedelta(seconds=-1))}"},
    ],
    ids=["missing", "malformed", "wrong-scheme", "bad-subject", "unknown-user", "expired"],
)
def test_protected_route_rejects_bad_credentials(client, headers):
    response = client.get("/api/v1/users/me", headers=headers)

    assert response.status_code == 401


def test_inactive_user_token_is_rejected(client, make_user, auth_headers):
    inactive = make_user(is_active=False)

    response = client.get("/api/v1/users/me", headers=auth_headers(inactive))

    assert response.status_code == 401


def test_health_is_public(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"message": "Healthy"}


def test_www_host_is_redirected(client):
    response = client.get("/health", headers={"host": "www.example.com"}, follow_redirects=False)

    assert response.status_code == 301
    assert response.headers["location"] == "https://example.com/health"
