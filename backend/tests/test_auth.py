from datetime import timedelta

import pytest

from models.admin import Admin
from seed_admin import seed_admin
from services.auth import (
    InvalidTokenError,
    TokenExpiredError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def make_admin():
    return Admin(_id="507f1f77bcf86cd799439011", username="admin", password_hash=hash_password("pw"))


def test_password_hash_round_trip():
    password_hash = hash_password("correct horse")

    assert password_hash != "correct horse"
    assert verify_password("correct horse", password_hash)
    assert not verify_password("wrong horse", password_hash)


def test_verify_password_with_garbage_hash():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_token_claims():
    payload = decode_access_token(create_access_token(make_admin()))

    assert payload["admin_id"] == "507f1f77bcf86cd799439011"
    assert payload["username"] == "admin"


def test_expired_token():
    token = create_access_token(make_admin(), expires_in=timedelta(seconds=-1))

    with pytest.raises(TokenExpiredError):
        decode_access_token(token)


def test_tampered_token():
    header, _, signature = create_access_token(make_admin()).split(".")
    other = make_admin()
    other.username = "intruder"
    forged_payload = create_access_token(other).split(".")[1]

    with pytest.raises(InvalidTokenError):
        decode_access_token(f"{header}.{forged_payload}.{signature}")


def test_seed_admin_is_idempotent(mongo_db):
    assert seed_admin(mongo_db) is True
    assert seed_admin(mongo_db) is False

    stored = mongo_db["admins"].find_one({"username": "admin"})
    assert mongo_db["admins"].count_documents({}) == 1
    assert stored["display_name"] == "Administrator"
    assert verify_password("admin123", stored["password_hash"])
