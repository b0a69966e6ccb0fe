"""Unit tests for password hashing."""

from captiveportal.infrastructure.auth import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    needs_rehash,
    verify_password,
)


def test_hash_is_argon2id_and_salted():
    first = hash_password("S3cure-admin")
    second = hash_password("S3cure-admin")

    assert first.startswith("$argon2id$")
    assert first != second


def test_verify_password():
    hashed = hash_password("S3cure-admin")

    assert verify_password("S3cure-admin", hashed) is True
    assert verify_password("wrong", hashed) is False


def test_verify_against_malformed_hash():
    assert verify_password("anything", "not-a-hash") is False


def test_dummy_hash_never_matches_common_input():
    assert verify_password("", DUMMY_PASSWORD_HASH) is False
    assert verify_password("admin", DUMMY_PASSWORD_HASH) is False


def test_fresh_hash_does_not_need_rehash():
    assert needs_rehash(hash_password("S3cure-admin")) is False
