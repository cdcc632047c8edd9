"""Unit tests for the bcrypt password hasher."""

import pytest

from identity_srv.infrastructure.security.bcrypt_password_hasher import BcryptPasswordHasher


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    # Minimum cost keeps the suite fast
    return BcryptPasswordHasher(rounds=4)


def test_hash_verifies_and_is_salted(hasher: BcryptPasswordHasher):
    first = hasher.hash("s3cret!")
    second = hasher.hash("s3cret!")

    assert first != second
    assert first.startswith("$2")
    assert hasher.verify("s3cret!", first)
    assert not hasher.verify("wrong", first)


def test_verify_rejects_empty_or_malformed_hashes(hasher: BcryptPasswordHasher):
    assert hasher.verify("s3cret!", "") is False
    assert hasher.verify("s3cret!", "not-a-bcrypt-hash") is False
