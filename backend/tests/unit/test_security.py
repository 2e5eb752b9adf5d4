"""Tests for admin password hashing."""

from storefront.core.security import hash_password, verify_password


def test_hash_round_trip():
    encoded = hash_password("admin123")

    assert encoded.startswith("pbkdf2_sha256$")
    assert "admin123" not in encoded
    assert verify_password("admin123", encoded)
    assert not verify_password("admin124", encoded)


def test_hashes_are_salted():
    assert hash_password("admin123") != hash_password("admin123")


def test_malformed_hash_is_rejected():
    assert not verify_password("admin123", "admin123")
    assert not verify_password("admin123", "md5$1$salt$abc")
