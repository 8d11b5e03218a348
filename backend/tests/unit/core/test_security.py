# tests/unit/core/test_security.py
from __future__ import annotations

import pytest
from app.core.security import (
    hash_password,
    hash_refresh_token,
    refresh_token_matches,
    verify_password,
)


def test_password_hash_round_trip():
    digest = hash_password("s3cret")
    assert digest != "s3cret"
    assert verify_password("s3cret", digest)
    assert not verify_password("S3cret", digest)


def test_empty_password_rejected():
    with pytest.raises(ValueError):
        hash_password("")


def test_refresh_digest_is_stable_sha256():
    digest = hash_refresh_token("token")
    assert digest == hash_refresh_token("token")
    assert len(digest) == 64
    assert digest != hash_refresh_token("token2")


def test_refresh_token_matches():
    stored = hash_refresh_token("abc")
    assert refresh_token_matches("abc", stored)
    assert not refresh_token_matches("abd", stored)
    assert not refresh_token_matches("abc", None)
