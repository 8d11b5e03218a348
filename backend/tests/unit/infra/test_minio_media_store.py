# tests/unit/infra/test_minio_media_store.py
from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from app.infra.minio import minio_media_store
from app.infra.minio.minio_media_store import MinioMediaStore, ensure_bucket


class FakeS3Error(Exception):
    def __init__(self, code: str) -> None:
        super().__init__(code)
        self.code = code


@pytest.fixture()
def fake_s3_error(monkeypatch):
    monkeypatch.setattr(minio_media_store, "S3Error", FakeS3Error)
    return FakeS3Error


@pytest.fixture()
def client() -> MagicMock:
    mock = MagicMock()
    mock.bucket_exists.return_value = True
    return mock


@pytest.fixture()
def store(client) -> MinioMediaStore:
    return MinioMediaStore(
        client=client,
        bucket="youtubebackend",
        public_base_url="https://cdn.test/youtubebackend",
        key_prefix="avatars",
    )


def test_store_uploads_and_returns_public_url(store, client, tmp_path):
    path = tmp_path / "me.png"
    path.write_bytes(b"png")

    media = store.store(str(path))

    assert media is not None
    assert media.key.startswith("avatars/")
    assert media.key.endswith("-me.png")
    assert media.url == f"https://cdn.test/youtubebackend/{media.key}"
    client.fput_object.assert_called_once_with(
        "youtubebackend", media.key, str(path), content_type="image/png"
    )
    assert path.exists()


def test_store_checks_bucket_once(store, client, tmp_path):
    path = tmp_path / "a.jpg"
    path.write_bytes(b"jpg")
    store.store(str(path))
    store.store(str(path))
    client.bucket_exists.assert_called_once_with("youtubebackend")


@pytest.mark.parametrize("local_path", ["", "/definitely/missing.png"])
def test_store_without_file_returns_none(store, client, local_path):
    assert store.store(local_path) is None
    client.fput_object.assert_not_called()


def test_store_returns_none_on_s3_error(store, client, tmp_path, fake_s3_error):
    path = tmp_path / "a.png"
    path.write_bytes(b"x")
    client.fput_object.side_effect = fake_s3_error("AccessDenied")
    assert store.store(str(path)) is None


def test_ensure_bucket_creates_missing(client):
    client.bucket_exists.return_value = False
    ensure_bucket(client, "b")
    client.make_bucket.assert_called_once_with("b")


def test_ensure_bucket_tolerates_race(client, fake_s3_error):
    client.bucket_exists.return_value = False
    client.make_bucket.side_effect = fake_s3_error("BucketAlreadyOwnedByYou")
    ensure_bucket(client, "b")


def test_ensure_bucket_propagates_other_errors(client, fake_s3_error):
    client.bucket_exists.return_value = False
    client.make_bucket.side_effect = fake_s3_error("AccessDenied")
    with pytest.raises(fake_s3_error):
        ensure_bucket(client, "b")


def test_from_config_builds_default_public_url(monkeypatch):
    built = {}

    def fake_client(endpoint, access_key, secret_key, secure):
        built.update(endpoint=endpoint, secure=secure)
        return MagicMock()

    monkeypatch.setattr(minio_media_store, "get_minio_client", fake_client)

    store = MinioMediaStore.from_config(
        {
            "MINIO_ENDPOINT": "minio:9000",
            "MINIO_BUCKET": "vids",
            "MINIO_SECURE": False,
            "MEDIA_KEY_PREFIX": "/uploads/",
        }
    )

    assert built == {"endpoint": "minio:9000", "secure": False}
    assert store.public_base_url == "http://minio:9000/vids"
    assert store.key_prefix == "uploads"
