from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True, slots=True)
class StoredMedia:
    """
    Location of an object accepted by the media store.

    :param url: Public URL of the stored object.
    :type url: str
    :param key: Object key inside the bucket.
    :type key: str
    """

    url: str
    key: str


class MediaStore(Protocol):
    """Port for the external media host.

    ``store`` returns ``None`` when the upload did not succeed; callers decide
    whether that is fatal. The local file is never removed by the store.
    """

    def store(self, local_path: str) -> StoredMedia | None: ...


class InMemoryMediaStore(MediaStore):
    """Media store double recording every upload attempt."""

    def __init__(self, *, base_url: str = "https://media.test/youtubebackend") -> None:
        self.base_url = base_url.rstrip("/")
        self.calls: list[str] = []
        self.objects: dict[str, StoredMedia] = {}
        self.fail_all = False
        self.fail_names: set[str] = set()

    def store(self, local_path: str) -> StoredMedia | None:
        self.calls.append(local_path)
        name = Path(local_path).name
        if self.fail_all or name in self.fail_names or not Path(local_path).is_file():
            return None
        key = f"{len(self.calls)}-{name}"
        media = StoredMedia(url=f"{self.base_url}/{key}", key=key)
        self.objects[key] = media
        return media
