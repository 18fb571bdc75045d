"""Image storage port and the local filesystem adapter.

Menu photos are written through a ``StoragePort`` so the backing store (local
disk behind the app's static mount, or an object store) can be swapped
without touching the upload flow.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from friendhome.settings import custom_settings


class StoragePort(ABC):
    """Abstract interface for public object storage."""

    @abstractmethod
    def upload(self, path: str, data: bytes, content_type: str) -> None:
        """Store ``data`` under ``path``. Must not overwrite an existing object."""
        ...

    @abstractmethod
    def public_url(self, path: str) -> str: ...


class LocalFileStorage(StoragePort):
    """Stores objects as files below ``root``, served under ``base_url``."""

    def __init__(self, root, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def upload(self, path: str, data: bytes, content_type: str) -> None:  # noqa: ARG002
        target = self.root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        # "x" mode refuses to overwrite an existing object
        with open(target, "xb") as fh:
            fh.write(data)

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/{path}"


_storage: StoragePort | None = None


def get_storage() -> StoragePort:
    """Return the configured storage adapter (created from settings on first use)."""
    global _storage
    if _storage is None:
        settings = custom_settings()
        _storage = LocalFileStorage(settings["menu_image_dir"], settings["menu_image_base_url"])
    return _storage


def configure_storage(adapter: StoragePort) -> None:
    global _storage
    _storage = adapter


def reset_storage() -> None:
    """Forget the configured adapter (useful for testing)."""
    global _storage
    _storage = None
