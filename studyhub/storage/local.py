import logging
from pathlib import Path
from urllib.parse import urlsplit

from studyhub.storage.base import StorageBackend
from studyhub.storage.errors import IOFatalError, ObjectExistsError, StorageError

logger = logging.getLogger(__name__)


class LocalStorage(StorageBackend):
    """Files under a directory, served by the app's static mount.

    Records keep the host-less ``<url path>/<key>`` form so that a changed
    BASE_URL applies to files uploaded before the change.
    """

    name = "disk"

    def __init__(self, base_dir: str, base_url: str) -> None:
        self.base_dir = Path(base_dir)
        self.base_url = base_url.rstrip("/")
        self.url_path = urlsplit(self.base_url).path.rstrip("/")
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFatalError(f"Cannot create storage root {self.base_dir}: {exc}") from exc

    def _path(self, key: str) -> Path:
        root = self.base_dir.resolve()
        path = (root / key).resolve()
        if not path.is_relative_to(root):
            raise StorageError(f"Key escapes storage root: {key}")
        return path

    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # "xb" refuses an existing key, matching the remote backends' no-overwrite uploads.
            with path.open("xb") as fh:
                fh.write(data)
        except FileExistsError as exc:
            raise ObjectExistsError(f"Object already exists: {key}") from exc
        except OSError as exc:
            raise IOFatalError(f"Cannot write {key}: {exc}") from exc
        logger.debug("Saved %s (%d bytes) to %s", key, len(data), path)
        return self.get_url(key)

    def get(self, key: str) -> bytes:
        path = self._path(key)
        logger.debug("Reading %s from %s", key, path)
        return path.read_bytes()

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise IOFatalError(f"Cannot delete {key}: {exc}") from exc
        logger.debug("Deleted %s", path)

    def get_url(self, key: str) -> str:
        return f"{self.base_url}/{key}"

    def reference_url(self, key: str, url: str) -> str:
        return f"{self.url_path}/{key}"

    def owns_url(self, url: str) -> bool:
        if url.startswith("/") or url.startswith(f"{self.base_url}/"):
            return True
        # Absolute URLs minted under an earlier BASE_URL keep the same path.
        return bool(self.url_path) and urlsplit(url).path.startswith(f"{self.url_path}/")
