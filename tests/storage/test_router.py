import logging

import pytest

from studyhub.models.media import StorageReference
from studyhub.storage.base import StorageBackend
from studyhub.storage.errors import (
    IOFatalError,
    ObjectExistsError,
    StorageConfigError,
    StorageError,
    TransientBackendError,
)
from studyhub.storage.local import LocalStorage
from studyhub.storage.router import StorageRouter


class FakeRemote(StorageBackend):
    """In-memory backend that can be told to fail."""

    def __init__(self, name: str, prefix: str, error: Exception | None = None) -> None:
        self.name = name
        self.prefix = prefix
        self.error = error
        self.delete_error: Exception | None = None
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []

    def save(self, key, data, content_type="application/pdf"):
        if self.error is not None:
            raise self.error
        self.objects[key] = data
        return self.get_url(key)

    def delete(self, key):
        self.deleted.append(key)
        if self.delete_error is not None:
            raise self.delete_error
        self.objects.pop(key, None)

    def get_url(self, key):
        return f"{self.prefix}/{key}"

    def owns_url(self, url):
        return url.startswith(f"{self.prefix}/")


@pytest.fixture()
def bucket():
    return FakeRemote("remote-bucket", "https://bucket.example/public")


@pytest.fixture()
def signed():
    return FakeRemote("remote-signed", "https://signed.example/b")


class TestUpload:
    def test_disk_upload_writes_bytes_and_returns_reference(self, disk):
        router = StorageRouter([disk], disk=disk)
        payload = b"\x89PNG" + b"x" * 10_236

        stored = router.upload(payload, content_type="image/png", category="courses")

        assert stored.id.startswith("courses/")
        assert stored.id.endswith(".png")
        assert stored.category == "courses"
        assert stored.backend == "disk"
        assert stored.url == f"http://testserver/uploads/{stored.id}"
        assert disk.get(stored.id) == payload

    def test_defaults_to_pdf_in_uploads_category(self, disk):
        stored = StorageRouter([disk], disk=disk).upload(b"%PDF")
        assert stored.id.startswith("uploads/")
        assert stored.filename.endswith(".pdf")

    def test_explicit_filename_is_sanitized(self, disk):
        stored = StorageRouter([disk], disk=disk).upload(b"x", filename="../../etc/passwd", category="a/b")
        assert stored.id.startswith("a-b/")
        assert stored.id.count("/") == 1
        assert disk.exists(stored.id)

    def test_uses_first_backend_in_chain(self, bucket, signed, disk):
        router = StorageRouter([bucket, signed, disk], disk=disk)
        stored = router.upload(b"data", category="questions")

        assert stored.backend == "remote-bucket"
        assert stored.id in bucket.objects
        assert signed.objects == {}

    def test_auto_falls_back_through_chain(self, bucket, signed, disk, caplog):
        bucket.error = StorageConfigError("bad key")
        signed.error = TransientBackendError("timeout")
        router = StorageRouter([bucket, signed, disk], disk=disk)

        with caplog.at_level(logging.WARNING, logger="studyhub.storage.router"):
            stored = router.upload(b"data", category="questions")

        assert stored.backend == "disk"
        assert stored.url.startswith("http://testserver/uploads/questions/")
        assert disk.exists(stored.id)
        assert "remote-bucket" in caplog.text
        assert "remote-signed" in caplog.text

    def test_auto_stops_at_first_success(self, bucket, signed, disk):
        bucket.error = TransientBackendError("timeout")
        stored = StorageRouter([bucket, signed, disk], disk=disk).upload(b"data")

        assert stored.backend == "remote-signed"
        assert not disk.exists(stored.id)

    def test_pinned_failure_raises_config_error(self, bucket, disk):
        bucket.error = TransientBackendError("timeout")
        router = StorageRouter([bucket], disk=disk, pinned=True)

        with pytest.raises(StorageConfigError, match="pinned") as exc_info:
            router.upload(b"data")
        assert isinstance(exc_info.value.__cause__, TransientBackendError)

    def test_pinned_failure_never_touches_disk(self, bucket, disk, tmp_path):
        bucket.error = StorageConfigError("bad key")
        router = StorageRouter([bucket], disk=disk, pinned=True)

        with pytest.raises(StorageConfigError):
            router.upload(b"data", category="courses")
        assert not (tmp_path / "uploads" / "courses").exists()

    def test_io_fatal_is_not_swallowed(self, signed, disk):
        signed.error = IOFatalError("disk full")
        router = StorageRouter([signed, disk], disk=disk)

        with pytest.raises(IOFatalError):
            router.upload(b"data")

    def test_explicit_filename_collision_on_disk_is_refused(self, disk):
        router = StorageRouter([disk], disk=disk)
        router.upload(b"first", category="courses", filename="syllabus.pdf")

        with pytest.raises(ObjectExistsError):
            router.upload(b"second", category="courses", filename="syllabus.pdf")
        assert disk.get("courses/syllabus.pdf") == b"first"

    def test_remote_collision_does_not_fall_back(self, bucket, disk):
        bucket.error = ObjectExistsError("taken")
        router = StorageRouter([bucket, disk], disk=disk)

        with pytest.raises(ObjectExistsError):
            router.upload(b"data", category="courses", filename="syllabus.pdf")
        assert not disk.exists("courses/syllabus.pdf")

    def test_exhausted_chain_raises(self, bucket, signed):
        bucket.error = TransientBackendError("down")
        signed.error = TransientBackendError("down")
        router = StorageRouter([bucket, signed], disk=signed)

        with pytest.raises(StorageError, match="No storage backend"):
            router.upload(b"data")

    def test_empty_chain_is_config_error(self, disk):
        with pytest.raises(StorageConfigError):
            StorageRouter([], disk=disk)

    def test_pinned_requires_single_backend(self, bucket, disk):
        with pytest.raises(StorageConfigError):
            StorageRouter([bucket, disk], disk=disk, pinned=True)

    def test_select_backend_reports_chain_head(self, bucket, disk):
        assert StorageRouter([bucket, disk], disk=disk).select_backend() == "remote-bucket"
        assert StorageRouter([disk], disk=disk).select_backend() == "disk"


class TestDelete:
    def test_delete_removes_disk_file(self, disk):
        router = StorageRouter([disk], disk=disk)
        stored = router.upload(b"data", category="courses")

        router.delete(stored.to_reference())
        assert not disk.exists(stored.id)

    def test_delete_is_idempotent(self, disk):
        router = StorageRouter([disk], disk=disk)
        stored = router.upload(b"data", category="courses")

        router.delete(stored.to_reference())
        router.delete(stored.to_reference())

    @pytest.mark.parametrize("reference", [None, "", StorageReference()])
    def test_delete_empty_reference_is_noop(self, bucket, disk, reference):
        StorageRouter([bucket, disk], disk=disk).delete(reference)
        assert bucket.deleted == []

    def test_delete_routes_to_owning_backend(self, bucket, signed, disk):
        router = StorageRouter([bucket, signed, disk], disk=disk)
        reference = StorageReference(id="courses/a.png", url="https://signed.example/b/courses/a.png")

        router.delete(reference)
        assert signed.deleted == ["courses/a.png"]
        assert bucket.deleted == []

    def test_delete_by_id_only_tries_every_backend(self, bucket, signed, disk):
        router = StorageRouter([bucket, signed, disk], disk=disk)
        router.delete("courses/a.png")

        assert bucket.deleted == ["courses/a.png"]
        assert signed.deleted == ["courses/a.png"]

    def test_delete_failure_is_logged_not_raised(self, bucket, disk, caplog):
        bucket.delete_error = TransientBackendError("timeout")
        router = StorageRouter([bucket], disk=disk, pinned=True)
        reference = StorageReference(id="courses/a.png", url="https://bucket.example/public/courses/a.png")

        with caplog.at_level(logging.WARNING, logger="studyhub.storage.router"):
            router.delete(reference)
        assert "courses/a.png" in caplog.text

    def test_fallback_file_deleted_from_disk(self, bucket, disk):
        bucket.error = TransientBackendError("down")
        router = StorageRouter([bucket, disk], disk=disk)
        stored = router.upload(b"data", category="courses")

        router.delete(stored.to_reference())
        assert not disk.exists(stored.id)
        assert bucket.deleted == []


class TestResolveUrl:
    def test_empty_reference(self, disk):
        router = StorageRouter([disk], disk=disk)
        assert router.resolve_url(None) == ""
        assert router.resolve_url(StorageReference()) == ""

    def test_absolute_url_returned_unchanged(self, bucket, disk):
        router = StorageRouter([bucket, disk], disk=disk)
        reference = StorageReference(id="a.pdf", url="https://signed.example/b/a.pdf?sig=1")
        assert router.resolve_url(reference) == "https://signed.example/b/a.pdf?sig=1"

    def test_relative_url_rebuilt_from_disk_config(self, disk):
        router = StorageRouter([disk], disk=disk)
        reference = StorageReference(id="courses/a.png", url="/uploads/courses/a.png")
        assert router.resolve_url(reference) == "http://testserver/uploads/courses/a.png"

    def test_disk_reference_keeps_host_less_url(self, disk):
        stored = StorageRouter([disk], disk=disk).upload(b"data", category="courses")

        assert stored.url == f"http://testserver/uploads/{stored.id}"
        assert stored.to_reference().url == f"/uploads/{stored.id}"

    def test_changed_base_url_applies_to_earlier_uploads(self, tmp_path):
        old_disk = LocalStorage(str(tmp_path / "uploads"), "http://old-host/uploads")
        reference = StorageRouter([old_disk], disk=old_disk).upload(b"data", category="courses").to_reference()

        new_disk = LocalStorage(str(tmp_path / "uploads"), "http://new-host/uploads")
        resolved = StorageRouter([new_disk], disk=new_disk).resolve_url(reference)

        assert resolved == f"http://new-host/uploads/{reference.id}"
        assert new_disk.get(reference.id) == b"data"

    def test_absolute_disk_url_from_old_host_is_rebuilt(self, tmp_path):
        old_disk = LocalStorage(str(tmp_path / "uploads"), "http://old-host/uploads")
        stored = StorageRouter([old_disk], disk=old_disk).upload(b"data", category="courses")
        reference = StorageReference(id=stored.id, url=stored.url)

        new_disk = LocalStorage(str(tmp_path / "uploads"), "http://new-host/uploads")
        resolved = StorageRouter([new_disk], disk=new_disk).resolve_url(reference)

        assert resolved.startswith("http://new-host/")
        assert resolved == f"http://new-host/uploads/{stored.id}"

    def test_remote_url_not_rebuilt_by_disk(self, bucket, disk):
        router = StorageRouter([bucket, disk], disk=disk)
        reference = StorageReference(id="a.pdf", url="https://bucket.example/public/a.pdf")
        assert router.resolve_url(reference) == "https://bucket.example/public/a.pdf"

    def test_backends_includes_disk_once(self, bucket, disk, tmp_path):
        assert StorageRouter([bucket, disk], disk=disk).backends == [bucket, disk]
        other_disk = LocalStorage(str(tmp_path / "other"), "http://x/uploads")
        assert StorageRouter([bucket], disk=other_disk).backends == [bucket, other_disk]


class TestDiskScenario:
    def test_ten_kilobyte_jpeg(self, tmp_path):
        disk = LocalStorage(str(tmp_path / "x"), "http://h")
        router = StorageRouter([disk], disk=disk)
        payload = bytes(range(256)) * 40

        stored = router.upload(payload, content_type="image/jpeg", category="courses")

        token = stored.filename.removesuffix(".jpg")
        assert stored.id == f"courses/{token}.jpg"
        assert stored.url == f"http://h/courses/{token}.jpg"
        assert (tmp_path / "x" / "courses" / f"{token}.jpg").read_bytes() == payload

    def test_resolved_url_maps_back_to_same_bytes(self, disk):
        router = StorageRouter([disk], disk=disk)
        stored = router.upload(b"round trip", content_type="text/plain", category="notes")

        url = router.resolve_url(stored.to_reference())
        assert disk.get(url.removeprefix(f"{disk.base_url}/")) == b"round trip"

    def test_same_bytes_twice_yields_distinct_ids(self, disk):
        router = StorageRouter([disk], disk=disk)
        first = router.upload(b"same", category="courses")
        second = router.upload(b"same", category="courses")
        assert first.id != second.id
