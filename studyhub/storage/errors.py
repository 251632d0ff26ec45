"""Storage failure taxonomy.

The router decides what to do with each class: configuration and transient
errors make an auto-selected backend fall through to the next one, while
``IOFatalError`` and ``ObjectExistsError`` are always propagated unchanged.
"""


class StorageError(Exception):
    """Base class for every failure raised by a storage backend."""


class StorageConfigError(StorageError):
    """Credentials or endpoint missing/invalid, or a pinned backend failed."""


class TransientBackendError(StorageError):
    """Network failure, timeout or an unexpected remote response."""


class NotFoundOnDelete(StorageError):
    """The object to delete does not exist. Callers treat this as success."""


class IOFatalError(StorageError):
    """Local disk failure (disk full, permission denied). Never retried."""


class ObjectExistsError(StorageError):
    """An explicitly named key is already taken. Backends never overwrite."""
