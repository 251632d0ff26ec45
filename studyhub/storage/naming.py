import re

from ulid import ULID

DEFAULT_CATEGORY = "uploads"
DEFAULT_CONTENT_TYPE = "application/pdf"

# Subtypes whose MIME name is not the conventional file extension.
EXTENSION_ALIASES = {
    "jpeg": "jpg",
    "pjpeg": "jpg",
    "quicktime": "mov",
    "x-msvideo": "avi",
    "x-matroska": "mkv",
    "mpeg": "mpg",
    "plain": "txt",
    "msword": "doc",
    "octet-stream": "bin",
}

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def extension_for(content_type: str | None) -> str:
    """Derive a file extension from a MIME type: ``image/svg+xml`` -> ``svg``."""
    if not content_type or "/" not in content_type:
        return "bin"
    subtype = content_type.split(";", 1)[0].split("/", 1)[1].strip().lower()
    subtype = subtype.split("+", 1)[0]
    subtype = EXTENSION_ALIASES.get(subtype, subtype)
    subtype = _UNSAFE_CHARS.sub("", subtype)
    return subtype or "bin"


def safe_segment(value: str) -> str:
    """Reduce a category or filename to a single path segment."""
    cleaned = _UNSAFE_CHARS.sub("-", value.strip().replace("/", "-").replace("\\", "-"))
    cleaned = cleaned.lstrip(".").strip("-")
    if not cleaned:
        raise ValueError(f"Invalid storage path segment: {value!r}")
    return cleaned


def generate_filename(content_type: str | None) -> str:
    return f"{str(ULID()).lower()}.{extension_for(content_type)}"


def build_key(category: str, filename: str) -> str:
    return f"{category}/{filename}"
