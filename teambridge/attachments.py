"""Classification, naming and extension repair for downloaded attachments."""

from __future__ import annotations

import mimetypes
import os
import re

from .types import Attachment

_CURATED_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/bmp": ".bmp",
    "image/svg+xml": ".svg",
    "audio/mpeg": ".mp3",
    "audio/mp3": ".mp3",
    "audio/mp4": ".m4a",
    "audio/aac": ".m4a",
    "audio/ogg": ".ogg",
    "application/ogg": ".ogg",
    "audio/wav": ".wav",
    "audio/x-wav": ".wav",
    "audio/webm": ".webm",
    "audio/flac": ".flac",
    "video/mp4": ".mp4",
    "application/pdf": ".pdf",
    "application/zip": ".zip",
    "text/plain": ".txt",
    "text/csv": ".csv",
    "application/json": ".json",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": ".xlsx",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": ".pptx",
    "application/msword": ".doc",
    "application/vnd.ms-excel": ".xls",
    "application/vnd.ms-powerpoint": ".ppt",
}

_AUDIO_PREFIXES = ("audio/", "application/ogg")
_SNIFF_LENGTH = 512
_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.\-]", re.ASCII)
# Built-in MIME table only, so results do not depend on the host's mime.types.
_MIME_DB = mimetypes.MimeTypes()

# Bytes that mark content as binary rather than text.
_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)


def extension_for_content_type(content_type: str) -> str:
    """Return a file extension (with dot) for a MIME type, or "" when none is known."""
    content_type = content_type.split(";", 1)[0].strip().lower()
    if not content_type:
        return ""
    curated = _CURATED_EXTENSIONS.get(content_type)
    if curated:
        return curated
    extensions = sorted(_MIME_DB.guess_all_extensions(content_type, strict=False))
    return extensions[0] if extensions else ""


def is_image_content_type(content_type: str) -> bool:
    return content_type.startswith("image/")


def is_audio_content_type(content_type: str) -> bool:
    return content_type.startswith(_AUDIO_PREFIXES)


def is_downloadable_attachment(attachment: Attachment) -> bool:
    """Whether an attachment points at a real file over HTTP(S).

    Cards and the text/html rendering Teams adds to formatted messages carry
    no file and are excluded.
    """
    if attachment.content_type.startswith("application/vnd.microsoft.card."):
        return False
    if attachment.content_type == "text/html":
        return False
    url = attachment.content_url.strip()
    return url.startswith(("http://", "https://"))


def _extension(path: str) -> str:
    name = os.path.basename(path)
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def _sniff(head: bytes) -> str:
    if head.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if head.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if head.startswith((b"GIF87a", b"GIF89a")):
        return "image/gif"
    if head.startswith(b"BM"):
        return "image/bmp"
    if head.startswith(b"RIFF") and head[8:12] == b"WEBP":
        return "image/webp"
    if head.startswith(b"RIFF") and head[8:12] == b"WAVE":
        return "audio/wav"
    if head.startswith(b"%PDF-"):
        return "application/pdf"
    if head.startswith(b"PK\x03\x04"):
        return "application/zip"
    if head.startswith(b"OggS\x00"):
        return "application/ogg"
    if head.startswith(b"ID3"):
        return "audio/mpeg"
    if head.startswith(b"fLaC"):
        return "audio/flac"
    if head.startswith(b"\x1aE\xdf\xa3"):
        return "video/webm"
    if head[4:8] == b"ftyp":
        return "video/mp4"
    stripped = head.lstrip(b"\t\n\x0c\r ").lower()
    if stripped.startswith((b"<!doctype html", b"<html")):
        return "text/html; charset=utf-8"
    if any(byte in _BINARY_BYTES for byte in head):
        return "application/octet-stream"
    return "text/plain; charset=utf-8"


def ensure_file_extension(path: str, content_type_hint: str) -> str:
    """Give an extensionless file an extension, renaming it on disk.

    The extension comes from ``content_type_hint`` or, failing that, from the
    file's leading bytes. Returns the (possibly new) path; raises OSError when
    the file cannot be read or renamed.
    """
    path = os.fspath(path)
    if _extension(path):
        return path
    extension = extension_for_content_type(content_type_hint)
    if not extension:
        with open(path, "rb") as handle:
            head = handle.read(_SNIFF_LENGTH)
        if head:
            extension = extension_for_content_type(_sniff(head))
    if not extension:
        return path
    new_path = path + extension
    os.rename(path, new_path)
    return new_path


def _base_name(name: str) -> str:
    if not name:
        return "."
    trimmed = name.rstrip("/")
    if not trimmed:
        return "/"
    return trimmed.rsplit("/", 1)[-1]


def sanitize_filename(name: str, content_type: str) -> str:
    """Reduce an attachment name to a safe local file name."""
    filename = _base_name(name)
    if filename in ("", ".", "/"):
        filename = "attachment" + extension_for_content_type(content_type)
    return _UNSAFE_FILENAME_CHARS.sub("_", filename)