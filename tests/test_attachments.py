import pytest

from teambridge.attachments import (
    ensure_file_extension,
    extension_for_content_type,
    is_audio_content_type,
    is_downloadable_attachment,
    is_image_content_type,
    sanitize_filename,
)
from teambridge.types import Attachment

JPEG_MAGIC = bytes([0xFF, 0xD8, 0xFF, 0xE0, 0x00, 0x10]) + b"JFIF\x00"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


@pytest.mark.parametrize(
    "content_type, expected",
    [
        ("image/png", ".png"),
        ("image/jpeg", ".jpg"),
        ("image/jpg", ".jpg"),
        ("audio/mpeg", ".mp3"),
        ("audio/ogg", ".ogg"),
        ("application/pdf", ".pdf"),
        ("text/plain; charset=utf-8", ".txt"),
        ("IMAGE/PNG", ".png"),
        ("text/csv", ".csv"),
        ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", ".docx"),
        ("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", ".xlsx"),
        ("application/vnd.openxmlformats-officedocument.presentationml.presentation", ".pptx"),
        ("application/msword", ".doc"),
        ("application/vnd.ms-excel", ".xls"),
        ("application/vnd.ms-powerpoint", ".ppt"),
        ("", ""),
        ("application/x-made-up", ""),
    ],
)
def test_extension_for_content_type(content_type, expected):
    assert extension_for_content_type(content_type) == expected


@pytest.mark.parametrize(
    "attachment, expected",
    [
        (Attachment(content_type="image/png", content_url="https://example.com/a.png"), True),
        (Attachment(content_type="audio/ogg", content_url="https://example.com/a.ogg"), True),
        (Attachment(content_type="application/pdf", content_url="https://example.com/a.pdf"), True),
        (Attachment(content_type="image/png", content_url=""), False),
        (Attachment(content_type="text/html", content="<div>...</div>"), False),
        (Attachment(content_type="application/vnd.microsoft.card.adaptive", content={}), False),
        (Attachment(content_type="application/vnd.microsoft.card.thumbnail", content={}), False),
        (Attachment(content_type="image/png", content_url="file:///etc/passwd"), False),
    ],
)
def test_is_downloadable_attachment(attachment, expected):
    assert is_downloadable_attachment(attachment) is expected


@pytest.mark.parametrize(
    "content_type, image, audio",
    [
        ("image/png", True, False),
        ("audio/ogg", False, True),
        ("application/ogg", False, True),
        ("video/mp4", False, False),
        ("", False, False),
    ],
)
def test_content_type_classification(content_type, image, audio):
    assert is_image_content_type(content_type) is image
    assert is_audio_content_type(content_type) is audio


def test_ensure_extension_keeps_existing(tmp_path):
    path = tmp_path / "photo.jpg"
    path.write_bytes(JPEG_MAGIC)
    assert ensure_file_extension(str(path), "image/jpeg") == str(path)
    assert path.exists()


def test_ensure_extension_uses_hint(tmp_path):
    path = tmp_path / "no_ext_with_hint"
    path.write_bytes(JPEG_MAGIC)
    result = ensure_file_extension(str(path), "image/jpeg")
    assert result.endswith(".jpg")
    assert (tmp_path / "no_ext_with_hint.jpg").read_bytes() == JPEG_MAGIC
    assert not path.exists()


def test_ensure_extension_sniffs_when_hint_empty(tmp_path):
    path = tmp_path / "no_ext_no_hint"
    path.write_bytes(PNG_MAGIC)
    assert ensure_file_extension(str(path), "").endswith(".png")


def test_ensure_extension_sniffs_when_hint_unknown(tmp_path):
    path = tmp_path / "no_ext_bad_hint"
    path.write_bytes(JPEG_MAGIC)
    assert ensure_file_extension(str(path), "application/x-made-up").endswith(".jpg")


def test_ensure_extension_unknown_binary_gets_some_extension(tmp_path):
    path = tmp_path / "totally_unknown_blob"
    path.write_bytes(bytes([0x00, 0x01, 0x02, 0x03, 0x00, 0x00, 0xAB, 0xCD]))
    result = ensure_file_extension(str(path), "")
    name = result.rsplit("/", 1)[-1]
    assert name.startswith("totally_unknown_blob.")
    assert len(name) > len("totally_unknown_blob.")


def test_ensure_extension_plain_text_is_txt(tmp_path):
    path = tmp_path / "notes"
    path.write_bytes(b"hello world\n")
    assert ensure_file_extension(str(path), "").endswith(".txt")


def test_ensure_extension_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ensure_file_extension(str(tmp_path / "absent"), "")


@pytest.mark.parametrize(
    "name, content_type, expected",
    [
        ("photo.png", "image/png", "photo.png"),
        ("../../etc/passwd", "", "passwd"),
        ("my photo (1).png", "image/png", "my_photo__1_.png"),
        ("", "image/png", "attachment.png"),
        ("", "", "attachment"),
        ("/", "application/pdf", "attachment.pdf"),
        ("dir/", "", "dir"),
    ],
)
def test_sanitize_filename(name, content_type, expected):
    assert sanitize_filename(name, content_type) == expected