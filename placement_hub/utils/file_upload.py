"""
File Upload Utility - store uploaded PDFs and profile pictures on disk.

Only the returned path is persisted in MongoDB; the files themselves are
served from /uploads by the app.

Supported kinds:
- pdf: content notes (.pdf)
- dp:  profile pictures (.png, .jpg, .jpeg, .webp)
"""

import os
import time
from typing import Tuple
from fastapi import UploadFile

from placement_hub.core.config import get_settings
from placement_hub.core.errors import ValidationError
from placement_hub.core.logging import get_logger

ALLOWED_EXTENSIONS = {
    "pdf": {".pdf"},
    "dp": {".png", ".jpg", ".jpeg", ".webp"},
}

logger = get_logger("uploads")


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


def _validate(file: UploadFile, content: bytes, kind: str) -> str:
    if kind not in ALLOWED_EXTENSIONS:
        raise ValueError(f"Unknown upload kind '{kind}'")
    if not file.filename:
        raise ValidationError("No filename provided")

    ext = get_file_extension(file.filename)
    allowed = ALLOWED_EXTENSIONS[kind]
    if ext not in allowed:
        raise ValidationError(
            f"Unsupported file type '{ext}'. Allowed: {', '.join(sorted(allowed))}"
        )

    settings = get_settings()
    if not content:
        raise ValidationError("Uploaded file is empty")
    if len(content) > settings.max_upload_size_bytes:
        raise ValidationError(f"File too large. Maximum size: {settings.max_upload_size_mb}MB")
    return ext


def build_target(kind: str, ext: str) -> Tuple[str, str]:
    """Return (absolute path on disk, public path stored in the document)."""
    directory = os.path.join(get_settings().upload_dir, kind)
    os.makedirs(directory, exist_ok=True)
    filename = f"{time.time_ns()}{ext}"
    return os.path.join(directory, filename), f"/uploads/{kind}/{filename}"


async def save_upload(file: UploadFile, kind: str) -> str:
    """
    Validate and write an upload.

    Returns:
        Public path, e.g. "/uploads/pdf/1718000000000000000.pdf"

    Raises:
        ValidationError on wrong extension, empty or oversized files
    """
    content = await file.read()
    ext = _validate(file, content, kind)
    disk_path, public_path = build_target(kind, ext)
    with open(disk_path, "wb") as fh:
        fh.write(content)
    logger.info("Stored %s upload %s (%d bytes)", kind, public_path, len(content))
    return public_path
