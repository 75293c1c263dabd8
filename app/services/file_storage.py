"""Stores a copy of every uploaded spreadsheet on disk.

Files land in ``UPLOADS_DIR/{year}/{month}/{username}/{uuid}_{name}`` so
uploads never overwrite each other and can be traced back to the import
history row that references them.
"""

from __future__ import annotations

import logging
import re
import uuid
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

_UNSAFE_CHARS_RE = re.compile(r"[^\w.\-]")


def sanitize_filename(filename: str) -> str:
    """Replace spaces with underscores and drop filesystem-unsafe characters."""
    return _UNSAFE_CHARS_RE.sub("", filename.replace(" ", "_"))


def save_upload(
    raw_bytes: bytes,
    filename: str,
    uploads_dir: Path,
    username: str = "anonimo",
    now: datetime | None = None,
) -> Path:
    """Write *raw_bytes* under a date- and user-partitioned directory.

    Args:
        raw_bytes: File contents.
        filename: Name supplied by the uploader.
        uploads_dir: Root upload directory (``Settings.UPLOADS_DIR``).
        username: Uploader, used as a sub-folder.
        now: Clock override for tests.

    Returns:
        Absolute path of the stored file.

    Raises:
        OSError: When the directory or file cannot be written.
    """
    stamp = now or datetime.now()
    user_dir = sanitize_filename(username) or "anonimo"
    dest_dir = uploads_dir / str(stamp.year) / f"{stamp.month:02d}" / user_dir
    dest_dir.mkdir(parents=True, exist_ok=True)

    dest_path = dest_dir / f"{uuid.uuid4().hex}_{sanitize_filename(filename) or 'arquivo.xlsx'}"
    dest_path.write_bytes(raw_bytes)
    logger.debug("Stored upload %s (%d bytes)", dest_path, len(raw_bytes))
    return dest_path


def relative_upload_path(full_path: Path, uploads_dir: Path) -> str:
    """Forward-slash path of *full_path* relative to *uploads_dir*."""
    return full_path.relative_to(uploads_dir).as_posix()
