"""Local filesystem storage implementation."""

from __future__ import annotations

import os
import random
import time
from pathlib import Path
from typing import BinaryIO

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from config import Config
from errors import ValidationError

from .abstract_storage import AbstractStorage


def build_unique_filename(original: str | None, field_name: str = "photo") -> str:
    """Return ``<field>-<epoch millis>-<random><ext>`` for an uploaded file."""

    suffix = Path(secure_filename(original or "")).suffix.lower()
    unique = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{field_name}-{unique}{suffix}"


def upload_size(upload: FileStorage) -> int:
    stream = upload.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


class LocalStorage(AbstractStorage):
    """Persist uploads to the local filesystem under the configured upload directory."""

    def __init__(self, upload_dir: str | None = None, max_size: int | None = None):
        self.base_directory = Path(upload_dir or Config.UPLOAD_DIR)
        self.max_size = max_size if max_size is not None else Config.MAX_UPLOAD_SIZE
        os.makedirs(self.base_directory, exist_ok=True)

    def save(self, upload: FileStorage, field_name: str = "photo") -> str:
        """Save an upload and return its stored name within the upload directory."""

        if not upload.filename or not upload.filename.strip():
            raise ValidationError("A file is required.")

        size = upload_size(upload)
        if size > self.max_size:
            raise ValidationError(
                "File exceeds the maximum upload size of {} bytes.".format(self.max_size)
            )

        name = build_unique_filename(upload.filename, field_name)
        destination = self.base_directory / name
        upload.save(destination)
        return name

    def exists(self, name: str) -> bool:
        """Return True if the given stored name exists within the upload directory."""

        return (self.base_directory / secure_filename(name)).is_file()

    def open(self, name: str, mode: str = "rb") -> BinaryIO:
        """Open a stored file using the provided mode."""

        return open(self.base_directory / secure_filename(name), mode)

    def delete(self, name: str) -> None:
        """Remove a stored file if it is still present."""

        (self.base_directory / secure_filename(name)).unlink(missing_ok=True)
