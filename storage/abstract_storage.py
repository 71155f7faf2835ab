"""Storage abstraction layer for uploaded files."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO

from werkzeug.datastructures import FileStorage


class AbstractStorage(ABC):
    """Interface for upload storage backends."""

    @abstractmethod
    def save(self, upload: FileStorage, field_name: str = "photo") -> str:
        """Persist an upload under a collision-free name and return that name."""

    @abstractmethod
    def exists(self, name: str) -> bool:
        """Return whether the given stored name exists."""

    @abstractmethod
    def open(self, name: str, mode: str = "rb") -> BinaryIO:
        """Open a stored file and return the file object."""

    @abstractmethod
    def delete(self, name: str) -> None:
        """Remove a stored file; a missing file is not an error."""
