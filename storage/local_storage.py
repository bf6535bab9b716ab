"""Local filesystem storage implementation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import IO, BinaryIO

from werkzeug.utils import secure_filename

from config import Config

from .abstract_storage import AbstractStorage


class LocalStorage(AbstractStorage):
    """Keep files under a folder of the configured upload directory."""

    def __init__(self, upload_dir: str | None = None, folder: str = ""):
        self.base_directory = Path(upload_dir or Config.UPLOAD_DIR)
        self.folder = secure_filename(folder) if folder else ""
        os.makedirs(self.base_directory / self.folder, exist_ok=True)

    def _resolve(self, path: str) -> Path:
        resolved = (self.base_directory / path).resolve()
        if not resolved.is_relative_to(self.base_directory.resolve()):
            raise ValueError("Path escapes the upload directory.")
        return resolved

    def save(self, file_obj: IO[bytes], filename: str) -> str:
        """Save a file and return the path relative to the upload directory."""

        safe_name = secure_filename(filename)
        if not safe_name:
            raise ValueError("Filename must contain at least one valid character.")

        destination = self.base_directory / self.folder / safe_name
        if hasattr(file_obj, "save"):
            file_obj.save(destination)  # type: ignore[arg-type]
        else:
            with open(destination, "wb") as output:
                output.write(file_obj.read())

        return destination.relative_to(self.base_directory).as_posix()

    def exists(self, path: str) -> bool:
        try:
            return self._resolve(path).is_file()
        except ValueError:
            return False

    def open(self, path: str, mode: str = "rb") -> BinaryIO:
        return open(self._resolve(path), mode)

    def delete(self, path: str) -> None:
        target = self._resolve(path)
        if target.exists():
            target.unlink()
