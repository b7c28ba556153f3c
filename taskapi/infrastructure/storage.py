# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Attachment files on the local filesystem."""

from __future__ import annotations

import os
import secrets
import time
from pathlib import Path

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from taskapi.domain.tasks.repositories import AttachmentStorage
from taskapi.shared.logging import logger


class LocalAttachmentStorage(AttachmentStorage):
    """Stores uploads flat under the configured root.

    Stored paths are ``<root>/<name>`` strings; every path handed back in is
    resolved and must stay inside the root.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, path: str) -> Path:
        file_path = Path(path)
        if not file_path.is_absolute() and not file_path.resolve().is_relative_to(
            self._root.resolve()
        ):
            file_path = self._root / file_path.name
        file_path = file_path.resolve()
        if not file_path.is_relative_to(self._root.resolve()):
            msg = "Attempted directory traversal outside storage root"
            raise ValueError(msg)
        return file_path

    def save(self, upload: FileStorage, field_name: str = "attachment") -> str:
        original = secure_filename(upload.filename or "")
        _, ext = os.path.splitext(original)
        name = f"{field_name}-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext.lower()}"
        target = self._root / name
        upload.save(target)
        logger.debug(f"storage: saved path={target} original={original!r}")
        return str(target)

    def exists(self, path: str) -> bool:
        return self.resolve(path).is_file()

    def delete(self, path: str) -> None:
        file_path = self.resolve(path)
        file_path.unlink(missing_ok=True)
        logger.debug(f"storage: deleted path={file_path}")


__all__ = ["LocalAttachmentStorage"]
