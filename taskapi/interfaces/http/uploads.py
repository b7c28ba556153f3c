# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Multipart attachment intake for task create/update requests."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from flask import request
from werkzeug.datastructures import FileStorage

from taskapi.application.services.attachments import discard_attachments
from taskapi.infrastructure.storage import LocalAttachmentStorage
from taskapi.shared.config import UploadConfig
from taskapi.shared.errors import ValidationError
from taskapi.shared.logging import logger

UPLOAD_FIELDS = ("attachments", "file")


@dataclass(slots=True, frozen=True)
class StoredUpload:
    path: str
    original_name: str
    mime_type: str
    size: int


def _stream_size(upload: FileStorage) -> int:
    stream = upload.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


class UploadPolicy:
    def __init__(self, config: UploadConfig, storage: LocalAttachmentStorage) -> None:
        self._config = config
        self._storage = storage

    @property
    def max_request_size(self) -> int:
        # Form fields and multipart framing on top of the files themselves.
        return self._config.max_file_size * self._config.max_files + 1024 * 1024

    def collect(self) -> list[tuple[str, FileStorage]]:
        files: list[tuple[str, FileStorage]] = []
        for field_name in UPLOAD_FIELDS:
            for upload in request.files.getlist(field_name):
                if upload and upload.filename:
                    files.append((field_name, upload))
        return files

    def validate(self, files: list[tuple[str, FileStorage]]) -> None:
        if len(files) > self._config.max_files:
            raise ValidationError(
                "too_many_files",
                message=f"Too many files. At most {self._config.max_files} allowed.",
                context={"max_files": self._config.max_files},
            )
        for _, upload in files:
            mime_type = (upload.mimetype or "").lower()
            if mime_type not in self._config.allowed_types:
                raise ValidationError(
                    "invalid_file_type",
                    message="Invalid file type. Only images, PDFs, and Office documents are allowed.",
                    context={"filename": upload.filename, "mime_type": mime_type},
                )
            if _stream_size(upload) > self._config.max_file_size:
                limit_mb = self._config.max_file_size / (1024 * 1024)
                raise ValidationError(
                    "file_too_large",
                    message=f"File size too large. Maximum size is {limit_mb:g}MB.",
                    context={"filename": upload.filename},
                )

    @contextmanager
    def stored(self) -> Iterator[list[StoredUpload]]:
        """Validate and save the request's files.

        Files saved here are removed again if the block raises.
        """
        files = self.collect()
        self.validate(files)

        saved: list[StoredUpload] = []
        try:
            for field_name, upload in files:
                size = _stream_size(upload)
                path = self._storage.save(upload, field_name)
                saved.append(
                    StoredUpload(
                        path=path,
                        original_name=upload.filename or "",
                        mime_type=upload.mimetype or "",
                        size=size,
                    )
                )
            yield saved
        except Exception:
            if saved:
                removed = discard_attachments(self._storage, [item.path for item in saved])
                logger.info(f"uploads: discarded {removed} file(s) after failed request")
            raise
