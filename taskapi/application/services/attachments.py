# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable

from taskapi.domain.tasks.repositories import AttachmentStorage
from taskapi.shared.logging import logger


def discard_attachments(storage: AttachmentStorage, paths: Iterable[str]) -> int:
    """Delete attachment files, logging and skipping any that fail.

    Returns the number of files actually removed.
    """
    removed = 0
    for path in paths:
        if not path:
            continue
        try:
            if storage.exists(path):
                storage.delete(path)
                removed += 1
        except (OSError, ValueError) as exc:
            logger.warning(f"attachments.discard: err path={path} ({exc})")
    return removed
