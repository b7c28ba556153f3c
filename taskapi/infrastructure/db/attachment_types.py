# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import json

from sqlalchemy import Text, TypeDecorator


def decode_attachments(value: str | None) -> list[str]:
    """Normalize every stored encoding to a list of paths.

    NULL or blank -> ``[]``, a bare path -> ``[path]``, a JSON list -> that
    list, a JSON string -> ``[string]``.
    """
    if value is None:
        return []
    text = value.strip()
    if not text:
        return []
    try:
        decoded = json.loads(text)
    except ValueError:
        return [text]
    if isinstance(decoded, list):
        return [str(item) for item in decoded if item]
    if isinstance(decoded, str):
        return [decoded] if decoded else []
    return [text]


class AttachmentList(TypeDecorator):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect) -> str | None:
        if value is None:
            return json.dumps([])
        if isinstance(value, str):
            return json.dumps([value])
        return json.dumps([str(item) for item in value])

    def process_result_value(self, value: str | None, dialect) -> list[str]:
        return decode_attachments(value)


__all__ = ["AttachmentList", "decode_attachments"]
