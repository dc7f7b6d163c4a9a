"""Opaque pagination cursor.

A cursor marks the last row a caller has seen in a listing ordered by
``created_at`` with the comment id as tie-breaker. On the wire it is
URL-safe base64 of compact JSON::

    {"v": 1, "ts": "2025-01-01T12:00:00+00:00", "id": "<uuid>"}

Unversioned cursors (base64 of a bare ISO-8601 timestamp) are still
accepted and decode to a cursor without a tie-breaker.
"""

import base64
import binascii
import json
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from remark.domain.error import InvalidArgumentError
from remark.domain.value.common import ValueObject
from remark.domain.value.identifiers import CommentId

CURSOR_VERSION = 1


class Cursor(ValueObject):
    """Position in a created_at-ordered comment listing."""

    version: int = CURSOR_VERSION
    created_at: datetime
    comment_id: Optional[CommentId] = None

    def encode(self) -> str:
        """Serialize to an opaque token."""
        if self.version == 0:
            raw = self.created_at.isoformat()
        else:
            data = {"v": self.version, "ts": self.created_at.isoformat()}
            if self.comment_id is not None:
                data["id"] = str(self.comment_id)
            raw = json.dumps(data, separators=(",", ":"))
        return base64.urlsafe_b64encode(raw.encode()).decode()

    @classmethod
    def decode(cls, token: str) -> "Cursor":
        """Parse a token produced by :meth:`encode`.

        Raises:
            InvalidArgumentError: If the token is not a valid cursor
        """
        try:
            raw = base64.urlsafe_b64decode(_pad(token).encode()).decode()
        except (binascii.Error, UnicodeDecodeError, ValueError) as e:
            raise InvalidArgumentError(f"Malformed cursor: {token}") from e

        if not raw.startswith("{"):
            return cls._decode_legacy(raw, token)

        try:
            data = json.loads(raw)
            version = int(data["v"])
            created_at = datetime.fromisoformat(data["ts"])
            comment_id = CommentId(UUID(data["id"])) if data.get("id") else None
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Malformed cursor: {token}") from e

        if version != CURSOR_VERSION:
            raise InvalidArgumentError(f"Unsupported cursor version: {version}")

        return cls(version=version, created_at=created_at, comment_id=comment_id)

    @classmethod
    def _decode_legacy(cls, raw: str, token: str) -> "Cursor":
        try:
            created_at = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError as e:
            raise InvalidArgumentError(f"Malformed cursor: {token}") from e
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(version=0, created_at=created_at)


def _pad(token: str) -> str:
    return token + "=" * (-len(token) % 4)
