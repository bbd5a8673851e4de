"""Domain helpers for history records (field caps, defaults, identities)."""
from __future__ import annotations

import re
import secrets
import string
import time
from datetime import datetime, timezone
from typing import Any, Mapping

BACKEND_ID_FIELD = "__backendId"

RECORD_FIELDS = (
    "topic",
    "tone",
    "audience",
    "keywords",
    "video_type",
    "title_1",
    "title_2",
    "title_3",
    "description",
    "hashtags",
    "thumbnail_1",
    "thumbnail_2",
    "script",
    "created_at",
)

FIELD_LIMITS = {
    "topic": 200,
    "keywords": 200,
    "title_1": 300,
    "title_2": 300,
    "title_3": 300,
    "description": 1000,
    "hashtags": 500,
    "thumbnail_1": 300,
    "thumbnail_2": 300,
    "script": 2000,
}

FIELD_DEFAULTS = {
    "topic": "Untitled",
    "tone": "Motivational",
    "audience": "Everyone",
    "video_type": "Long Video",
}

LOCAL_ID_PATTERN = re.compile(r"local_\d+_[a-z0-9]+")
_ID_ALPHABET = string.ascii_lowercase + string.digits


def truncate(value: Any, max_length: int) -> str:
    if not value:
        return ""
    text = str(value)
    return text[:max_length] if len(text) > max_length else text


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC with milliseconds and a Z suffix (2026-10-19T12:00:00.000Z)."""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str | None) -> datetime | None:
    raw = (value or "").strip()
    if not raw:
        return None
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def _pick(values: Any, index: int) -> str:
    if isinstance(values, (list, tuple)) and len(values) > index:
        return values[index] or ""
    return ""


def build_record(content: Mapping[str, Any], *, now: datetime | None = None) -> dict:
    """
    Turn generated content into a persistable record.

    Accepts either the generator output (``titles``/``thumbnails`` lists,
    ``video_type`` or ``videoType``) or an already flat record. Every capped
    field is truncated and ``created_at`` is stamped with the current instant.
    """
    titles = content.get("titles")
    thumbnails = content.get("thumbnails")
    video_type = content.get("video_type") or content.get("videoType")
    record = {
        "topic": content.get("topic") or FIELD_DEFAULTS["topic"],
        "tone": content.get("tone") or FIELD_DEFAULTS["tone"],
        "audience": content.get("audience") or FIELD_DEFAULTS["audience"],
        "keywords": content.get("keywords") or "",
        "video_type": video_type or FIELD_DEFAULTS["video_type"],
        "title_1": _pick(titles, 0) or content.get("title_1") or "",
        "title_2": _pick(titles, 1) or content.get("title_2") or "",
        "title_3": _pick(titles, 2) or content.get("title_3") or "",
        "description": content.get("description") or "",
        "hashtags": content.get("hashtags") or "",
        "thumbnail_1": _pick(thumbnails, 0) or content.get("thumbnail_1") or "",
        "thumbnail_2": _pick(thumbnails, 1) or content.get("thumbnail_2") or "",
        "script": content.get("script") or "",
    }
    for field, limit in FIELD_LIMITS.items():
        record[field] = truncate(record[field], limit)
    for field in ("tone", "audience", "video_type"):
        record[field] = str(record[field])
    record["created_at"] = utc_timestamp(now)
    return record


def new_local_id(now_ms: int | None = None) -> str:
    """local_<millisecond timestamp>_<9 random lowercase alphanumerics>."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"local_{stamp}_{suffix}"


def is_local_id(value: str | None) -> bool:
    if not value:
        return False
    return bool(LOCAL_ID_PATTERN.fullmatch(value))


def record_id(record: Mapping[str, Any]) -> str:
    return str(record.get(BACKEND_ID_FIELD) or "")


def dedupe_records(records: list[Mapping[str, Any]] | None) -> list[dict]:
    """Keep list order; drop later copies of an identity already seen."""
    seen: set[str] = set()
    unique: list[dict] = []
    for record in records or []:
        if not isinstance(record, Mapping):
            continue
        key = record_id(record)
        if key:
            if key in seen:
                continue
            seen.add(key)
        unique.append(dict(record))
    return unique
