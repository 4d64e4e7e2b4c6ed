"""Prompt sharing helpers: URL-safe share tokens and readable text exports.

Updates:
  v0.2.0 - 2026-10-13 - Reject malformed share tokens with ShareDecodeError.
  v0.1.1 - 2026-10-09 - Provide shared footer helper for plain-text exports.
  v0.1.0 - 2026-10-08 - Add base64 share tokens and prompt formatting helper.
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping
from datetime import date
from typing import TYPE_CHECKING, Any, cast
from urllib.parse import urlencode, urlsplit, urlunsplit

from models.prompt_model import SHAREABLE_FIELDS, normalise_rating, normalise_tags

from .exceptions import ShareDecodeError

if TYPE_CHECKING:
    from models.prompt_model import Prompt

_APP_NAME = "PromptVault"
SHARE_QUERY_PARAMETER = "shared"


def _current_share_date() -> str:
    """Return the ISO-8601 date string used in footer metadata."""
    return date.today().isoformat()


def append_share_footer(payload: str) -> str:
    """Append the standard share footer block to *payload* text."""
    base_text = (payload or "").rstrip()
    footer_line = f"{_APP_NAME} | Shared: {_current_share_date()}"
    if not base_text:
        return f"---\n{footer_line}"
    return f"{base_text}\n\n---\n{footer_line}"


def _compact_json_bytes(data: object) -> bytes:
    return json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def share_payload(source: Prompt | Mapping[str, Any]) -> dict[str, Any]:
    """Return the shareable subset of a prompt or prompt-like mapping."""
    if isinstance(source, Mapping):
        mapping = cast("Mapping[str, Any]", source)
        return {
            "title": str(mapping.get("title") or ""),
            "category": str(mapping.get("category") or ""),
            "tags": normalise_tags(mapping.get("tags")),
            "content": str(mapping.get("content") or ""),
            "notes": str(mapping.get("notes") or ""),
            "rating": normalise_rating(mapping.get("rating")),
        }
    return source.share_payload()


def encode_share_token(source: Prompt | Mapping[str, Any]) -> str:
    """Encode the shareable fields as an unpadded URL-safe base64 token."""
    encoded = base64.urlsafe_b64encode(_compact_json_bytes(share_payload(source)))
    return encoded.decode("ascii").rstrip("=")


def decode_share_token(token: str) -> dict[str, Any]:
    """Decode *token* back into the shareable field mapping.

    Accepts standard or URL-safe alphabets with or without padding.
    """
    text = (token or "").strip()
    if not text:
        raise ShareDecodeError("Share token is empty.")
    text = text.replace("+", "-").replace("/", "_").rstrip("=")
    try:
        raw = base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
        payload: object = json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError) as exc:
        raise ShareDecodeError("Share token is not valid base64-encoded JSON.") from exc
    if not isinstance(payload, dict):
        raise ShareDecodeError("Share token must encode a JSON object.")
    data = cast("dict[str, Any]", payload)
    for required in ("title", "content"):
        value = data.get(required)
        if not isinstance(value, str) or not value.strip():
            raise ShareDecodeError(f"Share token is missing '{required}'.")
    tags = data.get("tags")
    if tags is not None and not isinstance(tags, list):
        raise ShareDecodeError("Share token tags must be a list.")
    try:
        decoded = share_payload(data)
    except ValueError as exc:
        raise ShareDecodeError(f"Share token has invalid fields: {exc}") from exc
    return {key: decoded[key] for key in SHAREABLE_FIELDS}


def build_share_url(base_url: str, token: str) -> str:
    """Return *base_url* with the share token attached as a query parameter."""
    parts = urlsplit(base_url.strip())
    if not parts.scheme or not parts.netloc:
        raise ValueError("Share base URL must include a scheme and hostname.")
    query = urlencode({SHARE_QUERY_PARAMETER: token})
    return urlunsplit((parts.scheme, parts.netloc, parts.path or "/", query, ""))


def format_prompt_for_share(
    prompt: Prompt,
    *,
    category_label: str | None = None,
    include_notes: bool = True,
) -> str:
    """Return a readable text payload for pasting outside the vault."""
    lines: list[str] = []
    lines.append(f"# {prompt.title}")
    lines.append("")
    lines.append(f"Category: {category_label or prompt.category}")
    if prompt.tags:
        lines.append(f"Tags: {', '.join(prompt.tags)}")
    if prompt.rating:
        lines.append(f"Rating: {prompt.rating}/5")
    lines.append("")
    lines.append("## Prompt")
    lines.append(prompt.content)
    if include_notes and prompt.notes:
        lines.append("")
        lines.append("## Notes")
        lines.append(prompt.notes)
    return append_share_footer("\n".join(lines))


__all__ = [
    "SHARE_QUERY_PARAMETER",
    "append_share_footer",
    "build_share_url",
    "decode_share_token",
    "encode_share_token",
    "format_prompt_for_share",
    "share_payload",
]
