"""Tests for share tokens, share links, and plain-text share formatting.

Updates:
  v0.2.0 - 2026-10-09 - Cover token decoding errors and vault share import.
  v0.1.0 - 2026-10-06 - Cover shared footer helper and prompt formatting.
"""

from __future__ import annotations

import base64
import json
from urllib.parse import parse_qs, urlsplit

import pytest
from pytest import MonkeyPatch

from core.exceptions import InvalidInputError, PromptNotFoundError, ShareDecodeError
from core.prompt_vault import PromptVault
from core.sharing import (
    append_share_footer,
    build_share_url,
    decode_share_token,
    encode_share_token,
    format_prompt_for_share,
)
from models.prompt_model import Prompt


def _prompt() -> Prompt:
    return Prompt(
        id="p-1",
        title="Café prompt",
        content="Describe the smell of coffee ☕",
        category="writing",
        tags=["coffee", "sensory"],
        notes="Keep it short",
        rating=4,
    )


def test_append_share_footer_appends_metadata_block(monkeypatch: MonkeyPatch) -> None:
    """Ensure the footer includes the app name and the injected date."""
    monkeypatch.setattr("core.sharing._current_share_date", lambda: "2026-10-15")

    assert append_share_footer("Result body   \n") == (
        "Result body\n\n---\nPromptVault | Shared: 2026-10-15"
    )
    assert append_share_footer("") == "---\nPromptVault | Shared: 2026-10-15"


def test_token_round_trip_preserves_shareable_fields() -> None:
    token = encode_share_token(_prompt())

    assert "=" not in token
    assert decode_share_token(token) == {
        "title": "Café prompt",
        "category": "writing",
        "tags": ["coffee", "sensory"],
        "content": "Describe the smell of coffee ☕",
        "notes": "Keep it short",
        "rating": 4,
    }


def test_decode_accepts_standard_alphabet_with_padding() -> None:
    raw = json.dumps({"title": "T", "content": "C?>"}).encode("utf-8")
    token = base64.b64encode(raw).decode("ascii")

    decoded = decode_share_token(token)

    assert decoded["content"] == "C?>"
    assert decoded["tags"] == []
    assert decoded["rating"] == 0


@pytest.mark.parametrize(
    "token",
    [
        "",
        "%%%not-base64%%%",
        base64.urlsafe_b64encode(b"not json").decode(),
        base64.urlsafe_b64encode(b"[1, 2]").decode(),
        base64.urlsafe_b64encode(b'{"title": "only title"}').decode(),
        base64.urlsafe_b64encode(b'{"title": "t", "content": "c", "tags": "x"}').decode(),
        base64.urlsafe_b64encode(b'{"title": "t", "content": "c", "rating": 42}').decode(),
    ],
)
def test_decode_rejects_malformed_tokens(token: str) -> None:
    with pytest.raises(ShareDecodeError):
        decode_share_token(token)


def test_build_share_url_sets_query_parameter() -> None:
    url = build_share_url("https://vault.example.com/app?old=1", "abc-_")

    parts = urlsplit(url)
    assert parts.netloc == "vault.example.com"
    assert parts.path == "/app"
    assert parse_qs(parts.query) == {"shared": ["abc-_"]}
    with pytest.raises(ValueError):
        build_share_url("not a url", "abc")


def test_format_prompt_for_share_renders_sections(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr("core.sharing._current_share_date", lambda: "2026-10-15")

    text = format_prompt_for_share(_prompt(), category_label="Writing")

    assert text.startswith("# Café prompt\n\nCategory: Writing\nTags: coffee, sensory\n")
    assert "Rating: 4/5" in text
    assert "## Notes\nKeep it short" in text
    assert "## Notes" not in format_prompt_for_share(_prompt(), include_notes=False)


def test_vault_share_import_creates_new_record(vault: PromptVault) -> None:
    original = vault.create_prompt(
        title="Shared", content="Body", category="code", tags=["a"], rating=2
    )

    token = vault.share_token(original.id)
    imported = vault.import_shared(token)

    assert imported.id != original.id
    assert (imported.title, imported.category, imported.tags, imported.rating) == (
        "Shared",
        "code",
        ["a"],
        2,
    )
    assert len(vault) == 2


def test_vault_share_import_falls_back_to_other_category(vault: PromptVault) -> None:
    token = encode_share_token({"title": "T", "content": "C", "category": "unknown/path"})

    assert vault.import_shared(token).category == "other"


def test_vault_share_helpers_report_errors(vault: PromptVault) -> None:
    prompt = vault.create_prompt(title="T", content="C")

    with pytest.raises(PromptNotFoundError):
        vault.share_token("ghost")
    with pytest.raises(InvalidInputError):
        vault.share_url(prompt.id, "relative/path")
    with pytest.raises(ShareDecodeError):
        vault.import_shared("@@@")
    assert "?shared=" in vault.share_url(prompt.id, "https://example.com")
    assert vault.format_prompt_for_share(prompt.id).startswith("# T\n\nCategory: Other")
