"""Tests for shareable-link encoding of prompt states.

Updates:
  v0.2.1 - 2026-10-19 - Cover Latin-1 legacy fragments and the legacy size cap.
  v0.2.0 - 2026-10-14 - Cover legacy percent-encoded base64 fragments.
  v0.1.0 - 2026-10-09 - Cover token round-trips and share URL helpers.
"""

from __future__ import annotations

import base64
import json
import re
import zlib
from urllib.parse import quote

import pytest

from core.assembler import assemble
from core.exceptions import PromptShareError, PromptStateDecodeError
from core.sharing import (
    build_share_url,
    decode_prompt_state,
    encode_prompt_state,
    state_from_share_url,
)
from models.prompt_state import PromptExample, PromptState, default_prompt_state

_URL_SAFE = re.compile(r"^[A-Za-z0-9_-]+$")


def _deflate_token(data: object) -> str:
    compressor = zlib.compressobj(level=9, wbits=-zlib.MAX_WBITS)
    payload = compressor.compress(json.dumps(data).encode("utf-8")) + compressor.flush()
    return base64.urlsafe_b64encode(payload).decode("ascii").rstrip("=")


def test_token_roundtrip_is_lossless(complete_state: PromptState) -> None:
    """Decoding an encoded state yields an equal state."""
    token = encode_prompt_state(complete_state)
    decoded = decode_prompt_state(token)
    assert decoded == complete_state
    assert assemble(decoded) == assemble(complete_state)


def test_roundtrip_keeps_unicode_and_blank_examples() -> None:
    """Non-ASCII text and blank examples survive the codec."""
    state = PromptState(
        goal="Résumé des ventes ✓",
        examples=(PromptExample(" ", ""), PromptExample("ß", "ss")),
        variables={"région": "Île-de-France"},
    )
    assert decode_prompt_state(encode_prompt_state(state)) == state


def test_token_uses_url_safe_alphabet_without_padding() -> None:
    """Tokens contain only characters that are safe in a URL fragment."""
    token = encode_prompt_state(default_prompt_state())
    assert _URL_SAFE.match(token)
    assert "=" not in token


def test_token_is_compressed(complete_state: PromptState) -> None:
    """The token is shorter than the plain base64 of the state JSON."""
    raw = json.dumps(complete_state.to_record()).encode("utf-8")
    assert len(encode_prompt_state(complete_state)) < len(base64.b64encode(raw))


def test_decoder_accepts_leading_hash(complete_state: PromptState) -> None:
    """A fragment copied with its '#' still decodes."""
    token = encode_prompt_state(complete_state)
    assert decode_prompt_state(f"  #{token}\n") == complete_state


def test_decoder_accepts_legacy_percent_encoded_json() -> None:
    """Fragments produced by the earlier link format remain readable."""
    record = {"goal": "Legacy link", "outputFormat": "A table"}
    legacy = quote(base64.b64encode(json.dumps(record).encode("utf-8")).decode("ascii"), safe="")
    assert "%3D" in legacy

    state = decode_prompt_state(legacy)
    assert state.goal == "Legacy link"
    assert state.output_format == "A table"


def _btoa_token(record: object) -> str:
    text = json.dumps(record, ensure_ascii=False, separators=(",", ":"))
    return quote(base64.b64encode(text.encode("latin-1")).decode("ascii"), safe="")


def test_decoder_reads_legacy_latin1_characters() -> None:
    """Accented text in earlier links is read one byte per character."""
    state = decode_prompt_state(_btoa_token({"goal": "Résumé café"}))
    assert state.goal == "Résumé café"


def test_legacy_payload_size_is_capped() -> None:
    """Oversized legacy payloads are refused like compressed ones."""
    with pytest.raises(PromptStateDecodeError, match="maximum decoded size"):
        decode_prompt_state(_btoa_token({"goal": "x" * 1_000_001}))


def test_partial_records_fill_defaults() -> None:
    """Fields missing from a shared record take their defaults."""
    state = decode_prompt_state(_deflate_token({"goal": "Only a goal", "extra": 1}))
    assert state == PromptState(goal="Only a goal")


@pytest.mark.parametrize("token", ["", "   ", "#", "@@@@", "not a token", "ünïcode"])
def test_invalid_tokens_raise_decode_error(token: str) -> None:
    """Empty, corrupted, or non-ASCII tokens are rejected."""
    with pytest.raises(PromptStateDecodeError):
        decode_prompt_state(token)


def test_non_object_payload_is_rejected() -> None:
    """A token that decodes to a JSON array is not a prompt state."""
    with pytest.raises(PromptStateDecodeError, match="JSON object"):
        decode_prompt_state(_deflate_token([1, 2, 3]))


def test_malformed_record_is_rejected() -> None:
    """Wrongly typed fields surface as decode errors, not type errors."""
    with pytest.raises(PromptStateDecodeError, match="malformed"):
        decode_prompt_state(_deflate_token({"goal": 5}))


def test_decode_error_is_a_share_error() -> None:
    """Callers can catch every sharing failure with one exception type."""
    with pytest.raises(PromptShareError):
        decode_prompt_state("@@@@")


def test_build_share_url_places_token_in_fragment(complete_state: PromptState) -> None:
    """The encoded state lives in the URL fragment of the base URL."""
    url = build_share_url("https://example.com/builder?lang=en", complete_state)

    prefix, token = url.split("#", 1)
    assert prefix == "https://example.com/builder?lang=en"
    assert token == encode_prompt_state(complete_state)
    assert state_from_share_url(url) == complete_state


def test_build_share_url_adds_root_path() -> None:
    """A bare host gets a '/' path before the fragment."""
    url = build_share_url("https://example.com", PromptState(goal="x"))
    assert url.startswith("https://example.com/#")


@pytest.mark.parametrize("base_url", ["", "example.com", "/relative/path"])
def test_build_share_url_requires_absolute_base(base_url: str) -> None:
    """Base URLs without scheme and host are refused."""
    with pytest.raises(ValueError):
        build_share_url(base_url, PromptState())


def test_state_from_share_url_accepts_bare_token(complete_state: PromptState) -> None:
    """A token pasted without a URL decodes directly."""
    assert state_from_share_url(encode_prompt_state(complete_state)) == complete_state
