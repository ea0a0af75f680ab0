"""Shareable-link encoding for prompt states.

States are serialised to compact JSON, raw-deflated, and encoded with URL-safe
base64 (padding stripped) so the token fits inside a URL fragment. Tokens in the
web builder's earlier format (percent-encoded standard base64 of Latin-1 JSON)
are still accepted when decoding.

Updates:
  v0.2.1 - 2026-10-19 - Read legacy fragments as Latin-1 and cap their decoded size.
  v0.2.0 - 2026-10-14 - Accept legacy percent-encoded base64 JSON fragments.
  v0.1.0 - 2026-10-09 - Add compact state codec and share URL helpers.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import zlib
from typing import Final
from urllib.parse import unquote, urlsplit, urlunsplit

from models.prompt_state import PromptState, PromptStateTypeError

from .exceptions import PromptStateDecodeError

logger = logging.getLogger(__name__)

DEFAULT_SHARE_BASE_URL: Final[str] = "https://prompt-builder.local/"
_MAX_DECODED_BYTES: Final[int] = 1_000_000


def _compact_json_bytes(data: object) -> bytes:
    return json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def _raw_deflate(data: bytes) -> bytes:
    compressor = zlib.compressobj(level=9, wbits=-zlib.MAX_WBITS)
    return compressor.compress(data) + compressor.flush()


def _raw_inflate(data: bytes) -> bytes:
    decompressor = zlib.decompressobj(wbits=-zlib.MAX_WBITS)
    inflated = decompressor.decompress(data, _MAX_DECODED_BYTES)
    if decompressor.unconsumed_tail:
        raise PromptStateDecodeError("Shared state exceeds the maximum decoded size.")
    if not decompressor.eof:
        raise zlib.error("incomplete deflate stream")
    return inflated


def _b64decode_unpadded(token: str, *, urlsafe: bool) -> bytes:
    padded = token + "=" * (-len(token) % 4)
    if urlsafe:
        return base64.urlsafe_b64decode(padded.encode("ascii"))
    return base64.b64decode(padded.encode("ascii"), validate=True)


def encode_prompt_state(state: PromptState) -> str:
    """Return a compact URL-safe token representing ``state``."""
    payload = _raw_deflate(_compact_json_bytes(state.to_record()))
    token = base64.urlsafe_b64encode(payload).decode("ascii").rstrip("=")
    logger.debug("Encoded prompt state", extra={"token_length": len(token)})
    return token


def _decode_payload(token: str) -> object:
    try:
        compressed = _b64decode_unpadded(token, urlsafe=True)
        return json.loads(_raw_inflate(compressed).decode("utf-8"))
    except (binascii.Error, ValueError, zlib.error, UnicodeDecodeError):
        pass

    # Legacy links hold btoa() output: one Latin-1 byte per character.
    legacy = unquote(token)
    try:
        raw = _b64decode_unpadded(legacy, urlsafe=False)
    except (binascii.Error, ValueError) as exc:
        raise PromptStateDecodeError("Shared state token is not a valid prompt state.") from exc
    if len(raw) > _MAX_DECODED_BYTES:
        raise PromptStateDecodeError("Shared state exceeds the maximum decoded size.")
    try:
        return json.loads(raw.decode("latin-1"))
    except ValueError as exc:
        raise PromptStateDecodeError("Shared state token is not a valid prompt state.") from exc


def decode_prompt_state(token: str) -> PromptState:
    """Return the prompt state encoded in ``token``.

    Raises:
        PromptStateDecodeError: when the token is empty, corrupted, or does not
            describe a prompt state.
    """
    candidate = (token or "").strip().lstrip("#")
    if not candidate:
        raise PromptStateDecodeError("Shared state token is empty.")
    try:
        candidate.encode("ascii")
    except UnicodeEncodeError as exc:
        raise PromptStateDecodeError("Shared state token must be ASCII.") from exc

    payload = _decode_payload(candidate)
    if not isinstance(payload, dict):
        raise PromptStateDecodeError("Shared state must describe a JSON object.")
    try:
        return PromptState.from_record(payload)
    except PromptStateTypeError as exc:
        raise PromptStateDecodeError(f"Shared state is malformed: {exc}") from exc


def build_share_url(base_url: str, state: PromptState) -> str:
    """Return ``base_url`` with the encoded state stored in its fragment."""
    candidate = (base_url or "").strip()
    parts = urlsplit(candidate)
    if not parts.scheme or not parts.netloc:
        raise ValueError("Share base URL must include a scheme and hostname.")
    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path or "/", parts.query, encode_prompt_state(state))
    )


def state_from_share_url(url: str) -> PromptState:
    """Decode the prompt state stored in the fragment of ``url``.

    A bare token (no ``#``) is decoded directly.
    """
    text = (url or "").strip()
    if "#" in text:
        text = text.split("#", 1)[1]
    return decode_prompt_state(text)


__all__ = [
    "DEFAULT_SHARE_BASE_URL",
    "build_share_url",
    "decode_prompt_state",
    "encode_prompt_state",
    "state_from_share_url",
]
