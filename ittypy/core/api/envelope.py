"""
Response envelope decoding.

The API answers either with a `{meta, data}` envelope or with the bare
object. Every call site goes through decode_envelope() instead of probing
the payload by hand.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class EnvelopedResponse:
    """Payload wrapped as {meta, data}."""
    data: Any
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BareResponse:
    """Payload returned as-is."""
    data: Any


DecodedResponse = Union[EnvelopedResponse, BareResponse]


def decode_envelope(payload: Any) -> DecodedResponse:
    """
    Classify a decoded JSON payload.

    Args:
        payload: Parsed JSON (or None)

    Returns:
        EnvelopedResponse when payload is a dict with a non-null 'data' key,
        BareResponse otherwise
    """
    if isinstance(payload, dict) and payload.get('data') is not None:
        meta = payload.get('meta')
        return EnvelopedResponse(
            data=payload['data'],
            meta=meta if isinstance(meta, dict) else {}
        )
    return BareResponse(data=payload)


def unwrap(payload: Any) -> Any:
    """Returns the inner data of a payload, enveloped or not."""
    return decode_envelope(payload).data


def parse_json(text: Optional[str]) -> Any:
    """Parse response text, returning None for empty or non-JSON bodies."""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


def error_message(payload: Any, text: Optional[str], fallback: str) -> str:
    """
    Build a human-readable error message from an upstream response.

    Prefers the JSON 'message' field, then the raw body text, then fallback.
    """
    if isinstance(payload, dict):
        message = payload.get('message')
        if message:
            return str(message)
    if text:
        return text
    return fallback
