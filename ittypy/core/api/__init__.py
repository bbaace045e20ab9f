"""Media API transport, configuration and response decoding."""
from .config import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    PollConfig,
    API_KEY_ENV,
)
from .async_client import AsyncAPIClient, APIResponse
from .envelope import (
    EnvelopedResponse,
    BareResponse,
    DecodedResponse,
    decode_envelope,
    unwrap,
    parse_json,
    error_message,
)

__all__ = [
    # Client
    'AsyncAPIClient',
    'APIResponse',

    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'PollConfig',
    'API_KEY_ENV',

    # Envelope decoding
    'EnvelopedResponse',
    'BareResponse',
    'DecodedResponse',
    'decode_envelope',
    'unwrap',
    'parse_json',
    'error_message',
]
