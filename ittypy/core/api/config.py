"""
API configuration module.

Provides configuration for the media API client. The API key lives here and
is handed to services explicitly; nothing reads it from the environment at
request time.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Mapping, Union
import os
import ssl


API_KEY_ENV = 'ITTYBIT_API_KEY'
BASE_URL_ENV = 'ITTYBIT_BASE_URL'


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Supports HTTP, HTTPS, and SOCKS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None

        if self.username and self.password:
            if '://' in self.url:
                protocol, rest = self.url.split('://', 1)
                return f"{protocol}://{self.username}:{self.password}@{rest}"

        return self.url


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.

    Allows customization of SSL behavior for security requirements.
    """
    verify: bool = True
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self) -> Union[ssl.SSLContext, bool]:
        """Create SSL context from configuration (False disables checks)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        if self.cert_file:
            context.load_cert_chain(
                self.cert_file,
                keyfile=self.key_file
            )

        context.check_hostname = self.check_hostname

        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Applies to API calls and to every chunk PUT.
    """
    total: float = 300.0
    connect: float = 30.0
    sock_read: float = 60.0
    sock_connect: float = 30.0

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class PollConfig:
    """
    Task polling configuration.

    Polling stops at whichever limit is hit first: max_attempts fetches or
    total_budget seconds.
    """
    poll_interval: float = 0.75
    max_attempts: int = 20
    total_budget: float = 5.0

    def __post_init__(self):
        if self.poll_interval < 0:
            raise ValueError("poll_interval must not be negative")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.total_budget <= 0:
            raise ValueError("total_budget must be positive")


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes all configuration options for the media API client.
    """
    # Service credential, sent as a bearer token
    api_key: Optional[str] = field(default=None, repr=False)

    base_url: str = 'https://api.ittybit.com/'
    user_agent: str = 'ittypy/0.1.0'

    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    poll: PollConfig = field(default_factory=PollConfig)

    # Signature lifetimes in seconds
    upload_expiry: int = 600
    playback_expiry: int = 300

    extra_headers: Dict[str, str] = field(default_factory=dict)

    log_level: int = 20  # logging.INFO

    # Connection pool settings
    limit_per_host: int = 10
    limit: int = 100

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration (no credential)."""
        return cls()

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        **kwargs
    ) -> 'APIConfig':
        """
        Create configuration from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)
            **kwargs: Extra APIConfig fields

        Returns:
            APIConfig with api_key (and base_url, if set) filled in
        """
        env = os.environ if env is None else env
        base_url = env.get(BASE_URL_ENV)
        if base_url:
            kwargs.setdefault('base_url', base_url)
        return cls(api_key=env.get(API_KEY_ENV) or None, **kwargs)

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration with proxy."""
        return cls(
            proxy=ProxyConfig(url=proxy_url),
            **kwargs
        )

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )

    @property
    def proxy_url(self) -> Optional[str]:
        """Proxy URL in aiohttp format, or None."""
        return self.proxy.to_aiohttp_proxy() if self.proxy else None

    @property
    def has_credentials(self) -> bool:
        """True when an API key is configured."""
        return bool(self.api_key)

    def url_for(self, path: str) -> str:
        """Join base_url and an API path."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
