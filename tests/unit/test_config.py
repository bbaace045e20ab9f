"""Tests for API configuration."""
import ssl

import aiohttp
import pytest

from ittypy.core.api import API_KEY_ENV, APIConfig, PollConfig, ProxyConfig, SSLConfig


class TestAPIConfig:
    """Test suite for APIConfig."""

    def test_defaults(self):
        config = APIConfig.default()

        assert config.api_key is None
        assert not config.has_credentials
        assert config.base_url == 'https://api.ittybit.com/'
        assert config.upload_expiry == 600
        assert config.playback_expiry == 300
        assert config.poll == PollConfig(poll_interval=0.75, max_attempts=20, total_budget=5.0)

    def test_api_key_hidden_from_repr(self):
        assert 'sk_secret' not in repr(APIConfig(api_key='sk_secret'))

    def test_from_env(self):
        config = APIConfig.from_env({API_KEY_ENV: 'sk_env', 'ITTYBIT_BASE_URL': 'https://staging.test/'})

        assert config.api_key == 'sk_env'
        assert config.base_url == 'https://staging.test/'

    def test_from_env_empty_key(self):
        config = APIConfig.from_env({API_KEY_ENV: ''})

        assert config.api_key is None
        assert not config.has_credentials

    def test_from_env_explicit_base_url_wins(self):
        config = APIConfig.from_env({'ITTYBIT_BASE_URL': 'https://env.test/'}, base_url='https://arg.test/')
        assert config.base_url == 'https://arg.test/'

    def test_from_env_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV, 'sk_os')
        assert APIConfig.from_env().api_key == 'sk_os'

    @pytest.mark.parametrize("base_url,path", [
        ('https://api.ittybit.com/', 'signatures'),
        ('https://api.ittybit.com', '/signatures'),
        ('https://api.ittybit.com/', '/signatures'),
    ])
    def test_url_for(self, base_url, path):
        assert APIConfig(base_url=base_url).url_for(path) == 'https://api.ittybit.com/signatures'

    def test_session_kwargs(self):
        config = APIConfig(extra_headers={'X-Trace': '1'})
        kwargs = config.get_session_kwargs()

        assert kwargs['headers']['User-Agent'] == config.user_agent
        assert kwargs['headers']['X-Trace'] == '1'
        assert isinstance(kwargs['timeout'], aiohttp.ClientTimeout)
        assert 'Authorization' not in kwargs['headers']

    def test_connector_kwargs(self):
        kwargs = APIConfig(limit=5, limit_per_host=2).get_connector_kwargs()

        assert kwargs['limit'] == 5
        assert kwargs['limit_per_host'] == 2
        assert isinstance(kwargs['ssl'], ssl.SSLContext)

    def test_insecure(self):
        config = APIConfig.insecure(api_key='k')

        assert config.ssl.create_ssl_context() is False
        assert config.api_key == 'k'

    def test_with_proxy(self):
        config = APIConfig.with_proxy('http://proxy.local:3128')
        assert config.proxy.to_aiohttp_proxy() == 'http://proxy.local:3128'


def test_proxy_credentials():
    proxy = ProxyConfig(url='http://proxy.local:3128', username='u', password='p')
    assert proxy.to_aiohttp_proxy() == 'http://u:p@proxy.local:3128'


def test_ssl_verify_by_default():
    context = SSLConfig().create_ssl_context()
    assert context.check_hostname


class TestPollConfig:
    """Test suite for PollConfig."""

    def test_custom_limits(self):
        config = PollConfig(poll_interval=0, max_attempts=1, total_budget=0.1)
        assert config.max_attempts == 1

    @pytest.mark.parametrize("kwargs", [
        {'poll_interval': -0.1},
        {'max_attempts': 0},
        {'total_budget': 0},
        {'total_budget': -5},
    ])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValueError):
            PollConfig(**kwargs)


def test_proxy_url():
    assert APIConfig().proxy_url is None
    assert APIConfig.with_proxy('http://proxy.local:3128').proxy_url == 'http://proxy.local:3128'
