"""Tests for the high-level IttyClient."""
import pytest

from ittypy import (
    APIConfig,
    IttyClient,
    PollConfig,
    TaskCompleted,
    UploadComplete,
    UploadConfig,
    UploadFailed,
)

FILE = {'id': 'file_1', 'url': 'https://cdn.test/a.mp4'}


@pytest.fixture
def itty(fake_session):
    return IttyClient(
        api_key='sk_client',
        session=fake_session,
        upload_config=UploadConfig(chunk_size=5)
    )


def test_api_key_overrides_config():
    client = IttyClient(api_key='sk_arg', config=APIConfig(api_key='sk_cfg', upload_expiry=60))

    assert client.config.api_key == 'sk_arg'
    assert client.config.upload_expiry == 60


def test_config_key_kept_without_override():
    assert IttyClient(config=APIConfig(api_key='sk_cfg')).config.api_key == 'sk_cfg'


@pytest.mark.asyncio
async def test_upload_resumable(itty, fake_session):
    fake_session.queue(200, {'data': {'url': 'https://up.test/r?sig=1'}})
    fake_session.queue(202).queue(201, {'url': 'https://cdn.test/a.mp4'})
    reported = []

    outcome = await itty.upload_resumable(b"0123456789", filename="a.mp4", progress_callback=reported.append)

    assert outcome == UploadComplete(url='https://cdn.test/a.mp4', total_bytes=10, chunks=2)
    assert reported == [50, 100]
    assert fake_session.calls[0]['headers']['Authorization'] == 'Bearer sk_client'
    assert all('Authorization' not in c['headers'] for c in fake_session.calls_for('PUT'))


@pytest.mark.asyncio
async def test_upload_without_key_fails_cleanly(fake_session):
    itty = IttyClient(config=APIConfig(), session=fake_session)

    outcome = await itty.upload_resumable(b"abc")

    assert isinstance(outcome, UploadFailed)
    assert outcome.reason == 'Missing ITTYBIT_API_KEY'
    assert fake_session.calls == []


@pytest.mark.asyncio
async def test_sign_playback(itty, fake_session):
    fake_session.queue(200, {'url': 'https://cdn.test/v/a.mp4?sig=2'})

    signed = await itty.sign_playback('v/a.mp4')

    assert signed.url == 'https://cdn.test/v/a.mp4?sig=2'
    assert fake_session.calls[0]['json']['folder'] == 'v'


@pytest.mark.asyncio
async def test_ingest_uses_configured_poll_limits(fake_session):
    config = APIConfig(api_key='sk', poll=PollConfig(poll_interval=0, max_attempts=2, total_budget=60))
    itty = IttyClient(config=config, session=fake_session)
    fake_session.queue(400)
    fake_session.queue(200, {'id': 'task_1', 'status': 'queued'})
    fake_session.queue(200, {'id': 'task_1', 'status': 'processing'})
    fake_session.queue(200, {'id': 'task_1', 'status': 'completed', 'output': FILE})

    outcome = await itty.ingest_url('https://src.test/a.mp4')

    assert isinstance(outcome, TaskCompleted)
    assert len(fake_session.calls_for('GET')) == 2


@pytest.mark.asyncio
async def test_get_task_status(itty, fake_session):
    fake_session.queue(200, {'data': {'id': 'task_1', 'status': 'completed', 'output': FILE}})

    status = await itty.get_task_status('task_1')

    assert status.done
    assert status.file.id == 'file_1'


@pytest.mark.asyncio
async def test_context_manager_leaves_shared_session(fake_session):
    async with IttyClient(api_key='sk', session=fake_session):
        pass

    assert not fake_session.closed


@pytest.mark.asyncio
async def test_uploads_go_through_configured_proxy(fake_session):
    config = APIConfig.with_proxy('http://proxy.local:3128', api_key='sk')
    itty = IttyClient(config=config, session=fake_session)
    fake_session.queue(200, {'url': 'https://up.test/r?sig=1'}).queue(201)

    outcome = await itty.upload_resumable(b"abc")

    assert isinstance(outcome, UploadComplete)
    assert [(c['method'], c['proxy']) for c in fake_session.calls] == [
        ('POST', 'http://proxy.local:3128'),
        ('PUT', 'http://proxy.local:3128'),
    ]


@pytest.mark.asyncio
async def test_single_put_goes_through_configured_proxy(fake_session):
    config = APIConfig.with_proxy('http://proxy.local:3128', api_key='sk')
    itty = IttyClient(config=config, session=fake_session)
    fake_session.queue(200, {'url': 'https://up.test/p?sig=1'}).queue(201)

    await itty.upload(b"abc")

    assert fake_session.calls_for('PUT')[0]['proxy'] == 'http://proxy.local:3128'


def test_insecure_config_reaches_upload_connector():
    itty = IttyClient(config=APIConfig.insecure(api_key='sk', limit_per_host=4))

    assert itty.upload_config.connector_kwargs['ssl'] is False
    assert itty.upload_config.connector_kwargs['limit_per_host'] == 4


def test_explicit_upload_network_settings_win():
    config = APIConfig.with_proxy('http://proxy.local:3128', api_key='sk')
    upload_config = UploadConfig(proxy='http://other.local:8080', connector_kwargs={'limit': 1})

    itty = IttyClient(config=config, upload_config=upload_config)

    assert itty.upload_config.proxy == 'http://other.local:8080'
    assert itty.upload_config.connector_kwargs == {'limit': 1}
    assert itty.upload_config.timeout == upload_config.timeout
