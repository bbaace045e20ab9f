"""Tests for the itty command line interface."""
import importlib

import pytest
from typer.testing import CliRunner

from ittypy import IttyClient, UploadConfig
from ittypy.cli import app

cli_main = importlib.import_module('ittypy.cli.main')

runner = CliRunner()

FILE = {'id': 'file_9', 'url': 'https://cdn.test/clip.mp4'}


@pytest.fixture
def no_env_key(monkeypatch):
    monkeypatch.delenv('ITTYBIT_API_KEY', raising=False)
    monkeypatch.delenv('ITTYBIT_BASE_URL', raising=False)


@pytest.fixture
def fake_client(monkeypatch, fake_session):
    """Routes CLI commands through the fake session."""
    def make_client(api_key):
        return IttyClient(
            api_key='sk_cli',
            session=fake_session,
            upload_config=UploadConfig(chunk_size=4)
        )

    monkeypatch.setattr(cli_main, 'make_client', make_client)
    return fake_session


@pytest.fixture
def media_file(tmp_path):
    path = tmp_path / 'clip.mp4'
    path.write_bytes(b"0123456789")
    return path


def test_resumable_without_key(no_env_key, media_file):
    result = runner.invoke(app, ['resumable', str(media_file)])

    assert result.exit_code == 1
    assert 'Missing ITTYBIT_API_KEY' in result.output


def test_task_without_key(no_env_key):
    result = runner.invoke(app, ['task', 'task_1'])

    assert result.exit_code == 1
    assert 'Missing ITTYBIT_API_KEY' in result.output


def test_resumable_upload(fake_client, media_file):
    fake_client.queue(200, {'data': {'url': 'https://up.test/r?sig=1'}})
    fake_client.queue(202).queue(202).queue(201, {'url': 'https://cdn.test/clip.mp4'})

    result = runner.invoke(app, ['resumable', str(media_file), '--folder', 'clips'])

    assert result.exit_code == 0
    assert 'https://cdn.test/clip.mp4' in result.output
    assert fake_client.calls[0]['json']['folder'] == 'clips'
    assert len(fake_client.calls_for('PUT')) == 3


def test_put_failure(fake_client, media_file):
    fake_client.queue(200, {'url': 'https://up.test/p?sig=1'}).queue(403, 'expired')

    result = runner.invoke(app, ['put', str(media_file)])

    assert result.exit_code == 1
    assert 'Upload failed: 403 expired' in result.output


def test_sign_get(fake_client):
    fake_client.queue(200, {'url': 'https://cdn.test/videos/clip.mp4?sig=2'})

    result = runner.invoke(app, ['sign-get', 'videos/clip.mp4'])

    assert result.exit_code == 0
    assert 'https://cdn.test/videos/clip.mp4?sig=2' in result.output


def test_ingest_direct(fake_client):
    fake_client.queue(200, FILE)

    result = runner.invoke(app, ['ingest', 'https://src.test/clip.mp4'])

    assert result.exit_code == 0
    assert 'file_9' in result.output


def test_task_pending(fake_client):
    fake_client.queue(200, {'id': 'task_1', 'status': 'processing'})

    result = runner.invoke(app, ['task', 'task_1'])

    assert result.exit_code == 0
    assert 'pending' in result.output
    assert 'processing' in result.output
