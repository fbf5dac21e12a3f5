import os
from typing import Generator

import pytest

from tests.fake.fake_stream import FakeSink
from gitcred.bootstrap.config import loader
from gitcred.bootstrap import deps


@pytest.fixture
def sink():
    return FakeSink()


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    backup = os.environ.copy()

    try:
        for var in list(os.environ):
            if var.startswith("GITCRED") or var in ("GIT_USER", "GIT_PASS"):
                del os.environ[var]
        yield
    finally:
        os.environ.clear()
        os.environ.update(backup)


@pytest.fixture
def no_configfile(monkeypatch, tmp_path):
    """Run with no configuration file and no CLI arguments cached."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.argv", ["git-credential-env", "get"])
    loader.get_cli_args.cache_clear()
    loader.get_configfile.cache_clear()
    deps.get_settings.cache_clear()
    yield
    loader.get_cli_args.cache_clear()
    loader.get_configfile.cache_clear()
    deps.get_settings.cache_clear()
