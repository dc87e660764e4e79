"""Shared fixtures.

HTTP tests replay recorded cassettes from `testdata/cassettes`. Set
`OVERWRITE_CASSETTES=true` (with real credentials in the environment) to record
them again against the live API.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from adapters import cloudflare_api
from adapters.cassette import RecordingTransport, ReplayTransport
from core.config import AppSettings

TESTDATA = Path(__file__).parent / "testdata"
ZONE_ID = "0da42c8d2132a9ddaf714f9e7c920711"
ACCOUNT_ID = "f037e56e89293a057740de681ac9abbe"


def overwrite_cassettes() -> bool:
    return os.environ.get("OVERWRITE_CASSETTES", "").lower() == "true"


def cassette_transport(name: str) -> httpx.BaseTransport:
    path = TESTDATA / "cassettes" / f"{name}.json"
    if overwrite_cassettes():
        return RecordingTransport(path)
    return ReplayTransport.from_path(path)


def expected_output(name: str) -> str:
    return (TESTDATA / "expected" / f"{name}.tf").read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer credentials and .env files out of the tests."""

    if overwrite_cassettes():
        return
    for name in list(os.environ):
        if name.startswith("CLOUDFLARE_"):
            monkeypatch.delenv(name)
    monkeypatch.setitem(AppSettings.model_config, "env_file", None)


@pytest.fixture
def use_cassette(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Route the CLI's API client through the named cassette."""

    def _use(name: str) -> None:
        transport = cassette_transport(name)

        def _open(settings: AppSettings, **_: Any) -> cloudflare_api.CloudflareClient:
            return cloudflare_api.open_client(settings, transport=transport)

        monkeypatch.setattr("cli.main.open_client", _open)

    return _use
