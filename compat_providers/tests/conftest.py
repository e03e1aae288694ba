"""Shared fixtures for the compat_providers test suite.

Connections use a dedicated encryption secret so tests never depend on the
package default, and point at a fake host that respx intercepts.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from compat_providers.base.credentials import EncryptionSettings
from compat_providers.base.logging import get_logger
from compat_providers.config import reset_settings_cache
from compat_providers.connections import Connection, ProviderMode

from compat_providers.tests.utils import BASE_URL


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Keep ``.env`` files and ``COMPAT_*`` variables from leaking into tests."""

    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    for name in (
        "COMPAT_CONNECTIONS_FILE",
        "COMPAT_USE_KEY_ENCRYPTION",
        "COMPAT_ENCRYPTION_KEY",
        "COMPAT_HTTP_TIMEOUT_SECONDS",
        "COMPAT_CONNECT_TIMEOUT_SECONDS",
        "COMPAT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    # re-point the shared handler at the stderr of the current test
    get_logger("compat.tests")
    yield
    reset_settings_cache()


@pytest.fixture()
def encryption() -> EncryptionSettings:
    return EncryptionSettings(secret=b"test-secret")


@pytest.fixture()
def connection(encryption: EncryptionSettings) -> Connection:
    conn = Connection(
        name="Test",
        endpoint=BASE_URL,
        model_id="gpt-test",
        provider_mode=ProviderMode.OPENAI,
        encryption=encryption,
    )
    conn.api_key = "sk-test-key"
    return conn
