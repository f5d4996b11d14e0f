# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import pytest

from common import config as conf


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch):
    for name in [
        "ENABLE_DEBUG_MODE",
        "ENABLE_SPLUNK_LOG",
        "ENABLE_DOCUMENTATION_ENDPOINTS",
        "ENABLE_CORS",
        "EXTERNAL_URL",
        "ADDITIONAL_ALLOWED_ORIGINS",
        "LOG_LEVEL",
    ]:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = conf.Config()
    assert not config.enable_debug_mode
    assert config.enable_splunk_log
    assert not config.enable_documentation_endpoints
    assert not config.enable_cors
    assert config.log_level == "INFO"
    assert config.allowed_origins == ["*"]


def test_debug_mode_switches_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ENABLE_DEBUG_MODE", "true")
    monkeypatch.setenv("ENABLE_CORS", "0")
    config = conf.Config()
    assert config.enable_debug_mode
    assert not config.enable_splunk_log
    assert config.enable_documentation_endpoints
    # Explicit values win over the debug mode
    assert not config.enable_cors


def test_allowed_origins(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("EXTERNAL_URL", "https://registry.example")
    monkeypatch.setenv("ADDITIONAL_ALLOWED_ORIGINS", "https://a.example,https://b.example")
    assert conf.Config().allowed_origins == ["https://registry.example", "https://a.example", "https://b.example"]
