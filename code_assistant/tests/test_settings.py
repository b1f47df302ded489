import pydantic
import pytest

from code_assistant.config.settings import AssistantSettings


def test_settings_reject_short_key():
    with pytest.raises(pydantic.ValidationError):
        AssistantSettings(gemini_api_key="short")


def test_settings_read_yaml(monkeypatch, tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("http_timeout: 12.5\ngemini_api_key: yaml-key-123456\n", encoding="utf-8")
    monkeypatch.setenv("ASSISTANT_CONFIG_FILE", str(cfg))
    monkeypatch.delenv("HTTP_TIMEOUT", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    s = AssistantSettings()

    assert s.http_timeout == 12.5
    assert s.gemini_api_key == "yaml-key-123456"
    assert s.default_model == "code-assistant"


def test_env_overrides_yaml(monkeypatch, tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("http_timeout: 12.5\n", encoding="utf-8")
    monkeypatch.setenv("ASSISTANT_CONFIG_FILE", str(cfg))
    monkeypatch.setenv("HTTP_TIMEOUT", "45")

    assert AssistantSettings().http_timeout == 45.0
