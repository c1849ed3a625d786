import sys
import pathlib

BASE_DIR = pathlib.Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

import pytest

from graphql_handler.config import load_settings

ENV_VARS = [
    "GRAPHQL_CORS_ALLOW_ORIGIN",
    "GRAPHQL_CORS_ALLOW_CREDENTIALS",
    "GRAPHQL_CORS_ALLOW_HEADERS",
    "GRAPHQL_HANDLE_PREFLIGHT",
    "GRAPHQL_HANDLER_CONFIG",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()
    assert settings.cors_allow_origin == "*"
    assert settings.cors_allow_credentials is True
    assert settings.cors_allow_headers == ["Content-Type", "Authorization"]
    assert settings.handle_preflight is True
    assert settings.extra_headers == {}
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GRAPHQL_CORS_ALLOW_ORIGIN", "https://app.example.com")
    monkeypatch.setenv("GRAPHQL_CORS_ALLOW_CREDENTIALS", "false")
    monkeypatch.setenv("GRAPHQL_CORS_ALLOW_HEADERS", "X-Api-Key, Content-Type")
    monkeypatch.setenv("GRAPHQL_HANDLE_PREFLIGHT", "0")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.cors_allow_origin == "https://app.example.com"
    assert settings.cors_allow_credentials is False
    assert settings.cors_allow_headers == ["X-Api-Key", "Content-Type"]
    assert settings.handle_preflight is False
    assert settings.log_level == "DEBUG"


def test_unrecognised_boolean_falls_back(monkeypatch):
    monkeypatch.setenv("GRAPHQL_CORS_ALLOW_CREDENTIALS", "maybe")
    assert load_settings().cors_allow_credentials is True


def test_yaml_config_file(monkeypatch, tmp_path):
    config = tmp_path / "graphql.yml"
    config.write_text(
        "cors:\n"
        "  allow_origin: https://yaml.example.com\n"
        "  allow_credentials: false\n"
        "  allow_headers: [Authorization]\n"
        "handle_preflight: false\n"
        "headers:\n"
        "  Cache-Control: no-store\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("GRAPHQL_HANDLER_CONFIG", str(config))
    settings = load_settings()
    assert settings.cors_allow_origin == "https://yaml.example.com"
    assert settings.cors_allow_credentials is False
    assert settings.cors_allow_headers == ["Authorization"]
    assert settings.handle_preflight is False
    assert settings.extra_headers == {"Cache-Control": "no-store"}


def test_environment_wins_over_yaml(monkeypatch, tmp_path):
    config = tmp_path / "graphql.yml"
    config.write_text("cors:\n  allow_origin: https://yaml.example.com\n", encoding="utf-8")
    monkeypatch.setenv("GRAPHQL_HANDLER_CONFIG", str(config))
    monkeypatch.setenv("GRAPHQL_CORS_ALLOW_ORIGIN", "https://env.example.com")
    assert load_settings().cors_allow_origin == "https://env.example.com"


@pytest.mark.parametrize("content", ["- just\n- a list\n", "cors: [unclosed\n"])
def test_malformed_yaml_is_ignored(monkeypatch, tmp_path, content):
    config = tmp_path / "graphql.yml"
    config.write_text(content, encoding="utf-8")
    monkeypatch.setenv("GRAPHQL_HANDLER_CONFIG", str(config))
    assert load_settings().cors_allow_origin == "*"


def test_missing_yaml_is_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("GRAPHQL_HANDLER_CONFIG", str(tmp_path / "absent.yml"))
    assert load_settings().cors_allow_origin == "*"


def test_yaml_scalar_allow_headers_is_split_on_commas(monkeypatch, tmp_path):
    config = tmp_path / "graphql.yml"
    config.write_text("cors:\n  allow_headers: X-Api-Key, X-Trace-Id\n", encoding="utf-8")
    monkeypatch.setenv("GRAPHQL_HANDLER_CONFIG", str(config))
    assert load_settings().cors_allow_headers == ["X-Api-Key", "X-Trace-Id"]


def test_yaml_single_allow_header_string(monkeypatch, tmp_path):
    config = tmp_path / "graphql.yml"
    config.write_text("cors:\n  allow_headers: X-Api-Key\n", encoding="utf-8")
    monkeypatch.setenv("GRAPHQL_HANDLER_CONFIG", str(config))
    assert load_settings().cors_allow_headers == ["X-Api-Key"]


def test_yaml_allow_headers_of_wrong_type_uses_defaults(monkeypatch, tmp_path):
    config = tmp_path / "graphql.yml"
    config.write_text("cors:\n  allow_headers: {X-Api-Key: 1}\n", encoding="utf-8")
    monkeypatch.setenv("GRAPHQL_HANDLER_CONFIG", str(config))
    assert load_settings().cors_allow_headers == ["Content-Type", "Authorization"]


def test_yaml_quoted_booleans_are_parsed(monkeypatch, tmp_path):
    config = tmp_path / "graphql.yml"
    config.write_text(
        "cors:\n  allow_credentials: 'false'\nhandle_preflight: 'no'\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("GRAPHQL_HANDLER_CONFIG", str(config))
    settings = load_settings()
    assert settings.cors_allow_credentials is False
    assert settings.handle_preflight is False


def test_yaml_unrecognised_booleans_use_defaults(monkeypatch, tmp_path):
    config = tmp_path / "graphql.yml"
    config.write_text(
        "cors:\n  allow_credentials: sometimes\nhandle_preflight: 0.5\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("GRAPHQL_HANDLER_CONFIG", str(config))
    settings = load_settings()
    assert settings.cors_allow_credentials is True
    assert settings.handle_preflight is True
