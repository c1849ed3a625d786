import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import pathlib
import yaml


DEFAULT_ALLOW_HEADERS = ("Content-Type", "Authorization")
ALLOW_METHODS = "GET,POST,OPTIONS"


@dataclass(frozen=True)
class Settings:
    cors_allow_origin: str = "*"
    cors_allow_credentials: bool = True
    cors_allow_headers: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOW_HEADERS))
    handle_preflight: bool = True
    extra_headers: Dict[str, str] = field(default_factory=dict)
    log_level: str = "INFO"


def load_settings() -> Settings:
    file_conf = _load_config_file(os.getenv("GRAPHQL_HANDLER_CONFIG"))
    cors_conf = file_conf.get("cors") if isinstance(file_conf.get("cors"), dict) else {}

    origin = os.getenv("GRAPHQL_CORS_ALLOW_ORIGIN") or str(cors_conf.get("allow_origin") or "*")

    credentials = _parse_bool(os.getenv("GRAPHQL_CORS_ALLOW_CREDENTIALS"))
    if credentials is None:
        credentials = _parse_bool(cors_conf.get("allow_credentials"))
    if credentials is None:
        credentials = True

    headers_env = os.getenv("GRAPHQL_CORS_ALLOW_HEADERS")
    if headers_env is not None:
        allow_headers = _parse_list(headers_env)
    else:
        allow_headers = _parse_list(cors_conf.get("allow_headers"))

    preflight = _parse_bool(os.getenv("GRAPHQL_HANDLE_PREFLIGHT"))
    if preflight is None:
        preflight = _parse_bool(file_conf.get("handle_preflight"))
    if preflight is None:
        preflight = True

    extra = file_conf.get("headers")
    extra_headers = {str(k): str(v) for k, v in extra.items()} if isinstance(extra, dict) else {}

    return Settings(
        cors_allow_origin=origin,
        cors_allow_credentials=credentials,
        cors_allow_headers=allow_headers or list(DEFAULT_ALLOW_HEADERS),
        handle_preflight=preflight,
        extra_headers=extra_headers,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )


def _parse_bool(value: Any) -> Optional[bool]:
    # None means "unset or unrecognised", callers fall back to their default
    if isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return None
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return None


def _parse_list(value: Any) -> List[str]:
    # Accepts a YAML list or a comma-separated string
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    if isinstance(value, list):
        return [str(v).strip() for v in value if isinstance(v, str) and v.strip()]
    return []


def _load_config_file(path: Optional[str]) -> dict:
    if not path:
        return {}
    config_path = pathlib.Path(path).expanduser()
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return data
