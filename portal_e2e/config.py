# config.py
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values, find_dotenv

from .constants import *
from .errors import ConfigurationError
from .models import Settings

_TRUTHY = {"1", "true", "yes", "on"}


def _require(env: Mapping[str, str], key: str) -> str:
    value = (env.get(key) or "").strip()
    if not value:
        raise ConfigurationError(f"Missing env var: {key}")
    return value


def clamp_signal_timeout(value: float) -> float:
    """Keep the logged-in signal wait within MIN_SIGNAL_TIMEOUT..MAX_SIGNAL_TIMEOUT seconds."""
    return min(max(value, MIN_SIGNAL_TIMEOUT), MAX_SIGNAL_TIMEOUT)


def _signal_timeout(raw: Optional[str]) -> float:
    if not raw:
        return SIGNAL_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{ENV_SIGNAL_TIMEOUT} must be a number of seconds, got {raw!r}")
    return clamp_signal_timeout(value)


def load_settings(env_file: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from a .env file and the process environment.

    Real environment variables win over values from the .env file. Every
    missing required key is reported by name as a ConfigurationError.
    """
    env = {}
    if env_file is not None or environ is None:
        path = env_file or find_dotenv(usecwd=True)
        if path:
            env.update({k: v for k, v in dotenv_values(path).items() if v is not None})
    env.update(os.environ if environ is None else environ)

    base_url = _require(env, ENV_BASE_URL).rstrip("/")
    user = _require(env, ENV_ADMIN_USER)

    password = env.get(ENV_ADMIN_PASS_CURRENT) or env.get(ENV_ADMIN_PASS)
    if not password:
        raise ConfigurationError(f"Missing env var: {ENV_ADMIN_PASS_CURRENT} (or {ENV_ADMIN_PASS})")

    profile = env.get(ENV_PROFILE)
    settings = Settings(
        base_url=base_url,
        admin_user=user,
        admin_pass=password,
        admin_pass_new=env.get(ENV_ADMIN_PASS_NEW) or None,
        artifacts_dir=Path(env.get(ENV_ARTIFACTS_DIR) or DEFAULT_ARTIFACTS_DIR),
        profile_path=Path(profile) if profile else None,
        headful=(env.get(ENV_HEADFUL) or "").strip().lower() in _TRUTHY,
        signal_timeout=_signal_timeout(env.get(ENV_SIGNAL_TIMEOUT)),
    )
    logger.debug(f"Loaded settings for {settings.base_url} (user={settings.admin_user}, "
                 f"rotation password {'set' if settings.admin_pass_new else 'not set'})")
    return settings
