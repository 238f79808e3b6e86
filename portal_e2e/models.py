# models.py
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Tuple

from .constants import (
    AFTER_LOGIN_PNG, BEFORE_LOGIN_PNG, DEFAULT_ARTIFACTS_DIR, DEFAULT_TIMEOUT_MS, FAIL_HTML, FAIL_PNG,
    FIELD_TIMEOUT, POLL_INTERVAL, SIGNAL_POLL_INTERVAL, SIGNAL_TIMEOUT, TRACE_FILE,
)


class AuthOutcome(Enum):
    AUTHENTICATED = "authenticated"
    EXPLICIT_FAILURE = "explicit_failure"
    ROTATION_REQUIRED = "rotation_required"
    TIMED_OUT = "timed_out"


class AuthState(Enum):
    START = "start"
    INTERSTITIAL_CHECK = "interstitial_check"
    FORM_RESOLUTION = "form_resolution"
    FILLING = "filling"
    SUBMITTED = "submitted"
    EXPLICIT_FAILURE_DETECTED = "explicit_failure_detected"
    ROTATION_CHECK = "rotation_check"
    ROTATION_FLOW = "rotation_flow"
    SIGNAL_WAIT = "signal_wait"
    AUTHENTICATED = "authenticated"
    TIMED_OUT = "timed_out"


@dataclass
class LoginForm:
    scope: Any  # Page or Frame holding the form
    identity_field: Any
    credential_field: Any
    submit_control: Any
    boundary: str = "form"  # "form", or "body" when no visible form encloses the fields


@dataclass
class AuthResult:
    outcome: AuthOutcome
    final_url: str
    rotated: bool = False
    states: List[AuthState] = field(default_factory=list)


@dataclass
class DiagnosticBundle:
    run_dir: Path

    @property
    def trace_path(self) -> Path:
        return self.run_dir / TRACE_FILE

    @property
    def screenshot_path(self) -> Path:
        return self.run_dir / FAIL_PNG

    @property
    def markup_path(self) -> Path:
        return self.run_dir / FAIL_HTML

    @property
    def before_login_path(self) -> Path:
        return self.run_dir / BEFORE_LOGIN_PNG

    @property
    def after_login_path(self) -> Path:
        return self.run_dir / AFTER_LOGIN_PNG

    def step_path(self, name: str) -> Path:
        return self.run_dir / f"{name}.png"


@dataclass(frozen=True)
class MenuSection:
    name: str
    children: Tuple[str, ...] = ()


@dataclass
class Settings:
    base_url: str
    admin_user: str
    admin_pass: str
    admin_pass_new: Optional[str] = None
    artifacts_dir: Path = Path(DEFAULT_ARTIFACTS_DIR)
    profile_path: Optional[Path] = None
    headful: bool = False
    signal_timeout: float = SIGNAL_TIMEOUT
    signal_poll_interval: float = SIGNAL_POLL_INTERVAL
    poll_interval: float = POLL_INTERVAL
    field_timeout: float = FIELD_TIMEOUT
    default_timeout_ms: int = DEFAULT_TIMEOUT_MS
