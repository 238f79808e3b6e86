# errors.py
from typing import Optional, Sequence

from .models import AuthOutcome


class PortalE2EError(Exception):
    """Base class for every failure raised by the login engine."""

    outcome: Optional[AuthOutcome] = None


class ConfigurationError(PortalE2EError):
    pass


class RotationCredentialMissingError(ConfigurationError):
    outcome = AuthOutcome.ROTATION_REQUIRED

    def __init__(self, env_key: str):
        super().__init__(
            f"The portal requires a password change, but {env_key} is not set. "
            f"Set {env_key} and re-run."
        )
        self.env_key = env_key


class ElementNotFoundError(PortalE2EError):
    def __init__(self, message: str, scope: str = "", candidates: Sequence[str] = ()):
        detail = message
        if scope:
            detail += f" [scope={scope}]"
        if candidates:
            detail += f" [candidates={', '.join(candidates)}]"
        super().__init__(detail)
        self.scope = scope
        self.candidates = tuple(candidates)


class LoginFormNotFoundError(ElementNotFoundError):
    pass


class FieldReadbackError(PortalE2EError):
    """Filled login inputs read back empty, so the wrong inputs were selected."""


class AuthenticationRejectedError(PortalE2EError):
    outcome = AuthOutcome.EXPLICIT_FAILURE

    def __init__(self, phrase: str):
        super().__init__(f"Login rejected by the portal: '{phrase}' is shown on the page")
        self.phrase = phrase


class RotationSubmitNotFoundError(ElementNotFoundError):
    outcome = AuthOutcome.ROTATION_REQUIRED


class AuthenticationSignalTimeoutError(PortalE2EError):
    outcome = AuthOutcome.TIMED_OUT

    def __init__(self, timeout: float, signals: Sequence[str] = ()):
        super().__init__(
            f"No logged-in signal became visible within {timeout:g}s; "
            "the login was either silently rejected or the page is slow. Check artifacts."
        )
        self.timeout = timeout
        self.signals = tuple(signals)
