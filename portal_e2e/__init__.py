from .auth import Authenticator
from .config import load_settings
from .errors import (
    AuthenticationRejectedError,
    AuthenticationSignalTimeoutError,
    ConfigurationError,
    ElementNotFoundError,
    FieldReadbackError,
    LoginFormNotFoundError,
    PortalE2EError,
    RotationCredentialMissingError,
    RotationSubmitNotFoundError,
)
from .login_form import LoginFormResolver
from .models import AuthOutcome, AuthResult, AuthState, DiagnosticBundle, LoginForm, Settings
from .profile import SelectorProfile, load_profile

__version__ = "0.1.0"
