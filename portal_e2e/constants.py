# constants.py
import logging

logger = logging.getLogger(__name__)

# Environment keys
ENV_BASE_URL = "PORTAL_BASE_URL"
ENV_ADMIN_USER = "PORTAL_ADMIN_USER"
ENV_ADMIN_PASS_CURRENT = "PORTAL_ADMIN_PASS_CURRENT"
ENV_ADMIN_PASS = "PORTAL_ADMIN_PASS"
ENV_ADMIN_PASS_NEW = "PORTAL_ADMIN_PASS_NEW"
ENV_ARTIFACTS_DIR = "PORTAL_ARTIFACTS_DIR"
ENV_PROFILE = "PORTAL_PROFILE"
ENV_SIGNAL_TIMEOUT = "PORTAL_SIGNAL_TIMEOUT"
ENV_HEADFUL = "PORTAL_HEADFUL"

DEFAULT_ARTIFACTS_DIR = "artifacts"
DEFAULT_PROFILE = "liferay"

# Timings (seconds unless suffixed _MS)
DEFAULT_TIMEOUT_MS = 90_000
POLL_INTERVAL = 0.25
SIGNAL_POLL_INTERVAL = 0.3
SIGNAL_TIMEOUT = 60.0
MIN_SIGNAL_TIMEOUT = 1.0
MAX_SIGNAL_TIMEOUT = 90.0
FIELD_TIMEOUT = 10.0
ANY_VISIBLE_TIMEOUT = 15.0
MENU_TEXT_TIMEOUT = 10.0
MENU_ROOT_TIMEOUT = 20.0

INTERSTITIAL_ATTEMPTS = 6
INTERSTITIAL_POLL_MS = 250
INTERSTITIAL_SETTLE_MS = 600
PAGE_SETTLE_MS = 800
REVEAL_SETTLE_MS = 800
SUBMIT_SETTLE_MS = 1200
ROTATION_SETTLE_MS = 600
MENU_SETTLE_MS = 500
SIDEBAR_CLICK_SETTLE_MS = 300

# Nearest <form> around a located element
ENCLOSING_FORM = "xpath=ancestor::form[1]"

# Upper bound on matches inspected per selector
MAX_MATCHES = 25

VIEWPORT = {"width": 1366, "height": 900}

# Artifact file names (fixed per run directory)
TRACE_FILE = "trace.zip"
BEFORE_LOGIN_PNG = "before_login.png"
AFTER_LOGIN_PNG = "after_login.png"
FAIL_PNG = "fail.png"
FAIL_HTML = "fail.html"
