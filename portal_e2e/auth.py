# auth.py
from pathlib import Path
from typing import Any, List, Optional
from urllib.parse import urlparse

from playwright.async_api import Page

from .constants import (
    ENV_ADMIN_PASS_NEW, PAGE_SETTLE_MS, ROTATION_SETTLE_MS, SUBMIT_SETTLE_MS, logger,
)
from .diagnostics import take_screenshot
from .errors import (
    AuthenticationRejectedError, AuthenticationSignalTimeoutError, ElementNotFoundError,
    RotationCredentialMissingError, RotationSubmitNotFoundError,
)
from .interstitial import bypass_interstitial
from .locator import (
    describe_scope, find_phrase, first_visible, read_body_text, read_title, visible_matches,
    wait_first_visible,
)
from .login_form import LoginFormResolver, fill_login_form
from .models import AuthOutcome, AuthResult, AuthState, LoginForm, Settings
from .profile import SelectorProfile


class Authenticator:
    """Drives one login attempt from the login page to a logged-in signal.

    Every failure is raised as a PortalE2EError subclass; nothing is retried
    beyond the bounded polls inside each step.
    """

    def __init__(self, page: Page, settings: Settings, profile: SelectorProfile,
                 before_login_path: Optional[Path] = None):
        self.page = page
        self.settings = settings
        self.profile = profile
        self.before_login_path = before_login_path
        self.states: List[AuthState] = []

    def _enter(self, state: AuthState):
        self.states.append(state)
        logger.info(f"Login state -> {state.value}")

    @property
    def login_url(self) -> str:
        return self.settings.base_url.rstrip("/") + self.profile.login_path

    async def authenticate(self) -> AuthResult:
        self._enter(AuthState.START)
        await self.page.goto(self.login_url, wait_until="domcontentloaded")

        self._enter(AuthState.INTERSTITIAL_CHECK)
        await bypass_interstitial(self.page, self.profile.interstitial)
        await self.ensure_cookie_support()
        await self.page.wait_for_load_state("domcontentloaded")
        await self.page.wait_for_timeout(PAGE_SETTLE_MS)

        self._enter(AuthState.FORM_RESOLUTION)
        form = await LoginFormResolver(
            self.page, self.profile, self.settings.base_url,
            field_timeout=self.settings.field_timeout,
            poll_interval=self.settings.poll_interval,
        ).resolve()
        if self.before_login_path is not None:
            await take_screenshot(self.page, self.before_login_path)

        self._enter(AuthState.FILLING)
        await fill_login_form(form, self.settings.admin_user, self.settings.admin_pass)

        await self.submit(form)

        phrase = await self.detect_failure_text(form.scope)
        if phrase:
            self._enter(AuthState.EXPLICIT_FAILURE_DETECTED)
            raise AuthenticationRejectedError(phrase)

        self._enter(AuthState.ROTATION_CHECK)
        rotated = False
        if await self.rotation_required():
            self._enter(AuthState.ROTATION_FLOW)
            await self.complete_rotation()
            rotated = True

        self._enter(AuthState.SIGNAL_WAIT)
        try:
            await self.wait_for_signal()
        except AuthenticationSignalTimeoutError:
            self._enter(AuthState.TIMED_OUT)
            raise

        self._enter(AuthState.AUTHENTICATED)
        return AuthResult(
            outcome=AuthOutcome.AUTHENTICATED,
            final_url=self.page.url,
            rotated=rotated,
            states=list(self.states),
        )

    async def ensure_cookie_support(self):
        # The portal checks this cookie to decide whether cookies work at all.
        host = urlparse(self.settings.base_url).hostname or ""
        await self.page.context.add_cookies([{
            "name": self.profile.cookie_name,
            "value": self.profile.cookie_value,
            "domain": host,
            "path": "/",
        }])

    async def submit(self, form: LoginForm):
        await form.submit_control.click()
        self._enter(AuthState.SUBMITTED)
        await self.page.wait_for_load_state("domcontentloaded")
        await self.page.wait_for_timeout(SUBMIT_SETTLE_MS)

    async def detect_failure_text(self, form_scope: Any = None) -> Optional[str]:
        """Look for a rejection message on the page, and in the frame that held the form."""
        targets = [self.page]
        if form_scope is not None and form_scope is not self.page.main_frame:
            targets.append(form_scope)
        for target in targets:
            phrase = find_phrase(await read_body_text(target), self.profile.failure_phrases)
            if phrase:
                return phrase
        return None

    async def rotation_required(self) -> bool:
        await self.page.wait_for_timeout(ROTATION_SETTLE_MS)
        title = await read_title(self.page)
        title_match = find_phrase(title, self.profile.rotation.title_words)
        inputs = await visible_matches(self.page, self.profile.rotation.password_input)
        if title_match is None and len(inputs) < 2:
            return False
        logger.info(f"Detected forced password change page (title='{title}', visible password inputs={len(inputs)})")
        return True

    async def complete_rotation(self):
        new_password = self.settings.admin_pass_new
        if not new_password:
            raise RotationCredentialMissingError(ENV_ADMIN_PASS_NEW)

        rotation = self.profile.rotation
        inputs = await visible_matches(self.page, rotation.password_input)
        if len(inputs) < 2:
            raise ElementNotFoundError(
                f"Password change page shows {len(inputs)} visible password input(s), expected new + confirm",
                scope=describe_scope(self.page),
                candidates=(rotation.password_input,),
            )
        # Positional convention: 0 = new password, 1 = confirmation.
        await inputs[0].fill(new_password)
        await inputs[1].fill(new_password)

        submit = await first_visible(self.page, rotation.submit)
        if submit is None:
            raise RotationSubmitNotFoundError(
                "Detected password change page but could not find a visible submit button",
                scope=describe_scope(self.page),
                candidates=rotation.submit,
            )
        await submit.click()
        await self.page.wait_for_load_state("domcontentloaded")
        await self.page.wait_for_timeout(SUBMIT_SETTLE_MS)

        title_after = await read_title(self.page)
        body = await read_body_text(self.page)
        still_there = find_phrase(title_after, rotation.title_words) or find_phrase(body, rotation.warning_words)
        if still_there:
            # Password policy messages are portal- and locale-specific; the signal wait decides.
            logger.warning(f"After password change submit the page still mentions '{still_there}'; "
                           "the new password may have been rejected. See fail.html if login does not complete.")
        logger.info("Password change submitted. Continuing to wait for logged-in signals...")

    async def wait_for_signal(self):
        signals = self.profile.authenticated_signals
        try:
            await wait_first_visible(
                self.page, signals,
                timeout=self.settings.signal_timeout,
                interval=self.settings.signal_poll_interval,
                what="logged-in signal",
            )
        except ElementNotFoundError:
            raise AuthenticationSignalTimeoutError(self.settings.signal_timeout, signals)
