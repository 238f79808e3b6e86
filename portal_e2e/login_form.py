# login_form.py
from typing import Optional

from playwright.async_api import Frame, Locator, Page

from .constants import ENCLOSING_FORM, FIELD_TIMEOUT, PAGE_SETTLE_MS, POLL_INTERVAL, REVEAL_SETTLE_MS, logger
from .errors import ElementNotFoundError, FieldReadbackError, LoginFormNotFoundError
from .interstitial import bypass_interstitial
from .locator import describe_scope, first_visible, is_shown, wait_first_visible
from .models import LoginForm
from .profile import SelectorProfile
from .scopes import find_in_scopes


class LoginFormResolver:
    """Finds one coherent login form, wherever the portal rendered it.

    The visible password input anchors the search. The identity field and the
    submit control are then looked up only inside the form that contains that
    password input, so fields from two different forms are never combined.
    """

    def __init__(self, page: Page, profile: SelectorProfile, base_url: str,
                 field_timeout: float = FIELD_TIMEOUT, poll_interval: float = POLL_INTERVAL):
        self.page = page
        self.profile = profile
        self.base_url = base_url.rstrip("/")
        self.field_timeout = field_timeout
        self.poll_interval = poll_interval

    async def resolve(self) -> LoginForm:
        form = await self.try_resolve()
        if form:
            return form

        if await self._reveal():
            form = await self.try_resolve()
            if form:
                return form

        await self._navigate_direct()
        form = await self.try_resolve()
        if form:
            return form

        raise LoginFormNotFoundError(
            "Could not find a visible login form (password field) in any frame",
            scope=describe_scope(self.page),
            candidates=self.profile.credential_field,
        )

    async def try_resolve(self) -> Optional[LoginForm]:
        hit = await find_in_scopes(self.page, self.profile.credential_field)
        if hit is None:
            return None
        frame, credential = hit
        form = await self.resolve_in_frame(frame, credential)
        logger.info(f"Login form found in frame: {describe_scope(frame)} (boundary={form.boundary})")
        return form

    async def resolve_in_frame(self, frame: Frame, credential: Locator) -> LoginForm:
        boundary_name = "form"
        boundary = credential.locator(ENCLOSING_FORM).first
        try:
            usable = await is_shown(boundary)
        except Exception as e:
            logger.debug(f"Enclosing form lookup failed: {e}")
            usable = False
        if not usable:
            logger.info("Password field has no visible enclosing form; scoping to document body")
            boundary_name = "body"
            boundary = frame.locator("body")

        try:
            identity = await wait_first_visible(boundary, self.profile.identity_field, self.field_timeout,
                                                self.poll_interval, what="login field in the password's form")
            submit = await wait_first_visible(boundary, self.profile.submit_control, self.field_timeout,
                                              self.poll_interval, what="submit control in the password's form")
        except ElementNotFoundError as e:
            raise LoginFormNotFoundError(
                f"Found a password field but not a complete login form around it: {e}",
                scope=describe_scope(frame),
                candidates=e.candidates,
            ) from e

        return LoginForm(
            scope=frame,
            identity_field=identity,
            credential_field=credential,
            submit_control=submit,
            boundary=boundary_name,
        )

    async def _reveal(self) -> bool:
        trigger = await first_visible(self.page, self.profile.reveal_triggers)
        if trigger is None:
            return False
        logger.info("No login form visible; clicking sign-in link to reveal it")
        await trigger.click()
        await self.page.wait_for_timeout(REVEAL_SETTLE_MS)
        return True

    async def _navigate_direct(self):
        url = self.base_url + self.profile.direct_login_path
        logger.info(f"No login form visible; navigating to login portlet directly: {url}")
        await self.page.goto(url, wait_until="domcontentloaded")
        await bypass_interstitial(self.page, self.profile.interstitial)
        await self.page.wait_for_timeout(PAGE_SETTLE_MS)


async def fill_login_form(form: LoginForm, user: str, password: str):
    """Fill identity then credential, and refuse to go on unless both read back non-empty."""
    await form.identity_field.fill(user)
    await form.credential_field.fill(password)

    login_val = await form.identity_field.input_value() or ""
    pass_val = await form.credential_field.input_value() or ""
    logger.info(f"Filled login length={len(login_val)}, pass length={len(pass_val)}")

    if not login_val.strip() or not pass_val.strip():
        raise FieldReadbackError(
            "Refusing to submit: login/password inputs are still empty. "
            "This means we selected the wrong inputs (or they are not fillable)."
        )
