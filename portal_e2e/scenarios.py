# scenarios.py
from playwright.async_api import Page

from .auth import Authenticator
from .constants import logger
from .diagnostics import prepare_run_dir, recorded_run, take_screenshot
from .menu import ProductMenuVerifier
from .models import AuthResult, Settings
from .profile import SelectorProfile


async def login_guest_home(page: Page, settings: Settings, profile: SelectorProfile) -> AuthResult:
    bundle = prepare_run_dir(settings.artifacts_dir, "login_guest_home")
    page.set_default_timeout(settings.default_timeout_ms)

    async with recorded_run(page, bundle):
        auth = Authenticator(page, settings, profile, before_login_path=bundle.before_login_path)
        result = await auth.authenticate()
        await take_screenshot(page, bundle.after_login_path)
        logger.info(f"Final URL: {page.url}")
    return result


async def verify_product_menu(page: Page, settings: Settings, profile: SelectorProfile) -> AuthResult:
    bundle = prepare_run_dir(settings.artifacts_dir, "product_menu")
    page.set_default_timeout(settings.default_timeout_ms)

    async with recorded_run(page, bundle):
        result = await Authenticator(page, settings, profile).authenticate()
        await take_screenshot(page, bundle.step_path("01_after_login"))
        await ProductMenuVerifier(page, profile.menu, settings.poll_interval).verify(bundle)
    return result


SCENARIOS = {
    "login": login_guest_home,
    "menu": verify_product_menu,
}
