# menu.py
from playwright.async_api import Locator, Page, TimeoutError as PlaywrightTimeoutError

from .constants import (
    ANY_VISIBLE_TIMEOUT, MENU_ROOT_TIMEOUT, MENU_SETTLE_MS, MENU_TEXT_TIMEOUT, PAGE_SETTLE_MS,
    POLL_INTERVAL, SIDEBAR_CLICK_SETTLE_MS, logger,
)
from .diagnostics import take_screenshot
from .errors import ElementNotFoundError
from .locator import describe_scope, first_visible, wait_first_visible
from .models import DiagnosticBundle
from .profile import MenuProfile


class ProductMenuVerifier:
    """Checks that the product menu shows the expected sections and children."""

    def __init__(self, page: Page, menu: MenuProfile, poll_interval: float = POLL_INTERVAL):
        self.page = page
        self.menu = menu
        self.poll_interval = poll_interval

    async def verify(self, bundle: DiagnosticBundle):
        sidebar = await self.ensure_open()
        await self.ensure_root(sidebar)
        await take_screenshot(self.page, bundle.step_path("02_product_menu_open"))

        for section in self.menu.sections:
            await self.expect_text_visible(sidebar, section.name)
        await take_screenshot(self.page, bundle.step_path("03_top_level_verified"))

        for section in self.menu.sections:
            if not section.children:
                continue
            await self.click_entry(sidebar, section.name)
            for child in section.children:
                await self.expect_text_visible(sidebar, child)
            logger.info(f"Verified menu section '{section.name}' ({len(section.children)} children)")
        await take_screenshot(self.page, bundle.step_path("04_submenus_verified"))

        await self.click_entry(sidebar, self.menu.page_tree)
        await self.expect_any_visible(self.menu.page_tree_markers, "page tree panel")
        await take_screenshot(self.page, bundle.step_path("05_page_tree_panel"))

        await self.expect_any_visible(self.menu.page_list_markers, "page list")

    async def ensure_open(self) -> Locator:
        sidebar = await first_visible(self.page, self.menu.sidebar)
        if sidebar is not None:
            return sidebar

        toggle = await first_visible(self.page, self.menu.toggle)
        if toggle is None:
            # Top bar icons can render late
            await self.page.wait_for_timeout(PAGE_SETTLE_MS)
            toggle = await first_visible(self.page, self.menu.toggle)
        if toggle is None:
            raise ElementNotFoundError("Could not find a visible product menu toggle",
                                       scope=describe_scope(self.page), candidates=self.menu.toggle)
        await toggle.click()
        await self.page.wait_for_timeout(MENU_SETTLE_MS)

        for selector in self.menu.sidebar:
            loc = self.page.locator(selector).first
            try:
                if await loc.count() > 0:
                    await loc.wait_for(state="visible", timeout=MENU_TEXT_TIMEOUT * 1000)
                    return loc
            except PlaywrightTimeoutError:
                logger.debug(f"Sidebar {selector!r} present but not visible")
        raise ElementNotFoundError("Product menu did not open (sidebar not visible)",
                                   scope=describe_scope(self.page), candidates=self.menu.sidebar)

    async def ensure_root(self, sidebar: Locator):
        # The page tree panel replaces the menu and shows a back link
        back = sidebar.get_by_text(self.menu.back_label, exact=True).first
        if await back.count() > 0 and await back.is_visible():
            await back.click()
            await self.page.wait_for_timeout(MENU_SETTLE_MS)
        await self.expect_text_visible(sidebar, self.menu.root_marker, timeout=MENU_ROOT_TIMEOUT)

    async def click_entry(self, sidebar: Locator, text: str):
        entry = sidebar.get_by_role("link", name=text, exact=True).first
        try:
            if await entry.count() == 0 or not await entry.is_visible():
                entry = sidebar.get_by_text(text, exact=True).first
        except Exception:
            entry = sidebar.get_by_text(text, exact=True).first
        await entry.click()
        await self.page.wait_for_timeout(SIDEBAR_CLICK_SETTLE_MS)

    async def expect_text_visible(self, sidebar: Locator, text: str, timeout: float = MENU_TEXT_TIMEOUT):
        loc = sidebar.get_by_text(text, exact=True).first
        try:
            await loc.wait_for(state="visible", timeout=timeout * 1000)
        except PlaywrightTimeoutError:
            raise ElementNotFoundError(f"Menu entry '{text}' is not visible", scope="product menu",
                                       candidates=(text,))

    async def expect_any_visible(self, candidates, what: str, timeout: float = ANY_VISIBLE_TIMEOUT):
        await wait_first_visible(self.page, candidates, timeout, self.poll_interval, what=what)
