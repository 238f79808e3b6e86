# session.py
from typing import Dict, List, Optional

from playwright.async_api import Browser, async_playwright

from .constants import VIEWPORT, logger
from .models import AuthResult, Settings
from .profile import SelectorProfile
from .scenarios import SCENARIOS


class PortalSession:
    """Owns the browser; every scenario gets a fresh context and page."""

    def __init__(self, settings: Settings, profile: SelectorProfile):
        self.settings = settings
        self.profile = profile
        self.playwright = None
        self.browser: Optional[Browser] = None

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.cleanup()

    async def initialize(self):
        self.playwright = await async_playwright().start()
        self.browser = await self.playwright.chromium.launch(headless=not self.settings.headful)

    async def cleanup(self):
        if self.browser:
            await self.browser.close()
        if self.playwright:
            await self.playwright.stop()

    async def run_scenario(self, name: str) -> AuthResult:
        scenario = SCENARIOS[name]
        context = await self.browser.new_context(viewport=VIEWPORT)
        try:
            page = await context.new_page()
            logger.info(f"Running scenario '{name}' against {self.settings.base_url}")
            return await scenario(page, self.settings, self.profile)
        finally:
            await context.close()

    async def run(self, names: List[str]) -> Dict[str, AuthResult]:
        return {name: await self.run_scenario(name) for name in names}
