# interstitial.py
from typing import Optional

from playwright.async_api import Locator, Page

from .constants import INTERSTITIAL_ATTEMPTS, INTERSTITIAL_POLL_MS, INTERSTITIAL_SETTLE_MS, logger
from .locator import read_title
from .profile import InterstitialProfile


async def _dismiss_control(page: Page, profile: InterstitialProfile) -> Optional[Locator]:
    for selector in profile.dismiss:
        try:
            loc = page.locator(selector)
            if await loc.count() > 0:
                return loc.first
        except Exception as e:
            logger.debug(f"Dismiss candidate {selector!r} failed: {e}")
    return None


async def detect_interstitial(page: Page, profile: InterstitialProfile) -> Optional[Locator]:
    """Return the dismiss control when the warning gate is showing, else None."""
    title = await read_title(page)
    dismiss = await _dismiss_control(page, profile)
    if profile.title.lower() in title.lower():
        # The gate's title can arrive before its button; keep polling until both are there
        return dismiss

    try:
        has_phrase = await page.locator(profile.phrase).count() > 0
    except Exception as e:
        logger.debug(f"Interstitial phrase check failed: {e}")
        return None
    if has_phrase and dismiss is not None:
        return dismiss
    return None


async def bypass_interstitial(page: Page, profile: InterstitialProfile,
                              attempts: int = INTERSTITIAL_ATTEMPTS) -> bool:
    """Dismiss the access-warning gate if it shows up within a few polls.

    Returns True when the gate was dismissed, False when it never appeared.
    """
    for _ in range(attempts):
        dismiss = await detect_interstitial(page, profile)
        if dismiss is not None:
            logger.info(f"Detected '{profile.title}' warning page. Clicking dismiss...")
            await dismiss.click()
            await page.wait_for_load_state("domcontentloaded")
            await page.wait_for_timeout(INTERSTITIAL_SETTLE_MS)
            return True
        await page.wait_for_timeout(INTERSTITIAL_POLL_MS)
    return False
