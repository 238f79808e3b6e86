# scopes.py
from typing import List, Optional, Sequence, Tuple

from playwright.async_api import Frame, Locator, Page

from .constants import logger
from .locator import describe_scope, first_visible


def list_scopes(page: Page) -> List[Frame]:
    """Main frame first, then every attached frame in attachment order."""
    scopes: List[Frame] = []
    try:
        scopes.append(page.main_frame)
    except Exception as e:
        logger.debug(f"Main frame unavailable: {e}")
    try:
        frames = list(page.frames)
    except Exception as e:
        logger.debug(f"Could not enumerate frames: {e}")
        frames = []
    for frame in frames:
        if not any(frame is s for s in scopes):
            scopes.append(frame)
    return scopes


async def find_in_scopes(page: Page, candidates: Sequence[str]) -> Optional[Tuple[Frame, Locator]]:
    """Return (frame, locator) for the first scope holding a visible match, else None."""
    for scope in list_scopes(page):
        try:
            if scope.is_detached():
                continue
            loc = await first_visible(scope, candidates)
        except Exception as e:
            logger.debug(f"Skipping stale scope {describe_scope(scope)}: {e}")
            continue
        if loc is not None:
            return scope, loc
    return None
