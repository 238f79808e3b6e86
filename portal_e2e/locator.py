# locator.py
import asyncio
import time
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar

from playwright.async_api import Locator

from .constants import MAX_MATCHES, POLL_INTERVAL, logger
from .errors import ElementNotFoundError

T = TypeVar("T")


def describe_scope(scope: Any) -> str:
    try:
        url = scope.url
    except Exception:
        url = None
    if isinstance(url, str):
        return url or "(no url)"
    return repr(scope)


async def poll_until(check: Callable[[], Awaitable[Optional[T]]], timeout: float,
                     interval: float = POLL_INTERVAL) -> Optional[T]:
    """Run check until it returns something other than None or the deadline passes.

    The check always runs at least once, so timeout=0 is a single immediate look.
    """
    deadline = time.monotonic() + timeout
    while True:
        result = await check()
        if result is not None:
            return result
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return None
        await asyncio.sleep(min(interval, remaining))


async def is_shown(locator: Locator) -> bool:
    return await locator.count() > 0 and await locator.is_visible()


async def first_visible(scope: Any, candidates: Sequence[str]) -> Optional[Locator]:
    """Single pass over candidates; returns the first existing and visible match, or None.

    Hidden matches of a candidate are passed over, so a hidden copy earlier in
    the document does not mask a visible one further down.
    """
    for selector in candidates:
        try:
            loc = scope.locator(selector)
            total = min(await loc.count(), MAX_MATCHES)
            for i in range(total):
                item = loc.nth(i)
                if await item.is_visible():
                    return item
        except Exception as e:
            logger.debug(f"Skipping candidate {selector!r} in {describe_scope(scope)}: {e}")
    return None


async def wait_first_visible(scope: Any, candidates: Sequence[str], timeout: float,
                             interval: float = POLL_INTERVAL, what: str = "element") -> Locator:
    loc = await poll_until(lambda: first_visible(scope, candidates), timeout, interval)
    if loc is None:
        raise ElementNotFoundError(
            f"Could not find a visible {what} within {timeout:g}s",
            scope=describe_scope(scope),
            candidates=candidates,
        )
    return loc


async def visible_matches(scope: Any, selector: str, limit: int = MAX_MATCHES) -> List[Locator]:
    """Every visible match of one selector, in document order."""
    matches = []
    try:
        loc = scope.locator(selector)
        total = min(await loc.count(), limit)
    except Exception as e:
        logger.debug(f"Could not count {selector!r} in {describe_scope(scope)}: {e}")
        return matches
    for i in range(total):
        item = loc.nth(i)
        try:
            if await item.is_visible():
                matches.append(item)
        except Exception:
            continue
    return matches


async def read_title(page: Any) -> str:
    try:
        return await page.title() or ""
    except Exception as e:
        logger.debug(f"Could not read page title: {e}")
        return ""


async def read_body_text(page: Any) -> str:
    try:
        return await page.text_content("body") or ""
    except Exception as e:
        logger.debug(f"Could not read body text: {e}")
        return ""


def find_phrase(text: str, phrases: Sequence[str]) -> Optional[str]:
    lowered = text.lower()
    for phrase in phrases:
        if phrase.lower() in lowered:
            return phrase
    return None
