# diagnostics.py
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Union

from playwright.async_api import Page

from .constants import logger
from .models import DiagnosticBundle


def prepare_run_dir(root: Union[str, Path], run_name: str) -> DiagnosticBundle:
    run_dir = Path(root) / run_name
    run_dir.mkdir(parents=True, exist_ok=True)
    return DiagnosticBundle(run_dir=run_dir)


async def take_screenshot(page: Page, path: Path):
    await page.screenshot(path=str(path), full_page=True)
    logger.info(f"Screenshot saved: {path}")


async def capture_failure(page: Page, bundle: DiagnosticBundle):
    """Best-effort failure evidence. Never raises, so the original error survives."""
    try:
        url = page.url
    except Exception:
        url = "(unknown)"
    logger.error(f"URL at failure: {url}")

    try:
        await page.screenshot(path=str(bundle.screenshot_path), full_page=True)
    except Exception as e:
        logger.warning(f"Could not capture failure screenshot: {e}")

    try:
        html = await page.content()
        bundle.markup_path.write_text(html, encoding="utf-8")
    except Exception as e:
        logger.warning(f"Could not dump page markup: {e}")


@asynccontextmanager
async def recorded_run(page: Page, bundle: DiagnosticBundle) -> AsyncIterator[DiagnosticBundle]:
    """Trace the whole block; on failure save fail.png/fail.html; always write the trace."""
    tracing = page.context.tracing
    await tracing.start(screenshots=True, snapshots=True, sources=True)
    try:
        yield bundle
    except Exception:
        await capture_failure(page, bundle)
        raise
    finally:
        try:
            await tracing.stop(path=str(bundle.trace_path))
            logger.info(f"Trace written to: {bundle.trace_path}")
        except Exception as e:
            logger.warning(f"Could not stop tracing: {e}")
        logger.info(f"Artifacts written to: {bundle.run_dir}")
