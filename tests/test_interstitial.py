"""
Access-warning interstitial tests
"""
import pytest

from portal_e2e.constants import INTERSTITIAL_ATTEMPTS, INTERSTITIAL_POLL_MS
from portal_e2e.interstitial import bypass_interstitial, detect_interstitial
from tests.fakes import FakeElement

CONTINUE = "button:has-text('Continue')"


class TestInterstitial:

    @pytest.mark.asyncio
    async def test_detected_by_title(self, page, profile):
        page.title_text = "Codespaces Access Port"
        button = page.add(FakeElement(CONTINUE))

        assert await bypass_interstitial(page, profile.interstitial) is True
        assert button.clicks == 1
        assert "domcontentloaded" in page.waits

    @pytest.mark.asyncio
    async def test_detected_by_phrase_and_dismiss(self, page, profile):
        page.add(FakeElement(profile.interstitial.phrase))
        button = page.add(FakeElement(CONTINUE))

        assert await bypass_interstitial(page, profile.interstitial) is True
        assert button.clicks == 1

    @pytest.mark.asyncio
    async def test_phrase_without_dismiss_is_not_the_gate(self, page, profile):
        page.add(FakeElement(profile.interstitial.phrase))

        assert await detect_interstitial(page, profile.interstitial) is None

    @pytest.mark.asyncio
    async def test_unreadable_title_is_not_fatal(self, page, profile):
        page.title_error = True

        assert await bypass_interstitial(page, profile.interstitial) is False

    @pytest.mark.asyncio
    async def test_absent_gate_polls_a_bounded_number_of_times(self, page, profile):
        page.add(FakeElement(CONTINUE))

        assert await bypass_interstitial(page, profile.interstitial) is False
        assert page.waits == [INTERSTITIAL_POLL_MS] * INTERSTITIAL_ATTEMPTS
        assert page.clicked == []

    @pytest.mark.asyncio
    async def test_title_before_button_keeps_polling(self, page, profile):
        page.title_text = "Codespaces Access Port"
        rendered = []

        def render_button(timeout):
            if not rendered:
                rendered.append(page.add(FakeElement(CONTINUE)))
        page.on_wait = render_button

        assert await detect_interstitial(page, profile.interstitial) is None
        assert await bypass_interstitial(page, profile.interstitial) is True
        assert rendered[0].clicks == 1
        assert page.waits[0] == INTERSTITIAL_POLL_MS
