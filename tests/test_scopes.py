"""
Multi-scope search tests
"""
import pytest

from portal_e2e.scopes import find_in_scopes, list_scopes
from tests.fakes import FakeElement

PASSWORD = ["input[type='password']"]


class TestListScopes:
    def test_main_frame_first_and_not_repeated(self, page):
        one = page.add_frame("https://portal.example/frame-1")
        two = page.add_frame("https://portal.example/frame-2")

        assert list_scopes(page) == [page.main_frame, one, two]


class TestFindInScopes:
    """Scope enumeration order and stale scopes"""

    @pytest.mark.asyncio
    async def test_page_wins_over_frames(self, page):
        frame = page.add_frame("https://portal.example/embedded")
        frame.add(FakeElement("input[type='password']"))
        page.add(FakeElement("input[type='password']"))

        scope, _ = await find_in_scopes(page, PASSWORD)

        assert scope is page.main_frame

    @pytest.mark.asyncio
    async def test_frames_in_attachment_order(self, page):
        first = page.add_frame("https://portal.example/first")
        second = page.add_frame("https://portal.example/second")
        second.add(FakeElement("input[type='password']"))
        first.add(FakeElement("input[type='password']"))

        scope, _ = await find_in_scopes(page, PASSWORD)

        assert scope is first

    @pytest.mark.asyncio
    async def test_detached_frame_is_skipped(self, page):
        stale = page.add_frame("https://portal.example/gone", detached=True)
        stale.add(FakeElement("input[type='password']"))
        live = page.add_frame("https://portal.example/live")
        live.add(FakeElement("input[type='password']"))

        scope, _ = await find_in_scopes(page, PASSWORD)

        assert scope is live

    @pytest.mark.asyncio
    async def test_scope_that_throws_is_skipped(self, page):
        broken = page.add_frame("https://portal.example/broken")
        broken.add(FakeElement("input[type='password']", broken=True))
        live = page.add_frame("https://portal.example/live")
        live.add(FakeElement("input[type='password']"))

        scope, _ = await find_in_scopes(page, PASSWORD)

        assert scope is live

    @pytest.mark.asyncio
    async def test_nothing_found(self, page):
        page.add_frame("https://portal.example/empty")
        assert await find_in_scopes(page, PASSWORD) is None
