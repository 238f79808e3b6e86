"""
Login form resolution tests
"""
import pytest

from portal_e2e.errors import FieldReadbackError, LoginFormNotFoundError
from portal_e2e.login_form import LoginFormResolver, fill_login_form
from tests.fakes import FakeElement, add_login_form, form


def resolver(page, profile, settings):
    return LoginFormResolver(page, profile, settings.base_url,
                             field_timeout=settings.field_timeout, poll_interval=settings.poll_interval)


class TestResolve:
    """Credential-anchored resolution"""

    @pytest.mark.asyncio
    async def test_fields_come_from_the_password_form(self, page, profile, settings):
        # A search form earlier on the page also has a text input and a submit button
        search = page.add(form())
        page.add(FakeElement("input[type='text']", form=search), FakeElement("button[type='submit']", form=search))
        _, user, password, button = add_login_form(page.main_frame)

        login = await resolver(page, profile, settings).resolve()

        assert login.scope is page.main_frame
        assert login.boundary == "form"
        assert login.identity_field._resolve() is user
        assert login.credential_field._resolve() is password
        assert login.submit_control._resolve() is button

    @pytest.mark.asyncio
    async def test_never_splices_two_forms(self, page, profile, settings):
        only_password = page.add(form())
        page.add(FakeElement("input[type='password']", form=only_password))
        only_user = page.add(form())
        page.add(FakeElement("input[type='text']", form=only_user),
                 FakeElement("button[type='submit']", form=only_user))

        with pytest.raises(LoginFormNotFoundError):
            await resolver(page, profile, settings).resolve()

    @pytest.mark.asyncio
    async def test_hidden_password_form_earlier_on_page(self, page, profile, settings):
        # A closed reset dialog with its own password input, then a header search form
        dialog = page.add(form(visible=False))
        page.add(FakeElement("input[type='password']", form=dialog, visible=False))
        search = page.add(form())
        page.add(FakeElement("input[type='text']", form=search))
        container, user, password, button = add_login_form(page.main_frame)

        login = await resolver(page, profile, settings).resolve()

        assert login.boundary == "form"
        assert login.credential_field._resolve() is password
        assert login.identity_field._resolve() is user
        assert login.submit_control._resolve() is button
        assert user.form is container

    @pytest.mark.asyncio
    async def test_hidden_form_falls_back_to_body(self, page, profile, settings):
        _, user, password, _ = add_login_form(page.main_frame, form_visible=False)

        login = await resolver(page, profile, settings).resolve()

        assert login.boundary == "body"
        assert login.identity_field._resolve() is user
        assert login.credential_field._resolve() is password

    @pytest.mark.asyncio
    async def test_site_specific_identity_field_preferred(self, page, profile, settings):
        container, generic, _, _ = add_login_form(page.main_frame)
        specific = page.add(FakeElement("input[id*='LoginPortlet_login']", form=container))

        login = await resolver(page, profile, settings).resolve()

        assert login.identity_field._resolve() is specific
        assert login.identity_field._resolve() is not generic

    @pytest.mark.asyncio
    async def test_form_inside_iframe(self, page, profile, settings):
        frame = page.add_frame("https://portal.example/login-widget")
        add_login_form(frame)

        login = await resolver(page, profile, settings).resolve()

        assert login.scope is frame


class TestFallbacks:
    """Reveal trigger and direct navigation"""

    @pytest.mark.asyncio
    async def test_reveal_trigger_renders_form(self, page, profile, settings):
        page.add(FakeElement("a:has-text('Sign In')", on_click=lambda: add_login_form(page.main_frame)))

        login = await resolver(page, profile, settings).resolve()

        assert page.clicked == ["a:has-text('Sign In')"]
        assert login.boundary == "form"
        assert page.gotos == []

    @pytest.mark.asyncio
    async def test_direct_navigation_renders_form(self, page, profile, settings):
        page.on_goto = lambda url: add_login_form(page.main_frame)

        login = await resolver(page, profile, settings).resolve()

        assert page.gotos == [settings.base_url + profile.direct_login_path]
        assert login.credential_field is not None

    @pytest.mark.asyncio
    async def test_all_strategies_exhausted(self, page, profile, settings):
        page.add(FakeElement("input[type='password']", visible=False))

        with pytest.raises(LoginFormNotFoundError) as exc_info:
            await resolver(page, profile, settings).resolve()

        assert exc_info.value.candidates == profile.credential_field
        assert len(page.gotos) == 1


class TestFillLoginForm:

    @pytest.mark.asyncio
    async def test_values_read_back(self, page, profile, settings):
        _, user, password, _ = add_login_form(page.main_frame)
        login = await resolver(page, profile, settings).resolve()

        await fill_login_form(login, "admin@portal.example", "secret")

        assert user.value == "admin@portal.example"
        assert password.value == "secret"

    @pytest.mark.asyncio
    async def test_empty_read_back_refuses_submit(self, page, profile, settings):
        _, user, _, button = add_login_form(page.main_frame)
        user.fillable = False
        login = await resolver(page, profile, settings).resolve()

        with pytest.raises(FieldReadbackError):
            await fill_login_form(login, "admin@portal.example", "secret")
        assert button.clicks == 0
