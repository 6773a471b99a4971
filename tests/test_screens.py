"""
Tests for the login/home presenters.
"""

import pytest

from adapters.memory_session import InMemorySessionFacade
from core.domain.models import Screen
from core.services.credential_workflow import CredentialWorkflow
from core.services.screens import HomePresenter, LoginPresenter
from core.services.session_observer import SessionObserver


class RecordingNavigator:
    def __init__(self):
        self.replaced = []

    def replace(self, screen):
        self.replaced.append(screen)


class RecordingAlert:
    def __init__(self):
        self.messages = []

    def show(self, message):
        self.messages.append(message)


@pytest.fixture
def screen_env(validator):
    facade = InMemorySessionFacade()
    workflow = CredentialWorkflow(facade=facade, validator=validator)
    navigator = RecordingNavigator()
    alert = RecordingAlert()
    login = LoginPresenter(
        workflow=workflow,
        observer=SessionObserver(facade),
        navigator=navigator,
        alert=alert,
    )
    home = HomePresenter(workflow=workflow, facade=facade, navigator=navigator, alert=alert)
    return facade, login, home, navigator, alert


class TestLoginPresenter:

    @pytest.mark.asyncio
    async def test_register_navigates_home(self, screen_env):
        facade, login, home, navigator, alert = screen_env
        login.mount()

        await login.register("a@x.com", "secret1")

        assert navigator.replaced == [Screen.HOME]
        assert alert.messages == []
        assert home.email == "a@x.com"

    @pytest.mark.asyncio
    async def test_failed_login_alerts_and_stays(self, screen_env):
        facade, login, home, navigator, alert = screen_env
        login.mount()

        await login.login("ghost@x.com", "secret1")

        assert navigator.replaced == []
        assert alert.messages == ["No user found with this email."]

    @pytest.mark.asyncio
    async def test_forgot_password_confirms(self, screen_env):
        facade, login, home, navigator, alert = screen_env
        facade.add_account("a@x.com", "secret1")

        await login.forgot_password("a@x.com")

        assert alert.messages == ["Password reset email sent!"]

    @pytest.mark.asyncio
    async def test_unmounted_screen_does_not_navigate(self, screen_env):
        facade, login, home, navigator, alert = screen_env
        login.mount()
        login.unmount()

        await login.register("a@x.com", "secret1")

        assert navigator.replaced == []
        assert not login.mounted


class TestHomePresenter:

    @pytest.mark.asyncio
    async def test_sign_out_returns_to_login(self, screen_env):
        facade, login, home, navigator, alert = screen_env
        login.mount()
        await login.register("a@x.com", "secret1")

        await home.sign_out()

        assert navigator.replaced == [Screen.HOME, Screen.LOGIN]
        assert home.email is None
