"""
CLI entry point tests
"""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from portal_e2e.errors import AuthenticationSignalTimeoutError
from portal_e2e.main import main, parse_args
from portal_e2e.models import AuthOutcome, AuthResult

ENV = {
    "PORTAL_BASE_URL": "https://portal.example",
    "PORTAL_ADMIN_USER": "admin@portal.example",
    "PORTAL_ADMIN_PASS": "secret",
}


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ENV:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("PORTAL_ADMIN_PASS_CURRENT", raising=False)
    return monkeypatch


def fake_session(run_result=None, run_error=None):
    session = MagicMock()
    session.run = AsyncMock(return_value=run_result, side_effect=run_error)
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=session)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory, session


class TestMain:

    def test_parse_defaults(self):
        args = parse_args([])
        assert args.scenario == "login"
        assert args.headful is False

    @pytest.mark.asyncio
    async def test_missing_configuration_exit_code(self, clean_env):
        assert await main([]) == 2

    @pytest.mark.asyncio
    async def test_runs_all_scenarios(self, clean_env, tmp_path):
        for key, value in ENV.items():
            clean_env.setenv(key, value)
        result = AuthResult(AuthOutcome.AUTHENTICATED, "https://portal.example/web/guest/home")
        factory, session = fake_session({"login": result, "menu": result})

        with patch("portal_e2e.main.PortalSession", factory):
            code = await main(["--scenario", "all", "--artifacts-dir", str(tmp_path / "out"), "--signal-timeout", "500"])

        assert code == 0
        session.run.assert_awaited_once_with(["login", "menu"])
        settings = factory.call_args[0][0]
        assert settings.signal_timeout == 90.0
        assert settings.artifacts_dir == tmp_path / "out"

    @pytest.mark.asyncio
    async def test_engine_failure_exit_code(self, clean_env):
        for key, value in ENV.items():
            clean_env.setenv(key, value)
        factory, _ = fake_session(run_error=AuthenticationSignalTimeoutError(60))

        with patch("portal_e2e.main.PortalSession", factory):
            assert await main([]) == 1
