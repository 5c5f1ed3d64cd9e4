import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from scenario_runner.core import SessionError
from scenario_runner.executor import Session, SessionConfig, SessionManager


def make_playwright():
    page = AsyncMock()
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock()
    context.tracing.start = AsyncMock()
    context.tracing.stop = AsyncMock()
    context.pages = [page]

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.firefox.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()

    starter = MagicMock()
    starter.start = AsyncMock(return_value=playwright)
    return starter, playwright, browser, context, page


class TestSessionConfig:
    """Test SessionConfig"""

    def test_defaults(self):
        config = SessionConfig()
        assert config.browser == "chromium"
        assert config.headless == True
        assert config.viewport == {"width": 1280, "height": 720}

    def test_from_dict_ignores_unknown_keys(self):
        config = SessionConfig.from_dict({'browser': 'firefox', 'retry': 3})
        assert config.browser == 'firefox'

    def test_validate(self):
        assert SessionConfig().validate() == True
        assert SessionConfig(browser='invalid_browser').validate() == False


class TestSessionManager:
    """Test SessionManager lifecycle"""

    @pytest.mark.asyncio
    async def test_open_launches_browser_with_config(self):
        starter, playwright, browser, context, page = make_playwright()
        manager = SessionManager(SessionConfig(browser='firefox', headless=False, slow_mo=100, locale='en-GB'))

        with patch('scenario_runner.executor.session.async_playwright', return_value=starter):
            session = await manager.open()

        playwright.firefox.launch.assert_awaited_once_with(headless=False, slow_mo=100)
        browser.new_context.assert_awaited_once_with(viewport={"width": 1280, "height": 720}, locale='en-GB')
        context.set_default_timeout.assert_called_once_with(30000)
        context.set_default_navigation_timeout.assert_called_once_with(45000)
        assert session.page is page
        assert session.trace_path is None

    @pytest.mark.asyncio
    async def test_session_context_manager_closes_on_error(self):
        starter, playwright, browser, context, page = make_playwright()
        manager = SessionManager()

        with patch('scenario_runner.executor.session.async_playwright', return_value=starter):
            with pytest.raises(ValueError):
                async with manager.session():
                    raise ValueError("step blew up")

        context.close.assert_awaited_once()
        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_launch_failure_releases_playwright(self):
        starter, playwright, browser, context, page = make_playwright()
        playwright.chromium.launch = AsyncMock(side_effect=RuntimeError("Executable doesn't exist"))

        with patch('scenario_runner.executor.session.async_playwright', return_value=starter):
            with pytest.raises(SessionError, match="Executable doesn't exist"):
                await SessionManager().open()

        playwright.stop.assert_awaited_once()
        context.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unsupported_browser(self):
        with pytest.raises(SessionError):
            await SessionManager(SessionConfig(browser='netscape')).open()

    @pytest.mark.asyncio
    async def test_close_failure_raises_after_releasing_everything(self):
        starter, playwright, browser, context, page = make_playwright()
        browser.close = AsyncMock(side_effect=RuntimeError("already closed"))
        manager = SessionManager()

        with patch('scenario_runner.executor.session.async_playwright', return_value=starter):
            session = await manager.open()
            with pytest.raises(SessionError, match="already closed"):
                await manager.close(session)

        context.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_tracing_saved_on_close(self, tmp_path):
        starter, playwright, browser, context, page = make_playwright()
        manager = SessionManager(SessionConfig(trace_dir=str(tmp_path)))

        with patch('scenario_runner.executor.session.async_playwright', return_value=starter):
            session = await manager.open()
            await manager.close(session)

        context.tracing.start.assert_awaited_once_with(screenshots=True, snapshots=True, sources=True)
        context.tracing.stop.assert_awaited_once_with(path=str(session.trace_path))
        assert session.trace_path.parent == tmp_path


class TestSession:
    """Test tab handling on a Session"""

    @pytest.fixture
    def session(self):
        first = AsyncMock()
        context = MagicMock()
        context.pages = [first]
        return Session(playwright=MagicMock(), browser=MagicMock(), context=context, page=first)

    @pytest.mark.asyncio
    async def test_new_tab_becomes_current(self, session):
        second = AsyncMock()
        session.context.new_page = AsyncMock(return_value=second)

        page = await session.new_tab()

        assert page is second
        assert session.page is second

    @pytest.mark.asyncio
    async def test_close_tab_returns_to_index(self, session):
        first = session.page
        second = AsyncMock()
        session.context.pages = [first]
        session.switch_to(second)

        current = await session.close_tab(second, 0)

        second.close.assert_awaited_once()
        first.bring_to_front.assert_awaited_once()
        assert current is first
        assert session.page is first

    @pytest.mark.asyncio
    async def test_close_last_tab_raises(self, session):
        session.context.pages = []

        with pytest.raises(SessionError):
            await session.close_tab(session.page, 0)
