import pytest
from unittest.mock import AsyncMock, MagicMock

from scenario_runner.executor import EngineConfig, RecordingTraceSink, ScenarioEngine, SessionManager


class FakeSession:
    """In-memory stand-in for a browser session: tabs are plain mocks"""

    def __init__(self):
        self.page = MagicMock(name="tab0")
        self.page.screenshot = AsyncMock()
        self._pages = [self.page]
        self.opened_from = []

    @property
    def pages(self):
        return list(self._pages)

    def switch_to(self, page):
        self.page = page
        return page

    async def open_tab_from(self, page, trigger):
        self.opened_from.append(trigger)
        tab = MagicMock(name=f"tab{len(self._pages)}")
        self._pages.append(tab)
        return self.switch_to(tab)

    async def close_tab(self, page, index=0):
        self._pages.remove(page)
        return self.switch_to(self._pages[index])


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def session_manager(fake_session):
    """SessionManager whose open/close never touch a browser"""
    manager = SessionManager()
    manager.open = AsyncMock(return_value=fake_session)
    manager.close = AsyncMock()
    return manager


@pytest.fixture
def sink():
    return RecordingTraceSink()


@pytest.fixture
def engine(session_manager, sink):
    return ScenarioEngine(
        session_manager=session_manager,
        trace_sink=sink,
        config=EngineConfig(screenshot_on_failure=False),
    )
