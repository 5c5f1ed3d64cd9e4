from contextlib import asynccontextmanager
from dataclasses import dataclass, field, fields
from datetime import datetime
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional
import logging

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from ..core.exceptions import SessionError

logger = logging.getLogger(__name__)

SUPPORTED_BROWSERS = ('chromium', 'firefox', 'webkit')


@dataclass
class SessionConfig:
    """Launch parameters of the browser session"""
    browser: str = "chromium"
    headless: bool = True
    slow_mo: int = 0
    viewport: Dict[str, int] = field(default_factory=lambda: {"width": 1280, "height": 720})
    locale: Optional[str] = None
    timeout: int = 30000
    navigation_timeout: int = 45000
    trace_dir: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SessionConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})

    def validate(self) -> bool:
        """Validate session configuration"""
        if self.browser not in SUPPORTED_BROWSERS:
            logger.error(f"Unsupported browser: {self.browser}")
            return False
        return True


@dataclass
class Session:
    """One live browser context and the page steps currently act on"""
    playwright: Playwright
    browser: Browser
    context: BrowserContext
    page: Page
    trace_path: Optional[Path] = None

    @property
    def pages(self) -> List[Page]:
        return list(self.context.pages)

    def switch_to(self, page: Page) -> Page:
        self.page = page
        return page

    async def new_tab(self) -> Page:
        """Open a blank tab in the same browsing context and make it current"""
        page = await self.context.new_page()
        return self.switch_to(page)

    async def open_tab_from(self, page: Page, trigger: str) -> Page:
        """Click a link that opens a popup and make the popup current"""
        async with page.expect_popup() as popup_info:
            await page.click(trigger)
        popup = await popup_info.value
        await popup.wait_for_load_state()
        return self.switch_to(popup)

    async def close_tab(self, page: Page, index: int = 0) -> Page:
        """Close a tab and make the tab at ``index`` current"""
        await page.close()
        pages = self.pages
        if not pages:
            raise SessionError("No tab left open in the browser context")
        current = pages[index]
        await current.bring_to_front()
        return self.switch_to(current)


class SessionManager:
    """
    Owns the browser session lifecycle of a run

    Use ``session()`` so the browser is released on every path:

        async with manager.session() as session:
            await session.page.goto(url)
    """

    def __init__(self, config: Optional[SessionConfig] = None):
        self.config = config or SessionConfig()

    async def open(self) -> Session:
        """Launch the browser and open one page"""
        if not self.config.validate():
            raise SessionError(f"Unsupported browser: {self.config.browser}")

        playwright = browser = context = None
        try:
            playwright = await async_playwright().start()
            browser_type = getattr(playwright, self.config.browser)

            browser = await browser_type.launch(
                headless=self.config.headless,
                slow_mo=self.config.slow_mo,
            )

            context_args = {'viewport': self.config.viewport}
            if self.config.locale:
                context_args['locale'] = self.config.locale
            context = await browser.new_context(**context_args)

            context.set_default_timeout(self.config.timeout)
            context.set_default_navigation_timeout(self.config.navigation_timeout)

            trace_path = None
            if self.config.trace_dir:
                trace_dir = Path(self.config.trace_dir)
                trace_dir.mkdir(parents=True, exist_ok=True)
                trace_path = trace_dir / f"trace_{datetime.now().strftime('%Y%m%d_%H%M%S')}.zip"
                await context.tracing.start(screenshots=True, snapshots=True, sources=True)

            page = await context.new_page()

        except Exception as e:
            logger.error(f"Failed to open browser session: {e}")
            await self._release(context, browser, playwright)
            raise SessionError(f"Could not open {self.config.browser} session: {e}") from e

        logger.info(f"Opened {self.config.browser} session (headless={self.config.headless})")
        return Session(
            playwright=playwright,
            browser=browser,
            context=context,
            page=page,
            trace_path=trace_path,
        )

    async def close(self, session: Session) -> None:
        """Close every resource of the session, then report the first failure"""
        if session.trace_path is not None:
            try:
                await session.context.tracing.stop(path=str(session.trace_path))
                logger.info(f"Trace saved: {session.trace_path}")
            except Exception as e:
                logger.warning(f"Could not save trace: {e}")

        errors = await self._release(session.context, session.browser, session.playwright)
        if errors:
            raise SessionError(f"Could not close browser session: {errors[0]}") from errors[0]

        logger.info("Closed browser session")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[Session]:
        session = await self.open()
        try:
            yield session
        finally:
            await self.close(session)

    @staticmethod
    async def _release(context, browser, playwright) -> List[Exception]:
        errors = []
        if context is not None:
            try:
                await context.close()
            except Exception as e:
                errors.append(e)
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                errors.append(e)
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                errors.append(e)
        for e in errors:
            logger.debug(f"Release error: {e}")
        return errors
