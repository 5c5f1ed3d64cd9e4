"""
Base Page Object.

Page objects hold locators for one screen and expose one coroutine per
user-visible operation. They keep no state: every method receives the
Playwright page it acts on, so the same instance serves every tab.
"""

from typing import List, Optional
import logging

from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError

logger = logging.getLogger(__name__)


class BasePage:
    """Shared helpers for back office and front office screens."""

    page_title: str = ""
    alert_success_block = ".alert-success"

    async def goto(self, page: Page, url: str) -> None:
        await page.goto(url)
        await page.wait_for_load_state("domcontentloaded")

    async def get_page_title(self, page: Page) -> str:
        return await page.title()

    async def get_text(self, page: Page, selector: str, timeout: Optional[int] = None) -> str:
        locator = page.locator(selector).first
        await locator.wait_for(state="visible", timeout=timeout)
        return (await locator.inner_text()).strip()

    async def get_all_texts(self, page: Page, selector: str) -> List[str]:
        texts = await page.locator(selector).all_inner_texts()
        return [" ".join(t.split()) for t in texts]

    async def element_visible(self, page: Page, selector: str, timeout: int = 2000) -> bool:
        try:
            await page.locator(selector).first.wait_for(state="visible", timeout=timeout)
            return True
        except PlaywrightTimeoutError:
            return False

    async def click_and_wait_for_load(self, page: Page, selector: str) -> None:
        await page.locator(selector).first.click()
        await page.wait_for_load_state("domcontentloaded")

    async def get_alert_success_message(self, page: Page) -> str:
        return await self.get_text(page, self.alert_success_block)
