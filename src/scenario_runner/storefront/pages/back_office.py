"""
Back office page objects: login, dashboard menu, catalog products,
product settings and theme manager.
"""

import re
from typing import Optional
import logging

from playwright.async_api import Page

from ...core.exceptions import PreconditionError
from .base_page import BasePage

logger = logging.getLogger(__name__)


class LoginPage(BasePage):
    page_title = "PrestaShop"

    email_input = "#email"
    password_input = "#passwd"
    submit_button = "#submit_login"

    async def is_login_form(self, page: Page) -> bool:
        return await self.element_visible(page, self.email_input, timeout=3000)

    async def login(self, page: Page, email: str, password: str) -> None:
        await page.fill(self.email_input, email)
        await page.fill(self.password_input, password)
        await self.click_and_wait_for_load(page, self.submit_button)


class DashboardPage(BasePage):
    page_title = "Dashboard"

    catalog_parent_link = "#subtab-AdminCatalog"
    products_link = "#subtab-AdminProducts"
    shop_parameters_parent_link = "#subtab-ShopParameters"
    product_settings_link = "#subtab-AdminPPreferences"
    design_parent_link = "#subtab-AdminParentThemes"
    theme_and_logo_link = "#subtab-AdminThemesParent"

    async def go_to_sub_menu(self, page: Page, parent_selector: str, link_selector: str) -> None:
        """Open a sidebar section and follow one of its links"""
        await page.hover(parent_selector)
        link = page.locator(f"{parent_selector} {link_selector}, {link_selector}").first
        if not await link.is_visible():
            await page.click(parent_selector)
        await link.click()
        await page.wait_for_load_state("domcontentloaded")


class ProductsPage(BasePage):
    page_title = "Products"

    sf_toolbar_hide_button = "a.hide-button"
    grid_panel_title = "#product_grid_panel .card-header-title"
    filter_reset_button = "#product_grid_table button.js-reset-search"
    filter_search_button = "#product_grid_table button.grid-search-button"
    filter_input = "#product_grid_table #product_{column}"

    async def close_sf_toolbar(self, page: Page) -> None:
        if await self.element_visible(page, self.sf_toolbar_hide_button, timeout=1000):
            await page.click(self.sf_toolbar_hide_button)

    async def get_number_of_products_from_list(self, page: Page) -> int:
        """Read the total shown in the grid header ("Products (19)")"""
        text = await self.get_text(page, self.grid_panel_title)
        match = re.search(r"\((\d+)\)", text)
        if not match:
            raise PreconditionError(f"No product count in the grid header: {text!r}")
        return int(match.group(1))

    async def reset_filter(self, page: Page) -> None:
        if await self.element_visible(page, self.filter_reset_button, timeout=1000):
            await self.click_and_wait_for_load(page, self.filter_reset_button)

    async def reset_and_get_number_of_lines(self, page: Page) -> int:
        await self.reset_filter(page)
        return await self.get_number_of_products_from_list(page)

    async def filter_products(self, page: Page, column: str, value: str, filter_type: str = "input") -> None:
        selector = self.filter_input.format(column=column)
        if filter_type == "select":
            await page.select_option(selector, label=value)
        else:
            await page.fill(selector, value)
        await self.click_and_wait_for_load(page, self.filter_search_button)


class ProductSettingsPage(BasePage):
    page_title = "Product Settings"
    successful_update_message = "Update successful"

    products_per_page_input = "#pagination_products_per_page"
    pagination_save_button = "#configuration_fieldset_pagination button[type='submit'], form[name='pagination'] button"
    view_my_shop_link = "#header_shopname"

    async def set_products_displayed_per_page(self, page: Page, number: int) -> str:
        await page.fill(self.products_per_page_input, str(number))
        await self.click_and_wait_for_load(page, self.pagination_save_button)
        return await self.get_alert_success_message(page)

    async def view_my_shop(self, session, page: Page) -> Page:
        """Open the front office in a new tab; the session switches to it"""
        return await session.open_tab_from(page, self.view_my_shop_link)


class ThemesPage(BasePage):
    page_title = "Theme & Logo"
    successful_enable_message = "Your theme has been correctly enabled"

    theme_card = ".theme-card[data-theme-name='{theme}']"
    use_theme_button = ".theme-card[data-theme-name='{theme}'] .js-display-use-theme-modal"
    use_theme_confirm_button = "#use_theme_modal_{theme} .js-submit-use-theme"
    current_theme_name = ".theme-card.active .theme-name, .theme-card-container.active .theme-name"

    async def get_active_theme(self, page: Page) -> Optional[str]:
        if not await self.element_visible(page, self.current_theme_name):
            return None
        return (await self.get_text(page, self.current_theme_name)).lower()

    async def is_theme_available(self, page: Page, theme: str) -> bool:
        return await self.element_visible(page, self.theme_card.format(theme=theme))

    async def enable_theme(self, page: Page, theme: str) -> str:
        await page.click(self.use_theme_button.format(theme=theme))
        await self.click_and_wait_for_load(page, self.use_theme_confirm_button.format(theme=theme))
        return await self.get_alert_success_message(page)
