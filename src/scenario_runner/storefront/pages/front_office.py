"""
Front office page objects: home page and product listing (category) page.
"""

from typing import List

from playwright.async_api import Page

from .base_page import BasePage


class HomePage(BasePage):
    home_page_marker = "body#index"
    language_selector_button = "#_desktop_language_selector button"
    language_link = "#_desktop_language_selector a[data-iso-code='{lang}']"
    all_products_link = "#content a.all-product-link, a.products__all"
    html_lang_attribute = "html"

    async def is_home_page(self, page: Page) -> bool:
        return await self.element_visible(page, self.home_page_marker, timeout=5000)

    async def change_language(self, page: Page, lang: str = "en") -> None:
        current = await page.locator(self.html_lang_attribute).get_attribute("lang")
        if current and current.split("-")[0] == lang:
            return
        await page.click(self.language_selector_button)
        await self.click_and_wait_for_load(page, self.language_link.format(lang=lang))

    async def go_to_all_products_page(self, page: Page) -> None:
        await self.click_and_wait_for_load(page, self.all_products_link)


class CategoryPage(BasePage):
    category_page_marker = "body#category"
    sort_by_value = ".products-sort-order .select-title, .products-sort-order button.dropdown-toggle"
    sort_dropdown_button = ".products-sort-order button, .products-sort-order .select-title"
    sort_option_link = ".products-sort-order a[href*='order={sort_by}']"
    product_list_loading = "#js-product-list .spinner, .faceted-overlay"
    product_attribute = "#js-product-list .js-product-miniature .{attribute}"

    async def is_category_page(self, page: Page) -> bool:
        return await self.element_visible(page, self.category_page_marker, timeout=5000)

    async def get_sort_by_value(self, page: Page) -> str:
        return await self.get_text(page, self.sort_by_value)

    async def get_all_products_attribute(self, page: Page, attribute: str) -> List[str]:
        """Text of ``.attribute`` for every product miniature, in listing order"""
        return await self.get_all_texts(page, self.product_attribute.format(attribute=attribute))

    async def sort_products_list(self, page: Page, sort_by: str) -> None:
        await page.locator(self.sort_dropdown_button).first.click()
        await page.locator(self.sort_option_link.format(sort_by=sort_by)).first.click()
        await page.wait_for_url(f"**order={sort_by}**")
        await page.locator(self.product_list_loading).first.wait_for(state="hidden")
