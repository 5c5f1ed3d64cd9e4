from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Set

import pytest

from scenario_runner.storefront import StorefrontConfig, StorefrontPages
from scenario_runner.storefront.pages import (
    CategoryPage,
    DashboardPage,
    HomePage,
    LoginPage,
    ProductSettingsPage,
    ProductsPage,
    ThemesPage,
)


@dataclass
class Product:
    name: str
    price: Decimal
    active: bool = True


@dataclass
class FakeShop:
    """Server-side state of a storefront, sorted with its own rules"""
    products: List[Product]
    logged_in: bool = False
    valid_password: str = "Correct Horse Battery Staple"
    themes: Set[str] = field(default_factory=lambda: {"classic", "hummingbird"})
    theme: str = "classic"
    per_page: int = 12
    active_filter: bool = False
    on_category: bool = False
    order: Optional[str] = None
    broken_orders: Set[str] = field(default_factory=set)
    per_page_history: List[int] = field(default_factory=list)
    theme_history: List[str] = field(default_factory=list)

    def listing(self) -> List[Product]:
        active = [p for p in self.products if p.active]
        if self.order and self.order not in self.broken_orders:
            field_name, direction = self.order.split(".")[1:]
            active.sort(
                key=lambda p: p.name.lower() if field_name == "name" else p.price,
                reverse=direction == "desc",
            )
        return active[:self.per_page]


def make_pages(shop: FakeShop) -> StorefrontPages:
    class FakeLoginPage(LoginPage):
        async def goto(self, page, url):
            pass

        async def is_login_form(self, page):
            return not shop.logged_in

        async def login(self, page, email, password):
            shop.logged_in = password == shop.valid_password

    class FakeDashboardPage(DashboardPage):
        async def get_page_title(self, page):
            return "Dashboard • PrestaShop" if shop.logged_in else "PrestaShop"

        async def go_to_sub_menu(self, page, parent_selector, link_selector):
            shop.on_category = False

    class FakeProductsPage(ProductsPage):
        async def get_page_title(self, page):
            return "Products • PrestaShop"

        async def close_sf_toolbar(self, page):
            pass

        async def reset_and_get_number_of_lines(self, page):
            shop.active_filter = False
            return len(shop.products)

        async def filter_products(self, page, column, value, filter_type="input"):
            shop.active_filter = column == "active" and value == "Yes"

        async def get_number_of_products_from_list(self, page):
            if shop.active_filter:
                return sum(1 for p in shop.products if p.active)
            return len(shop.products)

    class FakeProductSettingsPage(ProductSettingsPage):
        async def get_page_title(self, page):
            return "Product Settings • PrestaShop"

        async def set_products_displayed_per_page(self, page, number):
            shop.per_page = number
            shop.per_page_history.append(number)
            return "Update successful"

    class FakeThemesPage(ThemesPage):
        async def get_active_theme(self, page):
            return shop.theme

        async def is_theme_available(self, page, theme):
            return theme in shop.themes

        async def enable_theme(self, page, theme):
            shop.theme = theme
            shop.theme_history.append(theme)
            return self.successful_enable_message

    class FakeHomePage(HomePage):
        async def is_home_page(self, page):
            return True

        async def change_language(self, page, lang="en"):
            pass

        async def go_to_all_products_page(self, page):
            shop.on_category = True
            shop.order = None

    class FakeCategoryPage(CategoryPage):
        async def is_category_page(self, page):
            return shop.on_category

        async def get_sort_by_value(self, page):
            return "Sort by: Relevance" if shop.order is None else shop.order

        async def get_all_products_attribute(self, page, attribute):
            if attribute == "miniature__price":
                return [f"€{p.price:.2f}" for p in shop.listing()]
            return [p.name for p in shop.listing()]

        async def sort_products_list(self, page, sort_by):
            shop.order = sort_by

    return StorefrontPages(
        login=FakeLoginPage(),
        dashboard=FakeDashboardPage(),
        products=FakeProductsPage(),
        product_settings=FakeProductSettingsPage(),
        themes=FakeThemesPage(),
        home=FakeHomePage(),
        category=FakeCategoryPage(),
    )


@pytest.fixture
def shop():
    names = [
        "Banana", "Apple", "Cherry", "Hummingbird printed t-shirt", "Mug The best is yet to come",
        "Brown bear cushion", "Mountain fox notebook", "Pack Mug + Framed poster", "Customizable mug",
        "Today is a good day Framed poster", "The adventure begins Framed poster", "Hummingbird notebook",
        "Mountain fox - Vector graphics", "Brown bear - Vector graphics",
    ]
    prices = ["5.00", "3.50", "12.00", "23.90", "11.90", "18.90", "12.90", "35.00", "13.90",
              "29.00", "28.00", "14.90", "9.00", "8.00"]
    products = [Product(n, Decimal(p)) for n, p in zip(names, prices)]
    products.append(Product("Disabled product", Decimal("1.00"), active=False))
    return FakeShop(products=products)


@pytest.fixture
def fake_pages(shop):
    return make_pages(shop)


@pytest.fixture
def storefront_config():
    return StorefrontConfig()
