from dataclasses import dataclass, field

from .base_page import BasePage
from .back_office import LoginPage, DashboardPage, ProductsPage, ProductSettingsPage, ThemesPage
from .front_office import HomePage, CategoryPage


@dataclass
class StorefrontPages:
    """Page objects a campaign needs; swap entries to target another theme"""
    login: LoginPage = field(default_factory=LoginPage)
    dashboard: DashboardPage = field(default_factory=DashboardPage)
    products: ProductsPage = field(default_factory=ProductsPage)
    product_settings: ProductSettingsPage = field(default_factory=ProductSettingsPage)
    themes: ThemesPage = field(default_factory=ThemesPage)
    home: HomePage = field(default_factory=HomePage)
    category: CategoryPage = field(default_factory=CategoryPage)


__all__ = [
    'BasePage',
    'LoginPage',
    'DashboardPage',
    'ProductsPage',
    'ProductSettingsPage',
    'ThemesPage',
    'HomePage',
    'CategoryPage',
    'StorefrontPages',
]
