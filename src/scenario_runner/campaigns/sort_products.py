"""
FO - Menu and navigation : Sort products

Pre-condition:
- Enable the configured theme
- Get the number of active products
- Change the number of products per page
Scenario:
- Sort products list by all options
Post-condition:
- Reset the number of products per page
- Restore the default theme
"""

from typing import Iterable, Optional

from ..executor.assertions import contains, is_true, within
from ..executor.context_store import ContextStore
from ..executor.scenario import Scenario, SortCase, SortDirection, Step, sort_steps, step
from ..storefront.common import install_theme_step, login_bo_step, uninstall_theme_step
from ..storefront.pages import StorefrontPages
from ..storefront.settings import StorefrontConfig

BASE_CONTEXT = "functional_FO_menuAndNavigation_sortAndFilter_sortProducts"
NUMBER_OF_ACTIVE_PRODUCTS = "numberOfActiveProducts"

NAME_ASC = SortCase(
    identifier="sortByNameAsc",
    label="Name, A to Z",
    attribute="miniature__infos__top",
    sort_by="product.name.asc",
    direction=SortDirection.ASC,
)
NAME_DESC = SortCase(
    identifier="sortByNameDesc",
    label="Name, Z to A",
    attribute="miniature__infos__top",
    sort_by="product.name.desc",
    direction=SortDirection.DESC,
)
PRICE_ASC = SortCase(
    identifier="sortByPriceAsc",
    label="Price, low to high",
    attribute="miniature__price",
    sort_by="product.price.asc",
    direction=SortDirection.ASC,
)
# TODO: add to SORT_CASES once https://github.com/PrestaShop/PrestaShop/issues/19810 is fixed
PRICE_DESC = SortCase(
    identifier="sortByPriceDesc",
    label="Price, high to low",
    attribute="miniature__price",
    sort_by="product.price.desc",
    direction=SortDirection.DESC,
)

SORT_CASES = (NAME_ASC, NAME_DESC, PRICE_ASC)


def build_scenario(
        config: Optional[StorefrontConfig] = None,
        pages: Optional[StorefrontPages] = None,
        sort_cases: Iterable[SortCase] = SORT_CASES,
) -> Scenario:
    config = config or StorefrontConfig()
    pages = pages or StorefrontPages()

    return Scenario(
        name="FO - Menu and navigation : Sort products",
        base_context=BASE_CONTEXT,
        setup=install_theme_step(config, pages, base_context=f"{BASE_CONTEXT}_preTest"),
        children=[
            _count_active_products(config, pages),
            _change_products_per_page(pages),
            _sort_products_list(config, pages, sort_cases),
        ],
        teardown=uninstall_theme_step(config, pages, base_context=f"{BASE_CONTEXT}_postTest"),
    )


def _count_active_products(config: StorefrontConfig, pages: StorefrontPages) -> Scenario:
    async def go_to_products_page(context: ContextStore, session) -> str:
        await pages.dashboard.go_to_sub_menu(
            session.page,
            pages.dashboard.catalog_parent_link,
            pages.dashboard.products_link,
        )
        await pages.products.close_sf_toolbar(session.page)
        return await pages.products.get_page_title(session.page)

    async def get_number_of_active_products(context: ContextStore, session) -> int:
        number_of_products = await pages.products.reset_and_get_number_of_lines(session.page)
        await pages.products.filter_products(session.page, "active", "Yes", "select")

        number_of_active_products = await pages.products.get_number_of_products_from_list(session.page)
        within(0, number_of_products)(number_of_active_products)

        context.set(NUMBER_OF_ACTIVE_PRODUCTS, number_of_active_products)
        return number_of_active_products

    return Scenario(
        name="PRE-TEST : Get the number of active products",
        children=[
            login_bo_step(config, pages),
            Step(
                identifier="goToProductsPage",
                title="should go to 'Catalog > Products' page",
                action=go_to_products_page,
                check=contains(pages.products.page_title),
            ),
            Step(
                identifier="getNumberOfActiveProducts",
                title="should filter by Active Status",
                action=get_number_of_active_products,
            ),
        ],
    )


def _change_products_per_page(pages: StorefrontPages) -> Scenario:
    async def go_to_product_settings_page(context: ContextStore, session) -> str:
        await pages.dashboard.go_to_sub_menu(
            session.page,
            pages.dashboard.shop_parameters_parent_link,
            pages.dashboard.product_settings_link,
        )
        return await pages.product_settings.get_page_title(session.page)

    async def change_products_per_page(context: ContextStore, session) -> str:
        return await pages.product_settings.set_products_displayed_per_page(
            session.page,
            context.get(NUMBER_OF_ACTIVE_PRODUCTS),
        )

    return Scenario(
        name="PRE-TEST : Change the number of products per page",
        children=[
            Step(
                identifier="goToProductSettingsPage",
                title="should go to 'Shop parameters > Product Settings' page",
                action=go_to_product_settings_page,
                check=contains(pages.product_settings.page_title),
            ),
            Step(
                identifier="changeProductPerPage",
                title="should change the value of products per page",
                action=change_products_per_page,
                check=contains(pages.product_settings.successful_update_message),
            ),
        ],
    )


def _sort_products_list(config: StorefrontConfig, pages: StorefrontPages, sort_cases: Iterable[SortCase]) -> Scenario:
    async def go_to_shop_fo(context: ContextStore, session) -> bool:
        page = await pages.product_settings.view_my_shop(session, session.page)
        await pages.home.change_language(page, config.language)
        return await pages.home.is_home_page(page)

    async def go_to_all_products(context: ContextStore, session) -> bool:
        await pages.home.change_language(session.page, config.language)
        await pages.home.go_to_all_products_page(session.page)
        return await pages.category.is_category_page(session.page)

    @step(
        "checkDefaultSort",
        "should check that the products are sorted by relevance",
        check=contains("Relevance"),
    )
    async def check_default_sort(context: ContextStore, session) -> str:
        return await pages.category.get_sort_by_value(session.page)

    async def read_values(session, attribute: str):
        return await pages.category.get_all_products_attribute(session.page, attribute)

    async def apply_sort(session, sort_by: str) -> None:
        await pages.category.sort_products_list(session.page, sort_by)

    async def reset_products_per_page(context: ContextStore, session) -> str:
        # Back to the back office tab when the front office was opened
        tabs = session.pages
        if len(tabs) > 1 and session.page is not tabs[0]:
            await session.close_tab(session.page, 0)

        title = await pages.product_settings.get_page_title(session.page)
        contains(pages.product_settings.page_title)(title)

        return await pages.product_settings.set_products_displayed_per_page(
            session.page,
            config.default_products_per_page,
        )

    return Scenario(
        name="Sort products list",
        children=[
            Step(
                identifier="goToShopFO",
                title="should view my shop",
                action=go_to_shop_fo,
                check=is_true("Home page was not opened"),
            ),
            Step(
                identifier="goToAllProducts",
                title="should go to all products page",
                action=go_to_all_products,
                check=is_true("Home category page was not opened"),
            ),
            check_default_sort,
            *sort_steps(sort_cases, read_values, apply_sort, count_key=NUMBER_OF_ACTIVE_PRODUCTS),
        ],
        teardown=Step(
            identifier="resetProductPerPage",
            title="should close the FO page and reset the number of products per page",
            action=reset_products_per_page,
            check=contains(pages.product_settings.successful_update_message),
        ),
    )
