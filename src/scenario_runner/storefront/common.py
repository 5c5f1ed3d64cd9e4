"""
Steps shared by storefront campaigns: back office login and switching
the shop theme before a campaign and back after it.
"""

from typing import Optional
import logging

from ..core.exceptions import PreconditionError
from ..executor.assertions import equal_to
from ..executor.context_store import ContextStore
from ..executor.scenario import Step
from .pages import StorefrontPages
from .settings import StorefrontConfig

logger = logging.getLogger(__name__)


async def login_bo(session, config: StorefrontConfig, pages: StorefrontPages) -> str:
    """Open the back office, log in when asked to, and land on the dashboard"""
    page = session.page
    await pages.login.goto(page, config.bo_url)

    if await pages.login.is_login_form(page):
        await pages.login.login(page, config.admin_email, config.admin_password)

    title = await pages.dashboard.get_page_title(page)
    if pages.dashboard.page_title not in title:
        raise PreconditionError(f"Back office login failed, page title is {title!r}")
    return title


async def switch_theme(session, config: StorefrontConfig, pages: StorefrontPages, theme: str) -> Optional[str]:
    """Enable ``theme`` from Design > Theme & Logo and return the active theme"""
    await login_bo(session, config, pages)
    page = session.page

    await pages.dashboard.go_to_sub_menu(page, pages.dashboard.design_parent_link, pages.dashboard.theme_and_logo_link)

    active = await pages.themes.get_active_theme(page)
    if active == theme:
        logger.info(f"Theme '{theme}' already enabled")
        return active

    if not await pages.themes.is_theme_available(page, theme):
        raise PreconditionError(f"Theme '{theme}' is not installed on the shop")

    message = await pages.themes.enable_theme(page, theme)
    logger.info(f"Enabled theme '{theme}': {message}")
    return await pages.themes.get_active_theme(page)


def login_bo_step(config: StorefrontConfig, pages: StorefrontPages, identifier: str = "loginBO") -> Step:
    async def action(context: ContextStore, session) -> str:
        return await login_bo(session, config, pages)

    return Step(identifier=identifier, title="should login in BO", action=action)


def install_theme_step(
        config: StorefrontConfig,
        pages: StorefrontPages,
        identifier: str = "installTheme",
        base_context: str = "",
) -> Step:
    async def action(context: ContextStore, session) -> Optional[str]:
        return await switch_theme(session, config, pages, config.theme)

    return Step(
        identifier=identifier,
        title=f"should enable the theme '{config.theme}'",
        action=action,
        check=equal_to(config.theme, f"Theme '{config.theme}' is not the active theme"),
        base_context=base_context,
    )


def uninstall_theme_step(
        config: StorefrontConfig,
        pages: StorefrontPages,
        identifier: str = "uninstallTheme",
        base_context: str = "",
) -> Step:
    async def action(context: ContextStore, session) -> Optional[str]:
        return await switch_theme(session, config, pages, config.default_theme)

    return Step(
        identifier=identifier,
        title=f"should restore the theme '{config.default_theme}'",
        action=action,
        check=equal_to(config.default_theme, f"Theme '{config.default_theme}' is not the active theme"),
        base_context=base_context,
    )
