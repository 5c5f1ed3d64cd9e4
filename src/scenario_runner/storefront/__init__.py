from .settings import StorefrontConfig
from .pages import StorefrontPages
from .common import login_bo, switch_theme, login_bo_step, install_theme_step, uninstall_theme_step

__all__ = [
    'StorefrontConfig',
    'StorefrontPages',
    'login_bo',
    'switch_theme',
    'login_bo_step',
    'install_theme_step',
    'uninstall_theme_step',
]
