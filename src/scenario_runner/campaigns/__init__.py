from dataclasses import dataclass
from typing import Callable, Dict, List

from ..core.exceptions import ConfigurationError
from ..executor.scenario import Scenario
from ..storefront.settings import StorefrontConfig
from . import sort_products


@dataclass(frozen=True)
class Campaign:
    """A named scenario builder the CLI can run"""
    name: str
    description: str
    build: Callable[[StorefrontConfig], Scenario]


CAMPAIGNS: Dict[str, Campaign] = {
    "sort-products": Campaign(
        name="sort-products",
        description="FO product listing sorted by name and price matches an independent sort",
        build=lambda config: sort_products.build_scenario(config),
    ),
}


def get_campaign(name: str) -> Campaign:
    try:
        return CAMPAIGNS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown campaign '{name}'. Available: {', '.join(sorted(CAMPAIGNS))}"
        ) from None


def list_campaigns() -> List[Campaign]:
    return [CAMPAIGNS[name] for name in sorted(CAMPAIGNS)]
