from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


@dataclass
class StorefrontConfig:
    """Where the shop lives and how to log into its back office"""
    bo_url: str = "http://localhost:8001/admin-dev/"
    admin_email: str = "demo@prestashop.com"
    admin_password: str = "Correct Horse Battery Staple"
    theme: str = "hummingbird"
    default_theme: str = "classic"
    default_products_per_page: int = 12
    language: str = "en"

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "StorefrontConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})
