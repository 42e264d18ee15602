"""Каталог компонентов Mística: Storybook, встроенный справочник и Redis кэш."""

from .cache_service import CacheService
from .catalog_service import CatalogService, get_catalog_service
from .known_components import KNOWN_COMPONENTS, generate_description, get_known_components
from .storybook_client import StorybookClient, is_valid_component_story, parse_story

__all__ = [
    "CacheService",
    "CatalogService",
    "get_catalog_service",
    "KNOWN_COMPONENTS",
    "generate_description",
    "get_known_components",
    "StorybookClient",
    "is_valid_component_story",
    "parse_story",
]
