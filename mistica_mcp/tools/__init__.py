"""Инструменты MCP сервера дизайн-системы Mística."""

from .search_tools import search_components
from .figma_tools import map_figma_to_mistica, analyze_figma_code_tool
from .catalog_tools import (
    list_mistica_components,
    explore_mistica_categories,
    get_mistica_usage_examples,
    get_mistica_design_tokens,
    get_mistica_cache_status,
)

__all__ = [
    "search_components",
    "map_figma_to_mistica",
    "analyze_figma_code_tool",
    "list_mistica_components",
    "explore_mistica_categories",
    "get_mistica_usage_examples",
    "get_mistica_design_tokens",
    "get_mistica_cache_status",
]
