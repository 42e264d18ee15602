"""Инструмент поиска компонентов Mística по термину или концепции."""
import logging
import time
from typing import Dict, Any, List

from ..catalog import get_catalog_service
from ..mcp_instance import mcp, TOOL_CALLS_TOTAL, TOOL_CALL_DURATION
from ..models import CatalogComponent, get_category_label
from ..search_engine import smart_search_components
from ..validators import validate_query

logger = logging.getLogger(__name__)

MAX_RESULTS = 8
SEARCH_HINT = "Попробуйте термины: button, card, form, input, icon, layout, navigation, list, navbar, header"


def format_component_line(index: int, component: CatalogComponent) -> str:
    return f"{index}. {component.name} ({get_category_label(component.category)})\n   {component.description}"


def format_results(components: List[CatalogComponent]) -> str:
    return "\n\n".join(
        format_component_line(index, component)
        for index, component in enumerate(components[:MAX_RESULTS], start=1)
    )


async def search_components(query: str) -> Dict[str, Any]:
    """
    Ищет компоненты дизайн-системы Mística по термину или концепции.

    Args:
        query: Термин или концепция (например "button", "card", "form", "pin code")

    Returns:
        Количество найденных компонентов, первые результаты и текстовое сообщение
    """
    start_time = time.time()
    tool_name = "search_components"

    try:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="started").inc()
        normalized = validate_query(query)
        logger.info(f"Searching components for: {normalized}")

        catalog = await get_catalog_service().get_all_components()
        results = smart_search_components(catalog, normalized)

        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="success").inc()
        if not results:
            return {
                "query": normalized,
                "total_found": 0,
                "components": [],
                "message": f"Компоненты по запросу \"{normalized}\" не найдены",
                "suggestion": SEARCH_HINT,
            }

        formatted = format_results(results)
        return {
            "query": normalized,
            "total_found": len(results),
            "components": [component.to_dict() for component in results[:MAX_RESULTS]],
            "message": f"Поиск \"{normalized}\": найдено {len(results)}\n\n{formatted}",
        }

    except Exception as e:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="error").inc()
        logger.error(f"Error in {tool_name}: {e}")
        raise

    finally:
        duration = time.time() - start_time
        TOOL_CALL_DURATION.labels(tool_name=tool_name).observe(duration)
        logger.debug(f"Tool {tool_name} executed in {duration:.2f} seconds")


mcp.tool(search_components)
