"""Инструменты просмотра каталога Mística: список, категории, примеры, токены, кэш."""
import logging
import time
from collections import OrderedDict
from typing import Dict, Any, List, Optional

from ..catalog import get_catalog_service
from ..generators import UsageExampleGenerator
from ..mcp_instance import mcp, TOOL_CALLS_TOTAL, TOOL_CALL_DURATION
from ..models import CatalogComponent, COMPONENT_CATEGORIES, get_category_label
from ..search_engine import search_by_category
from ..utils import timestamp
from ..validators import (
    validate_category,
    validate_component_name,
    validate_token_category,
    validate_usage_format,
)

logger = logging.getLogger(__name__)

NAMES_PER_CATEGORY = 8
MAX_PROPS = 12

DESIGN_TOKENS: Dict[str, List[Dict[str, str]]] = {
    "color": [
        {"name": "brand-primary", "value": "#0066CC", "description": "Основной цвет бренда"},
        {"name": "brand-secondary", "value": "#FF6B00", "description": "Дополнительный цвет бренда"},
        {"name": "neutral-gray-100", "value": "#F5F5F5", "description": "Очень светлый серый"},
    ],
    "spacing": [
        {"name": "space-8", "value": "8px", "description": "Очень маленький отступ"},
        {"name": "space-16", "value": "16px", "description": "Маленький отступ"},
        {"name": "space-24", "value": "24px", "description": "Средний отступ"},
    ],
    "typography": [
        {"name": "text-title-1", "value": "32px/40px", "description": "Главный заголовок"},
        {"name": "text-body", "value": "16px/24px", "description": "Основной текст"},
    ],
}

DESIGN_TOKEN_LABELS = {
    "color": "Цвета",
    "spacing": "Отступы",
    "typography": "Типографика",
    "shadow": "Тени",
    "border": "Границы",
    "other": "Прочее",
}

NAME_VARIANTS = (
    ("button", ("primary", "secondary", "danger", "link")),
    ("field", ("default", "error", "disabled", "withHelpText")),
)


def group_by_category(components: List[CatalogComponent]) -> "OrderedDict[str, List[CatalogComponent]]":
    groups: "OrderedDict[str, List[CatalogComponent]]" = OrderedDict()
    for component in components:
        groups.setdefault(component.category, []).append(component)
    return groups


def extract_variant_names(component: CatalogComponent) -> List[str]:
    """Варианты из примеров компонента плюс типовые варианты по имени."""
    variants: List[str] = []
    for example in component.examples:
        for key in ("name", "title"):
            if example.get(key):
                variants.append(example[key])
    lower = component.name.lower()
    for marker, names in NAME_VARIANTS:
        if marker in lower:
            variants.extend(names)
    return list(dict.fromkeys(variants))


def filter_tokens(category: Optional[str], search: Optional[str]) -> Dict[str, List[Dict[str, str]]]:
    categories = [category] if category else list(DESIGN_TOKENS)
    needle = (search or "").strip().lower()
    return {
        name: [token for token in DESIGN_TOKENS.get(name, []) if needle in token["name"]]
        for name in categories
    }


def _finish(tool_name: str, start_time: float):
    duration = time.time() - start_time
    TOOL_CALL_DURATION.labels(tool_name=tool_name).observe(duration)
    logger.debug(f"Tool {tool_name} executed in {duration:.2f} seconds")


async def list_mistica_components(category: Optional[str] = None, include_count: bool = True) -> Dict[str, Any]:
    """
    Список всех компонентов дизайн-системы Mística, сгруппированный по категориям.

    Args:
        category: Оставить только одну категорию
        include_count: Показывать количество компонентов в каждой категории
    """
    start_time = time.time()
    tool_name = "list_mistica_components"

    try:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="started").inc()
        normalized = validate_category(category)
        catalog = await get_catalog_service().get_all_components()
        components = [c for c in catalog if c.category == normalized] if normalized else catalog

        message = "Компоненты Mística\n\n"
        if normalized:
            message += f"Категория: {normalized} ({len(components)} компонентов)\n\n"

        for group, items in group_by_category(components).items():
            count = f" ({len(items)})" if include_count else ""
            message += f"{get_category_label(group)}{count}\n"
            message += "".join(f"  - {item.name}\n" for item in items[:NAMES_PER_CATEGORY])
            if len(items) > NAMES_PER_CATEGORY:
                message += f"  - ... и ещё {len(items) - NAMES_PER_CATEGORY} компонентов\n"
            message += "\n"

        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="success").inc()
        return {
            "category": normalized or "all",
            "total_components": len(components),
            "components": [component.name for component in components],
            "message": message,
        }

    except Exception as e:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="error").inc()
        logger.error(f"Error in {tool_name}: {e}")
        raise

    finally:
        _finish(tool_name, start_time)


async def explore_mistica_categories(category: str, include_details: bool = False) -> Dict[str, Any]:
    """
    Компоненты одной категории Mística.

    Args:
        category: Категория (components, layout, icons, utilities, hooks, feedback, patterns, community, lab)
        include_details: Добавить описание каждого компонента
    """
    start_time = time.time()
    tool_name = "explore_mistica_categories"

    try:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="started").inc()
        normalized = validate_category(category, required=True)
        catalog = await get_catalog_service().get_all_components()
        components = search_by_category(catalog, normalized)

        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="success").inc()
        if not components:
            return {
                "category": normalized,
                "total_components": 0,
                "components": [],
                "message": f"Категория \"{normalized}\" пуста",
                "suggestion": f"Доступные категории: {', '.join(COMPONENT_CATEGORIES)}",
            }

        message = f"Категория: {get_category_label(normalized)}\n\n"
        message += f"Найдено компонентов: {len(components)}\n\n"
        if include_details:
            for index, component in enumerate(components, start=1):
                message += f"{index}. {component.name}\n   {component.description}\n\n"
        else:
            message += f"Компоненты: {', '.join(c.name for c in components)}\n\n"
            message += "Используйте include_details=true для подробных описаний"

        return {
            "category": normalized,
            "total_components": len(components),
            "components": [component.name for component in components],
            "message": message,
        }

    except Exception as e:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="error").inc()
        logger.error(f"Error in {tool_name}: {e}")
        raise

    finally:
        _finish(tool_name, start_time)


async def get_mistica_usage_examples(component_name: str, format: str = "react") -> Dict[str, Any]:
    """
    Примеры использования компонента Mística в формате markdown.

    Args:
        component_name: Имя компонента (без учёта регистра)
        format: Формат примера кода: react, html или both
    """
    start_time = time.time()
    tool_name = "get_mistica_usage_examples"

    try:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="started").inc()
        name = validate_component_name(component_name)
        fmt = validate_usage_format(format)

        component = await get_catalog_service().get_component(name)
        if component is None:
            raise ValueError(f"Компонент \"{name}\" не найден")

        markdown = UsageExampleGenerator().generate(component, fmt)
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="success").inc()
        return {
            "component": component.name,
            "has_examples": bool(component.examples),
            "variants": extract_variant_names(component),
            "props": [
                {
                    "name": prop.name,
                    "type": prop.type,
                    "required": prop.required,
                    "default": prop.default,
                    "description": prop.description,
                }
                for prop in component.props[:MAX_PROPS]
            ],
            "message": markdown,
        }

    except Exception as e:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="error").inc()
        logger.error(f"Error in {tool_name}: {e}")
        raise

    finally:
        _finish(tool_name, start_time)


async def get_mistica_design_tokens(category: Optional[str] = None, search: Optional[str] = None) -> Dict[str, Any]:
    """
    Design tokens Mística (цвета, отступы, типографика).

    Args:
        category: Категория токенов: color, spacing, typography, shadow, border, other
        search: Подстрока имени токена
    """
    start_time = time.time()
    tool_name = "get_mistica_design_tokens"

    try:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="started").inc()
        normalized = validate_token_category(category)
        tokens = filter_tokens(normalized, search)

        message = "Design tokens Mística\n\n"
        for group, items in tokens.items():
            message += f"{DESIGN_TOKEN_LABELS.get(group, group)}\n\n"
            for token in items:
                message += f"- {token['name']}: {token['value']}\n  {token['description']}\n\n"

        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="success").inc()
        return {"tokens": tokens, "message": message}

    except Exception as e:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="error").inc()
        logger.error(f"Error in {tool_name}: {e}")
        raise

    finally:
        _finish(tool_name, start_time)


async def get_mistica_cache_status(refresh: bool = False) -> Dict[str, Any]:
    """
    Состояние кэша каталога.

    Args:
        refresh: Очистить кэш и загрузить каталог заново
    """
    start_time = time.time()
    tool_name = "get_mistica_cache_status"

    try:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="started").inc()
        service = get_catalog_service()

        cleared = 0
        if refresh:
            cleared = await service.clear_cache()
            logger.info(f"Catalog cache refresh requested, {cleared} keys removed")
        components = await service.get_all_components(force_refresh=refresh)
        stats = await service.cache.stats()
        by_category = service.count_by_category(components)

        message = "Состояние кэша Mística MCP\n\n"
        message += f"Загружено компонентов: {len(components)}\n"
        message += f"Redis: {'включён' if stats['enabled'] else 'отключён'}\n"
        message += f"Проверено: {timestamp()}\n"
        message += f"Обновление: {'выполнено' if refresh else 'не запрашивалось'}\n\n"
        message += "По категориям:\n"
        message += "".join(f"- {category}: {count} компонентов\n" for category, count in by_category.items())

        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="success").inc()
        return {
            "total_components": len(components),
            "by_category": by_category,
            "cache": stats,
            "refreshed": refresh,
            "cleared_keys": cleared,
            "message": message,
        }

    except Exception as e:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="error").inc()
        logger.error(f"Error in {tool_name}: {e}")
        raise

    finally:
        _finish(tool_name, start_time)


mcp.tool(list_mistica_components)
mcp.tool(explore_mistica_categories)
mcp.tool(get_mistica_usage_examples)
mcp.tool(get_mistica_design_tokens)
mcp.tool(get_mistica_cache_status)
