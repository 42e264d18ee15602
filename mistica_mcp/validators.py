"""
Валидаторы входных данных.
"""
import re
from typing import Optional

from .models import COMPONENT_CATEGORIES

MAX_QUERY_LENGTH = 200
MAX_FIGMA_CODE_LENGTH = 500_000

USAGE_FORMATS = ("react", "html", "both")
DESIGN_TOKEN_CATEGORIES = ("color", "spacing", "typography", "shadow", "border", "other")

CATEGORY_ALIASES = {
    "msticalab": "lab",
    "misticalab": "lab",
    "mística lab": "lab",
    "mistica lab": "lab",
    "experimental": "lab",
}


def validate_query(query: str) -> str:
    """Проверяет поисковый запрос и возвращает его нормализованную форму."""
    if not isinstance(query, str) or not query.strip():
        raise ValueError("Поисковый запрос обязателен")
    normalized = query.strip().lower()
    if len(normalized) > MAX_QUERY_LENGTH:
        raise ValueError(f"Поисковый запрос слишком длинный: {len(normalized)} > {MAX_QUERY_LENGTH}")
    return normalized


def validate_figma_code(figma_code: str) -> str:
    """Проверяет код, экспортированный из Figma."""
    if not isinstance(figma_code, str) or not figma_code.strip():
        raise ValueError("Код из Figma обязателен")
    if len(figma_code) > MAX_FIGMA_CODE_LENGTH:
        raise ValueError(
            f"Код из Figma слишком большой: {len(figma_code)} символов (максимум {MAX_FIGMA_CODE_LENGTH})"
        )
    return figma_code


def validate_category(category: Optional[str], required: bool = False) -> Optional[str]:
    """Проверяет категорию каталога. Поддерживает старые алиасы категории lab."""
    if category is None or not str(category).strip():
        if required:
            raise ValueError("Категория обязательна")
        return None

    normalized = str(category).strip().lower()
    normalized = CATEGORY_ALIASES.get(normalized, normalized)
    if normalized not in COMPONENT_CATEGORIES:
        raise ValueError(
            f"Неизвестная категория: {category}. Доступные: {', '.join(COMPONENT_CATEGORIES)}"
        )
    return normalized


def validate_component_name(component_name: str) -> str:
    """Проверяет имя компонента (буквы, цифры, пробелы, дефисы, подчёркивания)."""
    if not isinstance(component_name, str) or not component_name.strip():
        raise ValueError("Имя компонента обязательно")
    name = re.sub(r"^default as ", "", component_name.strip(), flags=re.IGNORECASE)
    if not re.match(r"^[\w\s-]{1,100}$", name):
        raise ValueError(f"Некорректное имя компонента: {component_name}")
    return name


def validate_usage_format(fmt: str) -> str:
    normalized = (fmt or "react").strip().lower()
    if normalized not in USAGE_FORMATS:
        raise ValueError(f"Неизвестный формат примера: {fmt}. Доступные: {', '.join(USAGE_FORMATS)}")
    return normalized


def validate_token_category(category: Optional[str]) -> Optional[str]:
    if category is None or not category.strip():
        return None
    normalized = category.strip().lower()
    if normalized not in DESIGN_TOKEN_CATEGORIES:
        raise ValueError(
            f"Неизвестная категория токенов: {category}. Доступные: {', '.join(DESIGN_TOKEN_CATEGORIES)}"
        )
    return normalized
