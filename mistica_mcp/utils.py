"""Вспомогательные функции для Mística MCP сервера."""
import json
import logging
import re
from datetime import datetime
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


def slugify(text: str) -> str:
    """Преобразует текст в slug: нижний регистр, дефисы вместо пробелов."""
    text = re.sub(r"\s+", "-", text.lower())
    text = re.sub(r"[^\w-]+", "", text)
    text = re.sub(r"--+", "-", text)
    return text.strip("-")


def generate_component_id(component_name: str, category: str) -> str:
    """Генерация ID компонента вида ``category-name``."""
    return f"{category}-{slugify(component_name)}"


def generate_story_url(base_url: str, category: str, component_name: str) -> str:
    """URL истории Storybook по умолчанию для компонента."""
    path = re.sub(r"\s+", "", component_name.lower())
    return f"{base_url.rstrip('/')}/?path=/story/{category}-{path}--default"


def split_words(name: str) -> List[str]:
    """Разбивает имя на слова (пробелы, дефисы, подчёркивания, camelCase)."""
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", name)
    spaced = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", spaced)
    return [word for word in re.split(r"[\s_\-/.:]+", spaced) if word]


def generate_name_variants(name: str) -> List[str]:
    """
    Генерирует нормализованные варианты имени компонента.

    Порядок: без пробелов, camelCase, PascalCase, kebab-case, snake_case.
    Дубликаты удаляются с сохранением порядка.
    """
    words = split_words(name)
    if not words:
        return []

    lowered = [word.lower() for word in words]
    variants = [
        "".join(words),
        lowered[0] + "".join(word.capitalize() for word in lowered[1:]),
        "".join(word.capitalize() for word in lowered),
        "-".join(lowered),
        "_".join(lowered),
    ]
    return list(dict.fromkeys(variants))


def timestamp() -> str:
    """Генерация временной метки."""
    return datetime.now().isoformat()


def log_operation(operation: str, details: Dict[str, Any]) -> None:
    """Логирование операции."""
    logger.info(f"{operation}: {json.dumps(details, ensure_ascii=False, default=str)}")
