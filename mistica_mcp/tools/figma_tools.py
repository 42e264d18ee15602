"""Инструменты анализа кода из Figma и сопоставления с компонентами Mística."""
import logging
import time
from typing import Dict, Any, List

from ..analyzers import FigmaAnalysis, analyze_figma_code
from ..catalog import get_catalog_service
from ..component_mapper import find_mistica_equivalents
from ..generators import RefactoringGenerator
from ..mcp_instance import mcp, TOOL_CALLS_TOTAL, TOOL_CALL_DURATION
from ..models import ComponentSuggestion
from ..utils import log_operation
from ..validators import validate_figma_code

logger = logging.getLogger(__name__)

PATTERN_LABELS = (
    ("list_pattern", "Список"),
    ("card_pattern", "Карточка"),
    ("form_pattern", "Форма"),
    ("navigation_pattern", "Навигация"),
    ("modal_pattern", "Модальное окно"),
    ("table_pattern", "Таблица"),
    ("header_pattern", "Шапка"),
    ("footer_pattern", "Футер"),
)


def describe_elements(analysis: FigmaAnalysis) -> List[str]:
    """Строки отчёта по найденным семействам элементов."""
    elements = analysis.elements
    lines = []
    if elements.buttons.found:
        kind = "с действиями" if elements.buttons.has_actions else "базовые"
        lines.append(f"- Кнопки: {elements.buttons.count} ({kind})")
    if elements.texts.found:
        lines.append(f"- Тексты: {elements.texts.count} ({', '.join(elements.texts.hierarchy)})")
    if elements.lists.found:
        kind = "навигируемые" if elements.lists.has_navigation else "базовые"
        lines.append(f"- Списки: {elements.lists.count} ({kind})")
    if elements.containers.found:
        lines.append(f"- Контейнеры: {elements.containers.count} (layout: {analysis.structure.layout_type})")
    if elements.icons.found:
        kind = "интерактивные" if elements.icons.has_interaction else "декоративные"
        lines.append(f"- Иконки: {elements.icons.count} ({kind})")
    if elements.inputs.found:
        lines.append(f"- Поля ввода: {elements.inputs.count} (типы: {', '.join(elements.inputs.types)})")
    if elements.navigation.found:
        kind = "с кнопкой назад" if elements.navigation.has_back_button else "базовая"
        lines.append(f"- Навигация: {kind}")
    return lines


def build_report(
    analysis: FigmaAnalysis,
    suggestions: List[ComponentSuggestion],
    refactoring: str = "",
) -> str:
    report = "Анализ кода из Figma\n\n"

    element_lines = describe_elements(analysis)
    if element_lines:
        report += "Найденные элементы:\n" + "\n".join(element_lines) + "\n\n"

    detected = [label for flag, label in PATTERN_LABELS if getattr(analysis.patterns, flag)]
    if detected:
        report += "Визуальные паттерны:\n" + "\n".join(f"- {label}" for label in detected) + "\n\n"

    if suggestions:
        report += "Предлагаемые компоненты Mística:\n"
        for index, suggestion in enumerate(suggestions, start=1):
            report += f"{index}. {suggestion.component.name} ({suggestion.component.category})\n"
            report += f"   Описание: {suggestion.component.description}\n"
            report += f"   Обоснование: {suggestion.reason}\n\n"

    if refactoring:
        report += "Пример рефакторинга:\n" + refactoring
    return report


async def map_figma_to_mistica(figma_code: str, include_refactoring: bool = True) -> Dict[str, Any]:
    """
    Сопоставляет код React/HTML, экспортированный из Figma, с компонентами Mística.

    Args:
        figma_code: Код из Figma для анализа
        include_refactoring: Добавить пример рефакторинга на компонентах Mística

    Returns:
        Результат анализа, ранжированные предложения (не более 10) и текстовый отчёт
    """
    start_time = time.time()
    tool_name = "map_figma_to_mistica"

    try:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="started").inc()
        code = validate_figma_code(figma_code)
        logger.info(f"Mapping figma code to Mística components ({len(code)} chars)")

        analysis = analyze_figma_code(code)
        catalog = await get_catalog_service().get_all_components()
        suggestions = find_mistica_equivalents(
            analysis.elements,
            analysis.structure,
            analysis.patterns,
            catalog,
            analysis.complexity
        )

        refactoring = ""
        if include_refactoring and suggestions:
            refactoring = RefactoringGenerator().generate_generic_refactoring(
                analysis.elements, analysis.structure, analysis.patterns, suggestions
            )

        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="success").inc()
        log_operation(tool_name, {
            "code_length": len(code),
            "patterns": analysis.patterns.active(),
            "suggestions": [suggestion.component.name for suggestion in suggestions],
        })

        return {
            "analysis": analysis.to_dict(),
            "suggestions": [suggestion.to_dict() for suggestion in suggestions],
            "refactoring": refactoring,
            "message": build_report(analysis, suggestions, refactoring),
        }

    except Exception as e:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="error").inc()
        logger.error(f"Error in {tool_name}: {e}")
        raise

    finally:
        duration = time.time() - start_time
        TOOL_CALL_DURATION.labels(tool_name=tool_name).observe(duration)
        logger.debug(f"Tool {tool_name} executed in {duration:.2f} seconds")


async def analyze_figma_code_tool(figma_code: str) -> Dict[str, Any]:
    """
    Анализирует код из Figma без сопоставления с каталогом.

    Возвращает сигналы элементов, структуру, паттерны, сложность,
    метаданные кода и анализ типографики текстовых фрагментов.
    """
    start_time = time.time()
    tool_name = "analyze_figma_code"

    try:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="started").inc()
        code = validate_figma_code(figma_code)
        analysis = analyze_figma_code(code)
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="success").inc()

        result = analysis.to_dict()
        result["summary"] = {
            "total_elements": analysis.elements.total_count(),
            "patterns": analysis.patterns.active(),
            "complexity": analysis.complexity,
        }
        return result

    except Exception as e:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="error").inc()
        logger.error(f"Error in {tool_name}: {e}")
        raise

    finally:
        duration = time.time() - start_time
        TOOL_CALL_DURATION.labels(tool_name=tool_name).observe(duration)
        logger.debug(f"Tool {tool_name} executed in {duration:.2f} seconds")


mcp.tool(map_figma_to_mistica)
mcp.tool(analyze_figma_code_tool, name="analyze_figma_code")
