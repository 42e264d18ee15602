"""
Сопоставление результатов анализа кода из Figma с компонентами каталога Mística.

Предложения собираются из трёх уровней:

1. Специальные случаи высокой уверенности (фиксированный футер с кнопкой,
   PIN/код подтверждения) и именованные компоненты из Figma.
2. Статические соответствия для каждого найденного семейства элементов
   с базовым приоритетом и корректировками оценки.
3. Запасные предложения по визуальным паттернам.

Итог сортируется по убыванию оценки, дедуплицируется по имени
компонента и обрезается до ``MAX_SUGGESTIONS``.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .analyzers.element_extractor import (
    ButtonElements,
    ContainerElements,
    IconElements,
    InputElements,
    ListElements,
    NavigationElements,
    SpacingElements,
    TextElements,
    UIElements,
)
from .analyzers.pattern_detector import PatternSignals, StructuralAnalysis
from .models import CatalogComponent, ComponentSuggestion

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 10

FIXED_FOOTER_SCORE = 95
PIN_FIELD_SCORE = 90
FIXED_FOOTER_KEYWORDS = ("layout", "footer", "fixed", "button")
PIN_FIELD_KEYWORDS = ("pin", "code", "security", "otp", "verification")

FAMILY_KEYWORD_BONUS = 30
CATEGORY_BONUS = {
    "components": 25,
    "layout": 20,
    "icons": 15,
    "utilities": 10,
    "hooks": 5,
}
SPACING_ALIGNED_BONUS = 25
SPACING_CONSISTENT_BONUS = 15
SPACING_COMPONENT_BONUS = 20
SPACING_MIXED_PENALTY = 10
SPACING_COMPONENT_KEYWORDS = ("stack", "box", "container", "grid", "flex")

# ожидаемая сложность -> (бонус при совпадении, бонус при несовпадении)
COMPLEXITY_BONUS = {
    "high": (20, -10),
    "medium": (15, 0),
    "low": (10, 5),
}

LIST_PENALTY = 20
BUTTON_PENALTY = 15

# Ключевое слово семейства для бонуса за совпадение с именем компонента.
FAMILY_KEYWORDS = {
    "buttons": "button",
    "texts": "text",
    "lists": "list",
    "containers": "container",
    "icons": "icon",
    "inputs": "input",
    "navigation": "navigation",
}

MISTICA_SPACING_VALUES = ("8px", "16px", "24px", "32px")

# паттерн -> (кандидаты, причина, оценка)
PATTERN_FALLBACKS = (
    ("list_pattern", ("BoxedRowList", "RowList", "BoxedRow"),
     "Обнаружен паттерн списка с повторяющимися элементами", 85),
    ("card_pattern", ("DataCard", "MediaCard", "HighlightedCard", "BoxedRow"),
     "Обнаружен паттерн карточки со структурированным контейнером", 80),
    ("form_pattern", ("Form", "TextField", "EmailField", "PasswordField"),
     "Обнаружен паттерн формы с несколькими полями ввода", 85),
    ("navigation_pattern", ("NavigationBar", "Header", "NavigationBreadcrumbs"),
     "Обнаружен паттерн навигации с заголовком", 90),
    ("modal_pattern", ("ActionsSheet", "Drawer", "InfoSheet"),
     "Обнаружен паттерн модального окна или оверлея", 85),
)

INPUT_TYPE_COMPONENTS = {
    "email": ("EmailField",),
    "password": ("PasswordField",),
    "number": ("IntegerField", "DecimalField"),
    "search": ("SearchField",),
    "date": ("DateField", "DateTimeField"),
    "textarea": ("TextField",),
}


# ---------------------------------------------------------------------
# DATACLASS
# ---------------------------------------------------------------------
@dataclass
class ElementMapping:
    detected: bool
    components: List[str]
    reason: str
    priority: int


def infer_complexity(elements: UIElements) -> str:
    """Сложность, ожидаемая по суммарному числу найденных элементов."""
    total = elements.total_count()
    if total > 15:
        return "high"
    if total > 8:
        return "medium"
    return "low"


def find_components_by_pattern(catalog: Iterable[CatalogComponent], keywords: Iterable[str]) -> List[CatalogComponent]:
    """Компоненты, у которых хотя бы одно ключевое слово есть в имени или описании."""
    keywords = [keyword.lower() for keyword in keywords]
    matches = []
    for component in catalog:
        name = component.name.lower()
        description = (component.description or "").lower()
        if any(keyword in name or keyword in description for keyword in keywords):
            matches.append(component)
    return matches


class ComponentMapper:
    """Ранжирует компоненты каталога по результатам анализа разметки."""

    def find_mistica_equivalents(
        self,
        elements: UIElements,
        structure: StructuralAnalysis,
        patterns: PatternSignals,
        catalog: Optional[List[CatalogComponent]],
        complexity: Optional[str] = None,
    ) -> List[ComponentSuggestion]:
        if catalog is None:
            raise ValueError("Каталог компонентов обязателен для сопоставления")

        by_name: Dict[str, CatalogComponent] = {}
        for component in catalog:
            by_name.setdefault(component.name.lower(), component)

        suggestions: List[ComponentSuggestion] = []
        suggestions.extend(self._special_case_suggestions(elements, catalog))
        suggestions.extend(self._named_component_suggestions(elements, by_name))
        suggestions.extend(self._family_suggestions(elements, structure, by_name, complexity))
        suggestions.extend(self._pattern_suggestions(patterns, by_name))

        ranked = sorted(suggestions, key=lambda suggestion: -suggestion.score)
        unique: List[ComponentSuggestion] = []
        seen = set()
        for suggestion in ranked:
            if suggestion.component.name in seen:
                continue
            seen.add(suggestion.component.name)
            unique.append(suggestion)

        logger.info(f"Mapped analysis to {len(unique)} unique components (from {len(suggestions)} candidates)")
        return unique[:MAX_SUGGESTIONS]

    # -----------------------------------------------------------------
    # Уровень 1: специальные случаи
    # -----------------------------------------------------------------
    def _special_case_suggestions(self, elements: UIElements, catalog: List[CatalogComponent]) -> List[ComponentSuggestion]:
        suggestions = []
        layouts = elements.layouts
        if layouts.has_fixed_footer and layouts.contains_button_in_footer:
            for component in find_components_by_pattern(catalog, FIXED_FOOTER_KEYWORDS):
                suggestions.append(ComponentSuggestion(
                    component=component,
                    reason="Компонент для layout с кнопкой, закреплённой в футере (Button Fixed Footer Layout)",
                    score=FIXED_FOOTER_SCORE,
                ))

        security = elements.security
        if security.has_pin_field or security.has_code_input:
            for component in find_components_by_pattern(catalog, PIN_FIELD_KEYWORDS):
                suggestions.append(ComponentSuggestion(
                    component=component,
                    reason="Компонент для ввода PIN-кода или кода подтверждения",
                    score=PIN_FIELD_SCORE,
                ))
        return suggestions

    def _named_component_suggestions(
        self, elements: UIElements, by_name: Dict[str, CatalogComponent]
    ) -> List[ComponentSuggestion]:
        suggestions = []
        for info in elements.generic_components.components:
            for variant in [info.name] + info.normalized_names:
                component = by_name.get(variant.lower())
                if component:
                    suggestions.append(ComponentSuggestion(
                        component=component,
                        reason=f"Компонент Figma «{info.name}» совпадает с компонентом каталога по имени",
                        score=round(info.confidence * 100),
                    ))
                    break
        return suggestions

    # -----------------------------------------------------------------
    # Уровень 2: статические соответствия семейств
    # -----------------------------------------------------------------
    def create_element_mappings(
        self, elements: UIElements, structure: StructuralAnalysis
    ) -> Dict[str, ElementMapping]:
        buttons, lists, icons, inputs = elements.buttons, elements.lists, elements.icons, elements.inputs
        return {
            "buttons": ElementMapping(
                detected=buttons.found,
                components=self._button_components(buttons),
                reason=self._button_reason(buttons),
                priority=90 if buttons.has_actions else 70,
            ),
            "texts": ElementMapping(
                detected=elements.texts.found,
                components=self._text_components(elements.texts),
                reason=self._text_reason(elements.texts),
                priority=60,
            ),
            "lists": ElementMapping(
                detected=lists.found,
                components=self._list_components(lists),
                reason=self._list_reason(lists),
                priority=95 if lists.has_navigation else 80,
            ),
            "containers": ElementMapping(
                detected=elements.containers.found,
                components=self._container_components(elements.containers, structure, elements.spacing),
                reason=self._container_reason(structure, elements.spacing),
                priority=50,
            ),
            "icons": ElementMapping(
                detected=icons.found,
                components=["IconButton"] if icons.has_interaction else ["Logo"],
                reason=(
                    "Для интерактивных иконок с действиями (кнопки-иконки)" if icons.has_interaction
                    else "Для декоративных иконок и визуальной айдентики"
                ),
                priority=75 if icons.has_interaction else 40,
            ),
            "inputs": ElementMapping(
                detected=inputs.found,
                components=self._input_components(inputs),
                reason=(
                    "Для полей ввода с валидацией и структурированных форм" if inputs.has_validation
                    else "Для ввода данных пользователем"
                ),
                priority=85 if inputs.has_validation else 70,
            ),
            "navigation": ElementMapping(
                detected=elements.navigation.found,
                components=self._navigation_components(elements.navigation),
                reason=self._navigation_reason(elements.navigation),
                priority=90,
            ),
        }

    def _family_suggestions(
        self,
        elements: UIElements,
        structure: StructuralAnalysis,
        by_name: Dict[str, CatalogComponent],
        complexity: Optional[str],
    ) -> List[ComponentSuggestion]:
        suggestions = []
        for element_type, mapping in self.create_element_mappings(elements, structure).items():
            if not mapping.detected:
                continue
            for component_name in mapping.components:
                component = by_name.get(component_name.lower())
                if component is None:
                    continue
                suggestions.append(ComponentSuggestion(
                    component=component,
                    reason=mapping.reason,
                    score=self.calculate_score(element_type, component, elements, mapping, complexity),
                ))
        return suggestions

    def calculate_score(
        self,
        element_type: str,
        component: CatalogComponent,
        elements: UIElements,
        mapping: ElementMapping,
        complexity: Optional[str] = None,
    ) -> int:
        score = mapping.priority or 50
        name = component.name.lower()

        if FAMILY_KEYWORDS.get(element_type, element_type) in name:
            score += FAMILY_KEYWORD_BONUS

        score += CATEGORY_BONUS.get(component.category, 0)

        spacing = elements.spacing
        if spacing.found:
            if "design-system-aligned" in spacing.spacing_patterns:
                if component.category == "layout" or "stack" in name or "box" in name:
                    score += SPACING_ALIGNED_BONUS
            if "consistent" in spacing.spacing_patterns:
                score += SPACING_CONSISTENT_BONUS
            if any(keyword in name for keyword in SPACING_COMPONENT_KEYWORDS):
                score += SPACING_COMPONENT_BONUS
            if "mixed" in spacing.spacing_patterns and element_type in ("layout", "containers"):
                score -= SPACING_MIXED_PENALTY

        expected = infer_complexity(elements)
        actual = complexity or expected
        match_bonus, mismatch_bonus = COMPLEXITY_BONUS[expected]
        score += match_bonus if actual == expected else mismatch_bonus

        if element_type == "lists" and "list" not in name and "row" not in name:
            score -= LIST_PENALTY
        if element_type == "buttons" and "button" not in name and "touchable" not in name:
            score -= BUTTON_PENALTY

        return max(score, 0)

    @staticmethod
    def _button_components(buttons: ButtonElements) -> List[str]:
        components = []
        if buttons.has_actions:
            components.extend(["ButtonPrimary", "ButtonSecondary", "Touchable"])
        if "icon" in buttons.variants:
            components.append("IconButton")
        if "link" in buttons.variants:
            components.extend(["ButtonLink", "TextLink"])
        if "danger" in buttons.variants:
            components.append("ButtonDanger")
        return components or ["ButtonPrimary", "Touchable"]

    @staticmethod
    def _button_reason(buttons: ButtonElements) -> str:
        if buttons.has_actions:
            return "Для интерактивных элементов с действиями (клик, тап)"
        return "Для базовых компонентов действия"

    @staticmethod
    def _text_components(texts: TextElements) -> List[str]:
        components = []
        for level in texts.hierarchy:
            if level.startswith("text") and level[4:].isdigit():
                components.append(f"Text{level[4:]}")
        if "h1" in texts.hierarchy:
            components.append("Title1")
        if "h2" in texts.hierarchy:
            components.append("Title2")
        if "h3" in texts.hierarchy:
            components.append("Title3")
        if "subtitle" in texts.hierarchy:
            components.extend(["Title2", "Title3"])
        if "body" in texts.hierarchy:
            components.append("Text")
        return components or ["Text", "Title1"]

    @staticmethod
    def _text_reason(texts: TextElements) -> str:
        if texts.figma_text_presets:
            return "Для текстов с пресетами типографики Mística"
        if texts.has_formatting:
            return "Для текстов с иерархией и особым форматированием"
        return "Для текстового контента и заголовков"

    @staticmethod
    def _list_components(lists: ListElements) -> List[str]:
        components = []
        if lists.has_navigation and lists.structure.has_icons:
            components.extend(["BoxedRowList", "BoxedRow"])
        elif lists.has_navigation:
            components.extend(["RowList", "BoxedRow"])
        elif lists.is_repeated:
            components.extend(["RowList", "BoxedRowList"])

        if lists.structure.has_actions:
            components.extend(["BoxedRow", "Menu"])
        return components or ["RowList"]

    @staticmethod
    def _list_reason(lists: ListElements) -> str:
        if lists.has_navigation and lists.structure.has_icons:
            return "Для интерактивных списков с иконками и навигацией: BoxedRowList + BoxedRow"
        if lists.is_repeated:
            return "Для списков из повторяющихся структурированных элементов"
        return "Для организации контента в виде списка"

    @staticmethod
    def _container_components(
        containers: ContainerElements, structure: StructuralAnalysis, spacing: SpacingElements
    ) -> List[str]:
        components = []
        if structure.layout_type == "vertical":
            components.append("Stack")
        if structure.layout_type == "horizontal":
            components.append("Inline")
        if structure.layout_type == "grid":
            components.extend(["Grid", "GridLayout"])
        if containers.has_padding:
            components.append("Box")

        if spacing.found:
            if "design-system-aligned" in spacing.spacing_patterns:
                components.insert(0, "Stack")
                if any(value in MISTICA_SPACING_VALUES for value in spacing.spacing_values):
                    components.insert(0, "Box")
            if "gap" in spacing.spacing_types:
                components.append("Inline")
            if len(spacing.spacing_types) > 2:
                components.append("Grid")

        if "card" in containers.types:
            components.extend(["DataCard", "MediaCard"])

        return list(dict.fromkeys(components)) or ["Box", "Stack"]

    @staticmethod
    def _container_reason(structure: StructuralAnalysis, spacing: SpacingElements) -> str:
        if spacing.found:
            if "design-system-aligned" in spacing.spacing_patterns:
                return "Для layout с отступами, выровненными по сетке Mística"
            if "consistent" in spacing.spacing_patterns:
                return "Для layout с единообразными контролируемыми отступами"
            if "mixed" in spacing.spacing_patterns:
                return "Для нормализации разнородных отступов по шаблонам Mística"
        if structure.layout_type == "vertical":
            return "Для вертикального layout с контролируемыми отступами"
        if structure.layout_type == "grid":
            return "Для упорядоченных layout в виде сетки"
        return "Для организации и расстановки отступов между элементами"

    @staticmethod
    def _input_components(inputs: InputElements) -> List[str]:
        components = []
        for input_type in inputs.types:
            components.extend(INPUT_TYPE_COMPONENTS.get(input_type, ("TextField",)))
        if inputs.has_validation:
            components.append("Form")
        return components or ["TextField"]

    @staticmethod
    def _navigation_components(navigation: NavigationElements) -> List[str]:
        components = ["NavigationBar"]
        if (navigation.has_title and not navigation.has_back_button) or navigation.has_actions:
            components.append("Header")
        return components

    @staticmethod
    def _navigation_reason(navigation: NavigationElements) -> str:
        if navigation.has_back_button:
            return "Для навигации с кнопкой «назад» и заголовком"
        if navigation.has_actions:
            return "Для шапки с действиями и навигацией"
        return "Для базовой структуры навигации"

    # -----------------------------------------------------------------
    # Уровень 3: паттерны
    # -----------------------------------------------------------------
    @staticmethod
    def _pattern_suggestions(
        patterns: PatternSignals, by_name: Dict[str, CatalogComponent]
    ) -> List[ComponentSuggestion]:
        suggestions = []
        for flag, candidates, reason, score in PATTERN_FALLBACKS:
            if not getattr(patterns, flag):
                continue
            for name in candidates:
                component = by_name.get(name.lower())
                if component:
                    suggestions.append(ComponentSuggestion(component=component, reason=reason, score=score))
        return suggestions


def find_mistica_equivalents(
    elements: UIElements,
    structure: StructuralAnalysis,
    patterns: PatternSignals,
    catalog: Optional[List[CatalogComponent]],
    complexity: Optional[str] = None,
) -> List[ComponentSuggestion]:
    return ComponentMapper().find_mistica_equivalents(elements, structure, patterns, catalog, complexity)
