"""
Извлечение UI-элементов из кода, экспортированного из Figma.

Каждое семейство элементов (кнопки, тексты, списки, поля ввода и т.д.)
распознаётся независимым набором эвристик поверх исходного текста.
Отсутствие сигнала представлено флагом ``found=False`` и нулевыми полями,
а не пропуском семейства.
"""
import re
from collections import Counter
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple

from ..utils import generate_name_variants
from .css_utils import (
    WEIGHT_ORDER,
    classify_weight,
    extract_style_blocks,
    find_font_size,
    find_font_weight,
    find_tailwind_font_size,
    find_tailwind_font_weight,
    nearest_allowed_weight,
)


# ---------------------------------------------------------------------
# DATACLASS
# ---------------------------------------------------------------------
@dataclass
class ButtonElements:
    found: bool = False
    count: int = 0
    has_actions: bool = False
    variants: List[str] = field(default_factory=list)
    positions: List[str] = field(default_factory=list)


@dataclass
class FigmaTextPreset:
    preset: str
    variant: str
    confidence: float
    source: str = "explicit"


@dataclass
class TextElements:
    found: bool = False
    count: int = 0
    has_formatting: bool = False
    hierarchy: List[str] = field(default_factory=list)
    figma_text_presets: List[FigmaTextPreset] = field(default_factory=list)


@dataclass
class ContainerElements:
    found: bool = False
    count: int = 0
    has_layout: bool = False
    has_padding: bool = False
    types: List[str] = field(default_factory=list)


@dataclass
class ListStructure:
    has_icons: bool = False
    has_actions: bool = False
    has_subtitle: bool = False
    is_nested: bool = False


@dataclass
class ListElements:
    found: bool = False
    count: int = 0
    is_repeated: bool = False
    has_navigation: bool = False
    structure: ListStructure = field(default_factory=ListStructure)


@dataclass
class IconElements:
    found: bool = False
    count: int = 0
    has_interaction: bool = False
    types: List[str] = field(default_factory=list)


@dataclass
class InputElements:
    found: bool = False
    count: int = 0
    types: List[str] = field(default_factory=list)
    has_validation: bool = False


@dataclass
class ImageElements:
    found: bool = False
    count: int = 0
    is_decorative: bool = False


@dataclass
class NavigationElements:
    found: bool = False
    has_back_button: bool = False
    has_title: bool = False
    has_actions: bool = False


@dataclass
class LayoutElements:
    found: bool = False
    has_fixed_footer: bool = False
    has_fixed_header: bool = False
    has_modal: bool = False
    layout_type: str = "standard"
    contains_button_in_footer: bool = False


@dataclass
class SecurityElements:
    found: bool = False
    has_pin_field: bool = False
    has_code_input: bool = False
    has_otp_input: bool = False
    security_level: str = "none"


@dataclass
class FormElements:
    found: bool = False
    has_validation: bool = False
    field_types: List[str] = field(default_factory=list)
    has_submit_button: bool = False
    structure: str = "simple"


@dataclass
class SpacingElements:
    found: bool = False
    has_explicit_spacing: bool = False
    spacing_types: List[str] = field(default_factory=list)
    spacing_values: List[str] = field(default_factory=list)
    spacing_patterns: List[str] = field(default_factory=list)
    detected_units: List[str] = field(default_factory=list)
    semantic_spacing: List[str] = field(default_factory=list)


@dataclass
class FeedbackElements:
    found: bool = False
    feedback_type: str = "generic"
    has_icon: bool = False
    has_actions: bool = False
    component_names: List[str] = field(default_factory=list)


@dataclass
class FigmaComponentInfo:
    name: str
    component_type: str
    confidence: float
    normalized_names: List[str] = field(default_factory=list)


@dataclass
class GenericComponentElements:
    found: bool = False
    count: int = 0
    components: List[FigmaComponentInfo] = field(default_factory=list)


@dataclass
class UIElements:
    buttons: ButtonElements
    texts: TextElements
    containers: ContainerElements
    lists: ListElements
    icons: IconElements
    inputs: InputElements
    images: ImageElements
    navigation: NavigationElements
    layouts: LayoutElements
    security: SecurityElements
    forms: FormElements
    spacing: SpacingElements
    feedback: FeedbackElements
    generic_components: GenericComponentElements

    def total_count(self) -> int:
        """Сумма счётчиков всех семейств, у которых есть поле ``count``."""
        return sum(getattr(family, "count", 0) for family in vars(self).values())

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------
# TABLES
# ---------------------------------------------------------------------
SPACING_UNITS = r"(?P<unit>px|rem|em|%|pt|pc|in|cm|mm|ex|ch|vw|vh|vmin|vmax)"
SPACING_NUMBER = r"(?P<value>\d+(?:\.\d+)?)"

SPACING_VALUE_PATTERNS = (
    re.compile(r"padding[:\s]*[A-Za-z-]*\s*[:\s]*\s*(?P<q>['\"`]?)" + SPACING_NUMBER + SPACING_UNITS + r"(?P=q)", re.IGNORECASE),
    re.compile(r"margin[:\s]*[A-Za-z-]*\s*[:\s]*\s*(?P<q>['\"`]?)" + SPACING_NUMBER + SPACING_UNITS + r"(?P=q)", re.IGNORECASE),
    re.compile(r"gap[:\s]*\s*(?P<q>['\"`]?)" + SPACING_NUMBER + SPACING_UNITS + r"(?P=q)", re.IGNORECASE),
    re.compile(r"space[:\s]*\s*(?P<q>['\"`]?)" + SPACING_NUMBER + SPACING_UNITS + r"(?P=q)", re.IGNORECASE),
    # Tailwind: p-[16px], gap-x-[8px], space-y-[12px]
    re.compile(
        r"(?<![\w-])(?:p|px|py|pt|pb|pl|pr|m|mx|my|mt|mb|ml|mr|gap|gap-x|gap-y|space-x|space-y)"
        r"-\[" + SPACING_NUMBER + r"(?P<unit>px|rem|em|%)\]"
    ),
)

SEMANTIC_SPACING_PATTERNS = (
    re.compile(r"space[-_]?(xs|sm|md|lg|xl|2xl|3xl)", re.IGNORECASE),
    re.compile(r"padding[-_]?(small|medium|large|extra)", re.IGNORECASE),
    re.compile(r"margin[-_]?(small|medium|large|extra)", re.IGNORECASE),
    re.compile(r"gap[-_]?(tight|normal|loose)", re.IGNORECASE),
)

DESIGN_SYSTEM_SPACING_VALUES = ("8px", "16px", "24px", "32px", "4px", "12px", "20px", "40px")

EXPLICIT_PRESET_RE = re.compile(
    r"text[-_ ]?preset[-_ ]?(\d{1,2})\s*[/|\-:]\s*(light|regular|medium|bold)\b", re.IGNORECASE
)
PRESET_LEVEL_RE = re.compile(r"text[-_ ]?preset[-_ ]?(\d{1,2})", re.IGNORECASE)

# Шесть непересекающихся диапазонов размера для вывода пресета из CSS:
# (пресет, min включительно, max исключительно, допустимые веса).
PRESET_SIZE_RANGES = (
    ("text1", 40.0, None, ("light", "regular", "medium")),
    ("text2", 28.0, 40.0, ("light", "regular", "medium")),
    ("text3", 22.0, 28.0, ("regular", "medium", "bold")),
    ("text4", 18.0, 22.0, ("regular", "medium", "bold")),
    ("text5", 14.0, 18.0, ("regular", "medium", "bold")),
    ("text6", 0.0, 14.0, ("regular", "medium")),
)

EXPLICIT_PRESET_CONFIDENCE = 1.0
CSS_PRESET_CONFIDENCE = 0.7

SEMANTIC_PRESET_RULES = (
    (re.compile(r"<h1\b", re.IGNORECASE), "text1", 0.6),
    (re.compile(r"<h2\b", re.IGNORECASE), "text2", 0.55),
    (re.compile(r"<h3\b", re.IGNORECASE), "text3", 0.5),
    (re.compile(r"<h[4-6]\b", re.IGNORECASE), "text4", 0.45),
    (re.compile(r"<small\b|\b(?:caption|footnote|helper[-_ ]?text|hint|legal)\b", re.IGNORECASE), "text5", 0.4),
)

OPENING_TAG_RE = re.compile(r"<[A-Za-z][\w.]*\b[^>]*>", re.DOTALL)

COMPONENT_SUFFIXES = ("Screen", "Feedback", "Button", "Card", "Modal")
SUFFIX_RE = re.compile(r"screen|feedback|button|card|modal", re.IGNORECASE)
DATA_NAME_RE = re.compile(r"data-name\s*=\s*[\"']([^\"']+)[\"']", re.IGNORECASE)
CLASS_ID_RE = re.compile(r"\b(?:class|className|id)\s*=\s*\{?\s*[\"'`]([^\"'`]+)[\"'`]")
COMMENT_RE = re.compile(r"/\*(.*?)\*/|<!--(.*?)-->", re.DOTALL)
COMMENT_ANNOTATION_RE = re.compile(r"(?:component|figma)\s*[:=]\s*([A-Za-z][\w \-]{1,60}[\w])", re.IGNORECASE)
PASCAL_COMPONENT_RE = re.compile(
    r"\b(?:[A-Z][a-z0-9]+)*(?:" + "|".join(COMPONENT_SUFFIXES) + r")(?:[A-Z][a-z0-9]+)*\b"
)

# Приоритет определения типа компонента: первое совпадение выигрывает.
COMPONENT_TYPE_RULES = (
    ("feedback", re.compile(r"feedback|(?:error|success|info|warning)[\s_-]*screen", re.IGNORECASE), 0.9),
    ("button", re.compile(r"button|btn|\bcta\b", re.IGNORECASE), 0.85),
    ("card", re.compile(r"card", re.IGNORECASE), 0.8),
    ("modal", re.compile(r"modal|dialog|sheet|popup|drawer", re.IGNORECASE), 0.8),
    ("text", re.compile(r"text|title|heading|label|paragraph|caption", re.IGNORECASE), 0.7),
    ("navigation", re.compile(r"nav|header|menu|tab[\s_-]*bar|breadcrumb|app[\s_-]*bar", re.IGNORECASE), 0.75),
    ("input", re.compile(r"input|field|search|\bpin\b|otp", re.IGNORECASE), 0.75),
)
UNKNOWN_COMPONENT_CONFIDENCE = 0.3

FEEDBACK_SCREEN_RE = re.compile(
    r"(error|success|info|warning)[\s_-]*(feedback|screen)|(feedback|screen)[\s_-]*(error|success|info|warning)", re.IGNORECASE
)
FEEDBACK_KEYWORD_RE = re.compile(r"feedback|error|success|info|warning", re.IGNORECASE)
FEEDBACK_TYPES = ("error", "success", "info", "warning")

LIST_CONSTRUCT_RE = re.compile(r"\.map|FlatList|ScrollView|ListView|VirtualizedList", re.IGNORECASE)


# ---------------------------------------------------------------------
# HELPERS
# ---------------------------------------------------------------------
def _search(pattern: str, text: str) -> bool:
    return re.search(pattern, text, re.IGNORECASE) is not None


def _count(pattern: str, text: str) -> int:
    return sum(1 for _ in re.finditer(pattern, text, re.IGNORECASE))


def _followed_by(first: str, second: str, text: str) -> bool:
    """Есть ли совпадение ``first``, после которого встречается ``second``."""
    match = re.search(first, text, re.IGNORECASE)
    return bool(match) and re.search(second, text[match.end():], re.IGNORECASE) is not None


def has_self_repetition(text: str) -> bool:
    """
    Линейная проверка повторов: какой-то словесный символ встречается
    не меньше трёх раз (без учёта регистра). Эквивалентно поиску
    ``(\\w+)[\\s\\S]*?\\1[\\s\\S]*?\\1`` без экспоненциального перебора.
    """
    counts = Counter(ch.lower() for ch in text if ch.isascii() and (ch.isalnum() or ch == "_"))
    return any(count >= 3 for count in counts.values())


def _in_line_order(text: str, *chains: Tuple[str, ...]) -> bool:
    """
    Встречаются ли части хотя бы одной цепочки по порядку в одной строке.

    Эквивалентно ``a.*b.*c``: каждая следующая часть ищется после конца
    совпадения предыдущей, поэтому время линейно по длине строки.
    """
    compiled = [[re.compile(part, re.IGNORECASE) for part in chain] for chain in chains]
    for line in text.split("\n"):
        for patterns in compiled:
            position = 0
            for pattern in patterns:
                match = pattern.search(line, position)
                if match is None:
                    break
                position = match.end()
            else:
                return True
    return False


def has_deep_indentation(text: str, threshold: int = 8) -> bool:
    """Есть ли строка с отступом больше ``threshold`` пробельных символов."""
    return any(len(line) - len(line.lstrip()) > threshold for line in text.split("\n") if line.strip())


def has_repeated_elements(code: str) -> bool:
    return (
        has_self_repetition(code)
        or _search(r"map\s*\(", code)
        or _search(r"FlatList|ScrollView|forEach", code)
        or _in_line_order(code, ("for", "in"), ("for", "of"))
    )


def _unique(items: List[str]) -> List[str]:
    return list(dict.fromkeys(items))


# ---------------------------------------------------------------------
# EXTRACTOR
# ---------------------------------------------------------------------
class ElementExtractor:
    """Извлекает сигналы UI-элементов из произвольной разметки."""

    def extract_ui_elements(self, code: Optional[str]) -> UIElements:
        code = code or ""
        generic_components = self.extract_generic_components(code)
        return UIElements(
            buttons=self._extract_buttons(code),
            texts=self._extract_texts(code),
            containers=self._extract_containers(code),
            lists=self._extract_lists(code),
            icons=self._extract_icons(code),
            inputs=self._extract_inputs(code),
            images=self._extract_images(code),
            navigation=self._extract_navigation(code),
            layouts=self._extract_layouts(code),
            security=self._extract_security(code),
            forms=self._extract_forms(code),
            spacing=self._extract_spacing(code),
            feedback=self._extract_feedback(code, generic_components),
            generic_components=generic_components,
        )

    # -----------------------------------------------------------------
    # Кнопки
    # -----------------------------------------------------------------
    def _extract_buttons(self, code: str) -> ButtonElements:
        found = (
            _followed_by(r"button|btn|TouchableOpacity|Pressable", r"onPress|onClick|press", code)
            or _followed_by(r"<button", r">", code)
            or _search(r"Button\w*\s*\{", code)
        )
        if not found:
            return ButtonElements()

        return ButtonElements(
            found=True,
            count=_count(r"button|TouchableOpacity|Pressable", code),
            has_actions=_search(r"onPress|onClick|press|tap", code),
            variants=self._detect_button_variants(code),
            positions=self._detect_button_positions(code),
        )

    def _detect_button_variants(self, code: str) -> List[str]:
        variants = []
        if _search(r"primary", code):
            variants.append("primary")
        if _search(r"secondary", code):
            variants.append("secondary")
        if _search(r"danger|error", code):
            variants.append("danger")
        if _search(r"link", code):
            variants.append("link")
        if _search(r"icon.*button|IconButton", code):
            variants.append("icon")
        return variants

    def _detect_button_positions(self, code: str) -> List[str]:
        positions = []
        if _in_line_order(
            code, ("footer", "button"), ("button", "footer"), ("bottom", "button"), ("fixed", "bottom", "button")
        ):
            positions.append("footer")
        if _in_line_order(
            code, ("header", "button"), ("button", "header"), ("top", "button"), ("navigation", "button")
        ):
            positions.append("header")
        # inline по умолчанию, только если позиция не найдена
        if not positions or _in_line_order(code, ("inline", "button"), ("content", "button")):
            positions.append("inline")
        return positions

    # -----------------------------------------------------------------
    # Тексты
    # -----------------------------------------------------------------
    def _extract_texts(self, code: str) -> TextElements:
        found = (
            _followed_by(r"<Text", r">", code)
            or _search(r"<h[1-6]", code)
            or _followed_by(r"<p", r">", code)
            or _search(r"Title\d*|Heading|Typography", code)
            or PRESET_LEVEL_RE.search(code) is not None
        )
        if not found:
            return TextElements()

        return TextElements(
            found=True,
            count=_count(r"Text|title|heading|h\d|p>", code),
            has_formatting=_search(r"bold|italic|font-size|color|weight", code),
            hierarchy=self._detect_text_hierarchy(code),
            figma_text_presets=self.extract_figma_text_presets(code),
        )

    def _detect_text_hierarchy(self, code: str) -> List[str]:
        """
        Иерархия текста: пресеты ``textN`` по возрастанию номера, затем
        заголовки ``h1..h6``, ``subtitle``, ``body`` и веса из имён пресетов.
        """
        preset_levels = sorted({int(number) for number in PRESET_LEVEL_RE.findall(code)})
        hierarchy = [f"text{number}" for number in preset_levels]

        for level in range(1, 7):
            heading = rf"<h{level}\b|\bh{level}\b|Title{level}\b|heading[-_ ]?{level}\b"
            if _search(heading, code):
                hierarchy.append(f"h{level}")

        if _search(r"subtitle", code):
            hierarchy.append("subtitle")
        if _search(r"body|paragraph|p>", code):
            hierarchy.append("body")

        preset_weights = {variant.lower() for _, variant in EXPLICIT_PRESET_RE.findall(code)}
        hierarchy.extend(weight for weight in WEIGHT_ORDER if weight in preset_weights)
        return hierarchy

    def extract_figma_text_presets(self, code: str) -> List[FigmaTextPreset]:
        """
        Находит текстовые пресеты Figma тремя независимыми стратегиями.

        1. Явные имена ``text-preset-N/variant`` (уверенность 1.0).
        2. Вывод из font-size/font-weight в inline-стилях и классах (0.7).
        3. Семантический контекст тегов и классов (0.6 … 0.4).

        Результаты группируются по (preset, variant), в каждой группе
        остаётся запись с максимальной уверенностью, итог отсортирован
        по убыванию уверенности.
        """
        code = code or ""
        candidates: List[FigmaTextPreset] = []
        candidates.extend(self._presets_from_names(code))
        candidates.extend(self._presets_from_css(code))
        candidates.extend(self._presets_from_context(code))
        return self._consolidate_presets(candidates)

    def _presets_from_names(self, code: str) -> List[FigmaTextPreset]:
        return [
            FigmaTextPreset(
                preset=f"text{int(number)}",
                variant=variant.lower(),
                confidence=EXPLICIT_PRESET_CONFIDENCE,
                source="explicit",
            )
            for number, variant in EXPLICIT_PRESET_RE.findall(code)
        ]

    def _presets_from_css(self, code: str) -> List[FigmaTextPreset]:
        presets = []
        for tag in OPENING_TAG_RE.findall(code):
            style_text = " ".join(extract_style_blocks(tag))
            size = find_font_size(style_text)
            if size is None:
                size = find_tailwind_font_size(tag)
            if size is None:
                continue

            weight_value = find_font_weight(style_text) or find_tailwind_font_weight(tag)
            preset, allowed = self._preset_for_size(size)
            presets.append(FigmaTextPreset(
                preset=preset,
                variant=nearest_allowed_weight(classify_weight(weight_value), allowed),
                confidence=CSS_PRESET_CONFIDENCE,
                source="css",
            ))
        return presets

    @staticmethod
    def _preset_for_size(size: float) -> Tuple[str, tuple]:
        for preset, minimum, maximum, allowed in PRESET_SIZE_RANGES:
            if size >= minimum and (maximum is None or size < maximum):
                return preset, allowed
        # отрицательные размеры в разметке не встречаются, но функция тотальна
        preset, _, _, allowed = PRESET_SIZE_RANGES[-1]
        return preset, allowed

    def _presets_from_context(self, code: str) -> List[FigmaTextPreset]:
        presets = []
        for tag in OPENING_TAG_RE.findall(code):
            for pattern, preset, confidence in SEMANTIC_PRESET_RULES:
                if pattern.search(tag):
                    presets.append(FigmaTextPreset(
                        preset=preset,
                        variant=self._variant_from_context(tag),
                        confidence=confidence,
                        source="semantic",
                    ))
                    break
        return presets

    @staticmethod
    def _variant_from_context(tag: str) -> str:
        if _search(r"bold|strong", tag):
            return "bold"
        if _search(r"medium|semibold", tag):
            return "medium"
        if _search(r"\blight\b|font-light", tag):
            return "light"
        return "regular"

    @staticmethod
    def _consolidate_presets(candidates: List[FigmaTextPreset]) -> List[FigmaTextPreset]:
        best: Dict[Tuple[str, str], FigmaTextPreset] = {}
        for candidate in candidates:
            key = (candidate.preset, candidate.variant)
            current = best.get(key)
            if current is None or candidate.confidence > current.confidence:
                best[key] = candidate
        return sorted(best.values(), key=lambda preset: -preset.confidence)

    # -----------------------------------------------------------------
    # Контейнеры, списки, иконки
    # -----------------------------------------------------------------
    def _extract_containers(self, code: str) -> ContainerElements:
        if not _search(r"div|View|Container|Box|Stack|Grid", code):
            return ContainerElements()

        types = []
        for container_type in ("stack", "box", "grid", "card", "container"):
            if _search(container_type, code):
                types.append(container_type)

        return ContainerElements(
            found=True,
            count=_count(r"div|View|Container|Box|Stack", code),
            has_layout=_search(r"flex|grid|stack|column|row", code),
            has_padding=_search(r"padding|margin|space", code),
            types=types,
        )

    def _extract_lists(self, code: str) -> ListElements:
        if not _search(r"FlatList|ScrollView|map\(|Row.*Row|Item.*Item", code):
            return ListElements()

        return ListElements(
            found=True,
            count=_count(r"Row|Item|List", code),
            is_repeated=has_repeated_elements(code),
            has_navigation=_search(r"chevron|arrow|>", code),
            structure=self._analyze_list_structure(code),
        )

    def _analyze_list_structure(self, code: str) -> ListStructure:
        is_list = LIST_CONSTRUCT_RE.search(code) is not None
        return ListStructure(
            has_icons=is_list and _search(r"icon", code),
            has_actions=is_list and _search(r"chevron|arrow|onPress", code),
            has_subtitle=_search(r"subtitle|description", code),
            is_nested=is_list and has_deep_indentation(code),
        )

    def _extract_icons(self, code: str) -> IconElements:
        if not _search(r"icon|Image.*?\.(?:svg|png)|/>", code):
            return IconElements()

        types = []
        if _search(r"chevron|arrow", code):
            types.append("navigation")
        if _search(r"check|tick|cross|x", code):
            types.append("status")
        if _search(r"star|heart|bookmark", code):
            types.append("action")
        if _search(r"info|warning|error|success", code):
            types.append("feedback")

        return IconElements(
            found=True,
            count=_count(r"icon", code),
            has_interaction=_search(r"IconButton|onPress.*icon", code),
            types=types,
        )

    # -----------------------------------------------------------------
    # Поля ввода, изображения, навигация
    # -----------------------------------------------------------------
    def _extract_inputs(self, code: str) -> InputElements:
        if not _search(r"input|Field|TextInput", code):
            return InputElements()

        types = []
        if _search(r"email", code):
            types.append("email")
        if _search(r"password", code):
            types.append("password")
        if _search(r"number|numeric", code):
            types.append("number")
        if _search(r"search", code):
            types.append("search")
        if _search(r"date|time", code):
            types.append("date")
        if _search(r"textarea|multiline", code):
            types.append("textarea")

        return InputElements(
            found=True,
            count=_count(r"input|Field", code),
            types=types,
            has_validation=_search(r"required|validation|error", code),
        )

    def _extract_images(self, code: str) -> ImageElements:
        if not _search(r"img|Image|picture|src=", code):
            return ImageElements()
        return ImageElements(
            found=True,
            count=_count(r"img|Image", code),
            is_decorative=not _search(r"alt=|aria-label", code),
        )

    def _extract_navigation(self, code: str) -> NavigationElements:
        if not _search(r"Navigation|Header|AppBar|nav", code):
            return NavigationElements()
        return NavigationElements(
            found=True,
            has_back_button=_search(r"back|arrow.*left|<", code),
            has_title=_search(r"title|heading", code),
            has_actions=_search(r"action|menu|more", code),
        )

    # -----------------------------------------------------------------
    # Layout, безопасность, формы
    # -----------------------------------------------------------------
    def _extract_layouts(self, code: str) -> LayoutElements:
        has_fixed_footer = _in_line_order(
            code, ("fixed", "footer"), ("footer", "fixed"), ("sticky", "bottom"), ("position", "fixed", "bottom")
        )
        has_fixed_header = _in_line_order(
            code, ("fixed", "header"), ("header", "fixed"), ("sticky", "top"), ("position", "fixed", "top")
        )
        has_modal = _search(r"modal|dialog|overlay|popup|sheet|bottomsheet", code)
        contains_button_in_footer = has_fixed_footer and _in_line_order(
            code, ("footer", "button"), ("button", "footer")
        )

        if not (has_fixed_footer or has_fixed_header or has_modal):
            return LayoutElements()

        layout_rules = (
            (has_fixed_footer and contains_button_in_footer, "fixed-footer-with-button"),
            (has_fixed_footer, "fixed-footer"),
            (has_fixed_header, "fixed-header"),
            (has_modal, "modal"),
        )
        layout_type = next((label for matched, label in layout_rules if matched), "standard")

        return LayoutElements(
            found=True,
            has_fixed_footer=has_fixed_footer,
            has_fixed_header=has_fixed_header,
            has_modal=has_modal,
            layout_type=layout_type,
            contains_button_in_footer=contains_button_in_footer,
        )

    def _extract_security(self, code: str) -> SecurityElements:
        has_pin_field = _search(r"pinfield|pin.*field|pin.*input|code.*input", code)
        has_code_input = _search(r"code.*input|verification.*code|otp|pin", code)
        has_otp_input = _search(r"otp", code) or _in_line_order(
            code, ("one", "time", "password"), ("verification", "code")
        )

        if not (has_pin_field or has_code_input or has_otp_input):
            return SecurityElements()

        security_level = "none"
        if has_pin_field or has_code_input:
            security_level = "medium"
        if has_otp_input:
            security_level = "high"

        return SecurityElements(
            found=True,
            has_pin_field=has_pin_field,
            has_code_input=has_code_input,
            has_otp_input=has_otp_input,
            security_level=security_level,
        )

    def _extract_forms(self, code: str) -> FormElements:
        field_rules = (
            ("text", r"text.*input|textfield"),
            ("email", r"email.*input|email.*field"),
            ("password", r"password.*input|password.*field"),
            ("number", r"number.*input|numeric.*field"),
            ("phone", r"phone.*input|phone.*field"),
            ("pin", r"pin.*input|pin.*field|code.*input"),
        )
        field_types = [field_type for field_type, pattern in field_rules if _search(pattern, code)]
        has_submit_button = _search(r"submit|send|save|continue|next|confirm", code)

        if not (field_types or has_submit_button):
            return FormElements()

        structure = "simple"
        if len(field_types) > 3:
            structure = "complex"
        elif len(field_types) > 1:
            structure = "multi-field"

        return FormElements(
            found=True,
            has_validation=_search(r"validation|error|validate|required|pattern", code),
            field_types=field_types,
            has_submit_button=has_submit_button,
            structure=structure,
        )

    # -----------------------------------------------------------------
    # Отступы
    # -----------------------------------------------------------------
    def _extract_spacing(self, code: str) -> SpacingElements:
        spacing_types = [name for name in ("padding", "margin", "gap", "space") if _search(name, code)]

        spacing_values: List[str] = []
        detected_units: List[str] = []
        for pattern in SPACING_VALUE_PATTERNS:
            for match in pattern.finditer(code):
                unit = match.group("unit").lower()
                spacing_values.append(f"{match.group('value')}{unit}")
                detected_units.append(unit)

        if not spacing_types and not spacing_values:
            return SpacingElements()

        semantic_spacing: List[str] = []
        for pattern in SEMANTIC_SPACING_PATTERNS:
            semantic_spacing.extend(match.group(1).lower() for match in pattern.finditer(code))

        unique_values = _unique(spacing_values)
        spacing_patterns = []
        if len(unique_values) == 1:
            spacing_patterns.append("consistent")
        elif 2 <= len(unique_values) <= 3:
            spacing_patterns.append("design-system")
        elif len(unique_values) >= 4:
            spacing_patterns.append("mixed")

        if any(value in DESIGN_SYSTEM_SPACING_VALUES for value in unique_values):
            spacing_patterns.append("design-system-aligned")

        return SpacingElements(
            found=True,
            has_explicit_spacing=True,
            spacing_types=spacing_types,
            spacing_values=unique_values,
            spacing_patterns=spacing_patterns,
            detected_units=_unique(detected_units),
            semantic_spacing=_unique(semantic_spacing),
        )

    # -----------------------------------------------------------------
    # Экраны обратной связи и именованные компоненты
    # -----------------------------------------------------------------
    def _extract_feedback(self, code: str, generic: GenericComponentElements) -> FeedbackElements:
        fragments = [match.group(0) for match in FEEDBACK_SCREEN_RE.finditer(code)]
        names = [
            component.name for component in generic.components
            if FEEDBACK_KEYWORD_RE.search(component.name)
        ]
        if not fragments and not names:
            return FeedbackElements()

        evidence = " ".join(fragments + names).lower()
        feedback_type = next((kind for kind in FEEDBACK_TYPES if kind in evidence), "generic")

        return FeedbackElements(
            found=True,
            feedback_type=feedback_type,
            has_icon=_search(r"icon|<svg|Image", code),
            has_actions=_search(r"button|onPress|onClick", code),
            component_names=names,
        )

    def extract_generic_components(self, code: str) -> GenericComponentElements:
        """
        Извлекает имена компонентов из структурных подсказок Figma.

        Источники: атрибуты ``data-name``, токены class/id с известными
        суффиксами, аннотации в комментариях и PascalCase-идентификаторы.
        """
        raw_names: List[str] = []
        raw_names.extend(match.strip() for match in DATA_NAME_RE.findall(code))

        for value in CLASS_ID_RE.findall(code):
            raw_names.extend(token for token in value.split() if SUFFIX_RE.search(token))

        for block_comment, html_comment in COMMENT_RE.findall(code):
            body = (block_comment or html_comment).strip()
            annotation = COMMENT_ANNOTATION_RE.search(body)
            if annotation:
                raw_names.append(annotation.group(1).strip())
            elif SUFFIX_RE.search(body) and len(body.split()) <= 5:
                raw_names.append(body)

        raw_names.extend(PASCAL_COMPONENT_RE.findall(code))

        components: List[FigmaComponentInfo] = []
        seen = set()
        for name in raw_names:
            key = re.sub(r"[^a-z0-9]", "", name.lower())
            if not key or key in seen:
                continue
            seen.add(key)

            component_type, confidence = self.classify_component_name(name)
            if len(name) < 3 and component_type == "unknown":
                continue

            components.append(FigmaComponentInfo(
                name=name,
                component_type=component_type,
                confidence=confidence,
                normalized_names=generate_name_variants(name),
            ))

        if not components:
            return GenericComponentElements()
        return GenericComponentElements(found=True, count=len(components), components=components)

    @staticmethod
    def classify_component_name(name: str) -> Tuple[str, float]:
        for component_type, pattern, confidence in COMPONENT_TYPE_RULES:
            if pattern.search(name):
                return component_type, confidence
        return "unknown", UNKNOWN_COMPONENT_CONFIDENCE


def extract_ui_elements(code: Optional[str]) -> UIElements:
    return ElementExtractor().extract_ui_elements(code)


def extract_figma_text_presets(code: Optional[str]) -> List[FigmaTextPreset]:
    return ElementExtractor().extract_figma_text_presets(code or "")
