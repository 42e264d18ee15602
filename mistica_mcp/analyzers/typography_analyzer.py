"""
Анализ типографики текстового фрагмента: уровень текста Mística
(text1..text10), вес, размер, межстрочный интервал и цвет.
"""
import logging
import re
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Union

from .css_utils import (
    DEFAULT_FONT_SIZE,
    DEFAULT_FONT_WEIGHT,
    class_pattern,
    classify_weight,
    find_font_size,
    find_font_weight,
    find_tailwind_font_size,
    find_tailwind_font_weight,
)

logger = logging.getLogger(__name__)

LineHeight = Union[float, str]


# ---------------------------------------------------------------------
# DATACLASS
# ---------------------------------------------------------------------
@dataclass
class TypographySignal:
    text_level: str
    weight: str
    size: float
    line_height: LineHeight
    color: Optional[str]
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------
# TABLES
# ---------------------------------------------------------------------
# Шкала текстов Mística: уровень -> (min px, max px, допустимые веса).
# Границы включительные, при пересечении выигрывает первый уровень.
TEXT_SCALE = {
    "text1": (56.0, 64.0, ("light", "regular", "medium")),
    "text2": (40.0, 48.0, ("light", "regular", "medium")),
    "text3": (32.0, 40.0, ("light", "regular", "medium")),
    "text4": (28.0, 32.0, ("light", "regular", "medium")),
    "text5": (24.0, 28.0, ("light", "regular", "medium")),
    "text6": (20.0, 24.0, ("regular", "medium")),
    "text7": (18.0, 20.0, ("regular", "medium")),
    "text8": (16.0, 18.0, ("regular", "medium")),
    "text9": (14.0, 16.0, ("regular", "medium")),
    "text10": (12.0, 14.0, ("regular", "medium")),
}

# Лестница для размеров вне всех диапазонов шкалы.
FALLBACK_STAIRCASE = (
    (56.0, "text1"),
    (40.0, "text2"),
    (32.0, "text3"),
    (28.0, "text4"),
    (24.0, "text5"),
    (20.0, "text6"),
    (18.0, "text7"),
    (16.0, "text8"),
    (14.0, "text9"),
)
SMALLEST_TEXT_LEVEL = "text10"

BASE_CONFIDENCE = 0.5
SIZE_IN_RANGE_BONUS = 0.3
WEIGHT_ALLOWED_BONUS = 0.2

TAILWIND_TEXT_COLORS = {
    "text-black": "#000000",
    "text-white": "#ffffff",
    "text-gray-900": "#111827",
    "text-gray-800": "#1f2937",
    "text-gray-700": "#374151",
    "text-gray-600": "#4b5563",
    "text-gray-500": "#6b7280",
    "text-gray-400": "#9ca3af",
    "text-blue-600": "#2563eb",
    "text-blue-500": "#3b82f6",
}

TAILWIND_LEADING = {
    "leading-none": "1",
    "leading-tight": "1.25",
    "leading-snug": "1.375",
    "leading-normal": "1.5",
    "leading-relaxed": "1.625",
    "leading-loose": "2",
    "leading-3": 12.0,
    "leading-4": 16.0,
    "leading-5": 20.0,
    "leading-6": 24.0,
    "leading-7": 28.0,
    "leading-8": 32.0,
    "leading-9": 36.0,
    "leading-10": 40.0,
}

LINE_HEIGHT_RE = re.compile(r"(?:line-height|lineHeight)\s*:\s*['\"]?([^;\"'},]+)", re.IGNORECASE)
COLOR_RE = re.compile(r"(?<![\w-])color\s*:\s*['\"]?(rgba?\([^)]*\)|[^;\"'},]+)", re.IGNORECASE)
TAILWIND_COLOR_RE = re.compile(r"text-\[(#[0-9a-fA-F]{6}|#[0-9a-fA-F]{3})\]")
TAILWIND_LEADING_RE = re.compile(r"leading-\[(\d+(?:\.\d+)?)px\]")

_TEXT_COLOR_PATTERNS = [(class_pattern(name), color) for name, color in TAILWIND_TEXT_COLORS.items()]
_LEADING_PATTERNS = [(class_pattern(name), value) for name, value in TAILWIND_LEADING.items()]


# ---------------------------------------------------------------------
# EXTRACTION
# ---------------------------------------------------------------------
def extract_line_height(style_text: str) -> LineHeight:
    match = LINE_HEIGHT_RE.search(style_text or "")
    if not match:
        return "normal"
    value = match.group(1).strip()
    if "px" in value:
        try:
            return float(value.replace("px", "").strip())
        except ValueError:
            return value
    return value


def extract_color(style_text: str) -> Optional[str]:
    match = COLOR_RE.search(style_text or "")
    return match.group(1).strip() if match else None


def extract_tailwind_color(markup: str) -> Optional[str]:
    match = TAILWIND_COLOR_RE.search(markup or "")
    if match:
        return match.group(1)
    for pattern, color in _TEXT_COLOR_PATTERNS:
        if pattern.search(markup or ""):
            return color
    return None


def extract_tailwind_line_height(markup: str) -> LineHeight:
    match = TAILWIND_LEADING_RE.search(markup or "")
    if match:
        return float(match.group(1))
    for pattern, value in _LEADING_PATTERNS:
        if pattern.search(markup or ""):
            return value
    return "normal"


# ---------------------------------------------------------------------
# CLASSIFICATION
# ---------------------------------------------------------------------
def determine_text_level(size: float) -> str:
    """
    Уровень текста для размера в px.

    Сначала проверяются диапазоны шкалы, затем монотонная лестница,
    так что любой размер получает ровно один уровень.
    """
    for level, (minimum, maximum, _) in TEXT_SCALE.items():
        if minimum <= size <= maximum:
            return level

    for threshold, level in FALLBACK_STAIRCASE:
        if size >= threshold:
            return level
    return SMALLEST_TEXT_LEVEL


def determine_weight(value: Optional[str]) -> str:
    return classify_weight(value)


def calculate_confidence(size: float, text_level: str, weight: str) -> float:
    minimum, maximum, weights = TEXT_SCALE[text_level]
    confidence = BASE_CONFIDENCE
    if minimum <= size <= maximum:
        confidence += SIZE_IN_RANGE_BONUS
    if weight in weights:
        confidence += WEIGHT_ALLOWED_BONUS
    return round(min(confidence, 1.0), 2)


def analyze_typography(style_text: Optional[str], element_markup: Optional[str] = None) -> TypographySignal:
    """
    Определяет типографику фрагмента.

    Значения из inline-стилей имеют приоритет только до финального
    согласования: если классы Tailwind дают значение, отличное от
    значения по умолчанию, оно перезаписывает значение из стиля.
    """
    style_text = style_text or ""

    size = find_font_size(style_text)
    weight_value = find_font_weight(style_text)
    line_height = extract_line_height(style_text)
    color = extract_color(style_text)

    if element_markup:
        if size is None:
            size = find_tailwind_font_size(element_markup)
        if weight_value is None:
            weight_value = find_tailwind_font_weight(element_markup)
        if color is None:
            color = extract_tailwind_color(element_markup)
        if line_height == "normal":
            line_height = extract_tailwind_line_height(element_markup)

        tailwind_size = find_tailwind_font_size(element_markup)
        tailwind_weight = find_tailwind_font_weight(element_markup)
        tailwind_color = extract_tailwind_color(element_markup)
        if tailwind_size is not None and tailwind_size != DEFAULT_FONT_SIZE:
            size = tailwind_size
        if tailwind_weight is not None and tailwind_weight != DEFAULT_FONT_WEIGHT:
            weight_value = tailwind_weight
        if tailwind_color:
            color = tailwind_color

    if size is None:
        size = DEFAULT_FONT_SIZE

    text_level = determine_text_level(size)
    weight = determine_weight(weight_value)
    confidence = calculate_confidence(size, text_level, weight)

    logger.debug(f"Typography resolved: size={size}, weight={weight}, level={text_level}, confidence={confidence}")

    return TypographySignal(
        text_level=text_level,
        weight=weight,
        size=size,
        line_height=line_height,
        color=color,
        confidence=confidence,
    )
