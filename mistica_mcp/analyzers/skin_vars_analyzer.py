"""
Сопоставление литеральных цветов с токенами ``skinVars.colors.*`` Mística.
"""
import logging
import re
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Tuple

from .css_utils import class_pattern

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# DATACLASS
# ---------------------------------------------------------------------
@dataclass
class ColorMapping:
    source_color: str
    token: str
    category: str
    confidence: float
    role: str = ""
    sub_role: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------
# TABLES
# ---------------------------------------------------------------------
# Порядок объявления определяет выбор при равной уверенности.
SKIN_VARS_COLORS = {
    "text": {
        "primary": ("#000000", "#1a1a1a", "#333333", "#0b2739", "rgb(0,0,0)", "black"),
        "secondary": ("#666666", "#777777", "#999999", "#6b6c6f", "rgb(102,102,102)"),
        "tertiary": ("#999999", "#aaaaaa", "#bbbbbb", "rgb(153,153,153)"),
        "inverse": ("#ffffff", "#fff", "white", "rgb(255,255,255)"),
        "brand": ("#0066cc", "#007acc", "#0080ff", "rgb(0,102,204)"),
        "success": ("#00aa44", "#00cc55", "#22cc66", "rgb(0,170,68)"),
        "warning": ("#ff9900", "#ffaa00", "#ffbb33", "rgb(255,153,0)"),
        "error": ("#cc0000", "#dd1122", "#ff3344", "rgb(204,0,0)"),
    },
    "background": {
        "canvas": ("#ffffff", "#fff", "white", "rgb(255,255,255)"),
        "canvasAlternative": ("#f5f5f5", "#f0f0f0", "#eeeeee", "rgb(245,245,245)"),
        "container": ("#ffffff", "#fff", "white", "rgb(255,255,255)"),
        "containerAlternative": ("#fafafa", "#f8f8f8", "rgb(250,250,250)"),
        "brand": ("#0066cc", "#007acc", "rgb(0,102,204)"),
        "brandSecondary": ("#e6f2ff", "#f0f8ff", "rgb(230,242,255)"),
    },
    "border": {
        "primary": ("#dddddd", "#d0d0d0", "#cccccc", "rgb(221,221,221)"),
        "secondary": ("#eeeeee", "#e8e8e8", "rgb(238,238,238)"),
        "brand": ("#0066cc", "#007acc", "rgb(0,102,204)"),
        "selected": ("#0066cc", "#007acc", "rgb(0,102,204)"),
    },
    "control": {
        "activatedBackground": ("#0066cc", "#007acc", "rgb(0,102,204)"),
        "deactivatedBackground": ("#f5f5f5", "#f0f0f0", "rgb(245,245,245)"),
        "activatedText": ("#ffffff", "#fff", "white", "rgb(255,255,255)"),
        "deactivatedText": ("#999999", "#aaaaaa", "rgb(153,153,153)"),
    },
}

BASE_CONFIDENCE = 0.7
CONTEXT_BONUS = 0.2
LITERAL_BONUS = 0.1

TAILWIND_COLOR_CLASSES = {
    "text-black": ("color", "#000000"),
    "text-white": ("color", "#ffffff"),
    "text-gray-900": ("color", "#111827"),
    "text-gray-800": ("color", "#1f2937"),
    "text-gray-700": ("color", "#374151"),
    "text-gray-600": ("color", "#4b5563"),
    "text-gray-500": ("color", "#6b7280"),
    "text-gray-400": ("color", "#9ca3af"),
    "text-blue-600": ("color", "#2563eb"),
    "text-blue-500": ("color", "#3b82f6"),
    "bg-white": ("background-color", "#ffffff"),
    "bg-gray-50": ("background-color", "#f9fafb"),
    "bg-gray-100": ("background-color", "#f3f4f6"),
    "bg-blue-500": ("background-color", "#3b82f6"),
}

HEX = r"#[0-9a-fA-F]{6}|#[0-9a-fA-F]{3}"
COLOR_TOKEN_RE = re.compile(r"#[0-9a-fA-F]{3,8}\b|rgba?\([^)]*\)|hsla?\([^)]*\)|\b[a-zA-Z]+\b")
NON_COLOR_WORDS = frozenset((
    "solid", "dashed", "dotted", "double", "none", "hidden", "groove", "ridge", "inset", "outset",
    "inherit", "initial", "unset", "transparent", "url", "no", "repeat", "center", "top", "bottom",
    "left", "right", "cover", "contain", "px", "rem", "em", "auto", "important", "linear", "gradient",
))

# (свойство, регулярное выражение, значение -> цветовой токен)
COLOR_PROPERTY_PATTERNS = (
    ("color", re.compile(r"(?<![\w-])color\s*:\s*['\"]?(rgba?\([^)]*\)|[^;\"'},]+)", re.IGNORECASE), False),
    ("background-color", re.compile(r"(?:background-color|backgroundColor)\s*:\s*['\"]?(rgba?\([^)]*\)|[^;\"'},]+)", re.IGNORECASE), False),
    ("border-color", re.compile(r"(?:border-color|borderColor)\s*:\s*['\"]?(rgba?\([^)]*\)|[^;\"'},]+)", re.IGNORECASE), False),
    ("background", re.compile(r"(?<![\w-])background\s*:\s*['\"]?([^;\"'}]+)", re.IGNORECASE), True),
    ("border", re.compile(r"(?<![\w-])border\s*:\s*['\"]?([^;\"'}]+)", re.IGNORECASE), True),
)

TAILWIND_BRACKET_PATTERNS = (
    ("color", re.compile(r"text-\[(" + HEX + r")\]")),
    ("background-color", re.compile(r"bg-\[(" + HEX + r")\]")),
    ("border-color", re.compile(r"border-\[(" + HEX + r")\]")),
)

_TAILWIND_CLASS_PATTERNS = [
    (class_pattern(name), prop, value) for name, (prop, value) in TAILWIND_COLOR_CLASSES.items()
]


# ---------------------------------------------------------------------
# NORMALIZATION
# ---------------------------------------------------------------------
def normalize_color(color: str) -> str:
    """
    Приводит цвет к каноническому виду: нижний регистр,
    ``rgb(r,g,b)`` -> ``#rrggbb``, ``#abc`` -> ``#aabbcc``.
    Повторное применение результат не меняет.
    """
    value = (color or "").strip().lower()

    rgb_match = re.fullmatch(r"rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)", value)
    if rgb_match:
        channels = [min(int(channel), 255) for channel in rgb_match.groups()]
        return "#" + "".join(f"{channel:02x}" for channel in channels)

    if re.fullmatch(r"#[0-9a-f]{3}", value):
        return "#" + "".join(ch * 2 for ch in value[1:])

    return value


def is_valid_color(value: str) -> bool:
    return re.match(r"^(#[0-9a-f]{3,8}|rgba?\(|hsla?\(|[a-z]+$)", value.lower()) is not None


def _color_from_shorthand(value: str) -> Optional[str]:
    """Первый цветовой токен в shorthand-значении ``background``/``border``."""
    for match in COLOR_TOKEN_RE.finditer(value):
        token = match.group(0)
        if token.lower() in NON_COLOR_WORDS:
            continue
        return token
    return None


def extract_color_properties(style_text: str) -> List[Tuple[str, str]]:
    """Пары (свойство, сырой цвет) из CSS-деклараций и style-пропсов."""
    properties: List[Tuple[str, str]] = []
    for prop, pattern, is_shorthand in COLOR_PROPERTY_PATTERNS:
        for match in pattern.finditer(style_text or ""):
            value = match.group(1).strip()
            if is_shorthand:
                value = _color_from_shorthand(value)
                if not value:
                    continue
            if is_valid_color(normalize_color(value)):
                properties.append((prop, value))
    return properties


def extract_tailwind_colors(markup: str) -> List[Tuple[str, str]]:
    colors: List[Tuple[str, str]] = []
    for prop, pattern in TAILWIND_BRACKET_PATTERNS:
        match = pattern.search(markup or "")
        if match:
            colors.append((prop, match.group(1)))
    for pattern, prop, value in _TAILWIND_CLASS_PATTERNS:
        if pattern.search(markup or ""):
            colors.append((prop, value))
    return colors


# ---------------------------------------------------------------------
# MATCHING
# ---------------------------------------------------------------------
def determine_color_context(prop: str, element_type: str) -> str:
    if "background" in prop:
        return "background"
    if "border" in prop:
        return "border"
    if prop == "color":
        return "text"

    element = (element_type or "").lower()
    if "button" in element:
        return "control"
    if "text" in element or "span" in element:
        return "text"
    if "div" in element or "container" in element:
        return "background"
    return "text"


def _mapping_category(role: str, sub_role: str) -> str:
    if role != "control":
        return role
    return "brand" if sub_role.startswith("activated") else "neutral"


def find_best_match(raw_color: str, prop: str, element_type: str) -> Optional[ColorMapping]:
    normalized = normalize_color(raw_color)
    context = determine_color_context(prop, element_type)

    best: Optional[ColorMapping] = None
    for role, sub_roles in SKIN_VARS_COLORS.items():
        for sub_role, literals in sub_roles.items():
            for literal in literals:
                if normalize_color(literal) != normalized:
                    continue
                confidence = BASE_CONFIDENCE
                if context == role:
                    confidence += CONTEXT_BONUS
                if raw_color.strip() == literal:
                    confidence += LITERAL_BONUS
                confidence = round(min(confidence, 1.0), 2)

                if best is None or confidence > best.confidence:
                    best = ColorMapping(
                        source_color=raw_color.strip(),
                        token=f"skinVars.colors.{sub_role}",
                        category=_mapping_category(role, sub_role),
                        confidence=confidence,
                        role=role,
                        sub_role=sub_role,
                    )
    return best


def analyze_skin_vars_usage(
    style_text: Optional[str],
    element_type: str = "",
    element_markup: Optional[str] = None,
) -> List[ColorMapping]:
    """Находит цвета фрагмента и предлагает для каждого токен skinVars."""
    properties = extract_color_properties(style_text or "")
    if element_markup:
        properties.extend(extract_tailwind_colors(element_markup))

    mappings = []
    for prop, value in properties:
        mapping = find_best_match(value, prop, element_type)
        if mapping:
            mappings.append(mapping)

    if mappings:
        logger.debug(f"Mapped {len(mappings)} colors to skinVars tokens")
    return mappings


def generate_skin_vars_suggestions(mappings: List[ColorMapping]) -> str:
    if not mappings:
        return "Соответствия skinVars не найдены."

    lines = ["Рекомендации по skinVars:", ""]
    for index, mapping in enumerate(mappings, 1):
        lines.append(f"{index}. Цвет: {mapping.source_color}")
        lines.append(f"   Использовать: {mapping.token}")
        lines.append(f"   Категория: {mapping.category}")
        lines.append(f"   Уверенность: {round(mapping.confidence * 100)}%")
        lines.append("")
    return "\n".join(lines)
