"""
Общие помощники для разбора стилей в коде из Figma: inline CSS,
style-пропсы React и классы Tailwind.
"""
import re
from typing import List, Optional

# ---------------------------------------------------------------------
# WEIGHTS
# ---------------------------------------------------------------------
WEIGHT_ORDER = ("light", "regular", "medium", "bold")

WEIGHT_KEYWORDS = {
    "light": ("light", "thin", "300", "200", "100"),
    "regular": ("regular", "normal", "400", "book"),
    "medium": ("medium", "500", "600", "semibold"),
    "bold": ("bold", "700", "800", "900", "black"),
}

DEFAULT_FONT_SIZE = 16.0
DEFAULT_FONT_WEIGHT = "regular"

# ---------------------------------------------------------------------
# PATTERNS
# ---------------------------------------------------------------------
STYLE_ATTR_RE = re.compile(
    r"""style\s*=\s*(?:"([^"]*)"|'([^']*)'|\{\{(.*?)\}\})""",
    re.IGNORECASE | re.DOTALL,
)
CSS_FONT_SIZE_RE = re.compile(r"font-size:\s*(\d+(?:\.\d+)?)px", re.IGNORECASE)
PROP_FONT_SIZE_RE = re.compile(r"fontSize\s*:\s*['\"]?(\d+(?:\.\d+)?)(?:px)?['\"]?", re.IGNORECASE)
CSS_FONT_WEIGHT_RE = re.compile(r"font-weight:\s*([^;\"'}]+)", re.IGNORECASE)
PROP_FONT_WEIGHT_RE = re.compile(r"fontWeight\s*:\s*['\"]?([\w-]+)['\"]?", re.IGNORECASE)

TAILWIND_SIZE_RE = re.compile(r"text-\[(\d+(?:\.\d+)?)px\]")
TAILWIND_NUMERIC_WEIGHT_RE = re.compile(r"font-(\d{3})\b")

TAILWIND_FONT_SIZES = {
    "text-xs": 12.0,
    "text-sm": 14.0,
    "text-base": 16.0,
    "text-lg": 18.0,
    "text-xl": 20.0,
    "text-2xl": 24.0,
    "text-3xl": 30.0,
    "text-4xl": 36.0,
    "text-5xl": 48.0,
    "text-6xl": 60.0,
}

# Порядок важен: первое совпадение выигрывает.
TAILWIND_WEIGHT_MARKERS = (
    ("bold", ("On_Air:Bold", ":Bold"), r"\bfont-bold\b"),
    ("medium", ("On_Air:Medium", ":Medium"), r"\bfont-medium\b"),
    ("light", ("On_Air:Light", ":Light"), r"\bfont-light\b"),
    ("regular", ("On_Air:Regular", ":Regular"), r"\bfont-normal\b"),
)


def class_pattern(class_name: str) -> "re.Pattern[str]":
    """Регулярное выражение для utility-класса как отдельного токена."""
    return re.compile(r"(?<![\w-])" + re.escape(class_name) + r"(?![\w-])")


_TAILWIND_SIZE_PATTERNS = [(class_pattern(name), size) for name, size in TAILWIND_FONT_SIZES.items()]


def extract_style_blocks(markup: str) -> List[str]:
    """Возвращает содержимое всех атрибутов style (строки и объекты JSX)."""
    blocks = []
    for match in STYLE_ATTR_RE.finditer(markup or ""):
        block = next((group for group in match.groups() if group is not None), "")
        if block.strip():
            blocks.append(block)
    return blocks


def find_font_size(style_text: str) -> Optional[float]:
    """Размер шрифта в px из CSS-декларации или style-пропса, иначе None."""
    match = CSS_FONT_SIZE_RE.search(style_text or "") or PROP_FONT_SIZE_RE.search(style_text or "")
    if not match:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        return None


def find_font_weight(style_text: str) -> Optional[str]:
    """Сырое значение font-weight из CSS-декларации или style-пропса."""
    match = CSS_FONT_WEIGHT_RE.search(style_text or "") or PROP_FONT_WEIGHT_RE.search(style_text or "")
    if not match:
        return None
    value = re.sub(r"\s*!important$", "", match.group(1).strip(), flags=re.IGNORECASE)
    return value or None


def find_tailwind_font_size(markup: str) -> Optional[float]:
    if not markup:
        return None
    match = TAILWIND_SIZE_RE.search(markup)
    if match:
        return float(match.group(1))
    for pattern, size in _TAILWIND_SIZE_PATTERNS:
        if pattern.search(markup):
            return size
    return None


def find_tailwind_font_weight(markup: str) -> Optional[str]:
    if not markup:
        return None
    for weight, markers, class_regex in TAILWIND_WEIGHT_MARKERS:
        if any(marker in markup for marker in markers) or re.search(class_regex, markup):
            return weight
    match = TAILWIND_NUMERIC_WEIGHT_RE.search(markup)
    if match:
        return match.group(1)
    return None


def classify_weight(value: Optional[str]) -> str:
    """
    Сводит значение font-weight к одному из классов light/regular/medium/bold.

    Сначала ищутся ключевые слова (числовые сравниваются целиком,
    словесные как подстрока), затем числовые пороги. Нераспознанное
    значение даёт ``regular``.
    """
    if not value:
        return DEFAULT_FONT_WEIGHT

    lowered = str(value).strip().lower()
    for weight in WEIGHT_ORDER:
        for keyword in WEIGHT_KEYWORDS[weight]:
            if keyword.isdigit():
                if lowered == keyword:
                    return weight
            elif keyword in lowered:
                return weight

    try:
        numeric = float(lowered)
    except ValueError:
        return DEFAULT_FONT_WEIGHT

    if numeric <= 300:
        return "light"
    if numeric <= 400:
        return "regular"
    if numeric <= 600:
        return "medium"
    return "bold"


def nearest_allowed_weight(weight: str, allowed: tuple) -> str:
    """Ближайший по шкале WEIGHT_ORDER вес из разрешённого набора."""
    if weight in allowed:
        return weight
    index = WEIGHT_ORDER.index(weight) if weight in WEIGHT_ORDER else 1
    return min(allowed, key=lambda candidate: (abs(WEIGHT_ORDER.index(candidate) - index), -WEIGHT_ORDER.index(candidate)))
