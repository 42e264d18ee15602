"""
Определение визуальных паттернов, структуры и сложности разметки.
"""
import re
from collections import Counter
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List

from .element_extractor import has_deep_indentation, has_repeated_elements


COMPLEXITY_HIGH_THRESHOLD = 50
COMPLEXITY_MEDIUM_THRESHOLD = 20

TAG_RE = re.compile(r"<\w+")
ATTRIBUTE_RE = re.compile(r"\w+=")


# ---------------------------------------------------------------------
# DATACLASS
# ---------------------------------------------------------------------
@dataclass
class PatternSignals:
    list_pattern: bool = False
    card_pattern: bool = False
    form_pattern: bool = False
    navigation_pattern: bool = False
    modal_pattern: bool = False
    table_pattern: bool = False
    header_pattern: bool = False
    footer_pattern: bool = False

    def active(self) -> List[str]:
        """Имена сработавших паттернов без суффикса ``_pattern``."""
        return [name[: -len("_pattern")] for name, value in asdict(self).items() if value]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class StructuralAnalysis:
    has_nested_elements: bool = False
    layout_type: str = "flow"
    repetitive_elements: bool = False
    interaction_elements: List[str] = field(default_factory=list)
    spacing: str = "implicit"
    alignment: str = "default"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _search(pattern: str, text: str) -> bool:
    return re.search(pattern, text, re.IGNORECASE) is not None


def _first_match(rules, text: str, default: str) -> str:
    for pattern, label in rules:
        if _search(pattern, text):
            return label
    return default


LAYOUT_TYPE_RULES = (
    (r"flex.*column|flex-col|Stack.*vertical", "vertical"),
    (r"flex.*row|flex-row|horizontal", "horizontal"),
    (r"grid", "grid"),
    (r"absolute|fixed|relative", "positioned"),
)

SPACING_RULES = (
    (r"gap|space.*\d+|margin.*\d+|padding.*\d+", "explicit"),
    (r"flex.*gap|grid.*gap", "flexible"),
)

ALIGNMENT_RULES = (
    (r"center|justify-center|align-center", "center"),
    (r"start|left|justify-start", "start"),
    (r"end|right|justify-end", "end"),
    (r"between|around|evenly", "distributed"),
)

INTERACTION_RULES = (
    (r"onPress|onClick|press|tap", "buttons"),
    (r"scroll|swipe", "scrollable"),
    (r"input|field", "forms"),
    (r"modal|sheet|drawer", "overlays"),
)


# ---------------------------------------------------------------------
# PATTERNS
# ---------------------------------------------------------------------
def is_list_pattern(code: str) -> bool:
    return has_repeated_elements(code) and _search(r"Row|Item|List", code)


def is_card_pattern(code: str) -> bool:
    return (
        _search(r"card|shadow|elevation", code)
        or (has_deep_indentation(code) and _search(r"padding|border", code))
    )


def is_form_pattern(code: str) -> bool:
    input_count = len(re.findall(r"input|field|textfield", code, re.IGNORECASE))
    return input_count > 1 or _search(r"form|submit", code)


def is_navigation_pattern(code: str) -> bool:
    return _search(r"Navigation|Header|AppBar|nav.*bar", code)


def is_modal_pattern(code: str) -> bool:
    return _search(r"modal|dialog|sheet|drawer|overlay", code)


def is_table_pattern(code: str) -> bool:
    return (
        _search(r"<(?:table|thead|tbody|tr|td|th)\b|\btable\b", code)
        or (has_repeated_elements(code) and _search(r"column|header", code))
    )


def is_header_pattern(code: str) -> bool:
    return _search(r"header|AppBar|Navigation.*title", code)


def is_footer_pattern(code: str) -> bool:
    return _search(r"footer|bottom.*bar|tab.*bar", code)


def detect_visual_patterns(code: str) -> PatternSignals:
    code = code or ""
    return PatternSignals(
        list_pattern=is_list_pattern(code),
        card_pattern=is_card_pattern(code),
        form_pattern=is_form_pattern(code),
        navigation_pattern=is_navigation_pattern(code),
        modal_pattern=is_modal_pattern(code),
        table_pattern=is_table_pattern(code),
        header_pattern=is_header_pattern(code),
        footer_pattern=is_footer_pattern(code),
    )


# ---------------------------------------------------------------------
# STRUCTURE
# ---------------------------------------------------------------------
def find_repetitive_tags(code: str) -> bool:
    """Встречается ли какой-то тег больше двух раз."""
    counts = Counter(TAG_RE.findall(code))
    return any(count > 2 for count in counts.values())


def analyze_structure(code: str) -> StructuralAnalysis:
    code = code or ""
    return StructuralAnalysis(
        has_nested_elements=has_deep_indentation(code),
        layout_type=_first_match(LAYOUT_TYPE_RULES, code, "flow"),
        repetitive_elements=find_repetitive_tags(code),
        interaction_elements=[label for pattern, label in INTERACTION_RULES if _search(pattern, code)],
        spacing=_first_match(SPACING_RULES, code, "implicit"),
        alignment=_first_match(ALIGNMENT_RULES, code, "default"),
    )


def complexity_score(code: str) -> float:
    """
    Оценка сложности: 2 * число тегов + максимальный отступ / 2 + число атрибутов.
    """
    code = code or ""
    element_count = len(TAG_RE.findall(code))
    nesting_level = max(
        (len(line) - len(line.lstrip()) for line in code.split("\n")),
        default=0,
    ) / 2
    props_count = len(ATTRIBUTE_RE.findall(code))
    return element_count * 2 + nesting_level + props_count


def calculate_code_complexity(code: str) -> str:
    score = complexity_score(code)
    if score > COMPLEXITY_HIGH_THRESHOLD:
        return "high"
    if score > COMPLEXITY_MEDIUM_THRESHOLD:
        return "medium"
    return "low"
