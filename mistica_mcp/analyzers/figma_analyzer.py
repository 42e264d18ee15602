"""
Агрегированный анализ кода из Figma.

Объединяет извлечение элементов, паттерны, структуру, сложность,
а также типографику и цвета каждого текстового фрагмента.
"""
import logging
import re
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List

from .css_utils import extract_style_blocks
from .element_extractor import ElementExtractor, UIElements
from .pattern_detector import (
    PatternSignals,
    StructuralAnalysis,
    analyze_structure,
    calculate_code_complexity,
    detect_visual_patterns,
)
from .skin_vars_analyzer import ColorMapping, analyze_skin_vars_usage
from .typography_analyzer import TypographySignal, analyze_typography

logger = logging.getLogger(__name__)

# Листовой фрагмент: открывающий тег, текст без вложенной разметки, закрывающий тег.
TEXT_FRAGMENT_RE = re.compile(r"(<([A-Za-z][\w.]*)\b[^<>]*>)([^<>]+)</\2\s*>", re.DOTALL)

METADATA_PATTERNS = {
    "has_react_components": re.compile(r"export default function|function \w+|const \w+ = |React\.", re.IGNORECASE),
    "has_typescript": re.compile(r"interface|type |: \w+|<\w+>", re.IGNORECASE),
    "has_css": re.compile(r"className|style=|css`|styled\.", re.IGNORECASE),
    "has_images": re.compile(r"src=|Image|img|picture", re.IGNORECASE),
}


# ---------------------------------------------------------------------
# DATACLASS
# ---------------------------------------------------------------------
@dataclass
class AnalysisMetadata:
    code_length: int = 0
    has_react_components: bool = False
    has_typescript: bool = False
    has_css: bool = False
    has_images: bool = False


@dataclass
class TextAnalysis:
    hierarchy: List[str] = field(default_factory=list)
    typography: List[TypographySignal] = field(default_factory=list)
    color_mappings: List[ColorMapping] = field(default_factory=list)
    fragment_count: int = 0


@dataclass
class FigmaAnalysis:
    elements: UIElements
    structure: StructuralAnalysis
    patterns: PatternSignals
    complexity: str
    metadata: AnalysisMetadata
    text_analysis: TextAnalysis

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------
# ANALYSIS
# ---------------------------------------------------------------------
def extract_metadata(code: str) -> AnalysisMetadata:
    flags = {name: pattern.search(code) is not None for name, pattern in METADATA_PATTERNS.items()}
    return AnalysisMetadata(code_length=len(code), **flags)


def _level_number(level: str) -> int:
    digits = level[4:]
    return int(digits) if digits.isdigit() else 0


def analyze_text_fragments(code: str) -> TextAnalysis:
    """
    Прогоняет каждый листовой текстовый фрагмент через анализ
    типографики и цветов. Иерархия состоит из уникальных уровней,
    отсортированных по номеру.
    """
    typography: List[TypographySignal] = []
    color_mappings: List[ColorMapping] = []

    for match in TEXT_FRAGMENT_RE.finditer(code):
        opening_tag, tag_name, text = match.group(1), match.group(2), match.group(3)
        if not text.strip():
            continue

        style_text = "; ".join(extract_style_blocks(opening_tag))
        typography.append(analyze_typography(style_text, opening_tag))
        color_mappings.extend(analyze_skin_vars_usage(style_text, tag_name, opening_tag))

    hierarchy = sorted({signal.text_level for signal in typography}, key=_level_number)
    return TextAnalysis(
        hierarchy=hierarchy,
        typography=typography,
        color_mappings=color_mappings,
        fragment_count=len(typography),
    )


class FigmaAnalyzer:
    """Оркестратор анализаторов для одного фрагмента кода."""

    def __init__(self):
        self.element_extractor = ElementExtractor()

    def analyze_figma_code(self, code: str) -> FigmaAnalysis:
        code = code or ""
        analysis = FigmaAnalysis(
            elements=self.element_extractor.extract_ui_elements(code),
            structure=analyze_structure(code),
            patterns=detect_visual_patterns(code),
            complexity=calculate_code_complexity(code),
            metadata=extract_metadata(code),
            text_analysis=analyze_text_fragments(code),
        )
        logger.info(
            f"Analyzed figma code: {len(code)} chars, complexity={analysis.complexity}, "
            f"patterns={analysis.patterns.active()}, text fragments={analysis.text_analysis.fragment_count}"
        )
        return analysis


def analyze_figma_code(code: str) -> FigmaAnalysis:
    return FigmaAnalyzer().analyze_figma_code(code)
