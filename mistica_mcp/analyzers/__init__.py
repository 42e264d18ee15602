"""Эвристические анализаторы кода, экспортированного из Figma."""
from .element_extractor import ElementExtractor, UIElements, extract_figma_text_presets, extract_ui_elements
from .figma_analyzer import FigmaAnalysis, FigmaAnalyzer, analyze_figma_code
from .pattern_detector import (
    PatternSignals,
    StructuralAnalysis,
    analyze_structure,
    calculate_code_complexity,
    detect_visual_patterns,
)
from .skin_vars_analyzer import ColorMapping, analyze_skin_vars_usage, normalize_color
from .typography_analyzer import TypographySignal, analyze_typography, determine_text_level

__all__ = [
    "ElementExtractor",
    "UIElements",
    "extract_ui_elements",
    "extract_figma_text_presets",
    "FigmaAnalysis",
    "FigmaAnalyzer",
    "analyze_figma_code",
    "PatternSignals",
    "StructuralAnalysis",
    "analyze_structure",
    "calculate_code_complexity",
    "detect_visual_patterns",
    "ColorMapping",
    "analyze_skin_vars_usage",
    "normalize_color",
    "TypographySignal",
    "analyze_typography",
    "determine_text_level",
]
