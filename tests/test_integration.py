import pytest

from mistica_mcp.analyzers import analyze_figma_code, analyze_skin_vars_usage, analyze_typography, extract_figma_text_presets
from mistica_mcp.component_mapper import find_mistica_equivalents
from mistica_mcp.generators import RefactoringGenerator
from mistica_mcp.search_engine import rank_components


def run_pipeline(code, catalog):
    analysis = analyze_figma_code(code)
    suggestions = find_mistica_equivalents(
        analysis.elements, analysis.structure, analysis.patterns, catalog, analysis.complexity
    )
    refactoring = RefactoringGenerator().generate_generic_refactoring(
        analysis.elements, analysis.structure, analysis.patterns, suggestions
    )
    return analysis, suggestions, refactoring


class TestIntegration:
    """Интеграционные тесты полного потока анализа и сопоставления"""

    @pytest.mark.integration
    def test_search_button(self, button_catalog):
        """Поиск кнопки по префиксу имени"""
        ranked = rank_components(button_catalog, "button")

        assert len(ranked) == 1
        component, score = ranked[0]
        assert component.name == "ButtonPrimary"
        assert 90 <= score < 100

    @pytest.mark.integration
    def test_explicit_text_preset(self):
        """Явный пресет без дублей с меньшей уверенностью"""
        presets = extract_figma_text_presets('<span class="text-preset-3/regular">Olá</span>')

        assert [(p.preset, p.variant, p.confidence) for p in presets] == [("text3", "regular", 1.0)]

    @pytest.mark.integration
    def test_inline_typography(self):
        """Inline-стиль 32px / 700"""
        signal = analyze_typography("font-size: 32px; font-weight: 700")

        assert signal.text_level == "text3"
        assert signal.weight == "bold"
        assert signal.confidence >= 0.8

    @pytest.mark.integration
    def test_fixed_footer_to_suggestions(self, fixed_footer_markup, button_catalog):
        """Экран с закреплённым футером даёт предложение с оценкой 95"""
        analysis, suggestions, refactoring = run_pipeline(fixed_footer_markup, button_catalog)

        assert analysis.elements.layouts.layout_type == "fixed-footer-with-button"
        assert [(s.component.name, s.score) for s in suggestions] == [("ButtonPrimary", 95)]
        assert "import { ButtonPrimary } from '@telefonica/mistica';" in refactoring

    @pytest.mark.integration
    def test_brand_background_color(self):
        """rgb бренда сопоставляется с фоновым токеном"""
        mappings = analyze_skin_vars_usage("background-color: rgb(0,102,204)", "div")

        assert len(mappings) == 1
        assert mappings[0].token == "skinVars.colors.brand"
        assert mappings[0].category == "background"
        assert mappings[0].confidence >= 0.7

    @pytest.mark.integration
    def test_pipeline_is_deterministic(self, list_markup, known_catalog):
        """Повторный прогон даёт тот же результат"""
        first = run_pipeline(list_markup, known_catalog)
        second = run_pipeline(list_markup, known_catalog)

        assert first[0].to_dict() == second[0].to_dict()
        assert [s.to_dict() for s in first[1]] == [s.to_dict() for s in second[1]]
        assert first[2] == second[2]
