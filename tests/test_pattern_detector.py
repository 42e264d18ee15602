import pytest

from mistica_mcp.analyzers import analyze_figma_code
from mistica_mcp.analyzers.pattern_detector import (
    analyze_structure,
    calculate_code_complexity,
    complexity_score,
    detect_visual_patterns,
    find_repetitive_tags,
)


class TestPatternDetector:
    """Тесты визуальных паттернов"""

    def test_list_pattern(self, list_markup):
        """Тест паттерна списка"""
        patterns = detect_visual_patterns(list_markup)

        assert patterns.list_pattern is True
        assert patterns.modal_pattern is False
        assert "list" in patterns.active()

    def test_modal_and_footer(self, fixed_footer_markup):
        """Тест паттернов модального окна и футера"""
        assert detect_visual_patterns("<BottomSheet open />").modal_pattern is True
        assert detect_visual_patterns(fixed_footer_markup).footer_pattern is True

    def test_table_pattern(self):
        """Тест паттерна таблицы"""
        assert detect_visual_patterns("<table><tr><td>1</td></tr></table>").table_pattern is True

    def test_form_pattern(self):
        """Тест паттерна формы по количеству полей"""
        patterns = detect_visual_patterns("<input /><input />")
        assert patterns.form_pattern is True

    def test_empty_code(self):
        """Тест пустого кода"""
        assert detect_visual_patterns("").active() == []


class TestStructure:
    """Тесты структурного анализа"""

    def test_vertical_layout(self):
        """Тест вертикального layout с явными отступами"""
        markup = '<div style="display: flex; flex-direction: column; gap: 16px; align-items: center">'
        structure = analyze_structure(markup)

        assert structure.layout_type == "vertical"
        assert structure.spacing == "explicit"
        assert structure.alignment == "center"

    def test_defaults(self):
        """Тест значений по умолчанию"""
        structure = analyze_structure("<p>Olá</p>")

        assert structure.layout_type == "flow"
        assert structure.spacing == "implicit"
        assert structure.alignment == "default"
        assert structure.interaction_elements == []

    def test_interactions(self):
        """Тест интерактивных элементов"""
        structure = analyze_structure('<button onClick={go}>Ir</button><input name="q" />')
        assert structure.interaction_elements == ["buttons", "forms"]

    def test_repetitive_tags(self):
        """Тест повторяющихся тегов"""
        assert find_repetitive_tags("<li>a</li><li>b</li><li>c</li>") is True
        assert find_repetitive_tags("<li>a</li><li>b</li>") is False


class TestComplexity:
    """Тесты оценки сложности"""

    @pytest.mark.parametrize("repeat,expected", [
        (30, "high"),
        (12, "medium"),
        (3, "low"),
    ])
    def test_levels(self, repeat, expected):
        """Тест уровней сложности по количеству тегов"""
        assert calculate_code_complexity("<div></div>" * repeat) == expected

    def test_score_counts_attributes_and_indent(self):
        """Тест формулы оценки"""
        code = '<div id="a">\n    <p class="b">x</p>\n</div>'
        assert complexity_score(code) == 2 * 2 + 4 / 2 + 2


class TestFigmaAnalyzer:
    """Тесты агрегированного анализа"""

    def test_text_hierarchy_sorted_by_level(self):
        """Тест иерархии уровней текста по номеру"""
        code = '<p style="font-size: 12px">Legenda</p><h1 style="font-size: 40px">Título</h1>'
        analysis = analyze_figma_code(code)

        assert analysis.text_analysis.hierarchy == ["text2", "text10"]
        assert analysis.text_analysis.fragment_count == 2

    def test_color_mappings(self):
        """Тест сопоставления цветов текстовых фрагментов"""
        analysis = analyze_figma_code('<span style="color: #0066cc">Olá</span>')
        mappings = analysis.text_analysis.color_mappings

        assert [mapping.token for mapping in mappings] == ["skinVars.colors.brand"]
        assert mappings[0].category == "text"

    def test_skips_nested_markup(self):
        """Тест: фрагменты с вложенной разметкой не анализируются"""
        analysis = analyze_figma_code("<div><p>Texto</p></div>")
        assert analysis.text_analysis.fragment_count == 1

    def test_metadata(self):
        """Тест метаданных кода"""
        code = 'export default function Screen() { return <img src="a.png" className="x" /> }'
        metadata = analyze_figma_code(code).metadata

        assert metadata.code_length == len(code)
        assert metadata.has_react_components is True
        assert metadata.has_css is True
        assert metadata.has_images is True

    def test_to_dict(self, fixed_footer_markup):
        """Тест сериализации результата"""
        result = analyze_figma_code(fixed_footer_markup).to_dict()

        assert set(result) == {"elements", "structure", "patterns", "complexity", "metadata", "text_analysis"}
        assert result["elements"]["layouts"]["layout_type"] == "fixed-footer-with-button"
