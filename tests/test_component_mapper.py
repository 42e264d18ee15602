import pytest

from mistica_mcp.analyzers import analyze_figma_code
from mistica_mcp.component_mapper import (
    MAX_SUGGESTIONS,
    ComponentMapper,
    find_components_by_pattern,
    find_mistica_equivalents,
    infer_complexity,
)
from mistica_mcp.models import CatalogComponent


def make_component(name, category="components", description=""):
    return CatalogComponent(id=f"{category}-{name.lower()}", name=name, category=category, description=description)


def map_code(code, catalog):
    analysis = analyze_figma_code(code)
    return find_mistica_equivalents(
        analysis.elements, analysis.structure, analysis.patterns, catalog, analysis.complexity
    )


class TestComponentMapper:
    """Тесты сопоставления анализа с каталогом"""

    def test_requires_catalog(self):
        """Тест ошибки без каталога"""
        analysis = analyze_figma_code("<div />")
        with pytest.raises(ValueError):
            find_mistica_equivalents(analysis.elements, analysis.structure, analysis.patterns, None)

    def test_fixed_footer_layout(self, fixed_footer_markup):
        """Тест: кнопка в закреплённом футере даёт layout с высокой оценкой"""
        catalog = [
            make_component("ButtonFixedFooterLayout", "layout", "Layout com botão fixo no rodapé da tela"),
            make_component("Title1", description="Título de primeiro nível"),
            make_component("Spinner", description="Indicador de carregamento animado"),
        ]
        suggestions = {s.component.name: s for s in map_code(fixed_footer_markup, catalog)}

        assert suggestions["ButtonFixedFooterLayout"].score == 95
        assert "футере" in suggestions["ButtonFixedFooterLayout"].reason
        assert "Spinner" not in suggestions

    def test_pin_field(self):
        """Тест PIN-поля"""
        catalog = [
            make_component("PinField", description="Campo para código PIN"),
            make_component("TextField", description="Campo de texto"),
        ]
        scores = {s.component.name: s.score for s in map_code("<PinField length={6} />", catalog)}

        assert scores["PinField"] == 90
        assert "TextField" in scores

    def test_named_figma_component(self):
        """Тест именованного компонента Figma"""
        catalog = [make_component("ErrorFeedbackScreen", "feedback", "Tela de feedback de erro")]
        suggestions = map_code('<div data-name="ErrorFeedbackScreen">Erro</div>', catalog)

        assert [(s.component.name, s.score) for s in suggestions] == [("ErrorFeedbackScreen", 90)]

    def test_named_component_by_variant(self):
        """Тест совпадения по нормализованному варианту имени"""
        catalog = [make_component("ErrorFeedbackScreen", "feedback")]
        suggestions = map_code('<div data-name="error feedback screen">Erro</div>', catalog)

        assert suggestions[0].component.name == "ErrorFeedbackScreen"

    def test_list_suggestions(self, list_markup, known_catalog):
        """Тест списка: уникальные имена, убывание оценки, не больше лимита"""
        suggestions = map_code(list_markup, known_catalog)
        names = [s.component.name for s in suggestions]
        scores = [s.score for s in suggestions]

        assert "BoxedRowList" in names
        assert len(names) == len(set(names))
        assert len(suggestions) <= MAX_SUGGESTIONS
        assert scores == sorted(scores, reverse=True)

    def test_case_insensitive_catalog_names(self):
        """Тест сопоставления имён каталога без учёта регистра"""
        catalog = [make_component("boxedrowlist")]
        suggestions = map_code("items.map(item => <Row>{item}</Row>)", catalog)

        assert [s.component.name for s in suggestions] == ["boxedrowlist"]

    def test_empty_catalog(self, fixed_footer_markup):
        """Тест пустого каталога"""
        assert map_code(fixed_footer_markup, []) == []


class TestMapperHelpers:
    """Тесты вспомогательных функций"""

    def test_find_components_by_pattern(self, known_catalog):
        """Тест поиска по ключевым словам в имени и описании"""
        names = [c.name for c in find_components_by_pattern(known_catalog, ["rodapé"])]
        assert names == ["ButtonFixedFooterLayout"]

    def test_infer_complexity(self):
        """Тест ожидаемой сложности по числу элементов"""
        assert infer_complexity(analyze_figma_code("<p>a</p>").elements) == "low"

    def test_score_is_not_negative(self):
        """Тест: оценка не бывает отрицательной"""
        elements = analyze_figma_code("<button onClick={go}>Ok</button>").elements
        mapping = ComponentMapper().create_element_mappings(
            elements, analyze_figma_code("").structure
        )["buttons"]
        mapping.priority = 1
        score = ComponentMapper().calculate_score(
            "buttons", make_component("Logo", "icons-extra"), elements, mapping, "high"
        )

        assert score == 0
