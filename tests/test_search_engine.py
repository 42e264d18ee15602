from mistica_mcp.models import CatalogComponent
from mistica_mcp.search_engine import (
    extract_contextual_keywords,
    extract_search_terms,
    rank_components,
    search_by_category,
    search_multiple_terms,
    smart_search_components,
)


def make_component(name, category="components", description=""):
    return CatalogComponent(id=f"{category}-{name.lower()}", name=name, category=category, description=description)


class TestSearchTerms:
    """Тесты разбора запроса"""

    def test_terms(self):
        """Тест: запрос целиком плюс токены"""
        assert extract_search_terms("pin-code field") == ["pin-code field", "pin", "code", "field"]
        assert extract_search_terms("a b") == ["a b"]

    def test_contextual_keywords(self):
        """Тест контекстных ключевых слов"""
        assert extract_contextual_keywords("modal") == ["overlay", "dialog", "popup"]
        assert extract_contextual_keywords("zzz") == []


class TestRankComponents:
    """Тесты ранжирования компонентов"""

    def test_button_scores(self, button_catalog):
        """Тест оценки кнопки: префикс плюс расширенный термин"""
        ranked = rank_components(button_catalog, "button")

        assert [(component.name, score) for component, score in ranked] == [("ButtonPrimary", 130)]

    def test_exact_name_first(self, known_catalog):
        """Тест: точное совпадение имени всегда первое со 100"""
        ranked = rank_components(known_catalog, "Stack")

        assert ranked[0][0].name == "Stack"
        assert ranked[0][1] == 100

    def test_blank_query_returns_catalog(self, known_catalog):
        """Тест пустого запроса"""
        assert smart_search_components(known_catalog, "   ") is known_catalog
        assert [score for _, score in rank_components(known_catalog, "")] == [0] * len(known_catalog)

    def test_no_matches(self, known_catalog):
        """Тест запроса без совпадений"""
        assert smart_search_components(known_catalog, "zzzz") == []

    def test_pin_search(self, known_catalog):
        """Тест поиска PIN-поля"""
        assert smart_search_components(known_catalog, "pin")[0].name == "PinField"

    def test_scores_descending(self, known_catalog):
        """Тест сортировки по убыванию оценки"""
        scores = [score for _, score in rank_components(known_catalog, "field")]
        assert scores == sorted(scores, reverse=True)
        assert all(score > 0 for score in scores)

    def test_stable_order_on_ties(self):
        """Тест: при равной оценке сохраняется порядок каталога"""
        catalog = [make_component("AlphaCard"), make_component("BetaCard")]
        assert [c.name for c in smart_search_components(catalog, "zeta card")] == ["AlphaCard", "BetaCard"]


class TestCategoryAndMultiTerm:
    """Тесты поиска по категории и нескольким терминам"""

    def test_category_plural(self, known_catalog):
        """Тест наивного множественного числа категории"""
        layouts = search_by_category(known_catalog, "layouts")

        assert layouts
        assert all(component.category == "layout" for component in layouts)
        assert search_by_category(known_catalog, "LAYOUT") == layouts

    def test_multiple_terms(self):
        """Тест суммирования бонусов по позициям"""
        catalog = [
            make_component("TextField", description="Campo de texto"),
            make_component("PinField", description="Campo para código PIN"),
            make_component("Spinner", description="Indicador de carregamento"),
        ]
        result = search_multiple_terms(catalog, ["pin", "field"])

        assert [component.name for component in result] == ["PinField", "TextField", "Spinner"]
