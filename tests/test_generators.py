from mistica_mcp.analyzers import analyze_figma_code
from mistica_mcp.component_mapper import find_mistica_equivalents
from mistica_mcp.generators import RefactoringGenerator, UsageExampleGenerator
from mistica_mcp.generators.usage_example_generator import detect_kind, normalize_component_name
from mistica_mcp.models import CatalogComponent


def make_component(name, category="components", description=""):
    return CatalogComponent(id=f"{category}-{name.lower()}", name=name, category=category, description=description)


class TestUsageExampleGenerator:
    """Тесты генерации примеров использования"""

    def test_sections_for_field(self, component_with_props):
        """Тест секций для поля ввода с props"""
        markdown = UsageExampleGenerator().generate(component_with_props)

        assert markdown.startswith("## Примеры использования: TextField\n\nCampo de texto com label e validação\n")
        assert "import { TextField } from '@telefonica/mistica';" in markdown
        assert "## Варианты" in markdown
        assert "| prop0 | string | — | Описание свойства 0 |" in markdown
        assert "prop8" not in markdown
        assert "… ещё 2 props" in markdown

    def test_optional_sections_skipped(self):
        """Тест: необязательные секции пропускаются"""
        markdown = UsageExampleGenerator().generate(make_component("Avatar"))

        assert "## Варианты" not in markdown
        assert "## Основные props" not in markdown
        assert "## Связанные компоненты" not in markdown
        assert "<Avatar />" in markdown
        assert "Компонент дизайн-системы Mística." in markdown

    def test_html_format(self):
        """Тест формата html"""
        markdown = UsageExampleGenerator().generate(make_component("Box", "layout"), "html")

        assert '```html\n<div class="box">...</div>\n```' in markdown
        assert "```tsx\n<Box />" not in markdown

    def test_fixed_footer_layout(self):
        """Тест layout с закреплённым футером"""
        markdown = UsageExampleGenerator().generate(make_component("ButtonFixedFooterLayout", "layout"))

        assert "<ButtonFixedFooterLayout>" in markdown
        assert "## Композиция" in markdown
        assert "- Stack" in markdown

    def test_kinds(self):
        """Тест определения вида компонента"""
        assert detect_kind("PinField") == "pinfield"
        assert detect_kind("EmailField") == "field"
        assert detect_kind("ButtonPrimary") == "button"
        assert detect_kind("IconButton") == "button"
        assert detect_kind("Stack") == "stack"
        assert detect_kind("Avatar") == "generic"
        assert normalize_component_name("default as Box") == "Box"


class TestRefactoringGenerator:
    """Тесты генерации примера рефакторинга"""

    def _refactor(self, code, catalog):
        analysis = analyze_figma_code(code)
        suggestions = find_mistica_equivalents(
            analysis.elements, analysis.structure, analysis.patterns, catalog, analysis.complexity
        )
        return RefactoringGenerator().generate_generic_refactoring(
            analysis.elements, analysis.structure, analysis.patterns, suggestions
        ), suggestions

    def test_list_refactoring(self, list_markup, known_catalog):
        """Тест рефакторинга списка"""
        code, suggestions = self._refactor(list_markup, known_catalog)
        imports = ", ".join(s.component.name for s in suggestions[:5])

        assert f"import {{ {imports} }} from '@telefonica/mistica';" in code
        assert "<BoxedRowList>" in code
        assert "right={<IconChevronRight />}" in code
        assert "### Рекомендации для списков" in code

    def test_form_refactoring(self, known_catalog):
        """Тест рефакторинга формы"""
        code, _ = self._refactor(
            '<h1>Cadastro</h1><input name="a" /><input name="b" /><button type="submit">Enviar</button>',
            known_catalog,
        )

        assert "<Form>" in code
        assert "<Title1>Форма</Title1>" in code
        assert '<ButtonPrimary type="submit">Отправить</ButtonPrimary>' in code
        assert "### Рекомендации для форм" in code

    def test_generic_refactoring(self, known_catalog):
        """Тест рефакторинга без паттерна"""
        code, _ = self._refactor('<span class="text-preset-4/medium">Olá</span>', known_catalog)

        assert "<Text4>Текст пресета text4</Text4>" in code
        assert code.count("```") == 2
