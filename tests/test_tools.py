from unittest.mock import patch

import pytest

from mistica_mcp.tools import (
    analyze_figma_code_tool,
    explore_mistica_categories,
    get_mistica_cache_status,
    get_mistica_design_tokens,
    get_mistica_usage_examples,
    list_mistica_components,
    map_figma_to_mistica,
    search_components,
)


class TestSearchTool:
    """Тесты инструмента search_components"""

    @pytest.mark.asyncio
    async def test_search(self, mock_catalog_service):
        """Тест поиска с точным совпадением первым"""
        with patch("mistica_mcp.tools.search_tools.get_catalog_service", return_value=mock_catalog_service):
            result = await search_components("  Button ")

        assert result["query"] == "button"
        assert result["components"][0]["name"] == "Button"
        assert len(result["components"]) <= 8
        assert result["total_found"] >= len(result["components"])
        assert "Поиск \"button\"" in result["message"]

    @pytest.mark.asyncio
    async def test_nothing_found(self, mock_catalog_service):
        """Тест пустого результата с подсказкой"""
        with patch("mistica_mcp.tools.search_tools.get_catalog_service", return_value=mock_catalog_service):
            result = await search_components("zzzz")

        assert result["total_found"] == 0
        assert "suggestion" in result

    @pytest.mark.asyncio
    async def test_blank_query(self, mock_catalog_service):
        """Тест пустого запроса"""
        with patch("mistica_mcp.tools.search_tools.get_catalog_service", return_value=mock_catalog_service):
            with pytest.raises(ValueError):
                await search_components("   ")


class TestFigmaTools:
    """Тесты инструментов анализа кода из Figma"""

    @pytest.mark.asyncio
    async def test_map_fixed_footer(self, mock_catalog_service, fixed_footer_markup):
        """Тест сопоставления экрана с закреплённым футером"""
        with patch("mistica_mcp.tools.figma_tools.get_catalog_service", return_value=mock_catalog_service):
            result = await map_figma_to_mistica(fixed_footer_markup)

        names = [suggestion["name"] for suggestion in result["suggestions"]]
        assert 95 in [suggestion["score"] for suggestion in result["suggestions"]]
        assert len(names) == len(set(names)) <= 10
        assert result["analysis"]["elements"]["layouts"]["has_fixed_footer"] is True
        assert result["refactoring"].startswith("```tsx")
        assert "Анализ кода из Figma" in result["message"]

    @pytest.mark.asyncio
    async def test_map_without_refactoring(self, mock_catalog_service, list_markup):
        """Тест без примера рефакторинга"""
        with patch("mistica_mcp.tools.figma_tools.get_catalog_service", return_value=mock_catalog_service):
            result = await map_figma_to_mistica(list_markup, include_refactoring=False)

        assert result["refactoring"] == ""
        assert result["suggestions"]

    @pytest.mark.asyncio
    async def test_map_rejects_empty_code(self, mock_catalog_service):
        """Тест пустого кода"""
        with patch("mistica_mcp.tools.figma_tools.get_catalog_service", return_value=mock_catalog_service):
            with pytest.raises(ValueError):
                await map_figma_to_mistica("")
        mock_catalog_service.get_all_components.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_analyze_only(self, typography_markup):
        """Тест анализа без каталога"""
        result = await analyze_figma_code_tool(typography_markup)

        assert result["summary"]["complexity"] == "low"
        assert result["text_analysis"]["hierarchy"] == ["text3"]
        assert result["text_analysis"]["color_mappings"][0]["token"] == "skinVars.colors.brand"


class TestCatalogTools:
    """Тесты инструментов каталога"""

    @pytest.mark.asyncio
    async def test_list_by_category(self, mock_catalog_service, known_catalog):
        """Тест списка одной категории"""
        with patch("mistica_mcp.tools.catalog_tools.get_catalog_service", return_value=mock_catalog_service):
            result = await list_mistica_components(category="Layout")

        layout = [c.name for c in known_catalog if c.category == "layout"]
        assert result["category"] == "layout"
        assert result["components"] == layout
        assert f"Layout ({len(layout)})" in result["message"]

    @pytest.mark.asyncio
    async def test_list_all_truncates_names(self, mock_catalog_service, known_catalog):
        """Тест полного списка с усечением длинных категорий"""
        with patch("mistica_mcp.tools.catalog_tools.get_catalog_service", return_value=mock_catalog_service):
            result = await list_mistica_components(include_count=False)

        assert result["category"] == "all"
        assert result["total_components"] == len(known_catalog)
        assert "... и ещё" in result["message"]

    @pytest.mark.asyncio
    async def test_list_lab_alias(self, mock_catalog_service):
        """Тест алиаса категории lab"""
        with patch("mistica_mcp.tools.catalog_tools.get_catalog_service", return_value=mock_catalog_service):
            result = await list_mistica_components(category="experimental")

        assert result["category"] == "lab"
        assert result["components"] == ["Autocomplete"]

    @pytest.mark.asyncio
    async def test_list_unknown_category(self, mock_catalog_service):
        """Тест неизвестной категории"""
        with patch("mistica_mcp.tools.catalog_tools.get_catalog_service", return_value=mock_catalog_service):
            with pytest.raises(ValueError):
                await list_mistica_components(category="widgets")

    @pytest.mark.asyncio
    async def test_explore_with_details(self, mock_catalog_service):
        """Тест категории с описаниями"""
        with patch("mistica_mcp.tools.catalog_tools.get_catalog_service", return_value=mock_catalog_service):
            result = await explore_mistica_categories("icons", include_details=True)

        assert result["components"] == ["Icon", "IconCatalog"]
        assert "1. Icon\n" in result["message"]

    @pytest.mark.asyncio
    async def test_explore_empty_category(self, mock_catalog_service):
        """Тест пустой категории"""
        with patch("mistica_mcp.tools.catalog_tools.get_catalog_service", return_value=mock_catalog_service):
            result = await explore_mistica_categories("patterns")

        assert result["total_components"] == 0
        assert "suggestion" in result

    @pytest.mark.asyncio
    async def test_explore_requires_category(self, mock_catalog_service):
        """Тест обязательной категории"""
        with patch("mistica_mcp.tools.catalog_tools.get_catalog_service", return_value=mock_catalog_service):
            with pytest.raises(ValueError):
                await explore_mistica_categories("")

    @pytest.mark.asyncio
    async def test_usage_examples(self, mock_catalog_service, component_with_props):
        """Тест примеров использования с вариантами и props"""
        mock_catalog_service.get_component.return_value = component_with_props
        with patch("mistica_mcp.tools.catalog_tools.get_catalog_service", return_value=mock_catalog_service):
            result = await get_mistica_usage_examples("textfield", format="both")

        mock_catalog_service.get_component.assert_awaited_once_with("textfield")
        assert result["component"] == "TextField"
        assert result["has_examples"] is True
        assert result["variants"] == ["WithHelperText", "default", "error", "disabled", "withHelpText"]
        assert len(result["props"]) == 10
        assert "**HTML (концептуально)**" in result["message"]
        assert "… ещё 2 props" in result["message"]

    @pytest.mark.asyncio
    async def test_usage_unknown_component(self, mock_catalog_service):
        """Тест неизвестного компонента"""
        with patch("mistica_mcp.tools.catalog_tools.get_catalog_service", return_value=mock_catalog_service):
            with pytest.raises(ValueError):
                await get_mistica_usage_examples("Nope")

    @pytest.mark.asyncio
    async def test_usage_invalid_format(self, mock_catalog_service):
        """Тест неизвестного формата"""
        with patch("mistica_mcp.tools.catalog_tools.get_catalog_service", return_value=mock_catalog_service):
            with pytest.raises(ValueError):
                await get_mistica_usage_examples("Box", format="vue")

    @pytest.mark.asyncio
    async def test_design_tokens(self):
        """Тест фильтрации токенов по категории и подстроке"""
        colors = await get_mistica_design_tokens(category="color")
        spacing = await get_mistica_design_tokens(search="space-1")

        assert list(colors["tokens"]) == ["color"]
        assert [token["name"] for token in spacing["tokens"]["spacing"]] == ["space-16"]
        assert spacing["tokens"]["color"] == []

        with pytest.raises(ValueError):
            await get_mistica_design_tokens(category="motion")

    @pytest.mark.asyncio
    async def test_cache_status_refresh(self, mock_catalog_service, known_catalog):
        """Тест статуса кэша с обновлением"""
        with patch("mistica_mcp.tools.catalog_tools.get_catalog_service", return_value=mock_catalog_service):
            result = await get_mistica_cache_status(refresh=True)

        mock_catalog_service.clear_cache.assert_awaited_once()
        mock_catalog_service.get_all_components.assert_awaited_once_with(force_refresh=True)
        assert result["refreshed"] is True
        assert result["total_components"] == len(known_catalog)
        assert result["by_category"]["layout"] == len([c for c in known_catalog if c.category == "layout"])
        assert "Redis: отключён" in result["message"]

    @pytest.mark.asyncio
    async def test_cache_status_without_refresh(self, mock_catalog_service):
        """Тест статуса кэша без обновления"""
        with patch("mistica_mcp.tools.catalog_tools.get_catalog_service", return_value=mock_catalog_service):
            result = await get_mistica_cache_status()

        mock_catalog_service.clear_cache.assert_not_awaited()
        assert result["cleared_keys"] == 0
