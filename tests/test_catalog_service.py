from unittest.mock import AsyncMock, Mock

import pytest

from mistica_mcp.catalog.catalog_service import (
    CATALOG_SOURCE,
    CatalogService,
    merge_components,
    remove_duplicate_components,
)
from mistica_mcp.config import Config
from mistica_mcp.models import CatalogComponent


def make_component(name, category="components", description=""):
    return CatalogComponent(id=f"{category}-{name.lower()}", name=name, category=category, description=description)


@pytest.fixture
def cache():
    """Кэш без Redis"""
    service = Mock()
    service.connect = AsyncMock()
    service.disconnect = AsyncMock()
    service.get_catalog = AsyncMock(return_value=None)
    service.set_catalog = AsyncMock()
    service.clear_pattern = AsyncMock(return_value=3)
    return service


@pytest.fixture
def storybook():
    """Storybook с двумя компонентами"""
    client = Mock()
    client.fetch_components = AsyncMock(return_value=[
        make_component("ButtonPrimary", description="Da história"),
        make_component("Chip", description="Chip da história"),
    ])
    client.close = AsyncMock()
    return client


@pytest.fixture
def service(cache, storybook):
    return CatalogService(Config(), cache, storybook)


class TestCatalogHelpers:
    """Тесты слияния и дедупликации"""

    def test_remove_duplicates(self):
        """Тест: остаётся первый компонент пары (категория, имя)"""
        components = [
            make_component("Box", "layout", "primeiro"),
            make_component("box", "layout", "segundo"),
            make_component("Box", "components"),
        ]
        unique = remove_duplicate_components(components)

        assert [(c.category, c.description) for c in unique] == [("layout", "primeiro"), ("components", "")]

    def test_merge(self):
        """Тест: известные компоненты добавляются только с новыми именами"""
        merged = merge_components(
            [make_component("Box", "layout")],
            [make_component("box", "layout"), make_component("Stack", "layout")],
        )
        assert [c.name for c in merged] == ["Box", "Stack"]


class TestCatalogService:
    """Тесты сервиса каталога"""

    @pytest.mark.asyncio
    async def test_storybook_merged_with_known(self, service, cache, known_catalog):
        """Тест объединения Storybook и встроенного справочника"""
        components = await service.get_all_components()
        names = [c.name for c in components]

        assert names[:2] == ["ButtonPrimary", "Chip"]
        assert names.count("ButtonPrimary") == 1
        assert components[0].description == "Da história"
        assert len(components) == len(known_catalog) + 1
        cache.set_catalog.assert_awaited_once()
        assert cache.set_catalog.call_args.args[0] == CATALOG_SOURCE

    @pytest.mark.asyncio
    async def test_memory_cache(self, service, storybook, cache):
        """Тест: повторный вызов не обращается к источникам"""
        first = await service.get_all_components()
        second = await service.get_all_components()

        assert first is second
        assert storybook.fetch_components.await_count == 1
        cache.connect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_redis_hit(self, service, cache, storybook):
        """Тест загрузки из Redis"""
        cache.get_catalog.return_value = [make_component("Box", "layout").to_dict()]

        components = await service.get_all_components()

        assert [c.name for c in components] == ["Box"]
        storybook.fetch_components.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_force_refresh_skips_redis(self, service, cache, storybook):
        """Тест принудительного обновления"""
        cache.get_catalog.return_value = [make_component("Box", "layout").to_dict()]

        components = await service.get_all_components(force_refresh=True)

        cache.get_catalog.assert_not_awaited()
        assert storybook.fetch_components.await_count == 1
        assert len(components) > 1

    @pytest.mark.asyncio
    async def test_known_fallback(self, service, storybook, known_catalog):
        """Тест встроенного справочника при сбое Storybook"""
        storybook.fetch_components.side_effect = RuntimeError("offline")

        components = await service.get_all_components()

        assert components == known_catalog

    @pytest.mark.asyncio
    async def test_get_component(self, service):
        """Тест поиска по имени и id без учёта регистра"""
        assert (await service.get_component("buttonprimary")).description == "Da história"
        assert (await service.get_component("LAYOUT-STACK")).name == "Stack"
        assert await service.get_component("Nope") is None

    @pytest.mark.asyncio
    async def test_clear_cache(self, service, cache, storybook):
        """Тест очистки кэша"""
        await service.get_all_components()

        assert await service.clear_cache() == 3
        cache.clear_pattern.assert_awaited_once_with("mistica:*")

        await service.get_all_components()
        assert storybook.fetch_components.await_count == 2

    def test_count_by_category(self):
        """Тест подсчёта по категориям"""
        counts = CatalogService.count_by_category(
            [make_component("Box", "layout"), make_component("Stack", "layout"), make_component("Icon", "icons")]
        )
        assert counts == {"layout": 2, "icons": 1}

    @pytest.mark.asyncio
    async def test_close(self, service, cache, storybook):
        """Тест закрытия ресурсов"""
        await service.close()

        storybook.close.assert_awaited_once()
        cache.disconnect.assert_awaited_once()
