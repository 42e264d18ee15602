from unittest.mock import AsyncMock, Mock
from typing import List

import pytest

from mistica_mcp.catalog.catalog_service import CatalogService
from mistica_mcp.catalog.known_components import get_known_components
from mistica_mcp.models import CatalogComponent, ComponentProp

STORYBOOK_URL = "https://mistica-web.vercel.app"


@pytest.fixture
def known_catalog() -> List[CatalogComponent]:
    """Полный встроенный справочник компонентов"""
    return get_known_components(STORYBOOK_URL)


@pytest.fixture
def button_catalog() -> List[CatalogComponent]:
    """Каталог из одного компонента кнопки"""
    return [
        CatalogComponent(
            id="components-buttonprimary",
            name="ButtonPrimary",
            category="components",
            description="Botão principal",
        )
    ]


@pytest.fixture
def component_with_props() -> CatalogComponent:
    """Компонент с десятью props для таблицы примеров"""
    props = [
        ComponentProp(name=f"prop{index}", type="string", description=f"Описание\nсвойства {index}")
        for index in range(10)
    ]
    return CatalogComponent(
        id="components-textfield",
        name="TextField",
        category="components",
        description="Campo de texto com label e validação",
        props=props,
        examples=[{"name": "WithHelperText"}],
    )


@pytest.fixture
def fixed_footer_markup() -> str:
    """Экран с кнопкой в закреплённом футере"""
    return """<div class="screen">
  <h1>Configurações</h1>
  <div class="fixed-footer"><button onClick={save}>Salvar</button></div>
</div>"""


@pytest.fixture
def list_markup() -> str:
    """Список строк с иконками и навигацией"""
    return """const Items = () => (
  <View>
    {items.map((item) => (
      <Row key={item.id} onPress={() => open(item)}>
        <Icon name="star" />
        <Text>{item.title}</Text>
        <Icon name="chevron-right" />
      </Row>
    ))}
  </View>
);"""


@pytest.fixture
def typography_markup() -> str:
    """Заголовок с inline-стилями и цветом бренда"""
    return '<span style="font-size: 32px; font-weight: 700; color: #0066cc">Olá</span>'


@pytest.fixture
def mock_catalog_service(known_catalog):
    """Сервис каталога без сети и Redis"""
    service = Mock()
    service.get_all_components = AsyncMock(return_value=known_catalog)
    service.get_component = AsyncMock(return_value=None)
    service.clear_cache = AsyncMock(return_value=0)
    service.count_by_category = CatalogService.count_by_category
    service.cache = Mock()
    service.cache.stats = AsyncMock(return_value={"enabled": False, "hits": 0, "misses": 0})
    return service
