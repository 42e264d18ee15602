import json
from unittest.mock import patch

import pytest

from mistica_mcp.config import CacheConfig, CatalogConfig, ServerConfig
from mistica_mcp.models import CatalogComponent, ComponentSuggestion
from mistica_mcp.utils import (
    generate_component_id,
    generate_name_variants,
    generate_story_url,
    slugify,
    split_words,
)
from mistica_mcp.validators import (
    MAX_FIGMA_CODE_LENGTH,
    validate_category,
    validate_component_name,
    validate_figma_code,
    validate_query,
    validate_token_category,
    validate_usage_format,
)


class TestValidators:
    """Тесты валидаторов входных данных"""

    def test_query(self):
        """Тест нормализации и ограничений запроса"""
        assert validate_query("  Pin Code ") == "pin code"
        with pytest.raises(ValueError):
            validate_query("")
        with pytest.raises(ValueError):
            validate_query("x" * 201)

    def test_figma_code(self):
        """Тест ограничений кода из Figma"""
        assert validate_figma_code("<div />") == "<div />"
        with pytest.raises(ValueError):
            validate_figma_code("  \n ")
        with pytest.raises(ValueError):
            validate_figma_code("a" * (MAX_FIGMA_CODE_LENGTH + 1))

    def test_category(self):
        """Тест категорий и алиасов"""
        assert validate_category(None) is None
        assert validate_category(" Feedback ") == "feedback"
        assert validate_category("Mística Lab") == "lab"
        with pytest.raises(ValueError):
            validate_category(None, required=True)
        with pytest.raises(ValueError):
            validate_category("widgets")

    def test_component_name(self):
        """Тест имени компонента"""
        assert validate_component_name("default as ButtonPrimary") == "ButtonPrimary"
        with pytest.raises(ValueError):
            validate_component_name("<script>")

    def test_formats(self):
        """Тест формата примеров и категории токенов"""
        assert validate_usage_format(None) == "react"
        assert validate_usage_format("BOTH") == "both"
        assert validate_token_category("") is None
        with pytest.raises(ValueError):
            validate_token_category("motion")


class TestUtils:
    """Тесты вспомогательных функций"""

    def test_slug_and_ids(self):
        """Тест slug, id компонента и URL истории"""
        assert slugify("Button Fixed  Footer") == "button-fixed-footer"
        assert generate_component_id("Boxed Row", "components") == "components-boxed-row"
        assert generate_story_url("https://sb.example/", "layout", "Box") == (
            "https://sb.example/?path=/story/layout-box--default"
        )

    def test_split_words(self):
        """Тест разбиения имён"""
        assert split_words("HTMLButtonElement") == ["HTML", "Button", "Element"]
        assert split_words("error-feedback_screen") == ["error", "feedback", "screen"]

    def test_name_variants(self):
        """Тест вариантов имени без повторов"""
        assert generate_name_variants("success modal") == [
            "successmodal", "successModal", "SuccessModal", "success-modal", "success_modal",
        ]
        assert generate_name_variants("Box") == ["Box", "box"]
        assert generate_name_variants("  ") == []


class TestModels:
    """Тесты моделей каталога"""

    def test_from_dict(self):
        """Тест восстановления компонента из кэша"""
        component = CatalogComponent.from_dict({
            "name": "Box",
            "category": "layout",
            "props": [{"name": "padding", "type": None}],
            "storyUrl": "https://sb.example/box",
        })

        assert component.id == "layout-box"
        assert component.props[0].type == "any"
        assert component.story_url == "https://sb.example/box"
        assert CatalogComponent.from_dict(component.to_dict()) == component

    def test_suggestion_to_dict(self):
        """Тест сериализации предложения"""
        component = CatalogComponent(id="layout-box", name="Box", category="layout")
        data = ComponentSuggestion(component=component, reason="r", score=80).to_dict()

        assert data == {
            "name": "Box",
            "category": "layout",
            "description": "",
            "story_url": "",
            "reason": "r",
            "score": 80,
        }


class TestConfig:
    """Тесты конфигурации из окружения"""

    def test_defaults(self):
        """Тест значений по умолчанию"""
        with patch.dict("os.environ", {}, clear=True):
            server = ServerConfig.from_env()
            catalog = CatalogConfig.from_env()
            cache = CacheConfig.from_env()

        assert server.transport == "stdio"
        assert catalog.stories_url == "https://mistica-web.vercel.app/stories.json"
        assert catalog.cache_ttl == 14400
        assert catalog.scrape_details is False
        assert cache.redis_host == "localhost"
        assert cache.enabled is True

    def test_env_overrides(self):
        """Тест переопределения через переменные окружения"""
        env = {
            "MCP_TRANSPORT": "sse",
            "PORT": "9000",
            "LOG_LEVEL": "debug",
            "MISTICA_STORYBOOK_URL": "https://sb.example/",
            "CATALOG_SCRAPE_DETAILS": "TRUE",
            "DOCKER_ENV": "1",
            "REDIS_CACHE_ENABLED": "false",
        }
        with patch.dict("os.environ", env, clear=True):
            server = ServerConfig.from_env()
            catalog = CatalogConfig.from_env()
            cache = CacheConfig.from_env()

        assert (server.transport, server.port, server.log_level) == ("sse", 9000, "DEBUG")
        assert catalog.stories_url == "https://sb.example/stories.json"
        assert catalog.scrape_details is True
        assert cache.redis_host == "redis"
        assert cache.enabled is False


class TestServer:
    """Тесты ресурсов сервера"""

    @pytest.mark.asyncio
    async def test_health_check(self):
        """Тест health check"""
        from mistica_mcp.server import health_check

        data = json.loads(await health_check())
        assert data == {"status": "healthy", "service": "mistica-mcp-server", "version": "1.0.0"}

    @pytest.mark.asyncio
    async def test_metrics(self):
        """Тест метрик Prometheus"""
        from mistica_mcp.server import metrics_endpoint
        from mistica_mcp.tools import get_mistica_design_tokens

        await get_mistica_design_tokens()
        text = await metrics_endpoint()

        assert 'tool_calls_total{tool_name="get_mistica_design_tokens",status="success"}' in text
