"""
Сервис каталога компонентов Mística.

Источники по порядку: Redis кэш, Storybook, встроенный справочник.
Компоненты Storybook дополняются известными компонентами, которых в
Storybook нет, затем дубликаты по ``(категория, имя)`` удаляются.
"""
import logging
from collections import Counter
from typing import Dict, List, Optional

from ..config import Config, config as default_config
from ..mcp_instance import CATALOG_CACHE_EVENTS, CATALOG_REQUESTS
from ..models import CatalogComponent
from .cache_service import CacheService
from .known_components import get_known_components
from .storybook_client import StorybookClient

logger = logging.getLogger(__name__)

CATALOG_SOURCE = "all_components_combined"


def remove_duplicate_components(components: List[CatalogComponent]) -> List[CatalogComponent]:
    """Первый компонент с данной парой (категория, имя без регистра) остаётся."""
    seen = set()
    unique = []
    for component in components:
        key = f"{component.category}-{component.name.lower()}"
        if key not in seen:
            seen.add(key)
            unique.append(component)
    return unique


def merge_components(
    storybook: List[CatalogComponent],
    known: List[CatalogComponent],
) -> List[CatalogComponent]:
    """Компоненты Storybook плюс известные компоненты с новыми именами."""
    names = {component.name.lower() for component in storybook}
    return storybook + [component for component in known if component.name.lower() not in names]


class CatalogService:
    """Загрузка и кэширование каталога компонентов"""

    def __init__(
        self,
        app_config: Optional[Config] = None,
        cache_service: Optional[CacheService] = None,
        storybook_client: Optional[StorybookClient] = None,
    ):
        self.config = app_config or default_config
        self.cache = cache_service or CacheService(self.config.cache)
        self.storybook = storybook_client or StorybookClient(self.config.catalog, self.cache)
        self._components: Optional[List[CatalogComponent]] = None
        self._connected = False

    async def _ensure_cache(self):
        if not self._connected:
            await self.cache.connect()
            self._connected = True

    async def get_all_components(self, force_refresh: bool = False) -> List[CatalogComponent]:
        """Полный каталог; сначала память процесса, затем Redis, затем источники."""
        if self._components is not None and not force_refresh:
            return self._components

        await self._ensure_cache()

        if not force_refresh:
            cached = await self.cache.get_catalog(CATALOG_SOURCE)
            if cached:
                CATALOG_CACHE_EVENTS.labels(event="hit").inc()
                logger.info(f"Cache hit: {len(cached)} components loaded")
                self._components = [CatalogComponent.from_dict(item) for item in cached]
                return self._components
            CATALOG_CACHE_EVENTS.labels(event="miss").inc()

        logger.info("Discovering Mística components (storybook + known components)")
        known = get_known_components(self.config.catalog.storybook_url)
        try:
            storybook = await self.storybook.fetch_components()
        except Exception as e:
            logger.warning(f"Storybook source failed: {e}")
            storybook = []

        if storybook:
            components = merge_components(storybook, known)
        else:
            logger.info("Using known components fallback")
            CATALOG_REQUESTS.labels(source="known", status="fallback").inc()
            components = known

        unique = remove_duplicate_components(components)
        await self.cache.set_catalog(
            CATALOG_SOURCE,
            [component.to_dict() for component in unique],
            self.config.catalog.cache_ttl
        )

        logger.info(f"Discovered {len(unique)} unique components")
        for category, count in sorted(self.count_by_category(unique).items()):
            logger.info(f"  {category}: {count} components")

        self._components = unique
        return unique

    @staticmethod
    def count_by_category(components: List[CatalogComponent]) -> Dict[str, int]:
        return dict(Counter(component.category for component in components))

    async def get_component(self, name: str) -> Optional[CatalogComponent]:
        """Поиск по имени или id без учёта регистра."""
        lowered = name.strip().lower()
        for component in await self.get_all_components():
            if component.name.lower() == lowered or component.id.lower() == lowered:
                return component
        return None

    async def clear_cache(self) -> int:
        await self._ensure_cache()
        self._components = None
        return await self.cache.clear_pattern("mistica:*")

    async def close(self):
        await self.storybook.close()
        await self.cache.disconnect()


_catalog_service: Optional[CatalogService] = None


def get_catalog_service() -> CatalogService:
    """Общий экземпляр сервиса для инструментов."""
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService()
    return _catalog_service
