"""
Сервис кэширования с использованием Redis
Кэширует каталог компонентов и страницы Storybook
"""
import hashlib
import json
import logging
from typing import Optional, Any, Dict, List

import redis.asyncio as redis

from ..config import CacheConfig

logger = logging.getLogger(__name__)

CATALOG_KEY_PREFIX = "mistica:catalog"
PAGE_KEY_PREFIX = "mistica:page"
MAX_KEY_LENGTH = 200


class CacheService:
    """Сервис для кэширования данных в Redis"""

    def __init__(self, cache_config: Optional[CacheConfig] = None):
        """
        Инициализация сервиса кэширования

        Args:
            cache_config: Параметры подключения (по умолчанию из окружения)
        """
        self.config = cache_config or CacheConfig.from_env()
        if self.config.redis_url:
            self.redis_url = self.config.redis_url
        else:
            self.redis_url = f"redis://{self.config.redis_host}:{self.config.redis_port}"

        self.default_ttl = self.config.default_ttl
        self.client: Optional[Any] = None
        self._enabled = self.config.enabled
        self.hits = 0
        self.misses = 0

    @property
    def is_enabled(self) -> bool:
        return self._enabled and self.client is not None

    async def connect(self):
        """Подключиться к Redis"""
        if not self._enabled:
            logger.info("Redis cache disabled by configuration")
            return

        try:
            self.client = redis.from_url(
                self.redis_url,
                db=self.config.redis_db,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            # Проверяем подключение
            await self.client.ping()
            logger.info(f"Connected to Redis at {self.redis_url}")
        except Exception as e:
            logger.warning(f"Failed to connect to Redis: {e}. Caching disabled.")
            self._enabled = False
            self.client = None

    async def disconnect(self):
        """Отключиться от Redis"""
        if self.client:
            await self.client.aclose()
            self.client = None

    def _make_key(self, prefix: str, *args, **kwargs) -> str:
        """
        Создать ключ кэша из префикса и параметров

        Args:
            prefix: Префикс ключа (например, "mistica:catalog")
            *args: Позиционные аргументы для ключа
            **kwargs: Именованные аргументы для ключа

        Returns:
            Строка ключа
        """
        key_parts = [prefix]
        key_parts.extend(str(arg) for arg in args)
        if kwargs:
            key_parts.extend(f"{k}:{v}" for k, v in sorted(kwargs.items()))

        key_string = ":".join(key_parts)

        # Длинные ключи заменяем хэшем
        if len(key_string) > MAX_KEY_LENGTH:
            key_hash = hashlib.md5(key_string.encode()).hexdigest()
            return f"{prefix}:hash:{key_hash}"

        return key_string

    async def get(self, key: str) -> Optional[Any]:
        """Получить значение из кэша или None, если не найдено"""
        if not self.is_enabled:
            return None

        try:
            value = await self.client.get(key)
        except Exception as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None

        if value is None:
            self.misses += 1
            return None

        try:
            decoded = json.loads(value)
        except json.JSONDecodeError as e:
            logger.warning(f"Corrupted cache entry {key}: {e}")
            self.misses += 1
            return None
        self.hits += 1
        return decoded

    async def set(self, key: str, value: Any, ttl: Optional[int] = None):
        """
        Сохранить значение в кэш

        Args:
            key: Ключ кэша
            value: Значение для сохранения (сериализуется в JSON)
            ttl: Время жизни в секундах (по умолчанию default_ttl)
        """
        if not self.is_enabled:
            return

        try:
            json_value = json.dumps(value, ensure_ascii=False, default=str)
            await self.client.setex(key, ttl or self.default_ttl, json_value)
        except Exception as e:
            logger.warning(f"Cache write failed for {key}: {e}")

    async def delete(self, key: str):
        """Удалить ключ из кэша"""
        if not self.is_enabled:
            return

        try:
            await self.client.delete(key)
        except Exception as e:
            logger.warning(f"Cache delete failed for {key}: {e}")

    async def clear_pattern(self, pattern: str) -> int:
        """Удалить все ключи по паттерну, вернуть их количество"""
        if not self.is_enabled:
            return 0

        try:
            keys = [key async for key in self.client.scan_iter(match=pattern)]
            if keys:
                await self.client.delete(*keys)
            return len(keys)
        except Exception as e:
            logger.warning(f"Cache clear failed for pattern {pattern}: {e}")
            return 0

    # Специализированные методы для каталога

    async def get_catalog(self, source: str) -> Optional[List[Dict[str, Any]]]:
        """Получить сохранённый каталог компонентов для источника"""
        return await self.get(self._make_key(CATALOG_KEY_PREFIX, source))

    async def set_catalog(self, source: str, components: List[Dict[str, Any]], ttl: Optional[int] = None):
        """Сохранить каталог компонентов для источника"""
        await self.set(self._make_key(CATALOG_KEY_PREFIX, source), components, ttl)

    async def get_page_info(self, url: str) -> Optional[Dict[str, Any]]:
        return await self.get(self._make_key(PAGE_KEY_PREFIX, url))

    async def set_page_info(self, url: str, info: Dict[str, Any], ttl: int = 86400):
        await self.set(self._make_key(PAGE_KEY_PREFIX, url), info, ttl)

    async def stats(self) -> Dict[str, Any]:
        """Состояние кэша для инструмента статуса"""
        result: Dict[str, Any] = {
            "enabled": self.is_enabled,
            "redis_url": self.redis_url,
            "default_ttl": self.default_ttl,
            "hits": self.hits,
            "misses": self.misses,
        }
        if not self.is_enabled:
            return result

        try:
            keys = [key async for key in self.client.scan_iter(match=f"{CATALOG_KEY_PREFIX}:*")]
            result["catalog_keys"] = len(keys)
            result["catalog_ttls"] = {key: await self.client.ttl(key) for key in keys}
        except Exception as e:
            logger.warning(f"Failed to collect cache stats: {e}")
            result["error"] = str(e)
        return result
