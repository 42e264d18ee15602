"""
Конфигурация сервера.
"""
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv
load_dotenv()


@dataclass
class ServerConfig:
    """Конфигурация сервера."""
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    transport: str = "stdio"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            transport=os.getenv("MCP_TRANSPORT", "stdio")
        )


@dataclass
class CatalogConfig:
    """Конфигурация источников каталога компонентов Mística."""
    storybook_url: str = "https://mistica-web.vercel.app"
    stories_path: str = "/stories.json"
    timeout: float = 10.0
    retry_attempts: int = 3
    retry_delay: float = 1.0
    cache_ttl: int = 14400
    scrape_details: bool = False

    @property
    def stories_url(self) -> str:
        return self.storybook_url.rstrip("/") + self.stories_path

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        return cls(
            storybook_url=os.getenv("MISTICA_STORYBOOK_URL", "https://mistica-web.vercel.app"),
            stories_path=os.getenv("MISTICA_STORIES_PATH", "/stories.json"),
            timeout=float(os.getenv("CATALOG_REQUEST_TIMEOUT", "10")),
            retry_attempts=int(os.getenv("CATALOG_RETRY_ATTEMPTS", "3")),
            retry_delay=float(os.getenv("CATALOG_RETRY_DELAY", "1.0")),
            cache_ttl=int(os.getenv("CATALOG_CACHE_TTL", "14400")),  # 4 часа
            scrape_details=os.getenv("CATALOG_SCRAPE_DETAILS", "false").lower() == "true"
        )


@dataclass
class CacheConfig:
    """Конфигурация Redis кэша."""
    redis_url: Optional[str] = None
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    enabled: bool = True
    default_ttl: int = 3600

    @classmethod
    def from_env(cls) -> "CacheConfig":
        # В Docker используем имя сервиса, локально - localhost
        default_host = "redis" if os.getenv("DOCKER_ENV") else "localhost"
        return cls(
            redis_url=os.getenv("REDIS_URL") or None,
            redis_host=os.getenv("REDIS_HOST", default_host),
            redis_port=int(os.getenv("REDIS_PORT", "6379")),
            redis_db=int(os.getenv("REDIS_DB", "0")),
            enabled=os.getenv("REDIS_CACHE_ENABLED", "true").lower() == "true",
            default_ttl=int(os.getenv("CACHE_TTL", "3600"))
        )


class Config:
    """Главный класс конфигурации."""

    def __init__(self):
        self.server = ServerConfig.from_env()
        self.catalog = CatalogConfig.from_env()
        self.cache = CacheConfig.from_env()


config = Config()
