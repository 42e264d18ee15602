"""
Клиент Storybook Mística.
Загружает индекс историй (stories.json) и превращает истории в компоненты каталога.
"""
import asyncio
import logging
import re
from typing import Dict, List, Optional, Any

import httpx
from bs4 import BeautifulSoup

from ..config import CatalogConfig
from ..mcp_instance import CATALOG_REQUESTS
from ..models import CatalogComponent
from ..validators import CATEGORY_ALIASES
from .cache_service import CacheService
from .known_components import generate_description

logger = logging.getLogger(__name__)

VALID_TITLE_PREFIXES = (
    "Components/",
    "Layout/",
    "Icons/",
    "Utilities/",
    "Hooks/",
    "Community/",
    "Mística Lab/",
    "Patterns/",
)

FEEDBACK_PREFIX = "Patterns/Feedback/"
FEEDBACK_NAME_MARKERS = ("FeedbackScreen", "SuccessFeedback", "ErrorFeedback", "InfoFeedback", "WarningFeedback")
MAIN_STORY_NAMES = ("Default", "Primary", "Catalog")
MAIN_STORY_ID_MARKERS = ("--default", "--primary")


def is_feedback_story(title: str, name: str) -> bool:
    return title.startswith(FEEDBACK_PREFIX) and any(marker in name for marker in FEEDBACK_NAME_MARKERS)


def is_main_story(story_id: str, name: str, feedback: bool = False) -> bool:
    if name in MAIN_STORY_NAMES or "Default" in name or "Story" in name:
        return True
    if any(marker in story_id for marker in MAIN_STORY_ID_MARKERS):
        return True
    return feedback and ("FeedbackScreen" in name or name in ("SuccessFeedback", "ErrorFeedback"))


def is_valid_component_story(story_id: str, story: Dict[str, Any]) -> bool:
    """
    История описывает компонент, если её заголовок начинается с известного
    раздела и это основная история, не документация, или экран обратной связи.
    """
    title = story.get("title") or ""
    name = story.get("name") or ""

    if not title.startswith(VALID_TITLE_PREFIXES):
        return False

    feedback = is_feedback_story(title, name)
    return is_main_story(story_id, name, feedback) or "Doc" not in name or feedback


def parse_story_category(title: str) -> str:
    """Первая часть заголовка в нижнем регистре, только латинские буквы."""
    if title.startswith(FEEDBACK_PREFIX):
        return "feedback"
    first = title.split("/")[0]
    category = re.sub(r"[^a-z]", "", first.lower()) or "components"
    return CATEGORY_ALIASES.get(category, category)


def parse_story(story_id: str, story: Dict[str, Any], base_url: str) -> CatalogComponent:
    title = story.get("title") or ""
    name = story.get("name") or ""
    parts = title.split("/")

    category = parse_story_category(title)
    if title.startswith(FEEDBACK_PREFIX):
        component_name = parts[2] if len(parts) > 2 and parts[2] else name or "Unknown"
    else:
        component_name = parts[1] if len(parts) > 1 and parts[1] else name or "Unknown"

    return CatalogComponent(
        id=story_id,
        name=component_name,
        category=category,
        description=generate_description(component_name, category),
        story_url=f"{base_url.rstrip('/')}/?path=/story/{story_id}",
    )


def parse_component_page(html: str) -> Dict[str, str]:
    """Заголовок и описание из HTML-страницы истории."""
    soup = BeautifulSoup(html, "html.parser")
    info: Dict[str, str] = {}

    if soup.title and soup.title.string:
        info["title"] = soup.title.string.strip()

    meta = soup.find("meta", attrs={"name": "description"})
    if meta and meta.get("content"):
        info["description"] = meta["content"].strip()

    return info


class StorybookClient:
    """HTTP-клиент Storybook Mística с повторами и кэшем страниц"""

    def __init__(
        self,
        catalog_config: Optional[CatalogConfig] = None,
        cache_service: Optional[CacheService] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = catalog_config or CatalogConfig.from_env()
        self.cache = cache_service
        self.client = client or httpx.AsyncClient(
            headers={
                "Accept": "application/json,text/html;q=0.9,*/*;q=0.8",
                "User-Agent": "Mistica-MCP-Server/1.0",
            },
            timeout=self.config.timeout,
            follow_redirects=True
        )

    async def _request(self, url: str) -> httpx.Response:
        """GET с повторами; пауза растёт линейно с номером попытки."""
        last_error: Optional[Exception] = None
        for attempt in range(self.config.retry_attempts + 1):
            try:
                response = await self.client.get(url)
                response.raise_for_status()
                return response
            except httpx.HTTPError as e:
                last_error = e
                logger.warning(f"Request to {url} failed (attempt {attempt + 1}): {e}")
                if attempt < self.config.retry_attempts:
                    await asyncio.sleep(self.config.retry_delay * (attempt + 1))
        raise last_error

    async def fetch_stories(self) -> Dict[str, Any]:
        """Индекс историй; поддерживает формат stories.json и index.json (entries)."""
        try:
            response = await self._request(self.config.stories_url)
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            CATALOG_REQUESTS.labels(source="storybook", status="error").inc()
            logger.error(f"Failed to load Storybook index from {self.config.stories_url}: {e}")
            return {}

        CATALOG_REQUESTS.labels(source="storybook", status="success").inc()
        if not isinstance(payload, dict):
            return {}
        return payload.get("stories") or payload.get("entries") or {}

    async def fetch_components(self) -> List[CatalogComponent]:
        stories = await self.fetch_stories()
        if not stories:
            logger.warning("No stories found in Storybook index")
            return []

        logger.info(f"Processing {len(stories)} Storybook stories")
        components = [
            parse_story(story_id, story, self.config.storybook_url)
            for story_id, story in stories.items()
            if isinstance(story, dict) and is_valid_component_story(story_id, story)
        ]

        if self.config.scrape_details:
            components = [await self.enrich_component(component) for component in components]

        logger.info(f"Extracted {len(components)} components from Storybook")
        return components

    async def fetch_page_info(self, url: str) -> Optional[Dict[str, str]]:
        if self.cache:
            cached = await self.cache.get_page_info(url)
            if cached:
                return cached

        try:
            response = await self._request(url)
        except httpx.HTTPError as e:
            CATALOG_REQUESTS.labels(source="storybook_page", status="error").inc()
            logger.warning(f"Failed to load component page {url}: {e}")
            return None

        CATALOG_REQUESTS.labels(source="storybook_page", status="success").inc()
        info = parse_component_page(response.text)
        if self.cache and info:
            await self.cache.set_page_info(url, info)
        return info

    async def enrich_component(self, component: CatalogComponent) -> CatalogComponent:
        """Подставляет описание со страницы истории, если оно есть."""
        info = await self.fetch_page_info(component.story_url) if component.story_url else None
        if not info or not info.get("description"):
            return component

        data = component.to_dict()
        data["description"] = info["description"]
        return CatalogComponent.from_dict(data)

    async def close(self):
        """Закрыть HTTP клиент"""
        await self.client.aclose()
