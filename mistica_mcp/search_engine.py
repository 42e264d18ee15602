"""
Ранжирование компонентов каталога по текстовому запросу.

Оценка складывается из совпадений имени с терминами запроса,
расширения терминов по таблице синонимов, контекстных ключевых слов,
совпадения категории и бонуса за известные функциональные запросы.
"""
import logging
import re
from typing import Dict, Iterable, List, Tuple

from .models import CatalogComponent

logger = logging.getLogger(__name__)

EXACT_QUERY_SCORE = 100
EXACT_TERM_SCORE = 90
PREFIX_SCORE = 80
SUFFIX_SCORE = 70
CONTAINS_SCORE = 60
EXPANDED_NAME_SCORE = 50
EXPANDED_DESCRIPTION_SCORE = 30
KEYWORD_NAME_SCORE = 40
KEYWORD_DESCRIPTION_SCORE = 25
KEYWORD_CATEGORY_SCORE = 20
CATEGORY_SCORE = 35

MULTI_TERM_BASE_BONUS = 50
MULTI_TERM_RANK_STEP = 5

EXPANDED_TERMS: Dict[str, Tuple[str, ...]] = {
    # ввод и формы
    "pin": ("pinfield", "code", "security", "input", "verification"),
    "pinfield": ("pin", "code", "security", "otp", "verification"),
    "field": ("textfield", "input", "form", "entry"),
    "input": ("textfield", "field", "entry", "form"),
    "code": ("pin", "otp", "verification", "security"),
    "security": ("pin", "otp", "verification", "authentication"),
    # layout и структура
    "footer": ("layout", "fixed", "bottom", "sticky"),
    "header": ("layout", "top", "navigation", "navbar"),
    "fixed": ("footer", "header", "layout", "sticky"),
    "layout": ("grid", "stack", "box", "container", "wrapper"),
    "modal": ("dialog", "popup", "overlay", "sheet"),
    # действия
    "button": ("action", "click", "primary", "secondary", "cta"),
    "primary": ("button", "main", "action"),
    "secondary": ("button", "auxiliary", "action"),
    # навигация
    "navigation": ("navbar", "menu", "tabs", "breadcrumb"),
    "navbar": ("navigation", "menu", "header"),
    "menu": ("navigation", "dropdown", "list"),
    # контент
    "card": ("container", "content", "box"),
    "list": ("item", "collection", "menu"),
    "text": ("label", "title", "heading", "paragraph"),
    "icon": ("symbol", "graphic", "visual"),
    # обратная связь
    "loading": ("spinner", "progress", "wait"),
    "error": ("feedback", "alert", "warning"),
    "success": ("feedback", "confirmation", "check"),
    # формы
    "form": ("input", "field", "validation", "submit"),
    "validation": ("error", "check", "verify"),
    "submit": ("button", "action", "send"),
    # данные
    "table": ("data", "grid", "list", "row"),
    "chart": ("graph", "visualization", "data"),
    # бренд
    "mistica": ("telefonica", "brand", "design", "system"),
    "telefonica": ("mistica", "brand", "company"),
}

# (триггеры в запросе, добавляемые ключевые слова)
CONTEXTUAL_KEYWORD_RULES = (
    (("fixed", "footer"), ("layout", "footer", "fixed")),
    (("header",), ("layout", "header", "navigation")),
    (("modal",), ("overlay", "dialog", "popup")),
    (("card",), ("container", "content", "card")),
    (("form",), ("input", "field", "form", "validation")),
    (("list",), ("list", "item", "collection")),
    (("button",), ("action", "click", "interactive")),
    (("input", "field"), ("form", "data", "entry")),
    (("pin", "security", "code"), ("security", "authentication", "input")),
)

# (термины, подсказки в имени, бонус за имя, подсказки в описании, бонус за описание)
FUNCTIONALITY_RULES = (
    (("pinfield", "pin field", "pin code", "security"),
     ("pin", "code", "security"), 60, ("código", "pin", "segurança"), 40),
    (("fixed footer", "footer layout", "button fixed footer"),
     ("footer", "layout", "fixed"), 60, ("footer", "rodapé", "fixo"), 40),
    (("input", "field"),
     ("input", "field", "textfield"), 50, (), 0),
    (("text", "label"),
     ("text", "label", "title"), 45, (), 0),
)


def extract_search_terms(query: str) -> List[str]:
    """Запрос целиком плюс токены длиннее одного символа, без повторов."""
    tokens = [term for term in re.split(r"[\s\-_]+", query) if len(term) > 1]
    return list(dict.fromkeys([query] + tokens))


def extract_contextual_keywords(query: str) -> List[str]:
    keywords: List[str] = []
    for triggers, added in CONTEXTUAL_KEYWORD_RULES:
        if any(trigger in query for trigger in triggers):
            keywords.extend(added)
    return keywords


def functionality_score(component: CatalogComponent, terms: Iterable[str]) -> int:
    name = component.name.lower()
    description = (component.description or "").lower()
    score = 0
    for term in dict.fromkeys(terms):
        for rule_terms, name_hints, name_bonus, description_hints, description_bonus in FUNCTIONALITY_RULES:
            if term not in rule_terms:
                continue
            if any(hint in name for hint in name_hints):
                score += name_bonus
            if any(hint in description for hint in description_hints):
                score += description_bonus
    return score


def score_component(
    component: CatalogComponent,
    query: str,
    terms: List[str],
    keywords: List[str],
) -> int:
    """Оценка релевантности компонента для нормализованного запроса."""
    name = component.name.lower()
    category = (component.category or "").lower()
    description = (component.description or "").lower()

    if name == query:
        return EXACT_QUERY_SCORE

    score = 0
    for term in terms:
        if name == term:
            score += EXACT_TERM_SCORE
        elif name.startswith(term):
            score += PREFIX_SCORE
        elif name.endswith(term):
            score += SUFFIX_SCORE
        elif term in name:
            score += CONTAINS_SCORE

    for term in terms:
        for expanded in EXPANDED_TERMS.get(term, ()):
            if expanded in name:
                score += EXPANDED_NAME_SCORE
            if expanded in description:
                score += EXPANDED_DESCRIPTION_SCORE

    for keyword in keywords:
        if keyword in name:
            score += KEYWORD_NAME_SCORE
        if keyword in description:
            score += KEYWORD_DESCRIPTION_SCORE
        if keyword in category:
            score += KEYWORD_CATEGORY_SCORE

    for term in terms:
        if category in (term, term + "s") or term == category + "s":
            score += CATEGORY_SCORE

    score += functionality_score(component, terms)
    return score


def rank_components(catalog: List[CatalogComponent], query: str) -> List[Tuple[CatalogComponent, int]]:
    """
    Пары (компонент, оценка) с положительной оценкой, по убыванию.
    Компонент, имя которого равно запросу, идёт первым с оценкой 100.
    Сортировка стабильна: при равной оценке сохраняется порядок каталога.
    """
    normalized = (query or "").strip().lower()
    if not normalized:
        return [(component, 0) for component in catalog]

    terms = extract_search_terms(normalized)
    keywords = extract_contextual_keywords(normalized)

    scored = []
    for component in catalog:
        score = score_component(component, normalized, terms, keywords)
        if score > 0:
            scored.append((component, score))
    # точное совпадение имени с запросом всегда первое
    scored.sort(key=lambda item: (item[0].name.lower() != normalized, -item[1]))

    logger.debug(f"Search '{normalized}': {len(scored)} of {len(catalog)} components matched")
    return scored


def smart_search_components(catalog: List[CatalogComponent], query: str) -> List[CatalogComponent]:
    if not query or not query.strip():
        return catalog
    return [component for component, _ in rank_components(catalog, query)]


def search_by_category(catalog: List[CatalogComponent], category: str) -> List[CatalogComponent]:
    """Фильтр по категории с учётом наивного единственного/множественного числа."""
    normalized = (category or "").strip().lower()
    return [
        component for component in catalog
        if component.category.lower() in (normalized, normalized + "s")
        or normalized == component.category.lower() + "s"
    ]


def search_multiple_terms(catalog: List[CatalogComponent], terms: List[str]) -> List[CatalogComponent]:
    """
    Поиск по нескольким терминам: за позицию в выдаче каждого термина
    компонент получает ``max(0, 50 - 5 * rank)``, бонусы суммируются по имени.
    """
    totals: Dict[str, int] = {}
    components: Dict[str, CatalogComponent] = {}

    for term in terms:
        for rank, component in enumerate(smart_search_components(catalog, term)):
            bonus = max(0, MULTI_TERM_BASE_BONUS - MULTI_TERM_RANK_STEP * rank)
            if component.name not in totals:
                totals[component.name] = 0
                components[component.name] = component
            totals[component.name] += bonus

    ordered = sorted(totals, key=lambda name: -totals[name])
    return [components[name] for name in ordered]
