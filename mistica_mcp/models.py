"""
Модели данных каталога компонентов Mística.
"""
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

COMPONENT_CATEGORIES = (
    "components",
    "layout",
    "icons",
    "utilities",
    "hooks",
    "feedback",
    "community",
    "lab",
    "patterns",
)

COMPONENT_CATEGORY_LABELS = {
    "components": "UI Components",
    "layout": "Layout",
    "icons": "Icons",
    "utilities": "Utilities",
    "hooks": "React Hooks",
    "feedback": "Feedback",
    "patterns": "Patterns",
    "community": "Community",
    "lab": "Experimental",
}


def get_category_label(category: str) -> str:
    return COMPONENT_CATEGORY_LABELS.get(category, category)


# ---------------------------------------------------------------------
# DATACLASS
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class ComponentProp:
    name: str
    type: str = "any"
    required: bool = False
    default: Optional[str] = None
    description: str = ""


@dataclass(frozen=True)
class CatalogComponent:
    """Компонент каталога. Неизменяем после загрузки."""
    id: str
    name: str
    category: str
    description: str = ""
    props: List[ComponentProp] = field(default_factory=list)
    examples: List[Dict[str, Any]] = field(default_factory=list)
    story_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogComponent":
        props = [
            prop if isinstance(prop, ComponentProp) else ComponentProp(
                name=prop.get("name", ""),
                type=prop.get("type") or "any",
                required=bool(prop.get("required", False)),
                default=prop.get("default"),
                description=prop.get("description") or ""
            )
            for prop in data.get("props") or []
        ]
        return cls(
            id=data.get("id") or f"{data.get('category', 'components')}-{data['name'].lower()}",
            name=data["name"],
            category=data.get("category") or "components",
            description=data.get("description") or "",
            props=props,
            examples=list(data.get("examples") or []),
            story_url=data.get("story_url") or data.get("storyUrl") or ""
        )


@dataclass
class ComponentSuggestion:
    """Кандидат из каталога с обоснованием и оценкой релевантности."""
    component: CatalogComponent
    reason: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.component.name,
            "category": self.component.category,
            "description": self.component.description,
            "story_url": self.component.story_url,
            "reason": self.reason,
            "score": self.score,
        }
