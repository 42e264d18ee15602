"""
Генерация примеров использования компонента Mística в формате markdown.

Секции: заголовок, когда использовать, импорт, базовое использование,
варианты, композиция, доступность, таблица props и связанные компоненты.
Необязательные секции пропускаются, если для компонента им нечего сказать.
"""
import re
from typing import List, Optional, Tuple

from ..models import CatalogComponent

Section = Tuple[str, str]

WHEN_TO_USE_HINTS = (
    ("button", "Используйте для запуска основных или второстепенных действий в интерфейсе."),
    ("layout", "Используйте для структурирования областей страницы с единообразными отступами."),
    ("field", "Используйте для ввода данных пользователем с единообразной валидацией."),
    ("pinfield", "Используйте для ввода коротких кодов (PIN / OTP) с оптимизированным UX."),
    ("form", "Используйте для группировки полей с общими состояниями и валидацией."),
    ("card", "Используйте для группировки связанного контента в контейнере с визуальной айдентикой."),
    ("list", "Используйте для отображения навигируемых или повторяющихся коллекций."),
    ("modal", "Используйте, чтобы прервать поток и показать приоритетный контент или подтверждение."),
    ("inline", "Используйте для горизонтального выравнивания элементов с контролем отступов."),
    ("stack", "Используйте для вертикального расположения элементов с сохранением ритма."),
)
DEFAULT_WHEN_TO_USE = "Используйте по необходимости, следуя рекомендациям дизайн-системы."

BUTTON_VARIANTS = (
    "```tsx\n"
    "<ButtonPrimary>Подтвердить</ButtonPrimary>\n"
    "<ButtonSecondary>Отмена</ButtonSecondary>\n"
    "<ButtonDanger>Удалить</ButtonDanger>\n"
    '<ButtonLink href="#">Подробнее</ButtonLink>\n'
    "```"
)
FIELD_VARIANTS = (
    "```tsx\n"
    '<TextField label="Имя" />\n'
    '<EmailField label="Email" />\n'
    '<PasswordField label="Пароль" />\n'
    '<PinField length={6} label="Код" />\n'
    "```"
)
LAYOUT_COMPOSITION = (
    "Пример композиции layout:\n\n"
    "```tsx\n"
    "<Stack space={16}>\n"
    "  <Inline space={8}>\n"
    "    <ButtonPrimary>Ок</ButtonPrimary>\n"
    "    <ButtonSecondary>Отмена</ButtonSecondary>\n"
    "  </Inline>\n"
    "  <Grid columns={{desktop: 3, mobile: 2}}>\n"
    "    <Box>Блок 1</Box>\n"
    "    <Box>Блок 2</Box>\n"
    "    <Box>Блок 3</Box>\n"
    "  </Grid>\n"
    "</Stack>\n"
    "```"
)
FIXED_FOOTER_COMPOSITION = (
    "Layout с действием, закреплённым в футере:\n\n"
    "```tsx\n"
    "<ButtonFixedFooterLayout>\n"
    "  <Stack space={16}>\n"
    "    <Title2>Настройки</Title2>\n"
    "    <Text1>Содержимое...</Text1>\n"
    "  </Stack>\n"
    "  <ButtonPrimary onPress={() => {}}>Сохранить</ButtonPrimary>\n"
    "</ButtonFixedFooterLayout>\n"
    "```"
)

ACCESSIBILITY_RULES = (
    (r"button", "Текст внутри кнопки должен описывать действие."),
    (r"field|input", "Всегда связывайте поле с видимым label или aria-label."),
    (r"iconbutton|icon", "Добавляйте aria-label, если иконка одна обозначает действие."),
    (r"layout|stack|inline|grid", "Соблюдайте семантический порядок заголовков и landmarks."),
)

RELATED_RULES = (
    (r"button", ("ButtonGroup", "LoadingBar")),
    (r"pinfield", ("Form", "TextField", "PasswordField")),
    (r"layout", ("Stack", "Inline", "Grid")),
    (r"stack", ("Inline", "Grid")),
    (r"card", ("MediaCard", "DataCard")),
)


def normalize_component_name(raw: str) -> str:
    return re.sub(r"^default as ", "", raw or "", flags=re.IGNORECASE).strip()


def detect_kind(name: str) -> str:
    lower = name.lower()
    if "pinfield" in lower:
        return "pinfield"
    if "buttonfixedfooterlayout" in lower:
        return "layout-fixed-footer"
    if "field" in lower:
        return "field"
    if lower.endswith("button") or re.search(r"button(primary|secondary|danger|link)$", lower):
        return "button"
    if "stack" in lower:
        return "stack"
    return "generic"


class UsageExampleGenerator:
    """Собирает markdown с примерами использования компонента."""

    def generate(self, component: CatalogComponent, fmt: str = "react", max_props: int = 8) -> str:
        name = normalize_component_name(component.name)

        sections: List[Optional[Section]] = [
            self._header(name, component),
            self._when_to_use(name),
            self._import(name),
            self._basic_usage(name, fmt),
            self._variants(name),
            self._composition(name),
            self._accessibility(name),
            self._props(component, max_props),
            self._related(name),
        ]
        return "\n".join(
            f"## {title}\n\n{content.strip()}\n" for title, content in filter(None, sections)
        )

    @staticmethod
    def _header(name: str, component: CatalogComponent) -> Section:
        return f"Примеры использования: {name}", component.description or "Компонент дизайн-системы Mística."

    @staticmethod
    def _when_to_use(name: str) -> Section:
        lower = name.lower()
        hint = next((text for key, text in WHEN_TO_USE_HINTS if key in lower), DEFAULT_WHEN_TO_USE)
        return "Когда использовать", hint

    @staticmethod
    def _import(name: str) -> Section:
        return "Импорт", f"```tsx\nimport {{ {name} }} from '@telefonica/mistica';\n```"

    @staticmethod
    def _basic_usage(name: str, fmt: str) -> Section:
        kind = detect_kind(name)
        if kind == "button":
            code = f"<{name} onPress={{() => console.log('clicked')}}>Продолжить</{name}>"
        elif kind == "field":
            code = (
                "const [value, setValue] = useState('');\n\n"
                f'<{name} name="email" value={{value}} onChange={{setValue}} label="Email" />'
            )
        elif kind == "pinfield":
            code = (
                "const [code, setCode] = useState('');\n\n"
                f'<{name} value={{code}} onChange={{setCode}} length={{6}} label="Код" />'
            )
        elif kind == "layout-fixed-footer":
            code = (
                f"<{name}>\n"
                "  <Stack space={16}>\n"
                "    <Title2>Настройки</Title2>\n"
                "    <Text1>Основное содержимое...</Text1>\n"
                "  </Stack>\n"
                "  <ButtonPrimary onPress={() => {}}>Сохранить</ButtonPrimary>\n"
                f"</{name}>"
            )
        elif kind == "stack":
            code = (
                f"<{name} space={{16}}>\n"
                "  <Title2>Пример</Title2>\n"
                "  <Text1>Текст 1</Text1>\n"
                "  <Text1>Текст 2</Text1>\n"
                f"</{name}>"
            )
        else:
            code = f"<{name} />"

        html = f'<div class="{name.lower()}">...</div>'
        if fmt == "html":
            return "Базовое использование", f"```html\n{html}\n```"
        if fmt == "both":
            return (
                "Базовое использование",
                f"**React**\n```tsx\n{code}\n```\n\n**HTML (концептуально)**\n```html\n{html}\n```",
            )
        return "Базовое использование", f"```tsx\n{code}\n```"

    @staticmethod
    def _variants(name: str) -> Optional[Section]:
        lower = name.lower()
        is_button = "button" in lower and "group" not in lower
        is_field = "field" in lower
        if not is_button and not is_field:
            return None

        blocks = []
        if is_button:
            blocks.append("Основные варианты кнопок:\n\n" + BUTTON_VARIANTS)
        if is_field:
            blocks.append("Варианты полей:\n\n" + FIELD_VARIANTS)
        return "Варианты", "\n\n".join(blocks)

    @staticmethod
    def _composition(name: str) -> Optional[Section]:
        lower = name.lower()
        if re.search(r"stack|inline|grid", lower):
            return "Композиция", LAYOUT_COMPOSITION
        if "layout" in lower and "footer" in lower:
            return "Композиция", FIXED_FOOTER_COMPOSITION
        return None

    @staticmethod
    def _accessibility(name: str) -> Optional[Section]:
        lower = name.lower()
        notes = [note for pattern, note in ACCESSIBILITY_RULES if re.search(pattern, lower)]
        if not notes:
            return None
        return "Доступность", "\n".join(f"- {note}" for note in notes)

    @staticmethod
    def _props(component: CatalogComponent, max_props: int) -> Optional[Section]:
        if not component.props:
            return None

        rows = []
        for prop in component.props[:max_props]:
            description = re.sub(r"\n+", " ", prop.description or "").strip() or "—"
            rows.append(f"| {prop.name} | {prop.type or '—'} | {prop.default or '—'} | {description} |")

        content = "| Prop | Тип | По умолчанию | Описание |\n|------|-----|--------------|----------|\n"
        content += "\n".join(rows)
        hidden = len(component.props) - max_props
        if hidden > 0:
            content += f"\n\n… ещё {hidden} props"
        return "Основные props", content

    @staticmethod
    def _related(name: str) -> Optional[Section]:
        lower = name.lower()
        related: List[str] = []
        for pattern, names in RELATED_RULES:
            if re.search(pattern, lower):
                related.extend(names)
        if not related:
            return None
        return "Связанные компоненты", "\n".join(f"- {item}" for item in related)
