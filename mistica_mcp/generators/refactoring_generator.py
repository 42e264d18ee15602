"""
Генерация примера рефакторинга кода из Figma на компоненты Mística.
"""
from typing import List

from ..analyzers.element_extractor import UIElements
from ..analyzers.pattern_detector import PatternSignals, StructuralAnalysis
from ..models import ComponentSuggestion

TOP_IMPORTS = 5

BENEFITS_SECTION = """## Преимущества рефакторинга на Mística
- **Единый дизайн**: компоненты следуют официальной дизайн-системе Telefónica
- **Доступность**: компоненты оптимизированы для всех пользователей
- **Адаптивность**: автоматическая подстройка под разные экраны
- **Производительность**: оптимизированные компоненты с поддержкой tree-shaking
- **Сопровождение**: более чистый и простой в поддержке код

"""

LIST_RECOMMENDATIONS = """### Рекомендации для списков
- `BoxedRowList` + `BoxedRow` для интерактивных списков с навигацией
- `RowList` для простых списков без рамок
- Иконки передавайте через prop `asset`, индикаторы через `right`

"""

FORM_RECOMMENDATIONS = """### Рекомендации для форм
- Используйте специализированные поля: `EmailField`, `PasswordField`
- Оборачивайте поля в `Form` для автоматической валидации
- `Stack` задаёт единообразные отступы между полями

"""

CARD_RECOMMENDATIONS = """### Рекомендации для карточек
- `DataCard` для структурированного контента с данными
- `MediaCard` для контента с изображением
- `HighlightedCard` для выделения важной информации

"""


class RefactoringGenerator:
    """Собирает tsx-пример по найденным паттернам и предложенным компонентам."""

    def generate_generic_refactoring(
        self,
        elements: UIElements,
        structure: StructuralAnalysis,
        patterns: PatternSignals,
        suggestions: List[ComponentSuggestion],
    ) -> str:
        imports = ", ".join(suggestion.component.name for suggestion in suggestions[:TOP_IMPORTS])

        parts = [
            "```tsx\n",
            f"import {{ {imports} }} from '@telefonica/mistica';\n\n",
            "export default function RefactoredComponent() {\n",
            "  return (\n",
        ]

        if patterns.list_pattern:
            parts.append(self._list_pattern(elements))
        elif patterns.card_pattern:
            parts.append(self._card_pattern(elements, patterns))
        elif patterns.form_pattern:
            parts.append(self._form_pattern(elements))
        else:
            parts.append(self._generic_pattern(elements, patterns))

        parts.append("  );\n}\n```\n\n")
        parts.append(BENEFITS_SECTION)
        parts.append(self._recommendations(patterns))
        return "".join(parts)

    @staticmethod
    def _list_row(index: int, elements: UIElements) -> str:
        row = [
            "        <BoxedRow\n",
            f'          headline="Элемент {index}"\n',
            "          onPress={() => {}}\n",
        ]
        if elements.icons.found:
            row.append("          asset={<IconComponent />}\n")
        if elements.lists.has_navigation:
            row.append("          right={<IconChevronRight />}\n")
        row.append("        />\n")
        return "".join(row)

    def _list_pattern(self, elements: UIElements) -> str:
        code = "    <Box padding={16}>\n"
        if elements.navigation.found:
            code += '      <NavigationBar title="Заголовок" onBack={() => {}} />\n\n'
        code += "      <BoxedRowList>\n"
        code += self._list_row(1, elements)
        code += self._list_row(2, elements)
        code += "      </BoxedRowList>\n"
        code += "    </Box>\n"
        return code

    @staticmethod
    def _card_pattern(elements: UIElements, patterns: PatternSignals) -> str:
        code = "    <Stack space={16} padding={16}>\n"
        if patterns.navigation_pattern:
            code += '      <Header title="Заголовок" />\n'
        code += "      <DataCard\n"
        code += '        title="Заголовок карточки"\n'
        code += '        subtitle="Описание"\n'
        if elements.buttons.found:
            code += "        actions={<ButtonPrimary>Действие</ButtonPrimary>}\n"
        code += "      />\n"
        code += "    </Stack>\n"
        return code

    @staticmethod
    def _form_pattern(elements: UIElements) -> str:
        code = "    <Form>\n      <Box padding={16}>\n        <Stack space={16}>\n"
        if "h1" in elements.texts.hierarchy:
            code += "          <Title1>Форма</Title1>\n"
        for index in (1, 2):
            code += "          <TextField\n"
            code += f'            label="Поле {index}"\n'
            code += f'            name="field{index}"\n'
            code += "          />\n"
        if elements.buttons.found:
            code += '          <ButtonPrimary type="submit">Отправить</ButtonPrimary>\n'
        code += "        </Stack>\n      </Box>\n    </Form>\n"
        return code

    @staticmethod
    def _generic_pattern(elements: UIElements, patterns: PatternSignals) -> str:
        code = "    <Box padding={16}>\n"
        if patterns.navigation_pattern:
            code += '      <NavigationBar title="Заголовок" />\n\n'

        texts = elements.texts
        if texts.found:
            code += "      <Stack space={16}>\n"
            if "h1" in texts.hierarchy:
                code += "        <Title1>Главный заголовок</Title1>\n"
            preset_levels = [level for level in texts.hierarchy if level.startswith("text")]
            if preset_levels:
                number = preset_levels[0][4:]
                code += f"        <Text{number}>Текст пресета {preset_levels[0]}</Text{number}>\n"
            if "body" in texts.hierarchy:
                code += "        <Text>Текст содержимого</Text>\n"
            code += "      </Stack>\n\n"

        if elements.buttons.found:
            code += "      <ButtonPrimary onPress={() => {}}>Действие</ButtonPrimary>\n"
        code += "    </Box>\n"
        return code

    @staticmethod
    def _recommendations(patterns: PatternSignals) -> str:
        recommendations = ""
        if patterns.list_pattern:
            recommendations += LIST_RECOMMENDATIONS
        if patterns.form_pattern:
            recommendations += FORM_RECOMMENDATIONS
        if patterns.card_pattern:
            recommendations += CARD_RECOMMENDATIONS
        return recommendations
