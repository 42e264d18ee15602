"""Генерация кода рефакторинга и примеров использования компонентов."""
from .refactoring_generator import RefactoringGenerator
from .usage_example_generator import UsageExampleGenerator

__all__ = ["RefactoringGenerator", "UsageExampleGenerator"]
