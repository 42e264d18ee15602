"""MCP сервер дизайн-системы Mística: каталог компонентов и сопоставление кода из Figma."""

__version__ = "1.0.0"
