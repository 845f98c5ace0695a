"""Layer 2: Export - UML definitions to source code through templates."""

from .base_exporter import BaseExporter
from .placeholders import (
    NOT_FOUND,
    Placeholder,
    TemplateModifier,
    find_placeholders,
    resolve_path,
)
from .template_engine import TemplateEngine

__all__ = [
    "BaseExporter",
    "NOT_FOUND",
    "Placeholder",
    "TemplateModifier",
    "find_placeholders",
    "resolve_path",
    "TemplateEngine",
]
