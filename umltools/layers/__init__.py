"""Processing layers for UML import and code generation."""

# Note: Import layers individually to avoid circular imports
# Use: from umltools.layers.layer1_import import ImporterFactory
# Use: from umltools.layers.layer2_export import TemplateEngine

__all__ = [
    "layer1_import",
    "layer2_export",
]
