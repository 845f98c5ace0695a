"""UML diagram import and template based code generation."""

__version__ = "1.0.0"
