"""유틸리티 모듈."""

from .validation import (
    validate_path_segment,
    validate_relative_path,
    validate_file_extension,
)

__all__ = [
    "validate_path_segment",
    "validate_relative_path",
    "validate_file_extension",
]
