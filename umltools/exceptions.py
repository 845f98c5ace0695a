"""
UML 도구 커스텀 예외 계층입니다.
각 단계(임포트/익스포트/작업/저장소)별 구조화된 에러 코드와 메시지를 제공합니다.
"""

from typing import Optional, Any


class UmlToolsError(Exception):
    """UML 도구 기본 예외 클래스."""

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Any] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class DiagramParseError(UmlToolsError):
    """다이어그램 문서(JSON)를 해석할 수 없을 때 발생합니다."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_IMPORT_001", details=details)


class UnsupportedImporterError(UmlToolsError):
    """등록되지 않은 임포터 이름이 지정되었을 때 발생합니다."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_IMPORT_002", details=details)


class JobParseError(UmlToolsError):
    """작업(Job) 문서를 해석할 수 없을 때 발생합니다. 작업 전체가 중단됩니다."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_JOB_001", details=details)


class MissingFieldError(UmlToolsError):
    """익스포트 단계에 필수 항목(definition, template 등)이 없을 때 발생합니다."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_EXPORT_001", details=details)


class GenerationError(UmlToolsError):
    """템플릿 렌더링 단계 에러."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_EXPORT_002", details=details)


class StorageError(UmlToolsError):
    """파일 저장소 관련 에러."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_STORE_001", details=details)


class InputValidationError(UmlToolsError):
    """입력 유효성 검증 에러 (400 응답)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_INPUT_001", details=details)
