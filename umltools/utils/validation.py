"""입력 유효성 검증 유틸리티.

생성 코드의 출력 경로를 만들 때 쓰이는 이름들(패키지 조각, 정의 이름,
확장자, 경로 조각)이 출력 폴더 밖을 가리키지 않는지 검사합니다.
"""

import re

from umltools.exceptions import InputValidationError


# 위험한 파일명 패턴
DANGEROUS_PATTERNS = re.compile(r"[<>:\"|?*\x00-\x1f]")

# 최대 이름 길이
MAX_SEGMENT_LENGTH = 255

# 확장자 패턴 (점 제외)
EXTENSION_PATTERN = re.compile(r"^[A-Za-z0-9_+\-]+$")


def validate_path_segment(segment: str, field: str = "segment") -> str:
    """
    경로 한 조각(디렉토리 또는 파일 이름) 유효성 검증.

    - 빈 값, '.', '..' 금지
    - 경로 구분자(/, \\) 금지
    - 위험 문자 검사
    - 길이 제한

    Args:
        segment: 검사할 이름
        field: 에러 메시지에 표시할 항목 이름

    Returns:
        앞뒤 공백을 제거한 이름

    Raises:
        InputValidationError: 유효하지 않은 이름
    """
    cleaned = (segment or "").strip()

    if not cleaned or cleaned in (".", ".."):
        raise InputValidationError(
            f"유효하지 않은 {field}입니다: {segment!r}",
            details={"field": field, "value": segment},
        )

    if "/" in cleaned or "\\" in cleaned:
        raise InputValidationError(
            f"{field}에 경로 구분자를 사용할 수 없습니다: {segment!r}",
            details={"field": field, "value": segment},
        )

    if DANGEROUS_PATTERNS.search(cleaned):
        raise InputValidationError(
            f"{field}에 허용되지 않는 문자가 포함되어 있습니다: {segment!r}",
            details={"field": field, "value": segment},
        )

    if len(cleaned) > MAX_SEGMENT_LENGTH:
        raise InputValidationError(
            f"{field}이(가) 너무 깁니다 (최대 {MAX_SEGMENT_LENGTH}자)",
            details={"field": field, "length": len(cleaned)},
        )

    return cleaned


def validate_relative_path(path: str, field: str = "path") -> list[str]:
    """
    상대 경로(예: src/main/java)를 조각 목록으로 검증합니다.
    빈 경로는 빈 목록을 반환합니다. 절대 경로는 허용하지 않습니다.
    """
    if not path:
        return []

    normalized = path.replace("\\", "/")
    if normalized.startswith("/") or re.match(r"^[A-Za-z]:", normalized):
        raise InputValidationError(
            f"{field}은(는) 상대 경로여야 합니다: {path!r}",
            details={"field": field, "value": path},
        )

    return [
        validate_path_segment(part, field)
        for part in normalized.split("/")
        if part and part != "."
    ]


def validate_file_extension(extension: str) -> str:
    """
    파일 확장자 유효성 검증. 앞의 점(.)은 제거하고 반환합니다.

    Raises:
        InputValidationError: 비어 있거나 허용되지 않는 문자가 있는 확장자
    """
    cleaned = (extension or "").strip().lstrip(".")
    if not cleaned or not EXTENSION_PATTERN.match(cleaned):
        raise InputValidationError(
            f"유효하지 않은 파일 확장자입니다: {extension!r}",
            details={"extension": extension},
        )
    return cleaned
