"""
작업(Job) 파라미터 해석 서비스입니다.

작업 문서 안의 ${key} 플레이스홀더를 외부 설정 저장소의 값으로 바꿉니다.
문서를 JSON으로 해석한 뒤 문자열 값에만 치환하므로, 치환된 값이
JSON 구조를 깨뜨리지 않습니다.
"""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from umltools.config import Settings, get_settings

logger = logging.getLogger(__name__)


PARAMETER_PATTERN = re.compile(r"\$\{([\w.\-]+)\}")

# 템플릿/다이어그램 원문을 담는 키. 이 값들 안의 ${...}는 템플릿용이므로 치환하지 않습니다.
RAW_CONTENT_KEYS = ("template", "document")


class ParameterProvider(ABC):
    """키로 설정값을 조회하는 외부 저장소 인터페이스."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """키에 해당하는 값을 반환합니다. 없으면 None."""
        pass


class DictParameterProvider(ParameterProvider):
    """
    딕셔너리 기반 파라미터 저장소.

    "a.b" 키는 먼저 그대로 찾고, 없으면 중첩 딕셔너리 {"a": {"b": ...}}를 따라 찾습니다.
    """

    def __init__(self, values: Optional[Mapping] = None):
        self._values = dict(values or {})

    def get(self, key: str) -> Optional[str]:
        if key in self._values:
            return self._to_text(self._values[key])

        current: Any = self._values
        for segment in key.split("."):
            if not isinstance(current, Mapping) or segment not in current:
                return None
            current = current[segment]
        return self._to_text(current)

    @staticmethod
    def _to_text(value: Any) -> Optional[str]:
        if value is None or isinstance(value, Mapping):
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)


class SettingsParameterProvider(DictParameterProvider):
    """애플리케이션 설정(job_parameters)을 저장소로 사용하는 파라미터 저장소."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        super().__init__(settings.job_parameters)


def resolve_text(
    text: str,
    provider: ParameterProvider,
    not_found: str = "not-found",
) -> str:
    """문자열 안의 ${key}를 모두 치환합니다. 없는 키는 not_found 값으로 바꿉니다."""

    def replace(match) -> str:
        key = match.group(1)
        value = provider.get(key)
        if value is None:
            logger.warning(f"[Parameters] 파라미터를 찾을 수 없음: {key}")
            return not_found
        return value

    return PARAMETER_PATTERN.sub(replace, text)


def resolve_parameters(
    data: Any,
    provider: ParameterProvider,
    not_found: str = "not-found",
    skip_keys: Iterable[str] = RAW_CONTENT_KEYS,
) -> Any:
    """
    해석된 JSON 구조 안의 모든 문자열 값에 파라미터를 치환합니다.

    Args:
        data: json.loads 결과 (dict, list, str 등)
        provider: 파라미터 저장소
        not_found: 찾지 못한 키 대신 넣을 값
        skip_keys: 값을 치환하지 않을 키 목록

    Returns:
        치환된 새 구조 (원본은 변경하지 않음)
    """
    skip = set(skip_keys)

    if isinstance(data, str):
        return resolve_text(data, provider, not_found)
    if isinstance(data, list):
        return [resolve_parameters(item, provider, not_found, skip) for item in data]
    if isinstance(data, dict):
        return {
            key: value if key in skip else resolve_parameters(value, provider, not_found, skip)
            for key, value in data.items()
        }
    return data
