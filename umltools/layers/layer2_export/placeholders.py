"""
템플릿 플레이스홀더(${...}) 해석 모듈입니다.

형식:
- ${definition.name}            : 점(.)으로 구분된 경로
- ${@optional definition.name}  : 수정자(@...)가 붙은 경로 (":"로 구분해도 됨)
- ${@endBlock}                  : 경로 없는 블록 종료 표시
"""

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


PLACEHOLDER_PATTERN = re.compile(r"\$\{(?:@(?P<modifier>\w+)[\s:]*)?(?P<path>[\w.]*)\}")

# 경로를 찾지 못했음을 나타내는 값 (None과 구분하기 위함)
NOT_FOUND = object()


class TemplateModifier(str, Enum):
    """
    템플릿 해석 방식을 바꾸는 수정자입니다.
    템플릿에서는 '@'를 앞에 붙여 사용합니다.
    """

    OPTIONAL = "optional"
    ITERATION_BLOCK = "iterate"
    ITERATE_BLOCK = "iterateBlock"
    ITERATION_BLOCK_END = "endBlock"
    OPTIONAL_BLOCK = "OPTIONAL_BLOCK"
    OPTIONAL_BLOCK_END = "END_OPTIONAL_BLOCK"


ITERATION_OPENERS = {TemplateModifier.ITERATION_BLOCK, TemplateModifier.ITERATE_BLOCK}
BLOCK_OPENERS = ITERATION_OPENERS | {TemplateModifier.OPTIONAL_BLOCK}
BLOCK_CLOSERS = {TemplateModifier.ITERATION_BLOCK_END, TemplateModifier.OPTIONAL_BLOCK_END}

# 블록 시작 수정자별로 짝이 되는 종료 수정자
MATCHING_CLOSER = {
    TemplateModifier.ITERATION_BLOCK: TemplateModifier.ITERATION_BLOCK_END,
    TemplateModifier.ITERATE_BLOCK: TemplateModifier.ITERATION_BLOCK_END,
    TemplateModifier.OPTIONAL_BLOCK: TemplateModifier.OPTIONAL_BLOCK_END,
}


@dataclass
class Placeholder:
    """템플릿 한 줄에서 찾은 플레이스홀더."""

    text: str  # 원본 텍스트 (예: "${@optional definition.name}")
    path: str  # 수정자와 괄호를 뗀 경로 (예: "definition.name")
    modifier: Optional[TemplateModifier] = None

    @property
    def is_optional(self) -> bool:
        return self.modifier == TemplateModifier.OPTIONAL

    @property
    def opens_block(self) -> bool:
        return self.modifier in BLOCK_OPENERS

    @property
    def opens_iteration(self) -> bool:
        return self.modifier in ITERATION_OPENERS

    @property
    def closes_block(self) -> bool:
        return self.modifier in BLOCK_CLOSERS

    @property
    def closer(self) -> Optional[TemplateModifier]:
        """블록 시작 플레이스홀더를 닫는 종료 수정자. 블록 시작이 아니면 None."""
        return MATCHING_CLOSER.get(self.modifier)

    @classmethod
    def from_match(cls, match: re.Match) -> "Placeholder":
        modifier_text = match.group("modifier")
        modifier = None
        if modifier_text:
            try:
                modifier = TemplateModifier(modifier_text)
            except ValueError:
                logger.warning(f"[Template] 알 수 없는 수정자 무시: @{modifier_text}")
        return cls(text=match.group(0), path=match.group("path"), modifier=modifier)


def find_placeholders(line: str) -> list[Placeholder]:
    """한 줄에서 모든 플레이스홀더를 찾습니다."""
    return [Placeholder.from_match(m) for m in PLACEHOLDER_PATTERN.finditer(line)]


def resolve_path(context: Any, path: str) -> Any:
    """
    점으로 구분된 경로를 컨텍스트에서 순서대로 찾아 값을 반환합니다.

    딕셔너리 키, 리스트 인덱스(숫자 조각), pydantic 모델 필드 순으로 찾습니다.
    문자열, 숫자, 리스트 같은 일반 값의 파이썬 속성(메서드 등)은 찾지 않습니다.
    중간 단계가 없거나 마지막 값이 None이면 NOT_FOUND를 반환합니다. (예외 없음)
    """
    if not path:
        return NOT_FOUND

    current = context
    for segment in path.split("."):
        if not segment:
            return NOT_FOUND
        if isinstance(current, Mapping):
            if segment not in current:
                return NOT_FOUND
            current = current[segment]
        elif isinstance(current, (list, tuple)) and segment.isdigit():
            index = int(segment)
            if index >= len(current):
                return NOT_FOUND
            current = current[index]
        elif isinstance(current, BaseModel) and segment in type(current).model_fields:
            current = getattr(current, segment)
        else:
            return NOT_FOUND

    if current is None:
        return NOT_FOUND
    return current


def stringify(value: Any) -> str:
    """템플릿에 넣을 문자열로 변환합니다."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)
