"""
템플릿 엔진입니다.
UML 정의와 템플릿 텍스트를 받아 ${...} 플레이스홀더를 채워 코드를 생성합니다.

템플릿은 한 줄씩 처리합니다. 값을 찾지 못한 플레이스홀더가 다른 줄에
영향을 주지 않도록 하기 위함입니다.

렌더링 컨텍스트:
- definition: 렌더링할 정의 (JSON 형태, camelCase 키)
- date: 렌더링 시각 (ISO 8601, UTC, 예: 2024-01-01T12:00:00.000Z)
- item, index: 반복 블록 안에서만 사용 가능
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from umltools.exceptions import GenerationError, MissingFieldError, UmlToolsError
from umltools.models import ExportStep
from .base_exporter import BaseExporter
from .placeholders import (
    NOT_FOUND,
    PLACEHOLDER_PATTERN,
    Placeholder,
    find_placeholders,
    resolve_path,
    stringify,
)

logger = logging.getLogger(__name__)


def format_date(moment: datetime) -> str:
    """렌더링 시각을 UTC ISO 8601 문자열(밀리초, 'Z' 접미사)로 바꿉니다."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class TemplateEngine(BaseExporter):
    """
    플레이스홀더 기반 코드 생성기입니다.

    값을 찾지 못한 플레이스홀더는 그대로 남겨서 생성된 코드에서 문제를
    확인할 수 있게 합니다. 단, @optional 이 붙은 경우는 빈 문자열로 바꿉니다.
    """

    _exporter_name = "TemplateEngine"

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            clock: 렌더링 시각을 돌려주는 함수. 테스트에서 시각을 고정할 때 사용합니다.
                시간대가 없는 값은 UTC로 간주합니다.
        """
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def build_context(self, step: ExportStep) -> dict:
        """렌더링 컨텍스트 {definition, date}를 만듭니다."""
        return {
            "definition": step.definition.model_dump(mode="json", by_alias=True),
            "date": format_date(self._clock()),
        }

    def _do_render(self, step: ExportStep) -> str:
        if step.definition is None or step.template is None:
            raise MissingFieldError(
                "missing definition or template",
                details={
                    "step": step.name,
                    "has_definition": step.definition is not None,
                    "has_template": step.template is not None,
                },
            )

        try:
            context = self.build_context(step)
            lines = self._render_lines(step.template.split("\n"), context)
        except UmlToolsError:
            raise
        except Exception as e:
            raise GenerationError(
                f"템플릿 렌더링에 실패했습니다: {step.definition.name}",
                details={"step": step.name, "error": str(e)},
            ) from e
        return "".join(line + "\n" for line in lines)

    def _render_lines(self, lines: list[str], context: dict) -> list[str]:
        """여러 줄을 렌더링합니다. 블록(@iterate, @OPTIONAL_BLOCK)은 여기서 펼쳐집니다."""
        output: list[str] = []
        index = 0

        while index < len(lines):
            line = lines[index]
            opener = self._block_opener(line)

            if opener is None:
                if self._closes_block(line):
                    logger.warning(f"[Template] 짝이 없는 블록 종료 무시: {line.strip()}")
                else:
                    output.append(self._render_line(line, context))
                index += 1
                continue

            end = self._find_block_end(lines, index)
            body = lines[index + 1:end]
            output.extend(self._render_block(opener, body, context))
            index = end + 1

        return output

    def _render_block(self, opener: Placeholder, body: list[str], context: dict) -> list[str]:
        """블록 본문을 렌더링합니다. 블록 시작/종료 줄은 출력하지 않습니다."""
        value = resolve_path(context, opener.path)

        if opener.opens_iteration:
            if not isinstance(value, list):
                logger.debug(f"[Template] 반복할 목록 없음: {opener.path}")
                return []
            output = []
            for position, item in enumerate(value):
                item_context = {**context, "item": item, "index": position}
                output.extend(self._render_lines(body, item_context))
            return output

        # OPTIONAL_BLOCK: 값이 있을 때만 본문 출력
        if value is NOT_FOUND or not value:
            return []
        return self._render_lines(body, context)

    def _render_line(self, line: str, context: dict) -> str:
        """한 줄 안의 플레이스홀더를 모두 치환합니다."""

        def replace(match) -> str:
            placeholder = Placeholder.from_match(match)
            value = resolve_path(context, placeholder.path)
            if value is NOT_FOUND:
                if placeholder.is_optional:
                    return ""
                logger.debug(f"[Template] 값을 찾을 수 없음: {placeholder.text}")
                return placeholder.text
            return stringify(value)

        return PLACEHOLDER_PATTERN.sub(replace, line)

    def _block_opener(self, line: str) -> Optional[Placeholder]:
        for placeholder in find_placeholders(line):
            if placeholder.opens_block:
                return placeholder
        return None

    def _closes_block(self, line: str) -> bool:
        return any(p.closes_block for p in find_placeholders(line))

    def _block_closer(self, line: str) -> Optional[Placeholder]:
        for placeholder in find_placeholders(line):
            if placeholder.closes_block:
                return placeholder
        return None

    def _find_block_end(self, lines: list[str], start: int) -> int:
        """
        start 줄에서 열린 블록의 종료 줄 번호를 찾습니다.

        블록마다 짝이 되는 종료 표시로만 닫힙니다. (@iterate -> @endBlock,
        @OPTIONAL_BLOCK -> @END_OPTIONAL_BLOCK) 짝이 맞지 않는 종료 표시는
        경고 후 무시합니다.
        """
        expected = [self._block_opener(lines[start]).closer]
        for position in range(start + 1, len(lines)):
            line = lines[position]
            opener = self._block_opener(line)
            if opener is not None:
                expected.append(opener.closer)
                continue

            closer = self._block_closer(line)
            if closer is None:
                continue
            if closer.modifier != expected[-1]:
                logger.warning(
                    f"[Template] 짝이 맞지 않는 블록 종료 무시: {line.strip()} "
                    f"(기대값: @{expected[-1].value})"
                )
                continue
            expected.pop()
            if not expected:
                return position

        logger.warning(f"[Template] 블록이 닫히지 않아 템플릿 끝에서 종료: {lines[start].strip()}")
        return len(lines)

    def render_definition(self, definition: Any, template: str) -> str:
        """정의와 템플릿만으로 렌더링하는 편리한 함수입니다."""
        return self.render(ExportStep(definition=definition, template=template))
