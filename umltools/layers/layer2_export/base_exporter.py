"""Base exporter class for all code generators.

이 모듈은 코드 생성기들이 공통으로 사용하는 기본 기능을 제공하는
추상 베이스 클래스를 정의합니다.

주요 기능:
- 템플릿 메서드 패턴을 통한 일관된 생성 흐름
- 로깅 및 에러 처리 표준화
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime

from umltools.models import ExportStep

logger = logging.getLogger(__name__)


class BaseExporter(ABC):
    """
    코드 생성기 추상 베이스 클래스.

    Template Method 패턴을 사용하여 일관된 생성 흐름을 보장합니다:
    1. 시작 로깅
    2. 실제 생성 (서브클래스에서 구현)
    3. 완료/실패 로깅

    Attributes:
        _exporter_name: 로깅에 사용되는 생성기 이름

    Example:
        class MyExporter(BaseExporter):
            _exporter_name = "MyExporter"

            def _do_render(self, step):
                return "code"
    """

    _exporter_name: str = "BaseExporter"

    def render(self, step: ExportStep) -> str:
        """
        코드 생성 템플릿 메서드.

        서브클래스는 이 메서드를 직접 오버라이드하기보다
        _do_render()를 구현해야 합니다.

        Args:
            step: 렌더링할 정의와 템플릿을 담은 익스포트 단계

        Returns:
            생성된 코드 문자열

        Raises:
            Exception: 생성 중 발생한 모든 예외
        """
        definition_name = step.definition.name if step.definition is not None else "Unknown"
        logger.info(f"[{self._exporter_name}] 생성 시작: {definition_name}")
        start_time = datetime.now()

        try:
            code = self._do_render(step)

            elapsed = (datetime.now() - start_time).total_seconds()
            logger.info(f"[{self._exporter_name}] 생성 완료: {elapsed:.3f}초")

            return code

        except Exception as e:
            elapsed = (datetime.now() - start_time).total_seconds()
            logger.error(f"[{self._exporter_name}] 생성 실패 ({elapsed:.3f}초): {e}")
            raise

    @abstractmethod
    def _do_render(self, step: ExportStep) -> str:
        """
        실제 코드 생성 로직 (서브클래스에서 구현).

        Args:
            step: 익스포트 단계

        Returns:
            생성된 코드
        """
        pass
