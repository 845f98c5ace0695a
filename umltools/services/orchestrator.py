"""
UML 작업(Job)의 전체 흐름을 관리하는 오케스트레이터입니다.

처리 단계:
1. 파라미터 해석: 작업 문서의 ${key} 값을 외부 설정값으로 채웁니다.
2. 임포트 (Import): 다이어그램을 모델로 변환하여 JSON으로 저장합니다.
3. 익스포트 (Export): 저장된 모델을 다시 읽어 클래스마다 템플릿으로 코드를 생성합니다.

모든 단계는 선언 순서대로 하나씩 실행됩니다. 한 단계가 실패해도
기록만 남기고 다음 단계를 계속 진행합니다. 작업 문서 자체를 해석할 수
없을 때만 전체 실행이 중단됩니다.
"""

import inspect
import json
import logging
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import ValidationError

from umltools.config import get_settings
from umltools.exceptions import JobParseError, MissingFieldError
from umltools.models import (
    ComponentBase,
    ExportStep,
    ImportStep,
    JobEvent,
    JobResult,
    PackageDefinition,
    StepKind,
    StepResult,
    StepStatus,
    UmlJob,
)
from umltools.services.file_storage import FileStorage, get_file_storage
from umltools.services.parameters import (
    ParameterProvider,
    SettingsParameterProvider,
    resolve_parameters,
)

logger = logging.getLogger(__name__)


ProgressCallback = Callable[[JobEvent], None]


class JobOrchestrator:
    """
    임포트 단계와 익스포트 단계를 조율하는 클래스입니다.
    각 단계의 처리기를 실행하고 결과를 단계별로 기록합니다.
    """

    def __init__(
        self,
        storage: Optional[FileStorage] = None,
        parameters: Optional[ParameterProvider] = None,
        importer_factory=None,
        engine=None,
        not_found_marker: Optional[str] = None,
    ):
        settings = get_settings()
        self.storage = storage or get_file_storage()
        self.parameters = parameters or SettingsParameterProvider(settings)
        self.not_found_marker = not_found_marker or settings.not_found_marker

        # 순환 참조를 피하기 위해 처리기들은 여기서 불러옵니다.
        from umltools.layers.layer1_import import ImporterFactory
        from umltools.layers.layer2_export import TemplateEngine

        self.importer_factory = importer_factory or ImporterFactory()
        self.engine = engine or TemplateEngine()

    def parse_job(self, job_text: str) -> UmlJob:
        """
        작업 문서를 해석합니다.

        JSON으로 읽은 뒤 문자열 값의 ${key}를 치환하고 UmlJob으로 검증합니다.
        해석할 수 없으면 JobParseError가 발생합니다.
        """
        try:
            raw_job = json.loads(job_text)
        except (TypeError, ValueError) as e:
            raise JobParseError(
                "작업 문서를 해석할 수 없습니다",
                details={"error": str(e)},
            )

        if not isinstance(raw_job, dict):
            raise JobParseError(
                "작업 문서의 최상위 요소는 객체여야 합니다",
                details={"type": type(raw_job).__name__},
            )

        resolved = resolve_parameters(raw_job, self.parameters, self.not_found_marker)

        try:
            return UmlJob.model_validate(resolved)
        except ValidationError as e:
            raise JobParseError(
                "작업 문서 형식이 올바르지 않습니다",
                details={"errors": [{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()]},
            )

    async def run_job(
        self,
        job_text: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> JobResult:
        """
        작업 문서를 해석하고 실행하는 메인 함수입니다.

        Args:
            job_text: 작업 문서 (JSON 텍스트)
            on_progress: 진행 상황을 알려줄 콜백 함수

        Returns:
            단계별 실행 결과

        Raises:
            JobParseError: 작업 문서를 해석할 수 없을 때
        """
        job = self.parse_job(job_text)
        return await self.execute(job, on_progress)

    async def execute(
        self,
        job: UmlJob,
        on_progress: Optional[ProgressCallback] = None,
    ) -> JobResult:
        """해석된 작업을 실행합니다. 임포트 단계가 모두 끝난 뒤 익스포트 단계를 실행합니다."""
        logger.info(
            f"[Job] '{job.name}' 시작: 임포트 {len(job.import_steps)}개, "
            f"익스포트 {len(job.export_steps)}개"
        )
        result = JobResult(job_id=job.id, job_name=job.name)
        last_model_location: Optional[Path] = None

        # ========== 1단계: 임포트 (Import) ==========
        for step in job.import_steps:
            await self._emit_event(on_progress, job, "step_start", step.name, "임포트 시작")
            step_result = StepResult(step_id=step.id, step_name=step.name, kind=StepKind.IMPORT)

            try:
                location = await self._execute_import(step)
                last_model_location = location
                job.model = step.model
                step_result.complete(
                    message=(
                        f"클래스 {len(step.model.classes)}개, "
                        f"인터페이스 {len(step.model.interfaces)}개, "
                        f"패키지 {len(step.model.packages)}개"
                    ),
                    output_uri=str(location),
                )
            except Exception as e:
                logger.error(f"[Job] 임포트 실패 ({step.name}): {e}", exc_info=True)
                step_result.fail(str(e))

            result.results.append(step_result)
            await self._emit_step_result(on_progress, job, step_result)

        # ========== 2단계: 익스포트 (Export) ==========
        for step in job.export_steps:
            await self._emit_event(on_progress, job, "step_start", step.name, "익스포트 시작")
            for step_result in await self._execute_export(step, last_model_location):
                result.results.append(step_result)
                await self._emit_step_result(on_progress, job, step_result)

        logger.info(
            f"[Job] '{job.name}' 완료: {len(result.results)}개 단계 중 "
            f"{len(result.failures)}개 실패"
        )
        await self._emit_event(
            on_progress, job, "job_complete", None,
            f"{len(result.results) - len(result.failures)}/{len(result.results)}개 단계 성공"
        )
        return result

    async def _execute_import(self, step: ImportStep) -> Path:
        """
        임포트 단계 실행

        문서를 읽어 모델로 변환하고 저장한 뒤, 저장된 파일을 다시 읽어
        단계에 연결합니다. 저장된 모델의 경로를 반환합니다.
        """
        if step.document is not None:
            document = step.document
        elif step.source_uri:
            document = await self.storage.read_text(step.source_uri)
        else:
            raise MissingFieldError(
                "임포트 단계에 document 또는 sourceUri가 없습니다",
                details={"step": step.name},
            )

        name = Path(step.source_uri).stem if step.source_uri else step.name
        model = self.importer_factory.import_document(document, name, step.importer)

        location = await self.storage.save_model(model, step.destination_uri)
        step.model = await self.storage.load_model(location)
        logger.info(f"[Import] 모델 저장: {location}")
        return location

    async def _execute_export(
        self,
        step: ExportStep,
        last_model_location: Optional[Path],
    ) -> List[StepResult]:
        """
        익스포트 단계 실행

        정의가 지정되어 있으면 그 정의만, 아니면 모델의 모든 클래스를
        하나씩 렌더링합니다. 클래스마다 결과가 하나씩 기록됩니다.
        """
        try:
            units = await self._expand_export_step(step, last_model_location)
        except Exception as e:
            logger.error(f"[Job] 익스포트 준비 실패 ({step.name}): {e}", exc_info=True)
            step_result = StepResult(step_id=step.id, step_name=step.name, kind=StepKind.EXPORT)
            step_result.fail(str(e))
            return [step_result]

        results = []
        for unit in units:
            step_result = StepResult(
                step_id=step.id,
                step_name=f"{step.name}:{unit.definition.name}",
                kind=StepKind.EXPORT,
            )
            try:
                location = await self.export_definition(unit)
                step_result.complete(message="코드 생성 완료", output_uri=str(location))
            except Exception as e:
                logger.error(f"[Job] 코드 생성 실패 ({step_result.step_name}): {e}", exc_info=True)
                step_result.fail(str(e))
            results.append(step_result)

        return results

    async def _expand_export_step(
        self,
        step: ExportStep,
        last_model_location: Optional[Path],
    ) -> List[ExportStep]:
        """익스포트 단계를 클래스별 단계들로 펼칩니다."""
        if step.definition is not None:
            return [step]

        location = step.source_uri or last_model_location
        if location is None:
            raise MissingFieldError(
                "익스포트 단계에 definition 또는 모델 경로가 없습니다",
                details={"step": step.name},
            )

        # 임포트 결과를 메모리에서 넘겨받지 않고 저장된 파일에서 다시 읽습니다.
        model = await self.storage.load_model(location)
        default_package = step.package or model.default_package

        return [
            step.model_copy(
                update={"definition": definition, "package": default_package},
                deep=True,
            )
            for definition in model.classes
        ]

    async def export_definition(self, step: ExportStep) -> Path:
        """
        정의 하나를 코드로 생성하여 저장합니다.

        처리 순서:
        1. 패키지가 없으면 기본 패키지 지정
        2. 템플릿 읽기 (<templateName>.<fileExtension>)
        3. 렌더링
        4. <경로>/<패키지 폴더들>/<이름>.<확장자>로 저장
        """
        if step.definition is None:
            raise MissingFieldError(
                "missing definition or template",
                details={"step": step.name},
            )
        if not step.file_extension:
            raise MissingFieldError(
                "익스포트 단계에 fileExtension이 없습니다",
                details={"step": step.name},
            )

        definition = step.definition
        package = self._resolve_package(step)
        if isinstance(definition, ComponentBase):
            definition.package = package

        if step.template is None:
            if not step.template_name:
                raise MissingFieldError(
                    "missing definition or template",
                    details={"step": step.name},
                )
            step.template = await self.storage.read_template(
                step.template_name, step.file_extension
            )

        step.code = self.engine.render(step)

        location = await self.storage.write_code(
            step.path,
            package.segments if package else [],
            definition.name,
            step.file_extension,
            step.code,
        )
        step.destination_uri = str(location)
        logger.info(f"[Export] 코드 저장: {location}")
        return location

    def _resolve_package(self, step: ExportStep) -> Optional[PackageDefinition]:
        """정의의 패키지, 없으면 단계의 기본 패키지를 사용합니다."""
        own_package = getattr(step.definition, "package", None)
        return own_package or step.package

    async def _emit_step_result(
        self,
        callback: Optional[ProgressCallback],
        job: UmlJob,
        step_result: StepResult,
    ):
        """단계 결과를 이벤트로 알립니다."""
        event_type = "step_complete" if step_result.status == StepStatus.SUCCESS else "step_failed"
        await self._emit_event(
            callback, job, event_type, step_result.step_name, step_result.message
        )

    async def _emit_event(
        self,
        callback: Optional[ProgressCallback],
        job: UmlJob,
        event_type: str,
        step_name: Optional[str],
        message: str,
    ):
        """진행 상황 알림 이벤트를 발생시키는 함수"""
        if callback:
            event = JobEvent(
                job_id=job.id,
                event_type=event_type,
                step_name=step_name,
                message=message,
            )
            outcome = callback(event)
            if inspect.isawaitable(outcome):
                await outcome


# 싱글톤 인스턴스 (프로그램 전체에서 하나만 생성됨)
_orchestrator: Optional[JobOrchestrator] = None


def get_orchestrator() -> JobOrchestrator:
    """오케스트레이터 인스턴스를 가져오거나 생성하는 함수"""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = JobOrchestrator()
    return _orchestrator
