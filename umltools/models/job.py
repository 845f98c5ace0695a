"""
작업(Job)과 단계(Step) 관련 데이터 모델입니다.
임포트 단계, 익스포트 단계, 단계별 실행 결과와 진행 이벤트를 정의합니다.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import Field

from umltools.config import get_settings

from .uml import (
    BaseEntity,
    ComponentDefinition,
    ModelDefinition,
    PackageDefinition,
    UmlBaseModel,
)


class BaseProcess(BaseEntity):
    """작업과 단계의 공통 속성."""

    description: Optional[str] = None


class ImportStep(BaseProcess):
    """다이어그램 문서를 UML 모델로 변환하는 단계."""

    name: str = "NewImportStep"
    importer: str = Field(
        default_factory=lambda: get_settings().default_importer,
        description="사용할 임포터 이름 (기본: 설정의 default_importer)",
    )
    source_uri: Optional[str] = Field(default=None, description="원본 다이어그램 파일 경로")
    document: Optional[str] = Field(default=None, description="원본 다이어그램 텍스트 (직접 지정 시)")
    destination_uri: Optional[str] = Field(default=None, description="모델(JSON) 저장 경로")

    # 변환된 모델
    model: Optional[ModelDefinition] = None


class ExportStep(BaseProcess):
    """하나의 컴포넌트 정의를 템플릿으로 렌더링하는 단계."""

    name: str = "NewExportStep"
    definition: Optional[ComponentDefinition] = None
    source_uri: Optional[str] = Field(
        default=None, description="definition이 없을 때 사용할 모델(JSON) 경로"
    )
    template_name: Optional[str] = Field(default=None, description="템플릿 파일 이름 (확장자 제외)")
    template: Optional[str] = Field(default=None, description="템플릿 본문")
    file_extension: str = ""
    path: str = Field(default="", description="출력 경로 조각 (예: src/main/java)")
    package: Optional[PackageDefinition] = Field(default=None, description="기본 패키지")

    # 생성된 코드
    code: Optional[str] = None
    destination_uri: Optional[str] = None


class UmlJob(BaseProcess):
    """임포트부터 코드 생성까지의 전체 작업. 단계들은 선언 순서대로 실행됩니다."""

    name: str = "NewUmlJob"
    parameters: Optional[dict[str, Any]] = None
    import_steps: list[ImportStep] = Field(default_factory=list)
    export_steps: list[ExportStep] = Field(default_factory=list)
    model: Optional[ModelDefinition] = None


class StepKind(str, Enum):
    """단계의 종류."""

    IMPORT = "import"
    EXPORT = "export"


class StepStatus(str, Enum):
    """단계 실행 결과 상태."""

    SUCCESS = "success"
    FAILED = "failed"


class StepResult(UmlBaseModel):
    """단계별 처리 결과 정보입니다."""

    step_id: str
    step_name: str
    kind: StepKind
    status: StepStatus = StepStatus.SUCCESS
    message: str = ""
    output_uri: Optional[str] = None
    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    duration_ms: Optional[int] = None  # 소요 시간 (밀리초)

    def _stamp(self):
        self.completed_at = datetime.now()
        self.duration_ms = int(
            (self.completed_at - self.started_at).total_seconds() * 1000
        )

    def complete(self, message: str = "", output_uri: Optional[str] = None):
        """단계를 성공 상태로 표시하는 함수"""
        self._stamp()
        self.status = StepStatus.SUCCESS
        self.message = message
        self.output_uri = output_uri

    def fail(self, message: str):
        """단계를 실패 상태로 표시하는 함수"""
        self._stamp()
        self.status = StepStatus.FAILED
        self.message = message


class JobResult(UmlBaseModel):
    """작업 전체의 실행 결과. 단계별 결과가 실행 순서대로 담깁니다."""

    job_id: str
    job_name: str
    results: list[StepResult] = Field(default_factory=list)

    @property
    def failures(self) -> list[StepResult]:
        return [r for r in self.results if r.status == StepStatus.FAILED]

    @property
    def succeeded(self) -> bool:
        return not self.failures


class JobEvent(UmlBaseModel):
    """진행 상황 알림 이벤트 (사용자에게 메시지를 보여주는 용도)."""

    job_id: str
    event_type: str = Field(..., description="step_start, step_complete, step_failed, job_complete")
    step_name: Optional[str] = None
    message: str
    timestamp: datetime = Field(default_factory=datetime.now)
