"""
다이어그램 변환 및 코드 생성 API입니다.
다이어그램 문서를 UML 모델로 변환하거나, 정의 하나를 템플릿으로 렌더링합니다.
"""

import logging
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from umltools.config import get_settings
from umltools.layers.layer1_import import ImporterFactory
from umltools.layers.layer2_export import TemplateEngine
from umltools.models import ComponentDefinition, ExportStep, ModelDefinition
from umltools.services import get_file_storage

logger = logging.getLogger(__name__)

router = APIRouter()


class ImportRequest(BaseModel):
    """변환 요청 (다이어그램 원문과 모델 이름)"""
    document: str
    name: str = "model"
    importer: Optional[str] = None


class ExportRequest(BaseModel):
    """
    코드 생성 요청 (정의와 템플릿)

    template 본문이 없으면 templateName + fileExtension으로 템플릿 폴더에서 읽습니다.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    definition: Optional[ComponentDefinition] = None
    template: Optional[str] = None
    template_name: Optional[str] = None
    file_extension: Optional[str] = None


@router.post("/import")
async def import_diagram(request: ImportRequest) -> dict:
    """
    다이어그램 문서를 UML 모델로 변환하는 API입니다.
    변환된 모델을 JSON(camelCase)으로 반환합니다.
    """
    selector = request.importer or get_settings().default_importer
    model: ModelDefinition = ImporterFactory().import_document(
        request.document, request.name, selector
    )
    logger.info(f"[API] 변환 완료: {model.name} (클래스 {len(model.classes)}개)")
    return model.model_dump(mode="json", by_alias=True)


@router.post("/export")
async def export_definition(request: ExportRequest) -> dict:
    """
    정의 하나를 템플릿으로 렌더링하는 API입니다.
    definition 또는 template이 없으면 400을 반환합니다.
    """
    template = request.template
    if template is None and request.template_name and request.file_extension:
        template = await get_file_storage().read_template(
            request.template_name, request.file_extension
        )

    step = ExportStep(definition=request.definition, template=template)
    code = TemplateEngine().render(step)
    return {"code": code}
