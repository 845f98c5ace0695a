"""
파일 기반 저장소 서비스입니다.
다이어그램/작업 문서 읽기, 모델(JSON) 저장 및 재로딩, 템플릿 읽기,
생성된 코드 쓰기를 담당합니다.

관리하는 데이터:
1. UML 모델 (JSON 파일)
2. 코드 템플릿 (<이름>.<확장자>)
3. 생성된 코드 (<출력 폴더>/<경로>/<패키지 폴더들>/<이름>.<확장자>)
"""

import logging
import aiofiles
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from umltools.config import get_settings
from umltools.exceptions import StorageError
from umltools.models import ModelDefinition
from umltools.utils.validation import (
    validate_file_extension,
    validate_path_segment,
    validate_relative_path,
)

logger = logging.getLogger(__name__)


Location = Union[str, Path]


class FileStorage:
    """파일 시스템 기반의 단순 저장소 클래스입니다."""

    def __init__(
        self,
        base_path: str = ".",
        template_dir: str = "template",
        uml_output_dir: str = "generated/uml",
        code_output_dir: str = "generated",
    ):
        # 상대 경로는 모두 base_path 기준
        self.base_path = Path(base_path)
        self.template_path = self.resolve(template_dir)
        self.uml_path = self.resolve(uml_output_dir)
        self.code_path = self.resolve(code_output_dir)

    def resolve(self, location: Location) -> Path:
        """상대 경로를 base_path 기준의 경로로 바꿉니다."""
        path = Path(location)
        return path if path.is_absolute() else self.base_path / path

    # ==================== 텍스트 파일 ====================

    async def read_text(self, location: Location) -> str:
        """텍스트(UTF-8) 파일을 읽습니다."""
        file_path = self.resolve(location)
        if not file_path.is_file():
            raise StorageError(
                f"파일을 찾을 수 없습니다: {file_path}",
                details={"path": str(file_path)},
            )

        try:
            async with aiofiles.open(file_path, "r", encoding="utf-8") as f:
                return await f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"파일 읽기 실패 {file_path}: {e}", exc_info=True)
            raise StorageError(
                f"파일 읽기에 실패했습니다: {file_path.name}",
                details={"path": str(file_path), "error": str(e)},
            )

    async def write_text(self, location: Location, content: str) -> Path:
        """
        텍스트 파일을 씁니다. 필요한 폴더는 만들고,
        쓰기가 끝난 뒤 파일 상태를 확인하여 경로를 반환합니다.
        """
        file_path = self.resolve(location)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(file_path, "w", encoding="utf-8") as f:
                await f.write(content)
            stat = file_path.stat()
        except OSError as e:
            logger.error(f"파일 저장 실패 {file_path}: {e}", exc_info=True)
            raise StorageError(
                f"파일 저장에 실패했습니다: {file_path.name}",
                details={"path": str(file_path), "error": str(e)},
            )

        logger.debug(f"파일 저장 완료 {file_path} ({stat.st_size} bytes)")
        return file_path

    # ==================== UML 모델 ====================

    def model_location(self, name: str) -> Path:
        """모델의 기본 저장 경로 (<uml 폴더>/<이름>.json)"""
        return self.uml_path / f"{validate_path_segment(name, 'model name')}.json"

    async def save_model(
        self,
        model: ModelDefinition,
        location: Optional[Location] = None,
    ) -> Path:
        """모델을 JSON 파일로 저장합니다. 경로를 지정하지 않으면 기본 경로를 사용합니다."""
        file_path = self.resolve(location) if location else self.model_location(model.name)
        return await self.write_text(file_path, model.to_json())

    async def load_model(self, location: Location) -> ModelDefinition:
        """JSON 파일을 읽어서 모델로 변환합니다."""
        content = await self.read_text(location)
        try:
            return ModelDefinition.model_validate_json(content)
        except ValidationError as e:
            logger.error(f"모델 로딩 에러 {location}: {e}")
            raise StorageError(
                f"모델 파일 형식이 올바르지 않습니다: {location}",
                details={"path": str(location), "errors": [err["msg"] for err in e.errors()]},
            )

    # ==================== 템플릿 ====================

    def template_location(self, name: str, extension: str) -> Path:
        """템플릿 파일 경로 (<템플릿 폴더>/<이름>.<확장자>)"""
        name = validate_path_segment(name, "template name")
        extension = validate_file_extension(extension)
        return self.template_path / f"{name}.{extension}"

    async def read_template(self, name: str, extension: str) -> str:
        """이름과 확장자로 템플릿 파일을 읽습니다."""
        return await self.read_text(self.template_location(name, extension))

    # ==================== 생성된 코드 ====================

    def code_location(
        self,
        path: str,
        package_segments: list[str],
        name: str,
        extension: str,
    ) -> Path:
        """
        생성 코드의 저장 경로를 만듭니다.
        <코드 폴더>/<경로>/<패키지 폴더들>/<이름>.<확장자>
        """
        file_path = self.code_path
        for segment in validate_relative_path(path):
            file_path = file_path / segment
        for segment in package_segments:
            file_path = file_path / validate_path_segment(segment, "package")
        name = validate_path_segment(name, "definition name")
        extension = validate_file_extension(extension)
        return file_path / f"{name}.{extension}"

    async def write_code(
        self,
        path: str,
        package_segments: list[str],
        name: str,
        extension: str,
        code: str,
    ) -> Path:
        """생성된 코드를 파일로 저장합니다."""
        file_path = self.code_location(path, package_segments, name, extension)
        return await self.write_text(file_path, code)


# 싱글톤 인스턴스 (프로그램 전체에서 공유)
_file_storage: Optional[FileStorage] = None


def get_file_storage() -> FileStorage:
    """설정값으로 만든 FileStorage 인스턴스를 반환합니다."""
    global _file_storage
    if _file_storage is None:
        settings = get_settings()
        _file_storage = FileStorage(
            base_path=settings.workspace_root,
            template_dir=settings.template_dir,
            uml_output_dir=settings.uml_output_dir,
            code_output_dir=settings.code_output_dir,
        )
    return _file_storage
