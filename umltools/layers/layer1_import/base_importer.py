"""모든 다이어그램 임포터(Importer)들이 상속받는 기본 클래스입니다."""

from abc import ABC, abstractmethod

from umltools.models import ModelDefinition


class BaseImporter(ABC):
    """
    모든 임포터의 부모(Base) 클래스입니다.

    모든 임포터는 이 클래스를 상속받아 `import_model` 메서드를 구현해야 합니다.
    """

    @property
    @abstractmethod
    def supported_selectors(self) -> list[str]:
        """이 임포터를 선택하는 이름 목록 (예: ['gliffy.Importer'])"""
        pass

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """이 임포터가 처리할 수 있는 파일 확장자 목록 (예: ['.gliffy'])"""
        pass

    @abstractmethod
    def import_model(self, document: str, name: str) -> ModelDefinition:
        """
        다이어그램 문서를 UML 모델로 변환하는 함수. (자식 클래스에서 반드시 구현해야 함)

        Args:
            document: 다이어그램 문서 텍스트
            name: 생성될 모델의 이름

        Returns:
            ModelDefinition: 변환된 모델
        """
        pass

    def can_import(self, filename: str) -> bool:
        """주어진 파일명을 이 임포터가 처리할 수 있는지 확인하는 함수"""
        ext = "." + filename.lower().split(".")[-1] if "." in filename else ""
        return ext in self.supported_extensions
