"""
임포터 팩토리(Importer Factory) 모듈입니다.
작업에 지정된 임포터 이름에 맞는 임포터를 찾아서 생성해주는 역할을 합니다.
"""

from typing import Dict, Type, Optional

from umltools.exceptions import UnsupportedImporterError
from umltools.models import ModelDefinition
from .base_importer import BaseImporter


class ImporterFactory:
    """
    적절한 임포터를 생성하는 공장 클래스입니다.
    """

    def __init__(self):
        self._importers: Dict[str, BaseImporter] = {}
        self._importer_classes: Dict[str, Type[BaseImporter]] = {}

        # 사용 가능한 임포터 등록
        self._register_importers()

    def _register_importers(self):
        """모든 종류의 임포터 클래스를 등록하는 내부 함수"""
        from .importers.gliffy_importer import GliffyImporter

        for importer_class in [GliffyImporter]:
            for selector in importer_class().supported_selectors:
                self._importer_classes[selector.lower()] = importer_class

    def get_importer(self, selector: str) -> BaseImporter:
        """
        임포터 이름에 맞는 임포터 인스턴스를 반환합니다.
        이미 생성된 인스턴스가 있으면 재사용합니다.
        """
        key = (selector or "").strip().lower()
        if key not in self._importers:
            importer_class = self._importer_classes.get(key)
            if not importer_class:
                raise UnsupportedImporterError(
                    f"지원하지 않는 임포터입니다: {selector}",
                    details={"selector": selector, "available": self.registered_selectors()},
                )
            self._importers[key] = importer_class()

        return self._importers[key]

    def registered_selectors(self) -> list[str]:
        """등록된 임포터 이름 목록"""
        return sorted(self._importer_classes)

    def detect_importer(self, filename: str) -> Optional[BaseImporter]:
        """파일 확장자로 처리 가능한 임포터를 찾습니다. 없으면 None."""
        for selector in self.registered_selectors():
            importer = self.get_importer(selector)
            if importer.can_import(filename):
                return importer
        return None

    def import_document(
        self,
        document: str,
        name: str,
        selector: str,
    ) -> ModelDefinition:
        """
        문서를 모델로 변환하는 편리한 함수입니다.
        """
        importer = self.get_importer(selector)
        return importer.import_model(document, name)
