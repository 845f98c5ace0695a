"""
Gliffy 다이어그램(.gliffy JSON) 임포터입니다.

Gliffy 문서의 `stage.objects` 목록에서 UML 도형을 찾아 스테레오타입별로
클래스, 인터페이스, 패키지 정의를 만듭니다. 이름/속성/메서드는 도형 안에
포함된 HTML 텍스트 조각에서 정규식으로 추출합니다.
"""

import json
import logging
import re
from typing import Any, Optional

from umltools.exceptions import DiagramParseError
from umltools.models import (
    AttributeDefinition,
    ClassDefinition,
    InterfaceDefinition,
    MethodDefinition,
    ModelDefinition,
    PackageDefinition,
    Stereotype,
)
from umltools.models.uml import new_id
from ..base_importer import BaseImporter
from ..slots import DiagramSlot, NodeSlots

logger = logging.getLogger(__name__)


# 도형 식별자: com.gliffy.shape.uml.uml_v2.class.<종류>
UID_PATTERN = re.compile(r"com\.gliffy\.shape\.uml\.uml_v2\.class\.(\w*)", re.IGNORECASE)
# 이름: 태그 속성 뒤의 ">이름<" 형태
NAME_PATTERN = re.compile(r'">([a-zA-Z0-9.]*)<')
ATTRIBUTES_PATTERN = re.compile(r">(\w*:\s?\w*)<")
ATTRIBUTE_PATTERN = re.compile(r"(\w*):\s?(\w*)")
# 파라미터 본문에 괄호를 허용하지 않아 한 조각 안의 여러 메서드가 합쳐지지 않습니다.
METHODS_PATTERN = re.compile(r">([a-zA-Z0-9_]*\([^()]*\):\s?[a-zA-Z0-9<>]*)<")
METHOD_PATTERN = re.compile(r"([a-zA-Z0-9_]*)\((.*)\):\s?([a-zA-Z0-9<>]*)")
PARAMETER_PATTERN = re.compile(r"([a-zA-Z0-9]*):\s*([a-zA-Z0-9<>]*)")


class GliffyImporter(BaseImporter):
    """Gliffy UML 문서를 중립적인 ModelDefinition으로 변환하는 임포터입니다."""

    @property
    def supported_selectors(self) -> list[str]:
        return ["gliffy.Importer", "gliffy"]

    @property
    def supported_extensions(self) -> list[str]:
        return [".gliffy", ".json"]

    def import_model(self, document: str, name: str) -> ModelDefinition:
        """
        Gliffy 문서에서 UML 모델 정의를 찾아 변환합니다.

        문서가 올바른 JSON이 아니면 DiagramParseError가 발생합니다.
        기대한 구조가 없으면 빈 모델을 반환합니다.
        """
        try:
            json_document = json.loads(document)
        except (TypeError, ValueError) as e:
            raise DiagramParseError(
                f"다이어그램 문서를 해석할 수 없습니다: {name}",
                details={"name": name, "error": str(e)},
            )

        model = ModelDefinition(name=name)

        for item in self._stage_objects(json_document):
            stereotype = self.locate_stereotype(item)

            if stereotype == Stereotype.CLASS:
                definition = self.create_class(item)
                model.add_class(definition)
                logger.debug(f"[Gliffy] 클래스 발견: {definition.name}")
            elif stereotype == Stereotype.INTERFACE:
                definition = self.create_interface(item)
                model.add_interface(definition)
                logger.debug(f"[Gliffy] 인터페이스 발견: {definition.name}")
            elif stereotype == Stereotype.PACKAGE:
                definition = self.create_package(item)
                model.add_package(definition)
                logger.debug(f"[Gliffy] 패키지 발견: {definition.name}")
            elif stereotype == Stereotype.IMPLEMENTS:
                # 연관 관계는 아직 모델에 연결하지 않습니다.
                logger.debug(f"[Gliffy] 구현 관계 건너뜀: {item.get('id')}")
            else:
                logger.debug(f"[Gliffy] UML 도형이 아님: {item.get('id')} ({item.get('uid')})")

        # 패키지가 하나뿐이면 기본 패키지로 사용
        model.promote_default_package()

        logger.info(
            f"[Gliffy] '{name}' 변환 완료: 클래스 {len(model.classes)}개, "
            f"인터페이스 {len(model.interfaces)}개, 패키지 {len(model.packages)}개"
        )
        return model

    def _stage_objects(self, json_document: Any) -> list[dict]:
        """문서의 stage.objects 목록을 꺼냅니다. 없으면 빈 목록."""
        if not isinstance(json_document, dict):
            logger.warning("[Gliffy] 최상위 요소가 객체가 아닙니다")
            return []
        stage = json_document.get("stage")
        if not isinstance(stage, dict):
            logger.warning("[Gliffy] stage 섹션이 없습니다")
            return []
        objects = stage.get("objects")
        if not isinstance(objects, list):
            return []
        return [item for item in objects if isinstance(item, dict)]

    def _node_id(self, item: dict) -> str:
        """노드 ID를 문자열로 반환합니다. 없으면 새 ID를 만듭니다."""
        node_id = item.get("id")
        return str(node_id) if node_id is not None else new_id()

    def locate_stereotype(self, item: dict) -> Optional[Stereotype]:
        """
        도형 식별자(uid)의 마지막 조각에서 스테레오타입을 찾습니다.
        (예: ...uml_v2.class.interface -> interface)
        """
        uid = item.get("uid")
        if not isinstance(uid, str):
            return None
        match = UID_PATTERN.search(uid)
        if match is None:
            return None
        try:
            return Stereotype(match.group(1).lower())
        except ValueError:
            return None

    def create_class(self, item: dict) -> ClassDefinition:
        """Gliffy 도형에서 클래스 정의를 만듭니다."""
        slots = NodeSlots(item)
        return ClassDefinition(
            id=self._node_id(item),
            name=self.find_name(slots),
            attributes=self.find_attributes(slots.get(DiagramSlot.ATTRIBUTES)),
            methods=self.find_methods(slots.get(DiagramSlot.METHODS)),
        )

    def create_interface(self, item: dict) -> InterfaceDefinition:
        """Gliffy 도형에서 인터페이스 정의를 만듭니다. (속성 영역은 사용하지 않음)"""
        slots = NodeSlots(item)
        return InterfaceDefinition(
            id=self._node_id(item),
            name=self.find_name(slots),
            methods=self.find_methods(slots.get(DiagramSlot.METHODS)),
        )

    def create_package(self, item: dict) -> PackageDefinition:
        """Gliffy 도형에서 패키지 정의를 만듭니다."""
        slots = NodeSlots(item)
        return PackageDefinition(
            id=self._node_id(item),
            name=self.find_name(slots),
        )

    def find_name(self, slots: NodeSlots) -> str:
        """이름 영역에서 이름을 찾습니다. 없으면 빈 문자열."""
        return self.find_text(slots.get(DiagramSlot.NAME), NAME_PATTERN)

    def find_attributes(self, region: Optional[dict]) -> list[AttributeDefinition]:
        """속성 영역에서 'name: type' 형태의 속성들을 찾습니다."""
        attributes = []
        for text in self.find_texts(region, ATTRIBUTES_PATTERN):
            match = ATTRIBUTE_PATTERN.search(text)
            if match is None or not match.group(1):
                continue
            attributes.append(
                AttributeDefinition(name=match.group(1), type=match.group(2))
            )
        return attributes

    def find_methods(self, region: Optional[dict]) -> list[MethodDefinition]:
        """메서드 영역에서 'name(param:type, ...): returnType' 형태의 메서드들을 찾습니다."""
        methods = []
        for text in self.find_texts(region, METHODS_PATTERN):
            match = METHOD_PATTERN.search(text)
            if match is None:
                continue
            method = MethodDefinition(name=match.group(1), type=match.group(3))
            # 괄호 안의 파라미터 목록을 다시 검사
            for parameter in PARAMETER_PATTERN.finditer(match.group(2)):
                method.add_parameter(parameter.group(1), parameter.group(2))
            methods.append(method)
        return methods

    def find_text(self, region: Optional[dict], pattern: re.Pattern) -> str:
        """
        영역에서 찾은 텍스트 중 마지막 것을 반환합니다.
        다이어그램은 장식용 조각들 뒤에 실제 라벨을 두기 때문입니다.
        """
        texts = self.find_texts(region, pattern)
        return texts[-1] if texts else ""

    def find_texts(self, region: Optional[dict], pattern: re.Pattern) -> list[str]:
        """
        영역 아래의 텍스트 조각들을 찾습니다.

        자식에게 다시 자식이 있으면 그 아래로 내려가며, 그 결과가 지금까지
        모은 목록을 대체합니다. 자식이 말단이고 Text 그래픽을 가지면
        html을 패턴으로 검사해 비어있지 않은 그룹을 모두 추가합니다.
        """
        texts: list[str] = []
        if not isinstance(region, dict):
            return texts

        children = region.get("children")
        if not isinstance(children, list):
            return texts

        for child in children:
            if not isinstance(child, dict):
                continue
            if child.get("children") is not None:
                # 더 깊이 탐색
                texts = self.find_texts(child, pattern)
                continue

            graphic = child.get("graphic")
            if not isinstance(graphic, dict) or graphic.get("type") != "Text":
                continue
            html = (graphic.get("Text") or {}).get("html") or ""
            for match in pattern.finditer(html):
                texts.extend(group for group in match.groups() if group)

        return texts
