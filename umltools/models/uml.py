"""
UML 모델 엔티티 정의입니다.
다이어그램에서 추출한 클래스, 인터페이스, 패키지, 속성, 메서드 등의 구조를 표현합니다.

JSON으로 저장할 때는 camelCase 키(defaultPackage, superClass 등)를 사용하며,
읽을 때는 camelCase와 snake_case 모두 허용합니다.
"""

import uuid
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Stereotype(str, Enum):
    """
    UML 정의의 종류(스테레오타입)입니다.
    모델 생성 방식과 코드 생성 시 분기를 결정합니다.
    """

    CLASS = "class"
    INTERFACE = "interface"
    IMPLEMENTS = "implements"
    EXTENDS = "extends"
    ENUMERATION = "enumeration"
    PACKAGE = "package"
    ATTRIBUTE = "attribute"
    METHOD = "method"
    MODEL = "model"


def new_id() -> str:
    """새로운 엔티티 ID(UUID4 문자열)를 생성합니다."""
    return str(uuid.uuid4())


class UmlBaseModel(BaseModel):
    """camelCase JSON 직렬화를 위한 공통 설정."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> str:
        """JSON 아티팩트 형식(camelCase, 들여쓰기 2칸)으로 변환합니다."""
        return self.model_dump_json(by_alias=True, indent=2)


class BaseEntity(UmlBaseModel):
    """모든 UML 엔티티의 기본 클래스. ID를 지정하지 않으면 임의의 UUID가 부여됩니다."""

    id: str = Field(default_factory=new_id, description="엔티티 고유 ID")
    name: str = Field(default="", description="이름 (추출 전에는 빈 문자열)")


class BaseDefinition(BaseEntity):
    """모든 정의(Definition)의 기본 클래스."""

    stereotype: Optional[Stereotype] = None
    parent: str = Field(default="", description="상위 다이어그램 노드 ID (임포트 중에만 사용)")


class AttributeDefinition(BaseDefinition):
    """속성(또는 메서드 파라미터) 정의: 이름과 타입."""

    stereotype: Literal[Stereotype.ATTRIBUTE] = Stereotype.ATTRIBUTE
    type: str = ""  # 타입 시스템 검증 없이 자유 형식


class MethodDefinition(BaseDefinition):
    """메서드 정의: 이름, 반환 타입, 순서가 있는 파라미터 목록."""

    stereotype: Literal[Stereotype.METHOD] = Stereotype.METHOD
    type: str = ""  # 반환 타입
    parameters: list[AttributeDefinition] = Field(default_factory=list)

    def add_parameter(self, name: str, type: str) -> AttributeDefinition:
        """파라미터를 목록 끝에 추가합니다."""
        parameter = AttributeDefinition(name=name, type=type)
        self.parameters.append(parameter)
        return parameter


class AssociationDefinition(BaseDefinition):
    """
    연결선(연관 관계) 정의입니다. (예: 일반화, 구현)

    현재 임포터는 연관 관계를 소유 정의에 연결하지 않습니다.
    """

    source: Optional[BaseDefinition] = None
    destination: Optional[BaseDefinition] = None


class GeneralizationDefinition(AssociationDefinition):
    """일반화(extends) 관계."""

    stereotype: Literal[Stereotype.EXTENDS] = Stereotype.EXTENDS


class ImplementationDefinition(AssociationDefinition):
    """구현(implements) 관계."""

    stereotype: Literal[Stereotype.IMPLEMENTS] = Stereotype.IMPLEMENTS


class PackageDefinition(BaseDefinition):
    """패키지 정의. 이름은 점(.)으로 구분된 경로입니다. (예: com.example.bank)"""

    stereotype: Literal[Stereotype.PACKAGE] = Stereotype.PACKAGE

    @property
    def segments(self) -> list[str]:
        """패키지 이름을 디렉토리 경로 조각으로 나눕니다. 빈 조각은 제외합니다."""
        return [segment for segment in self.name.split(".") if segment]


class ComponentBase(BaseEntity):
    """
    코드로 생성될 수 있는 컴포넌트(클래스, 인터페이스, 열거형)의 공통 속성입니다.
    """

    parent: str = ""
    package: Optional[PackageDefinition] = None


class InterfaceDefinition(ComponentBase):
    """인터페이스 정의."""

    stereotype: Literal[Stereotype.INTERFACE] = Stereotype.INTERFACE
    methods: list[MethodDefinition] = Field(default_factory=list)
    super_class: Optional[str] = None


class ClassDefinition(ComponentBase):
    """클래스 정의. 인터페이스의 속성에 더해 속성(attribute) 목록을 가집니다."""

    stereotype: Literal[Stereotype.CLASS] = Stereotype.CLASS
    methods: list[MethodDefinition] = Field(default_factory=list)
    attributes: list[AttributeDefinition] = Field(default_factory=list)
    super_class: Optional[str] = None
    implementations: Optional[list[ImplementationDefinition]] = None


class EnumerationDefinition(ComponentBase):
    """열거형 정의."""

    stereotype: Literal[Stereotype.ENUMERATION] = Stereotype.ENUMERATION


# stereotype 값으로 구분되는 컴포넌트 정의 (태그 기반 합 타입)
ComponentDefinition = Annotated[
    Union[ClassDefinition, InterfaceDefinition, EnumerationDefinition, PackageDefinition],
    Field(discriminator="stereotype"),
]


class ModelDefinition(BaseDefinition):
    """
    임포트 결과 전체를 담는 모델(집합 루트)입니다.

    패키지가 정확히 하나만 발견되면 자동으로 기본 패키지(default_package)가 됩니다.
    """

    stereotype: Literal[Stereotype.MODEL] = Stereotype.MODEL
    classes: list[ClassDefinition] = Field(default_factory=list)
    interfaces: list[InterfaceDefinition] = Field(default_factory=list)
    packages: list[PackageDefinition] = Field(default_factory=list)
    default_package: Optional[PackageDefinition] = None

    def add_class(self, definition: ClassDefinition) -> None:
        self.classes.append(definition)

    def add_interface(self, definition: InterfaceDefinition) -> None:
        self.interfaces.append(definition)

    def add_package(self, definition: PackageDefinition) -> None:
        self.packages.append(definition)

    def promote_default_package(self) -> Optional[PackageDefinition]:
        """패키지가 하나뿐이면 기본 패키지로 지정합니다."""
        if len(self.packages) == 1:
            self.default_package = self.packages[0]
        return self.default_package
