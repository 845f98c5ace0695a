"""공유 pytest fixture 모음."""

import json
from datetime import datetime

import pytest

from umltools.models import (
    AttributeDefinition,
    ClassDefinition,
    MethodDefinition,
    PackageDefinition,
)


CLASS_UID = "com.gliffy.shape.uml.uml_v2.class.class"
INTERFACE_UID = "com.gliffy.shape.uml.uml_v2.class.interface"
PACKAGE_UID = "com.gliffy.shape.uml.uml_v2.class.package"
IMPLEMENTS_UID = "com.gliffy.shape.uml.uml_v2.class.implements"


def text_node(html: str, node_id: int = 0) -> dict:
    """Text 그래픽을 가진 말단 노드."""
    return {"id": node_id, "graphic": {"type": "Text", "Text": {"html": html}}}


def region(*htmls: str) -> dict:
    """텍스트 노드들을 자식으로 가진 영역 노드."""
    return {"children": [text_node(html, i) for i, html in enumerate(htmls)]}


def name_html(name: str) -> str:
    return f'<p style="text-align:center;"><span style="font-weight:bold;">{name}</span></p>'


def lines_html(*lines: str) -> str:
    return "".join(f"<p>{line}</p>" for line in lines)


def uml_node(node_id, uid, name, attributes=(), methods=()) -> dict:
    """이름/속성/메서드 영역을 가진 Gliffy UML 도형."""
    return {
        "id": node_id,
        "uid": uid,
        "children": [
            region(name_html(name)),
            region(lines_html(*attributes)) if attributes else {"children": []},
            region(lines_html(*methods)) if methods else {"children": []},
        ],
    }


def gliffy_document(*objects: dict) -> str:
    return json.dumps({"contentType": "application/gliffy+json", "stage": {"objects": list(objects)}})


@pytest.fixture
def account_node():
    """Account 클래스 도형 fixture."""
    return uml_node(
        10,
        CLASS_UID,
        "Account",
        attributes=("age: int", "name: String"),
        methods=("compute(x:int,y:int):double",),
    )


@pytest.fixture
def gliffy_text(account_node):
    """패키지 1개, 클래스 1개, 인터페이스 1개, 구현 관계 1개를 가진 Gliffy 문서."""
    return gliffy_document(
        {"id": 1, "uid": PACKAGE_UID, "children": [region(name_html("com.example.bank"))]},
        account_node,
        uml_node(20, INTERFACE_UID, "Auditable", methods=("audit(level:int):String",)),
        {"id": 30, "uid": IMPLEMENTS_UID},
    )


@pytest.fixture
def sample_class():
    """ClassDefinition fixture."""
    method = MethodDefinition(name="compute", type="double")
    method.add_parameter("x", "int")
    method.add_parameter("y", "int")
    return ClassDefinition(
        id="class-001",
        name="Account",
        attributes=[
            AttributeDefinition(name="age", type="int"),
            AttributeDefinition(name="name", type="String"),
        ],
        methods=[method],
        package=PackageDefinition(name="com.example.bank"),
    )


@pytest.fixture
def fixed_clock():
    """항상 같은 시각을 돌려주는 clock."""
    return lambda: datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def temp_storage(tmp_path):
    """임시 디렉토리 기반 FileStorage fixture."""
    from umltools.services.file_storage import FileStorage
    return FileStorage(base_path=str(tmp_path))


@pytest.fixture
def make_uml_node():
    """uml_node 생성 함수 fixture."""
    return uml_node


@pytest.fixture
def make_gliffy_document():
    """gliffy_document 생성 함수 fixture."""
    return gliffy_document
