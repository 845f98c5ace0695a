"""
다이어그램 노드의 자식 영역(slot) 접근자입니다.

Gliffy UML 도형은 자식 노드의 순서가 고정되어 있습니다.
(0: 이름, 1: 속성, 2: 메서드) 이 위치 규칙은 이 모듈에서만 다룹니다.
"""

from enum import IntEnum
from typing import Any, Optional


class DiagramSlot(IntEnum):
    """UML 도형의 자식 영역 위치."""

    NAME = 0
    ATTRIBUTES = 1
    METHODS = 2


class NodeSlots:
    """다이어그램 노드의 자식 영역을 이름으로 꺼내는 접근자."""

    def __init__(self, node: Any):
        children = node.get("children") if isinstance(node, dict) else None
        self._children: list = children if isinstance(children, list) else []

    def get(self, slot: DiagramSlot) -> Optional[dict]:
        """영역 노드를 반환합니다. 해당 위치에 노드가 없으면 None."""
        if slot < len(self._children):
            child = self._children[slot]
            if isinstance(child, dict):
                return child
        return None

    def __len__(self) -> int:
        return len(self._children)
