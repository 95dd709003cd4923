"""평면 Job 목록에서 category/parent/sub-parent 계층을 계산하는 트리 모델입니다.

계층은 parent 참조 체인의 깊이로만 결정됩니다.

- 깊이 0: Category
- 깊이 1: Parent
- 깊이 2 이상: Sub-Parent

끊어진 parent 참조는 체인의 끝으로 취급하고(해당 노드는 루트),
자기참조/순환 체인은 이미 방문한 id를 만나는 지점에서 멈춥니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

EMPTY = "-"

CATEGORY = "Category"
PARENT = "Parent"
SUB_PARENT = "Sub-Parent"


@dataclass(frozen=True)
class JobLineage:
    category: str = EMPTY
    parent: str = EMPTY
    sub_parent: str = EMPTY

    def as_dict(self) -> Dict[str, str]:
        return {"category": self.category, "parent": self.parent, "subParent": self.sub_parent}


@dataclass(frozen=True)
class JobNode:
    id: int
    parent: Optional[int]
    category: str


def _field(row: Any, name: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


def normalize_parent(value: Any) -> Optional[int]:
    """parent 값을 정수 id 또는 None으로 정규화합니다. "null" 같은 문자열도 허용합니다."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    text = str(value).strip()
    if not text.isdigit():
        return None
    parsed = int(text)
    return parsed if parsed > 0 else None


def job_type_for_depth(depth: int) -> str:
    if depth <= 0:
        return CATEGORY
    if depth == 1:
        return PARENT
    return SUB_PARENT


class JobTree:
    def __init__(self, rows: Iterable[Any]):
        self._nodes: Dict[int, JobNode] = {}
        self._children: Dict[int, List[int]] = {}
        for row in rows:
            job_id = _field(row, "id")
            if job_id is None:
                continue
            node = JobNode(
                id=int(job_id),
                parent=normalize_parent(_field(row, "parent")),
                category=str(_field(row, "category") or ""),
            )
            self._nodes[node.id] = node
        for node in self._nodes.values():
            if node.parent is not None and node.parent in self._nodes and node.parent != node.id:
                self._children.setdefault(node.parent, []).append(node.id)

    def __contains__(self, job_id: Any) -> bool:
        return normalize_parent(job_id) in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def get(self, job_id: Any) -> Optional[JobNode]:
        key = normalize_parent(job_id)
        if key is None:
            return None
        return self._nodes.get(key)

    def ancestors(self, job_id: Any) -> List[JobNode]:
        """직계 부모부터 루트 방향으로 조상 노드를 반환합니다."""
        node = self.get(job_id)
        if node is None:
            return []
        chain: List[JobNode] = []
        visited = {node.id}
        current = node
        while current.parent is not None:
            parent = self._nodes.get(current.parent)
            if parent is None or parent.id in visited:
                break
            chain.append(parent)
            visited.add(parent.id)
            current = parent
        return chain

    def depth(self, job_id: Any) -> int:
        return len(self.ancestors(job_id))

    def job_type(self, job_id: Any) -> str:
        return job_type_for_depth(self.depth(job_id))

    def resolve(self, job_id: Any) -> JobLineage:
        node = self.get(job_id)
        if node is None:
            return JobLineage()
        lineage = list(reversed(self.ancestors(node.id))) + [node]
        depth = len(lineage) - 1
        if depth == 0:
            return JobLineage(category=node.category)
        if depth == 1:
            return JobLineage(category=lineage[0].category, parent=node.category)
        # depth 3 이상은 sub-parent로 고정: 루트, 깊이 1 조상, 자기 자신
        return JobLineage(
            category=lineage[0].category,
            parent=lineage[1].category,
            sub_parent=node.category,
        )

    def children(self, job_id: Any) -> List[JobNode]:
        key = normalize_parent(job_id)
        return [self._nodes[child_id] for child_id in self._children.get(key, [])]

    def descendants(self, job_id: Any) -> List[JobNode]:
        """하위 노드 전체를 전위 순회 순서로 반환합니다. 자기 자신은 제외합니다."""
        root = self.get(job_id)
        if root is None:
            return []
        result: List[JobNode] = []
        visited = {root.id}
        stack = list(reversed(self._children.get(root.id, [])))
        while stack:
            current_id = stack.pop()
            if current_id in visited:
                continue
            visited.add(current_id)
            result.append(self._nodes[current_id])
            stack.extend(reversed(self._children.get(current_id, [])))
        return result

    def roots(self) -> List[JobNode]:
        return [
            node for node in self._nodes.values()
            if node.parent is None or node.parent not in self._nodes or node.parent == node.id
        ]

    def flatten(self) -> List[Dict[str, Any]]:
        """루트별 전위 순회로 정렬한 표시용 목록입니다. 루트에서 닿지 않는 노드는 뒤에 붙습니다."""
        ordered: List[JobNode] = []
        seen = set()
        for root in self.roots():
            for node in [root, *self.descendants(root.id)]:
                if node.id not in seen:
                    seen.add(node.id)
                    ordered.append(node)
        for node in self._nodes.values():
            if node.id not in seen:
                seen.add(node.id)
                ordered.append(node)

        result = []
        for node in ordered:
            level = self.depth(node.id)
            result.append({
                "id": node.id,
                "level": level,
                "job_type": job_type_for_depth(level),
                "hierarchy": self.resolve(node.id).as_dict(),
            })
        return result
