"""
Reply arena for a single topic.

Nodes are kept in a dict keyed by reply id, and each parent (None for the
topic itself) owns an ordered list of child ids. Insertion order is arrival
order at every level and never changes afterwards. Nodes only need `id` and
`parent_id` attributes, so the arena stays independent of the schemas.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from errors import NotFoundError


class ReplyTree:
    def __init__(self, nodes: Iterable = ()):
        self._nodes: Dict[str, object] = {}
        self._children: Dict[Optional[str], List[str]] = {None: []}
        self._arrival: List[str] = []
        for node in nodes:
            self.attach(node)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, reply_id) -> bool:
        return reply_id in self._nodes

    @property
    def top_level_count(self) -> int:
        return len(self._children[None])

    def find(self, reply_id: str):
        node = self._nodes.get(reply_id)
        if node is None:
            raise NotFoundError("Reply not found")
        return node

    def children(self, parent_id: Optional[str] = None) -> List:
        return [self._nodes[cid] for cid in self._children.get(parent_id, [])]

    def attach(self, node):
        """Append `node` under its parent_id (top level when None)."""
        if node.id in self._nodes:
            raise ValueError(f"Duplicate reply id: {node.id}")
        parent_id = node.parent_id
        if parent_id is not None:
            if parent_id == node.id:
                raise ValueError("A reply cannot be its own parent")
            if parent_id not in self._nodes:
                raise NotFoundError("Parent comment not found")
        self._nodes[node.id] = node
        self._children.setdefault(node.id, [])
        self._children[parent_id].append(node.id)
        self._arrival.append(node.id)
        return node

    def walk(self) -> Iterator[Tuple[int, object]]:
        """Depth-first pre-order walk yielding (depth, node)."""
        stack = [(0, cid) for cid in reversed(self._children[None])]
        while stack:
            depth, node_id = stack.pop()
            yield depth, self._nodes[node_id]
            stack.extend((depth + 1, cid) for cid in reversed(self._children[node_id]))

    def records(self) -> List:
        """Nodes in arrival order; every parent precedes its children."""
        return [self._nodes[rid] for rid in self._arrival]

    def depth(self, reply_id: str) -> int:
        """Nesting level of a reply, 0 for top-level."""
        node = self.find(reply_id)
        level = 0
        while node.parent_id is not None:
            node = self._nodes[node.parent_id]
            level += 1
        return level

    def nested(self, render) -> List[dict]:
        """Build the recursive view, `render(node)` producing each node's dict."""
        out: List[dict] = []
        # levels[d] is the list that receives the next node at depth d
        levels = [out]
        for depth, node in self.walk():
            item = render(node)
            item["replies"] = []
            del levels[depth + 1:]
            levels[depth].append(item)
            levels.append(item["replies"])
        return out
