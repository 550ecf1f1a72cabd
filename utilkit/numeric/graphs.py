"""Небольшие алгоритмы на графах и деревьях.

Принципы:
- Граф задаётся списками рёбер `edges_from[i] -> edges_to[i]` с вершинами,
  пронумерованными с 1, и списком значений (цветов) вершин `values`
  (`values[k]` принадлежит вершине k + 1).
- Кратчайшие пути ищутся поиском в ширину из всех вершин одного цвета сразу.
- Обходы двоичного дерева возвращают номера вершин списком, без печати.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterator, List, Optional, Sequence

from utilkit.infrastructure.logging import get_logger

logger = get_logger(__name__)

NO_PATH = -1


def _check_edges(edges_from: Sequence[int], edges_to: Sequence[int], n: int) -> None:
    if len(edges_from) != len(edges_to):
        raise ValueError(
            f"Списки рёбер разной длины: {len(edges_from)} и {len(edges_to)}"
        )
    for a, b in zip(edges_from, edges_to):
        if not (1 <= a <= n and 1 <= b <= n):
            raise ValueError(f"Ребро ({a}, {b}) вне диапазона вершин 1..{n}")


def adjacency(edges_from: Sequence[int], edges_to: Sequence[int], n: int) -> List[List[int]]:
    """Списки смежности неориентированного графа (индексы вершин с 0).

    Raises:
        ValueError: Если списки рёбер разной длины или ребро ссылается
            на несуществующую вершину.
    """
    _check_edges(edges_from, edges_to, n)
    adj: List[List[int]] = [[] for _ in range(n)]
    for a, b in zip(edges_from, edges_to):
        adj[a - 1].append(b - 1)
        adj[b - 1].append(a - 1)
    return adj


# ---------- Кратчайшие пути ----------
def find_shortest(
    value: int,
    edges_from: Sequence[int],
    edges_to: Sequence[int],
    values: Sequence[int],
) -> int:
    """Длина кратчайшего пути между двумя разными вершинами цвета `value`.

    Поиск в ширину стартует одновременно из всех вершин нужного цвета; каждая
    посещённая вершина помнит, из какого источника до неё дошли. Ребро между
    областями двух разных источников даёт путь длиной dist_a + dist_b + 1.

    Args:
        value: Цвет, вершины которого соединяются.
        edges_from: Начала рёбер (с 1).
        edges_to: Концы рёбер (с 1).
        values: Цвет каждой вершины.

    Returns:
        Длину пути в рёбрах или `NO_PATH` (-1), если вершин такого цвета
        меньше двух или они лежат в разных компонентах.
    """
    sources = [i for i, v in enumerate(values) if v == value]
    if len(sources) < 2:
        return NO_PATH

    adj = adjacency(edges_from, edges_to, len(values))
    origin: List[Optional[int]] = [None] * len(values)
    dist = [0] * len(values)
    queue: Deque[int] = deque()
    for i in sources:
        origin[i] = i
        queue.append(i)

    best = NO_PATH
    while queue:
        head = queue.popleft()
        # дальше пути только длиннее
        if best != NO_PATH and 2 * dist[head] + 1 >= best:
            break
        for nxt in adj[head]:
            if origin[nxt] is None:
                origin[nxt] = origin[head]
                dist[nxt] = dist[head] + 1
                queue.append(nxt)
            elif origin[nxt] != origin[head]:
                length = dist[head] + dist[nxt] + 1
                if best == NO_PATH or length < best:
                    best = length
    return best


def _shortest_by_value(
    edges_from: Sequence[int], edges_to: Sequence[int], values: Sequence[int]
) -> Dict[int, int]:
    lengths = {}
    for value in sorted(set(values)):
        length = find_shortest(value, edges_from, edges_to, values)
        if length > 0:
            lengths[value] = length
    return lengths


def find_shortest_any(edges_from: Sequence[int], edges_to: Sequence[int], values: Sequence[int]) -> int:
    """Кратчайший путь между двумя вершинами одного (любого) цвета; -1, если таких нет."""
    lengths = _shortest_by_value(edges_from, edges_to, values)
    if not lengths:
        return NO_PATH
    return min(lengths.values())


def find_shortest_value(edges_from: Sequence[int], edges_to: Sequence[int], values: Sequence[int]) -> int:
    """Цвет, для которого путь из `find_shortest_any` достигается; -1, если таких нет.

    При равных длинах возвращается меньший цвет.
    """
    lengths = _shortest_by_value(edges_from, edges_to, values)
    if not lengths:
        return NO_PATH
    return min(lengths, key=lambda v: (lengths[v], v))


# ---------- Дерево поиска в ширину ----------
@dataclass
class GraphNode:
    """Вершина графа с родителем и глубиной в дереве обхода в ширину."""

    id: int
    value: int
    adjacent: List[int] = field(default_factory=list)  # номера соседей (с 1)
    parent: Optional[int] = None
    depth: int = -1  # -1: вершина недостижима из корня


def build_node_tree(
    edges_from: Sequence[int], edges_to: Sequence[int], values: Sequence[int]
) -> List[GraphNode]:
    """Строит дерево обхода в ширину от вершины 1.

    Returns:
        Список вершин в порядке номеров. У корня `parent` равен None и
        `depth` равен 0.
    """
    n = len(values)
    adj = adjacency(edges_from, edges_to, n)
    nodes = [
        GraphNode(id=i + 1, value=values[i], adjacent=[a + 1 for a in adj[i]])
        for i in range(n)
    ]
    if not nodes:
        return nodes

    nodes[0].depth = 0
    queue: Deque[int] = deque([0])
    while queue:
        head = queue.popleft()
        for nxt in adj[head]:
            if nodes[nxt].depth < 0:
                nodes[nxt].parent = head + 1
                nodes[nxt].depth = nodes[head].depth + 1
                queue.append(nxt)
    return nodes


def format_node_tree(tree: Sequence[GraphNode]) -> str:
    """Текстовый вид списка вершин: `(id, value)` и соседи, ещё не выведенные выше."""
    if not tree:
        return " ** Empty list. **"
    lines = []
    listed = set()
    for node in tree:
        listed.add(node.id)
        rest = " ".join(f"({a})" for a in node.adjacent if a not in listed)
        lines.append(f"({node.id}, {node.value})\t{rest}".rstrip())
    return "\n".join(lines)


# ---------- Обходы двоичного дерева ----------
@dataclass
class TreeNode:
    id: int
    value: int
    left: Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None


def build_binary_tree(
    edges_from: Sequence[int], edges_to: Sequence[int], values: Sequence[int]
) -> Optional[TreeNode]:
    """Двоичное дерево с корнем в вершине 1.

    Ребро `a -> b` делает `b` левым потомком `a`, если левого ещё нет, иначе
    правым. Третий потомок заменяет правого (с предупреждением в логе).

    Returns:
        Корень или None для пустого списка вершин.
    """
    _check_edges(edges_from, edges_to, len(values))
    nodes = [TreeNode(i + 1, v) for i, v in enumerate(values)]
    for a, b in zip(edges_from, edges_to):
        parent, child = nodes[a - 1], nodes[b - 1]
        if parent.left is None:
            parent.left = child
        else:
            if parent.right is not None:
                logger.warning("Node %d already has two children, right child replaced", a)
            parent.right = child
    return nodes[0] if nodes else None


def _inorder(node: Optional[TreeNode]) -> Iterator[int]:
    if node is not None:
        yield from _inorder(node.left)
        yield node.id
        yield from _inorder(node.right)


def _preorder(node: Optional[TreeNode]) -> Iterator[int]:
    if node is not None:
        yield node.id
        yield from _preorder(node.left)
        yield from _preorder(node.right)


def _postorder(node: Optional[TreeNode]) -> Iterator[int]:
    if node is not None:
        yield from _postorder(node.left)
        yield from _postorder(node.right)
        yield node.id


def inorder_traversal(root: Optional[TreeNode]) -> List[int]:
    """Левое поддерево, вершина, правое поддерево (LNR)."""
    return list(_inorder(root))


def preorder_traversal(root: Optional[TreeNode]) -> List[int]:
    """Вершина, левое поддерево, правое поддерево (NLR)."""
    return list(_preorder(root))


def postorder_traversal(root: Optional[TreeNode]) -> List[int]:
    """Левое поддерево, правое поддерево, вершина (LRN)."""
    return list(_postorder(root))


_TRAVERSALS = {1: inorder_traversal, 2: preorder_traversal, 3: postorder_traversal}


def traversal(
    mode: int, edges_from: Sequence[int], edges_to: Sequence[int], values: Sequence[int]
) -> List[int]:
    """Строит двоичное дерево и обходит его.

    Args:
        mode: 1 — LNR, 2 — NLR, 3 — LRN.

    Raises:
        ValueError: Для неизвестного режима.
    """
    walk = _TRAVERSALS.get(mode)
    if walk is None:
        raise ValueError(f"Неизвестный режим обхода: {mode}")
    return walk(build_binary_tree(edges_from, edges_to, values))
