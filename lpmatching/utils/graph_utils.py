"""
图操作工具函数
提供匹配问题使用的无向图抽象

功能模块:
1. 顶点编号为 1..n 的无向图
2. 稳定、规范化 (src < dst) 的边迭代顺序
3. 邻接查询和二分性检测
4. 与 networkx 图的相互转换
"""

import logging
from typing import Iterable, List, Optional, Tuple

import networkx as nx

from ..models.data_structures import Edge

logger = logging.getLogger(__name__)


class MatchingGraph:
    """
    匹配问题的无向图

    顶点为 1..n，内部以 networkx.Graph 存储。核心算法只使用
    nv / edges() / neighbors() / is_bipartite() 四个接口，
    具有相同接口的其他图对象同样可以直接使用。
    """

    def __init__(self, n_vertices: int, edges: Optional[Iterable[Tuple[int, int]]] = None):
        """
        初始化图

        Args:
            n_vertices: 顶点数
            edges: 边列表，每条边为 (u, v)
        """
        if n_vertices < 0:
            raise ValueError(f"顶点数不能为负: {n_vertices}")

        self._graph = nx.Graph()
        self._graph.add_nodes_from(range(1, n_vertices + 1))
        self._edge_cache: Optional[List[Edge]] = None

        for u, v in edges or []:
            self.add_edge(u, v)

    @classmethod
    def from_networkx(cls, graph: nx.Graph) -> "MatchingGraph":
        """
        从 networkx 图构造

        节点若恰为 1..n 则保留编号，否则按排序后的顺序重新编号为 1..n，
        原始节点记录在 'label' 属性中。
        """
        if graph.is_directed():
            raise ValueError("只支持无向图")

        nodes = list(graph.nodes)
        n = len(nodes)
        if set(nodes) == set(range(1, n + 1)):
            mapping = {node: node for node in nodes}
        else:
            try:
                ordered = sorted(nodes)
            except TypeError:
                ordered = nodes
            mapping = {node: k for k, node in enumerate(ordered, start=1)}
            logger.debug(f"networkx 节点重新编号为 1..{n}")

        result = cls(n)
        for node, k in mapping.items():
            result._graph.nodes[k]['label'] = node
        for u, v in graph.edges:
            result.add_edge(mapping[u], mapping[v])
        return result

    def to_networkx(self) -> nx.Graph:
        """返回内部 networkx 图的副本"""
        return self._graph.copy()

    def add_edge(self, u: int, v: int):
        """添加无向边"""
        if u == v:
            raise ValueError(f"不允许自环: ({u}, {v})")
        for vertex in (u, v):
            if not (1 <= vertex <= self.nv):
                raise ValueError(f"顶点 {vertex} 超出范围 1..{self.nv}")
        self._graph.add_edge(u, v)
        self._edge_cache = None

    @property
    def nv(self) -> int:
        """顶点数"""
        return self._graph.number_of_nodes()

    @property
    def ne(self) -> int:
        """边数"""
        return self._graph.number_of_edges()

    def vertices(self) -> range:
        return range(1, self.nv + 1)

    def edges(self) -> List[Edge]:
        """规范化边列表，按 (src, dst) 排序，顺序稳定"""
        if self._edge_cache is None:
            self._edge_cache = sorted(Edge.canonical(u, v) for u, v in self._graph.edges)
        return list(self._edge_cache)

    def has_edge(self, u: int, v: int) -> bool:
        return self._graph.has_edge(u, v)

    def neighbors(self, v: int) -> List[int]:
        """顶点 v 的邻居（升序）"""
        return sorted(self._graph.neighbors(v))

    def degree(self, v: int) -> int:
        return self._graph.degree(v)

    def is_bipartite(self) -> bool:
        """二分性检测"""
        return nx.is_bipartite(self._graph)

    def __repr__(self) -> str:
        return f"MatchingGraph(nv={self.nv}, ne={self.ne})"


def path_graph(n: int) -> MatchingGraph:
    """路径图 1-2-...-n"""
    return MatchingGraph(n, [(i, i + 1) for i in range(1, n)])


def cycle_graph(n: int) -> MatchingGraph:
    """环图 1-2-...-n-1"""
    if n < 3:
        raise ValueError("环图至少需要3个顶点")
    return MatchingGraph(n, [(i, i % n + 1) for i in range(1, n + 1)])


def complete_bipartite_graph(n_left: int, n_right: int) -> MatchingGraph:
    """完全二分图，左侧顶点 1..n_left，右侧顶点 n_left+1..n_left+n_right"""
    left = range(1, n_left + 1)
    right = range(n_left + 1, n_left + n_right + 1)
    return MatchingGraph(n_left + n_right, [(u, v) for u in left for v in right])
