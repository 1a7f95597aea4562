"""
权重矩阵归一化器
在建模之前根据图的边集清洗用户给定的权重矩阵

处理规则:
1. 对 i > j 的顶点对，若 w[i,j] > 0 且 w[j,i] < w[i,j]，令 w[j,i] = w[i,j]
2. 不属于边集的顶点对 (含 i == j) 权重置零
3. 每条边 (src, dst) 令 w[dst,src] = w[src,dst]，保证对称
"""

import logging
from typing import Optional

from .data_structures import Edge, WeightInput, WeightMatrix

logger = logging.getLogger(__name__)


def default_weights(graph, edges=None) -> WeightMatrix:
    """
    默认权重：每条边 (src, dst) 处权重为1，其余为0

    此时最大权匹配即最大基数匹配。
    """
    weights = WeightMatrix(graph.nv)
    for u, v in (graph.edges() if edges is None else edges):
        weights[u, v] = 1
    return weights


class WeightMatrixNormalizer:
    """权重矩阵归一化器，原地修改权重矩阵"""

    def __init__(self, graph, edges=None):
        """
        Args:
            graph: 图对象
            edges: 已取出的边列表，None 时调用 graph.edges()
        """
        self.graph = graph
        self.edge_list = [Edge.canonical(*e) for e in (graph.edges() if edges is None else edges)]
        self.edge_set = set(self.edge_list)

    def normalize(self, weights: Optional[WeightInput] = None) -> WeightMatrix:
        """
        归一化权重矩阵

        Args:
            weights: 原始权重；None 时使用默认权重

        Returns:
            归一化后的 WeightMatrix（传入 WeightMatrix 时为同一对象）
        """
        n = self.graph.nv
        if weights is None:
            logger.debug("未给定权重，使用单位权重（最大基数匹配）")
            weights = default_weights(self.graph, self.edge_list)
        else:
            weights = WeightMatrix.coerce(weights, n)

        # 1. 正的较大值向对称位置传播
        for (i, j), value in weights.items():
            if i > j and value > 0 and weights[j, i] < value:
                weights[j, i] = value

        # 2. 非边元素置零
        removed = 0
        for i, j in weights:
            if Edge.canonical(i, j) not in self.edge_set:
                weights[i, j] = 0
                removed += 1
        if removed:
            logger.debug(f"清除了 {removed} 个非边权重")

        # 3. 以 (src, dst) 处的值为准保证对称
        for e in self.edge_set:
            weights[e.dst, e.src] = weights[e.src, e.dst]

        return weights
