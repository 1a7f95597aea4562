"""
匹配问题数据结构定义
包含边、稀疏权重矩阵、求解状态和匹配结果的数据结构

数据结构特点:
1. 边: 规范化表示 (src < dst)
2. 权重矩阵: 以顶点对为键的稀疏字典存储，顶点编号从1开始
3. 求解状态: 统一不同求解后端的状态
4. 匹配结果: 不可变对象，包含求解状态、目标值和配偶数组
"""

import math
import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Tuple, Union

import numpy as np
import scipy.sparse as sp

logger = logging.getLogger(__name__)

# 未匹配顶点的哨兵值
UNMATCHED = -1


class LPMatchingError(Exception):
    """lpmatching 基础异常"""


class DimensionMismatchError(LPMatchingError, ValueError):
    """权重矩阵维度与顶点数不一致"""


class FractionalSolutionError(LPMatchingError):
    """整数模型的解中出现了容差带之外的分数值"""

    def __init__(self, edge: Tuple[int, int], value: float, tolerance: float):
        self.edge = edge
        self.value = value
        self.tolerance = tolerance
        super().__init__(
            f"边 {edge} 的解值 {value:.6g} 位于 ({tolerance:g}, {1 - tolerance:g}) 之间，不是整数解"
        )


class Edge(NamedTuple):
    """无向边，规范化为 src < dst"""
    src: int
    dst: int

    @classmethod
    def canonical(cls, u: int, v: int) -> "Edge":
        return cls(u, v) if u <= v else cls(v, u)

    def other(self, vertex: int) -> int:
        """返回边的另一个端点"""
        if vertex == self.src:
            return self.dst
        if vertex == self.dst:
            return self.src
        raise ValueError(f"顶点 {vertex} 不是边 {tuple(self)} 的端点")


class SolveStatus(Enum):
    """求解状态枚举"""
    OPTIMAL = "optimal"                        # 最优解
    OPTIMAL_INACCURATE = "optimal_inaccurate"  # 最优解（精度不足）
    INFEASIBLE = "infeasible"                  # 不可行
    UNBOUNDED = "unbounded"                    # 无界
    TIME_LIMIT = "time_limit"                  # 达到时间/迭代限制
    ERROR = "error"                            # 求解器错误
    NOT_SOLVED = "not_solved"                  # 尚未求解

    @property
    def has_solution(self) -> bool:
        """是否可以读取变量取值"""
        return self in (SolveStatus.OPTIMAL, SolveStatus.OPTIMAL_INACCURATE)


WeightInput = Union["WeightMatrix", np.ndarray, sp.spmatrix, Mapping[Tuple[int, int], float]]


class WeightMatrix:
    """
    稀疏权重矩阵

    概念上为 n×n 矩阵，(i, j) 处为边 {i, j} 的权重。
    只存储非零元素，键为从1开始的顶点对，避免大规模稀疏图的平方级内存占用。
    """

    def __init__(self, n: int, entries: Optional[Mapping[Tuple[int, int], float]] = None):
        if n < 0:
            raise ValueError(f"顶点数不能为负: {n}")
        self.n = n
        self._entries: Dict[Tuple[int, int], float] = {}

        for (i, j), value in (entries or {}).items():
            self[i, j] = value

    # ------------------------------------------------------------------
    # 构造
    # ------------------------------------------------------------------
    @classmethod
    def from_dense(cls, matrix, n: Optional[int] = None) -> "WeightMatrix":
        """从稠密矩阵构造（行列下标从0开始，对应顶点 i+1）"""
        array = np.asarray(matrix, dtype=float)
        if array.size == 0 and not n:
            return cls(0)
        if array.ndim != 2:
            raise DimensionMismatchError(f"权重矩阵必须是二维的，实际维度: {array.ndim}")
        if n is None:
            n = array.shape[0]
        if array.shape != (n, n):
            raise DimensionMismatchError(f"权重矩阵形状 {array.shape} 与顶点数 {n} 不匹配")

        weights = cls(n)
        rows, cols = np.nonzero(array)
        for r, c in zip(rows, cols):
            weights._entries[(int(r) + 1, int(c) + 1)] = float(array[r, c])
        return weights

    @classmethod
    def from_sparse(cls, matrix: sp.spmatrix, n: Optional[int] = None) -> "WeightMatrix":
        """从scipy稀疏矩阵构造"""
        coo = sp.coo_matrix(matrix)
        if n is None:
            n = coo.shape[0]
        if coo.shape != (n, n):
            raise DimensionMismatchError(f"权重矩阵形状 {coo.shape} 与顶点数 {n} 不匹配")

        weights = cls(n)
        for r, c, value in zip(coo.row, coo.col, coo.data):
            if value != 0:
                key = (int(r) + 1, int(c) + 1)
                # COO 允许重复项，按 scipy 语义累加
                weights._entries[key] = weights._entries.get(key, 0.0) + float(value)
        return weights

    @classmethod
    def coerce(cls, weights: WeightInput, n: int) -> "WeightMatrix":
        """
        将各种权重输入转换为 WeightMatrix

        WeightMatrix 原样返回（后续原地归一化），其余输入复制为新对象。

        Args:
            weights: WeightMatrix、numpy数组、scipy稀疏矩阵或 {(i, j): w} 字典
            n: 图的顶点数

        Returns:
            WeightMatrix 对象
        """
        if isinstance(weights, WeightMatrix):
            if weights.n != n:
                raise DimensionMismatchError(f"权重矩阵维度 {weights.n} 与顶点数 {n} 不匹配")
            return weights
        if sp.issparse(weights):
            return cls.from_sparse(weights, n)
        if isinstance(weights, Mapping):
            return cls(n, weights)
        return cls.from_dense(weights, n)

    # ------------------------------------------------------------------
    # 访问
    # ------------------------------------------------------------------
    def _check_key(self, i: int, j: int):
        if not (1 <= i <= self.n and 1 <= j <= self.n):
            raise DimensionMismatchError(f"顶点对 ({i}, {j}) 超出范围 1..{self.n}")

    def __getitem__(self, key: Tuple[int, int]) -> float:
        i, j = key
        self._check_key(i, j)
        return self._entries.get((i, j), 0.0)

    def __setitem__(self, key: Tuple[int, int], value: float):
        i, j = key
        self._check_key(i, j)
        if value == 0:
            self._entries.pop((i, j), None)
        else:
            self._entries[(i, j)] = float(value)

    def __contains__(self, key) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return iter(list(self._entries))

    def __eq__(self, other) -> bool:
        if not isinstance(other, WeightMatrix):
            return NotImplemented
        return self.n == other.n and self._entries == other._entries

    def __repr__(self) -> str:
        return f"WeightMatrix(n={self.n}, nnz={len(self._entries)})"

    def items(self) -> List[Tuple[Tuple[int, int], float]]:
        """非零元素列表（快照，可在遍历时修改矩阵）"""
        return list(self._entries.items())

    def copy(self) -> "WeightMatrix":
        return WeightMatrix(self.n, self._entries)

    def to_dense(self) -> np.ndarray:
        """转换为 n×n numpy 数组（下标从0开始）"""
        dense = np.zeros((self.n, self.n))
        for (i, j), value in self._entries.items():
            dense[i - 1, j - 1] = value
        return dense

    def to_sparse(self) -> sp.csr_matrix:
        """转换为 scipy CSR 稀疏矩阵"""
        if not self._entries:
            return sp.csr_matrix((self.n, self.n))
        keys = list(self._entries)
        rows = [i - 1 for i, _ in keys]
        cols = [j - 1 for _, j in keys]
        data = [self._entries[k] for k in keys]
        return sp.csr_matrix((data, (rows, cols)), shape=(self.n, self.n))


@dataclass(frozen=True)
class MatchingResult:
    """
    最大权匹配结果

    mate[i-1] 为顶点 i 的配偶，未匹配时为 UNMATCHED。
    """
    status: SolveStatus
    cost: float
    mate: Tuple[int, ...]
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def is_optimal(self) -> bool:
        return self.status.has_solution

    @property
    def n_vertices(self) -> int:
        return len(self.mate)

    @property
    def cardinality(self) -> int:
        """匹配边数"""
        return sum(1 for partner in self.mate if partner != UNMATCHED) // 2

    def partner(self, vertex: int) -> int:
        return self.mate[vertex - 1]

    def matched_pairs(self) -> List[Tuple[int, int]]:
        """匹配边列表，每条边以 (u, v), u < v 表示"""
        return [
            (i, partner)
            for i, partner in enumerate(self.mate, start=1)
            if partner != UNMATCHED and i < partner
        ]

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            'status': self.status.value,
            'cost': None if math.isnan(self.cost) else self.cost,
            'mate': list(self.mate),
            'matched_pairs': [list(pair) for pair in self.matched_pairs()],
            'cardinality': self.cardinality,
            'metadata': dict(self.metadata),
        }
