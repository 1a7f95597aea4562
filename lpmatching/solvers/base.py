"""
求解器能力接口
建模层只通过该接口声明变量、目标函数和约束，任何求解后端都可以替换
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, List, Mapping, Optional

from ..models.data_structures import SolveStatus

logger = logging.getLogger(__name__)

SENSES = ("<=", ">=", "==")


class MatchingSolver(ABC):
    """
    线性/整数规划求解器抽象基类

    一个实例同时只持有一个模型；并发求解时每个线程使用独立实例。
    """

    name = "abstract"

    def __init__(self, time_limit: Optional[float] = None, verbose: bool = False):
        self.time_limit = time_limit
        self.verbose = verbose
        self.reset()

    def reset(self):
        """清空模型"""
        self._keys: List[Hashable] = []
        self._integer: Dict[Hashable, bool] = {}
        self._bounds: Dict[Hashable, tuple] = {}
        self._objective: Dict[Hashable, float] = {}
        self._objective_sense = "maximize"
        self._constraints: List[Dict[str, Any]] = []
        self._status = SolveStatus.NOT_SOLVED
        self._objective_value = math.nan
        self._solution: Dict[Hashable, float] = {}

    # ------------------------------------------------------------------
    # 建模
    # ------------------------------------------------------------------
    def add_variable(self, key: Hashable, integer: bool = False,
                     lower: float = 0.0, upper: Optional[float] = None):
        """声明一个决策变量"""
        if key in self._integer:
            raise ValueError(f"变量 {key} 重复声明")
        self._keys.append(key)
        self._integer[key] = integer
        self._bounds[key] = (lower, upper)

    def set_objective(self, coefficients: Mapping[Hashable, float], sense: str = "maximize"):
        """设置线性目标函数"""
        if sense not in ("maximize", "minimize"):
            raise ValueError(f"未知的目标方向: {sense}")
        self._check_keys(coefficients)
        self._objective = dict(coefficients)
        self._objective_sense = sense

    def add_constraint(self, coefficients: Mapping[Hashable, float], sense: str = "<=",
                       rhs: float = 0.0, name: Optional[str] = None):
        """添加线性约束 Σ a_k x_k (sense) rhs"""
        if sense not in SENSES:
            raise ValueError(f"未知的约束方向: {sense}")
        self._check_keys(coefficients)
        self._constraints.append({
            'coefficients': dict(coefficients),
            'sense': sense,
            'rhs': float(rhs),
            'name': name or f"c{len(self._constraints)}",
        })

    def _check_keys(self, coefficients: Mapping[Hashable, float]):
        unknown = [k for k in coefficients if k not in self._integer]
        if unknown:
            raise KeyError(f"未声明的变量: {unknown[:5]}")

    # ------------------------------------------------------------------
    # 求解
    # ------------------------------------------------------------------
    def solve(self) -> SolveStatus:
        """求解当前模型，返回求解状态"""
        logger.info(f"[{self.name}] 求解: {self.n_variables} 个变量, "
                    f"{self.n_constraints} 个约束, 整数模型: {self.is_integer}")
        self._status = SolveStatus.NOT_SOLVED
        self._objective_value = math.nan
        self._solution = {}

        self._status = self._solve()

        if self._status.has_solution:
            logger.info(f"[{self.name}] 求解完成: {self._status.value}, 目标值 = {self._objective_value:.6g}")
        else:
            logger.error(f"[{self.name}] 求解状态异常: {self._status.value}")
        return self._status

    @abstractmethod
    def _solve(self) -> SolveStatus:
        """
        后端求解实现

        成功时须填充 self._solution 和 self._objective_value。
        """

    # ------------------------------------------------------------------
    # 结果
    # ------------------------------------------------------------------
    @property
    def status(self) -> SolveStatus:
        return self._status

    @property
    def objective_value(self) -> float:
        return self._objective_value

    def value(self, key: Hashable) -> float:
        """读取单个变量的取值，未求解时为 nan"""
        if key not in self._integer:
            raise KeyError(f"未声明的变量: {key}")
        return self._solution.get(key, math.nan)

    def values(self) -> Dict[Hashable, float]:
        """全部变量取值"""
        return {key: self.value(key) for key in self._keys}

    # ------------------------------------------------------------------
    # 统计
    # ------------------------------------------------------------------
    @property
    def n_variables(self) -> int:
        return len(self._keys)

    @property
    def n_constraints(self) -> int:
        return len(self._constraints)

    @property
    def is_integer(self) -> bool:
        return any(self._integer.values())

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(variables={self.n_variables}, "
                f"constraints={self.n_constraints}, status={self._status.value})")
