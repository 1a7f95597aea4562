"""
求解结果提取器
将求解器返回的边变量取值转换为配偶数组
"""

import logging
import math
from typing import Hashable, Mapping

from .data_structures import (
    UNMATCHED,
    FractionalSolutionError,
    MatchingResult,
    SolveStatus,
)

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-5


class SolutionExtractor:
    """
    求解结果提取器

    取值 >= 1 - tolerance 的边视为选中；落在 (tolerance, 1 - tolerance)
    之间的分数值在严格模式下对整数模型抛出 FractionalSolutionError，
    其余情况按未选中处理并记录警告。

    只有 OPTIMAL / OPTIMAL_INACCURATE 会读取变量取值：TIME_LIMIT 时即使求解器
    已有可行解也返回空匹配；OPTIMAL_INACCURATE 使用相同的容差判定。
    """

    def __init__(self, tolerance: float = DEFAULT_TOLERANCE, strict_integrality: bool = True):
        if not 0 < tolerance < 0.5:
            raise ValueError(f"容差必须位于 (0, 0.5) 之间: {tolerance}")
        self.tolerance = tolerance
        self.strict_integrality = strict_integrality

    def extract(self, solution: Mapping[Hashable, float], n: int,
                objective_value: float, status: SolveStatus = SolveStatus.OPTIMAL,
                is_integer: bool = False) -> MatchingResult:
        """
        提取匹配结果

        Args:
            solution: {边: 取值}，边为 (u, v) 二元组
            n: 顶点数
            objective_value: 求解器报告的目标值
            status: 求解状态
            is_integer: 模型是否为整数模型

        Returns:
            MatchingResult 对象
        """
        mate = [UNMATCHED] * n

        if not status.has_solution:
            logger.error(f"求解未得到最优解 ({status.value})，返回空匹配")
            return MatchingResult(status=status, cost=math.nan, mate=tuple(mate))

        fractional = 0
        for edge, value in solution.items():
            u, v = edge
            if value >= 1 - self.tolerance:
                mate[u - 1] = v
                mate[v - 1] = u
            elif value > self.tolerance:
                if self.strict_integrality and is_integer:
                    raise FractionalSolutionError((u, v), value, self.tolerance)
                fractional += 1
                logger.warning(f"边 ({u}, {v}) 取分数值 {value:.6g}，按未选中处理")

        cost = float(objective_value) if objective_value is not None else math.nan
        return MatchingResult(
            status=status,
            cost=cost,
            mate=tuple(mate),
            metadata={'fractional_variables': fractional} if fractional else {},
        )
