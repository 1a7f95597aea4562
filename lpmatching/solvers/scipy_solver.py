"""
SciPy求解后端
直接调用 scipy.optimize.milp (HiGHS) 求解LP/MILP
"""

import logging
from typing import Dict, Optional

import numpy as np
import scipy.sparse as sp
from scipy.optimize import Bounds, LinearConstraint, milp

from ..models.data_structures import SolveStatus
from .base import MatchingSolver

logger = logging.getLogger(__name__)

# scipy.optimize.milp 返回状态码
SCIPY_STATUS_MAP = {
    0: SolveStatus.OPTIMAL,
    1: SolveStatus.TIME_LIMIT,
    2: SolveStatus.INFEASIBLE,
    3: SolveStatus.UNBOUNDED,
    4: SolveStatus.ERROR,
}


class ScipyMilpSolver(MatchingSolver):
    """
    基于 scipy.optimize.milp 的求解后端

    模型以稀疏约束矩阵形式传入，无整数变量时即为LP。
    """

    name = "scipy"

    def __init__(self, time_limit: Optional[float] = None, verbose: bool = False,
                 mip_rel_gap: Optional[float] = None, **options):
        """
        初始化求解后端

        Args:
            time_limit: 求解时间限制 (秒)
            verbose: 是否输出 HiGHS 日志
            mip_rel_gap: MILP相对间隙
            **options: 传递给 milp 的其他 options
        """
        self.mip_rel_gap = mip_rel_gap
        self.options = options
        self.last_result = None
        super().__init__(time_limit=time_limit, verbose=verbose)

    def to_standard_form(self) -> Dict:
        """
        转换为 milp 的矩阵形式

        Returns:
            包含 c, integrality, bounds, constraints 的字典
        """
        index = {key: k for k, key in enumerate(self._keys)}
        n_vars = len(self._keys)

        c = np.zeros(n_vars)
        for key, coeff in self._objective.items():
            c[index[key]] = coeff
        # milp 只做最小化
        if self._objective_sense == "maximize":
            c = -c

        integrality = np.array([1 if self._integer[key] else 0 for key in self._keys])

        lower = np.array([
            -np.inf if self._bounds[key][0] is None else self._bounds[key][0] for key in self._keys
        ], dtype=float)
        upper = np.array([
            np.inf if self._bounds[key][1] is None else self._bounds[key][1] for key in self._keys
        ], dtype=float)

        constraints = None
        rows = [row for row in self._constraints if row['coefficients']]
        if rows:
            A = sp.lil_matrix((len(rows), n_vars))
            lb = np.full(len(rows), -np.inf)
            ub = np.full(len(rows), np.inf)
            for r, row in enumerate(rows):
                for key, coeff in row['coefficients'].items():
                    A[r, index[key]] = coeff
                if row['sense'] in ("<=", "=="):
                    ub[r] = row['rhs']
                if row['sense'] in (">=", "=="):
                    lb[r] = row['rhs']
            constraints = LinearConstraint(A.tocsr(), lb, ub)

        return {
            'c': c,
            'integrality': integrality,
            'bounds': Bounds(lower, upper),
            'constraints': constraints,
        }

    def _solve(self) -> SolveStatus:
        form = self.to_standard_form()

        options = dict(self.options)
        options['disp'] = self.verbose
        if self.time_limit is not None:
            options['time_limit'] = self.time_limit
        if self.mip_rel_gap is not None:
            options['mip_rel_gap'] = self.mip_rel_gap

        try:
            result = milp(
                c=form['c'],
                integrality=form['integrality'],
                bounds=form['bounds'],
                constraints=form['constraints'],
                options=options,
            )
        except ValueError as e:
            logger.error(f"求解失败: {e}")
            return SolveStatus.ERROR

        self.last_result = result
        status = SCIPY_STATUS_MAP.get(result.status, SolveStatus.ERROR)
        if status == SolveStatus.TIME_LIMIT:
            logger.warning(f"达到时间限制: {result.message}")
        if not status.has_solution:
            logger.debug(f"milp 返回: {result.message}")
            return status

        objective = float(result.fun)
        self._objective_value = -objective if self._objective_sense == "maximize" else objective
        for key, value in zip(self._keys, result.x):
            self._solution[key] = float(value)
        return status
