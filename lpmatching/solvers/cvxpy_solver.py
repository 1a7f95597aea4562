"""
CVXPY求解后端
将通用线性模型转换为CVXPY问题并调用其支持的LP/MILP求解器
"""

import logging
import math
from typing import Dict, List, Optional

import cvxpy as cp
import numpy as np

from ..models.data_structures import SolveStatus
from .base import MatchingSolver

logger = logging.getLogger(__name__)

# 求解器优先级：单纯形类求解器给出顶点解，二分图松弛才能保证整数性
MILP_SOLVER_PREFERENCE = ['HIGHS', 'SCIPY', 'GLPK_MI', 'CBC', 'GUROBI', 'MOSEK']
LP_SOLVER_PREFERENCE = ['HIGHS', 'SCIPY', 'GLPK', 'CLARABEL', 'ECOS']

CVXPY_STATUS_MAP = {
    "optimal": SolveStatus.OPTIMAL,
    "optimal_inaccurate": SolveStatus.OPTIMAL_INACCURATE,
    "infeasible": SolveStatus.INFEASIBLE,
    "infeasible_inaccurate": SolveStatus.INFEASIBLE,
    "infeasible_or_unbounded": SolveStatus.INFEASIBLE,
    "unbounded": SolveStatus.UNBOUNDED,
    "unbounded_inaccurate": SolveStatus.UNBOUNDED,
    "user_limit": SolveStatus.TIME_LIMIT,
    "solver_error": SolveStatus.ERROR,
}


class CvxpySolver(MatchingSolver):
    """
    基于CVXPY的求解后端

    每个变量对应一个标量 cp.Variable，整数变量使用 integer=True。
    """

    name = "cvxpy"

    def __init__(self, solver: Optional[str] = None, time_limit: Optional[float] = None,
                 verbose: bool = False, **solver_options):
        """
        初始化求解后端

        Args:
            solver: CVXPY求解器名称 (如 'SCIPY', 'HIGHS', 'GLPK_MI')，None 时自动选择
            time_limit: 求解时间限制 (秒)，仅对支持的求解器生效
            verbose: 是否输出求解器日志
            **solver_options: 传递给 problem.solve 的其他参数
        """
        self.solver = solver
        self.solver_options = solver_options
        self.problem: Optional[cp.Problem] = None
        super().__init__(time_limit=time_limit, verbose=verbose)

    def reset(self):
        super().reset()
        self.problem = None

    def select_solver(self) -> Optional[str]:
        """根据模型类型和已安装的求解器选择CVXPY求解器"""
        if self.solver:
            return self.solver.upper()

        installed = set(cp.installed_solvers())
        preference = MILP_SOLVER_PREFERENCE if self.is_integer else LP_SOLVER_PREFERENCE
        for name in preference:
            if name in installed:
                return name

        # 交给CVXPY自行选择
        logger.warning(f"未找到首选求解器，已安装: {sorted(installed)}")
        return None

    def build_problem(self) -> cp.Problem:
        """构建CVXPY问题对象"""
        variables: Dict = {}
        constraints: List = []

        for key in self._keys:
            var = cp.Variable(integer=self._integer[key], name=_variable_name(key))
            variables[key] = var
            lower, upper = self._bounds[key]
            if lower is not None:
                constraints.append(var >= lower)
            if upper is not None:
                constraints.append(var <= upper)

        for row in self._constraints:
            if not row['coefficients']:
                continue
            lhs = sum(coeff * variables[key] for key, coeff in row['coefficients'].items())
            if row['sense'] == "<=":
                constraints.append(lhs <= row['rhs'])
            elif row['sense'] == ">=":
                constraints.append(lhs >= row['rhs'])
            else:
                constraints.append(lhs == row['rhs'])

        expr = sum(coeff * variables[key] for key, coeff in self._objective.items())
        if self._objective_sense == "maximize":
            objective = cp.Maximize(expr)
        else:
            objective = cp.Minimize(expr)

        self._variables = variables
        return cp.Problem(objective, constraints)

    def _solve(self) -> SolveStatus:
        self.problem = self.build_problem()
        solver = self.select_solver()

        options = dict(self.solver_options)
        if self.time_limit is not None and solver == 'HIGHS':
            options.setdefault('time_limit', self.time_limit)
        elif self.time_limit is not None and solver == 'SCIPY':
            scipy_options = dict(options.get('scipy_options', {}))
            scipy_options.setdefault('time_limit', self.time_limit)
            options['scipy_options'] = scipy_options

        logger.info(f"使用CVXPY求解器: {solver or '自动'}")
        try:
            self.problem.solve(solver=solver, verbose=self.verbose, **options)
        except cp.SolverError as e:
            logger.error(f"求解失败: {e}")
            return SolveStatus.ERROR

        status = CVXPY_STATUS_MAP.get(self.problem.status, SolveStatus.ERROR)
        if not status.has_solution:
            return status

        value = self.problem.value
        self._objective_value = float(value) if value is not None else math.nan
        for key, var in self._variables.items():
            self._solution[key] = scalar(var.value) if var.value is not None else math.nan
        return status


def _variable_name(key) -> str:
    if isinstance(key, tuple):
        return "x_" + "_".join(str(part) for part in key)
    return f"x_{key}"


def scalar(value) -> float:
    """CVXPY取值转换为Python浮点数"""
    return float(np.asarray(value).item())
