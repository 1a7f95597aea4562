"""
求解后端模块

主要组件:
- base: 求解器能力接口 MatchingSolver
- cvxpy_solver: CVXPY后端
- scipy_solver: scipy.optimize.milp 后端
"""

from typing import Dict, Type

from ..models.data_structures import LPMatchingError
from .base import MatchingSolver
from .cvxpy_solver import CvxpySolver
from .scipy_solver import ScipyMilpSolver

SOLVER_REGISTRY: Dict[str, Type[MatchingSolver]] = {
    'cvxpy': CvxpySolver,
    'scipy': ScipyMilpSolver,
}


class UnknownSolverError(LPMatchingError, KeyError):
    """未注册的求解后端"""


def create_solver(name: str = 'cvxpy', **kwargs) -> MatchingSolver:
    """
    按名称创建求解后端

    Args:
        name: 后端名称 ('cvxpy' 或 'scipy')
        **kwargs: 传递给后端构造函数的参数

    Returns:
        MatchingSolver 实例
    """
    try:
        solver_class = SOLVER_REGISTRY[name.lower()]
    except KeyError:
        raise UnknownSolverError(
            f"未知的求解后端: {name}，可选: {sorted(SOLVER_REGISTRY)}"
        ) from None
    return solver_class(**kwargs)


__all__ = [
    'MatchingSolver',
    'CvxpySolver',
    'ScipyMilpSolver',
    'SOLVER_REGISTRY',
    'UnknownSolverError',
    'create_solver',
]
