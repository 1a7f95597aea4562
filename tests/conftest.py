"""
测试公共夹具
"""

import pytest

from lpmatching.models.data_structures import SolveStatus
from lpmatching.solvers.base import MatchingSolver
from lpmatching.utils.graph_utils import MatchingGraph


class FixedSolver(MatchingSolver):
    """返回预设取值的求解后端，用于在不调用真实求解器时测试建模和提取逻辑"""

    name = "fixed"

    def __init__(self, assignment=None, status=SolveStatus.OPTIMAL, objective=None):
        self.assignment = assignment or {}
        self.preset_status = status
        self.preset_objective = objective
        self.solve_calls = 0
        super().__init__()

    def _solve(self):
        self.solve_calls += 1
        if not self.preset_status.has_solution:
            return self.preset_status
        for key in self._keys:
            self._solution[key] = float(self.assignment.get(tuple(key), 0.0))
        if self.preset_objective is None:
            self._objective_value = sum(
                coeff * self._solution[key] for key, coeff in self._objective.items()
            )
        else:
            self._objective_value = self.preset_objective
        return self.preset_status


@pytest.fixture
def triangle():
    """三角形 1-2-3"""
    return MatchingGraph(3, [(1, 2), (2, 3), (1, 3)])


@pytest.fixture
def path4():
    """路径 1-2-3-4"""
    return MatchingGraph(4, [(1, 2), (2, 3), (3, 4)])


@pytest.fixture
def bipartite_2x2():
    """二分图 {1,2} x {3,4}"""
    return MatchingGraph(4, [(1, 3), (1, 4), (2, 3), (2, 4)])


@pytest.fixture
def fixed_solver():
    """FixedSolver 构造函数"""
    return FixedSolver
