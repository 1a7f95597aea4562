"""
求解结果提取测试
"""

import math

import pytest

from lpmatching.models.data_structures import (
    UNMATCHED,
    Edge,
    FractionalSolutionError,
    SolveStatus,
)
from lpmatching.models.extractor import DEFAULT_TOLERANCE, SolutionExtractor


class TestSolutionExtractor:
    """测试配偶数组提取"""

    @pytest.fixture
    def extractor(self):
        return SolutionExtractor()

    def test_default_tolerance(self, extractor):
        assert extractor.tolerance == DEFAULT_TOLERANCE == 1e-5

    def test_selected_edges_set_both_mates(self, extractor):
        solution = {Edge(1, 2): 0.0, Edge(2, 3): 1.0, Edge(3, 4): 0.0}
        result = extractor.extract(solution, 4, 5.0)
        assert result.mate == (UNMATCHED, 3, 2, UNMATCHED)
        assert result.cost == 5.0
        assert result.status == SolveStatus.OPTIMAL

    def test_tolerance_absorbs_rounding(self, extractor):
        solution = {Edge(1, 2): 1 - 1e-7, Edge(3, 4): 1e-9}
        result = extractor.extract(solution, 4, 1.0)
        assert result.mate == (2, 1, UNMATCHED, UNMATCHED)

    def test_value_below_threshold_not_selected(self, extractor):
        solution = {Edge(1, 2): 1 - 1e-3}
        result = extractor.extract(solution, 2, 1.0, is_integer=False)
        assert result.mate == (UNMATCHED, UNMATCHED)
        assert result.metadata['fractional_variables'] == 1

    def test_configurable_tolerance(self):
        extractor = SolutionExtractor(tolerance=1e-2)
        result = extractor.extract({Edge(1, 2): 0.995}, 2, 1.0)
        assert result.mate == (2, 1)

    def test_invalid_tolerance(self):
        with pytest.raises(ValueError):
            SolutionExtractor(tolerance=0)
        with pytest.raises(ValueError):
            SolutionExtractor(tolerance=0.5)

    def test_fractional_value_raises_for_integer_model(self, extractor):
        with pytest.raises(FractionalSolutionError) as excinfo:
            extractor.extract({Edge(1, 2): 0.5}, 2, 0.5, is_integer=True)
        assert excinfo.value.edge == (1, 2)
        assert excinfo.value.value == 0.5

    def test_fractional_value_dropped_when_not_strict(self):
        extractor = SolutionExtractor(strict_integrality=False)
        result = extractor.extract({Edge(1, 2): 0.5, Edge(2, 3): 0.5}, 3, 1.0, is_integer=True)
        assert result.mate == (UNMATCHED,) * 3
        assert result.metadata['fractional_variables'] == 2

    def test_non_optimal_status_is_reported(self, extractor):
        result = extractor.extract({Edge(1, 2): 1.0}, 2, 3.0, status=SolveStatus.ERROR)
        assert result.status == SolveStatus.ERROR
        assert not result.is_optimal
        assert math.isnan(result.cost)
        assert result.mate == (UNMATCHED, UNMATCHED)

    def test_cost_is_reported_objective(self, extractor):
        """目标值取求解器报告值，不重新计算"""
        result = extractor.extract({Edge(1, 2): 1.0}, 2, 4.9999999)
        assert result.cost == 4.9999999

    def test_time_limit_discards_incumbent(self, extractor):
        result = extractor.extract({Edge(1, 2): 1.0}, 2, 3.0,
                                   status=SolveStatus.TIME_LIMIT, is_integer=True)
        assert result.status == SolveStatus.TIME_LIMIT
        assert math.isnan(result.cost)
        assert result.mate == (UNMATCHED, UNMATCHED)

    def test_inaccurate_status_uses_same_tolerance(self, extractor):
        result = extractor.extract({Edge(1, 2): 1.0, Edge(3, 4): 1 - 1e-7}, 4, 2.0,
                                   status=SolveStatus.OPTIMAL_INACCURATE, is_integer=True)
        assert result.mate == (2, 1, 4, 3)
        with pytest.raises(FractionalSolutionError):
            extractor.extract({Edge(1, 2): 0.9995}, 2, 1.0,
                              status=SolveStatus.OPTIMAL_INACCURATE, is_integer=True)
