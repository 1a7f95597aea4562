"""
权重矩阵归一化测试
"""

import numpy as np
import pytest

from lpmatching.models.data_structures import DimensionMismatchError, WeightMatrix
from lpmatching.models.normalizer import WeightMatrixNormalizer, default_weights
from lpmatching.utils.graph_utils import MatchingGraph


class TestDefaultWeights:
    """测试默认单位权重"""

    def test_unit_weight_on_each_edge(self, triangle):
        w = default_weights(triangle)
        assert len(w) == 3
        for e in triangle.edges():
            assert w[e.src, e.dst] == 1
            assert w[e.dst, e.src] == 0

    def test_normalize_without_weights(self, path4):
        w = WeightMatrixNormalizer(path4).normalize()
        for e in path4.edges():
            assert w[e.src, e.dst] == 1
            assert w[e.dst, e.src] == 1


class TestWeightMatrixNormalizer:
    """测试归一化规则"""

    def test_lower_positive_value_propagates(self, path4):
        """只给出 (j, i), i < j 的权重时传播到 (i, j)"""
        w = WeightMatrix(4, {(2, 1): 3.0, (3, 2): 5.0, (4, 3): 1.0})
        WeightMatrixNormalizer(path4).normalize(w)
        assert w[1, 2] == 3.0
        assert w[2, 3] == 5.0
        assert w[3, 4] == 1.0

    def test_larger_entry_is_never_decreased(self, path4):
        w = WeightMatrix(4, {(1, 2): 5.0, (2, 1): 3.0})
        WeightMatrixNormalizer(path4).normalize(w)
        assert w[1, 2] == 5.0
        assert w[2, 1] == 5.0

    def test_larger_lower_entry_wins(self, path4):
        w = WeightMatrix(4, {(1, 2): 2.0, (2, 1): 6.0})
        WeightMatrixNormalizer(path4).normalize(w)
        assert w[1, 2] == 6.0
        assert w[2, 1] == 6.0

    def test_non_positive_lower_entry_ignored(self, path4):
        w = WeightMatrix(4, {(1, 2): 2.0, (2, 1): -6.0})
        WeightMatrixNormalizer(path4).normalize(w)
        assert w[1, 2] == 2.0
        assert w[2, 1] == 2.0

    def test_non_edges_are_zeroed(self, path4):
        dense = np.ones((4, 4))
        w = WeightMatrixNormalizer(path4).normalize(dense)
        edges = {(e.src, e.dst) for e in path4.edges()}
        for i in range(1, 5):
            for j in range(1, 5):
                if (min(i, j), max(i, j)) in edges:
                    assert w[i, j] == 1.0
                else:
                    assert w[i, j] == 0.0

    def test_symmetry_invariant(self, bipartite_2x2):
        rng = np.random.default_rng(0)
        dense = rng.integers(-3, 10, size=(4, 4)).astype(float)
        w = WeightMatrixNormalizer(bipartite_2x2).normalize(dense)
        for e in bipartite_2x2.edges():
            assert w[e.src, e.dst] == w[e.dst, e.src]
        assert w[1, 2] == 0 and w[3, 4] == 0 and w[1, 1] == 0

    def test_in_place_mutation(self, triangle):
        w = WeightMatrix(3, {(1, 1): 4.0, (1, 2): 2.0})
        result = WeightMatrixNormalizer(triangle).normalize(w)
        assert result is w
        assert w[1, 1] == 0
        assert w[2, 1] == 2.0

    def test_dense_input_is_copied(self, triangle):
        dense = np.array([[0, 2, 0], [0, 0, 0], [0, 0, 0]], dtype=float)
        WeightMatrixNormalizer(triangle).normalize(dense)
        assert dense[1, 0] == 0

    def test_dimension_mismatch_fails_fast(self, triangle):
        with pytest.raises(DimensionMismatchError):
            WeightMatrixNormalizer(triangle).normalize(np.zeros((4, 4)))
        with pytest.raises(ValueError):
            WeightMatrixNormalizer(triangle).normalize(WeightMatrix(5))

    def test_work_is_sparse(self):
        """大规模稀疏图只处理已存储的元素"""
        n = 100000
        graph = MatchingGraph(n, [(1, 2), (n - 1, n)])
        w = WeightMatrix(n, {(2, 1): 4.0, (n, n - 1): 2.0, (1, n): 9.0})
        WeightMatrixNormalizer(graph).normalize(w)
        assert len(w) == 4
        assert w[1, n] == 0
        assert w[n - 1, n] == 2.0
