"""
配置和实例加载测试
"""

import pytest
from pydantic import ValidationError

from lpmatching.config.settings import MatchingConfig, load_config
from lpmatching.datasets.loader import EdgeRecord, InstanceLoader, MatchingInstance, load_instance


class TestMatchingConfig:
    """测试求解配置"""

    def test_defaults(self):
        config = MatchingConfig()
        assert config.tolerance == 1e-5
        assert config.solver == 'cvxpy'
        assert config.cvxpy_solver is None
        assert config.strict_integrality is True

    def test_invalid_values(self):
        with pytest.raises(ValidationError):
            MatchingConfig(tolerance=0)
        with pytest.raises(ValidationError):
            MatchingConfig(tolerance=0.7)
        with pytest.raises(ValidationError):
            MatchingConfig(solver='gurobi_direct')
        with pytest.raises(ValidationError):
            MatchingConfig(time_limit=-1)

    def test_names_are_normalized(self):
        config = MatchingConfig(solver='SciPy', cvxpy_solver='highs')
        assert config.solver == 'scipy'
        assert config.cvxpy_solver == 'HIGHS'

    def test_solver_kwargs(self):
        config = MatchingConfig(cvxpy_solver='scipy', time_limit=3.0, solver_options={'foo': 1})
        kwargs = config.solver_kwargs()
        assert kwargs == {'foo': 1, 'time_limit': 3.0, 'verbose': False, 'solver': 'SCIPY'}
        assert 'solver' not in config.solver_kwargs(backend='scipy')

    def test_load_config(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "matching:\n  solver: scipy\n  tolerance: 1.0e-4\n  strict_integrality: false\n",
            encoding='utf-8',
        )
        config = load_config(config_file)
        assert config.solver == 'scipy'
        assert config.tolerance == 1e-4
        assert config.strict_integrality is False

    def test_load_flat_config(self, tmp_path):
        config_file = tmp_path / "flat.yaml"
        config_file.write_text("time_limit: 10\n", encoding='utf-8')
        assert load_config(config_file).time_limit == 10

    def test_missing_config(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")


class TestInstanceLoader:
    """测试匹配实例加载"""

    @pytest.fixture
    def yaml_file(self, tmp_path):
        path = tmp_path / "square.yaml"
        path.write_text(
            "n_vertices: 4\n"
            "edges:\n"
            "  - {u: 1, v: 2, weight: 3}\n"
            "  - {u: 3, v: 2}\n"
            "  - {u: 3, v: 4, weight: 2.5}\n",
            encoding='utf-8',
        )
        return path

    @pytest.fixture
    def csv_file(self, tmp_path):
        path = tmp_path / "edges.csv"
        path.write_text("# 边表\nu,v,weight\n1,3,2\n2,4,3\n", encoding='utf-8')
        return path

    def test_load_yaml(self, yaml_file):
        instance = load_instance(yaml_file)
        assert instance.name == 'square'
        assert instance.n_vertices == 4
        assert len(instance.edges) == 3
        assert instance.edges[1].weight == 1.0

    def test_to_graph_and_weights(self, yaml_file):
        instance = load_instance(yaml_file)
        graph = instance.to_graph()
        weights = instance.to_weight_matrix()
        assert graph.nv == 4
        assert graph.ne == 3
        assert weights[2, 3] == 1.0
        assert weights[3, 2] == 0.0
        assert weights[3, 4] == 2.5

    def test_load_csv(self, csv_file):
        instance = load_instance(csv_file)
        assert instance.n_vertices == 4
        assert [(e.u, e.v, e.weight) for e in instance.edges] == [(1, 3, 2.0), (2, 4, 3.0)]

    def test_load_csv_with_vertex_count(self, csv_file):
        instance = InstanceLoader().load_csv(csv_file, n_vertices=6)
        assert instance.to_graph().nv == 6

    def test_csv_missing_columns(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("a,b\n1,2\n", encoding='utf-8')
        with pytest.raises(ValueError):
            load_instance(path)

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text("{}", encoding='utf-8')
        with pytest.raises(ValueError):
            load_instance(path)

    def test_validation(self):
        with pytest.raises(ValidationError):
            EdgeRecord(u=1, v=1)
        with pytest.raises(ValidationError):
            MatchingInstance(n_vertices=2, edges=[EdgeRecord(u=1, v=3)])
