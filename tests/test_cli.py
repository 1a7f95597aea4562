"""
命令行接口测试
"""

import json

import pytest

from lpmatching.cli import main


@pytest.fixture
def instance_file(tmp_path):
    path = tmp_path / "path4.yaml"
    path.write_text(
        "n_vertices: 4\n"
        "edges:\n"
        "  - {u: 1, v: 2, weight: 1}\n"
        "  - {u: 2, v: 3, weight: 5}\n"
        "  - {u: 3, v: 4, weight: 1}\n",
        encoding='utf-8',
    )
    return path


class TestCLI:
    """测试CLI子命令"""

    def test_solve(self, instance_file, tmp_path, capsys):
        output_file = tmp_path / "result.json"
        code = main(['solve', str(instance_file), '--solver', 'scipy',
                     '--save-results', str(output_file)])
        assert code == 0

        out = capsys.readouterr().out
        assert "求解成功" in out
        assert "(2, 3)" in out

        data = json.loads(output_file.read_text(encoding='utf-8'))
        assert data['status'] == 'optimal'
        assert data['cost'] == pytest.approx(5.0, abs=1e-6)
        assert data['mate'] == [-1, 3, 2, -1]
        assert data['check'] is True

    def test_solve_with_config(self, instance_file, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("matching:\n  solver: scipy\n", encoding='utf-8')
        assert main(['solve', str(instance_file), '--config', str(config_file),
                     '--tolerance', '1e-4']) == 0

    def test_describe(self, instance_file, tmp_path, capsys):
        lp_file = tmp_path / "model.lp"
        assert main(['describe', str(instance_file), '--out', str(lp_file)]) == 0

        out = capsys.readouterr().out
        assert "n_variables: 3" in out
        assert "variable_type: continuous" in out
        assert lp_file.exists()
        assert "Subject To" in lp_file.read_text(encoding='utf-8')

    def test_no_command(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()
