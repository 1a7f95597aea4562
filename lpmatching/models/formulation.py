"""
匹配问题建模器
根据图结构和归一化后的权重在求解后端上声明决策变量、目标函数和度约束

模型:
    max   Σ_e w[src(e), dst(e)] · x_e
    s.t.  Σ_{e ∋ i} x_e <= 1          对每个顶点 i
          x_e >= 0                     二分图: 连续变量（LP松弛即为整数解）
          x_e ∈ Z                      非二分图: 整数变量（需要MILP求解器）
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

from .data_structures import Edge, WeightMatrix

logger = logging.getLogger(__name__)


@dataclass
class MatchingFormulation:
    """已在求解后端上声明好的匹配模型"""
    n_vertices: int
    edge_list: List[Edge]
    is_integer: bool
    objective: Dict[Edge, float]
    degree_constraints: Dict[int, List[Edge]]
    solver: object
    build_time: datetime = field(default_factory=datetime.now)

    @property
    def n_variables(self) -> int:
        return len(self.edge_list)

    @property
    def n_constraints(self) -> int:
        return len(self.degree_constraints)

    def summary(self) -> Dict:
        """模型规模摘要"""
        return {
            'n_vertices': self.n_vertices,
            'n_variables': self.n_variables,
            'n_constraints': self.n_constraints,
            'variable_type': 'integer' if self.is_integer else 'continuous',
            'nonzero_weights': sum(1 for w in self.objective.values() if w != 0),
            'solver': getattr(self.solver, 'name', type(self.solver).__name__),
        }

    def write_lp(self, filename: str):
        """输出LP格式的模型描述"""
        with open(filename, 'w', encoding='utf-8') as f:
            f.write("\\ Maximum Weight Matching\n")
            f.write(f"\\ Vertices: {self.n_vertices}\n")
            f.write(f"\\ Variables: {self.n_variables}\n")
            f.write(f"\\ Constraints: {self.n_constraints}\n")
            f.write("Maximize\n")
            terms = [f"{w:+g} {_name(e)}" for e, w in self.objective.items() if w != 0]
            f.write(" obj: " + (" ".join(terms) if terms else "0") + "\n")
            f.write("Subject To\n")
            for vertex, edges in self.degree_constraints.items():
                f.write(f" deg_{vertex}: " + " + ".join(_name(e) for e in edges) + " <= 1\n")
            f.write("Bounds\n")
            for e in self.edge_list:
                f.write(f" {_name(e)} >= 0\n")
            if self.is_integer and self.edge_list:
                f.write("General\n")
                f.write(" " + " ".join(_name(e) for e in self.edge_list) + "\n")
            f.write("End\n")


def _name(edge: Edge) -> str:
    return f"x_{edge.src}_{edge.dst}"


class FormulationBuilder:
    """
    匹配模型构建器

    二分图使用连续变量（匹配多面体整数），一般图使用整数变量。
    不执行求解。
    """

    def __init__(self, graph, weights: WeightMatrix, edges=None):
        """
        Args:
            graph: 图对象，需提供 nv / edges() / neighbors() / is_bipartite()
            weights: 已归一化的权重矩阵
            edges: 已取出的边列表，None 时调用 graph.edges()
        """
        self.graph = graph
        self.weights = weights
        self.edges = edges

    def build(self, solver) -> MatchingFormulation:
        """
        在求解后端上声明模型

        Args:
            solver: MatchingSolver 实例，构建前会被 reset()

        Returns:
            MatchingFormulation 对象
        """
        n = self.graph.nv
        edges = self.graph.edges() if self.edges is None else self.edges
        edge_list = [Edge.canonical(*e) for e in edges]
        is_integer = not self.graph.is_bipartite()

        logger.info(f"构建匹配模型: {n} 个顶点, {len(edge_list)} 条边, "
                    f"{'整数规划 (非二分图)' if is_integer else '线性松弛 (二分图)'}")

        solver.reset()

        # 1. 决策变量
        for e in edge_list:
            solver.add_variable(e, integer=is_integer, lower=0.0)

        # 2. 目标函数
        objective = {e: self.weights[e.src, e.dst] for e in edge_list}
        solver.set_objective(objective, sense="maximize")

        # 3. 度约束：以 (min, max) 规范形式引用每条关联边
        degree_constraints: Dict[int, List[Edge]] = {}
        for i in range(1, n + 1):
            incident = []
            for j in self.graph.neighbors(i):
                incident.append(Edge(i, j) if j > i else Edge(j, i))
            if not incident:
                continue
            solver.add_constraint({e: 1.0 for e in incident}, sense="<=", rhs=1.0, name=f"deg_{i}")
            degree_constraints[i] = incident
            logger.debug(f"顶点 {i} 度约束: {len(incident)} 条边")

        return MatchingFormulation(
            n_vertices=n,
            edge_list=edge_list,
            is_integer=is_integer,
            objective=objective,
            degree_constraints=degree_constraints,
            solver=solver,
        )
