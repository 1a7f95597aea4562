"""
最大权匹配求解入口

流程: 图 + 权重 → 权重归一化 → 模型构建 → 外部求解器 → 结果提取

二分图的LP松弛是整数的，可以直接用线性规划求解；
非二分图需要MILP求解器，计算时间可能随规模指数增长。
"""

import logging
from typing import Optional, Union

from ..config.settings import MatchingConfig
from ..solvers import MatchingSolver, create_solver
from .data_structures import UNMATCHED, MatchingResult, SolveStatus, WeightInput
from .extractor import SolutionExtractor
from .formulation import FormulationBuilder
from .normalizer import WeightMatrixNormalizer

logger = logging.getLogger(__name__)


def maximum_weight_matching(graph,
                            solver: Union[MatchingSolver, str, None] = None,
                            weight_matrix: Optional[WeightInput] = None,
                            config: Optional[MatchingConfig] = None) -> MatchingResult:
    """
    求解一般图上的最大权匹配

    Args:
        graph: 图对象，需提供 nv / edges() / neighbors() / is_bipartite()
        solver: MatchingSolver 实例、后端名称，None 时按 config.solver 创建
        weight_matrix: n×n 权重（WeightMatrix / numpy / scipy.sparse / 字典），
            None 时每条边权重为1（最大基数匹配）。WeightMatrix 会被原地归一化。
        config: 求解配置

    Returns:
        MatchingResult，包含求解状态、最优目标值和配偶数组（未匹配为 -1）
    """
    config = config or MatchingConfig()
    n = graph.nv

    # edges() 可能返回生成器，只取一次
    edge_list = list(graph.edges())
    weights = WeightMatrixNormalizer(graph, edge_list).normalize(weight_matrix)

    if not edge_list:
        logger.info("图中没有边，返回空匹配")
        return MatchingResult(status=SolveStatus.OPTIMAL, cost=0.0, mate=(UNMATCHED,) * n)

    if solver is None:
        solver = create_solver(config.solver, **config.solver_kwargs())
    elif isinstance(solver, str):
        solver = create_solver(solver, **config.solver_kwargs(backend=solver))

    formulation = FormulationBuilder(graph, weights, edge_list).build(solver)
    status = solver.solve()

    extractor = SolutionExtractor(
        tolerance=config.tolerance,
        strict_integrality=config.strict_integrality,
    )
    result = extractor.extract(
        solver.values() if status.has_solution else {},
        n,
        solver.objective_value,
        status=status,
        is_integer=formulation.is_integer,
    )

    logger.info(f"匹配完成: 状态 {result.status.value}, 目标值 {result.cost:.6g}, "
                f"匹配边数 {result.cardinality}")
    return result
