"""
基于线性/整数规划的一般图最大权匹配

主要组件:
- models: 权重归一化、模型构建、结果提取
- solvers: 求解器能力接口及CVXPY / SciPy后端
- utils: 图抽象和匹配校验
- config: 求解配置
- datasets: 匹配实例加载
"""

from .models import (
    UNMATCHED,
    Edge,
    WeightMatrix,
    SolveStatus,
    MatchingResult,
    LPMatchingError,
    DimensionMismatchError,
    FractionalSolutionError,
    WeightMatrixNormalizer,
    default_weights,
    FormulationBuilder,
    MatchingFormulation,
    SolutionExtractor,
)
from .models.matching import maximum_weight_matching
from .solvers import MatchingSolver, CvxpySolver, ScipyMilpSolver, UnknownSolverError, create_solver
from .config import MatchingConfig, load_config
from .utils import MatchingGraph

__version__ = "1.0.0"

__all__ = [
    'maximum_weight_matching',
    'UNMATCHED',
    'Edge',
    'WeightMatrix',
    'SolveStatus',
    'MatchingResult',
    'LPMatchingError',
    'DimensionMismatchError',
    'FractionalSolutionError',
    'WeightMatrixNormalizer',
    'default_weights',
    'FormulationBuilder',
    'MatchingFormulation',
    'SolutionExtractor',
    'MatchingSolver',
    'CvxpySolver',
    'ScipyMilpSolver',
    'UnknownSolverError',
    'create_solver',
    'MatchingConfig',
    'load_config',
    'MatchingGraph',
]
