"""
匹配建模模块
用于将最大权匹配问题转换为线性/整数规划模型

主要组件:
- data_structures: 边、稀疏权重矩阵、求解状态和匹配结果
- normalizer: 权重矩阵归一化器
- formulation: 决策变量、目标函数和度约束的构建
- extractor: 从求解结果提取配偶数组
- matching: maximum_weight_matching 入口（由顶层包导出）
"""

from .data_structures import (
    UNMATCHED,
    Edge,
    WeightMatrix,
    SolveStatus,
    MatchingResult,
    LPMatchingError,
    DimensionMismatchError,
    FractionalSolutionError,
)
from .normalizer import WeightMatrixNormalizer, default_weights
from .formulation import FormulationBuilder, MatchingFormulation
from .extractor import SolutionExtractor, DEFAULT_TOLERANCE

__all__ = [
    # 数据结构
    'UNMATCHED',
    'Edge',
    'WeightMatrix',
    'SolveStatus',
    'MatchingResult',
    'LPMatchingError',
    'DimensionMismatchError',
    'FractionalSolutionError',

    # 核心组件
    'WeightMatrixNormalizer',
    'default_weights',
    'FormulationBuilder',
    'MatchingFormulation',
    'SolutionExtractor',
    'DEFAULT_TOLERANCE',
]
