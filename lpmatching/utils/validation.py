"""
匹配结果验证工具

验证功能:
1. 配偶数组结构检查（长度、范围、对称性）
2. 匹配边必须属于图的边集
3. 目标值与匹配权重一致性
"""

import logging
import math
from typing import Any, Dict, List, Sequence

from ..models.data_structures import UNMATCHED, MatchingResult, WeightMatrix

logger = logging.getLogger(__name__)


def validate_matching(graph, mate: Sequence[int]) -> List[str]:
    """
    检查配偶数组是否构成合法匹配

    Args:
        graph: 图对象
        mate: 配偶数组，mate[i-1] 为顶点 i 的配偶

    Returns:
        问题描述列表，为空表示合法
    """
    issues: List[str] = []
    n = graph.nv

    if len(mate) != n:
        issues.append(f"配偶数组长度 {len(mate)} 与顶点数 {n} 不一致")
        return issues

    edges = {tuple(e) for e in graph.edges()}
    targeted = set()
    for i, j in enumerate(mate, start=1):
        if j == UNMATCHED:
            continue
        if not (1 <= j <= n):
            issues.append(f"顶点 {i} 的配偶 {j} 超出范围")
            continue
        if j == i:
            issues.append(f"顶点 {i} 与自身匹配")
            continue
        if mate[j - 1] != i:
            issues.append(f"匹配不对称: mate[{i}] = {j}, mate[{j}] = {mate[j - 1]}")
        if (min(i, j), max(i, j)) not in edges:
            issues.append(f"匹配对 ({i}, {j}) 不是图中的边")
        if j in targeted:
            issues.append(f"顶点 {j} 被多次匹配")
        targeted.add(j)

    return issues


def matching_weight(weights: WeightMatrix, mate: Sequence[int]) -> float:
    """匹配总权重: Σ w[i, mate[i]] / 2"""
    total = 0.0
    for i, j in enumerate(mate, start=1):
        if j != UNMATCHED:
            total += weights[i, j]
    return total / 2


def check_result(graph, weights: WeightMatrix, result: MatchingResult,
                 tolerance: float = 1e-6) -> Dict[str, Any]:
    """
    综合检查匹配结果

    Args:
        graph: 图对象
        weights: 归一化后的权重矩阵
        result: 匹配结果
        tolerance: 目标值一致性容差（相对）

    Returns:
        报告字典 {valid, issues, weight, cost_gap}
    """
    issues = validate_matching(graph, result.mate)
    weight = matching_weight(weights, result.mate) if not issues else math.nan

    cost_gap = math.nan
    if result.is_optimal and not issues:
        cost_gap = abs(result.cost - weight)
        if cost_gap > tolerance * max(1.0, abs(weight)):
            issues.append(f"目标值 {result.cost:.6g} 与匹配权重 {weight:.6g} 不一致")

    if issues:
        for issue in issues:
            logger.warning(f"匹配检查: {issue}")

    return {
        'valid': not issues,
        'issues': issues,
        'weight': weight,
        'cost_gap': cost_gap,
    }
