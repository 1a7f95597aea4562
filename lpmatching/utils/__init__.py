"""
工具模块
"""

from .graph_utils import MatchingGraph, path_graph, cycle_graph, complete_bipartite_graph
from .validation import validate_matching, matching_weight, check_result

__all__ = [
    'MatchingGraph',
    'path_graph',
    'cycle_graph',
    'complete_bipartite_graph',
    'validate_matching',
    'matching_weight',
    'check_result',
]
