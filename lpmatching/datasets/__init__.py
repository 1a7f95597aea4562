"""
匹配实例数据模块
"""

from .loader import EdgeRecord, MatchingInstance, InstanceLoader, load_instance

__all__ = ['EdgeRecord', 'MatchingInstance', 'InstanceLoader', 'load_instance']
