"""
配置模块
"""

from .settings import MatchingConfig, load_config

__all__ = ['MatchingConfig', 'load_config']
