"""
匹配实例加载器
Matching Instance Loader

使用pydantic进行数据验证和类型检查，支持YAML和CSV边表
Using pydantic for data validation, supports YAML and CSV edge lists
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd
import yaml
from pydantic import BaseModel, Field, validator

from ..models.data_structures import WeightMatrix
from ..utils.graph_utils import MatchingGraph

logger = logging.getLogger(__name__)


class EdgeRecord(BaseModel):
    """边数据类"""
    u: int = Field(ge=1, description="端点 u")
    v: int = Field(ge=1, description="端点 v")
    weight: float = Field(1.0, description="边权重")

    @validator('v')
    def validate_different_endpoints(cls, v, values):
        """验证两端点不同"""
        if v == values.get('u'):
            raise ValueError("边的两个端点不能相同")
        return v


class MatchingInstance(BaseModel):
    """完整匹配实例"""
    name: str = Field("instance", description="实例名称")
    n_vertices: int = Field(ge=0, description="顶点数")
    edges: List[EdgeRecord] = Field(default_factory=list)

    @validator('edges')
    def validate_endpoints(cls, v, values):
        """验证端点在 1..n_vertices 范围内"""
        n = values.get('n_vertices')
        if n is None:
            return v
        for edge in v:
            if edge.u > n or edge.v > n:
                raise ValueError(f"边 ({edge.u}, {edge.v}) 的端点超出范围 1..{n}")
        return v

    def to_graph(self) -> MatchingGraph:
        return MatchingGraph(self.n_vertices, [(e.u, e.v) for e in self.edges])

    def to_weight_matrix(self) -> WeightMatrix:
        """权重存放在 (min, max) 位置，重复边取最后一次出现的权重"""
        weights = WeightMatrix(self.n_vertices)
        for e in self.edges:
            weights[min(e.u, e.v), max(e.u, e.v)] = e.weight
        return weights


class InstanceLoader:
    """实例加载器"""

    def load_yaml(self, path: Union[str, Path]) -> MatchingInstance:
        """加载YAML实例: n_vertices + edges 列表"""
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"实例文件不存在: {file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        data.setdefault('name', file_path.stem)
        return MatchingInstance(**data)

    def load_csv(self, path: Union[str, Path], n_vertices: Optional[int] = None) -> MatchingInstance:
        """
        加载CSV边表

        Args:
            path: CSV文件，列为 u, v[, weight]，支持 # 注释
            n_vertices: 顶点数，None 时取最大端点编号
        """
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"实例文件不存在: {file_path}")

        df = pd.read_csv(file_path, comment='#', skipinitialspace=True)
        missing = {'u', 'v'} - set(df.columns)
        if missing:
            raise ValueError(f"CSV缺少列: {sorted(missing)}")
        if 'weight' not in df.columns:
            df['weight'] = 1.0

        if n_vertices is None:
            n_vertices = int(max(df['u'].max(), df['v'].max())) if len(df) else 0

        edges = [
            EdgeRecord(u=int(row.u), v=int(row.v), weight=float(row.weight))
            for row in df.itertuples(index=False)
        ]
        return MatchingInstance(name=file_path.stem, n_vertices=n_vertices, edges=edges)


def load_instance(path: Union[str, Path], n_vertices: Optional[int] = None) -> MatchingInstance:
    """便捷函数：按后缀加载实例"""
    loader = InstanceLoader()
    suffix = Path(path).suffix.lower()
    if suffix in ('.yaml', '.yml'):
        instance = loader.load_yaml(path)
    elif suffix == '.csv':
        instance = loader.load_csv(path, n_vertices)
    else:
        raise ValueError(f"不支持的实例格式: {suffix}")

    logger.info(f"实例 {instance.name}: {instance.n_vertices} 个顶点, {len(instance.edges)} 条边")
    return instance
