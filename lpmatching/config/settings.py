"""
匹配求解配置
Matching solver configuration

使用pydantic进行参数验证，支持从YAML文件加载
Using pydantic for validation, loadable from YAML
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, validator


class MatchingConfig(BaseModel):
    """最大权匹配求解配置"""
    tolerance: float = Field(1e-5, gt=0, lt=0.5, description="判定变量选中的数值容差 ε")
    solver: str = Field("cvxpy", description="求解后端名称 (cvxpy / scipy)")
    cvxpy_solver: Optional[str] = Field(None, description="CVXPY求解器名称，None为自动选择")
    solver_options: Dict[str, Any] = Field(default_factory=dict, description="传递给求解后端的参数")
    time_limit: Optional[float] = Field(None, gt=0, description="求解时间限制 (s)")
    strict_integrality: bool = Field(True, description="整数模型出现分数解时是否报错")
    verbose: bool = Field(False, description="是否输出求解器日志")

    @validator('solver')
    def validate_solver(cls, v):
        """验证求解后端名称"""
        v = v.lower()
        if v not in ('cvxpy', 'scipy'):
            raise ValueError(f"未知的求解后端: {v}")
        return v

    @validator('cvxpy_solver')
    def normalize_cvxpy_solver(cls, v):
        """CVXPY求解器名称统一为大写"""
        return v.upper() if v else v

    def solver_kwargs(self, backend: Optional[str] = None) -> Dict[str, Any]:
        """构造求解后端的参数，backend 覆盖配置中的后端名称"""
        backend = (backend or self.solver).lower()
        kwargs: Dict[str, Any] = dict(self.solver_options)
        kwargs['time_limit'] = self.time_limit
        kwargs['verbose'] = self.verbose
        if backend == 'cvxpy':
            kwargs['solver'] = self.cvxpy_solver
        return kwargs


def load_config(path: Union[str, Path]) -> MatchingConfig:
    """
    从YAML文件加载配置

    文件可以直接给出字段，也可以放在顶层 matching: 节点下。
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"配置文件不存在: {file_path}")

    with open(file_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if 'matching' in data:
        data = data['matching'] or {}

    return MatchingConfig(**data)
