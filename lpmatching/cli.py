"""
命令行接口
提供最大权匹配求解的统一入口
"""

import argparse
import json
import logging
import sys

from lpmatching.config.settings import MatchingConfig, load_config
from lpmatching.datasets.loader import load_instance
from lpmatching.models.formulation import FormulationBuilder
from lpmatching.models.matching import maximum_weight_matching
from lpmatching.models.normalizer import WeightMatrixNormalizer
from lpmatching.solvers import create_solver
from lpmatching.utils.validation import check_result


def setup_logging(verbose: bool = False):
    """设置日志"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_config(args) -> MatchingConfig:
    """合并配置文件和命令行参数"""
    config = load_config(args.config) if args.config else MatchingConfig()

    overrides = {}
    if getattr(args, 'solver', None):
        overrides['solver'] = args.solver
    if getattr(args, 'cvxpy_solver', None):
        overrides['cvxpy_solver'] = args.cvxpy_solver
    if getattr(args, 'tolerance', None) is not None:
        overrides['tolerance'] = args.tolerance
    if getattr(args, 'time_limit', None) is not None:
        overrides['time_limit'] = args.time_limit

    if overrides:
        config = MatchingConfig(**{**config.dict(), **overrides})
    return config


def cmd_solve(args) -> int:
    """求解最大权匹配"""
    instance = load_instance(args.instance)
    config = build_config(args)

    graph = instance.to_graph()
    weights = instance.to_weight_matrix()

    result = maximum_weight_matching(graph, weight_matrix=weights, config=config)

    if not result.is_optimal:
        print(f"求解失败! 状态: {result.status.value}")
        return 1

    report = check_result(graph, weights, result)

    print(f"\n求解成功!")
    print(f"实例: {instance.name} ({graph.nv} 个顶点, {graph.ne} 条边)")
    print(f"模型: {'线性松弛 (二分图)' if graph.is_bipartite() else '整数规划'}")
    print(f"求解状态: {result.status.value}")
    print(f"最大权重 = {result.cost:.6g}")
    print(f"匹配边数 = {result.cardinality}")
    for u, v in result.matched_pairs():
        print(f"  ({u}, {v})  w = {weights[u, v]:g}")
    if not report['valid']:
        print("匹配检查未通过:")
        for issue in report['issues']:
            print(f"  - {issue}")

    if args.save_results:
        output = result.to_dict()
        output['instance'] = instance.name
        output['check'] = report['valid']
        with open(args.save_results, 'w', encoding='utf-8') as f:
            json.dump(output, f, ensure_ascii=False, indent=2)
        print(f"详细结果已保存到: {args.save_results}")

    return 0 if report['valid'] else 1


def cmd_describe(args) -> int:
    """构建模型但不求解，输出模型规模"""
    instance = load_instance(args.instance)
    config = build_config(args)

    graph = instance.to_graph()
    weights = WeightMatrixNormalizer(graph).normalize(instance.to_weight_matrix())
    solver = create_solver(config.solver, **config.solver_kwargs())
    formulation = FormulationBuilder(graph, weights).build(solver)

    summary = formulation.summary()
    print(f"实例: {instance.name}")
    for key, value in summary.items():
        print(f"  {key}: {value}")

    if args.out:
        formulation.write_lp(args.out)
        print(f"\n模型描述已保存到: {args.out}")
    return 0


def main(argv=None) -> int:
    """主函数"""
    parser = argparse.ArgumentParser(
        description="基于线性/整数规划的最大权匹配CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='显示详细信息'
    )

    # 子命令
    subparsers = parser.add_subparsers(
        title='子命令',
        dest='command',
        help='可用的子命令'
    )

    def add_common_arguments(sub):
        sub.add_argument(
            'instance',
            help='实例文件路径 (.yaml / .csv)'
        )
        sub.add_argument(
            '--config',
            help='配置文件路径 (YAML)'
        )
        sub.add_argument(
            '--solver',
            choices=['cvxpy', 'scipy'],
            help='求解后端 (默认: cvxpy)'
        )
        sub.add_argument(
            '--cvxpy-solver',
            help='CVXPY求解器名称 (例如: SCIPY, HIGHS, GLPK_MI)'
        )

    # solve子命令
    parser_solve = subparsers.add_parser(
        'solve',
        help='求解最大权匹配'
    )
    add_common_arguments(parser_solve)
    parser_solve.add_argument(
        '--tolerance',
        type=float,
        help='变量选中判定容差 (默认: 1e-5)'
    )
    parser_solve.add_argument(
        '--time-limit',
        type=float,
        help='求解时间限制 (秒)'
    )
    parser_solve.add_argument(
        '--save-results',
        help='保存结果的JSON文件路径 (例如: matching.json)'
    )
    parser_solve.set_defaults(func=cmd_solve)

    # describe子命令
    parser_describe = subparsers.add_parser(
        'describe',
        help='构建模型并输出规模，不求解'
    )
    add_common_arguments(parser_describe)
    parser_describe.add_argument(
        '--out',
        help='输出LP文件路径 (例如: matching.lp)'
    )
    parser_describe.set_defaults(func=cmd_describe)

    # 解析参数
    args = parser.parse_args(argv)

    # 设置日志
    setup_logging(args.verbose)

    # 执行命令
    if hasattr(args, 'func'):
        return args.func(args)
    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
