"""CLI entry point for chart generation."""

import sys
from pathlib import Path

from life_plan_jp.charts import plot_rate_band, plot_trajectory
from life_plan_jp.config import build_household, build_params, parse_args
from life_plan_jp.household import validate_household
from life_plan_jp.scenarios import run_scenarios, sweep_investment_rates
from life_plan_jp.simulation import project


def _add_args(parser):
    parser.add_argument(
        "--output", type=Path, default=Path("reports/charts"),
        help="出力ディレクトリ (default: reports/charts)",
    )
    parser.add_argument(
        "--scenarios", action="store_true",
        help="低成長/標準/高成長の3シナリオを重ねて描画",
    )
    parser.add_argument(
        "--no-sweep", action="store_true",
        help="運用利回り感応度チャートを生成しない",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="出力ファイル名のサフィックス（例: 30 → trajectory-30.png）",
    )


def main():
    r, args = parse_args("ライフプラン資産シミュレーション チャート生成", _add_args)
    state = build_household(r)
    params = build_params(r)

    for warning in validate_household(state):
        print(f"警告: {warning}", file=sys.stderr)

    print("資産推移シミュレーション...", file=sys.stderr)
    if args.scenarios:
        results = run_scenarios(state)
    else:
        results = {f"利回り{params.investment_rate:.1f}%": project(state, params)}
    path = plot_trajectory(results, args.output, name=args.name)
    print(f"  → {path}", file=sys.stderr)

    if not args.no_sweep:
        print("運用利回り感応度...", file=sys.stderr)
        sweep = sweep_investment_rates(state, params.inflation_rate)
        path = plot_rate_band(sweep, args.output, name=args.name)
        print(f"  → {path}", file=sys.stderr)

    print("完了", file=sys.stderr)


if __name__ == "__main__":
    main()
