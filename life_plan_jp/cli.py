"""CLI entry point: project one household and print the yearly asset table."""

import sys

from life_plan_jp.config import build_household, build_params, parse_args
from life_plan_jp.formatting import diagnose, format_currency
from life_plan_jp.household import HouseholdState, validate_household
from life_plan_jp.params import SimulationParams
from life_plan_jp.scenarios import run_scenarios, sweep_investment_rates
from life_plan_jp.simulation import SimulationResult, project
from life_plan_jp.tax import net_income


def _add_args(parser):
    parser.add_argument("--every", type=int, default=5, help="年次表の表示間隔（年）(default: 5)")
    parser.add_argument("--scenarios", action="store_true", help="低成長/標準/高成長の3シナリオを比較")
    parser.add_argument("--sweep", action="store_true", help="運用利回り 0〜10%% の感応度を表示")


def _print_header(state: HouseholdState, params: SimulationParams, result: SimulationResult):
    print("=" * 72)
    print(f"ライフプラン資産シミュレーション（{result.current_age}歳-100歳）")
    print(f"  運用利回り: {params.investment_rate:.1f}% / インフレ率: {params.inflation_rate:.1f}%")
    print(f"  額面年収: {state.gross_income:.0f}万円 → 手取り {net_income(state.gross_income):.0f}万円")
    if state.spouse is not None:
        print(f"  配偶者: {state.spouse.age}歳 / 額面 {state.spouse.gross_income:.0f}万円"
              f"（{state.spouse.retirement_age}歳まで就労）")
    print(f"  初期資産: 現金 {state.cash:.0f}万 + 運用 {state.investments:.0f}万（うちDC {state.locked:.0f}万）")
    print(f"  生活費: 月{state.monthly_expenses:.1f}万 / 積立: 月{state.contribution.monthly_amount:.1f}万")
    if state.children:
        parts = [f"{c.age}歳({c.education_track})" for c in state.children]
        print(f"  子ども: {len(state.children)}人（{', '.join(parts)}）")
    print("=" * 72)


def _print_summary(result: SimulationResult):
    diag = diagnose(result)
    print()
    print(f"【診断】{diag.title}")
    print(f"        {diag.subtitle}")
    print(f"  リタイア時（{result.retirement_age}歳）資産: {format_currency(result.assets_at_retirement)}")
    print(f"  80歳時点の資産: {format_currency(result.assets_at_80)}")
    sign = "+" if result.monthly_balance >= 0 else ""
    print(f"  現在の月間収支: {sign}{result.monthly_balance:.1f}万円（積立前）")


def _print_table(result: SimulationResult, every: int):
    print()
    print(f"{'年齢':>6} {'資産残高':>14}  イベント")
    print("-" * 72)
    step = max(1, every)
    for point in result.yearly_data:
        show = (
            (point.age - result.current_age) % step == 0
            or point.events
            or point.age == result.depletion_age
        )
        if not show:
            continue
        marker = " ←枯渇" if point.age == result.depletion_age else ""
        events = "・".join(point.events)
        print(f"{point.age:>5}歳 {point.assets:>12,}万  {events}{marker}")


def _print_scenarios(state: HouseholdState):
    print("\n【シナリオ比較】")
    print("-" * 72)
    for name, result in run_scenarios(state).items():
        depletion = f"{result.depletion_age}歳で枯渇" if result.depletion_age else "100歳まで維持"
        print(f"  {name:<6} リタイア時 {format_currency(result.assets_at_retirement):>12}"
              f" / 80歳 {format_currency(result.assets_at_80):>12} / {depletion}")


def _print_sweep(state: HouseholdState, params: SimulationParams):
    print(f"\n【運用利回り感応度】（インフレ率 {params.inflation_rate:.1f}%）")
    print("-" * 72)
    for rate, result in sweep_investment_rates(state, params.inflation_rate):
        depletion = f"{result.depletion_age}歳" if result.depletion_age else "-"
        print(f"  {rate:>4.1f}%  80歳 {format_currency(result.assets_at_80):>12}  枯渇 {depletion}")


def main():
    r, args = parse_args("ライフプラン資産シミュレーション（現在〜100歳）", _add_args)
    state = build_household(r)
    params = build_params(r)

    for warning in validate_household(state):
        print(f"警告: {warning}", file=sys.stderr)

    result = project(state, params)
    _print_header(state, params, result)
    _print_summary(result)
    _print_table(result, args.every)
    if args.scenarios:
        _print_scenarios(state)
    if args.sweep:
        _print_sweep(state, params)


if __name__ == "__main__":
    main()
