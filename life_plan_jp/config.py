"""TOML config loader with CLI > config > default resolution."""

import argparse
import sys
import tomllib
from pathlib import Path
from typing import Callable

from life_plan_jp.education import EDUCATION_TRACKS
from life_plan_jp.household import HouseholdState, household_from_dict
from life_plan_jp.params import DEFAULT_INFLATION_RATE, DEFAULT_INVESTMENT_RATE, SimulationParams

DEFAULT_CONFIG_PATH = Path("config.toml")

# 入力ウィザードの初期値に合わせた既定値（万円・歳・%）
DEFAULTS = {
    "age": 30,
    "has_spouse": False,
    "spouse_age": 0,
    "spouse_annual_income": 0.0,
    "spouse_retirement_age": 65,
    "children": "",
    "current_cash": 0.0,
    "current_investments": 0.0,
    "current_dc": 0.0,
    "current_nisa_balance": 0.0,
    "annual_income": 0.0,
    "monthly_expenses": 0.0,
    "monthly_investment_amount": 0.0,
    "auto_stop_investment": True,
    "custom_investment_end_age": 0,
    "ideco_enabled": False,
    "ideco_monthly_amount": 2.3,
    "nisa_enabled": False,
    "nisa_annual_amount": 20.0,
    "retirement_age": 65,
    "monthly_pension": 0.0,
    "severance_pay": 0.0,
    "housing_status": "none",
    "housing_purchase_age": 35,
    "housing_cost": 3000.0,
    "housing_down_payment": 600.0,
    "housing_loan_years": 35,
    "housing_loan_rate": 1.5,
    "existing_loan_balance": 0.0,
    "existing_loan_remaining_years": 0,
    "existing_loan_rate": 1.5,
    "will_sell_house": False,
    "sell_house_age": 75,
    "sell_house_price": 1500.0,
    "relocation_cost": 500.0,
    "post_sell_monthly_rent": 10.0,
    "apply_income_decline": False,
    "income_decrease_age1": 55,
    "income_decrease_rate1": 85.0,
    "income_decrease_age2": 60,
    "income_decrease_rate2": 60.0,
    "post_retirement_work": False,
    "post_retirement_working_age": 70,
    "post_retirement_monthly_income": 10.0,
    "expect_parent_care": False,
    "parent_care_age": 55,
    "parent_care_cost": 300.0,
    "expect_self_care": False,
    "self_care_age": 80,
    "self_care_cost": 500.0,
    "major_expenses": "",
    "investment_rate": DEFAULT_INVESTMENT_RATE,
    "inflation_rate": DEFAULT_INFLATION_RATE,
}


def _normalize_children(v) -> list[dict]:
    """TOML children → list of dicts. Accepts tables, "age:track[:amount]" strings or bare ages."""
    if isinstance(v, str):
        return parse_children(v)
    if not isinstance(v, list):
        raise ValueError(f"children は配列または文字列で指定してください: {v!r}")
    children = []
    for item in v:
        if isinstance(item, dict):
            children.append(dict(item))
        else:
            children.extend(parse_children(str(item)))
    return children


def _normalize_major_expenses(v) -> list[dict]:
    """TOML major_expenses → list of dicts. Accepts tables or [age, amount, label?] arrays."""
    if isinstance(v, str):
        return parse_major_expenses(v)
    if not isinstance(v, list):
        raise ValueError(f"major_expenses は配列または文字列で指定してください: {v!r}")
    expenses = []
    for item in v:
        if isinstance(item, dict):
            expenses.append(dict(item))
        elif isinstance(item, list) and len(item) >= 2:
            label = str(item[2]) if len(item) >= 3 else f"{item[1]}万"
            expenses.append({"target_age": item[0], "amount": item[1], "label": label, "enabled": True})
    return expenses


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"設定ファイルの読み込みに失敗: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    # [simulation] テーブルの利回り・インフレ率をトップレベルへ
    sim = raw.pop("simulation", None)
    if isinstance(sim, dict):
        for key in ("investment_rate", "inflation_rate"):
            if key in sim:
                raw.setdefault(key, sim[key])
    if "children" in raw:
        v = raw["children"]
        raw["children"] = _normalize_children(v) if v is not False else []
    if "major_expenses" in raw:
        v = raw["major_expenses"]
        raw["major_expenses"] = _normalize_major_expenses(v) if v is not False else []
    return raw


def parse_children(s: str) -> list[dict]:
    """Parse children string "age[:track[:amount]],..." → list of child dicts.

    Example: "5:all-public,8:custom:80" → two children, the second with a manual cost.
    """
    s = str(s).strip()
    if not s or s.lower() == "none":
        return []
    children = []
    for part in s.split(","):
        part = part.strip()
        if not part:
            continue
        fields = part.split(":")
        try:
            age = int(fields[0].strip())
        except ValueError:
            raise ValueError(f"子どもの年齢が不正です: {part!r}") from None
        child = {"current_age": age, "education_course": "all-public", "custom_annual_amount": 0.0}
        if len(fields) >= 2 and fields[1].strip():
            child["education_course"] = fields[1].strip()
        if len(fields) >= 3:
            child["custom_annual_amount"] = float(fields[2].strip())
        children.append(child)
    return children


def parse_major_expenses(s: str) -> list[dict]:
    """Parse "age:amount[:label],..." → list of enabled major expense dicts."""
    if not s or not str(s).strip():
        return []
    expenses = []
    for pair in str(s).split(","):
        pair = pair.strip()
        if not pair:
            continue
        parts = pair.split(":")
        if len(parts) < 2:
            raise ValueError(f"大きな支出は 年齢:金額[:ラベル] で指定してください: {pair!r}")
        age = int(parts[0].strip())
        amount = float(parts[1].strip())
        label = parts[2].strip() if len(parts) >= 3 else f"{amount:.0f}万"
        expenses.append({"target_age": age, "amount": amount, "label": label, "enabled": True})
    return sorted(expenses, key=lambda e: e["target_age"])


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared household flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="設定ファイルパス (default: config.toml)")
    parser.add_argument("--age", type=int, default=None, help=f"現在の年齢 (default: {d['age']})")
    parser.add_argument("--retirement-age", dest="retirement_age", type=int, default=None, help=f"リタイア年齢 (default: {d['retirement_age']})")
    parser.add_argument("--income", dest="annual_income", type=float, default=None, help="額面年収・万円（ボーナス込み）")
    parser.add_argument("--spouse-age", dest="spouse_age", type=int, default=None, help="配偶者の年齢（指定で配偶者ありとして計算）")
    parser.add_argument("--spouse-income", dest="spouse_annual_income", type=float, default=None, help="配偶者の額面年収・万円")
    parser.add_argument("--spouse-retirement-age", dest="spouse_retirement_age", type=int, default=None, help=f"配偶者のリタイア年齢 (default: {d['spouse_retirement_age']})")
    parser.add_argument("--children", type=str, default=None, help=f"子どもの年齢と教育プラン（例: 5:all-public,8:custom:80 / noneで子なし）プラン: {', '.join(EDUCATION_TRACKS)}")
    parser.add_argument("--cash", dest="current_cash", type=float, default=None, help="現金預金・万円（利回り0%%）")
    parser.add_argument("--investments", dest="current_investments", type=float, default=None, help="運用資産総額・万円（DC残高を含む）")
    parser.add_argument("--dc", dest="current_dc", type=float, default=None, help="確定拠出年金残高・万円（60歳まで取り崩し不可）")
    parser.add_argument("--monthly-expenses", dest="monthly_expenses", type=float, default=None, help="毎月の基本生活費・万円")
    parser.add_argument("--monthly-investment", dest="monthly_investment_amount", type=float, default=None, help="毎月の積立額・万円")
    parser.add_argument("--severance-pay", dest="severance_pay", type=float, default=None, help="退職金・万円（リタイア年に一括）")
    parser.add_argument("--monthly-pension", dest="monthly_pension", type=float, default=None, help="公的年金（世帯月額・万円、65歳から）")
    parser.add_argument("--housing", dest="housing_status", choices=["none", "planning", "existing"], default=None, help=f"住宅の状況 (default: {d['housing_status']})")
    parser.add_argument("--purchase-age", dest="housing_purchase_age", type=int, default=None, help=f"住宅購入年齢 (default: {d['housing_purchase_age']})")
    parser.add_argument("--housing-cost", dest="housing_cost", type=float, default=None, help=f"物件価格・万円 (default: {d['housing_cost']:.0f})")
    parser.add_argument("--down-payment", dest="housing_down_payment", type=float, default=None, help=f"頭金・万円 (default: {d['housing_down_payment']:.0f})")
    parser.add_argument("--loan-years", dest="housing_loan_years", type=int, default=None, help=f"ローン年数 (default: {d['housing_loan_years']})")
    parser.add_argument("--loan-rate", dest="housing_loan_rate", type=float, default=None, help=f"ローン金利%% (default: {d['housing_loan_rate']})")
    parser.add_argument("--major-expenses", dest="major_expenses", type=str, default=None, help="大きな支出（年齢:金額[:ラベル]のカンマ区切り、例: 35:300:車の購入）")
    parser.add_argument("--investment-rate", dest="investment_rate", type=float, default=None, help=f"想定運用利回り%%/年 (default: {d['investment_rate']})")
    parser.add_argument("--inflation-rate", dest="inflation_rate", type=float, default=None, help=f"想定インフレ率%%/年 (default: {d['inflation_rate']})")
    return parser


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    if getattr(args, "spouse_age", None) is not None:
        resolved["has_spouse"] = True
    # CLI文字列形式も設定ファイルのリスト形式に揃える
    if isinstance(resolved["children"], str):
        resolved["children"] = parse_children(resolved["children"])
    if isinstance(resolved["major_expenses"], str):
        resolved["major_expenses"] = parse_major_expenses(resolved["major_expenses"])
    return resolved


def build_household(r: dict) -> HouseholdState:
    """Build HouseholdState from resolved config dict."""
    return household_from_dict(r)


def build_params(r: dict) -> SimulationParams:
    return SimulationParams(
        investment_rate=float(r["investment_rate"]),
        inflation_rate=float(r["inflation_rate"]),
    )


def parse_args(
    description: str,
    add_args_fn: Callable[[argparse.ArgumentParser], None] | None = None,
) -> tuple[dict, argparse.Namespace]:
    """Parse CLI args, load config, resolve values.

    Returns (resolved_dict, namespace). Malformed list strings end the
    process with a message on stderr.
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args()
    try:
        config = load_config(args.config)
        r = resolve(args, config)
    except ValueError as e:
        print(f"入力エラー: {e}", file=sys.stderr)
        raise SystemExit(1)
    return r, args
