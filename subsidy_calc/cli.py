"""CLI client for the subsidy calculator API — posts a loan and prints a terminal report.

Usage:
    subsidy-calc --amount 50000000 --term 60 --bank-rate 20.5 --subsidy-rate 8.2
    subsidy-calc --amount 1000000 --term 12 --bank-rate 18 --subsidy-rate 10 --schedule
    subsidy-calc --program 3 --amount 10000000 --term 36
"""

import argparse
import asyncio
import logging
import sys
from decimal import Decimal

import httpx

from subsidy_calc.config import settings
from subsidy_calc.engine.formatting import format_currency, format_percentage

logger = logging.getLogger(__name__)


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_program(program: dict) -> None:
    _header("Программа")
    print(f"  Название:             {program['title']}")
    if program.get("defaultBankRate") is not None:
        print(f"  Ставка банка:         {format_percentage(program['defaultBankRate'])}")
    if program.get("defaultSubsidyRate") is not None:
        print(f"  Субсидия:             {format_percentage(program['defaultSubsidyRate'])}")
    if program.get("maxLoanTermMonths"):
        print(f"  Макс. срок:           {program['maxLoanTermMonths']} мес.")


def print_summary(summary: dict) -> None:
    loan = summary["input"]
    _header("Расчет субсидии")
    print(f"  Сумма кредита:        {format_currency(loan['loanAmount'])}")
    print(f"  Срок:                 {loan['loanTermMonths']} мес.")
    print(f"  Ставка банка:         {format_percentage(loan['bankRate'])}")
    print(f"  Эффективная ставка:   {format_percentage(summary['effectiveRate'])}")
    print()
    print(f"  Платеж без субсидии:  {format_currency(summary['monthlyPaymentBefore'])}")
    print(f"  Платеж с субсидией:   {format_currency(summary['monthlyPaymentAfter'])}")
    print(f"  Экономия в месяц:     {format_currency(summary['monthlySavings'])}")
    print(f"  Экономия за срок:     {format_currency(summary['totalSavings'])}")
    print()
    print(f"  Переплата без субсидии: {format_currency(summary['totalInterestBefore'])}")
    print(f"  Переплата с субсидией:  {format_currency(summary['totalInterestAfter'])}")


def print_schedule(schedule: list[dict]) -> None:
    if not schedule:
        return
    _header("График платежей")
    print(f"  {'Мес':>4}  {'Платеж до':>16}  {'Платеж после':>16}  {'Остаток до':>18}  {'Остаток после':>18}")
    print(f"  {'-' * 4}  {'-' * 16}  {'-' * 16}  {'-' * 18}  {'-' * 18}")
    for row in schedule:
        print(
            f"  {row['month']:>4}  {format_currency(row['paymentBefore']):>16}  "
            f"{format_currency(row['paymentAfter']):>16}  "
            f"{format_currency(row['balanceBefore']):>18}  {format_currency(row['balanceAfter']):>18}"
        )


# ── Main ─────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compare loan payments with and without an interest-rate subsidy"
    )
    parser.add_argument("--amount", type=Decimal, required=True, help="Loan amount, tenge")
    parser.add_argument("--term", type=int, required=True, help="Loan term in months")
    parser.add_argument("--bank-rate", type=Decimal, help="Bank's annual rate, %%")
    parser.add_argument("--subsidy-rate", type=Decimal, help="Subsidy, percentage points")
    parser.add_argument("--program", type=int, help="Use this program's rates and limits")
    parser.add_argument("--schedule", action="store_true", help="Also print the monthly schedule (ignored with --program)")
    parser.add_argument(
        "--api-url",
        default=settings.api_base_url,
        help=f"API base URL (default: {settings.api_base_url})",
    )
    return parser


def _endpoint_and_payload(args: argparse.Namespace) -> tuple[str, dict]:
    payload: dict = {"loanAmount": str(args.amount), "loanTermMonths": args.term}

    if args.program is not None:
        if args.bank_rate is not None:
            payload["customBankRate"] = str(args.bank_rate)
        if args.subsidy_rate is not None:
            payload["customSubsidyRate"] = str(args.subsidy_rate)
        return f"/api/calculator/program/{args.program}", payload

    payload["bankRate"] = str(args.bank_rate)
    payload["subsidyRate"] = str(args.subsidy_rate)
    return "/api/calculator/schedule" if args.schedule else "/api/calculator/calculate", payload


async def run(argv: list[str] | None = None, transport: httpx.AsyncBaseTransport | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.program is None and (args.bank_rate is None or args.subsidy_rate is None):
        parser.error("--bank-rate and --subsidy-rate are required without --program")

    path, payload = _endpoint_and_payload(args)

    async with httpx.AsyncClient(base_url=args.api_url, timeout=30, transport=transport) as client:
        try:
            resp = await client.post(path, json=payload)
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn subsidy_calc.api.app:app --reload", file=sys.stderr)
            return 1
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            return 1

    if resp.status_code != 200:
        print(f"Error: API returned {resp.status_code}", file=sys.stderr)
        try:
            detail = resp.json().get("error", resp.text)
        except ValueError:
            detail = resp.text
        print(f"  {detail}", file=sys.stderr)
        return 1

    data = resp.json()["data"]
    logger.debug("API response keys: %s", list(data.keys()))

    if "program" in data:
        print_program(data["program"])
        print_summary(data["calculation"])
    elif "schedule" in data:
        print_summary(data["summary"])
        print_schedule(data["schedule"])
    else:
        print_summary(data)
    print()
    return 0


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
