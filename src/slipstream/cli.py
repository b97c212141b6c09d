"""Command-line entry point for running payslip batches outside the API.

Usage:
    slipstream generate --month 2025-07 [--employee FINZ001] [--limit 5]
    slipstream resend --month 2025-07 [--employee FINZ001]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from slipstream.context import AppContext
from slipstream.core.exceptions import NotFoundError, SlipstreamError, ValidationError
from slipstream.core.logging import configure_logging


async def _run(ctx: AppContext, args: argparse.Namespace) -> dict[str, Any]:
    service = ctx.payslips()
    if args.command == "generate":
        if args.employee:
            return (await service.generate_for_employee(args.employee, args.month)).to_summary()
        return (await service.generate_all(args.month, args.limit)).to_summary()
    if args.employee:
        return (await service.resend_email(args.employee, args.month)).to_summary()
    return (await service.send_all_emails(args.month, args.limit)).to_summary()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="slipstream", description="Monthly payslip pipeline")
    sub = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (("generate", "Generate and deliver payslips"),
                            ("resend", "Email already generated payslips again")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--month", required=True, help="Month as YYYY-MM")
        cmd.add_argument("--employee", default=None, help="Limit to one employee code")
        cmd.add_argument("--limit", type=int, default=None, help="Concurrency limit override")
    return parser


def main(argv: list[str] | None = None, context: AppContext | None = None) -> int:
    args = build_parser().parse_args(argv)
    ctx = context or AppContext()
    configure_logging(ctx.settings.log_level)
    try:
        summary = asyncio.run(_run(ctx, args))
    except ValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except NotFoundError as exc:
        print(f"nothing to do: {exc}", file=sys.stderr)
        return 3
    except SlipstreamError as exc:
        print(f"failed: {exc}", file=sys.stderr)
        return 1
    finally:
        if context is None:
            ctx.close()
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
