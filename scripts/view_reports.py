#!/usr/bin/env python3
"""
View back-office reports from persisted database data.

Connects to the configured database (tables and data must already exist)
and prints the requested report as JSON.

Usage:
    python3 scripts/view_reports.py dashboard
    python3 scripts/view_reports.py trial-balance --start 2024-01-01 --end 2024-01-31
    python3 scripts/view_reports.py product-items --status confirmed
    python3 scripts/view_reports.py top-products --limit 5 --database-url sqlite:///ceramics.db
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path

REPORTS = (
    "dashboard",
    "top-products",
    "top-cities",
    "payment-breakdown",
    "trial-balance",
    "product-items",
    "extract-summary",
)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print a back-office report as JSON")
    parser.add_argument("report", choices=REPORTS)
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML configuration set (default: bundled default.yaml)")
    parser.add_argument("--database-url", default=None,
                        help="Override the configured database URL")
    parser.add_argument("--start", type=date.fromisoformat, default=None)
    parser.add_argument("--end", type=date.fromisoformat, default=None)
    parser.add_argument("--limit", type=int, default=None)
    parser.add_argument("--account", default=None,
                        help="Payment method / bank account (e.g. cash, bbj)")
    parser.add_argument("--status", default=None, help="Sale status for product-items")
    parser.add_argument("--search", default=None, help="Trial balance expense search")
    parser.add_argument("--output", type=Path, default=None,
                        help="Write rendered trial-balance / product-items bytes here")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    from ceramics_config import get_active_config
    from ceramics_engines.product_items import ProductItemsFilters
    from ceramics_engines.reconciliation import TrialBalanceFilters
    from ceramics_kernel.db.engine import get_session, init_engine_from_url
    from ceramics_kernel.domain.catalog import PaymentMethod, SaleStatus, parse_enum
    from ceramics_kernel.domain.clock import SystemClock
    from ceramics_kernel.exceptions import CeramicsError
    from ceramics_kernel.logging_config import configure_logging
    from ceramics_kernel.selectors.sql_source import SqlReportingSource
    from ceramics_modules.reporting import (
        JsonReportRenderer,
        ReportingConfig,
        ReportingService,
        render_to_dict,
    )

    config_set = get_active_config(args.config)
    configure_logging(level=config_set.log_level)

    database_url = args.database_url or config_set.database_url
    if not database_url:
        print("  ERROR: no database URL configured", file=sys.stderr)
        return 1

    try:
        account = parse_enum(PaymentMethod, args.account) if args.account else None
        status = parse_enum(SaleStatus, args.status) if args.status else None
    except CeramicsError as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 2

    # -----------------------------------------------------------------
    # Connect
    # -----------------------------------------------------------------
    try:
        init_engine_from_url(database_url, echo=False)
    except Exception as exc:
        print(f"  ERROR: Could not connect: {exc}", file=sys.stderr)
        return 1

    session = get_session()
    try:
        svc = ReportingService(
            source=SqlReportingSource(session),
            clock=SystemClock(),
            config=ReportingConfig.from_dict(config_set.reporting),
        )
        renderer = JsonReportRenderer()

        try:
            if args.report == "dashboard":
                report = svc.sales_indicators()
            elif args.report == "top-products":
                report = svc.top_products(args.start, args.end, args.limit)
            elif args.report == "top-cities":
                report = svc.top_cities(args.start, args.end, args.limit)
            elif args.report == "payment-breakdown":
                report = svc.payment_breakdown(args.start, args.end)
            elif args.report == "extract-summary":
                report = svc.extract_summary(args.start, args.end, account)
            elif args.report == "trial-balance":
                filters = TrialBalanceFilters(account=account, search=args.search)
                if args.output:
                    args.output.write_bytes(
                        svc.render_trial_balance_pdf(renderer, args.start, args.end, filters)
                    )
                    return 0
                report = svc.trial_balance(args.start, args.end, filters)
            else:
                filters = ProductItemsFilters(status=status, payment_method=account)
                if args.output:
                    args.output.write_bytes(
                        svc.render_product_items_pdf(renderer, args.start, args.end, filters)
                    )
                    return 0
                report = svc.product_items(args.start, args.end, filters)
        except CeramicsError as exc:
            print(f"  ERROR [{exc.code}]: {exc}", file=sys.stderr)
            return 1

        print(json.dumps(render_to_dict(report), indent=2, ensure_ascii=False))
        return 0

    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(main())
