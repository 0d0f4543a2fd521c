"""
Report renderer port.

Printable output (PDF and the like) is produced outside the core by a
``ReportRenderer``: it receives a finished report DTO plus the company
letterhead and returns the encoded document.  The core ships one concrete
renderer, ``JsonReportRenderer``, used by the command-line viewer and by
tests.
"""

from __future__ import annotations

import json
from typing import Protocol, runtime_checkable

from ceramics_modules.reporting.assembler import render_to_dict
from ceramics_modules.reporting.config import CompanyProfile
from ceramics_modules.reporting.models import ProductItemsReport, TrialBalanceReport


@runtime_checkable
class ReportRenderer(Protocol):
    """Turns a report DTO into document bytes."""

    def render_trial_balance(
        self, report: TrialBalanceReport, company: CompanyProfile,
    ) -> bytes:
        ...

    def render_product_items(
        self, report: ProductItemsReport, company: CompanyProfile,
    ) -> bytes:
        ...


class JsonReportRenderer:
    """UTF-8 JSON document with the letterhead under ``company``."""

    def __init__(self, indent: int | None = 2):
        self._indent = indent

    def _encode(self, report: object, company: CompanyProfile) -> bytes:
        document = {
            "company": render_to_dict(company),
            "report": render_to_dict(report),
        }
        return json.dumps(
            document, indent=self._indent, ensure_ascii=False, sort_keys=True,
        ).encode("utf-8")

    def render_trial_balance(
        self, report: TrialBalanceReport, company: CompanyProfile,
    ) -> bytes:
        return self._encode(report, company)

    def render_product_items(
        self, report: ProductItemsReport, company: CompanyProfile,
    ) -> bytes:
        return self._encode(report, company)
