"""Time, expense, uninvoiced and project budget reports.

Report endpoints are read-only and paginate by page number; their rows are
returned under ``results``.
"""

import builtins
from typing import TYPE_CHECKING

from .context import Context
from .crud import fetch_page
from .models import ExpenseReport, Page, ProjectBudgetReport, TimeReport, UninvoicedReport
from .options import (
    ExpenseReportOptions,
    ProjectBudgetReportOptions,
    TimeReportOptions,
    UninvoicedReportOptions,
)
from .pagination import PaginationMode, list_all

if TYPE_CHECKING:
    from .client import HarvestClient

TIME_REPORT_PATH = "reports/time/team"
EXPENSE_REPORT_PATH = "reports/expenses/team"
UNINVOICED_REPORT_PATH = "reports/uninvoiced"
PROJECT_BUDGET_REPORT_PATH = "reports/project_budget"


class ReportsService:
    def __init__(self, client: "HarvestClient"):
        self._client = client

    def time_page(self, opts: TimeReportOptions, *, ctx: Context | None = None) -> Page[TimeReport]:
        return fetch_page(self._client, TIME_REPORT_PATH, TimeReport, opts, ctx=ctx)

    def time(self, opts: TimeReportOptions, *, ctx: Context | None = None) -> builtins.list[TimeReport]:
        return list_all(self._client, TIME_REPORT_PATH, TimeReport, opts, PaginationMode.PAGE_NUMBER, ctx=ctx)

    def expenses_page(self, opts: ExpenseReportOptions, *, ctx: Context | None = None) -> Page[ExpenseReport]:
        return fetch_page(self._client, EXPENSE_REPORT_PATH, ExpenseReport, opts, ctx=ctx)

    def expenses(self, opts: ExpenseReportOptions, *, ctx: Context | None = None) -> builtins.list[ExpenseReport]:
        return list_all(self._client, EXPENSE_REPORT_PATH, ExpenseReport, opts, PaginationMode.PAGE_NUMBER, ctx=ctx)

    def uninvoiced_page(self, opts: UninvoicedReportOptions, *, ctx: Context | None = None) -> Page[UninvoicedReport]:
        return fetch_page(self._client, UNINVOICED_REPORT_PATH, UninvoicedReport, opts, ctx=ctx)

    def uninvoiced(
        self, opts: UninvoicedReportOptions, *, ctx: Context | None = None
    ) -> builtins.list[UninvoicedReport]:
        return list_all(
            self._client, UNINVOICED_REPORT_PATH, UninvoicedReport, opts, PaginationMode.PAGE_NUMBER, ctx=ctx
        )

    def project_budget_page(
        self, opts: ProjectBudgetReportOptions | None = None, *, ctx: Context | None = None
    ) -> Page[ProjectBudgetReport]:
        return fetch_page(self._client, PROJECT_BUDGET_REPORT_PATH, ProjectBudgetReport, opts, ctx=ctx)

    def project_budget(
        self, opts: ProjectBudgetReportOptions | None = None, *, ctx: Context | None = None
    ) -> builtins.list[ProjectBudgetReport]:
        return list_all(
            self._client, PROJECT_BUDGET_REPORT_PATH, ProjectBudgetReport, opts, PaginationMode.PAGE_NUMBER, ctx=ctx
        )
