from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..models import DailySummary, DashboardSummary, SalesReportRow, StockReportRow
from .base import BaseClient, expect_list, expect_object


def _iso(day: date | str) -> str:
    return day.isoformat() if isinstance(day, date) else day


@dataclass
class ReportsClient(BaseClient):
    """Read-only figures the backend aggregates for the dashboard and reports screens."""

    def get_dashboard_summary(self) -> DashboardSummary:
        data = self._invoke("get_dashboard_summary", idempotent=True)
        return DashboardSummary.model_validate(expect_object(data, "get_dashboard_summary"))

    def get_sales_report(self, date_from: date | str, date_to: date | str) -> list[SalesReportRow]:
        start, end = _iso(date_from), _iso(date_to)
        if start > end:
            raise ValueError(f"date_from {start} is after date_to {end}")
        data = self._invoke("get_sales_report", {"date_from": start, "date_to": end}, idempotent=True)
        return [SalesReportRow.model_validate(row) for row in expect_list(data, "get_sales_report")]

    def get_daily_summary(self, day: date | str) -> DailySummary:
        data = self._invoke("get_daily_summary", {"date": _iso(day)}, idempotent=True)
        return DailySummary.model_validate(expect_object(data, "get_daily_summary"))

    def get_stock_report(self) -> list[StockReportRow]:
        data = self._invoke("get_stock_report", idempotent=True)
        return [StockReportRow.model_validate(row) for row in expect_list(data, "get_stock_report")]
