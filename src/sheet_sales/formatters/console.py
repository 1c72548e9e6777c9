"""Console output formatting utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sheet_sales.formatters.currency import format_day, format_vnd

if TYPE_CHECKING:
    from sheet_sales.insights import AnalysisResult
    from sheet_sales.sales.api import SalesReport


def _range_label(report: SalesReport) -> str:
    if not report.start_date and not report.end_date:
        return "all time"
    return f"{report.start_date or '...'} to {report.end_date or '...'}"


def format_report_for_console(report: SalesReport, max_customers: int | None = 20) -> str:
    """Build a human-readable text version of a sales report.

    Args:
        report: SalesReport to render.
        max_customers: Maximum number of grouped customers listed; None
            lists all of them.

    Returns:
        Multi-line text for console output.

    """
    if report.is_empty:
        return f"No orders for {_range_label(report)}."

    lines = []
    lines.append(f"Sales Report - {_range_label(report)}")
    lines.append("=" * 60)

    totals = report.totals
    lines.append(f"Total revenue:       {format_vnd(totals.total_revenue)}")
    lines.append(f"Total orders:        {totals.total_orders}")
    lines.append(f"Average order value: {format_vnd(totals.average_order_value)}")
    lines.append("")

    lines.append("Daily:")
    for d in report.daily_stats:
        lines.append(f"  {d.date}  {d.order_count:>4} orders  {format_vnd(d.revenue):>16}")
    lines.append("")

    lines.append("Top customers:")
    for i, c in enumerate(report.top_customers, start=1):
        lines.append(
            f"  {i}. {c.name} - {c.total_orders} orders, {format_vnd(c.total_revenue)}"
            f" (last {format_day(c.last_order_date)})"
        )
    lines.append("")

    grouped = report.grouped if max_customers is None else report.grouped[:max_customers]
    lines.append(f"Customers ({len(report.grouped)}):")
    for g in grouped:
        lines.append(
            f"  {format_day(g.date)}  {g.customer_name}  x{g.quantity}  {format_vnd(g.amount)}"
        )
        if g.facebook_link:
            lines.append(f"      {g.facebook_link}")
        for detail in g.details.splitlines():
            lines.append(f"      {detail}")
    if len(grouped) < len(report.grouped):
        lines.append(f"  ... {len(report.grouped) - len(grouped)} more")

    return "\n".join(lines)


def format_analysis_for_console(result: AnalysisResult) -> str:
    return "\n".join(
        [
            "AI analysis:",
            f"  Summary:        {result.summary}",
            f"  Trend:          {result.trend}",
            f"  Recommendation: {result.recommendation}",
        ]
    )
