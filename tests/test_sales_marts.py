"""Tests for customer grouping, daily stats, top customers and totals."""

import pytest

from sheet_sales.sales.marts import (
    compute_totals,
    daily_stats,
    daily_stats_frame,
    group_by_customer,
    merge_order,
    seed_group,
    top_customers,
)
from sheet_sales.types import DailyStat
from tests.test_utils import at, make_order


def test_names_differing_in_case_and_space_are_merged() -> None:
    orders = [
        make_order("1", "2024-07-21", 100, customer="An"),
        make_order("2", "2024-07-22", 250, customer=" an "),
    ]
    grouped = group_by_customer(orders)

    assert len(grouped) == 1
    group = grouped[0]
    assert len(group.sub_orders) == 2
    assert group.amount == 350
    assert group.quantity == 2
    assert group.customer_name == " an "
    assert group.date == at("2024-07-22")


def test_merge_follows_date_order_not_input_order() -> None:
    newer = make_order("new", "2024-07-23", 10, details="second", link="https://fb.com/new")
    older = make_order("old", "2024-07-21", 20, details="first")
    middle = make_order("mid", "2024-07-22", 30, details="", link="https://fb.com/mid")

    group = group_by_customer([newer, older, middle])[0]

    assert [o.id for o in group.sub_orders] == ["old", "mid", "new"]
    assert group.details == "- first\n- second"
    assert group.facebook_link == "https://fb.com/mid"
    assert group.date == at("2024-07-23")
    assert group.id == "old"


def test_equal_dates_keep_processing_order() -> None:
    a = make_order("a", "2024-07-21", 1, details="a")
    b = make_order("b", "2024-07-21", 1, details="b")
    group = group_by_customer([a, b])[0]
    assert group.details == "- a\n- b"


def test_seed_without_details_and_later_detail() -> None:
    group = seed_group(make_order("1", "2024-07-21", 5))
    assert group.details == ""
    merged = merge_order(group, make_order("2", "2024-07-22", 5, details="note"))
    assert merged.details == "- note"


def test_merge_is_pure() -> None:
    first = make_order("1", "2024-07-21", 100)
    group = seed_group(first)
    merged = merge_order(group, make_order("2", "2024-07-22", 50))

    assert group.amount == 100
    assert group.sub_orders == (first,)
    assert merged.amount == 150
    assert len(merged.sub_orders) == 2


def test_grouped_output_sorted_by_amount_descending() -> None:
    orders = [
        make_order("1", "2024-07-21", 100, customer="A"),
        make_order("2", "2024-07-21", 500, customer="B"),
        make_order("3", "2024-07-22", 300, customer="C"),
        make_order("4", "2024-07-23", 300, customer="A"),
    ]
    grouped = group_by_customer(orders)
    assert [(g.customer_name, g.amount) for g in grouped] == [("B", 500), ("A", 400), ("C", 300)]


def test_daily_stats_buckets_by_day_ascending() -> None:
    orders = [
        make_order("1", "2024-07-22", 300, quantity=2),
        make_order("2", "2024-07-21", 100),
        make_order("3", "2024-07-22", 50, quantity=3, hour=23),
    ]
    stats = daily_stats(orders)

    assert stats == [
        DailyStat(date="2024-07-21", order_count=1, revenue=100.0),
        DailyStat(date="2024-07-22", order_count=5, revenue=350.0),
    ]


def test_daily_stats_empty() -> None:
    assert daily_stats([]) == []
    assert list(daily_stats_frame([]).columns) == ["date", "order_count", "revenue"]


def test_top_customers_limited_and_non_increasing() -> None:
    orders = [
        make_order(str(i), "2024-07-21", 100 * (i + 1), quantity=i + 1, customer=f"C{i}")
        for i in range(7)
    ]
    top = top_customers(group_by_customer(orders))

    assert len(top) == 5
    revenues = [c.total_revenue for c in top]
    assert revenues == sorted(revenues, reverse=True)
    assert top[0].name == "C6"
    assert top[0].total_orders == 7
    assert top[0].last_order_date == at("2024-07-21")


def test_top_customers_fewer_than_limit() -> None:
    top = top_customers(group_by_customer([make_order("1", "2024-07-21", 10)]))
    assert len(top) == 1


def test_compute_totals() -> None:
    totals = compute_totals(
        [
            DailyStat(date="2024-07-21", order_count=3, revenue=300.0),
            DailyStat(date="2024-07-22", order_count=1, revenue=100.0),
        ]
    )
    assert totals.total_revenue == 400
    assert totals.total_orders == 4
    assert totals.average_order_value == pytest.approx(100.0)


def test_compute_totals_without_orders() -> None:
    totals = compute_totals([])
    assert totals.total_revenue == 0
    assert totals.total_orders == 0
    assert totals.average_order_value == 0
