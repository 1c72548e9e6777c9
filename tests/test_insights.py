"""Tests for the AI summary boundary and console formatting."""

import json

import pytest
import requests

from sheet_sales.formatters.console import format_analysis_for_console, format_report_for_console
from sheet_sales.formatters.currency import format_vnd
from sheet_sales.insights import (
    AnalysisResult,
    analyze_daily_stats,
    build_prompt,
    gemini_generate,
    parse_analysis,
)
from sheet_sales.sales.api import build_report
from sheet_sales.types import DailyStat
from tests.test_utils import make_order

STATS = [
    DailyStat(date="2024-07-21", order_count=3, revenue=450000.0),
    DailyStat(date="2024-07-22", order_count=1, revenue=1200000.0),
]

ANSWER = json.dumps(
    {"summary": "Doanh thu ổn định", "trend": "Tăng", "recommendation": "Chạy quảng cáo"}
)


def test_prompt_lists_each_day() -> None:
    prompt = build_prompt(STATS)
    assert "2024-07-21: 3 orders, 450.000 đ" in prompt
    assert "2024-07-22: 1 orders, 1.200.000 đ" in prompt
    assert "Vietnamese" in prompt


def test_analyze_passes_prompt_and_key() -> None:
    seen: list[tuple[str, str]] = []

    def generate(prompt: str, api_key: str) -> str:
        seen.append((prompt, api_key))
        return ANSWER

    result = analyze_daily_stats(STATS, "secret", generate)

    assert result == AnalysisResult("Doanh thu ổn định", "Tăng", "Chạy quảng cáo")
    assert seen[0][1] == "secret"


def test_analyze_without_key_or_data_skips_generator() -> None:
    def generate(prompt: str, api_key: str) -> str:
        raise AssertionError("should not be called")

    assert analyze_daily_stats(STATS, None, generate) is None
    assert analyze_daily_stats([], "secret", generate) is None


def test_analyze_generator_failure_returns_none() -> None:
    def generate(prompt: str, api_key: str) -> str:
        raise RuntimeError("quota exceeded")

    assert analyze_daily_stats(STATS, "secret", generate) is None


def test_parse_analysis_variants() -> None:
    assert parse_analysis("not json") is None
    assert parse_analysis("[1, 2]") is None
    fenced = parse_analysis("```json\n" + ANSWER + "\n```")
    assert fenced is not None
    assert fenced.trend == "Tăng"


def test_format_vnd() -> None:
    assert format_vnd(1234567) == "1.234.567 đ"
    assert format_vnd(0) == "0 đ"


def test_console_report() -> None:
    orders = [
        make_order("1", "2024-07-21", 350000, quantity=2, customer="An", details="Áo thun"),
        make_order("2", "2024-07-22", 150000, customer="an", link="https://fb.com/an"),
        make_order("3", "2024-07-22", 1200000, customer="Bình"),
    ]
    text = format_report_for_console(build_report(orders))

    assert "Sales Report - all time" in text
    assert "Total revenue:       1.700.000 đ" in text
    assert "Total orders:        4" in text
    assert "1. Bình - 1 orders, 1.200.000 đ (last 22/07/2024)" in text
    assert "- Áo thun" in text
    assert "https://fb.com/an" in text


def test_console_empty_report() -> None:
    assert format_report_for_console(build_report([], "2024-07-01", "2024-07-31")) == (
        "No orders for 2024-07-01 to 2024-07-31."
    )


def test_console_analysis() -> None:
    text = format_analysis_for_console(AnalysisResult("s", "t", "r"))
    assert "Summary:        s" in text


class FakePostSession:
    def __init__(self, payload: dict, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code
        self.requests: list[dict] = []

    def post(self, url: str, **kwargs):
        self.requests.append({"url": url, **kwargs})
        response = requests.Response()
        response.status_code = self.status_code
        response._content = json.dumps(self.payload).encode("utf-8")
        response.url = url
        return response


def test_gemini_generate_posts_prompt_and_joins_parts() -> None:
    session = FakePostSession(
        {"candidates": [{"content": {"parts": [{"text": '{"summary": '}, {"text": '"ok"}'}]}}]}
    )
    text = gemini_generate("hello", "secret", session=session)

    assert text == '{"summary": "ok"}'
    sent = session.requests[0]
    assert sent["url"].endswith(":generateContent")
    assert sent["headers"] == {"x-goog-api-key": "secret"}
    assert sent["json"]["contents"][0]["parts"][0]["text"] == "hello"


def test_gemini_http_error_gives_no_analysis() -> None:
    session = FakePostSession({"error": {"message": "quota"}}, status_code=429)
    with pytest.raises(requests.HTTPError):
        gemini_generate("hello", "secret", session=session)

    def generate(prompt: str, api_key: str) -> str:
        return gemini_generate(prompt, api_key, session=session)

    assert analyze_daily_stats(STATS, "secret", generate) is None


def test_gemini_generate_without_candidates() -> None:
    assert gemini_generate("hello", "secret", session=FakePostSession({})) == ""
