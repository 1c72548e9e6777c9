"""Natural-language summary of daily sales via an external text model.

Only the daily stats and an API credential cross this boundary. The model
client itself is injected as a ``generate(prompt, api_key)`` callable, so
this module builds the prompt, calls the generator and parses its JSON
answer. ``gemini_generate`` is the default generator used by the CLI; it
talks to the REST endpoint through requests instead of a model SDK.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import requests

from sheet_sales.formatters.currency import format_vnd
from sheet_sales.types import DailyStat

logger = logging.getLogger(__name__)

TextGenerator = Callable[[str, str], str]

GEMINI_MODEL = "gemini-2.5-flash"
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

PROMPT_TEMPLATE = """\
You are a business data analyst.
Below is daily sales data (Day: number of orders, revenue):
{data}

Analyse this data and answer with JSON only (no markdown) with these fields:
1. "summary": a short overview of sales performance.
2. "trend": a comment on the upward or downward trend.
3. "recommendation": one short piece of advice to improve sales based on the data.

Answer in {language}.
"""


@dataclass(frozen=True)
class AnalysisResult:
    summary: str
    trend: str
    recommendation: str


def gemini_generate(
    prompt: str,
    api_key: str,
    model: str = GEMINI_MODEL,
    session: requests.Session | None = None,
    timeout: float = 60.0,
) -> str:
    """TextGenerator backed by the Gemini generateContent REST endpoint.

    Raises:
        requests.HTTPError: On a 4xx or 5xx answer.

    """
    s = session or requests.Session()
    resp = s.post(
        GEMINI_URL.format(model=model),
        headers={"x-goog-api-key": api_key},
        json={"contents": [{"parts": [{"text": prompt}]}]},
        timeout=timeout,
    )
    resp.raise_for_status()
    payload = resp.json()
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""
    parts = candidates[0].get("content", {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts)


def format_daily_lines(stats: Sequence[DailyStat]) -> str:
    """One "date: N orders, revenue" line per day."""
    return "\n".join(f"{d.date}: {d.order_count} orders, {format_vnd(d.revenue)}" for d in stats)


def build_prompt(stats: Sequence[DailyStat], language: str = "Vietnamese") -> str:
    return PROMPT_TEMPLATE.format(data=format_daily_lines(stats), language=language)


def parse_analysis(text: str) -> AnalysisResult | None:
    """Parse the model's JSON answer; None if it is not usable."""
    cleaned = text.strip()
    # tolerate ```json fences
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("Sales analysis is not valid JSON: %s", e)
        return None
    if not isinstance(payload, dict):
        logger.error("Sales analysis is not a JSON object")
        return None
    return AnalysisResult(
        summary=str(payload.get("summary", "")),
        trend=str(payload.get("trend", "")),
        recommendation=str(payload.get("recommendation", "")),
    )


def analyze_daily_stats(
    stats: Sequence[DailyStat],
    api_key: str | None,
    generate: TextGenerator,
    language: str = "Vietnamese",
) -> AnalysisResult | None:
    """Ask a text model for a summary of the daily stats.

    Args:
        stats: Daily stats to summarize.
        api_key: Credential passed through to ``generate``.
        generate: Callable taking (prompt, api_key) and returning text.
        language: Language the answer should be written in.

    Returns:
        AnalysisResult, or None when no credential is set, there is no
        data, or the model call fails. A missing summary never breaks the
        report.

    """
    if not api_key:
        logger.warning("No API key configured, skipping sales analysis")
        return None
    if not stats:
        return None

    prompt = build_prompt(stats, language=language)
    try:
        text = generate(prompt, api_key)
    except Exception as e:
        logger.error("Sales analysis failed: %s", e)
        return None
    if not text:
        return None
    return parse_analysis(text)
