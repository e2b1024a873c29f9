"""
Natural-language questions about the facility data.
Sends {"question": ...} to the configured chat endpoint and returns its "answer".
Without an endpoint, falls back to an OpenAI chat completion grounded on a short
summary of the current dashboard numbers. Single request, no retry.
"""

import json
import logging
import urllib.error
import urllib.request

from facility_insights.config import CHAT_API_KEY, CHAT_ENDPOINT_URL, LLM_MODEL, OPENAI_API_KEY
from facility_insights.models import DashboardStats, RegionStats
from facility_insights.regions import coverage_label

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Failed to get response"
REQUEST_TIMEOUT_SECONDS = 30


class AssistantError(Exception):
    """The question endpoint failed; str(err) is the server's message or a generic fallback."""


def _system_prompt() -> str:
    return """You are an assistant for a healthcare facility monitoring dashboard.
Answer questions about facility coverage, medical deserts, and data quality using the summary provided.
Be concise. If the summary does not contain the answer, say so rather than guessing."""


def stats_context(stats: DashboardStats, regions: list[RegionStats]) -> str:
    """Plain-text summary of the current snapshot for grounding answers."""
    lines = [
        f"Facilities: {stats.total_facilities}",
        f"Medical deserts (regions with <2 facilities): {stats.medical_deserts}",
        f"Incomplete records: {stats.incomplete_records}",
        f"Suspicious claims (surgery without equipment): {stats.suspicious_claims}",
        "Regions:",
    ]
    for r in regions:
        lines.append(
            f"- {r.region}: {r.total_facilities} facilities, coverage {r.coverage_score} "
            f"({coverage_label(r.coverage_score)}), cardiac {r.with_cardiac}, "
            f"emergency {r.with_emergency}, surgical {r.with_surgical}, incomplete {r.incomplete_data}"
        )
    return "\n".join(lines)


def _error_message(body: bytes) -> str:
    try:
        data = json.loads(body.decode("utf-8", errors="replace"))
    except (json.JSONDecodeError, ValueError):
        return GENERIC_ERROR
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return GENERIC_ERROR


def _ask_endpoint(url: str, question: str, api_key: str = "") -> str:
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    req = urllib.request.Request(
        url,
        data=json.dumps({"question": question}).encode("utf-8"),
        headers=headers,
        method="POST",
    )
    try:
        with urllib.request.urlopen(req, timeout=REQUEST_TIMEOUT_SECONDS) as resp:
            body = resp.read()
    except urllib.error.HTTPError as e:
        message = _error_message(e.read())
        logger.error("Question endpoint returned %s: %s", e.code, message)
        raise AssistantError(message) from e
    except urllib.error.URLError as e:
        logger.error("Question endpoint unreachable: %s", e.reason)
        raise AssistantError(GENERIC_ERROR) from e

    try:
        data = json.loads(body.decode("utf-8", errors="replace"))
    except json.JSONDecodeError as e:
        raise AssistantError(GENERIC_ERROR) from e
    if not isinstance(data, dict):
        raise AssistantError(GENERIC_ERROR)
    if data.get("error"):
        raise AssistantError(str(data["error"]))
    answer = data.get("answer")
    if not answer:
        raise AssistantError(GENERIC_ERROR)
    return str(answer)


def _ask_openai(question: str, context: str = "") -> str:
    from openai import OpenAI, OpenAIError

    client = OpenAI(api_key=OPENAI_API_KEY)
    user = f"Dashboard summary:\n{context}\n\nQuestion: {question}" if context else question
    try:
        r = client.chat.completions.create(
            model=LLM_MODEL,
            messages=[
                {"role": "system", "content": _system_prompt()},
                {"role": "user", "content": user},
            ],
            max_tokens=500,
        )
    except OpenAIError as e:
        logger.error("OpenAI call failed: %s", e)
        raise AssistantError(str(e) or GENERIC_ERROR) from e
    out = (r.choices[0].message.content or "").strip()
    if not out:
        raise AssistantError(GENERIC_ERROR)
    return out


def ask(question: str, context: str = "", endpoint: str | None = None) -> str:
    """Answer one question. Raises ValueError for an empty question, AssistantError on failure."""
    q = (question or "").strip()
    if not q:
        raise ValueError("Question must not be empty.")
    url = CHAT_ENDPOINT_URL if endpoint is None else endpoint
    if url:
        return _ask_endpoint(url, q, CHAT_API_KEY)
    if OPENAI_API_KEY:
        return _ask_openai(q, context)
    raise AssistantError("No question endpoint configured; set CHAT_ENDPOINT_URL or OPENAI_API_KEY.")
