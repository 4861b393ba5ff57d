"""
Review result normalization.

The model output is untrusted: any field may be missing, null, the wrong type,
or shaped differently from what the prompt asked for. Everything the UI renders
goes through here first so the response always has the same shape.
"""
import json
import re
from typing import Any, Dict, List

REQUIRED_SNAPSHOT_FIELDS = ("parties", "dates", "term", "rate", "deliverables", "usage")
OPTIONAL_SNAPSHOT_FIELDS = ("brandBrief", "additionalReqs", "billing")

RISK_LEVELS = ("Low", "Med", "High")
DEFAULT_RISK_LEVEL = "Med"

_LEVEL_ALIASES = {
    "low": "Low",
    "minor": "Low",
    "med": "Med",
    "medium": "Med",
    "moderate": "Med",
    "mid": "Med",
    "high": "High",
    "severe": "High",
    "critical": "High",
}

BANNED_COUNTER_RE = re.compile(r"late fee", re.IGNORECASE)


def clean_str(value: Any) -> str:
    """Coerce any JSON value to a string. ``None`` becomes ``""``."""
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, dict)):
        try:
            return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError):
            return ""
    try:
        return str(value)
    except Exception:
        return ""


def normalize_snapshot(obj: Any) -> Dict[str, str]:
    if not isinstance(obj, dict):
        obj = {}

    snapshot = {field: clean_str(obj.get(field)) for field in REQUIRED_SNAPSHOT_FIELDS}
    for field in OPTIONAL_SNAPSHOT_FIELDS:
        val = clean_str(obj.get(field))
        if val:
            snapshot[field] = val
    return snapshot


def normalize_level(value: Any) -> str:
    level = clean_str(value).strip()
    if level in RISK_LEVELS:
        return level
    return _LEVEL_ALIASES.get(level.lower(), DEFAULT_RISK_LEVEL)


def normalize_risks(value: Any) -> List[Dict[str, str]]:
    if not isinstance(value, list):
        return []

    risks = []
    for item in value:
        if isinstance(item, str):
            item = {"label": item}
        if not isinstance(item, dict):
            continue
        label = clean_str(item.get("label"))
        if not label.strip():
            continue
        risk = {"label": label, "level": normalize_level(item.get("level"))}
        note = clean_str(item.get("note"))
        if note:
            risk["note"] = note
        risks.append(risk)
    return risks


def is_banned_counter(text: str) -> bool:
    return bool(BANNED_COUNTER_RE.search(text or ""))


def normalize_counters(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    counters = [clean_str(c) for c in value]
    return [c for c in counters if c.strip() and not is_banned_counter(c)]


def normalize_result(data: Any) -> Dict[str, Any]:
    """
    Build a ReviewResult from arbitrary parsed JSON.

    Returns a dict with ``snapshot``, ``risks`` and ``counters`` always present
    and ``rawText`` only when non-empty.
    """
    if not isinstance(data, dict):
        data = {}

    result: Dict[str, Any] = {
        "snapshot": normalize_snapshot(data.get("snapshot")),
        "risks": normalize_risks(data.get("risks")),
        "counters": normalize_counters(data.get("counters")),
    }
    raw_text = clean_str(data.get("rawText"))
    if raw_text:
        result["rawText"] = raw_text
    return result
