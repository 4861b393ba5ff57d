"""OpenAI wrapper.

One chat completion per review, forced to JSON output.
"""
from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional, Tuple

from flask import current_app
from openai import OpenAI

SYSTEM_PROMPT = """You are a contracts analyst for creator/brand deals. Return STRICT JSON only. Fields:
  {
    "snapshot": {"parties":string,"dates":string,"term":string,"rate":string,"deliverables":string,"usage":string,"brandBrief":string|null,"additionalReqs":string|null,"billing":string|null},
    "risks": Array<{"label":string,"level":"Low"|"Med"|"High","note"?:string}>,
    "counters": string[]
  }
  Do NOT include late fees in counters."""


def client_ready() -> Tuple[bool, str]:
    key = (current_app.config.get("OPENAI_API_KEY") or "").strip()
    if not key:
        return False, "OPENAI_API_KEY is missing"
    return True, ""


def model_name() -> str:
    return (current_app.config.get("OPENAI_MODEL") or "").strip() or "gpt-4o-mini"


def get_client():
    ok, _ = client_ready()
    if not ok:
        return None
    key = current_app.config["OPENAI_API_KEY"].strip()
    return OpenAI(api_key=key, timeout=current_app.config.get("OPENAI_TIMEOUT", 60))


def user_prompt(contract_text: str) -> str:
    return f"Contract text:\n\n{contract_text}"


def safe_json_loads(s: str) -> Optional[Dict[str, Any]]:
    """Parse a model reply into a dict, or ``None`` if it is not a JSON object."""
    if not s:
        return None

    # Strip markdown code blocks if present
    text = s.strip()
    if text.startswith("```"):
        lines = text.split("\n", 1)
        if len(lines) > 1:
            text = lines[1]
        if text.endswith("```"):
            text = text[:-3].strip()
        elif "```" in text:
            text = text.rsplit("```", 1)[0].strip()

    try:
        obj = json.loads(text)
        if isinstance(obj, dict):
            return obj
    except ValueError:
        pass

    # Fallback: extract first JSON object from text
    m = re.search(r"\{.*\}", text, flags=re.DOTALL)
    if m:
        try:
            obj = json.loads(m.group(0))
            if isinstance(obj, dict):
                return obj
        except ValueError:
            pass
    return None


def review_contract(contract_text: str) -> Tuple[Dict[str, Any], str]:
    """
    Ask the model for a contract review.

    Returns ``(data, error)``. A reply that is not valid JSON yields ``{}``
    with no error; only a missing client or a failed request sets ``error``.
    """
    log = current_app.logger
    client = get_client()
    if client is None:
        _, msg = client_ready()
        return {}, msg or "Client not available"

    try:
        with client:
            res = client.chat.completions.create(
                model=model_name(),
                temperature=current_app.config.get("OPENAI_TEMPERATURE", 0.2),
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt(contract_text)},
                ],
                response_format={"type": "json_object"},
            )
    except Exception as e:
        return {}, f"LLM request failed: {type(e).__name__}: {e}"

    content = "{}"
    if res.choices:
        content = res.choices[0].message.content or "{}"

    data = safe_json_loads(content)
    if data is None:
        log.warning("Model reply was not a JSON object (%d chars), using empty result", len(content))
        return {}, ""
    return data, ""
