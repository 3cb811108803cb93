"""Turn Bazaar API error bodies into one-line messages for Locust.

Shapes seen from the API:

- request validation (422): {"detail": [{"loc": [...], "msg": "..."}]}
- domain errors: {"error": "msg"} or {"error": {"field": ["msg", ...]}},
  optionally with a "correlation_id"
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

MAX_DETAIL = 300


def _field_messages(errors: dict) -> str:
    parts = []
    for field, messages in errors.items():
        if isinstance(messages, list):
            messages = "; ".join(str(m) for m in messages)
        parts.append(f"{field}: {messages}")
    return " | ".join(parts)


def extract_error_detail(response: Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return (getattr(response, "text", "") or "")[:MAX_DETAIL] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:MAX_DETAIL]

    if isinstance(body.get("detail"), list):
        return " | ".join(
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg', err)}" for err in body["detail"]
        )

    error = body.get("error")
    if error is None:
        return str(body)[:MAX_DETAIL]

    detail = _field_messages(error) if isinstance(error, dict) else str(error)
    if body.get("correlation_id"):
        detail = f"{detail} (correlation_id={body['correlation_id']})"
    return detail[:MAX_DETAIL]
