"""Helper functions exposed to every template.

Each helper is registered with the Jinja2 environment twice: as a global, so
templates can call ``{{ eq(a, b) }}``, and as a filter, so they can pipe
``{{ screen.name | pascal_case }}``.  Helpers are pure functions of their
arguments; none of them reads the clock or any process-wide state, which
keeps rendering reproducible across runs.
"""

from __future__ import annotations

import json as _json
import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone
from typing import Any, Callable

from pydantic import BaseModel

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]?[a-z0-9]+|[A-Z]+")


def _words(value: Any) -> list[str]:
    """Split ``"myScreen"``, ``"My Screen"`` or ``"my-screen_2"`` into words."""
    return _WORD_RE.findall(str(value))


# ---------------------------------------------------------------------------
# Comparison & boolean helpers
# ---------------------------------------------------------------------------

def eq(a: Any, b: Any) -> bool:
    return a == b


def ne(a: Any, b: Any) -> bool:
    return a != b


def gt(a: Any, b: Any) -> bool:
    return a > b


def lt(a: Any, b: Any) -> bool:
    return a < b


def and_(a: Any, b: Any) -> bool:
    return bool(a and b)


def or_(a: Any, b: Any) -> bool:
    return bool(a or b)


def not_(a: Any) -> bool:
    return not a


# ---------------------------------------------------------------------------
# String case helpers
# ---------------------------------------------------------------------------

def capitalize(value: Any) -> str:
    """Upper-case the first character only (``"myApp"`` -> ``"MyApp"``)."""
    text = str(value)
    return text[:1].upper() + text[1:]


def lowercase(value: Any) -> str:
    return str(value).lower()


def uppercase(value: Any) -> str:
    return str(value).upper()


def pascal_case(value: Any) -> str:
    """``"task list"`` / ``"task_list"`` / ``"taskList"`` -> ``"TaskList"``."""
    return "".join(word[:1].upper() + word[1:].lower() for word in _words(value))


def camel_case(value: Any) -> str:
    """``"Task List"`` -> ``"taskList"``."""
    pascal = pascal_case(value)
    return pascal[:1].lower() + pascal[1:]


def snake_case(value: Any) -> str:
    """``"Task List"`` / ``"TaskList"`` -> ``"task_list"``."""
    return "_".join(word.lower() for word in _words(value))


def kebab_case(value: Any) -> str:
    """``"Task List"`` / ``"TaskList"`` -> ``"task-list"``."""
    return "-".join(word.lower() for word in _words(value))


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (datetime, date)):
        return format_date(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serialisable")


def json(value: Any) -> str:
    """Pretty-print *value* as JSON with two-space indentation."""
    return _json.dumps(value, indent=2, ensure_ascii=False, default=_json_default)


def format_date(value: Any) -> str:
    """Format a date-like value as an ISO-8601 UTC timestamp.

    Accepts ``datetime`` (naive values are taken as UTC), ``date``, ISO
    strings and epoch milliseconds.  The output always has millisecond
    precision and a ``Z`` suffix, e.g. ``2025-01-02T03:04:05.000Z``.

    Raises:
        ValueError: If *value* cannot be interpreted as a date.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, bool):
        raise ValueError(f"Invalid date: {value!r}")
    elif isinstance(value, (int, float)):
        moment = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid date: {value!r}") from None
    else:
        raise ValueError(f"Invalid date: {value!r}")

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


# ---------------------------------------------------------------------------
# Iteration helpers
# ---------------------------------------------------------------------------

def each_with_index(items: Iterable[Any] | None) -> list[dict[str, Any]]:
    """Pair every element with its zero-based position.

    Mappings and Pydantic models are flattened so their keys stay directly
    accessible (``{{ item.name }}``, ``{{ item.index }}``); any other element
    is exposed as ``item.value``.
    """
    result: list[dict[str, Any]] = []
    for index, item in enumerate(items or []):
        if isinstance(item, BaseModel):
            entry = dict(item)
        elif isinstance(item, Mapping):
            entry = dict(item)
        else:
            entry = {"value": item}
        entry["index"] = index
        result.append(entry)
    return result


HELPERS: dict[str, Callable[..., Any]] = {
    "eq": eq,
    "ne": ne,
    "gt": gt,
    "lt": lt,
    "and_": and_,
    "or_": or_,
    "not_": not_,
    "capitalize": capitalize,
    "lowercase": lowercase,
    "uppercase": uppercase,
    "pascal_case": pascal_case,
    "camel_case": camel_case,
    "snake_case": snake_case,
    "kebab_case": kebab_case,
    "json": json,
    "format_date": format_date,
    "each_with_index": each_with_index,
}
