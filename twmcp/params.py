"""Typed binding of MCP tool arguments onto entity fields.

Tool arguments arrive as a JSON object with dynamically typed values. This
module is the only place that inspects those types at runtime: every
binder checks one key, converts it and writes it to an attribute of a
target object (an entity, its path or its filters).

Usage:
    bind_group(arguments,
        required_param(create, "name"),
        optional_pointer_param(create, "description"),
        optional_numeric_list_param(create, "tag-ids"),
    )

bind_group runs all binders and raises a single InvalidArgumentError listing
every problem, so the caller learns about all invalid fields at once.

The attribute name defaults to the key with dashes turned into underscores
("page-size" -> page_size). Absent optional keys leave the target untouched.
JSON null counts as absent, except for the pointer variants, which store
None so the upstream receives an explicit null.
"""
import re
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from twapi.errors import InvalidArgumentError

Binder = Callable[[Dict[str, Any]], List[str]]
Check = Callable[[Any], Optional[str]]

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_MISSING = object()

_RFC3339 = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)

# fromisoformat before 3.11 only takes 3 or 6 fractional digits.
_FRACTION = re.compile(r"\.(\d+)")


def _six_digits(match: "re.Match") -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


_TYPE_NAMES = {
    str: "string",
    bool: "boolean",
    int: "integer",
    float: "number",
    list: "array",
    dict: "object",
}


class _Invalid(ValueError):
    pass


def type_name(value: Any) -> str:
    """JSON name of a decoded value's type."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "unknown"


def bind_group(arguments: Optional[Dict[str, Any]], *binders: Binder) -> None:
    """Apply every binder, then raise one error for all problems found."""
    arguments = arguments or {}
    problems: List[str] = []
    for binder in binders:
        problems.extend(binder(arguments))
    if problems:
        raise InvalidArgumentError(problems)


# ---------------------------------------------------------------------------
# Converters
# ---------------------------------------------------------------------------


def _typed(expected: type) -> Callable[[Any], Any]:
    if expected in (int, float):
        return _numeric(expected)

    def convert(value):
        if not isinstance(value, expected):
            raise _Invalid(f"expected {_TYPE_NAMES.get(expected, expected.__name__)}, got {type_name(value)}")
        return value
    return convert


def _numeric(kind: type) -> Callable[[Any], Any]:
    def convert(value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _Invalid(f"expected number, got {type_name(value)}")
        if kind is float:
            return float(value)
        if isinstance(value, float):
            if not value.is_integer():
                raise _Invalid("expected integer, got fractional number")
            value = int(value)
        if not INT64_MIN <= value <= INT64_MAX:
            raise _Invalid("number out of range")
        return value
    return convert


def _list(item: Callable[[Any], Any]) -> Callable[[Any], list]:
    def convert(value):
        if not isinstance(value, list):
            raise _Invalid(f"expected array, got {type_name(value)}")
        converted = []
        for index, element in enumerate(value):
            try:
                converted.append(item(element))
            except _Invalid as e:
                raise _Invalid(f"element {index}: {e}") from None
        return converted
    return convert


def _parse(fmt: str, label: str, build: Callable[[datetime], Any]) -> Callable[[Any], Any]:
    def convert(value):
        if not isinstance(value, str):
            raise _Invalid(f"expected string, got {type_name(value)}")
        try:
            return build(datetime.strptime(value, fmt))
        except ValueError:
            raise _Invalid(f"expected {label}, got {value!r}") from None
    return convert


_date = _parse("%Y-%m-%d", "date in YYYY-MM-DD format", lambda parsed: parsed.date())
_time_only = _parse("%H:%M:%S", "time in HH:MM:SS format", lambda parsed: parsed.time())


def _instant(value: Any) -> datetime:
    if not isinstance(value, str):
        raise _Invalid(f"expected string, got {type_name(value)}")
    if _RFC3339.match(value):
        normalized = _FRACTION.sub(_six_digits, value.upper().replace("Z", "+00:00"))
        try:
            return datetime.fromisoformat(normalized)
        except ValueError:
            pass
    raise _Invalid(f"expected RFC 3339 date-time, got {value!r}")


# ---------------------------------------------------------------------------
# Binders
# ---------------------------------------------------------------------------


def _binder(
    target: Any,
    key: str,
    attr: Optional[str],
    convert: Callable[[Any], Any],
    checks: Sequence[Check],
    required: bool = False,
    nullable: bool = False,
) -> Binder:
    name = attr or key.replace("-", "_")

    def bind(arguments: Dict[str, Any]) -> List[str]:
        value = arguments.get(key, _MISSING)
        if value is _MISSING or (value is None and not nullable):
            return [f'field "{key}": is required'] if required else []
        if value is None:
            setattr(target, name, None)
            return []
        try:
            converted = convert(value)
        except _Invalid as e:
            return [f'field "{key}": {e}']
        for check in checks:
            problem = check(converted)
            if problem:
                return [f'field "{key}": {problem}']
        setattr(target, name, converted)
        return []
    return bind


def required_param(target: Any, key: str, expected: type = str, *checks: Check, attr: Optional[str] = None) -> Binder:
    return _binder(target, key, attr, _typed(expected), checks, required=True)


def optional_param(target: Any, key: str, expected: type = str, *checks: Check, attr: Optional[str] = None) -> Binder:
    return _binder(target, key, attr, _typed(expected), checks)


def optional_pointer_param(target: Any, key: str, expected: type = str, *checks: Check, attr: Optional[str] = None) -> Binder:
    return _binder(target, key, attr, _typed(expected), checks, nullable=True)


def required_numeric_param(target: Any, key: str, kind: type = int, *checks: Check, attr: Optional[str] = None) -> Binder:
    return _binder(target, key, attr, _numeric(kind), checks, required=True)


def optional_numeric_param(target: Any, key: str, kind: type = int, *checks: Check, attr: Optional[str] = None) -> Binder:
    return _binder(target, key, attr, _numeric(kind), checks)


def optional_numeric_pointer_param(target: Any, key: str, kind: type = int, *checks: Check, attr: Optional[str] = None) -> Binder:
    return _binder(target, key, attr, _numeric(kind), checks, nullable=True)


def optional_list_param(target: Any, key: str, item: type = str, *checks: Check, attr: Optional[str] = None) -> Binder:
    return _binder(target, key, attr, _list(_typed(item)), checks)


def optional_numeric_list_param(target: Any, key: str, kind: type = int, *checks: Check, attr: Optional[str] = None) -> Binder:
    return _binder(target, key, attr, _list(_numeric(kind)), checks)


def required_date_param(target: Any, key: str, attr: Optional[str] = None) -> Binder:
    return _binder(target, key, attr, _date, (), required=True)


def optional_date_pointer_param(target: Any, key: str, attr: Optional[str] = None) -> Binder:
    return _binder(target, key, attr, _date, (), nullable=True)


def required_time_only_param(target: Any, key: str, attr: Optional[str] = None) -> Binder:
    return _binder(target, key, attr, _time_only, (), required=True)


def optional_time_only_pointer_param(target: Any, key: str, attr: Optional[str] = None) -> Binder:
    return _binder(target, key, attr, _time_only, (), nullable=True)


def optional_time_param(target: Any, key: str, attr: Optional[str] = None) -> Binder:
    return _binder(target, key, attr, _instant, ())


def _object_param(target, key, factory, fields, attr, required) -> Binder:
    name = attr or key.replace("-", "_")

    def bind(arguments: Dict[str, Any]) -> List[str]:
        value = arguments.get(key)
        if value is None:
            return [f'field "{key}": is required'] if required else []
        if not isinstance(value, dict):
            return [f'field "{key}": expected object, got {type_name(value)}']
        obj = factory()
        try:
            bind_group(value, *fields(obj))
        except InvalidArgumentError as e:
            return [f'field "{key}": {problem}' for problem in e.problems]
        setattr(target, name, obj)
        return []
    return bind


def required_object_param(
    target: Any,
    key: str,
    factory: Callable[[], Any],
    fields: Callable[[Any], List[Binder]],
    attr: Optional[str] = None,
) -> Binder:
    """Bind a nested object: ``fields(obj)`` returns the binders for it."""
    return _object_param(target, key, factory, fields, attr, required=True)


def optional_object_param(
    target: Any,
    key: str,
    factory: Callable[[], Any],
    fields: Callable[[Any], List[Binder]],
    attr: Optional[str] = None,
) -> Binder:
    return _object_param(target, key, factory, fields, attr, required=False)


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def restrict_values(*allowed: Any) -> Check:
    """Reject values (or list elements) outside a fixed set."""
    allowed_set = set(allowed)
    listing = ", ".join(str(value) for value in allowed)

    def check(value):
        values = value if isinstance(value, list) else [value]
        for item in values:
            if item not in allowed_set:
                return f"invalid value {item!r}, must be one of: {listing}"
        return None
    return check


def value_range(minimum: Optional[float] = None, maximum: Optional[float] = None) -> Check:
    def check(value):
        if minimum is not None and value < minimum:
            return f"must be at least {minimum}"
        if maximum is not None and value > maximum:
            return f"must be at most {maximum}"
        return None
    return check


def max_length(limit: int) -> Check:
    def check(value):
        if len(value) > limit:
            return f"must have at most {limit} characters"
        return None
    return check
