"""Query options for list endpoints and their URL encoding.

Per-resource option types carry the shared pagination fields in a
``list_options`` attribute; ``to_query`` flattens that nesting when encoding.
"""

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any
from urllib.parse import urlencode, urlsplit, urlunsplit


@dataclass
class ListOptions:
    """Pagination and change-tracking parameters shared by list endpoints.

    ``page`` and ``per_page`` of ``None`` or ``0`` mean unset.
    """

    page: int | None = field(default=None, metadata={"omitzero": True})
    per_page: int | None = field(default=None, metadata={"omitzero": True})
    updated_since: datetime | str | None = None


def _wire_name(f: dataclasses.Field) -> str:
    return f.metadata.get("query", f.name)


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.isoformat(timespec="seconds") + "Z"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Sequence) and not isinstance(value, str):
        return ",".join(_encode_value(v) for v in value)
    return str(value)


def _flatten(opts: Any, out: dict[str, str]) -> None:
    for f in dataclasses.fields(opts):
        value = getattr(opts, f.name)
        if value is None or (value == 0 and f.metadata.get("omitzero")):
            continue
        if dataclasses.is_dataclass(value):
            _flatten(value, out)
            continue
        out[_wire_name(f)] = _encode_value(value)


def to_query(opts: Any) -> list[tuple[str, str]]:
    """Encode an options dataclass (or mapping) as key-sorted query pairs.

    ``None`` values are omitted and nested option dataclasses are flattened
    into the same namespace.
    """
    if opts is None:
        return []
    out: dict[str, str] = {}
    if dataclasses.is_dataclass(opts):
        _flatten(opts, out)
    else:
        out = {k: _encode_value(v) for k, v in opts.items() if v is not None}
    return sorted(out.items())


def add_options(path: str, opts: Any) -> str:
    """Return ``path`` with ``opts`` encoded as its query string.

    Any query already on ``path`` is replaced, unless there is nothing to encode.
    """
    query = to_query(opts)
    if not query:
        return path
    parts = urlsplit(path)
    return urlunsplit(parts._replace(query=urlencode(query)))


def list_options_of(opts: Any) -> ListOptions:
    """The ``ListOptions`` an options value carries (itself, if it is one)."""
    if isinstance(opts, ListOptions):
        return opts
    inner = getattr(opts, "list_options", None)
    if not isinstance(inner, ListOptions):
        raise TypeError(f"{type(opts).__name__} does not carry ListOptions")
    return inner


# =============================================================================
# Per-resource options
# =============================================================================


@dataclass
class ClientListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)
    is_active: bool | None = None


@dataclass
class ContactListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)
    client_id: int | None = None


@dataclass
class ProjectListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)
    is_active: bool | None = None
    client_id: int | None = None


@dataclass
class UserAssignmentListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)
    user_id: int | None = None
    is_active: bool | None = None


@dataclass
class TaskAssignmentListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)
    is_active: bool | None = None


@dataclass
class TaskListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)
    is_active: bool | None = None


@dataclass
class TimeEntryListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)
    user_id: int | None = None
    client_id: int | None = None
    project_id: int | None = None
    task_id: int | None = None
    external_reference_id: str | None = None
    is_billed: bool | None = None
    is_running: bool | None = None
    approval_status: str | None = None
    from_date: date | str | None = field(default=None, metadata={"query": "from"})
    to_date: date | str | None = field(default=None, metadata={"query": "to"})


@dataclass
class UserListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)
    is_active: bool | None = None


@dataclass
class ProjectAssignmentListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)


@dataclass
class RoleListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)


@dataclass
class InvoiceListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)
    client_id: int | None = None
    project_id: int | None = None
    state: str | None = None
    from_date: date | str | None = field(default=None, metadata={"query": "from"})
    to_date: date | str | None = field(default=None, metadata={"query": "to"})


@dataclass
class InvoiceMessageListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)


@dataclass
class InvoiceItemCategoryListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)


@dataclass
class EstimateListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)
    client_id: int | None = None
    state: str | None = None
    from_date: date | str | None = field(default=None, metadata={"query": "from"})
    to_date: date | str | None = field(default=None, metadata={"query": "to"})


@dataclass
class EstimateItemCategoryListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)


@dataclass
class ExpenseListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)
    user_id: int | None = None
    client_id: int | None = None
    project_id: int | None = None
    is_billed: bool | None = None
    approval_status: str | None = None
    from_date: date | str | None = field(default=None, metadata={"query": "from"})
    to_date: date | str | None = field(default=None, metadata={"query": "to"})


@dataclass
class ExpenseCategoryListOptions:
    list_options: ListOptions = field(default_factory=ListOptions)
    is_active: bool | None = None


# Reports take a mandatory date range.


@dataclass
class TimeReportOptions:
    from_date: date | str = field(metadata={"query": "from"})
    to_date: date | str = field(metadata={"query": "to"})
    list_options: ListOptions = field(default_factory=ListOptions)
    client_id: int | None = None
    project_id: int | None = None
    task_id: int | None = None
    user_id: int | None = None
    is_billed: bool | None = None
    is_running: bool | None = None
    only_billable: bool | None = None
    only_unbillable: bool | None = None


@dataclass
class ExpenseReportOptions:
    from_date: date | str = field(metadata={"query": "from"})
    to_date: date | str = field(metadata={"query": "to"})
    list_options: ListOptions = field(default_factory=ListOptions)
    client_id: int | None = None
    project_id: int | None = None
    user_id: int | None = None
    is_billed: bool | None = None


@dataclass
class UninvoicedReportOptions:
    from_date: date | str = field(metadata={"query": "from"})
    to_date: date | str = field(metadata={"query": "to"})
    list_options: ListOptions = field(default_factory=ListOptions)
    client_id: int | None = None
    project_id: int | None = None


@dataclass
class ProjectBudgetReportOptions:
    list_options: ListOptions = field(default_factory=ListOptions)
    is_active: bool | None = None
    client_id: int | None = None
