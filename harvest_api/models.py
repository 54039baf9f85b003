"""Data models for Harvest API responses.

Resources are decoded structurally: ``Resource.from_dict`` fills the declared
dataclass fields from the JSON object (converting dates, timestamps, decimals
and nested resources by type hint) and keeps the full payload in ``raw``.
"""

import functools
import types
import typing
from dataclasses import MISSING, dataclass, field, fields
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar, Generic, TypeVar

from .errors import DecodeError

T = TypeVar("T", bound="Resource")
R = TypeVar("R")


def _convert(hint: Any, value: Any, where: str) -> Any:
    """Convert a decoded JSON value to the type named by ``hint``."""
    if value is None:
        return None

    origin = typing.get_origin(hint)
    if origin in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        return _convert(args[0], value, where) if len(args) == 1 else value
    if origin is list:
        if not isinstance(value, list):
            raise DecodeError(f"{where}: expected a list, got {type(value).__name__}")
        (item_hint,) = typing.get_args(hint) or (Any,)
        return [_convert(item_hint, v, where) for v in value]
    if origin is not None:
        return value

    try:
        if hint is datetime:
            return datetime.fromisoformat(value)
        if hint is date:
            return date.fromisoformat(value)
        if hint is Decimal:
            return Decimal(str(value))
    except (TypeError, ValueError, InvalidOperation) as e:
        raise DecodeError(f"{where}: {e}") from e

    if hint in _SCALARS:
        if not _is_scalar(hint, value):
            raise DecodeError(f"{where}: expected {hint.__name__}, got {type(value).__name__}")
        return value
    if isinstance(hint, type) and issubclass(hint, Resource):
        return hint.from_dict(value)
    return value


_SCALARS = (int, float, str, bool)


def _is_scalar(hint: type, value: Any) -> bool:
    # bool is a subclass of int in Python but not in JSON
    if isinstance(value, bool):
        return hint is bool
    if hint is float:
        return isinstance(value, (int, float))
    return isinstance(value, hint)


@functools.cache
def _type_hints(cls: type) -> dict[str, Any]:
    return typing.get_type_hints(cls)


@dataclass(kw_only=True)
class Resource:
    """Base for API entities.

    ``collection_key`` is the envelope key holding the items of a list
    response for this resource.
    """

    collection_key: ClassVar[str] = ""

    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls: type[T], data: Any) -> T:
        if not isinstance(data, dict):
            raise DecodeError(f"{cls.__name__}: expected an object, got {type(data).__name__}")
        hints = _type_hints(cls)
        kwargs = {}
        for f in fields(cls):
            if f.name == "raw":
                continue
            key = f.metadata.get("json", f.name)
            if key not in data:
                if f.default is MISSING and f.default_factory is MISSING:
                    raise DecodeError(f"{cls.__name__}: missing field {key!r}")
                continue
            kwargs[f.name] = _convert(hints[f.name], data[key], f"{cls.__name__}.{key}")
        return cls(raw=data, **kwargs)


@dataclass(kw_only=True)
class Reference(Resource):
    """Abbreviated nested object, e.g. the ``client`` of a project."""

    id: int
    name: str | None = None


@dataclass
class PaginationLinks:
    first: str | None = None
    next: str | None = None
    previous: str | None = None
    last: str | None = None


@dataclass
class Page(Generic[R]):
    """One page of a list response."""

    items: list[R]
    per_page: int = 0
    total_pages: int = 0
    total_entries: int = 0
    next_page: int | None = None
    previous_page: int | None = None
    page: int | None = None
    links: PaginationLinks = field(default_factory=PaginationLinks)

    @property
    def has_next_page(self) -> bool:
        return self.next_page is not None or bool(self.links.next)

    @property
    def has_previous_page(self) -> bool:
        return self.previous_page is not None or bool(self.links.previous)

    @property
    def next_page_url(self) -> str | None:
        return self.links.next or None

    @classmethod
    def from_dict(cls, data: Any, resource: type[T]) -> "Page[T]":
        """Decode a pagination envelope whose items are ``resource`` objects."""
        if not isinstance(data, dict):
            raise DecodeError(f"page of {resource.__name__}: expected an object")
        raw_items = data.get(resource.collection_key)
        if not isinstance(raw_items, list):
            raise DecodeError(f"page of {resource.__name__}: missing {resource.collection_key!r} list")

        links = data.get("links") or {}
        if not isinstance(links, dict):
            raise DecodeError(f"page of {resource.__name__}: 'links' is not an object")

        where = f"page of {resource.__name__}"
        counts = {
            key: _convert(int, data.get(key), f"{where}.{key}")
            for key in ("per_page", "total_pages", "total_entries", "next_page", "previous_page", "page")
        }
        urls = {
            key: _convert(str, links.get(key), f"{where}.links.{key}")
            for key in ("first", "next", "previous", "last")
        }

        page = cls(
            items=[resource.from_dict(item) for item in raw_items],
            per_page=counts["per_page"] or 0,
            total_pages=counts["total_pages"] or 0,
            total_entries=counts["total_entries"] or 0,
            next_page=counts["next_page"],
            previous_page=counts["previous_page"],
            page=counts["page"],
            links=PaginationLinks(**urls),
        )
        if page.per_page > 0 and len(page.items) > page.per_page:
            raise DecodeError(
                f"page of {resource.__name__}: {len(page.items)} items exceed per_page={page.per_page}"
            )
        return page


# =============================================================================
# Account
# =============================================================================


@dataclass(kw_only=True)
class Company(Resource):
    name: str = ""
    base_uri: str | None = None
    full_domain: str | None = None
    is_active: bool = True
    week_start_day: str | None = None
    time_format: str | None = None
    clock: str | None = None
    weekly_capacity: int | None = None
    expense_feature: bool = False
    invoice_feature: bool = False
    estimate_feature: bool = False
    approval_feature: bool = False


@dataclass(kw_only=True)
class Role(Resource):
    collection_key: ClassVar[str] = "roles"

    id: int
    name: str = ""
    user_ids: list[int] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(kw_only=True)
class User(Resource):
    collection_key: ClassVar[str] = "users"

    id: int
    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    timezone: str | None = None
    is_contractor: bool = False
    is_active: bool = True
    weekly_capacity: int | None = None
    default_hourly_rate: Decimal | None = None
    cost_rate: Decimal | None = None
    roles: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Clients
# =============================================================================


@dataclass(kw_only=True)
class Client(Resource):
    collection_key: ClassVar[str] = "clients"

    id: int
    name: str = ""
    is_active: bool = True
    address: str | None = None
    currency: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(kw_only=True)
class Contact(Resource):
    collection_key: ClassVar[str] = "contacts"

    id: int
    client: Reference | None = None
    title: str | None = None
    first_name: str = ""
    last_name: str | None = None
    email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Projects and tasks
# =============================================================================


@dataclass(kw_only=True)
class Project(Resource):
    collection_key: ClassVar[str] = "projects"

    id: int
    client: Reference | None = None
    name: str = ""
    code: str | None = None
    is_active: bool = True
    is_billable: bool = False
    is_fixed_fee: bool = False
    bill_by: str | None = None
    budget: Decimal | None = None
    budget_by: str | None = None
    hourly_rate: Decimal | None = None
    fee: Decimal | None = None
    notes: str | None = None
    starts_on: date | None = None
    ends_on: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(kw_only=True)
class Task(Resource):
    collection_key: ClassVar[str] = "tasks"

    id: int
    name: str = ""
    billable_by_default: bool = False
    default_hourly_rate: Decimal | None = None
    is_default: bool = False
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(kw_only=True)
class ProjectUserAssignment(Resource):
    collection_key: ClassVar[str] = "user_assignments"

    id: int
    project: Reference | None = None
    user: Reference | None = None
    is_active: bool = True
    is_project_manager: bool = False
    use_default_rates: bool = True
    hourly_rate: Decimal | None = None
    budget: Decimal | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(kw_only=True)
class UserProjectAssignment(ProjectUserAssignment):
    """A project assignment seen from the user's side."""

    collection_key: ClassVar[str] = "project_assignments"

    client: Reference | None = None
    task_assignments: list[dict[str, Any]] = field(default_factory=list)


@dataclass(kw_only=True)
class ProjectTaskAssignment(Resource):
    collection_key: ClassVar[str] = "task_assignments"

    id: int
    project: Reference | None = None
    task: Reference | None = None
    is_active: bool = True
    billable: bool = False
    hourly_rate: Decimal | None = None
    budget: Decimal | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Time tracking
# =============================================================================


@dataclass(kw_only=True)
class ExternalReference(Resource):
    id: str
    group_id: str | None = None
    account_id: str | None = None
    permalink: str | None = None
    service: str | None = None


@dataclass(kw_only=True)
class TimeEntry(Resource):
    collection_key: ClassVar[str] = "time_entries"

    id: int
    spent_date: date | None = None
    user: Reference | None = None
    client: Reference | None = None
    project: Reference | None = None
    task: Reference | None = None
    hours: Decimal | None = None
    rounded_hours: Decimal | None = None
    notes: str | None = None
    is_locked: bool = False
    is_closed: bool = False
    is_billed: bool = False
    is_running: bool = False
    billable: bool = False
    started_time: str | None = None
    ended_time: str | None = None
    timer_started_at: datetime | None = None
    external_reference: ExternalReference | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Invoices and estimates
# =============================================================================


@dataclass(kw_only=True)
class LineItem(Resource):
    id: int
    project: Reference | None = None
    kind: str = ""
    description: str | None = None
    quantity: Decimal | None = None
    unit_price: Decimal | None = None
    amount: Decimal | None = None
    taxed: bool = False
    taxed2: bool = False


@dataclass(kw_only=True)
class Invoice(Resource):
    collection_key: ClassVar[str] = "invoices"

    id: int
    client: Reference | None = None
    line_items: list[LineItem] = field(default_factory=list)
    number: str | None = None
    purchase_order: str | None = None
    amount: Decimal | None = None
    due_amount: Decimal | None = None
    subject: str | None = None
    notes: str | None = None
    currency: str | None = None
    state: str | None = None
    issue_date: date | None = None
    due_date: date | None = None
    sent_at: datetime | None = None
    paid_at: datetime | None = None
    closed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(kw_only=True)
class InvoiceMessage(Resource):
    collection_key: ClassVar[str] = "invoice_messages"

    id: int
    sent_by: str | None = None
    sent_by_email: str | None = None
    subject: str | None = None
    body: str | None = None
    event_type: str | None = None
    recipients: list[dict[str, Any]] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(kw_only=True)
class InvoiceItemCategory(Resource):
    collection_key: ClassVar[str] = "invoice_item_categories"

    id: int
    name: str = ""
    use_as_service: bool = False
    use_as_expense: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(kw_only=True)
class Estimate(Resource):
    collection_key: ClassVar[str] = "estimates"

    id: int
    client: Reference | None = None
    line_items: list[LineItem] = field(default_factory=list)
    number: str | None = None
    purchase_order: str | None = None
    amount: Decimal | None = None
    subject: str | None = None
    notes: str | None = None
    currency: str | None = None
    state: str | None = None
    issue_date: date | None = None
    sent_at: datetime | None = None
    accepted_at: datetime | None = None
    declined_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(kw_only=True)
class EstimateItemCategory(Resource):
    collection_key: ClassVar[str] = "estimate_item_categories"

    id: int
    name: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Expenses
# =============================================================================


@dataclass(kw_only=True)
class ExpenseCategory(Resource):
    collection_key: ClassVar[str] = "expense_categories"

    id: int
    name: str = ""
    unit_name: str | None = None
    unit_price: Decimal | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(kw_only=True)
class Expense(Resource):
    collection_key: ClassVar[str] = "expenses"

    id: int
    client: Reference | None = None
    project: Reference | None = None
    expense_category: Reference | None = None
    user: Reference | None = None
    notes: str | None = None
    is_locked: bool = False
    is_closed: bool = False
    is_billed: bool = False
    billable: bool = False
    spent_date: date | None = None
    total_cost: Decimal | None = None
    units: Decimal | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Reports
# =============================================================================


@dataclass(kw_only=True)
class TimeReport(Resource):
    collection_key: ClassVar[str] = "results"

    client_id: int | None = None
    client_name: str | None = None
    project_id: int | None = None
    project_name: str | None = None
    task_id: int | None = None
    task_name: str | None = None
    user_id: int | None = None
    user_name: str | None = None
    total_hours: Decimal | None = None
    billable_hours: Decimal | None = None
    currency: str | None = None
    billable_amount: Decimal | None = None


@dataclass(kw_only=True)
class ExpenseReport(Resource):
    collection_key: ClassVar[str] = "results"

    client_id: int | None = None
    client_name: str | None = None
    project_id: int | None = None
    project_name: str | None = None
    expense_category_id: int | None = None
    expense_category_name: str | None = None
    user_id: int | None = None
    user_name: str | None = None
    total_amount: Decimal | None = None
    billable_amount: Decimal | None = None
    currency: str | None = None


@dataclass(kw_only=True)
class UninvoicedReport(Resource):
    collection_key: ClassVar[str] = "results"

    client_id: int | None = None
    client_name: str | None = None
    project_id: int | None = None
    project_name: str | None = None
    currency: str | None = None
    total_hours: Decimal | None = None
    uninvoiced_hours: Decimal | None = None
    uninvoiced_expenses: Decimal | None = None
    uninvoiced_amount: Decimal | None = None


@dataclass(kw_only=True)
class ProjectBudgetReport(Resource):
    collection_key: ClassVar[str] = "results"

    client_id: int | None = None
    client_name: str | None = None
    project_id: int | None = None
    project_name: str | None = None
    budget_is_monthly: bool = False
    budget_by: str | None = None
    is_active: bool = True
    budget: Decimal | None = None
    budget_spent: Decimal | None = None
    budget_remaining: Decimal | None = None
