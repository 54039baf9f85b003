"""Core HTTP client for the Harvest API.

Handles authentication headers, request/response encoding and error
classification. Resource services hang off the client as attributes.
"""

import dataclasses
import json
import logging
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import httpx

from .collection import ResourceCollection
from .company import CompanyService
from .context import Context, background
from .errors import ConfigurationError, DecodeError, TransportError, check_response
from .estimates import EstimatesService
from .expenses import ExpensesService
from .invoices import InvoicesService
from .models import Client, Contact, Role, Task
from .projects import ProjectsService
from .reports import ReportsService
from .settings import get_settings
from .time_entries import TimeEntriesService
from .users import UsersService

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def _strip_none(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _strip_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_strip_none(v) for v in value]
    return value


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_body(body: Any) -> bytes:
    """JSON-encode a request body, dropping fields that are unset (None)."""
    if dataclasses.is_dataclass(body) and not isinstance(body, type):
        body = dataclasses.asdict(body)
    return json.dumps(_strip_none(body), default=_json_default, ensure_ascii=False).encode("utf-8")


def _cap_timeout(timeout: httpx.Timeout, limit: float) -> httpx.Timeout:
    """Return ``timeout`` with every phase limited to ``limit`` seconds."""

    def cap(value: float | None) -> float:
        return limit if value is None else min(value, limit)

    return httpx.Timeout(
        connect=cap(timeout.connect),
        read=cap(timeout.read),
        write=cap(timeout.write),
        pool=cap(timeout.pool),
    )


class HarvestClient:
    """Low-level HTTP client for the Harvest v2 API.

    Handles:
    - Authentication (bearer token + account id headers)
    - Building requests relative to the API base URL
    - Error classification and JSON decoding

    Example:
        with HarvestClient(user_agent="MyApp (me@example.com)") as harvest:
            projects = harvest.projects.list()
            entry = harvest.time_entries.get(636709355)
    """

    def __init__(
        self,
        access_token: str | None = None,
        account_id: str | None = None,
        user_agent: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ):
        """Initialize the client.

        Args:
            access_token: Personal access token (or HARVEST_ACCESS_TOKEN env var)
            account_id: Harvest account ID (or HARVEST_ACCOUNT_ID env var)
            user_agent: "AppName (contact)" string (or HARVEST_USER_AGENT env var)
            base_url: API base URL (or HARVEST_BASE_URL env var)
            timeout: Request timeout in seconds. Defaults to 30, or to the
                timeout of ``http_client`` when one is given
            http_client: Preconfigured httpx.Client to send requests with.
                ``close()`` leaves it open; its owner closes it

        Raises:
            ConfigurationError: If the token, account ID or user agent is missing
        """
        settings = get_settings()
        self.access_token = access_token or settings.access_token
        self.account_id = str(account_id or settings.account_id or "")
        self.user_agent = user_agent or settings.user_agent

        missing = [
            name
            for name, value in (
                ("HARVEST_ACCESS_TOKEN", self.access_token),
                ("HARVEST_ACCOUNT_ID", self.account_id),
                ("User-Agent", self.user_agent),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"{', '.join(missing)} required (User-Agent format: 'AppName (contact@example.com)')"
            )

        url = (base_url or settings.base_url).rstrip("/") + "/"
        self.base_url = httpx.URL(url)
        if http_client is None:
            self.timeout = httpx.Timeout(DEFAULT_TIMEOUT if timeout is None else timeout)
            self._client = httpx.Client(timeout=self.timeout)
            self._owns_client = True
        else:
            self.timeout = http_client.timeout if timeout is None else httpx.Timeout(timeout)
            self._client = http_client
            self._owns_client = False

        self.company = CompanyService(self)
        self.clients = ResourceCollection(self, "clients", Client)
        self.contacts = ResourceCollection(self, "contacts", Contact)
        self.projects = ProjectsService(self)
        self.time_entries = TimeEntriesService(self)
        self.users = UsersService(self)
        self.tasks = ResourceCollection(self, "tasks", Task)
        self.invoices = InvoicesService(self)
        self.estimates = EstimatesService(self)
        self.expenses = ExpensesService(self)
        self.reports = ReportsService(self)
        self.roles = ResourceCollection(self, "roles", Role)

    @classmethod
    def from_env(cls, user_agent: str, **kwargs: Any) -> "HarvestClient":
        """Create a client with credentials taken only from the environment.

        ``kwargs`` are passed to the constructor; credentials are not accepted.
        """
        passed = sorted({"access_token", "account_id"} & kwargs.keys())
        if passed:
            raise TypeError(f"from_env() does not accept {', '.join(passed)}")
        return cls(user_agent=user_agent, **kwargs)

    def __enter__(self) -> "HarvestClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._owns_client:
            self._client.close()

    def new_request(self, method: str, path: str, body: Any = None) -> httpx.Request:
        """Build a request for ``path`` resolved against the base URL.

        Args:
            method: HTTP method
            path: Path relative to the base URL, optionally with a query string
            body: Mapping or dataclass to send as JSON, or None for no body

        Raises:
            TransportError: If the body cannot be serialized
        """
        url = self.base_url.join(path)
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Harvest-Account-Id": self.account_id,
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

        content = None
        if body is not None:
            try:
                content = encode_body(body)
            except (TypeError, ValueError) as e:
                raise TransportError(f"Could not encode request body: {e}") from e
            headers["Content-Type"] = "application/json"

        return self._client.build_request(method, url, headers=headers, content=content)

    def send(self, request: httpx.Request, *, ctx: Context | None = None) -> httpx.Response:
        """Send a request and raise the typed error for a non-2xx response.

        The context is checked before sending; its remaining deadline caps
        the request timeout.
        """
        ctx = ctx or background()
        ctx.raise_if_done()

        timeout = self.timeout
        remaining = ctx.remaining()
        if remaining is not None:
            timeout = _cap_timeout(timeout, remaining)
        request.extensions["timeout"] = timeout.as_dict()

        logger.debug("%s %s", request.method, request.url)
        try:
            response = self._client.send(request)
        except httpx.HTTPError as e:
            err = ctx.err()
            if err is not None:
                raise err from e
            raise TransportError(f"{request.method} {request.url}: {e}") from e

        check_response(response)
        return response

    def execute(self, method: str, path: str, body: Any = None, *, ctx: Context | None = None) -> httpx.Response:
        """Build and send a request, returning the successful response."""
        return self.send(self.new_request(method, path, body), ctx=ctx)

    def request_json(self, method: str, path: str, body: Any = None, *, ctx: Context | None = None) -> Any:
        """Execute a request and decode its JSON body.

        Returns:
            The decoded body, or None for 204 and empty responses

        Raises:
            DecodeError: If a successful response body is not valid JSON
        """
        response = self.execute(method, path, body, ctx=ctx)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"{method} {response.request.url}: invalid JSON response: {e}") from e
