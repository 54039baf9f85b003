"""Time entries, including timer control."""

from dataclasses import dataclass

from .collection import ResourceCollection
from .context import Context
from .crud import create, remove, update_resource
from .models import TimeEntry


@dataclass
class ExternalReferenceRequest:
    id: str
    group_id: str
    account_id: str
    permalink: str


@dataclass
class TimeEntryDurationRequest:
    project_id: int
    task_id: int
    spent_date: str
    hours: float
    user_id: int | None = None
    notes: str | None = None
    external_reference: ExternalReferenceRequest | None = None


@dataclass
class TimeEntryStartEndRequest:
    project_id: int
    task_id: int
    spent_date: str
    started_time: str
    ended_time: str
    user_id: int | None = None
    notes: str | None = None
    external_reference: ExternalReferenceRequest | None = None


class TimeEntriesService(ResourceCollection[TimeEntry]):
    def __init__(self, client):
        super().__init__(client, "time_entries", TimeEntry)

    def create_via_duration(self, entry: TimeEntryDurationRequest, *, ctx: Context | None = None) -> TimeEntry:
        return create(self._client, self.path, TimeEntry, entry, ctx=ctx)

    def create_via_start_end(self, entry: TimeEntryStartEndRequest, *, ctx: Context | None = None) -> TimeEntry:
        return create(self._client, self.path, TimeEntry, entry, ctx=ctx)

    def restart(self, time_entry_id: int, *, ctx: Context | None = None) -> TimeEntry:
        """Restart a stopped time entry."""
        return update_resource(
            self._client, f"time_entries/{time_entry_id}/restart", TimeEntry, {"id": time_entry_id}, ctx=ctx
        )

    def stop(self, time_entry_id: int, *, ctx: Context | None = None) -> TimeEntry:
        """Stop a running time entry."""
        return update_resource(self._client, f"time_entries/{time_entry_id}/stop", TimeEntry, ctx=ctx)

    def delete_external_reference(self, time_entry_id: int, *, ctx: Context | None = None) -> None:
        remove(self._client, f"time_entries/{time_entry_id}/external_reference", ctx=ctx)
