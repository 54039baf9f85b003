"""Users and their project assignments (cursor paginated)."""

from .collection import ResourceCollection
from .context import Context
from .crud import fetch_one
from .models import User, UserProjectAssignment
from .pagination import PaginationMode


class UsersService(ResourceCollection[User]):
    def __init__(self, client):
        super().__init__(client, "users", User, PaginationMode.CURSOR)

    def me(self, *, ctx: Context | None = None) -> User:
        """Retrieve the currently authenticated user."""
        return fetch_one(self._client, "users/me", User, ctx=ctx)

    def project_assignments(self, user_id: int) -> ResourceCollection[UserProjectAssignment]:
        return ResourceCollection(
            self._client,
            f"users/{user_id}/project_assignments",
            UserProjectAssignment,
            PaginationMode.CURSOR,
        )

    def my_project_assignments(self) -> ResourceCollection[UserProjectAssignment]:
        return ResourceCollection(
            self._client,
            "users/me/project_assignments",
            UserProjectAssignment,
            PaginationMode.CURSOR,
        )
