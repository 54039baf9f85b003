"""Projects and their user/task assignments."""

from .collection import ResourceCollection
from .models import Project, ProjectTaskAssignment, ProjectUserAssignment
from .pagination import PaginationMode


class ProjectsService(ResourceCollection[Project]):
    """Projects use page numbers; their assignment listings use cursors."""

    def __init__(self, client):
        super().__init__(client, "projects", Project)

    def user_assignments(self, project_id: int) -> ResourceCollection[ProjectUserAssignment]:
        return ResourceCollection(
            self._client,
            f"projects/{project_id}/user_assignments",
            ProjectUserAssignment,
            PaginationMode.CURSOR,
        )

    def task_assignments(self, project_id: int) -> ResourceCollection[ProjectTaskAssignment]:
        return ResourceCollection(
            self._client,
            f"projects/{project_id}/task_assignments",
            ProjectTaskAssignment,
            PaginationMode.CURSOR,
        )
