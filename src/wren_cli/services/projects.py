"""Project operations."""

from wren_cli.models import Project
from wren_cli.services.base import BaseService, parse_as

_PROJECT_FIELDS = "id displayName type language timezone createdAt updatedAt"

LIST_PROJECTS = """
query {
  listProjects { %s }
}
""" % _PROJECT_FIELDS

GET_PROJECT = """
query GetProject($projectId: Int!) {
  project(projectId: $projectId) { %s }
}
""" % _PROJECT_FIELDS

CREATE_PROJECT = """
mutation CreateProject($data: CreateProjectInput!) {
  createProject(data: $data) { %s }
}
""" % _PROJECT_FIELDS

UPDATE_PROJECT = """
mutation UpdateProject($projectId: Int!, $data: UpdateProjectInput!) {
  updateProject(projectId: $projectId, data: $data) { %s }
}
""" % _PROJECT_FIELDS

DELETE_PROJECT = """
mutation DeleteProject($projectId: Int!) {
  deleteProject(projectId: $projectId)
}
"""


class ProjectService(BaseService):
    """List, inspect and manage projects."""

    def list_projects(self) -> list[Project]:
        data = self._query(LIST_PROJECTS)
        return parse_as(list[Project], self._field(data, "listProjects"), "projects")

    def get_project(self, project_id: int) -> Project:
        data = self._query(GET_PROJECT, {"projectId": project_id})
        return parse_as(Project, self._record(data, "project", f"project {project_id}"), "project")

    def create_project(self, display_name: str) -> Project:
        data = self._query(CREATE_PROJECT, {"data": {"displayName": display_name}})
        return parse_as(Project, self._field(data, "createProject"), "project")

    def update_project(
        self,
        project_id: int,
        display_name: str | None = None,
        language: str | None = None,
        timezone: str | None = None,
    ) -> Project:
        """Update a project; only the given fields are sent."""
        changes = {
            "displayName": display_name,
            "language": language,
            "timezone": timezone,
        }
        update = {key: value for key, value in changes.items() if value is not None}
        data = self._query(UPDATE_PROJECT, {"projectId": project_id, "data": update})
        return parse_as(Project, self._field(data, "updateProject"), "project")

    def delete_project(self, project_id: int) -> None:
        self._query(DELETE_PROJECT, {"projectId": project_id})
