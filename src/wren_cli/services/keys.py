"""Organization API keys, project API keys and API call history."""

from typing import Any

from wren_cli.models import (
    ApiHistoryFilter,
    ApiHistoryPage,
    ApiKey,
    CreatedApiKey,
    CreatedProjectApiKey,
    ProjectApiKey,
)
from wren_cli.services.base import BaseService, parse_as

_API_KEY_FIELDS = (
    "id name secretKeyMasked lastUsedAt expiresAt createdByEmail createdAt revokedAt"
)
_PROJECT_KEY_FIELDS = (
    "id projectId organizationId name secretKeyMasked permissions"
    " lastUsedAt expiresAt createdBy createdByEmail createdAt revokedAt"
)

LIST_API_KEYS = "query { listApiKeys { %s } }" % _API_KEY_FIELDS

CREATE_API_KEY = """
mutation CreateApiKey($data: CreateApiKeyInput!) {
  createApiKey(data: $data) {
    key { %s }
    secretKey
  }
}
""" % _API_KEY_FIELDS

REVOKE_API_KEY = """
mutation RevokeApiKey($keyId: Int!) {
  revokeApiKey(keyId: $keyId)
}
"""

DELETE_API_KEY = """
mutation DeleteApiKey($keyId: Int!) {
  deleteApiKey(keyId: $keyId)
}
"""

LIST_PROJECT_API_KEYS = """
query ListProjectApiKeys($projectId: Int!) {
  listProjectApiKeys(projectId: $projectId) { %s }
}
""" % _PROJECT_KEY_FIELDS

CREATE_PROJECT_API_KEY = """
mutation CreateProjectApiKey($data: CreateProjectApiKeyInput!) {
  createProjectApiKey(data: $data) {
    key { %s }
    secretKey
  }
}
""" % _PROJECT_KEY_FIELDS

REVOKE_PROJECT_API_KEY = """
mutation RevokeProjectApiKey($keyId: Int!, $projectId: Int!) {
  revokeProjectApiKey(keyId: $keyId, projectId: $projectId)
}
"""

DELETE_PROJECT_API_KEY = """
mutation DeleteProjectApiKey($keyId: Int!, $projectId: Int!) {
  deleteProjectApiKey(keyId: $keyId, projectId: $projectId)
}
"""

API_HISTORY = """
query GetApiHistory(
  $filter: ApiHistoryFilterInput, $pagination: ApiHistoryPaginationInput!
) {
  apiHistory(filter: $filter, pagination: $pagination) {
    items {
      id projectId apiType threadId statusCode durationMs
      requestPayload responsePayload createdAt
    }
    total
    hasMore
  }
}
"""

DEFAULT_HISTORY_LIMIT = 20


class KeyService(BaseService):
    """API credentials and the audit trail of API calls made with them."""

    # Organization keys

    def list_api_keys(self) -> list[ApiKey]:
        data = self._query(LIST_API_KEYS)
        return parse_as(list[ApiKey], self._field(data, "listApiKeys") or [], "API keys")

    def create_api_key(self, name: str) -> CreatedApiKey:
        """Create a key. The returned secret is never retrievable again."""
        data = self._query(CREATE_API_KEY, {"data": {"name": name}})
        return parse_as(CreatedApiKey, self._field(data, "createApiKey"), "API key")

    def revoke_api_key(self, key_id: int) -> None:
        self._query(REVOKE_API_KEY, {"keyId": key_id})

    def delete_api_key(self, key_id: int) -> None:
        self._query(DELETE_API_KEY, {"keyId": key_id})

    # Project keys

    def list_project_api_keys(self, project_id: int) -> list[ProjectApiKey]:
        data = self._query(LIST_PROJECT_API_KEYS, {"projectId": project_id})
        return parse_as(
            list[ProjectApiKey], self._field(data, "listProjectApiKeys") or [], "project API keys"
        )

    def create_project_api_key(self, project_id: int, name: str) -> CreatedProjectApiKey:
        variables = {"data": {"projectId": project_id, "name": name}}
        data = self._query(CREATE_PROJECT_API_KEY, variables)
        return parse_as(
            CreatedProjectApiKey, self._field(data, "createProjectApiKey"), "project API key"
        )

    def revoke_project_api_key(self, key_id: int, project_id: int) -> None:
        self._query(REVOKE_PROJECT_API_KEY, {"keyId": key_id, "projectId": project_id})

    def delete_project_api_key(self, key_id: int, project_id: int) -> None:
        self._query(DELETE_PROJECT_API_KEY, {"keyId": key_id, "projectId": project_id})

    # History

    def api_history(
        self,
        history_filter: ApiHistoryFilter | None = None,
        offset: int = 0,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> ApiHistoryPage:
        """Fetch one page of API history."""
        variables: dict[str, Any] = {"pagination": {"offset": offset, "limit": limit}}
        if history_filter is not None:
            variables["filter"] = history_filter.to_variables()
        data = self._query(API_HISTORY, variables)
        return parse_as(ApiHistoryPage, self._field(data, "apiHistory"), "API history")
