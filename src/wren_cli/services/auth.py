"""Credential validation and identity lookup."""

import logging

from wren_cli.core.exceptions import TransportError, WrenError
from wren_cli.models import WhoAmI
from wren_cli.services.base import BaseService

logger = logging.getLogger(__name__)

# Any authenticated endpoint works; this one is cheap
VALIDATION_PATH = "/api/v1/models"

CURRENT_USER = "query { currentUser { email displayName } }"
PROJECT_NAMES = "query { listProjects { id displayName } }"


class AuthService(BaseService):
    def validate_connection(self) -> WhoAmI:
        """Check that the endpoint accepts the API key, then describe the caller.

        A 400 from the validation endpoint still means the key was accepted
        (the project simply has nothing deployed yet). Only the key check is
        mandatory; the identity lookups that follow are best-effort.

        Raises:
            TransportError: When the server rejects the key or is unreachable
        """
        response = self._transport.raw_get(VALIDATION_PATH)
        if response.status_code == 401:
            raise TransportError("authentication failed: invalid API key", 401, response.text)
        if response.status_code not in (200, 400):
            raise TransportError(
                f"unexpected status {response.status_code}: {response.text}",
                response.status_code,
                response.text,
            )
        return self._who_am_i()

    def _who_am_i(self) -> WhoAmI:
        result = WhoAmI(endpoint=self._transport.endpoint)

        # Only session auth can resolve a user; API keys usually cannot
        try:
            user = self._query(CURRENT_USER).get("currentUser") or {}
        except WrenError as e:
            logger.debug("currentUser lookup skipped: %s", e)
            user = {}
        if isinstance(user, dict) and user.get("email"):
            result.user_email = user["email"]
            result.user_name = user.get("displayName") or None

        try:
            projects = self._query(PROJECT_NAMES).get("listProjects") or []
        except WrenError as e:
            logger.debug("listProjects lookup skipped: %s", e)
            projects = []
        result.project_count = len(projects)
        result.project_names = [
            p.get("displayName") or f"project-{p.get('id')}" for p in projects
        ]
        return result
