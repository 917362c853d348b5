"""Tests for project commands and project selection."""

import json

from wren_cli.config import CLIConfig

PROJECTS = [
    {"id": 1, "displayName": "Sales", "type": "POSTGRES", "timezone": "UTC"},
    {"id": 2, "displayName": "Ops", "type": "BIG_QUERY"},
]


class TestProjectUse:
    """Test switching the active project."""

    def test_switches_when_project_exists(self, run_cli, server, logged_in):
        """Test that an existing project becomes the active one."""
        server.on_graphql("project", PROJECTS[1])

        result = run_cli("project", "use", "2")

        assert result.exit_code == 0, result.output
        assert "Switched to project: Ops (ID: 2)" in result.output
        assert CLIConfig.load().project_id == "2"

    def test_unknown_project_leaves_config_unchanged(self, run_cli, server, with_project):
        """Test that a missing project is reported and the config is kept."""
        server.on_graphql("project", None)

        result = run_cli("project", "use", "7")

        assert result.exit_code == 1
        assert "Error: project 7 not found" in result.output
        assert CLIConfig.load().project_id == "1"

    def test_server_error_is_reported_as_not_found(self, run_cli, server, logged_in):
        """Test that a failed lookup is reported as not found with its cause."""
        server.on_graphql_error("project", "internal error")

        result = run_cli("project", "use", "7")

        assert result.exit_code == 1
        assert "Error: project 7 not found: GraphQL errors: internal error" in result.output

    def test_non_numeric_id_rejected_before_config(self, run_cli, server):
        """Test that a non-numeric ID fails before any request."""
        result = run_cli("project", "use", "abc")

        assert result.exit_code == 1
        assert 'Error: project ID must be a number, got "abc"' in result.output
        assert server.requests == []


class TestProjectList:
    """Test project listing."""

    def test_marks_active_project(self, run_cli, server, with_project):
        """Test that the active project is marked with an asterisk."""
        server.on_graphql("listProjects", PROJECTS)

        result = run_cli("project", "list")

        assert result.exit_code == 0, result.output
        assert "Sales *" in result.output
        assert "Ops *" not in result.output

    def test_hidden_aliases(self, run_cli, server, logged_in):
        """Test that the plural group and ls alias work."""
        server.on_graphql("listProjects", PROJECTS)

        result = run_cli("projects", "ls")

        assert result.exit_code == 0, result.output
        assert "Ops" in result.output

    def test_json(self, run_cli, server, logged_in):
        """Test that --json before the subcommand prints the project list."""
        server.on_graphql("listProjects", PROJECTS)

        result = run_cli("--json", "project", "list")

        data = json.loads(result.output)
        assert [p["displayName"] for p in data] == ["Sales", "Ops"]

    def test_json_flag_after_subcommand(self, run_cli, server, logged_in):
        """Test that --json is accepted after the subcommand too."""
        server.on_graphql("listProjects", PROJECTS)

        result = run_cli("project", "list", "--json")

        assert result.exit_code == 0, result.output
        assert [p["id"] for p in json.loads(result.output)] == [1, 2]


class TestProjectCurrent:
    """Test showing the active project."""

    def test_no_project(self, run_cli):
        """Test that a missing selection prints a hint and succeeds."""
        result = run_cli("project", "current")

        assert result.exit_code == 0
        assert "No project selected" in result.output

    def test_falls_back_to_configured_id(self, run_cli, server, with_project):
        """Test that a failed lookup still shows the configured ID."""
        server.on_graphql_error("project", "unavailable")

        result = run_cli("project", "current")

        assert result.exit_code == 0
        assert "Current project ID: 1" in result.output

    def test_with_lookup(self, run_cli, server, with_project):
        """Test that the project name is shown when the lookup succeeds."""
        server.on_graphql("project", PROJECTS[0])

        result = run_cli("project", "current")

        assert "Current project: Sales (ID: 1)" in result.output


class TestProjectUpdate:
    """Test project updates."""

    def test_requires_a_change(self, run_cli, with_project):
        """Test that update without any option is rejected."""
        result = run_cli("project", "update")

        assert result.exit_code == 1
        assert "specify at least one of --name, --language, or --timezone" in result.output

    def test_defaults_to_active_project(self, run_cli, server, with_project):
        """Test that update without an ID targets the active project."""
        server.on_graphql("updateProject", {"id": 1, "displayName": "Renamed"})

        result = run_cli("project", "update", "--name", "Renamed")

        assert result.exit_code == 0, result.output
        assert server.graphql_bodies()[-1]["variables"] == {
            "projectId": 1,
            "data": {"displayName": "Renamed"},
        }

    def test_info_without_any_project(self, run_cli, logged_in):
        """Test that info without an ID or active project fails."""
        result = run_cli("project", "info")

        assert result.exit_code == 1
        assert "no project specified" in result.output
