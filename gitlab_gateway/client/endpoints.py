"""
GitLab API Endpoints.

Data-driven table of the GitLab v4 operations the gateway exposes.
Each endpoint has a method name, an HTTP verb, a path template whose
placeholders are filled in order from positional arguments, and a summary
shown by `gitlab help`.

Path arguments are URL-encoded with no safe characters, so a project
path like `group/project` can be passed wherever an ID is expected.
"""

from dataclasses import dataclass
from string import Formatter
from urllib.parse import quote

from gitlab_gateway.core.exceptions import UsageError


@dataclass(frozen=True)
class Endpoint:
    """One GitLab API operation."""

    name: str
    http_method: str
    path: str
    summary: str
    paginated: bool = False

    @property
    def arguments(self) -> tuple[str, ...]:
        """Placeholder names in the path template, in order."""
        return tuple(
            field for _, field, _, _ in Formatter().parse(self.path) if field
        )

    @property
    def usage(self) -> str:
        return " ".join([self.name, *(f"<{arg}>" for arg in self.arguments)])

    def build_path(self, args: tuple[str, ...] | list[str]) -> str:
        """
        Fill the path template from positional arguments.

        Raises:
            UsageError: If the number of arguments does not match the template
        """
        expected = self.arguments
        if len(args) != len(expected):
            raise UsageError(
                f"{self.name} takes {len(expected)} argument(s), got {len(args)}. "
                f"Usage: {self.usage}"
            )
        values = {name: quote(str(value), safe="") for name, value in zip(expected, args)}
        return self.path.format(**values)


ENDPOINTS: tuple[Endpoint, ...] = (
    # Users
    Endpoint("current_user", "GET", "/user", "Show the authenticated user"),
    Endpoint("users", "GET", "/users", "List users", paginated=True),
    Endpoint("user", "GET", "/users/{user}", "Show a user"),
    Endpoint("ssh_keys", "GET", "/user/keys", "List SSH keys of the authenticated user", paginated=True),
    # Projects
    Endpoint("projects", "GET", "/projects", "List projects", paginated=True),
    Endpoint("project", "GET", "/projects/{project}", "Show a project"),
    Endpoint("create_project", "POST", "/projects", "Create a project (--name=...)"),
    Endpoint("edit_project", "PUT", "/projects/{project}", "Update a project"),
    Endpoint("delete_project", "DELETE", "/projects/{project}", "Delete a project"),
    Endpoint("project_members", "GET", "/projects/{project}/members", "List project members", paginated=True),
    Endpoint(
        "add_project_member", "POST", "/projects/{project}/members",
        "Add a project member (--user-id=... --developer)",
    ),
    Endpoint(
        "remove_project_member", "DELETE", "/projects/{project}/members/{user}",
        "Remove a project member",
    ),
    # Groups
    Endpoint("groups", "GET", "/groups", "List groups", paginated=True),
    Endpoint("group", "GET", "/groups/{group}", "Show a group"),
    Endpoint("create_group", "POST", "/groups", "Create a group (--name=... --path=...)"),
    Endpoint("delete_group", "DELETE", "/groups/{group}", "Delete a group"),
    Endpoint("group_projects", "GET", "/groups/{group}/projects", "List projects of a group", paginated=True),
    Endpoint("group_members", "GET", "/groups/{group}/members", "List group members", paginated=True),
    Endpoint(
        "add_group_member", "POST", "/groups/{group}/members",
        "Add a group member (--user-id=... --reporter)",
    ),
    Endpoint(
        "remove_group_member", "DELETE", "/groups/{group}/members/{user}",
        "Remove a group member",
    ),
    Endpoint("namespaces", "GET", "/namespaces", "List namespaces", paginated=True),
    # Issues
    Endpoint("issues", "GET", "/issues", "List issues visible to the user", paginated=True),
    Endpoint("project_issues", "GET", "/projects/{project}/issues", "List issues of a project", paginated=True),
    Endpoint("issue", "GET", "/projects/{project}/issues/{issue}", "Show an issue"),
    Endpoint("create_issue", "POST", "/projects/{project}/issues", "Create an issue (--title=...)"),
    Endpoint("edit_issue", "PUT", "/projects/{project}/issues/{issue}", "Update an issue"),
    Endpoint("delete_issue", "DELETE", "/projects/{project}/issues/{issue}", "Delete an issue"),
    # Merge requests
    Endpoint(
        "merge_requests", "GET", "/projects/{project}/merge_requests",
        "List merge requests of a project", paginated=True,
    ),
    Endpoint("merge_request", "GET", "/projects/{project}/merge_requests/{merge_request}", "Show a merge request"),
    Endpoint(
        "create_merge_request", "POST", "/projects/{project}/merge_requests",
        "Create a merge request (--source-branch=... --target-branch=... --title=...)",
    ),
    Endpoint(
        "accept_merge_request", "PUT", "/projects/{project}/merge_requests/{merge_request}/merge",
        "Merge a merge request",
    ),
    # Repository
    Endpoint("branches", "GET", "/projects/{project}/repository/branches", "List branches", paginated=True),
    Endpoint("branch", "GET", "/projects/{project}/repository/branches/{branch}", "Show a branch"),
    Endpoint(
        "create_branch", "POST", "/projects/{project}/repository/branches",
        "Create a branch (--branch=... --ref=...)",
    ),
    Endpoint("delete_branch", "DELETE", "/projects/{project}/repository/branches/{branch}", "Delete a branch"),
    Endpoint("tags", "GET", "/projects/{project}/repository/tags", "List tags", paginated=True),
    Endpoint("commits", "GET", "/projects/{project}/repository/commits", "List commits", paginated=True),
    Endpoint("commit", "GET", "/projects/{project}/repository/commits/{sha}", "Show a commit"),
    # Planning
    Endpoint("milestones", "GET", "/projects/{project}/milestones", "List milestones", paginated=True),
    Endpoint("labels", "GET", "/projects/{project}/labels", "List labels", paginated=True),
    # CI/CD
    Endpoint("pipelines", "GET", "/projects/{project}/pipelines", "List pipelines", paginated=True),
    Endpoint("pipeline", "GET", "/projects/{project}/pipelines/{pipeline}", "Show a pipeline"),
    Endpoint("pipeline_jobs", "GET", "/projects/{project}/pipelines/{pipeline}/jobs", "List jobs of a pipeline", paginated=True),
    Endpoint("retry_pipeline", "POST", "/projects/{project}/pipelines/{pipeline}/retry", "Retry a pipeline"),
    Endpoint("cancel_pipeline", "POST", "/projects/{project}/pipelines/{pipeline}/cancel", "Cancel a pipeline"),
)
