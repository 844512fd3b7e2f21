# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import platform
import sys
from types import TracebackType
from typing import Any, Mapping, NamedTuple, Optional
from urllib.parse import quote

from aiohttp import ClientSession, ClientTimeout, TCPConnector
from pydantic import Field, ValidationError
from structlog import get_logger
from yarl import URL

from jiralib import __version__
from jiralib.auth import Auth
from jiralib.conf.get_settings import get_settings
from jiralib.conf.settings import JiraSettings
from jiralib.exceptions import (
    EmptyURLError,
    GenResponseError,
    InvalidInputError,
    JiraClientError,
    JiraServerError,
    NoAuthError,
    NoContentError,
    NoPermsError,
    UnknownStatusError,
    WrongLinkIDError,
)
from jiralib.models import (
    AutocompleteData,
    Column,
    Comment,
    CommentCollection,
    Component,
    Configuration,
    Dashboard,
    DashboardCollection,
    ErrorCollection,
    Filter,
    Group,
    GroupPickerResults,
    GroupUserPickerResults,
    Issue,
    IssueField,
    IssueMeta,
    IssuePickerResults,
    IssueType,
    Link,
    LinkType,
    Permission,
    Priority,
    Project,
    ProjectAvatars,
    ProjectCategory,
    Property,
    RemoteLink,
    Resolution,
    Role,
    ScreenField,
    ScreenTab,
    SearchResults,
    SecurityLevel,
    ServerInfo,
    Status,
    StatusCategory,
    Suggestion,
    Transition,
    User,
    UserPickerResults,
    Version,
    VersionCollection,
    VotesInfo,
    WatchersInfo,
    Workflow,
    WorkflowInfo,
    WorkflowScheme,
    Worklog,
    WorklogCollection,
)
from jiralib.params import (
    CreateMetaParams,
    DashboardParams,
    EmptyParameters,
    ExpandParameters,
    GroupParams,
    GroupPickerParams,
    GroupUserPickerParams,
    IssueParams,
    IssuePickerParams,
    Parameters,
    PermissionsParams,
    ProjectKeyParams,
    RemoteLinkParams,
    ScreenParams,
    SearchParams,
    ServerInfoParams,
    SuggestionParams,
    TransitionsParams,
    UsernameParams,
    UserParams,
    UserPermissionParams,
    UserPickerParams,
    UserSearchParams,
    VersionParams,
    WorkflowParams,
    WorkflowSchemeParams,
)
from jiralib.utils.pydantic import WireModel, get_type_adapter

logger = get_logger()

API_PREFIX = '/rest/api/2'


StatusErrors = Mapping[int, type[JiraClientError]]


class Response(NamedTuple):
    status: int
    content: bytes


# Objects Jira wraps around the actual results of some endpoints


class _FilterScope(WireModel):
    scope: str = ''


class _TransitionList(WireModel):
    transitions: list[Transition] = Field(default_factory=list)


class _ProjectList(WireModel):
    projects: list[Project] = Field(default_factory=list)


class _PickerSections(WireModel):
    sections: list[IssuePickerResults] = Field(default_factory=list)


class _LinkTypeList(WireModel):
    issue_link_types: list[LinkType] = Field(default_factory=list)


class _SuggestionList(WireModel):
    results: list[Suggestion] = Field(default_factory=list)


class _PermissionMap(WireModel):
    permissions: dict[str, Permission] = Field(default_factory=dict)


class _PropertyKeys(WireModel):
    keys: list[Property] = Field(default_factory=list)


class _PropertyValue(WireModel):
    value: Optional[Property] = None


class _RelatedIssueCounts(WireModel):
    issues_fixed_count: int = 0
    issues_affected_count: int = 0


class _UnresolvedIssueCount(WireModel):
    issues_unresolved_count: int = 0


class _DefaultWorkflow(WireModel):
    workflow: str = ''


def get_user_agent(app: str, version: str, name: str = 'jiralib') -> str:
    """Build the User-Agent header value, with the application product token first when both parts are given."""
    system = f'(python; {platform.python_version()}; {platform.machine()}-{sys.platform})'
    if app and version:
        return f'{app}/{version} {name}/{__version__} {system}'
    return f'{name}/{__version__} {system}'


def esc_path(segment: str) -> str:
    """Escape an id or key so it can be placed as a single URL path segment."""
    return quote(segment, safe='')


class JiraClient:
    """Read-only client of the Jira REST API (v2).

    The HTTP session must be opened with `start()` and closed with `stop()`, or both handled by `async with`:

        async with JiraClient('https://jira.example.com', AuthToken(token)) as jira:
            issue = await jira.get_issue('ABC-1')

    Every call returns the decoded result of a successful response and raises a JiraClientError subclass otherwise.
    """

    def __init__(self, url: str, auth: Auth, *, settings: Optional[JiraSettings] = None) -> None:
        if not url:
            raise EmptyURLError('URL can\'t be empty')

        auth.validate()

        self.log = logger.new()
        self._settings = settings if settings is not None else get_settings()
        self._url = url.rstrip('/')
        self._auth = auth.encode()
        self._user_agent = get_user_agent('', '', self._settings.USER_AGENT_NAME)
        self._session: Optional[ClientSession] = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def user_agent(self) -> str:
        return self._user_agent

    def set_user_agent(self, app: str, version: str) -> None:
        """Set the User-Agent sent with every request, based on the application name and version."""
        self._user_agent = get_user_agent(app, version, self._settings.USER_AGENT_NAME)

    async def start(self) -> None:
        """Start a session with Jira."""
        timeout = ClientTimeout(
            total=None,
            connect=self._settings.CONNECT_TIMEOUT,
            sock_read=self._settings.READ_TIMEOUT,
        )
        connector = TCPConnector(limit_per_host=self._settings.MAX_CONNS_PER_HOST)
        self._session = ClientSession(timeout=timeout, connector=connector)

    async def stop(self) -> None:
        """Stop the session with Jira."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> 'JiraClient':
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.stop()

    # Request plumbing

    def _get_url(self, path: str, params: Parameters) -> URL:
        url = self._url + API_PREFIX + path
        query = params.to_query()
        if query:
            url += '?' + query
        # the query is already escaped, it must be sent as is
        return URL(url, encoded=True)

    def _get_headers(self, method: str) -> dict[str, str]:
        headers = {
            'User-Agent': self._user_agent,
            'Authorization': self._auth,
        }
        if method != 'GET':
            headers['Content-Type'] = 'application/json'
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Parameters] = None,
        body: Optional[WireModel] = None,
        decode_error: bool = False,
    ) -> Response:
        """Send a request and read the whole response.

        When `decode_error` is set, a response with a status other than 200 is checked for an error collection and
        its first message is raised as JiraServerError. Responses without one are returned to the caller.
        """
        assert self._session is not None, 'client is not started'

        url = self._get_url(path, params if params is not None else EmptyParameters())
        data = body.json_dumpb() if body is not None else None

        resp = await self._session.request(method, url, headers=self._get_headers(method), data=data)
        try:
            content = await resp.read()
        finally:
            resp.release()

        self.log.debug('jira request', method=method, path=path, status=resp.status)

        if resp.status != 200 and decode_error:
            self._raise_server_error(resp.status, content)

        return Response(status=resp.status, content=content)

    def _raise_server_error(self, status: int, content: bytes) -> None:
        try:
            errors = ErrorCollection.model_validate_json(content)
        except ValidationError:
            return

        message = errors.first_error()
        if message is None:
            return

        self.log.error('jira reported an error', status=status, message=message)
        raise JiraServerError(message)

    def _check_status(self, status: int, errors: StatusErrors, ok: tuple[int, ...] = (200,)) -> None:
        if status in ok:
            return

        error = errors.get(status)
        if error is None:
            self.log.warn('unexpected status code', status=status)
            raise UnknownStatusError(status)

        raise error()

    def _decode(self, result_type: Any, content: bytes) -> Any:
        return get_type_adapter(result_type).validate_json(content, context=self._settings.decode_context())

    async def _get(
        self,
        path: str,
        result_type: Any,
        errors: StatusErrors,
        params: Optional[Parameters] = None,
        *,
        decode_error: bool = False,
    ) -> Any:
        resp = await self._request('GET', path, params, decode_error=decode_error)
        self._check_status(resp.status, errors)
        return self._decode(result_type, resp.content)

    # Configuration

    async def get_configuration(self) -> Configuration:
        """Return which optional features are enabled, with the time tracking configuration if it is."""
        return await self._get('/configuration', Configuration, {401: NoAuthError, 403: NoPermsError})

    async def get_server_info(self, do_health_check: bool = False) -> ServerInfo:
        """Return general information about the Jira server."""
        return await self._get(
            '/serverInfo',
            ServerInfo,
            {401: NoAuthError},
            ServerInfoParams(do_health_check=do_health_check),
        )

    async def get_columns(self) -> list[Column]:
        """Return the default system columns for the issue navigator. Admin permission is required."""
        return await self._get(
            '/settings/columns',
            list[Column],
            {401: NoAuthError, 403: NoPermsError, 500: GenResponseError},
        )

    # Dashboards

    async def get_dashboards(self, params: Optional[DashboardParams] = None) -> DashboardCollection:
        """Return a list of all dashboards, optionally filtering them."""
        return await self._get('/dashboard', DashboardCollection, {401: NoAuthError}, params, decode_error=True)

    async def get_dashboard(self, dashboard_id: str) -> Dashboard:
        return await self._get(
            f'/dashboard/{esc_path(dashboard_id)}',
            Dashboard,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    # Fields and filters

    async def get_fields(self) -> list[IssueField]:
        """Return a full representation of the system and custom fields."""
        return await self._get('/field', list[IssueField], {401: NoAuthError})

    async def get_filter(self, filter_id: str, params: Optional[ExpandParameters] = None) -> Filter:
        return await self._get(
            f'/filter/{esc_path(filter_id)}',
            Filter,
            {400: InvalidInputError, 401: NoAuthError},
            params,
        )

    async def get_filter_default_scope(self) -> str:
        """Return the default share scope of the logged-in user."""
        result = await self._get(
            '/filter/defaultShareScope',
            _FilterScope,
            {400: GenResponseError, 401: NoAuthError},
        )
        return result.scope

    async def get_filter_favourites(self, params: Optional[ExpandParameters] = None) -> list[Filter]:
        """Return the favourite filters of the logged-in user."""
        return await self._get('/filter/favourite', list[Filter], {401: NoAuthError}, params)

    # Issues

    async def get_issue(self, issue_id_or_key: str, params: Optional[IssueParams] = None) -> Issue:
        """Return a full representation of the issue, custom fields included."""
        return await self._get(
            f'/issue/{esc_path(issue_id_or_key)}',
            Issue,
            {401: NoAuthError, 404: NoContentError},
            params,
            decode_error=True,
        )

    async def get_issue_comments(
        self,
        issue_id_or_key: str,
        params: Optional[ExpandParameters] = None,
    ) -> CommentCollection:
        return await self._get(
            f'/issue/{esc_path(issue_id_or_key)}/comment',
            CommentCollection,
            {401: NoAuthError, 404: NoContentError},
            params,
        )

    async def get_issue_comment(
        self,
        issue_id_or_key: str,
        comment_id: str,
        params: Optional[ExpandParameters] = None,
    ) -> Comment:
        return await self._get(
            f'/issue/{esc_path(issue_id_or_key)}/comment/{esc_path(comment_id)}',
            Comment,
            {401: NoAuthError, 404: NoContentError},
            params,
            decode_error=True,
        )

    async def get_issue_meta(self, issue_id_or_key: str) -> IssueMeta:
        """Return the meta data for editing an issue."""
        return await self._get(
            f'/issue/{esc_path(issue_id_or_key)}/editmeta',
            IssueMeta,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    async def get_issue_remote_links(
        self,
        issue_id_or_key: str,
        params: Optional[RemoteLinkParams] = None,
    ) -> list[RemoteLink]:
        return await self._get(
            f'/issue/{esc_path(issue_id_or_key)}/remotelink',
            list[RemoteLink],
            {401: NoAuthError, 403: NoPermsError, 404: NoContentError},
            params,
            decode_error=True,
        )

    async def get_issue_remote_link(self, issue_id_or_key: str, link_id: str) -> RemoteLink:
        return await self._get(
            f'/issue/{esc_path(issue_id_or_key)}/remotelink/{esc_path(link_id)}',
            RemoteLink,
            {400: WrongLinkIDError, 401: NoAuthError, 403: NoPermsError, 404: NoContentError},
            decode_error=True,
        )

    async def get_issue_transitions(
        self,
        issue_id_or_key: str,
        params: Optional[TransitionsParams] = None,
    ) -> list[Transition]:
        """Return the transitions the current user can perform on the issue, with their required fields."""
        result = await self._get(
            f'/issue/{esc_path(issue_id_or_key)}/transitions',
            _TransitionList,
            {401: NoAuthError, 404: NoContentError},
            params,
            decode_error=True,
        )
        return result.transitions

    async def get_issue_votes(self, issue_id_or_key: str) -> VotesInfo:
        return await self._get(
            f'/issue/{esc_path(issue_id_or_key)}/votes',
            VotesInfo,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    async def get_issue_watchers(self, issue_id_or_key: str) -> WatchersInfo:
        return await self._get(
            f'/issue/{esc_path(issue_id_or_key)}/watchers',
            WatchersInfo,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    async def get_issue_worklogs(self, issue_id_or_key: str) -> WorklogCollection:
        return await self._get(
            f'/issue/{esc_path(issue_id_or_key)}/worklog',
            WorklogCollection,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    async def get_issue_worklog(self, issue_id_or_key: str, worklog_id: str) -> Worklog:
        return await self._get(
            f'/issue/{esc_path(issue_id_or_key)}/worklog/{esc_path(worklog_id)}',
            Worklog,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    async def get_create_meta(self, params: Optional[CreateMetaParams] = None) -> list[Project]:
        """Return the projects, issue types and fields the current user can create issues with.

        Projects the user cannot create issues in are left out.
        """
        result = await self._get(
            '/issue/createmeta',
            _ProjectList,
            {401: NoAuthError, 403: NoPermsError},
            params,
        )
        return result.projects

    async def issue_picker(self, params: Optional[IssuePickerParams] = None) -> list[IssuePickerResults]:
        """Return the issues suggested for an auto-completion query, based on the user history and context."""
        result = await self._get(
            '/issue/picker',
            _PickerSections,
            {401: NoAuthError, 403: NoPermsError},
            params,
        )
        return result.sections

    async def get_issue_properties(self, issue_id_or_key: str) -> list[Property]:
        """Return the keys of all properties of the issue."""
        return await self._get_entity_properties(f'/issue/{esc_path(issue_id_or_key)}/properties')

    async def set_issue_property(self, issue_id_or_key: str, prop: Property) -> None:
        await self._set_entity_property(f'/issue/{esc_path(issue_id_or_key)}/properties/{esc_path(prop.key)}', prop)

    async def get_issue_property(self, issue_id_or_key: str, prop_key: str) -> Optional[Property]:
        return await self._get_entity_property(f'/issue/{esc_path(issue_id_or_key)}/properties/{esc_path(prop_key)}')

    async def delete_issue_property(self, issue_id_or_key: str, prop_key: str) -> None:
        await self._delete_entity_property(f'/issue/{esc_path(issue_id_or_key)}/properties/{esc_path(prop_key)}')

    # Links

    async def get_issue_link(self, link_id: str) -> Link:
        return await self._get(
            f'/issueLink/{esc_path(link_id)}',
            Link,
            {400: InvalidInputError, 401: NoAuthError, 403: NoPermsError, 404: NoContentError, 500: GenResponseError},
        )

    async def get_issue_link_types(self) -> list[LinkType]:
        result = await self._get('/issueLinkType', _LinkTypeList, {401: NoAuthError, 404: NoContentError})
        return result.issue_link_types

    async def get_issue_link_type(self, link_type_id: str) -> LinkType:
        return await self._get(
            f'/issueLinkType/{esc_path(link_type_id)}',
            LinkType,
            {401: NoAuthError, 404: NoContentError},
        )

    # Issue types

    async def get_issue_types(self) -> list[IssueType]:
        return await self._get('/issuetype', list[IssueType], {401: NoAuthError})

    async def get_issue_type(self, issue_type_id: str) -> IssueType:
        return await self._get(
            f'/issuetype/{esc_path(issue_type_id)}',
            IssueType,
            {401: NoAuthError, 404: NoContentError},
        )

    async def get_issue_type_alternatives(self, issue_type_id: str) -> list[IssueType]:
        """Return the issue types the given one can be changed to."""
        return await self._get(
            f'/issuetype/{esc_path(issue_type_id)}/alternatives',
            list[IssueType],
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    # JQL

    async def get_autocomplete_data(self) -> AutocompleteData:
        """Return the JQL search auto complete data."""
        return await self._get(
            '/jql/autocompletedata',
            AutocompleteData,
            {401: NoAuthError, 404: NoContentError, 500: GenResponseError},
        )

    async def get_autocomplete_suggestions(self, params: Optional[SuggestionParams] = None) -> list[Suggestion]:
        result = await self._get(
            '/jql/autocompletedata/suggestions',
            _SuggestionList,
            {401: NoAuthError},
            params,
        )
        return result.results

    # Permissions and current user

    async def get_my_permissions(self, params: Optional[PermissionsParams] = None) -> dict[str, Permission]:
        """Return all permissions in the system and whether the current user has them.

        The context may be narrowed to a single project or issue.
        """
        result = await self._get(
            '/mypermissions',
            _PermissionMap,
            {400: InvalidInputError, 401: NoAuthError, 404: NoContentError},
            params,
        )
        return result.permissions

    async def get_myself(self) -> User:
        return await self._get('/myself', User, {401: NoAuthError, 403: NoPermsError, 404: NoContentError})

    # Priorities

    async def get_priorities(self) -> list[Priority]:
        return await self._get('/priority', list[Priority], {401: NoAuthError})

    async def get_priority(self, priority_id: str) -> Priority:
        return await self._get(
            f'/priority/{esc_path(priority_id)}',
            Priority,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    # Projects

    async def get_projects(self, params: Optional[ExpandParameters] = None) -> list[Project]:
        """Return all projects visible to the current user."""
        return await self._get('/project', list[Project], {401: NoAuthError, 500: GenResponseError}, params)

    async def get_project(self, project_id_or_key: str, params: Optional[ExpandParameters] = None) -> Project:
        return await self._get(
            f'/project/{esc_path(project_id_or_key)}',
            Project,
            {401: NoAuthError, 404: NoContentError},
            params,
            decode_error=True,
        )

    async def get_project_avatars(self, project_id_or_key: str) -> ProjectAvatars:
        return await self._get(
            f'/project/{esc_path(project_id_or_key)}/avatars',
            ProjectAvatars,
            {401: NoAuthError, 404: NoContentError, 500: GenResponseError},
            decode_error=True,
        )

    async def get_project_components(self, project_id_or_key: str) -> list[Component]:
        return await self._get(
            f'/project/{esc_path(project_id_or_key)}/components',
            list[Component],
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    async def get_project_statuses(self, project_id_or_key: str) -> list[IssueType]:
        """Return the issue types of the project, each with its valid statuses."""
        return await self._get(
            f'/project/{esc_path(project_id_or_key)}/statuses',
            list[IssueType],
            {400: NoContentError, 401: NoAuthError},
            decode_error=True,
        )

    async def get_project_versions(
        self,
        project_id_or_key: str,
        params: Optional[ExpandParameters] = None,
    ) -> list[Version]:
        return await self._get(
            f'/project/{esc_path(project_id_or_key)}/versions',
            list[Version],
            {404: NoContentError},
            params,
            decode_error=True,
        )

    async def get_project_version(
        self,
        project_id_or_key: str,
        params: Optional[VersionParams] = None,
    ) -> VersionCollection:
        """Return one page of the project versions."""
        return await self._get(
            f'/project/{esc_path(project_id_or_key)}/version',
            VersionCollection,
            {401: NoAuthError, 404: NoContentError},
            params,
            decode_error=True,
        )

    async def get_project_properties(self, project_id_or_key: str) -> list[Property]:
        return await self._get_entity_properties(f'/project/{esc_path(project_id_or_key)}/properties')

    async def set_project_property(self, project_id_or_key: str, prop: Property) -> None:
        await self._set_entity_property(
            f'/project/{esc_path(project_id_or_key)}/properties/{esc_path(prop.key)}',
            prop,
        )

    async def get_project_property(self, project_id_or_key: str, prop_key: str) -> Optional[Property]:
        return await self._get_entity_property(
            f'/project/{esc_path(project_id_or_key)}/properties/{esc_path(prop_key)}',
        )

    async def delete_project_property(self, project_id_or_key: str, prop_key: str) -> None:
        await self._delete_entity_property(f'/project/{esc_path(project_id_or_key)}/properties/{esc_path(prop_key)}')

    async def get_project_roles(self, project_id_or_key: str) -> dict[str, str]:
        """Return the roles of the project, mapped to the URLs of their full details."""
        return await self._get(
            f'/project/{esc_path(project_id_or_key)}/role',
            dict[str, str],
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    async def get_project_role(self, project_id_or_key: str, role_id: str) -> Role:
        return await self._get(
            f'/project/{esc_path(project_id_or_key)}/role/{esc_path(role_id)}',
            Role,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    async def get_project_categories(self) -> list[ProjectCategory]:
        return await self._get(
            '/projectCategory',
            list[ProjectCategory],
            {401: NoAuthError, 500: GenResponseError},
        )

    async def get_project_category(self, category_id: str) -> ProjectCategory:
        return await self._get(
            f'/projectCategory/{esc_path(category_id)}',
            ProjectCategory,
            {401: NoAuthError, 404: NoContentError},
        )

    async def validate_project_key(self, project_key: str) -> None:
        """Raise JiraServerError with the reason if `project_key` cannot be used for a new project."""
        resp = await self._request(
            'GET',
            '/projectvalidate/key',
            ProjectKeyParams(key=project_key),
            decode_error=True,
        )
        self._check_status(resp.status, {401: NoAuthError})

        errors = self._decode(ErrorCollection, resp.content)
        message = errors.first_error()
        if message is not None:
            raise JiraServerError(message)

    # Resolutions and roles

    async def get_resolutions(self) -> list[Resolution]:
        return await self._get('/resolution', list[Resolution], {401: NoAuthError})

    async def get_resolution(self, resolution_id: str) -> Resolution:
        return await self._get(
            f'/resolution/{esc_path(resolution_id)}',
            Resolution,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    async def get_roles(self) -> list[Role]:
        return await self._get('/role', list[Role], {401: NoAuthError})

    async def get_role(self, role_id: str) -> Role:
        return await self._get(f'/role/{esc_path(role_id)}', Role, {401: NoAuthError})

    # Statuses

    async def get_statuses(self) -> list[Status]:
        return await self._get('/status', list[Status], {401: NoAuthError, 404: NoContentError})

    async def get_status(self, status_id_or_name: str) -> Status:
        return await self._get(
            f'/status/{esc_path(status_id_or_name)}',
            Status,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    async def get_status_categories(self) -> list[StatusCategory]:
        return await self._get('/statuscategory', list[StatusCategory], {401: NoAuthError, 404: NoContentError})

    async def get_status_category(self, category_id_or_name: str) -> StatusCategory:
        return await self._get(
            f'/statuscategory/{esc_path(category_id_or_name)}',
            StatusCategory,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    # Groups and users

    async def get_group(self, params: GroupParams) -> Group:
        """Return the group, with its active users when the `users` expand option is given.

        Users can be paged with indexes in the expand value, e.g. `users[10:15]`.
        """
        return await self._get(
            '/group',
            Group,
            {400: InvalidInputError, 401: NoAuthError, 403: NoPermsError, 404: NoContentError},
            params,
            decode_error=True,
        )

    async def get_user(self, params: UserParams) -> User:
        return await self._get('/user', User, {401: NoAuthError, 404: NoContentError}, params, decode_error=True)

    async def get_user_avatars(self, username: str) -> ProjectAvatars:
        """Return all avatars visible to the given user."""
        return await self._get(
            '/user/avatars',
            ProjectAvatars,
            {401: NoAuthError, 404: NoContentError, 500: GenResponseError},
            UsernameParams(username=username),
            decode_error=True,
        )

    async def get_user_columns(self, username: str) -> list[Column]:
        """Return the default issue navigator columns of the user.

        Admin permission is required for users other than the current one.
        """
        return await self._get(
            '/user/columns',
            list[Column],
            {401: NoAuthError, 404: NoContentError, 500: GenResponseError},
            UsernameParams(username=username),
            decode_error=True,
        )

    async def get_users_by_permissions(self, params: UserPermissionParams) -> list[User]:
        """Return the active users matching the search string that have all the given permissions."""
        return await self._get(
            '/user/permission/search',
            list[User],
            {401: NoAuthError, 403: NoPermsError, 404: NoContentError},
            params,
            decode_error=True,
        )

    async def user_picker(self, params: UserPickerParams) -> UserPickerResults:
        return await self._get(
            '/user/picker',
            UserPickerResults,
            {401: NoAuthError, 404: NoContentError},
            params,
            decode_error=True,
        )

    async def group_picker(self, params: GroupPickerParams) -> GroupPickerResults:
        """Return the groups matching the query, sorted and wrapped with a header for the picker."""
        return await self._get('/groups/picker', GroupPickerResults, {401: NoAuthError}, params, decode_error=True)

    async def group_user_picker(self, params: GroupUserPickerParams) -> GroupUserPickerResults:
        return await self._get(
            '/groupuserpicker',
            GroupUserPickerResults,
            {401: NoAuthError},
            params,
            decode_error=True,
        )

    async def search_users(self, params: UserSearchParams) -> list[User]:
        return await self._get(
            '/user/search',
            list[User],
            {401: NoAuthError, 404: NoContentError},
            params,
            decode_error=True,
        )

    # Search

    async def search(self, params: SearchParams) -> SearchResults:
        """Search for issues using JQL."""
        return await self._get(
            '/search',
            SearchResults,
            {400: InvalidInputError, 401: NoAuthError},
            params,
            decode_error=True,
        )

    # Security levels and screens

    async def get_security_level(self, level_id: str) -> SecurityLevel:
        return await self._get(
            f'/securitylevel/{esc_path(level_id)}',
            SecurityLevel,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )

    async def get_screen_fields(self, screen_id: str) -> list[ScreenField]:
        """Return the fields that can still be added to the screen."""
        return await self._get(
            f'/screens/{esc_path(screen_id)}/availableFields',
            list[ScreenField],
            {400: InvalidInputError, 401: NoAuthError},
        )

    async def get_screen_tabs(self, screen_id: str, params: Optional[ScreenParams] = None) -> list[ScreenTab]:
        return await self._get(
            f'/screens/{esc_path(screen_id)}/tabs',
            list[ScreenTab],
            {400: InvalidInputError, 401: NoAuthError},
            params,
        )

    async def get_screen_tab_fields(
        self,
        screen_id: str,
        tab_id: str,
        params: Optional[ScreenParams] = None,
    ) -> list[ScreenField]:
        return await self._get(
            f'/screens/{esc_path(screen_id)}/tabs/{esc_path(tab_id)}/fields',
            list[ScreenField],
            {400: InvalidInputError, 401: NoAuthError},
            params,
        )

    # Versions

    async def get_version(self, version_id: str, params: Optional[ExpandParameters] = None) -> Version:
        return await self._get(
            f'/version/{esc_path(version_id)}',
            Version,
            {401: NoAuthError, 404: NoContentError},
            params,
            decode_error=True,
        )

    async def get_version_related_counts(self, version_id: str) -> tuple[int, int]:
        """Return the number of issues fixed in and affected by the version, in this order."""
        result = await self._get(
            f'/version/{esc_path(version_id)}/relatedIssueCounts',
            _RelatedIssueCounts,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )
        return result.issues_fixed_count, result.issues_affected_count

    async def get_version_unresolved_count(self, version_id: str) -> int:
        result = await self._get(
            f'/version/{esc_path(version_id)}/unresolvedIssueCount',
            _UnresolvedIssueCount,
            {401: NoAuthError, 404: NoContentError},
            decode_error=True,
        )
        return result.issues_unresolved_count

    # Workflows

    async def get_workflows(self) -> list[Workflow]:
        return await self._get('/workflow', list[Workflow], {401: NoAuthError})

    async def get_workflow(self, workflow_name: str) -> Workflow:
        return await self._get(
            '/workflow',
            Workflow,
            {401: NoAuthError},
            WorkflowParams(workflow_name=workflow_name),
            decode_error=True,
        )

    async def get_workflow_scheme(self, scheme_id: str, return_draft_if_exists: bool = False) -> WorkflowScheme:
        return await self._get(
            f'/workflowscheme/{esc_path(scheme_id)}',
            WorkflowScheme,
            {401: NoAuthError, 404: NoContentError},
            WorkflowSchemeParams(return_draft_if_exists=return_draft_if_exists),
        )

    async def get_workflow_scheme_default(self, scheme_id: str, return_draft_if_exists: bool = False) -> str:
        """Return the name of the default workflow of the scheme."""
        result = await self._get(
            f'/workflowscheme/{esc_path(scheme_id)}/default',
            _DefaultWorkflow,
            {401: NoAuthError, 404: NoContentError},
            WorkflowSchemeParams(return_draft_if_exists=return_draft_if_exists),
        )
        return result.workflow

    async def get_workflow_scheme_workflows(
        self,
        scheme_id: str,
        return_draft_if_exists: bool = False,
    ) -> list[WorkflowInfo]:
        """Return the workflow to issue type mappings of the scheme."""
        return await self._get(
            f'/workflowscheme/{esc_path(scheme_id)}/workflow',
            list[WorkflowInfo],
            {401: NoAuthError, 404: NoContentError},
            WorkflowSchemeParams(return_draft_if_exists=return_draft_if_exists),
        )

    # Entity (issue or project) properties

    _PROPERTY_ERRORS: StatusErrors = {
        400: InvalidInputError,
        401: NoAuthError,
        403: NoPermsError,
        404: NoContentError,
    }

    async def _get_entity_properties(self, path: str) -> list[Property]:
        result = await self._get(path, _PropertyKeys, self._PROPERTY_ERRORS, decode_error=True)
        return result.keys

    async def _get_entity_property(self, path: str) -> Optional[Property]:
        result = await self._get(path, _PropertyValue, self._PROPERTY_ERRORS, decode_error=True)
        return result.value

    async def _set_entity_property(self, path: str, prop: Property) -> None:
        resp = await self._request('PUT', path, body=prop)
        self._check_status(resp.status, self._PROPERTY_ERRORS, ok=(200, 201))

    async def _delete_entity_property(self, path: str) -> None:
        resp = await self._request('DELETE', path)
        self._check_status(resp.status, self._PROPERTY_ERRORS, ok=(204,))
