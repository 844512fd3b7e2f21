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

"""
Records decoded from Jira REST API (v2) responses.

Every record ignores the keys it does not model and treats JSON null as an absent key, so a field missing from the
response keeps its default (empty string, zero, false, empty list or None).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field

from jiralib.date import Date
from jiralib.fields import ExtensionModel
from jiralib.utils.pydantic import WireModel

# Autocomplete


class JQLField(WireModel):
    value: str = ''
    display_name: str = ''
    cf_id: str = Field(default='', alias='cfid')
    auto: str = ''
    orderable: str = ''
    searchable: str = ''
    operators: list[str] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)


class JQLFunction(WireModel):
    value: str = ''
    display_name: str = ''
    is_list: str = ''
    types: list[str] = Field(default_factory=list)


class AutocompleteData(WireModel):
    visible_field_names: list[JQLField] = Field(default_factory=list)
    visible_function_names: list[JQLFunction] = Field(default_factory=list)
    reserved_words: list[str] = Field(default_factory=list, alias='jqlReservedWords')


class Suggestion(WireModel):
    value: str = ''
    display_name: str = ''


# Columns and configuration


class Column(WireModel):
    label: str = ''
    value: str = ''


class TimeTrackingConfiguration(WireModel):
    working_hours_per_day: float = 0.0
    working_days_per_week: float = 0.0
    time_format: str = ''
    default_unit: str = ''


class Configuration(WireModel):
    """Optional features of the instance, with the time tracking setup when it is enabled."""
    voting_enabled: bool = False
    watching_enabled: bool = False
    unassigned_issues_allowed: bool = False
    sub_tasks_enabled: bool = False
    issue_linking_enabled: bool = False
    time_tracking_enabled: bool = False
    attachments_enabled: bool = False
    time_tracking_configuration: Optional[TimeTrackingConfiguration] = None


# Users and groups


class Avatars(WireModel):
    size16: str = Field(default='', alias='16x16')
    size24: str = Field(default='', alias='24x24')
    size32: str = Field(default='', alias='32x32')
    size48: str = Field(default='', alias='48x48')


class UserGroups(WireModel):
    size: int = 0
    items: list[Group] = Field(default_factory=list)


class User(WireModel):
    avatars: Optional[Avatars] = Field(default=None, alias='avatarUrls')
    name: str = ''
    key: str = ''
    email: str = Field(default='', alias='emailAddress')
    display_name: str = ''
    time_zone: str = ''
    locale: str = ''
    active: bool = False
    groups: Optional[UserGroups] = None


class UserCollection(WireModel):
    size: int = 0
    max_results: int = Field(default=0, alias='max-results')
    start_index: int = Field(default=0, alias='start-index')
    end_index: int = Field(default=0, alias='end-index')
    items: list[User] = Field(default_factory=list)


class Group(WireModel):
    name: str = ''
    users: Optional[UserCollection] = None


# Dashboards


class Dashboard(WireModel):
    id: str = ''
    name: str = ''
    view: str = ''


class DashboardCollection(WireModel):
    start_at: int = 0
    max_results: int = 0
    total: int = 0
    dashboards: list[Dashboard] = Field(default_factory=list)


# Issues


class IssueType(WireModel):
    id: str = ''
    name: str = ''
    description: str = ''
    icon_url: str = ''
    avatar_id: int = 0
    is_sub_task: bool = Field(default=False, alias='subtask')
    statuses: list[Status] = Field(default_factory=list)


class Priority(WireModel):
    id: str = ''
    name: str = ''
    icon_url: str = ''
    description: str = ''
    status_color: str = ''


class Resolution(WireModel):
    id: str = ''
    name: str = ''
    description: str = ''


class SecurityLevel(WireModel):
    id: str = ''
    name: str = ''
    description: str = ''


class TimeTracking(WireModel):
    remaining_estimate: str = ''
    time_spent: str = ''
    remaining_estimate_seconds: int = 0
    time_spent_seconds: int = 0


class Component(WireModel):
    id: str = ''
    name: str = ''
    description: str = ''
    assignee_type: str = ''
    real_assignee_type: str = ''
    assignee: Optional[User] = None
    real_assignee: Optional[User] = None
    is_assignee_type_valid: bool = False
    project: str = ''
    project_id: int = 0


class Progress(WireModel):
    percent: float = 0.0
    progress: int = 0
    total: int = 0


class Attachment(WireModel):
    id: str = ''
    filename: str = ''
    mime_type: str = ''
    content: str = ''
    thumbnail: str = ''
    created: Optional[Date] = None
    author: Optional[User] = None
    size: int = 0


class Watches(WireModel):
    watch_count: int = 0
    is_watching: bool = False


class Comment(WireModel):
    id: str = ''
    body: str = ''
    created: Optional[Date] = None
    updated: Optional[Date] = None
    author: Optional[User] = None
    update_author: Optional[User] = None


class CommentCollection(WireModel):
    start_at: int = 0
    max_results: int = 0
    total: int = 0
    comments: list[Comment] = Field(default_factory=list)


class Worklog(WireModel):
    id: str = ''
    comment: str = ''
    time_spent: str = ''
    created: Optional[Date] = None
    updated: Optional[Date] = None
    started: Optional[Date] = None
    author: Optional[User] = None
    update_author: Optional[User] = None
    time_spent_seconds: int = 0


class WorklogCollection(WireModel):
    start_at: int = 0
    max_results: int = 0
    total: int = 0
    worklogs: list[Worklog] = Field(default_factory=list)


class VotesInfo(WireModel):
    votes: int = 0
    has_voted: bool = False
    voters: list[User] = Field(default_factory=list)


class WatchersInfo(WireModel):
    is_watching: bool = False
    watch_count: int = 0
    watchers: list[User] = Field(default_factory=list)


class IssueFields(ExtensionModel):
    """All the system fields of an issue.

    Custom fields (`customfield_<id>` keys) are not modelled, they are kept in `custom` and decoded on demand:

        issue.fields.custom.get('customfield_10700', str)
    """
    time_spent: int = Field(default=0, alias='timespent')
    time_estimate: int = Field(default=0, alias='timeestimate')
    time_original_estimate: int = Field(default=0, alias='timeoriginalestimate')
    aggregate_time_spent: int = Field(default=0, alias='aggregatetimespent')
    aggregate_time_estimate: int = Field(default=0, alias='aggregatetimeestimate')
    aggregate_time_original_estimate: int = Field(default=0, alias='aggregatetimeoriginalestimate')
    work_ratio: int = Field(default=0, alias='workratio')
    summary: str = ''
    description: str = ''
    environment: str = ''
    created: Optional[Date] = None
    due_date: Optional[Date] = Field(default=None, alias='duedate')
    last_viewed: Optional[Date] = None
    resolution_date: Optional[Date] = Field(default=None, alias='resolutiondate')
    updated: Optional[Date] = None
    creator: Optional[User] = None
    reporter: Optional[User] = None
    assignee: Optional[User] = None
    aggregate_progress: Optional[Progress] = Field(default=None, alias='aggregateprogress')
    progress: Optional[Progress] = None
    issue_type: Optional[IssueType] = Field(default=None, alias='issuetype')
    parent: Optional[Issue] = None
    project: Optional[Project] = None
    resolution: Optional[Resolution] = None
    time_tracking: Optional[TimeTracking] = Field(default=None, alias='timetracking')
    watches: Optional[Watches] = None
    priority: Optional[Priority] = None
    comments: Optional[CommentCollection] = Field(default=None, alias='comment')
    worklogs: Optional[WorklogCollection] = Field(default=None, alias='worklog')
    votes: Optional[VotesInfo] = None
    status: Optional[Status] = None
    security: Optional[SecurityLevel] = None
    labels: list[str] = Field(default_factory=list)
    components: list[Component] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list, alias='attachment')
    sub_tasks: list[Issue] = Field(default_factory=list, alias='subtasks')
    versions: list[Version] = Field(default_factory=list)
    fix_versions: list[Version] = Field(default_factory=list)
    issue_links: list[Link] = Field(default_factory=list, alias='issuelinks')


class Issue(WireModel):
    id: str = ''
    key: str = ''
    fields: Optional[IssueFields] = None


class IssueInfo(WireModel):
    key: str = ''
    key_html: str = ''
    img: str = ''
    summary: str = ''
    summary_text: str = ''


class IssuePickerResults(WireModel):
    label: str = ''
    sub: str = ''
    id: str = ''
    msg: str = ''
    issues: list[IssueInfo] = Field(default_factory=list)


# Fields and meta


class FieldSchema(WireModel):
    type: str = ''
    items: str = ''
    system: str = ''
    custom: str = ''
    custom_id: int = 0


class IssueField(WireModel):
    """Field known to the instance, system or custom."""
    id: str = ''
    name: str = ''
    is_custom: bool = Field(default=False, alias='custom')
    is_orderable: bool = Field(default=False, alias='orderable')
    is_navigable: bool = Field(default=False, alias='navigable')
    is_searchable: bool = Field(default=False, alias='searchable')
    clause_names: list[str] = Field(default_factory=list)
    field_schema: Optional[FieldSchema] = Field(default=None, alias='schema')


class FieldMetaValue(WireModel):
    id: str = ''
    name: str = ''
    description: str = ''


class FieldMeta(WireModel):
    required: bool = False
    name: str = ''
    operations: list[str] = Field(default_factory=list)
    auto_complete_url: str = ''
    allowed_values: list[FieldMetaValue] = Field(default_factory=list)


class IssueMeta(WireModel):
    fields: dict[str, FieldMeta] = Field(default_factory=dict)


# Filters


class FilterSubscription(WireModel):
    id: int = 0
    user: Optional[User] = None


class FilterSubscriptions(WireModel):
    size: int = 0
    max_results: int = Field(default=0, alias='max-results')
    start_index: int = Field(default=0, alias='start-index')
    end_index: int = Field(default=0, alias='end-index')
    items: list[FilterSubscription] = Field(default_factory=list)


class FilterSharePermission(WireModel):
    id: int = 0
    type: str = ''
    project: Optional[Project] = None
    group: Optional[Group] = None


class Filter(WireModel):
    id: str = ''
    name: str = ''
    description: str = ''
    jql: str = ''
    view_url: str = ''
    search_url: str = ''
    is_favourite: bool = Field(default=False, alias='favourite')
    owner: Optional[User] = None
    shared_users: Optional[UserCollection] = None
    subscriptions: Optional[FilterSubscriptions] = None
    share_permissions: list[FilterSharePermission] = Field(default_factory=list)


# Links


class LinkType(WireModel):
    id: str = ''
    name: str = ''
    inward: str = ''
    outward: str = ''


class Link(WireModel):
    id: str = ''
    type: Optional[LinkType] = None
    inward_issue: Optional[Issue] = None
    outward_issue: Optional[Issue] = None


class RemoteLinkIcon(WireModel):
    url: str = Field(default='', alias='url16x16')


class RemoteLinkInfo(WireModel):
    url: str = ''
    title: str = ''
    icon: Optional[RemoteLinkIcon] = None


class RemoteLinkApp(WireModel):
    type: str = ''
    name: str = ''


class RemoteLink(WireModel):
    id: int = 0
    global_id: str = ''
    application: Optional[RemoteLinkApp] = None
    info: Optional[RemoteLinkInfo] = Field(default=None, alias='object')


# Permissions


class Permission(WireModel):
    id: str = ''
    key: str = ''
    name: str = ''
    type: str = ''
    description: str = ''
    have_permission: bool = False
    deprecated_key: bool = False


# Projects


class ProjectCategory(WireModel):
    id: str = ''
    name: str = ''
    description: str = ''


class Version(WireModel):
    id: str = ''
    name: str = ''
    description: str = ''
    is_archived: bool = Field(default=False, alias='archived')
    is_released: bool = Field(default=False, alias='released')
    project_id: int = 0


class VersionCollection(WireModel):
    start_at: int = 0
    max_results: int = 0
    total: int = 0
    is_last: bool = False
    versions: list[Version] = Field(default_factory=list, alias='values')


class Project(WireModel):
    id: str = ''
    name: str = ''
    key: str = ''
    url: str = ''
    assignee_type: str = ''
    lead: Optional[User] = None
    category: Optional[ProjectCategory] = Field(default=None, alias='projectCategory')
    avatars: Optional[Avatars] = Field(default=None, alias='avatarUrls')
    project_keys: list[str] = Field(default_factory=list)
    issue_types: list[IssueType] = Field(default_factory=list)
    versions: list[Version] = Field(default_factory=list)
    components: list[Component] = Field(default_factory=list)
    roles: dict[str, str] = Field(default_factory=dict)


class ProjectAvatar(WireModel):
    id: str = ''
    is_system_avatar: bool = False
    is_selected: bool = False
    avatars: Optional[Avatars] = Field(default=None, alias='urls')


class ProjectAvatars(WireModel):
    """Avatars visible to the user, as returned for both projects and users."""
    system: list[ProjectAvatar] = Field(default_factory=list)
    custom: list[ProjectAvatar] = Field(default_factory=list)


# Search


class SearchResults(WireModel):
    start_at: int = 0
    max_results: int = 0
    total: int = 0
    issues: list[Issue] = Field(default_factory=list)


# Properties


class Property(WireModel):
    """Entity (issue or project) property.

    The whole record is stored as the property value, so reading it back gives the same key and value.
    """
    key: str = ''
    value: dict[str, Any] = Field(default_factory=dict)


# Roles


class Actor(WireModel):
    id: int = 0
    type: str = ''
    name: str = ''
    display_name: str = ''
    avatar_url: str = ''


class Role(WireModel):
    id: int = 0
    name: str = ''
    description: str = ''
    actors: list[Actor] = Field(default_factory=list)


# Statuses


class StatusCategory(WireModel):
    id: int = 0
    key: str = ''
    name: str = ''
    color_name: str = ''


class Status(WireModel):
    id: str = ''
    name: str = ''
    description: str = ''
    icon_url: str = ''
    category: Optional[StatusCategory] = Field(default=None, alias='statusCategory')


# Transitions


class Transition(WireModel):
    id: str = ''
    name: str = ''
    to: Optional[Status] = None
    fields: dict[str, FieldMeta] = Field(default_factory=dict)


# Pickers


class GroupInfo(WireModel):
    name: str = ''
    html: str = ''


class GroupPickerResults(WireModel):
    header: str = ''
    total: int = 0
    groups: list[GroupInfo] = Field(default_factory=list)


class UserInfo(WireModel):
    name: str = ''
    display_name: str = ''
    key: str = ''
    html: str = ''


class UserPickerResults(WireModel):
    header: str = ''
    total: int = 0
    users: list[UserInfo] = Field(default_factory=list)


class GroupUserPickerResults(WireModel):
    users: Optional[UserPickerResults] = None
    groups: Optional[GroupPickerResults] = None


# Screens


class ScreenField(WireModel):
    id: str = ''
    name: str = ''


class ScreenTab(WireModel):
    id: int = 0
    name: str = ''


# Workflows


class Workflow(WireModel):
    name: str = ''
    description: str = ''
    last_modified_date: str = ''
    last_modified_user: str = ''
    steps: int = 0
    is_default: bool = Field(default=False, alias='default')


class WorkflowScheme(WireModel):
    id: int = 0
    name: str = ''
    description: str = ''
    default_workflow: str = ''
    issue_type_mappings: dict[str, str] = Field(default_factory=dict)
    original_default_workflow: str = ''
    original_issue_type_mappings: dict[str, str] = Field(default_factory=dict)
    is_draft: bool = Field(default=False, alias='draft')
    last_modified_user: Optional[User] = None
    last_modified: str = ''


class WorkflowInfo(WireModel):
    workflow: str = ''
    issue_types: list[str] = Field(default_factory=list)
    is_default_mapping: bool = Field(default=False, alias='defaultMapping')


# Server


class HealthCheck(WireModel):
    name: str = ''
    description: str = ''
    is_passed: bool = Field(default=False, alias='passed')


class ServerInfo(WireModel):
    build_date: Optional[Date] = None
    server_time: Optional[Date] = None
    base_url: str = ''
    version: str = ''
    scm_info: str = ''
    server_title: str = ''
    version_numbers: list[int] = Field(default_factory=list)
    build_number: int = 0
    health_checks: list[HealthCheck] = Field(default_factory=list)


# Errors


class ErrorCollection(WireModel):
    """Error document Jira sends along with failed requests."""
    error_messages: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)

    def first_error(self) -> Optional[str]:
        """Return the first error message, falling back to the first field error, or None if there is none."""
        if self.error_messages:
            return self.error_messages[0]
        for message in self.errors.values():
            return message
        return None


# resolve the forward references between the records above
for _model in list(globals().values()):
    if isinstance(_model, type) and issubclass(_model, WireModel) and _model.__module__ == __name__:
        _model.model_rebuild()
