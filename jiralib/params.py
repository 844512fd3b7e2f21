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

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from jiralib.query import EmptyParameters, Parameters, QueryField

__all__ = [
    'CreateMetaParams',
    'DashboardParams',
    'EmptyParameters',
    'ExpandParameters',
    'GroupParams',
    'GroupPickerParams',
    'GroupUserPickerParams',
    'IssueParams',
    'IssuePickerParams',
    'Parameters',
    'PermissionsParams',
    'ProjectKeyParams',
    'RemoteLinkParams',
    'ScreenParams',
    'SearchParams',
    'ServerInfoParams',
    'SuggestionParams',
    'TransitionsParams',
    'UserParams',
    'UserPermissionParams',
    'UserPickerParams',
    'UserSearchParams',
    'UsernameParams',
    'VersionParams',
    'WorkflowParams',
    'WorkflowSchemeParams',
]


class ExpandParameters(Parameters):
    """Params with field expand info."""
    expand: Annotated[list[str], QueryField('expand')] = Field(default_factory=list)


class ServerInfoParams(Parameters):
    do_health_check: Annotated[bool, QueryField('doHealthCheck')] = False


class DashboardParams(Parameters):
    filter: Annotated[str, QueryField('filter')] = ''
    start_at: Annotated[int, QueryField('startAt')] = 0
    max_results: Annotated[int, QueryField('maxResults')] = 0


class IssueParams(Parameters):
    fields: Annotated[list[str], QueryField('fields', unwrap=True)] = Field(default_factory=list)
    expand: Annotated[list[str], QueryField('expand')] = Field(default_factory=list)


class RemoteLinkParams(Parameters):
    global_id: Annotated[str, QueryField('globalId')] = ''


class TransitionsParams(Parameters):
    transition_id: Annotated[str, QueryField('transitionId')] = ''
    expand: Annotated[list[str], QueryField('expand')] = Field(default_factory=list)


class CreateMetaParams(Parameters):
    """Params for fetching metadata for creating issues."""
    project_ids: Annotated[list[str], QueryField('projectIds')] = Field(default_factory=list)
    project_keys: Annotated[list[str], QueryField('projectKeys')] = Field(default_factory=list)
    issue_type_ids: Annotated[list[str], QueryField('issuetypeIds')] = Field(default_factory=list)
    issue_type_names: Annotated[list[str], QueryField('issuetypeNames')] = Field(default_factory=list)


class IssuePickerParams(Parameters):
    """Params for fetching data from the issue picker.

    Jira defaults both sub-task flags to true, so false has to be sent explicitly.
    """
    query: Annotated[str, QueryField('query')] = ''
    current_jql: Annotated[str, QueryField('currentJQL')] = ''
    current_issue_key: Annotated[str, QueryField('currentIssueKey')] = ''
    current_project_id: Annotated[str, QueryField('currentProjectId')] = ''
    show_sub_tasks: Annotated[bool, QueryField('showSubTasks', respect=True)] = False
    show_sub_task_parent: Annotated[bool, QueryField('showSubTaskParent', respect=True)] = False


class SuggestionParams(Parameters):
    field_name: Annotated[str, QueryField('fieldName')] = ''
    field_value: Annotated[str, QueryField('fieldValue')] = ''
    predicate_name: Annotated[str, QueryField('predicateName')] = ''
    predicate_value: Annotated[str, QueryField('predicateValue')] = ''


class PermissionsParams(Parameters):
    project_key: Annotated[str, QueryField('projectKey')] = ''
    project_id: Annotated[str, QueryField('projectId')] = ''
    issue_key: Annotated[str, QueryField('issueKey')] = ''
    issue_id: Annotated[str, QueryField('issueId')] = ''


class VersionParams(Parameters):
    start_at: Annotated[int, QueryField('startAt')] = 0
    max_results: Annotated[int, QueryField('maxResults')] = 0
    order_by: Annotated[str, QueryField('orderBy')] = ''
    expand: Annotated[list[str], QueryField('expand')] = Field(default_factory=list)


class ProjectKeyParams(Parameters):
    key: Annotated[str, QueryField('key', respect=True)] = ''


class GroupParams(Parameters):
    name: Annotated[str, QueryField('groupname')] = ''
    expand: Annotated[list[str], QueryField('expand')] = Field(default_factory=list)


class UserParams(Parameters):
    username: Annotated[str, QueryField('username')] = ''
    key: Annotated[str, QueryField('key')] = ''
    expand: Annotated[list[str], QueryField('expand')] = Field(default_factory=list)


class UsernameParams(Parameters):
    username: Annotated[str, QueryField('username', respect=True)] = ''


class UserPermissionParams(Parameters):
    username: Annotated[str, QueryField('username')] = ''
    permissions: Annotated[list[str], QueryField('permissions')] = Field(default_factory=list)
    issue_key: Annotated[str, QueryField('issueKey')] = ''
    project_key: Annotated[str, QueryField('projectKey')] = ''
    start_at: Annotated[int, QueryField('startAt')] = 0
    max_results: Annotated[int, QueryField('maxResults')] = 0


class UserPickerParams(Parameters):
    query: Annotated[str, QueryField('query')] = ''
    max_results: Annotated[int, QueryField('maxResults')] = 0
    show_avatar: Annotated[bool, QueryField('showAvatar')] = False
    exclude: Annotated[list[str], QueryField('exclude', unwrap=True)] = Field(default_factory=list)


class UserSearchParams(Parameters):
    username: Annotated[str, QueryField('username')] = ''
    start_at: Annotated[int, QueryField('startAt')] = 0
    max_results: Annotated[int, QueryField('maxResults')] = 0
    include_active: Annotated[bool, QueryField('includeActive')] = False
    include_inactive: Annotated[bool, QueryField('includeInactive')] = False


class GroupPickerParams(Parameters):
    query: Annotated[str, QueryField('query')] = ''
    exclude: Annotated[str, QueryField('exclude')] = ''
    max_results: Annotated[int, QueryField('maxResults')] = 0


class GroupUserPickerParams(Parameters):
    query: Annotated[str, QueryField('query')] = ''
    max_results: Annotated[int, QueryField('maxResults')] = 0
    show_avatar: Annotated[bool, QueryField('showAvatar')] = False
    field_id: Annotated[str, QueryField('fieldId')] = ''
    project_id: Annotated[list[str], QueryField('projectId', unwrap=True)] = Field(default_factory=list)
    issue_type_id: Annotated[list[str], QueryField('issueTypeId', unwrap=True)] = Field(default_factory=list)


class SearchParams(Parameters):
    jql: Annotated[str, QueryField('jql')] = ''
    start_at: Annotated[int, QueryField('startAt')] = 0
    max_results: Annotated[int, QueryField('maxResults')] = 0
    disable_query_validation: Annotated[bool, QueryField('validateQuery', reverse=True)] = False
    fields: Annotated[list[str], QueryField('fields')] = Field(default_factory=list)
    expand: Annotated[list[str], QueryField('expand')] = Field(default_factory=list)


class ScreenParams(Parameters):
    project_key: Annotated[str, QueryField('projectKey')] = ''


class WorkflowParams(Parameters):
    workflow_name: Annotated[str, QueryField('workflowName', respect=True)] = ''


class WorkflowSchemeParams(Parameters):
    return_draft_if_exists: Annotated[bool, QueryField('returnDraftIfExists')] = False
