#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

import json
from unittest import IsolatedAsyncioTestCase, TestCase
from unittest.mock import MagicMock, Mock

from yarl import URL

from jiralib import __version__
from jiralib.auth import AuthBasic, AuthToken
from jiralib.client import JiraClient, esc_path, get_user_agent
from jiralib.conf.settings import JiraSettings
from jiralib.exceptions import (
    EmptyURLError,
    JiraServerError,
    NoAuthError,
    NoContentError,
    TokenWrongLengthError,
    UnknownStatusError,
)
from jiralib.models import Property
from jiralib.params import IssueParams, SearchParams

BASE_URL = 'https://jira.example.com'
BASIC_AUTH = 'Basic Sm9obkRvZTpUZXN0MTIzNCE='


class AsyncMock(MagicMock):
    async def __call__(self, *args, **kwargs):
        return super(AsyncMock, self).__call__(*args, **kwargs)


class MockResponse:
    def __init__(self, status=200, body=b''):
        self.status = status
        self.released = False
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode('utf-8')
        self._body = body

    async def read(self):
        return self._body

    def release(self):
        self.released = True


def _api_url(path: str) -> URL:
    return URL(BASE_URL + '/rest/api/2' + path, encoded=True)


class UserAgentTestCase(TestCase):
    def test_default(self):
        user_agent = get_user_agent('', '')

        self.assertTrue(user_agent.startswith(f'jiralib/{__version__} (python; '))

    def test_with_application(self):
        user_agent = get_user_agent('tracker', '1.2.0', 'jira-sync')

        self.assertTrue(user_agent.startswith(f'tracker/1.2.0 jira-sync/{__version__} (python; '))

    def test_partial_application(self):
        self.assertEqual(get_user_agent('tracker', ''), get_user_agent('', ''))

    def test_esc_path(self):
        self.assertEqual(esc_path('ABC-1'), 'ABC-1')
        self.assertEqual(esc_path('a/b c'), 'a%2Fb%20c')


class ClientSetupTestCase(IsolatedAsyncioTestCase):
    def test_empty_url(self) -> None:
        with self.assertRaises(EmptyURLError):
            JiraClient('', AuthBasic('JohnDoe', 'Test1234!'), settings=JiraSettings())

    def test_invalid_auth(self) -> None:
        with self.assertRaises(TokenWrongLengthError):
            JiraClient(BASE_URL, AuthToken('TEST'), settings=JiraSettings())

    def test_url_and_user_agent(self) -> None:
        client = JiraClient(BASE_URL + '/', AuthBasic('JohnDoe', 'Test1234!'), settings=JiraSettings())

        self.assertEqual(client.url, BASE_URL)
        self.assertEqual(client.user_agent, get_user_agent('', ''))

        client.set_user_agent('tracker', '1.2.0')
        self.assertEqual(client.user_agent, get_user_agent('tracker', '1.2.0'))

    async def test_context_manager(self) -> None:
        client = JiraClient(BASE_URL, AuthBasic('JohnDoe', 'Test1234!'), settings=JiraSettings())

        async with client as jira:
            self.assertIs(jira, client)
            self.assertIsNotNone(client._session)

        self.assertIsNone(client._session)

        # stopping twice is harmless
        await client.stop()


class ClientTestCase(IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.settings = JiraSettings()
        self.client = JiraClient(BASE_URL, AuthBasic('JohnDoe', 'Test1234!'), settings=self.settings)
        self.client._session = Mock()

    def _mock_response(self, status=200, body=b'') -> MockResponse:
        response = MockResponse(status, body)
        self.client._session.request = AsyncMock(return_value=response)
        return response

    def _headers(self, method='GET') -> dict[str, str]:
        headers = {
            'User-Agent': get_user_agent('', ''),
            'Authorization': BASIC_AUTH,
        }
        if method != 'GET':
            headers['Content-Type'] = 'application/json'
        return headers

    async def test_get_issue(self) -> None:
        # Preparation
        response = self._mock_response(body={
            'id': '10000',
            'key': 'ABC-1',
            'fields': {
                'summary': 'Test issue',
                'description': None,
                'customfield_10700': 'TEST123',
                'customfield_10701': None,
            },
        })

        # Execution
        params = IssueParams(fields=['summary', 'customfield_10700'], expand=['names'])
        issue = await self.client.get_issue('ABC-1', params)

        # Assertion
        self.assertEqual(issue.key, 'ABC-1')
        self.assertEqual(issue.fields.summary, 'Test issue')
        self.assertEqual(issue.fields.description, '')
        self.assertEqual(issue.fields.custom.get('customfield_10700', str), 'TEST123')
        self.assertFalse(issue.fields.custom.has('customfield_10701'))
        self.assertTrue(response.released)

        self.client._session.request.assert_called_once_with(
            'GET',
            _api_url('/issue/ABC-1?fields=summary&fields=customfield_10700&expand=names'),
            headers=self._headers(),
            data=None,
        )

    async def test_get_issue_keeping_null_custom_fields(self) -> None:
        self.client = JiraClient(
            BASE_URL,
            AuthBasic('JohnDoe', 'Test1234!'),
            settings=JiraSettings(DROP_NULL_CUSTOM_FIELDS=False),
        )
        self.client._session = Mock()
        self._mock_response(body={'key': 'ABC-1', 'fields': {'customfield_10701': None}})

        issue = await self.client.get_issue('ABC-1')

        self.assertTrue(issue.fields.custom.has('customfield_10701'))
        self.assertIsNone(issue.fields.custom.raw('customfield_10701'))

    async def test_known_status_error(self) -> None:
        response = self._mock_response(status=401)

        with self.assertRaises(NoAuthError) as cm:
            await self.client.get_issue('ABC-1')

        self.assertEqual(str(cm.exception), 'Calling user is not authenticated')
        self.assertTrue(response.released)

    async def test_unknown_status_error(self) -> None:
        self._mock_response(status=418, body=b'I am a teapot')

        with self.assertRaises(UnknownStatusError) as cm:
            await self.client.get_issue('ABC-1')

        self.assertEqual(cm.exception.status_code, 418)

    async def test_server_error_message(self) -> None:
        self._mock_response(status=404, body={'errorMessages': ['Issue does not exist'], 'errors': {}})

        with self.assertRaises(JiraServerError) as cm:
            await self.client.get_issue('ABC-1')

        self.assertEqual(str(cm.exception), 'Issue does not exist')

    async def test_server_error_without_message(self) -> None:
        self._mock_response(status=404, body={'errorMessages': [], 'errors': {}})

        with self.assertRaises(NoContentError):
            await self.client.get_issue('ABC-1')

    async def test_server_error_not_json(self) -> None:
        self._mock_response(status=404, body=b'<html>Not Found</html>')

        with self.assertRaises(NoContentError):
            await self.client.get_dashboard('10000')

    async def test_error_body_ignored_without_decoding(self) -> None:
        self._mock_response(status=401, body={'errorMessages': ['You are not logged in'], 'errors': {}})

        with self.assertRaises(NoAuthError):
            await self.client.get_fields()

    async def test_search_error(self) -> None:
        self._mock_response(status=400, body={'errorMessages': ["Field 'foo' does not exist."], 'errors': {}})

        with self.assertRaises(JiraServerError) as cm:
            await self.client.search(SearchParams(jql='foo = bar'))

        self.assertEqual(str(cm.exception), "Field 'foo' does not exist.")

    async def test_search(self) -> None:
        self._mock_response(body={
            'startAt': 0,
            'maxResults': 50,
            'total': 1,
            'issues': [{'id': '10000', 'key': 'ABC-1', 'fields': {'summary': 'Test issue'}}],
        })

        results = await self.client.search(SearchParams(jql='project = ABC', max_results=50))

        self.assertEqual(results.total, 1)
        self.assertEqual(results.issues[0].fields.summary, 'Test issue')
        self.client._session.request.assert_called_once_with(
            'GET',
            _api_url('/search?jql=project+%3D+ABC&maxResults=50'),
            headers=self._headers(),
            data=None,
        )

    async def test_path_escaping(self) -> None:
        self._mock_response(body={'id': '10000', 'name': 'System Dashboard'})

        dashboard = await self.client.get_dashboard('a/b c')

        self.assertEqual(dashboard.name, 'System Dashboard')
        self.client._session.request.assert_called_once_with(
            'GET',
            _api_url('/dashboard/a%2Fb%20c'),
            headers=self._headers(),
            data=None,
        )

    async def test_get_server_info(self) -> None:
        self._mock_response(body={
            'baseUrl': BASE_URL,
            'version': '7.9.2',
            'versionNumbers': [7, 9, 2],
            'buildNumber': 79002,
            'buildDate': '2018-05-06T00:00:00.000+0300',
            'healthChecks': [{'name': 'Database', 'description': 'Database check', 'passed': True}],
        })

        info = await self.client.get_server_info(do_health_check=True)

        self.assertEqual(info.version_numbers, [7, 9, 2])
        self.assertEqual(info.build_date.year, 2018)
        self.assertTrue(info.health_checks[0].is_passed)
        self.client._session.request.assert_called_once_with(
            'GET',
            _api_url('/serverInfo?doHealthCheck=true'),
            headers=self._headers(),
            data=None,
        )

    async def test_get_issue_transitions(self) -> None:
        self._mock_response(body={
            'expand': 'transitions',
            'transitions': [{
                'id': '2',
                'name': 'Close Issue',
                'to': {'id': '6', 'name': 'Closed', 'statusCategory': {'id': 3, 'key': 'done'}},
                'fields': {'resolution': {'required': True, 'name': 'Resolution'}},
            }],
        })

        transitions = await self.client.get_issue_transitions('ABC-1')

        self.assertEqual(len(transitions), 1)
        self.assertEqual(transitions[0].to.name, 'Closed')
        self.assertTrue(transitions[0].fields['resolution'].required)

    async def test_get_version_related_counts(self) -> None:
        self._mock_response(body={'self': BASE_URL, 'issuesFixedCount': 23, 'issuesAffectedCount': 101})

        fixed, affected = await self.client.get_version_related_counts('10000')

        self.assertEqual((fixed, affected), (23, 101))

    async def test_get_project_roles(self) -> None:
        roles = {'Developers': BASE_URL + '/rest/api/2/project/ABC/role/10000'}
        self._mock_response(body=roles)

        self.assertEqual(await self.client.get_project_roles('ABC'), roles)

    async def test_get_filter_default_scope(self) -> None:
        self._mock_response(body={'scope': 'GLOBAL'})

        self.assertEqual(await self.client.get_filter_default_scope(), 'GLOBAL')

    async def test_get_user_avatars(self) -> None:
        self._mock_response(body={'system': [{'id': '1000', 'isSystemAvatar': True}], 'custom': []})

        avatars = await self.client.get_user_avatars('')

        self.assertTrue(avatars.system[0].is_system_avatar)
        self.assertEqual(avatars.custom, [])
        self.client._session.request.assert_called_once_with(
            'GET',
            _api_url('/user/avatars?username='),
            headers=self._headers(),
            data=None,
        )

    async def test_validate_project_key(self) -> None:
        self._mock_response(body={'errorMessages': [], 'errors': {}})

        await self.client.validate_project_key('ABC')

        self.client._session.request.assert_called_once_with(
            'GET',
            _api_url('/projectvalidate/key?key=ABC'),
            headers=self._headers(),
            data=None,
        )

    async def test_validate_project_key_taken(self) -> None:
        message = "Project 'Alpha' uses this project key."
        self._mock_response(body={'errorMessages': [], 'errors': {'projectKey': message}})

        with self.assertRaises(JiraServerError) as cm:
            await self.client.validate_project_key('ABC')

        self.assertEqual(str(cm.exception), message)

    async def test_set_issue_property(self) -> None:
        self._mock_response(status=201)

        await self.client.set_issue_property('ABC-1', Property(key='my.prop', value={'a': 1}))

        self.client._session.request.assert_called_once_with(
            'PUT',
            _api_url('/issue/ABC-1/properties/my.prop'),
            headers=self._headers('PUT'),
            data=b'{"key":"my.prop","value":{"a":1}}',
        )

    async def test_get_issue_property(self) -> None:
        self._mock_response(body={'key': 'my.prop', 'value': {'key': 'my.prop', 'value': {'a': 1}}})

        prop = await self.client.get_issue_property('ABC-1', 'my.prop')

        self.assertEqual(prop, Property(key='my.prop', value={'a': 1}))

    async def test_get_project_properties(self) -> None:
        self._mock_response(body={'keys': [{'self': BASE_URL, 'key': 'first'}, {'key': 'second'}]})

        props = await self.client.get_project_properties('ABC')

        self.assertEqual([prop.key for prop in props], ['first', 'second'])

    async def test_delete_project_property(self) -> None:
        self._mock_response(status=204)

        await self.client.delete_project_property('ABC', 'my.prop')

        self.client._session.request.assert_called_once_with(
            'DELETE',
            _api_url('/project/ABC/properties/my.prop'),
            headers=self._headers('DELETE'),
            data=None,
        )

    async def test_delete_property_unexpected_status(self) -> None:
        self._mock_response(status=200)

        with self.assertRaises(UnknownStatusError):
            await self.client.delete_issue_property('ABC-1', 'my.prop')
