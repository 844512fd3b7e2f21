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
import unittest

from pydantic import ValidationError

from jiralib.exceptions import CustomFieldNotFound
from jiralib.fields import CustomFields, split_custom_fields
from jiralib.models import ErrorCollection, Issue, IssueFields

ISSUE_FIELDS = {
    'timespent': 7200,
    'customfield_10700': 'TEST123',
    'resolutiondate': '2018-03-26T17:37:29.805+0300',
}


class IssueFieldsTestCase(unittest.TestCase):
    def test_known_and_custom_fields(self):
        fields = IssueFields.model_validate_json(json.dumps(ISSUE_FIELDS))

        self.assertEqual(fields.time_spent, 7200)
        self.assertEqual(fields.resolution_date.day, 26)
        self.assertEqual(len(fields.custom), 1)
        self.assertIn('customfield_10700', fields.custom)
        self.assertTrue(fields.custom.has('customfield_10700'))
        self.assertEqual(fields.custom.get('customfield_10700', str), 'TEST123')
        self.assertEqual(fields.custom.names(), ['customfield_10700'])

    def test_missing_custom_field(self):
        fields = IssueFields.model_validate_json(json.dumps(ISSUE_FIELDS))

        self.assertFalse(fields.custom.has('customfield_99999'))
        with self.assertRaises(CustomFieldNotFound) as cm:
            fields.custom.get('customfield_99999')
        self.assertEqual(str(cm.exception), 'custom field customfield_99999 not found')

        # also usable as a KeyError
        with self.assertRaises(KeyError):
            fields.custom['customfield_99999']

    def test_wrong_custom_field_shape(self):
        fields = IssueFields.model_validate_json('{"customfield_10001": {"id": "1", "value": "High"}}')

        self.assertEqual(fields.custom.get('customfield_10001', dict[str, str]), {'id': '1', 'value': 'High'})
        self.assertEqual(fields.custom.raw('customfield_10001'), {'id': '1', 'value': 'High'})
        with self.assertRaises(ValidationError):
            fields.custom.get('customfield_10001', int)

    def test_unknown_keys_are_dropped(self):
        data = {'summary': 'Test', 'expand': 'renderedFields', 'Custom_10000': 1, 'customfield_10002': [1, 2]}
        fields = IssueFields.model_validate_json(json.dumps(data))

        self.assertEqual(fields.summary, 'Test')
        self.assertEqual(fields.custom.names(), ['customfield_10002'])
        self.assertEqual(fields.custom.get('customfield_10002', list[int]), [1, 2])

    def test_attribute_names_are_not_wire_names(self):
        data = {'summary': 's', 'comments': 'x', 'attachments': 1, 'issue_type': 'Bug', 'time_spent': 'a lot'}
        fields = IssueFields.model_validate_json(json.dumps(data))

        self.assertEqual(fields.summary, 's')
        self.assertIsNone(fields.comments)
        self.assertEqual(fields.attachments, [])
        self.assertIsNone(fields.issue_type)
        self.assertEqual(fields.time_spent, 0)
        self.assertEqual(len(fields.custom), 0)

    def test_null_values(self):
        data = {'description': None, 'assignee': None, 'labels': None, 'customfield_1': None, 'customfield_2': 0}
        fields = IssueFields.model_validate_json(json.dumps(data))

        self.assertEqual(fields.description, '')
        self.assertIsNone(fields.assignee)
        self.assertEqual(fields.labels, [])
        self.assertEqual(fields.custom.names(), ['customfield_2'])

    def test_keep_null_custom_fields(self):
        data = {'customfield_1': None, 'customfield_2': 0}
        fields = IssueFields.model_validate_json(json.dumps(data), context={'drop_null_custom_fields': False})

        self.assertEqual(len(fields.custom), 2)
        self.assertIsNone(fields.custom.raw('customfield_1'))

    def test_custom_prefix(self):
        data = {'cf_1': 'a', 'customfield_2': 'b'}
        fields = IssueFields.model_validate_json(json.dumps(data), context={'custom_field_prefix': 'cf_'})

        self.assertEqual(fields.custom.names(), ['cf_1'])

    def test_type_mismatch_aborts_decoding(self):
        with self.assertRaises(ValidationError):
            IssueFields.model_validate_json('{"timespent": "a lot"}')
        with self.assertRaises(ValidationError):
            IssueFields.model_validate_json('{"timespent": ')
        with self.assertRaises(ValidationError):
            IssueFields.model_validate_json('{"created": "2018"}')

    def test_nested_in_issue(self):
        data = {
            'id': '10000',
            'key': 'ABC-1',
            'fields': {
                'summary': 'Parent',
                'issuetype': {'id': '1', 'name': 'Bug', 'subtask': False},
                'subtasks': [{'id': '10001', 'key': 'ABC-2', 'fields': {'summary': 'Child', 'customfield_1': 'x'}}],
                'customfield_10700': 'TEST123',
            },
        }
        issue = Issue.model_validate_json(json.dumps(data))

        self.assertEqual(issue.key, 'ABC-1')
        self.assertEqual(issue.fields.issue_type.name, 'Bug')
        self.assertEqual(issue.fields.custom.get('customfield_10700', str), 'TEST123')
        self.assertEqual(issue.fields.sub_tasks[0].fields.summary, 'Child')
        self.assertEqual(issue.fields.sub_tasks[0].fields.custom.get('customfield_1', str), 'x')

    def test_built_from_python(self):
        fields = IssueFields(summary='Test', time_spent=60)
        self.assertEqual(fields.summary, 'Test')
        self.assertEqual(len(fields.custom), 0)

        custom = CustomFields({'customfield_1': 'a'})
        fields = IssueFields(summary='Test', custom=custom)
        self.assertEqual(fields.custom, custom)
        self.assertNotIn('custom', fields.model_dump())

    def test_built_from_python_with_custom_keywords(self):
        fields = IssueFields(issue_type={'name': 'Bug'}, customfield_2='b')
        self.assertEqual(fields.issue_type.name, 'Bug')
        self.assertEqual(fields.custom, CustomFields({'customfield_2': 'b'}))

        custom = CustomFields({'customfield_1': 'a', 'customfield_2': 'old'})
        fields = IssueFields(custom=custom, customfield_2='b', customfield_3='c')
        self.assertEqual(fields.custom, CustomFields({'customfield_1': 'a', 'customfield_2': 'b', 'customfield_3': 'c'}))

        with self.assertRaises(ValidationError):
            IssueFields(custom={'customfield_1': 'a'})

    def test_frozen(self):
        fields = IssueFields.model_validate_json(json.dumps(ISSUE_FIELDS))
        with self.assertRaises(ValidationError):
            fields.summary = 'changed'


class SplitCustomFieldsTestCase(unittest.TestCase):
    def test_split(self):
        data = {'a': 1, 'b': None, 'customfield_1': 2, 'customfield_2': None, 'other': 3}
        known, custom = split_custom_fields(data, frozenset({'a', 'b'}))

        self.assertEqual(known, {'a': 1, 'b': None})
        self.assertEqual(custom, {'customfield_1': 2})

    def test_split_keeping_nulls(self):
        data = {'customfield_1': 2, 'customfield_2': None}
        _, custom = split_custom_fields(data, frozenset(), drop_null=False)

        self.assertEqual(custom, {'customfield_1': 2, 'customfield_2': None})


class ErrorCollectionTestCase(unittest.TestCase):
    def test_first_error(self):
        errors = ErrorCollection.model_validate_json('{"errorMessages": ["Issue does not exist"], "errors": {}}')
        self.assertEqual(errors.first_error(), 'Issue does not exist')

        errors = ErrorCollection.model_validate_json('{"errorMessages": [], "errors": {"projectKey": "Taken"}}')
        self.assertEqual(errors.first_error(), 'Taken')

        errors = ErrorCollection.model_validate_json('{}')
        self.assertIsNone(errors.first_error())
