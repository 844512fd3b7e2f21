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
Read-only client for the Jira REST API.

The HTTP client lives in `jiralib.client`, parameter records in `jiralib.params` and response records in
`jiralib.models`. This module only carries the package metadata so it can be imported by `setup.py`.
"""

NAME = 'jiralib'

__version__ = '3.0.0'

__all__ = [
    'NAME',
    '__version__',
]
