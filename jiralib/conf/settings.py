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

from pathlib import Path
from typing import Union

from pydantic import Field, PositiveFloat, PositiveInt, field_validator

from jiralib.utils.pydantic import BaseModel

CUSTOM_FIELD_PREFIX = 'customfield_'


class JiraSettings(BaseModel):
    # Product token sent in the User-Agent header
    USER_AGENT_NAME: str = Field(default='jiralib', min_length=1)

    # Seconds to wait for a response chunk before giving up
    READ_TIMEOUT: PositiveFloat = 5.0

    # Seconds to wait for a connection to be established
    CONNECT_TIMEOUT: PositiveFloat = 10.0

    # Maximum number of simultaneous connections to the Jira host
    MAX_CONNS_PER_HOST: PositiveInt = 150

    # Prefix of the dynamically named issue fields kept by IssueFields.custom
    CUSTOM_FIELD_PREFIX: str = CUSTOM_FIELD_PREFIX

    # Custom fields whose value is JSON null are treated as absent. Disable to keep them, as older releases did.
    DROP_NULL_CUSTOM_FIELDS: bool = True

    @field_validator('CUSTOM_FIELD_PREFIX')
    @classmethod
    def _validate_custom_field_prefix(cls, prefix: str) -> str:
        if not prefix:
            raise ValueError('CUSTOM_FIELD_PREFIX cannot be empty')
        return prefix

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'JiraSettings':
        """Load settings from a yaml file, which may extend one of the bundled files."""
        from jiralib.utils.yaml import model_from_extended_yaml
        return model_from_extended_yaml(cls, filepath=filepath, custom_root=Path(__file__).parent)

    def decode_context(self) -> dict[str, object]:
        """Validation context that makes response decoding follow these settings."""
        return {
            'custom_field_prefix': self.CUSTOM_FIELD_PREFIX,
            'drop_null_custom_fields': self.DROP_NULL_CUSTOM_FIELDS,
        }
