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

from functools import lru_cache
from typing import Any

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, TypeAdapter, ValidationInfo, model_validator
from pydantic.alias_generators import to_camel


class BaseModel(PydanticBaseModel):
    """Substitute for pydantic's BaseModel.
    This class defines a project BaseModel to be used instead of pydantic's, setting stricter global configurations.
    Other configurations can be set on a case by case basis.

    Read: https://docs.pydantic.dev/latest/concepts/config/
    """
    model_config = ConfigDict(extra='forbid', frozen=True)

    def json_dumpb(self) -> bytes:
        """Utility method for converting a Model into bytes representation of a JSON."""
        return self.model_dump_json(by_alias=True).encode('utf-8')


class WireModel(BaseModel):
    """Base for records decoded from Jira responses.

    Jira sends many more keys than the ones we model, so extra keys are ignored instead of forbidden. Field names are
    snake_case in Python and camelCase on the wire unless an explicit alias says otherwise.
    """
    model_config = ConfigDict(extra='ignore', alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode='before')
    @classmethod
    def _decode_wire_object(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict):
            return data
        return cls.prepare_wire_data(data, info.context or {}, by_name=info.mode == 'python')

    @classmethod
    def prepare_wire_data(cls, data: dict[str, Any], context: dict[str, Any], by_name: bool = False) -> dict[str, Any]:
        """Hook to reshape a decoded JSON object before field validation.

        `by_name` is set when the record is built from Python, where attribute names are accepted next to wire names.
        Jira sends null for unset values, those fall back to the field defaults.
        """
        return {key: value for key, value in data.items() if value is not None}


@lru_cache(maxsize=None)
def _cached_type_adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def get_type_adapter(target: Any) -> TypeAdapter[Any]:
    """Return a TypeAdapter for `target`, reusing the one built before for the same type when possible."""
    try:
        return _cached_type_adapter(target)
    except TypeError:
        # unhashable type expressions cannot be cached
        return TypeAdapter(target)
