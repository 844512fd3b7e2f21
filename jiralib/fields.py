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
Records whose JSON objects mix a fixed set of known keys with dynamically named extension keys.

Jira issues carry their custom fields as `customfield_<id>` keys next to the system fields. The ids depend on the Jira
instance, so they cannot be modelled as fields. `ExtensionModel` validates the known keys into its fields and keeps the
prefixed keys aside in a `CustomFields` lookup, to be decoded on demand.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Iterator, Mapping, Optional

from pydantic import Field, GetCoreSchemaHandler
from pydantic_core import core_schema

from jiralib.conf.settings import CUSTOM_FIELD_PREFIX
from jiralib.exceptions import CustomFieldNotFound
from jiralib.utils.pydantic import WireModel, get_type_adapter

CUSTOM_FIELDS_ATTR = 'custom'


class CustomFields:
    """Read-only lookup of the extension fields of a record, by wire name.

    Values are kept as decoded JSON (dicts, lists, strings, numbers, booleans) until `get` validates them into the
    type the caller expects.
    """

    __slots__ = ('_values',)

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.is_instance_schema(cls)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __getitem__(self, name: str) -> Any:
        return self.raw(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CustomFields):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f'CustomFields({self._values!r})'

    def names(self) -> list[str]:
        return list(self._values)

    def has(self, name: str) -> bool:
        """Return whether the record has the custom field `name`."""
        return name in self._values

    def raw(self, name: str) -> Any:
        """Return the undecoded JSON value of the custom field `name`."""
        try:
            return self._values[name]
        except KeyError:
            raise CustomFieldNotFound(f'custom field {name} not found') from None

    def get(self, name: str, target: Any = Any) -> Any:
        """Decode the custom field `name` into `target`, which may be any type pydantic can validate.

        Raises CustomFieldNotFound when the field is absent and pydantic.ValidationError when its value does not fit
        `target`.
        """
        value = self.raw(name)
        return get_type_adapter(target).validate_python(value)


def split_custom_fields(
    data: Mapping[str, Any],
    known: frozenset[str],
    *,
    prefix: str = CUSTOM_FIELD_PREFIX,
    drop_null: bool = True,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a JSON object into its known entries and its extension entries.

    Keys that are neither known nor prefixed are discarded. Prefixed keys holding null are discarded too, unless
    `drop_null` is disabled.
    """
    known_data: dict[str, Any] = {}
    custom: dict[str, Any] = {}

    for key, value in data.items():
        if key in known:
            known_data[key] = value
        elif not key.startswith(prefix):
            continue
        elif value is None and drop_null:
            continue
        else:
            custom[key] = value

    return known_data, custom


class ExtensionModel(WireModel):
    """Record with known fields plus the `custom` lookup of extension fields.

    Decoding follows the validation context: `custom_field_prefix` and `drop_null_custom_fields` override the
    defaults (see JiraSettings.decode_context).
    """

    custom: CustomFields = Field(default_factory=CustomFields, exclude=True)

    @classmethod
    def known_wire_names(cls, by_name: bool = False) -> frozenset[str]:
        """Keys validated into fields. Attribute names only count when `by_name` is set."""
        return _known_wire_names(cls, by_name)

    @classmethod
    def prepare_wire_data(cls, data: dict[str, Any], context: dict[str, Any], by_name: bool = False) -> dict[str, Any]:
        given = data.get(CUSTOM_FIELDS_ATTR) if by_name else None
        if given is not None and not isinstance(given, CustomFields):
            raise ValueError(f'{CUSTOM_FIELDS_ATTR} must be a CustomFields instance')

        known_data, custom = split_custom_fields(
            data,
            cls.known_wire_names(by_name),
            prefix=context.get('custom_field_prefix', CUSTOM_FIELD_PREFIX),
            drop_null=context.get('drop_null_custom_fields', True),
        )

        if given is not None:
            # prefixed keywords are added to the given lookup and win over its entries
            custom = {**{name: given.raw(name) for name in given}, **custom}

        result = super().prepare_wire_data(known_data, context, by_name)
        result[CUSTOM_FIELDS_ATTR] = CustomFields(custom)
        return result


@lru_cache(maxsize=None)
def _known_wire_names(model: type[ExtensionModel], by_name: bool) -> frozenset[str]:
    names: set[str] = set()
    for attr, info in model.model_fields.items():
        if attr == CUSTOM_FIELDS_ATTR:
            continue
        if info.alias:
            names.add(info.alias)
        if by_name or not info.alias:
            names.add(attr)
    return frozenset(names)
