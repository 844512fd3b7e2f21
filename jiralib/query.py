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
Encoding of parameter records into URL query strings.

Every field of a parameter record is declared with a `QueryField` in its `Annotated` metadata:

    class IssuePickerParams(Parameters):
        query: Annotated[str, QueryField('query')] = ''
        show_sub_tasks: Annotated[bool, QueryField('showSubTasks', respect=True)] = False

The field layout of each record class is checked and turned into an encoding plan once, when the class is created.
"""

from __future__ import annotations

import types
from datetime import date
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, NamedTuple, Sequence, Union, get_args, get_origin
from urllib.parse import quote_plus

from jiralib.utils.pydantic import BaseModel

OPTION_UNWRAP = 'unwrap'
OPTION_RESPECT = 'respect'
OPTION_REVERSE = 'reverse'


class QueryField(NamedTuple):
    """Wire name and formatting flags of a parameter record field."""

    name: str
    # emit the field even when it holds the zero value of its type
    respect: bool = False
    # booleans only, a true value is sent as `false`
    reverse: bool = False
    # sequences only, one `name=value` pair per element instead of a comma-joined value
    unwrap: bool = False

    @classmethod
    def from_tag(cls, tag: str) -> QueryField:
        """Parse a `name[,option]` tag.

        Only one option is supported and it must match exactly; anything else after the comma is ignored and the field
        ends up with no flags.
        """
        name, sep, option = tag.partition(',')
        if not sep:
            return cls(name=tag)
        return cls(
            name=name,
            respect=option == OPTION_RESPECT,
            reverse=option == OPTION_REVERSE,
            unwrap=option == OPTION_UNWRAP,
        )


class FieldKind(Enum):
    TEXT = 'text'
    INTEGER = 'integer'
    BOOLEAN = 'boolean'
    TIMESTAMP = 'timestamp'
    SEQUENCE = 'sequence'


class QueryPlanItem(NamedTuple):
    attr: str
    field: QueryField
    kind: FieldKind


def esc(value: str) -> str:
    """Escape a value so it can be safely placed inside a URL query."""
    return quote_plus(value)


def format_date(value: date) -> str:
    """Format a date (or the date part of a datetime) as YYYY-MM-DD."""
    return f'{value.year:04d}-{value.month:02d}-{value.day:02d}'


def format_sequence(name: str, values: Sequence[str], unwrap: bool) -> str:
    """Format a sequence of strings either as repeated pairs or as a single comma-joined pair."""
    if unwrap:
        return '&'.join(f'{name}={esc(value)}' for value in values)
    return f'{name}=' + ','.join(esc(value) for value in values)


def _encode_text(field: QueryField, value: str) -> str:
    if value != '':
        return f'{field.name}={esc(value)}'
    if field.respect:
        return f'{field.name}='
    return ''


def _encode_integer(field: QueryField, value: int) -> str:
    if value != 0:
        return f'{field.name}={value}'
    if field.respect:
        return f'{field.name}=0'
    return ''


def _encode_boolean(field: QueryField, value: bool) -> str:
    if field.reverse and value:
        return f'{field.name}=false'
    if value:
        return f'{field.name}=true'
    if field.respect:
        return f'{field.name}=false'
    return ''


def _encode_timestamp(field: QueryField, value: date | None) -> str:
    if value is None:
        return ''
    return f'{field.name}={format_date(value)}'


def _encode_sequence(field: QueryField, value: Sequence[str]) -> str:
    if not value:
        return ''
    return format_sequence(field.name, value, field.unwrap)


_ENCODERS: dict[FieldKind, Callable[[QueryField, Any], str]] = {
    FieldKind.TEXT: _encode_text,
    FieldKind.INTEGER: _encode_integer,
    FieldKind.BOOLEAN: _encode_boolean,
    FieldKind.TIMESTAMP: _encode_timestamp,
    FieldKind.SEQUENCE: _encode_sequence,
}


def _field_kind(annotation: Any) -> FieldKind | None:
    # bool is a subclass of int, it must be checked first
    if annotation is bool:
        return FieldKind.BOOLEAN
    if annotation is int:
        return FieldKind.INTEGER
    if annotation is str:
        return FieldKind.TEXT

    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin in (list, tuple) and args in ((str,), (str, ...)):
        return FieldKind.SEQUENCE

    if origin in (Union, types.UnionType):
        not_none = [arg for arg in args if arg is not type(None)]
        # Optional[datetime], Optional[date] or Optional[Union[date, datetime]]
        dates = [arg for arg in not_none if isinstance(arg, type) and issubclass(arg, date)]
        if dates and len(dates) == len(not_none) < len(args):
            return FieldKind.TIMESTAMP

    return None


@lru_cache(maxsize=None)
def build_query_plan(model: type[BaseModel]) -> tuple[QueryPlanItem, ...]:
    """Return the encoding plan of a parameter record class, in field declaration order.

    Raises TypeError if a field has no QueryField or has a type that cannot be encoded.
    """
    plan: list[QueryPlanItem] = []

    for attr, info in model.model_fields.items():
        fields = [meta for meta in info.metadata if isinstance(meta, QueryField)]
        if len(fields) != 1:
            raise TypeError(f'{model.__name__}.{attr} must be annotated with exactly one QueryField')

        kind = _field_kind(info.annotation)
        if kind is None:
            raise TypeError(f'{model.__name__}.{attr} has unsupported type {info.annotation!r}')

        field, = fields
        if field.reverse and kind is not FieldKind.BOOLEAN:
            raise TypeError(f'{model.__name__}.{attr}: only booleans can be reversed')
        if field.unwrap and kind is not FieldKind.SEQUENCE:
            raise TypeError(f'{model.__name__}.{attr}: only sequences can be unwrapped')

        plan.append(QueryPlanItem(attr=attr, field=field, kind=kind))

    return tuple(plan)


def params_to_query(params: BaseModel) -> str:
    """Convert a parameter record to a query string, without the leading `?`.

    Fields are emitted in declaration order and fields with nothing to emit are skipped, so a record with no emitting
    field gives an empty string.
    """
    chunks: list[str] = []

    for item in build_query_plan(type(params)):
        chunk = _ENCODERS[item.kind](item.field, getattr(params, item.attr))
        if chunk:
            chunks.append(chunk)

    return '&'.join(chunks)


class Parameters(BaseModel):
    """Base class of every parameter record."""

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        build_query_plan(cls)

    def to_query(self) -> str:
        """Convert params to URL query."""
        return params_to_query(self)


class EmptyParameters(Parameters):
    """Parameters of endpoints that take no query."""
