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

from datetime import datetime, timezone
from typing import Annotated, Any, Optional, Union

from pydantic.functional_serializers import PlainSerializer
from pydantic.functional_validators import BeforeValidator

from jiralib.exceptions import DateParseError

# Jira sends fractional seconds on most timestamps, but not on all of them
DATETIME_FORMATS = ('%Y-%m-%dT%H:%M:%S.%f%z', '%Y-%m-%dT%H:%M:%S%z')
DATE_FORMAT = '%Y-%m-%d'

DATE_TIME_SEPARATOR = 'T'


def parse_date(raw: Union[str, bytes]) -> datetime:
    """Parse a Jira date, given either as a JSON string (quoted) or as its bare text.

    Values with a time part carry a zone offset and become aware datetimes, e.g. `2018-05-16T23:55:39.246+0300`.
    Bare dates such as `2018-10-18` become naive datetimes at midnight.
    """
    if isinstance(raw, bytes):
        raw = raw.decode('utf-8')

    value = raw.strip('"')
    formats = DATETIME_FORMATS if DATE_TIME_SEPARATOR in value else (DATE_FORMAT,)

    error: Optional[ValueError] = None
    for fmt in formats:
        try:
            return datetime.strptime(value, fmt)
        except ValueError as e:
            error = e

    raise DateParseError(raw) from error


def _validate_date(value: Any) -> Any:
    if isinstance(value, (str, bytes)):
        return parse_date(value)
    return value


def _serialize_date(value: datetime) -> str:
    if value.tzinfo is None and value == datetime(value.year, value.month, value.day):
        return value.strftime(DATE_FORMAT)
    if value.tzinfo is None:
        # timestamps always carry an offset on the wire, naive ones are taken as UTC
        value = value.replace(tzinfo=timezone.utc)
    return value.strftime('%Y-%m-%dT%H:%M:%S.') + f'{value.microsecond // 1000:03d}' + value.strftime('%z')


# Timestamp field of a Jira record. Decodes both wire formats and encodes back to the Jira format.
Date = Annotated[
    datetime,
    BeforeValidator(_validate_date),
    PlainSerializer(_serialize_date, return_type=str),
]
