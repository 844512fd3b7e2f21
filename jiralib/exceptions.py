"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from typing import Optional


class JiraError(Exception):
    """General error class"""


class EmptyURLError(JiraError):
    """URL can't be empty"""


class AuthError(JiraError):
    """Base class for invalid authentication data"""


class EmptyUserError(AuthError):
    """User can't be empty"""


class EmptyPasswordError(AuthError):
    """Password can't be empty"""


class EmptyTokenError(AuthError):
    """Token can't be empty"""


class TokenWrongLengthError(AuthError):
    """Token has wrong length"""


class JiraClientError(JiraError):
    """Base class for errors when communicating with Jira"""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.__doc__)


class NoAuthError(JiraClientError):
    """Calling user is not authenticated"""


class NoPermsError(JiraClientError):
    """User does not have permission to use Jira"""


class InvalidInputError(JiraClientError):
    """Input is invalid"""


class WrongLinkIDError(JiraClientError):
    """LinkId is not a valid number, or the remote issue link with the given id does not belong to the given issue"""


class NoContentError(JiraClientError):
    """There is no content with the given ID, or the calling user does not have permission to view the content"""


class GenResponseError(JiraClientError):
    """Error occurs while generating the response"""


class JiraServerError(JiraClientError):
    """Error message reported by Jira in the response body"""


class UnknownStatusError(JiraClientError):
    """Jira answered with a status code the endpoint does not document"""

    def __init__(self, status_code: int) -> None:
        super().__init__(f'Unknown error occurred (status code {status_code})')
        self.status_code = status_code


class DecodeError(JiraError, ValueError):
    """Base class for errors when decoding wire values"""


class DateParseError(DecodeError):
    """Date value matches none of the accepted formats"""

    def __init__(self, raw: str) -> None:
        super().__init__(f'Cannot unmarshal Date value {raw!r}')
        self.raw = raw


class CustomFieldNotFound(JiraError, KeyError):
    """The requested custom field is not present in the decoded record"""

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the message readable
        return Exception.__str__(self)
