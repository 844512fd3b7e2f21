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

import base64
from abc import ABC, abstractmethod

from jiralib.exceptions import EmptyPasswordError, EmptyTokenError, EmptyUserError, TokenWrongLengthError

# length of a Jira personal access token
TOKEN_LENGTH = 44


class Auth(ABC):
    """Credentials sent in the Authorization header of every request."""

    @abstractmethod
    def encode(self) -> str:
        """Return the value of the Authorization header."""
        raise NotImplementedError

    @abstractmethod
    def validate(self) -> None:
        """Raise an AuthError if the credentials cannot be used."""
        raise NotImplementedError


class AuthBasic(Auth):
    def __init__(self, username: str, password: str) -> None:
        self.username = username
        self.password = password

    def encode(self) -> str:
        credentials = f'{self.username}:{self.password}'.encode('utf-8')
        return 'Basic ' + base64.b64encode(credentials).decode('ascii')

    def validate(self) -> None:
        if not self.username:
            raise EmptyUserError('User can\'t be empty')
        if not self.password:
            raise EmptyPasswordError('Password can\'t be empty')

    def __repr__(self) -> str:
        return f'AuthBasic(username={self.username!r})'


class AuthToken(Auth):
    """Personal access token auth."""

    def __init__(self, token: str) -> None:
        self.token = token

    def encode(self) -> str:
        return 'Bearer ' + self.token

    def validate(self) -> None:
        if not self.token:
            raise EmptyTokenError('Token can\'t be empty')
        if len(self.token) != TOKEN_LENGTH:
            raise TokenWrongLengthError(f'Token has wrong length, expected {TOKEN_LENGTH} symbols')

    def __repr__(self) -> str:
        return 'AuthToken(token=...)'
