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

import os
from pathlib import Path
from typing import NamedTuple, Optional

from structlog import get_logger

from jiralib.conf.settings import JiraSettings

logger = get_logger()

CONFIG_YAML_ENV_VAR = 'JIRALIB_CONFIG_YAML'

DEFAULT_SETTINGS_FILEPATH = str(Path(__file__).parent / 'default.yml')


class _SettingsMetadata(NamedTuple):
    source: str
    settings: JiraSettings


_settings_singleton: Optional[_SettingsMetadata] = None


def get_settings() -> JiraSettings:
    """
    Return the global settings.

    The yaml file is taken from the 'JIRALIB_CONFIG_YAML' env var, falling back to the bundled default.yml. It is
    loaded once; asking again after the env var points somewhere else is an error.
    """
    source = os.environ.get(CONFIG_YAML_ENV_VAR, DEFAULT_SETTINGS_FILEPATH)
    return _load_settings_singleton(source)


def get_settings_source() -> str:
    """ Returns the path of the yaml file that was loaded.

    XXX: Will raise an assertion error if get_settings() wasn't used before.
    """
    assert _settings_singleton is not None, 'get_settings() not called before'
    return _settings_singleton.source


def _load_settings_singleton(source: str) -> JiraSettings:
    global _settings_singleton

    if _settings_singleton is not None:
        if _settings_singleton.source != source:
            raise Exception('loading config twice with a different file')
        return _settings_singleton.settings

    settings = JiraSettings.from_yaml(filepath=source)
    logger.new().debug('settings loaded', source=source)
    _settings_singleton = _SettingsMetadata(source=source, settings=settings)
    return settings
