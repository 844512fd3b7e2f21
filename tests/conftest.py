import os

from jiralib.conf import DEFAULT_SETTINGS_FILEPATH
from jiralib.conf.get_settings import CONFIG_YAML_ENV_VAR

os.environ[CONFIG_YAML_ENV_VAR] = os.environ.get('JIRALIB_TEST_CONFIG_YAML', DEFAULT_SETTINGS_FILEPATH)
