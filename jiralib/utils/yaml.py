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

import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, TypeVar, Union

import yaml
from pydantic import BaseModel

_EXTENDS_KEY = 'extends'

T = TypeVar('T', bound=BaseModel)


def merge_settings(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Return a new dict with `override` recursively applied on top of `base`. Neither input is modified.

    >>> merge_settings(dict(a=1, b=dict(c=2, d=3)), dict(b=dict(d=4), e=5)) == dict(a=1, b=dict(c=2, d=4), e=5)
    True
    """
    merged = deepcopy(base)

    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_settings(current, value)
        else:
            merged[key] = deepcopy(value)

    return merged


def dict_from_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """Read a yaml file that must contain a mapping. An empty file is an empty mapping."""
    if not os.path.isfile(filepath):
        raise ValueError(f"'{filepath}' is not a file")

    with open(filepath, 'r') as file:
        contents = yaml.safe_load(file)

    if contents is None:
        return {}

    if not isinstance(contents, dict):
        raise ValueError(f"'{filepath}' cannot be parsed as a dictionary")

    return contents


def dict_from_extended_yaml(*, filepath: Union[Path, str], custom_root: Optional[Path] = None) -> dict[str, Any]:
    """
    Read a yaml file that may name a base file in its reserved 'extends' key.

    The base file is looked up relative to the extending file first and then relative to `custom_root`, so user files
    can extend the files bundled with the package by name. Values from the extending file win.
    """
    contents = dict_from_yaml(filepath=filepath)
    base_name = contents.pop(_EXTENDS_KEY, None)

    if not base_name:
        return contents

    base_path = Path(filepath).parent / str(base_name)
    if not base_path.is_file() and custom_root is not None:
        base_path = custom_root / str(base_name)

    try:
        base = dict_from_extended_yaml(filepath=base_path, custom_root=custom_root)
    except RecursionError as e:
        raise ValueError('Cannot parse yaml with recursive extensions.') from e

    return merge_settings(base, contents)


def model_from_extended_yaml(model: type[T], *, filepath: Union[Path, str], custom_root: Optional[Path] = None) -> T:
    """Read an extended yaml file and validate it into `model`."""
    return model.model_validate(dict_from_extended_yaml(filepath=filepath, custom_root=custom_root))
