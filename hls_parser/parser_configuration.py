# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import collections.abc
import enum

import yaml

from . import configuration

from typing import Any, Dict, IO, Optional, Union


class KeyDecodingStrategy(enum.Enum):
  SNAKE_CASE = 'snake_case'
  """Lowercase the name and replace hyphens with underscores."""

  CAMEL_CASE = 'camel_case'
  """Same transform as SNAKE_CASE.  The consuming decoder does the case
  conversion."""

  CUSTOM = 'custom'
  """Use ParserConfig.custom_key_function."""


class ParserConfig(configuration.Base):
  """An object representing the options of a single parse call."""

  key_decoding_strategy = configuration.Field(
      KeyDecodingStrategy, default=KeyDecodingStrategy.SNAKE_CASE).cast()
  """How tag and attribute names are turned into document keys."""

  custom_key_function = configuration.Field(
      collections.abc.Callable).cast()
  """A function from a raw tag or attribute name to a key.

  Required by, and only allowed with, the custom strategy.  This can't come
  from a YAML file."""

  def __init__(self, dictionary: Optional[Dict[str, Any]] = None) -> None:
    super().__init__(dictionary or {})

    function_field = self.__class__.__dict__['custom_key_function']

    if self.key_decoding_strategy == KeyDecodingStrategy.CUSTOM:
      if self.custom_key_function is None:
        raise configuration.MissingRequiredField(
            self.__class__, 'custom_key_function', function_field)
    elif self.custom_key_function is not None:
      raise configuration.MalformedField(
          self.__class__, 'custom_key_function', function_field,
          'only allowed when key_decoding_strategy is {!r}, not {!r}'.format(
              KeyDecodingStrategy.CUSTOM.value,
              self.key_decoding_strategy.value))

  def fold_key(self, name: str) -> str:
    """Returns the document key for a raw tag or attribute name."""

    if self.key_decoding_strategy == KeyDecodingStrategy.CUSTOM:
      return self.custom_key_function(name)

    # SNAKE_CASE and CAMEL_CASE share the transform at this layer.
    return name.lower().replace('-', '_')


def load_config(stream: Union[str, IO]) -> ParserConfig:
  """Reads a ParserConfig from YAML text or an open YAML file.

  An empty document gives the default config.

  :raises: :class:`hls_parser.configuration.ConfigError` if the config is
           invalid.
  """

  dictionary = yaml.safe_load(stream)
  if dictionary is None:
    return ParserConfig()

  if not isinstance(dictionary, dict):
    raise configuration.WrongType(
        ParserConfig, 'config', configuration.Field(dict))

  return ParserConfig(dictionary)
