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

"""A small typed config system for parser options.

Config classes declare class-level Field objects.  The Base constructor
ingests a dictionary (usually straight out of a YAML file), rejects unknown
fields, type-checks the rest, and fills in defaults.
"""

import collections.abc
import enum

from typing import Any, Dict, Generic, Optional, Type, TypeVar, cast


class ConfigError(Exception):
  """A base class for config errors.

  Each subclass provides a meaningful, human-readable string representation in
  English.
  """

  def __init__(self, class_ref, field_name, field):
    self.class_ref = class_ref
    """A reference to the config class that the error refers to."""

    self.class_name = class_ref.__name__
    """The name of the config class that the error refers to."""

    self.field_name = field_name
    """The name of the field that the error refers to."""

    self.field = field
    """The Field metadata object that the error refers to."""


class UnrecognizedField(ConfigError):
  """An error raised when an unrecognized field is encountered in the input."""

  def __str__(self):
    return '{} contains unrecognized field: {}'.format(
        self.class_name, self.field_name)

class WrongType(ConfigError):
  """An error raised when a field in the input has the wrong type."""

  def __str__(self):
    return 'In {}, {} field requires a {}'.format(
        self.class_name, self.field_name, self.field.get_type_name())

class MissingRequiredField(ConfigError):
  """An error raised when a required field is missing from the input."""

  def __str__(self):
    return '{} is missing a required field: {}, a {}'.format(
        self.class_name, self.field_name, self.field.get_type_name())

class MalformedField(ConfigError):
  """An error raised when a field is malformed."""

  def __init__(self, class_ref, field_name, field, reason):
    super().__init__(class_ref, field_name, field)
    self.reason = reason

  def __str__(self):
    return 'In {}, {} field is malformed: {}'.format(
        self.class_name, self.field_name, self.reason)


# A type parameter used by the Generic Field below.
FieldType = TypeVar('FieldType')

class Field(Generic[FieldType]):
  """A container for metadata about individual config fields."""

  def __init__(self,
               type: Optional[Type[FieldType]],
               required: bool = False,
               default: Optional[FieldType] = None) -> None:
    """
    Args:
        type (class): The required type for values of this field.
        required (bool): True if this field is required on input.
        default: The default value if the field is not specified.
    """
    self.type: Optional[Type] = type
    self.required: bool = required
    self.default: Optional[FieldType] = default

  def get_type_name(self) -> str:
    """Get a human-readable string for the name of self.type."""

    if self.type is str:
      return 'string'
    elif self.type is None:
      # Only here to allow generic handling of UnrecognizedField errors.
      return 'None'
    elif self.type is collections.abc.Callable:
      return 'callable'
    elif issubclass(self.type, enum.Enum):
      # Get the list of valid options as quoted strings.
      options = [repr(str(member.value)) for member in self.type]
      return '{} (one of {})'.format(self.type.__name__, ', '.join(options))

    return self.type.__name__

  def cast(self) -> FieldType:
    """Returns self, typed as FieldType for mypy's sake.

    At the class level, config fields are Field instances.  At the instance
    level, the Base constructor replaces each of them with the config value.
    """
    return cast(FieldType, self)


class Base(object):
  """A base class for config objects.

  This will handle all validation, type-checking, defaults, and extraction of
  values from an input dictionary.

  Subclasses must define class-level Field objects defining their fields.
  The base class does the rest.
  """

  def __init__(self, dictionary: Dict[str, Any]) -> None:
    """Ingests, type-checks, and validates the input dictionary."""

    config_fields = {}
    for key, field in self.__class__.__dict__.items():
      if isinstance(field, Field):
        config_fields[key] = field

    for key, value in dictionary.items():
      field = config_fields.get(key)

      if not field:
        raise UnrecognizedField(self.__class__, key, Field(None))

      setattr(self, key, self._check_and_convert_type(field, key, value))

    for key, field in config_fields.items():
      if not key in dictionary:
        if field.required:
          raise MissingRequiredField(self.__class__, key, field)

        setattr(self, key, field.default)

  def _check_and_convert_type(self,
                              field: Field,
                              key: str,
                              value: Any) -> Any:
    """Check the type of |value| and convert it as necessary.

    Enums are cast from their string values, since that is what comes out of
    a YAML file.  No other coercion is done.  We wouldn't want a string
    containing the word "False" coerced to boolean True.
    """

    assert field.type is not None, 'No type info for Field {}'.format(key)

    if issubclass(field.type, enum.Enum):
      if isinstance(value, field.type):
        return value
      try:
        return field.type(value)
      except ValueError:
        raise WrongType(self.__class__, key, field) from None

    # A None value for an optional field means "use the default".
    if value is None and not field.required:
      return field.default

    if not isinstance(value, field.type):
      raise WrongType(self.__class__, key, field)
    return value
