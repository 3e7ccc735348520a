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

"""Turns the payload of an #EXT tag into a value.

A payload is tried, in order, as:
  1. a structured attribute with its own positional grammar (EXTINF,
     BYTERANGE, RESOLUTION),
  2. a list of NAME=VALUE pairs,
  3. a single scalar.
"""

import logging
import re

from typing import Callable, Dict, List, Optional, Union

from hls_parser.parser_configuration import ParserConfig


# A parsed value.  Numbers are ints unless the text had a fraction or an
# exponent.
Value = Union[bool, int, float, str, Dict[str, 'Value'], List['Value']]

# A mapping of keys to values, used both for the parsed document and for the
# objects nested inside it.
Object = Dict[str, Value]

# Strings this long are never coerced, so hashes and URLs stay strings.
MAX_COERCED_LENGTH = 10

BOOL_VALUES = {'YES': True, 'NO': False}

_log = logging.getLogger(__name__)

_NUMBER_RE = re.compile(
    r'[-+]?(?:\d+(?:\.\d*)?|\.\d+)([eE][-+]?\d+)?', re.ASCII)
_ATTRIBUTE_RE = re.compile(r'([^=,]+)=("([^"]+)"|[^,]+)')
_EXTINF_RE = re.compile(r'([^,]+),(.*)')
_BYTERANGE_RE = re.compile(r'(\d+)@?(\d*)', re.ASCII)
_RESOLUTION_RE = re.compile(r'(\d+)x(\d+)', re.ASCII)


def convert(text: str) -> Value:
  """Coerces a short token to a number or a YES/NO bool.

  Anything else, and anything MAX_COERCED_LENGTH or longer, is returned
  unchanged.
  """

  if len(text) >= MAX_COERCED_LENGTH:
    return text

  match = _NUMBER_RE.fullmatch(text)
  if match:
    if '.' in text or match.group(1):
      return float(text)
    return int(text)

  return BOOL_VALUES.get(text, text)


def _parse_extinf(value: str) -> Object:
  """#EXTINF:<duration>,[<title>]

  https://datatracker.ietf.org/doc/html/rfc8216#section-4.3.2.1
  """

  result: Object = {}
  match = _EXTINF_RE.fullmatch(value)
  if match:
    result['duration'] = convert(match.group(1))
    if match.group(2):
      result['title'] = match.group(2)
  return result


def _parse_byterange(value: str) -> Object:
  """#EXT-X-BYTERANGE:<n>[@<o>]

  https://datatracker.ietf.org/doc/html/rfc8216#section-4.3.2.2
  """

  result: Object = {}
  match = _BYTERANGE_RE.fullmatch(value)
  if match:
    result['length'] = convert(match.group(1))
    if match.group(2):
      result['start'] = convert(match.group(2))
  return result


def _parse_resolution(value: str) -> Object:
  """<width>x<height>, as in the RESOLUTION attribute of EXT-X-STREAM-INF."""

  result: Object = {}
  match = _RESOLUTION_RE.fullmatch(value)
  if match:
    result['width'] = convert(match.group(1))
    result['height'] = convert(match.group(2))
  return result


STRUCTURED_ATTRIBUTES: Dict[str, Callable[[str], Object]] = {
    'EXTINF': _parse_extinf,
    'EXT-X-BYTERANGE': _parse_byterange,
    'BYTERANGE': _parse_byterange,
    'RESOLUTION': _parse_resolution,
}
"""Names with a positional grammar of their own, mapped to their parsers.

The names are raw tag or attribute names, before any key folding."""


def parse_structured(name: str, value: str) -> Optional[Object]:
  """Parses |value| with the grammar registered for |name|.

  Returns None if |name| has no grammar or |value| doesn't match it.
  """

  parser = STRUCTURED_ATTRIBUTES.get(name)
  if parser is None:
    return None

  result = parser(value)
  if not result:
    _log.debug('%s value does not match its grammar: %r', name, value)
    return None
  return result


def parse_attribute_list(payload: str, config: ParserConfig) -> Object:
  """Parses a comma-separated list of NAME=VALUE pairs.

  Values may be quoted, and commas inside quotes don't split.  Text that
  doesn't look like a pair is skipped.
  """

  result: Object = {}
  for match in _ATTRIBUTE_RE.finditer(payload):
    name = match.group(1)
    value = match.group(2).strip('"')

    structured = parse_structured(name, value)
    if structured is not None:
      result[config.fold_key(name)] = structured
    else:
      result[config.fold_key(name)] = convert(value)
  return result


def parse_payload(tag: str, payload: str, config: ParserConfig) -> Value:
  """Returns the value of an #EXT tag given its name and payload."""

  # A tag without a payload is a flag.
  if not payload:
    return True

  structured = parse_structured(tag, payload)
  if structured is not None:
    return structured

  attributes = parse_attribute_list(payload, config)
  if attributes:
    return attributes

  return convert(payload)
