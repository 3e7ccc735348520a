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

"""Writes a Document back out as playlist text.

This is the inverse of m3u8_parser.parse() for documents parsed with the
default snake_case keys.  Lines come out grouped by key, in key order, so
parsing the output again gives an equal Document, but not the original
line order.
"""

import math

from typing import List

from hls_parser.attributes import Object, Value
from hls_parser.m3u8_parser import Document, URI_KEY


def _unfold(key: str) -> str:
  """Turns a snake_case key back into a tag or attribute name."""

  return key.upper().replace('_', '-')

def _quote(string: str) -> str:
  """Puts a string in double quotes."""

  if '"' in string:
    raise ValueError('Cannot quote a string containing \'"\': {!r}'.format(
        string))
  return '"' + string + '"'

def _write_scalar(value: Value) -> str:
  if isinstance(value, bool):
    return 'YES' if value else 'NO'
  if isinstance(value, float):
    if not math.isfinite(value):
      raise ValueError('Cannot write a non-finite number: {!r}'.format(value))
    return repr(value)
  return str(value)

def _write_structured(name: str, value: Object) -> str:
  """Writes an object with its positional grammar."""

  if name == 'EXTINF':
    return _write_scalar(value['duration']) + ',' + str(value.get('title', ''))

  if name in ('EXT-X-BYTERANGE', 'BYTERANGE'):
    line = _write_scalar(value['length'])
    if 'start' in value:
      line += '@' + _write_scalar(value['start'])
    return line

  assert name == 'RESOLUTION', 'No grammar for {}'.format(name)
  return (_write_scalar(value['width']) + 'x' +
          _write_scalar(value['height']))

def _write_attribute_list(value: Object) -> str:
  attributes: List[str] = []
  for key, item in value.items():
    name = _unfold(key)
    if isinstance(item, dict):
      item_text = _write_structured(name, item)
    elif isinstance(item, list):
      raise ValueError('Attribute {} cannot hold a list'.format(name))
    elif isinstance(item, str):
      item_text = _quote(item)
    else:
      item_text = _write_scalar(item)
    attributes.append(name + '=' + item_text)
  return ','.join(attributes)

def _write_tag(tag: str, value: Value) -> str:
  if value is True:
    return '#' + tag

  if isinstance(value, dict):
    if tag in ('EXTINF', 'EXT-X-BYTERANGE'):
      payload = _write_structured(tag, value)
    else:
      payload = _write_attribute_list(value)
  elif isinstance(value, list):
    raise ValueError('Tag {} cannot hold a nested list'.format(tag))
  else:
    payload = _write_scalar(value)

  return '#' + tag + ':' + payload

def dumps(document: Document) -> str:
  """Returns the playlist text for |document|.

  :raises: `ValueError` if |document| holds something with no playlist
           representation, like a nested list, an infinite number, or a
           quoted string containing a double quote.
  """

  lines: List[str] = []
  for key, value in document.items():
    values = value if isinstance(value, list) else [value]

    if key == URI_KEY:
      lines.extend(str(item) for item in values)
      continue

    tag = _unfold(key)
    lines.extend(_write_tag(tag, item) for item in values)

  return '\n'.join(lines) + '\n'
