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

"""Top-level parsing API.

parse() turns the text of an HLS playlist into a Document: a dictionary of
keys (folded tag names, plus "uri") to values.  It is best-effort and never
raises on malformed playlists.  Lines and attributes it can't make sense of
are left out, and it is up to whatever decodes the Document to complain
about missing fields.

Example:

  #EXTM3U
  #EXT-X-TARGETDURATION:10
  #EXTINF:9.009,first
  first.ts
  #EXTINF:9.009,
  second.ts

becomes:

  {
    'extm3u': True,
    'ext_x_targetduration': 10,
    'extinf': [{'duration': 9.009, 'title': 'first'}, {'duration': 9.009}],
    'uri': ['first.ts', 'second.ts'],
  }
"""

import logging
import re

from typing import Iterator, Optional, Tuple

from hls_parser.attributes import Object, Value, parse_payload
from hls_parser.parser_configuration import ParserConfig


Document = Object
"""The parser output.  Keys are in the order they were first seen."""

URI_KEY = 'uri'
"""The key collecting every line that isn't a tag."""

TAG_PREFIX = '#EXT'

ARRAY_TAGS = frozenset([
    # Media playlist
    'EXTINF', 'EXT-X-BYTERANGE',
    # Master playlist
    'EXT-X-MEDIA', 'EXT-X-STREAM-INF', 'EXT-X-I-FRAME-STREAM-INF',
])
"""Tags that may repeat, so they are always lists, even when seen once."""

_log = logging.getLogger(__name__)

_TAG_RE = re.compile(r'#(EXT[^:]+):?(.*)')

# LF and CRLF, plus the other Unicode line breaks.  Unlike str.splitlines(),
# the \x1c-\x1e separators don't end a line.
_LINE_BREAK_RE = re.compile(r'\r\n|[\n\r\x0b\x0c\x85\u2028\u2029]')


def _classify_lines(text: str) -> Iterator[Tuple[bool, str]]:
  """Yields (is_tag, line) for every non-empty line of |text|."""

  for line in _LINE_BREAK_RE.split(text):
    # Only truly empty lines are skipped.  Whitespace is kept as a URI.
    if not line:
      continue
    yield line.startswith(TAG_PREFIX), line


def _extract_tag(line: str) -> Optional[Tuple[str, str]]:
  """Splits a tag line into its name and its (possibly empty) payload."""

  match = _TAG_RE.fullmatch(line)
  if not match:
    _log.debug('Skipping malformed tag line: %r', line)
    return None
  return match.group(1), match.group(2)


def _merge(document: Document, key: str, value: Value,
           always_array: bool = False) -> None:
  """Adds |value| under |key|, turning repeated keys into lists."""

  if key not in document:
    document[key] = [value] if always_array else value
    return

  existing = document[key]
  if isinstance(existing, list):
    existing.append(value)
  else:
    document[key] = [existing, value]


def parse(text: str,
          config: Optional[ParserConfig] = None) -> Optional[Document]:
  """Parses the text of an HLS playlist.

  Args:
      text (str): The whole playlist.
      config (ParserConfig): Parser options.  Defaults to snake_case keys.

  Returns:
      A new Document, or None if |text| is empty.  Text with nothing but
      empty lines gives an empty Document.  The Document is a plain dict that
      the parser keeps no reference to, so it belongs to the caller.
  """

  if not text:
    return None

  if config is None:
    config = ParserConfig()

  document: Document = {}
  for is_tag, line in _classify_lines(text):
    if not is_tag:
      _merge(document, URI_KEY, line, always_array=True)
      continue

    extracted = _extract_tag(line)
    if extracted is None:
      continue

    tag, payload = extracted
    _merge(document, config.fold_key(tag),
           parse_payload(tag, payload, config),
           always_array=tag in ARRAY_TAGS)

  return document
