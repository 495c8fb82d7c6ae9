"""

Tools to parse and dump markdown documents with metadata written as a
[Pelican](https://docs.getpelican.com/en/latest/content.html) header block:

    Title: My post
    Date: 2025-07-16
    Tags: python, pelican

    Body of the post...

Only one small line oriented grammar is understood, this is not YAML.

"""


from dataclasses import dataclass, field
from logging import getLogger
from typing import Any, Union
import re

import yaml


MetadataValue = Union[str, list[str]]
Metadata = dict[str, MetadataValue]

LIST_FIELDS = ('tags',)

_HEADER_LINE_RE = re.compile(r'([A-Za-z]+):\s*(.*)')
_QUOTES = ('"', "'")


@dataclass(frozen=True)
class ParsedDocument:
    metadata: Metadata = field(default_factory=dict)
    body: str = ''


def _unquote(value: str) -> str:
    if value and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse(text: str) -> ParsedDocument:
    """Split text into the header metadata and the body following it.

    The header ends at the first blank line. A line that is not `Key: Value`
    aborts parsing when it comes before any key (the text is then all body),
    and is skipped once at least one key has been read.
    """
    lines = text.split('\n')
    metadata: Metadata = {}
    body_start = len(lines)

    for i, line in enumerate(lines):
        if not line.strip():
            body_start = i + 1
            break

        match = _HEADER_LINE_RE.fullmatch(line)
        if match is None:
            if not metadata:
                return ParsedDocument({}, text)
            getLogger(__name__).debug(f'Skipping malformed header line: {line!r}')
            continue

        key = match.group(1).lower()
        value = _unquote(match.group(2).strip())
        if not value:
            continue
        if key in LIST_FIELDS:
            metadata[key] = [item.strip() for item in value.split(',')]
        else:
            metadata[key] = value

    return ParsedDocument(metadata, '\n'.join(lines[body_start:]))


def _render_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ', '.join(str(item) for item in value)
    value = str(value)
    if ' ' in value or ':' in value:
        return f'"{value}"'
    return value


def serialize(metadata: Metadata, body: str) -> str:
    lines = []
    for key, value in metadata.items():
        if value is None:
            continue
        lines.append(f'{key[:1].upper()}{key[1:]}: {_render_value(value)}')
    return '\n'.join(lines) + '\n\n' + body


def dump_yaml(metadata: Metadata) -> str:
    return yaml.safe_dump(dict(metadata), default_flow_style=False, sort_keys=False, allow_unicode=True)
