"""Placeholder parsing and substitution for rendered queries.

Query text is split once into literal and placeholder segments; rendering
joins the segments back, swapping in bound values. Substituted values are
never rescanned, so a value that happens to contain ``:name`` cannot be
mistaken for a placeholder.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional, Union

from wutup.constants.sql import PARAMETER_PATTERN
from wutup.utils.datetime import format_timestamp


@dataclass(frozen=True)
class Placeholder:
    """A ``:name`` token found in query text."""
    name: str

    @property
    def token(self) -> str:
        return f":{self.name}"


Segment = Union[str, Placeholder]


def find_placeholder(text: str) -> Optional[str]:
    """Return the name of the first placeholder in ``text``, if any."""
    match = PARAMETER_PATTERN.search(text)
    return match.group(1) if match else None


def parse_segments(text: str) -> List[Segment]:
    """Split query text into literal strings and placeholders, in order."""
    segments: List[Segment] = []
    position = 0
    for match in PARAMETER_PATTERN.finditer(text):
        if match.start() > position:
            segments.append(text[position:match.start()])
        segments.append(Placeholder(match.group(1)))
        position = match.end()
    if position < len(text):
        segments.append(text[position:])
    return segments


def format_value(value: Any, time_zone: Optional[str] = None) -> str:
    """Text form of a bound value as it appears in the rendered SQL.

    Values are inlined verbatim: strings are not quoted or escaped, so
    callers pass pre-quoted literals where SQL needs them.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return format_timestamp(value, time_zone)
    return str(value)


def render_segments(
    segments: List[Segment],
    parameters: Mapping[str, Any],
    formatter: Callable[[Any], str] = format_value,
) -> str:
    """Join segments, substituting the first occurrence of each bound name.

    Later occurrences of an already substituted name and placeholders with
    no binding are kept as literal tokens.
    """
    parts: List[str] = []
    substituted = set()
    for segment in segments:
        if isinstance(segment, Placeholder):
            if segment.name in parameters and segment.name not in substituted:
                parts.append(formatter(parameters[segment.name]))
                substituted.add(segment.name)
            else:
                parts.append(segment.token)
        else:
            parts.append(segment)
    return "".join(parts)


def substitute(
    text: str,
    parameters: Mapping[str, Any],
    formatter: Callable[[Any], str] = format_value,
) -> str:
    """Parse ``text`` and render it with ``parameters`` in one step."""
    return render_segments(parse_segments(text), parameters, formatter)
