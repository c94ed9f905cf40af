from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Iterator

from emitey._types import DEFAULT_CONFIG
from emitey._types import EmitConfig
from emitey._types import Line
from emitey.breaker import break_line

_PAD_CHAR = ' '


def render_lines(
        lines: Iterable[Line],
        config: EmitConfig = DEFAULT_CONFIG
        ) -> str:
    """Renders a finished sequence of (flattened) lines into the final
    text. Every line gets exactly one break attempt before rendering.
    Lines are joined with the configured line terminator, and there is
    no terminator after the last line.
    """
    return config.line_terminator.join(
        render_line(broken_line, config)
        for broken_line in _iter_broken(lines, config))


def render_line(line: Line, config: EmitConfig = DEFAULT_CONFIG) -> str:
    """Pads the line out to its indentation. By default that includes
    lines without any content; set ``pad_blank_lines=False`` to render
    those without trailing whitespace instead.
    """
    text = line.text
    if line.indentation and (text or config.pad_blank_lines):
        return _PAD_CHAR * line.indentation + text
    return text


def _iter_broken(lines: Iterable[Line], config: EmitConfig) -> Iterator[Line]:
    for line in lines:
        yield from break_line(line, config)
