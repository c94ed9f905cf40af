from __future__ import annotations

from collections.abc import Iterable

from emitey._types import BreakableSegment
from emitey._types import EmissionResult
from emitey._types import Line
from emitey._types import LiteralSegment
from emitey._types import NestedLine
from emitey._types import NestedLines
from emitey._types import Segment


def flatten_line(line: Line) -> list[Line]:
    """Flattens a line that may contain nested lines (the results of
    nested emissions) into an ordered list of lines that only contain
    literal and breakable segments.

    The rules are:
    ++  a nested line without indentation is an inline expansion: its
        segments are spliced into the line we're currently building
    ++  anything else (a nested line with indentation, or a sequence of
        nested lines) is a block. We finish the line we were building,
        push every nested line (offset by the parent's indentation),
        and then start a fresh line for anything that follows.

    Note that a line that was empty from the start still results in one
    (empty) line, since that's how blank lines get emitted. However, a
    line that only contained an empty block results in no lines at all,
    and an empty block next to other content is simply dropped.
    """
    parent_indentation = line.indentation
    completed: list[Line] = []
    pending: list[Segment] = []
    contained_block = False

    for segment in line.segments:
        match segment:
            case LiteralSegment() | BreakableSegment():
                pending.append(segment)

            case NestedLine(line=nested) if nested.indentation == 0:
                pending.extend(_iter_flat_segments(nested))

            case NestedLine(line=nested):
                contained_block = True
                _flush_pending(pending, parent_indentation, completed)
                completed.append(nested.indented(parent_indentation))

            # Empty blocks (eg an empty parameter list) mustn't split the line
            case NestedLines(lines=()):
                contained_block = True

            case NestedLines(lines=nested_lines):
                contained_block = True
                _flush_pending(pending, parent_indentation, completed)
                completed.extend(
                    nested.indented(parent_indentation)
                    for nested in nested_lines)

            case _:
                raise TypeError(
                    'impossible branch: invalid line segment type!', segment)

    if pending or not (completed or contained_block):
        completed.append(Line(parent_indentation, tuple(pending)))

    return completed


def flatten_lines(lines: Iterable[Line]) -> list[Line]:
    flattened: list[Line] = []
    for line in lines:
        flattened.extend(flatten_line(line))
    return flattened


def collapse_lines(lines: list[Line]) -> EmissionResult:
    """Nested emissions hand back a bare line if they only produced one,
    and a tuple of lines otherwise.
    """
    if len(lines) == 1:
        return lines[0]
    return tuple(lines)


def _flush_pending(
        pending: list[Segment],
        indentation: int,
        completed: list[Line]):
    if pending:
        completed.append(Line(indentation, tuple(pending)))
        pending.clear()


def _iter_flat_segments(line: Line) -> Iterable[Segment]:
    # Nested lines have always been flattened by their own invocation, but
    # lines constructed by hand might not have been.
    for segment in line.segments:
        if isinstance(segment, (LiteralSegment, BreakableSegment)):
            yield segment
        else:
            raise TypeError(
                'Inline nested lines must already be flattened!', segment)
