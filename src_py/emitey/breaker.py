from __future__ import annotations

import logging

from emitey._types import BreakableSegment
from emitey._types import EmitConfig
from emitey._types import Line
from emitey._types import LineContent
from emitey._types import LiteralSegment

logger = logging.getLogger(__name__)


def break_line(
        line: Line,
        config: EmitConfig
        ) -> tuple[Line] | tuple[Line, Line]:
    """Splits an overlong line into two, if at all possible. Lines that
    already fit within ``config.max_columns`` are returned untouched.

    The search works like this:
    ++  find the overflow segment: the first one whose inclusion pushes
        the running width (starting at the indentation) past the limit
    ++  starting with that segment and walking backward toward the
        start of the line, try to break each segment in turn. Literals
        can't be broken. Breakable segments try each of their separator
        candidates, in order, and the first valid cut wins.
    ++  on success, the first line keeps everything before the broken
        segment, plus the head of the broken segment. The second line
        gets the tail of the broken segment plus everything after it,
        and is indented by the continuation indent.
    ++  if nothing could be broken, we accept the overflow and return
        the line unchanged.

    Note that this only ever happens once per line; the continuation
    line is never broken again, even if it is itself too long.
    """
    max_columns = config.max_columns
    if line.width <= max_columns:
        return (line,)

    segments = line.segments
    overflow_index = _find_overflow_index(line, max_columns)
    if overflow_index is None:
        return (line,)

    # Column offsets for every segment up to (and including) the overflow,
    # so that we don't need to recompute them while walking backward
    offsets: list[int] = []
    column = line.indentation
    for segment in segments[:overflow_index + 1]:
        offsets.append(column)
        column += len(_segment_value(segment))

    for segment_index in range(overflow_index, -1, -1):
        segment = segments[segment_index]
        if not isinstance(segment, BreakableSegment):
            continue

        cut = _cut_breakable(segment, offsets[segment_index], max_columns)
        if cut is not None:
            head, tail = cut
            return (
                Line(
                    indentation=line.indentation,
                    segments=(*segments[:segment_index], head)),
                Line(
                    indentation=line.indentation + config.continuation_indent,
                    segments=(tail, *segments[segment_index + 1:])))

    logger.debug(
        'No breakable segment found for overlong line; accepting overflow '
        + 'of %s columns: %r',
        line.width - max_columns, line.text)
    return (line,)


def _find_overflow_index(line: Line, max_columns: int) -> int | None:
    width = line.indentation
    for index, segment in enumerate(line.segments):
        width += len(_segment_value(segment))
        if width > max_columns:
            return index

    return None


def _cut_breakable(
        segment: BreakableSegment,
        column: int,
        max_columns: int
        ) -> tuple[BreakableSegment, BreakableSegment] | None:
    """Tries every separator candidate of the segment in order, doing a
    greedy forward scan over the delimited items. Each item is counted
    along with the separator that follows it; the first item that pushes
    past the limit is where we cut.

    A cut is only valid if it leaves at least one item on either side.
    """
    for separator in segment.separators:
        items = segment.value.split(separator)
        item_count = len(items)
        if item_count < 2:
            continue

        width = column
        cut_index = None
        for item_index, item in enumerate(items):
            width += len(item)
            if item_index < item_count - 1:
                width += len(separator)

            if width > max_columns:
                cut_index = item_index
                break

        if cut_index is None or cut_index == 0:
            continue

        head = BreakableSegment(
            separator.join(items[:cut_index]) + separator.rstrip(),
            segment.separators)
        tail = BreakableSegment(
            separator.join(items[cut_index:]),
            segment.separators)
        return head, tail

    return None


def _segment_value(segment: LineContent) -> str:
    # Break attempts only happen on flattened lines
    if isinstance(segment, (LiteralSegment, BreakableSegment)):
        return segment.value

    raise TypeError(
        'Cannot break a line that has not been flattened!', segment)
