from collections.abc import Callable

from emitey._types import BreakableSegment
from emitey._types import EmitConfig
from emitey._types import Line
from emitey._types import LiteralSegment
from emitey.composer import emit

narrow_config = EmitConfig(max_columns=20, indent_step=2)


def make_line(indentation: int, *values: str | tuple[str, str]) -> Line:
    """Quick way of building a flat line. Plain strings become literal
    segments; ``(value, separator)`` tuples become breakable segments
    with a single separator candidate.
    """
    segments = []
    for value in values:
        if isinstance(value, tuple):
            text, separator = value
            segments.append(BreakableSegment(text, (separator,)))
        else:
            segments.append(LiteralSegment(value))

    return Line(indentation=indentation, segments=tuple(segments))


def segment_values(line: Line) -> list[str]:
    return [segment.value for segment in line.segments]  # type: ignore


def recording_emit(results: list[object]) -> Callable[..., object]:
    """Returns a drop-in replacement for ``emit`` that appends every
    return value to ``results``, so tests can check which invocation in
    a call tree returned what.
    """
    def emit_and_record(*forms, **kwargs):
        result = emit(*forms, **kwargs)
        results.append(result)
        return result

    return emit_and_record
