from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace

from typing_extensions import TypeIs

type Segment = LiteralSegment | BreakableSegment
type LineContent = Segment | NestedLine | NestedLines
# What a nested (non-responsible) invocation hands back to its parent
type EmissionResult = Line | tuple[Line, ...]


@dataclass(slots=True, frozen=True)
class LiteralSegment:
    value: str


@dataclass(slots=True, frozen=True)
class BreakableSegment:
    """A breakable segment carries its text along with the ordered
    separator candidates the line breaker may use to split it. The text
    is kept whole until a break is actually needed.
    """
    value: str
    separators: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class NestedLine:
    line: Line


@dataclass(slots=True, frozen=True)
class NestedLines:
    lines: tuple[Line, ...]


@dataclass(slots=True, frozen=True)
class Line:
    """Lines are the unit of everything downstream of the parser. Before
    flattening, a line may contain nested lines from nested invocations;
    after flattening, it only ever contains literal and breakable
    segments.

    Indentation is counted in columns, and is never part of the segment
    values. So ``line.text`` is always the logical content of the line,
    and padding only gets added while rendering.
    """
    indentation: int
    segments: tuple[LineContent, ...] = ()

    @property
    def text(self) -> str:
        return ''.join(_iter_segment_values(self.segments))

    @property
    def width(self) -> int:
        return self.indentation + len(self.text)

    def indented(self, offset: int) -> Line:
        if not offset:
            return self
        return replace(self, indentation=self.indentation + offset)


def _iter_segment_values(
        segments: Sequence[LineContent]
        ) -> Iterator[str]:
    for segment in segments:
        if isinstance(segment, (LiteralSegment, BreakableSegment)):
            yield segment.value
        else:
            raise TypeError(
                'Line has not been flattened yet; nested lines have no '
                + 'text of their own!', segment)


@dataclass(slots=True, frozen=True, eq=False)
class DeferredCall:
    """A template call whose evaluation has been put off until an
    enclosing emission can run it inside its composition session.
    Arguments are frequently unhashable (lists of items, for example),
    so deferred calls compare and hash by identity.
    """
    func: Callable[..., object]
    args: tuple[object, ...] = ()
    kwargs: Mapping[str, object] = field(default_factory=dict)

    def __call__(self) -> object:
        return self.func(*self.args, **self.kwargs)


@dataclass(slots=True, frozen=True)
class EmitConfig:
    """The emit config controls everything about the physical layout of
    the output: how wide lines may get before we try to break them, how
    far continuation lines get pushed in, and how lines get joined.

    Note that the config only ever applies to the responsible invocation;
    nested invocations inherit it from the composition session.
    """
    max_columns: int = 80
    indent_step: int = 4
    # Continuation lines get pushed in by twice the indent step by default,
    # so that they can't be confused with an ordinary nested block.
    continuation_indent_steps: int = 2
    line_terminator: str = '\n'
    pad_blank_lines: bool = True

    def __post_init__(self):
        if self.max_columns <= 0:
            raise ValueError(
                'max_columns must be a positive integer!', self.max_columns)
        if self.indent_step < 0:
            raise ValueError(
                'indent_step must be non-negative!', self.indent_step)
        if self.continuation_indent_steps < 0:
            raise ValueError(
                'continuation_indent_steps must be non-negative!',
                self.continuation_indent_steps)

    @property
    def continuation_indent(self) -> int:
        return self.continuation_indent_steps * self.indent_step


DEFAULT_CONFIG = EmitConfig()


def is_line_sequence(value: object) -> TypeIs[Sequence[Line]]:
    """Strings are sequences too, so we need to be careful here. Only
    lists and tuples count, and only if every member is a line. Note
    that an empty list or tuple counts as an (empty) line sequence.
    """
    return (
        isinstance(value, (list, tuple))
        and all(isinstance(member, Line) for member in value))


def is_emission_result(value: object) -> TypeIs[Line | Sequence[Line]]:
    return isinstance(value, Line) or is_line_sequence(value)
