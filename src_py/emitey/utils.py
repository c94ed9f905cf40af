from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
from typing import Annotated

from docnote import ClcNote

from emitey._types import EmissionResult
from emitey._types import EmitConfig
from emitey._types import Line
from emitey._types import LiteralSegment
from emitey._types import is_emission_result
from emitey.composer import DeferredEmission
from emitey.composer import emit
from emitey.exceptions import ItemTypeError
from emitey.parser import DIRECTIVE_CHAR
from emitey.separators import Separators


def emit_list(
        items: Iterable[object],
        *,
        separator: Annotated[
            str | None,
            ClcNote(
                '''Inserted between items. Without ``nr_lines``, this
                joins all of the items into a single line; with it, each
                item stays on its own line, with the separator (minus
                any trailing whitespace) appended to all but the last.
                ''')] = None,
        nr_lines: Annotated[
            int | None,
            ClcNote(
                '''The number of lines each item advances by. 1 (the
                default) means no blank lines between items; 2 means one
                blank line, etc.
                ''')] = None,
        function: Annotated[
            Callable[[object], object] | None,
            ClcNote(
                '''Applied to every item before it gets emitted. The
                result must be text, or the result of a (possibly
                deferred) emission.
                ''')] = None,
        config: EmitConfig | None = None
        ) -> str | EmissionResult:
    """Emits every item of a collection. This follows the same
    composition protocol as ``emit``: if it's the responsible
    invocation, you get text back, otherwise you get lines.

    Like any other template function, passing the list as a value to an
    enclosing ``emit`` requires deferring it, eg
    ``defer(emit_list, methods, nr_lines=2)``.
    """
    if separator is not None and nr_lines is not None and nr_lines <= 0:
        raise ValueError(
            'nr_lines must be positive when combined with a separator!',
            nr_lines)

    emittables = [
        _transform_item(item, function) for item in items]

    if separator is not None and nr_lines is None:
        return _emit_joined(emittables, separator, config)

    if separator is not None:
        suffix = _escape_directives(separator.rstrip())
    else:
        suffix = ''
    blank_line_count = max((nr_lines or 1) - 1, 0)

    forms: list[tuple[object, ...]] = []
    last_index = len(emittables) - 1
    for index, emittable in enumerate(emittables):
        if index:
            forms.extend(('',) for __ in range(blank_line_count))
        if index == last_index:
            forms.append(('~a', emittable))
        else:
            forms.append(('~a' + suffix, emittable))

    return emit(*forms, config=config)


def split_lines(text: str) -> list[str]:
    """Splits a blob of text on its line terminators. That's it."""
    return text.splitlines()


def text_to_lines(text: str) -> tuple[Line, ...]:
    """Converts a blob of already-rendered text into lines, so that it
    can be passed to ``emit`` as a value and get re-indented along with
    everything else. Leading spaces on each line become its indentation.
    """
    lines = []
    for raw_line in split_lines(text):
        content = raw_line.lstrip(' ')
        if content:
            lines.append(Line(
                indentation=len(raw_line) - len(content),
                segments=(LiteralSegment(content),)))
        else:
            lines.append(Line(indentation=0))

    return tuple(lines)


def _transform_item(
        item: object,
        function: Callable[[object], object] | None
        ) -> object:
    if function is None:
        result = item
    else:
        result = function(item)

    if (
        isinstance(result, (str, DeferredEmission))
        or is_emission_result(result)
    ):
        return result

    raise ItemTypeError(
        'List items must be text or emissions after their transform!',
        item, result)


def _emit_joined(
        emittables: list[object],
        separator: str,
        config: EmitConfig | None
        ) -> str | EmissionResult:
    if not emittables:
        return emit(config=config)

    # Plain text can be joined up front, which lets the line breaker split
    # the list on the separator if it ends up too long
    if separator and all(
        isinstance(emittable, str) for emittable in emittables
    ):
        return emit(
            '~a',
            separator.join(emittables),  # type: ignore[arg-type]
            Separators(separator),
            config=config)

    template = _escape_directives(separator).join(
        '~a' for __ in emittables)
    return emit(template, *emittables, config=config)


def _escape_directives(text: str) -> str:
    return text.replace(DIRECTIVE_CHAR, DIRECTIVE_CHAR * 2)
