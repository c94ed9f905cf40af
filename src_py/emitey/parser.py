from __future__ import annotations

import functools
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from emitey._types import BreakableSegment
from emitey._types import Line
from emitey._types import LineContent
from emitey._types import LiteralSegment
from emitey._types import NestedLine
from emitey._types import NestedLines
from emitey._types import is_line_sequence
from emitey.exceptions import ArityMismatch
from emitey.exceptions import MalformedTemplate
from emitey.separators import resolve_separators

DIRECTIVE_CHAR = '~'
_PLACEHOLDER_DIRECTIVES = frozenset({'a', 'A'})


class FormFlavor(Enum):
    REGULAR = 'regular'
    BREAK_LINE = 'break_line'


@dataclass(slots=True, frozen=True)
class InterpolatedPlaceholder:
    part_index: int
    # Which argument (or argument pair, for break-line forms) this is
    placeholder_index: int


@dataclass(slots=True, frozen=True)
class ParsedTemplate:
    """The result of parsing a single template string. Parts alternate
    between literal strings and placeholders, though there's no
    guarantee that either comes first, and empty literals are omitted.
    """
    indentation: int
    parts: tuple[str | InterpolatedPlaceholder, ...]
    placeholder_count: int


@dataclass(slots=True, frozen=True)
class TemplateForm:
    """A template form is one template plus its (already validated)
    arguments. For break-line forms, ``separators`` holds the resolved
    candidates for every placeholder; for regular forms, it's None.
    """
    template: ParsedTemplate
    flavor: FormFlavor
    values: tuple[object, ...]
    separators: tuple[tuple[str, ...], ...] | None = None


@functools.lru_cache(maxsize=1024)
def parse(template: str) -> ParsedTemplate:
    """Parses a template string. The leading run of spaces is the line's
    indentation, and is stripped from the first literal. After that,
    ``~a`` (or ``~A``) is a placeholder, and ``~~`` is a literal tilde.
    Anything else following a tilde is an error.
    """
    body = template.lstrip(' ')
    indentation = len(template) - len(body)

    parts: list[str | InterpolatedPlaceholder] = []
    literal_buffer: list[str] = []
    placeholder_count = 0
    position = 0
    body_length = len(body)
    while position < body_length:
        directive_index = body.find(DIRECTIVE_CHAR, position)
        if directive_index < 0:
            literal_buffer.append(body[position:])
            break

        literal_buffer.append(body[position:directive_index])
        if directive_index + 1 >= body_length:
            raise MalformedTemplate(
                'Template ends with an unterminated directive!', template)

        directive = body[directive_index + 1]
        if directive == DIRECTIVE_CHAR:
            literal_buffer.append(DIRECTIVE_CHAR)

        elif directive in _PLACEHOLDER_DIRECTIVES:
            literal = ''.join(literal_buffer)
            literal_buffer.clear()
            if literal:
                parts.append(literal)
            parts.append(InterpolatedPlaceholder(
                part_index=len(parts),
                placeholder_index=placeholder_count))
            placeholder_count += 1

        else:
            raise MalformedTemplate(
                'Unknown template directive!',
                template, DIRECTIVE_CHAR + directive)

        position = directive_index + 2

    literal = ''.join(literal_buffer)
    if literal:
        parts.append(literal)

    return ParsedTemplate(
        indentation=indentation,
        parts=tuple(parts),
        placeholder_count=placeholder_count)


def prepare_form(template: str, args: Sequence[object]) -> TemplateForm:
    """Parses the template and validates its arguments against it,
    deciding between the regular form and the break-line form. This is
    always done eagerly (before any nested emissions are evaluated),
    so that an invalid call never has any side effects.
    """
    if not isinstance(template, str):
        raise TypeError('Templates must be strings!', template)

    parsed = parse(template)
    placeholder_count = parsed.placeholder_count
    arg_count = len(args)

    if arg_count == placeholder_count:
        return TemplateForm(
            template=parsed,
            flavor=FormFlavor.REGULAR,
            values=tuple(args))

    elif placeholder_count and arg_count == 2 * placeholder_count:
        return TemplateForm(
            template=parsed,
            flavor=FormFlavor.BREAK_LINE,
            values=tuple(args[0::2]),
            separators=tuple(
                resolve_separators(supplier) for supplier in args[1::2]))

    raise ArityMismatch(
        'Argument count must equal the placeholder count (regular form) '
        + 'or twice the placeholder count (break-line form)!',
        template, placeholder_count, arg_count)


def bind_form(form: TemplateForm, values: Sequence[object]) -> Line:
    """Substitutes the values into the template, returning a line that
    may still contain nested lines. The values must correspond 1:1 with
    ``form.values``; the composer passes in the evaluated versions of
    any deferred emissions there.
    """
    segments: list[LineContent] = []
    for part in form.template.parts:
        if isinstance(part, str):
            segments.append(LiteralSegment(part))

        else:
            value = values[part.placeholder_index]
            if form.separators is None:
                separators = None
            else:
                separators = form.separators[part.placeholder_index]

            segment = coerce_value(value, separators)
            if segment is not None:
                segments.append(segment)

    return Line(
        indentation=form.template.indentation,
        segments=tuple(segments))


def coerce_value(
        value: object,
        separators: tuple[str, ...] | None = None
        ) -> LineContent | None:
    """Converts a single (already evaluated) placeholder value into line
    content. Returns None if the value contributes nothing at all.
    """
    if isinstance(value, Line):
        return NestedLine(value)

    elif is_line_sequence(value):
        return NestedLines(tuple(value))

    if value is None:
        text = ''
    elif isinstance(value, str):
        text = value
    else:
        text = str(value)

    if not text:
        return None
    elif separators is None:
        return LiteralSegment(text)
    else:
        return BreakableSegment(text, separators)
