from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Sequence
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import overload

from emitey._types import DEFAULT_CONFIG
from emitey._types import DeferredCall
from emitey._types import EmissionResult
from emitey._types import EmitConfig
from emitey._types import Line
from emitey.exceptions import MalformedForm
from emitey.lines import collapse_lines
from emitey.lines import flatten_line
from emitey.parser import TemplateForm
from emitey.parser import bind_form
from emitey.parser import prepare_form
from emitey.renderer import render_lines

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CompositionSession:
    """A composition session exists for exactly as long as the
    responsible invocation is running. Any emission that happens while a
    session is active is nested, and hands back lines instead of text.
    """
    config: EmitConfig
    depth: int = 0
    invocation_count: int = 0


# Note: the absence of a session is what makes an invocation responsible.
# Using a contextvar (instead of a plain global) means that separate threads
# and async tasks each get their own composition protocol.
_ACTIVE_SESSION: ContextVar[CompositionSession | None] = ContextVar(
    '_ACTIVE_SESSION', default=None)


@dataclass(frozen=True, slots=True, eq=False)
class DeferredEmission(DeferredCall):
    """Python evaluates arguments before calling the function they're
    passed to, so a nested template call written directly as an argument
    would run before the enclosing ``emit`` has had a chance to claim
    responsibility. Deferred emissions fix that: the enclosing ``emit``
    evaluates them itself, inside its composition session.
    """

    def render(self, config: EmitConfig | None = None) -> str | EmissionResult:
        """Evaluates the deferred emission through ``emit``. Outside of
        a composition session (the usual case) this is the responsible
        invocation, and returns the final text. Within an active session
        it's nested like any other emission, and returns lines.
        """
        return emit('~a', self, config=config)


def defer(
        func: Callable[..., object],
        /,
        *args: object,
        **kwargs: object
        ) -> DeferredEmission:
    return DeferredEmission(func=func, args=args, kwargs=kwargs)


def emitter[**P](
        func: Callable[P, object]
        ) -> Callable[P, object]:
    """Decorates a template function so that it composes correctly
    when called as an argument to ``emit``.

    Outside of a composition session, calling the decorated function
    returns a ``DeferredEmission``, which the enclosing ``emit`` (or
    ``.render()``) will evaluate later. Inside a session, the function
    is already nested, so it just runs immediately.
    """
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs):
        if _ACTIVE_SESSION.get() is None:
            return DeferredEmission(func=func, args=args, kwargs=kwargs)
        return func(*args, **kwargs)

    return wrapper


def holds_responsibility() -> bool:
    """Returns True if the next call to ``emit`` would be the
    responsible one (ie, no composition session is active).
    """
    return _ACTIVE_SESSION.get() is None


def reset() -> None:
    """Unconditionally drops any active composition session, so that
    the next ``emit`` is responsible again. Sessions are always closed
    when the responsible invocation exits (even on errors), so this
    should only ever be needed when something has gone badly wrong,
    for example a deferred emission that was evaluated by hand within
    a session that was then abandoned.
    """
    session = _ACTIVE_SESSION.get()
    if session is not None:
        logger.info(
            'Discarding active composition session at depth %s after %s '
            + 'invocations.',
            session.depth, session.invocation_count)
    _ACTIVE_SESSION.set(None)


@overload
def emit(
        template: str,
        /,
        *args: object,
        config: EmitConfig | None = None
        ) -> str | EmissionResult: ...
@overload
def emit(
        *forms: tuple[object, ...],
        config: EmitConfig | None = None
        ) -> str | EmissionResult: ...
def emit(
        *forms: object,
        config: EmitConfig | None = None
        ) -> str | EmissionResult:
    """This is the emission call. It comes in two shapes:
    ++  a single template, followed by its arguments:
        ``emit('def ~a(~a):', name, params)``
    ++  several templates, each grouped with its arguments in a tuple:
        ``emit(('class ~a:', name), ('    ~a', body))``

    Each template takes either one argument per placeholder (the regular
    form) or two (the break-line form), in which case every value is
    followed by a separator supplier (see ``Separators``).

    If no composition session is active, this invocation is responsible:
    it returns the final, rendered text. Otherwise it's nested, and it
    returns a single ``Line`` (if it produced exactly one) or a tuple of
    them, to be merged into its parent.
    """
    template_forms = _prepare_forms(forms)

    session = _ACTIVE_SESSION.get()
    if session is not None:
        if config is not None and config != session.config:
            logger.debug(
                'Ignoring config passed to nested emission; nested '
                + 'emissions always use the config of the responsible one.')
        with _nesting(session):
            return collapse_lines(_compose(template_forms))

    session = CompositionSession(config=config or DEFAULT_CONFIG)
    token = _ACTIVE_SESSION.set(session)
    logger.debug('Opened composition session %s', id(session))
    try:
        session.invocation_count += 1
        lines = _compose(template_forms)
        return render_lines(lines, session.config)

    finally:
        _ACTIVE_SESSION.reset(token)
        logger.debug(
            'Closed composition session %s after %s invocations',
            id(session), session.invocation_count)


def evaluate_value(value: object) -> object:
    """Evaluates deferred emissions. Since the result of one deferred
    emission might itself be deferred (for example, a template function
    that returns another template function's result), we keep going
    until we hit something concrete.
    """
    while isinstance(value, DeferredEmission):
        value = value()
    return value


@contextmanager
def _nesting(session: CompositionSession) -> Iterator[CompositionSession]:
    session.depth += 1
    session.invocation_count += 1
    try:
        yield session
    finally:
        session.depth -= 1


def _prepare_forms(forms: Sequence[object]) -> list[TemplateForm]:
    """Splits the emission call into its template groups and validates
    every one of them. This must happen before anything gets evaluated,
    so that an invalid call never has side effects.
    """
    if not forms:
        return []

    if isinstance(forms[0], str):
        template, *args = forms
        return [prepare_form(template, args)]

    template_forms = []
    for form in forms:
        if (
            not isinstance(form, (tuple, list))
            or not form
            or not isinstance(form[0], str)
        ):
            raise MalformedForm(
                'Multi-template emissions must group each template with '
                + 'its arguments in a tuple: (template, *args)', form)

        template, *args = form
        template_forms.append(prepare_form(template, args))

    return template_forms


def _compose(template_forms: Sequence[TemplateForm]) -> list[Line]:
    """Processes every template group in order. Within each group, all
    deferred values are evaluated left to right (and therefore depth
    first) before the template itself gets bound.
    """
    lines: list[Line] = []
    for template_form in template_forms:
        values = [evaluate_value(value) for value in template_form.values]
        lines.extend(flatten_line(bind_form(template_form, values)))

    return lines
