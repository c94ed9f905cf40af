from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator

from emitey._types import DeferredCall
from emitey._types import is_emission_result
from emitey.exceptions import InvalidSeparatorSupplier

type SeparatorSupplier = Separators | str | Callable[[], Iterable[str]]


class Separators:
    """An ordered supplier of separator candidates for break-line
    placeholders. The line breaker tries the candidates in the order
    they were given here, and takes the first one that produces a valid
    cut. For example:

        emit('return ~a', expression, Separators(' and ', ' or '))
    """
    __slots__ = ('_candidates',)
    _candidates: tuple[str, ...]

    def __init__(self, *candidates: str):
        if not candidates:
            raise InvalidSeparatorSupplier(
                'Separators need at least one candidate!')
        for candidate in candidates:
            if not isinstance(candidate, str) or not candidate:
                raise InvalidSeparatorSupplier(
                    'Separator candidates must be non-empty strings!',
                    candidate)

        self._candidates = candidates

    def __iter__(self) -> Iterator[str]:
        return iter(self._candidates)

    def __len__(self) -> int:
        return len(self._candidates)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Separators):
            return self._candidates == other._candidates
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._candidates)

    def __repr__(self) -> str:
        return f'{type(self).__name__}{self._candidates!r}'


def resolve_separators(supplier: object) -> tuple[str, ...]:
    """Materializes a separator supplier into its ordered tuple of
    candidates, validating it along the way. Callable suppliers are
    called exactly once, here.
    """
    if isinstance(supplier, Separators):
        return tuple(supplier)

    elif isinstance(supplier, str):
        if not supplier:
            raise InvalidSeparatorSupplier(
                'Empty string cannot be used as a separator!', supplier)
        return (supplier,)

    # Note: deferred calls are callable too, but calling one here would run
    # a template function (and a whole responsible emission) mid-validation
    elif isinstance(supplier, DeferredCall) or is_emission_result(supplier):
        raise InvalidSeparatorSupplier(
            'Nested emissions cannot be used as separator suppliers!',
            supplier)

    elif callable(supplier):
        try:
            candidates = supplier()
            # Note: a str result would otherwise get silently split into
            # single-character separators
            if isinstance(candidates, str):
                return resolve_separators(candidates)
            return tuple(Separators(*candidates))

        except InvalidSeparatorSupplier:
            raise
        except TypeError as exc:
            raise InvalidSeparatorSupplier(
                'Separator supplier did not return an iterable of strings!',
                supplier) from exc

    raise InvalidSeparatorSupplier(
        'Break-line arguments must be paired with a separator supplier!',
        supplier)
