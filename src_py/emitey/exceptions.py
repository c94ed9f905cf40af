class EmiteyError(Exception):
    """Base class for all emitey errors."""


class ArityMismatch(EmiteyError, TypeError):
    """Raised when the number of arguments supplied for a template
    matches neither the regular form (one argument per placeholder) nor
    the break-line form (two arguments per placeholder).
    """


class InvalidSeparatorSupplier(EmiteyError, TypeError):
    """Raised when a break-line form argument that should supply
    separator candidates doesn't.
    """


class ItemTypeError(EmiteyError, TypeError):
    """Raised by ``emit_list`` when an item (after its transform) isn't
    something that can be emitted.
    """


class MalformedTemplate(EmiteyError, ValueError):
    """Raised when a template string contains an unknown directive."""


class MalformedForm(EmiteyError, TypeError):
    """Raised when a multi-group emission contains something other than
    a ``(template, *args)`` tuple.
    """
