import emitey.prebaked as prebaked  # noqa: PLR0402
from emitey._types import EmitConfig
from emitey._types import Line
from emitey.composer import DeferredEmission
from emitey.composer import defer
from emitey.composer import emit
from emitey.composer import emitter
from emitey.composer import holds_responsibility
from emitey.composer import reset
from emitey.separators import Separators
from emitey.utils import emit_list
from emitey.utils import split_lines
from emitey.utils import text_to_lines

__all__ = [
    'DeferredEmission',
    'EmitConfig',
    'Line',
    'Separators',
    'defer',
    'emit',
    'emit_list',
    'emitter',
    'holds_responsibility',
    'prebaked',
    'reset',
    'split_lines',
    'text_to_lines',
]
