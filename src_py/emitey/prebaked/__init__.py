from emitey.prebaked import configs
from emitey.prebaked import separators

__all__ = [
    'configs',
    'separators',
]
