"""Exceptions raised by yieldviz.

Geometry that does not exist for a parameter set is never an error: the
generators return empty rings, meshes or polylines instead.  The classes
below cover programming and configuration mistakes only.
"""


class YieldVizError(Exception):
    """Base class for all yieldviz errors."""


class InvalidParameterError(YieldVizError, ValueError):
    """A parameter is not a finite number, or a resolution setting is unusable."""


class PresetNotFoundError(YieldVizError, KeyError):
    """No preset with the requested name exists for a model."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ''


__all__ = [
    'YieldVizError',
    'InvalidParameterError',
    'PresetNotFoundError',
]
