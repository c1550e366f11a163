"""Control surfaces for the cluster being tuned."""

from .backends import CephControlSurface, ControlSurface

__all__ = [
    "ControlSurface",
    "CephControlSurface",
]
