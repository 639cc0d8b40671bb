"""Primitive field operators and the spectral gradient."""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, MutableSequence, Sequence
from typing import Any

Operator = Callable[[Any, Any], None]


def assign_to(field: MutableSequence) -> Operator:
    """Return an operator that stores ``v`` at index ``i``."""

    def op(i, v):
        field[i] = v

    return op


def multiply_add_to(field: MutableSequence, x) -> Operator:
    """Return an operator that adds ``v * x`` at index ``i``."""

    def op(i, v):
        field[i] += v * x

    return op


def add_to(field: MutableSequence) -> Operator:
    """Return an operator that adds ``v`` at index ``i``."""

    def op(i, v):
        field[i] += v

    return op


def subtract_from(field: MutableSequence) -> Operator:
    """Return an operator that subtracts ``v`` at index ``i``."""

    def op(i, v):
        field[i] -= v

    return op


class FourierGradient:
    """Standard spectral gradient ``i k`` on a periodic cubic grid."""

    def __init__(self, box_length: float, grid_res: int) -> None:
        if box_length <= 0:
            raise ValueError("box length must be positive")
        if grid_res <= 0:
            raise ValueError("grid resolution must be positive")
        self.box_length = float(box_length)
        self.k0 = 2.0 * math.pi / self.box_length
        self.n = int(grid_res)
        self.nhalf = self.n // 2

    @classmethod
    def from_config(cls, config: Mapping[str, Mapping[str, Any]]) -> "FourierGradient":
        """Build from a ``setup`` section holding ``BoxLength`` and ``GridRes``."""
        setup = config["setup"]
        return cls(float(setup["BoxLength"]), int(setup["GridRes"]))

    def gradient(self, idim: int, ijk: Sequence[int]) -> complex:
        """Gradient factor along ``idim`` for the mode at grid index ``ijk``."""
        index = ijk[idim]
        if index == self.nhalf:
            rgrad = 0.0
        else:
            rgrad = float(index) - (self.n if index > self.nhalf else 0)
        return complex(0.0, rgrad * self.k0)

    def vfac_corr(self, ijk: Sequence[int]) -> float:
        """Velocity correction factor; unity for the standard gradient."""
        return 1.0