"""Thermal state of the gas at the starting time of the simulation."""

from __future__ import annotations

import math
from typing import Union

import numpy as np

#: Boltzmann constant [erg/K].
K_BOLTZMANN_CGS = 1.3806e-16
#: Proton mass [g].
M_PROTON_CGS = 1.6726e-24
#: Conversion from km/s to cm/s.
KMS_TO_CMS = 1e5

ArrayLike = Union[float, np.ndarray]


def decoupling_scale_factor(omega_b: float, h: float) -> float:
    """Scale factor at which the gas temperature decouples from the CMB."""
    if omega_b <= 0 or h <= 0:
        raise ValueError("omega_b and h must be positive")
    return 1.0 / (160.0 * (omega_b * h * h / 0.022) ** (2.0 / 5.0))


def initial_gas_temperature(astart: float, omega_b: float, h: float, tcmb: float) -> float:
    """Gas temperature [K] at scale factor ``astart``.

    Before decoupling the gas follows the CMB temperature, afterwards it
    cools adiabatically as ``a**-2``.
    """
    if astart <= 0:
        raise ValueError("astart must be positive")
    adec = decoupling_scale_factor(omega_b, h)
    if astart < adec:
        return tcmb / astart
    return tcmb / astart / astart * adec


def mean_molecular_weight(temperature: float, yhe: float) -> float:
    """Mean molecular weight for fully ionised (hot) or neutral (cold) gas."""
    if temperature > 1.0e4:
        return 4.0 / (8.0 - 5.0 * yhe)
    return 4.0 / (1.0 + 3.0 * (1.0 - yhe))


def gas_internal_energy(temperature: float, yhe: float, gamma: float = 5.0 / 3.0) -> float:
    """Specific internal energy [km^2/s^2] of gas at ``temperature``.

    A ``gamma`` indistinguishable from one is treated as a polytropic index of one.
    """
    npol = 1.0 / (gamma - 1.0) if abs(1.0 - gamma) > 1e-7 else 1.0
    mu = mean_molecular_weight(temperature, yhe)
    return (
        K_BOLTZMANN_CGS / M_PROTON_CGS * temperature * npol / mu / KMS_TO_CMS / KMS_TO_CMS
    )


def wrap_position(x: ArrayLike, box: float) -> ArrayLike:
    """Map positions at most one box length below zero back into ``[0, box)``."""
    if box <= 0:
        raise ValueError("box must be positive")
    wrapped = np.fmod(np.asarray(x, dtype=float) + box, box)
    if wrapped.ndim == 0:
        return float(wrapped)
    return wrapped


def _finite(value: float) -> bool:
    return math.isfinite(value)