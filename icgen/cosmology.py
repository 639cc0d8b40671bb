"""Cosmological parameters read from a configuration or a predefined set."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Optional

from icgen.logger import elog, ilog, wlog

#: Name of the parameter set whose values fill in anything a configuration omits.
DEFAULT_PARAMETER_SET = "Planck2018EE+BAO+SN"

#: Stefan-Boltzmann constant [W m^-2 K^-4].
SIGMA_SI = 5.670373e-8
#: Speed of light [m/s].
C_SI = 2.99792458e8
#: Critical density divided by h^2 [kg m^-3].
RHOCRIT_H2_SI = 1.87847e-26

_SEPARATOR = "-" * 79
_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"cannot interpret {value!r} as a boolean")


def _massive_count(values: Mapping[str, float]) -> int:
    return sum(values[f"m_nu{i}"] > 1e-9 for i in (1, 2, 3))


class CosmologyParameters:
    """Named cosmological parameters, including the derived ones."""

    def __init__(
        self,
        values: Optional[Mapping[str, float]] = None,
        parameter_sets: Optional[Mapping[str, Mapping[str, float]]] = None,
    ) -> None:
        self._values: dict[str, float] = dict(values or {})
        self._sets: dict[str, dict[str, float]] = {
            name: dict(entries) for name, entries in (parameter_sets or {}).items()
        }

    def get(self, key: str) -> float:
        try:
            return self._values[key]
        except KeyError:
            msg = f"Cosmological parameter '{key}' does not exist in internal list."
            elog.line(msg)
            raise KeyError(msg) from None

    def set(self, key: str, value: float) -> None:
        if key not in self._values:
            msg = (
                f"Cosmological parameter '{key}' does not exist in internal list. "
                "Needs to be defaulted before it can be set!"
            )
            elog.line(msg)
            raise KeyError(msg)
        self._values[key] = float(value)

    def __getitem__(self, key: str) -> float:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def as_dict(self) -> dict[str, float]:
        return dict(self._values)

    def available_sets(self) -> list[str]:
        """Names of the predefined parameter sets, in sorted order."""
        return sorted(self._sets)

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Mapping[str, Any]],
        parameter_sets: Optional[Mapping[str, Mapping[str, float]]] = None,
    ) -> "CosmologyParameters":
        """Build from the ``cosmology`` section of ``config``.

        Either a predefined set is named by ``ParameterSet``, or values are read
        one by one, falling back to the default set for anything missing.
        """
        sets = {name: dict(entries) for name, entries in (parameter_sets or {}).items()}
        section = config.get("cosmology", {})
        ilog.line(_SEPARATOR)

        set_name = str(section.get("ParameterSet", "none"))
        if set_name == "none":
            values = cls._read_explicit(section, sets.get(DEFAULT_PARAMETER_SET, {}))
        else:
            if set_name not in sets:
                elog.line(f"Unknown cosmology parameter set '{set_name}'!")
                ilog.line("Valid pre-defined sets are: ")
                for name in sorted(sets):
                    ilog.line(f"  {name}")
                raise ValueError("Invalid value for cosmology/ParameterSet")
            ilog.line(f"Loading cosmological parameter set '{set_name}'...")
            values = dict(sets[set_name])

        zero_radiation = _to_bool(section.get("ZeroRadiation", False))
        params = cls(values, sets)
        params._derive(zero_radiation)
        params._report()
        return params

    @staticmethod
    def _read_explicit(
        section: Mapping[str, Any], defaults: Mapping[str, float]
    ) -> dict[str, float]:
        def default(name: str) -> float:
            if name not in defaults:
                raise KeyError(
                    f"no value for cosmological parameter '{name}' and no "
                    f"'{DEFAULT_PARAMETER_SET}' default set available"
                )
            return float(defaults[name])

        def value(key: str, default_key: Optional[str] = None, scale: float = 1.0) -> float:
            if key in section:
                return float(section[key])
            return default(default_key or key) * scale

        p: dict[str, float] = {}
        p["Tcmb"] = value("Tcmb")
        p["YHe"] = value("YHe")
        p["h"] = value("H0", "h", 100.0) / 100.0

        if "n_s" in section:
            p["n_s"] = value("n_s")
        else:
            p["n_s"] = value("nspec", "n_s")

        if "A_s" in section:
            p["A_s"] = float(section["A_s"])
        elif "sigma_8" in section:
            p["A_s"] = -1.0
        else:
            p["A_s"] = default("A_s")
        p["k_p"] = value("k_p")
        p["sigma_8"] = float(section["sigma_8"]) if "sigma_8" in section else -1.0

        p["Omega_b"] = value("Omega_b")
        p["Omega_m"] = value("Omega_m")

        for i in (1, 2, 3):
            p[f"m_nu{i}"] = value(f"m_nu{i}")
        n_massive = _massive_count(p)
        p["N_ur"] = float(section["N_ur"]) if "N_ur" in section else 3.046 - n_massive

        p["Omega_DE"] = value("Omega_L", "Omega_DE")
        p["w_0"] = value("w_0")
        p["w_a"] = value("w_a")
        return p

    def _derive(self, zero_radiation: bool) -> None:
        p = self._values
        h = self.get("h")
        p["H0"] = 100.0 * h

        p["N_nu_massive"] = float(_massive_count(p))
        sum_m_nu = self.get("m_nu1") + self.get("m_nu2") + self.get("m_nu3")
        p["Omega_nu_massive"] = sum_m_nu / (93.14 * h * h)

        p["Omega_gamma"] = (
            4.0 * SIGMA_SI / C_SI**3 * self.get("Tcmb") ** 4 / RHOCRIT_H2_SI / (h * h)
        )
        p["Omega_nu_massless"] = (
            self.get("N_ur") * p["Omega_gamma"] * 7.0 / 8.0 * (4.0 / 11.0) ** (4.0 / 3.0)
        )
        p["Omega_r"] = p["Omega_gamma"] + p["Omega_nu_massless"]

        p["Omega_c"] = self.get("Omega_m") - self.get("Omega_b") - p["Omega_nu_massive"]

        if zero_radiation:
            p["Omega_r"] = 0.0

        p["f_b"] = self.get("Omega_b") / self.get("Omega_m")
        p["f_c"] = 1.0 - p["f_b"]

        # flat universe: dark energy takes up whatever remains
        p["Omega_DE"] = 1.0 - self.get("Omega_m") - p["Omega_r"]
        p["Omega_k"] = 0.0

        for key in ("dplus", "pnorm", "sqrtpnorm", "vfact"):
            p[key] = 0.0

    def _report(self) -> None:
        g = self.get
        sum_m_nu = g("m_nu1") + g("m_nu2") + g("m_nu3")
        ilog.line("Cosmological parameters are: ")
        if g("A_s") > 0.0:
            norm = f"A_s      = {g('A_s'):<16g}"
        else:
            norm = f"sigma_8  = {g('sigma_8'):<16g}"
        ilog.line(f" h        = {g('h'):<16g}{norm}n_s     = {g('n_s'):<16g}")
        ilog.line(
            f" Omega_c  = {g('Omega_c'):<16g}Omega_b  = {g('Omega_b'):<16g}"
            f"Omega_m = {g('Omega_m'):<16g}"
        )
        ilog.line(
            f" Omega_r  = {g('Omega_r'):<16g}Omega_nu = {g('Omega_nu_massive'):<16g}"
            f"\u2211m_nu   = {sum_m_nu:g}eV"
        )
        ilog.line(
            f" Omega_DE = {g('Omega_DE'):<16g}w_0      = {g('w_0'):<16g}"
            f"w_a     = {g('w_a'):<16g}"
        )
        if g("Omega_r") > 0.0:
            wlog.line(f" Radiation enabled, using Omega_r={g('Omega_r'):g} internally for backscaling.")
            wlog.line(
                " Make sure your sim code supports this, otherwise set "
                "[cosmology] / ZeroRadiation=true."
            )


def _isclose(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=1e-12, abs_tol=1e-15)