"""Header bookkeeping for AREPO-flavoured HDF5 initial conditions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from icgen.gadget import (
    NUM_TYPES,
    gadget_species_index,
    gadget_units,
    particle_count_words,
    particle_mass,
)
from icgen.gas import initial_gas_temperature
from icgen.logger import ilog
from icgen.output import CosmoSpecies

_MASK32 = 0xFFFFFFFF
_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"cannot interpret {value!r} as a boolean")


def suggested_pmgrid(grid_res: Union[int, float]) -> int:
    """Particle-mesh grid size suggested to the simulation code: twice the grid."""
    if grid_res <= 0:
        raise ValueError("grid resolution must be positive")
    return int(2 * float(grid_res))


def suggested_softening(box_length: float, grid_res: Union[int, float]) -> float:
    """Suggested softening length: a twentieth of a PM cell."""
    return float(box_length) / suggested_pmgrid(grid_res) / 20.0


@dataclass
class ArepoHeader:
    """Header of an AREPO snapshot, filled in species by species."""

    astart: float
    box_size: float
    omega_m: float
    omega_baryon: float
    omega_lambda: float
    hubble_param: float
    mass_unit: float
    gas_temperature: float
    pmgrid: int
    softening: float
    have_baryons: bool = False
    long_ids: bool = False
    double_precision: bool = True
    num_files: int = 1
    gridboost: int = 1
    npart: list[int] = field(default_factory=lambda: [0] * NUM_TYPES)
    npart_total: list[int] = field(default_factory=lambda: [0] * NUM_TYPES)
    npart_total_high: list[int] = field(default_factory=lambda: [0] * NUM_TYPES)
    mass: list[float] = field(default_factory=lambda: [0.0] * NUM_TYPES)

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Mapping[str, Any]],
        cosmo: Any,
        num_files: int = 1,
        double_precision: bool = True,
    ) -> "ArepoHeader":
        """Build from the ``setup`` and ``output`` sections and the cosmology."""
        setup = config["setup"]
        output = config.get("output", {})
        box = float(setup["BoxLength"])
        zstart = float(setup["zstart"])
        grid_res = float(setup["GridRes"])
        astart = 1.0 / (1.0 + zstart)
        units = gadget_units(box, zstart)

        tini = initial_gas_temperature(
            astart, float(cosmo["Omega_b"]), float(cosmo["h"]), float(cosmo["Tcmb"])
        )
        ilog.line(f"Setting initial gas temperature to T = {tini:g}K/\u00b5")

        return cls(
            astart=astart,
            box_size=units.position,
            omega_m=float(cosmo["Omega_m"]),
            omega_baryon=float(cosmo["Omega_b"]),
            omega_lambda=float(cosmo["Omega_DE"]),
            hubble_param=float(cosmo["h"]),
            mass_unit=units.mass,
            gas_temperature=tini,
            pmgrid=suggested_pmgrid(grid_res),
            softening=suggested_softening(box, grid_res),
            have_baryons=_flag(setup["DoBaryons"]),
            long_ids=_flag(output.get("UseLongids", False)),
            double_precision=double_precision,
            num_files=num_files,
        )

    @property
    def redshift(self) -> float:
        return 1.0 / self.astart - 1.0

    def record_species(
        self,
        species: CosmoSpecies,
        local_count: int,
        global_count: int,
        omega_species: float,
        individual_masses: bool,
    ) -> int:
        """Store the counts and mass of one species; returns its particle type."""
        sid = gadget_species_index(species)
        low, high = particle_count_words(global_count)
        self.npart[sid] = local_count & _MASK32
        self.npart_total[sid] = low
        self.npart_total_high[sid] = high
        self.mass[sid] = particle_mass(
            omega_species, self.mass_unit, global_count, individual_masses
        )
        return sid

    def attributes(self) -> dict[str, Any]:
        """Attributes of the ``Header`` group, in writing order."""
        return {
            "NumPart_ThisFile": list(self.npart),
            "MassTable": list(self.mass),
            "Time": [self.astart],
            "Redshift": [self.redshift],
            "NumPart_Total": list(self.npart_total),
            "NumPart_Total_HighWord": list(self.npart_total_high),
            "NumFilesPerSnapshot": [self.num_files],
            "BoxSize": [self.box_size],
            "Omega0": [self.omega_m],
            "OmegaBaryon": [self.omega_baryon],
            "OmegaLambda": [self.omega_lambda],
            "HubbleParam": [self.hubble_param],
            "Flag_Sfr": [0],
            "Flag_Cooling": [0],
            "Flag_StellarAge": [0],
            "Flag_Metals": [0],
            "Flag_Feedback": [0],
            "Flag_DoublePrecision": int(self.double_precision),
            "haveBaryons": [int(self.have_baryons)],
            "longIDs": [int(self.long_ids)],
            "suggested_pmgrid": [self.pmgrid],
            "suggested_gridboost": [self.gridboost],
            "suggested_highressoft": [self.softening],
            "suggested_gas_Tinit": [self.gas_temperature],
        }