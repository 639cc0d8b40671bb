"""Units and header bookkeeping for Gadget-style HDF5 initial conditions."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from icgen.output import CosmoSpecies

#: Critical density in h^2 1e10 M_sol / Mpc^3.
RHO_CRIT = 27.7519737
NUM_TYPES = 6

_SPECIES_INDEX = {
    CosmoSpecies.DM: 1,
    CosmoSpecies.BARYON: 0,
    CosmoSpecies.NEUTRINO: 3,
}

_MASK32 = 0xFFFFFFFF


class GadgetUnits(NamedTuple):
    position: float
    velocity: float
    mass: float


def gadget_units(box_length: float, zstart: float) -> GadgetUnits:
    """Length, velocity and mass units for a box of comoving size ``box_length``."""
    astart = 1.0 / (1.0 + zstart)
    return GadgetUnits(
        position=float(box_length),
        velocity=box_length / math.sqrt(astart),
        mass=RHO_CRIT * box_length**3,
    )


def gadget_species_index(species: CosmoSpecies) -> int:
    """Particle type number used for ``species``."""
    try:
        return _SPECIES_INDEX[species]
    except KeyError:
        raise ValueError(f"no particle type for species {species!r}") from None


def particle_count_words(count: int) -> tuple[int, int]:
    """Split a particle count into its low and high 32-bit words."""
    if count < 0:
        raise ValueError("particle count must be non-negative")
    return count & _MASK32, (count >> 32) & _MASK32


def particle_mass(
    omega_species: float, mass_unit: float, count: int, individual_masses: bool
) -> float:
    """Mass table entry: zero when particles carry their own masses."""
    if individual_masses:
        return 0.0
    if count <= 0:
        raise ValueError("particle count must be positive for a uniform mass")
    return omega_species * mass_unit / count


@dataclass
class GadgetHeader:
    """Header of a Gadget HDF5 snapshot, filled in species by species."""

    astart: float
    box_size: float
    omega_m: float
    omega_lambda: float
    hubble_param: float
    mass_unit: float
    num_files: int = 1
    npart: list[int] = field(default_factory=lambda: [0] * NUM_TYPES)
    npart64: list[int] = field(default_factory=lambda: [0] * NUM_TYPES)
    npart_total: list[int] = field(default_factory=lambda: [0] * NUM_TYPES)
    npart_total_high: list[int] = field(default_factory=lambda: [0] * NUM_TYPES)
    npart_total64: list[int] = field(default_factory=lambda: [0] * NUM_TYPES)
    mass: list[float] = field(default_factory=lambda: [0.0] * NUM_TYPES)

    @classmethod
    def from_config(
        cls, config: Mapping[str, Mapping[str, Any]], cosmo: Any, num_files: int = 1
    ) -> "GadgetHeader":
        setup = config["setup"]
        box = float(setup["BoxLength"])
        zstart = float(setup["zstart"])
        units = gadget_units(box, zstart)
        return cls(
            astart=1.0 / (1.0 + zstart),
            box_size=units.position,
            omega_m=float(cosmo["Omega_m"]),
            omega_lambda=float(cosmo["Omega_DE"]),
            hubble_param=float(cosmo["h"]),
            mass_unit=units.mass,
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
        self.npart64[sid] = local_count
        self.npart_total64[sid] = global_count
        self.mass[sid] = particle_mass(
            omega_species, self.mass_unit, global_count, individual_masses
        )
        return sid

    def attributes(self, gadget2_compatibility: bool = False) -> dict[str, list]:
        """Attributes of the ``Header`` group, in writing order."""
        attrs: dict[str, list] = {}
        if gadget2_compatibility:
            attrs["NumPart_ThisFile"] = list(self.npart)
            attrs["NumPart_Total"] = list(self.npart_total)
            attrs["NumPart_Total_HighWord"] = list(self.npart_total_high)
        else:
            attrs["NumPart_ThisFile"] = list(self.npart64)
            attrs["NumPart_Total"] = list(self.npart_total64)
        attrs["MassTable"] = list(self.mass)
        attrs["Time"] = [self.astart]
        attrs["Redshift"] = [self.redshift]
        attrs["Flag_Sfr"] = [0]
        attrs["Flag_Feedback"] = [0]
        attrs["Flag_Cooling"] = [0]
        attrs["NumFilesPerSnapshot"] = [self.num_files]
        attrs["BoxSize"] = [self.box_size]
        attrs["Omega0"] = [self.omega_m]
        attrs["OmegaLambda"] = [self.omega_lambda]
        attrs["HubbleParam"] = [self.hubble_param]
        attrs["Flag_StellarAge"] = [0]
        attrs["Flag_Metals"] = [0]
        attrs["Flag_Entropy_ICs"] = [0]
        return attrs