"""Naming and metadata for field output in the Simbelmyne HDF5 layout."""

from __future__ import annotations

from icgen.output import CosmoSpecies, FluidComponent

#: Group and dataset under which the field itself is stored.
FIELD_GROUP = "scalars"
FIELD_DATASET = "field"
#: Group holding the scalar header attributes.
INFO_GROUP = "/info/scalars"

_SPECIES_TAGS = {
    CosmoSpecies.DM: "DM",
    CosmoSpecies.BARYON: "BA",
    CosmoSpecies.NEUTRINO: "NU",
}

_COMPONENT_TAGS = {
    FluidComponent.DENSITY: "delta",
    FluidComponent.VX: "vx",
    FluidComponent.VY: "vy",
    FluidComponent.VZ: "vz",
    FluidComponent.DX: "dx",
    FluidComponent.DY: "dy",
    FluidComponent.DZ: "dz",
    FluidComponent.MASS: "mass",
    FluidComponent.PHI: "phi",
    FluidComponent.PHI2: "phi2",
    FluidComponent.PHI3: "phi3",
    FluidComponent.A1: "A1",
    FluidComponent.A2: "A2",
    FluidComponent.A3: "A3",
}


def simbelmyne_field_name(species: CosmoSpecies, component: FluidComponent) -> str:
    """Name identifying a species/component pair, e.g. ``DM_delta``."""
    return f"{_SPECIES_TAGS.get(species, '')}_{_COMPONENT_TAGS.get(component, '')}"


def simbelmyne_file_name(prefix: str, species: CosmoSpecies, component: FluidComponent) -> str:
    """File receiving one field: the prefix, the field name and ``.h5``."""
    return f"{prefix}{simbelmyne_field_name(species, component)}.h5"


def simbelmyne_metadata(box_length: float, grid_res: int, zstart: float) -> dict[str, float | int]:
    """Header attributes, keyed by their full path in the file."""
    length = float(box_length)
    n = int(grid_res)
    attrs: dict[str, float | int] = {}
    for axis in range(3):
        attrs[f"{INFO_GROUP}/L{axis}"] = length
    for axis in range(3):
        attrs[f"{INFO_GROUP}/corner{axis}"] = 0.0
    attrs[f"{INFO_GROUP}/time"] = 1.0 / (1.0 + float(zstart))
    for axis in range(3):
        attrs[f"{INFO_GROUP}/N{axis}"] = n
    attrs[f"{INFO_GROUP}/rank"] = 1
    return attrs