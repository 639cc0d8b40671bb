"""Output plug-in registry and shared output vocabulary."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from typing import Any, Optional

from icgen.logger import elog, ilog

_SEPARATOR = "-" * 79


class CosmoSpecies(enum.Enum):
    DM = "dm"
    BARYON = "baryon"
    NEUTRINO = "neutrino"


class FluidComponent(enum.Enum):
    DENSITY = "density"
    VX = "vx"
    VY = "vy"
    VZ = "vz"
    DX = "dx"
    DY = "dy"
    DZ = "dz"
    MASS = "mass"
    PHI = "phi"
    PHI2 = "phi2"
    PHI3 = "phi3"
    A1 = "A1"
    A2 = "A2"
    A3 = "A3"


class OutputType(enum.Enum):
    PARTICLES = "particles"
    FIELD_LAGRANGIAN = "field_lagrangian"
    FIELD_EULERIAN = "field_eulerian"


OutputFactory = Callable[[Mapping[str, Mapping[str, Any]], Any], Any]

_registry: dict[str, Optional[OutputFactory]] = {}


def register_output_plugin(name: str, factory: Optional[OutputFactory]) -> None:
    """Register ``factory`` under ``name``; ``None`` hides the entry."""
    _registry[name] = factory


def output_plugin_names() -> list[str]:
    """Names of all available output plug-ins, sorted."""
    return sorted(name for name, factory in _registry.items() if factory is not None)


def print_output_plugins() -> None:
    ilog.line("Available output plug-ins:")
    for name in output_plugin_names():
        ilog.line(f"\t'{name}'")


def select_output_plugin(config: Mapping[str, Mapping[str, Any]], cosmo: Any) -> Any:
    """Create the plug-in named by ``output/format`` in ``config``."""
    format_name = str(config["output"]["format"])
    factory = _registry.get(format_name)
    if factory is None:
        elog.line(f"Output plug-in '{format_name}' not found.")
        print_output_plugins()
        raise ValueError("Unknown output plug-in")
    ilog.line(_SEPARATOR)
    ilog.line(f"{'Output plugin':<32} : {format_name}")
    return factory(config, cosmo)


_SPECIES_TAGS = {
    CosmoSpecies.DM: "DM",
    CosmoSpecies.BARYON: "BA",
    CosmoSpecies.NEUTRINO: "NU",
}

_GENERIC_COMPONENT_TAGS = {
    FluidComponent.DENSITY: "delta",
    FluidComponent.VX: "vx",
    FluidComponent.VY: "vy",
    FluidComponent.VZ: "vz",
    FluidComponent.DX: "dx",
    FluidComponent.DY: "dy",
    FluidComponent.DZ: "dz",
}


def generic_field_name(species: CosmoSpecies, component: FluidComponent) -> str:
    """Dataset name used by the generic field output, e.g. ``DM_delta``."""
    species_tag = _SPECIES_TAGS.get(species, "")
    component_tag = _GENERIC_COMPONENT_TAGS.get(component, "")
    return f"{species_tag}_{component_tag}"