import pytest

from icgen.output import CosmoSpecies, FluidComponent
from icgen.simbelmyne import (
    INFO_GROUP,
    simbelmyne_field_name,
    simbelmyne_file_name,
    simbelmyne_metadata,
)


@pytest.mark.parametrize(
    "species, component, expected",
    [
        (CosmoSpecies.DM, FluidComponent.DENSITY, "DM_delta"),
        (CosmoSpecies.BARYON, FluidComponent.PHI2, "BA_phi2"),
        (CosmoSpecies.NEUTRINO, FluidComponent.A3, "NU_A3"),
        (CosmoSpecies.DM, FluidComponent.MASS, "DM_mass"),
    ],
)
def test_field_name(species, component, expected):
    assert simbelmyne_field_name(species, component) == expected


def test_field_names_are_unique():
    names = {
        simbelmyne_field_name(s, c) for s in CosmoSpecies for c in FluidComponent
    }
    assert len(names) == len(CosmoSpecies) * len(FluidComponent)


def test_file_name_wraps_field_name():
    name = simbelmyne_file_name("run/out_", CosmoSpecies.BARYON, FluidComponent.VX)
    assert name.startswith("run/out_")
    assert name.endswith(".h5")
    assert simbelmyne_field_name(CosmoSpecies.BARYON, FluidComponent.VX) in name


def test_metadata_lengths_and_counts():
    meta = simbelmyne_metadata(250.0, 128, 9.0)
    assert [meta[f"{INFO_GROUP}/L{i}"] for i in range(3)] == [250.0] * 3
    assert [meta[f"{INFO_GROUP}/N{i}"] for i in range(3)] == [128] * 3
    assert [meta[f"{INFO_GROUP}/corner{i}"] for i in range(3)] == [0.0] * 3
    assert meta[f"{INFO_GROUP}/rank"] == 1


@pytest.mark.parametrize("zstart", [0.0, 24.0, 99.0])
def test_metadata_time_is_scale_factor(zstart):
    meta = simbelmyne_metadata(100.0, 64, zstart)
    assert meta[f"{INFO_GROUP}/time"] * (1.0 + zstart) == pytest.approx(1.0)


def test_metadata_has_eleven_attributes():
    assert len(simbelmyne_metadata(1.0, 2, 0.0)) == 11