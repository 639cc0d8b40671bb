import math

import pytest

from icgen.gadget import (
    RHO_CRIT,
    GadgetHeader,
    gadget_species_index,
    gadget_units,
    particle_count_words,
    particle_mass,
)
from icgen.output import CosmoSpecies


def _header():
    return GadgetHeader(
        astart=0.5,
        box_size=100.0,
        omega_m=0.3,
        omega_lambda=0.7,
        hubble_param=0.7,
        mass_unit=RHO_CRIT * 100.0**3,
    )


def test_species_indices():
    assert gadget_species_index(CosmoSpecies.DM) == 1
    assert gadget_species_index(CosmoSpecies.BARYON) == 0
    assert gadget_species_index(CosmoSpecies.NEUTRINO) == 3


def test_units():
    units = gadget_units(100.0, 49.0)
    assert units.position == 100.0
    assert units.mass == pytest.approx(27.7519737 * 100.0**3)
    assert units.velocity * math.sqrt(1.0 / 50.0) == pytest.approx(100.0)


def test_count_words_round_trip():
    count = (3 << 32) + 17
    low, high = particle_count_words(count)
    assert (high << 32) | low == count
    assert low < 2**32


def test_count_words_rejects_negative():
    with pytest.raises(ValueError):
        particle_count_words(-1)


def test_individual_mass_is_zero():
    assert particle_mass(0.3, 10.0, 100, True) == 0.0


def test_uniform_mass_sums_to_species_mass():
    m = particle_mass(0.3, 10.0, 128, False)
    assert m * 128 == pytest.approx(0.3 * 10.0)


def test_uniform_mass_rejects_zero_count():
    with pytest.raises(ValueError):
        particle_mass(0.3, 10.0, 0, False)


def test_record_species_fills_slot():
    header = _header()
    count = (1 << 32) + 8
    sid = header.record_species(CosmoSpecies.DM, count, count, 0.25, False)
    assert sid == 1
    assert header.npart64[1] == count
    assert header.npart_total_high[1] == 1
    assert header.mass[1] * count == pytest.approx(0.25 * header.mass_unit)
    assert header.mass[0] == 0.0


def test_attributes_modern_layout():
    header = _header()
    header.record_species(CosmoSpecies.BARYON, 64, 64, 0.05, True)
    attrs = header.attributes(False)
    assert "NumPart_Total_HighWord" not in attrs
    assert attrs["NumPart_Total"][0] == 64
    assert len(attrs["MassTable"]) == 6
    assert attrs["Redshift"] == [pytest.approx(1.0)]


def test_attributes_gadget2_layout():
    header = _header()
    attrs = header.attributes(True)
    assert list(attrs)[:3] == ["NumPart_ThisFile", "NumPart_Total", "NumPart_Total_HighWord"]
    assert attrs["BoxSize"] == [100.0]
    assert attrs["Flag_Entropy_ICs"] == [0]


def test_from_config():
    config = {"setup": {"BoxLength": 50.0, "zstart": 99.0}}
    cosmo = {"Omega_m": 0.31, "Omega_DE": 0.69, "h": 0.67}
    header = GadgetHeader.from_config(config, cosmo)
    assert header.astart == pytest.approx(0.01)
    assert header.mass_unit == pytest.approx(RHO_CRIT * 50.0**3)
    assert header.attributes()["HubbleParam"] == [0.67]