import pytest

from icgen.cosmology import DEFAULT_PARAMETER_SET, CosmologyParameters

BASE = {
    "Tcmb": 2.7255,
    "YHe": 0.2454,
    "h": 0.6766,
    "n_s": 0.9665,
    "A_s": 2.105e-9,
    "k_p": 0.05,
    "Omega_b": 0.049,
    "Omega_m": 0.3111,
    "m_nu1": 0.06,
    "m_nu2": 0.0,
    "m_nu3": 0.0,
    "N_ur": 2.046,
    "Omega_DE": 0.6889,
    "w_0": -1.0,
    "w_a": 0.0,
    "sigma_8": -1.0,
}

OTHER = dict(BASE, h=0.7, Omega_m=0.3, Omega_b=0.045)


@pytest.fixture
def sets():
    return {DEFAULT_PARAMETER_SET: dict(BASE), "Other": dict(OTHER)}


def build(cosmology, sets):
    return CosmologyParameters.from_config({"cosmology": cosmology}, sets)


def test_defaults_fill_missing_values(sets):
    p = build({}, sets)
    assert p.get("h") == pytest.approx(BASE["h"])
    assert p["n_s"] == pytest.approx(BASE["n_s"])
    assert p["A_s"] == pytest.approx(BASE["A_s"])
    assert p["sigma_8"] == -1.0


def test_hubble_from_H0(sets):
    p = build({"H0": "70"}, sets)
    assert p["h"] == pytest.approx(0.7)
    assert p["H0"] == pytest.approx(70.0)


def test_nspec_used_without_n_s(sets):
    assert build({"nspec": "0.95"}, sets)["n_s"] == pytest.approx(0.95)
    p = build({"nspec": "0.95", "n_s": "0.97"}, sets)
    assert p["n_s"] == pytest.approx(0.97)


def test_sigma8_disables_default_amplitude(sets):
    p = build({"sigma_8": "0.81"}, sets)
    assert p["A_s"] == -1.0
    assert p["sigma_8"] == pytest.approx(0.81)


def test_ultrarelativistic_neutrino_default(sets):
    p = build({"m_nu1": 0.0}, sets)
    assert p["N_ur"] == pytest.approx(3.046)
    assert p["N_nu_massive"] == 0
    q = build({}, sets)
    assert q["N_ur"] == pytest.approx(3.046 - 1)
    assert q["N_nu_massive"] == 1


def test_flatness_and_fractions(sets):
    p = build({}, sets)
    assert p["Omega_DE"] + p["Omega_m"] + p["Omega_r"] == pytest.approx(1.0)
    assert p["Omega_k"] == 0.0
    assert p["f_b"] + p["f_c"] == pytest.approx(1.0)
    assert p["Omega_c"] == pytest.approx(p["Omega_m"] - p["Omega_b"] - p["Omega_nu_massive"])
    assert p["Omega_r"] == pytest.approx(p["Omega_gamma"] + p["Omega_nu_massless"])


def test_zero_radiation(sets):
    p = build({"ZeroRadiation": "yes"}, sets)
    assert p["Omega_r"] == 0.0
    assert p["Omega_DE"] == pytest.approx(1.0 - p["Omega_m"])


def test_massive_neutrino_density(sets):
    p = build({"H0": 100.0, "m_nu1": 0.9314, "m_nu2": 0.0, "m_nu3": 0.0}, sets)
    assert p["Omega_nu_massive"] == pytest.approx(0.01)


def test_photon_density(sets):
    p = build({"H0": 100.0}, sets)
    assert p["Omega_gamma"] == pytest.approx(2.47e-5, rel=0.01)


def test_photon_density_scales_with_h(sets):
    a = build({"H0": 100.0}, sets)
    b = build({"H0": 50.0}, sets)
    assert b["Omega_gamma"] == pytest.approx(4.0 * a["Omega_gamma"])


def test_predefined_set_is_loaded(sets):
    p = build({"ParameterSet": "Other"}, sets)
    assert p["h"] == pytest.approx(OTHER["h"])
    assert p["Omega_b"] == pytest.approx(OTHER["Omega_b"])
    assert p["Omega_c"] == pytest.approx(OTHER["Omega_m"] - OTHER["Omega_b"] - p["Omega_nu_massive"])


def test_unknown_set_raises(sets):
    with pytest.raises(ValueError):
        build({"ParameterSet": "Nonexistent"}, sets)


def test_missing_default_raises():
    with pytest.raises(KeyError):
        build({}, {})


def test_get_and_set(sets):
    p = build({}, sets)
    p.set("dplus", 0.5)
    assert p["dplus"] == 0.5
    with pytest.raises(KeyError):
        p.get("no_such_parameter")
    with pytest.raises(KeyError):
        p.set("no_such_parameter", 1.0)


def test_placeholders_start_at_zero(sets):
    p = build({}, sets)
    assert [p[k] for k in ("dplus", "pnorm", "sqrtpnorm", "vfact")] == [0.0] * 4


def test_available_sets_sorted(sets):
    p = build({}, sets)
    assert p.available_sets() == sorted([DEFAULT_PARAMETER_SET, "Other"])