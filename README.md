# icgen

Building blocks for generating initial conditions (ICs) for cosmological
N-body and hydrodynamical simulations. `icgen` is a library. It supplies
cosmological parameters and their derived densities, particle storage,
Fourier-space field operators, parsing of white-noise seeds, gas thermal
quantities at the starting redshift, and the header and naming bookkeeping
used by GADGET-HDF5, AREPO and Simbelmyne outputs.

Configurations are passed in as plain nested mappings, keyed by section and
then by option, for example `{"setup": {"BoxLength": 100.0, "GridRes": 128}}`.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Modules

### `icgen.logger`

- `LogLevel`: `OFF`, `FATAL`, `ERROR`, `WARNING`, `INFO`, `DEBUG`.
- `Logger`: writes to standard output and, after `set_output(filename)`,
  also to that file. `unset_output()` closes the file, `set_level(level)`
  changes the verbosity, and `write(item)` emits one item. A `Logger` also
  works as a context manager that closes its file on exit.
- `LogStream`: a stream bound to a logger at a fixed level. It prints only
  while the logger's level is at least its own. `write(*args)` adds to the
  current line and starts it with the level's coloured prefix. `endline()`
  ends the line, `line(*args)` writes a whole line, and `printf(fmt, *args)`
  writes a `%`-formatted line with any embedded newlines removed.
- Module-level instances: `the_logger` and the streams `flog`, `elog`,
  `wlog`, `ilog`, `dlog`. The shared logger starts at `LogLevel.OFF`, so
  nothing is printed until `the_logger.set_level(...)` is called.

### `icgen.particles`

`ParticleContainer` holds positions and velocities as `(n, 3)` numpy arrays,
particle ids, and, if requested, individual masses. `allocate(nump, b64reals,
b64ids, individual_masses)` selects 32- or 64-bit reals and ids.
`set_position`, `set_velocity`, `set_id` and `set_mass` fill single entries.
`set_id` raises `OverflowError` for an id that does not fit the id width.
`set_mass` raises `ValueError` if the container was allocated without
individual masses. `local_num_particles()`, `global_num_particles()` and
`local_offset()` describe a single task that holds every particle.

### `icgen.operators`

- `assign_to(field)`, `add_to(field)`, `subtract_from(field)`,
  `multiply_add_to(field, x)`: each returns a function `op(i, v)` that
  updates `field[i]`.
- `FourierGradient(box_length, grid_res)`, also built by
  `FourierGradient.from_config(config)`: `gradient(idim, ijk)` returns the
  spectral factor `i k` for a grid mode, which is zero at the Nyquist index.
  `vfac_corr(ijk)` returns `1.0`.

### `icgen.cosmology`

`CosmologyParameters` stores named parameters. `get(key)` and `params[key]`
raise `KeyError` for unknown names, and `set(key, value)` changes only
parameters that already exist. `CosmologyParameters.from_config(config,
parameter_sets)` does one of two things:

- it copies the set named by `cosmology/ParameterSet` from `parameter_sets`,
  raising `ValueError` if that set is unknown; or
- it reads the values one by one and takes anything missing from the set
  named `"Planck2018EE+BAO+SN"` in `parameter_sets`.

It then derives `H0`, the massive neutrino count and density, the photon,
massless neutrino and total radiation densities, `Omega_c`, `f_b`, `f_c` and
the flat-universe `Omega_DE`. Setting `ZeroRadiation` switches the radiation
density off. `available_sets()` lists the names of the sets it was given.
The package contains no parameter sets of its own, so callers supply them.

### `icgen.output`

- Enumerations `CosmoSpecies`, `FluidComponent` and `OutputType`.
- A plug-in registry. `register_output_plugin(name, factory)` adds a
  factory, and registering `None` hides the name. `output_plugin_names()`
  lists the visible names. `select_output_plugin(config, cosmo)` calls the
  factory named by `output/format` and raises `ValueError` if no such
  factory exists. The registry starts empty.
- `generic_field_name(species, component)` builds a dataset name such as
  `"DM_delta"`.

### `icgen.simbelmyne`

`simbelmyne_field_name`, `simbelmyne_file_name(prefix, species, component)`
and `simbelmyne_metadata(box_length, grid_res, zstart)`. The last returns the
`/info/scalars/...` header attributes keyed by path.

### `icgen.gas`

`decoupling_scale_factor`, `initial_gas_temperature`,
`mean_molecular_weight`, `gas_internal_energy` (in km²/s²) and
`wrap_position`. `wrap_position` maps positions at most one box length below
zero back into `[0, box)`.

### `icgen.gadget`

`gadget_units(box_length, zstart)` returns the position, velocity and mass
units. `gadget_species_index(species)` gives the particle type: baryons 0,
dark matter 1, neutrinos 3. `particle_count_words(count)` splits a count into
its low and high 32-bit words. `particle_mass(...)` gives a mass-table entry.
`GadgetHeader` (also built by `GadgetHeader.from_config(config, cosmo)`)
collects counts and masses with `record_species(...)`. Its
`attributes(gadget2_compatibility)` method returns the `Header` attributes,
using either 32-bit count words or 64-bit counts.

### `icgen.arepo`

`suggested_pmgrid(grid_res)` and `suggested_softening(box_length, grid_res)`.
`ArepoHeader` (also built by `ArepoHeader.from_config(config, cosmo)`) records
species with `record_species(...)`. Its `attributes()` method returns the
`Header` attributes, which include the initial gas temperature and the
suggested PM grid and softening.

### `icgen.music_seeds`

`is_number`, `is_power_of_two`, `int_log2` and `levelmin_for_grid(res)`. The
last raises `ValueError` if `res` is not a power of two.
`parse_random_parameters(random_section)` reads `seed[0]` to `seed[100]` and
returns a `SeedTable` of seeds, white-noise file names and the coarsest level
that has a seed or a file. Negative dummy seeds mark levels without one.
Non-positive seeds, a missing seed, or `restart` without `disk_cached` raise
`ValueError`.

## Example

```python
from icgen.gas import initial_gas_temperature, mean_molecular_weight
from icgen.gadget import gadget_units, particle_count_words

units = gadget_units(box_length=100.0, zstart=49.0)
t_ini = initial_gas_temperature(astart=0.02, omega_b=0.049, h=0.67, tcmb=2.7255)
mu = mean_molecular_weight(t_ini, yhe=0.245)
low, high = particle_count_words(2**33 + 5)
```

## What the package does not do

`icgen` has no command-line program and no configuration-file reader. It does
not generate white-noise fields, compute transfer functions or perform
Lagrangian perturbation theory. It writes no snapshot files. The GADGET,
AREPO and Simbelmyne modules compute header attributes, names and units, and
storing them in HDF5 files is left to the caller. No output plug-ins are
registered by default.