"""Storage for particle positions, velocities, identifiers and masses."""

from __future__ import annotations

import numpy as np


class ParticleContainer:
    """Particle arrays in either 32- or 64-bit precision.

    Positions and velocities are stored with shape ``(n, 3)``.  Masses are
    only held when particles carry individual masses.
    """

    def __init__(self) -> None:
        self.positions = np.zeros((0, 3), dtype=np.float32)
        self.velocities = np.zeros((0, 3), dtype=np.float32)
        self.masses = np.zeros(0, dtype=np.float32)
        self.ids = np.zeros(0, dtype=np.uint32)
        self.has_individual_masses = False

    @property
    def is_64bit_reals(self) -> bool:
        return self.positions.dtype == np.float64

    @property
    def is_64bit_ids(self) -> bool:
        return self.ids.dtype == np.uint64

    def allocate(self, nump: int, b64reals: bool, b64ids: bool, individual_masses: bool) -> None:
        """Reserve zero-initialised storage for ``nump`` particles."""
        if nump < 0:
            raise ValueError("number of particles must be non-negative")
        real_type = np.float64 if b64reals else np.float32
        id_type = np.uint64 if b64ids else np.uint32
        self.has_individual_masses = bool(individual_masses)
        self.positions = np.zeros((nump, 3), dtype=real_type)
        self.velocities = np.zeros((nump, 3), dtype=real_type)
        self.masses = np.zeros(nump if individual_masses else 0, dtype=real_type)
        self.ids = np.zeros(nump, dtype=id_type)

    def set_position(self, ipart: int, idim: int, value: float) -> None:
        self.positions[ipart, idim] = value

    def set_velocity(self, ipart: int, idim: int, value: float) -> None:
        self.velocities[ipart, idim] = value

    def set_id(self, ipart: int, pid: int) -> None:
        limit = 1 << (64 if self.is_64bit_ids else 32)
        if not 0 <= pid < limit:
            raise OverflowError(f"particle id {pid} does not fit the id width")
        self.ids[ipart] = pid

    def set_mass(self, ipart: int, mass: float) -> None:
        if not self.has_individual_masses:
            raise ValueError("container was allocated without individual masses")
        self.masses[ipart] = mass

    def local_num_particles(self) -> int:
        return len(self.ids)

    def global_num_particles(self) -> int:
        """Total over all tasks; a single task holds every particle."""
        return self.local_num_particles()

    def local_offset(self) -> int:
        """Index of this task's first particle in the global ordering."""
        return 0