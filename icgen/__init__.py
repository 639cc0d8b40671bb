"""Building blocks for generating cosmological initial conditions."""

__version__ = "0.1.0"

__all__ = [
    "arepo",
    "cosmology",
    "gadget",
    "gas",
    "logger",
    "music_seeds",
    "operators",
    "output",
    "particles",
    "simbelmyne",
]