"""Seed and white-noise file selection for the multi-level random generator."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from icgen.logger import elog, flog, ilog

#: Highest level for which a ``seed[level]`` entry is looked up.
MAX_SEED_LEVEL = 100

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


def _cmod(a: int, b: int) -> int:
    """Remainder with the sign of the dividend, as integer division truncates."""
    r = abs(a) % b
    return -r if a < 0 else r


def is_number(text: str) -> bool:
    """True if every character is a digit or a minus sign."""
    return all(ch.isdigit() or ch == "-" for ch in text)


def is_power_of_two(x: int) -> bool:
    """True if ``x`` has at most one bit set."""
    return (x & (x - 1)) == 0


def int_log2(v: int) -> int:
    """Floor of the base-2 logarithm; zero for values below two."""
    return max(int(v).bit_length() - 1, 0)


def levelmin_for_grid(res: int) -> int:
    """Level whose grid has ``res`` cells per dimension."""
    if not is_power_of_two(res):
        msg = "MUSIC random number plugin requires [setup]/GridRes to be a power of 2!"
        flog.line(msg)
        raise ValueError(msg)
    return int_log2(res)


@dataclass
class SeedTable:
    """Per-level seeds and white-noise file names.

    A negative seed marks a level without a user seed: ``-1`` for a level
    read from a file, other negative values for generated dummy seeds.
    """

    seeds: list[int]
    filenames: list[str]
    levelmin_seed: int

    def has_file(self, level: int) -> bool:
        return bool(self.filenames[level])


def parse_random_parameters(random_section: Mapping[str, Any]) -> SeedTable:
    """Read ``seed[0]`` .. ``seed[100]`` from the ``random`` section."""
    restart = _flag(random_section.get("restart", False))
    disk_cached = _flag(random_section.get("disk_cached", True))
    if restart and not disk_cached:
        elog.printf("Cannot restart from mem cached random numbers.")
        raise ValueError("Cannot restart from mem cached random numbers.")

    seeds: list[int] = []
    filenames: list[str] = []
    for level in range(MAX_SEED_LEVEL + 1):
        key = f"seed[{level}]"
        if key in random_section:
            text = str(random_section[key]).strip()
            noseed = False
        else:
            text = "-2"
            noseed = True

        if is_number(text):
            try:
                value = int(text)
            except ValueError:
                raise ValueError(f"cannot interpret [random]/{key}={text!r} as a seed") from None
            filenames.append("")
            if noseed:
                dummy = _cmod(value - level, 123) + _cmod(value + 7342523521 * level, 123456789)
                seeds.append(-abs(dummy))
            else:
                if value <= 0:
                    elog.printf("Specified seed [random]/%s needs to be a number >0!", key)
                    raise ValueError("Seed values need to be >0")
                seeds.append(value)
        else:
            filenames.append(text)
            seeds.append(-1)
            ilog.printf("Random numbers for level %3d will be read from file.", level)

    levelmin_seed = next(
        (lvl for lvl, (s, f) in enumerate(zip(seeds, filenames)) if f or s >= 0),
        -1,
    )
    if levelmin_seed < 0:
        elog.printf("No seed specified for MUSIC1 RNG plugin!")
        raise ValueError("No seed specified for MUSIC1 RNG plugin!")

    return SeedTable(seeds=seeds, filenames=filenames, levelmin_seed=levelmin_seed)