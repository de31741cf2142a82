# radx/core/params.py
"""Per-particle parameter storage for a radx simulation.

Effects never add fields to the particle arrays. Anything an effect needs to
know about an individual particle (e.g. the radiation efficiency ``beta``) is
kept in a ParameterStore owned by the host simulation and keyed by the
particle's hash, so that entries survive index shifts when other particles are
removed.
"""
from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

import numpy as np
from numpy.typing import NDArray


class ParameterNotFoundError(KeyError):
    """Raised by ParameterStore.get when a parameter has not been set."""


class ParameterStore:
    """A generic ``(particle hash, name) -> value`` store.

    Absence of a parameter is a normal, frequent state: ``search`` returns
    None and ``gather`` returns NaN for it. Only ``get`` treats a missing
    entry as an error.
    """

    def __init__(self) -> None:
        self._data: Dict[int, Dict[str, Any]] = {}

    def set(self, particle_hash: int, name: str, value: Any) -> None:
        if not isinstance(name, str):
            raise TypeError(f"Parameter names must be strings, got {type(name).__name__}.")
        self._data.setdefault(int(particle_hash), {})[name] = value

    def get(self, particle_hash: int, name: str) -> Any:
        """Returns a parameter value, raising if it was never set.

        Raises:
            ParameterNotFoundError: If the particle has no parameter ``name``.
        """
        try:
            return self._data[int(particle_hash)][name]
        except KeyError:
            raise ParameterNotFoundError(
                f"Particle with hash {particle_hash} has no parameter '{name}'."
            ) from None

    def search(self, particle_hash: int, name: str) -> Optional[Any]:
        """Returns a parameter value, or None if it is not set."""
        entry = self._data.get(int(particle_hash))
        if entry is None:
            return None
        return entry.get(name)

    def remove(self, particle_hash: int, name: str) -> bool:
        entry = self._data.get(int(particle_hash))
        if entry is None or name not in entry:
            return False
        del entry[name]
        if not entry:
            del self._data[int(particle_hash)]
        return True

    def names(self, particle_hash: int) -> Tuple[str, ...]:
        return tuple(self._data.get(int(particle_hash), {}))

    def clear(self, particle_hash: int) -> None:
        self._data.pop(int(particle_hash), None)

    def gather(self, hashes: Iterable[int], name: str) -> NDArray[np.float64]:
        """Collects one parameter for many particles into a float array.

        Missing entries become NaN, which the force kernels treat as "this
        particle does not feel the effect". A zero is kept as zero.

        Args:
            hashes (Iterable[int]): Particle hashes, in the order of the
                output array.
            name (str): The parameter name to look up.

        Returns:
            NDArray[np.float64]: One value per hash, NaN where absent.
        """
        data = self._data
        empty: Dict[str, Any] = {}
        values = (data.get(int(h), empty).get(name) for h in hashes)
        return np.fromiter(
            (np.nan if value is None else float(value) for value in values),
            dtype=np.float64,
        )

    def copy(self) -> ParameterStore:
        new = ParameterStore()
        new._data = {h: dict(entry) for h, entry in self._data.items()}
        return new

    def __contains__(self, key: Tuple[int, str]) -> bool:
        particle_hash, name = key
        return self.search(particle_hash, name) is not None

    def __len__(self) -> int:
        return sum(len(entry) for entry in self._data.values())


class ParticleParams(MutableMapping):
    """Dictionary-style access to the parameters of a single particle."""

    def __init__(self, store: ParameterStore, particle_hash: int):
        self._store = store
        self._hash = int(particle_hash)

    def __getitem__(self, name: str) -> Any:
        try:
            return self._store.get(self._hash, name)
        except ParameterNotFoundError as e:
            raise KeyError(name) from e

    def __setitem__(self, name: str, value: Any) -> None:
        self._store.set(self._hash, name, value)

    def __delitem__(self, name: str) -> None:
        if not self._store.remove(self._hash, name):
            raise KeyError(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._store.names(self._hash))

    def __len__(self) -> int:
        return len(self._store.names(self._hash))

    def __repr__(self) -> str:
        return f"ParticleParams(hash={self._hash}, {dict(self.items())})"
