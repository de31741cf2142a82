from typing import Literal, Optional, Sequence
import numpy as np
from radx.core.simulation import Simulation
from radx.effects.base import ForceContributor, Operator
def create_source_and_grain(d: float = 2.0, beta: Optional[float] = 0.5, source_mass: float = 1.0, grain_v: Sequence[float] = (0.0, 0.0, 0.0), G: float = 1.0, backend: Literal['numpy', 'jax'] = 'numpy') -> Simulation:
    sim = Simulation(G=G, backend=backend)
    sim.add(m=source_mass)
    grain = sim.add(m=0.0, x=d, vx=grain_v[0], vy=grain_v[1], vz=grain_v[2])
    if beta is not None:
        grain.params["beta"] = beta
    return sim
def create_random_cloud(n: int, seed: int = 0, beta_fraction: float = 0.7, G: float = 1.0, backend: Literal['numpy', 'jax'] = 'numpy') -> Simulation:
    rng = np.random.default_rng(seed)
    sim = Simulation(G=G, backend=backend)
    sim.add(m=1.0, vx=0.01, vy=-0.02)
    for _ in range(n):
        x, y, z = rng.uniform(-3.0, 3.0, size=3)
        vx, vy, vz = rng.normal(0.0, 0.5, size=3)
        p = sim.add(m=rng.uniform(0.0, 1e-3), x=x, y=y, z=z, vx=vx, vy=vy, vz=vz)
        if rng.uniform() < beta_fraction:
            p.params["beta"] = rng.uniform(0.0, 1.0)
    return sim
def source_delta(sim: Simulation, force: ForceContributor) -> np.ndarray:
    sim.a[:] = 0.0
    force.apply(sim)
    return sim.a.copy()
class ConstantForce(ForceContributor):
    name = "constant"
    def __init__(self, acc):
        self.acc = np.asarray(acc, dtype=float)
    def apply(self, sim):
        sim.a[: sim.N_real] += self.acc
class CountingOperator(Operator):
    name = "counter"
    def __init__(self):
        self.calls = []
    def apply(self, sim, dt):
        self.calls.append(dt)
class PoisonAfter(ForceContributor):
    name = "poison"
    def __init__(self, t_poison, raise_error=False):
        self.t_poison = t_poison
        self.raise_error = raise_error
    def apply(self, sim):
        if sim.t > self.t_poison:
            if self.raise_error:
                raise FloatingPointError(f"non-finite acceleration at t={sim.t}")
            sim.a[: sim.N_real] = np.nan
