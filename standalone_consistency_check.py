# standalone_consistency_check.py
"""
A standalone script to verify that the serial NumPy, joblib-parallel NumPy and
JAX radiation force evaluators agree, bypassing the pytest runner.
"""
import numpy as np

def make_cloud(n, seed):
    """Random real particles; particle 0 is the source, ~30% carry no beta."""
    rng = np.random.default_rng(seed)
    x = rng.uniform(-3.0, 3.0, size=(n, 3))
    v = rng.normal(0.0, 0.5, size=(n, 3))
    m = rng.uniform(0.0, 1e-3, size=n)
    m[0] = 1.0
    beta = rng.uniform(0.0, 1.0, size=n)
    beta[rng.uniform(size=n) < 0.3] = np.nan
    return x, v, m, beta

def run_check():
    """Runs the consistency checks."""
    print("--- Standalone Radiation Force Consistency Check ---")

    try:
        from radx.effects.radiation_forces import radiation_acceleration
        from radx.effects_jax.radiation_forces_jax import radiation_acceleration_jax
        print("SUCCESS: JAX and all source modules imported successfully.")
    except ImportError as e:
        print(f"FAILURE: Could not import necessary modules. Error: {e}")
        return

    CASES = [(2, 0), (10, 1), (50, 2), (200, 3)]
    SOURCE_INDICES = [0, 1]
    C_VALUES = [1.0, 10.0, 10065.32]
    TOLERANCE = 1e-12
    failures = []

    # --- 1. Serial vs. joblib-parallel ---
    print("\nChecking serial vs. parallel reduction...")
    for n, seed in CASES:
        x, v, m, beta = make_cloud(n, seed)
        for c in C_VALUES:
            serial = radiation_acceleration(x, v, m, beta, 0, 1.0, c, n_jobs=1)
            parallel = radiation_acceleration(x, v, m, beta, 0, 1.0, c, n_jobs=4)
            if not np.allclose(serial, parallel, rtol=TOLERANCE, atol=1e-15):
                failures.append(f"parallel reduction failed for n={n}, c={c}")

    # --- 2. NumPy vs. JAX ---
    print("Checking NumPy vs. JAX kernels...")
    for n, seed in CASES:
        x, v, m, beta = make_cloud(n, seed)
        for source_index in SOURCE_INDICES:
            if source_index >= n:
                continue
            for c in C_VALUES:
                a_np = radiation_acceleration(x, v, m, beta, source_index, 1.0, c)
                a_jax = np.asarray(radiation_acceleration_jax(x, v, m, beta, source_index, 1.0, c))
                if not np.allclose(a_np, a_jax, rtol=TOLERANCE, atol=1e-15):
                    failures.append(f"JAX kernel failed for n={n}, source={source_index}, c={c}")

    # --- Final Report ---
    print("\n--- FINAL REPORT ---")
    if not failures:
        print("✅ SUCCESS: All radiation force backends are numerically consistent.")
    else:
        print(f"❌ FAILURE: Found {len(failures)} inconsistencies:")
        for f in failures:
            print(f"  - {f}")

if __name__ == "__main__":
    run_check()
