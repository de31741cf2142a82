# radx/constants.py
"""Physical constants in the unit systems commonly used for N-body work.

The default unit system follows the usual convention for planetary
dynamics: lengths in AU, masses in solar masses and G = 1. The matching time
unit is 1/k days, with k the Gaussian gravitational constant; this is close
to, but not exactly, yr/2pi.
"""
import numpy as np

C_SI = 299792458.0  # m / s
AU_SI = 1.495978707e11  # m
DAY_SI = 86400.0  # s
YEAR_SI = 365.25 * DAY_SI  # Julian year, s
GAUSS_K = 0.01720209895  # Gaussian gravitational constant, AU^1.5 / (Msun^0.5 day)

# Speed of light in AU / yr (units with G = 4 pi^2).
C_AU_YR_MSUN = C_SI * YEAR_SI / AU_SI

# Speed of light in AU / (1/k days) (units with G = 1), about 10065.32.
C = C_SI * DAY_SI / (AU_SI * GAUSS_K)

G_AU_YR_MSUN = 4.0 * np.pi**2
