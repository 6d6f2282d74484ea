"""Type definitions for stagger.

Fields and kernels work in double precision. Ocean model tendencies are
small differences of large numbers, and the conservation checks in the
test suite are only meaningful at f64 round-off.
"""

import numpy as np
import taichi as ti

# Taichi floating-point type for all fields and kernel scalars
DTYPE = ti.f64

# Matching numpy type for serial storage and host-side conversion
NP_DTYPE = np.float64
