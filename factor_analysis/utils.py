# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import List, Optional

import numpy as np

# Floating-point cells within EPS of zero are treated as zero.
EPS: float = 1e-13


def clean_zero(x: float) -> float:
    """Return ``x`` with negative zero replaced by positive zero."""
    return 0.0 if x == 0.0 else x


def random_nonsingular_upper(
    n: int, low: int = -100, high: int = 100, seed: Optional[int] = None
) -> List[List[int]]:
    """
    Build rows of an n-by-n upper-triangular integer matrix with random
    entries above the diagonal and only non-zero values on it.

    Integer cells make the result usable in either numeric domain.
    """
    rng = np.random.default_rng(seed)
    U = np.triu(rng.integers(low, high, size=(n, n), endpoint=True))
    diag = rng.integers(1, high, size=n, endpoint=True)
    diag *= rng.choice([-1, 1], size=n)
    U[np.diag_indices(n)] = diag
    return U.tolist()


def random_rows(
    m: int, n: int, low: int = -9, high: int = 9, seed: Optional[int] = None
) -> List[List[int]]:
    """Rows of an m-by-n matrix of random small integers."""
    rng = np.random.default_rng(seed)
    return rng.integers(low, high, size=(m, n), endpoint=True).tolist()
