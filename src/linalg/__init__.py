"""Dense linear algebra.

This package contains:
- Matrix, a dense real matrix with 1-based 2-D and column-major linear access
- eye, the identity constructor
- linear_to_2d, the column-major index mapping
"""

from __future__ import annotations

from linalg.matrix import Matrix, eye, linear_to_2d

__all__ = ["Matrix", "eye", "linear_to_2d"]
