from __future__ import annotations

from typing import TypeAlias

import numpy as np
from jaxtyping import Float
from numpy.typing import ArrayLike

Point3: TypeAlias = Float[np.ndarray, "3"]
AnchorTable: TypeAlias = Float[np.ndarray, "N 3"]
SegmentMatrix: TypeAlias = Float[np.ndarray, "4 3"]
PathSamples: TypeAlias = Float[np.ndarray, "S 3"]
PointLike: TypeAlias = ArrayLike
