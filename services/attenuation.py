"""Cloud cover derating of the UV index."""

from __future__ import annotations

from typing import Optional

# (upper bound, multiplier); the last band includes full overcast.
CLOUD_BANDS = (
    (0.3, 0.9),
    (0.7, 0.7),
    (1.0, 0.5),
)


def cloud_multiplier(cloud_cover: Optional[float]) -> float:
    if cloud_cover is None or cloud_cover < 0.0 or cloud_cover > 1.0:
        return 1.0
    for upper, multiplier in CLOUD_BANDS[:-1]:
        if cloud_cover < upper:
            return multiplier
    return CLOUD_BANDS[-1][1]


def attenuate_uv(uv_index: float, cloud_cover: Optional[float] = None) -> float:
    """Return ``uv_index`` derated for the observed cloud cover fraction."""
    return uv_index * cloud_multiplier(cloud_cover)
