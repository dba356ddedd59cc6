from territory_map.geometry.coordinate_mapper import (
    CoordinateMapper,
    slice_scale,
    slice_transform,
)

__all__ = ["CoordinateMapper", "slice_scale", "slice_transform"]
