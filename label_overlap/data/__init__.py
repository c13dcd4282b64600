from .loader import (
    Volume,
    load_volume,
    voxel_count,
    shared_voxel_count,
    clone_empty
)
