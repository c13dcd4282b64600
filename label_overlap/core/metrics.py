import math
from dataclasses import dataclass


@dataclass(frozen=True)
class OverlapMetrics:
    mean_voxel_count: float
    percent_diff: float
    percent_overlap: float

    @property
    def is_finite(self):
        """False when the mean voxel count was zero and the percentages are undefined."""
        return math.isfinite(self.percent_diff) and math.isfinite(self.percent_overlap)


def compute(voxel_count_1, voxel_count_2, shared_voxel_count):
    """
    Computes the symmetric volume difference and overlap for one label.

    Both percentages are relative to the mean of the two voxel counts:

        percent_diff    = 100 * |v1 - v2| / mean
        percent_overlap = 100 * shared / mean

    A zero mean is not an error: both percentages come back as nan and
    `OverlapMetrics.is_finite` is False.

    Args:
        voxel_count_1 (int): Voxels with the label in the first volume.
        voxel_count_2 (int): Voxels with the label in the second volume.
        shared_voxel_count (int): Voxels with the label in both volumes.

    Returns:
        OverlapMetrics
    """
    mean = (voxel_count_1 + voxel_count_2) / 2
    if mean == 0:
        return OverlapMetrics(0.0, math.nan, math.nan)

    percent_diff = 100.0 * abs(voxel_count_1 - voxel_count_2) / mean
    percent_overlap = 100.0 * shared_voxel_count / mean
    return OverlapMetrics(mean, percent_diff, percent_overlap)


@dataclass(frozen=True)
class LabelResult:
    label_id: int
    voxel_count_1: int
    voxel_count_2: int
    shared_voxel_count: int

    @property
    def metrics(self):
        return compute(self.voxel_count_1, self.voxel_count_2, self.shared_voxel_count)


@dataclass
class AggregateResult:
    """Running totals over the labels processed in explicit mode."""
    voxel_count_1: int = 0
    voxel_count_2: int = 0
    shared_voxel_count: int = 0
    num_labels: int = 0

    def add(self, result):
        self.voxel_count_1 += result.voxel_count_1
        self.voxel_count_2 += result.voxel_count_2
        self.shared_voxel_count += result.shared_voxel_count
        self.num_labels += 1

    @property
    def is_reportable(self):
        # a single label's total is the label itself
        return self.num_labels > 1

    @property
    def metrics(self):
        return compute(self.voxel_count_1, self.voxel_count_2, self.shared_voxel_count)
