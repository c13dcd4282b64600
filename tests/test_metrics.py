import math

import pytest

from label_overlap.core.metrics import compute, LabelResult, AggregateResult


@pytest.mark.parametrize("v1, v2, shared", [
    (100, 80, 70),
    (50, 50, 50),
    (1, 0, 0),
    (0, 7, 0),
    (12345, 999, 500),
])
def test_compute_matches_formula(v1, v2, shared):
    metrics = compute(v1, v2, shared)
    mean = (v1 + v2) / 2

    assert metrics.mean_voxel_count == pytest.approx(mean)
    assert metrics.percent_diff == pytest.approx(100 * abs(v1 - v2) / mean)
    assert metrics.percent_overlap == pytest.approx(100 * shared / mean)
    assert metrics.is_finite


def test_compute_is_symmetric_in_volume_order():
    assert compute(100, 80, 70) == compute(80, 100, 70)


def test_zero_mean_is_not_finite():
    metrics = compute(0, 0, 0)

    assert metrics.mean_voxel_count == 0
    assert math.isnan(metrics.percent_diff)
    assert math.isnan(metrics.percent_overlap)
    assert not metrics.is_finite


def test_label_result_metrics():
    result = LabelResult(label_id=5, voxel_count_1=100, voxel_count_2=80, shared_voxel_count=70)

    assert result.metrics.mean_voxel_count == 90
    assert round(result.metrics.percent_diff, 2) == 22.22
    assert round(result.metrics.percent_overlap, 2) == 77.78


def test_aggregate_sums_counts():
    aggregate = AggregateResult()
    aggregate.add(LabelResult(5, 100, 80, 70))

    assert aggregate.num_labels == 1
    assert not aggregate.is_reportable

    aggregate.add(LabelResult(12, 50, 50, 50))

    assert (aggregate.voxel_count_1, aggregate.voxel_count_2, aggregate.shared_voxel_count) == (150, 130, 120)
    assert aggregate.is_reportable
    assert aggregate.metrics.mean_voxel_count == 140
    assert round(aggregate.metrics.percent_diff, 2) == 14.29
    assert round(aggregate.metrics.percent_overlap, 2) == 85.71
