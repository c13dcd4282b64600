import logging

from ..config import MAX_LABEL_ID
from ..data.loader import voxel_count, shared_voxel_count
from .metrics import LabelResult, AggregateResult

logger = logging.getLogger(__name__)


def measure_label(volume_1, volume_2, label_id):
    """
    Queries both volumes for one label.

    Returns:
        LabelResult
    """
    return LabelResult(
        label_id=label_id,
        voxel_count_1=voxel_count(volume_1, label_id),
        voxel_count_2=voxel_count(volume_2, label_id),
        shared_voxel_count=shared_voxel_count(volume_1, volume_2, label_id)
    )


def _warn_if_degenerate(label, metrics):
    if not metrics.is_finite:
        logger.warning("%s: no voxels in either volume, overlap is undefined", label)


def run_exhaustive(volume_1, volume_2, emitter):
    """
    Compares every label id in [0, MAX_LABEL_ID).

    Labels absent from both volumes are skipped. The results log, if any,
    stays open for the whole scan and is closed once at the end.

    Args:
        volume_1, volume_2 (Volume): Labelmaps on the same grid.
        emitter (ReportEmitter): Console and log output.

    Returns:
        list: LabelResult for each label that was reported.
    """
    results = []
    try:
        for label_id in range(MAX_LABEL_ID):
            nvox_1 = voxel_count(volume_1, label_id)
            nvox_2 = voxel_count(volume_2, label_id)
            if not nvox_1 and not nvox_2:
                continue

            result = LabelResult(
                label_id=label_id,
                voxel_count_1=nvox_1,
                voxel_count_2=nvox_2,
                shared_voxel_count=shared_voxel_count(volume_1, volume_2, label_id)
            )
            metrics = result.metrics

            emitter.scan_block(result, metrics)
            emitter.log_scan_line(result, metrics)
            results.append(result)
    finally:
        emitter.close()

    logger.debug("Scanned %d label ids, %d present in either volume",
                 MAX_LABEL_ID, len(results))
    return results


def run_explicit(volume_1, volume_2, label_ids, emitter):
    """
    Compares the given label ids in order and reports their total.

    Every id is reported, including ones absent from both volumes. Each
    results-log line is appended with the file reopened for that write.
    The total is only reported when more than one label was processed.

    Args:
        volume_1, volume_2 (Volume): Labelmaps on the same grid.
        label_ids (list): Label ids, in reporting order.
        emitter (ReportEmitter): Console and log output.

    Returns:
        tuple: (results, aggregate)
    """
    results = []
    aggregate = AggregateResult()

    for label_id in label_ids:
        result = measure_label(volume_1, volume_2, label_id)
        metrics = result.metrics
        _warn_if_degenerate(f"label {label_id}", metrics)

        emitter.label_block(result, metrics)
        emitter.log_label_line(result, metrics)

        aggregate.add(result)
        results.append(result)

    if aggregate.is_reportable:
        metrics = aggregate.metrics
        _warn_if_degenerate("total", metrics)
        emitter.total_block(aggregate, metrics)

    return results, aggregate


def run(volume_1, volume_2, config, emitter):
    """Runs the mode selected by `config.all_labels`."""
    if config.all_labels:
        return run_exhaustive(volume_1, volume_2, emitter)
    return run_explicit(volume_1, volume_2, config.label_ids, emitter)
