import math

from .config import PERCENT_DIGITS, MEAN_DIGITS
from .errors import LogOpenError

# written in place of a percentage when both volumes lack the label
UNDEFINED_PERCENT = "nan"


def format_percent(value):
    if not math.isfinite(value):
        return UNDEFINED_PERCENT
    return f"{value:2.{PERCENT_DIGITS}f}"


def format_mean(value):
    return f"{value:2.{MEAN_DIGITS}f}"


def diff_line(voxel_count_1, voxel_count_2, metrics, prefix=""):
    return (f"{prefix}volume diff = |({voxel_count_1} - {voxel_count_2})| / "
            f"{format_mean(metrics.mean_voxel_count)} = {format_percent(metrics.percent_diff)}")


def overlap_line(shared_voxel_count, metrics, prefix=""):
    return (f"{prefix}volume overlap = {shared_voxel_count} / "
            f"{format_mean(metrics.mean_voxel_count)} = {format_percent(metrics.percent_overlap)}")


class ResultLog:
    """
    Append-only results file.

    The handle is either held open across many writes (`write`) or
    reopened for every line (`append`).
    """

    def __init__(self, path):
        self.path = path
        self._fp = None

    @property
    def is_open(self):
        return self._fp is not None

    def open(self):
        try:
            self._fp = open(self.path, "a")
        except OSError as exc:
            raise LogOpenError(self.path, reason=str(exc)) from exc
        return self

    def write(self, line):
        if self._fp is None:
            self.open()
        self._fp.write(line)

    def append(self, line):
        """Writes one line and closes the file again."""
        self.write(line)
        self.close()

    def close(self):
        if self._fp is not None:
            self._fp.close()
            self._fp = None


class ReportEmitter:
    """
    Prints per-label and total results and mirrors them to an optional ResultLog.
    Undefined percentages are written as "nan" so every label keeps its line.

    Args:
        quiet (bool): Suppress per-label console blocks in explicit mode.
        log (ResultLog, optional): Results file.
    """

    def __init__(self, quiet=False, log=None):
        self.quiet = quiet
        self.log = log

    def scan_block(self, result, metrics):
        # exhaustive mode: the label id only appears in the log file
        print(diff_line(result.voxel_count_1, result.voxel_count_2, metrics))
        print(overlap_line(result.shared_voxel_count, metrics))

    def label_block(self, result, metrics):
        if self.quiet:
            return
        prefix = f"label {result.label_id}: "
        print(diff_line(result.voxel_count_1, result.voxel_count_2, metrics, prefix))
        print(overlap_line(result.shared_voxel_count, metrics, prefix))

    def total_block(self, aggregate, metrics):
        prefix = "total: "
        print(diff_line(aggregate.voxel_count_1, aggregate.voxel_count_2, metrics, prefix))
        print(overlap_line(aggregate.shared_voxel_count, metrics, prefix))

    def log_scan_line(self, result, metrics):
        if self.log is None:
            return
        self.log.write(f"{result.label_id}  {format_percent(metrics.percent_diff)}  "
                       f"{format_percent(metrics.percent_overlap)}\n")

    def log_label_line(self, result, metrics):
        if self.log is None:
            return
        self.log.append(f"{format_percent(metrics.percent_diff)}  "
                        f"{format_percent(metrics.percent_overlap)}\n")

    def close(self):
        if self.log is not None:
            self.log.close()

