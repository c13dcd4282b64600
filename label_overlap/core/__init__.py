from .metrics import (
    OverlapMetrics,
    LabelResult,
    AggregateResult,
    compute
)
from .driver import run, run_exhaustive, run_explicit, measure_label
