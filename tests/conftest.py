import logging
import os

import nibabel as nib
import numpy as np
import pytest

SHAPE = (10, 10, 10)


def make_labelmap(runs, shape=SHAPE):
    """
    Builds a label array from {label_id: [(start, stop), ...]} runs over the
    flattened grid; everything else is background.
    """
    data = np.zeros(int(np.prod(shape)), dtype=np.int16)
    for label_id, spans in runs.items():
        for start, stop in spans:
            data[start:stop] = label_id
    return data.reshape(shape)


@pytest.fixture
def write_volume(tmp_path):
    def _write(name, data, affine=None):
        path = os.path.join(tmp_path, name)
        img = nib.Nifti1Image(data, np.eye(4) if affine is None else affine)
        nib.save(img, path)
        return path
    return _write


@pytest.fixture
def example_paths(write_volume):
    """
    Label 5: 100 vs 80 voxels, 70 shared.
    Label 12: 50 vs 50 voxels, all shared.
    """
    data_1 = make_labelmap({5: [(0, 100)], 12: [(200, 250)]})
    data_2 = make_labelmap({5: [(30, 110)], 12: [(200, 250)]})
    return write_volume("seg1.nii.gz", data_1), write_volume("seg2.nii.gz", data_2)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
