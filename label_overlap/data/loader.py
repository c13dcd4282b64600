import logging

import nibabel as nib
import numpy as np
from nibabel.filebasedimages import ImageFileError

from ..errors import VolumeLoadError, VolumeMismatchError

logger = logging.getLogger(__name__)


class Volume:
    """
    Read-only handle to a loaded labelmap.

    Args:
        data (np.ndarray): Integer label array.
        affine (np.ndarray): 4x4 voxel-to-world matrix.
        header: Header of the source image, or None.
        path (str, optional): Where the volume was read from.
    """

    def __init__(self, data, affine, header=None, path=None):
        self.data = data
        self.affine = affine
        self.header = header
        self.path = path
        self._label_sizes = None

    @property
    def shape(self):
        return self.data.shape

    @property
    def label_sizes(self):
        if self._label_sizes is None:
            self._label_sizes = compute_label_sizes(self.data)
        return self._label_sizes

    def __repr__(self):
        return f"Volume(path={self.path!r}, shape={self.shape})"


def compute_label_sizes(data):
    """
    Computes the voxel count of each label present in the array.

    Args:
        data (np.ndarray): Label array.

    Returns:
        dict: {label_id: voxel_count}, background (0) included.
    """
    unique_labels, counts = np.unique(data, return_counts=True)
    return {int(label_id): int(count) for label_id, count in zip(unique_labels, counts)}


def load_volume(path):
    """
    Loads a labelmap and casts its voxel data to integers.

    Args:
        path (str): Path to any image format nibabel can read.

    Returns:
        Volume: The loaded volume.

    Raises:
        VolumeLoadError: If the file is missing or cannot be read.
    """
    try:
        img = nib.load(path)
        data = img.get_fdata().astype(int)
    except (OSError, ImageFileError, ValueError) as exc:
        raise VolumeLoadError(path, reason=str(exc)) from exc

    logger.debug("Loaded %s with shape %s", path, data.shape)
    return Volume(data, img.affine, img.header, path=path)


def voxel_count(volume, label_id):
    """Number of voxels in `volume` labelled `label_id`."""
    return volume.label_sizes.get(int(label_id), 0)


def shared_voxel_count(volume_a, volume_b, label_id):
    """
    Counts voxels labelled `label_id` in both volumes.

    Raises:
        VolumeMismatchError: If the two volumes are not on the same voxel grid.
    """
    if volume_a.shape != volume_b.shape:
        raise VolumeMismatchError(volume_a.shape, volume_b.shape)
    if voxel_count(volume_a, label_id) == 0 or voxel_count(volume_b, label_id) == 0:
        return 0
    shared = (volume_a.data == label_id) & (volume_b.data == label_id)
    return int(np.count_nonzero(shared))


def clone_empty(volume):
    """
    Returns a zero-filled volume on the same grid as `volume`.
    """
    data = np.zeros_like(volume.data)
    return Volume(data, volume.affine.copy(), volume.header, path=None)
