from .config import EXIT_USAGE, EXIT_NOFILE, EXIT_BADFILE


class OverlapError(Exception):
    """Fatal error; `exit_code` is the process status it maps to."""
    exit_code = EXIT_USAGE


class VolumeLoadError(OverlapError):
    exit_code = EXIT_NOFILE

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        message = f"could not read volume from {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class LogOpenError(OverlapError):
    exit_code = EXIT_BADFILE

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        super().__init__(f"could not open {path} for writing")


class VolumeMismatchError(OverlapError, ValueError):
    """The two volumes are not on the same voxel grid."""

    def __init__(self, shape_a, shape_b):
        self.shape_a = shape_a
        self.shape_b = shape_b
        super().__init__(f"volumes have different shapes: {shape_a} vs {shape_b}")
