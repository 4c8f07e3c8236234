"""Exceptions raised while decoding network outputs."""


class PoseDecodingError(ValueError):
    """Base class for all decoding failures."""


class ConfigurationMismatch(PoseDecodingError):
    """Tensor channel layout does not match the configured skeleton.

    Fatal: the caller must not proceed with this frame's tensors.
    """


class InvalidTensorShape(PoseDecodingError):
    """A tensor has a degenerate shape, or the stride is not positive.

    The caller should treat the frame as dropped.
    """
