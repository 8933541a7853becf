"""Domain-specific exceptions for the animation pipeline."""


class AnimationError(Exception):
    """Base class for relay failures."""


class ValidationError(AnimationError):
    """Raised when the request does not carry exactly two images."""


class UpstreamRequestError(AnimationError):
    """Raised when a provider call fails on the network or returns non-2xx."""


class UpstreamResponseError(AnimationError):
    """Raised when the provider response lacks a usable artifact URL."""


class StorageError(AnimationError):
    """Raised when the artifact cannot be written to disk."""
