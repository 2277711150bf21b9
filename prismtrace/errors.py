"""
Exceptions raised by PrismTrace.

Misses, total internal reflection and recursion exhaustion are ordinary
results, not errors. Only bad configuration and cancellation raise.
"""


class SceneConfigError(ValueError):
    """Invalid scene, camera, material or render configuration."""
    pass


class RenderCancelled(RuntimeError):
    """A render was stopped through its cancellation event."""
    pass
