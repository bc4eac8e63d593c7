class RenderConfigurationError(Exception):
    """Scene or transform set up in a way the renderer cannot work with."""


class MissingCameraError(RenderConfigurationError):
    """A shape or light was reached before any camera produced a ray."""


class DegenerateTransformationError(RenderConfigurationError, ValueError):
    """A transformation whose matrix has no inverse."""
