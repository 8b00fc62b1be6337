"""Draw primitive shapes straight into an in-memory pixel buffer."""

__version__ = "0.1.0"
__all__ = ["blend", "canvas", "pixels"]