"""Jump Marker: vertical jump height from marked take-off and landing frames."""

__version__ = "0.1.0"
