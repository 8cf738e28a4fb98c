"""Block device filesystem preparation for VM bootstrap agents."""

from .__version__ import __version__


__all__ = ["__version__"]
