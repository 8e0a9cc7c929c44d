"""filegate - storage source filter rules.

Decides whether files and folders of a storage source are hidden,
inaccessible, or blocked from download, based on per-storage glob rules.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
