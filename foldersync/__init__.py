"""
Folder structure synchronization.

Finds the folders that exist in a source tree but not in a target tree
and recreates a selection of them, parents first.
"""

__version__ = "1.0.0"
