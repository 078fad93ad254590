"""
Spatial de-duplication and spiderfy layout for map marker datasets.
"""

__version__ = "0.1.0"
