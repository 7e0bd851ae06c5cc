"""Utilities

The modules in the utilities package are expected to be independent
pure python modules that provide utility functions and classes that
can be used by any Python application.

They should not depend on GardenVariety specific modules or objects,
in case they do, they should be moved to the support package.
"""

from .urls import build_url

__all__ = (
    "build_url",
)
