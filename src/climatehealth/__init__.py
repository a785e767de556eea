"""package for the regional climate health dashboard.

This package contains modules for fetching live weather and air-quality
readings, scoring them against static regional baselines, tracking the
selected map region and building the side-panel view.  See subpackages for
specific functionality.
"""

__all__ = [
    "paths",
    "config",
    "baselines",
    "scoring",
    "selection",
    "dashboard",
    "utils_geo",
    "ingest",
    "viz",
]
