"""Top-level package for the gem combiner.

Provides subpackages:
- gem_combiner.core – immutable gem model, ranking metric, recipe notation
- gem_combiner.combiner – usage bookkeeping and the fusion workbench
"""

from importlib.metadata import PackageNotFoundError, version as _pkg_version


def _get_version() -> str:
    """Get version from the installed distribution metadata."""
    try:
        return _pkg_version("gem-combiner")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
__all__: list[str] = ["__version__"]
