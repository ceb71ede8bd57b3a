from __future__ import annotations

try:
    from ._version import __version__
except ImportError:
    __version__ = '0+unknown'


def get_pkg_info() -> dict[str, str]:
    """Return dict describing the context of this package

    Returns
    -------
    context : dict
       with named parameters of interest
    """
    import sys

    import numpy

    return dict(
        pkg_version=__version__,
        sys_version=sys.version,
        sys_executable=sys.executable,
        sys_platform=sys.platform,
        np_version=numpy.__version__,
    )
