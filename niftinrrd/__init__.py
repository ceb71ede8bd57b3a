# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##

from .info import long_description as __doc__

__doc__ += """
Quickstart
==========

::

   import niftinrrd as nn

   with open('my_file.nii', 'rb') as fobj:
       meta = nn.parse(fobj.read())

   print(meta.sizes, meta.space_directions)
   data = nn.reshape_payload(meta.data, meta.sizes)

   if meta.reports.degraded:
       print(meta.reports.messages())
"""

# module imports
from . import errors, imageglobals

# isort: split

# object imports
from .batteryrunners import Report, Reports
from .errors import (
    ByteOrderError,
    DataSizeError,
    DataTypeError,
    DimensionError,
    HeaderDataError,
    HeaderSizeError,
    MagicError,
    NiftiNrrdError,
    VoxelOffsetError,
)
from .imageglobals import ErrorLevel
from .loadsave import parse, parse_file, parse_header, parse_header_file
from .nifti1 import Nifti1RawHeader
from .nrrd import NrrdMetadata
from .payload import reshape_payload
from .pkg_info import __version__

# isort: split

from .pkg_info import get_pkg_info as _get_pkg_info


def get_info():
    return _get_pkg_info()


def test(label=None, verbose=1, extra_argv=None, doctests=False, coverage=False):
    """
    Run tests for niftinrrd using pytest

    Parameters
    ----------
    label : None
        Unused.
    verbose: int, optional
        Verbosity value for test outputs. Positive values increase verbosity, and
        negative values decrease it. Default is 1.
    extra_argv : list, optional
        List with any extra arguments to pass to pytest.
    doctests: bool, optional
        If True, run doctests in module. Default is False.
    coverage: bool, optional
        If True, report coverage of niftinrrd code. Default is False.

    Returns
    -------
    code : ExitCode
        Returns the result of running the tests as a ``pytest.ExitCode`` enum
    """
    import pytest

    args = []

    if label is not None:
        raise NotImplementedError("Labels cannot be set at present")

    verbose = int(verbose)
    if verbose > 0:
        args.append("-" + "v" * verbose)
    elif verbose < 0:
        args.append("-" + "q" * -verbose)

    if extra_argv:
        args.extend(extra_argv)
    if doctests:
        args.append("--doctest-modules")
    if coverage:
        args.extend(["--cov", "niftinrrd"])

    args.extend(["--pyargs", "niftinrrd"])

    return pytest.main(args=args)
