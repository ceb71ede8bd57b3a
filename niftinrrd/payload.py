# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Typed voxel arrays from the bytes following the header

Voxel data comes back as a flat numpy array, first axis varying fastest, as
it is stored.  If the data has the platform byte order, or has one byte
elements, the array is a read-only view on the caller's buffer; otherwise it
is a native byte order copy.
"""
import numpy as np

from . import imageglobals
from .batteryrunners import Reports
from .codes import data_type_codes
from .endiancodes import endian_codes, system_endianness
from .errors import DataSizeError, DataTypeError
from .volumeutils import n_elements

#: NRRD type name for voxel blocks of a size given by the caller
BLOCK_TYPE = 'block'


def type_dtype(type_name):
    """numpy dtype for NRRD `type_name`, None if not supported

    >>> type_dtype('int16')
    dtype('int16')
    >>> type_dtype('float128') is None
    True
    >>> type_dtype(9999) is None
    True
    """
    try:
        return data_type_codes.dtype[type_name]
    except (KeyError, TypeError):
        return None


def materialize(buffer, type_name, sizes, endian, block_size=None, reports=None):
    """Array of voxel values of `type_name` from the start of `buffer`

    Parameters
    ----------
    buffer : bytes-like
        voxel bytes; may be longer than needed
    type_name : str or int
        NRRD type name from the header, or ``'block'``.  An int is an
        unrecognized datatype code.
    sizes : sequence of int
        axis extents, not including the axis count
    endian : str
        byte order of `buffer`, any endian code (``'little'``, ``'<'`` ...)
    block_size : None or int, optional
        number of bytes per voxel for ``'block'`` data
    reports : None or :class:`~niftinrrd.batteryrunners.Reports`
        collector for problem reports

    Returns
    -------
    data : None or ndarray or memoryview
        flat array of ``prod(sizes)`` values.  For ``'block'`` data, a
        memoryview of the bytes.  None, with a report, for types we cannot
        materialize.

    Raises
    ------
    DataSizeError
        if `buffer` is too short for ``prod(sizes)`` values or blocks
    """
    if reports is None:
        reports = Reports()
    n_values = n_elements(sizes)
    mv = memoryview(buffer).cast('B')
    if type_name == BLOCK_TYPE:
        if block_size is None:
            raise ValueError('Need block_size for block data')
        n_bytes = n_values * block_size
        _check_bytes(mv, n_bytes, f'{n_values} blocks of {block_size} bytes')
        return mv[:n_bytes]
    dtype = type_dtype(type_name)
    if dtype is None:
        reports.add(imageglobals.DEGRADED,
                    f'Unsupported NIfTI type: {type_name}',
                    DataTypeError,
                    fix_msg='leaving voxel data out')
        return None
    endian_code = endian_codes[endian]
    if dtype.itemsize == 1 or endian_codes.label[endian_code] == system_endianness:
        return _direct(mv, dtype, n_values)
    return _swapped(mv, dtype.newbyteorder(endian_code), n_values)


def _check_bytes(mv, n_bytes, what):
    if mv.nbytes < n_bytes:
        raise DataSizeError(
            f'Buffer of {mv.nbytes} bytes does not contain enough data for '
            f'{what} ({n_bytes} bytes)'
        )


def _check_size(mv, dtype, n_values):
    _check_bytes(mv, n_values * dtype.itemsize, f'{n_values} values of {dtype}')


def _direct(mv, dtype, n_values):
    _check_size(mv, dtype, n_values)
    return np.frombuffer(mv, dtype=dtype, count=n_values)


def _swapped(mv, dtype, n_values):
    # Read each element in its stored byte order, into a native order copy
    _check_size(mv, dtype, n_values)
    stored = np.frombuffer(mv, dtype=dtype, count=n_values)
    return stored.astype(dtype.newbyteorder('='))


def reshape_payload(data, sizes):
    """N-d view of flat voxel `data`, first axis varying fastest

    >>> reshape_payload(np.arange(6), [2, 3])
    array([[0, 2, 4],
           [1, 3, 5]])
    """
    return np.reshape(data, tuple(sizes), order='F')
