# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Utilities for testing: NIfTI-1 buffers built in memory"""

import numpy as np

from .codes import data_type_codes
from .nifti1 import header_dtype


def header_fields(endian='<', **fields):
    """Structured scalar for a valid single file int16 header

    The defaults describe a 2 x 3 x 4 int16 image, unit voxel sizes, data at
    byte 352.  Keyword arguments replace field values.
    """
    hdr = np.zeros((), dtype=header_dtype.newbyteorder(endian))
    hdr['sizeof_hdr'] = 348
    hdr['dim'] = [3, 2, 3, 4, 1, 1, 1, 1]
    hdr['pixdim'] = [1, 1, 1, 1, 1, 1, 1, 1]
    hdr['datatype'] = 4
    hdr['bitpix'] = 16
    hdr['vox_offset'] = 352
    hdr['magic'] = b'n+1'
    for name, value in fields.items():
        hdr[name] = value
    return hdr


def header_bytes(endian='<', **fields):
    """348 header bytes; see :func:`header_fields`"""
    return header_fields(endian, **fields).tobytes()


def nifti_bytes(data=None, endian='<', extension=(0, 0, 0, 0), **fields):
    """Header, extension flag and `data` in byte order `endian`

    With `data` given, ``dim``, ``datatype`` and ``bitpix`` default to match
    it; `data` is written first axis fastest.
    """
    if data is not None:
        data = np.asarray(data)
        fields.setdefault('dim', [data.ndim] + list(data.shape) + [1] * (7 - data.ndim))
        fields.setdefault('datatype', _datatype_code(data.dtype))
        fields.setdefault('bitpix', data.dtype.itemsize * 8)
    block = header_bytes(endian, **fields) + np.array(extension, dtype=np.int8).tobytes()
    if data is None:
        return block
    stored = data.astype(data.dtype.newbyteorder(endian))
    return block + stored.tobytes(order='F')


def _datatype_code(dtype):
    for code in sorted(data_type_codes.value_set()):
        code_dtype = data_type_codes.dtype[code]
        if code_dtype is not None and code_dtype == dtype.newbyteorder('='):
            return code
    raise ValueError(f'No NIfTI datatype for {dtype}')
