# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""NIfTI-1 code tables and their translation to NRRD names

The datatype labels are the type names used in the NRRD output.  Datatypes
without a numpy type that is the same on every platform have a ``None``
dtype; their header still decodes, but their voxel data is not materialized.
"""
import numpy as np

from . import imageglobals
from .batteryrunners import Reports
from .errors import HeaderDataError
from .volumeutils import Recoder, make_dt_codes

_dtdefs = (  # code, label, dtype definition, niistring
    (1, 'bit', None, 'NIFTI_TYPE_BINARY'),
    (2, 'uint8', np.uint8, 'NIFTI_TYPE_UINT8'),
    (4, 'int16', np.int16, 'NIFTI_TYPE_INT16'),
    (8, 'int32', np.int32, 'NIFTI_TYPE_INT32'),
    (16, 'float', np.float32, 'NIFTI_TYPE_FLOAT32'),
    (32, 'complex64', np.complex64, 'NIFTI_TYPE_COMPLEX64'),
    (64, 'double', np.float64, 'NIFTI_TYPE_FLOAT64'),
    (128, 'rgb24', np.dtype([('R', 'u1'), ('G', 'u1'), ('B', 'u1')]), 'NIFTI_TYPE_RGB24'),
    (256, 'int8', np.int8, 'NIFTI_TYPE_INT8'),
    (512, 'uint16', np.uint16, 'NIFTI_TYPE_UINT16'),
    (768, 'uint32', np.uint32, 'NIFTI_TYPE_UINT32'),
    (1024, 'int64', np.int64, 'NIFTI_TYPE_INT64'),
    (1280, 'uint64', np.uint64, 'NIFTI_TYPE_UINT64'),
    (1536, 'float128', None, 'NIFTI_TYPE_FLOAT128'),
    (1792, 'complex128', np.complex128, 'NIFTI_TYPE_COMPLEX128'),
    (2048, 'complex256', None, 'NIFTI_TYPE_COMPLEX256'),
    (2304, 'rgba32', np.dtype([('R', 'u1'), ('G', 'u1'), ('B', 'u1'), ('A', 'u1')]),
     'NIFTI_TYPE_RGBA32'),
)

data_type_codes = make_dt_codes(_dtdefs)

# Transform (qform, sform) codes
xform_codes = Recoder((  # code, label, niistring
    (0, 'unknown', 'NIFTI_XFORM_UNKNOWN'),
    (1, 'scanner', 'NIFTI_XFORM_SCANNER_ANAT'),
    (2, 'aligned', 'NIFTI_XFORM_ALIGNED_ANAT'),
    (3, 'talairach', 'NIFTI_XFORM_TALAIRACH'),
    (4, 'mni', 'NIFTI_XFORM_MNI_152')), fields=('code', 'label', 'niistring'))

# xyzt_units, low 3 bits; labels are NRRD unit strings
space_unit_codes = Recoder((  # code, label, niistring
    (0, '', 'NIFTI_UNITS_UNKNOWN'),
    (1, 'm', 'NIFTI_UNITS_METER'),
    (2, 'mm', 'NIFTI_UNITS_MM'),
    (3, 'um', 'NIFTI_UNITS_MICRON')), fields=('code', 'label', 'niistring'))

# xyzt_units, bits 3 to 5
time_unit_codes = Recoder((  # code, label, niistring
    (0, '', 'NIFTI_UNITS_UNKNOWN'),
    (8, 's', 'NIFTI_UNITS_SEC'),
    (16, 'ms', 'NIFTI_UNITS_MSEC'),
    (24, 'us', 'NIFTI_UNITS_USEC'),
    (32, 'Hz', 'NIFTI_UNITS_HZ'),
    (40, 'ppm', 'NIFTI_UNITS_PPM'),
    (48, 'rad/s', 'NIFTI_UNITS_RADS')), fields=('code', 'label', 'niistring'))

SPACE_UNIT_MASK = 0x07
TIME_UNIT_MASK = 0x38


def decode_datatype(code, reports=None):
    """Return NRRD type name for NIfTI datatype `code`

    Unknown codes are passed through unchanged, with a report.

    Parameters
    ----------
    code : int
        ``datatype`` field of the header
    reports : None or :class:`~niftinrrd.batteryrunners.Reports`
        collector for the problem report.  A new one is used if None.

    Returns
    -------
    name : str or int
        type name, or `code` itself if it is not a known datatype

    Examples
    --------
    >>> decode_datatype(64)
    'double'
    >>> decode_datatype(2304)
    'rgba32'
    """
    code = int(code)
    if code in data_type_codes.value_set():
        return data_type_codes.label[code]
    if reports is None:
        reports = Reports()
    reports.add(imageglobals.DEGRADED,
                f'Unrecognized NIfTI data type: {code}',
                HeaderDataError,
                fix_msg='passing code through as type')
    return code


def decode_units(code, reports=None):
    """Return ``(space, time)`` unit strings for ``xyzt_units`` `code`

    Out of range unit codes decode to ``''`` with a report.  If both units
    are ``''``, there is no unit information at all, and we return None.

    Examples
    --------
    >>> decode_units(2 | 16)
    ('mm', 'ms')
    >>> decode_units(0) is None
    True
    """
    if reports is None:
        reports = Reports()
    code = int(code)
    space = _decode_unit(space_unit_codes, code & SPACE_UNIT_MASK, reports)
    time = _decode_unit(time_unit_codes, code & TIME_UNIT_MASK, reports)
    if space == '' and time == '':
        return None
    return space, time


def _decode_unit(recoder, masked, reports):
    if masked in recoder.value_set():
        return recoder.label[masked]
    reports.add(imageglobals.DEGRADED,
                f'Unrecognized NIfTI unit: {masked}',
                HeaderDataError,
                fix_msg='using no unit')
    return ''


def xform_label(code):
    """Label for qform / sform `code`, or ``'invalid'``

    >>> xform_label(4)
    'mni'
    >>> xform_label(-1)
    'invalid'
    """
    code = int(code)
    if code in xform_codes.value_set():
        return xform_codes.label[code]
    return 'invalid'
