# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Exceptions raised when a buffer cannot be decoded

Every error is fatal for the call that raised it: no partial result is
returned.  Recoverable problems never raise by default; they are recorded as
:class:`~niftinrrd.batteryrunners.Report` objects instead.
"""


class NiftiNrrdError(Exception):
    """Base class for errors raised by niftinrrd"""


class HeaderDataError(NiftiNrrdError):
    """Class to indicate error in getting or setting header data"""


class HeaderSizeError(HeaderDataError):
    """Buffer or declared header size too small for a NIfTI-1 header"""


class ByteOrderError(HeaderDataError):
    """Byte order of the header cannot be determined"""


class MagicError(HeaderDataError):
    """Magic string is not one of the NIfTI-1 markers"""


class DimensionError(HeaderDataError):
    """No valid axis extents in the ``dim`` field"""


class VoxelOffsetError(HeaderDataError):
    """``vox_offset`` points outside the buffer holding the image"""


class DataSizeError(NiftiNrrdError):
    """Buffer too short for the voxel data described by the header"""


class DataTypeError(NiftiNrrdError):
    """Voxel data of a type that cannot be read as numbers"""
