# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Entry points: decode NIfTI-1 bytes to NRRD metadata"""
import gzip
import math
from os.path import splitext

from . import imageglobals
from .batteryrunners import Reports
from .errors import VoxelOffsetError
from .nifti1 import Nifti1RawHeader
from .nrrd import header_to_nrrd
from .payload import BLOCK_TYPE, materialize

# datatype code with no type; voxel bytes are kept but not typed
DT_UNKNOWN = 0


def parse_header(buffer):
    """Decode NIfTI-1 header in `buffer` to NRRD metadata

    Parameters
    ----------
    buffer : bytes-like
        at least the 348 header bytes

    Returns
    -------
    meta : :class:`~niftinrrd.nrrd.NrrdMetadata`
        metadata without voxel data.  ``meta.reports`` has any problems found
        while decoding.
    """
    reports = Reports()
    header = Nifti1RawHeader.from_bytes(buffer, reports)
    _add_diagnostics(header, reports)
    return header_to_nrrd(header, reports)


def parse(buffer, block_size=None):
    """Decode NIfTI-1 header and voxel data in `buffer`

    Voxel data is only present for single file images (magic ``n+1``).
    For those, ``meta.buffer`` is a copy of the bytes from ``vox_offset``
    on, and ``meta.data`` the flat array of voxel values, or None if the
    datatype cannot be materialized.

    Parameters
    ----------
    buffer : bytes-like
        whole ``.nii`` file contents, or just the header
    block_size : None or int, optional
        bytes per voxel for images with datatype 0 (unknown).  If given,
        ``meta.data`` is the raw bytes of the voxel blocks.

    Returns
    -------
    meta : :class:`~niftinrrd.nrrd.NrrdMetadata`

    Raises
    ------
    VoxelOffsetError
        if ``vox_offset`` is less than 352 or past the end of `buffer`
    """
    reports = Reports()
    header = Nifti1RawHeader.from_bytes(buffer, reports)
    _add_diagnostics(header, reports)
    meta = header_to_nrrd(header, reports)
    if header.has_extensions:
        reports.add(imageglobals.DEGRADED,
                    'Header extensions are in use; they are all ignored',
                    None)
    if not header.is_single:
        return meta
    mv = memoryview(buffer).cast('B')
    vox_offset = header.vox_offset
    if not header.single_vox_offset <= vox_offset <= mv.nbytes:
        raise VoxelOffsetError(
            f'Illegal vox_offset {vox_offset:g} for buffer of {mv.nbytes} bytes'
        )
    voxels = mv[math.floor(vox_offset):]
    meta.buffer = voxels.tobytes()
    type_name = meta.type
    if type_name == DT_UNKNOWN:
        if block_size is None:
            return meta
        type_name = BLOCK_TYPE
    meta.data = materialize(voxels, type_name, meta.sizes, meta.endian,
                            block_size=block_size, reports=reports)
    return meta


def _add_diagnostics(header, reports):
    for rep in header.diagnose():
        reports.add(rep.problem_level, rep.problem_msg, rep.error, rep.fix_msg)


def _read_file(filename):
    with _open(filename) as fobj:
        return fobj.read()


def parse_header_file(filename):
    """:func:`parse_header` for the contents of `filename`

    Files ending in ``.gz`` are decompressed on the fly.
    """
    with _open(filename) as fobj:
        return parse_header(fobj.read(Nifti1RawHeader.sizeof_hdr + 4))


def parse_file(filename, block_size=None):
    """:func:`parse` for the contents of `filename`"""
    return parse(_read_file(filename), block_size)


def _open(filename):
    if splitext(filename)[1] == '.gz':
        return gzip.open(filename, 'rb')
    return open(filename, 'rb')
