# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Orientation of the voxel grid from the NIfTI-1 qform

NIfTI-1 has three ways of relating voxel indices to world coordinates:

* method 1 (``qform_code == 0``): no rotation; only the voxel sizes in
  ``pixdim`` are known.  We return a :class:`SpacingOrientation`.
* method 2 (``qform_code > 0``): a rotation from the quaternion
  ``quatern_b, c, d``, voxel sizes, the ``qfac`` sign in ``pixdim[0]`` and
  the offsets ``qoffset_x, y, z``.  We return a
  :class:`QuaternionOrientation` in right-anterior-superior space.
* method 3 (``sform_code > 0``): a general affine in ``srow_x, y, z``.  An
  NRRD header can only hold one transform, and it comes from the qform, so
  the sform is reported but never used.

A negative ``qform_code`` is invalid, and we return None for the
orientation.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from . import imageglobals
from .batteryrunners import Reports
from .codes import xform_label
from .errors import HeaderDataError
from .quaternions import fillpositive, quat2mat

RAS_SPACE = 'right-anterior-superior'


@dataclass(frozen=True)
class SpacingOrientation:
    """Axis spacings only, without directions

    ``spacings`` has one entry per axis, padded with NaN where the header has
    no spacing for the axis.  ``space_dimension`` is the number of spatial
    axes, at most 3.
    """

    spacings: tuple
    space_dimension: int

    method = 'spacing'


@dataclass(frozen=True, eq=False)
class QuaternionOrientation:
    """Axis directions and origin from the qform

    Row ``i`` of ``space_directions`` is the world vector for one step along
    voxel axis ``i``; its length is the voxel size along that axis.
    """

    space_directions: np.ndarray
    space_origin: np.ndarray
    space: str = RAS_SPACE

    method = 'quaternion'


def get_qfac(pixdim0):
    """qfac from ``pixdim[0]``, where 0 means 1

    >>> get_qfac(0), get_qfac(-1)
    (1.0, -1.0)
    """
    return 1.0 if pixdim0 == 0 else float(pixdim0)


def qform_directions(bcd, zooms, qfac=1.0):
    """Space direction rows from quaternion `bcd` and voxel sizes `zooms`

    Parameters
    ----------
    bcd : sequence
        quaternion ``b, c, d`` parameters
    zooms : sequence
        voxel sizes for the first three axes
    qfac : float, optional
        sign applied to the third voxel size

    Returns
    -------
    directions : (3, 3) array
        row ``i`` is the direction of voxel axis ``i``, scaled by its size

    Examples
    --------
    >>> qform_directions([0, 0, 0], [2, 3, 4], -1)
    array([[ 2.,  0.,  0.],
           [ 0.,  3.,  0.],
           [ 0.,  0., -4.]])
    """
    R = quat2mat(fillpositive(bcd))
    vox = np.array(zooms, dtype=np.float64)
    vox[2] *= qfac
    return (R @ np.diag(vox)).T


def get_orientation(header, reports=None):
    """Orientation for decoded NIfTI-1 `header`

    Parameters
    ----------
    header : :class:`~niftinrrd.nifti1.Nifti1RawHeader`
    reports : None or :class:`~niftinrrd.batteryrunners.Reports`
        collector for problem reports

    Returns
    -------
    orientation : SpacingOrientation or QuaternionOrientation or None
        None if ``qform_code`` is negative
    """
    if reports is None:
        reports = Reports()
    qform_code = int(header['qform_code'])
    if qform_code == 0:
        orientation = _spacing_orientation(header)
    elif qform_code > 0:
        orientation = _quaternion_orientation(header)
    else:
        reports.add(imageglobals.DEGRADED,
                    f'Invalid qform_code: {qform_code}, orientation is probably messed up',
                    HeaderDataError,
                    fix_msg='leaving orientation out')
        orientation = None
    sform_code = int(header['sform_code'])
    if sform_code > 0:
        reports.add(imageglobals.INFO,
                    f'sform ({xform_label(sform_code)}, code {sform_code}) is '
                    'not translated; only the qform gives orientation',
                    None)
    return orientation


def _spacing_orientation(header):
    ndim = header.ndim
    spacings = header.pixdim[1:]
    spacings += [np.nan] * (ndim - len(spacings))
    return SpacingOrientation(tuple(spacings), min(ndim, 3))


def _quaternion_orientation(header):
    hdr = header.structarr
    bcd = [hdr['quatern_b'], hdr['quatern_c'], hdr['quatern_d']]
    # All three voxel sizes exist in pixdim, whatever the number of axes
    zooms = hdr['pixdim'][1:4]
    directions = qform_directions(bcd, zooms, get_qfac(hdr['pixdim'][0]))
    origin = np.array([hdr['qoffset_x'], hdr['qoffset_y'], hdr['qoffset_z']],
                      dtype=np.float64)
    return QuaternionOrientation(directions, origin)
