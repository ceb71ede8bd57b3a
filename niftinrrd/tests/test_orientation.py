# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Tests for orientation from the qform"""

import numpy as np
import pytest
from numpy.testing import assert_array_almost_equal, assert_array_equal

from .. import imageglobals
from ..batteryrunners import Reports
from ..errors import HeaderDataError
from ..nifti1 import Nifti1RawHeader
from ..orientation import (RAS_SPACE, QuaternionOrientation, SpacingOrientation, get_orientation,
                           get_qfac, qform_directions)
from ..testing import header_bytes

PIXDIM = [1, 2, 3, 4, 5, 1, 1, 1]


def _header(**fields):
    fields.setdefault('pixdim', PIXDIM)
    return Nifti1RawHeader.from_bytes(header_bytes(**fields))


def test_get_qfac():
    assert get_qfac(0) == 1
    assert get_qfac(1) == 1
    assert get_qfac(-1) == -1
    assert get_qfac(np.float32(-1)) == -1


def test_spacing_orientation():
    reports = Reports()
    orient = get_orientation(_header(), reports)
    assert isinstance(orient, SpacingOrientation)
    assert orient.method == 'spacing'
    assert orient.spacings == (2.0, 3.0, 4.0)
    assert orient.space_dimension == 3
    assert reports == []
    # 4D image, spacing for each axis, at most 3 space dimensions
    orient = get_orientation(_header(dim=[4, 2, 3, 4, 5, 1, 1, 1]))
    assert orient.spacings == (2.0, 3.0, 4.0, 5.0)
    assert orient.space_dimension == 3
    # 2D image
    orient = get_orientation(_header(dim=[2, 2, 3, 1, 1, 1, 1, 1]))
    assert orient.spacings == (2.0, 3.0)
    assert orient.space_dimension == 2


def test_identity_quaternion():
    hdr = _header(qform_code=1, pixdim=[-1, 2, 3, 4, 1, 1, 1, 1],
                  qoffset_x=-10, qoffset_y=20.5, qoffset_z=30)
    orient = get_orientation(hdr)
    assert isinstance(orient, QuaternionOrientation)
    assert orient.method == 'quaternion'
    assert orient.space == RAS_SPACE == 'right-anterior-superior'
    assert_array_equal(orient.space_directions, np.diag([2, 3, -4]))
    assert_array_equal(orient.space_origin, [-10, 20.5, 30])
    assert orient.space_directions.shape == (3, 3)
    assert orient.space_origin.shape == (3,)
    # qfac of 0 means 1
    orient = get_orientation(_header(qform_code=1, pixdim=[0, 2, 3, 4, 1, 1, 1, 1]))
    assert_array_equal(orient.space_directions, np.diag([2, 3, 4]))


def test_rotations():
    # 180 degrees around the first axis
    orient = get_orientation(_header(qform_code=2, quatern_b=1))
    assert_array_equal(orient.space_directions, np.diag([2, -3, -4]))
    # 90 degrees around the third axis; rows are the voxel axis directions
    c = np.sqrt(0.5)
    orient = get_orientation(_header(qform_code=1, quatern_d=c))
    assert_array_almost_equal(orient.space_directions,
                              [[0, 2, 0], [-3, 0, 0], [0, 0, 4]])


def test_short_pixdim():
    # Voxel sizes for the matrix come from the full pixdim field
    hdr = _header(qform_code=1, dim=[2, 2, 3, 1, 1, 1, 1, 1])
    assert hdr.pixdim == [1.0, 2.0, 3.0]
    orient = get_orientation(hdr)
    assert_array_equal(orient.space_directions, np.diag([2, 3, 4]))


def test_qform_directions():
    assert_array_equal(qform_directions([0, 0, 0], [1, 1, 1]), np.eye(3))
    assert_array_equal(qform_directions([0, 0, 0], [1, 1, 1], -1), np.diag([1, 1, -1]))
    # Caller's zooms are not modified
    zooms = np.array([1., 2, 3])
    qform_directions([0, 0, 0], zooms, -1)
    assert_array_equal(zooms, [1, 2, 3])


def test_negative_qform():
    reports = Reports()
    with imageglobals.LoggingOutputSuppressor():
        assert get_orientation(_header(qform_code=-1), reports) is None
    assert len(reports) == 1
    assert reports[0].problem_level == imageglobals.DEGRADED
    assert 'Invalid qform_code: -1' in reports[0].problem_msg
    with imageglobals.LoggingOutputSuppressor():
        with imageglobals.ErrorLevel(imageglobals.DEGRADED):
            with pytest.raises(HeaderDataError):
                get_orientation(_header(qform_code=-1))


def test_sform_info():
    reports = Reports()
    orient = get_orientation(_header(sform_code=2, srow_x=[1, 0, 0, 5]), reports)
    # sform is noted, and does not change the qform result
    assert isinstance(orient, SpacingOrientation)
    assert len(reports) == 1
    rep = reports[0]
    assert rep.problem_level == imageglobals.INFO
    assert rep.error is None
    assert 'sform (aligned, code 2)' in rep.problem_msg
    # Informational reports never raise, even in strict mode
    with imageglobals.ErrorLevel(imageglobals.INFO):
        orient = get_orientation(_header(qform_code=1, sform_code=1))
    assert isinstance(orient, QuaternionOrientation)
    # Both transforms invalid or unused
    reports = Reports()
    with imageglobals.LoggingOutputSuppressor():
        assert get_orientation(_header(qform_code=-2, sform_code=1), reports) is None
    assert [rep.problem_level for rep in reports] == [30, 20]
