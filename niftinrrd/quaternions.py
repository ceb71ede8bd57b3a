# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Quaternion functions for the NIfTI-1 qform

Quaternions here are 4 element sequences ``(a, b, c, d)`` with ``a`` the real
(scalar) part.  NIfTI-1 headers store only ``b, c, d``; ``a`` is implied by
the quaternion being a unit quaternion with ``a >= 0``.
"""
import numpy as np


def fillpositive(bcd):
    """Compute unit quaternion from last 3 values

    Parameters
    ----------
    bcd : iterable
       iterable containing 3 values, corresponding to quaternion b, c, d

    Returns
    -------
    abcd : array shape (4,)
         Full 4 values of quaternion

    Notes
    -----
    ``a = sqrt(1 - b**2 - c**2 - d**2)``, where rounding error (or a bad
    header) that makes the sum of squares bigger than one gives ``a = 0``.

    Examples
    --------
    >>> fillpositive([0, 0, 0])
    array([1., 0., 0., 0.])
    >>> fillpositive([1, 0, 0])
    array([0., 1., 0., 0.])
    >>> fillpositive([1, 1, 0])
    array([0., 1., 1., 0.])
    """
    if len(bcd) != 3:
        raise ValueError('bcd should have length 3')
    bcd = np.asarray(bcd, dtype=np.float64)
    a = np.sqrt(max(0.0, 1.0 - bcd @ bcd))
    return np.r_[a, bcd]


def quat2mat(q):
    """Calculate rotation matrix corresponding to quaternion

    Parameters
    ----------
    q : 4 element array-like
       quaternion ``(a, b, c, d)``

    Returns
    -------
    M : (3,3) array
      Rotation matrix corresponding to input quaternion *q*

    Notes
    -----
    The quaternion is not normalized first, so a quaternion that is not a
    unit quaternion gives a matrix that is not a rotation, just as in the
    NIfTI-1 reference code.

    Examples
    --------
    >>> M = quat2mat([1, 0, 0, 0]) # Identity quaternion
    >>> np.allclose(M, np.eye(3))
    True
    >>> M = quat2mat([0, 1, 0, 0]) # 180 degree rotn around axis 0
    >>> np.allclose(M, np.diag([1, -1, -1]))
    True
    """
    a, b, c, d = (float(v) for v in q)
    return np.array([
        [a * a + b * b - c * c - d * d, 2 * (b * c - a * d), 2 * (b * d + a * c)],
        [2 * (b * c + a * d), a * a + c * c - b * b - d * d, 2 * (c * d - a * b)],
        [2 * (b * d - a * c), 2 * (c * d + a * b), a * a + d * d - c * c - b * b],
    ])
