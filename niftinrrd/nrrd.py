# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""NRRD-style metadata from a decoded NIfTI-1 header

NRRD and NIfTI both store the fastest varying axis first, so axis sizes and
spacings carry over in order.  The orientation is one of two exclusive
groups, decided by the qform code (see :mod:`niftinrrd.orientation`):

* ``spacings`` and ``space_dimension``, for ``qform_code == 0``;
* ``space``, ``space_directions`` and ``space_origin``, for
  ``qform_code > 0``.

For a negative ``qform_code`` neither group is present.
"""
from __future__ import annotations

import typing as ty
from collections import OrderedDict
from dataclasses import dataclass, field

import numpy as np

from .batteryrunners import Reports
from .orientation import QuaternionOrientation, SpacingOrientation, get_orientation

#: NRRD encoding of NIfTI-1 voxel data; NIfTI-1 has no compression of its own
ENCODING = 'raw'


@dataclass(eq=False)
class NrrdMetadata:
    """NRRD header fields, plus voxel data if requested

    Parameters
    ----------
    dimension : int
        number of axes
    type : str or int
        NRRD type name, or the raw NIfTI datatype code if it is unknown
    endian : str
        ``'little'`` or ``'big'``
    sizes : list of int
        axis extents, fastest varying axis first
    thicknesses : list of float
        voxel size per axis, from ``pixdim``
    space_units : None or list of str
        unit per axis, padded with ``''``.  None if the header has no units.
    orientation : None or SpacingOrientation or QuaternionOrientation
    buffer : None or bytes
        copy of the voxel bytes, from ``vox_offset`` to the end of the buffer
    data : None or ndarray or memoryview
        flat array of voxel values
    reports : Reports
        problems found while decoding
    """

    dimension: int
    type: ty.Union[str, int]
    endian: str
    sizes: list
    thicknesses: list
    space_units: ty.Optional[list] = None
    orientation: ty.Union[SpacingOrientation, QuaternionOrientation, None] = None
    buffer: ty.Optional[bytes] = None
    data: ty.Any = None
    reports: Reports = field(default_factory=Reports)
    encoding: str = ENCODING

    @property
    def spacings(self):
        if isinstance(self.orientation, SpacingOrientation):
            return list(self.orientation.spacings)
        return None

    @property
    def space_dimension(self):
        if isinstance(self.orientation, SpacingOrientation):
            return self.orientation.space_dimension
        return None

    @property
    def space(self):
        if isinstance(self.orientation, QuaternionOrientation):
            return self.orientation.space
        return None

    @property
    def space_directions(self):
        if isinstance(self.orientation, QuaternionOrientation):
            return self.orientation.space_directions
        return None

    @property
    def space_origin(self):
        if isinstance(self.orientation, QuaternionOrientation):
            return self.orientation.space_origin
        return None

    def as_nrrd_fields(self):
        """Ordered mapping of NRRD header field names to values

        Only fields with values are included.  Voxel data is not a header
        field, and is left out.
        """
        fields = OrderedDict()
        fields['dimension'] = self.dimension
        fields['type'] = self.type
        fields['encoding'] = self.encoding
        fields['endian'] = self.endian
        fields['sizes'] = list(self.sizes)
        fields['thicknesses'] = list(self.thicknesses)
        optional = (
            ('space units', self.space_units),
            ('spacings', self.spacings),
            ('space dimension', self.space_dimension),
            ('space', self.space),
            ('space directions', self.space_directions),
            ('space origin', self.space_origin),
        )
        for name, value in optional:
            if value is None:
                continue
            if isinstance(value, np.ndarray):
                value = value.tolist()
            fields[name] = value
        return fields


def axis_units(units, dimension):
    """Per-axis unit strings from ``(space, time)`` `units`

    Space units go on the first three axes, the time unit on the fourth;
    the list is then padded with ``''`` or cut to `dimension` entries.

    >>> axis_units(('mm', 's'), 5)
    ['mm', 'mm', 'mm', 's', '']
    >>> axis_units(('mm', ''), 2)
    ['mm', 'mm']
    >>> axis_units(None, 3) is None
    True
    """
    if units is None:
        return None
    space, time = units
    out = [space, space, space, time]
    out += [''] * (dimension - len(out))
    return out[:dimension]


def header_to_nrrd(header, reports=None):
    """Project decoded NIfTI-1 `header` to :class:`NrrdMetadata`

    Parameters
    ----------
    header : :class:`~niftinrrd.nifti1.Nifti1RawHeader`
    reports : None or Reports
        collector for problem reports.  Default is the header's own
        collector.
    """
    if reports is None:
        reports = header.reports
    dim = header.dim
    dimension = dim[0]
    return NrrdMetadata(
        dimension=dimension,
        type=header.datatype,
        endian=header.endian,
        sizes=dim[1:],
        thicknesses=header.pixdim[1:],
        space_units=axis_units(header.xyzt_units, dimension),
        orientation=get_orientation(header, reports),
        reports=reports,
    )
