# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Tests for nifti1 header decoding"""

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from .. import imageglobals
from ..errors import (ByteOrderError, DimensionError, HeaderDataError, HeaderSizeError,
                      MagicError)
from ..nifti1 import Nifti1RawHeader, header_dtype
from ..testing import header_bytes, nifti_bytes


@pytest.fixture(autouse=True)
def quiet_logger():
    with imageglobals.LoggingOutputSuppressor():
        yield


def test_header_layout():
    assert header_dtype.itemsize == 348
    offsets = {name: header_dtype.fields[name][1] for name in header_dtype.names}
    assert offsets['dim_info'] == 39
    assert offsets['dim'] == 40
    assert offsets['intent_p1'] == 56
    assert offsets['intent_p2'] == 60
    assert offsets['intent_p3'] == 64
    assert offsets['datatype'] == 70
    assert offsets['pixdim'] == 76
    assert offsets['vox_offset'] == 108
    assert offsets['xyzt_units'] == 123
    assert offsets['descrip'] == 148
    assert offsets['aux_file'] == 228
    assert offsets['qform_code'] == 252
    assert offsets['quatern_b'] == 256
    assert offsets['srow_x'] == 280
    assert offsets['intent_name'] == 328
    assert offsets['magic'] == 344


def test_from_bytes():
    hdr = Nifti1RawHeader.from_bytes(header_bytes())
    assert hdr.ndim == 3
    assert hdr.dim == [3, 2, 3, 4]
    assert hdr.pixdim == [1.0, 1.0, 1.0, 1.0]
    assert hdr.datatype == 'int16'
    assert hdr.xyzt_units is None
    assert hdr.endian == 'little'
    assert hdr.little_endian
    assert hdr.magic == 'n+1\x00'
    assert hdr.is_single
    assert hdr.vox_offset == 352
    assert hdr.extension == (0, 0, 0, 0)
    assert not hdr.has_extensions
    assert hdr['bitpix'] == 16
    assert hdr.reports == []


def test_byte_order_round_trip():
    fields = dict(dim=[4, 5, 6, 7, 8, 1, 1, 1],
                  pixdim=[-1, 2.5, 3.5, 4.5, 0.5, 1, 1, 1],
                  datatype=16, bitpix=32, xyzt_units=2 | 8,
                  qform_code=1, quatern_b=0.5, qoffset_x=-10,
                  srow_x=[1, 2, 3, 4], intent_p2=2.5,
                  descrip=b'some text', magic=b'ni1')
    le_hdr = Nifti1RawHeader.from_bytes(header_bytes('<', **fields))
    be_hdr = Nifti1RawHeader.from_bytes(header_bytes('>', **fields))
    assert le_hdr.endian == 'little'
    assert be_hdr.endian == 'big'
    assert not be_hdr.little_endian
    assert le_hdr == be_hdr
    for name in ('dim', 'pixdim', 'srow', 'datatype', 'xyzt_units', 'descrip',
                 'magic', 'intent_params', 'vox_offset'):
        assert getattr(le_hdr, name) == getattr(be_hdr, name)
    for name in header_dtype.names:
        assert_array_equal(le_hdr[name], be_hdr[name])
    assert be_hdr.dim == [4, 5, 6, 7, 8]
    assert be_hdr.xyzt_units == ('mm', 's')
    assert be_hdr.reports == []


def test_constructor_detects_order():
    hdr = Nifti1RawHeader(header_bytes('>'))
    assert hdr.endian == 'big'
    assert hdr.dim == [3, 2, 3, 4]
    # Given byte order wins
    hdr = Nifti1RawHeader(header_bytes('<'), 'little')
    assert hdr.endian == 'little'


def test_deterministic():
    block = header_bytes(qform_code=2, quatern_c=0.3)
    hdr1 = Nifti1RawHeader.from_bytes(block)
    hdr2 = Nifti1RawHeader.from_bytes(block)
    assert hdr1 == hdr2
    assert hdr1.dim == hdr2.dim
    assert hdr1.reports == hdr2.reports


def test_buffer_types():
    block = header_bytes()
    for buf in (bytearray(block), memoryview(block), np.frombuffer(block, np.uint8)):
        hdr = Nifti1RawHeader.from_bytes(buf)
        assert hdr.dim == [3, 2, 3, 4]
    # Header does not keep the caller's buffer
    buf = bytearray(block)
    hdr = Nifti1RawHeader.from_bytes(buf)
    buf[70:72] = b'\x10\x00'
    assert hdr['datatype'] == 4


def test_too_short():
    block = header_bytes()
    for n in (0, 100, 347):
        with pytest.raises(HeaderSizeError):
            Nifti1RawHeader.from_bytes(block[:n])


def test_magic():
    hdr = Nifti1RawHeader.from_bytes(header_bytes(magic=b'ni1'))
    assert hdr.magic == 'ni1\x00'
    assert not hdr.is_single
    for magic in (b'', b'n+2', b'ni2', b'n+1 ', b'\x00\x00\x00\x01'):
        with pytest.raises(MagicError):
            Nifti1RawHeader.from_bytes(header_bytes(magic=magic))


def test_dim_truncation():
    block = header_bytes(dim=[4, 2, 3, 0, 5, 1, 1, 1], pixdim=[1, 2, 3, 4, 5, 1, 1, 1])
    hdr = Nifti1RawHeader.from_bytes(block)
    assert hdr.ndim == 2
    assert hdr.dim == [2, 2, 3]
    assert hdr.pixdim == [1.0, 2.0, 3.0]
    assert len(hdr.reports) == 1
    rep = hdr.reports[0]
    assert rep.problem_level == imageglobals.DEGRADED
    assert 'dim[3]' in rep.problem_msg
    assert rep.fix_msg == 'using the first 2 axes'
    # Negative extents also truncate
    hdr = Nifti1RawHeader.from_bytes(header_bytes(dim=[3, 2, -1, 4, 1, 1, 1, 1]))
    assert hdr.dim == [1, 2]
    # In strict mode, truncation is an error
    with imageglobals.ErrorLevel(imageglobals.DEGRADED):
        with pytest.raises(HeaderDataError):
            Nifti1RawHeader.from_bytes(block)


def test_no_valid_dims():
    with pytest.raises(DimensionError):
        Nifti1RawHeader.from_bytes(header_bytes(dim=[3, 0, 3, 4, 1, 1, 1, 1]))
    # dim[0] of 0 is out of range, and leaves no axes
    with pytest.raises(DimensionError):
        Nifti1RawHeader.from_bytes(header_bytes(dim=[0, 2, 3, 4, 1, 1, 1, 1]))


def test_bad_ndim():
    # dim[0] out of range in both byte orders; sizeof_hdr settles the order
    for endian in ('<', '>'):
        hdr = Nifti1RawHeader.from_bytes(header_bytes(endian, dim=[9, 2, 3, 4, 1, 1, 1, 1]))
        assert hdr.endian == ('little' if endian == '<' else 'big')
        # Axis count is limited to 7
        assert hdr.dim == [7, 2, 3, 4, 1, 1, 1, 1]
        assert len(hdr.reports) == 1
        assert 'dim[0] (' in hdr.reports[0].problem_msg


def test_byte_order_failure():
    with pytest.raises(ByteOrderError):
        Nifti1RawHeader.from_bytes(header_bytes(sizeof_hdr=100, dim=[9, 2, 3, 4, 1, 1, 1, 1]))


def test_sizeof_hdr():
    # Too small is fatal
    with pytest.raises(HeaderSizeError):
        Nifti1RawHeader.from_bytes(header_bytes(sizeof_hdr=300))
    # Too large is a warning
    hdr = Nifti1RawHeader.from_bytes(header_bytes('>', sizeof_hdr=540))
    assert hdr.endian == 'big'
    assert hdr.dim == [3, 2, 3, 4]
    assert hdr.reports.messages() == ['sizeof_hdr (540) should be 348; trying to continue']


def test_extension():
    hdr = Nifti1RawHeader.from_bytes(nifti_bytes(extension=(1, 0, 0, 0)))
    assert hdr.extension == (1, 0, 0, 0)
    assert hdr.has_extensions
    hdr = Nifti1RawHeader.from_bytes(nifti_bytes())
    assert hdr.extension == (0, 0, 0, 0)
    assert not hdr.has_extensions
    # Missing extension bytes mean no extensions
    hdr = Nifti1RawHeader.from_bytes(header_bytes())
    assert not hdr.has_extensions


def test_fields():
    hdr = Nifti1RawHeader.from_bytes(header_bytes(
        intent_p1=1, intent_p2=2, intent_p3=3,
        descrip=b'hello', aux_file=b'aux.nii', intent_name=b'name',
        srow_x=[1, 0, 0, -10], srow_y=[0, 2, 0, -20], srow_z=[0, 0, 3, -30],
        xyzt_units=3 | 24))
    assert hdr.intent_params == (1.0, 2.0, 3.0)
    assert hdr.descrip == 'hello'
    assert hdr.aux_file == 'aux.nii'
    assert hdr.intent_name == 'name'
    assert hdr.srow == [1, 0, 0, -10, 0, 2, 0, -20, 0, 0, 3, -30]
    assert hdr.xyzt_units == ('um', 'us')
    # Text is raw character codes
    hdr = Nifti1RawHeader.from_bytes(header_bytes(descrip=b'caf\xe9'))
    assert hdr.descrip == 'caf\xe9'


def test_unknown_datatype():
    hdr = Nifti1RawHeader.from_bytes(header_bytes(datatype=9999))
    assert hdr.datatype == 9999
    assert hdr.reports.messages() == [
        'Unrecognized NIfTI data type: 9999; passing code through as type']


def test_str():
    hdr = Nifti1RawHeader.from_bytes(header_bytes())
    assert 'sizeof_hdr' in str(hdr)


def test_diagnose_clean():
    hdr = Nifti1RawHeader.from_bytes(header_bytes())
    assert hdr.diagnose() == []


def test_diagnose():
    def levels(**fields):
        hdr = Nifti1RawHeader.from_bytes(header_bytes(**fields))
        return [rep.problem_level for rep in hdr.diagnose()]

    assert levels(bitpix=8) == [10]
    # No bitpix check for types without a dtype
    assert levels(datatype=1536, bitpix=8) == []
    assert levels(pixdim=[0.5, 1, 1, 1, 1, 1, 1, 1]) == [20]
    assert levels(pixdim=[0, 1, 1, 1, 1, 1, 1, 1]) == []
    assert levels(pixdim=[-1, 1, 1, 1, 1, 1, 1, 1]) == []
    assert levels(vox_offset=0) == [20]
    assert levels(vox_offset=360) == [10]
    assert levels(vox_offset=368) == []
    # No voxel offset checks for header-only files
    assert levels(vox_offset=0, magic=b'ni1') == []
    assert levels(qform_code=5) == [10]
    assert levels(sform_code=4) == []
    assert levels(sform_code=12) == [10]
    # Negative codes are for the orientation mapper to report
    assert levels(qform_code=-1) == []
    hdr = Nifti1RawHeader.from_bytes(header_bytes(bitpix=8))
    rep = hdr.diagnose()[0]
    assert rep.problem_msg == 'bitpix (8) does not match datatype (16)'
    assert rep.error is HeaderDataError
    # Checks do not change the header
    assert hdr['bitpix'] == 8
