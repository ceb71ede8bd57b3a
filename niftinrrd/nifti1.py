# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Decode the NIfTI-1 header from a binary buffer

NIfTI1 format defined at http://nifti.nimh.nih.gov/nifti-1/

The header is the first 348 bytes of a ``.nii`` file (magic ``n+1``) or the
whole of a ``.hdr`` file (magic ``ni1``).  Nothing in the header says which
byte order it was written in, so we guess it from the ``dim[0]`` and
``sizeof_hdr`` fields, recovering where we can.
"""
import numpy as np

from . import imageglobals
from .batteryrunners import BatteryRunner, Report, Reports
from .codes import decode_datatype, decode_units, xform_codes, data_type_codes
from .endiancodes import endian_codes
from .errors import (ByteOrderError, DimensionError, HeaderDataError,
                     HeaderSizeError, MagicError)
from .wrapstruct import WrapStruct

# nifti1 flat header definition for Analyze-like first 348 bytes
# first number in comments indicates offset in file header in bytes
header_dtd = [
    ('sizeof_hdr', 'i4'),      # 0; must be 348
    ('data_type', 'S10'),      # 4; unused
    ('db_name', 'S18'),        # 14; unused
    ('extents', 'i4'),         # 32; unused
    ('session_error', 'i2'),   # 36; unused
    ('regular', 'S1'),         # 38; unused
    ('dim_info', 'i1'),        # 39; MRI slice ordering code
    ('dim', 'i2', (8,)),       # 40; data array dimensions
    ('intent_p1', 'f4'),       # 56; first intent parameter
    ('intent_p2', 'f4'),       # 60; second intent parameter
    ('intent_p3', 'f4'),       # 64; third intent parameter
    ('intent_code', 'i2'),     # 68; NIFTI intent code
    ('datatype', 'i2'),        # 70; it's the datatype
    ('bitpix', 'i2'),          # 72; number of bits per voxel
    ('slice_start', 'i2'),     # 74; first slice index
    ('pixdim', 'f4', (8,)),    # 76; grid spacings (units below)
    ('vox_offset', 'f4'),      # 108; offset to data in image file
    ('scl_slope', 'f4'),       # 112; data scaling slope
    ('scl_inter', 'f4'),       # 116; data scaling intercept
    ('slice_end', 'i2'),       # 120; last slice index
    ('slice_code', 'i1'),      # 122; slice timing order
    ('xyzt_units', 'u1'),      # 123; units of pixdim[1..4]
    ('cal_max', 'f4'),         # 124; max display intensity
    ('cal_min', 'f4'),         # 128; min display intensity
    ('slice_duration', 'f4'),  # 132; time for 1 slice
    ('toffset', 'f4'),         # 136; time axis shift
    ('glmax', 'i4'),           # 140; unused
    ('glmin', 'i4'),           # 144; unused
    ('descrip', 'S80'),        # 148; any text
    ('aux_file', 'S24'),       # 228; auxiliary filename
    ('qform_code', 'i2'),      # 252; xform code
    ('sform_code', 'i2'),      # 254; xform code
    ('quatern_b', 'f4'),       # 256; quaternion b param
    ('quatern_c', 'f4'),       # 260; quaternion c param
    ('quatern_d', 'f4'),       # 264; quaternion d param
    ('qoffset_x', 'f4'),       # 268; quaternion x shift
    ('qoffset_y', 'f4'),       # 272; quaternion y shift
    ('qoffset_z', 'f4'),       # 276; quaternion z shift
    ('srow_x', 'f4', (4,)),    # 280; 1st row affine transform
    ('srow_y', 'f4', (4,)),    # 296; 2nd row affine transform
    ('srow_z', 'f4', (4,)),    # 312; 3rd row affine transform
    ('intent_name', 'S16'),    # 328; name or meaning of data
    ('magic', 'S4'),           # 344; must be 'ni1\0' or 'n+1\0'
]

# Full header numpy dtype
header_dtype = np.dtype(header_dtd)

MAX_AXES = 7


def _flipped(code):
    return '>' if code == '<' else '<'


def _valid_ndim(ndim):
    return 1 <= ndim <= MAX_AXES


class Nifti1RawHeader(WrapStruct):
    """Decoded NIfTI-1 header

    Build with :meth:`from_bytes`, which applies the byte order detection
    and recovery rules, and collects problem reports.  Field values are
    available by name, as for a mapping; the ``dim`` and ``pixdim`` properties
    give the axis lists after any truncation for invalid extents.

    The header holds no reference to the buffer it was decoded from.
    """
    template_dtype = header_dtype
    sizeof_hdr = 348

    # Magics for single and pair
    pair_magic = b'ni1\x00'
    single_magic = b'n+1\x00'

    # Minimum voxel offset for single file
    single_vox_offset = 352

    def __init__(self, binaryblock, endianness=None, extension=(0, 0, 0, 0), reports=None):
        """Decode header fields from 348-byte `binaryblock`

        Use :meth:`from_bytes` to decode from the start of a longer buffer.

        Parameters
        ----------
        binaryblock : bytes-like
            the 348 header bytes
        endianness : None or endian code, optional
            byte order of `binaryblock`.  If None, detect it from the data.
        extension : sequence of 4 ints, optional
            extension flag bytes following the header
        reports : None or :class:`~niftinrrd.batteryrunners.Reports`
            collector for problem reports.  A new one is made if None.
        """
        if reports is None:
            reports = Reports()
        self.reports = reports
        if endianness is None and len(binaryblock) == self.template_dtype.itemsize:
            endianness = self._detect_endian(binaryblock, reports)
        super().__init__(binaryblock, endianness)
        self.extension = tuple(int(v) for v in extension)
        self._ndim = self._valid_axes(reports)
        self.datatype = decode_datatype(self._structarr['datatype'], reports)
        self.xyzt_units = decode_units(self._structarr['xyzt_units'], reports)

    @classmethod
    def _read_field(klass, binaryblock, name, endian_code):
        hdr = np.ndarray(shape=(),
                         dtype=klass.template_dtype.newbyteorder(endian_code),
                         buffer=binaryblock)
        return hdr[name]

    @classmethod
    def from_bytes(klass, buffer, reports=None):
        """Decode header at the start of `buffer`

        Parameters
        ----------
        buffer : bytes-like
            at least 348 bytes, starting with the header.  If it is longer,
            the 4 bytes following the header are read as the extension flag.
        reports : None or :class:`~niftinrrd.batteryrunners.Reports`
            collector for problem reports.  A new one is made if None.  The
            collector is also available as the ``reports`` attribute of the
            returned header.

        Returns
        -------
        hdr : Nifti1RawHeader

        Raises
        ------
        HeaderSizeError
            if `buffer` is shorter than 348 bytes, or the header declares a
            size of less than 348 bytes
        ByteOrderError
            if the byte order cannot be determined
        MagicError
            if the magic string is not ``ni1`` or ``n+1``
        DimensionError
            if no axis has a valid extent
        """
        if reports is None:
            reports = Reports()
        mv = memoryview(buffer).cast('B')
        if mv.nbytes < klass.sizeof_hdr:
            raise HeaderSizeError(
                f'Buffer of {mv.nbytes} bytes is too small for a NIfTI-1 '
                f'header of {klass.sizeof_hdr} bytes'
            )
        block = mv[:klass.sizeof_hdr].tobytes()
        code = klass._detect_endian(block, reports)
        magic = block[344:348]
        if magic not in (klass.pair_magic, klass.single_magic):
            raise MagicError(
                f'Magic string {magic!r} is not NIfTI-1; '
                'maybe Analyze 7.5 or NIfTI-2?'
            )
        # Extension flag is 4 bytes directly after the header; the first is 0
        # if there are no extensions
        extension = (0, 0, 0, 0)
        if mv.nbytes >= klass.sizeof_hdr + 4:
            extension = np.frombuffer(mv[klass.sizeof_hdr:klass.sizeof_hdr + 4],
                                      dtype=np.int8)
        return klass(block, code, extension, reports)

    @classmethod
    def _detect_endian(klass, block, reports):
        """Return numpy endian code for header `block`

        ``dim[0]`` is a 2-byte field, so a byte order that gives a value in
        [1, 7] is the only reliable signal.  ``sizeof_hdr`` must then be
        348, but we go on with a report if it is larger.
        """
        code = '<'
        ndim = klass._read_field(block, 'dim', code)[0]
        if not _valid_ndim(ndim):
            code = _flipped(code)
            ndim = klass._read_field(block, 'dim', code)[0]
        if not _valid_ndim(ndim):
            reports.add(imageglobals.DEGRADED,
                        f'dim[0] ({ndim}) is out of range [1, {MAX_AXES}]',
                        HeaderDataError,
                        'trying to continue, but decoding will most likely fail')
        sizeof_hdr = klass._read_field(block, 'sizeof_hdr', code)
        if sizeof_hdr != klass.sizeof_hdr and not _valid_ndim(ndim):
            code = _flipped(code)
            sizeof_hdr = klass._read_field(block, 'sizeof_hdr', code)
            if sizeof_hdr != klass.sizeof_hdr:
                raise ByteOrderError(
                    'Cannot determine the byte order of the header; '
                    f'sizeof_hdr is not {klass.sizeof_hdr} in either order'
                )
        elif sizeof_hdr < klass.sizeof_hdr:
            raise HeaderSizeError(
                f'sizeof_hdr ({sizeof_hdr}) is smaller than {klass.sizeof_hdr}'
            )
        elif sizeof_hdr != klass.sizeof_hdr:
            reports.add(imageglobals.DEGRADED,
                        f'sizeof_hdr ({sizeof_hdr}) should be {klass.sizeof_hdr}',
                        HeaderDataError,
                        'trying to continue')
        return code

    def _valid_axes(self, reports):
        """Number of axes up to the first non-positive extent"""
        dim = self._structarr['dim']
        ndim = min(MAX_AXES, int(dim[0]))
        for i in range(1, ndim + 1):
            if dim[i] <= 0:
                reports.add(imageglobals.DEGRADED,
                            f'dim[{i}] ({dim[i]}) is not positive; '
                            'dim[0] was probably wrong or corrupt',
                            HeaderDataError,
                            f'using the first {i - 1} axes')
                ndim = i - 1
                break
        if ndim < 1:
            raise DimensionError('No valid dimensions in header')
        return ndim

    @property
    def ndim(self):
        """Number of valid axes"""
        return self._ndim

    @property
    def dim(self):
        """``[ndim, extent1, ... extent_ndim]`` for the valid axes"""
        return [self.ndim] + [int(d) for d in self._structarr['dim'][1:self.ndim + 1]]

    @property
    def pixdim(self):
        """``[qfac, spacing1, ... spacing_ndim]``, same length as ``dim``"""
        return [float(p) for p in self._structarr['pixdim'][:self.ndim + 1]]

    @property
    def srow(self):
        """The 12 sform matrix values, row by row"""
        hdr = self._structarr
        return [float(v) for v in np.concatenate(
            (hdr['srow_x'], hdr['srow_y'], hdr['srow_z']))]

    @property
    def intent_params(self):
        hdr = self._structarr
        return tuple(float(hdr[f'intent_p{i}']) for i in (1, 2, 3))

    @property
    def descrip(self):
        return self._text('descrip')

    @property
    def aux_file(self):
        return self._text('aux_file')

    @property
    def intent_name(self):
        return self._text('intent_name')

    @property
    def magic(self):
        """Magic string, including its terminating NUL"""
        return self.binaryblock[344:348].decode('latin-1')

    @property
    def is_single(self):
        """True if image data follows the header in the same buffer"""
        return self.binaryblock[344:348] == self.single_magic

    @property
    def has_extensions(self):
        return self.extension[0] != 0

    @property
    def little_endian(self):
        return endian_codes.label[self.endianness] == 'little'

    @property
    def endian(self):
        """``'little'`` or ``'big'``"""
        return endian_codes.label[self.endianness]

    @property
    def vox_offset(self):
        return float(self._structarr['vox_offset'])

    def _text(self, name):
        return self._structarr[name].item().decode('latin-1')

    ''' Checks only below here '''

    @classmethod
    def _get_checks(klass):
        return (klass._chk_bitpix,
                klass._chk_qfac,
                klass._chk_offset,
                klass._chk_qform_code,
                klass._chk_sform_code)

    def diagnose(self):
        """Run consistency checks, returning reports with problems

        These checks never change the decoded values.
        """
        reports = BatteryRunner(self._get_checks()).check_only(self)
        return Reports(rep for rep in reports if rep.problem_level)

    @staticmethod
    def _chk_bitpix(hdr, fix=False):
        rep = Report(HeaderDataError)
        code = int(hdr['datatype'])
        dt = data_type_codes.dtype.get(code)
        if dt is None:
            return hdr, rep
        bitpix = dt.itemsize * 8
        if bitpix == hdr['bitpix']:
            return hdr, rep
        rep.problem_level = 10
        rep.problem_msg = f'bitpix ({hdr["bitpix"]}) does not match datatype ({bitpix})'
        return hdr, rep

    @staticmethod
    def _chk_qfac(hdr, fix=False):
        rep = Report(HeaderDataError)
        if hdr['pixdim'][0] in (-1, 1) or hdr['pixdim'][0] == 0:
            return hdr, rep
        rep.problem_level = 20
        rep.problem_msg = 'pixdim[0] (qfac) should be 1 (default) or -1'
        return hdr, rep

    @staticmethod
    def _chk_offset(hdr, fix=False):
        rep = Report(HeaderDataError)
        offset = hdr.vox_offset
        if not hdr.is_single:
            return hdr, rep
        if offset < hdr.single_vox_offset:
            rep.problem_level = 20
            rep.problem_msg = f'vox offset {offset:g} too low for single file nifti1'
            return hdr, rep
        if not offset % 16:
            return hdr, rep
        rep.problem_level = 10
        rep.problem_msg = f'vox offset (={offset:g}) not divisible by 16, not SPM compatible'
        return hdr, rep

    @classmethod
    def _chk_qform_code(klass, hdr, fix=False):
        return klass._chk_xform_code('qform_code', hdr, fix)

    @classmethod
    def _chk_sform_code(klass, hdr, fix=False):
        return klass._chk_xform_code('sform_code', hdr, fix)

    @staticmethod
    def _chk_xform_code(code_type, hdr, fix):
        rep = Report(HeaderDataError)
        code = int(hdr[code_type])
        if code <= 0 or code in xform_codes.value_set():
            return hdr, rep
        rep.problem_level = 10
        rep.problem_msg = f'{code_type} {code} not a known transform code'
        return hdr, rep
