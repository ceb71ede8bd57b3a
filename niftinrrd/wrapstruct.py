# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Class to read fixed-layout binary records through a numpy structured dtype

============
 wrapstruct
============

The :class:`WrapStruct` class wraps a read-only numpy structured scalar.  The
structured dtype is the field table of the record: each field has a name, a
width and a decoder (the numpy type), and its offset is the sum of the widths
before it.  One generic reader,
``np.ndarray(shape=(), dtype=template_dtype, buffer=binaryblock)``, decodes
every field in one go, for either byte order.

It implements:

* Mappingness from the underlying structured array fields
* Byte order given on construction, or guessed from the data
* ``as_byteswapped`` to get the same fields stored in the other byte order

Mappingness
-----------

Fields of the contained structarr are read with standard ``__getitem__``
syntax::

    wrapped['field']

Wrapped structures also implement general read-only mappingness::

    wrapped.keys()
    wrapped.items()
    wrapped.values()
    wrapped.get('field', default)

Properties::

    .endianness (read only)
    .binaryblock (read only)
    .structarr (read only)
"""
import numpy as np

from .endiancodes import endian_codes, native_code, swapped_code
from .errors import HeaderSizeError
from .volumeutils import pretty_mapping


class WrapStruct:
    # placeholder datatype
    template_dtype = np.dtype([('integer', 'i2')])

    def __init__(self, binaryblock=None, endianness=None):
        """Initialize WrapStruct from binary data block

        Parameters
        ----------
        binaryblock : {None, bytes-like} optional
            binary block to read fields from.  Must be exactly the size of
            ``template_dtype``.  By default, None, in which case we use a
            block of zeros.
        endianness : {None, '<','>', other endian code} string, optional
            endianness of the binaryblock.  If None, guess endianness
            from the data.

        Examples
        --------
        >>> wstr1 = WrapStruct() # a default structure
        >>> wstr1.endianness == native_code
        True
        >>> int(wstr1['integer'])
        0
        """
        if binaryblock is None:
            binaryblock = bytes(self.template_dtype.itemsize)
        if len(binaryblock) != self.template_dtype.itemsize:
            raise HeaderSizeError(
                f'Binary block is wrong size: {len(binaryblock)} bytes, '
                f'expecting {self.template_dtype.itemsize}'
            )
        if endianness is None:
            endianness = self.__class__.guessed_endian(binaryblock)
        else:
            endianness = endian_codes[endianness]
        dt = self.template_dtype.newbyteorder(endianness)
        self._structarr = np.ndarray(shape=(), dtype=dt, buffer=bytes(binaryblock))

    @classmethod
    def guessed_endian(klass, binaryblock):
        """Guess intended endianness from contents of `binaryblock`

        The base class has no byte order signal, and returns the native
        code.
        """
        return native_code

    @property
    def structarr(self):
        """Structured data, with data fields"""
        return self._structarr

    @property
    def binaryblock(self):
        """binary block of data as bytes

        Examples
        --------
        >>> wstr = WrapStruct()
        >>> len(wstr.binaryblock)
        2
        """
        return self._structarr.tobytes()

    @property
    def endianness(self):
        """endian code of binary data

        Examples
        --------
        >>> wstr = WrapStruct()
        >>> code = wstr.endianness
        >>> code == native_code
        True
        """
        if self._structarr.dtype.isnative:
            return native_code
        return swapped_code

    def as_byteswapped(self, endianness=None):
        """return new byteswapped object with given ``endianness``

        Guaranteed to make a copy even if endianness is the same as
        the current endianness.

        Parameters
        ----------
        endianness : None or string, optional
           endian code to which to swap.  None means swap from current
           endianness, and is the default

        Returns
        -------
        wstr : ``WrapStruct``
           ``WrapStruct`` object with given endianness

        Examples
        --------
        >>> wstr = WrapStruct()
        >>> bs_wstr = wstr.as_byteswapped()
        >>> bs_wstr.endianness == swapped_code
        True
        >>> bs_wstr == wstr
        True
        """
        current = self.endianness
        if endianness is None:
            endianness = swapped_code if current == native_code else native_code
        else:
            endianness = endian_codes[endianness]
        if endianness == current:
            return self.__class__(self.binaryblock, current)
        swapped = self._structarr.byteswap()
        return self.__class__(swapped.tobytes(), endianness)

    def __eq__(self, other):
        """equality between two structures defined by logical content"""
        this_end = self.endianness
        this_bb = self.binaryblock
        try:
            other_end = other.endianness
            other_bb = other.binaryblock
        except AttributeError:
            return False
        if this_end == other_end:
            return this_bb == other_bb
        other_bb = other._structarr.byteswap().tobytes()
        return this_bb == other_bb

    def __ne__(self, other):
        return not self == other

    def __getitem__(self, item):
        return self._structarr[item]

    def __iter__(self):
        return iter(self.keys())

    def keys(self):
        """Return keys from structured data"""
        return list(self.template_dtype.names)

    def values(self):
        """Return values from structured data"""
        data = self._structarr
        return [data[key] for key in self.template_dtype.names]

    def items(self):
        """Return items from structured data"""
        return zip(self.keys(), self.values())

    def get(self, k, d=None):
        """Return value for the key k if present or d otherwise"""
        return self._structarr[k] if k in self.keys() else d

    def __str__(self):
        """Return string representation for printing"""
        summary = f"{self.__class__} object, endian='{self.endianness}'"
        return '\n'.join([summary, pretty_mapping(self)])
