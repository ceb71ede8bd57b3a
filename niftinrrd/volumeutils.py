# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Code tables and printing helpers shared by the header modules"""

from functools import reduce
from operator import mul

import numpy as np


class Recoder:
    """class to return canonical code(s) from code or aliases

    Each row of a code table gives a code and its aliases.  Indexing any
    named field with any value of a row returns that field's value for the
    row.

    >>> units = Recoder(((2, 'mm', 'millimeter'), (16, 'ms', 'msec')),
    ...                 fields=('code', 'label'))
    >>> units.code['millimeter']
    2
    >>> units.label[16]
    'ms'
    >>> # Indexing the object directly uses the first field
    >>> units['msec']
    16
    >>> 'mm' in units, 'cm' in units
    (True, False)
    """

    def __init__(self, codes, fields=('code',)):
        """Create recoder object

        Parameters
        ----------
        codes : sequence of sequences
            Each sequence defines values (codes) that are equivalent
        fields : {('code',) string sequence}, optional
            names by which elements in sequences can be accessed.  The
            sequences in `codes` must be at least as long as `fields`.
        """
        self.fields = tuple(fields)
        self.field1 = {}  # a placeholder for the check below
        for name in fields:
            if name in self.__dict__:
                raise KeyError(f'Input name {name} already in object dict')
            self.__dict__[name] = {}
        self.field1 = self.__dict__[fields[0]]
        self.add_codes(codes)

    def add_codes(self, code_syn_seqs):
        """Add code rows to object

        Parameters
        ----------
        code_syn_seqs : sequence
            sequence of sequences, each giving values in the same order as
            ``self.fields``, followed by any extra aliases.
        """
        for code_syns in code_syn_seqs:
            for alias in code_syns:
                for field_ind, field_name in enumerate(self.fields):
                    self.__dict__[field_name][alias] = code_syns[field_ind]

    def __getitem__(self, key):
        return self.field1[key]

    def __contains__(self, key):
        """True if field1 in recoder contains `key`"""
        try:
            self.field1[key]
        except (KeyError, TypeError):
            return False
        return True

    def keys(self):
        """Return all available code and alias values"""
        return self.field1.keys()

    def value_set(self, name=None):
        """Return set of possible returned values for column

        By default, the column is the first column.

        >>> rc = Recoder(((1, 'one'), (2, 'two'), (1, 'repeat value')))
        >>> rc.value_set() == {1, 2}
        True
        """
        if name is None:
            d = self.field1
        else:
            d = self.__dict__[name]
        return set(d.values())


def make_dt_codes(codes_seqs):
    """Create datatype code Recoder from ``(code, label, type, niistring)`` rows

    The numpy type column (``None`` where numpy has no portable type) becomes
    the ``dtype`` field.  It is not used as an alias, so several rows can
    share a ``None`` dtype.

    >>> rc = make_dt_codes(((4, 'int16', np.int16, 'NIFTI_TYPE_INT16'),
    ...                     (1, 'bit', None, 'NIFTI_TYPE_BINARY')))
    >>> rc.dtype['int16'] == np.dtype(np.int16)
    True
    >>> rc.dtype[1] is None
    True
    >>> rc.label['NIFTI_TYPE_INT16']
    'int16'
    """
    rec = Recoder([(code, label, niistring) for code, label, _, niistring in codes_seqs],
                  fields=('code', 'label', 'niistring'))
    rec.dtype = {}
    for code, label, np_type, niistring in codes_seqs:
        dt = None if np_type is None else np.dtype(np_type)
        for alias in (code, label, niistring):
            rec.dtype[alias] = dt
    rec.fields += ('dtype',)
    return rec


def pretty_mapping(mapping, getterfunc=None):
    """Make pretty string from mapping

    Adjusts text column to print values on basis of longest key.

    Parameters
    ----------
    mapping : mapping
       implementing iterator returning keys and ``__getitem__``
    getterfunc : None or callable
       callable taking two arguments, ``obj`` and ``key`` where ``obj``
       is the passed mapping.  If None, just use ``lambda obj, key:
       obj[key]``

    Returns
    -------
    str : string

    Examples
    --------
    >>> d = {'a key': 'a value'}
    >>> print(pretty_mapping(d))
    a key  : a value
    """
    if getterfunc is None:
        getterfunc = lambda obj, key: obj[key]
    lens = [len(str(name)) for name in mapping]
    mxlen = np.max(lens)
    fmt = '%%-%ds  : %%s' % mxlen
    out = []
    for name in mapping:
        value = getterfunc(mapping, name)
        out.append(fmt % (name, value))
    return '\n'.join(out)


def n_elements(sizes):
    """Number of voxels for axis extents `sizes`

    >>> n_elements([2, 3, 4])
    24
    >>> n_elements([])
    1
    """
    return reduce(mul, (int(s) for s in sizes), 1)
