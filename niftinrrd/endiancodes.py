# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Platform byte order and endian code aliases

The platform byte order is probed once, at import, by looking at how the
32-bit pattern ``0x01020304`` is laid out in memory.  The result is held in
``system_endianness`` and never changes afterwards.
"""
import numpy as np

from .imageglobals import logger
from .volumeutils import Recoder

_PROBE_PATTERN = 0x01020304


def probe_endianness():
    """Return ``'little'`` or ``'big'`` for the byte order of this platform

    Returns None, with a warning, if the layout of the probe pattern matches
    neither byte order.

    >>> probe_endianness() in ('little', 'big')
    True
    """
    layout = tuple(np.array([_PROBE_PATTERN], dtype=np.uint32).tobytes())
    if layout == (1, 2, 3, 4):
        return 'big'
    if layout == (4, 3, 2, 1):
        return 'little'
    logger.warning('Unrecognized system endianness %r', layout)
    return None


system_endianness = probe_endianness()
native_code = '>' if system_endianness == 'big' else '<'
swapped_code = '<' if native_code == '>' else '>'

# numpy code, label, aliases
endian_codes = Recoder(
    (
        ('<', 'little', 'l', 'le', 'L', 'LE'),
        ('>', 'big', 'BIG', 'b', 'be', 'B', 'BE'),
        (native_code, 'native', 'n', 'N', '=', '|', 'i', 'I'),
        (swapped_code, 'swapped', 's', 'S', '!'),
    ),
    fields=('code', 'label'),
)
# 'native' and 'swapped' rows overwrote the labels of the byte order codes
endian_codes.label.update({'<': 'little', '>': 'big'})
for _alias, _code in list(endian_codes.code.items()):
    endian_codes.label[_alias] = endian_codes.label[_code]
del _alias, _code
