#!python
# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the niftinrrd package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Print NRRD header fields for NIfTI-1 files"""

from argparse import ArgumentParser

import numpy as np

import niftinrrd as nn
from niftinrrd.errors import NiftiNrrdError


def format_value(value):
    """NRRD text form of header field `value`

    >>> format_value([2, 3])
    '2 3'
    >>> format_value([[1.0, 0.0], [0.0, 1.0]])
    '(1,0) (0,1)'
    >>> format_value('raw')
    'raw'
    """
    if not isinstance(value, (list, tuple)):
        return str(value)
    if value and isinstance(value[0], (list, tuple)):
        return ' '.join('(' + ','.join(f'{v:g}' for v in row) + ')' for row in value)
    return ' '.join(f'{v:g}' if isinstance(v, float) else str(v) for v in value)


def _print_meta(fname, meta, verbose, show_data):
    print(f'{fname}:')
    for name, value in meta.as_nrrd_fields().items():
        print(f'{name}: {format_value(value)}')
    if verbose:
        for rep in meta.reports.problems(min_level=1 if verbose > 1 else 30):
            print(f'  Level {rep.problem_level}: {rep.message}')
    if show_data and meta.data is not None:
        data = np.asarray(meta.data)
        print(f'data: {data.dtype} {tuple(meta.sizes)}')


def main(args=None):
    """Go go team"""
    parser = ArgumentParser(description=__doc__)
    parser.add_argument('--version', action='version', version=f'%(prog)s {nn.__version__}')
    parser.add_argument(
        '-v',
        '--verbose',
        action='count',
        default=0,
        help='Print problems found while decoding; twice for informational notes too',
    )
    parser.add_argument(
        '--data', action='store_true', help='Also decode the voxel data of single files'
    )
    parser.add_argument('files', nargs='+', metavar='FILE', help='NIfTI-1 file names')

    args = parser.parse_args(args=args)

    status = 0
    for fname in args.files:
        try:
            if args.data:
                meta = nn.parse_file(fname)
            else:
                meta = nn.parse_header_file(fname)
        except (NiftiNrrdError, OSError) as err:
            print(f'{fname}: cannot decode: {err}')
            status = 1
            continue
        _print_meta(fname, meta, args.verbose, args.data)
    return status
