# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
"""Tests for the top level package namespace"""

from unittest import mock

import pytest

import niftinrrd as nn


def test_namespace():
    for name in ('parse', 'parse_header', 'parse_file', 'parse_header_file',
                 'Nifti1RawHeader', 'NrrdMetadata', 'Reports', 'ErrorLevel',
                 'reshape_payload', 'NiftiNrrdError', 'HeaderDataError',
                 'DataSizeError', '__version__'):
        assert hasattr(nn, name)
    assert issubclass(nn.VoxelOffsetError, nn.HeaderDataError)
    assert issubclass(nn.HeaderDataError, nn.NiftiNrrdError)
    assert issubclass(nn.DataSizeError, nn.NiftiNrrdError)
    assert 'Quickstart' in nn.__doc__


@pytest.mark.parametrize(
    'verbose, v_args', [(-2, ['-qq']), (-1, ['-q']), (0, []), (1, ['-v']), (2, ['-vv'])]
)
@pytest.mark.parametrize('doctests', (True, False))
@pytest.mark.parametrize('coverage', (True, False))
def test_test(verbose, v_args, doctests, coverage):
    with mock.patch('pytest.main') as pytest_main:
        nn.test(verbose=verbose, doctests=doctests, coverage=coverage)

    args, kwargs = pytest_main.call_args
    assert args == ()
    assert kwargs == {
        'args': v_args
        + (['--doctest-modules'] if doctests else [])
        + (['--cov', 'niftinrrd'] if coverage else [])
        + ['--pyargs', 'niftinrrd']
    }


def test_test_label():
    with pytest.raises(NotImplementedError):
        nn.test(label='fast')
