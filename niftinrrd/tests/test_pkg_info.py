"""Testing package info
"""

import niftinrrd as nn


def test_pkg_info():
    """Smoke test niftinrrd.get_info()

    Hits:
        - niftinrrd.get_info
        - niftinrrd.pkg_info.get_pkg_info
    """
    info = nn.get_info()
    assert info['pkg_version'] == nn.__version__
    assert 'np_version' in info


def test_version():
    # Test info version is the same as our own version
    assert nn.pkg_info.__version__ == nn.__version__
