"""Define static metadata for niftinrrd

The long description parameter is used in the niftinrrd top-level docstring.
This file must not import niftinrrd or use relative imports.
"""

long_description = """
Decode NIfTI1_ headers, and the voxel data that follows them, into the
metadata model of NRRD_ (Nearly Raw Raster Data).

The decoder works on bytes in memory.  It detects the byte order of the
header, validates the header fields, recovers from damaged fields where it
can, and reports every recovery.  The NRRD metadata gives axis sizes,
spacings, units and, when the header has a qform, the axis directions and
origin in right-anterior-superior space.  Voxel data comes back as NumPy_
arrays.

.. _NIfTI1: http://nifti.nimh.nih.gov/nifti-1/
.. _NRRD: http://teem.sourceforge.net/nrrd/format.html
.. _NumPy: https://numpy.org

Installation
============

To install from a source checkout, run::

   pip install .

When working on niftinrrd itself, install in "editable" mode, with the test
dependencies::

   pip install -e .[test]

Testing
=======

To test an installed version of niftinrrd, run pytest_::

    pytest --pyargs niftinrrd

.. _pytest: https://docs.pytest.org

License
=======

niftinrrd is licensed under the terms of the MIT license.  See the COPYING
file.
"""
