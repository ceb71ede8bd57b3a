# Tests for niftinrrd
