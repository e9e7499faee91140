# -*- coding: utf-8 -*-

# Copyright (c) 2016-2020 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

import logging

import pytest

from optmodel import OptModel, omoption
from optmodel.auxiliary import set_verbosity
from optmodel.test.run_tests import _get_cpus


def test_default_options():
    omopt = omoption()
    assert omopt == {"SPARSE_FORMAT": "csr", "CHECK_ROW_RANGES": True, "VERBOSE": 0}


def test_set_options():
    omopt = omoption(sparse_format="csc")
    assert omopt["SPARSE_FORMAT"] == "csc"
    omopt2 = omoption(omopt, VERBOSE=2)
    assert omopt2["SPARSE_FORMAT"] == "csc"
    assert omopt2["VERBOSE"] == 2
    assert omopt["VERBOSE"] == 0

    with pytest.raises(ValueError):
        omoption(FOO=1)
    with pytest.raises(ValueError):
        omoption(SPARSE_FORMAT="lil")


def test_verbosity():
    package_logger = logging.getLogger("optmodel")
    level = package_logger.level
    try:
        OptModel(omoption(VERBOSE=2))
        assert package_logger.level == logging.DEBUG
        set_verbosity(1)
        assert package_logger.level == logging.INFO
        set_verbosity(0)
        assert package_logger.level == logging.WARNING
    finally:
        package_logger.setLevel(level)


def test_get_cpus():
    assert int(_get_cpus()) >= 1


if __name__ == "__main__":
    pytest.main([__file__, "-xs"])
