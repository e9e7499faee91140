# -*- coding: utf-8 -*-

# Copyright (c) 2016-2020 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

import numpy as np
import pytest

from optmodel import OptModel


@pytest.fixture
def simple_model():
    """
    x = [x1, x2, x3] with the constraints
        x1 + x2 <= 5
        -2 <= x2 - x3 <= 2
    """
    om = OptModel()
    om.add_var("x", 3)
    om.add_lin_constraint("A", np.array([[1., 1., 0.]]), u=np.array([5.]))
    om.add_lin_constraint("B", np.array([[0., 1., -1.]]), np.array([-2.]), np.array([2.]))
    return om


@pytest.fixture
def dispatch_model():
    """
    Small dispatch-like model with the variable sets Va (3), Pg (2) and Qg (2), i.e.
    x = [Va0, Va1, Va2, Pg0, Pg1, Qg0, Qg1].
    """
    om = OptModel()
    om.add_var("Va", 3)
    om.add_var("Pg", 2, v0=[1., 2.], vl=[0., 0.], vu=[3., 4.])
    om.add_var("Qg", 2, vl=-1., vu=1.)
    return om
