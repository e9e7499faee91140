# -*- coding: utf-8 -*-

# Copyright (c) 2016-2020 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

import numpy as np
import pytest

from optmodel import OptModel, IndexRequiredError, UnknownBlockError
from optmodel.varsets import VarSetMap, varsets_normalize, map_columns, get_varset_map


@pytest.fixture
def indexed_var_model():
    """x = [a0, V(0)0, V(0)1, V(1)0, V(1)1, V(1)2]"""
    om = OptModel()
    om.add_var("a", 1)
    om.init_indexed_name("var", "V", (2,))
    om.add_var("V", 2, idx=(0,))
    om.add_var("V", 3, idx=(1,))
    return om


def test_varsets_normalize():
    assert varsets_normalize(None) == []
    assert varsets_normalize([]) == []
    assert varsets_normalize("Pg") == [("Pg", ())]
    assert varsets_normalize(["Pg", ("V", 1), ("W", [0, 2])]) == \
        [("Pg", ()), ("V", (1,)), ("W", (0, 2))]


def test_varsets_idx(dispatch_model):
    om = dispatch_model
    assert np.array_equal(om.varsets_idx(["Qg", "Va"]), [5, 6, 0, 1, 2])
    assert np.array_equal(om.varsets_idx([]), np.arange(7))
    assert om.varsets_len(["Qg", "Va"]) == 5
    assert om.varsets_len(None) == 7


def test_varset_map(dispatch_model):
    varset_map = VarSetMap(dispatch_model, ["Pg", "Va"])
    assert varset_map.table == [("Pg", 3, 2), ("Va", 0, 3)]
    assert len(varset_map) == 5
    assert np.array_equal(varset_map(np.array([0, 1, 2, 4])), [3, 4, 0, 2])


def test_map_columns(dispatch_model):
    local = np.array([0, 1])
    assert map_columns(dispatch_model, [], local) is local
    maps = {}
    assert np.array_equal(map_columns(dispatch_model, ["Qg"], local, maps), [5, 6])
    assert get_varset_map(dispatch_model, ["Qg"], maps) is maps[(("Qg", ()),)]


def test_indexed_var_sets(indexed_var_model):
    om = indexed_var_model
    assert np.array_equal(om.varsets_idx([("V", (1,)), ("V", (0,))]), [3, 4, 5, 1, 2])
    assert om.varsets_len([("V", 1), "a"]) == 4
    with pytest.raises(IndexRequiredError):
        om.varsets_idx(["V"])
    with pytest.raises(UnknownBlockError):
        om.varsets_idx(["W"])

    om.add_lin_constraint("c", np.array([[1., 0., 0., 2.]]), varsets=[("V", 1), "a"])
    A, _, _ = om.params_lin_constraint()
    assert np.array_equal(A.toarray(), [[2, 0, 0, 1, 0, 0]])


if __name__ == "__main__":
    pytest.main([__file__, "-xs"])
