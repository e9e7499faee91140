# -*- coding: utf-8 -*-

# Copyright (c) 2016-2020 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

import numpy as np
import pytest
from scipy.sparse import csr_matrix

from optmodel import OptModel, IndexRequiredError, UnknownBlockError, ShapeMismatchError
from optmodel.quad_cost import QuadForm, quad_form


@pytest.fixture
def cost_model():
    """x = [a, y0, y1]"""
    om = OptModel()
    om.add_var("a", 1)
    om.add_var("y", 2)
    return om


def test_quad_form():
    assert quad_form(None) is QuadForm.NONE
    assert quad_form(np.zeros(0)) is QuadForm.NONE
    assert quad_form(np.array([1., 2.])) is QuadForm.DIAGONAL
    assert quad_form(np.array([[1.], [2.]])) is QuadForm.DIAGONAL
    assert quad_form(csr_matrix(np.array([[1.], [2.]]))) is QuadForm.DIAGONAL
    assert quad_form(np.eye(2)) is QuadForm.FULL
    assert quad_form(np.array([[4.]])) is QuadForm.FULL
    with pytest.raises(ShapeMismatchError):
        quad_form(np.ones((2, 3)))


def test_additive_merge_of_diagonals(cost_model):
    om = cost_model
    om.add_quad_cost("q1", Q=np.array([2., 0.]), varsets=["y"])
    om.add_quad_cost("q2", Q=np.array([[3.], [1.]]), varsets=["y"])
    Q, c, k = om.params_quad_cost()

    assert Q.shape == (3, 3)
    assert Q[1, 1] == 5.
    assert Q[2, 2] == 1.
    assert Q.nnz == 2
    assert np.array_equal(c, np.zeros(3))
    assert k == 0


def test_diagonal_round_trip():
    om = OptModel()
    om.add_var("a", 2)
    om.add_var("z", 3)
    om.add_quad_cost("d", Q=np.array([[1.], [2.], [3.]]), varsets=["z"])
    Q, c, k = om.params_quad_cost()

    assert Q.nnz == 3
    assert np.array_equal(Q.diagonal(), [0, 0, 1, 2, 3])
    assert np.array_equal(Q.toarray(), np.diag([0., 0., 1., 2., 3.]))


def test_full_matrix_with_varsets():
    om = OptModel()
    om.add_var("a", 2)
    om.add_var("b", 2)
    Qf = np.array([[1., 2.], [2., 4.]])
    om.add_quad_cost("f", Q=Qf, c=np.array([1., -1.]), k=3., varsets=["b"])
    Q, c, k = om.params_quad_cost()

    expected = np.zeros((4, 4))
    expected[2:, 2:] = Qf
    assert np.array_equal(Q.toarray(), expected)
    assert np.array_equal(c, [0, 0, 1, -1])
    assert k == 3.


def test_vars_added_after_cost():
    om = OptModel()
    om.add_var("x", 2)
    om.add_quad_cost("f", Q=np.array([[2., 0.], [0., 2.]]), c=np.array([1., 1.]), k=1.)
    om.add_var("y", 1)
    Q, c, k = om.params_quad_cost()

    assert Q.shape == (3, 3)
    assert np.array_equal(Q.toarray(), np.diag([2., 2., 0.]))
    assert np.array_equal(c, [1, 1, 0])
    assert k == 1.


def test_constant_terms(cost_model):
    om = cost_model
    om.add_quad_cost("const", k=5.)
    om.add_quad_cost("kv", Q=np.array([1., 1.]), k=np.array([1., 2.]), varsets=["y"])
    Q, c, k = om.params_quad_cost()

    assert k == 8.
    assert Q.nnz == 2
    assert not np.any(c)
    assert om.getN("qdc", "const") == 1
    assert om.getN("qdc", "kv") == 2


def test_additive_merge_of_linear_terms(cost_model):
    om = cost_model
    om.add_quad_cost("c1", c=np.array([1., 2.]), varsets=["y"])
    om.add_quad_cost("c2", c=np.array([1., 1., 1.]))
    om.add_quad_cost("c3", c=np.array([[0.5]]), varsets="a")
    Q, c, k = om.params_quad_cost()

    assert np.array_equal(c, [1.5, 2, 3])
    assert Q.nnz == 0


def test_individual_sets(cost_model):
    om = cost_model
    om.init_indexed_name("qdc", "gc", (2,))
    Q0 = np.array([1., 2.])
    Q1 = csr_matrix(np.array([[1., 0.5], [0.5, 1.]]))
    om.add_quad_cost("gc", Q=Q0, varsets=["y"], idx=(0,))
    om.add_quad_cost("gc", Q=Q1, k=2., varsets=["y"], idx=(1,))
    om.add_quad_cost("lin", c=np.array([1., 0., 0.]))

    with pytest.raises(IndexRequiredError):
        om.params_quad_cost("gc")
    with pytest.raises(UnknownBlockError):
        om.params_quad_cost("gc", (2,))

    Q, c, k, vs = om.params_quad_cost("gc", (1,))
    assert Q is Q1
    assert c is None
    assert k == 2.
    assert vs == [("y", ())]

    Q, c, k, vs = om.params_quad_cost("lin")
    assert Q is None
    assert vs == []

    Q, c, k = om.params_quad_cost()
    assert np.allclose(Q.toarray(), [[0, 0, 0], [0, 2, 0.5], [0, 0.5, 3]])
    assert np.array_equal(c, [1, 0, 0])
    assert k == 2.


def test_shape_checks(cost_model):
    om = cost_model
    with pytest.raises(ShapeMismatchError):
        om.add_quad_cost("a", Q=np.ones((2, 3)), varsets=["y"])
    with pytest.raises(ShapeMismatchError):
        om.add_quad_cost("b", Q=np.eye(3), varsets=["y"])
    with pytest.raises(ShapeMismatchError):
        om.add_quad_cost("c", Q=np.eye(2), k=np.ones(2), varsets=["y"])
    with pytest.raises(ShapeMismatchError):
        om.add_quad_cost("d", Q=np.ones(2), c=np.ones(3), varsets=["y"])
    with pytest.raises(ShapeMismatchError):
        om.add_quad_cost("e", c=np.ones(2))
    # a vector k alone must still fit the variable sets
    with pytest.raises(ShapeMismatchError):
        om.add_quad_cost("kv", k=np.array([1., 2., 3.]), varsets=["y"])
    assert om.qdc["NS"] == 0

    om.add_quad_cost("kv", k=np.array([1., 2.]), varsets=["y"])
    assert om.getN("qdc", "kv") == 2


def test_empty_constant_term(cost_model):
    om = cost_model
    om.add_quad_cost("c", c=np.array([1., 1.]), k=None, varsets=["y"])
    om.add_quad_cost("d", Q=np.array([1., 1.]), k=np.zeros(0), varsets=["y"])
    assert om.params_quad_cost("c")[2] == 0.

    Q, c, k = om.params_quad_cost()
    assert k == 0.
    assert np.array_equal(c, [0, 1, 1])
    f, _, _ = om.eval_quad_cost(np.array([0., 1., 1.]), "d")
    assert np.allclose(f, [0.5, 0.5])


def test_eval_aggregate(cost_model):
    om = cost_model
    om.add_quad_cost("f", Q=np.array([[2., 1.], [1., 2.]]), c=np.array([1., 0.]), k=1.,
                     varsets=["y"])
    om.add_quad_cost("d", Q=np.array([4.]), c=np.array([-1.]), varsets=["a"])
    x = np.array([1., 2., 3.])
    Q, c, k = om.params_quad_cost()

    f, df, d2f = om.eval_quad_cost(x)
    Qd = Q.toarray()
    assert np.isclose(f, 0.5 * x.dot(Qd.dot(x)) + c.dot(x) + k)
    assert np.allclose(df, Qd.dot(x) + c)
    assert d2f is Q

    # the aggregate equals the sum of the individual sets
    f1, _, _ = om.eval_quad_cost(x, "f")
    f2, _, _ = om.eval_quad_cost(x, "d")
    assert np.isclose(f, f1 + np.sum(f2))


def test_eval_elementwise(cost_model):
    om = cost_model
    om.add_quad_cost("d", Q=np.array([2., 4.]), c=np.array([1., 0.]), k=np.array([0.5, 0.5]),
                     varsets=["y"])
    f, df, d2f = om.eval_quad_cost(np.array([10., 1., 2.]), "d")

    assert np.allclose(f, [2.5, 8.5])
    assert np.allclose(df, [3, 8])
    assert np.allclose(d2f.toarray(), np.diag([2., 4.]))


def test_eval_elementwise_scalar_constant(cost_model):
    om = cost_model
    om.add_quad_cost("d", Q=np.array([2., 4.]), k=3., varsets=["y"])
    x = np.array([5., 1., 1.])

    f_block, _, _ = om.eval_quad_cost(x, "d")
    f_aggregate, _, _ = om.eval_quad_cost(x)
    assert np.allclose(f_block, [2.5, 3.5])
    assert np.isclose(np.sum(f_block), f_aggregate)
    assert np.isclose(f_aggregate, 0.5 * 2 + 0.5 * 4 + 3)


def test_eval_full_set(cost_model):
    om = cost_model
    om.add_quad_cost("f", Q=np.array([[2., 0.], [0., 2.]]), c=np.array([1., 1.]), k=1.,
                     varsets=["y"])
    f, df, d2f = om.eval_quad_cost(np.array([10., 1., 2.]), "f")

    assert np.isclose(f, 0.5 * (2 + 8) + 3 + 1)
    assert np.allclose(df, [3, 5])


def test_eval_constant_set(cost_model):
    om = cost_model
    om.add_quad_cost("const", k=5.)
    f, df, d2f = om.eval_quad_cost(np.zeros(3), "const")
    assert f == 5.
    assert len(df) == 0
    assert d2f is None


if __name__ == "__main__":
    pytest.main([__file__, "-xs"])
