# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2020 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Implements the optimization model object used to encapsulate a given
optimization problem formulation.
"""

import numpy as np
from numpy import array, zeros, ones, inf, r_
from scipy.sparse import issparse

from optmodel.auxiliary import ShapeMismatchError, format_name, set_verbosity, _as_idx
from optmodel.idx_manager import IdxManager
from optmodel.lin_constraint import params_lin_constraint, eval_lin_constraint
from optmodel.omoption import omoption
from optmodel.quad_cost import params_quad_cost, eval_quad_cost, quad_form, quad_cost_len, \
    QuadForm, _as_vector
from optmodel.varsets import varsets_normalize, varsets_len, varsets_idx


def _bound(v, N, default, label):
    """Returns the bound (or initial value) C{v} as vector of length C{N}."""
    if v is None or np.size(v) == 0:
        return default * ones(N)
    if np.ndim(v) == 0:
        return float(v) * ones(N)
    v = np.asarray(v, dtype=float).ravel()
    if v.shape[0] != N:
        raise ShapeMismatchError("%s has %d elements, expected %d" % (label, v.shape[0], N))
    return v


class OptModel(IdxManager):
    """This class implements the optimization model object used to
    encapsulate a given optimization problem formulation. It allows for
    access to optimization variables, linear constraints and quadratic costs
    in named blocks, keeping track of the ordering and indexing of the
    blocks as variables, constraints and costs are added to the problem.

    Linear constraints are of the form::

        l <= A * x <= u

    and quadratic costs of the form::

        F(x) = 1/2 * x'*Q*x + c'*x + k

    The aggregate parameters of all constraint and cost sets are assembled
    on demand and cached until a set is added.
    """

    def __init__(self, omopt=None):
        super().__init__()
        #: options dict, see L{omoption}
        self.omopt = omoption(omopt)
        if self.omopt['VERBOSE']:
            set_verbosity(self.omopt['VERBOSE'])

        self.user_data = {}

    def add_var(self, name, N, v0=None, vl=None, vu=None, idx=None):
        """Adds a set of variables to the model.

        Adds a set of variables to the model, where N is the number of
        variables in the set, C{v0} is the initial value of those variables,
        and C{vl} and C{vu} are the lower and upper bounds on the variables.
        The defaults for the last three arguments, which are optional,
        are for all values to be initialized to zero (C{v0 = 0}) and unbounded
        (C{vl = -Inf, vu = Inf}).

        Adding variables invalidates the cached aggregate constraint and
        cost parameters, since their number of columns changes.
        """
        if N < 0:
            raise ShapeMismatchError("number of variables in '%s' must not be negative"
                                     % format_name(name, _as_idx(idx)))
        label = "variable set '%s'" % name
        v0 = _bound(v0, N, 0., "initial value of %s" % label)
        vl = _bound(vl, N, -inf, "lower bound of %s" % label)
        vu = _bound(vu, N, inf, "upper bound of %s" % label)

        self._add_named_set('var', name, idx, N, v0=v0, vl=vl, vu=vu)
        self.invalidate_cache()

    def add_lin_constraint(self, name, A, l=None, u=None, varsets=None, idx=None):
        """Adds a set of linear constraints to the model.

        Linear constraints are of the form C{l <= A * x <= u}, where
        C{x} is a vector made of the vars specified in C{varsets} (in
        the order given). This allows the C{A} matrix to be defined only
        in terms of the relevant variables without the need to manually
        create a lot of zero columns. If C{varsets} is empty, C{x} is taken
        to be the full vector of all optimization variables. If C{l} or
        C{u} are empty, they are assumed to be appropriately sized vectors
        of C{-Inf} and C{Inf}, respectively.

        Variable sets are given by name or, for indexed variable sets, as
        (name, idx) pairs.
        """
        if not issparse(A):
            A = np.asarray(A, dtype=float)
            if A.ndim != 2:
                raise ShapeMismatchError("A of linear constraint set '%s' must be 2-dimensional"
                                         % format_name(name, _as_idx(idx)))
        N, M = A.shape
        label = "linear constraint set '%s'" % name
        l = _bound(l, N, -inf, "l of %s" % label)
        u = _bound(u, N, inf, "u of %s" % label)

        vs = varsets_normalize(varsets)
        nv = varsets_len(self, vs)
        if M != nv:
            raise ShapeMismatchError("number of columns of A does not match number of variables "
                                     "in %s, A is %d x %d, nv = %d" % (label, N, M, nv))

        self._add_named_set('lin', name, idx, N, A=A, l=l, u=u, vs=vs)
        self.invalidate_cache('lin')

    def add_quad_cost(self, name, Q=None, c=None, k=0., varsets=None, idx=None):
        """Adds a set of user costs to the model.

        Adds a named block of quadratic costs to the model, of the form::

            F(x) = 1/2 * x'*Q*x + c'*x + k

        where C{x} is a vector made of the vars specified in C{varsets} (in
        the order given), or all variables of the model if C{varsets} is
        empty. C{Q} may be given as a column vector, in which case it is the
        diagonal of the quadratic coefficient matrix and the cost is
        evaluated element-wise::

            F(x) = 1/2 * Q .* x.^2 + c .* x + k

        C{k} may be a vector in this case. An empty C{k} is taken to be 0.
        """
        label = "quadratic cost set '%s'" % format_name(name, _as_idx(idx))
        form = quad_form(Q)
        nx = quad_cost_len(Q, c, form)
        nc = len(_as_vector(c))
        if nc and form is not QuadForm.NONE and nc != nx:
            raise ShapeMismatchError("dimensions of Q (%d) and c (%d) in %s do not match"
                                     % (nx, nc, label))
        if k is None or np.size(k) == 0:
            k = 0.
        nk = np.size(k)
        if nk > 1:
            if form is QuadForm.FULL:
                raise ShapeMismatchError("k of %s must be a scalar if Q is a matrix" % label)
            if nx and nk != nx:
                raise ShapeMismatchError("dimensions of k (%d) and Q/c (%d) in %s do not match"
                                         % (nk, nx, label))

        vs = varsets_normalize(varsets)
        nv = varsets_len(self, vs)
        if nx and nx != nv:
            raise ShapeMismatchError("dimension of %s (%d) does not match number of variables "
                                     "(%d)" % (label, nx, nv))
        if not nx and nk > 1 and nk != nv:
            raise ShapeMismatchError("dimension of k (%d) in %s does not match number of "
                                     "variables (%d)" % (nk, label, nv))

        ## number of cost elements, more than one for element-wise costs
        if form is QuadForm.DIAGONAL or nk > 1:
            N = max(nx, nk)
        else:
            N = 1

        self._add_named_set('qdc', name, idx, N, Q=Q, c=c, k=k, vs=vs, form=form)
        self.invalidate_cache('qdc')

    def params_var(self, name=None, idx=None):
        """Returns initial value, lower bound and upper bound for opt variables.

        Returns the initial value, lower bound and upper bound for the full
        optimization variable vector, or for a specific named (and indexed)
        variable set.

        Examples::
            x, xmin, xmax = om.params_var()
            Pg, Pmin, Pmax = om.params_var('Pg')
        """
        data = self.var['data']
        if name is not None:
            key = self._resolve('var', name, idx)
            return data['v0'][key], data['vl'][key], data['vu'][key]

        v0 = array([]); vl = array([]); vu = array([])
        for name, idx in self.var['order']:
            v0k, vlk, vuk = self.params_var(name, idx)
            v0 = r_[v0, v0k]
            vl = r_[vl, vlk]
            vu = r_[vu, vuk]
        return v0, vl, vu

    def params_lin_constraint(self, name=None, idx=None):
        """Builds and returns linear constraint parameters.

        See L{optmodel.lin_constraint.params_lin_constraint}.
        """
        return params_lin_constraint(self, name, idx)

    def params_quad_cost(self, name=None, idx=None):
        """Returns the cost parameters for quadratic costs.

        See L{optmodel.quad_cost.params_quad_cost}.
        """
        return params_quad_cost(self, name, idx)

    def eval_lin_constraint(self, x, name=None, idx=None):
        return eval_lin_constraint(self, x, name, idx)

    def eval_quad_cost(self, x, name=None, idx=None):
        return eval_quad_cost(self, x, name, idx)

    def varsets_idx(self, vs):
        """Returns the indices into x of the variables in the variable sets C{vs}."""
        return varsets_idx(self, vs)

    def varsets_len(self, vs):
        """Returns the number of variables in the variable sets C{vs}."""
        return varsets_len(self, vs)

    def userdata(self, name, val=None):
        """Stores C{val} under C{name} and returns the model, or returns the
        value stored under C{name} (an empty array if there is none) when no
        C{val} is given, e.g. to keep custom indexing of the added blocks.
        """
        if val is None:
            return self.user_data.get(name, zeros(0))
        self.user_data[name] = val
        return self
