# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2020 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Builds, returns and evaluates the parameters of quadratic costs
F(x) = 1/2 * x'*Q*x + c'*x + k.
"""

import enum
import logging

import numpy as np
from scipy.sparse import coo_matrix, diags, issparse

from optmodel.auxiliary import ShapeMismatchError, format_name, _nnz_triples, _shape, _is_empty
from optmodel.idx_manager import _key
from optmodel.varsets import get_varset_map

logger = logging.getLogger(__name__)


class QuadForm(enum.Enum):
    """Form of the quadratic coefficients of a cost set."""
    NONE = 0        ## no quadratic term
    DIAGONAL = 1    ## Q given as column vector, the diagonal of the full matrix
    FULL = 2        ## Q given as (square) matrix


def quad_form(Q):
    """Returns the L{QuadForm} of the quadratic coefficients C{Q}.

    A 1-D array or a matrix with a single column (and more than one row)
    is a diagonal, a square matrix is a full matrix.
    """
    if _is_empty(Q):
        return QuadForm.NONE
    if not issparse(Q) and np.ndim(Q) < 2:
        return QuadForm.DIAGONAL
    m, n = _shape(Q)
    if n == 1 and m > 1:
        return QuadForm.DIAGONAL
    if m != n:
        raise ShapeMismatchError("quadratic cost matrix Q must be square or a column vector, "
                                 "got %d x %d" % (m, n))
    return QuadForm.FULL


def _as_vector(v):
    """Returns C{v}, dense or sparse, as flat float array."""
    if _is_empty(v):
        return np.zeros(0)
    if issparse(v):
        return np.asarray(v.toarray(), dtype=float).ravel()
    return np.asarray(v, dtype=float).ravel()


def quad_cost_len(Q, c, form=None):
    """Returns the number of variables a cost set with coefficients C{Q} and C{c} is defined on."""
    if form is None:
        form = quad_form(Q)
    if form is QuadForm.FULL:
        return _shape(Q)[0]
    if form is QuadForm.DIAGONAL:
        return len(_as_vector(Q))
    return len(_as_vector(c))


def params_quad_cost(om, name=None, idx=None):
    """Returns the cost parameters for quadratic costs.

    With no C{name}, it assembles and returns the parameters for the
    aggregate quadratic cost from all quadratic cost sets added using
    L{add_quad_cost}. The values of these parameters are cached for
    subsequent calls. The parameters are C{Q}, C{c} and C{k}, where the
    quadratic cost is of the form::

        F(x) = 1/2 * x'*Q*x + c'*x + k

    If a C{name} is provided then it simply returns the parameters for the
    corresponding named set, together with the variable sets C{vs} the
    coefficients refer to. Likewise for indexed named sets specified by
    C{name} and C{idx}. In this case, C{Q} and C{k} may be vectors,
    corresponding to a cost function of the form::

        F(x) = 1/2 * Q .* x.^2 + c .* x + k

    Examples::
        Q, c, k = params_quad_cost(om)
        Q, c, k, vs = params_quad_cost(om, 'gen_cost')
    """
    if name is not None:    ## individual set
        key = om._resolve('qdc', name, idx)
        data = om.qdc['data']
        return data['Q'][key], data['c'][key], data['k'][key], data['vs'][key]

    ## aggregate
    return om.qdc['params'].get(lambda: build_quad_cost_params(om))


def build_quad_cost_params(om):
    """Assembles the aggregate Q, c and k from all quadratic cost sets.

    The nonzeros of Q of each set are collected as (row, col, value)
    triples, diagonal sets contributing (i, i, value) triples, with rows and
    columns mapped from the variable sets of the set to x. Q is built from
    all triples at once, c by accumulating at the mapped indices. Values
    at coincident coordinates are summed, so sets sharing variables add up.
    """
    nx = om.var['N']        ## number of variables
    k = 0.                  ## constant term

    Q_rows, Q_cols, Q_vals = [], [], []
    c_idx, c_vals = [], []
    maps = {}

    for name, idx in om.qdc['order']:
        Qk, ck, kk, vs = params_quad_cost(om, name, idx)
        form = om.qdc['data']['form'][_key(name, idx)]
        label = format_name(name, idx)

        if form is QuadForm.DIAGONAL:
            ii = np.flatnonzero(_as_vector(Qk))
            qq = _as_vector(Qk)[ii]
            jj = ii
        elif form is QuadForm.FULL:
            ii, jj, qq = _nnz_triples(Qk)
        else:
            ii = jj = np.zeros(0, dtype=np.int64)
            qq = np.zeros(0)
        cc = _as_vector(ck)
        ic = np.flatnonzero(cc)

        nk = quad_cost_len(Qk, ck, form)
        if len(vs) == 0:
            if nk > nx:
                raise ShapeMismatchError("quadratic cost set '%s' is defined on %d variables, but "
                                         "there are only %d variables" % (label, nk, nx))
        else:
            varset_map = get_varset_map(om, vs, maps)
            if nk and nk != len(varset_map):
                raise ShapeMismatchError("quadratic cost set '%s' is defined on %d variables, but "
                                         "its variable sets hold %d variables"
                                         % (label, nk, len(varset_map)))
            ## map to indices of x, the same for rows and columns of diagonal sets
            ii, jj, ic = varset_map(ii), varset_map(jj), varset_map(ic)

        Q_rows.append(ii)
        Q_cols.append(jj)
        Q_vals.append(qq)
        c_idx.append(ic)
        c_vals.append(cc[cc != 0])
        k = k + np.sum(kk)

    if len(Q_rows):
        I, J, V = np.concatenate(Q_rows), np.concatenate(Q_cols), np.concatenate(Q_vals)
    else:
        I, J, V = np.zeros(0, dtype=np.int64), np.zeros(0, dtype=np.int64), np.zeros(0)

    ## coo_matrix sums the values of duplicate entries on conversion
    Q = coo_matrix((V, (I, J)), shape=(nx, nx)).asformat(om.omopt['SPARSE_FORMAT'])

    c = np.zeros(nx)        ## linear coefficients
    if len(c_idx):
        np.add.at(c, np.concatenate(c_idx), np.concatenate(c_vals))
    c.flags.writeable = False   ## shared by all callers via the cache

    logger.debug("assembled Q with %d nonzeros and c with %d nonzeros on %d variables from %d "
                 "quadratic cost sets" % (Q.nnz, np.count_nonzero(c), nx, om.qdc['NS']))

    return Q, c, float(k)


def eval_quad_cost(om, x, name=None, idx=None):
    """Evaluates the quadratic cost and its derivatives.

    Returns the value C{f}, the gradient C{df} and the Hessian C{d2f} of
    the aggregate cost or of one named (and indexed) cost set at C{x},
    which is always the full optimization vector::

        f, df, d2f = eval_quad_cost(om, x)
        f, df, d2f = eval_quad_cost(om, x, 'gen_cost')

    Sets with a diagonal C{Q}, or without C{Q} but with a vector C{k}, are
    evaluated element-wise, i.e. C{f} and C{df} are vectors and C{d2f} is
    the sparse diagonal matrix of C{Q}. A scalar C{k} of such a set is
    spread evenly over the elements, so that C{sum(f)} matches the
    contribution of the set to the aggregate cost.
    """
    x = np.asarray(x, dtype=float).ravel()
    if name is None:
        Q, c, k = params_quad_cost(om)
        Qx = Q.dot(x)
        f = 0.5 * x.dot(Qx) + c.dot(x) + k
        return f, Qx + c, Q

    Q, c, k, vs = params_quad_cost(om, name, idx)
    key = om._resolve('qdc', name, idx)
    form = om.qdc['data']['form'][key]
    nk = quad_cost_len(Q, c, form)
    if len(vs) == 0:
        xx = x[:nk]
    else:
        xx = x[get_varset_map(om, vs).jj]
    kk = np.asarray(k, dtype=float)
    if nk == 0:     ## constant cost only
        return (kk if kk.size > 1 else float(np.sum(kk))), np.zeros(0), None
    cc = _as_vector(c)
    if len(cc) == 0:
        cc = np.zeros(nk)

    if form is QuadForm.DIAGONAL or (form is QuadForm.NONE and kk.size > 1):
        qq = _as_vector(Q) if form is QuadForm.DIAGONAL else np.zeros(nk)
        if kk.size == 1:
            ## aggregate adds a scalar k once, not once per element
            kk = np.full(nk, kk.sum() / nk)
        f = 0.5 * qq * xx ** 2 + cc * xx + kk
        return f, qq * xx + cc, diags(qq, format=om.omopt['SPARSE_FORMAT'])

    if form is QuadForm.FULL:
        Qx = np.asarray(Q.dot(xx)).ravel()
        d2f = Q
    else:
        Qx = np.zeros(nk)
        d2f = None
    f = 0.5 * xx.dot(Qx) + cc.dot(xx) + np.sum(kk)
    return f, Qx + cc, d2f
