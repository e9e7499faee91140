# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2020 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Builds and returns the parameters of linear constraints l <= A * x <= u.
"""

import logging

from numpy import inf, ones, zeros, concatenate, int64
from scipy.sparse import coo_matrix

from optmodel.auxiliary import ShapeMismatchError, format_name, _nnz_triples, _shape
from optmodel.varsets import get_varset_map

logger = logging.getLogger(__name__)


def params_lin_constraint(om, name=None, idx=None):
    """Builds and returns linear constraint parameters.

    With no C{name}, it assembles and returns the parameters for the
    aggregate linear constraints from all linear constraint sets added
    using L{add_lin_constraint}. The values of these parameters are cached
    for subsequent calls. The parameters are C{A}, C{l} and C{u} where the
    linear constraint is of the form::

        l <= A * x <= u

    If a C{name} is provided then it simply returns the parameters for the
    corresponding named set, together with the variable sets C{vs} the
    columns of C{A} refer to and the starting and (exclusive) ending row
    indices C{i1}, C{iN} of the set in the aggregate constraint matrix.
    Likewise for indexed named sets specified by C{name} and C{idx}.

    Examples::
        A, l, u = params_lin_constraint(om)
        A, l, u, vs, i1, iN = params_lin_constraint(om, 'Pmis')
    """
    if name is not None:    ## individual set
        key = om._resolve('lin', name, idx)
        data = om.lin['data']
        return data['A'][key], data['l'][key], data['u'][key], data['vs'][key], \
            om.lin['idx']['i1'][key], om.lin['idx']['iN'][key]

    ## aggregate
    return om.lin['params'].get(lambda: build_lin_constraint_params(om))


def _check_row_ranges(om):
    """Checks that the row ranges of all linear constraint sets are contiguous and disjoint."""
    i_next = 0
    for name, idx in om.lin['order']:
        _, _, _, _, i1, iN = params_lin_constraint(om, name, idx)
        if i1 != i_next or iN < i1:
            raise ShapeMismatchError("linear constraint set '%s' occupies rows %d:%d, expected "
                                     "to start at row %d" % (format_name(name, idx), i1, iN,
                                                             i_next))
        i_next = iN
    if i_next != om.lin['N']:
        raise ShapeMismatchError("linear constraint sets cover %d rows, expected %d"
                                 % (i_next, om.lin['N']))


def build_lin_constraint_params(om):
    """Assembles the aggregate A, l and u from all linear constraint sets.

    The nonzeros of each set are collected as (row, col, value) triples with
    rows shifted to the row range of the set and columns mapped from the
    variable sets of the set to the columns of x. A is built from all
    triples at once; values at coincident coordinates are summed.
    """
    nx = om.var['N']        ## number of variables
    nlin = om.lin['N']      ## number of linear constraints
    u = inf * ones(nlin)    ## upper bound
    l = -u                  ## lower bound

    if om.omopt['CHECK_ROW_RANGES']:
        _check_row_ranges(om)

    rows, cols, vals = [], [], []
    maps = {}

    ## fill in each piece
    for name, idx in om.lin['order']:
        Ak, lk, uk, vs, i1, iN = params_lin_constraint(om, name, idx)
        mk, nk = _shape(Ak)     ## size of Ak
        if not mk:
            continue
        if mk != iN - i1:
            raise ShapeMismatchError("linear constraint set '%s' has %d rows, but occupies "
                                     "rows %d:%d" % (format_name(name, idx), mk, i1, iN))

        ## find nonzero sub indices and values
        ii, jj, vv = _nnz_triples(Ak)
        if len(vs) == 0:
            if nk > nx:
                raise ShapeMismatchError("linear constraint set '%s' has %d columns, but there "
                                         "are only %d variables" % (format_name(name, idx), nk, nx))
        else:
            varset_map = get_varset_map(om, vs, maps)
            if nk != len(varset_map):
                raise ShapeMismatchError("linear constraint set '%s' has %d columns, but its "
                                         "variable sets hold %d variables"
                                         % (format_name(name, idx), nk, len(varset_map)))
            jj = varset_map(jj)     ## map to columns of x
        rows.append(ii + i1)        ## shift to rows of the full matrix
        cols.append(jj)
        vals.append(vv)

        l[i1:iN] = lk
        u[i1:iN] = uk

    if len(rows):
        I, J, V = concatenate(rows), concatenate(cols), concatenate(vals)
    else:
        I, J, V = zeros(0, dtype=int64), zeros(0, dtype=int64), zeros(0)

    ## shared by all callers via the cache
    l.flags.writeable = False
    u.flags.writeable = False

    ## coo_matrix sums the values of duplicate entries on conversion
    A = coo_matrix((V, (I, J)), shape=(nlin, nx)).asformat(om.omopt['SPARSE_FORMAT'])
    logger.debug("assembled A with %d rows, %d columns and %d nonzeros from %d linear constraint "
                 "sets" % (nlin, nx, A.nnz, om.lin['NS']))

    return A, l, u


def eval_lin_constraint(om, x, name=None, idx=None):
    """Evaluates A * x for the aggregate or for one named (and indexed) set.

    C{x} is always the full optimization vector. For a named set only the
    variables of its variable sets are used.
    """
    if name is None:
        A, _, _ = params_lin_constraint(om)
        return A.dot(x)

    A, _, _, vs, _, _ = params_lin_constraint(om, name, idx)
    nk = _shape(A)[1]
    if len(vs) == 0:
        xx = x[:nk]
    else:
        xx = x[get_varset_map(om, vs).jj]
    return A.dot(xx)
