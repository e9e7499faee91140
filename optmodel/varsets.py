# -*- coding: utf-8 -*-

# Copyright (c) 2016-2020 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Mapping of the local columns of a block to the columns of the full
optimization variable vector x.
"""

import numpy as np

from optmodel.auxiliary import _as_idx


def _varset_ref(v):
    """Splits a variable set reference, given as name or (name, idx), into name and idx tuple."""
    if isinstance(v, str):
        return v, ()
    name, idx = v
    return name, _as_idx(idx)


def varsets_normalize(vs):
    """Returns the variable set references C{vs} as a list of (name, idx) tuples.

    C{vs} may be None, a single name, or a sequence of names and
    (name, idx) pairs. An empty list stands for the full vector x.
    """
    if vs is None:
        return []
    if isinstance(vs, str):
        return [(vs, ())]
    return [_varset_ref(v) for v in vs]


class VarSetMap(object):
    """Offset table of a list of variable sets.

    Holds one (key, i1, N) entry per variable set in C{vs}, where C{key}
    identifies the variable set, C{i1} is its starting index in x and C{N}
    its number of variables, and the lookup array C{jj} translating each
    local column (0-based within the concatenated variable sets) to its
    column in x. The table is built from the current variable index, so
    variable sets added after a block was registered are accounted for.
    """

    def __init__(self, om, vs):
        self.vs = varsets_normalize(vs)
        vv = om.var['idx']
        self.table = []
        for name, idx in self.vs:
            key = om._resolve('var', name, idx)
            self.table.append((key, vv['i1'][key], vv['N'][key]))
        if len(self.table):
            self.jj = np.concatenate([np.arange(i1, i1 + N, dtype=np.int64)
                                      for _, i1, N in self.table])
        else:
            self.jj = np.zeros(0, dtype=np.int64)

    def __len__(self):
        return len(self.jj)

    def __call__(self, local):
        return self.jj[local]


def varsets_len(om, vs):
    """Returns the number of variables in the variable sets C{vs}.

    Returns the total number of variables C{N} of the model if C{vs} is empty.
    """
    vs = varsets_normalize(vs)
    if len(vs) == 0:
        return om.var['N']
    vv = om.var['idx']
    return sum(vv['N'][om._resolve('var', name, idx)] for name, idx in vs)


def varsets_idx(om, vs):
    """Returns the indices into x of the variables in the variable sets C{vs}.

    Returns all indices of x if C{vs} is empty.
    """
    vs = varsets_normalize(vs)
    if len(vs) == 0:
        return np.arange(om.var['N'], dtype=np.int64)
    return VarSetMap(om, vs).jj


def get_varset_map(om, vs, maps=None):
    """Returns the L{VarSetMap} of C{vs}.

    C{maps} is an optional dict used to reuse the offset tables of variable
    set lists that occur in several blocks.
    """
    if maps is None:
        return VarSetMap(om, vs)
    vs = tuple(varsets_normalize(vs))
    if vs not in maps:
        maps[vs] = VarSetMap(om, vs)
    return maps[vs]


def map_columns(om, vs, local, maps=None):
    """Maps local column indices of a block defined over C{vs} to columns of x.

    Local indices are returned unchanged if C{vs} is empty.
    """
    if len(vs) == 0:
        return local
    return get_varset_map(om, vs, maps)(local)
