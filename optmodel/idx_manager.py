# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2020 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Bookkeeping of named and indexed sets of variables, constraints and costs.
"""

import logging

import numpy as np
import pandas as pd

from optmodel.auxiliary import IndexRequiredError, UnknownBlockError, DuplicateBlockError, \
    OptModelException, format_name, _as_idx
from optmodel.cache import ParamsCache

logger = logging.getLogger(__name__)

SET_TYPES = {
    'var': 'VARIABLES',
    'lin': 'LINEAR CONSTRAINTS',
    'qdc': 'QUADRATIC COSTS'
}


def _new_set_type(set_type, data_fields, cached=True):
    """Returns the (empty) dict holding all named sets of one set type.

    Keys of the per-set dicts in 'idx' and 'data' are the set names for simple sets and
    (name, idx) tuples for indexed sets. 'dims' is keyed by name only and holds None for simple
    sets and the dimensions for indexed sets.
    """
    st = {
        'idx': {
            'i1': {},   ## starting index within the aggregate
            'iN': {},   ## ending index within the aggregate (exclusive)
            'N': {},    ## number of elements in this set
            'dims': {}  ## None for simple sets, dimensions of indexed sets
        },
        'N': 0,         ## total number of elements in the aggregate
        'NS': 0,        ## number of named (and indexed) sets
        'data': dict((field, {}) for field in data_fields),
        'order': []     ## list of (name, idx) in the order they appear in the aggregate
    }
    if cached:
        st['params'] = ParamsCache(set_type)  ## cached aggregate parameters
    return st


def _key(name, idx):
    return name if len(idx) == 0 else (name, idx)


class IdxManager(object):
    """Base class keeping track of the ordering and indexing of named blocks
    of variables, linear constraints and quadratic costs.

    Each set type ('var', 'lin', 'qdc') is a dict created by L{_new_set_type}.
    Simple sets are addressed by their name, indexed sets by name plus a tuple
    of sub-indices after the dimensions of the family have been declared via
    L{init_indexed_name}.
    """

    def __init__(self):
        self.var = _new_set_type('var', ['v0', 'vl', 'vu'], cached=False)
        self.lin = _new_set_type('lin', ['A', 'l', 'u', 'vs'])
        self.qdc = _new_set_type('qdc', ['Q', 'c', 'k', 'vs', 'form'])

    def _set_type(self, set_type):
        if set_type not in SET_TYPES:
            raise ValueError("unknown set type '%s', expected one of %s"
                             % (set_type, list(SET_TYPES)))
        return getattr(self, set_type)

    def init_indexed_name(self, set_type, name, dims):
        """Initializes the dimensions for an indexed named set.

        A named set can be indexed by calling this method first to declare
        the dimensions of the family, e.g. before adding constraint sets
        'R(0,0)' ... 'R(1,2)'::

            om.init_indexed_name('lin', 'R', (2, 3))
            for i in range(2):
                for j in range(3):
                    om.add_lin_constraint('R', A[i][j], l[i][j], u[i][j], idx=(i, j))

        Sub-indices are 0-based.
        """
        st = self._set_type(set_type)
        if name in st['idx']['dims']:
            raise DuplicateBlockError("%s set named '%s' already exists" % (set_type, name))
        dims = _as_idx(dims)
        if len(dims) == 0 or any(d < 1 for d in dims):
            raise ValueError("dimensions of indexed %s set '%s' must be positive, got %s"
                             % (set_type, name, dims))
        st['idx']['dims'][name] = dims

    def _resolve(self, set_type, name, idx=None):
        """Returns the key under which the named (and indexed) set is stored.

        Raises L{IndexRequiredError} if C{idx} is omitted for an indexed set
        and L{UnknownBlockError} if the set does not exist.
        """
        st = self._set_type(set_type)
        idx = _as_idx(idx)
        if name not in st['idx']['dims']:
            raise UnknownBlockError(set_type, name, idx)
        dims = st['idx']['dims'][name]
        if len(idx) == 0:
            if dims is not None:
                raise IndexRequiredError(set_type, name)
            return name
        key = (name, idx)
        if key not in st['idx']['N']:
            raise UnknownBlockError(set_type, name, idx)
        return key

    def _add_named_set(self, set_type, name, idx, N, **data):
        """Adds the bookkeeping for a named set of C{N} elements and stores its data."""
        st = self._set_type(set_type)
        idx = _as_idx(idx)
        dims = st['idx']['dims'].get(name, None)

        if len(idx) == 0:
            if name in st['idx']['dims']:
                if dims is not None:
                    raise IndexRequiredError(set_type, name)
                raise DuplicateBlockError("%s set named '%s' already exists" % (set_type, name))
        else:
            if dims is None:
                raise OptModelException("%s set '%s' must be initialized with init_indexed_name() "
                                        "before adding %s" % (set_type, name,
                                                              format_name(name, idx)))
            if len(idx) != len(dims) or any(i < 0 or i >= d for i, d in zip(idx, dims)):
                raise UnknownBlockError(set_type, name, idx)
            if (name, idx) in st['idx']['N']:
                raise DuplicateBlockError("%s set named '%s' already exists"
                                          % (set_type, format_name(name, idx)))

        key = _key(name, idx)
        if len(idx) == 0:
            st['idx']['dims'][name] = None

        ## add info about this set
        st['idx']['i1'][key] = st['N']        ## starting index
        st['idx']['iN'][key] = st['N'] + N    ## ending index
        st['idx']['N'][key] = N               ## number of elements
        for field, value in data.items():
            st['data'][field][key] = value

        ## update number of elements and sets
        st['N'] = st['idx']['iN'][key]
        st['NS'] = st['NS'] + 1

        ## put name in ordered list of sets
        st['order'].append((name, idx))
        logger.debug("added %s set '%s' with %d elements" % (set_type, format_name(name, idx), N))
        return key

    def getN(self, set_type, name=None, idx=None):
        """Returns the number of variables, constraints or cost rows.

        Returns either the total number for the set type or the number
        corresponding to a specified named block. For an indexed family
        without C{idx} an array with the dimensions of the family is
        returned, holding zeros for sub-sets not added (yet).

        Examples::
            N = om.getN('var')              : total number of variables
            N = om.getN('lin')              : total number of linear constraints
            N = om.getN('lin', 'Pmis')      : number of constraints in named set
            N = om.getN('lin', 'R', (0, 1)) : number of constraints in indexed set
            N = om.getN('lin', 'R')         : array of N for all of 'R'
        """
        st = self._set_type(set_type)
        if name is None:
            return st['N']
        if name not in st['idx']['dims']:
            return 0
        dims = st['idx']['dims'][name]
        idx = _as_idx(idx)
        if len(idx) == 0 and dims is not None:
            N = np.zeros(dims, dtype=np.int64)
            for (n, i) in st['order']:
                if n == name:
                    N[i] = st['idx']['N'][(n, i)]
            return N
        return st['idx']['N'].get(_key(name, idx), 0)

    def get_idx(self, *set_types):
        """Returns the idx dict for vars, linear constraints and/or costs.

        The 'i1' dict holds the starting indices, 'iN' the (exclusive) ending
        indices and 'N' the sizes of each named block, keyed by name for
        simple sets and by (name, idx) for indexed sets.

        Examples::
            vv, ll, qq = om.get_idx()
            vv, ll = om.get_idx('var', 'lin')

        To extract a 'z' variable from x::
            z = x[vv['i1']['z']:vv['iN']['z']]
        """
        if len(set_types) == 0:
            set_types = ('var', 'lin', 'qdc')
        idxs = tuple(self._set_type(s)['idx'] for s in set_types)
        return idxs[0] if len(idxs) == 1 else idxs

    def describe_idx(self, set_type, idxs):
        """Identifies the named set an index into the aggregate belongs to.

        Returns a label such as 'Pg' or 'R(0,1)' followed by the position
        within that set, e.g. 'Pg(2)' for the third element of set 'Pg'.
        A list of labels is returned if C{idxs} is a sequence.
        """
        st = self._set_type(set_type)
        scalar = np.isscalar(idxs)
        labels = []
        for i in np.atleast_1d(idxs):
            if i < 0 or i >= st['N']:
                raise IndexError("index %d out of range for %s with %d elements"
                                 % (i, set_type, st['N']))
            for name, idx in st['order']:
                key = _key(name, idx)
                if st['idx']['i1'][key] <= i < st['idx']['iN'][key]:
                    labels.append("%s(%d)" % (format_name(name, idx), i - st['idx']['i1'][key]))
                    break
        return labels[0] if scalar else labels

    def idx_table(self, set_type):
        """Returns the ordering of the named sets of one type as a DataFrame
        with the columns name, idx, i1, iN and N.
        """
        st = self._set_type(set_type)
        rows = []
        for name, idx in st['order']:
            key = _key(name, idx)
            rows.append((name, idx, st['idx']['i1'][key], st['idx']['iN'][key],
                         st['idx']['N'][key]))
        return pd.DataFrame(rows, columns=['name', 'idx', 'i1', 'iN', 'N'])

    def invalidate_cache(self, set_type=None):
        """Clears the cached aggregate parameters of one or all set types."""
        set_types = ('lin', 'qdc') if set_type is None else (set_type,)
        for s in set_types:
            cache = self._set_type(s).get('params', None)
            if cache is not None:
                cache.invalidate()

    def __repr__(self):  # pragma: no cover
        """String representation of the object.
        """
        s = ''
        for set_type, title in SET_TYPES.items():
            st = self._set_type(set_type)
            if st['NS']:
                s += '\n%-22s %12s %8s %8s %8s\n' % (title, 'name', 'i1', 'iN', 'N')
                s += '%-22s %12s %8s %8s %8s\n' % ('=' * len(title), '------', '-----', '-----',
                                                 '------')
                for k, (name, idx) in enumerate(st['order']):
                    key = _key(name, idx)
                    s += '%15d:%19s %8d %8d %8d\n' % (k, format_name(name, idx),
                                                     st['idx']['i1'][key], st['idx']['iN'][key],
                                                     st['idx']['N'][key])
                s += '%15s%31s\n' % (('%s.NS = %d' % (set_type, st['NS'])),
                                     ('%s.N = %d' % (set_type, st['N'])))
            else:
                s += '%s  :  <none>\n' % title
        return s
