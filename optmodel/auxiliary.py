# -*- coding: utf-8 -*-

# Copyright (c) 2016-2020 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

import logging

import numpy as np
from scipy.sparse import issparse


class OptModelException(Exception):
    """
    General optmodel custom parent exception.
    """
    pass


class IndexRequiredError(OptModelException):
    """
    Raised if an indexed set is accessed by its name only.
    """
    def __init__(self, set_type, name):
        self.set_type = set_type
        self.name = name
        super().__init__("%s set '%s' requires an IDX arg" % (set_type, name))


class UnknownBlockError(OptModelException, KeyError):
    """
    Raised if a name or a (name, idx) pair is not present in the model.
    """
    def __init__(self, set_type, name, idx=()):
        self.set_type = set_type
        self.name = name
        self.idx = idx
        super().__init__("%s set '%s' does not exist" % (set_type, format_name(name, idx)))

    def __str__(self):
        # KeyError would otherwise print the repr of the message
        return self.args[0]


class ShapeMismatchError(OptModelException, ValueError):
    """
    Raised if the dimensions of a block's coefficients do not match its variable sets or its
    row range.
    """
    pass


class DuplicateBlockError(OptModelException):
    """
    Raised if a named (or named and indexed) set is added twice.
    """
    pass


def format_name(name, idx=()):
    """
    Returns the label of a named set, e.g. 'Pmis' or 'Pmis(1,2)'.
    """
    if idx is None or len(idx) == 0:
        return str(name)
    return "%s(%s)" % (name, ",".join(str(i) for i in idx))


def _as_idx(idx):
    """
    Normalizes an index given as None, int or sequence of ints to a tuple.
    """
    if idx is None:
        return ()
    if isinstance(idx, (int, np.integer)):
        return (int(idx),)
    return tuple(int(i) for i in idx)


def _nnz_triples(M):
    """
    Returns row indices, column indices and values of the nonzero entries of a dense or sparse
    matrix, like MATLAB's find().
    """
    if issparse(M):
        M = M.tocoo()
        nz = M.data != 0
        return M.row[nz].astype(np.int64), M.col[nz].astype(np.int64), M.data[nz]
    M = np.atleast_2d(np.asarray(M))
    rows, cols = np.nonzero(M)
    return rows.astype(np.int64), cols.astype(np.int64), M[rows, cols]


def _shape(M):
    if issparse(M):
        return M.shape
    return np.atleast_2d(np.asarray(M)).shape


def _is_empty(M):
    if M is None:
        return True
    if issparse(M):
        return M.shape[0] * M.shape[1] == 0
    return np.size(M) == 0


def set_verbosity(verbose, package_logger=None):
    """
    Sets the level of the optmodel package logger according to the VERBOSE option.

    INPUT:
        **verbose** (int) - 0: warnings only, 1: info, 2 and above: debug
    """
    if package_logger is None:
        package_logger = logging.getLogger("optmodel")
    if verbose >= 2:
        package_logger.setLevel(logging.DEBUG)
    elif verbose == 1:
        package_logger.setLevel(logging.INFO)
    else:
        package_logger.setLevel(logging.WARNING)
    return package_logger
