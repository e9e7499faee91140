# -*- coding: utf-8 -*-

# Copyright (c) 2016-2020 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

import logging
import enum

logger = logging.getLogger(__name__)


class CacheState(enum.Enum):
    EMPTY = 0
    BUILT = 1


class ParamsCache(object):
    """
    Memoizes the aggregate parameters of one kind of set (linear constraints or quadratic costs).

    The cache is either EMPTY or BUILT. get() builds the parameters with the given builder if
    the cache is EMPTY and returns the stored parameters otherwise. invalidate() is called by the
    owning model whenever a set is added or the number of variables changes; there is no partial
    invalidation.
    """

    def __init__(self, name):
        self.name = name
        self.state = CacheState.EMPTY
        self.n_builds = 0
        self._params = None

    def __repr__(self):  # pragma: no cover
        return "ParamsCache('%s', %s, n_builds=%d)" % (self.name, self.state.name, self.n_builds)

    @property
    def params(self):
        """
        The cached parameters, None if the cache is EMPTY.
        """
        return self._params

    def get(self, builder):
        if self.state is CacheState.EMPTY:
            self._params = builder()
            self.state = CacheState.BUILT
            self.n_builds += 1
            logger.debug("built aggregate %s parameters (build %d)" % (self.name, self.n_builds))
        return self._params

    def invalidate(self):
        if self.state is CacheState.BUILT:
            logger.debug("invalidated aggregate %s parameters" % self.name)
        self._params = None
        self.state = CacheState.EMPTY
