# -*- coding: utf-8 -*-

# Copyright 1996-2015 PSERC. All rights reserved.
# Use of this source code is governed by a BSD-style
# license that can be found in the LICENSE file.

# Copyright (c) 2016-2020 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

"""Used to set and retrieve an optmodel options dict.
"""

MODEL_OPTIONS = [
    ('sparse_format', 'csr', '''format of the assembled sparse matrices:
'csr' - compressed sparse row,
'csc' - compressed sparse column'''),

    ('check_row_ranges', True, '''check that the row ranges of the linear
constraint sets are contiguous and disjoint before
assembling the aggregate constraint matrix''')
]

OUTPUT_OPTIONS = [
    ('verbose', 0, '''amount of progress info logged:
0 - warnings only,
1 - a little progress info,
2 - all progress info (debug level)''')
]

SPARSE_FORMATS = ('csr', 'csc')


def omoption(omopt=None, **kw_args):
    """Used to set and retrieve an optmodel options dict.

    C{opt = omoption()} returns the default options dict

    C{opt = omoption(NAME1=VALUE1, NAME2=VALUE2, ...)} returns the default
    options dict with new values for the specified options, NAME# is the
    name of an option, and VALUE# is the new value.

    C{opt = omoption(OPT, NAME1=VALUE1, NAME2=VALUE2, ...)} same as above
    except it uses the options dict OPT as a base instead of the default
    options dict.

    Examples::
        opt = omoption(SPARSE_FORMAT='csc')
        opt = omoption(opt, VERBOSE=2)
    """
    default_omopt = {}

    options = MODEL_OPTIONS + OUTPUT_OPTIONS

    for name, default, _ in options:
        default_omopt[name.upper()] = default

    omopt = default_omopt if omopt is None else omopt.copy()

    for name, value in kw_args.items():
        if name.upper() not in default_omopt:
            raise ValueError("omoption: unknown option '%s'" % name)
        omopt[name.upper()] = value

    if omopt['SPARSE_FORMAT'] not in SPARSE_FORMATS:
        raise ValueError("omoption: SPARSE_FORMAT must be one of %s, got '%s'"
                         % (SPARSE_FORMATS, omopt['SPARSE_FORMAT']))

    return omopt
