import os
om_dir = os.path.dirname(os.path.realpath(__file__))

from optmodel._version import __version__
from optmodel.auxiliary import OptModelException, IndexRequiredError, UnknownBlockError, \
    ShapeMismatchError, DuplicateBlockError
from optmodel.omoption import omoption
from optmodel.opt_model import OptModel
