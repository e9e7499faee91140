import os
from optmodel import om_dir

test_path = os.path.join(om_dir, 'test')
