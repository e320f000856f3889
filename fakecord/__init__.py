"""
Fakecord
~~~~~~~~
Renders fake chat message screenshots.

:copyright: (c) 2018-present HitchedSyringe
:license: MPL-2.0, see LICENSE for more information.

"""


__title__ = "fakecord"
__author__ = "HitchedSyringe"
__copyright__ = "Copyright (c) 2018-present HitchedSyringe"
__license__ = "MPL-2.0"
__version__ = "1.0.0"


from . import utils as utils
from .avatar import *
from .composer import *
from .config import *
from .errors import *
from .fonts import *
from .http import *
from .resolver import *
from .utils import random_timestamp as random_timestamp
