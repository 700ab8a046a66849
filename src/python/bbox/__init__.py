#-*-coding:utf-8-*-
"""
@package bbox
@brief Toplevel package for staging property changes on top of pluggable storage backends

@author Sebastian Thiel
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__version__ = '0.1.0'

from .base import *
from .storage import *
