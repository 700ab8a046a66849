#-*-coding:utf-8-*-
"""
@package bmodel
@brief Models with transactional properties, whose schema is resolved along the inheritance chain

@author Sebastian Thiel
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__version__ = '0.1.0'

from .schema import *
from .base import *
from .serialize import *
