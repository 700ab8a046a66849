#-*-coding:utf-8-*-
"""
@package butility
@brief A package with useful utilities that have no dependency to any other non-platform code

@author Sebastian Thiel
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
from .base import *

__version__ = '0.1.0'
