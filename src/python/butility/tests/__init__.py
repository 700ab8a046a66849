#-*-coding:utf-8-*-
"""
@package butility.tests
@brief Test utilities shared by all packages

@author Sebastian Thiel
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
from .base import *
