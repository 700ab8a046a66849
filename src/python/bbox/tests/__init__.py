#-*-coding:utf-8-*-
"""
@package bbox.tests
Main test package for all bbox code.

@author Sebastian Thiel
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
import logging


def _initialize():
    """Set debug logging for test cases"""
    logging.root.setLevel(logging.DEBUG)

# end _initialize


_initialize()
