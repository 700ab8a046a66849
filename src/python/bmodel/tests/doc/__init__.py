#-*-coding:utf-8-*-
"""
@package bmodel.tests.doc
A package with tests whose code is extracted as doxygen snippets into the documentation.

Keeping examples in tests assures they actually work. Each example is enclosed in markers like
`## [snippet name]`, and referred to using the \@snippet doxygen command.
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = []
