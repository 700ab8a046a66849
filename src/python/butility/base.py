#-*-coding:utf-8-*-
"""
@package butility.base
@brief Most fundamental base types and value utilities

@author Sebastian Thiel
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['Error', 'IllegalArgument', 'Interface', 'Meta', 'abstractmethod', 'NonInstantiatable',
           'NoValue', 'TRACE', 'is_scalar', 'is_sequence', 'is_object_like',
           'shallow_copy', 'values_differ']

import logging

from abc import (abstractmethod,
                 ABCMeta)
from copy import copy

log = logging.getLogger('butility.base')


# ==============================================================================
## @name Constants
# ------------------------------------------------------------------------------
## @{

## Values of these types are compared by value, everything else by identity
scalar_types = (type(None), bool, int, float, complex, str, bytes)

## Types we accept as ordered sequence of names
sequence_types = (list, tuple)

## Containers which are duplicated when used as default value
container_types = (list, dict, set)

## The TRACE log level, between DEBUG and INFO
TRACE = int((logging.INFO + logging.DEBUG) / 2)

## -- End Constants -- @}


# ==============================================================================
## @name Logging
# ------------------------------------------------------------------------------
## @{

## Adjust logging configuration
# TRACE should be there whenever someone uses the basic parts of the framework, code relies on it.
setattr(logging, 'TRACE', TRACE)
logging.addLevelName(TRACE, 'TRACE')

## -- End Logging -- @}


# ==============================================================================
## \name Exceptions
# ------------------------------------------------------------------------------
# Basic Exception Types
## \{

class Error(Exception):
    """Most foundational framework exception"""
    __slots__ = ()

# end class Error


class IllegalArgument(Error, ValueError):
    """Thrown whenever a model, its schema or one of its storage backends is misused by the programmer.

    It is raised right at the point of misuse, i.e. when a model type is defined or a model is constructed,
    never when properties are accessed later on.
    @note the string representation is always prefixed with 'IllegalArgument,'"""
    __slots__ = ()

    def __str__(self):
        if not self.args:
            return type(self).__name__
        return "%s, %s" % (type(self).__name__, self.args[0])

# end class IllegalArgument

## -- End Exceptions -- \}


# ==============================================================================
## \name Meta-Classes
# ------------------------------------------------------------------------------
## \{

class Meta(ABCMeta):
    """A base class for all other meta-classes used in our packages.

    Subtypes hook into class creation to digest information stored in the class dictionary"""

    @classmethod
    def _own_class_attribute(metacls, cls, attribute, default=None):
        """@return value at cls.__dict__[attribute], or default if the class itself doesn't define it.
        @note inherited values are ignored on purpose, each type only contributes what it declares"""
        return cls.__dict__.get(attribute, default)

# end class Meta

## -- End Meta-Classes -- \}


# ==============================================================================
## \name Basic Types
# ------------------------------------------------------------------------------
## \{

class Interface(object, metaclass=Meta):
    """base class for all interfaces"""

    ## Slots help to protect against typos when assigning variables, keep instances small, and document the
    ## types member variables
    __slots__ = tuple()

    def supports(self, interface_type):
        """@return True if this instance supports the interface of the given type
        @param interface_type type of the interface/class you require this instance to be derived from, or a
        tuple of interfaces or classes"""
        return isinstance(self, interface_type)

# end class Interface


class NonInstantiatable(object):
    """A mixin which will makes it impossible to instantiate derived types

    @throws TypeError if someone tries to create an instance"""
    __slots__ = ()

    def __new__(cls, *args, **kwargs):
        """Prevents instantiation"""
        raise TypeError("This type cannot be instantiated")

# end class NonInstantiatable


class NoValue(NonInstantiatable):
    """A type denoting no particular value, which allows properties to be None (without indicating no-value).

    It is what you get when reading a property which was neither staged nor committed."""

# end class NoValue

## -- End Basic Types -- \}


# ==============================================================================
## @name Routines
# ------------------------------------------------------------------------------
## @{

def is_scalar(value):
    """@return True if value is compared by value rather than by identity"""
    return isinstance(value, scalar_types)


def is_sequence(value):
    """@return True if value is an ordered sequence of items, like a list of property names.
    @note strings are not considered sequences"""
    return isinstance(value, sequence_types)


def is_object_like(value):
    """@return True if value can carry named values, either as mapping or through attributes"""
    return not isinstance(value, scalar_types + sequence_types + (set, frozenset))


def shallow_copy(value):
    """@return a shallow copy of lists, dicts and sets, or value itself for everything else.
    Useful to prevent default values from being shared among instances"""
    if isinstance(value, container_types):
        return copy(value)
    return value


def values_differ(left, right):
    """@return True if left and right are not strictly equal.

    Scalars are equal if their type and value are the same, with numbers (but not booleans) being compared
    by value only. All other values are equal only if they are the same object, which is why
    structurally equal containers are considered different. There is no deep comparison."""
    if left is right:
        return False
    if not (is_scalar(left) and is_scalar(right)):
        return True
    if isinstance(left, (int, float)) and isinstance(right, (int, float)) \
       and not isinstance(left, bool) and not isinstance(right, bool):
        return left != right
    return type(left) is not type(right) or left != right

## -- End Routines -- @}
