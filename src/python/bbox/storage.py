#-*-coding:utf-8-*-
"""
@package bbox.storage
@brief Storage backends keeping the committed snapshot of a model

@author Sebastian Thiel
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['IStorage', 'PlainStorage', 'CallbackStorage', 'ContainerStorage', 'storage_from_options']

import logging

from collections.abc import Mapping

from butility import (Interface,
                      IllegalArgument,
                      TRACE,
                      abstractmethod)

log = logging.getLogger('bbox.storage')


# ==============================================================================
## @name Interfaces
# ------------------------------------------------------------------------------
## @{

class IStorage(Interface):
    """An interface for backends which own the committed snapshot of a model.

    The model is passed to all methods, allowing one backend implementation to serve callbacks which need
    to know the model they are working for."""
    __slots__ = ()

    @abstractmethod
    def read(self, model):
        """@return the current committed snapshot of the given model, a mapping"""

    @abstractmethod
    def write(self, model, modified, boxed, callback):
        """Adopt modified as new committed snapshot
        @param model the model whose properties are written
        @param modified a mapping with all properties
        @param boxed True if called to commit staged properties
        @param callback None or a function to call once the snapshot was adopted
        @return anything, it will be returned by the model's save() method"""

    @abstractmethod
    def replace(self, model, value):
        """Replace the committed snapshot with value right away, this is not a commit of staged values"""

# end class IStorage

## -- End Interfaces -- @}


# ==============================================================================
## @name Types
# ------------------------------------------------------------------------------
## @{

class PlainStorage(IStorage):
    """A storage which keeps the snapshot in a dict it owns"""
    __slots__ = ('_props')

    def __init__(self, props=None):
        self._props = dict() if props is None else props

    def read(self, model):
        return self._props

    def write(self, model, modified, boxed, callback):
        self._props = modified
        if callback is not None:
            return callback()
        return None

    def replace(self, model, value):
        self._props = value

# end class PlainStorage


class CallbackStorage(IStorage):
    """A storage which delegates to a caller supplied pair of functions.

    * get_props(model) returns the snapshot
    * set_props(model, modified, boxed, callback) stores it, and calls callback if it is not None.
      boxed is False and callback is None when the snapshot is replaced directly"""
    __slots__ = (
                    '_get_props',
                    '_set_props'
                )

    def __init__(self, get_props, set_props):
        for name, function in (('get_props', get_props), ('set_props', set_props)):
            if not callable(function):
                raise IllegalArgument("%s must be callable, got %r" % (name, function))
        # end for each function
        self._get_props = get_props
        self._set_props = set_props

    def read(self, model):
        return self._get_props(model)

    def write(self, model, modified, boxed, callback):
        return self._set_props(model, modified, boxed, callback)

    def replace(self, model, value):
        log.log(TRACE, "replacing props of %s through set_props", type(model).__name__)
        self._set_props(model, value, False, None)

# end class CallbackStorage


class ContainerStorage(IStorage):
    """A storage which keeps the snapshot in the state of a component-like container.

    The snapshot lives at state_holder.state[state_name], and is changed by calling
    state_holder.set_state({state_name: modified}, callback), which merges it into the state and calls the
    callback afterwards, if it is not None. That way, multiple models can share one state holder."""
    __slots__ = (
                    '_state_holder',
                    '_state_name'
                )

    # -------------------------
    ## @name Configuration
    # @{

    ## Name of the method to call on the state holder to merge a partial state
    update_method = 'set_state'

    ## -- End Configuration -- @}

    def __init__(self, state_holder, state_name):
        if not isinstance(getattr(state_holder, 'state', None), Mapping):
            raise IllegalArgument("state_holder must provide a 'state' mapping, got %r" % (state_holder, ))
        if not callable(getattr(state_holder, self.update_method, None)):
            raise IllegalArgument("state_holder must provide a '%s' method, got %r" % (self.update_method,
                                                                                       state_holder))
        # end verify state holder
        self._state_holder = state_holder
        self._state_name = state_name

    def _update(self, value, callback):
        return getattr(self._state_holder, self.update_method)({self._state_name: value}, callback)

    def read(self, model):
        return self._state_holder.state.get(self._state_name)

    def write(self, model, modified, boxed, callback):
        return self._update(modified, callback)

    def replace(self, model, value):
        log.log(TRACE, "replacing state '%s' of %s", self._state_name, type(model).__name__)
        self._update(value, None)

# end class ContainerStorage

## -- End Types -- @}


# ==============================================================================
## @name Utilities
# ------------------------------------------------------------------------------
## @{

def storage_from_options(options):
    """@return an IStorage instance matching the given options
    @param options either an IStorage instance, which is returned as is, or a mapping of one of the forms
    {'get_props': get_props, 'set_props': set_props} or {'state_holder': holder, 'state_name': name}
    @throws IllegalArgument if options have a different shape"""
    if isinstance(options, IStorage):
        return options
    # end handle ready-made storage

    if isinstance(options, Mapping):
        if 'get_props' in options and 'set_props' in options:
            return CallbackStorage(options['get_props'], options['set_props'])
        if 'state_holder' in options and 'state_name' in options:
            return ContainerStorage(options['state_holder'], options['state_name'])
    # end handle mapping

    raise IllegalArgument("options must be {'get_props': get_props(model), "
                          "'set_props': set_props(model, modified, boxed, callback)} or "
                          "{'state_name': name, 'state_holder': instance}, got %r" % (options, ))

## -- End Utilities -- @}
