#-*-coding:utf-8-*-
"""
@package bmodel.base
@brief The Model base type, binding a resolved schema to a storage backend through a property box

@author Sebastian Thiel
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['Model']

import logging

from collections.abc import (Mapping,
                             MutableMapping)
from functools import partial

import yaml

from butility import (IllegalArgument,
                      NoValue,
                      is_object_like,
                      is_sequence,
                      shallow_copy)
from bbox import (PropertyBox,
                  PlainStorage,
                  storage_from_options)

from .schema import ModelMeta

log = logging.getLogger('bmodel.base')


# ==============================================================================
## @name Utilities
# ------------------------------------------------------------------------------
## @{

def _read_value(obj, name):
    """@return value at name in obj, a mapping or any other object, or NoValue"""
    if isinstance(obj, Mapping):
        return obj.get(name, NoValue)
    return getattr(obj, name, NoValue)


def _write_value(obj, name, value):
    if isinstance(obj, MutableMapping):
        obj[name] = value
    else:
        setattr(obj, name, value)
    # end handle object type


def _delete_value(obj, name):
    """Remove the value at name from obj, it's not an error if there is none.
    @note models are left untouched, their properties can't be removed"""
    if isinstance(obj, Model):
        return
    # end keep model properties
    if isinstance(obj, MutableMapping):
        obj.pop(name, None)
        return
    # end handle mappings
    try:
        delattr(obj, name)
    except AttributeError:
        pass
    # end ignore missing attributes

## -- End Utilities -- @}


class Model(object, metaclass=ModelMeta):
    """The base of all models, whose properties are staged in a box and committed to a storage backend.

    Subtypes declare their properties using the default_values, copied_props and model_props class
    attributes, see bmodel.schema for details. Their schema is resolved as soon as the class is defined,
    and each property becomes accessible as attribute.

    Property writes are staged, and only become visible in the backend once save() is called.
    cancel() discards them.

    The backend is chosen with the options passed to the constructor:

    * None: properties are kept in a dict owned by the model
    * an IStorage instance
    * {'get_props': get_props(model), 'set_props': set_props(model, modified, boxed, callback)}
    * {'state_holder': holder, 'state_name': name} to keep the properties in holder.state[name], changing them
      with holder.set_state({name: modified}, callback)

    To convert the model to a request and back, copied properties are transferred as is, and the
    map_request() and map_response() methods of all types in the inheritance chain are called, base first.
    """
    __slots__ = (
                    '_storage',     # IStorage instance
                    '_box'          # PropertyBox instance
                )

    # -------------------------
    ## @name Configuration
    # @{

    ## The storage type to instantiate if no options are given
    StorageType = PlainStorage

    ## The type of box to stage our properties in
    PropertyBoxType = PropertyBox

    ## -- End Configuration -- @}

    def __init__(self, options=None):
        """Initialize this instance with the storage backend described by options, and commit our default
        values for all properties which are missing in the backend
        @throws IllegalArgument if options are malformed"""
        if options is None:
            storage = self.StorageType()
        else:
            storage = storage_from_options(options)
        # end obtain storage

        self._storage = storage
        self._box = self.PropertyBoxType(partial(storage.read, self), partial(storage.write, self))

        if not isinstance(self.props, Mapping):
            # provide initial values through the backend, which must handle dicts for that
            self.props = dict()
        # end handle uninitialized backend

        # only set values which are missing right on the props
        props = dict(self.props)
        for name, value in self.schema().default_values().items():
            if name not in props:
                props[name] = shallow_copy(value)
        # end for each default
        self.props = props

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.props)

    def __str__(self):
        return yaml.dump(dict(self.props), default_flow_style=False, sort_keys=False)

    # -------------------------
    ## @name Properties
    # @{

    def _get_props(self):
        return self._storage.read(self)

    def _set_props(self, value):
        self._box.cancel()
        self._storage.replace(self, value)

    props = property(_get_props, _set_props, doc="""The committed properties as provided by the backend.
    Setting it replaces them right away, discarding all staged changes""")

    ## -- End Properties -- @}

    # -------------------------
    ## @name Schema Interface
    # @{

    @classmethod
    def schema(cls):
        """@return the resolved ModelSchema of this type"""
        return cls._schema

    @staticmethod
    def define_model(model_cls):
        """@return the ModelSchema of the given model type, which was resolved when the type was defined
        @throws IllegalArgument if model_cls is not a Model type"""
        if not (isinstance(model_cls, type) and issubclass(model_cls, Model)):
            raise IllegalArgument("expected a Model type, got %r" % (model_cls, ))
        return model_cls.schema()

    @staticmethod
    def copy_from_to(src, dst, names, defaults=None):
        """Copy properties from src to dst

        @param src source object for properties, a mapping or an object with attributes, like a model
        @param dst destination object for the property copy, a mapping or object
        @param names list or tuple of property names to copy. Names without value in src are removed from dst,
        unless dst is a model, which keeps its values
        @param defaults if not None, a mapping of default values. All defaults which were not copied are
        reset in dst, or removed if their default is NoValue and dst is not a model.
        @note does a shallow copy of default values which are lists, dicts or sets
        @throws IllegalArgument"""
        if not is_object_like(src):
            raise IllegalArgument("source is not object, got %r" % (src, ))
        if not is_object_like(dst):
            raise IllegalArgument("destination is not object, got %r" % (dst, ))
        # end verify objects

        remaining = dict() if defaults is None else dict(defaults)
        if names is not None:
            if not is_sequence(names):
                raise IllegalArgument("names to copy must be a list or tuple of property names, got %r"
                                      % (names, ))
            # end verify names
            for name in names:
                value = _read_value(src, name)
                if value is not NoValue:
                    _write_value(dst, name, value)
                    remaining.pop(name, None)
                else:
                    _delete_value(dst, name)
            # end for each name
        # end handle names

        if defaults is not None:
            # set missing to defaults
            for name, value in remaining.items():
                if value is not NoValue:
                    _write_value(dst, name, shallow_copy(value))
                else:
                    _delete_value(dst, name)
            # end for each remaining default
        # end handle defaults

    ## -- End Schema Interface -- @}

    # -------------------------
    ## @name Interface
    # @{

    def save(self, callback=None):
        """Commit staged property values. Changes after this point will track relative to these values.
        @param callback function to call once the backend adopted the values. It is also called if there is
        nothing to commit.
        @return value returned by the backend, or by the callback if there was nothing to commit"""
        return self._box.save(callback)

    def cancel(self):
        """Reset all staged property values back to their committed values
        @return this instance"""
        self._box.cancel()
        return self

    def is_dirty(self, attributes=None):
        """@return True if the given properties were changed since they were committed
        @param attributes a list or tuple of names, a mapping whose keys are names, a single name, or None to
        check all properties"""
        return self._box.is_dirty(attributes)

    def to_request(self):
        """Convert this model into the shape expected by a request, calling map_request() of all types in
        the inheritance chain
        @return a new dict to be used as request"""
        request = dict()
        self.copy_from_to(self, request, self.schema().copied_props())

        # handle custom mapping
        for hook in self.schema().request_hooks():
            hook(self, request)
        # end for each hook
        return request

    def load_response(self, response, clear_to_defaults=True):
        """Load a response into this model, calling map_response() of all types in the inheritance chain.
        Staged changes are discarded first.

        @param response mapping with the response of the model
        @param clear_to_defaults if True, properties which are not in the response are reset to their defaults.
        Otherwise they keep their current value.
        @return this instance
        @note the loaded values are staged, call save() to commit them"""
        self.cancel()
        schema = self.schema()
        defaults = schema.default_values() if clear_to_defaults else None
        self.copy_from_to(response, self, schema.copied_props(), defaults)

        # handle custom mapping
        for hook in schema.response_hooks():
            hook(self, response)
        # end for each hook

        # it comes from the server so it is assumed to exist
        self.exists = True
        return self

    ## -- End Interface -- @}

    # -------------------------
    ## @name Subclass Interface
    # @{

    def map_request(self, request):
        """Map model properties which do not map directly to the request, and remove the ones which are not
        needed.
        @param request dict which was already filled with all copied properties
        @note called for all types in the inheritance chain, base types first"""

    def map_response(self, response):
        """Map response fields which do not map directly to model properties by setting them on this model
        @param response the response as passed to load_response()
        @note called for all types in the inheritance chain, base types first"""

    ## -- End Subclass Interface -- @}

# end class Model
