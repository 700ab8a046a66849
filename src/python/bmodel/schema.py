#-*-coding:utf-8-*-
"""
@package bmodel.schema
@brief Resolution of model property schemas across the inheritance chain, using descriptors

Each model type declares its properties in class attributes:

* default_values: a mapping of property names to their default value
* copied_props: names of properties which are copied to requests and from responses. It may be a sequence
  or mapping, and defaults to the keys of default_values
* model_props: names of additional properties, without default value and not being copied

When the class is created, these declarations are merged with the ones of all base types into one
immutable ModelSchema, and a descriptor is installed for each new property name.

@author Sebastian Thiel
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['ModelProperty', 'BooleanModelProperty', 'DeltaProperty', 'ModelSchema', 'ReservedNames',
           'ModelMeta', 'resolve_schema']

import logging

from collections import OrderedDict
from collections.abc import Mapping
from itertools import chain
from types import MappingProxyType

from butility import (Meta,
                      IllegalArgument,
                      NoValue,
                      TRACE,
                      is_sequence)

log = logging.getLogger('bmodel.schema')


# ==============================================================================
## @name Descriptors
# ------------------------------------------------------------------------------
## @{

class ModelProperty(object):
    """A descriptor for a model property, which routes reads and writes through the instance's property box.

    Reads return the staged value, or the committed one, or NoValue if there is none.
    Writes are staged, and become visible in the backend only when the model is saved. Properties cannot be
    deleted.
    @note If a Descriptor is accessed through the class, it returns itself."""
    __slots__ = (
                    '_name',    # name of the property, also the name it is stored in the clsdict
                    '_owner'    # name of the model type which declared the property
                )

    def __init__(self, name, owner):
        self._name = name
        self._owner = owner

    def __repr__(self):
        return "%s('%s', owner='%s')" % (type(self).__name__, self._name, self._owner)

    # -------------------------
    ## @name Descriptor Interface
    # @{

    def __get__(self, inst, cls):
        if inst is None:
            return self
        return inst._box.value(self._name)

    def __set__(self, inst, value):
        inst._box.set_value(self._name, value)

    def __delete__(self, inst):
        raise AttributeError("property '%s' cannot be deleted" % self._name)

    ## -- End Descriptor Interface -- @}

    # -------------------------
    ## @name Interface
    # @{

    def name(self):
        """@return name of our property"""
        return self._name

    def owner(self):
        """@return name of the model type which declared us"""
        return self._owner

    ## -- End Interface -- @}

# end class ModelProperty


class BooleanModelProperty(ModelProperty):
    """A property which coerces values to bool when reading and writing"""
    __slots__ = ()

    def __get__(self, inst, cls):
        if inst is None:
            return self
        value = inst._box.value(self._name)
        return value is not NoValue and bool(value)

    def __set__(self, inst, value):
        inst._box.set_value(self._name, bool(value))

# end class BooleanModelProperty


class DeltaProperty(ModelProperty):
    """A read-only property providing the staged delta of the model, or None if nothing is staged"""
    __slots__ = ()

    def __get__(self, inst, cls):
        if inst is None:
            return self
        return inst._box.delta()

    def __set__(self, inst, value):
        raise AttributeError("'%s' is read-only" % self._name)

# end class DeltaProperty

## -- End Descriptors -- @}


# ==============================================================================
## @name Schema
# ------------------------------------------------------------------------------
## @{

class ModelSchema(object):
    """The immutable result of merging all property declarations of a model type and its bases.

    It is shared by all instances of the model type."""
    __slots__ = (
                    '_model_name',
                    '_default_values',  # read-only mapping: name => default value
                    '_copied_props',    # tuple of names, in declaration order
                    '_descriptors',     # read-only mapping: name => ModelProperty
                    '_request_hooks',   # tuple of map_request functions, base first
                    '_response_hooks'   # tuple of map_response functions, base first
                )

    def __init__(self, model_name, default_values, copied_props, descriptors, request_hooks, response_hooks):
        set_ = super(ModelSchema, self).__setattr__
        set_('_model_name', model_name)
        set_('_default_values', MappingProxyType(OrderedDict(default_values)))
        set_('_copied_props', tuple(copied_props))
        set_('_descriptors', MappingProxyType(OrderedDict(descriptors)))
        set_('_request_hooks', tuple(request_hooks))
        set_('_response_hooks', tuple(response_hooks))

    def __setattr__(self, name, value):
        raise AttributeError("ModelSchema of %s is immutable" % self._model_name)

    def __delattr__(self, name):
        raise AttributeError("ModelSchema of %s is immutable" % self._model_name)

    def __repr__(self):
        return "ModelSchema(%s, properties=%s)" % (self._model_name, list(self._descriptors.keys()))

    # -------------------------
    ## @name Interface
    # @{

    def model_name(self):
        """@return name of the model type we belong to"""
        return self._model_name

    def default_values(self):
        """@return read-only mapping of all default values, base values first"""
        return self._default_values

    def copied_props(self):
        """@return tuple with names of all properties to copy to requests and from responses"""
        return self._copied_props

    def descriptors(self):
        """@return read-only mapping of property names to their descriptors"""
        return self._descriptors

    def property_names(self):
        """@return list of all property names"""
        return list(self._descriptors.keys())

    def request_hooks(self):
        """@return tuple of map_request(model, request) functions, the one of the most-base type first"""
        return self._request_hooks

    def response_hooks(self):
        """@return tuple of map_response(model, response) functions, the one of the most-base type first"""
        return self._response_hooks

    ## -- End Interface -- @}

# end class ModelSchema


class ReservedNames(object):
    """Keeps track of property names which must not be declared again, along with the reason.

    Only used while resolving a schema"""
    __slots__ = ('_reasons')

    def __init__(self):
        self._reasons = OrderedDict()

    def __contains__(self, name):
        return name in self._reasons

    def reserve(self, names, reason):
        """Reserve all given names for the given reason, overriding previous reasons
        @return this instance"""
        for name in names:
            self._reasons[name] = reason
        # end for each name
        return self

    def reason(self, name):
        """@return reason for which name was reserved, or None"""
        return self._reasons.get(name)

    def verify(self, names):
        """@throws IllegalArgument if any of the given names is reserved"""
        for name in names:
            reason = self._reasons.get(name)
            if reason is not None:
                log.debug("refusing to redefine '%s', which is %s", name, reason)
                raise IllegalArgument("'%s' %s cannot be redefined" % (name, reason))
            # end handle reserved
        # end for each name

# end class ReservedNames

## -- End Schema -- @}


# ==============================================================================
## @name Resolution
# ------------------------------------------------------------------------------
## @{

def _property_names(value, argument):
    """@return list of names from a sequence, or keys of a mapping, or an empty list if value is None
    @throws IllegalArgument"""
    if value is None:
        return list()
    if isinstance(value, Mapping):
        return list(value.keys())
    if is_sequence(value):
        return list(value)
    raise IllegalArgument("%s argument must be a sequence or mapping, got %r" % (argument, value))


def resolve_schema(model_cls):
    """Merge the property declarations of model_cls with the ones of its resolved bases, and install
    descriptors for all new properties on model_cls.

    Bases are processed in reverse method resolution order, so the most-base type comes first.
    @param model_cls a model type whose metaclass is a ModelMeta. Its bases must have been resolved already.
    @return the resulting ModelSchema, which is also stored in model_cls
    @throws IllegalArgument if a declaration is malformed or redefines an existing property"""
    metacls = type(model_cls)
    name = model_cls.__name__

    default_values = metacls._own_class_attribute(model_cls, 'default_values')
    if default_values is None:
        default_values = dict()
    elif not isinstance(default_values, Mapping):
        raise IllegalArgument("default_values argument must be a mapping, got %r" % (default_values, ))
    # end verify defaults
    copied_props = metacls._own_class_attribute(model_cls, 'copied_props')
    if copied_props is None:
        copied_props = default_values
    # end copy default values by default
    copied_names = _property_names(copied_props, 'copied_props')
    model_names = _property_names(metacls._own_class_attribute(model_cls, 'model_props'), 'model_props')

    resolved_defaults = OrderedDict()
    resolved_copied = OrderedDict()
    descriptors = OrderedDict()
    reserved = ReservedNames()
    has_resolved_base = False

    for base in reversed(model_cls.__mro__[1:]):
        schema = base.__dict__.get('_schema')
        if schema is None:
            continue
        # end skip types which are not models
        has_resolved_base = True
        resolved_copied.update((prop, True) for prop in schema.copied_props())
        resolved_defaults.update(schema.default_values())
        descriptors.update(schema.descriptors())
        for descriptor in schema.descriptors().values():
            reserved.reserve((descriptor.name(), ), "defined in %s" % descriptor.owner())
        # end for each descriptor
    # end for each base
    inherited_names = list(descriptors.keys())
    reserved.reserve(metacls.reserved_names, 'reserved framework property')

    reserved.verify(chain(default_values.keys(), copied_names, model_names))
    for attr in inherited_names:
        if attr in model_cls.__dict__:
            raise IllegalArgument("'%s' %s cannot be redefined" % (attr, reserved.reason(attr)))
    # end prevent attributes shadowing inherited properties

    own_names = OrderedDict.fromkeys(chain(default_values.keys(), copied_names, model_names))
    own_descriptors = OrderedDict()
    for prop in own_names:
        for cls in model_cls.__mro__:
            if prop in cls.__dict__:
                raise IllegalArgument("'%s' is already defined as attribute of %s" % (prop, cls.__name__))
        # end for each type in the chain
        own_descriptors[prop] = ModelProperty(prop, name)
    # end for each own property

    if not has_resolved_base:
        # the root model provides properties every model has
        own_descriptors['exists'] = BooleanModelProperty('exists', name)
        own_descriptors['dirty'] = DeltaProperty('dirty', name)
    # end handle root model
    descriptors.update(own_descriptors)

    resolved_defaults.update(default_values)
    resolved_copied.update((prop, True) for prop in copied_names)

    # the root model only provides no-op hooks
    root = [cls for cls in model_cls.__mro__ if isinstance(cls, ModelMeta)][-1]
    request_hooks = list()
    response_hooks = list()
    for cls in reversed(model_cls.__mro__):
        if cls is root:
            continue
        # end skip root model
        for hooks, attr in ((request_hooks, 'map_request'), (response_hooks, 'map_response')):
            hook = cls.__dict__.get(attr)
            if callable(hook):
                hooks.append(hook)
        # end for each hook type
    # end for each type in the chain

    schema = ModelSchema(name, resolved_defaults, resolved_copied.keys(), descriptors,
                         request_hooks, response_hooks)

    set_ = type.__setattr__
    for prop, descriptor in own_descriptors.items():
        set_(model_cls, prop, descriptor)
    # end for each descriptor to install
    set_(model_cls, 'default_values', schema.default_values())
    set_(model_cls, 'copied_props', schema.copied_props())
    set_(model_cls, 'model_props', schema.descriptors())
    set_(model_cls, '_schema', schema)

    log.log(TRACE, "resolved schema of %s with %i properties, %i of which are new",
            name, len(descriptors), len(own_descriptors))
    return schema


class ModelMeta(Meta):
    """A metaclass which resolves the property schema of each model type right when it is defined.

    Once resolved, the properties and schema attributes of the type cannot be changed anymore."""

    # -------------------------
    ## @name Configuration
    # @{

    ## Names which no model type may declare as property, as the framework uses them
    reserved_names = ('exists', 'dirty', 'props', '_box', '_storage',
                      'save', 'cancel', 'is_dirty', 'to_request', 'load_response')

    ## Attributes holding resolved schema information, which may not be changed after resolution
    schema_attributes = ('_schema', 'default_values', 'copied_props', 'model_props')

    ## -- End Configuration -- @}

    def __init__(cls, name, bases, clsdict):
        super(ModelMeta, cls).__init__(name, bases, clsdict)
        resolve_schema(cls)

    def _is_protected(cls, name):
        schema = cls.__dict__.get('_schema')
        if schema is None:
            return False
        return name in type(cls).schema_attributes or name in schema.descriptors()

    def __setattr__(cls, name, value):
        if cls._is_protected(name):
            raise AttributeError("'%s' of model %s cannot be redefined" % (name, cls.__name__))
        super(ModelMeta, cls).__setattr__(name, value)

    def __delattr__(cls, name):
        if cls._is_protected(name):
            raise AttributeError("'%s' of model %s cannot be deleted" % (name, cls.__name__))
        super(ModelMeta, cls).__delattr__(name)

# end class ModelMeta

## -- End Resolution -- @}
