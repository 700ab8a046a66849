#-*-coding:utf-8-*-
"""
@package bmodel.serialize
@brief Serializers to write model requests to streams, and to read responses from them

@note Read more about
[the YAML language specification](http://en.wikipedia.org/wiki/YAML#Language_elements)
@author Sebastian Thiel
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['IStreamSerializer', 'YAMLStreamSerializer', 'JSONStreamSerializer',
           'write_request', 'read_response']

import json
import logging

from collections.abc import Mapping

import yaml

from butility import (Interface,
                      IllegalArgument,
                      abstractmethod)

log = logging.getLogger('bmodel.serialize')


# ==============================================================================
## @name Interfaces
# ------------------------------------------------------------------------------
## @{

class IStreamSerializer(Interface):
    """An interface to allow serialization of requests and responses to a stream"""
    __slots__ = ()

    # -------------------------
    ## @name Configuration
    # @{

    ## the extension of files we can read or write
    # Can be None if we don't have a specific extension, for instance because we are only writing
    # to sockets
    file_extension = None

    ## -- End Configuration -- @}

    @abstractmethod
    def deserialize(self, stream):
        """Produce the originally serialized data structure from the given stream
        @param stream an object providing the read() method
        @return deserialized data structure"""

    @abstractmethod
    def serialize(self, data, stream):
        """Serialize the given data structure into the given stream
        @param data the structure to serialize
        @param stream a stream object providing the 'write' method"""

# end class IStreamSerializer

## -- End Interfaces -- @}


# ==============================================================================
## @name Types
# ------------------------------------------------------------------------------
## @{

class YAMLStreamSerializer(IStreamSerializer):
    """Serialize from and to yaml"""
    __slots__ = ()

    file_extension = '.yaml'

    def deserialize(self, stream):
        """@note can throw yaml.YAMLError, currently we don't use this information specifically
        @return the loaded document, or an empty dict if there is none"""
        data = yaml.safe_load(stream)
        if data is None:
            return dict()
        return data

    def serialize(self, data, stream):
        yaml.safe_dump(data, stream, default_flow_style=False, sort_keys=False)

# end class YAMLStreamSerializer


class JSONStreamSerializer(IStreamSerializer):
    """Serialize to and from json"""
    __slots__ = ()

    file_extension = '.json'

    def deserialize(self, stream):
        data = json.load(stream)
        if data is None:
            return dict()
        return data

    def serialize(self, data, stream):
        """Makes sure it is human readable
        @note values json doesn't know are converted to strings"""
        json.dump(data, stream, indent=4, separators=(',', ': '), default=str)

# end class JSONStreamSerializer

## -- End Types -- @}


# ==============================================================================
## @name Utilities
# ------------------------------------------------------------------------------
## @{

def write_request(model, stream, serializer_type=YAMLStreamSerializer):
    """Serialize the request of the given model into stream
    @param model a Model instance
    @param stream a stream providing the 'write' method
    @param serializer_type an IStreamSerializer type
    @return the request that was written"""
    request = model.to_request()
    serializer_type().serialize(request, stream)
    log.debug("wrote %s request with %i fields", type(model).__name__, len(request))
    return request


def read_response(model, stream, clear_to_defaults=True, serializer_type=YAMLStreamSerializer):
    """Deserialize a response from stream and load it into the given model
    @param model a Model instance
    @param stream a stream providing the 'read' method
    @param clear_to_defaults passed to Model.load_response()
    @param serializer_type an IStreamSerializer type
    @return model, with the loaded values being staged
    @throws IllegalArgument if the stream doesn't contain a mapping"""
    response = serializer_type().deserialize(stream)
    if not isinstance(response, Mapping):
        raise IllegalArgument("response must be a mapping, got %r" % (response, ))
    # end verify response
    return model.load_response(response, clear_to_defaults)

## -- End Utilities -- @}
