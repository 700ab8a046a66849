#-*-coding:utf-8-*-
"""
@package bmodel.tests.test_serialize
@brief tests for bmodel.serialize

@author Sebastian Thiel
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = []

import json

from io import StringIO

import yaml

from butility.tests import TestCase

from bmodel import *

from .base import *


class TestSerialize(TestCase):
    __slots__ = ()

    def _edited(self):
        """@return a saved B instance with non-default values"""
        b = B()
        b.a1 = 2
        b.a2 = '3'
        b.b1 = 4
        b.b3 = 'b3'
        b.save()
        return b

    def test_yaml(self):
        assert YAMLStreamSerializer.file_extension == '.yaml'
        b = self._edited()
        stream = StringIO()
        request = write_request(b, stream)
        assert request == b.to_request()
        assert yaml.safe_load(stream.getvalue()) == request
        assert stream.getvalue().startswith('a2: '), "keys keep their order"

        other = B()
        assert read_response(other, StringIO(stream.getvalue())) is other
        assert other.props == merged(a_defaults, b_defaults), "responses are staged"
        other.save()
        assert other.props == merged(b.props, exists=True)

    def test_json(self):
        assert JSONStreamSerializer.file_extension == '.json'
        b = self._edited()
        stream = StringIO()
        request = write_request(b, stream, serializer_type=JSONStreamSerializer)
        assert json.loads(stream.getvalue()) == request

        other = B()
        read_response(other, StringIO(stream.getvalue()), serializer_type=JSONStreamSerializer)
        other.save()
        assert other.props == merged(b.props, exists=True)

        a = A()
        a.a3 = set((1, ))
        stream = StringIO()
        write_request(a, stream, serializer_type=JSONStreamSerializer)
        assert json.loads(stream.getvalue())['a3'] == '{1}', "unknown types are written as strings"

    def test_read_response(self):
        a = A()
        a.a2 = 'changed'
        a.save()
        read_response(a, StringIO('a2: x\n'), clear_to_defaults=False)
        a.save()
        assert a.props == dict(a1=None, a2='x', a3=None, exists=True)

        a = A()
        read_response(a, StringIO(''))
        a.save()
        assert a.props == merged(a_defaults, a1=None, exists=True), "empty documents are empty responses"

        invalid = [(YAMLStreamSerializer, '- 1\n- 2\n'),
                   (YAMLStreamSerializer, 'foo'),
                   (JSONStreamSerializer, '[1, 2]')]
        # falsy documents are not empty
        for serializer_type in (YAMLStreamSerializer, JSONStreamSerializer):
            invalid.extend((serializer_type, document) for document in ('[]', '0', 'false', '""'))
        # end for each serializer

        for serializer_type, document in invalid:
            message = self.assert_illegal_argument(read_response, a, StringIO(document),
                                                   serializer_type=serializer_type)
            assert 'mapping' in message
            assert a.dirty is None, "nothing is loaded"
        # end for each invalid document

# end class TestSerialize
