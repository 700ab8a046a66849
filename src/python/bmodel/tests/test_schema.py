#-*-coding:utf-8-*-
"""
@package bmodel.tests.test_schema
@brief tests for bmodel.schema

@author Sebastian Thiel
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = []

from butility.tests import TestCase
from butility import TRACE

from bmodel import *

from .base import *


class TestSchema(TestCase):
    __slots__ = ()

    def test_resolution(self):
        schema = B.schema()
        assert isinstance(schema, ModelSchema)
        assert schema.model_name() == 'B'
        assert Model.define_model(B) is schema

        assert list(schema.default_values().keys()) == ['a1', 'a2', 'a3', 'b1', 'b2', 'b3']
        assert schema.default_values() == merged(a_defaults, b_defaults)
        assert schema.copied_props() == ('a1', 'a2', 'a3', 'b1', 'b2', 'b3')
        assert schema.property_names() == ['exists', 'dirty', 'a1', 'a2', 'a3', 'b1', 'b2', 'b3']
        assert B.default_values is schema.default_values()
        assert B.copied_props is schema.copied_props()
        assert A.schema().property_names() == ['exists', 'dirty', 'a1', 'a2', 'a3']

        root = Model.schema()
        assert root.property_names() == ['exists', 'dirty']
        assert not root.default_values() and not root.copied_props()
        assert 'ModelSchema(B' in repr(schema)

    def test_descriptors(self):
        assert isinstance(B.a1, ModelProperty), "class access provides the descriptor"
        assert B.a1 is A.a1, "descriptors are inherited, not duplicated"
        assert B.a1.owner() == 'A' and B.a1.name() == 'a1'
        assert B.b1.owner() == 'B'
        assert isinstance(B.exists, BooleanModelProperty) and B.exists.owner() == 'Model'
        assert isinstance(B.dirty, DeltaProperty)
        assert B.schema().descriptors()['b2'] is B.b2
        assert "owner='B'" in repr(B.b2)

    def test_hooks(self):
        assert B.schema().request_hooks() == (A.map_request, B.map_request), "base first"
        assert B.schema().response_hooks() == (A.map_response, B.map_response)
        assert Model.schema().request_hooks() == () and Model.schema().response_hooks() == (), \
            "the root model contributes no hooks"

        class C(B):
            pass
        # end class C
        assert C.schema().request_hooks() == B.schema().request_hooks(), "inherited hooks are called once"
        assert C.schema().property_names() == B.schema().property_names()

        class Mixin(object):

            def map_request(self, request):
                request['mixed'] = True

        # end class Mixin

        class Mixed(Mixin, A):
            pass
        # end class Mixed

        assert Mixed.schema().request_hooks()[-1] is Mixin.map_request
        assert Mixed().to_request()['mixed'] is True

    def test_collisions(self):

        def reserved():
            class X(Model):
                default_values = dict(exists=1)
            # end class X
        # end definition
        message = self.assert_illegal_argument(reserved)
        assert message == "IllegalArgument, 'exists' reserved framework property cannot be redefined"

        def inherited():
            class X(A):
                default_values = dict(a1=1)
            # end class X
        # end definition
        message = self.assert_illegal_argument(inherited)
        assert message == "IllegalArgument, 'a1' defined in A cannot be redefined"

        def inherited_copied():
            class X(B):
                copied_props = ['a2']
            # end class X
        # end definition
        assert 'defined in A' in self.assert_illegal_argument(inherited_copied)

        def inherited_model():
            class X(B):
                model_props = ['b3']
            # end class X
        # end definition
        assert 'defined in B' in self.assert_illegal_argument(inherited_model)

        for name in ModelMeta.reserved_names:
            def framework():
                class X(Model):
                    model_props = [name]
                # end class X
            # end definition
            assert 'reserved framework property' in self.assert_illegal_argument(framework)
        # end for each reserved name

        def shadowing():
            class X(A):
                a1 = 5
            # end class X
        # end definition
        assert "'a1' defined in A" in self.assert_illegal_argument(shadowing)

        def method():
            class X(Model):
                model_props = ['schema']
            # end class X
        # end definition
        assert 'attribute of Model' in self.assert_illegal_argument(method)

        def own_attribute():
            class X(Model):
                default_values = dict(foo=1)

                def foo(self):
                    pass
            # end class X
        # end definition
        assert "'foo' is already defined as attribute of X" in self.assert_illegal_argument(own_attribute)

    def test_declarations(self):

        class Declared(Model):
            default_values = dict(x=1)
            copied_props = ('y', )
            model_props = ['z', 'x']
        # end class Declared

        schema = Declared.schema()
        assert schema.copied_props() == ('y', ), "explicitly copied props replace the defaults"
        assert schema.property_names() == ['exists', 'dirty', 'x', 'y', 'z'], "each name is defined once"
        assert schema.default_values() == dict(x=1)

        for attr, value in (('default_values', ['a']),
                            ('copied_props', 5),
                            ('model_props', 'abc')):
            def malformed():
                ModelMeta('X', (Model, ), {attr: value})
            # end definition
            assert attr in self.assert_illegal_argument(malformed)
        # end for each malformed declaration

    def test_immutability(self):

        class Frozen(A):
            default_values = dict(f=list())
        # end class Frozen

        self.assertRaises(AttributeError, setattr, Frozen, 'f', 5)
        self.assertRaises(AttributeError, setattr, Frozen, 'a1', 5)
        self.assertRaises(AttributeError, delattr, Frozen, 'f')
        self.assertRaises(AttributeError, setattr, Frozen, 'default_values', dict())
        self.assertRaises(AttributeError, setattr, Frozen, 'copied_props', list())
        self.assertRaises(AttributeError, setattr, Frozen, '_schema', None)

        def assign_default():
            Frozen.default_values['f'] = 5

        def assign_descriptor():
            Frozen.schema().descriptors()['g'] = None
        # end assignments
        self.assertRaises(TypeError, assign_default)
        self.assertRaises(TypeError, assign_descriptor)
        self.assertRaises(AttributeError, setattr, Frozen.schema(), '_copied_props', ())
        self.assertRaises(AttributeError, delattr, Frozen.schema(), '_model_name')

        # other attributes can still be set
        Frozen.extra = 1
        assert Frozen.extra == 1
        del Frozen.extra

    def test_reserved_names(self):
        reserved = ReservedNames().reserve(('a', 'b'), 'taken')
        assert 'a' in reserved and 'c' not in reserved
        assert reserved.reason('b') == 'taken' and reserved.reason('c') is None
        reserved.verify(['c', 'd'])
        assert self.assert_illegal_argument(reserved.verify, ['c', 'b']) == \
            "IllegalArgument, 'b' taken cannot be redefined"

    def test_logging(self):
        with self.assertLogs('bmodel.schema', level=TRACE) as logs:
            class Logged(B):
                model_props = ['l']
            # end class Logged
        # end capture logs
        assert any('resolved schema of Logged' in line for line in logs.output)

# end class TestSchema
