"""
Unit Tests for the Event Normalizer
"""

import copy
import unittest
from datetime import datetime, timezone
from enum import Enum
from types import SimpleNamespace
from unittest.mock import Mock

from riemann_adapter.normalization.errors import UnsupportedValueError
from riemann_adapter.normalization.field_mapper import FieldMapper
from riemann_adapter.normalization.normalizer import (
    EventNormalizer,
    make_message,
    normalize_attributes,
    normalize_event,
    normalize_metric,
    read_event,
)
from riemann_adapter.normalization.schema import Attribute, RawEvent, Symbol, WireEvent


class State(Enum):
    OK = "ok"
    CRITICAL = "critical"


class Priority(Enum):
    LOW = 1


def emptyEvent(**overrides):
    # Mirrors an upstream event with nothing set, no ``service`` accessor
    fields = dict(
        attributes={}, tags=[], time=None, state=None, description=None,
        ttl=None, key=None, value=None, host=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestNormalizeAttributes(unittest.TestCase):

    def testSymbolKeysEscaped(self):
        result = normalize_attributes({Symbol('foo'): 'bar'})

        self.assertEqual(result, [Attribute(key='foo', value='bar')])
        self.assertEqual(result, [('foo', 'bar')])

    def testStringsUnchanged(self):
        mapping = {'a': '1', 'b': '2', 'c': '3'}

        self.assertEqual(normalize_attributes(mapping), [('a', '1'), ('b', '2'), ('c', '3')])

    def testOrderPreserved(self):
        mapping = {'zeta': 'z', Symbol('alpha'): 'a', 'mid': Symbol('m')}

        keys = [attr.key for attr in normalize_attributes(mapping)]
        self.assertEqual(keys, ['zeta', 'alpha', 'mid'])

    def testMixedSymbolsAndStrings(self):
        mapping = {Symbol('env'): 'prod', 'region': Symbol('us')}

        self.assertEqual(normalize_attributes(mapping), [('env', 'prod'), ('region', 'us')])

    def testSymbolEquivalentToString(self):
        self.assertEqual(
            normalize_attributes({Symbol('s'): Symbol('t')}),
            normalize_attributes({'s': 't'})
        )

    def testEnumMembersUseValue(self):
        result = normalize_attributes({'state': State.CRITICAL, 'priority': Priority.LOW})

        self.assertEqual(result, [('state', 'critical'), ('priority', 'LOW')])

    def testIdempotent(self):
        once = normalize_attributes({Symbol('env'): 'prod', 'region': Symbol('us')})

        self.assertEqual(normalize_attributes(once), once)

    def testInputNotMutated(self):
        mapping = {Symbol('env'): 'prod', 'region': Symbol('us')}
        original = dict(mapping)

        normalize_attributes(mapping)

        self.assertEqual(mapping, original)

    def testEmptyMapping(self):
        self.assertEqual(normalize_attributes({}), [])
        self.assertEqual(normalize_attributes(None), [])

    def testNumbersConvertedByDefault(self):
        result = normalize_attributes({'count': 3, 'ratio': 0.5, 'up': True, 'down': False})

        self.assertEqual(
            result,
            [('count', '3'), ('ratio', '0.5'), ('up', 'true'), ('down', 'false')]
        )

    def testRejectPolicy(self):
        mapper = FieldMapper(scalarPolicy='reject')

        with self.assertRaises(UnsupportedValueError) as ctx:
            normalize_attributes({'count': 3}, mapper)

        self.assertEqual(ctx.exception.value, 3)
        self.assertEqual(ctx.exception.field, 'attributes')

    def testNoneValueRaises(self):
        with self.assertRaises(UnsupportedValueError):
            normalize_attributes({'missing': None})

    def testContainerValueRaises(self):
        with self.assertRaises(UnsupportedValueError):
            normalize_attributes({'nested': {'a': 'b'}})

    def testListOfStringsRaises(self):
        with self.assertRaises(UnsupportedValueError) as ctx:
            normalize_attributes(['ab', 'cd'])

        self.assertEqual(ctx.exception.field, 'attributes')

    def testStringAttributesRaise(self):
        with self.assertRaises(UnsupportedValueError) as ctx:
            normalize_attributes('env=prod')

        self.assertEqual(ctx.exception.field, 'attributes')

    def testPairListAccepted(self):
        pairs = [('env', Symbol('prod')), Attribute('region', 'us')]

        self.assertEqual(normalize_attributes(pairs), [('env', 'prod'), ('region', 'us')])

    def testUnknownPolicy(self):
        with self.assertRaises(ValueError):
            FieldMapper(scalarPolicy='guess')


class TestNormalizeEvent(unittest.TestCase):

    def testSymbolHostEscaped(self):
        ref = WireEvent()
        ref.host = 'foo'

        event = emptyEvent(host=Symbol('foo'))

        self.assertEqual(normalize_event(event), ref)

    def testEmptyEventStaysEmpty(self):
        result = normalize_event(emptyEvent())

        self.assertEqual(result, WireEvent())
        self.assertIsNone(result.description)
        self.assertEqual(result.tags, [])
        self.assertEqual(result.attributes, [])

    def testStringFieldsPassThrough(self):
        event = emptyEvent(host='web-1', state='ok', description='all good')

        result = normalize_event(event)

        self.assertEqual(result.host, 'web-1')
        self.assertEqual(result.state, 'ok')
        self.assertEqual(result.description, 'all good')

    def testSymbolFieldsEscaped(self):
        event = emptyEvent(
            host=Symbol('web-1'), state=State.CRITICAL,
            description=Symbol('disk full'), key=Symbol('disk.used')
        )

        result = normalize_event(event)

        self.assertEqual(result.host, 'web-1')
        self.assertEqual(result.state, 'critical')
        self.assertEqual(result.description, 'disk full')
        self.assertEqual(result.service, 'disk.used')
        self.assertTrue(result.validate())

    def testKeyAndValueMapToServiceAndMetric(self):
        event = emptyEvent(key='cpu.load', value=0.75, ttl=60)

        result = normalize_event(event)

        self.assertEqual(result.service, 'cpu.load')
        self.assertEqual(result.metric, 0.75)
        self.assertEqual(result.ttl, 60)

    def testServiceUsedWithoutKey(self):
        event = emptyEvent(service=Symbol('api'))

        self.assertEqual(normalize_event(event).service, 'api')

    def testKeyTakesPrecedenceOverService(self):
        event = emptyEvent(key='requests', service='api')

        self.assertEqual(normalize_event(event).service, 'requests')

    def testNumericTimePassesThrough(self):
        self.assertEqual(normalize_event(emptyEvent(time=1704067200)).time, 1704067200)

    def testDatetimeTimeWrittenAsEpochSeconds(self):
        aware = datetime(2024, 1, 1, tzinfo=timezone.utc)
        naive = datetime(2024, 1, 1)

        self.assertEqual(normalize_event(emptyEvent(time=aware)).time, 1704067200)
        self.assertEqual(normalize_event(emptyEvent(time=naive)).time, 1704067200)

    def testMockDoubleWithoutService(self):
        event = Mock(
            attributes={}, tags=[], time=None, state=None, description=None,
            ttl=None, key=None, value=None, host=Symbol('foo'),
        )

        self.assertEqual(normalize_event(event), WireEvent(host='foo'))

    def testStringTagsRaise(self):
        with self.assertRaises(UnsupportedValueError) as ctx:
            normalize_event(emptyEvent(tags='prod'))

        self.assertEqual(ctx.exception.field, 'tags')

    def testMappingTagsRaise(self):
        with self.assertRaises(UnsupportedValueError):
            normalize_event(emptyEvent(tags={'env': 'prod'}))

    def testTagsCoerced(self):
        event = emptyEvent(tags=['prod', Symbol('web'), State.OK])

        self.assertEqual(normalize_event(event).tags, ['prod', 'web', 'ok'])

    def testAttributesDelegated(self):
        event = emptyEvent(attributes={Symbol('env'): 'prod', 'region': Symbol('us')})

        self.assertEqual(normalize_event(event).attributes, [('env', 'prod'), ('region', 'us')])

    def testUnsupportedHostRaises(self):
        with self.assertRaises(UnsupportedValueError) as ctx:
            normalize_event(emptyEvent(host=['web-1']))

        self.assertEqual(ctx.exception.field, 'host')

    def testBooleanMetricRaises(self):
        with self.assertRaises(UnsupportedValueError) as ctx:
            normalize_event(emptyEvent(value=True))

        self.assertEqual(ctx.exception.field, 'metric')

    def testStringTimeRaises(self):
        with self.assertRaises(UnsupportedValueError):
            normalize_event(emptyEvent(time='yesterday'))

    def testAccessorFaultPropagates(self):
        class BrokenEvent:
            attributes = {}
            tags = []

            @property
            def host(self):
                raise RuntimeError("upstream bug")

            key = value = state = description = ttl = time = None

        with self.assertRaises(RuntimeError):
            normalize_event(BrokenEvent())

    def testSourceEventNotMutated(self):
        event = RawEvent(
            host=Symbol('web-1'), key=Symbol('load'), value=1,
            tags=[Symbol('prod')], attributes={Symbol('env'): Symbol('prod')}
        )
        before = copy.deepcopy(event)

        normalize_event(event)

        self.assertEqual(event, before)

    def testDeterministic(self):
        event = RawEvent(host=Symbol('web-1'), attributes={'a': Symbol('b')}, tags=['x'])

        self.assertEqual(normalize_event(event), normalize_event(event))


class TestNormalizeMetric(unittest.TestCase):

    def testOnlyMetricFieldsMapped(self):
        metric = emptyEvent(
            key=Symbol('requests'), value=42, host='web-1',
            state='critical', description='ignored', ttl=30
        )

        result = normalize_metric(metric)

        self.assertEqual(result.service, 'requests')
        self.assertEqual(result.metric, 42)
        self.assertEqual(result.host, 'web-1')
        self.assertIsNone(result.state)
        self.assertIsNone(result.description)
        self.assertIsNone(result.ttl)


class TestReadEvent(unittest.TestCase):

    def testReadsBackSourceFieldNames(self):
        wire = normalize_event(RawEvent(
            host=Symbol('web-1'), key='cpu', value=0.5, ttl=60,
            time=datetime(2024, 1, 1, tzinfo=timezone.utc),
            tags=['prod'], attributes={'env': 'prod'}
        ))

        data = read_event(wire)

        self.assertEqual(data, {
            'host': 'web-1',
            'key': 'cpu',
            'value': 0.5,
            'ttl': 60,
            'time': datetime(2024, 1, 1, tzinfo=timezone.utc),
            'tags': ['prod'],
            'attributes': {'env': 'prod'},
        })

    def testAbsentFieldsOmitted(self):
        self.assertEqual(read_event(WireEvent(host='web-1')), {'host': 'web-1'})


class TestMakeMessage(unittest.TestCase):

    def testNormalizesSourceEvents(self):
        message = make_message([emptyEvent(host=Symbol('a')), WireEvent(host='b')])

        self.assertEqual([e.host for e in message.events], ['a', 'b'])
        self.assertIsNone(message.ok)


class TestEventNormalizer(unittest.TestCase):

    def testUsesConfiguredPolicy(self):
        normalizer = EventNormalizer({'scalar_policy': 'reject'})

        with self.assertRaises(UnsupportedValueError):
            normalizer.normalize(emptyEvent(attributes={'count': 1}))

    def testDefaultPolicyConverts(self):
        normalizer = EventNormalizer({})

        self.assertEqual(normalizer.normalizeAttributes({'count': 1}), [('count', '1')])


if __name__ == '__main__':
    unittest.main()
