from __future__ import annotations
from typing import List

from create_sequence import create_sequence, classify, Producer, FromCollection, \
	FromIterable, FromGeneratorFactory, FromCallable

from hypothesis import given, strategies as st

import collections
import enum
import functools
import pytest

class Color(enum.Enum):
	RED = 1
	GREEN = 2

class Letters:
	def __iter__(self):
		return iter('abc')

class Both:
	# indexing and iteration disagree, the iterator wins
	def __len__(self):
		return 2
	def __getitem__(self, index):
		return 'indexed'
	def __iter__(self):
		return iter(['iterated', 'iterated'])

class CallableIterable:
	def __call__(self):
		return 'called'
	def __iter__(self):
		return iter(['iterated'])

def letters():
	yield 'a'
	yield 'b'

def test_classify():
	assert type(classify([1])) is FromCollection
	assert type(classify((1,))) is FromCollection
	assert type(classify('ab')) is FromCollection
	assert type(classify(range(3))) is FromCollection
	assert type(classify(collections.deque([1]))) is FromCollection
	assert type(classify(iter([1]))) is FromIterable
	assert type(classify(x for x in [1])) is FromIterable
	assert type(classify({1, 2})) is FromIterable
	assert type(classify(Letters())) is FromIterable
	assert type(classify(Color)) is FromIterable
	assert type(classify(letters)) is FromGeneratorFactory
	assert type(classify(functools.partial(letters))) is FromGeneratorFactory
	assert type(classify(Letters)) is FromGeneratorFactory
	assert type(classify({0: 'a', 'length': 1})) is FromCollection
	assert type(classify(lambda: 1)) is FromCallable
	assert type(classify(CallableIterable())) is FromIterable

def test_classify_variant():
	for producer in [FromCollection([1]), FromIterable([1]),
			FromGeneratorFactory(letters), FromCallable(letters)]:
		assert classify(producer) is producer
		assert create_sequence(producer).producer is producer

def test_classify_pulls_nothing():
	calls = []
	def produce():
		calls.append(None)
		return 1
	create_sequence(produce)
	create_sequence(FromGeneratorFactory(produce))
	assert calls == []

def test_iterator_wins():
	assert list(create_sequence(Both())) == ['iterated', 'iterated']
	assert list(create_sequence(CallableIterable())) == ['iterated']

def test_explicit_variants():
	# the same value read in different shapes
	assert list(create_sequence(FromIterable('ab'))) == ['a', 'b']
	seq = create_sequence(FromCallable(letters))
	assert next(seq()) == 'a'
	assert next(seq()) == 'a'
	assert list(create_sequence(FromGeneratorFactory(Letters))) == ['a', 'b', 'c']

def test_enum_class():
	assert list(create_sequence(Color)) == [Color.RED, Color.GREEN]

def test_iterable_class():
	seq = create_sequence(Letters)
	assert seq.value == 'a'
	assert list(seq) == ['a', 'b', 'c']

def test_string():
	seq = create_sequence('abc')
	assert seq.value == 'a'
	assert list(seq) == ['a', 'b', 'c']

def test_collection_buffered():
	items = ['a', 'b']
	seq = create_sequence(items)
	assert seq() == 'a'
	items.append('c')
	assert list(seq) == ['b']

def test_array_like_holes():
	seq = create_sequence({0: 'a', 2: 'c', 'length': 3})
	assert list(seq) == ['a', None, 'c']

def test_invalid_variants():
	with pytest.raises(TypeError): FromCollection(42)
	with pytest.raises(TypeError): FromCollection({})
	with pytest.raises(TypeError): FromIterable(42)
	with pytest.raises(TypeError): FromGeneratorFactory([1])
	with pytest.raises(TypeError): FromCallable('abc')

@given(st.lists(st.integers()))
def test_open(items:List[int]):
	assert list(FromCollection(items).open()) == items
	assert list(FromIterable(items).open()) == items
	assert list(FromGeneratorFactory(lambda: iter(items)).open()) == items
	stream = FromCallable(iter(items + [None]).__next__, None).open()
	assert list(stream) == items
	assert list(stream) == []

@given(st.lists(st.integers(min_value=0)), st.integers(max_value=-1))
def test_sentinel(items:List[int], sentinel:int):
	values = iter(items + [sentinel] + items)
	assert list(create_sequence(FromCallable(values.__next__, sentinel))) == items

def test_repr():
	assert repr(FromCollection([1, 2])) == 'FromCollection([1, 2])'
	assert repr(FromIterable((1,))) == 'FromIterable((1,))'
	assert repr(FromGeneratorFactory(letters)).startswith('FromGeneratorFactory(<function letters')
	assert repr(FromCallable(letters)).startswith('FromCallable(<function letters')
	assert repr(FromCallable(letters, None)).endswith('>, None)')
	assert repr(FromCallable(letters)) != repr(FromCallable(letters, None))

def test_abstract_producer():
	with pytest.raises(TypeError): Producer()
	class Partial(Producer):
		def _target(self):
			return None
	with pytest.raises(TypeError): Partial()
