from __future__ import annotations
from typing import Any, Callable, Generic, Iterable, Iterator, Mapping, \
	Tuple, TypeVar, Union, cast
from abc import ABC, abstractmethod
from collections import abc

import inspect

from ._utility import NOTHING, ArrayLike, is_arraylike, read_arraylike, sphinx_build

T = TypeVar('T')

class Producer(ABC, Generic[T]):
	r'''
	Classified source of values for a :class:`~create_sequence.Sequence`

	One of :class:`FromCollection`, :class:`FromIterable`,
	:class:`FromGeneratorFactory` or :class:`FromCallable`.
	Instances can be passed to :func:`~create_sequence.create_sequence`
	directly to skip shape detection.

	A producer is a description, it holds no cursor of its own.
	Each call to :meth:`open` starts a new stream, which is done once
	by the sequence that owns the producer, on its first pull.
	'''

	__slots__ = ()

	@abstractmethod
	def open(self) -> Iterator[T]:
		'''
		Build the stream of values without pulling from it
		'''

	@abstractmethod
	def _target(self) -> Any: ...

	def __repr__(self) -> str:
		return '{}({!r})'.format(type(self).__name__, self._target())

class FromCollection(Producer[T]):
	r'''
	Finite ordered collection

	Accepts a :class:`python:typing.Sequence`, an object with
	``__len__`` and ``__getitem__``, or a mapping record with an
	integer ``'length'`` key. Items are copied into a buffer when
	the stream is opened, through the object's own iterator if it has one.

	>>> list(FromCollection(['a', 'b', 'c']).open())
	['a', 'b', 'c']
	>>> list(FromCollection({0: 'a', 1: 'b', 2: 'c', 'length': 3}).open())
	['a', 'b', 'c']
	'''

	__slots__ = ('_items',)

	if not sphinx_build:
		_items: Union[ArrayLike[T], Mapping[Any, T]]

	def __init__(self, items:Union[ArrayLike[T], Mapping[Any, T]]):
		if not isinstance(items, abc.Sequence) and not is_arraylike(items):
			raise TypeError('expected array-like but got {}'.format(type(items)))
		self._items = items

	def _target(self):
		return self._items

	def open(self) -> Iterator[T]:
		return iter(cast(Tuple[T, ...], read_arraylike(self._items)))

class FromIterable(Producer[T]):
	r'''
	Iterable or iterator, used as-is

	Its iterator is obtained once and shared, so one-shot iterables
	such as generator objects are consumed only once.

	>>> list(FromIterable(x * x for x in range(4)).open())
	[0, 1, 4, 9]
	'''

	__slots__ = ('_iterable',)

	if not sphinx_build:
		_iterable: Iterable[T]

	def __init__(self, iterable:Iterable[T]):
		if not isinstance(iterable, abc.Iterable):
			raise TypeError('expected iterable but got {}'.format(type(iterable)))
		self._iterable = iterable

	def _target(self):
		return self._iterable

	def open(self) -> Iterator[T]:
		return iter(self._iterable)

class FromGeneratorFactory(Producer[T]):
	r'''
	Zero argument factory of iterables, usually a generator function

	The factory is called once per sequence, when the stream is opened.

	>>> def letters():
	...     yield 'a'
	...     yield 'b'
	>>> list(FromGeneratorFactory(letters).open())
	['a', 'b']
	'''

	__slots__ = ('_factory',)

	if not sphinx_build:
		_factory: Callable[[], Iterable[T]]

	def __init__(self, factory:Callable[[], Iterable[T]]):
		if not callable(factory):
			raise TypeError('expected callable but got {}'.format(type(factory)))
		self._factory = factory

	def _target(self):
		return self._factory

	def open(self) -> Iterator[T]:
		return iter(self._factory())

class FromCallable(Producer[T]):
	r'''
	Zero argument function called once per value

	Return values are never treated as the end of the stream unless
	``sentinel`` is given, in which case the stream ends when the
	function returns it (like :func:`python:iter` with two arguments).
	A :class:`python:StopIteration` raised by the function does not end
	the stream, it is raised as :class:`python:RuntimeError` instead.

	>>> from itertools import count
	>>> counter = count(42)
	>>> stream = FromCallable(lambda: next(counter)).open()
	>>> next(stream), next(stream)
	(42, 43)
	>>> values = [1, 2]
	>>> list(FromCallable(lambda: values.pop() if values else None, None).open())
	[2, 1]
	'''

	__slots__ = ('_function', '_sentinel')

	if not sphinx_build:
		_function: Callable[[], T]
		_sentinel: Any

	def __init__(self, function:Callable[[], T], sentinel:Any=NOTHING):
		if not callable(function):
			raise TypeError('expected callable but got {}'.format(type(function)))
		self._function = function
		self._sentinel = sentinel

	def _target(self):
		return self._function

	def __repr__(self) -> str:
		if self._sentinel is NOTHING:
			return super().__repr__()
		return '{}({!r}, {!r})'.format(type(self).__name__,
			self._function, self._sentinel)

	def open(self) -> Iterator[T]:
		return _Calls(self._function, self._sentinel)

class _Calls(Iterator[T]):
	# stays usable after the function raises, and stops for good
	# once the sentinel is returned

	__slots__ = ('_function', '_sentinel')

	def __init__(self, function:Callable[[], T], sentinel:Any):
		self._function = function
		self._sentinel = sentinel

	def __next__(self) -> T:
		if self._function is None:
			raise StopIteration
		try:
			value = self._function()
		except StopIteration as err:
			raise RuntimeError('producer raised StopIteration') from err
		sentinel = self._sentinel
		if sentinel is not NOTHING and (value is sentinel or value == sentinel):
			self._function = None
			raise StopIteration
		return value

def _is_iterable_factory(value:Any) -> bool:
	if inspect.isgeneratorfunction(value):
		return True
	return isinstance(value, type) and issubclass(value, abc.Iterable)

def classify(producer:Any) -> Producer[Any]:
	r'''
	Pick the producer variant matching the shape of the given value

	Checked in order: producer variants are returned unchanged,
	then sequences, other iterables, generator functions and iterable
	classes, array-likes, and finally plain callables.
	Nothing is called or pulled.

	:raises TypeError: if the value matches none of the shapes

	>>> classify(['a', 'b'])
	FromCollection(['a', 'b'])
	>>> classify(iter([]))
	FromIterable(<list_iterator object at ...>)
	>>> classify({0: 'a', 'length': 1})
	FromCollection({0: 'a', 'length': 1})
	>>> classify(42)
	Traceback (most recent call last):
	...
	TypeError: ...
	'''
	if isinstance(producer, Producer):
		return producer
	if isinstance(producer, abc.Sequence):
		return FromCollection(producer)
	if isinstance(producer, abc.Iterable) and not isinstance(producer, abc.Mapping):
		return FromIterable(producer)
	if _is_iterable_factory(producer):
		return FromGeneratorFactory(producer)
	if is_arraylike(producer):
		return FromCollection(producer)
	if callable(producer):
		return FromCallable(producer)
	raise TypeError('cannot create a sequence from {}'.format(type(producer)))

__all__: Tuple[str, ...] = ('Producer', 'FromCollection', 'FromIterable',
	'FromGeneratorFactory', 'FromCallable', 'classify')
