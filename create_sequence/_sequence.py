from __future__ import annotations
from typing import Any, Generic, Iterator, Optional, Tuple, TypeVar, Union, \
	overload

import enum

from ._producer import Producer, classify
from ._utility import NOTHING, OperationNotAllowed, sphinx_build

T = TypeVar('T')
D = TypeVar('D')

class SequenceState(enum.Enum):
	r'''
	Progress of a :class:`Sequence` through its values

	>>> seq = create_sequence('ab')
	>>> seq.state
	<SequenceState.FRESH: 0>
	>>> seq.value
	'a'
	>>> seq.state
	<SequenceState.FIRST_TAKEN_UNSENT: 1>
	>>> seq(), seq.state
	('a', <SequenceState.FIRST_SENT: 2>)
	>>> seq(), seq.state
	('b', <SequenceState.ADVANCING: 3>)
	>>> seq(None), seq.state
	(None, <SequenceState.EXHAUSTED: 4>)
	'''
	FRESH = 0
	FIRST_TAKEN_UNSENT = 1
	FIRST_SENT = 2
	ADVANCING = 3
	EXHAUSTED = 4

class _Cursor(Generic[T]):
	# the stream is opened on the first pull and never rewound;
	# flags only change after a pull succeeds.
	# StopIteration escaping the producer is raised as RuntimeError
	# on every access path

	__slots__ = ('_producer', '_stream', '_taken', '_sent', '_value',
		'_advanced', '_exhausted')

	if not sphinx_build:
		_producer: Producer[T]
		_stream: Optional[Iterator[T]]
		_taken: bool
		_sent: bool
		_value: T
		_advanced: bool
		_exhausted: bool

	def __new__(cls, producer:Producer[T]):
		self = super().__new__(cls)
		self._producer = producer
		self._stream = None
		self._taken = False
		self._sent = False
		self._value = NOTHING
		self._advanced = False
		self._exhausted = False
		return self

	def pull(self) -> T:
		if self._exhausted:
			return NOTHING
		if self._stream is None:
			try:
				stream = self._producer.open()
			except StopIteration as err:
				raise RuntimeError('producer raised StopIteration') from err
			self._stream = stream
		value = next(self._stream, NOTHING)
		if value is NOTHING:
			self._exhausted = True
		return value

	def first(self) -> T:
		if not self._taken:
			value = self.pull()
			if value is NOTHING:
				raise IndexError('first value of empty sequence')
			self._value = value
			self._taken = True
		return self._value

	def step(self) -> T:
		if not self._taken:
			value = self.pull()
			if value is not NOTHING:
				self._value = value
				self._taken = self._sent = True
			return value
		if not self._sent:
			self._sent = True
			return self._value
		value = self.pull()
		if value is not NOTHING:
			self._advanced = True
		return value

	@property
	def state(self) -> SequenceState:
		if self._exhausted:
			return SequenceState.EXHAUSTED
		if not self._taken:
			return SequenceState.FRESH
		if not self._sent:
			return SequenceState.FIRST_TAKEN_UNSENT
		if self._advanced:
			return SequenceState.ADVANCING
		return SequenceState.FIRST_SENT

class Sequence(Generic[T]):
	r'''
	Values of a producer, readable by calling, iterating, or peeking
	at the first value

	Do not instantiate directly, instead use the factory
	function :func:`create_sequence` to create an instance.

	Calls and iterations share one cursor: every value is delivered once,
	in the producer's order, whichever way it is asked for. Breaking out
	of a loop leaves the cursor where the loop stopped, and a new loop
	resumes from there. The first value is cached when it is first pulled,
	and :attr:`value` returns it for the lifetime of the sequence without
	consuming anything.

	Sequences are read-only, assigning or deleting attributes raises
	:class:`OperationNotAllowed`. They hold unguarded state and are meant
	to be used from a single thread.

	Exceptions raised by the producer reach the caller unchanged, and the
	same access can be retried. The only difference is
	:class:`python:StopIteration`, which is raised as
	:class:`python:RuntimeError` whichever way the value was asked for.

	>>> seq = create_sequence(['a', 'b', 'c', 'd'])
	>>> seq.value
	'a'
	>>> seq()
	'a'
	>>> for item in seq:
	...     break
	>>> item
	'b'
	>>> list(seq)
	['c', 'd']
	>>> seq.value
	'a'
	>>> seq('done')
	'done'
	'''

	__slots__ = ('_cursor',)

	if not sphinx_build:
		_cursor: _Cursor[T]

	def __new__(cls, _producer:Producer[T]):
		self = super().__new__(cls)
		object.__setattr__(self, '_cursor', _Cursor(_producer))
		return self

	def __setattr__(self, name:str, value:Any):
		raise OperationNotAllowed()

	def __delattr__(self, name:str):
		raise OperationNotAllowed()

	def first(self) -> T:
		r'''
		Get the first value, pulling it if nothing was pulled yet

		Repeated calls return the same value and never advance
		the sequence. A value peeked this way is still delivered by
		the next call or iteration step.

		:raises IndexError: if the producer has no values

		>>> seq = create_sequence([1, 2])
		>>> seq.first(), seq.first()
		(1, 1)
		>>> list(seq)
		[1, 2]
		>>> create_sequence([]).first()
		Traceback (most recent call last):
		...
		IndexError: ...
		'''
		return self._cursor.first()

	value = property(first, doc='The first value, see :meth:`first`')

	@overload
	def next(self) -> T: ...
	@overload
	def next(self, default:D) -> Union[T, D]: ...
	def next(self, default=NOTHING):
		r'''
		Get the next value

		Also available by calling the sequence.

		:raises IndexError: if the sequence is exhausted and
			no ``default`` is given

		>>> seq = create_sequence(['a'])
		>>> seq.next()
		'a'
		>>> seq(None) is None
		True
		>>> seq()
		Traceback (most recent call last):
		...
		IndexError: ...
		'''
		value = self._cursor.step()
		if value is not NOTHING:
			return value
		if default is NOTHING:
			raise IndexError('call on exhausted sequence')
		return default

	__call__ = next

	def iter(self) -> Iterator[T]:
		r'''
		Iterate over the remaining values

		Also available through :func:`python:iter`. Runs forever
		for infinite producers.

		>>> seq = create_sequence(range(5))
		>>> seq(), seq()
		(0, 1)
		>>> list(seq.iter())
		[2, 3, 4]
		>>> list(seq.iter())
		[]
		'''
		cursor = self._cursor
		while True:
			value = cursor.step()
			if value is NOTHING:
				return
			yield value

	__iter__ = iter

	@property
	def state(self) -> SequenceState:
		return self._cursor.state

	@property
	def producer(self) -> Producer[T]:
		return self._cursor._producer

	def __repr__(self) -> str:
		return '{}({!r}, {})'.format(type(self).__name__,
			self.producer, self.state.name)

def create_sequence(producer:Any) -> Sequence[Any]:
	r'''
	Create a :class:`Sequence` from the given producer

	The producer may be:

		- a sequence or array-like value, including mapping records
		  with an integer ``'length'`` key
		- an iterable, such as a generator object or an iterator
		- a generator function, called once without arguments
		- a plain function, called without arguments once per value
		- one of the :class:`Producer` variants, to pick the shape explicitly

	Nothing is pulled from the producer until the sequence is used.

	:raises TypeError: if the producer matches none of the above

	>>> seq = create_sequence(['a', 'b', 'c'])
	>>> seq.value
	'a'
	>>> list(seq)
	['a', 'b', 'c']
	>>> seq = create_sequence(lambda: 1)
	>>> seq(), seq.value
	(1, 1)
	'''
	return Sequence(classify(producer))

__all__: Tuple[str, ...] = ('create_sequence', 'Sequence', 'SequenceState')
