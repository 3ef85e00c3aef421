from abc import abstractmethod
from typing import Any, Iterable, Mapping, Tuple, TypeVar, cast
from typing_extensions import Protocol

import builtins

NOTHING = cast(Any, object())

T_co = TypeVar('T_co', covariant=True)

class ArrayLike(Protocol[T_co]):
	@abstractmethod
	def __len__(self) -> int: ...
	@abstractmethod
	def __getitem__(self, index:int) -> T_co: ...

class OperationNotAllowed(AttributeError):
	'''
	Raised on any attempt to assign or delete an attribute of a sequence
	'''

	def __init__(self, message:str='This operation is not allowed'):
		super().__init__(message)

def is_arraylike(value:Any) -> bool:
	if isinstance(value, Mapping):
		length = value.get('length')
		return isinstance(length, int) and not isinstance(length, bool)
	kind = type(value)
	return hasattr(kind, '__len__') and hasattr(kind, '__getitem__')

def read_arraylike(value:Any) -> Tuple[Any, ...]:
	# objects with their own iterator are read through it
	if isinstance(value, Iterable) and not isinstance(value, Mapping):
		return tuple(value)
	if isinstance(value, Mapping):
		length = value['length']
		return tuple(value.get(index) for index in range(length))
	return tuple(value[index] for index in range(len(value)))

sphinx_build: bool = getattr(builtins, '__sphinx_build__', False)
