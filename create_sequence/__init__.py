from typing import Tuple

from ._version import __version__
from ._utility import OperationNotAllowed, sphinx_build
from ._producer import Producer, FromCollection, FromIterable, \
	FromGeneratorFactory, FromCallable, classify
from ._sequence import Sequence, SequenceState, create_sequence

__all__: Tuple[str, ...] = ('create_sequence', 'Sequence', 'SequenceState',
	'FromCollection', 'FromIterable', 'FromGeneratorFactory', 'FromCallable',
	'classify', 'OperationNotAllowed')
if sphinx_build: __all__ += ('Producer',)
