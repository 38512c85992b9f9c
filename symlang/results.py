from collections import namedtuple
from enum import Enum


class DemangleOutcome(Enum):
    SUCCESS = 'success'
    FAILURE = 'failure'
    UNSUPPORTED = 'unsupported'


class DemangleResult(namedtuple('_DemangleResult', ['outcome', 'name'])):
    """The result of a demangle operation.  `name` only carries a value
    if the outcome is `SUCCESS`, otherwise it's the empty string.
    """
    __slots__ = ()

    @property
    def ok(self):
        return self.outcome is DemangleOutcome.SUCCESS


def success(name):
    return DemangleResult(DemangleOutcome.SUCCESS, name)


FAILURE = DemangleResult(DemangleOutcome.FAILURE, '')
UNSUPPORTED = DemangleResult(DemangleOutcome.UNSUPPORTED, '')
