from enum import Enum, Flag, auto


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE  = 0
    CARD  = 1 << 0  # malformed cards raise instead of warning
    MAGIC = 1 << 1  # units must start with SIMPLE or XTENSION
    STRICT = CARD | MAGIC


class UnitKind(Enum):
    IMAGE        = auto()
    BINARY_TABLE = auto()
    ASCII_TABLE  = auto()
    UNKNOWN      = auto()


class ValueKind(Enum):
    BOOLEAN   = auto()
    INTEGER   = auto()
    REAL      = auto()
    TEXT      = auto()
    UNDEFINED = auto()


class AccumulatorState(Enum):
    '''Enum to state the actual phase of a header accumulation'''
    ACCUMULATING = 0
    DONE         = auto()
