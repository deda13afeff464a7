"""Source code tokens collected during static analysis."""

import enum
from dataclasses import dataclass

__all__ = [
    "Comment",
    "FloatLiteral",
    "Identifier",
    "IdentifierType",
    "IntLiteral",
    "Position",
    "StringLiteral",
    "identifier_types",
    "levenshtein_distance",
    "parse_identifier_type",
]


class IdentifierType(enum.IntEnum):
    """The kind of a user-defined symbol name found in source code."""

    UNKNOWN = 0
    FUNCTION = 1  # function declaration / definition
    VARIABLE = 2  # variable declaration / definition
    PARAMETER = 3  # parameters to functions, constructors, catch blocks
    CLASS = 4  # class declaration / definition
    MEMBER = 5  # access/mutation of an object member
    PROPERTY = 6  # declaration of class property
    STATEMENT_LABEL = 7  # loop label
    OTHER = 8  # anything else the parser picked up

    @property
    def label(self):
        """The name used for this type in serialised results."""
        return _LABELS[self]

    def __str__(self):
        return self.label

    def __format__(self, spec):
        return format(self.label, spec)


_LABELS = {
    IdentifierType.UNKNOWN: "Unknown",
    IdentifierType.FUNCTION: "Function",
    IdentifierType.VARIABLE: "Variable",
    IdentifierType.PARAMETER: "Parameter",
    IdentifierType.CLASS: "Class",
    IdentifierType.MEMBER: "Member",
    IdentifierType.PROPERTY: "Property",
    IdentifierType.STATEMENT_LABEL: "StatementLabel",
    IdentifierType.OTHER: "Other",
}

_BY_LABEL = {label: kind for kind, label in _LABELS.items()}


def identifier_types():
    """Return every IdentifierType."""
    return list(IdentifierType)


def parse_identifier_type(s):
    """Return the IdentifierType whose label is s, or UNKNOWN if there is none."""
    return _BY_LABEL.get(s, IdentifierType.UNKNOWN)


class Position(tuple):
    """Row and column of a token in its source file."""

    __slots__ = ()

    def __new__(cls, row, col):
        return super().__new__(cls, (row, col))

    def __getnewargs__(self):
        return (self[0], self[1])

    def row(self):
        return self[0]

    def col(self):
        return self[1]

    def __repr__(self):
        return f"Position(row={self[0]!r}, col={self[1]!r})"


def levenshtein_distance(source, target):
    """Edit distance where a substitution costs 2 (a deletion plus an insertion)."""
    previous = list(range(len(target) + 1))
    for i, s_char in enumerate(source, start=1):
        current = [i]
        for j, t_char in enumerate(target, start=1):
            substitution = previous[j - 1] + (0 if s_char == t_char else 2)
            current.append(min(previous[j] + 1, current[j - 1] + 1, substitution))
        previous = current
    return previous[-1]


@dataclass
class Identifier:
    """A user-defined symbol name in source code."""

    name: str
    type: IdentifierType = IdentifierType.UNKNOWN
    entropy: float = 0.0

    def to_dict(self):
        return {"name": self.name, "type": str(self.type), "entropy": self.entropy}


@dataclass
class StringLiteral:
    """A string literal, parsed and as written in the source."""

    value: str
    raw: str
    entropy: float = 0.0

    def levenshtein_dist(self):
        """Edit distance between the raw and parsed forms of this literal."""
        return levenshtein_distance(self.raw, self.value)

    def to_dict(self):
        return {"value": self.value, "raw": self.raw, "entropy": self.entropy}


@dataclass
class IntLiteral:
    """An integer literal occurring in source code."""

    value: int
    raw: str


@dataclass
class FloatLiteral:
    """A floating point literal occurring in source code."""

    value: float
    raw: str


@dataclass
class Comment:
    """The entire text of a source code comment."""

    text: str