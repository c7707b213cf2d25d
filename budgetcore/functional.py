"""Small optional/result types used for budget lookups and command parsing.

``Maybe`` replaces ``None`` checks when looking a budget up by name. ``Either`` carries
a parse result or the message explaining why parsing failed.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Mapping, TypeVar, Union

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


@dataclass(frozen=True)
class Some(Generic[T]):
    value: T

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self.value))

    def get_or_else(self, default: T) -> T:
        return self.value

    def is_some(self) -> bool:
        return True

    def is_none(self) -> bool:
        return False


@dataclass(frozen=True)
class Nothing:

    def map(self, f: Callable) -> 'Nothing':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def is_none(self) -> bool:
        return True


Maybe = Union[Some[T], Nothing]


@dataclass(frozen=True)
class Right(Generic[T]):
    value: T

    def map(self, f: Callable[[T], U]) -> 'Right[U]':
        return Right(f(self.value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self.value)

    def get_or_else(self, default: T) -> T:
        return self.value

    def is_right(self) -> bool:
        return True

    def is_left(self) -> bool:
        return False

    def get_error(self):
        raise ValueError(f"Right({self.value!r}) carries no error")


@dataclass(frozen=True)
class Left(Generic[E]):
    error: E

    # a failure short-circuits every later step
    def map(self, f: Callable) -> 'Left[E]':
        return self

    def bind(self, f: Callable) -> 'Left[E]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def is_left(self) -> bool:
        return True

    def get_error(self) -> E:
        return self.error


Either = Union[Left[E], Right[T]]


def safe_lookup(mapping: Mapping[str, T], key: str) -> Maybe[T]:
    return Some(mapping[key]) if key in mapping else Nothing()
