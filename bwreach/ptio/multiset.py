"""
Multiset Module

Markings are multisets of places: a place occurs as many times as it holds
tokens.

This file is part of BWReach.

BWReach is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

BWReach is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with BWReach. If not, see <https://www.gnu.org/licenses/>.
"""

from __future__ import annotations

__author__ = "BWReach developers"
__license__ = "GPLv3"
__version__ = "1.0.0"

from enum import Enum
from typing import Generic, Hashable, Iterable, Iterator, Optional, TypeVar

T = TypeVar('T', bound=Hashable)


class Ordering(Enum):
    """ Result of the domination partial order.
    """
    LESS = -1
    EQUAL = 0
    GREATER = 1
    INCOMPARABLE = 2


class Multiset(Generic[T]):
    """ Multiset.

    Attributes
    ----------
    counts : dict of T: int
        Number of occurrences of each element (always strictly positive,
        an absent element occurs zero times).
    """

    __hash__ = None

    def __init__(self, items: Optional[Iterable[T]] = None) -> None:
        """ Initializer.

        Parameters
        ----------
        items : iterable of T, optional
            Elements to insert (repetitions count).
        """
        self.counts: dict[T, int] = {}

        if items is not None:
            for item in items:
                self.insert(item)

    @classmethod
    def from_counts(cls, counts: dict[T, int]) -> Multiset[T]:
        """ Build a multiset from a mapping element -> count.

        Non-positive counts are ignored.

        Parameters
        ----------
        counts : dict of T: int
            Number of occurrences of each element.

        Returns
        -------
        Multiset
            The corresponding multiset.
        """
        multiset = cls()
        for item, count in counts.items():
            multiset.insert_many(item, count)
        return multiset

    def __str__(self) -> str:
        """ Multiset to textual format.

        Returns
        -------
        str
            Debugging format.
        """
        text = ""

        for item, count in self.counts.items():
            text += " {}({})".format(item, count)

        if text == "":
            text = " empty marking"

        return text

    def __repr__(self) -> str:
        return "Multiset({!r})".format(self.counts)

    def __len__(self) -> int:
        """ Total number of occurrences.
        """
        return sum(self.counts.values())

    def __bool__(self) -> bool:
        return bool(self.counts)

    def __iter__(self) -> Iterator[T]:
        """ Iterate over the support.
        """
        return iter(self.counts)

    def __contains__(self, item: object) -> bool:
        return item in self.counts

    def insert(self, item: T) -> Optional[int]:
        """ Add one occurrence of an element.

        Parameters
        ----------
        item : T
            Element to insert.

        Returns
        -------
        int, optional
            Previous count, None if the element was absent.
        """
        return self.insert_many(item, 1)

    def insert_many(self, item: T, n: int) -> Optional[int]:
        """ Add `n` occurrences of an element.

        `n` may be negative, the entry is deleted when the resulting count
        is not positive.

        Parameters
        ----------
        item : T
            Element to insert.
        n : int
            Number of occurrences to add.

        Returns
        -------
        int, optional
            Previous count, None if the element was absent.
        """
        previous = self.counts.get(item)
        count = (previous or 0) + n

        if count > 0:
            self.counts[item] = count
        elif previous is not None:
            del self.counts[item]

        return previous

    def remove(self, item: T) -> Optional[int]:
        """ Remove one occurrence of an element.

        Parameters
        ----------
        item : T
            Element to remove.

        Returns
        -------
        int, optional
            Previous count, None if the element was absent.
        """
        if item not in self.counts:
            return None
        return self.insert_many(item, -1)

    def get(self, item: T) -> Optional[int]:
        """ Number of occurrences, None if the element is absent.
        """
        return self.counts.get(item)

    def count(self, item: T) -> int:
        """ Number of occurrences, zero if the element is absent.
        """
        return self.counts.get(item, 0)

    def items(self) -> Iterable[tuple[T, int]]:
        return self.counts.items()

    def elements(self) -> Iterator[T]:
        """ Iterate over the elements, repeated as many times as they occur.
        """
        for item, count in self.counts.items():
            for _ in range(count):
                yield item

    def support(self) -> set[T]:
        return set(self.counts)

    def copy(self) -> Multiset[T]:
        multiset = self.__class__()
        multiset.counts = dict(self.counts)
        return multiset

    def freeze(self) -> frozenset[tuple[T, int]]:
        """ Hashable snapshot of the multiset.

        Returns
        -------
        frozenset of tuple of T, int
            Pairs (element, count).
        """
        return frozenset(self.counts.items())

    def contained_in(self, other: Multiset[T]) -> bool:
        """ Check if each element occurs at most as many times in `self` as in `other`.

        Note
        ----
        Counts are strictly positive, so a multiset with more distinct
        elements cannot be contained in `other`.

        Parameters
        ----------
        other : Multiset
            Multiset to compare with.

        Returns
        -------
        bool
            True if `self` <= `other`.
        """
        return len(self.counts) <= len(other.counts) and all(count <= other.counts.get(item, 0) for item, count in self.counts.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        return self.counts == other.counts

    def __le__(self, other: Multiset[T]) -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        return self.contained_in(other)

    def __lt__(self, other: Multiset[T]) -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        return self != other and self.contained_in(other)

    def __ge__(self, other: Multiset[T]) -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        return other.contained_in(self)

    def __gt__(self, other: Multiset[T]) -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        return self != other and other.contained_in(self)

    def __add__(self, other: Multiset[T]) -> Multiset[T]:
        return combine_add(self, other)

    def __sub__(self, other: Multiset[T]) -> Multiset[T]:
        return combine_sub(self, other)


def combine_add(left: Multiset[T], right: Multiset[T]) -> Multiset[T]:
    """ Elementwise sum.

    The operands are left untouched, the result owns its own mapping.

    Parameters
    ----------
    left : Multiset
        First operand.
    right : Multiset
        Second operand.

    Returns
    -------
    Multiset
        `left` + `right`.
    """
    result = left.copy()
    for item, count in right.counts.items():
        result.insert_many(item, count)
    return result


def combine_sub(left: Multiset[T], right: Multiset[T]) -> Multiset[T]:
    """ Truncating difference: each count is max(0, left - right).

    Note
    ----
    This is not a group inverse, `(a - b) + b` differs from `a` as soon as
    `b` is not contained in `a`.

    Parameters
    ----------
    left : Multiset
        First operand.
    right : Multiset
        Subtracted operand.

    Returns
    -------
    Multiset
        `left` - `right`.
    """
    result = left.copy()
    for item, count in right.counts.items():
        if item in result.counts:
            result.insert_many(item, -count)
    return result


def partial_order(left: Multiset[T], right: Multiset[T]) -> Ordering:
    """ Compare two multisets with respect to domination.

    Parameters
    ----------
    left : Multiset
        First multiset.
    right : Multiset
        Second multiset.

    Returns
    -------
    Ordering
        EQUAL, LESS (`left` < `right`), GREATER (`left` > `right`) or INCOMPARABLE.
    """
    if left == right:
        return Ordering.EQUAL

    if left.contained_in(right):
        return Ordering.LESS

    if right.contained_in(left):
        return Ordering.GREATER

    return Ordering.INCOMPARABLE
