"""
Provider Geocoder — Address Collection
=======================================
:class:`AddressCollection` is what every provider query returns: an
immutable, ordered, countable sequence of addresses in the order the
provider listed them.

An empty collection means "no results" and is never an error; only
:meth:`AddressCollection.first` and :meth:`AddressCollection.get` raise,
and only when the caller asks for something that is not there.
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, TypeVar

from shared.python.exceptions import EmptyCollection, InvalidArgument, OutOfBounds
from provider_geocoder.models import Address

AddressT = TypeVar("AddressT", bound=Address)


class AddressCollection(Generic[AddressT]):
    """Immutable, ordered collection of geocoding results.

    Args:
        locations: Addresses in provider response order.

    Example::

        results = AddressCollection([paris, lyon])
        len(results)          # 2
        results.first()       # paris
        results.slice(1)      # [lyon]
        for location in results:
            ...
    """

    __slots__ = ("_locations",)

    def __init__(self, locations: Iterable[AddressT] = ()) -> None:
        self._locations: tuple[AddressT, ...] = tuple(locations)

    def count(self) -> int:
        return len(self._locations)

    def first(self) -> AddressT:
        """Return the first result.

        Raises:
            EmptyCollection: If the collection holds no results.
        """
        if not self._locations:
            raise EmptyCollection("The collection is empty.")
        return self._locations[0]

    def is_empty(self) -> bool:
        return not self._locations

    def has(self, index: int) -> bool:
        """Return ``True`` if *index* addresses an element (negative indices never do)."""
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        return 0 <= index < len(self._locations)

    def get(self, index: int) -> AddressT:
        """Return the result at *index*.

        Raises:
            OutOfBounds: If ``index < 0`` or ``index >= count()``.
        """
        if not self.has(index):
            raise OutOfBounds(
                f"Index {index!r} is out of bounds for a collection of {len(self._locations)} result(s)."
            )
        return self._locations[index]

    def slice(self, offset: int, length: int | None = None) -> list[AddressT]:
        """Return up to *length* results starting at *offset*.

        An *offset* past the end yields an empty list.  ``length=None``
        means "to the end".

        Raises:
            InvalidArgument: If *offset* or *length* is negative.
        """
        if offset < 0:
            raise InvalidArgument(f"Slice offset must not be negative, got {offset}.")
        if length is not None and length < 0:
            raise InvalidArgument(f"Slice length must not be negative, got {length}.")
        end = None if length is None else offset + length
        return list(self._locations[offset:end])

    def all(self) -> list[AddressT]:
        return list(self._locations)

    def __len__(self) -> int:
        return len(self._locations)

    def __iter__(self) -> Iterator[AddressT]:
        return iter(self._locations)

    def __bool__(self) -> bool:
        return bool(self._locations)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AddressCollection):
            return NotImplemented
        return self._locations == other._locations

    def __hash__(self) -> int:
        return hash(self._locations)

    def __repr__(self) -> str:
        return f"AddressCollection({list(self._locations)!r})"
