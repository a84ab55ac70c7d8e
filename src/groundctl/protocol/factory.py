"""Registry of message types, keyed by type name."""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Type, Union

import msgspec

from .message import Message


class Factory:
    """ A :class:`Factory` maps a message type name to the class that
        implements it. The registry is populated once at startup; the first
        call to :func:`decoder` freezes it, after which it is read-only and
        safe to share.
    """

    def __init__(self, series: str):
        self.series = series
        self._types: Dict[str, Type[Message]] = {}
        self._decoder: Optional[msgspec.json.Decoder] = None
        self._frozen = False
        self._lock = threading.Lock()

    def __contains__(self, name) -> bool:
        if isinstance(name, type):
            name = name.__name__
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"Factory({self.series!r}, {self.names()!r})"

    @property
    def frozen(self) -> bool:
        return self._frozen

    def names(self) -> List[str]:
        return sorted(self._types)

    def register(self, cls: Type[Message]) -> Type[Message]:
        """ Add *cls* to the registry. Returns *cls* so that this method can
            be used as a class decorator.
        """

        if isinstance(cls, type) and issubclass(cls, Message):
            pass
        else:
            raise TypeError(f"not a Message subclass: {cls!r}")

        name = cls.type_name()

        with self._lock:
            if self._frozen:
                raise RuntimeError(f"factory {self.series} is read-only, cannot register {name}")

            existing = self._types.get(name)
            if existing is not None and existing is not cls:
                raise ValueError(f"duplicate message type name: {name}")

            self._types[name] = cls

        return cls

    def freeze(self) -> None:
        self._frozen = True

    def get(self, name: str) -> Optional[Type[Message]]:
        return self._types.get(name)

    def lookup(self, name: str) -> Type[Message]:
        try:
            return self._types[name]
        except KeyError:
            available = ", ".join(self.names())
            raise KeyError(f"unknown message type '{name}'. Available: {available}") from None

    def create(self, name: str) -> Message:
        """Return a new, default-valued instance of the named message type."""
        return self.lookup(name)()

    def decoder(self) -> msgspec.json.Decoder:
        """ Return a decoder for the tagged union of every registered type.
            The decoder resolves the concrete message class from the type tag
            and every nested structure from the class definition.
        """

        with self._lock:
            if self._decoder is None:
                if not self._types:
                    raise RuntimeError(f"factory {self.series} has no registered types")

                union = Union[tuple(self._types.values())]
                self._decoder = msgspec.json.Decoder(union)
                self._frozen = True

            return self._decoder


default = Factory('CMASI')
