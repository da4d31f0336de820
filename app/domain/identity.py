"""Natural-key identity for mapped entities.

Entities compare and hash by their business key (``__natural_key__``), never
by the surrogate id, so transient and detached instances behave the same way
in sets and dicts. A key that references another entity uses that entity's
own natural key. A missing part compares as ``None``, so two instances with
the same partial key are equal.

The first time an instance is hashed with a complete key (no ``None`` part),
the key is pinned: later assignments that would change it raise
``NaturalKeyFrozen``. Pinning an instance also pins every entity its key
refers to.
"""
from typing import Any
from sqlalchemy import event
from app.domain.exceptions import NaturalKeyFrozen


def _key_part(value: Any) -> Any:
    if isinstance(value, NaturalKeyMixin):
        return value.natural_key()
    return value


def _is_complete(key: Any) -> bool:
    if key is None:
        return False
    if isinstance(key, tuple):
        return all(_is_complete(part) for part in key)
    return True


class NaturalKeyMixin:
    __natural_key__: tuple[str, ...] = ()

    _pinned_key: tuple | None = None

    def natural_key(self) -> tuple:
        return tuple(_key_part(getattr(self, name)) for name in self.__natural_key__)

    def has_natural_key(self) -> bool:
        return _is_complete(self.natural_key())

    def _key_with(self, name: str, value: Any) -> tuple:
        return tuple(
            _key_part(value) if attr == name else _key_part(getattr(self, attr))
            for attr in self.__natural_key__
        )

    def _pin(self, key: tuple) -> None:
        self._pinned_key = key
        for name in self.__natural_key__:
            ref = getattr(self, name)
            if isinstance(ref, NaturalKeyMixin) and ref._pinned_key is None:
                ref._pin(ref.natural_key())

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self.natural_key() == other.natural_key()

    def __hash__(self) -> int:
        if self._pinned_key is not None:
            return hash((type(self).__name__, self._pinned_key))
        key = self.natural_key()
        if _is_complete(key):
            self._pin(key)
        return hash((type(self).__name__, key))

    def __repr__(self) -> str:
        parts = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.__natural_key__)
        return f"{type(self).__name__}({parts})"


def _rekey_guard(name: str):
    def _reject_rekey(target: NaturalKeyMixin, value: Any, oldvalue: Any, initiator) -> None:
        pinned = target._pinned_key
        if pinned is None:
            return
        # initiator is the collection attribute when a backref clears the reference
        if target._key_with(name, value) != pinned:
            raise NaturalKeyFrozen(
                f"{type(target).__name__}.{name} is part of a natural key already in use",
                ctx={"entity": type(target).__name__, "field": name}
            )
    return _reject_rekey


@event.listens_for(NaturalKeyMixin, "mapper_configured", propagate=True)
def _install_key_guards(mapper, class_) -> None:
    for name in class_.__natural_key__:
        event.listen(getattr(class_, name), "set", _rekey_guard(name))
