"""In-memory savepoints — all-or-nothing mutation of engine state.

Every mutating engine operation runs inside ``savepoint()``. Before a ledger
entry or attribute is overwritten, its previous value is recorded in the
active savepoint's undo journal. On exception the journal is replayed in
reverse; on success it is folded into the enclosing savepoint (if any), so a
failing outer operation also undoes its already-completed inner steps.

Usage mirrors ``async with db.begin_nested()``:

    with savepoint():
        track_item(self._balances, owner)
        self._balances[owner] = new_balance
"""

from collections.abc import Callable, Iterator, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar
from functools import partial, wraps
from typing import Any, TypeVar

_MISSING = object()

_active: ContextVar["Savepoint | None"] = ContextVar("pm_savepoint", default=None)

F = TypeVar("F", bound=Callable[..., Any])


def _restore_item(mapping: MutableMapping[Any, Any], key: Any, old: Any) -> None:
    if old is _MISSING:
        mapping.pop(key, None)
    else:
        mapping[key] = old


class Savepoint:
    def __init__(self, parent: "Savepoint | None") -> None:
        self._parent = parent
        self._undo: list[Callable[[], None]] = []

    @property
    def depth(self) -> int:
        return 0 if self._parent is None else self._parent.depth + 1

    def record_item(self, mapping: MutableMapping[Any, Any], key: Any) -> None:
        self._undo.append(partial(_restore_item, mapping, key, mapping.get(key, _MISSING)))

    def record_attr(self, obj: object, name: str) -> None:
        self._undo.append(partial(setattr, obj, name, getattr(obj, name)))

    def rollback(self) -> None:
        while self._undo:
            self._undo.pop()()

    def release(self) -> None:
        if self._parent is not None:
            self._parent._undo.extend(self._undo)
        self._undo = []


@contextmanager
def savepoint() -> Iterator[Savepoint]:
    sp = Savepoint(_active.get())
    token = _active.set(sp)
    try:
        yield sp
    except BaseException:
        sp.rollback()
        raise
    else:
        sp.release()
    finally:
        _active.reset(token)


def atomic(func: F) -> F:
    """Decorator: run the whole method inside its own savepoint."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        with savepoint():
            return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def track_item(mapping: MutableMapping[Any, Any], key: Any) -> None:
    sp = _active.get()
    if sp is not None:
        sp.record_item(mapping, key)


def track_attr(obj: object, name: str) -> None:
    sp = _active.get()
    if sp is not None:
        sp.record_attr(obj, name)
