"""
=============================================================================
SESSION
=============================================================================

Server-side state correlated with a client through the JSESSIONID cookie.

=============================================================================
TYPED ATTRIBUTES
=============================================================================

A session holds arbitrary named values. Instead of storing plain objects
and casting on the way out, every attribute is addressed by an
AttributeKey that also carries the value's type:

    USER = AttributeKey("user", User)

    session.set_attribute(USER, user)
    user = session.get_attribute(USER)      # typed as Optional[User]

Writing or reading a value of the wrong type under a key raises TypeError
instead of failing somewhere later.

=============================================================================
"""

import threading
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, Type, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class AttributeKey(Generic[T]):
    """A named, typed slot in a session."""

    name: str
    type: Type[T]

    def check(self, value: Any) -> T:
        if not isinstance(value, self.type):
            raise TypeError(
                f"Session attribute {self.name!r} expects {self.type.__name__}, "
                f"got {type(value).__name__}"
            )
        return value


@dataclass
class Session:
    """
    One client's session.

    Attributes:
        id: Opaque identifier, sent to the client as the JSESSIONID cookie.
    """

    id: str
    _values: Dict[str, Any] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def set_attribute(self, key: AttributeKey[T], value: T) -> None:
        key.check(value)
        with self._lock:
            self._values[key.name] = value

    def get_attribute(self, key: AttributeKey[T]) -> Optional[T]:
        """
        Read an attribute.

        Returns:
            The stored value, or None if the attribute was never set.

        Raises:
            TypeError: If the stored value does not match the key's type.
        """
        with self._lock:
            value = self._values.get(key.name)
        if value is None:
            return None
        return key.check(value)

    def has_attribute(self, key: AttributeKey[Any]) -> bool:
        with self._lock:
            return key.name in self._values


def generate_session_id() -> str:
    """Fresh random session id (a UUID4 string)."""
    return str(uuid.uuid4())
