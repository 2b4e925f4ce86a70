"""
Tagged error taxonomy.

Domain errors subclass TaggedError and declare a literal ``_tag``. A union
of such classes can then be matched exhaustively (every tag handled) or
partially (unhandled tags go to a fallback).

Example:
    >>> class NotFoundError(TaggedError):
    ...     _tag = "NotFoundError"
    ...
    ...     def __init__(self, item_id: str) -> None:
    ...         super().__init__(f"Not found: {item_id}")
    ...         self.item_id = item_id
    ...
    >>> TaggedError.match(
    ...     NotFoundError("42"),
    ...     {"NotFoundError": lambda e: f"missing: {e.item_id}"},
    ... )
    'missing: 42'
"""

from __future__ import annotations

import traceback
from typing import TYPE_CHECKING, ClassVar, TypeGuard

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


class UnmatchedTagError(LookupError):
    """Raised when an exhaustive match has no handler for an error's tag."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"No handler for error tag: {tag}")
        self.tag = tag


class TaggedError(Exception):
    """
    Base class for errors discriminated by a string ``_tag``.

    Concrete subclasses must define ``_tag`` as a class attribute. The
    constructor records the message, an optional cause and a readable
    ``stack`` that includes the cause's traceback under a "Caused by:"
    marker.

    Attributes:
        name: Concrete class name.
        message: Human-readable error message.
        cause: The underlying error or value, if any.
        stack: Diagnostic trace for humans; not meant to be parsed.
    """

    _tag: ClassVar[str]

    def __init__(self, message: str = "", *, cause: object = None) -> None:
        if not isinstance(getattr(type(self), "_tag", None), str):
            msg = f"{type(self).__name__} must define a string _tag class attribute"
            raise TypeError(msg)

        super().__init__(message)
        self.name = type(self).__name__
        self.message = message
        self.cause = cause
        if isinstance(cause, BaseException):
            self.__cause__ = cause

        self.stack = f"{self.name}: {message}\n" + "".join(traceback.format_stack()[:-1])
        if isinstance(cause, BaseException):
            caused_by = "".join(traceback.format_exception(cause)).rstrip()
            self.stack = f"{self.stack}\nCaused by: {caused_by}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"

    def __reduce__(self) -> tuple[object, ...]:
        # Subclass constructors have arbitrary signatures; __init__ is skipped.
        return _restore, (type(self), self.args), dict(self.__dict__)

    def __setstate__(self, state: dict[str, object]) -> None:
        self.__dict__.update(state)
        cause = state.get("cause")
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    @staticmethod
    def is_error(value: object) -> TypeGuard[BaseException]:
        """Return True for any exception instance, tagged or not."""
        return isinstance(value, BaseException)

    @staticmethod
    def is_tagged_error(value: object) -> TypeGuard[TaggedError]:
        """Return True for exception instances carrying a string ``_tag``."""
        return isinstance(value, BaseException) and isinstance(
            getattr(value, "_tag", None), str
        )

    @staticmethod
    def match[E: TaggedError, R](
        error: E,
        handlers: Mapping[str, Callable[[E], R]],
    ) -> R:
        """
        Dispatch to the handler registered for the error's tag.

        Args:
            error: A member of a closed tagged-error union.
            handlers: One handler per tag of the union.

        Returns:
            Whatever the selected handler returns.

        Raises:
            UnmatchedTagError: If no handler is registered for the tag.
        """
        handler = handlers.get(error._tag)
        if handler is None:
            raise UnmatchedTagError(error._tag)
        return handler(error)

    @staticmethod
    def match_partial[E: TaggedError, R](
        error: E,
        handlers: Mapping[str, Callable[[E], R]],
        fallback: Callable[[E], R],
    ) -> R:
        """
        Dispatch on the error's tag, using fallback for unhandled tags.

        Args:
            error: A member of a tagged-error union.
            handlers: Handlers for some of the union's tags.
            fallback: Called with the error when its tag has no handler.

        Returns:
            Whatever the selected handler or fallback returns.
        """
        handler = handlers.get(error._tag)
        if handler is None:
            return fallback(error)
        return handler(error)


def _restore(cls: type[TaggedError], args: tuple[object, ...]) -> TaggedError:
    """Recreate a pickled or copied TaggedError without calling __init__."""
    return cls.__new__(cls, *args)


class UnhandledException(TaggedError):
    """Wraps an exception captured by try_/try_async without a catch handler."""

    _tag = "UnhandledException"

    def __init__(self, *, cause: object) -> None:
        super().__init__(f"Unhandled exception: {cause}", cause=cause)


def is_error_instance(value: object) -> TypeGuard[BaseException]:
    """Return True for any exception instance."""
    return TaggedError.is_error(value)


def is_tagged_error(value: object) -> TypeGuard[TaggedError]:
    """Return True for exception instances carrying a string ``_tag``."""
    return TaggedError.is_tagged_error(value)


def match_error[E: TaggedError, R](
    error: E,
    handlers: Mapping[str, Callable[[E], R]],
) -> R:
    """Exhaustively match a tagged error. See TaggedError.match."""
    return TaggedError.match(error, handlers)


def match_error_partial[E: TaggedError, R](
    error: E,
    handlers: Mapping[str, Callable[[E], R]],
    fallback: Callable[[E], R],
) -> R:
    """Partially match a tagged error. See TaggedError.match_partial."""
    return TaggedError.match_partial(error, handlers, fallback)

