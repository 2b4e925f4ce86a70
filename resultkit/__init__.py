"""Explicit, composable error handling with Result values and tagged errors."""

from resultkit.capture import try_, try_async
from resultkit.compose import gen, gen_async
from resultkit.errors import (
    TaggedError,
    UnhandledException,
    UnmatchedTagError,
    is_error_instance,
    is_tagged_error,
    match_error,
    match_error_partial,
)
from resultkit.result import (
    Err,
    Ok,
    Result,
    UnwrapError,
    and_then,
    and_then_async,
    err,
    hydrate,
    is_error,
    is_ok,
    map,
    map_error,
    match,
    ok,
    tap,
    tap_async,
    unwrap,
    unwrap_or,
)
from resultkit.retry import RetryPolicy

__all__ = [
    "Err",
    "Ok",
    "Result",
    "RetryPolicy",
    "TaggedError",
    "UnhandledException",
    "UnmatchedTagError",
    "UnwrapError",
    "and_then",
    "and_then_async",
    "err",
    "gen",
    "gen_async",
    "hydrate",
    "is_error",
    "is_error_instance",
    "is_ok",
    "is_tagged_error",
    "map",
    "map_error",
    "match",
    "match_error",
    "match_error_partial",
    "ok",
    "tap",
    "tap_async",
    "try_",
    "try_async",
    "unwrap",
    "unwrap_or",
]
