from typing import Any, Callable, Optional

StatusPredicate = Callable[[int], bool]


class DecodeHook:
    """A decode target that only takes part when the status code matches.

    Calling the hook with a status returns the wrapped target, or None when
    the target should be skipped. It never raises.
    """

    __slots__ = ("predicate", "target")

    def __init__(self, predicate: StatusPredicate, target: Any) -> None:
        self.predicate = predicate
        self.target = target

    def __call__(self, status: int) -> Optional[Any]:
        if self.predicate(status):
            return self.target
        return None

    def __repr__(self) -> str:
        return f"DecodeHook({self.predicate!r}, {self.target!r})"


def _is_2xx(status: int) -> bool:
    return 200 <= status < 300


def on_2xx(target: Any) -> DecodeHook:
    return DecodeHook(_is_2xx, target)


def on_4xx(target: Any) -> DecodeHook:
    return DecodeHook(lambda status: 400 <= status < 500, target)


def on_5xx(target: Any) -> DecodeHook:
    return DecodeHook(lambda status: 500 <= status < 600, target)


def on_non_2xx(target: Any) -> DecodeHook:
    return DecodeHook(lambda status: not _is_2xx(status), target)


def on_status(status: int, target: Any) -> DecodeHook:
    return DecodeHook(lambda s: s == status, target)


def resolve_target(target: Any, status: int) -> Optional[Any]:
    """Evaluate hooks against `status`; plain targets pass through unchanged."""
    if isinstance(target, DecodeHook):
        return target(status)
    return target
