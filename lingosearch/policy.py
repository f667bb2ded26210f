# lingosearch/policy.py
"""Per-action query restrictions supplied by authorization policies."""

from abc import ABC
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar

from lingosearch.errors import CapabilityNotFound

if TYPE_CHECKING:
    from lingosearch.search import Search

Restriction = Callable[..., Any]


def restriction(action: str) -> Callable[[Restriction], Restriction]:
    """Register a Policy method as the search restriction for `action`.

    Usage:
        class HutPolicy(Policy):
            @restriction("enter?")
            def enterable(self, search):
                return search.filter(term("gated", False))
    """

    def decorator(fn: Restriction) -> Restriction:
        fn.__restricts__ = action  # type: ignore[attr-defined]
        return fn

    return decorator


class Policy(ABC):
    """Base class for policies restricting searches per action."""

    restrictions: ClassVar[dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        table = dict(cls.restrictions)
        for name, attr in vars(cls).items():
            action = getattr(attr, "__restricts__", None)
            if action is not None:
                table[action] = name
        cls.restrictions = table

    def restrict(self, action: str, search: "Search") -> Any:
        """Apply the restriction registered for `action` to `search`.

        Raises:
            CapabilityNotFound: if no restriction handles `action`.
        """
        name = self.restrictions.get(action)
        if name is None:
            raise CapabilityNotFound(self, action)
        return getattr(self, name)(search)
