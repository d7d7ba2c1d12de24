"""Admin page types that can be added to an admin menu."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

from markupsafe import escape


@runtime_checkable
class AdminPage(Protocol):
    """Anything an admin menu can list.

    ``render`` is called by the host to produce the page body. ``load`` is
    called by the host before rendering, only for requests routed to this page.
    """

    @property
    def slug(self) -> str: ...

    @property
    def title(self) -> str: ...

    @property
    def capability(self) -> str: ...

    def render(self) -> Any: ...

    def load(self) -> Any: ...


class AbstractAdminPage(ABC):
    """Base class for admin pages with a fixed slug, title and capability."""

    def __init__(self, slug: str, title: str, capability: str) -> None:
        self._slug = slug
        self._title = title
        self._capability = capability

    @property
    def slug(self) -> str:
        return self._slug

    @property
    def title(self) -> str:
        return self._title

    @property
    def capability(self) -> str:
        return self._capability

    @abstractmethod
    def render(self) -> Any:
        """Render the page body."""

    def load(self) -> None:
        """Prepare the page for rendering. Does nothing by default."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(slug={self._slug!r}, title={self._title!r})"


class StaticAdminPage(AbstractAdminPage):
    """An admin page that always renders the same body."""

    def __init__(self, slug: str, title: str, capability: str, body: str = "") -> None:
        super().__init__(slug, title, capability)
        self.body = body

    def render(self) -> str:
        return self.body or f"<h1>{escape(self.title)}</h1>"
