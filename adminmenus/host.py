"""Host menu service interface and an in-memory reference host.

The admin menu only ever talks to a ``MenuHost``. Production code plugs in
the CMS's own menu service; tests, the CLI and the HTTP adapter use
``InMemoryMenuHost``, which mirrors how the host platform stores menus,
names hook suffixes and rejects pages.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Protocol

from adminmenus.lib.hooks import HookRegistry, hooks, load_hook_name

logger = logging.getLogger(__name__)

# Menus shipped by the host are addressed by their admin file name.
CORE_MENU_SUFFIX = ".php"

CORE_MENUS: dict[str, str] = {
    "index.php": "dashboard",
    "edit.php": "posts",
    "upload.php": "media",
    "themes.php": "appearance",
    "plugins.php": "plugins",
    "users.php": "users",
    "tools.php": "tools",
    "options-general.php": "settings",
}

_TITLE_STRIP = re.compile(r"<[^>]*>")
_TITLE_INVALID = re.compile(r"[^a-z0-9_\-]+")


class UnknownPageError(LookupError):
    """Raised when dispatching a hook suffix the host never handed out."""


class MenuHost(Protocol):
    """The host's menu service, as seen by an admin menu."""

    @property
    def admin_page_hooks(self) -> Mapping[str, str]:
        """Read-only snapshot of registered top-level menus, keyed by slug."""
        ...

    def add_menu_page(
        self,
        page_title: str,
        menu_title: str,
        capability: str,
        menu_slug: str,
        icon_url: str = "",
        position: int | float | None = None,
    ) -> None: ...

    def add_submenu_page(
        self,
        parent_slug: str,
        page_title: str,
        menu_title: str,
        capability: str,
        menu_slug: str,
        callback: Callable[[], Any],
    ) -> str: ...

    def bind_load_event(self, hook_suffix: str, callback: Callable[[], Any]) -> None: ...


@dataclass(frozen=True)
class MenuEntry:
    """A top-level menu."""

    page_title: str
    menu_title: str
    capability: str
    menu_slug: str
    icon_url: str = ""
    position: int | float | None = None


@dataclass(frozen=True)
class SubmenuEntry:
    """A page listed under a parent menu."""

    parent_slug: str
    page_title: str
    menu_title: str
    capability: str
    menu_slug: str
    callback: Callable[[], Any]
    hook_suffix: str


def sanitize_title(title: str) -> str:
    """Turn a menu title into the identifier the host uses in hook suffixes."""
    value = _TITLE_STRIP.sub("", title).strip().lower()
    value = _TITLE_INVALID.sub("-", value)
    return value.strip("-")


def plugin_page_hookname(
    menu_slug: str,
    parent_slug: str,
    admin_page_hooks: Mapping[str, str],
) -> str:
    """Compute the hook suffix the host assigns to a page.

    Top-level pages get ``toplevel_page_<slug>``, pages under a known menu get
    ``<menu name>_page_<slug>`` and anything else ``admin_page_<slug>``.
    """
    if menu_slug in admin_page_hooks:
        page_type = "toplevel"
    elif parent_slug and parent_slug in admin_page_hooks:
        page_type = admin_page_hooks[parent_slug]
    else:
        page_type = "admin"

    page_name = menu_slug.replace(CORE_MENU_SUFFIX, "")
    return f"{page_type}_page_{page_name}"


class InMemoryMenuHost:
    """Menu host that keeps everything in process memory.

    Args:
        capabilities: Capabilities granted to the current user. ``None``
            grants every capability.
        hook_registry: Registry receiving load bindings. Defaults to a
            private registry so independent hosts never share bindings.
        core_menus: Menus present before anything is registered.
    """

    def __init__(
        self,
        capabilities: Iterable[str] | None = None,
        *,
        hook_registry: HookRegistry | None = None,
        core_menus: Mapping[str, str] | None = None,
    ) -> None:
        self._capabilities = None if capabilities is None else frozenset(capabilities)
        self._hooks = hook_registry if hook_registry is not None else HookRegistry()
        self._admin_page_hooks: dict[str, str] = dict(
            CORE_MENUS if core_menus is None else core_menus
        )
        self._menu: list[MenuEntry] = []
        self._submenu: dict[str, list[SubmenuEntry]] = {}
        self._pages: dict[str, SubmenuEntry] = {}

    @property
    def admin_page_hooks(self) -> Mapping[str, str]:
        return MappingProxyType(self._admin_page_hooks)

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    @property
    def menu(self) -> tuple[MenuEntry, ...]:
        """Top-level menus added through this host, in registration order."""
        return tuple(self._menu)

    @property
    def submenu(self) -> Mapping[str, tuple[SubmenuEntry, ...]]:
        """Submenu entries grouped by parent slug."""
        return MappingProxyType(
            {parent: tuple(entries) for parent, entries in self._submenu.items()}
        )

    def pages(self) -> list[SubmenuEntry]:
        """Every registered page, in registration order."""
        return list(self._pages.values())

    def current_user_can(self, capability: str) -> bool:
        if self._capabilities is None:
            return True
        return capability in self._capabilities

    def add_menu_page(
        self,
        page_title: str,
        menu_title: str,
        capability: str,
        menu_slug: str,
        icon_url: str = "",
        position: int | float | None = None,
    ) -> None:
        self._menu.append(
            MenuEntry(
                page_title=page_title,
                menu_title=menu_title,
                capability=capability,
                menu_slug=menu_slug,
                icon_url=icon_url,
                position=position,
            )
        )
        self._admin_page_hooks[menu_slug] = sanitize_title(menu_title) or menu_slug
        logger.debug("Added menu %r (%s)", menu_slug, menu_title)

    def add_submenu_page(
        self,
        parent_slug: str,
        page_title: str,
        menu_title: str,
        capability: str,
        menu_slug: str,
        callback: Callable[[], Any],
    ) -> str:
        if not self.current_user_can(capability):
            logger.debug(
                "Rejected page %r: capability %r not granted", menu_slug, capability
            )
            return ""

        if any(page.menu_slug == menu_slug for page in self._pages.values()):
            logger.debug("Rejected page %r: slug already registered", menu_slug)
            return ""

        hook_suffix = plugin_page_hookname(menu_slug, parent_slug, self._admin_page_hooks)
        entry = SubmenuEntry(
            parent_slug=parent_slug,
            page_title=page_title,
            menu_title=menu_title,
            capability=capability,
            menu_slug=menu_slug,
            callback=callback,
            hook_suffix=hook_suffix,
        )
        self._submenu.setdefault(parent_slug, []).append(entry)
        self._pages[hook_suffix] = entry
        logger.debug("Added page %r under %r as %s", menu_slug, parent_slug, hook_suffix)
        return hook_suffix

    def bind_load_event(self, hook_suffix: str, callback: Callable[[], Any]) -> None:
        self._hooks.add_action(load_hook_name(hook_suffix), callback)

    def get_page(self, hook_suffix: str) -> SubmenuEntry:
        try:
            return self._pages[hook_suffix]
        except KeyError:
            raise UnknownPageError(f"No admin page registered as {hook_suffix!r}") from None

    async def dispatch(self, hook_suffix: str) -> Any:
        """Serve a request routed to ``hook_suffix``: fire its load action, then render."""
        entry = self.get_page(hook_suffix)
        await self._hooks.do_action(load_hook_name(hook_suffix))
        result = entry.callback()
        if asyncio.iscoroutine(result):
            result = await result
        return result


_default_host: MenuHost | None = None


def get_default_host() -> MenuHost:
    """Return the process-wide menu host, creating an in-memory one on first use."""
    global _default_host
    if _default_host is None:
        _default_host = InMemoryMenuHost(hook_registry=hooks)
    return _default_host


def set_default_host(host: MenuHost) -> None:
    global _default_host
    _default_host = host


def reset_default_host() -> None:
    """Forget the process-wide host. Useful for testing."""
    global _default_host
    _default_host = None
