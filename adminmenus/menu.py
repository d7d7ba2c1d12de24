"""Admin menus that admin pages can be added to.

An admin menu is either one the host already provides (a core menu such as
``options-general.php``, or a custom menu added earlier), a new custom menu
created on demand, or the empty slug for pages that should not be listed in
any menu.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Mapping, TypedDict

from adminmenus.host import CORE_MENU_SUFFIX, MenuHost, get_default_host
from adminmenus.lib import observability
from adminmenus.pages import AdminPage

logger = logging.getLogger(__name__)


class MenuArgs(TypedDict, total=False):
    """Arguments used only when the menu has to be created."""

    menu_title: str
    icon_url: str
    position: int | float | None


class MenuState(Enum):
    """Whether the menu exists in the host."""

    UNRESOLVED = "unresolved"
    ABSENT = "absent"
    PRESENT = "present"


def compose_page_title(menu_title: str, page_title: str) -> str:
    """Return the full page title used for the HTML document title.

    The menu title is prefixed unless it is empty or already part of the page
    title. There is no separator.
    """
    if menu_title and menu_title not in page_title:
        return menu_title + page_title
    return page_title


def is_menu_already_present(menu_slug: str, admin_page_hooks: Mapping[str, str]) -> bool:
    """Check whether a menu with ``menu_slug`` needs no creation.

    True for core menus, for menus already in the host registry (from this or
    another extension), and for the empty slug used for unlisted pages.
    """
    if menu_slug.endswith(CORE_MENU_SUFFIX):
        return True

    if menu_slug in admin_page_hooks:
        return True

    if not menu_slug:
        return True

    return False


class AdminMenu:
    """A host admin menu which admin pages can be added to.

    Args:
        menu_slug: A core menu file (e.g. ``"options-general.php"``), a custom
            menu slug, or ``""`` for pages that should not appear in any menu.
        menu_args: Only relevant if the menu does not exist yet. Supports
            ``menu_title``, ``icon_url`` (URL, base64 SVG data URI or icon
            class name) and ``position``.
        host: Menu service to register with. Defaults to the process-wide host.
    """

    def __init__(
        self,
        menu_slug: str,
        menu_args: MenuArgs | Mapping | None = None,
        *,
        host: MenuHost | None = None,
    ) -> None:
        args = dict(menu_args or {})
        self._menu_slug = menu_slug
        self._menu_title: str = args.get("menu_title") or ""
        self._icon_url: str = args.get("icon_url") or ""
        self._position: int | float | None = args.get("position")
        self._host = host if host is not None else get_default_host()
        self._state = MenuState.UNRESOLVED

    @property
    def slug(self) -> str:
        """The menu slug. After the menu is created, this is its first page's slug."""
        return self._menu_slug

    @property
    def state(self) -> MenuState:
        return self._state

    @property
    def menu_title(self) -> str:
        return self._menu_title

    @property
    def icon_url(self) -> str:
        return self._icon_url

    @property
    def position(self) -> int | float | None:
        return self._position

    def add_page(self, page: AdminPage) -> str:
        """Add an admin page to the menu.

        Creates the menu from the first page if it does not exist yet.

        Returns:
            The hook suffix assigned by the host, or an empty string on failure.
        """
        with observability.span("admin_menu.add_page", menu_slug=self._menu_slug, page_slug=page.slug):
            if self._state is MenuState.UNRESOLVED:
                if is_menu_already_present(self._menu_slug, self._host.admin_page_hooks):
                    self._state = MenuState.PRESENT
                else:
                    self._state = MenuState.ABSENT

            full_title = compose_page_title(self._menu_title, page.title)

            if self._state is MenuState.ABSENT:
                self._host.add_menu_page(
                    full_title,
                    self._menu_title,
                    page.capability,
                    page.slug,
                    self._icon_url,
                    self._position,
                )
                logger.debug(
                    "Created admin menu %r from its first page %r", self._menu_slug, page.slug
                )
                # The host has no separate menu identity: a new menu is its first page.
                self._menu_slug = page.slug
                self._state = MenuState.PRESENT

            hook_suffix = self._host.add_submenu_page(
                self._menu_slug,
                full_title,
                page.title,
                page.capability,
                page.slug,
                page.render,
            ) or ""
            if hook_suffix:
                self._host.bind_load_event(hook_suffix, page.load)
            else:
                logger.warning(
                    "Admin page %r could not be added to menu %r", page.slug, self._menu_slug
                )
                observability.warning(
                    "Admin page {page_slug} could not be added to menu {menu_slug}",
                    page_slug=page.slug,
                    menu_slug=self._menu_slug,
                )
            return hook_suffix

    def __repr__(self) -> str:
        return f"AdminMenu(slug={self._menu_slug!r}, state={self._state.value})"
