"""Register admin pages into a host CMS admin menu."""

from adminmenus.host import InMemoryMenuHost, MenuHost, get_default_host, set_default_host
from adminmenus.menu import AdminMenu, MenuState, compose_page_title, is_menu_already_present
from adminmenus.pages import AbstractAdminPage, AdminPage, StaticAdminPage

__all__ = [
    "AdminMenu",
    "MenuState",
    "compose_page_title",
    "is_menu_already_present",
    "AdminPage",
    "AbstractAdminPage",
    "StaticAdminPage",
    "MenuHost",
    "InMemoryMenuHost",
    "get_default_host",
    "set_default_host",
]
