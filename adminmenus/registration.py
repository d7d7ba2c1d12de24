"""Register the admin menus and pages declared in configuration."""

from __future__ import annotations

import logging

from adminmenus.config import Settings
from adminmenus.host import MenuHost
from adminmenus.lib import observability
from adminmenus.menu import AdminMenu
from adminmenus.pages import StaticAdminPage

logger = logging.getLogger(__name__)


def build_menus(settings: Settings, host: MenuHost) -> dict[str, AdminMenu]:
    """Create one admin menu per configured menu, keyed by configured slug."""
    return {
        menu.slug: AdminMenu(menu.slug, menu.menu_args(), host=host)
        for menu in settings.menus
    }


def register_admin_pages(settings: Settings, host: MenuHost) -> dict[str, str]:
    """Add every configured page to its menu.

    Pages naming a menu that is not configured get a bare menu for that slug,
    which covers core menus, menus added elsewhere and unlisted pages.

    Returns:
        Hook suffix per page slug. Pages the host rejected map to ``""``.
        A slug configured more than once is registered only the first time.
    """
    menus = build_menus(settings, host)
    results: dict[str, str] = {}

    for page_config in settings.pages:
        if page_config.slug in results:
            logger.warning("Duplicate admin page slug %r in config, skipped", page_config.slug)
            continue

        menu = menus.get(page_config.menu)
        if menu is None:
            menu = menus[page_config.menu] = AdminMenu(page_config.menu, host=host)

        page = StaticAdminPage(
            page_config.slug,
            page_config.title,
            page_config.capability,
            body=page_config.body,
        )
        results[page.slug] = menu.add_page(page)

    failed = [slug for slug, hook_suffix in results.items() if not hook_suffix]
    if failed:
        logger.warning("%d admin page(s) not registered: %s", len(failed), ", ".join(failed))
        observability.warning(
            "{count} admin page(s) not registered", count=len(failed), page_slugs=failed
        )
    else:
        logger.info("Registered %d admin page(s)", len(results))

    return results
