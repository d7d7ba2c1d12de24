from adminmenus.lib.hooks import hooks, action, add_action, remove_action, do_action, load_hook_name

__all__ = [
    "hooks",
    "action",
    "add_action",
    "remove_action",
    "do_action",
    "load_hook_name",
]
