"""Configuration and feature flag commands for project manager CLI."""

from cyclopts import App

from project_manager.config import get_config

config_app = App(name="config", help="Manage settings and feature flags")

KNOWN_FLAGS = {
    "enforce_completion": True,
    "portal": False,
}


def _scope(global_: bool) -> str:
    return "global" if global_ else "local"


@config_app.command
def set(key: str, value: str, global_: bool = False) -> None:
    """Store a setting.

    Args:
        key: Setting name, e.g. backend, yaml.path or dependencies.scope
        value: Setting value
        global_: Write to ~/.project-manager instead of the current directory.
    """
    get_config(use_global=global_).set(key, value)
    print(f"Set {key} = {value} ({_scope(global_)})")


@config_app.command
def unset(key: str, global_: bool = False) -> None:
    """Remove a setting so its default applies again."""
    get_config(use_global=global_).unset(key)
    print(f"Unset {key} ({_scope(global_)})")


@config_app.command
def get(key: str, global_: bool = False) -> None:
    """Print one setting, local value first, then global."""
    value = get_config(use_global=global_).get(key)
    print(f"{key} is not set" if value is None else f"{key} = {value}")


@config_app.command(name="list")
def list_config(global_: bool = False) -> None:
    """Print every setting.

    Args:
        global_: Only show the global file. Otherwise show local values merged over global ones.
    """
    settings = get_config(use_global=global_).list()
    if not settings:
        print(f"No {_scope(global_)} configuration settings")
        return

    print("Settings:\n")
    for key, value in settings.items():
        print(f"{key} = {value}")


@config_app.command
def enable(flag: str, global_: bool = False) -> None:
    """Turn a feature flag on."""
    get_config(use_global=global_).set(f"features.{flag}", "true")
    print(f"Enabled {flag} ({_scope(global_)})")


@config_app.command
def disable(flag: str, global_: bool = False) -> None:
    """Turn a feature flag off."""
    get_config(use_global=global_).set(f"features.{flag}", "false")
    print(f"Disabled {flag} ({_scope(global_)})")


@config_app.command
def features() -> None:
    """Show the effective state of known feature flags."""
    config = get_config()
    for flag, default in KNOWN_FLAGS.items():
        state = "on" if config.feature_enabled(flag, default=default) else "off"
        print(f"{flag}: {state}")
