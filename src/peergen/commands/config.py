"""Config commands -- view and modify the global configuration.

Provides the ``peergen config`` sub-command group. ``show`` prints the
effective settings (global config merged with ``peergen.json`` and
environment overrides); ``set`` and ``reset`` edit the global
:class:`~peergen.models.GlobalConfig` file.
"""

from __future__ import annotations

import typer

from peergen.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration.

    Example::

        peergen config show
        peergen --json config show
    """
    from peergen.config import get_config_dir, resolve_config
    from peergen.exceptions import PeergenError

    try:
        config, conventions, project = resolve_config()
    except PeergenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Config directory: {get_config_dir()}")
    data = config.model_dump(mode="json")
    data["project"] = project
    data["conventions"] = conventions.model_dump(mode="json")
    format_response(data)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g. 'conventions.links_root')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a value in the global configuration.

    Nested keys use dot notation. The updated config is validated against
    :class:`~peergen.models.GlobalConfig` before it is saved.

    Example::

        peergen config set project ./project.yaml
        peergen config set conventions.products_package skip-lib
        peergen config set output.format plain
    """
    from peergen.config import load_global_config, save_global_config
    from peergen.exceptions import PeergenError
    from peergen.models import GlobalConfig

    try:
        config = load_global_config()
    except PeergenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    data = config.model_dump(mode="json")

    *parents, final_key = key.split(".")
    target = data
    for part in parents:
        if not isinstance(target.get(part), dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[part]

    if final_key not in target:
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    target[final_key] = value

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set {key} = {value}")


@config_app.command("reset")
def config_reset(ctx: typer.Context) -> None:
    """Reset the global configuration to defaults.

    Asks for confirmation unless ``--force`` is given.
    """
    from peergen.config import save_global_config
    from peergen.models import GlobalConfig

    force = ctx.obj.get("force", False) if ctx.obj else False
    if not force and not typer.confirm("Reset all config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
