"""CLI commands for vidshare."""

import asyncio
import base64
import re
import secrets
import signal
import sys
from pathlib import Path

import click


@click.group()
@click.version_option(package_name="vidshare")
def cli():
    """vidshare - a video-sharing platform backend."""


@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=8000, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.option("--workers", default=1, type=int, help="Number of worker processes")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Logging level",
)
def serve(host, port, reload, workers, log_level):
    """Run the API server."""
    from hypercorn.asyncio import serve as hypercorn_serve
    from hypercorn.config import Config

    config = Config()
    config.application_path = "vidshare.asgi:app"
    config.bind = [f"{host}:{port}"]
    config.workers = 1 if reload else workers
    config.loglevel = log_level.upper()
    config.include_server_header = False

    if reload:
        config.use_reloader = True
        from hypercorn.run import run

        run(config)
        return

    from vidshare.asgi import app

    shutdown_event = asyncio.Event()

    loop = asyncio.new_event_loop()
    loop.add_signal_handler(signal.SIGINT, shutdown_event.set)
    loop.add_signal_handler(signal.SIGTERM, shutdown_event.set)
    try:
        loop.run_until_complete(hypercorn_serve(app, config, shutdown_trigger=shutdown_event.wait))
    finally:
        loop.close()


def generate_secret(fmt: str = "urlsafe", length: int = 32) -> str:
    if fmt == "urlsafe":
        return secrets.token_urlsafe(length)
    if fmt == "hex":
        return secrets.token_hex(length)
    return base64.b64encode(secrets.token_bytes(length)).decode("ascii")


def write_env_value(env_path: Path, name: str, value: str) -> None:
    """Set ``name=value`` in a .env file, replacing an existing assignment."""
    content = env_path.read_text() if env_path.exists() else ""
    pattern = re.compile(rf"^{re.escape(name)}=.*$", re.MULTILINE)
    line = f"{name}={value}"

    if pattern.search(content):
        content = pattern.sub(line, content)
    else:
        if content and not content.endswith("\n"):
            content += "\n"
        content += line + "\n"

    env_path.write_text(content)


@cli.command()
@click.option("--write", type=click.Path(), default=None, help="Write SECRET_KEY to a .env file")
@click.option(
    "--format",
    "fmt",
    default="urlsafe",
    type=click.Choice(["urlsafe", "hex", "base64"]),
    help="Output format for the secret key",
)
@click.option("--length", default=32, type=int, help="Number of random bytes")
def secret(write, fmt, length):
    """Generate a token-signing secret key."""
    key = generate_secret(fmt, length)
    if write:
        env_path = Path(write)
        write_env_value(env_path, "SECRET_KEY", key)
        click.echo(f"SECRET_KEY written to {env_path}")
    else:
        click.echo(key)


def _run_alembic(args: list[str]) -> None:
    """Run an alembic command against the packaged migration environment."""
    from alembic.config import CommandLine, Config

    package_dir = Path(__file__).parent
    alembic_ini = Path.cwd() / "alembic.ini"
    if not alembic_ini.exists():
        alembic_ini = package_dir / "alembic.ini"
    if not alembic_ini.exists():
        click.echo("Error: Could not find alembic.ini", err=True)
        sys.exit(1)

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(package_dir / "alembic"))

    cmd = CommandLine()
    options = cmd.parser.parse_args(args)
    if not hasattr(options, "cmd"):
        cmd.parser.error("too few arguments")
        return

    cfg.cmd_opts = options
    fn, positional, kwarg = options.cmd
    fn(
        cfg,
        *[getattr(options, k, None) for k in positional],
        **{k: getattr(options, k, None) for k in kwarg},
    )


@cli.command(context_settings=dict(ignore_unknown_options=True, allow_extra_args=True))
@click.pass_context
def db(ctx):
    """Run database migrations via Alembic.

    \b
    Examples:
        vidshare db upgrade head    # Apply all migrations
        vidshare db downgrade -1    # Roll back one migration
        vidshare db current         # Show current revision
    """
    if not ctx.args:
        click.echo(ctx.get_help())
        return
    _run_alembic(ctx.args)


@cli.group()
def users():
    """Manage user accounts."""


@users.command("set-role")
@click.argument("username")
@click.argument("role")
def set_role(username, role):
    """Assign ROLE (user or admin) to USERNAME."""
    from litestar.exceptions import HTTPException

    from vidshare.app_factory import build_db_config
    from vidshare.config import get_settings
    from vidshare.db.services import user_service

    db_config = build_db_config(get_settings())

    async def _apply() -> str:
        try:
            async with db_config.get_session() as session:
                user = await user_service.set_role(session, username, role)
                return user.role
        finally:
            await db_config.get_engine().dispose()

    try:
        assigned = asyncio.run(_apply())
    except HTTPException as exc:
        raise click.ClickException(exc.detail) from exc
    click.echo(f"{username} is now {assigned}")
