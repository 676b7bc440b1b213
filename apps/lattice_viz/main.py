"""Lattice visualizer - serve a three.js point cloud of integer lattice points."""

from __future__ import annotations

from pathlib import Path

import click

from visual.lattice import GenerationRequest, InvalidArgument

from apps.lattice_viz.server import Defaults, PortUnavailable, check_servable, run_server


@click.command()
@click.option("-d", "--dimension", type=int, default=3, show_default=True, help="Dimension of the lattice")
@click.option(
    "-s",
    "--sum-limit",
    "--sumLimit",
    "sum_limit",
    type=int,
    default=5,
    show_default=True,
    help="Sum limit for the lattice points (max absolute coordinate)",
)
@click.option("--host", default=Defaults.host, show_default=True, help="Host to bind to")
@click.option("--port", default=Defaults.port, show_default=True, help="First port to try")
@click.option(
    "--max-port-attempts",
    default=Defaults.max_port_attempts,
    show_default=True,
    help="Ports to try before giving up",
)
@click.option(
    "--public-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("public"),
    show_default=True,
    help="Directory the page is written to and served from",
)
@click.option("--no-browser", is_flag=True, help="Do not open a browser tab")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(
    dimension: int,
    sum_limit: int,
    host: str,
    port: int,
    max_port_attempts: int,
    public_dir: Path,
    no_browser: bool,
    debug: bool,
) -> None:
    """Start the lattice visualization web server."""
    try:
        request = check_servable(GenerationRequest(dimension=dimension, sum_limit=sum_limit))
    except InvalidArgument as e:
        raise click.UsageError(str(e)) from e

    try:
        run_server(
            request,
            public_dir=public_dir,
            host=host,
            port=port,
            max_port_attempts=max_port_attempts,
            open_browser=not no_browser,
            debug=debug,
        )
    except PortUnavailable as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    main()
