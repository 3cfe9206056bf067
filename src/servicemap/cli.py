"""ServiceMap CLI entry point."""

import click
import uvicorn

from servicemap.config import settings


@click.group()  # type: ignore[untyped-decorator]
@click.version_option(version=settings.app_version)  # type: ignore[untyped-decorator]
def main() -> None:
    """ServiceMap - service topology and alert severity graph."""


@main.command()  # type: ignore[untyped-decorator]
@click.option("--host", default=settings.api_host, help="API host")  # type: ignore[untyped-decorator]
@click.option("--port", default=settings.api_port, type=int, help="API port")  # type: ignore[untyped-decorator]
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")  # type: ignore[untyped-decorator]
def serve(host: str, port: int, reload: bool) -> None:
    """Start the ServiceMap API server."""
    uvicorn.run(
        "servicemap.api.app:app",
        host=host,
        port=port,
        reload=reload,
    )


@main.command()  # type: ignore[untyped-decorator]
def status() -> None:
    """Show ServiceMap configuration."""
    click.echo(f"ServiceMap v{settings.app_version}")
    click.echo(f"Environment: {settings.environment}")
    click.echo(f"API: http://{settings.api_host}:{settings.api_port}{settings.api_prefix}")
    click.echo(
        "Full chain: warn above "
        f"{settings.graph_full_chain_warning_threshold} services, "
        f"abort above {settings.graph_full_chain_max_services}"
    )
    click.echo(f"Dangling edges: {settings.graph_dangling_edge_policy}")


if __name__ == "__main__":
    main()
