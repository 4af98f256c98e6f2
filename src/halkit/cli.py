"""halkit command line: inspect an endpoint table without a network.

Usage:
    halkit endpoints api.yaml
    halkit match api.yaml "/users/123/posts?status=published" [--base-url URL]
    halkit url api.yaml user_posts user_id=123 page=2

Model names in the file are not resolved; each endpoint is registered with
its model name as a label.
"""

from __future__ import annotations

import logging
import sys

import click

from halkit._config import load_endpoint_file
from halkit._errors import HalError
from halkit._registry import EndpointRegistry


def _load_registry(path: str, base_url: str | None = None) -> EndpointRegistry:
    registry = EndpointRegistry(name=path, base_url=base_url)
    for cfg in load_endpoint_file(path):
        registry.register(cfg.id, cfg.kind, cfg.url, cfg.model, cfg.query_params)
    return registry


def _parse_params(pairs: tuple[str, ...]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            msg = f"expected key=value, got {pair!r}"
            raise click.BadParameter(msg, param_hint="PARAMS")
        key, value = pair.split("=", 1)
        params[key] = value
    return params


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log registry activity")
def main(verbose: bool) -> None:
    """Inspect HAL endpoint tables."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def endpoints(file: str) -> None:
    """List the endpoints declared in FILE."""
    try:
        registry = _load_registry(file)
    except HalError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(2)

    for entry in registry:
        query = "&".join(f"{k}={v}" for k, v in entry.query_params.items())
        suffix = f" ?{query}" if query else ""
        click.echo(f"{entry.id}\t{entry.kind}\t{entry.url}{suffix}\t-> {entry.target}")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("href")
@click.option("--base-url", default=None, help="API base URL to strip from hrefs")
def match(file: str, href: str, base_url: str | None) -> None:
    """Print the endpoint id HREF resolves to (exit 1 if none)."""
    try:
        registry = _load_registry(file, base_url)
    except HalError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(2)

    entry = registry.find_match(href)
    if entry is None:
        click.echo(f"no endpoint matches {href}", err=True)
        sys.exit(1)
    click.echo(entry.id)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("endpoint_id")
@click.argument("params", nargs=-1)
def url(file: str, endpoint_id: str, params: tuple[str, ...]) -> None:
    """Print the request URL for ENDPOINT_ID with key=value PARAMS."""
    try:
        registry = _load_registry(file)
        click.echo(registry.url_for(endpoint_id, **_parse_params(params)))
    except HalError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(2)


if __name__ == "__main__":
    main()
