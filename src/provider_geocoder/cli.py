"""
Provider Geocoder — CLI Entry Point
====================================
Installed as the ``provider-geocode`` command via ``pyproject.toml``.

Usage:
    provider-geocode --input data/addresses.csv --output output/addresses.geojson \\
                     --query-col full_address --provider nominatim \\
                     --user-agent "my-app/1.0"
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from shared.python.exceptions import GeocoderError
from provider_geocoder.batch import BatchGeocoder
from provider_geocoder.providers import (
    PROVIDER_NAMES,
    GeoIPs,
    GoogleMaps,
    Nominatim,
    OIORest,
    Provider,
    Yandex,
)
from provider_geocoder.transport import RequestsTransport


def build_provider(
    name: str,
    transport: RequestsTransport,
    user_agent: str,
    api_key: str | None,
) -> Provider:
    """Instantiate the provider registered under *name*.

    Raises:
        click.UsageError: If the provider needs an API key and none was given.
    """
    if name == Nominatim.name:
        return Nominatim.with_openstreetmap_server(user_agent, transport=transport)
    if name == Yandex.name:
        return Yandex(api_key=api_key, transport=transport)
    if name == OIORest.name:
        return OIORest(transport=transport)

    if not api_key:
        raise click.UsageError(
            f"--api-key or GEOCODER_API_KEY env var required when using --provider {name}"
        )
    if name == GoogleMaps.name:
        return GoogleMaps(api_key=api_key, transport=transport)
    return GeoIPs(api_key=api_key, transport=transport)


@click.command(
    name="provider-geocode",
    help="Geocode a CSV of addresses through a provider and write GeoJSON.",
)
@click.option(
    "--input", "-i", "input_path",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    help="Path to the input CSV file.",
)
@click.option(
    "--output", "-o", "output_path",
    required=True,
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    help="Path for the output GeoJSON file.",
)
@click.option(
    "--query-col",
    default="address",
    show_default=True,
    help="CSV column containing the addresses or IPs to geocode.",
)
@click.option(
    "--provider",
    type=click.Choice(PROVIDER_NAMES, case_sensitive=False),
    default="nominatim",
    show_default=True,
    help="Geocoding provider to use.",
)
@click.option(
    "--user-agent",
    default="provider-geocoder/1.0",
    show_default=True,
    help="User-Agent sent with every request (mandatory for Nominatim).",
)
@click.option(
    "--api-key",
    default=None,
    envvar="GEOCODER_API_KEY",
    help="API key for providers that need one (google_maps, geoips, yandex). "
         "Can also be set via the GEOCODER_API_KEY environment variable.",
)
@click.option("--locale", default=None, help="Preferred response language, e.g. 'fr'.")
@click.option(
    "--extra-cols",
    default="",
    help="Comma-separated list of extra CSV columns to include in GeoJSON properties.",
)
@click.option(
    "--timeout",
    default=10.0,
    show_default=True,
    type=float,
    help="HTTP timeout in seconds for each request.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def main(
    input_path: Path,
    output_path: Path,
    query_col: str,
    provider: str,
    user_agent: str,
    api_key: str | None,
    locale: str | None,
    extra_cols: str,
    timeout: float,
    verbose: bool,
) -> None:
    """CLI entry point — wires Click options into BatchGeocoder."""
    extra = [c.strip() for c in extra_cols.split(",") if c.strip()]
    transport = RequestsTransport(timeout=timeout, user_agent=user_agent)

    try:
        geocoder_provider = build_provider(provider.lower(), transport, user_agent, api_key)
        tool = BatchGeocoder(
            input_path=input_path,
            output_path=output_path,
            provider=geocoder_provider,
            query_col=query_col,
            extra_cols=extra,
            locale=locale,
            verbose=verbose,
        )
        summary = tool.run()
    except GeocoderError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)
    finally:
        transport.close()

    click.echo(f"\nGeoJSON written to: {output_path}")
    click.echo(f"Done: {summary}.")


if __name__ == "__main__":
    main()
