"""Main CLI entry point."""

import asyncio
import locale
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click
from pydantic import ValidationError

from .. import __version__
from ..config import ConfigManager
from ..core.interfaces import IKeyValueStore, IMovieCatalog, IResultCache
from ..core.models import CatalogResult, FilterCriteria, MovieDetail, ResultStatus, SortOrder
from ..infrastructure import Container, setup_logging
from ..utils import CineSiftError, ConfigurationError

NO_SOURCE_DATA_MESSAGE = (
    "No movies were loaded. Check your API key or wait for the daily request limit to reset."
)
NO_MATCHES_MESSAGE = "No movies match your current filters. Adjust your criteria!"


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(version=__version__, prog_name="cinesift")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: bool) -> None:
    """CineSift - Collect, cache and filter movies from OMDb."""
    # Initialize context object
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config

    # Skip configuration loading for commands that don't need it
    if ctx.invoked_subcommand == "init":
        return

    # A pre-built container (e.g. from an embedding application) wins
    if ctx.obj.get("container") is not None:
        ctx.obj["config"] = ctx.obj["container"].get_config()
        return

    try:
        # Load configuration
        config_manager = ConfigManager(config)
        app_config = config_manager.load_config()

        # Set up logging
        if verbose:
            app_config.logging.level = "DEBUG"
        setup_logging(app_config.logging)

        # Create container
        container = Container(config_manager)
        container.configure_default_services()

        ctx.obj["config"] = app_config
        ctx.obj["container"] = container

    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Initialization error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option("--profile", "-p", help="Use named filter profile")
@click.option("--term", "-t", "terms", multiple=True, help="Search term (repeatable)")
@click.option("--refresh", is_flag=True, help="Ignore the cache and fetch fresh data")
@click.option("--year-min", type=int, help="Earliest release year")
@click.option("--year-max", type=int, help="Latest release year")
@click.option("--max-rating", type=float, help="Maximum IMDb rating (unrated movies pass)")
@click.option(
    "--content-rating", "content_ratings", multiple=True, help="Allowed content rating (repeatable)"
)
@click.option("--language", help="Language substring, e.g. 'english'")
@click.option("--topic", help="Text to look for in the title or plot")
@click.option("--genre", help="Genre substring")
@click.option("--max-runtime", type=int, help="Maximum runtime in minutes")
@click.option("--exclude-sensitive", is_flag=True, help="Drop movies with sensitive plot keywords")
@click.option(
    "--sort",
    type=click.Choice([order.value for order in SortOrder]),
    help="Result ordering",
)
@click.option("--group-by-age", is_flag=True, help="Group results by age category")
@click.option("--limit", type=click.IntRange(min=1), help="Maximum number of movies to show")
@click.option(
    "--details", "show_details", is_flag=True, help="Show plot, language, poster and watch links"
)
@click.pass_context
def find(
    ctx: click.Context,
    profile: Optional[str],
    terms: Tuple[str, ...],
    refresh: bool,
    year_min: Optional[int],
    year_max: Optional[int],
    max_rating: Optional[float],
    content_ratings: Tuple[str, ...],
    language: Optional[str],
    topic: Optional[str],
    genre: Optional[str],
    max_runtime: Optional[int],
    exclude_sensitive: bool,
    sort: Optional[str],
    group_by_age: bool,
    limit: Optional[int],
    show_details: bool,
) -> None:
    """Find movies matching the criteria."""
    config = ctx.obj["config"]
    container = ctx.obj["container"]

    overrides: Dict[str, Any] = {
        "year_min": year_min,
        "year_max": year_max,
        "rating_ceiling": max_rating,
        "content_ratings": list(content_ratings) or None,
        "language": language,
        "topic": topic,
        "genre": genre,
        "max_runtime": max_runtime,
        "sort": SortOrder(sort) if sort else None,
    }
    if exclude_sensitive:
        overrides["exclude_sensitive"] = True

    try:
        criteria = _build_criteria(config.get_criteria(profile), overrides)
    except KeyError as e:
        raise click.BadParameter(str(e.args[0]), param_hint="--profile")
    except ValidationError as e:
        raise click.UsageError(f"Invalid criteria: {e}")

    try:
        result = asyncio.run(
            _run_find(
                container=container,
                criteria=criteria,
                refresh=refresh,
                terms=list(terms) or None,
            )
        )
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.")
        sys.exit(1)
    except CineSiftError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _display_result(result, group_by_age=group_by_age, limit=limit, show_details=show_details)


@cli.group()
def cache() -> None:
    """Inspect or clear the local result cache."""


@cache.command("info")
@click.pass_context
def cache_info(ctx: click.Context) -> None:
    """Show what the cache currently holds."""
    config = ctx.obj["config"]
    container = ctx.obj["container"]

    result_cache = container.get(IResultCache)
    store = container.get(IKeyValueStore)

    click.echo(f"Cache enabled: {'yes' if config.cache.enabled else 'no'}")
    click.echo(f"Store: {config.cache.path}")
    click.echo(f"Key: {result_cache.key}")

    details = result_cache.load()
    if details is None:
        click.echo("Cached movies: none")
    else:
        click.echo(f"Cached movies: {len(details)}")

    other_keys = [key for key in store.keys() if key != result_cache.key]
    if other_keys:
        click.echo(f"Other entries: {', '.join(sorted(other_keys))}")


@cache.command("clear")
@click.option("--all", "clear_all", is_flag=True, help="Remove every entry in the store")
@click.pass_context
def cache_clear(ctx: click.Context, clear_all: bool) -> None:
    """Remove the cached movie batch."""
    container = ctx.obj["container"]

    if clear_all:
        store = container.get(IKeyValueStore)
        keys = store.keys()
        for key in keys:
            store.remove(key)
        click.echo(f"Removed {len(keys)} cache entr{'y' if len(keys) == 1 else 'ies'}")
        return

    result_cache = container.get(IResultCache)
    result_cache.clear()
    click.echo(f"Cleared cache entry '{result_cache.key}'")


@cli.command()
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Validate configuration and prerequisites."""
    container = ctx.obj["container"]

    try:
        asyncio.run(_validate_setup(container))
        click.echo("All prerequisites validated successfully")
    except Exception as e:
        click.echo(f"Validation failed: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=Path.cwd() / "config" / "config.yaml",
    help="Output path for configuration file",
)
def init(output: Path) -> None:
    """Initialize configuration file."""
    try:
        if output.exists():
            if not click.confirm(f"Configuration file {output} already exists. Overwrite?"):
                return

        # Create directory if needed
        output.parent.mkdir(parents=True, exist_ok=True)

        # Create default config
        ConfigManager.create_default_config(output)
        click.echo(f"Configuration file created at: {output}")
        click.echo("Please set OMDB_API_KEY or edit the configuration file with your API key.")

    except Exception as e:
        click.echo(f"Failed to create configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show system status and configuration."""
    config = ctx.obj["config"]
    container = ctx.obj["container"]

    click.echo("CineSift Status")
    click.echo("=" * 40)

    api_key = config.omdb.api_key
    click.echo(f"OMDb Configured: {'✓' if api_key and not api_key.startswith('$') else '✗'}")
    click.echo(f"OMDb URL: {config.omdb.base_url}")
    click.echo(f"Search Terms: {', '.join(config.collector.search_terms)}")
    click.echo(f"Pages per Term: {config.collector.max_pages_per_term}")
    click.echo(f"Detail Cap: {config.collector.max_details_to_fetch}")
    click.echo(f"Profiles: {', '.join(sorted(config.profiles)) or 'none'}")

    result_cache = container.get(IResultCache)
    details = result_cache.load()
    cached = "disabled" if not config.cache.enabled else (len(details) if details else 0)
    click.echo(f"Cached Movies: {cached}")


def _build_criteria(base: FilterCriteria, overrides: Dict[str, Any]) -> FilterCriteria:
    """Merge command line overrides into profile criteria.

    The merged values are validated together, so a range can be moved
    past the profile's bounds in one go.
    """
    merged = base.model_dump()
    merged.update({name: value for name, value in overrides.items() if value is not None})
    return FilterCriteria.model_validate(merged)


async def _run_find(
    container: Container,
    criteria: FilterCriteria,
    refresh: bool,
    terms: Optional[list],
) -> CatalogResult:
    """Run the catalog query."""
    try:
        catalog = container.get(IMovieCatalog)  # type: ignore
        return await catalog.find_movies(criteria, refresh=refresh, terms=terms)
    finally:
        # Cleanup HTTP sessions
        await container.close()


async def _validate_setup(container: Container) -> None:
    """Validate setup and prerequisites."""
    catalog = container.get(IMovieCatalog)  # type: ignore
    errors = await catalog.validate_prerequisites()

    if errors:
        for error in errors:
            click.echo(f"✗ {error}")
        raise CineSiftError("Validation failed")


def _display_result(
    result: CatalogResult, group_by_age: bool, limit: Optional[int], show_details: bool = False
) -> None:
    """Print a catalog result."""
    if result.status == ResultStatus.NO_SOURCE_DATA:
        click.echo(NO_SOURCE_DATA_MESSAGE)
        return
    if result.status == ResultStatus.NO_MATCHES:
        click.echo(NO_MATCHES_MESSAGE)
        return

    source = "cache" if result.from_cache else "OMDb"
    click.echo(f"{len(result.movies)} of {result.source_count} movies match (source: {source})")

    if group_by_age:
        click.echo(f"{result.classified_count} movies fall in an age category")
        if result.genre_counts:
            click.echo("Categories available:")
            for genre, count in result.genre_counts.items():
                click.echo(f"  {genre} ({count})")

        for category, movies in result.age_groups.items():
            click.echo("")
            click.echo(f"For {category.label} ({len(movies)} movies)")
            click.echo("-" * 70)
            for movie in movies[:limit]:
                _echo_movie(movie, show_details)
        return

    click.echo("-" * 70)
    for movie in result.movies[:limit]:
        _echo_movie(movie, show_details)


def _format_movie(movie: MovieDetail) -> str:
    """Format one movie as a listing line."""
    parts = [
        f"IMDb: {movie.imdb_rating or 'N/A'}",
        f"Rated: {movie.rated or 'N/A'}",
    ]
    if movie.runtime:
        parts.append(f"Runtime: {movie.runtime}")
    if movie.genre:
        parts.append(f"Genre: {movie.genre}")
    return f"{movie.title} ({movie.year})  " + " | ".join(parts)


def _format_details(movie: MovieDetail) -> List[str]:
    """Format the detail view lines shown under a listing line."""
    lines = [
        f"    Plot: {movie.plot or 'N/A'}",
        f"    Language: {movie.language or 'N/A'}",
        f"    Runtime: {movie.runtime or 'N/A'}",
        f"    Poster: {movie.poster_url or 'none'}",
    ]
    for site, url in movie.search_links.items():
        lines.append(f"    Watch ({site}): {url}")
    return lines


def _echo_movie(movie: MovieDetail, show_details: bool) -> None:
    click.echo(_format_movie(movie))
    if show_details:
        for line in _format_details(movie):
            click.echo(line)


def main() -> None:
    """Main entry point."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        # Unsupported system locale, titles collate under C
        pass
    cli()


if __name__ == "__main__":
    main()
