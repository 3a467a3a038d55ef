import sys
import json
import click
import logging
from datetime import date
from .errors import format_error, UnknownError, ValidationError
from .logging import configure_logging
from .aggregate import SORT_MODES
from .analysis import analyze_news, question_from_article
from .models.analysis import AnalysisRequest
from .models.article import REGIONS
from .export.feed_export import export_feed
from .service import get_feed
from . import __version__

logger = logging.getLogger(__name__)


def _parse_date(ctx, param, value):
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter("date must be in YYYY-MM-DD format.")


@click.group()
@click.option("--verbose", is_flag=True, help="Debug logging")
def cli(verbose):
    """newsdesk: market news feed and analysis."""
    configure_logging(logging.DEBUG if verbose else None)


@cli.command()
@click.option("--region", default="all", show_default=True, type=click.Choice(REGIONS), help="Region filter")
@click.option("--from", "date_from", callback=_parse_date, help="Earliest publish date (YYYY-MM-DD)")
@click.option("--to", "date_to", callback=_parse_date, help="Latest publish date (YYYY-MM-DD)")
@click.option("--query", default=None, help="Keep articles whose title or source contains this text")
@click.option("--sort", "sort_mode", default="timestamp", show_default=True, type=click.Choice(SORT_MODES), help="Feed ordering")
@click.option("--config", "config_path", default=None, help="Feed YAML config (default: feed.yaml)")
@click.option("--out", default=None, help="Also export JSON/CSV/MD under this directory")
def feed(region, date_from, date_to, query, sort_mode, config_path, out):
    """
    Fetch, classify and merge market news from all configured providers.
    """
    response = get_feed(
        region,
        date_from,
        date_to,
        query,
        config_path=config_path,
        sort_mode=sort_mode,
    )
    if response.status >= 500:
        raise UnknownError(response.error)
    if response.status >= 400:
        raise ValidationError(response.error)

    data = response.to_payload()
    exports = None
    if out:
        exports = export_feed(response.articles, out_root=out, region=region)
        logger.info(f"Feed exported to {exports['json']}")

    _print_json(data, region=region, count=len(response.articles), exports=exports)


@cli.command()
@click.option("--question", default=None, help="Free-form question for the analyst")
@click.option("--title", default=None, help="Headline of a news item to analyze")
@click.option("--description", default=None, help="Description of the news item")
@click.option("--vix", default=20.0, show_default=True, type=float, help="Current VIX level")
@click.option("--url", "base_url", default=None, help="Analysis backend URL (default: $ANALYSIS_API_URL)")
def analyze(question, title, description, vix, base_url):
    """Ask the analysis backend to comment on a question or news item."""
    if not question and not title:
        raise click.BadParameter("either --question or --title is required.")
    if question and title:
        raise click.BadParameter("--question and --title are mutually exclusive.")
    if title:
        question = question_from_article(title, description)

    result = analyze_news(AnalysisRequest(question=question, vix=vix), base_url=base_url)
    _print_json(result.model_dump(mode="json", by_alias=True))


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
def serve(host, port):
    """Serve the feed over HTTP (POST /fetch-news)."""
    import uvicorn

    uvicorn.run("newsdesk.server:app", host=host, port=port, log_level="info")


@cli.command()
def version():
    """Print version information."""
    _print_json({"version": __version__})


def _print_json(data, **meta):
    """Helper to print standard JSON envelope."""
    payload = {
        "ok": True,
        "data": data,
        "meta": {
            "version": 1,
            **{k: v for k, v in meta.items() if v is not None},
        }
    }
    click.echo(json.dumps(payload, indent=2))


def main():
    """Entry point for the CLI."""
    try:
        cli(standalone_mode=False)
    except Exception as e:
        if isinstance(e, click.exceptions.Exit):
             sys.exit(e.exit_code)
        if isinstance(e, click.exceptions.Abort):
             sys.exit(130)

        print(format_error(e))
        sys.exit(1)

if __name__ == "__main__":
    main()
