"""sse-merge command line entry point."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

import click
from dotenv import find_dotenv, load_dotenv

from sse_merge._client import HttpConfig, TranscriptHttpClient
from sse_merge._errors import SSEMergeError
from sse_merge._settings import Settings
from sse_merge._sse import extract_sse_json_strings
from sse_merge.commands import merge, merge_multiple, path_choices, quick_merge
from sse_merge.pipeline import PipelineOutcome, PipelineSuccess
from sse_merge.preferences import PreferenceStore
from sse_merge.sinks import ConsoleSink, FileSink, JsonSink, ResultSink
from sse_merge.sources import FileSource, StdinSource, TextSource, UrlSource, parse_line_range


def prompt_for_json_path(default_path: str, recent_paths: Sequence[str]) -> str | None:
    """Offer the default and recent paths by number, or accept a custom expression."""
    choices = path_choices(default_path, recent_paths)
    if len(choices) == 1:
        answer = click.prompt("Enter JSONPath expression", default=default_path, err=True)
        return answer.strip() or None

    click.echo("Select a JSONPath or enter a custom one:", err=True)
    for idx, choice in enumerate(choices, start=1):
        label = "default" if idx == 1 else "recent"
        click.echo(f"  {idx}) {choice}  ({label})", err=True)

    answer = click.prompt("JSONPath", default="1", err=True).strip()
    if answer.isdigit() and 1 <= int(answer) <= len(choices):
        return choices[int(answer) - 1]
    return answer or None


def _build_source(settings: Settings, file: Path | None, url: str | None, lines: str | None) -> TextSource:
    if file is not None and url is not None:
        raise click.UsageError("Pass either FILE or --url, not both.")
    if lines is not None and file is None:
        raise click.UsageError("--lines requires FILE.")
    if url is not None:
        client = TranscriptHttpClient(config=HttpConfig(timeout_s=settings.timeout_s, debug=settings.http_debug))
        return UrlSource(url=url, client=client)
    if file is not None:
        start, end = None, None
        if lines is not None:
            try:
                start, end = parse_line_range(lines)
            except ValueError as e:
                raise click.BadParameter(str(e), param_hint="--lines") from None
        return FileSource(path=file, start_line=start, end_line=end)
    return StdinSource()


def _build_sink(output: Path | None, as_json: bool) -> ResultSink:
    if as_json:
        return JsonSink()
    if output is not None:
        return FileSink(path=output)
    return ConsoleSink()


def _store(settings: Settings) -> PreferenceStore:
    return PreferenceStore(settings.preferences_path, default_json_path=settings.default_json_path)


def _close_source(source: TextSource) -> None:
    if isinstance(source, UrlSource):
        source.client.close()


def _finish(outcome: PipelineOutcome | None) -> None:
    if outcome is None:
        raise click.ClickException("Cancelled: no JSONPath given.")
    if not outcome.success:
        click.get_current_context().exit(1)


source_options = [
    click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path)),
    click.option("--url", default=None, help="Download the transcript from this URL"),
    click.option("--lines", default=None, metavar="START:END", help="Only use this line range of FILE"),
    click.option("-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path),
                 help="Write the merged text to this file"),
    click.option("--json", "as_json", is_flag=True, default=False, help="Print the outcome as JSON"),
    click.option("--separator", default="", help="Text placed between merged values"),
]


def with_source_options(func):
    for option in reversed(source_options):
        func = option(func)
    return func


@click.group()
@click.option("--config-dir", default=None, type=click.Path(file_okay=False, path_type=Path),
              help="Directory holding preferences.json")
@click.option("--default-path", default=None, help="Fallback JSONPath expression")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_dir: Path | None, default_path: str | None, verbose: bool) -> None:
    """Merge values extracted from Server-Sent Events transcripts."""
    load_dotenv(find_dotenv(usecwd=True))
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    try:
        ctx.obj = Settings.from_env(default_json_path=default_path, config_dir=config_dir)
    except ValueError as e:
        raise click.ClickException(str(e)) from None


@cli.command("merge")
@click.option("-p", "--path", "json_path", default=None, help="JSONPath expression (prompted if omitted)")
@with_source_options
@click.pass_obj
def merge_cmd(settings: Settings, json_path: str | None, file: Path | None, url: str | None,
              lines: str | None, output: Path | None, as_json: bool, separator: str) -> None:
    """Extract a JSONPath from every message and merge the values."""
    source = _build_source(settings, file, url, lines)
    # Si la entrada viene de stdin no se puede preguntar: usar el path por defecto.
    prompt = prompt_for_json_path if (file is not None or url is not None) else None
    try:
        outcome = merge(source, _build_sink(output, as_json), _store(settings),
                        json_path=json_path, prompt=prompt, separator=separator)
    except (SSEMergeError, OSError) as e:
        raise click.ClickException(str(e)) from None
    finally:
        _close_source(source)
    _finish(outcome)


@cli.command("quick")
@with_source_options
@click.pass_obj
def quick_cmd(settings: Settings, file: Path | None, url: str | None, lines: str | None,
              output: Path | None, as_json: bool, separator: str) -> None:
    """Merge using the last used JSONPath, without prompting."""
    source = _build_source(settings, file, url, lines)
    try:
        outcome = quick_merge(source, _build_sink(output, as_json), _store(settings), separator=separator)
    except (SSEMergeError, OSError) as e:
        raise click.ClickException(str(e)) from None
    finally:
        _close_source(source)
    _finish(outcome)


@cli.command("multi")
@click.option("-p", "--path", "json_paths", multiple=True, required=True, help="JSONPath expression (repeatable)")
@with_source_options
@click.pass_obj
def multi_cmd(settings: Settings, json_paths: tuple[str, ...], file: Path | None, url: str | None,
              lines: str | None, output: Path | None, as_json: bool, separator: str) -> None:
    """Run several JSONPath expressions over the same transcript."""
    if output is not None:
        raise click.UsageError("--output is not supported with multi.")
    source = _build_source(settings, file, url, lines)
    try:
        results = merge_multiple(source, json_paths, separator=separator)
    except (SSEMergeError, OSError) as e:
        raise click.ClickException(str(e)) from None
    finally:
        _close_source(source)

    if as_json:
        payload = {path: outcome.to_dict() for path, outcome in results.items()}
        click.echo(json.dumps(payload, ensure_ascii=False, indent=2, default=str))
    else:
        sink = ConsoleSink()
        for path, outcome in results.items():
            click.echo(f"== {path}")
            sink.show(outcome, path)

    if not any(isinstance(o, PipelineSuccess) for o in results.values()):
        click.get_current_context().exit(1)


@cli.command("payloads")
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
def payloads_cmd(file: Path | None) -> None:
    """List the raw payload of every data: line."""
    text = file.read_text(encoding="utf-8", errors="replace") if file is not None else click.get_text_stream("stdin").read()
    payloads = extract_sse_json_strings(text)
    for payload in payloads:
        click.echo(payload)
    click.echo(f"{len(payloads)} data lines", err=True)


@cli.command("recent")
@click.option("--clear", is_flag=True, default=False, help="Forget every recent path")
@click.pass_obj
def recent_cmd(settings: Settings, clear: bool) -> None:
    """Show the recently used JSONPath expressions."""
    store = _store(settings)
    if clear:
        store.clear()
        click.echo("Recent paths cleared")
        return

    click.echo(f"last used: {store.get_last_used_path()}")
    for path in store.get_recent_paths():
        click.echo(f"  {path}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
