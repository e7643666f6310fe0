"""CLI entry point for stt-proxy."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

from stt_proxy import __version__
from stt_proxy.l1_entities.errors import SttError
from stt_proxy.l3_interface_adapters.gateways.env_settings_loader import ENV_WHISPER_MODEL_PATH


def _fail(exc: Exception) -> None:
    click.echo(f'Error: {exc}', err=True)
    sys.exit(1)


@click.group()
@click.option('-v', '--verbose', count=True, help='Log to stderr (-v info, -vv debug).')
@click.option('--log-file', type=click.Path(dir_okay=False, path_type=Path), default=None, help='Write logs to a file.')
@click.version_option(version=__version__)
def cli(verbose: int, log_file: Path | None) -> None:
    """stt-proxy -- transcribe audio with whichever STT provider is configured."""
    from stt_proxy.l4_frameworks_and_drivers.logging_setup import setup_logging  # noqa: PLC0415

    if verbose or log_file:
        level = logging.DEBUG if verbose >= 2 or (log_file and not verbose) else logging.INFO
        setup_logging(level, log_file)


@cli.command()
@click.argument('audio', type=click.Path(dir_okay=False, allow_dash=True))
@click.option('-l', '--language', default=None, help="Spoken language code, e.g. 'en'. Auto-detected when omitted.")
@click.option('--translate/--no-translate', default=None, help='Translate speech to English.')
@click.option('-p', '--provider', default=None, help='Force a provider (overrides STT_PROVIDER).')
def transcribe(audio: str, language: str | None, translate: bool | None, provider: str | None) -> None:
    """Transcribe AUDIO (a file path, or '-' for stdin) and print the text."""
    from stt_proxy.l4_frameworks_and_drivers.proxy import SttProxy  # noqa: PLC0415

    source: str | bytes = click.get_binary_stream('stdin').read() if audio == '-' else audio
    proxy = SttProxy()
    try:
        result = asyncio.run(proxy.transcribe(source, language=language, translate=translate, provider=provider))
    except SttError as e:
        _fail(e)
    finally:
        proxy.shutdown()
    click.echo(result.text)


@cli.command()
def providers() -> None:
    """Show which providers are configured and which one would be used."""
    from stt_proxy.l4_frameworks_and_drivers.proxy import SttProxy  # noqa: PLC0415

    proxy = SttProxy()
    try:
        status = proxy.provider_status()
    except SttError as e:
        _fail(e)
    for pid, missing in status.items():
        state = 'configured' if not missing else 'not configured (' + '; '.join(missing) + ')'
        click.echo(f'{pid.value}: {state}')

    try:
        resolved = proxy.select_provider()
    except SttError as e:
        click.echo(f'selected: none -- {e}')
        return
    how = 'explicit' if resolved.explicit else 'auto'
    click.echo(f'selected: {resolved.provider.value} ({how})')


@cli.command()
@click.option('--urls', is_flag=True, help='Print the download URL next to each model.')
def models(urls: bool) -> None:
    """List whisper.cpp models that can be downloaded."""
    from stt_proxy.l3_interface_adapters.gateways.whisper_model_catalog import (  # noqa: PLC0415
        available_models,
        model_url,
    )

    for name in available_models():
        click.echo(f'{name}\t{model_url(name)}' if urls else name)


@cli.command()
@click.argument('model')
@click.option(
    '-d',
    '--dest',
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help='Directory to store the model in (default: user cache dir).',
)
def download(model: str, dest: Path | None) -> None:
    """Download a whisper.cpp MODEL and print where it was saved."""
    from platformdirs import user_cache_path  # noqa: PLC0415

    from stt_proxy.l3_interface_adapters.gateways.whisper_model_catalog import (  # noqa: PLC0415
        WhisperModelDownloader,
    )

    def _on_progress(percent: int) -> None:
        click.echo(f'  Downloading {model}: {percent}%', err=True)

    target = dest or user_cache_path('stt-proxy') / 'models'
    try:
        path = WhisperModelDownloader(on_progress=_on_progress).download(model, target)
    except ValueError as e:
        _fail(e)
    click.echo(str(path))
    click.echo(f'export {ENV_WHISPER_MODEL_PATH}={path}', err=True)
