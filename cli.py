"""Command-line interface for TTS Hub.

Commands:
- `speak`: synthesize text to an audio file.
- `voices`: list voices from one or all configured providers.
- `providers`: show which providers are configured.
- `test`: check connectivity to a provider.

The TTSService is built from config/default.yaml + environment (and `.env`)
unless one is passed in through the Click context object.
"""

import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from dotenv import load_dotenv

from config.loader import Config
from providers.tts.base import AudioFormat, SynthesizeOptions
from services.tts import TTSService

app = typer.Typer(
    name="tts-hub",
    no_args_is_help=True,
    help="Multi-provider Text-to-Speech CLI tool.",
)

_RULE = "─" * 80


def _build_service() -> TTSService:
    load_dotenv()
    config = Config()
    logging.basicConfig(level=str(config.get("logging.level", "WARNING")).upper())
    return TTSService(config.tts_config())


def _fail(exc: Exception, prefix: str = "Error") -> NoReturn:
    typer.secho(f"{prefix}: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


@app.callback()
def main_callback(ctx: typer.Context) -> None:
    """Multi-provider Text-to-Speech CLI tool."""
    if ctx.obj is None:
        ctx.obj = _build_service()
        ctx.call_on_close(ctx.obj.close)


@app.command("speak")
def speak_command(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Text to convert to speech.")],
    provider: Annotated[
        Optional[str],
        typer.Option("--provider", "-p", help="TTS provider (elevenlabs, varco). Defaults to the configured default."),
    ] = None,
    voice: Annotated[Optional[str], typer.Option("--voice", "-v", help="Voice ID to use.")] = None,
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output file path.")] = None,
    audio_format: Annotated[AudioFormat, typer.Option("--format", "-f", help="Audio format.")] = AudioFormat.MP3,
    speed: Annotated[float, typer.Option("--speed", help="Speech speed (0.5-2.0).")] = 1.0,
    pitch: Annotated[float, typer.Option("--pitch", help="Speech pitch (-20 to 20).")] = 0.0,
    stability: Annotated[float, typer.Option("--stability", help="Voice stability (0-1, ElevenLabs).")] = 0.5,
    similarity: Annotated[float, typer.Option("--similarity", help="Similarity boost (0-1, ElevenLabs).")] = 0.75,
) -> None:
    """Convert text to speech and save it to a file."""
    if not voice:
        raise typer.BadParameter(
            'Voice ID is required. Use "tts-hub voices" to list available voices.',
            param_hint="'--voice'",
        )

    service: TTSService = ctx.obj
    typer.echo(f"Synthesizing with {provider or service.get_default_provider()}...")
    try:
        path = service.synthesize_to_file(
            text,
            SynthesizeOptions(
                voice_id=voice,
                format=audio_format,
                speed=speed,
                pitch=pitch,
                stability=stability,
                similarity_boost=similarity,
            ),
            provider=provider,
            output_path=output,
        )
    except Exception as exc:
        _fail(exc)

    typer.echo(f"Audio saved to: {path}")


@app.command("voices")
def voices_command(
    ctx: typer.Context,
    provider: Annotated[
        Optional[str],
        typer.Option("--provider", "-p", help="Only list voices from this provider."),
    ] = None,
) -> None:
    """List available voices."""
    service: TTSService = ctx.obj
    try:
        voices = service.list_voices(provider)
    except Exception as exc:
        _fail(exc)

    if not voices:
        typer.echo("No voices found. Make sure your API keys are configured.")
        return

    typer.echo("\nAvailable Voices:\n")
    typer.echo(_RULE)
    for voice in voices:
        typer.echo(f"ID:       {voice.id}")
        typer.echo(f"Name:     {voice.name}")
        typer.echo(f"Provider: {voice.provider.value}")
        if voice.language:
            typer.echo(f"Language: {voice.language}")
        if voice.gender:
            typer.echo(f"Gender:   {voice.gender}")
        if voice.description:
            typer.echo(f"Desc:     {voice.description}")
        typer.echo(_RULE)
    typer.echo(f"\nTotal: {len(voices)} voice(s)")


@app.command("providers")
def providers_command(ctx: typer.Context) -> None:
    """List supported providers and whether each is configured."""
    service: TTSService = ctx.obj
    default = service.get_default_provider()

    typer.echo("\nTTS Providers:\n")
    for name in service.get_all_providers():
        status = "✓ Configured" if service.is_provider_configured(name) else "✗ Not configured"
        marker = " (default)" if name.value == default else ""
        typer.echo(f"  {name.value}: {status}{marker}")
    typer.echo("\nTo configure a provider, set its API key in your .env file.")


@app.command("test")
def test_command(
    ctx: typer.Context,
    provider: Annotated[
        Optional[str],
        typer.Option("--provider", "-p", help="Provider to test. Defaults to the configured default."),
    ] = None,
) -> None:
    """Test a provider connection by listing its voices."""
    service: TTSService = ctx.obj
    name = provider or service.get_default_provider()
    typer.echo(f"Testing {name} connection...")
    try:
        voices = service.list_voices(name)
    except Exception as exc:
        _fail(exc, prefix="✗ Connection failed")
    typer.echo(f"✓ Connection successful! Found {len(voices)} voices.")


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
