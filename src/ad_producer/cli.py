"""Command-line interface using Typer."""

import asyncio
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ad_producer import __version__
from ad_producer.domain.enums import BriefStyle, LogCategory, MusicMood, Platform
from ad_producer.domain.models import Brief, LogEntry, build_default_manifest
from ad_producer.errors import AdProducerError, InvalidBriefError
from ad_producer.logging import setup_logging

# Setup logging
setup_logging()

app = typer.Typer(
    name="ad-producer",
    help="Ad Producer - Brief-to-video production pipeline CLI",
    add_completion=False,
)

console = Console()

CATEGORY_STYLES = {
    LogCategory.DECISION: "cyan",
    LogCategory.GENERATION: "blue",
    LogCategory.EVALUATION: "magenta",
    LogCategory.SUCCESS: "green",
    LogCategory.ERROR: "red",
    LogCategory.FALLBACK: "yellow",
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Ad Producer v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL for this run"),
) -> None:
    """Ad Producer - Plan, generate, evaluate and assemble product ads."""
    if log_level:
        setup_logging(level=log_level)


@app.command()
def version() -> None:
    """Show the installed version."""
    console.print(f"Ad Producer v{__version__}")


def _build_brief(
    product: str,
    description: str,
    audience: str,
    benefits: Optional[list[str]],
    duration: int,
    platform: Platform,
    style: BriefStyle,
    cta: str,
    music: Optional[MusicMood] = None,
    voice: Optional[str] = None,
) -> Brief:
    brief = Brief(
        product_name=product,
        product_description=description,
        target_audience=audience,
        key_benefits=benefits or [],
        duration_seconds=duration,
        platform=platform,
        style=style,
        call_to_action=cta,
        music_mood=music,
        voice_id=voice,
    )
    try:
        brief.validate()
    except InvalidBriefError as e:
        console.print(f"[bold red]Invalid brief: {e}[/bold red]")
        raise typer.Exit(code=2)
    return brief


def _print_log(entry: LogEntry) -> None:
    color = CATEGORY_STYLES.get(entry.category, "white")
    console.print(f"[dim]{entry.phase:<8}[/dim] [{color}]{entry.category:<10}[/{color}] {entry.message}")


@app.command()
def produce(
    product: str = typer.Argument(..., help="Product name"),
    description: str = typer.Option("", "--description", "-D", help="Product description"),
    audience: str = typer.Option("", "--audience", "-a", help="Target audience"),
    benefits: Optional[list[str]] = typer.Option(None, "--benefit", "-b", help="Key benefit (repeatable)"),
    duration: int = typer.Option(60, "--duration", "-d", help="Duration in seconds"),
    platform: Platform = typer.Option(Platform.YOUTUBE, "--platform", "-p", help="Target platform"),
    style: BriefStyle = typer.Option(BriefStyle.PROFESSIONAL, "--style", "-s", help="Brief tone"),
    cta: str = typer.Option("", "--cta", help="Call to action"),
    music: Optional[MusicMood] = typer.Option(None, "--music", "-m", help="Music mood override"),
    voice: Optional[str] = typer.Option(None, "--voice", help="Voice id"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print the summary tables"),
) -> None:
    """Run the full production pipeline for a brief."""
    from ad_producer.services.pipeline import ProductionPipeline

    brief = _build_brief(product, description, audience, benefits, duration, platform, style, cta, music, voice)
    console.print(f"[bold blue]Producing ad for {brief.product_name}...[/bold blue]")

    pipeline = ProductionPipeline()
    if not quiet:
        pipeline.add_log_observer(_print_log)

    production = pipeline.create_production(brief)
    try:
        asyncio.run(pipeline.execute(production))
    except (AdProducerError, httpx.HTTPError, TimeoutError) as e:
        console.print(f"[bold red]Production failed: {e}[/bold red]")
        raise typer.Exit(code=1)

    snapshot = production.snapshot()

    phases = Table(title="Phases")
    phases.add_column("Phase", style="cyan")
    phases.add_column("Status")
    phases.add_column("Progress", justify="right")
    for phase in snapshot.phases:
        phases.add_row(phase.name, phase.status, f"{phase.progress}%")
    console.print(phases)

    assets = Table(title="Assets")
    assets.add_column("Section", style="cyan")
    assets.add_column("Type")
    assets.add_column("Provider")
    assets.add_column("Status")
    assets.add_column("Score", justify="right")
    assets.add_column("Regen", justify="right")
    for asset in snapshot.assets:
        assets.add_row(
            asset.section.label,
            asset.type,
            asset.provider + (" (fallback)" if asset.fallback_used else ""),
            asset.status,
            "-" if asset.quality_score is None else str(asset.quality_score),
            str(asset.regeneration_count),
        )
    console.print(assets)

    console.print(
        f"[bold green]✓ {snapshot.status}[/bold green] "
        f"Quality Score: {snapshot.overall_quality_score}/100"
    )


@app.command()
def select(
    product: str = typer.Argument(..., help="Product name"),
    duration: int = typer.Option(60, "--duration", "-d", help="Duration in seconds"),
    style: BriefStyle = typer.Option(BriefStyle.PROFESSIONAL, "--style", "-s", help="Brief tone"),
    visual_style: Optional[str] = typer.Option(None, "--visual-style", help="Visual style preset override"),
) -> None:
    """Show the provider chosen for each section of the template manifest."""
    from ad_producer.presets.styles import style_for_brief
    from ad_producer.services.content_classifier import RuleBasedContentClassifier, SceneContent
    from ad_producer.services.provider_selector import SceneForSelection, get_provider_selector

    brief = _build_brief(product, "", "", None, duration, Platform.YOUTUBE, style, "")
    manifest = build_default_manifest(brief)
    preset = visual_style or style_for_brief(brief.style).name

    classifier = RuleBasedContentClassifier()
    batch = classifier.classify_sync(
        [
            SceneContent(s.id, i, s.scene_type, s.script_text, s.visual_direction, s.duration)
            for i, s in enumerate(manifest)
        ]
    )
    scenes = [
        SceneForSelection(
            scene_index=i,
            scene_type=s.scene_type,
            content_type=batch.recommendations[i].content_type,
            narration=s.script_text,
            visual_direction=s.visual_direction,
            duration=s.duration,
        )
        for i, s in enumerate(manifest)
    ]

    selector = get_provider_selector()
    selections = selector.select_providers_for_project(scenes, preset)
    cost = selector.calculate_total_cost(selections, scenes)

    table = Table(title=f"Provider Selection ({preset})")
    table.add_column("Section", style="cyan")
    table.add_column("Duration", justify="right")
    table.add_column("Provider", style="green")
    table.add_column("Confidence", justify="right")
    table.add_column("Alternatives")
    table.add_column("Reason")
    for index, selection in selections.items():
        table.add_row(
            manifest[index].section.label,
            f"{manifest[index].duration:.1f}s",
            selection.provider.display_name,
            f"{selection.confidence}%",
            ", ".join(selection.alternatives),
            selection.reason,
        )
    console.print(table)
    console.print(f"[bold]Estimated cost:[/bold] ${cost.total:.2f}")
    for provider_id, amount in cost.breakdown.items():
        console.print(f"  [dim]{provider_id}: ${amount:.2f}[/dim]")


@app.command()
def classify(
    product: str = typer.Argument(..., help="Product name"),
    duration: int = typer.Option(60, "--duration", "-d", help="Duration in seconds"),
    rules: bool = typer.Option(False, "--rules", help="Force the keyword rule classifier"),
) -> None:
    """Classify the scenes of the template manifest."""
    from ad_producer.services.content_classifier import (
        RuleBasedContentClassifier,
        SceneContent,
        get_content_classifier,
    )

    brief = _build_brief(product, "", "", None, duration, Platform.YOUTUBE, BriefStyle.PROFESSIONAL, "")
    manifest = build_default_manifest(brief)
    classifier = RuleBasedContentClassifier() if rules else get_content_classifier()

    batch = asyncio.run(
        classifier.classify(
            [
                SceneContent(s.id, i, s.scene_type, s.script_text, s.visual_direction, s.duration)
                for i, s in enumerate(manifest)
            ]
        )
    )

    table = Table(title=f"Scene Classification ({batch.strategy})")
    table.add_column("Scene", style="cyan")
    table.add_column("Classification")
    table.add_column("Provider", style="green")
    table.add_column("Fallback")
    table.add_column("Confidence", justify="right")
    table.add_column("Reasoning")
    for rec in batch.recommendations:
        table.add_row(
            rec.scene_id,
            rec.content_classification,
            rec.recommended_provider,
            rec.fallback_provider,
            f"{rec.confidence}%",
            rec.reasoning,
        )
    console.print(table)


@app.command()
def providers() -> None:
    """List the motion clip providers in the catalog."""
    from ad_producer.services.provider_catalog import DEFAULT_CATALOG

    table = Table(title="Provider Catalog")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Max", justify="right")
    table.add_column("$/s", justify="right")
    table.add_column("Resolution")
    table.add_column("Motion")
    table.add_column("Audio")
    for provider in DEFAULT_CATALOG:
        table.add_row(
            provider.id,
            provider.display_name,
            f"{provider.max_duration_seconds}s",
            f"{provider.cost_per_second:.3f}",
            f"{provider.max_resolution}@{provider.max_fps}",
            provider.motion_quality,
            "✓" if provider.native_audio else "-",
        )
    console.print(table)


@app.command()
def styles() -> None:
    """List available visual style presets."""
    from ad_producer.presets.styles import STYLES

    for name, preset in STYLES.items():
        console.print(Panel.fit(
            f"[bold]{preset.display_name}[/bold]\n\n"
            f"{preset.description}\n\n"
            f"[cyan]Preferred providers:[/cyan] {', '.join(preset.preferred_video_providers)}\n"
            f"[cyan]Transition:[/cyan] {preset.transition_type} ({preset.transition_duration}s)\n"
            f"[cyan]Music:[/cyan] {preset.music_genre}\n\n"
            f"[dim]Prompt:[/dim] {preset.format_style_prompt()}",
            title=name,
            border_style="cyan",
        ))
        console.print()


if __name__ == "__main__":
    app()
