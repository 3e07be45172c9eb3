"""Theme CLI commands.

This module provides the themekit command group: listing and inspecting
themes, validating and fixing WCAG contrast, exporting to CSS and other
formats, and accessibility analysis.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import load_config
from ..theme_engine import (
    Color,
    ColorSpace,
    CSSOptions,
    OutputFormat,
    Severity,
    SyntaxFormat,
    SyntaxOptions,
    ThemeEngine,
    ThemeKitError,
    analyze_all,
    analyze_theme,
    compare_themes,
    filter_accessible,
    save_theme_file,
    sort_by_accessibility,
    validate_contrast,
    validate_strict,
    validate_strict_aaa,
)

logger = logging.getLogger(__name__)

LEVEL_CHOICE = click.Choice(["AA", "AAA"], case_sensitive=False)


def _engine(ctx: click.Context) -> ThemeEngine:
    """Build the engine once per invocation from the group options."""
    obj = ctx.ensure_object(dict)
    if "engine" not in obj:
        obj["engine"] = ThemeEngine.from_config(obj["config"], themes_dir=obj.get("themes_dir"))
    return obj["engine"]


def _fail(console: Console, message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")
    sys.exit(1)


def _swatch(color: Color) -> Text:
    if color.is_empty:
        return Text("  --  ", style="dim")
    return Text("      ", style=f"on {Color.from_rgb(*color.rgb()).hex}")


@click.group()
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Path to config file (default: $THEMEKIT_CONFIG or ~/.themekit/config.yaml)')
@click.option('--themes-dir', type=click.Path(file_okay=False, path_type=Path),
              help='Extra directory of theme files to load')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def themekit(ctx: click.Context, config_path: Optional[Path], themes_dir: Optional[Path],
             verbose: bool):
    """Inspect, validate, fix and export themes."""
    config = load_config(config_path)

    level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(name)s %(levelname)s %(message)s")

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["themes_dir"] = themes_dir


@themekit.command("list")
@click.pass_context
def list_themes(ctx: click.Context):
    """List all available themes."""
    console = Console()
    try:
        engine = _engine(ctx)
    except ThemeKitError as e:
        _fail(console, f"Error listing themes: {e}")

    current = engine.registry.current

    table = Table(title="Available Themes", show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", min_width=15)
    table.add_column("Name")
    table.add_column("Mode", width=6)
    table.add_column("Accessible", justify="right")

    for theme in engine.list_themes():
        stats = analyze_theme(theme)
        marker = " *" if current is not None and theme.id == current.id else ""
        table.add_row(
            f"{escape(theme.id)}{marker}",
            escape(theme.display_name),
            "dark" if theme.dark else "light",
            f"{stats.accessibility_percent:.0f}%",
        )

    console.print(table)

    errors = engine.registry.load_errors()
    for path, message in errors.items():
        console.print(f"[yellow]Skipped {escape(path)}: {escape(message)}[/yellow]")


@themekit.command()
@click.argument('name')
@click.pass_context
def show(ctx: click.Context, name: str):
    """Show a theme's metadata and colors."""
    console = Console()
    try:
        theme = _engine(ctx).get_theme(name)
    except ThemeKitError as e:
        _fail(console, f"Error loading theme '{name}': {e}")

    info = Text.assemble(
        ("ID: ", "bold"), theme.id, "\n",
        ("Mode: ", "bold"), "dark" if theme.dark else "light", "\n",
        ("Author: ", "bold"), theme.author or "-", "\n",
        ("License: ", "bold"), theme.license or "-", "\n",
        ("Source: ", "bold"), theme.source or "-",
    )
    if theme.description:
        info.append(f"\n\n{theme.description}")
    console.print(Panel(info, title=escape(theme.display_name), border_style="blue"))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Slot", style="cyan")
    table.add_column("Color")
    table.add_column("Hex")

    for slot, color in theme.iter_colors():
        table.add_row(slot, _swatch(color), color.hex or "unset")

    console.print(table)


@themekit.command()
@click.argument('name')
@click.option('--level', type=LEVEL_CHOICE, default=None, help='WCAG level (default from config)')
@click.option('--strict', is_flag=True, help='Exit with status 1 on any error or contrast issue')
@click.pass_context
def validate(ctx: click.Context, name: str, level: Optional[str], strict: bool):
    """Validate a theme's structure and WCAG contrast."""
    console = Console()
    try:
        report = _engine(ctx).audit(name, level)
    except ThemeKitError as e:
        _fail(console, f"Error validating theme '{name}': {e}")

    if report.structural:
        table = Table(title="Structural Issues", show_header=True, header_style="bold")
        table.add_column("Severity")
        table.add_column("Field", style="cyan")
        table.add_column("Message")
        for issue in report.structural:
            color = "red" if issue.severity is Severity.ERROR else "yellow"
            table.add_row(f"[{color}]{issue.severity.value}[/{color}]", issue.field,
                          escape(issue.message))
        console.print(table)

    if report.contrast:
        table = Table(title=f"Contrast Issues ({report.level.value})", show_header=True,
                      header_style="bold")
        table.add_column("Foreground", style="cyan")
        table.add_column("Background", style="cyan")
        table.add_column("Ratio", justify="right")
        table.add_column("Required", justify="right")
        for issue in report.contrast:
            table.add_row(issue.foreground_name, issue.background_name,
                          f"{issue.ratio:.2f}:1", f"{issue.required_ratio:.1f}:1")
        console.print(table)

    summary = (f"{len(report.errors)} errors, {len(report.warnings)} warnings, "
               f"{len(report.contrast)} contrast issues")
    if report.passed:
        console.print(f"[green]✓ {escape(report.theme.id)} passes {report.level.value}[/green] ({summary})")
    else:
        console.print(f"[red]✗ {escape(report.theme.id)} fails {report.level.value}[/red] ({summary})")

    if strict:
        check = validate_strict_aaa if report.level.value == "AAA" else validate_strict
        result = check(report.theme)
        if not result.passed:
            _fail(console, f"Strict validation failed: {result.message}")


@themekit.command()
@click.argument('name')
@click.option('--level', type=LEVEL_CHOICE, default=None, help='WCAG level (default from config)')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Write the fixed theme to a YAML file')
@click.pass_context
def fix(ctx: click.Context, name: str, level: Optional[str], output: Optional[Path]):
    """Adjust failing foreground colors to meet a WCAG level."""
    console = Console()
    try:
        engine = _engine(ctx)
        original = engine.get_theme(name)
        fixed = engine.fix(name, level)
        if output is not None:
            save_theme_file(fixed, output)
    except ThemeKitError as e:
        _fail(console, f"Error fixing theme '{name}': {e}")

    level_name = level.upper() if level else engine.contrast_level.value
    before = len(validate_contrast(original, level_name))
    after = len(validate_contrast(fixed, level_name))

    if fixed.id == original.id:
        console.print(f"[green]{escape(original.id)} already meets {level_name}[/green]")
    else:
        console.print(f"Fixed [cyan]{escape(original.id)}[/cyan] -> [cyan]{escape(fixed.id)}[/cyan]: "
                      f"{before} -> {after} {level_name} contrast issues")
    if output is not None:
        console.print(f"Saved to {escape(str(output))}")


@themekit.command()
@click.argument('name', required=False)
@click.option('--format', 'fmt', type=click.Choice([f.value for f in OutputFormat]),
              default=OutputFormat.CSS.value, show_default=True, help='Output format')
@click.option('--color-space', type=click.Choice([c.value for c in ColorSpace]),
              default=None, help='Color notation (default from config)')
@click.option('--prefix', default=None, help='CSS variable prefix (default from config)')
@click.option('--syntax', type=click.Choice([s.value for s in SyntaxFormat]),
              default=SyntaxFormat.PRISM.value, show_default=True,
              help='Highlighter for --format syntax')
@click.option('--minify', is_flag=True, help='Remove whitespace')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Write to a file instead of stdout')
@click.pass_context
def export(ctx: click.Context, name: Optional[str], fmt: str, color_space: Optional[str],
           prefix: Optional[str], syntax: str, minify: bool, output: Optional[Path]):
    """Export a theme (default: the current theme) as CSS, SCSS, JSON or tokens."""
    console = Console(stderr=True)
    try:
        engine = _engine(ctx)
        fmt = OutputFormat(fmt)
        defaults = engine.css_options
        prefix = prefix or defaults.prefix

        if fmt is OutputFormat.SYNTAX:
            options = SyntaxOptions(format=SyntaxFormat(syntax), prefix=prefix, minify=minify)
        elif fmt is OutputFormat.TOKENS:
            options = None
        else:
            options = CSSOptions(
                prefix=prefix,
                color_space=ColorSpace(color_space) if color_space else defaults.color_space,
                minify=minify,
            )

        text = engine.render(name, fmt, options)
    except ThemeKitError as e:
        _fail(console, f"Error exporting theme: {e}")

    if output is None:
        click.echo(text)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text if text.endswith("\n") else text + "\n", encoding='utf-8')
    except OSError as e:
        _fail(console, f"Error writing {output}: {e}")
    console.print(f"Wrote {fmt.value} output to {escape(str(output))}")


@themekit.command()
@click.argument('names', nargs=-1)
@click.option('--min-percent', type=float, default=0.0, help='Only show themes at or above this score')
@click.pass_context
def analyze(ctx: click.Context, names: Tuple[str, ...], min_percent: float):
    """Show accessibility statistics for themes (default: all)."""
    console = Console()
    try:
        engine = _engine(ctx)
        themes = [engine.get_theme(n) for n in names] if names else engine.list_themes()
    except ThemeKitError as e:
        _fail(console, f"Error analyzing themes: {e}")

    table = Table(title="Theme Accessibility", show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Mode", width=6)
    table.add_column("Colors", justify="right")
    table.add_column("Unique", justify="right")
    table.add_column("AA Pairs", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Accessible", justify="right")

    themes = sort_by_accessibility(filter_accessible(themes, min_percent))
    for s in analyze_all(themes):
        table.add_row(
            escape(s.theme_id),
            "dark" if s.is_dark else "light",
            str(s.color_count),
            str(s.unique_colors),
            f"{s.accessible_pairs}/{s.total_pairs}",
            f"{s.contrast_score:.2f}",
            f"{s.accessibility_percent:.0f}%",
        )

    console.print(table)


@themekit.command()
@click.argument('theme_a')
@click.argument('theme_b')
@click.pass_context
def compare(ctx: click.Context, theme_a: str, theme_b: str):
    """Compare the accessibility of two themes."""
    console = Console()
    try:
        engine = _engine(ctx)
        result = compare_themes(engine.get_theme(theme_a), engine.get_theme(theme_b))
    except ThemeKitError as e:
        _fail(console, f"Error comparing themes: {e}")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Metric")
    table.add_column(escape(result.theme_a), justify="right")
    table.add_column(escape(result.theme_b), justify="right")

    a, b = result.stats_a, result.stats_b
    table.add_row("Mode", "dark" if a.is_dark else "light", "dark" if b.is_dark else "light")
    table.add_row("Unique colors", str(a.unique_colors), str(b.unique_colors))
    table.add_row("Contrast score", f"{a.contrast_score:.2f}", f"{b.contrast_score:.2f}")
    table.add_row("AA pairs", f"{a.accessible_pairs}/{a.total_pairs}",
                  f"{b.accessible_pairs}/{b.total_pairs}")
    table.add_row("Accessible", f"{a.accessibility_percent:.0f}%", f"{b.accessibility_percent:.0f}%")

    console.print(table)
    console.print(f"More accessible: [green]{escape(result.more_accessible)}[/green]")


def main(*args, **kwargs):
    """Console script entry point."""
    return themekit(*args, **kwargs)
