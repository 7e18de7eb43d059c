"""Command-line interface."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer
import yaml
from ruamel.yaml import YAML

from docnav import __version__
from docnav.assemble import assemble_site, write_navigation
from docnav.config import DEFAULT_CONFIG_FILE, SiteOptions, load_config
from docnav.config.plugin import PLUGIN_NAME, has_docnav_plugin
from docnav.errors import AssemblyError, ConfigurationError, MalformedUrlError
from docnav.paths import PathResolver


def _make_logger(
    quiet: bool, verbose: bool = False
) -> tuple[Callable[..., None], Callable[..., None]]:
    """Create log and log_verbose functions for CLI output.

    Args:
        quiet: If True, suppress all output.
        verbose: If True, enable verbose logging (quiet overrides this).

    Returns:
        Tuple of (log, log_verbose) functions.
    """
    effective_verbose = verbose and not quiet

    def log(msg: str, color: str = "green", err: bool = False) -> None:
        if not quiet:
            typer.secho(msg, fg=color, err=err)

    def log_verbose(msg: str, color: str = "green", err: bool = False) -> None:
        if effective_verbose:
            typer.secho(msg, fg=color, err=err)

    return log, log_verbose


def version_callback(value: bool) -> None:
    """Print version and exit if --version flag is set."""
    if value:
        typer.echo(f"docnav {__version__}")
        raise typer.Exit()


def _load_or_exit(config: Path, log: Callable[..., None]) -> SiteOptions:
    try:
        return load_config(config)
    except FileNotFoundError:
        log(f"Error: Config file not found: {config}", color="red", err=True)
        raise typer.Exit(1) from None
    except (ValueError, yaml.YAMLError) as e:
        log(f"Error loading config: {e}", color="red", err=True)
        raise typer.Exit(1) from None


app = typer.Typer(
    help="Generate locale-aware sidebar navigation from a documentation tree.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

ConfigOption = Annotated[
    Path,
    typer.Option("--config", "-c", help="Path to docnav.yml or mkdocs.yml"),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Suppress output (exit code only)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show detailed progress"),
]


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Generate locale-aware sidebar navigation from a documentation tree."""


@app.command()
def build(
    config: ConfigOption = Path(DEFAULT_CONFIG_FILE),
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Where to write the navigation JSON"),
    ] = Path("navigation.json"),
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-w", min=1, help="Scan locales in parallel"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail when any warning is recorded"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Preview what would be generated without writing files",
        ),
    ] = False,
    quiet: QuietOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Scan the content tree and write the navigation of every locale."""
    log, log_verbose = _make_logger(quiet, verbose)

    options = _load_or_exit(config, log)
    if workers is not None:
        options = replace(options, workers=workers)

    if not options.document_root_path.is_dir():
        log(
            f"Error: Document root not found: {options.document_root_path}",
            color="red",
            err=True,
        )
        raise typer.Exit(1)

    log_verbose(f"Document root: {options.document_root_path}")
    if dry_run:
        log_verbose("Dry run - no files will be written")

    try:
        navigation = assemble_site(options, strict=strict)
    except ConfigurationError as e:
        log(f"Error: {e}", color="red", err=True)
        raise typer.Exit(1) from None
    except AssemblyError as e:
        log(f"Error: {e}", color="red", err=True)
        for issue in e.result.all_warnings():
            log(f"- {issue}", color="yellow", err=True)
        raise typer.Exit(1) from None

    try:
        content = write_navigation(navigation, output, dry_run=dry_run)
    except OSError as exc:
        log(f"Error writing navigation: {exc}", color="red", err=True)
        raise typer.Exit(1) from None

    action, color = ("Would generate", "yellow") if dry_run else ("Generated", "green")
    log(f"{action} {output} ({len(content):,} bytes)", color)
    for locale_id in navigation.locales:
        log_verbose(
            f"  {locale_id}: {len(navigation.sidebar[locale_id])} top-level entries"
        )

    warnings = navigation.all_warnings()
    if warnings:
        log("Warnings:", color="yellow", err=True)
        for issue in warnings:
            log(f"- {issue}", color="yellow", err=True)


@app.command()
def validate(
    config: ConfigOption = Path(DEFAULT_CONFIG_FILE),
    quiet: QuietOption = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed config information"),
    ] = False,
) -> None:
    """Check config file validity."""
    log, log_verbose = _make_logger(quiet, verbose)

    try:
        options = load_config(config)
        registry = options.build_registry()
        PathResolver(registry, options.rewrites, options.index_name)
    except FileNotFoundError:
        log(f"Config invalid: {config}", color="red", err=True)
        log(f"  Error: File not found: {config}", color="red", err=True)
        raise typer.Exit(1) from None
    except (ValueError, yaml.YAMLError) as e:
        log(f"Config invalid: {config}", color="red", err=True)
        log(f"  Error: {e}", color="red", err=True)
        raise typer.Exit(1) from None

    log(f"Config valid: {config}")
    log(f"  Document root: {options.document_root_path}")
    log(f"  Locales: {len(registry)}")
    log(f"  Default locale: {registry.default_locale().id}")

    for locale in registry:
        prefix = f"/{locale.url_prefix}/" if locale.url_prefix else "/"
        log_verbose(f"  {locale.id}: {prefix} <- {options.locale_root(locale)}")
        for target, label in locale.display_labels.items():
            log_verbose(f"    - {label}: {target}")


@app.command()
def resolve(
    url: Annotated[str, typer.Argument(help="Site URL such as /zh/guide/")],
    config: ConfigOption = Path(DEFAULT_CONFIG_FILE),
) -> None:
    """Map a site URL back to its locale and document path."""
    log, _ = _make_logger(quiet=False)
    options = _load_or_exit(config, log)

    try:
        registry = options.build_registry()
        resolver = PathResolver(registry, options.rewrites, options.index_name)
        resolved = resolver.from_url(url)
    except (ConfigurationError, MalformedUrlError) as e:
        log(f"Error: {e}", color="red", err=True)
        raise typer.Exit(1) from None

    typer.echo(f"locale: {resolved.locale.id}")
    typer.echo(f"path: {resolved.logical_path}")


@app.command()
def url(
    path: Annotated[str, typer.Argument(help="Logical document path such as guide/setup")],
    locale: Annotated[
        str | None,
        typer.Option("--locale", "-l", help="Locale id (default: the default locale)"),
    ] = None,
    config: ConfigOption = Path(DEFAULT_CONFIG_FILE),
) -> None:
    """Print the public URL of a document."""
    log, _ = _make_logger(quiet=False)
    options = _load_or_exit(config, log)

    try:
        registry = options.build_registry()
        resolver = PathResolver(registry, options.rewrites, options.index_name)
        target = registry.resolve(locale) if locale else registry.default_locale()
        typer.echo(resolver.to_url(target, path))
    except (ConfigurationError, MalformedUrlError) as e:
        log(f"Error: {e}", color="red", err=True)
        raise typer.Exit(1) from None


@app.command()
def init(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to mkdocs.yml config file"),
    ] = Path("mkdocs.yml"),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing docnav section"),
    ] = False,
    quiet: QuietOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Add docnav plugin config to mkdocs.yml."""
    log, log_verbose = _make_logger(quiet, verbose)

    if not config.exists():
        log(f"Error: Config file not found: {config}", color="red", err=True)
        log(
            "Create one first or specify path with --config.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1)

    ruamel = YAML()
    ruamel.preserve_quotes = True

    with open(config, encoding="utf-8") as f:
        data = ruamel.load(f)

    if data is None:
        data = {}

    plugins = data.get("plugins", [])
    if plugins is None:
        plugins = []
    if not isinstance(plugins, (list, dict)):
        log(
            "Error: 'plugins' must be a list or mapping in mkdocs.yml.",
            color="red",
            err=True,
        )
        raise typer.Exit(1)
    data["plugins"] = plugins
    has_plugin = has_docnav_plugin(plugins)

    if has_plugin and not force:
        log("Error: docnav plugin already configured.", color="red", err=True)
        log(
            "Use --force to overwrite existing configuration.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1)

    if has_plugin and isinstance(plugins, list):
        plugins = [p for p in plugins if not has_docnav_plugin([p])]
        data["plugins"] = plugins
    elif has_plugin:
        del plugins[PLUGIN_NAME]

    if isinstance(data["plugins"], list):
        data["plugins"].append({PLUGIN_NAME: {}})
    else:
        data["plugins"][PLUGIN_NAME] = {}

    with open(config, "w", encoding="utf-8") as f:
        ruamel.dump(data, f)

    # Comments are added as text; the ruamel.yaml comment API is awkward
    content = config.read_text(encoding="utf-8")
    ends_with_newline = content.endswith("\n")

    commented_example_lines = [
        "# collapsed: false",
        "# sort_menus_by_frontmatter_order: true",
        "# default_locale: en",
        "# locales:",
        "#   en: {}",
        "#   zh:",
        "#     home_title: 首页",
        "#     nav:",
        "#       guide/index: 指南",
    ]

    def _comment_indent(line: str) -> int:
        leading = len(line) - len(line.lstrip(" "))
        if line.lstrip().startswith("- "):
            return leading + 4
        return leading + 2

    new_lines: list[str] = []
    inserted = False
    for line in content.splitlines():
        stripped = line.strip().removeprefix("- ")
        if not inserted and stripped in {f"{PLUGIN_NAME}: {{}}", f"{PLUGIN_NAME}:"}:
            indent = " " * _comment_indent(line)
            new_lines.append(line.replace(f"{PLUGIN_NAME}: {{}}", f"{PLUGIN_NAME}:"))
            new_lines.extend(f"{indent}{example}" for example in commented_example_lines)
            inserted = True
            continue
        new_lines.append(line)
    content = "\n".join(new_lines)
    if ends_with_newline:
        content += "\n"

    config.write_text(content, encoding="utf-8")

    log(f"Added docnav plugin to {config}")
    log_verbose("Configuration includes a commented example of locale options")


if __name__ == "__main__":
    app()
