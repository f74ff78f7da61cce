"""Command line interface for Law Hierarchy Studio."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import dotenv
import typer

from law_hierarchy_studio.config.loader import load_config
from law_hierarchy_studio.config.schema import AppConfig
from law_hierarchy_studio.data.element_loader import load_law_elements
from law_hierarchy_studio.data.law_elements import LawElement
from law_hierarchy_studio.hierarchy import (
    CascadingSelection,
    FlattenMode,
    build_hierarchy,
    export_outline,
    extract_subtrees,
    filter_relevant,
    flatten_display,
    flatten_full,
    iter_tree,
    render_outline,
)
from law_hierarchy_studio.llm import StudyAssistant, build_generator
from law_hierarchy_studio.logging import configure_logging
from law_hierarchy_studio.serve.api import run_server

app = typer.Typer(help="Law Hierarchy Studio CLI")

# Ensure .env is loaded with highest priority
dotenv.load_dotenv(override=True)


def _setup(config: Path) -> AppConfig:
    cfg = load_config(config)
    configure_logging(cfg.logging)
    return cfg


def _law_elements(cfg: AppConfig, law_id: Optional[str]) -> list[LawElement]:
    """Load the elements of one law, failing with a CLI error when none match."""

    target = law_id or cfg.data.default_law_id
    elements = load_law_elements(cfg.data.elements_path, law_id=target)
    if not elements:
        raise typer.BadParameter(f"No elements found for law {target!r}")
    return elements


def _find(elements: list[LawElement], element_id: str) -> LawElement:
    for element in elements:
        if element["id"] == element_id:
            return element
    raise typer.BadParameter(f"Unknown element: {element_id}")


@app.command()
def tree(
    config: Path = typer.Option(..., help="Path to YAML config."),
    law_id: Optional[str] = typer.Option(None, help="Law to show (defaults to data.default_law_id)."),
    focus: Optional[List[str]] = typer.Option(None, help="Only show these elements with their context."),
    select: Optional[List[str]] = typer.Option(None, help="Toggle these elements on and show checkboxes."),
    output: Optional[Path] = typer.Option(None, help="Write the outline to this Markdown file."),
) -> None:
    """Print the outline of a law.

    Args:
        config: Path to configuration YAML file.
        law_id: Law to show.
        focus: Element ids to focus on.
        select: Selectable element ids to check, in order.
        output: Optional Markdown destination.
    """
    cfg = _setup(config)
    elements = _law_elements(cfg, law_id)
    forest = build_hierarchy(elements, max_depth=cfg.hierarchy.max_depth)
    if focus:
        forest = filter_relevant(forest, focus)

    rules = CascadingSelection(cfg.hierarchy.selectable_types)
    selected: frozenset[str] | None = None
    if select:
        selected = frozenset()
        nodes = {node["id"]: node for node in iter_tree(forest)}
        for element_id in select:
            node = nodes.get(element_id)
            if node is None:
                raise typer.BadParameter(f"Unknown element: {element_id}")
            selected = rules.toggle(node, True, selected)

    if output is not None:
        export_outline(forest, output, selected, rules)
        typer.echo(f"Outline written to {output}")
        return
    typer.echo(render_outline(forest, selected, rules))


@app.command()
def content(
    element_id: str = typer.Argument(..., help="Element to flatten."),
    config: Path = typer.Option(..., help="Path to YAML config."),
    law_id: Optional[str] = typer.Option(None, help="Law the element belongs to."),
    mode: FlattenMode = typer.Option(FlattenMode.DISPLAY, help="display (capped) or full."),
) -> None:
    """Print the flattened text of an element and its descendants.

    Args:
        element_id: Element to flatten.
        config: Path to configuration YAML file.
        law_id: Law the element belongs to.
        mode: Output mode.
    """
    cfg = _setup(config)
    elements = _law_elements(cfg, law_id)
    element = _find(elements, element_id)
    if mode is FlattenMode.FULL:
        typer.echo(flatten_full(element, elements, cfg.hierarchy.max_depth))
        return
    shown = flatten_display(
        element,
        elements,
        max_chars=cfg.flatten.display_max_chars,
        ellipsis=cfg.flatten.ellipsis,
        max_depth=cfg.hierarchy.max_depth,
    )
    typer.echo(shown["content"])
    if shown["truncated"]:
        typer.echo(
            f"\n[Showing {cfg.flatten.display_max_chars} of {shown['total_length']} characters; "
            "use --mode full for the complete text]",
            err=True,
        )


@app.command()
def extract(
    root_ids: List[str] = typer.Argument(..., help="Subtree roots to copy."),
    config: Path = typer.Option(..., help="Path to YAML config."),
    law_id: Optional[str] = typer.Option(None, help="Law to copy from."),
    output: Optional[Path] = typer.Option(None, help="Write the copied elements to this JSON file."),
) -> None:
    """Copy whole subtrees into a standalone element list.

    Args:
        root_ids: Ids of the subtree roots.
        config: Path to configuration YAML file.
        law_id: Law to copy from.
        output: Optional JSON destination.
    """
    cfg = _setup(config)
    elements = _law_elements(cfg, law_id)
    copied = extract_subtrees(elements, root_ids, max_depth=cfg.hierarchy.max_depth)
    logging.getLogger(__name__).info("Extracted %d elements from %d roots", len(copied), len(root_ids))
    payload = json.dumps(copied, ensure_ascii=False, indent=2)
    if output is None:
        typer.echo(payload)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload, encoding="utf-8")
    typer.echo(f"Copied {len(copied)} elements into {output}")


@app.command()
def ask(
    element_id: str = typer.Argument(..., help="Element to study."),
    config: Path = typer.Option(..., help="Path to YAML config."),
    tool: str = typer.Option("explain", help="explain, examples, questions or custom."),
    question: Optional[str] = typer.Option(None, help="Question for the custom tool."),
    question_type: Optional[str] = typer.Option(None, help="multiple_choice, true_false or essay."),
    law_id: Optional[str] = typer.Option(None, help="Law the element belongs to."),
) -> None:
    """Run a study tool on an element through the configured generator.

    Args:
        element_id: Element to study.
        config: Path to configuration YAML file.
        tool: Study tool name.
        question: Question for the custom tool.
        question_type: Question style for the questions tool.
        law_id: Law the element belongs to.
    """
    cfg = _setup(config)
    elements = _law_elements(cfg, law_id)
    element = _find(elements, element_id)
    assistant = StudyAssistant(build_generator(cfg.llm), max_depth=cfg.hierarchy.max_depth)
    result = assistant.run(tool, element, elements, question=question, question_type=question_type)
    typer.echo(result.get("text", ""))


@app.command()
def serve(
    config: Path = typer.Option(..., help="Path to YAML config."),
    host: Optional[str] = typer.Option(None, help="Override host."),
    port: Optional[int] = typer.Option(None, help="Override port."),
) -> None:
    """Start HTTP API server.

    Args:
        config: Path to configuration YAML file.
        host: Optional host override.
        port: Optional port override.
    """
    cfg = _setup(config)
    logging.getLogger(__name__).info("Starting serve mode")
    run_server(cfg, host=host, port=port)


def main() -> None:
    """Entrypoint for console_scripts."""
    app()


if __name__ == "__main__":
    main()
