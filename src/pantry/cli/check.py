"""
Duplicate check commands.

``pantry check`` runs the detection engine for one new item against a
list given on the command line; ``pantry normalize`` shows the canonical
form of product names.
"""

import json
from typing import Optional, Tuple

import click

from pantry.cli.formatting import console, print_config, print_decision, print_normalized
from pantry.cli.main import pass_context
from pantry.cli.utils import load_config
from pantry.core.config import BrandStrategy, SelectionPolicy
from pantry.dedup import DuplicateDetector
from pantry.normalization import normalize_product_name


@click.command()
@click.argument("name")
@click.option(
    "--existing",
    "-e",
    "existing",
    multiple=True,
    help="Item already on the list (repeatable)",
)
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in BrandStrategy], case_sensitive=False),
    help="Brand-relationship strategy",
)
@click.option(
    "--selection",
    type=click.Choice([s.value for s in SelectionPolicy], case_sensitive=False),
    help="Stop at the first matching item or pick the strongest",
)
@click.option("--json", "as_json", is_flag=True, help="Print the decision as JSON")
@pass_context
def check(
    ctx,
    name: str,
    existing: Tuple[str, ...],
    strategy: Optional[str],
    selection: Optional[str],
    as_json: bool,
):
    """Check whether NAME duplicates an item already on the list.

    \b
    Examples:
      pantry check cheerios -e cereal -e milk
      pantry check "Great Value 2% Milk" -e milk --json
      pantry check "frosted flakes" -e cheerios --strategy classifier
    """
    config = load_config(ctx.config_path)
    detection = config.detection

    if strategy:
        detection.brand_strategy = BrandStrategy(strategy)
    if selection:
        detection.selection = SelectionPolicy(selection)

    detector = DuplicateDetector(detection)
    items = [{"productName": item} for item in existing]
    decision = detector.check_for_duplicate(name, items)
    suggestions = detector.get_suggestions(decision)

    if as_json:
        payload = decision.to_dict()
        payload["suggestions"] = suggestions
        click.echo(json.dumps(payload, indent=2))
        return

    if ctx.verbose:
        print_config(
            {
                "Brand strategy": detection.brand_strategy.value,
                "Selection": detection.selection.value,
                "Existing items": len(items),
            }
        )
    console.print()
    print_decision(name, decision, suggestions)


@click.command()
@click.argument("names", nargs=-1, required=True)
def normalize(names: Tuple[str, ...]):
    """Show the normalized form of product NAMES."""
    print_normalized([(name, normalize_product_name(name)) for name in names])
