#!/usr/bin/env python3
"""Batch lay out and render every example research map to SVG.

Outputs go to /tmp/venncv_example_renders/.

Usage:
    python scripts/render_examples.py [--theme dark] [--full]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from venncv.layout import check_layout, compute_layout, relax_and_validate  # noqa: E402
from venncv.layout.validator import Severity  # noqa: E402
from venncv.parser import load_document  # noqa: E402
from venncv.render.svg import render_svg  # noqa: E402
from venncv.themes import THEMES  # noqa: E402

OUTPUT_DIR = Path("/tmp/venncv_example_renders")
EXAMPLES_DIR = project_root / "examples"

EXAMPLE_FILES = sorted(EXAMPLES_DIR.glob("*.json"))


def render_file(
    json_path: Path, output_dir: Path, theme_name: str, *, full: bool = False
) -> tuple[str, list[str]]:
    """Load, lay out, and render a research map to SVG.

    Returns (name, list_of_issues).
    """
    name = json_path.stem
    issues: list[str] = []

    try:
        doc = load_document(json_path)
    except ValueError as e:
        return name, [f"PARSE ERROR: {e}"]

    if full:
        compute_layout(doc)
    else:
        relax_and_validate(doc)

    for violation in check_layout(doc):
        prefix = "LAYOUT ERROR" if violation.severity == Severity.ERROR else "warning"
        issues.append(f"{prefix}: {violation.message}")

    svg_path = output_dir / f"{name}.svg"
    svg_path.write_text(render_svg(doc, THEMES[theme_name]))
    return name, issues


def main():
    parser = argparse.ArgumentParser(description="Batch render example research maps")
    parser.add_argument("--theme", choices=sorted(THEMES), default="light")
    parser.add_argument(
        "--full", action="store_true", help="Re-place every project before rendering"
    )
    args = parser.parse_args()

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    print(f"Rendering {len(EXAMPLE_FILES)} files to {OUTPUT_DIR}/")
    print()

    max_name_len = max((len(f.stem) for f in EXAMPLE_FILES), default=0)
    any_errors = False

    for json_path in EXAMPLE_FILES:
        name, issues = render_file(json_path, OUTPUT_DIR, args.theme, full=args.full)
        status = "OK" if not issues else "ISSUES"
        if any("ERROR" in i for i in issues):
            status = "FAIL"
            any_errors = True

        print(f"  {name:<{max_name_len}}  [{status}]")
        for issue in issues:
            print(f"    - {issue}")

    print(f"\nOutputs in: {OUTPUT_DIR}/")

    if any_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
