#!/usr/bin/env python3
"""Write the ComplyFlow OpenAPI document for the web client's typed API layer.

Usage:
    poetry run python scripts/generate_openapi.py
    poetry run python scripts/generate_openapi.py --output web/src/api/openapi.json
"""

import argparse
import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger("complyflow.generate_openapi")


def routes_by_tag(schema: Dict[str, Any]) -> Counter:
    """Count operations per tag, e.g. how many ``/functions/v1`` billing routes."""
    return Counter(
        tag
        for operations in schema.get("paths", {}).values()
        for operation in operations.values()
        for tag in operation.get("tags", ["untagged"])
    )


def export_schema(output: Path, compact: bool = False) -> Dict[str, Any]:
    from complyflow.main import app  # noqa: PLC0415

    schema = app.openapi()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(schema, indent=None if compact else 2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return schema


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--output", "-o", type=Path, default=Path("openapi.json"))
    parser.add_argument("--compact", action="store_true", help="No indentation")
    args = parser.parse_args()

    schema = export_schema(args.output, args.compact)
    logger.info(f"{schema['info']['title']} {schema['info']['version']} -> {args.output}")
    for tag, count in sorted(routes_by_tag(schema).items()):
        logger.info(f"  {tag}: {count} operations")


if __name__ == "__main__":
    main()
