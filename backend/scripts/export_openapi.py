from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from medtracker.main import app


def main() -> None:
    parser = argparse.ArgumentParser(description="Export the skill web service OpenAPI document.")
    parser.add_argument("--output", default="openapi.generated.json", help="Destination JSON file.")
    ns = parser.parse_args()

    spec = app.openapi()
    output = Path(ns.output)
    output.write_text(json.dumps(spec, indent=2))
    print(f"OpenAPI spec exported to {output}")


if __name__ == "__main__":
    main()
