"""Export JSON schemas for the stored trip record and suggestion payloads."""

import json
import sys
from pathlib import Path

from pydantic import BaseModel

from globetrotter.models import CityLookupPayload, CityPlanPayload, GeneratedTripPayload, Trip

SCHEMA_MODELS: dict[str, type[BaseModel]] = {
    "Trip": Trip,
    "CityLookupPayload": CityLookupPayload,
    "CityPlanPayload": CityPlanPayload,
    "GeneratedTripPayload": GeneratedTripPayload,
}


def main(schemas_dir: Path = Path("docs/schemas")) -> None:
    """Export schemas to docs/schemas/ (or the given directory)."""
    schemas_dir.mkdir(parents=True, exist_ok=True)

    for name, model in SCHEMA_MODELS.items():
        path = schemas_dir / f"{name}.schema.json"
        # Payload schemas describe the wire (camelCase) shape
        with open(path, "w", encoding="utf-8") as f:
            json.dump(model.model_json_schema(by_alias=True), f, indent=2)
        print(f"Exported {name} schema to {path}")


if __name__ == "__main__":
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else Path("docs/schemas"))
