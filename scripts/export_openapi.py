"""Write the OpenAPI document for the account API to a JSON file.

Usage:
    python -m scripts.export_openapi [output_path]

Defaults to openapi.json in the current directory.
"""

import json
import sys
from pathlib import Path

from account_service.main import create_app

_DEFAULT_OUTPUT = Path("openapi.json")


def export_openapi(output_path: Path = _DEFAULT_OUTPUT) -> Path:
    """Generate the OpenAPI schema and write it to output_path.

    Args:
        output_path: Destination file.

    Returns:
        The path written.
    """
    schema = create_app().openapi()
    output_path.write_text(json.dumps(schema, indent=2) + "\n", encoding="utf-8")
    return output_path


def main() -> None:
    output_path = Path(sys.argv[1]) if len(sys.argv) > 1 else _DEFAULT_OUTPUT
    written = export_openapi(output_path)
    print(f"OpenAPI schema written to {written}")


if __name__ == "__main__":
    main()
