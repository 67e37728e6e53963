#!/usr/bin/env python3
"""
Example: Generate a BigQuery create script from a schema model

This script demonstrates how to use the bqddl Python API to generate
DDL scripts programmatically.
"""

from pathlib import Path

from bqddl import generate_create_script, read_model


def main():
    model_path = Path(__file__).parent / "sample-model.json"

    print(f"Loading model from: {model_path}")

    model = read_model(model_path)

    print(f"\nModel: {len(model.containers)} datasets")
    for container in model.containers:
        print(f"  - {container['name']}: {len(container.get('entities', []))} tables")

    result = generate_create_script(model)

    if result.statements:
        output_file = model_path.with_name("create.sql")
        output_file.write_text(result.sql + "\n")

        print(f"\n✓ {len(result.statements)} statements written to: {output_file}")
    else:
        print("\n(No statements to generate)")


if __name__ == "__main__":
    main()
