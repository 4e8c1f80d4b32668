import argparse
import json
import logging
import os

from src.utils.db import init_db, load_deeds, load_history_templates
from src.utils.doc_filler import fill_template_file
from src.utils.exceptions import ScrutinyReportError
from src.utils.field_registry import FieldRegistry
from src.utils.template_utils import load_template_scan

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def load_json_file(path: str, expected_type: type, label: str):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, expected_type):
        raise ValueError(f"{label} file {path} must contain a JSON {expected_type.__name__}")
    return data


def main():
    parser = argparse.ArgumentParser(description="Fill a Legal Scrutiny Report template from JSON data.")
    parser.add_argument("--template", required=True, help="Path to the Word template")
    parser.add_argument("--output", required=True, help="Path to save the output Word document")
    parser.add_argument("--fields", help="JSON file with field name -> value")
    parser.add_argument("--parcels", help="JSON file with a list of document detail records")
    parser.add_argument("--deeds", help="JSON file with a list of deed records (defaults to the deeds in --db)")
    parser.add_argument("--db", help="SQLite database with deeds and History of Title templates")
    args = parser.parse_args()

    # --- Input Validation ---
    if not os.path.exists(args.template):
        print(f"Error: Template file not found at {args.template}")
        return 1

    output_dir = os.path.dirname(args.output)
    if output_dir and not os.path.exists(output_dir):
        try:
            os.makedirs(output_dir)
        except OSError as e:
            print(f"Error creating output directory {output_dir}: {e}")
            return 1

    try:
        # 1. Scan the template
        print(f"Analyzing template: {args.template}...")
        scan = load_template_scan(args.template)
        print(scan.summary())
        if scan.field_names:
            print(f"Fields: {', '.join(scan.field_names)}")
        for tag in scan.unsupported_tags:
            print(f"Warning: unsupported template tag {tag} is left as written.")

        # 2. Collect the data
        registry = FieldRegistry.from_scan(scan)
        if args.fields:
            registry.update(load_json_file(args.fields, dict, "Fields"))
        missing = [name for name, value in registry.entries() if not value]
        if missing:
            print(f"Warning: no value for {', '.join(missing)}; these render blank.")

        parcels = load_json_file(args.parcels, list, "Parcels") if args.parcels else []
        deeds = load_json_file(args.deeds, list, "Deeds") if args.deeds else []
        history_provider = None
        if args.db:
            init_db(args.db)
            if not args.deeds:
                deeds = load_deeds(db_path=args.db)
            history_provider = lambda: load_history_templates(db_path=args.db)

        # 3. Fill the Word document
        print(f"\nFilling Word document: {args.output}...")
        fill_template_file(args.template, registry, args.output,
                           deeds=deeds, parcels=parcels, history_template_provider=history_provider)
        print(f"Successfully created filled document: {args.output}")
        return 0
    except (ScrutinyReportError, ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
