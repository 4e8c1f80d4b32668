import argparse
import os
import sys

# Ensure we can import from src
sys.path.append(os.getcwd())

from src.utils.template_utils import SAMPLE_TEMPLATE_PATH, build_sample_template, extract_placeholders


def main():
    parser = argparse.ArgumentParser(description="Write a starter Legal Scrutiny Report template.")
    parser.add_argument("--output", default=SAMPLE_TEMPLATE_PATH, help="Where to save the .docx")
    args = parser.parse_args()

    path = build_sample_template(args.output)
    print(f"Template saved to {path}")
    print(f"Fields: {', '.join(extract_placeholders(path))}")


if __name__ == "__main__":
    main()
