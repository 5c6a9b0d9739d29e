#!/usr/bin/env python3
"""
CLI script to run trek over HTML files.

Reads each file, extracts its main content and metadata, and writes one
JSON list with a result per file:

  python run_trek.py page.html other.html --url https://example.com/post -o out.json

TREK_LOG_LEVEL and TREK_LOG_FILE may be set in a .env file.
"""

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

from trek import Trek, TrekError, TrekOptions, html_to_text


def main():
    parser = argparse.ArgumentParser(description="Extract main content and metadata from HTML files")
    parser.add_argument("files", nargs="+", help="HTML files to process")
    parser.add_argument("--url", help="Page URL (domain resolution, site-specific extractors)")
    parser.add_argument("--markdown", action="store_true", help="Return content as Markdown")
    parser.add_argument("--separate-markdown", action="store_true",
                        help="Add a Markdown rendering next to the HTML content")
    parser.add_argument("--debug", action="store_true", help="Skip lossy normalization passes")
    parser.add_argument("--no-exact", action="store_true", help="Disable exact clutter selectors")
    parser.add_argument("--no-partial", action="store_true", help="Disable partial clutter selectors")
    parser.add_argument("--text", action="store_true", help="Include a plain-text rendering")
    parser.add_argument("--output", "-o", help="Output JSON file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log pipeline progress")
    args = parser.parse_args()

    options = TrekOptions(
        url=args.url,
        debug=args.debug,
        markdown=args.markdown,
        separate_markdown=args.separate_markdown,
        remove_exact_selectors=not args.no_exact,
        remove_partial_selectors=not args.no_partial,
    )
    trek = Trek(options, log_level=logging.DEBUG if args.verbose else None)

    results = []

    for filepath in args.files:
        path = Path(filepath)
        print(f"Parsing: {path.name}")

        try:
            response = trek.parse_file(path)

            result = {
                "file": path.name,
                "status": "success",
                **response.to_dict(),
            }
            if args.text:
                result["text"] = html_to_text(response.content)
            results.append(result)

            extractor = response.extractor_type or "generic path"
            print(f"  ✓ {response.metadata.word_count} words ({extractor})")

        except (TrekError, OSError) as e:
            results.append({
                "file": path.name,
                "status": "error",
                "error": str(e)
            })
            print(f"  ✗ Error: {e}")

    # ensure_ascii=False keeps non-ASCII text readable
    output = json.dumps(results, indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"\nSaved to: {args.output}")
    else:
        print("\n" + output)


if __name__ == "__main__":
    main()
