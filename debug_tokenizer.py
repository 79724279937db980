#!/usr/bin/env python3
"""Debug script to inspect how a snippet is tokenized and sanitized."""

import argparse
import sys
from pathlib import Path

from webutil import TokenizerError, TokenizerOpts, sanitize
from webutil.tokenizer import TokenCollector, Tokenizer


def debug_input(html, strict=False):
    print(f"Input: {html!r}")

    sink = TokenCollector()
    tokenizer = Tokenizer(sink, TokenizerOpts(strict=strict, collect_errors=True))
    try:
        tokenizer.run(html)
    except TokenizerError as exc:
        print(f"\n!!! Tokenizer failed: {exc.error} !!!")
        return 1

    print("\nTokens:")
    for token in sink.tokens:
        print(f"  {token!r}")

    if tokenizer.errors:
        print("\nParse errors:")
        for error in tokenizer.errors:
            print(f"  {error}")

    print("\nSanitized:")
    print(f"  {sanitize(html)!r}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Show the tokens and sanitized output for an HTML snippet")
    parser.add_argument("html", nargs="?", help="HTML snippet (reads stdin when omitted)")
    parser.add_argument("--file", "-f", type=Path, help="Read the snippet from a file as bytes")
    parser.add_argument("--strict", action="store_true", help="Stop at the first parse error")
    args = parser.parse_args()

    if args.file is not None:
        source = args.file.read_bytes()
    elif args.html is not None:
        source = args.html
    else:
        source = sys.stdin.read()

    sys.exit(debug_input(source, strict=args.strict))
