#!/usr/bin/env python3
"""
Random fuzzer for the HTML sanitizer.
Generates malformed HTML and checks that sanitize() never crashes, never
hangs, is idempotent, and never lets an ignore-tag or a script URL through.
"""

import argparse
import random
import string
import sys
import time
import traceback

from webutil import DEFAULT_POLICY, sanitize, tokenize
from webutil.sanitize import ILLEGAL_ATTRIBUTE_VALUE
from webutil.tokens import Tag

TAGS = [
    "div", "span", "p", "a", "img", "b", "i", "u", "em", "strong", "br", "hr",
    "h1", "h3", "ul", "li", "pre", "code", "blockquote", "table", "form", "input",
    "textarea", "script", "style", "title", "iframe", "frame", "frameset", "noframes",
    "noembed", "embed", "applet", "object", "base", "noscript", "plaintext", "xmp",
    "svg", "math", "marquee",
]

RAW_TEXT_TAGS = ["script", "style", "xmp", "iframe", "noembed", "noframes", "noscript"]
RCDATA_TAGS = ["title", "textarea"]
IGNORE_TAGS = sorted(DEFAULT_POLICY.ignore_tags)

ATTRIBUTES = [
    "id", "class", "href", "src", "alt", "title", "name", "rel", "style",
    "onclick", "onerror", "data-x", "HREF", "Src",
]

SPECIAL_CHARS = [
    "\x00", "\x01", "\x0b", "\x0c", "\x7f",  # Control chars
    "\ufffd",  # Replacement character
    "\u00a0",  # Non-breaking space
    "\u2028",  # Line separator
    "\u200b",  # Zero-width space
    "\ufeff",  # BOM
]

ENTITIES = [
    "&amp;", "&lt;", "&gt;", "&quot;", "&apos;", "&nbsp;",
    "&", "&amp", "&ampamp;", "&#", "&#x", "&#123", "&#x1f;",
    "&#xdeadbeef;", "&#99999999;", "&#x;", "&unknown;", "&notit;",
    "&#0;", "&#13;", "&#x80;", "&#xD800;", "&#x110000;",
    "&#106;", "&#x6A;", "&colon;", "&Tab;",
]

# Values that try to smuggle a script or data URL past the attribute checks.
SCHEME_VALUES = [
    "javascript:alert(1)",
    "JaVaScRiPt:alert(1)",
    "java\tscript:alert(1)",
    "j a v a s c r i p t :alert(1)",
    "&#106;avascript:alert(1)",
    "&#x6A;avascript&colon;alert(1)",
    "javascript&Tab;:alert(1)",
    "data:text/html;base64,PHNjcmlwdD4=",
    " data :x",
    "//evil.example/x",
    "/\\evil.example",
    "mailto://x@example.com",
    "https://example.com/?q=javascript:",
]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_whitespace():
    ws = [" ", "\t", "\n", "\r", "\f", "\x00", ""]
    return "".join(random.choices(ws, k=random.randint(0, 4)))


def fuzz_tag_name():
    strategies = [
        lambda: random.choice(TAGS),
        lambda: random.choice(TAGS).upper(),
        lambda: random.choice(TAGS) + random_string(1, 3),
        lambda: random_string(1, 8),
        lambda: "",
        lambda: random.choice(SPECIAL_CHARS) + random.choice(TAGS),
        lambda: random.choice(TAGS) + "\x00",
        lambda: random.choice(TAGS) + "/" + random.choice(TAGS),
    ]
    return random.choice(strategies)()


def fuzz_attribute():
    name = random.choice(
        [
            lambda: random.choice(ATTRIBUTES),
            lambda: random_string(1, 10),
            lambda: "=",
            lambda: '"',
            lambda: "<",
        ]
    )()
    value = random.choice(
        [
            lambda: random_string(0, 30),
            lambda: random.choice(ENTITIES),
            lambda: random.choice(SCHEME_VALUES),
            lambda: "<script>alert(1)</script>",
            lambda: random.choice(SPECIAL_CHARS) * random.randint(1, 5),
            lambda: "",
        ]
    )()
    quote_start, quote_end = random.choice(
        [('="', '"'), ("='", "'"), ("=", ""), ("= ", ""), ("", ""), ('="', ""), ("==", "")]
    )
    return f"{name}{quote_start}{value}{quote_end}"


def fuzz_open_tag():
    tag = fuzz_tag_name()
    attrs = " ".join(fuzz_attribute() for _ in range(random.randint(0, 4)))
    closing = random.choice([">", "/>", " >", "/ >", "", ">>", "\x00>"])
    opening = random.choice(["<", "< ", "<<", "<!", "<?", "</"]) if random.random() < 0.2 else "<"
    return f"{opening}{tag}{random_whitespace()}{attrs}{random_whitespace()}{closing}"


def fuzz_close_tag():
    tag = fuzz_tag_name()
    variants = [
        f"</{tag}>",
        f"</ {tag}>",
        f"</{tag} >",
        f"</{tag}",
        f"</{tag}/>",
        f"<//{tag}>",
        f"</{tag} {fuzz_attribute()}>",
    ]
    return random.choice(variants)


def fuzz_comment():
    content = random_string(0, 30)
    variants = [
        f"<!--{content}-->",
        f"<!--{content}",
        f"<!--{content}--!>",
        "<!-->",
        "<!--->",
        f"<!--<script>{content}</script>-->",
        f"<!{content}>",
        f"<![CDATA[{content}]]>",
        f"<?{content}?>",
        f"<!DOCTYPE {content}>",
        "<!DOCTYPE",
    ]
    return random.choice(variants)


def fuzz_text():
    strategies = [
        lambda: random_string(1, 40),
        lambda: random.choice(ENTITIES),
        lambda: "".join(random.choices(SPECIAL_CHARS, k=random.randint(1, 5))),
        lambda: "<" + random_string(1, 5),
        lambda: random_string() + ">" + random_string(),
        lambda: "\r\n" * random.randint(1, 3),
    ]
    return random.choice(strategies)()


def fuzz_raw_text():
    tag = random.choice(RAW_TEXT_TAGS + RCDATA_TAGS)
    content = random_string(0, 30)
    variants = [
        f"<{tag}>{content}</{tag}>",
        f"<{tag}>{content}",
        f"<{tag}>{content}</{tag[:-1]}>{content}</{tag}>",
        f"<{tag}>{content}</{tag}x>{content}</{tag}>",
        f"<{tag}><b>{content}</b></{tag}>",
        f"<{tag}>{random.choice(ENTITIES)}</{tag.upper()}>",
        f"<{tag}/>{content}",
        f"<{tag}>{content}</{tag} attr='value'>",
    ]
    return random.choice(variants)


def fuzz_ignore_tags():
    outer = random.choice(IGNORE_TAGS)
    inner = random.choice(IGNORE_TAGS)
    content = random_string(1, 10)
    variants = [
        f"<{outer}>{content}</{outer}>",
        f"<{outer}><{inner}>{content}</{inner}>{content}</{outer}>",
        f"<{outer}><{outer}>{content}</{outer}>{content}</{outer}>",
        f"<{outer}>{content}<{outer}/>{content}",
        f"<{outer}/>{content}",
        f"<p>{content}<{outer}>{content}",
    ]
    return random.choice(variants)


def generate_fuzzed_html():
    parts = []
    for _ in range(random.randint(1, 20)):
        element_type = random.choices(
            [fuzz_open_tag, fuzz_close_tag, fuzz_comment, fuzz_text, fuzz_raw_text, fuzz_ignore_tags],
            weights=[20, 10, 5, 15, 5, 5],
        )[0]
        parts.append(element_type())
    return "".join(parts)


def check_invariants(html):
    """Return a list of violated sanitizer invariants for html."""
    problems = []
    output = sanitize(html)
    if sanitize(output) != output:
        problems.append("not idempotent")
    for token in tokenize(output):
        if type(token) is not Tag:
            continue
        if token.name not in DEFAULT_POLICY.allowed_tags:
            problems.append(f"disallowed tag <{token.name}> in output")
        for name, value in token.attr_pairs():
            if name not in DEFAULT_POLICY.allowed_attributes:
                problems.append(f"disallowed attribute {name!r} in output")
            if ILLEGAL_ATTRIBUTE_VALUE.search(value.lower()):
                problems.append(f"script or data URL in {name}={value!r}")
    return problems


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    if seed is not None:
        random.seed(seed)

    crashes = []
    hangs = []
    violations = []
    successes = 0

    print(f"Fuzzing sanitize() with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        html = generate_fuzzed_html()

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            problems = check_invariants(html)
            elapsed = time.perf_counter() - start
        except Exception as e:
            crashes.append({"test_num": i, "html": html, "error": str(e), "traceback": traceback.format_exc()})
            if verbose:
                print(f"  CRASH: Test {i}: {e}")
            continue

        if elapsed > 5.0:
            hangs.append({"test_num": i, "html": html, "time": elapsed})
            if verbose:
                print(f"  HANG: Test {i} took {elapsed:.2f}s")
        elif problems:
            violations.append({"test_num": i, "html": html, "problems": problems})
            if verbose:
                print(f"  VIOLATION: Test {i}: {problems[0]}")
        else:
            successes += 1

    elapsed_total = time.time() - start_time

    print(f"\n{'=' * 60}")
    print("FUZZING RESULTS: sanitize")
    print(f"{'=' * 60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Violations:     {len(violations)}")
    print(f"Hangs (>5s):    {len(hangs)}")
    print(f"Total time:     {elapsed_total:.2f}s")

    for crash in crashes[:10]:
        print(f"\nCRASH #{crash['test_num']}:")
        print(f"  HTML: {crash['html'][:200]!r}...")
        print(f"  Error: {crash['error']}")
    for violation in violations[:10]:
        print(f"\nVIOLATION #{violation['test_num']}:")
        print(f"  HTML: {violation['html'][:200]!r}...")
        for problem in violation["problems"]:
            print(f"  - {problem}")
    for hang in hangs[:5]:
        print(f"\nHANG #{hang['test_num']} ({hang['time']:.2f}s):")
        print(f"  HTML: {hang['html'][:200]!r}...")

    failed = crashes or violations or hangs
    if save_failures and failed:
        filename = f"fuzz_failures_sanitize_{int(time.time())}.txt"
        with open(filename, "w") as f:
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"HTML:\n{crash['html']!r}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for violation in violations:
                f.write(f"=== VIOLATION #{violation['test_num']} ===\n")
                f.write(f"HTML:\n{violation['html']!r}\n")
                f.write("".join(f"- {problem}\n" for problem in violation["problems"]) + "\n")
            for hang in hangs:
                f.write(f"=== HANG #{hang['test_num']} ({hang['time']:.2f}s) ===\n")
                f.write(f"HTML:\n{hang['html']!r}\n\n")
        print(f"\nFailures saved to {filename}")

    return not failed


def main():
    parser = argparse.ArgumentParser(description="Fuzz the HTML sanitizer with malformed input")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of test cases to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--save-failures",
        action="store_true",
        help="Save failures to a file",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed HTML documents (no sanitizing)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed is not None:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i + 1} ===")
            print(repr(generate_fuzzed_html()))
            print()
        return

    success = run_fuzzer(args.num_tests, seed=args.seed, verbose=args.verbose, save_failures=args.save_failures)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
