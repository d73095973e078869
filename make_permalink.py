#!/usr/bin/env python3

"""
Build or inspect playground permalinks from the command line.

  - Encode:  make_permalink.py encode --base https://host/ --format 1 --code prog.hbl --args args.txt
             (--code - reads the program from stdin)
  - Decode:  make_permalink.py decode 'https://host/?f=1&p=KCsgMSAyKQo_'

Decoding prints each field; the exit status is 1 when a field could not be
decoded and fell back to its default.
"""

import argparse
import logging
import sys
from urllib.parse import urlsplit

from config import load_settings
from permalink import page_url
from state_codec import SessionState, decode_state, encode_state, log_errors


def _read(path):
    if path is None:
        return ""
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def cmd_encode(args) -> int:
    state = SessionState(args.format, _read(args.code), _read(args.args))
    result = encode_state(state)
    log_errors(result, "encoding")
    print(page_url(args.base) + result.value)
    return 0 if result.ok else 1


def cmd_decode(args) -> int:
    link = args.link
    query = urlsplit(link).query if "://" in link else link
    format_count = args.formats or len(load_settings().CODE_FORMATS)
    result = decode_state(query, format_count)
    log_errors(result, "decoding")
    state = result.value
    print(f"format: {state.format_index}")
    print("code:")
    print(state.code_text)
    print("args:")
    print(state.args_text)
    return 0 if result.ok else 1


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description='Build or inspect playground permalinks.')
    sub = p.add_subparsers(dest='command', required=True)

    enc = sub.add_parser('encode', help='Print the permalink for a program.')
    enc.add_argument('--base', type=str, required=True, help='Page URL (e.g., https://host/path/).')
    enc.add_argument('--format', type=int, default=0, help='Code format index.')
    enc.add_argument('--code', type=str, help='Program file, or - for stdin.')
    enc.add_argument('--args', type=str, help='File with one argument per line.')
    enc.set_defaults(func=cmd_encode)

    dec = sub.add_parser('decode', help='Print the fields stored in a permalink.')
    dec.add_argument('link', type=str, help='Permalink URL or bare query string.')
    dec.add_argument('--formats', type=int, default=None,
                     help='Number of code formats the page offers (default: HBL_CODE_FORMATS).')
    dec.set_defaults(func=cmd_decode)

    args = p.parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
