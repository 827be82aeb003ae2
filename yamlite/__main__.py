#!/usr/bin/env python3
"""Read a YAML file with yamlite and print what it contains.

Output modes:
  --events   one event per line (+DOC, =KEY name, =VAL value, ...), the default
  --json     the composed document as JSON
  --yaml     the composed document written back by the yamlite writer

Examples:
  python -m yamlite config.yaml
  python -m yamlite --json config.yaml
  cat config.yaml | python -m yamlite --yaml
"""

import argparse
import json
import logging
import sys

from yamlite.composer import Composer
from yamlite.emitter import dumps
from yamlite.error import YAMLError
from yamlite.events import EventRecorder
from yamlite.scanner import YamlParser


def _read(args):
    if args.file is None or args.file == '-':
        return sys.stdin.buffer.read(), '<stdin>'
    with open(args.file, 'rb') as f:
        return f.read(), args.file


def main(argv=None):
    parser = argparse.ArgumentParser(prog='yamlite', description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("file", nargs="?", help="YAML file to read (default: stdin)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--events", dest="mode", action="store_const", const="events",
                      help="print the event stream (default)")
    mode.add_argument("--json", dest="mode", action="store_const", const="json",
                      help="print the composed document as JSON")
    mode.add_argument("--yaml", dest="mode", action="store_const", const="yaml",
                      help="print the composed document as YAML")
    parser.add_argument("--no-resolve", action="store_true",
                        help="keep every scalar as a string")
    parser.add_argument("--max-depth", type=int, default=None,
                        help="nesting limit, root included (default: 32)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log scanner diagnostics to stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(name)s: %(levelname)s: %(message)s")

    try:
        data, name = _read(args)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        if args.mode in (None, "events"):
            handler = EventRecorder()
        else:
            handler = Composer(resolve=not args.no_resolve)
        reader = YamlParser(data, handler, name=name, max_depth=args.max_depth)
        if not reader.parse():
            print(f"Error: {reader.error}", file=sys.stderr)
            return 1

        if args.mode in (None, "events"):
            for event in handler.events:
                print(event)
        elif args.mode == "json":
            print(json.dumps(handler.document, indent=2))
        else:
            print(dumps(handler.document), end='')
    except (YAMLError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
