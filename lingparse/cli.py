"""lingparse command line.

    lingparse FILE                     parse a file and print its tree
    lingparse -e "selsurle es iu."     parse inline text
    lingparse --tokens FILE            print the token stream instead
    lingparse --production noun -e "jerldir'd xakant"

Exit status is 0 on success, 1 on a lexical or syntax error and 2 on
usage or I/O problems.
"""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from lingparse import __version__
from lingparse.lexer import LexerError, tokenize_string
from lingparse.parser import Parser, ParseError, UnexpectedTokenError, ASTNode
from lingparse.logging_config import setup_logging

logger = logging.getLogger(__name__)


PRODUCTIONS = {
    "program": Parser.parse,
    "statement": Parser.parse_statement,
    "sentence": Parser.parse_sentence,
    "primary_noun": Parser.parse_primary_noun,
    "noun": Parser.parse_noun,
    "noun_list": Parser.parse_noun_list,
    "case": Parser.parse_case,
    "nouns_with_case": Parser.parse_nouns_with_case,
    "verb": Parser.parse_verb,
    "cond_elem": Parser.parse_cond_elem,
    "cond": Parser.parse_cond,
    "var_decl": Parser.parse_var_decl,
    "predicate_decl": Parser.parse_predicate_decl,
    "module": Parser.parse_module,
    "import": Parser.parse_import,
}


def _to_data(result: Any) -> Any:
    if isinstance(result, ASTNode):
        return result.to_dict()
    if isinstance(result, list):
        return [_to_data(item) for item in result]
    return result


def _render(data: Any, indent: int = 0) -> List[str]:
    """Indented outline of plain data produced by to_dict()."""
    pad = "  " * indent
    if isinstance(data, dict):
        title = data.get("type", "")
        lines = [f"{pad}{title}"] if title else []
        for key, value in data.items():
            if key == "type":
                continue
            if isinstance(value, (dict, list)) and value:
                lines.append(f"{pad}  {key}:")
                lines.extend(_render(value, indent + 2))
            else:
                lines.append(f"{pad}  {key}: {value}")
        return lines
    if isinstance(data, list):
        lines = []
        for item in data:
            lines.extend(_render(item, indent))
        return lines
    return [f"{pad}{data}"]


def _read_source(args: argparse.Namespace) -> str:
    if args.expr is not None:
        return args.expr
    if args.file is None or args.file == "-":
        return sys.stdin.read()
    with open(args.file, "r", encoding="utf-8") as f:
        return f.read()


def _run(args: argparse.Namespace, source: str, filename: str) -> Any:
    tokens = tokenize_string(source, filename)
    if args.tokens:
        return [token.to_dict() for token in tokens]

    parser = Parser(tokens, filename)
    result = PRODUCTIONS[args.production](parser)
    if not parser.is_at_end():
        raise UnexpectedTokenError("end of input", parser.peek())
    return _to_data(result)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="lingparse",
        description="Tokenize and parse constructed-language text.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("file", nargs="?", help="Source file ('-' or omitted reads stdin)")
    parser.add_argument("-e", "--expr", help="Parse this text instead of a file")
    parser.add_argument("--tokens", action="store_true", help="Print tokens instead of parsing")
    parser.add_argument("--production", choices=sorted(PRODUCTIONS), default="program",
                        help="Grammar production to parse with (default: program)")
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--log-file", help="Also append log records to this file")
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file)

    filename = "<expr>" if args.expr is not None else (args.file or "<stdin>")
    try:
        source = _read_source(args)
    except OSError as e:
        print(f"lingparse: cannot read {filename}: {e}", file=sys.stderr)
        return 2

    try:
        result = _run(args, source, filename)
    except (LexerError, ParseError) as e:
        logger.debug("%s failed: %s", filename, e.diagnostic.message)
        if args.format == "json":
            print(json.dumps({"error": e.to_dict()}, indent=2, ensure_ascii=False))
        else:
            print(str(e), end="", file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        print("\n".join(_render(result)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
