#!/usr/bin/env python
"""Write the token stream of a Lua file to a text file for inspection."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from lunaveil.dialect import LuaVersion
from lunaveil.lexer import LexError, Token, tokenize


def format_token(idx: int, token: Token) -> str:
    base = (
        f"[{idx}] {token.kind.name} "
        f"text={token.text!r} "
        f"range={token.range.as_tuple()} "
        f"at={token.line}:{token.column}"
    )
    if token.text != token.value:
        base += f" value={token.value!r}"
    if token.annotations:
        base += f" annotations={list(token.annotations)}"
    return base


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump lunaveil tokens for a Lua source file")
    parser.add_argument("input", type=Path, help="Lua source file")
    parser.add_argument("--out", type=Path, default=None, help="Output file (default: out/<input>.tokens.txt)")
    parser.add_argument(
        "--lua-version",
        choices=[version.value for version in LuaVersion],
        default=LuaVersion.LUA51.value,
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    input_path: Path = args.input
    output_path: Path = args.out or Path("out", f"{input_path.name}.tokens.txt")

    try:
        tokens = tokenize(input_path.read_bytes(), LuaVersion(args.lua_version))
    except LexError as exc:
        raise SystemExit(f"{input_path}:{exc.diagnostic.render()}") from exc

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        for idx, token in enumerate(tokens):
            f.write(format_token(idx, token) + "\n")

    print(f"Wrote {len(tokens)} tokens to {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
