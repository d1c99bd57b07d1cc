"""Command-line interface for headinglinks."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from headinglinks.config import HEADINGLINKS_LOG_LEVEL
from headinglinks.exceptions import HeadingLinksError, HeadingNotFoundError
from headinglinks.headings import extract_headings
from headinglinks.rewriter import LinkRewriter
from headinglinks.schemas import ConfirmedMove, RewriteReport
from headinglinks.vault import FileSystemVault
from headinglinks.watcher import HeadingMoveWatcher


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="headinglinks",
        description="Keep [[note#heading]] links valid when headings are renamed or moved.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    headings = commands.add_parser("headings", help="List the headings of notes")
    headings.add_argument("vault", type=Path, help="Vault directory")
    headings.add_argument("note", nargs="?", help="Note path relative to the vault")

    rename = commands.add_parser("rename", help="Rename a heading and repair links to it")
    rename.add_argument("vault", type=Path, help="Vault directory")
    rename.add_argument("note", help="Note path relative to the vault")
    rename.add_argument("old", help="Current heading text")
    rename.add_argument("new", help="New heading text")

    relink = commands.add_parser("relink", help="Rewrite links for a heading moved by hand")
    relink.add_argument("vault", type=Path, help="Vault directory")
    relink.add_argument("--from", dest="source", required=True, help="Old target, NOTE#HEADING")
    relink.add_argument("--to", dest="target", required=True, help="New target, NOTE#HEADING")
    return parser


def parse_target(value: str) -> tuple[str, str]:
    """Split ``note#heading`` into its parts."""
    document, sep, heading = value.partition("#")
    if not sep or not document or not heading:
        raise ValueError(f"Expected NOTE#HEADING, got {value!r}")
    return document, heading


async def list_headings(vault: FileSystemVault, note: str | None) -> list[str]:
    documents = [note] if note else await vault.list_documents()
    lines: list[str] = []
    for document in documents:
        text = await vault.read_document(document)
        lines.append(document)
        for heading in extract_headings(text, document):
            lines.append(f"  {heading.position + 1:>5}  {'#' * heading.level} {heading.text}")
    return lines


async def rename_heading(vault: FileSystemVault, note: str, old: str, new: str) -> RewriteReport:
    """Rename the first heading titled ``old`` and let the watcher fix links."""
    await vault.index()
    text = await vault.read_document(note)
    heading = next((h for h in extract_headings(text, note) if h.text == old), None)
    if heading is None:
        raise HeadingNotFoundError(f"No heading {old!r} in {note}")

    lines = text.split("\n")
    ending = "\r" if lines[heading.position].endswith("\r") else ""
    lines[heading.position] = f"{'#' * heading.level} {new}{ending}"

    watcher = HeadingMoveWatcher(vault, notify=lambda message: None)
    watcher.start()
    try:
        await vault.write_document(note, "\n".join(lines))
    finally:
        watcher.stop()
    return watcher.reports[-1] if watcher.reports else RewriteReport()


async def relink(vault: FileSystemVault, source: str, target: str) -> RewriteReport:
    old_document, old_heading = parse_target(source)
    new_document, new_heading = parse_target(target)
    move = ConfirmedMove(
        document=old_document,
        new_document=new_document,
        old_heading=old_heading,
        new_heading=new_heading,
        position=0,
    )
    return await LinkRewriter(vault).rewrite(old_document, new_document, [move])


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, HEADINGLINKS_LOG_LEVEL, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    vault = FileSystemVault(args.vault)
    try:
        if args.command == "headings":
            for line in asyncio.run(list_headings(vault, args.note)):
                print(line)
            return 0
        if args.command == "rename":
            report = asyncio.run(rename_heading(vault, args.note, args.old, args.new))
        else:
            report = asyncio.run(relink(vault, args.source, args.target))
    except (HeadingLinksError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(report.summary())
    for document in report.modified_documents:
        print(f"  {document}")
    return 0
