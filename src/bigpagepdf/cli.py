#!/usr/bin/env python3
"""
BigPagePdf CLI: edit the page structure of a PDF from the terminal.

Usage:
    python -m bigpagepdf.cli <command> [options]

Commands:
    info        Show PDF metadata and page count
    edit        Rotate, delete and reorder pages, then save
    merge       Merge multiple PDFs into one

Edit operations are applied in the order they are given, exactly as the
same clicks and drags would be applied in the editor.

Examples:
    # Rotate page 3 clockwise, delete page 2, move page 5 to the front
    bigpagepdf-cli edit input.pdf -o out.pdf --rotate 3:90 --delete 2 --move 5:1

    # Select pages 2 and 4, then delete the selection from page 4
    bigpagepdf-cli edit input.pdf -o out.pdf --select 2,4 --delete 4

    # Show the change set without writing anything
    bigpagepdf-cli edit input.pdf --rotate 1:-90 --dry-run

    # Merge
    bigpagepdf-cli merge a.pdf b.pdf c.pdf -o merged.pdf

    # Info
    bigpagepdf-cli info document.pdf
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from bigpagepdf.config import APP_DESCRIPTION, APP_VERSION, LOG_FORMAT
from bigpagepdf.utils.i18n import _

# ---------------------------------------------------------------------------
# Page argument parsers (shared)
# ---------------------------------------------------------------------------


def _parse_page_list(text: str) -> list[int]:
    """Parse a page specification string into a sorted list of page numbers.

    Supports: "3", "1-5", "1,3,7", "1-3,7,10-12"

    Args:
        text: Page specification string.

    Returns:
        Sorted list of 1-indexed page numbers.
    """
    pages: set[int] = set()
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            if "-" in part:
                start_s, end_s = part.split("-", 1)
                s, e = int(start_s.strip()), int(end_s.strip())
                pages.update(range(s, e + 1))
            else:
                pages.add(int(part))
        except ValueError:
            raise ValueError(
                f"Invalid page specification '{part}'. "
                "Use numbers and ranges like '1-5' or '1,3,7'."
            ) from None
    return sorted(p for p in pages if p >= 1)


def _parse_pair(text: str) -> tuple[int, int]:
    """Parse "A:B" into a pair of integers.

    Args:
        text: Pair specification string.

    Returns:
        Tuple (A, B).
    """
    try:
        first_s, second_s = text.split(":", 1)
        return int(first_s.strip()), int(second_s.strip())
    except ValueError:
        raise ValueError(f"Invalid pair '{text}'. Use the form 'A:B', e.g. '3:90'.") from None


def _page_list_arg(text: str) -> list[int]:
    try:
        pages = _parse_page_list(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None
    if not pages:
        raise argparse.ArgumentTypeError(f"No pages in '{text}'")
    return pages


def _rotation_arg(text: str) -> tuple[int, int]:
    try:
        page, degrees = _parse_pair(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None
    if degrees % 90 != 0:
        raise argparse.ArgumentTypeError(f"Rotation {degrees} is not a multiple of 90")
    return page, degrees


def _move_arg(text: str) -> tuple[int, int]:
    try:
        return _parse_pair(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


class _AppendOperation(argparse.Action):
    """Collect edit operations in command-line order as (name, value) pairs."""

    def __call__(self, parser, namespace, values, option_string=None):
        operations = list(getattr(namespace, self.dest, None) or [])
        operations.append((self.const, values))
        setattr(namespace, self.dest, operations)


# ---------------------------------------------------------------------------
# Argument parser construction
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with subcommands."""
    p = argparse.ArgumentParser(
        prog="bigpagepdf-cli",
        description=APP_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    p.add_argument("-v", "--verbose", action="store_true", help=_("Verbose logging (DEBUG)"))
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="FILE",
        help=_("Settings file to use instead of ~/.config/bigpagepdf/settings.json"),
    )

    sub = p.add_subparsers(dest="command", help=_("Available commands"))

    # --- info ---
    info_p = sub.add_parser("info", help=_("Show PDF metadata and page count"))
    info_p.add_argument("input", type=Path, help=_("Input PDF file"))

    # --- edit ---
    edit_p = sub.add_parser("edit", help=_("Rotate, delete and reorder pages"))
    edit_p.add_argument("input", type=Path, help=_("Input PDF file"))
    edit_p.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help=_("Output PDF file. Default: <input>-<suffix>.pdf next to the input."),
    )
    edit_p.set_defaults(operations=[])

    ops = edit_p.add_argument_group(_("Edit operations (applied in order)"))
    ops.add_argument(
        "--rotate",
        dest="operations",
        action=_AppendOperation,
        const="rotate",
        type=_rotation_arg,
        metavar="PAGE:DEG",
        help=_("Rotate a page by a multiple of 90 degrees (negative is counter-clockwise)"),
    )
    ops.add_argument(
        "--select",
        dest="operations",
        action=_AppendOperation,
        const="select",
        type=_page_list_arg,
        metavar="PAGES",
        help=_("Toggle pages in the selection (e.g. '2,4' or '1-3')"),
    )
    ops.add_argument(
        "--delete",
        dest="operations",
        action=_AppendOperation,
        const="delete",
        type=_page_list_arg,
        metavar="PAGES",
        help=_("Delete pages; deleting a selected page deletes the whole selection"),
    )
    ops.add_argument(
        "--move",
        dest="operations",
        action=_AppendOperation,
        const="move",
        type=_move_arg,
        metavar="SRC:DST",
        help=_("Move page SRC immediately before page DST"),
    )
    ops.add_argument(
        "--move-end",
        dest="operations",
        action=_AppendOperation,
        const="move-end",
        type=int,
        metavar="PAGE",
        help=_("Move a page after all other pages"),
    )

    save_g = edit_p.add_argument_group(_("Saving"))
    save_g.add_argument(
        "--dry-run",
        action="store_true",
        help=_("Print the change set as JSON instead of saving"),
    )
    save_g.add_argument(
        "--allow-empty",
        action="store_true",
        help=_("Allow saving when every page was deleted"),
    )
    save_g.add_argument(
        "-f",
        "--force",
        action="store_true",
        help=_("Overwrite the output file if it exists"),
    )

    # --- merge ---
    merge_p = sub.add_parser("merge", help=_("Merge multiple PDFs into one"))
    merge_p.add_argument("inputs", nargs="+", type=Path, help=_("Input PDF files (in order)"))
    merge_p.add_argument("-o", "--output", type=Path, required=True, help=_("Output PDF file"))

    return p


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _default_output_path(input_path: Path, suffix: str) -> Path:
    """Build '<stem>-<suffix>.pdf' next to the input file."""
    return input_path.with_name(f"{input_path.stem}-{suffix}{input_path.suffix or '.pdf'}")


def _apply_operation(session, name: str, value) -> None:
    """Apply one parsed edit operation to a session."""
    if name == "rotate":
        page, degrees = value
        session.rotate(page, degrees)
    elif name == "select":
        for page in value:
            session.toggle_select(page)
    elif name == "delete":
        for page in value:
            session.delete(page)
    elif name == "move":
        source, target = value
        session.move_before(source, target)
    elif name == "move-end":
        session.move_to_end(value)
    else:
        raise ValueError(f"Unknown operation: {name}")


def _cmd_info(args, _config, _logger) -> int:
    """Handle the 'info' command."""
    import pikepdf

    from bigpagepdf.services.pdf_operations import _friendly_error, get_pdf_info

    try:
        info = get_pdf_info(str(args.input))
    except (OSError, pikepdf.PdfError) as e:
        print(f"Error: {_friendly_error(e)}", file=sys.stderr)
        return 1

    print(f"File:       {info.path}")
    print(f"Pages:      {info.page_count}")
    print(f"Size:       {info.file_size_mb:.2f} MB ({info.file_size_bytes:,} bytes)")
    print(f"Version:    PDF {info.pdf_version}")
    print(f"Encrypted:  {'Yes' if info.encrypted else 'No'}")
    if info.title:
        print(f"Title:      {info.title}")
    if info.author:
        print(f"Author:     {info.author}")
    if info.creator:
        print(f"Creator:    {info.creator}")
    return 0


def _cmd_edit(args, config, logger) -> int:
    """Handle the 'edit' command."""
    from bigpagepdf.services.pdf_operations import open_session, save_session
    from bigpagepdf.utils.exceptions import BigPagePdfError, EmptyResultError

    try:
        session = open_session(args.input, rotation_step=config.get_rotation_step())
        for name, value in args.operations:
            _apply_operation(session, name, value)
    except BigPagePdfError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    change_set = session.build_change_set()
    logger.debug("Change set: %s", change_set)

    if args.dry_run:
        print(json.dumps(change_set.to_dict(), indent=2))
        return 0

    allow_empty = args.allow_empty or bool(config.get("save.allow_empty_output", False))
    try:
        session.check_saveable(allow_empty=allow_empty)
    except EmptyResultError as e:
        print(f"Error: {e}. Use --allow-empty to save anyway.", file=sys.stderr)
        return 1

    output = args.output or _default_output_path(
        args.input, config.get("save.output_suffix", "edited")
    )
    overwrite = args.force or bool(config.get("save.overwrite_existing", False))
    if output.exists() and not overwrite:
        print(f"Error: {output} already exists (use --force to overwrite)", file=sys.stderr)
        return 1

    result = save_session(session, output, allow_empty=allow_empty)
    if result.success:
        print(f"Saved: {result.message} → {output}")
        return 0
    else:
        print(f"Error: {result.message}", file=sys.stderr)
        return 1


def _cmd_merge(args, _config, logger) -> int:
    """Handle the 'merge' command."""
    from bigpagepdf.services.pdf_operations import merge_pdfs

    for p in args.inputs:
        if not p.exists():
            print(f"Error: {p} not found", file=sys.stderr)
            return 1

    result = merge_pdfs([str(p) for p in args.inputs], str(args.output))
    if result.success:
        print(f"Merged: {result.message} → {args.output}")
        return 0
    else:
        print(f"Error: {result.message}", file=sys.stderr)
        return 1


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=True)
    logger = logging.getLogger("bigpagepdf.cli")

    from bigpagepdf.utils.config_manager import ConfigManager, get_config_manager

    config = ConfigManager(str(args.config)) if args.config else get_config_manager()

    # Validate input file existence (except merge which has 'inputs')
    if hasattr(args, "input") and args.input and not args.input.exists():
        print(f"Error: {args.input} not found", file=sys.stderr)
        return 1

    handlers = {
        "info": _cmd_info,
        "edit": _cmd_edit,
        "merge": _cmd_merge,
    }

    handler = handlers.get(args.command)
    if handler:
        return handler(args, config, logger)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
