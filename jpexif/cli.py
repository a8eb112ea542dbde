# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for jpexif

Prints the Exif data of a JPEG file as JSON, or as an HTML page that
embeds the JSON.

Copyright 2025 DNAi inc.
"""

import argparse
import logging
import sys
from typing import List, Optional

from jpexif import __version__
from jpexif.core import JpExif
from jpexif.exceptions import JpExifError

TOOL_NAME = "jpexif"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=TOOL_NAME,
        description="Dump the Exif metadata of a JPEG file as JSON.",
        epilog="""
Examples:
  jpexif photo.jpg                 Print the Exif data as JSON
  jpexif photo.jpg --html > a.html Write an HTML page showing the Exif data
  jpexif photo.jpg -t thumb.jpg    Also save the embedded thumbnail
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('file', help='JPEG file to read')
    parser.add_argument('-html', '--html', action='store_true', help='Output an HTML page instead of JSON')
    parser.add_argument('--indent', type=int, default=2, help='JSON indentation (default: 2)')
    parser.add_argument('--file-order', action='store_true', help='List tags in file order instead of by id')
    parser.add_argument('-t', '--thumbnail', metavar='PATH', help='Save the IFD1 thumbnail to PATH')
    parser.add_argument('-m', '--no-warning', action='store_true', help='Suppress warnings about skipped tags')
    parser.add_argument('-v', '--verbose', action='store_true', help='Print decoding details to stderr')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def configure_logging(verbose: bool = False, no_warning: bool = False) -> None:
    """Send jpexif log records to stderr at the level chosen on the command line."""
    if verbose:
        level = logging.DEBUG
    elif no_warning:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format=f'{TOOL_NAME}: %(levelname)s: %(message)s',
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command-line tool.
    
    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])
        
    Returns:
        Process exit code: 0 on success, 1 on error
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.no_warning)
    
    try:
        exif = JpExif(args.file)
        exif.set_option('Indent', args.indent)
        exif.set_option('SortTags', not args.file_order)
        if args.html:
            exif.set_option('OutputFormat', 'html')
        
        print(exif.export())
        
        if args.thumbnail and not exif.save_thumbnail(args.thumbnail):
            print(f"{TOOL_NAME}: No thumbnail found in {args.file}", file=sys.stderr)
    except JpExifError as e:
        print(f"{TOOL_NAME}: Error: {e}", file=sys.stderr)
        return 1
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
