#!/usr/bin/env python3
"""
Generate glyph PBF ranges from local TTF/OTF fonts.

Scans src/ for .ttf/.otf files, reads the codepoints each font defines,
splits them into 256-codepoint ranges and renders one .pbf packet per range:

    dist/fonts/<font file stem>/<start>-<end>.pbf

The output directory is wiped before every run so ranges dropped from a font
do not linger.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from functools import partial
from multiprocessing import Pool
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from fontglyphs.fonts import clean_dist, find_font_files, read_codepoints
from fontglyphs.ranges import Range, compute_ranges, range_filename
from fontglyphs.rasterize import render_range

# Constants
# ----------------------------------------------------------------------------

SRC_DIR = Path("src")
DIST_DIR = Path("dist") / "fonts"

Rasterizer = Callable[[bytes, int, int], bytes]

logger = logging.getLogger(__name__)


# Results
# ----------------------------------------------------------------------------


@dataclass
class FontResult:
    """Outcome of processing one font file."""

    font_path: Path
    written: int = 0
    failed_ranges: List[Range] = field(default_factory=list)
    skipped: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failed_ranges


@dataclass
class BuildReport:
    """Aggregate outcome of a generation run."""

    fonts: List[FontResult] = field(default_factory=list)

    @property
    def written(self) -> int:
        return sum(result.written for result in self.fonts)

    @property
    def failed(self) -> int:
        return sum(len(result.failed_ranges) for result in self.fonts) + sum(
            1 for result in self.fonts if result.error is not None
        )

    @property
    def skipped(self) -> int:
        return sum(1 for result in self.fonts if result.skipped)

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.fonts)


# Core Functions
# ----------------------------------------------------------------------------


def emit_ranges(
    font_path: Path,
    font_data: bytes,
    ranges: List[Range],
    font_dest: Path,
    rasterizer: Rasterizer = render_range,
) -> Tuple[int, List[Range]]:
    """
    Render and write one packet per range.

    A range that fails to render or to write is logged and skipped; the
    remaining ranges still run.

    Returns:
        tuple: (number of packets written, ranges that failed)
    """
    written = 0
    failed: List[Range] = []

    for start, end in ranges:
        try:
            pbf = rasterizer(font_data, start, end)
        except Exception as e:
            logger.error(f"ERROR on range {start}-{end} of {font_path}: {e}")
            if logger.isEnabledFor(logging.DEBUG):
                logger.exception("Rasterizer traceback")
            failed.append((start, end))
            continue

        out_file = font_dest / range_filename(start, end)
        try:
            font_dest.mkdir(parents=True, exist_ok=True)
            out_file.write_bytes(pbf)
        except OSError as e:
            logger.error(f"ERROR writing {out_file}: {e}")
            failed.append((start, end))
            continue
        written += 1
        logger.debug(f"  Generated: {out_file}")

    return written, failed


def process_font(
    font_path: Path, dist_dir: Path, rasterizer: Rasterizer = render_range
) -> FontResult:
    """Generate every range packet for a single font file."""
    logger.info(f"Processing: {font_path}")
    result = FontResult(font_path)
    try:
        font_data = font_path.read_bytes()
        codepoints = read_codepoints(font_data)
    except Exception as e:
        logger.error(f"ERROR reading {font_path}: {e}")
        result.error = str(e)
        return result

    ranges = compute_ranges(codepoints)
    if not ranges:
        logger.warning(f"No codepoints up to U+FFFF found in {font_path}. Skipping.")
        result.skipped = True
        return result

    font_dest = dist_dir / font_path.stem
    result.written, result.failed_ranges = emit_ranges(
        font_path, font_data, ranges, font_dest, rasterizer
    )
    logger.info(f"  {result.written}/{len(ranges)} ranges written to {font_dest}")
    return result


def generate_glyphs(
    src_dir: Path,
    dist_dir: Path,
    rasterizer: Rasterizer = render_range,
    jobs: int = 1,
) -> BuildReport:
    """
    Regenerate ``dist_dir`` from every font under ``src_dir``.

    Returns only after every range of every font has been written or logged
    as failed.

    Raises:
        FileNotFoundError: ``src_dir`` does not exist.
        NotADirectoryError: ``src_dir`` is not a directory.
        PermissionError: ``src_dir`` or a directory below it cannot be listed.
    """
    src_dir = Path(src_dir)
    dist_dir = Path(dist_dir)

    fonts = find_font_files(src_dir)
    clean_dist(dist_dir)
    logger.info(f'Found {len(fonts)} font file(s) in "{src_dir}".')

    worker = partial(process_font, dist_dir=dist_dir, rasterizer=rasterizer)
    if jobs > 1 and len(fonts) > 1:
        logger.info(f"Using {jobs} parallel workers...")
        with Pool(jobs) as pool:
            results = pool.map(worker, fonts)
    else:
        results = [worker(font_path) for font_path in fonts]

    return BuildReport(fonts=results)


# Main Entry Point
# ----------------------------------------------------------------------------


def log_summary(report: BuildReport) -> None:
    logger.info("")
    logger.info("=" * 60)
    logger.info("Glyph generation complete!")
    logger.info(f"  Fonts:   {len(report.fonts)}")
    logger.info(f"  Written: {report.written}")
    if report.skipped:
        logger.warning(f"  Skipped: {report.skipped} (no codepoints)")

    if not report.ok:
        logger.error(f"  Failed:  {report.failed}")
        logger.error("\nFailed items:")
        for result in report.fonts:
            if result.error is not None:
                logger.error(f"  - {result.font_path} ({result.error})")
            for start, end in result.failed_ranges:
                logger.error(f"  - {result.font_path} ({start}-{end})")


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution block."""
    parser = argparse.ArgumentParser(
        description="Convert TTF/OTF fonts into glyph PBF ranges."
    )
    parser.add_argument(
        "--src",
        type=Path,
        default=SRC_DIR,
        help=f"Directory scanned for fonts (default: {SRC_DIR})",
    )
    parser.add_argument(
        "--dest",
        type=Path,
        default=DIST_DIR,
        help=f"Output directory, wiped before each run (default: {DIST_DIR})",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=1,
        help="Number of fonts processed in parallel (default: 1)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every written file and failure tracebacks.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        report = generate_glyphs(args.src, args.dest, jobs=args.jobs)
    except OSError as e:
        logger.error(f"ERROR: {e}")
        return 1

    log_summary(report)
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
