"""Headless layout converter, CLI entry point.

Reads a layout file ({format, elements} JSON), adapts it to one or more
target formats and writes one layout file per target. Every target is
adapted from the input; with --cache-dir the results are stored in the
format cache and earlier conversions are reported as examples.

Usage:
    python editor/src/headless.py <layout_file> -t TARGET [-t TARGET ...] [-o OUTPUT_DIR]
                                  [--cache-dir DIR] [-v]

Targets are catalog format names or WxH sizes.

Examples:
    python editor/src/headless.py banner.json -t "Instagram Post"
    python editor/src/headless.py banner.json -t 300x250 -t 728x90 -o converted/
    python editor/src/headless.py banner.json -t "Instagram Story" --cache-dir .format_cache
    python editor/src/headless.py --list-formats
"""

import sys
import os
import re
import argparse
import logging

# Add editor/src to path so imports work
_src_dir = os.path.dirname(os.path.abspath(__file__))
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)


def _output_name(banner_size) -> str:
    """File-system safe name for a format."""
    return re.sub(r'[^\w.-]+', '_', banner_size.name).strip('_') or banner_size.size_key


def _resolve_targets(specs):
    """Parse target specs, reporting the ones that can't be resolved.

    Returns:
        (list of BannerSize, number of invalid specs)
    """
    from models.banner_size import parse_banner_size

    targets = []
    invalid = 0
    for spec in specs:
        try:
            targets.append(parse_banner_size(spec))
        except ValueError as e:
            invalid += 1
            print(f"  [FAIL] {spec}: {e}")
    return targets, invalid


def _build_cache(cache_dir):
    from services.cache_storage import JsonFileStorage, MemoryStorage
    from services.format_cache import FormatCache

    if cache_dir:
        return FormatCache(JsonFileStorage(cache_dir))
    return FormatCache(MemoryStorage())


def convert(source_format, elements, targets, cache):
    """Adapt elements to each target and record the results in the cache.

    The output always comes from the current elements; the cache is only
    consulted for examples of earlier conversions.

    Returns:
        list of (BannerSize, elements or None, error or None, example count)
    """
    from services.format_adaptation import adapt
    from utils.geometry import format_similarity

    outcomes = []
    for target in targets:
        result = adapt(source_format, elements, [target])[0]
        if not result.ok:
            outcomes.append((target, None, result.error, 0))
            continue

        examples = cache.find_examples(source_format, [target])
        cache.put(source_format, target, result.elements, format_similarity(source_format, target))
        outcomes.append((target, result.elements, None, len(examples)))
    return outcomes


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Adapt a banner layout to other formats (headless).',
    )
    parser.add_argument(
        'input_file',
        nargs='?',
        help='Path to layout JSON file ({format, elements}).',
    )
    parser.add_argument(
        '-t', '--target',
        action='append',
        default=[],
        help='Target format: catalog name or WxH (repeatable).',
    )
    parser.add_argument(
        '-o', '--output',
        default='./output',
        help='Output directory for converted layouts (default: ./output).',
    )
    parser.add_argument(
        '--cache-dir',
        default=None,
        help='Directory for the persistent format cache (default: no persistence).',
    )
    parser.add_argument(
        '--list-formats',
        action='store_true',
        help='List the standard formats and exit.',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    args = parser.parse_args(argv)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if args.list_formats:
        from models.banner_size import get_banner_sizes
        for size in get_banner_sizes():
            print(f"  {size.name:<40} {size.size_key:>10}  {size.orientation}")
        return

    if not args.input_file:
        parser.error('input_file is required')
    if not args.target:
        parser.error('at least one --target is required')

    input_path = os.path.abspath(args.input_file)
    output_dir = os.path.abspath(args.output)

    if not os.path.isfile(input_path):
        print(f"Error: Input file not found: {input_path}")
        sys.exit(1)

    from services.layout_io import load_layout, save_layout
    from models.errors import LayoutError

    print(f"Loading {input_path} ...")
    try:
        source_format, elements = load_layout(input_path)
    except (ValueError, LayoutError) as e:
        print(f"Error: Could not read layout: {e}")
        sys.exit(1)

    print(f"Source format: {source_format} with {len(elements)} element(s).")

    targets, failed = _resolve_targets(args.target)
    cache = _build_cache(args.cache_dir)
    os.makedirs(output_dir, exist_ok=True)

    written = 0
    for target, adapted, error, example_count in convert(source_format, elements, targets, cache):
        if error is not None:
            failed += 1
            print(f"  [FAIL] {target.name}: {error}")
            continue

        out_file = os.path.join(output_dir, f"{_output_name(target)}.json")
        save_layout(out_file, target, adapted)
        written += 1
        note = f" ({example_count} cached example(s))" if example_count else ''
        print(f"  [{written}/{len(args.target)}] {os.path.basename(out_file)}{note}")

    print(f"\nDone. Wrote {written} layout(s) to {output_dir}/")
    if failed:
        print(f"  ({failed} failed)")
    if written == 0:
        sys.exit(1)


if __name__ == '__main__':
    main()
