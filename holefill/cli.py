import argparse
import logging
import shutil
import sys
from pathlib import Path

from holefill.errors import HoleFillError

EXIT_ERROR = 1
EXIT_UNENCLOSED = 2


def _formatter(prog: str) -> argparse.HelpFormatter:
    width = shutil.get_terminal_size().columns
    return argparse.HelpFormatter(prog, max_help_position=40, width=width)


def _require_exists(path: Path, label: str = "Input") -> None:
    if not path.exists():
        print(f"Error: {label} not found: {path}", file=sys.stderr)
        sys.exit(EXIT_ERROR)


def _add_hole_options(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-m", "--mask", help="Mask image, light pixels mark the hole.")
    source.add_argument(
        "--hole-value",
        type=int,
        metavar="V",
        help="Treat input pixels equal to V as the hole.",
    )
    parser.add_argument(
        "--invert-mask",
        action="store_true",
        help="Dark mask pixels mark the hole instead (only with -m).",
    )
    parser.add_argument(
        "-c",
        "--connectivity",
        type=int,
        choices=(4, 8),
        default=4,
        help="Neighbour connectivity (default: 4).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every erosion iteration.",
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="holefill",
        description="Fill a hole in a grayscale image from its boundary.",
        formatter_class=_formatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_fill = sub.add_parser(
        "fill",
        help="Fill the hole and save the result.",
        usage="%(prog)s [OPTIONS] (-m MASK | --hole-value V) input [output]",
        formatter_class=_formatter,
    )
    p_fill.add_argument("input", help="Grayscale input image.")
    p_fill.add_argument(
        "output",
        nargs="?",
        help="Result path (default: fixed.jpg next to the input).",
    )
    _add_hole_options(p_fill)
    p_fill.add_argument(
        "-z",
        "--power",
        type=float,
        default=2.0,
        help="Distance weight exponent (default: 2).",
    )
    p_fill.add_argument(
        "-e",
        "--epsilon",
        type=float,
        default=0.01,
        help="Weight smoothing constant (default: 0.01).",
    )
    p_fill.add_argument(
        "--method",
        choices=("weighted", "telea", "ns"),
        default="weighted",
        help="Fill algorithm; telea and ns use OpenCV (default: weighted).",
    )
    p_fill.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 2 if the hole touches the image border.",
    )
    p_fill._positionals.title = "arguments"

    p_ins = sub.add_parser(
        "inspect",
        help="Report the hole and its boundary without filling.",
        usage="%(prog)s [OPTIONS] (-m MASK | --hole-value V) input",
        formatter_class=_formatter,
    )
    p_ins.add_argument("input", help="Grayscale input image.")
    _add_hole_options(p_ins)
    p_ins.add_argument("--overlay", help="Save a hole/boundary visualization here.")
    p_ins._positionals.title = "arguments"

    args = parser.parse_args(argv)
    if args.invert_mask and args.hole_value is not None:
        subparsers = {"fill": p_fill, "inspect": p_ins}
        subparsers[args.command].error("--invert-mask only applies to a mask file (-m)")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        if args.command == "fill":
            _cmd_fill(args)
        elif args.command == "inspect":
            _cmd_inspect(args)
    except (HoleFillError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(EXIT_ERROR)


def _make_inpainter(args):
    if args.method == "weighted":
        from holefill.inpainters.weighted import WeightedInpainter

        return WeightedInpainter(
            connectivity=args.connectivity,
            power=args.power,
            epsilon=args.epsilon,
        )
    from holefill.inpainters.opencv import OpenCVInpainter

    return OpenCVInpainter(method=args.method)


def _cmd_fill(args):
    from holefill.engine import Outcome
    from holefill.pipeline import Pipeline, default_output_path

    input_path = Path(args.input)
    _require_exists(input_path)
    if args.mask:
        _require_exists(Path(args.mask), "Mask file")
    output_path = Path(args.output) if args.output else default_output_path(input_path)

    print(f"Input:  {input_path}")
    if args.mask:
        print(f"Mask:   {args.mask}")
    print(f"Output: {output_path}")

    inpainter = _make_inpainter(args)
    pipeline = Pipeline(inpainter=inpainter)
    pipeline.run(
        input_path,
        output_path,
        mask_path=args.mask,
        hole_value=args.hole_value,
        invert_mask=args.invert_mask,
    )

    if getattr(inpainter, "last_outcome", None) is Outcome.UNENCLOSED and args.strict:
        print("Error: hole touches the image border.", file=sys.stderr)
        sys.exit(EXIT_UNENCLOSED)

    print("Done.")


def _cmd_inspect(args):
    from holefill.boundary import find_bounding_box, locate_boundary
    from holefill.errors import UnenclosedHoleError
    from holefill.grid import PixelGrid
    from holefill.neighborhood import Connectivity
    from holefill.pipeline import load_hole_mask
    from holefill.utils import (
        conform_mask,
        load_image,
        mask_stats,
        overlay_boundary,
        save_image,
    )

    input_path = Path(args.input)
    _require_exists(input_path)
    if args.mask:
        _require_exists(Path(args.mask), "Mask file")

    image = load_image(input_path)
    mask = conform_mask(
        load_hole_mask(image, args.mask, args.hole_value, args.invert_mask), image
    )
    grid = PixelGrid.from_image_and_mask(image, mask)
    connectivity = Connectivity.parse(args.connectivity)

    n_masked, total, pct = mask_stats(mask)
    print(f"Image: {input_path} ({grid.cols}x{grid.rows})")
    print(f"Hole:  {n_masked} of {total} pixels ({pct:.1f}%)")

    try:
        box = find_bounding_box(grid)
        boundary = locate_boundary(grid, connectivity)
    except UnenclosedHoleError as exc:
        print(f"Unenclosed: {exc}")
        boundary = []
    else:
        if box is not None:
            print(
                f"Bounding box: rows {box.top}-{box.bottom}, "
                f"cols {box.left}-{box.right} ({box.width}x{box.height})"
            )
        print(f"Boundary: {len(boundary)} pixels ({connectivity.value}-connected)")

    if args.overlay:
        save_image(overlay_boundary(image, mask, boundary), args.overlay)
        print(f"Overlay saved to {args.overlay}")


if __name__ == "__main__":
    main()
