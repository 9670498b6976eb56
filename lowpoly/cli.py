import argparse
import sys
from typing import List, Optional

from PIL import Image, UnidentifiedImageError

from .config import load_config, validate_config


def format_error(message: str) -> str:
    return f"✘ {message}"


def format_success(message: str) -> str:
    return f"✔ {message}"


def fail(message: str) -> None:
    print(format_error(message), file=sys.stderr)
    sys.exit(1)


def add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--in', dest='input', type=str, required=True, help='Source image')
    parser.add_argument('--out', dest='output', type=str, required=True, help='Destination PNG')
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--bf', dest='blur_factor', type=int, help='Blur filter radius')
    parser.add_argument('--sf', dest='sobel_factor', type=int, help='Edge filter radius')
    parser.add_argument('--gr', dest='grayscale', action='store_true',
                        help='Convert image to grayscale')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="lowpoly - Convert images to low-poly Delaunay renditions",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Generate command
    generate_parser = subparsers.add_parser('generate', help='Generate a low-poly image')
    add_filter_arguments(generate_parser)
    generate_parser.add_argument('--svg', type=str, help='Also write an SVG document')
    generate_parser.add_argument('--pt', dest='points_threshold', type=int,
                                 help='Edge filter threshold')
    generate_parser.add_argument('--mp', dest='max_points', type=int,
                                 help='Maximum number of points')
    generate_parser.add_argument('--pr', dest='point_rate', type=float,
                                 help='Fraction of candidate pixels turned into points')
    generate_parser.add_argument('--seed', type=int, help='Seed of the point sampler')
    generate_parser.add_argument('--ow', dest='only_wireframe', action='store_true',
                                 help='Only stroke triangles, do not fill them')
    generate_parser.add_argument('--sw', dest='stroke_width', type=float, help='Stroke width')
    generate_parser.add_argument('--wb', dest='with_background', action='store_true',
                                 help='Paint a background')
    generate_parser.add_argument('--bc', dest='background_color', type=str,
                                 help='Background color in hex format')
    generate_parser.add_argument('--sc', dest='stroke_color', type=str,
                                 help='Stroke color in hex format')
    generate_parser.add_argument('--metrics', action='store_true',
                                 help='Print fidelity metrics against the source image')
    generate_parser.add_argument('--comparison', type=str,
                                 help='Write a side-by-side comparison PNG')
    generate_parser.add_argument('--quiet', action='store_true', help='Hide the progress bar')
    generate_parser.add_argument('overrides', nargs='*', help='Additional config overrides')

    # Edges command
    edges_parser = subparsers.add_parser('edges', help='Write the edge-emphasized raster')
    add_filter_arguments(edges_parser)

    return parser


def build_overrides(args: argparse.Namespace) -> List[str]:
    """Translate command line flags into config overrides."""
    overrides = []
    for name in ('blur_factor', 'sobel_factor', 'points_threshold', 'max_points',
                 'point_rate', 'seed'):
        value = getattr(args, name, None)
        if value is not None:
            overrides.append(f'triangulation.{name}={value}')
    if getattr(args, 'grayscale', False):
        overrides.append('triangulation.grayscale=true')

    if getattr(args, 'stroke_width', None) is not None:
        overrides.append(f'drawer.stroke_width={args.stroke_width}')
    if getattr(args, 'only_wireframe', False):
        overrides.append('drawer.only_wireframe=true')
    if getattr(args, 'with_background', False):
        overrides.append('drawer.with_background=true')
    if getattr(args, 'quiet', False):
        overrides.append('output.show_progress=false')

    overrides.extend(getattr(args, 'overrides', None) or [])
    return overrides


def open_image(path: str) -> Image.Image:
    try:
        image = Image.open(path)
        image.load()
    except (OSError, UnidentifiedImageError):
        fail("could not open input image")
    return image


def generate(args: argparse.Namespace, cfg) -> None:
    from .pipeline import Triangulation
    from .renderer import Drawer
    from .utils import MetricsCalculator, save_image, create_comparison_grid

    image = open_image(args.input)
    triangulation = Triangulation.from_config(cfg.triangulation,
                                              show_progress=cfg.output.show_progress)
    drawer = Drawer.from_config(cfg.drawer)

    print(format_success("start generating delaunay image ...."))
    triangles, source = triangulation.generate_triangles(image)

    if not triangles:
        fail("could not generate delaunay triangles")

    result = drawer.draw(source, triangles)

    try:
        result.save(args.output, format='PNG')
    except (OSError, ValueError):
        fail("could not save output image")

    if args.svg:
        try:
            with open(args.svg, 'w') as f:
                f.write(drawer.to_svg(source, triangles))
        except OSError:
            fail("could not save output image")

    if args.metrics:
        try:
            metrics = MetricsCalculator().calculate_metrics(result, source,
                                                            list(cfg.output.metrics))
        except ValueError as e:
            fail(f"could not compute metrics: {e}")
        print("\nMetrics:")
        for name, value in metrics.items():
            print(f"{name.upper()}: {value:.3f}")

    if args.comparison:
        save_image(create_comparison_grid(source, result), args.comparison)

    print(format_success(f"done (delaunay image is saved, {len(triangles)} triangles)"))


def edges(args: argparse.Namespace, cfg) -> None:
    from .pipeline import Triangulation, to_raster
    from .utils import save_image

    image = open_image(args.input)
    triangulation = Triangulation.from_config(cfg.triangulation)
    edge_raster = triangulation.edge_image(to_raster(image, triangulation.grayscale))
    save_image(edge_raster, args.output)
    print(format_success("done (edge image is saved)"))


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point for lowpoly."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    # Load config with overrides
    cfg = load_config(args.config, build_overrides(args))

    # Hex colors are set directly, a leading '#' would read as a YAML comment
    for name in ('stroke_color', 'background_color'):
        value = getattr(args, name, None)
        if value is not None:
            cfg.drawer[name] = value

    try:
        validate_config(cfg)
    except AssertionError as e:
        fail(f"invalid configuration: {e}")

    # Execute command
    if args.command == 'generate':
        generate(args, cfg)
    elif args.command == 'edges':
        edges(args, cfg)


if __name__ == '__main__':
    main()
