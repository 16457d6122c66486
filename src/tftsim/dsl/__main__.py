#!/usr/bin/env python3
"""
CLI for the tftsim drawing DSL.

Usage:
    python -m tftsim.dsl render FILE [--width W] [--height H] [--output OUT.png]
                                     [--dxf OUT.dxf] [--grid] [--show]
    python -m tftsim.dsl check FILE [--width W] [--height H] [--json]
    python -m tftsim.dsl colors
    python -m tftsim.dsl save FILE --project OUT.json

FILE is either program source or a .json/.yaml project file holding the
source together with the screen size.

Examples:
    # Render a sketch for a 240x320 screen
    python -m tftsim.dsl render dashboard.ino --width 240 --height 320

    # Render a saved project, also exporting DXF, and open a preview
    python -m tftsim.dsl render dashboard.json --dxf dashboard.dxf --show

    # Report problems as JSON for an editor integration
    python -m tftsim.dsl check dashboard.ino --json
"""

import argparse
import json
import sys
from pathlib import Path

from ..colors import TFT_COLORS, rgb565_to_color
from ..project import (
    DEFAULT_WIDTH, DEFAULT_HEIGHT, Project, ProjectError,
    is_project_file, load_project, save_project, validate_dimensions,
)


def load_input(args) -> Project:
    """Read FILE as a project or as plain source; --width/--height override."""
    source_path = Path(args.file)
    if not source_path.exists():
        raise ProjectError(f"File not found: {source_path}")

    if is_project_file(source_path):
        project = load_project(source_path)
    else:
        project = Project(code=source_path.read_text(encoding="utf-8"))

    width = args.width if args.width is not None else project.width
    height = args.height if args.height is not None else project.height
    project.width, project.height = validate_dimensions(width, height)
    return project


def _run(project: Project, drawable):
    from .runtime import Interpreter
    return Interpreter(drawable).run(project.code, project.width, project.height)


def cmd_render(args):
    """Render a program to PNG (and optionally DXF)."""
    from ..raster_drawable import RasterDrawable

    try:
        project = load_input(args)
    except (OSError, ProjectError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    surface = RasterDrawable(project.width, project.height)
    result = _run(project, surface)

    for message in result.messages:
        print(message, file=sys.stderr)

    output = Path(args.output) if args.output else Path(args.file).with_suffix('.png')
    surface.save(output, grid=args.grid)
    print(f"Rendered {project.width}x{project.height} to: {output}")

    if args.dxf:
        from ..ezdxf_drawable import EzdxfDrawable

        dxf = EzdxfDrawable(project.width, project.height)
        dxf.clear()
        _run(project, dxf)
        dxf.save(args.dxf)
        print(f"Exported to: {args.dxf}")

    if result.diagnostics:
        print(f"Rendering completed with {len(result.diagnostics)} error(s)",
              file=sys.stderr)
    else:
        print("Rendering completed successfully!")

    if args.show:
        from ..pyglet_viewer import show
        show(surface, title=f"tftsim - {Path(args.file).name}")

    return 1 if result.diagnostics else 0


def cmd_check(args):
    """Run a program and report diagnostics only."""
    from ..raster_drawable import RasterDrawable

    try:
        project = load_input(args)
    except (OSError, ProjectError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = _run(project, RasterDrawable(project.width, project.height))

    if args.json:
        print(json.dumps(result.context.diagnostics.to_json(), indent=2))
    elif result.diagnostics:
        print(f"Check failed with {len(result.diagnostics)} error(s):")
        print(result.context.diagnostics.format_all())
    else:
        variables = len(result.context.scope)
        print(f"OK: {Path(args.file).name} - {variables} variable(s), no errors")

    return 1 if result.diagnostics else 0


def cmd_colors(args):
    """List the TFT_ color constants."""
    width = max(len(name) for name in TFT_COLORS)
    for name, code in TFT_COLORS.items():
        color = rgb565_to_color(code)
        print(f"{name:<{width}}  0x{code:04X}  {color.hex}  {color}")
    return 0


def cmd_save(args):
    """Wrap program source into a project file."""
    try:
        project = load_input(args)
        path = save_project(project, args.project)
    except (OSError, ProjectError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Project saved to: {path}")
    return 0


def _add_size_arguments(parser):
    parser.add_argument('file', help='Program source or .json/.yaml project file')
    parser.add_argument('-W', '--width', type=int, default=None,
                        help=f'Screen width in pixels (default {DEFAULT_WIDTH})')
    parser.add_argument('-H', '--height', type=int, default=None,
                        help=f'Screen height in pixels (default {DEFAULT_HEIGHT})')


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='python -m tftsim.dsl',
        description='TFT_eSPI drawing simulator',
    )

    subparsers = parser.add_subparsers(dest='action', required=True)

    # render command
    render_parser = subparsers.add_parser('render', help='Render a program to an image')
    _add_size_arguments(render_parser)
    render_parser.add_argument('-o', '--output', metavar='FILE',
                               help='PNG output (default: FILE with .png suffix)')
    render_parser.add_argument('--dxf', metavar='FILE', help='Also export a DXF drawing')
    render_parser.add_argument('--grid', action='store_true',
                               help='Overlay a 10 pixel grid on the image')
    render_parser.add_argument('--show', action='store_true',
                               help='Open a preview window')

    # check command
    check_parser = subparsers.add_parser('check', help='Report errors without saving output')
    _add_size_arguments(check_parser)
    check_parser.add_argument('--json', action='store_true',
                              help='Print diagnostics as JSON')

    # colors command
    subparsers.add_parser('colors', help='List color constants')

    # save command
    save_parser = subparsers.add_parser('save', help='Save source as a project file')
    _add_size_arguments(save_parser)
    save_parser.add_argument('-p', '--project', required=True, metavar='FILE',
                             help='Project file to write (.json, .yaml)')

    args = parser.parse_args(argv)

    if args.action == 'render':
        return cmd_render(args)
    elif args.action == 'check':
        return cmd_check(args)
    elif args.action == 'colors':
        return cmd_colors(args)
    elif args.action == 'save':
        return cmd_save(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
