from __future__ import annotations
import logging
import sys
import os
from geometry import DEFAULT_WIDTH, DEFAULT_HEIGHT, clamp
from renderer import Renderer, DEFAULT_CURVE_STEPS

def process_svg_file(svg_path: str, output_path: str = None, verbose: bool = False,
                     width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                     background: tuple[int, int, int] = (0, 0, 0),
                     steps: int = DEFAULT_CURVE_STEPS) -> bool:
    if not os.path.exists(svg_path):
        print(f"Error: File not found: {svg_path}")
        return False

    if not svg_path.lower().endswith('.svg'):
        print(f"Warning: {svg_path} does not have .svg extension")

    try:
        with open(svg_path, 'r', encoding='utf-8') as file:
            svg_text = file.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {svg_path}: {e}")
        return False

    if output_path is None:
        base_name = os.path.splitext(os.path.basename(svg_path))[0]
        output_path = f"{base_name}.png"

    renderer = Renderer(svg_text, steps, width, height)
    if verbose:
        print(f"\nProcessing: {svg_path}")
        print(f"Canvas: {width}x{height}")
        print(f"ViewBox: {renderer.svg_state.viewbox}")
        print(f"Curve steps: {renderer.smooth_curve_steps}")
        print(f"Output will be: {output_path}")

    canvas = renderer.render()

    try:
        canvas.to_image(background).save(output_path)
    except (OSError, ValueError) as e:
        print(f"Error saving PNG: {e}")
        return False

    if verbose:
        print(f"[OK] Rendered and saved: {output_path}")
    else:
        print(f"[OK] {svg_path} -> {output_path}")
    return True

def parse_positive_int(value: str, name: str) -> int | None:
    try:
        number = int(value)
    except ValueError:
        print(f"Error: {name} must be an integer")
        return None
    if number <= 0:
        print(f"Error: {name} must be positive")
        return None
    return number

def main(argv: list[str] = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    if len(args) == 0:
        print("SVG to palette PNG converter")
        print("Usage: svgpalette <svg_file1> [svg_file2] ... [options]")
        print("\nOptions:")
        print("  -v, --verbose         Print detailed information and debug logs")
        print("  -o, --output PATH     Output directory, or file when converting one SVG")
        print(f"  -w, --width WIDTH     Canvas width in pixels (default: {DEFAULT_WIDTH})")
        print(f"  -h, --height HEIGHT   Canvas height in pixels (default: {DEFAULT_HEIGHT})")
        print(f"  -s, --steps STEPS     Line segments per curve (default: {DEFAULT_CURVE_STEPS})")
        print("  -b, --background RGB  Color for transparent pixels as R,G,B (default: 0,0,0)")
        print("\nExamples:")
        print("  svgpalette sprite.svg")
        print("  svgpalette *.svg -o out/ -v")
        print("  svgpalette sprite.svg -w 320 -h 240 -s 20")
        return 1

    verbose = False
    output_dir = None
    width = DEFAULT_WIDTH
    height = DEFAULT_HEIGHT
    steps = DEFAULT_CURVE_STEPS
    background = (0, 0, 0)
    svg_files = []

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ['-v', '--verbose']:
            verbose = True
        elif arg in ['-o', '--output', '-w', '--width', '-h', '--height',
                     '-s', '--steps', '-b', '--background']:
            if i + 1 >= len(args):
                print(f"Error: {arg} requires a value")
                return 2
            value = args[i + 1]
            i += 1
            if arg in ['-o', '--output']:
                output_dir = value
            elif arg in ['-w', '--width']:
                width = parse_positive_int(value, "Width")
                if width is None:
                    return 2
            elif arg in ['-h', '--height']:
                height = parse_positive_int(value, "Height")
                if height is None:
                    return 2
            elif arg in ['-s', '--steps']:
                steps = parse_positive_int(value, "Steps")
                if steps is None:
                    return 2
            else:
                try:
                    rgb_parts = [int(p.strip()) for p in value.split(',')]
                except ValueError:
                    rgb_parts = []
                if len(rgb_parts) != 3:
                    print("Error: Background must be R,G,B integers (e.g., 0,0,0)")
                    return 2
                background = tuple(clamp(c, 0, 255) for c in rgb_parts)
        elif arg.startswith('-'):
            print(f"Unknown option: {arg}")
            return 2
        else:
            svg_files.append(arg)
        i += 1

    if len(svg_files) == 0:
        print("Error: No SVG files specified")
        return 2

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(levelname)-8s [%(name)s] %(message)s")

    success_count = 0
    for svg_file in svg_files:
        output_path = None
        if output_dir:
            if os.path.isdir(output_dir):
                base_name = os.path.splitext(os.path.basename(svg_file))[0]
                output_path = os.path.join(output_dir, f"{base_name}.png")
            elif len(svg_files) == 1:
                output_path = output_dir
            else:
                print("Warning: -o with multiple files requires a directory, not a file")

        if process_svg_file(svg_file, output_path, verbose, width, height, background, steps):
            success_count += 1

    print(f"\nProcessed {success_count}/{len(svg_files)} file(s) successfully")
    return 0 if success_count == len(svg_files) else 1

if __name__ == "__main__":
    sys.exit(main())
