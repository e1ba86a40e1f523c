#!/usr/bin/env python3
"""
FBX ASCII Converter - Command Line Version
Convert JSON scene descriptions or Wavefront OBJ meshes to FBX ASCII
"""

import argparse
import sys
import traceback
from pathlib import Path

from core.scene_data import ExportSettings, KeyTiming
from core.transform_math import UNITY_TO_MAYA
from exporters.fbx_exporter import FBXExporter
from readers import SUPPORTED_EXTENSIONS, create_reader, read_animation_file

AXIS_TRANSFORMS = {
    'none': None,
    'unity-to-maya': UNITY_TO_MAYA,
}


def build_parser():
    parser = argparse.ArgumentParser(
        prog='fbx-convert',
        description='Convert scene files (.json, .obj) to FBX ASCII 6.1',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export a JSON scene with its recorded animation
  python fbx_convert.py scene.json --output-dir ./output

  # Export an OBJ mesh, mirroring X and adding animation from a separate file
  python fbx_convert.py cube.obj --output-dir ./output --axis unity-to-maya --animation cube_anim.json

  # Key times from recorded frame times instead of frame index
  python fbx_convert.py scene.json --output-dir ./output --key-timing time

Supported input formats:
  .json    - JSON scene description (meshes + animations)
  .obj     - Wavefront OBJ (triangle or quad meshes)
        """
    )

    parser.add_argument('input', type=str, help='Input scene file (.json, .obj)')
    parser.add_argument('--output-dir', type=str, required=True,
                        help='Output directory for the .fbx file')
    parser.add_argument('--name', type=str,
                        help='Output file name (default: derived from input filename)')
    parser.add_argument('--animation', type=str,
                        help='JSON file with recorded animation keyed by mesh name')
    parser.add_argument('--frame-rate', type=float, default=60.0,
                        help='Frame rate for frame-index key times (default: 60)')
    parser.add_argument('--key-timing', choices=[t.value for t in KeyTiming],
                        default=KeyTiming.FRAME_INDEX.value,
                        help='Derive key times from frame index or frame time (default: index)')
    parser.add_argument('--axis', choices=sorted(AXIS_TRANSFORMS), default='none',
                        help='Coordinate conversion applied to vertices and normals (default: none)')
    parser.add_argument('--material', type=str, default='DefaultMaterial',
                        help='Dummy material name meshes are connected to')
    parser.add_argument('--scene-name', type=str, default='Scene',
                        help='Root model name meshes are parented to')
    parser.add_argument('--creator', type=str, default='FBX ASCII Exporter',
                        help='Creator string written to the header')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Validate input file exists
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    # Validate file extension
    file_ext = input_path.suffix.lower()
    if file_ext not in SUPPORTED_EXTENSIONS:
        print(f"Error: Unsupported file format: {file_ext}", file=sys.stderr)
        print(f"Supported formats: {', '.join(sorted(SUPPORTED_EXTENSIONS))}", file=sys.stderr)
        return 1

    if args.frame_rate <= 0:
        print(f"Error: Frame rate must be positive: {args.frame_rate}", file=sys.stderr)
        return 1

    name = args.name or input_path.stem

    settings = ExportSettings(
        creator=args.creator,
        frame_rate=args.frame_rate,
        key_timing=KeyTiming(args.key_timing),
        material_name=args.material,
        scene_name=args.scene_name,
    )

    print("=" * 60)
    print(f"Converting: {input_path.name}")
    print(f"Output: {args.output_dir}")
    print(f"Name: {name}")
    print(f"Key timing: {settings.key_timing.value} @ {settings.frame_rate} fps")
    print("=" * 60 + "\n")

    try:
        reader = create_reader(str(input_path))
        scene_data = reader.extract_scene_data()
        if args.animation:
            scene_data.animations.update(read_animation_file(args.animation))
    except Exception as e:
        print(f"\nFailed to read {input_path.name}: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1

    exporter = FBXExporter(settings=settings)
    result = exporter.export(scene_data, args.output_dir, name, AXIS_TRANSFORMS[args.axis])

    print()
    print(exporter.get_export_summary(result))

    if not result.get('success'):
        print(f"\n{result.get('message', 'Export failed')}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
