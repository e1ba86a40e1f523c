#!/usr/bin/env python3
"""
Build script for creating a standalone fbx-convert executable using PyInstaller
"""

import PyInstaller.__main__
import sys


def build():
    """Build standalone executable"""

    # Determine platform
    if sys.platform.startswith('win'):
        exe_name = 'fbx-convert.exe'
    else:
        exe_name = 'fbx-convert'

    print("=" * 50)
    print("Building Standalone Executable")
    print("=" * 50)
    print(f"Platform: {sys.platform}")
    print(f"Output: {exe_name}")
    print("=" * 50)

    # PyInstaller arguments
    args = [
        'fbx_convert.py',
        '--name=' + exe_name,
        '--onefile',  # Single executable file
        '--console',  # Command line tool
        '--clean',
        '--noconfirm',
        # Readers module
        '--hidden-import=readers',
        '--hidden-import=readers.base_reader',
        '--hidden-import=readers.json_reader',
        '--hidden-import=readers.obj_reader',
        # Core module
        '--hidden-import=core',
        '--hidden-import=core.fbx_values',
        '--hidden-import=core.fbx_tree',
        '--hidden-import=core.fbx_objects',
        # Exporters module
        '--hidden-import=exporters.base_exporter',
        '--hidden-import=exporters.fbx_exporter',
        '--hidden-import=exporters.fbx_geometry',
        '--hidden-import=exporters.fbx_animation',
        '--hidden-import=exporters.fbx_writer',
        '--hidden-import=numpy',
    ]

    # Run PyInstaller
    try:
        PyInstaller.__main__.run(args)

        print("\n" + "=" * 50)
        print("Build Complete!")
        print("=" * 50)

        if sys.platform.startswith('win'):
            print(f"\nExecutable location: dist\\{exe_name}")
        else:
            print(f"\nExecutable location: dist/{exe_name}")

    except Exception as e:
        print(f"\nBuild failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    build()
