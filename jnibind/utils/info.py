"""
Package information utility.

This module provides a command-line utility for displaying
information about the jnibind installation and environment.
"""

import sys
import platform
from typing import Dict, Any

import yaml

import jnibind
from .constants import HookKind, SYSTEM_CALLING_CONVENTION, EXPORT_MARKERS


def get_system_info() -> Dict[str, Any]:
    """
    Get system information relevant to jnibind.

    Returns:
        Dictionary containing system information
    """
    return {
        'python_version': sys.version,
        'platform': platform.platform(),
        'architecture': platform.architecture(),
        'yaml_version': getattr(yaml, '__version__', 'unknown'),
    }


def get_jnibind_info() -> Dict[str, Any]:
    """
    Get jnibind-specific information.

    Returns:
        Dictionary containing jnibind information
    """
    return {
        'version': jnibind.__version__,
        'author': jnibind.__author__,
        'calling_convention': SYSTEM_CALLING_CONVENTION,
        'markers': list(EXPORT_MARKERS),
        'hooks': [kind.symbol for kind in HookKind],
    }


def print_info() -> None:
    """Print formatted information about jnibind and the system."""
    print("jnibind JNI Export Generator")
    print("=" * 40)

    info = get_jnibind_info()
    print(f"\njnibind Version: {info['version']}")
    print(f"Author: {info['author']}")
    print(f"Calling Convention: extern \"{info['calling_convention']}\"")
    print(f"Markers: {' '.join(info['markers'])}")
    print(f"Hooks: {', '.join(info['hooks'])}")

    system_info = get_system_info()
    print(f"\nPython Version: {system_info['python_version'].split()[0]}")
    print(f"Platform: {system_info['platform']}")
    print(f"Architecture: {system_info['architecture'][0]}")
    print(f"PyYAML Version: {system_info['yaml_version']}")


def main() -> None:
    """Main entry point for the jnibind-info command."""
    try:
        print_info()
    except Exception as e:
        print(f"Error getting system information: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
