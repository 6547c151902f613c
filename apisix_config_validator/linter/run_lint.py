#!/usr/bin/env python3
# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point for linting APISIX resource files."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from ..config import validator_config
from ..models.resource import ProxyVersion, StorageSink
from ..parsers.resource_file_parser import JSON_EXTENSIONS, YAML_EXTENSIONS, resource_kind_from_file_name
from ..utils.format_version import is_supported_version
from . import lint_files


def find_resource_files(paths: List[str]) -> List[Path]:
    """Find all resource files (``name.<kind>.json|yaml|yml``) in given paths."""
    resource_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            if resource_kind_from_file_name(path.name):
                resource_files.append(path)
            else:
                print(f"Warning: File does not match resource file pattern: {path}", file=sys.stderr)
        elif path.is_dir():
            for ext in JSON_EXTENSIONS + YAML_EXTENSIONS:
                resource_files.extend(
                    p for p in path.rglob(f'*{ext}') if resource_kind_from_file_name(p.name)
                )
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(set(resource_files))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Lint APISIX resource files against the schema of a gateway version',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='File paths or directories to lint (default: current directory)',
    )
    parser.add_argument(
        '--proxy-version',
        required=True,
        help=f'Target gateway version, one of {ProxyVersion.get_all_versions()}',
    )
    parser.add_argument(
        '--sink',
        choices=StorageSink.get_all_sinks(),
        default=validator_config.default_sink,
        help=f'Storage sink selecting schema strictness (default: {validator_config.default_sink})',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the linter CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    validator_config.set_logging()

    if not is_supported_version(args.proxy_version):
        parser.error(
            f"unsupported gateway version '{args.proxy_version}'; "
            f"supported: {ProxyVersion.get_all_versions()}"
        )

    if not args.paths:
        args.paths = ['.']

    resource_files = find_resource_files(args.paths)

    if not resource_files:
        print("No APISIX resource files found.", file=sys.stderr)
        sys.exit(1)

    results = lint_files(resource_files, args.proxy_version, args.sink)

    if args.format == 'json':
        output = {
            'files': len(results),
            'errors': sum(len(r.errors) for r in results),
            'proxy_version': args.proxy_version,
            'sink': args.sink,
            'results': [r.to_dict() for r in results],
        }
        print(json.dumps(output, indent=2))
    elif args.format == 'github-actions':
        for result in results:
            for error in result.errors:
                print(f"::error file={result.file_path}::{error['message']}")
    else:  # human-readable
        for result in results:
            if result.errors:
                print(f"\n{result.label}:")
                for error in result.errors:
                    path_info = f" [{error['path']}]" if 'path' in error else ""
                    print(f"  ERROR{path_info}: {error['message']}")

    total_errors = sum(len(r.errors) for r in results)
    if total_errors > 0:
        sys.exit(1)
    if args.format == 'human':
        print(f"Lint succeeded with no errors ({len(results)} files).")
    sys.exit(0)


if __name__ == '__main__':
    main()
