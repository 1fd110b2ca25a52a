# SPDX-FileCopyrightText: 2025 ModelCloud.ai
# SPDX-FileCopyrightText: 2025 qubitium@modelcloud.ai
# SPDX-License-Identifier: Apache-2.0
# Contact: qubitium@modelcloud.ai, x.com/qubitium

"""Print the compiler and linker configuration for the XS extension."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .build_config import format_report, resolve_link_configuration
from .gui import GuiToolkitNotFound
from .resolver import ResolutionExhausted


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="xsbuild", description=__doc__)
    parser.add_argument("--json", action="store_true", help="emit setuptools Extension kwargs as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="show every rejected candidate")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = resolve_link_configuration()
    except (ResolutionExhausted, GuiToolkitNotFound) as exc:
        print(exc, file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(config.as_extension_kwargs(), indent=2))
    else:
        print()
        print(format_report(config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
