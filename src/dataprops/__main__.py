# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Entry point for the dataprops CLI (run via ``dataprops``, ``dprops``, or ``python -m dataprops``)."""

from __future__ import annotations

import sys


def main() -> None:
    """Run the CLI."""
    try:
        from dataprops.cli import cli
    except ImportError:
        sys.stderr.write("dataprops CLI dependencies missing. Install with: pip install dataprops\n")
        sys.exit(1)
    cli(prog_name="dataprops")


if __name__ == "__main__":
    main()
