"""Allow ``python -m ytd_extract`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m ytd_extract`` behaves identically to the ``ytd-extract``
console script.
"""

from __future__ import annotations

from ytd_extract.cli.app import cli

if __name__ == "__main__":
    cli()
