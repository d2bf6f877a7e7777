import argparse
import logging
import os

import uvicorn

from gocyclo.config import DEFAULT_HOST, DEFAULT_PORT


def _resolve_go_root(path: str) -> str:
    """
    Absolute form of the directory whose Go functions the API ranks by
    default. Requests may still name other files or directories.
    """
    target = os.path.abspath(path)
    if not os.path.isdir(target):
        raise SystemExit(f"Not a directory: {target}")
    return target


def main(argv: list[str] | None = None) -> None:
    """
    Start the complexity API for a Go source tree.

    The server process runs from the Go root, so requests without a `path`
    parameter rank the functions found under it.
    """
    parser = argparse.ArgumentParser(
        prog="gocyclo-server",
        description=(
            "Rank Go functions and methods by cyclomatic complexity over HTTP. "
            "Endpoints live under /api/analysis; see /docs once running."
        ),
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Go module or source directory to rank by default (default: current directory).",
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help=f"Bind address (default: {DEFAULT_HOST}).")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Listen port (default: {DEFAULT_PORT}).")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Verbosity of the analysis and server logs (default: info).",
    )

    args = parser.parse_args(argv)
    go_root = _resolve_go_root(args.path)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    # The router reads its default root from the working directory at import.
    os.chdir(go_root)
    print(f"🐹 Go root: {go_root}")
    print(f"📈 Complexity API at http://{args.host}:{args.port}/api/analysis/functions")

    uvicorn.run(
        "gocyclo.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=False,
    )


if __name__ == "__main__":
    main()
