#!/usr/bin/env python3
"""
Command-line interface for the order service.

Usage:
    uv run python cli.py [command] [options]

Commands:
    serve       Start the API server
    test        Run the test suite
    config      Show the settings the server would start with

Examples:
    uv run python cli.py serve --reload
    SEND_MAILS=true uv run python cli.py serve
    uv run python cli.py test -v
"""

import argparse
import subprocess
import sys


def run_tests(args: list[str]) -> int:
    """Run the test suite."""
    cmd = ["uv", "run", "pytest"] + args
    return subprocess.run(cmd).returncode


def run_server(host: str, port: int, reload: bool) -> int:
    """Start the API server."""
    cmd = ["uv", "run", "uvicorn", "api.main:app", f"--host={host}", f"--port={port}"]
    if reload:
        cmd.append("--reload")

    print(f"Starting server at http://{host}:{port}")
    print(f"API docs available at http://{host}:{port}/docs")
    return subprocess.run(cmd).returncode


def show_config() -> int:
    """Print the settings resolved from the environment."""
    from shared.config import Settings

    settings = Settings.from_env()
    for name, value in settings.model_dump().items():
        print(f"{name:<18} {value}")
    return 0


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Order Service CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s serve --reload
  %(prog)s test -v
  %(prog)s config
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    # Test command
    test_parser = subparsers.add_parser("test", help="Run the test suite")
    test_parser.add_argument(
        "pytest_args",
        nargs="*",
        default=[],
        help="Arguments to pass to pytest",
    )

    # Config command
    subparsers.add_parser("config", help="Show resolved settings")

    args = parser.parse_args()

    if args.command == "serve":
        sys.exit(run_server(args.host, args.port, args.reload))
    elif args.command == "test":
        sys.exit(run_tests(args.pytest_args))
    elif args.command == "config":
        sys.exit(show_config())
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
