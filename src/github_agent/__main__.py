"""
Main entry point for github-agent package.

Usage:
    python -m github_agent [--web|--version]
"""

import sys
import argparse


def main():
    """Main entry point for the package."""
    parser = argparse.ArgumentParser(
        description="GitHub Agent - AI assistant for GitHub repositories"
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information",
    )
    parser.add_argument(
        "--web",
        action="store_true",
        help="Start web server (FastAPI)",
    )

    args = parser.parse_args()

    if args.version:
        from github_agent import __version__
        print(f"github-agent version {__version__}")
        return 0

    # Default: start web server
    print("Starting web server...")
    from github_agent.server.web import main as web_main
    return web_main()


if __name__ == "__main__":
    sys.exit(main())
