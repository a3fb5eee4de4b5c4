"""
Entry point for the Pautang payment schedule calculator.

Usage:
    python main.py          # launches the web app at localhost:5000
    python main.py --cli    # runs the terminal interface
"""

import argparse


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Connie's Pautang Application: daily and monthly payment schedules",
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Run in terminal mode instead of launching the web app",
    )
    parser.add_argument(
        "--clients",
        metavar="PATH",
        help="JSON file holding the client name list",
    )
    args = parser.parse_args()

    if args.clients:
        import config as cfg
        cfg.CLIENT_STORE_PATH = args.clients

    if args.cli:
        from cli import run_cli
        run_cli()
    else:
        from app import app, run_web
        app.config["CLIENT_STORE_PATH"] = args.clients or app.config["CLIENT_STORE_PATH"]
        run_web()


if __name__ == "__main__":
    main()
