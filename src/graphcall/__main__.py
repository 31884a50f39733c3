"""Entry point for running graphcall as a module.

Usage:
    python -m graphcall request /me
    python -m graphcall --help
"""

from dotenv import load_dotenv

load_dotenv()  # Load .env (GRAPH_ACCESS_TOKEN, GRAPHCALL_CONFIG_PATH) before the CLI reads them

from graphcall.cli import main  # noqa: E402

if __name__ == "__main__":
    main()
