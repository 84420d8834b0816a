"""Entry point for running the Seltzer server."""

import sys


def main() -> int:
    """Run the server until interrupted. Returns the process exit code."""
    import anyio

    try:
        from .config import settings
        from .supervisor import run

        anyio.run(run, settings)
        return 0
    except KeyboardInterrupt:
        print("\nShutdown requested...")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
