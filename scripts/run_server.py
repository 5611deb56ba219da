"""
Run the FastAPI server.

This script starts the FuelBank API server using uvicorn.

Usage:
    python scripts/run_server.py [--port PORT] [--reload]

Options:
    --port PORT: Port to run the server on (default: 3000)
    --reload: Enable auto-reload for development (default: False)
    --host HOST: Host to bind to (default: 0.0.0.0)

Examples:
    # Run in production mode
    python scripts/run_server.py

    # Run with auto-reload for development
    python scripts/run_server.py --reload

Environment Variables:
    TARGET_INTENSITY: Override the target GHG intensity (default: 89.3368 gCO2eq/MJ)
    PORT: Default port when --port is not given
"""

import argparse
import os
import sys

try:
    import uvicorn
except ImportError:
    print("ERROR: uvicorn is not installed.")
    print("Install dependencies: pip install -e .")
    sys.exit(1)


def main():
    parser = argparse.ArgumentParser(
        description="Run the FuelBank API server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("PORT", 3000)),
        help="Port to run the server on (default: $PORT or 3000)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["critical", "error", "warning", "info", "debug", "trace"],
        help="Log level (default: info)",
    )

    args = parser.parse_args()

    print("=" * 80)
    print("FUELBANK API SERVER")
    print("=" * 80)
    print(f"\nStarting server on http://{args.host}:{args.port}")
    print(f"   Mode: {'Development (auto-reload)' if args.reload else 'Production'}")
    print(f"   Log level: {args.log_level}")
    print(f"\nAPI Documentation: http://localhost:{args.port}/docs")
    print(f"Health check: http://localhost:{args.port}/health")
    print("\n" + "=" * 80 + "\n")

    uvicorn.run(
        "fuelbank.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
