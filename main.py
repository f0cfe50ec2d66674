"""
Quaternion Registration

Finds the rigid transform G in SE(3) relating two coordinate frames from
corresponding 3D points, B_i ~ G * A_i, by least squares.

Environment Variables:
    QUATREG_STRICT: Reject point sets that cannot fix a unique rotation (default: true)
    QUATREG_CHUNK_SIZE: Chunk size for the correlation sum, 0 = single batch (default: 0)
    QUATREG_WORKERS: Threads for the chunked sum (default: 1)
    LOG_LEVEL: Logging level (default: INFO)
    HOST: Server host address (default: 0.0.0.0)
    PORT: Server port (default: 8005)
    DEBUG: Enable debug mode with auto-reload (default: false)

CLI Usage:
    python main.py register first_frame_data.txt second_frame_data.txt

    # Sample data
    python main.py register data/data1-firstFrame.txt data/data1-secondFrame.txt

    # JSON output, permissive mode for degenerate point sets
    python main.py register a.pcd b.pcd --json --permissive

    # Save the first frame mapped into the second frame
    python main.py register a.txt b.txt --output registered.pcd

    # HTTP API
    python main.py serve
"""

import argparse
import json
import os
import sys

from quatreg.core.config import settings
from quatreg.core.logging_config import get_logger
from quatreg.modules.io import PointFileError, format_result, read_point_file, write_point_file
from quatreg.modules.registration import RegistrationEngine, RegistrationError
from quatreg.modules.registration.transform import apply_transform

logger = get_logger("quatreg.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="main.py",
        description="Rigid registration of two corresponding 3D point sets",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    reg = sub.add_parser("register", help="Register two point files")
    reg.add_argument("first", help="Points in the first frame (domain)")
    reg.add_argument("second", help="Corresponding points in the second frame (range)")
    reg.add_argument("--permissive", action="store_true",
                     help="Skip the well-posedness check on degenerate point sets")
    reg.add_argument("--json", action="store_true", help="Print the result as JSON")
    reg.add_argument("--output", metavar="PATH",
                     help="Write the registered first-frame points (.txt frame file or .pcd/.ply cloud)")

    sub.add_parser("serve", help="Run the HTTP API")
    return parser


def run_register(args) -> int:
    config = settings.engine_config()
    if args.permissive:
        config["strict"] = False

    try:
        engine = RegistrationEngine(config)
        domain = read_point_file(args.first)
        range_ = read_point_file(args.second)
        result = engine.register(domain, range_)
        if args.output:
            write_point_file(
                args.output,
                apply_transform(result.transformation, domain),
                header=f"Points of {os.path.basename(args.first)} registered onto {os.path.basename(args.second)}",
            )
            logger.info(f"Wrote registered points to {args.output}")
    except (PointFileError, RegistrationError, ValueError) as e:
        logger.error(str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_result(result))
    return 0


def run_serve() -> int:
    import uvicorn

    print(f"Starting {settings.PROJECT_NAME} on {settings.HOST}:{settings.PORT}")

    reload_enabled = bool(settings.DEBUG)
    reload_dirs = None
    if reload_enabled:
        from pathlib import Path

        repo_root = Path(__file__).resolve().parent
        reload_dirs = [str(repo_root / "quatreg")]

    uvicorn.run(
        "quatreg.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=reload_enabled,
        reload_dirs=reload_dirs,
    )
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "register":
        return run_register(args)
    return run_serve()


if __name__ == "__main__":
    sys.exit(main())
