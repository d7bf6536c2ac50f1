"""Run the gateway: HTTP (FastAPI/uvicorn) and gRPC in one process.

Usage:
    python -m pushgate                                  # config/serviceAccount.json, :8080, :50051
    python -m pushgate -p /secrets/serviceAccount.json  # explicit service account
    python -m pushgate --port 9000 --no-grpc            # HTTP only
"""
import argparse
import sys

import uvicorn

from pushgate.settings import get_config_store, get_settings

BANNER = r"""
        /\         /\
       /  \       /  \
      /    \_____/    \
     /                 \
    /     PUSHGATE      \
   /        FCM          \
  /                      /
 /______________________/
      |            |
      |            |
     /              \
    /________________\
********************************************
*         FCM send message service         *
********************************************
"""


def parse_arguments(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pushgate",
        description="HTTP and gRPC gateway for Firebase Cloud Messaging",
    )
    parser.add_argument(
        "-p",
        "--service-account",
        dest="service_account_path",
        help="Path to serviceAccount.json file (default: config/serviceAccount.json)",
    )
    parser.add_argument("--host", dest="http_host", help="HTTP bind address")
    parser.add_argument("--port", dest="http_port", type=int, help="HTTP port (default: 8080)")
    parser.add_argument("--grpc-port", dest="grpc_port", type=int, help="gRPC port (default: 50051)")
    parser.add_argument(
        "--no-grpc",
        dest="grpc_enabled",
        action="store_false",
        default=None,
        help="Serve HTTP only",
    )
    return parser.parse_args(argv)


def overrides_from_args(args: argparse.Namespace) -> dict:
    """Only flags given on the command line override file/env config."""
    return {k: v for k, v in vars(args).items() if v is not None}


def main(argv=None) -> int:
    args = parse_arguments(argv)
    overrides = overrides_from_args(args)
    if overrides:
        get_config_store().update(overrides)
    s = get_settings()

    print(BANNER)
    print(f"Server listening at http://{s.http_host}:{s.http_port}")
    uvicorn.run(
        "pushgate.main:app",
        host=s.http_host,
        port=s.http_port,
        log_level=str(s.log_level).lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
