"""Run the cart API: ``python -m shopcart [--host HOST] [--port PORT]``."""
from __future__ import annotations

import argparse
import os

from shopcart.api.api_server import run


def main() -> None:
    parser = argparse.ArgumentParser(description="Shop cart API server")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    args = parser.parse_args()
    run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
