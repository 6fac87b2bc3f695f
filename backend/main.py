from __future__ import annotations

import argparse
import logging

import uvicorn

from server.config import get_settings


def parse_args() -> argparse.Namespace:
	settings = get_settings()
	parser = argparse.ArgumentParser(description="Run the Checkers FastAPI backend.")
	parser.add_argument("--host", default=settings.host, help="Bind host for the API server.")
	parser.add_argument("--port", type=int, default=settings.port, help="Port for the API server.")
	parser.add_argument("--reload", action="store_true", help="Enable autoreload (development only).")
	parser.add_argument("--log-level", default=settings.log_level, help="Log level for the engine and uvicorn.")
	return parser.parse_args()


def main() -> None:
	args = parse_args()
	logging.basicConfig(
		level=args.log_level.upper(),
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)
	uvicorn.run(
		"server.app:app",
		host=args.host,
		port=args.port,
		reload=args.reload,
		log_level=args.log_level,
	)


if __name__ == "__main__":
	main()
