#!/usr/bin/env python
"""
Start the Weather DAIN service (FastAPI + uvicorn).
"""

import argparse
import logging

import uvicorn

from weather_dain.infra.config import get_config

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    cfg = get_config()
    parser = argparse.ArgumentParser(
        description="Start the Weather DAIN service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
    python run_service.py                # listen on SERVICE_PORT (default 2022)
    python run_service.py --port 8080    # listen on 8080
    python run_service.py --reload       # auto-reload for development
        """
    )

    parser.add_argument(
        '--host',
        type=str,
        default=cfg.service_host,
        help=f'bind address (default: {cfg.service_host})'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=cfg.service_port,
        help=f'listening port (default: {cfg.service_port})'
    )

    parser.add_argument(
        '--reload',
        action='store_true',
        help='enable auto-reload (development only)'
    )

    args = parser.parse_args()

    # History lives in process memory, so the service always runs one worker.
    display_host = args.host if args.host != '0.0.0.0' else 'localhost'
    logger.info(f"Weather DAIN Service is running on port {args.port}")
    logger.info(f"API docs: http://{display_host}:{args.port}/docs")

    uvicorn.run(
        "weather_dain.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=1,
        log_level="info"
    )


if __name__ == '__main__':
    main()
