"""CLI entry point for the serial bridge."""

from __future__ import annotations

import argparse
import logging

import serial

from common.config import get_settings

from .backend_client import BackendClient
from .bridge import SerialBridge

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - BRIDGE - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    p = argparse.ArgumentParser(description="Serial → HTTP bridge for SchistoGuard sensors")
    p.add_argument("--port", default=settings.bridge_serial_port, help="serial device (COM6, /dev/ttyUSB0)")
    p.add_argument("--baud", type=int, default=settings.bridge_baud_rate)
    p.add_argument("--backend-url", default=settings.bridge_backend_url)
    p.add_argument(
        "--alert-interval",
        type=float,
        default=settings.bridge_alert_push_interval_seconds,
        help="seconds between alert pushes to the serial port",
    )
    p.add_argument("--timeout", type=float, default=settings.bridge_http_timeout_seconds)
    args = p.parse_args()

    logger.info("Serial bridge started")
    logger.info(
        "Config: port=%s baud=%d backend=%s alert_interval=%.1fs",
        args.port,
        args.baud,
        args.backend_url,
        args.alert_interval,
    )

    client = BackendClient(args.backend_url, timeout=args.timeout)
    try:
        # timeout=1 para que readline() no bloquee indefinidamente y stop() responda
        port = serial.Serial(args.port, args.baud, timeout=1)
    except serial.SerialException as e:
        logger.error("No se pudo abrir el puerto %s: %s", args.port, e)
        raise SystemExit(1)

    bridge = SerialBridge(port, client, alert_push_interval=args.alert_interval)
    try:
        bridge.run()
    except KeyboardInterrupt:
        logger.info("Interrumpido, cerrando...")
        bridge.stop()
    finally:
        port.close()
        client.close()
        logger.info("Stats: %s", bridge.stats)


if __name__ == "__main__":
    main()
