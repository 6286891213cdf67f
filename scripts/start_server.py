#!/usr/bin/env python3
"""
Script to start the SecurePay backend API server.
"""

import argparse
import logging

from securepay.config_loader import load_config
from securepay.dashboard.app import SecurePayDashboard
from securepay.ingestion.data_simulator import TransactionSimulator


def setup_logging(level: str = "INFO"):
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def main():
    """Main server script."""
    parser = argparse.ArgumentParser(description="Start the SecurePay backend")
    parser.add_argument("--config", help="Path to the YAML configuration file")
    parser.add_argument("--host", help="Host to bind (overrides config)")
    parser.add_argument("--port", type=int, help="Port to bind (overrides config)")
    parser.add_argument("--debug", action="store_true", help="Run Flask in debug mode")
    parser.add_argument(
        "--seed-demo-data",
        action="store_true",
        help="Populate the record store with simulated users, merchants and payments",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")

    args = parser.parse_args()

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    config_loader = load_config(args.config)
    config_loader.validate_config()
    config = config_loader.to_dict()

    dashboard = SecurePayDashboard(config)

    if args.seed_demo_data:
        simulator = TransactionSimulator(
            config_loader.get_simulator_config(), dashboard.risk_scorer
        )
        counts = simulator.populate_repository(dashboard.repository)
        logger.info(f"Seeded demo data: {counts}")

    dashboard_config = config_loader.get_dashboard_config()
    dashboard.run(
        host=args.host or dashboard_config.get("host", "0.0.0.0"),
        port=args.port or dashboard_config.get("port", 4000),
        debug=args.debug or dashboard_config.get("debug", False),
    )


if __name__ == "__main__":
    main()
