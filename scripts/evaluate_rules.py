#!/usr/bin/env python3
"""
Script to evaluate the fraud rules against a labelled transaction dataset.
"""

import argparse
import json
import logging
import sys

from securepay.config_loader import load_config
from securepay.ingestion.dataset_loader import TransactionDatasetLoader
from securepay.processing.merchant_verifier import MerchantVerifier
from securepay.processing.risk_scorer import RiskScorer


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def main():
    """Main evaluation script."""
    parser = argparse.ArgumentParser(
        description="Evaluate fraud rules against a labelled CSV dataset"
    )
    parser.add_argument("dataset", help="Path to the transaction CSV")
    parser.add_argument("--config", help="Path to the YAML configuration file")
    parser.add_argument(
        "--merchants",
        action="store_true",
        help="Also print a per-merchant verification summary",
    )
    parser.add_argument("--output", help="Write the report as JSON to this file")

    args = parser.parse_args()

    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        config_loader = load_config(args.config)
        risk_scorer = RiskScorer(config_loader.get_risk_scorer_config())
        merchant_verifier = MerchantVerifier(
            risk_scorer, config_loader.get_merchant_verifier_config()
        )
        loader = TransactionDatasetLoader(risk_scorer, merchant_verifier)

        df = loader.load(args.dataset)
        report = {"metrics": loader.evaluate_rules(df)}
        if args.merchants:
            report["merchants"] = loader.summarize_merchants(df)

        metrics = report["metrics"]
        logger.info("Evaluation completed")
        logger.info(f"Samples: {metrics['samples']}")
        logger.info(f"Accuracy: {metrics['accuracy']:.4f}")
        logger.info(f"Precision: {metrics['precision']:.4f}")
        logger.info(f"Recall: {metrics['recall']:.4f}")
        logger.info(f"F1 Score: {metrics['f1_score']:.4f}")
        logger.info(f"False positive rate: {metrics['false_positive_rate']:.4f}")

        if args.output:
            with open(args.output, "w") as f:
                json.dump(report, f, indent=2)
            logger.info(f"Report written to {args.output}")

    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Evaluation failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
