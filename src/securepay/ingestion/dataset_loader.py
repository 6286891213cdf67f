"""
Loader for the labelled transaction dataset and rule evaluation against it.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix

from ..models.transaction import Category, Transaction
from ..processing.merchant_verifier import MerchantVerifier
from ..processing.risk_scorer import RiskScorer

DATASET_COLUMNS = [
    "trans_hour",
    "trans_day",
    "trans_month",
    "trans_year",
    "category",
    "upi_number",
    "age",
    "trans_amount",
    "state",
    "zip",
    "fraud_risk",
]


class TransactionDatasetLoader:
    """Reads the labelled CSV dataset and scores it with the rule engine."""

    def __init__(
        self,
        risk_scorer: RiskScorer = None,
        merchant_verifier: MerchantVerifier = None,
        config: Dict[str, Any] = None,
    ):
        """Initialize the dataset loader."""
        self.risk_scorer = risk_scorer or RiskScorer()
        self.merchant_verifier = merchant_verifier or MerchantVerifier(self.risk_scorer)
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

    def load(self, path: Union[str, Path]) -> pd.DataFrame:
        """Load the dataset, dropping rows that are not valid transactions."""
        df = pd.read_csv(path, dtype={"upi_number": str, "zip": str})

        missing = [c for c in DATASET_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Dataset is missing columns: {', '.join(missing)}")

        df = df.dropna(subset=["trans_hour", "category", "age", "trans_amount", "state"])

        valid = [self._is_valid_row(row) for row in df.to_dict("records")]
        dropped = valid.count(False)
        if dropped:
            self.logger.warning(f"Dropped {dropped} invalid rows from {path}")

        df = df[pd.Series(valid, index=df.index, dtype=bool)].reset_index(drop=True)
        df["fraud_risk"] = df["fraud_risk"].fillna(0).astype(int)

        self.logger.info(f"Loaded {len(df)} transactions from {path}")
        return df

    @staticmethod
    def _is_valid_row(row: Dict[str, Any]) -> bool:
        try:
            Transaction.from_dict(row)
            return True
        except (TypeError, ValueError):
            return False

    def to_transactions(self, df: pd.DataFrame) -> List[Transaction]:
        return [Transaction.from_dict(row) for row in df.to_dict("records")]

    def score(self, df: pd.DataFrame) -> pd.DataFrame:
        """Return a copy of df with the rule engine's output columns added."""
        assessments = [self.risk_scorer.assess(t) for t in self.to_transactions(df)]

        scored = df.copy()
        scored["risk_score"] = [a.risk_score for a in assessments]
        scored["risk_level"] = [a.risk_level.value for a in assessments]
        scored["predicted_fraud"] = [int(a.is_fraud) for a in assessments]
        return scored

    def summarize_merchants(self, df: pd.DataFrame) -> List[Dict[str, Any]]:
        """Per-merchant summary keyed by UPI number."""
        summaries = []

        for upi_number, group in df.groupby("upi_number", sort=False):
            total = len(group)
            labelled_fraud_rate = float(group["fraud_risk"].mean()) if total else 0.0

            if labelled_fraud_rate < 0.3:
                labelled_status = "Verified"
            elif labelled_fraud_rate < 0.6:
                labelled_status = "Pending"
            else:
                labelled_status = "Flagged"

            first = group.iloc[0]
            verification = self.merchant_verifier.verify(self.to_transactions(group))

            summaries.append(
                {
                    "upi_number": upi_number,
                    "business_type": Category.from_value(int(first["category"])).display_name,
                    "total_transactions": total,
                    "total_volume": float(group["trans_amount"].sum()),
                    "labelled_fraud_rate": labelled_fraud_rate,
                    "labelled_status": labelled_status,
                    "verification": verification.to_dict(),
                }
            )

        return summaries

    def evaluate_rules(self, df: pd.DataFrame) -> Dict[str, Any]:
        """Compare rule-engine fraud decisions with the dataset labels."""
        scored = self.score(df)
        y_true = scored["fraud_risk"].to_numpy(dtype=int)
        y_pred = scored["predicted_fraud"].to_numpy(dtype=int)

        metrics = {}

        # Basic metrics
        metrics["samples"] = int(len(y_true))
        metrics["accuracy"] = float(np.mean(y_true == y_pred)) if len(y_true) else 0.0
        metrics["precision"] = float(
            np.sum((y_true == 1) & (y_pred == 1)) / max(1, np.sum(y_pred == 1))
        )
        metrics["recall"] = float(
            np.sum((y_true == 1) & (y_pred == 1)) / max(1, np.sum(y_true == 1))
        )
        metrics["f1_score"] = (
            2
            * (metrics["precision"] * metrics["recall"])
            / max(1e-8, metrics["precision"] + metrics["recall"])
        )

        # Confusion matrix
        tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel()
        metrics["true_negatives"] = int(tn)
        metrics["false_positives"] = int(fp)
        metrics["false_negatives"] = int(fn)
        metrics["true_positives"] = int(tp)

        # Additional metrics
        metrics["false_positive_rate"] = float(fp / max(1, fp + tn))
        metrics["false_negative_rate"] = float(fn / max(1, fn + tp))

        metrics["risk_level_distribution"] = {
            level: int(count)
            for level, count in scored["risk_level"].value_counts().items()
        }

        self.logger.info(
            f"Rule evaluation on {metrics['samples']} rows: "
            f"precision={metrics['precision']:.3f} recall={metrics['recall']:.3f}"
        )
        return metrics
