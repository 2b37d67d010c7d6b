from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional

from budget_analyzer.config import DEFAULT_CONFIG, processing_delays
from budget_analyzer.core.advisor import (
    analyze_savings,
    generate_recommendations,
    generate_recommendations_async,
    generate_spending_insights,
)
from budget_analyzer.core.categorizer import (
    categories_from_config,
    categorize_transactions,
    categorize_transactions_async,
)
from budget_analyzer.core.metrics import (
    calculate_budget_metrics,
    calculate_debt_to_income_ratio,
    calculate_emergency_fund_adequacy,
)
from budget_analyzer.core.models import (
    AdvisorReport,
    BudgetMetrics,
    CategorizedTransaction,
    EmergencyFund,
    Insight,
    SavingsAnalysis,
)
from budget_analyzer.core.normalizer import normalize_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything the presentation layer needs for one uploaded statement."""
    ledger: List[CategorizedTransaction]
    metrics: Optional[BudgetMetrics] = None
    advice: Optional[AdvisorReport] = None
    insights: List[Insight] = field(default_factory=list)
    savings: Optional[SavingsAnalysis] = None
    debt_to_income_ratio: Optional[float] = None
    emergency_fund: Optional[EmergencyFund] = None

    @property
    def has_data(self) -> bool:
        return bool(self.ledger)

    def to_dict(self) -> dict:
        return asdict(self)


def _finish(ledger, metrics, advice) -> AnalysisResult:
    return AnalysisResult(
        ledger=ledger,
        metrics=metrics,
        advice=advice,
        insights=generate_spending_insights(ledger),
        savings=analyze_savings(ledger),
        debt_to_income_ratio=calculate_debt_to_income_ratio(ledger),
        emergency_fund=calculate_emergency_fund_adequacy(ledger),
    )


def analyze_rows(rows: Iterable, config: Optional[Dict[str, object]] = None) -> AnalysisResult:
    """Run normalize -> categorize -> metrics -> recommendations synchronously."""
    cfg = config or DEFAULT_CONFIG
    categories = categories_from_config(cfg.get("categories"))

    normalized = normalize_rows(rows)
    if not normalized:
        logger.info("No valid transactions found")
        return AnalysisResult(ledger=[])

    ledger = categorize_transactions(normalized, categories)
    metrics = calculate_budget_metrics(ledger)
    advice = generate_recommendations(ledger, metrics)
    return _finish(ledger, metrics, advice)


async def analyze_rows_async(rows: Iterable, config: Optional[Dict[str, object]] = None) -> AnalysisResult:
    """Async variant of analyze_rows.

    The configured processing delays are awaited before categorization and
    before the recommendations; stages still complete in order.
    """
    cfg = config or DEFAULT_CONFIG
    categories = categories_from_config(cfg.get("categories"))
    categorize_delay, recommend_delay = processing_delays(cfg)

    normalized = normalize_rows(rows)
    if not normalized:
        logger.info("No valid transactions found")
        return AnalysisResult(ledger=[])

    ledger = await categorize_transactions_async(normalized, categories, delay=categorize_delay)
    metrics = calculate_budget_metrics(ledger)
    advice = await generate_recommendations_async(ledger, metrics, delay=recommend_delay)
    return _finish(ledger, metrics, advice)
