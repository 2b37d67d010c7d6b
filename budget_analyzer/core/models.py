# budget_analyzer/core/models.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Mapping, Optional


@dataclass(frozen=True)
class RawRow:
    """Untrusted key/value record as produced by a CSV or Excel reader."""
    fields: Mapping[str, object]

    @classmethod
    def from_mapping(cls, row) -> "RawRow":
        if isinstance(row, RawRow):
            return row
        return cls(fields=dict(row or {}))

    def is_empty(self) -> bool:
        return len(self.fields) == 0

    def lookup(self, *aliases: str):
        """Return the first non-blank value whose key matches an alias.

        Keys are compared case-insensitively and with surrounding
        whitespace removed. Aliases are tried in order, and case variants
        of one alias ("Date", "date") in the row's own column order.
        """
        for alias in aliases:
            alias = alias.lower()
            for key, value in self.fields.items():
                if str(key).strip().lower() != alias:
                    continue
                if value is None:
                    continue
                if isinstance(value, str) and not value.strip():
                    continue
                return value
        return None


@dataclass(frozen=True)
class NormalizedTransaction:
    date: str
    description: str
    amount: float
    category: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CategorizedTransaction(NormalizedTransaction):
    confidence: float = 0.3
    original_category: Optional[str] = None


@dataclass
class CategoryBucket:
    total: float = 0.0
    count: int = 0
    expenses: float = 0.0
    income: float = 0.0


@dataclass(frozen=True)
class Recommendation:
    priority: str
    type: str
    title: str
    description: str
    actions: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Summary:
    total_income: float
    total_expenses: float
    net_savings: float
    savings_rate: float
    transaction_count: int = 0


@dataclass(frozen=True)
class MonthSummary:
    month: str
    income: float
    expenses: float
    count: int


@dataclass(frozen=True)
class MonthlyAverages:
    average_monthly_income: float
    average_monthly_expenses: float
    average_monthly_savings: float
    months: List[MonthSummary]


@dataclass(frozen=True)
class CategoryTrend:
    total: float
    count: int
    average: float


@dataclass(frozen=True)
class IrregularExpense:
    category: str
    amount: float
    date: str
    description: str
    average_for_category: float


@dataclass(frozen=True)
class SpendingPatterns:
    day_of_week: Dict[str, float]
    time_of_month: Dict[str, float]
    category_trends: Dict[str, CategoryTrend]
    irregular_expenses: List[IrregularExpense]


@dataclass(frozen=True)
class BudgetMetrics:
    summary: Summary
    category_breakdown: Dict[str, CategoryBucket]
    monthly_averages: Optional[MonthlyAverages]
    spending_patterns: SpendingPatterns
    budget_health_score: int
    recommendations: List[Recommendation]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class EmergencyFund:
    monthly_expenses: float
    total_savings: float
    months_covered: float
    adequacy: str


@dataclass(frozen=True)
class BudgetRuleEntry:
    name: str
    target: float
    actual: float
    percentage: int
    status: str


@dataclass(frozen=True)
class Suggestion:
    title: str
    description: str
    potential_savings: float


@dataclass(frozen=True)
class RiskArea:
    title: str
    description: str
    current_amount: float
    recommended_amount: float


@dataclass(frozen=True)
class Opportunity:
    title: str
    description: str
    estimated_savings: float


@dataclass(frozen=True)
class AdvisorReport:
    budget_rule: List[BudgetRuleEntry]
    suggestions: List[Suggestion]
    risk_areas: List[RiskArea]
    opportunities: List[Opportunity]
    summary: Summary

    def rule(self, prefix: str) -> Optional[BudgetRuleEntry]:
        """Look up a 50/30/20 entry by the start of its name, e.g. ``"Savings"``."""
        return next((r for r in self.budget_rule if r.name.startswith(prefix)), None)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Insight:
    type: str
    title: str
    description: str
    recommendation: str


@dataclass(frozen=True)
class CategorySpend:
    category: str
    total: float
    count: int
    average_per_transaction: float


@dataclass(frozen=True)
class SavingsAnalysis:
    high_spending_categories: List[CategorySpend]
    recurring_expenses: List[CategorySpend]
    potential_savings: float
    total_expenses: float

    def to_dict(self) -> dict:
        return asdict(self)
