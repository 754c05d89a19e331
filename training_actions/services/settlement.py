"""Turn recorded attendance into hour totals and monetary amounts.

Everything here is a pure read over already loaded entities: nothing is
written, and the hourly rate always comes in from the caller.

Students are paid per credited hour of every participation marked present;
teachers per scheduled hour of every session they lectured. Hours are
bucketed by the short name of the taught module's category. Amounts are
rounded once, on the accumulated hours, never per session.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from ..models import ActionEnrollment, ModuleTeaching, PresenceEnum
from ..utils import round_money

Period = Tuple[date, date]


@dataclass(frozen=True)
class SettlementRates:
    teacher_hour_rate: float
    student_hour_rate: float


@dataclass
class SettlementResult:
    category_hours: Dict[str, float]
    category_totals: Dict[str, float]
    total_hours: float
    total_days: int
    calculated_total: float


@dataclass(frozen=True)
class _Fact:
    session_id: int
    category: Optional[str]
    hours: float


def _in_period(day: date, period: Optional[Period]) -> bool:
    if period is None:
        return True
    first_day, last_day = period
    return first_day <= day <= last_day


def _settle(facts: List[_Fact], hourly_rate: float) -> SettlementResult:
    category_hours: Dict[str, float] = {}
    for fact in facts:
        if fact.category is None:
            continue
        category_hours[fact.category] = category_hours.get(fact.category, 0.0) + fact.hours

    total_hours = sum(f.hours for f in facts)
    return SettlementResult(
        category_hours=category_hours,
        category_totals={k: round_money(h * hourly_rate) for k, h in category_hours.items()},
        total_hours=total_hours,
        # Participations are unique per session, so this equals the row count.
        total_days=len({f.session_id for f in facts}),
        calculated_total=round_money(total_hours * hourly_rate),
    )


def compute_enrollment_settlement(
    enrollment: ActionEnrollment, hourly_rate: float, period: Optional[Period] = None
) -> SettlementResult:
    facts = [
        _Fact(p.session_id, p.session.module_teaching.module.category_key, p.attendance)
        for p in enrollment.participations
        if p.presence == PresenceEnum.PRESENT and _in_period(p.session.scheduled_date, period)
    ]
    return _settle(facts, hourly_rate)


def compute_teaching_settlement(
    teaching: ModuleTeaching, hourly_rate: float, period: Optional[Period] = None
) -> SettlementResult:
    category = teaching.module.category_key
    facts = [
        _Fact(s.id, category, s.duration_hours)
        for s in teaching.sessions
        if s.teacher_presence == PresenceEnum.PRESENT and _in_period(s.scheduled_date, period)
    ]
    return _settle(facts, hourly_rate)


def compute_settlement(
    target: Union[ActionEnrollment, ModuleTeaching], hourly_rate: float, period: Optional[Period] = None
) -> SettlementResult:
    if isinstance(target, ActionEnrollment):
        return compute_enrollment_settlement(target, hourly_rate, period)
    if isinstance(target, ModuleTeaching):
        return compute_teaching_settlement(target, hourly_rate, period)
    raise TypeError(f"Cannot settle {type(target).__name__}")


@dataclass
class SettlementReport:
    """Per-row results plus independently accumulated action totals.

    Category amounts and the grand total are each rounded on their own, so
    their sum may drift from ``total_payment`` by a few cents.
    """
    categories: List[str]
    rows: List[Tuple[Any, SettlementResult]] = field(default_factory=list)
    category_hours: Dict[str, float] = field(default_factory=dict)
    _category_amounts: Dict[str, float] = field(default_factory=dict, repr=False)
    total_hours: float = 0.0
    total_days: int = 0
    _payment: float = field(default=0.0, repr=False)

    def __post_init__(self):
        for category in self.categories:
            self.category_hours.setdefault(category, 0.0)
            self._category_amounts.setdefault(category, 0.0)

    def add(self, owner: Any, result: SettlementResult) -> None:
        self.rows.append((owner, result))
        for category, hours in result.category_hours.items():
            self.category_hours[category] = self.category_hours.get(category, 0.0) + hours
        for category, amount in result.category_totals.items():
            self._category_amounts[category] = self._category_amounts.get(category, 0.0) + amount
        self.total_hours += result.total_hours
        self.total_days += result.total_days
        self._payment += result.calculated_total

    @property
    def category_totals(self) -> Dict[str, float]:
        return {k: round_money(v) for k, v in self._category_amounts.items()}

    @property
    def total_payment(self) -> float:
        return round_money(self._payment)


def build_report(
    targets: Iterable[Union[ActionEnrollment, ModuleTeaching]],
    hourly_rate: float,
    categories: Iterable[str] = (),
    period: Optional[Period] = None,
) -> SettlementReport:
    """Settle every target; with a period, rows without days are left out."""
    report = SettlementReport(categories=list(categories))
    for target in targets:
        result = compute_settlement(target, hourly_rate, period)
        if period is not None and result.total_days == 0:
            continue
        report.add(target, result)
    return report
