import logging
from typing import Iterable, Optional

from ..errors import ValidationError
from ..models import Course, Module

log = logging.getLogger(__name__)


def can_add_module(running_total: float, candidate_hours: float, total_budget: float) -> bool:
    """True iff the candidate fits: ``running_total + candidate_hours <= total_budget``."""
    return running_total + candidate_hours <= total_budget


def usage_fraction(running_total: float, total_budget: float) -> float:
    if total_budget <= 0:
        return 1.0 if running_total > 0 else 0.0
    return running_total / total_budget


def budget_exceeded_error(candidate_hours: float, running_total: float, total_budget: float) -> ValidationError:
    return ValidationError(
        f"Total duration exceeded. {candidate_hours:g}h exceeds the course hour limit "
        f"({usage_fraction(running_total, total_budget):.0%} of {total_budget:g}h already used)."
    )


def validate_module_addition(course: Course, module: Module, running_total: Optional[float] = None) -> bool:
    if running_total is None:
        running_total = course.current_duration
    return can_add_module(running_total, module.hours, course.total_duration)


def check_module_list(total_budget: float, modules: Iterable[Module]) -> float:
    """Validate a full module list against a budget, starting from zero.

    Returns the resulting total; raises ValidationError on the first module
    that does not fit.
    """
    running_total = 0.0
    for module in modules:
        if not can_add_module(running_total, module.hours, total_budget):
            log.warning("Module %s (%sh) exceeds budget %sh at %sh used", module.id, module.hours, total_budget, running_total)
            raise budget_exceeded_error(module.hours, running_total, total_budget)
        running_total += module.hours
    return running_total
