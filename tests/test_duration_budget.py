import pytest
from sqlmodel import Session

from training_actions.errors import ConflictError, NotFoundError, ValidationError
from training_actions.models import Module, StatusEnum
from training_actions.services import course_service
from training_actions.services.duration_budget import (
    can_add_module, check_module_list, validate_module_addition,
)


@pytest.mark.parametrize(
    "running_total, candidate, budget, expected",
    [
        (0, 40, 100, True),
        (40, 50, 100, True),
        (90, 10, 100, True),
        (90, 11, 100, False),
        (90, 15, 100, False),
        (0, 0, 0, True),
    ],
)
def test_can_add_module(running_total, candidate, budget, expected):
    assert can_add_module(running_total, candidate, budget) is expected


def test_check_module_list_reports_attempted_hours_and_usage():
    modules = [Module(name="a", hours=40), Module(name="b", hours=50), Module(name="c", hours=15)]
    with pytest.raises(ValidationError) as exc:
        check_module_list(100, modules)
    assert "15h" in exc.value.message
    assert "90%" in exc.value.message


def test_check_module_list_recomputes_from_zero():
    assert check_module_list(100, [Module(name="a", hours=60), Module(name="b", hours=40)]) == 100


def test_create_course_then_overflowing_module_is_rejected(session: Session):
    m40 = Module(name="Spreadsheets", hours=40)
    m50 = Module(name="Accounting", hours=50)
    m15 = Module(name="Ethics", hours=15)
    session.add_all([m40, m50, m15])
    session.commit()

    course = course_service.create_course(session, "Bookkeeping", 100, [m40.id, m50.id])
    assert course.current_duration == 90
    assert validate_module_addition(course, m15) is False

    with pytest.raises(ValidationError):
        course_service.assign_module(session, course.id, m15.id)
    session.refresh(course)
    assert [m.id for m in course.modules] == [m40.id, m50.id]


def test_create_course_rejects_list_over_budget(session: Session):
    m1 = Module(name="A", hours=70)
    m2 = Module(name="B", hours=40)
    session.add_all([m1, m2])
    session.commit()
    with pytest.raises(ValidationError):
        course_service.create_course(session, "Too long", 100, [m1.id, m2.id])


def test_create_course_duplicate_title(session: Session):
    course_service.create_course(session, "Welding", 50)
    with pytest.raises(ConflictError):
        course_service.create_course(session, "Welding", 80)


def test_assign_module_guards(session: Session, catalog):
    course = catalog["course"]
    inactive = Module(name="Retired", hours=1, is_active=False)
    session.add(inactive)
    session.commit()

    with pytest.raises(NotFoundError):
        course_service.assign_module(session, course.id, 999)
    with pytest.raises(ValidationError):
        course_service.assign_module(session, course.id, inactive.id)
    with pytest.raises(ConflictError):
        course_service.assign_module(session, course.id, catalog["modules"][0].id)


def test_assign_module_exact_fit_and_closed_course(session: Session, catalog):
    course = catalog["course"]
    ten = Module(name="Safety", hours=10)
    session.add(ten)
    session.commit()

    course = course_service.assign_module(session, course.id, ten.id)
    assert course.remaining_duration == 0

    course.status = StatusEnum.COMPLETED
    session.commit()
    extra = Module(name="Extra", hours=0)
    session.add(extra)
    session.commit()
    with pytest.raises(ValidationError):
        course_service.assign_module(session, course.id, extra.id)


def test_set_course_modules_replaces_list(session: Session, catalog):
    course = catalog["course"]
    m1, m2 = catalog["modules"]
    big = Module(name="Big", hours=60)
    session.add(big)
    session.commit()

    course = course_service.set_course_modules(session, course.id, [m1.id, big.id])
    assert {m.id for m in course.modules} == {m1.id, big.id}
    assert course.current_duration == 100

    with pytest.raises(ValidationError):
        course_service.set_course_modules(session, course.id, [m2.id, big.id])
    with pytest.raises(ValidationError):
        course_service.set_course_modules(session, course.id, [m1.id, m1.id])
