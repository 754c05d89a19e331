from datetime import date, time

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from training_actions import models  # noqa: F401
from training_actions.db import get_session
from training_actions.main import app
from training_actions.models import (
    Course, CourseAction, GeneralInfo, Module, ModuleCategory, ModuleTeaching, Student, Teacher,
    TrainingSession, User, WeekDay,
)

DATABASE_URL = "sqlite://"
engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool)


@pytest.fixture(name="session")
def session_fixture():
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override
    client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def categories(session: Session):
    fm = ModuleCategory(name="Formação Modular", shorten_name="FM")
    cq = ModuleCategory(name="Competências e Qualificações", shorten_name="CQ")
    session.add_all([fm, cq])
    session.commit()
    return {"FM": fm, "CQ": cq}


@pytest.fixture
def catalog(session: Session, categories):
    """A 100h course with a 40h (FM) and a 50h (CQ) module, two teachers and a coordinator."""
    m1 = Module(name="Office tools", hours=40, categories=[categories["FM"]])
    m2 = Module(name="Customer care", hours=50, categories=[categories["CQ"]])
    course = Course(title="Administrative assistant", total_duration=100, modules=[m1, m2])
    coordinator = User(email="coord@example.com", first_name="Ana", last_name="Costa")
    t1 = Teacher(first_name="Rui", last_name="Silva")
    t2 = Teacher(first_name="Marta", last_name="Sousa")
    s1 = Student(first_name="João", last_name="Pereira")
    s2 = Student(first_name="Inês", last_name="Lopes")
    session.add_all([course, coordinator, t1, t2, s1, s2])
    session.commit()
    return {
        "course": course, "modules": [m1, m2], "coordinator": coordinator,
        "teachers": [t1, t2], "students": [s1, s2],
    }


@pytest.fixture
def action(session: Session, catalog):
    action = CourseAction(
        course=catalog["course"],
        coordinator=catalog["coordinator"],
        administration_code="ADM-2025-01",
        locality="Braga",
        start_date=date(2025, 3, 3),
        end_date=date(2025, 6, 27),
    )
    session.add(action)
    session.commit()
    return action


@pytest.fixture
def staffed_action(session: Session, catalog, action):
    m1, m2 = catalog["modules"]
    t1, t2 = catalog["teachers"]
    session.add_all([
        ModuleTeaching(action=action, module=m1, teacher=t1),
        ModuleTeaching(action=action, module=m2, teacher=t2),
    ])
    session.commit()
    session.refresh(action)
    return action


@pytest.fixture
def rates(session: Session):
    info = GeneralInfo(hour_value_teacher=20.0, hour_value_alimentation=6.0)
    session.add(info)
    session.commit()
    return info


def make_session(session: Session, teaching: ModuleTeaching, day: date, hours: float) -> TrainingSession:
    training_session = TrainingSession(
        module_teaching=teaching,
        weekday=WeekDay.from_date(day),
        scheduled_date=day,
        start=time(9, 0),
        duration_hours=hours,
    )
    session.add(training_session)
    session.commit()
    return training_session


def fill_course(session: Session, course: Course) -> Course:
    """Shrink the course budget to its assigned module hours so sessions can be scheduled."""
    course.total_duration = course.current_duration
    session.commit()
    session.refresh(course)
    return course
