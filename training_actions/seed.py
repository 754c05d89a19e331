from sqlmodel import Session, select
from .config import settings
from .db import create_db_and_tables, engine
from .models import GeneralInfo


def seed_rates(session: Session) -> GeneralInfo:
    """
    Creates the global rate record from the configured defaults if it doesn't exist yet.
    """
    info = session.exec(select(GeneralInfo).order_by(GeneralInfo.id)).first()
    if info:
        print("General information already exists.")
        return info

    print("Creating general information...")
    info = GeneralInfo(
        hour_value_teacher=settings.DEFAULT_TEACHER_HOUR_RATE,
        hour_value_alimentation=settings.DEFAULT_STUDENT_HOUR_RATE,
    )
    session.add(info)
    session.commit()
    session.refresh(info)
    print("General information created successfully.")
    return info


def main():
    create_db_and_tables()
    with Session(engine) as session:
        seed_rates(session)


if __name__ == "__main__":
    main()
