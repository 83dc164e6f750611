"""
Snapshot store for the job collection.

Uses SQLite with SQLAlchemy. A snapshot holds every job together with the
application lines it has received, so that state survives between runs.
"""

from pathlib import Path
from typing import List, Sequence

from sqlalchemy import Column, ForeignKey, Integer, Text, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from .errors import StorageError
from .logger import get_logger
from .records import JobRecord
from .tokenizer import join_fields, split_line

logger = get_logger()

Base = declarative_base()


class Job(Base):
    """Stored job line."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    position = Column(Integer, nullable=False)  # order within the collection
    line = Column(Text, nullable=False)

    applications = relationship(
        "ReceivedApplication",
        back_populates="job",
        order_by="ReceivedApplication.position",
        cascade="all, delete-orphan",
    )


class ReceivedApplication(Base):
    """Application line received by a stored job."""

    __tablename__ = "received_applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False)
    position = Column(Integer, nullable=False)
    line = Column(Text, nullable=False)

    job = relationship("Job", back_populates="applications")


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()


def snapshot_exists(db_path: Path) -> bool:
    return db_path.exists()


def load_job_collection(db_path: Path) -> List[JobRecord]:
    """
    Load the stored job collection, with received applications, in stored order.

    Raises:
        StorageError: If the snapshot cannot be read
    """
    if not snapshot_exists(db_path):
        return []
    session = get_session(db_path)
    try:
        rows = session.query(Job).order_by(Job.position).all()
        jobs = []
        for row in rows:
            job = JobRecord.decode(split_line(row.line), row.position, lenient=True)
            job.received_applications = [split_line(app.line) for app in row.applications]
            jobs.append(job)
    except SQLAlchemyError as e:
        raise StorageError(f"Unable to read object from save file: {db_path}") from e
    finally:
        session.close()
    logger.debug("Snapshot loaded", path=str(db_path), jobs=len(jobs))
    return jobs


def store_job_collection(db_path: Path, jobs: Sequence[JobRecord]) -> None:
    """
    Replace the stored snapshot with `jobs`.

    Raises:
        StorageError: If the snapshot cannot be written
    """
    try:
        init_database(db_path)
        session = get_session(db_path)
    except (OSError, SQLAlchemyError) as e:
        raise StorageError(f"Unable to write object to file: {db_path}") from e
    try:
        session.query(ReceivedApplication).delete()
        session.query(Job).delete()
        for position, job in enumerate(jobs, start=1):
            row = Job(position=position, line=job.to_line())
            row.applications = [
                ReceivedApplication(position=index, line=join_fields(fields))
                for index, fields in enumerate(job.received_applications)
            ]
            session.add(row)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise StorageError(f"Unable to write object to file: {db_path}") from e
    finally:
        session.close()
    logger.debug("Snapshot stored", path=str(db_path), jobs=len(jobs))
