import argparse
from pathlib import Path
from typing import List

from . import __version__
from .database import load_job_collection, snapshot_exists, store_job_collection
from .env import get_settings, load_env
from .errors import RecordError, StorageError
from .loader import load_candidates, load_jobs
from .logger import get_logger
from .matching import candidate_pool, match_jobs
from .ordering import (
    FilterType,
    application_count,
    available_jobs,
    filter_applications,
    received_candidates,
    sort_for_listing,
)
from .records import CandidateRecord, JobRecord
from .report import render_candidates, render_jobs, render_matches
from .schema import APPLICATION_DATASET, JOB_DATASET, Subject
from .storage import append_record, apply_to_jobs, ensure_dataset, parse_selection

logger = get_logger()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def current_jobs(args: argparse.Namespace) -> List[JobRecord]:
    """Jobs from the snapshot if one was saved, otherwise from the jobs dataset."""
    if snapshot_exists(args.db):
        return load_job_collection(args.db)
    return load_jobs(args.jobs_file).records


def print_lines(lines: List[str]) -> None:
    for line in lines:
        print(line)


def cmd_jobs(args: argparse.Namespace) -> None:
    jobs = current_jobs(args)
    print(f"{application_count(jobs)} applications received.")
    print_lines(render_jobs(jobs, [candidate_pool(job) for job in jobs]))


def cmd_applicants(args: argparse.Namespace) -> None:
    candidates = load_candidates(args.applications_file).records
    print_lines(render_candidates(sort_for_listing(candidates)))


def cmd_filter(args: argparse.Namespace) -> None:
    candidates = received_candidates(current_jobs(args))
    print_lines(render_candidates(filter_applications(candidates, args.by)))


def cmd_match(args: argparse.Namespace) -> None:
    jobs = current_jobs(args)
    print_lines(render_matches(match_jobs(jobs), len(jobs)))


def cmd_add_job(args: argparse.Namespace) -> None:
    try:
        job = JobRecord.create(
            title=args.title,
            description=args.description,
            degree=args.degree,
            salary=args.salary,
            start_date=args.start_date,
        )
    except RecordError as e:
        raise SystemExit(f"Invalid {e.field}: {e.message}")

    jobs = current_jobs(args)
    ensure_dataset(args.jobs_file, JOB_DATASET)
    append_record(args.jobs_file, job)
    jobs.append(job)
    store_job_collection(args.db, jobs)
    logger.info("Job created", title=job.title, created_at=job.created_at)
    print(f"Job created: {job.title_display}")


def cmd_apply(args: argparse.Namespace) -> None:
    grades = {
        Subject.JAVA: args.comp90041,
        Subject.ALGORITHMS: args.comp90038,
        Subject.IT: args.comp90007,
        Subject.DATABASES: args.info90002,
    }
    try:
        candidate = CandidateRecord.create(
            last_name=args.lastname,
            first_name=args.firstname,
            age=args.age,
            career_summary=args.summary,
            gender=args.gender,
            degree=args.degree,
            grades=grades,
            salary_expectation=args.salary,
            availability=args.availability,
        )
    except RecordError as e:
        raise SystemExit(f"Invalid {e.field}: {e.message}")

    jobs = current_jobs(args)
    try:
        indexes = parse_selection(args.jobs, len(jobs))
    except ValueError as e:
        raise SystemExit(f"Invalid job selection: {e}")

    ensure_dataset(args.applications_file, APPLICATION_DATASET)
    append_record(args.applications_file, candidate)
    outcome = apply_to_jobs(candidate, jobs, indexes)
    store_job_collection(args.db, jobs)
    remaining = available_jobs(jobs, [jobs[i] for i in indexes])
    logger.info("Application submitted", lastname=candidate.last_name, **outcome)
    print(f"Applied to {outcome['applied']} job(s). {outcome['total_applications']} applications received.")
    print(f"{len(remaining)} other job(s) available.")


def main():
    load_env()
    settings = get_settings()

    parser = argparse.ArgumentParser(prog="jobmatch", description="Job applications matchmaking")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--jobs-file", type=Path, default=settings.jobs_file, help=f"Jobs dataset (default: {settings.jobs_file})")
    parser.add_argument("--applications-file", type=Path, default=settings.applications_file, help=f"Applications dataset (default: {settings.applications_file})")
    parser.add_argument("--db", type=Path, default=settings.db_path, help=f"Snapshot database (default: {settings.db_path})")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=settings.log_level,
        choices=LOG_LEVELS,
        help="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    parser.add_argument("--metrics", action="store_true", help="Log load and match metrics on exit")

    subparsers = parser.add_subparsers(dest="command")
    jbs = subparsers.add_parser("jobs", help="List jobs and the applications they received")
    jbs.set_defaults(func=cmd_jobs)

    apl = subparsers.add_parser("applicants", help="List applicants ordered by availability")
    apl.set_defaults(func=cmd_applicants)

    flt = subparsers.add_parser("filter", help="List received applications ordered by a filter")
    flt.add_argument("--by", required=True, choices=[f.value for f in FilterType], help="Ordering to apply")
    flt.set_defaults(func=cmd_filter)

    mtc = subparsers.add_parser("match", help="Match each job with its best applicant")
    mtc.set_defaults(func=cmd_match)

    add = subparsers.add_parser("add-job", help="Create a job and append it to the jobs dataset")
    add.add_argument("--title", required=True, help="Position title")
    add.add_argument("--description", default="", help="Position description")
    add.add_argument("--degree", default="", help="Minimum degree (Bachelor, Master, PHD)")
    add.add_argument("--salary", default="", help="Salary ($ per annum)")
    add.add_argument("--start-date", default="", help="Start date (dd/mm/yy)")
    add.set_defaults(func=cmd_add_job)

    app = subparsers.add_parser("apply", help="Submit an application to one or more jobs")
    app.add_argument("--lastname", required=True)
    app.add_argument("--firstname", required=True)
    app.add_argument("--age", required=True)
    app.add_argument("--summary", default="", help="Career summary")
    app.add_argument("--gender", default="", help="female, male or other")
    app.add_argument("--degree", default="", help="Highest degree (Bachelor, Master, PHD)")
    for subject in Subject:
        app.add_argument(f"--{subject.value.lower()}", default="", help=f"Grade for {subject.value}")
    app.add_argument("--salary", default="", help="Salary expectations ($ per annum)")
    app.add_argument("--availability", default="", help="Available from (dd/mm/yy)")
    app.add_argument("--jobs", default="", help="Comma-separated job numbers, as listed by 'jobs'")
    app.set_defaults(func=cmd_apply)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid log level: {args.log_level}")
    logger.set_level(args.log_level)

    if hasattr(args, "func"):
        try:
            args.func(args)
        except StorageError as e:
            raise SystemExit(str(e))
        if args.metrics:
            logger.log_metrics_summary()
        return

    parser.print_help()


if __name__ == "__main__":
    main()
