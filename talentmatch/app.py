import argparse
import json
from pathlib import Path

from .env import load_env

from . import __version__
from .config import Settings
from .database import init_database, get_session
from .logger import get_logger, reset_logger
from .matching import InvalidInput, results_to_payload
from .schema import RecordValidationError, ensure_valid, validate_candidate, validate_job
from .search import search_candidates
from .service import match_candidates_for_job, match_payload
from .stats import dashboard_stats
from .storage import (
    RecordNotFound,
    create_candidate,
    create_job,
    delete_candidate,
    delete_job,
    list_candidates,
    list_jobs,
    require_candidate,
    require_job,
    to_record,
    update_candidate,
    update_job,
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _read_json(path_str: str):
    input_path = Path(path_str)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise SystemExit(f"Invalid JSON in {input_path}: {e}")


def _open_session(settings: Settings):
    init_database(settings.db_path)
    return get_session(settings.db_path)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def cmd_match(args: argparse.Namespace) -> None:
    payload = _read_json(args.input)
    try:
        results = match_payload(payload, args.settings)
    except InvalidInput as e:
        raise SystemExit(str(e))
    _print_json(results_to_payload(results))


def cmd_match_job(args: argparse.Namespace) -> None:
    session = _open_session(args.settings)
    try:
        results = match_candidates_for_job(
            session, args.job_id, settings=args.settings, persist=args.persist, limit=args.top
        )
    except RecordNotFound as e:
        raise SystemExit(str(e))
    finally:
        session.close()
    if not results:
        print("No candidates to match.")
        return
    for rank, result in enumerate(results, 1):
        print(f"#{rank} {result.match_score:>3}  {result.candidate_name} ({result.candidate_id})")
        for reason in result.reasons:
            print(f"       - {reason}")


def cmd_validate(args: argparse.Namespace) -> None:
    record = _read_json(args.input)
    validator = validate_candidate if args.kind == "candidate" else validate_job
    errors = validator(record)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def _add(args: argparse.Namespace, kind: str, create) -> None:
    record = _read_json(args.input)
    try:
        ensure_valid(kind, record)
    except RecordValidationError as e:
        raise SystemExit(str(e))
    session = _open_session(args.settings)
    try:
        row = create(session, record)
        print(f"Created {kind}: {row.id}")
    finally:
        session.close()
    get_logger().record_change(kind, "created")


def cmd_add_candidate(args: argparse.Namespace) -> None:
    _add(args, "candidate", create_candidate)


def cmd_add_job(args: argparse.Namespace) -> None:
    _add(args, "job", create_job)


def _update(args: argparse.Namespace, kind: str, require, update) -> None:
    updates = _read_json(args.input)
    if not isinstance(updates, dict):
        raise SystemExit("Updates must be a JSON object")
    session = _open_session(args.settings)
    try:
        current = to_record(require(session, args.id))
        ensure_valid(kind, {**current, **updates})
        changed = update(session, args.id, updates)
    except (RecordNotFound, RecordValidationError) as e:
        raise SystemExit(str(e))
    finally:
        session.close()
    if not changed:
        print("Status: no-change")
        return
    get_logger().record_change(kind, "updated")
    print(f"Status: updated ({', '.join(sorted(changed))})")


def cmd_update_candidate(args: argparse.Namespace) -> None:
    _update(args, "candidate", require_candidate, update_candidate)


def cmd_update_job(args: argparse.Namespace) -> None:
    _update(args, "job", require_job, update_job)


def _delete(args: argparse.Namespace, kind: str, delete) -> None:
    session = _open_session(args.settings)
    try:
        delete(session, args.id)
    except RecordNotFound as e:
        raise SystemExit(str(e))
    finally:
        session.close()
    get_logger().record_change(kind, "deleted")
    print(f"Deleted {kind}: {args.id}")


def cmd_delete_candidate(args: argparse.Namespace) -> None:
    _delete(args, "candidate", delete_candidate)


def cmd_delete_job(args: argparse.Namespace) -> None:
    _delete(args, "job", delete_job)


def cmd_list_candidates(args: argparse.Namespace) -> None:
    session = _open_session(args.settings)
    try:
        candidates = list_candidates(session)
    finally:
        session.close()
    if not candidates:
        print("No candidates in store.")
        return
    print(f"Found {len(candidates)} candidates:\n")
    for c in candidates:
        _print_candidate(c)


def cmd_list_jobs(args: argparse.Namespace) -> None:
    session = _open_session(args.settings)
    try:
        jobs = list_jobs(session)
    finally:
        session.close()
    if not jobs:
        print("No jobs in store.")
        return
    print(f"Found {len(jobs)} jobs:\n")
    for job in jobs:
        band = f"{job.min_experience}+" if job.max_experience is None else f"{job.min_experience}-{job.max_experience}"
        print(f"ID: {job.id}")
        print(f"  Title: {job.title}")
        print(f"  Skills: {', '.join(job.required_skills or [])}")
        print(f"  Experience: {band} years")
        print(f"  Location: {job.location or 'any'}")
        print(f"  Status: {job.status}")
        print()


def cmd_search(args: argparse.Namespace) -> None:
    skills = [s.strip() for s in args.skills.split(",") if s.strip()] if args.skills else None
    session = _open_session(args.settings)
    try:
        found = search_candidates(
            list_candidates(session),
            query=args.query,
            experience_range=(args.min_exp, args.max_exp),
            skills=skills,
        )
    finally:
        session.close()
    if not found:
        print("No matching candidates. Try adjusting your search criteria.")
        return
    print(f"Found {len(found)} matching candidates:\n")
    for c in found:
        _print_candidate(c)


def cmd_stats(args: argparse.Namespace) -> None:
    session = _open_session(args.settings)
    try:
        _print_json(dashboard_stats(list_candidates(session)))
    finally:
        session.close()


def _print_candidate(c) -> None:
    print(f"ID: {c.id}")
    print(f"  Name: {c.full_name}")
    print(f"  Email: {c.email}")
    print(f"  Location: {c.location or '-'}")
    print(f"  Experience: {c.total_experience or '-'}")
    print(f"  Skills: {', '.join(c.skills or [])}")
    print(f"  Stage: {c.stage}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="talentmatch", description="TalentMatch: candidate tracking and job matching")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--db", help="Path to SQLite database (or set TALENTMATCH_DB_PATH)")
    parser.add_argument("--log-level", help="Log level (or set TALENTMATCH_LOG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command")

    mt = subparsers.add_parser("match", help="Rank candidates in a {job, candidates} JSON payload")
    mt.add_argument("--input", required=True, help="Path to payload JSON")
    mt.add_argument("--strict-skills", action="store_true", help="Match skills exactly instead of by containment")
    mt.add_argument("--workers", type=int, help="Score candidates on N threads")
    mt.set_defaults(func=cmd_match)

    mj = subparsers.add_parser("match-job", help="Rank stored candidates against a stored job")
    mj.add_argument("--job-id", required=True, help="Job id")
    mj.add_argument("--persist", action="store_true", help="Store scores on job applications")
    mj.add_argument("--top", type=_positive_int, help="Only show the top N candidates")
    mj.add_argument("--strict-skills", action="store_true", help="Match skills exactly instead of by containment")
    mj.add_argument("--workers", type=int, help="Score candidates on N threads")
    mj.set_defaults(func=cmd_match_job)

    val = subparsers.add_parser("validate", help="Validate a candidate or job JSON record")
    val.add_argument("--kind", required=True, choices=["candidate", "job"], help="Record kind")
    val.add_argument("--input", required=True, help="Path to record JSON")
    val.set_defaults(func=cmd_validate)

    for kind, add, update, delete in (
        ("candidate", cmd_add_candidate, cmd_update_candidate, cmd_delete_candidate),
        ("job", cmd_add_job, cmd_update_job, cmd_delete_job),
    ):
        p = subparsers.add_parser(f"add-{kind}", help=f"Create a {kind} from JSON")
        p.add_argument("--input", required=True, help=f"Path to {kind} JSON")
        p.set_defaults(func=add)

        p = subparsers.add_parser(f"update-{kind}", help=f"Update a {kind} from a JSON object of changes")
        p.add_argument("--id", required=True, help=f"{kind.capitalize()} id")
        p.add_argument("--input", required=True, help="Path to updates JSON")
        p.set_defaults(func=update)

        p = subparsers.add_parser(f"delete-{kind}", help=f"Delete a {kind}")
        p.add_argument("--id", required=True, help=f"{kind.capitalize()} id")
        p.set_defaults(func=delete)

    lc = subparsers.add_parser("list-candidates", help="List all stored candidates")
    lc.set_defaults(func=cmd_list_candidates)

    lj = subparsers.add_parser("list-jobs", help="List all stored jobs")
    lj.set_defaults(func=cmd_list_jobs)

    sr = subparsers.add_parser("search", help="Search stored candidates")
    sr.add_argument("--query", help="Keyword (name, skill, company or position)")
    sr.add_argument("--min-exp", type=float, default=0, help="Minimum years of experience")
    sr.add_argument("--max-exp", type=float, help="Maximum years of experience")
    sr.add_argument("--skills", help="Comma-separated skills; any of them matches")
    sr.set_defaults(func=cmd_search)

    st = subparsers.add_parser("stats", help="Show dashboard statistics")
    st.set_defaults(func=cmd_stats)

    return parser


def main(argv=None):
    # Load .env if present (TALENTMATCH_DB_PATH, TALENTMATCH_STRICT_SKILLS, etc.)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise SystemExit(str(e))
    args.settings = settings.with_overrides(
        db_path=args.db,
        log_level=args.log_level.upper() if args.log_level else None,
        strict_skills=True if getattr(args, "strict_skills", False) else None,
        max_workers=getattr(args, "workers", None),
    )

    if args.settings.log_level not in LOG_LEVELS:
        raise SystemExit(f"Unknown log level: {args.settings.log_level}")
    reset_logger()
    logger = get_logger(level=args.settings.log_level, log_dir=args.settings.log_dir)

    if hasattr(args, "func"):
        args.func(args)
        if args.settings.log_level == "DEBUG":
            logger.log_metrics_summary()
        return

    parser.print_help()


if __name__ == "__main__":
    main()
