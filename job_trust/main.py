"""CLI entry point — database setup, score recomputes and stats."""

import argparse
import logging
import sys

from job_trust.config import load_config, validate_config
from job_trust.models import create_db_engine, init_db, make_session_factory
from job_trust.storage.repository import trust_uow
from job_trust.trust.service import recompute_all_jobs, update_job_authenticity_score
from job_trust.utils.logging_config import setup_logging

logger = logging.getLogger("job_trust")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Job Trust - feedback-driven authenticity scores for job postings",
    )
    parser.add_argument(
        "--config", default="config.yaml",
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "--init-db", action="store_true",
        help="Create database tables and exit",
    )
    parser.add_argument(
        "--recompute", type=int, metavar="JOB_ID",
        help="Recompute the trust score of one job",
    )
    parser.add_argument(
        "--recompute-all", action="store_true",
        help="Recompute the trust score of every reviewed job",
    )
    parser.add_argument(
        "--stats", action="store_true",
        help="Print trust statistics and exit",
    )
    return parser.parse_args(argv)


def print_stats(stats: dict):
    """Print trust statistics."""
    print("\n=== Job Trust Statistics ===")
    print(f"Job postings: {stats['total_jobs']}")
    print(f"Shadow postings: {stats['shadow_jobs']}")
    print(f"Locked postings: {stats['locked_jobs']}")
    print(f"Feedback rows: {stats['total_feedback']}")

    if stats.get("by_feedback_type"):
        print("\nFeedback by type:")
        for feedback_type, count in sorted(stats["by_feedback_type"].items()):
            print(f"  {feedback_type}: {count}")

    print("\nJobs by badge:")
    for badge, count in stats["by_badge"].items():
        print(f"  {badge}: {count}")
    print()


def main(argv=None):
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        setup_logging(config.log_dir, config.log_level)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for w in validate_config(config):
        logger.warning("Config: %s", w)

    engine = create_db_engine(config.database.url)
    session_factory = make_session_factory(engine)

    if args.init_db:
        init_db(engine)
        logger.info("Database tables created at %s", engine.url.render_as_string(hide_password=True))
        return

    try:
        if args.stats:
            with trust_uow(session_factory) as repo:
                print_stats(repo.get_stats())
            return

        if args.recompute is not None:
            with trust_uow(session_factory) as repo:
                summary = update_job_authenticity_score(repo, args.recompute)
            if summary is None:
                print(f"Job {args.recompute} was not updated (missing or locked).")
            else:
                print(
                    f"Job {args.recompute}: score={summary.score} "
                    f"reviews={summary.review_count} badges={','.join(summary.badges) or '-'}"
                )
            return

        if args.recompute_all:
            with trust_uow(session_factory) as repo:
                result = recompute_all_jobs(repo)
            print(f"Updated {result['updated']}, skipped {result['skipped']}, failed {result['failed']}")
            if result["failed"]:
                sys.exit(1)
            return
    except Exception:
        logger.exception("Command failed")
        sys.exit(1)

    print("Nothing to do. See --help.")


if __name__ == "__main__":
    main()
