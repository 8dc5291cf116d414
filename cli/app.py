from cli.console import report_failure
from cli.repair_flow import run_repair
from cli.review_flow import ReviewRequest, run_review
from cli.setup_flow import run_setup
from observability.logger_factory import get_logger
from workflow.errors import ReviewError

logger = get_logger("cli.app")


def run(args, config):
    """Dispatch parsed arguments and map the outcome to an exit status."""
    try:
        if args.setup:
            run_setup(config)
            return 0
        if args.repair:
            run_repair(config)
            return 0

        request = ReviewRequest(
            target_branch=args.target,
            save_to=args.save_to,
            no_save=args.no_save,
            convention_file=args.convention,
            language=args.language,
        )
        outcome = run_review(config, request)
    except ReviewError as exc:
        logger.debug("review_failed", error=type(exc).__name__)
        report_failure(exc)
        return 1

    logger.debug("review_finished", status=outcome.status)
    return 0


__all__ = ["run"]
