"""Application entry point and orchestration for the community health report."""

from __future__ import annotations

import logging
import sys

from .cli import build_window, parse_args
from .config import load_config
from .errors import ConfigurationError, TransportError
from .github_client import GitHubClient
from .membership import MembershipCache, MembershipClassifier
from .pipeline import generate_metrics
from .report import generate_report

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def orchestrate_report_generation() -> int:
    """Run one full report and map failures to an exit code.

    The first configuration or GitHub error aborts the run; nothing partial is
    printed. Returns ``EXIT_SUCCESS`` or ``EXIT_FAILURE``.
    """
    try:
        args = parse_args()
        configure_logging(verbose=args.verbose)

        config = load_config(
            owner=args.owner,
            rfc_repository=args.rfc_repo,
            repositories=args.repos,
            internal_organizations=args.internal_orgs,
            window=build_window(args),
            max_pages=args.max_pages,
            legacy_median=args.legacy_median,
        )

        github_client = GitHubClient(config=config)
        classifier = MembershipClassifier(
            client=github_client,
            internal_organizations=config.internal_organizations,
            cache=MembershipCache(),
        )

        logger.info(
            "Generating community health report",
            extra={"owner": config.owner, "repositories": list(config.repositories)},
        )
        metrics = generate_metrics(github_client, classifier, config)

        print(generate_report(metrics))
        return EXIT_SUCCESS
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_FAILURE
    except TransportError as exc:
        logger.error("GitHub API error: %s", exc)
        return EXIT_FAILURE
    except Exception:
        logger.exception("Unexpected error while generating report")
        return EXIT_FAILURE


def main() -> None:
    sys.exit(orchestrate_report_generation())


if __name__ == "__main__":
    main()
