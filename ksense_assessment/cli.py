import argparse
import json
import logging

import requests

from .client import AssessmentClient
from .config import Settings
from .errors import AssessmentError, ConfigurationError
from .scoring import analyze

logger = logging.getLogger(__name__)


def build_parser():
    p = argparse.ArgumentParser(
        prog="ksense-assessment",
        description="Fetch patients, score their risk and submit the alert lists.",
    )
    p.add_argument("--api-key", default=None, help="overrides KSENSE_API_KEY")
    p.add_argument("--base-url", default=None, help="overrides KSENSE_BASE_URL")
    p.add_argument("--verbose", "-v", action="store_true")
    return p


def run(client):
    print("Fetching patients...")
    patients = client.fetch_all_patients()
    print(f"Got {len(patients)} patients")
    if not patients:
        logger.error("No patients fetched, nothing to submit")
        return 1

    print("Scoring")
    results = analyze(patients)
    print("Counts:", results.counts())

    print("Submitting")
    resp = client.submit_assessment(results)
    print("Server response:")
    print(json.dumps(resp, indent=2))
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = Settings.from_env(api_key=args.api_key, base_url=args.base_url)
    try:
        client = AssessmentClient(settings)
    except ConfigurationError as exc:
        print(exc)
        return 2

    with client:
        try:
            return run(client)
        except (AssessmentError, requests.RequestException) as exc:
            logger.error("Fatal error: %s", exc)
            return 1
